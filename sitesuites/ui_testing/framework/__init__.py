"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based page-object framework.

Components:
    - settings: Immutable configuration snapshot (YAML + .env + environment)
    - log_config: Loguru sinks
    - locator_registry: YAML selector document with dotted-path lookup
    - smart_locator: Element references with fallback selector chains
    - element_actions: Wait-then-act interaction layer
    - page_base: Registry-backed base page object
    - browser_manager: Browser lifecycle management

The page factory lives in `framework.page_factory` and is imported from
there directly, since it depends on the concrete page packages.

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserManager
from .context import FrameworkContext
from .element_actions import ElementActions
from .locator_registry import ConfigLoadError, SelectorRegistry
from .page_base import BasePage, DegradedReadinessWarning, MissingSelectorGroupError, PageState
from .settings import ConfigurationError, FrameworkSettings, load_settings
from .smart_locator import ElementRef, ElementTimeoutError, SmartLocator

__all__ = [
    "BasePage",
    "BrowserManager",
    "ConfigLoadError",
    "ConfigurationError",
    "DegradedReadinessWarning",
    "ElementActions",
    "ElementRef",
    "ElementTimeoutError",
    "FrameworkContext",
    "FrameworkSettings",
    "MissingSelectorGroupError",
    "PageState",
    "SelectorRegistry",
    "SmartLocator",
    "load_settings",
]
