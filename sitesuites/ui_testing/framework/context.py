"""
Framework context: the settings snapshot and selector registry shared by
every page object and page factory of a run.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .locator_registry import SelectorRegistry
from .log_config import init_logger
from .settings import FrameworkSettings, load_settings


@dataclass(frozen=True)
class FrameworkContext:
    settings: FrameworkSettings
    registry: SelectorRegistry

    @classmethod
    def create(
        cls,
        settings: Optional[FrameworkSettings] = None,
        registry: Optional[SelectorRegistry] = None,
        configure_logging: bool = True,
        config_path: Optional[Path] = None,
    ) -> "FrameworkContext":
        """
        Build the context once at process entry.

        Args:
            settings: Prebuilt settings (loaded from YAML/env if omitted)
            registry: Prebuilt registry (file from settings.locators_file
                or the packaged locators.yaml if omitted)
            configure_logging: Install the Loguru sinks from the settings
            config_path: Settings YAML file used when `settings` is omitted
        """
        if settings is None:
            settings = load_settings(config_path)
        if configure_logging:
            init_logger(settings)
        if registry is None:
            registry = SelectorRegistry(settings.locators_file)
        return cls(settings=settings, registry=registry)


__all__ = ["FrameworkContext"]
