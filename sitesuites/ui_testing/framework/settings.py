"""
================================================================================
Framework Settings
================================================================================

Immutable configuration snapshot for the UI suites.

Resolution order (highest to lowest priority):
    1. Environment variables (BASE_URL, PAGE_TIMEOUT, ...)
    2. `.env` file in the working directory (loaded with python-dotenv)
    3. `ui:` section of sitesuites/config/config.yaml
    4. Dataclass defaults

The snapshot is read once at process start and handed to every page object
through the FrameworkContext. Missing required values abort startup.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import find_dotenv, load_dotenv
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")
SUPPORTED_SITES = ("parabank", "bilibili")

# Environment variable -> settings field
ENV_MAPPING: Dict[str, str] = {
    "BASE_URL": "base_url",
    "BILIBILI_URL": "bilibili_url",
    "TEST_USERNAME": "username",
    "TEST_PASSWORD": "password",
    "BROWSER": "browser",
    "HEADLESS": "headless",
    "SLOW_MO": "slow_mo",
    "PAGE_TIMEOUT": "page_timeout",
    "ELEMENT_TIMEOUT": "element_timeout",
    "LOG_LEVEL": "log_level",
    "LOG_DIR": "log_dir",
    "GENERATE_REPORT": "generate_report",
    "DEFAULT_SITE": "default_site",
    "LOCATORS_FILE": "locators_file",
}


class ConfigurationError(Exception):
    """Raised when the settings snapshot cannot be built."""
    pass


@dataclass(frozen=True)
class FrameworkSettings:
    """
    Process-wide configuration snapshot.

    Attributes:
        base_url: ParaBank base address (required)
        bilibili_url: Bilibili base address
        username: Default test account username
        password: Default test account password
        browser: 'chromium', 'firefox' or 'webkit'
        headless: Run the browser without a window
        slow_mo: Delay in ms between Playwright operations
        page_timeout: Page-level operation timeout in ms
        element_timeout: Element-level wait timeout in ms
        log_level: Loguru level name
        log_dir: Directory for log files
        generate_report: Whether the runner should build an Allure report
        default_site: Site used by the page factory for unqualified names
        locators_file: Override path for the selector document
    """
    base_url: str = "https://parabank.parasoft.com/parabank/"
    bilibili_url: str = "https://www.bilibili.com"
    username: str = ""
    password: str = ""
    browser: str = "chromium"
    headless: bool = True
    slow_mo: int = 0
    page_timeout: int = 30000
    element_timeout: int = 5000
    log_level: str = "INFO"
    log_dir: str = "logs"
    generate_report: bool = False
    default_site: str = "bilibili"
    locators_file: Optional[str] = None

    def site_url(self, site: Optional[str] = None) -> str:
        """Return the base address for a site; ParaBank is the default."""
        if site == "bilibili":
            return self.bilibili_url
        return self.base_url

    def validate(self) -> "FrameworkSettings":
        if not self.base_url:
            raise ConfigurationError(
                "Required configuration parameter 'base_url' is missing or empty"
            )
        if self.browser not in SUPPORTED_BROWSERS:
            raise ConfigurationError(
                f"Unsupported browser '{self.browser}'. "
                f"Expected one of: {', '.join(SUPPORTED_BROWSERS)}"
            )
        if self.default_site not in SUPPORTED_SITES:
            raise ConfigurationError(
                f"Unsupported default_site '{self.default_site}'. "
                f"Expected one of: {', '.join(SUPPORTED_SITES)}"
            )
        for name in ("page_timeout", "element_timeout"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"'{name}' must be a positive number of milliseconds")
        return self


def _convert(value: Any, reference: Any, key: str) -> Any:
    """Coerce raw YAML/env values to the type of the field default."""
    if isinstance(reference, bool):
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in ("true", "1", "yes", "on")
    if isinstance(reference, int):
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"'{key}' must be an integer, got {value!r}") from e
    if value is None:
        return None
    return str(value)


def _read_yaml_section(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        logger.debug(f"Settings file not found: {config_path}. Using defaults and environment.")
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in settings file {config_path}: {e}") from e

    section = data.get("ui", {}) if isinstance(data, dict) else {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"'ui' section of {config_path} must be a mapping")
    logger.debug(f"Loaded settings from: {config_path}")
    return section


def load_settings(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    use_dotenv: bool = True,
) -> FrameworkSettings:
    """
    Build the settings snapshot.

    Args:
        config_path: YAML settings file. Uses DEFAULT_CONFIG_PATH if not given.
        environ: Environment mapping. Uses os.environ if not given.
        use_dotenv: Load `.env` into os.environ first (never overrides
            variables that are already set).

    Returns:
        Validated FrameworkSettings

    Raises:
        ConfigurationError: Unreadable YAML, bad types or missing base URL
    """
    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True), override=False)
    if environ is None:
        environ = os.environ

    defaults = FrameworkSettings()
    known = {f.name for f in fields(FrameworkSettings)}
    values: Dict[str, Any] = {}

    for key, value in _read_yaml_section(config_path or DEFAULT_CONFIG_PATH).items():
        if key not in known:
            logger.warning(f"Ignoring unknown settings key: ui.{key}")
            continue
        values[key] = _convert(value, getattr(defaults, key), key)

    for env_key, field_name in ENV_MAPPING.items():
        raw = environ.get(env_key)
        if raw is None or raw == "":
            continue
        values[field_name] = _convert(raw, getattr(defaults, field_name), env_key)

    return FrameworkSettings(**values).validate()


__all__ = [
    "ConfigurationError",
    "FrameworkSettings",
    "load_settings",
    "SUPPORTED_BROWSERS",
    "SUPPORTED_SITES",
]
