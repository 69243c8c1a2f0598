"""
================================================================================
Selector Registry
================================================================================

Externalized selector configuration for page objects.

The selector document is a YAML tree keyed by site -> page -> element:

    parabank:
      loginPage:
        usernameInput: '.login input[name="username"]'
        loginButton:                      # fallback chain, primary first
          - '.login [type="submit"]'
          - 'input[value="Log In"]'

Leaves are a selector string, a list of selector strings (fallback chain)
or a nested mapping (a selector group). The document is loaded once on
first use and never reloaded unless `reload()` is called.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import copy
import threading
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml
from loguru import logger


DEFAULT_LOCATORS_PATH = Path(__file__).parent.parent / "locators" / "locators.yaml"

SelectorLeaf = Union[str, Tuple[str, ...]]


class ConfigLoadError(Exception):
    """Raised when the selector document is missing or unparseable."""

    def __init__(self, source: Any, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load selectors from {source}: {reason}")


def _freeze(node: Any) -> Any:
    """Copy the parsed tree, turning selector lists into tuples."""
    if isinstance(node, dict):
        return {str(key): _freeze(value) for key, value in node.items()}
    if isinstance(node, list):
        return tuple(str(item) for item in node)
    return node


def _is_leaf(node: Any) -> bool:
    if isinstance(node, str):
        return True
    return isinstance(node, tuple) and bool(node) and all(isinstance(s, str) for s in node)


class SelectorRegistry:
    """
    Dotted-path lookup over the selector document.

    Usage:
        >>> registry = SelectorRegistry()
        >>> registry.resolve_group("parabank.loginPage")
        {'usernameInput': '.login input[name="username"]', ...}
        >>> registry.resolve("parabank.loginPage.usernameInput")
        '.login input[name="username"]'
        >>> registry.resolve("parabank.nope")   # logs a warning
        None
    """

    def __init__(self, source: Optional[Union[str, Path]] = None):
        """
        Args:
            source: YAML file to load. Uses DEFAULT_LOCATORS_PATH if not given.
        """
        self._source = Path(source) if source else DEFAULT_LOCATORS_PATH
        self._document: Optional[Dict[str, Any]] = None
        self._lock = threading.Lock()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SelectorRegistry":
        """Build an already-loaded registry from an in-memory document."""
        if not isinstance(data, Mapping):
            raise ConfigLoadError("<mapping>", "document root must be a mapping")
        registry = cls()
        registry._source = None
        registry._document = _freeze(dict(data))
        return registry

    @property
    def source(self) -> Optional[Path]:
        return self._source

    @property
    def is_loaded(self) -> bool:
        return self._document is not None

    def load(self, source: Optional[Union[str, Path]] = None) -> None:
        """
        Parse the selector document into memory.

        Nothing is replaced unless the whole document parses.

        Args:
            source: Optional new source path

        Raises:
            ConfigLoadError: File unreadable, invalid YAML or root not a mapping
        """
        path = Path(source) if source else self._source
        if path is None:
            raise ConfigLoadError("<mapping>", "registry was built from a mapping and has no file source")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            logger.error(f"Failed to read selectors from {path}: {e}")
            raise ConfigLoadError(path, str(e)) from e
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in selector file {path}: {e}")
            raise ConfigLoadError(path, f"invalid YAML: {e}") from e

        if not isinstance(data, dict):
            logger.error(f"Selector file {path} does not contain a mapping")
            raise ConfigLoadError(path, "document root must be a mapping")

        with self._lock:
            self._document = _freeze(data)
            self._source = path
        logger.info(f"Selectors loaded successfully from {path}")

    def reload(self) -> None:
        """Re-read the document from its source."""
        self.load()

    def _ensure_loaded(self) -> Dict[str, Any]:
        if self._document is None:
            with self._lock:
                needs_load = self._document is None
            if needs_load:
                self.load()
        return self._document

    def _walk(self, path: str) -> Tuple[bool, Any]:
        node: Any = self._ensure_loaded()
        for segment in path.split("."):
            if not isinstance(node, dict) or segment not in node:
                return False, None
            node = node[segment]
        return True, node

    def resolve_group(self, path: str) -> Optional[Dict[str, Any]]:
        """
        Return the selector group at `path`, or None.

        Args:
            path: Dotted path, e.g. "bilibili.loginPage"

        Returns:
            Deep copy of the mapping of element names to selectors
        """
        found, node = self._walk(path)
        if not found or not isinstance(node, dict):
            logger.warning(f"Page selectors not found for path: {path}")
            return None
        return copy.deepcopy(node)

    def resolve(self, path: str) -> Optional[SelectorLeaf]:
        """
        Return the single selector (or fallback chain) at `path`, or None.

        Args:
            path: Dotted path, e.g. "bilibili.loginPage.usernameInput"
        """
        found, node = self._walk(path)
        if not found or not _is_leaf(node):
            logger.warning(f"Selector not found for path: {path}")
            return None
        return node


__all__ = [
    "ConfigLoadError",
    "SelectorRegistry",
    "SelectorLeaf",
    "DEFAULT_LOCATORS_PATH",
]
