"""
In-memory stand-ins for the Playwright Page / Locator surface used by the
framework, so page objects and actions can be exercised without a browser.

The fake DOM is a set of selector keys:
    page.visible     selectors whose elements are visible
    page.texts       selector -> list of text contents (one per match)
    page.values      selector -> input value
    page.boxes       selector -> bounding box dict
    page.disabled    selectors of disabled elements
    page.delays      selector -> seconds before it turns visible
    page.hanging     selectors whose visibility wait never finishes

Every DOM-touching call is appended to `page.calls` as (method, selector, args).
"""

import asyncio
import fnmatch
from typing import Any, Dict, List, Optional

import pytest
from loguru import logger
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from sitesuites.ui_testing.framework import FrameworkContext, FrameworkSettings, SelectorRegistry


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str, index: Optional[int] = None):
        self._page = page
        self.selector = selector
        self.index = index

    def __repr__(self):
        return f"FakeLocator({self.key!r})"

    @property
    def key(self) -> str:
        return self.selector if self.index is None else f"{self.selector} >> nth={self.index}"

    # --- chaining ---------------------------------------------------------

    @property
    def first(self) -> "FakeLocator":
        return self

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(self._page, self.selector, index)

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(self._page, f"{self.key} >> {selector}")

    def filter(self, has_text: Optional[str] = None, **_: Any) -> "FakeLocator":
        return FakeLocator(self._page, f"{self.key} >> has_text={has_text}")

    # --- state ------------------------------------------------------------

    def _is_visible(self) -> bool:
        if self.key in self._page.visible:
            return True
        if self.index is not None and self.selector in self._page.visible:
            return self.index < len(self._page.texts.get(self.selector, [])) or self.index == 0
        return False

    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        self._page.calls.append(("wait_for", self.key, {"state": state, "timeout": timeout}))
        if state == "visible":
            if self.key in self._page.hanging:
                await asyncio.sleep(3600)
            if self.key in self._page.delays:
                await asyncio.sleep(self._page.delays[self.key])
            if not self._is_visible():
                raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.key}")
        elif state == "hidden" and self._is_visible():
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.key} to hide")

    def _record(self, method: str, *args: Any, **kwargs: Any) -> None:
        self._page.calls.append((method, self.key, args or kwargs))

    # --- actions ----------------------------------------------------------

    async def click(self, **kwargs: Any) -> None:
        self._record("click", **kwargs)

    async def fill(self, value: str, timeout: Optional[float] = None) -> None:
        self._record("fill", value)
        self._page.values[self.key] = value

    async def press_sequentially(self, text: str, delay: float = 0, timeout: Optional[float] = None) -> None:
        self._record("press_sequentially", text)
        self._page.values[self.key] = text

    async def select_option(self, timeout: Optional[float] = None, **choice: Any) -> List[str]:
        self._record("select_option", **choice)
        return [str(next(iter(choice.values())))]

    async def check(self, timeout: Optional[float] = None) -> None:
        self._record("check")

    async def uncheck(self, timeout: Optional[float] = None) -> None:
        self._record("uncheck")

    async def hover(self, timeout: Optional[float] = None) -> None:
        self._record("hover")

    async def scroll_into_view_if_needed(self, timeout: Optional[float] = None) -> None:
        self._record("scroll_into_view_if_needed")

    async def press(self, key: str) -> None:
        self._record("press", key)

    # --- reads ------------------------------------------------------------

    async def text_content(self) -> Optional[str]:
        texts = self._page.texts.get(self.key)
        if texts is None and self.index is not None:
            base = self._page.texts.get(self.selector, [])
            return base[self.index] if self.index < len(base) else None
        return texts[0] if texts else None

    async def all_text_contents(self) -> List[str]:
        return list(self._page.texts.get(self.key, []))

    async def input_value(self) -> str:
        return self._page.values.get(self.key, "")

    async def get_attribute(self, name: str) -> Optional[str]:
        return self._page.attributes.get((self.key, name))

    async def is_enabled(self) -> bool:
        return self.key not in self._page.disabled

    async def count(self) -> int:
        if self.key in self._page.texts:
            return len(self._page.texts[self.key])
        return 1 if self._is_visible() else 0

    async def bounding_box(self) -> Optional[Dict[str, float]]:
        return self._page.boxes.get(self.key)


class FakeMouse:
    def __init__(self, page: "FakePage"):
        self._page = page

    async def click(self, x: float, y: float) -> None:
        self._page.calls.append(("mouse.click", None, (x, y)))


class FakeKeyboard:
    def __init__(self, page: "FakePage"):
        self._page = page

    async def press(self, key: str) -> None:
        self._page.calls.append(("keyboard.press", None, (key,)))


class FakePage:
    def __init__(self, url: str = "about:blank"):
        self.url = url
        self.visible = set()
        self.texts: Dict[str, List[str]] = {}
        self.values: Dict[str, str] = {}
        self.boxes: Dict[str, Dict[str, float]] = {}
        self.attributes: Dict[Any, str] = {}
        self.disabled = set()
        self.delays: Dict[str, float] = {}
        self.hanging = set()
        self.calls: List[Any] = []
        self.sleeps: List[int] = []
        self.mouse = FakeMouse(self)
        self.keyboard = FakeKeyboard(self)

    def show(self, selector: str, *texts: str) -> "FakePage":
        """Make `selector` visible, optionally with one text per match."""
        self.visible.add(selector)
        if texts:
            self.texts[selector] = list(texts)
        return self

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def calls_of(self, method: str) -> List[Any]:
        return [call for call in self.calls if call[0] == method]

    async def goto(self, url: str, timeout: Optional[float] = None, wait_until: str = "load") -> None:
        self.calls.append(("goto", url, {"timeout": timeout, "wait_until": wait_until}))
        self.url = url

    async def wait_for_load_state(self, state: str = "load", timeout: Optional[float] = None) -> None:
        self.calls.append(("wait_for_load_state", state, {"timeout": timeout}))

    async def wait_for_timeout(self, milliseconds: int) -> None:
        self.sleeps.append(milliseconds)

    async def wait_for_url(self, pattern: str, timeout: Optional[float] = None) -> None:
        if not fnmatch.fnmatch(self.url, pattern.replace("**", "*")):
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for URL {pattern}")

    async def title(self) -> str:
        return "Fake Page"

    async def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        self.calls.append(("screenshot", path, {"full_page": full_page}))
        return b"\x89PNG"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def fake_page_class():
    """For tests that need more than one browser page."""
    return FakePage


@pytest.fixture
def settings() -> FrameworkSettings:
    return FrameworkSettings(element_timeout=100, page_timeout=200)


@pytest.fixture
def framework_context(settings) -> FrameworkContext:
    """Context over the packaged locators.yaml, without touching log sinks."""
    return FrameworkContext.create(settings=settings, configure_logging=False)


@pytest.fixture
def make_context(settings):
    """Build a context over an in-memory selector document."""
    def _make(document: Dict[str, Any]) -> FrameworkContext:
        registry = SelectorRegistry.from_mapping(document)
        return FrameworkContext.create(settings=settings, registry=registry, configure_logging=False)
    return _make


@pytest.fixture
def log_records():
    """Capture Loguru messages at WARNING and above."""
    records: List[Any] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="WARNING")
    yield records
    logger.remove(handler_id)
