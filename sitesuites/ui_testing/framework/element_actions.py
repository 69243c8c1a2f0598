# ================================================================================
# Element Actions Module
# ================================================================================
#
# Uniform wait-then-act layer over the Playwright async API.
#
# Key Features:
#   - Every target may be an ElementRef, a Playwright Locator or a selector
#   - Mutating actions wait for visibility first, so a timed-out action never
#     touches the DOM
#   - Engine timeouts surface as ElementTimeoutError (selector + bound)
#   - Allure step and loguru record for every operation
#
# ================================================================================

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .smart_locator import ElementRef, ElementTimeoutError, SmartLocator, Target


@contextmanager
def _timeouts_as(selector: str, timeout: int, action: str) -> Iterator[None]:
    """Re-raise engine timeouts as ElementTimeoutError."""
    try:
        yield
    except PlaywrightTimeoutError as e:
        logger.error(f"{action} timed out after {timeout}ms: {selector}")
        raise ElementTimeoutError(selector, timeout, action=action) from e


class ElementActions:
    """
    Element interaction methods shared by all page objects.

    Example:
        actions = ElementActions(page, element_timeout=5000)
        await actions.fill("#username", "john")
        await actions.click(ElementRef.from_selector("#submit", "submit button"))
    """

    def __init__(
        self,
        page: Page,
        element_timeout: int = 5000,
        page_timeout: int = 30000,
        smart: Optional[SmartLocator] = None,
    ):
        """
        Args:
            page: Playwright Page object
            element_timeout: Default element wait in milliseconds
            page_timeout: Default navigation / load-state wait in milliseconds
            smart: Shared SmartLocator (keeps one health report per page)
        """
        self.page = page
        self.element_timeout = element_timeout
        self.page_timeout = page_timeout
        self.smart = smart or SmartLocator(page)

    # An explicit 0 is passed through: Playwright reads it as "no timeout".
    def _element_bound(self, timeout: Optional[int]) -> int:
        return self.element_timeout if timeout is None else timeout

    def _page_bound(self, timeout: Optional[int]) -> int:
        return self.page_timeout if timeout is None else timeout

    # =========================================================================
    # Locator Helpers
    # =========================================================================

    def locator(self, target: Target) -> Locator:
        """Build a fresh Locator for the primary selector of `target`."""
        _, _, locator = ElementRef.of(target).candidates(self.page)[0]
        return locator

    def nth(self, target: Target, index: int) -> ElementRef:
        """Reference to the index-th match of `target`."""
        ref = ElementRef.of(target)
        return ElementRef.from_factory(
            lambda page: ref.candidates(page)[0][2].nth(index),
            name=f"{ref.name}[{index}]",
        )

    def child(self, target: Target, selector: str) -> ElementRef:
        """Reference to `selector` scoped inside `target`."""
        ref = ElementRef.of(target)
        return ElementRef.from_factory(
            lambda page: ref.candidates(page)[0][2].locator(selector),
            name=f"{ref.name} >> {selector}",
        )

    # =========================================================================
    # Waits
    # =========================================================================

    async def wait_for_visible(self, target: Target, timeout: Optional[int] = None) -> Locator:
        """
        Wait until the element is visible.

        Returns:
            The Locator that matched (a fallback selector when one was used)

        Raises:
            ElementTimeoutError: Not visible within the timeout
        """
        timeout = self._element_bound(timeout)
        return await self.smart.locate(target, timeout=timeout)

    async def wait_for_hidden(self, target: Target, timeout: Optional[int] = None) -> None:
        """Wait until the element is hidden or detached."""
        ref = ElementRef.of(target)
        timeout = self._element_bound(timeout)
        with _timeouts_as(ref.selector, timeout, "wait_for_hidden"):
            await self.locator(ref).first.wait_for(state="hidden", timeout=timeout)

    async def _visible(self, ref: ElementRef, timeout: Optional[int], action: str) -> Locator:
        return await self.smart.locate(ref, timeout=self._element_bound(timeout), action=action)

    # =========================================================================
    # Mutating Actions
    # =========================================================================

    async def click(self, target: Target, timeout: Optional[int] = None, **kwargs: Any) -> None:
        ref = ElementRef.of(target)
        timeout = self._element_bound(timeout)
        with allure.step(f"Click: {ref.name}"):
            locator = await self._visible(ref, timeout, "click")
            with _timeouts_as(ref.selector, timeout, "click"):
                await locator.first.click(timeout=timeout, **kwargs)
            logger.debug(f"Clicked: {ref.name}")

    async def fill(self, target: Target, value: str, timeout: Optional[int] = None) -> None:
        ref = ElementRef.of(target)
        timeout = self._element_bound(timeout)
        shown = "*" * len(value) if "password" in ref.name.lower() else value
        with allure.step(f"Fill {ref.name}: {shown}"):
            locator = await self._visible(ref, timeout, "fill")
            with _timeouts_as(ref.selector, timeout, "fill"):
                await locator.first.fill(value, timeout=timeout)
            logger.debug(f"Filled {ref.name} with '{shown}'")

    async def type_text(
        self,
        target: Target,
        text: str,
        delay: int = 50,
        timeout: Optional[int] = None,
    ) -> None:
        """Type text key by key (fires keyboard events, unlike fill)."""
        ref = ElementRef.of(target)
        timeout = self._element_bound(timeout)
        with allure.step(f"Type into {ref.name}"):
            locator = await self._visible(ref, timeout, "type_text")
            with _timeouts_as(ref.selector, timeout, "type_text"):
                await locator.first.press_sequentially(text, delay=delay, timeout=timeout)

    async def select_option(
        self,
        target: Target,
        value: Optional[str] = None,
        *,
        label: Optional[str] = None,
        index: Optional[int] = None,
        timeout: Optional[int] = None,
    ) -> None:
        """
        Select one option of a <select> by value, label or index.

        Raises:
            ValueError: Not exactly one of value/label/index given
        """
        choice: Dict[str, Any] = {
            key: option
            for key, option in (("value", value), ("label", label), ("index", index))
            if option is not None
        }
        if len(choice) != 1:
            raise ValueError("select_option needs exactly one of value, label or index")

        ref = ElementRef.of(target)
        timeout = self._element_bound(timeout)
        with allure.step(f"Select {choice} in {ref.name}"):
            locator = await self._visible(ref, timeout, "select_option")
            with _timeouts_as(ref.selector, timeout, "select_option"):
                await locator.first.select_option(timeout=timeout, **choice)
            logger.debug(f"Selected {choice} in {ref.name}")

    async def check(self, target: Target, timeout: Optional[int] = None) -> None:
        ref = ElementRef.of(target)
        timeout = self._element_bound(timeout)
        with allure.step(f"Check: {ref.name}"):
            locator = await self._visible(ref, timeout, "check")
            with _timeouts_as(ref.selector, timeout, "check"):
                await locator.first.check(timeout=timeout)

    async def uncheck(self, target: Target, timeout: Optional[int] = None) -> None:
        ref = ElementRef.of(target)
        timeout = self._element_bound(timeout)
        with allure.step(f"Uncheck: {ref.name}"):
            locator = await self._visible(ref, timeout, "uncheck")
            with _timeouts_as(ref.selector, timeout, "uncheck"):
                await locator.first.uncheck(timeout=timeout)

    async def hover(self, target: Target, timeout: Optional[int] = None) -> None:
        """Hover without an explicit visibility wait (Playwright still auto-waits)."""
        ref = ElementRef.of(target)
        timeout = self._element_bound(timeout)
        with allure.step(f"Hover: {ref.name}"):
            with _timeouts_as(ref.selector, timeout, "hover"):
                await self.locator(ref).first.hover(timeout=timeout)

    async def scroll_to_element(self, target: Target, timeout: Optional[int] = None) -> None:
        ref = ElementRef.of(target)
        timeout = self._element_bound(timeout)
        with allure.step(f"Scroll to: {ref.name}"):
            with _timeouts_as(ref.selector, timeout, "scroll_to_element"):
                await self.locator(ref).first.scroll_into_view_if_needed(timeout=timeout)

    async def click_at_ratio(
        self,
        target: Target,
        ratio_x: float,
        ratio_y: float = 0.5,
        timeout: Optional[int] = None,
    ) -> bool:
        """
        Click inside the element's bounding box at a relative position.

        Returns:
            False if the element has no bounding box (not rendered)
        """
        ref = ElementRef.of(target)
        box = await self.bounding_box(ref, timeout=timeout)
        if not box:
            logger.warning(f"No bounding box for {ref.name}; click skipped")
            return False
        x = box["x"] + box["width"] * ratio_x
        y = box["y"] + box["height"] * ratio_y
        with allure.step(f"Click {ref.name} at ({ratio_x:.0%}, {ratio_y:.0%})"):
            await self.page.mouse.click(x, y)
        return True

    # =========================================================================
    # Reads
    # =========================================================================

    async def get_text(self, target: Target, timeout: Optional[int] = None) -> str:
        ref = ElementRef.of(target)
        locator = await self._visible(ref, timeout, "get_text")
        text = await locator.first.text_content()
        logger.debug(f"Got text from {ref.name}: '{text}'")
        return text or ""

    async def get_value(self, target: Target, timeout: Optional[int] = None) -> str:
        ref = ElementRef.of(target)
        locator = await self._visible(ref, timeout, "get_value")
        return await locator.first.input_value() or ""

    async def get_attribute(
        self,
        target: Target,
        attribute: str,
        timeout: Optional[int] = None,
    ) -> Optional[str]:
        ref = ElementRef.of(target)
        locator = await self._visible(ref, timeout, "get_attribute")
        return await locator.first.get_attribute(attribute)

    async def is_visible(self, target: Target, timeout: Optional[int] = None) -> bool:
        """
        Check if an element becomes visible.

        Never raises: timeouts and engine errors both read as False.
        """
        try:
            await self._visible(ElementRef.of(target), timeout, "is_visible")
            return True
        except (ElementTimeoutError, PlaywrightError):
            return False

    async def is_enabled(self, target: Target, timeout: Optional[int] = None) -> bool:
        """Wait for visibility, then query enabled state. Timeouts propagate."""
        locator = await self._visible(ElementRef.of(target), timeout, "is_enabled")
        return await locator.first.is_enabled()

    async def count(self, target: Target) -> int:
        """Number of elements currently matching `target` (no wait)."""
        return await self.locator(target).count()

    async def all_texts(self, target: Target) -> List[str]:
        """Stripped, non-empty text of every current match (no wait)."""
        texts = await self.locator(target).all_text_contents()
        return [text.strip() for text in texts if text and text.strip()]

    async def bounding_box(self, target: Target, timeout: Optional[int] = None) -> Optional[Dict[str, float]]:
        locator = await self._visible(ElementRef.of(target), timeout, "bounding_box")
        return await locator.first.bounding_box()

    # =========================================================================
    # Page-Level Operations
    # =========================================================================

    async def navigate(
        self,
        url: str,
        timeout: Optional[int] = None,
        wait_until: str = "load",
    ) -> None:
        timeout = self._page_bound(timeout)
        with allure.step(f"Navigate to {url}"):
            with _timeouts_as(url, timeout, "navigate"):
                await self.page.goto(url, timeout=timeout, wait_until=wait_until)
            logger.info(f"Navigated to: {url}")

    async def wait_for_load_state(self, state: str = "load", timeout: Optional[int] = None) -> None:
        """
        Wait for the page to reach a load state.

        Args:
            state: 'load', 'domcontentloaded' or 'networkidle'
            timeout: Timeout in milliseconds (page_timeout if omitted)
        """
        timeout = self._page_bound(timeout)
        with _timeouts_as(f"<page:{state}>", timeout, "wait_for_load_state"):
            await self.page.wait_for_load_state(state, timeout=timeout)

    async def wait_for_url(self, pattern: Any, timeout: Optional[int] = None) -> None:
        timeout = self._page_bound(timeout)
        with allure.step(f"Wait for URL: {pattern}"):
            with _timeouts_as(str(pattern), timeout, "wait_for_url"):
                await self.page.wait_for_url(pattern, timeout=timeout)

    async def press_key(self, key: str, target: Optional[Target] = None) -> None:
        """Press a key on the focused page, or on `target` when given."""
        if target is None:
            await self.page.keyboard.press(key)
        else:
            ref = ElementRef.of(target)
            locator = await self._visible(ref, None, "press_key")
            await locator.first.press(key)
        logger.debug(f"Pressed key: {key}")

    async def pause(self, milliseconds: int) -> None:
        """Fixed delay. Use only where no DOM signal exists."""
        await self.page.wait_for_timeout(milliseconds)


__all__ = [
    "ElementActions",
]
