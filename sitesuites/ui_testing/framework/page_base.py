"""
================================================================================
Base Page Object
================================================================================

Foundation class for the registry-backed Page Object Model.

Provides:
    - Selector group resolution at construction (fail fast)
    - Named ElementRefs built from the selector group
    - An embedded ElementActions instance for all interactions
    - Navigation against the site base URL
    - Readiness probes, including a degraded multi-anchor race
    - Screenshot and locator health utilities

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
import re
import warnings
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import allure
from loguru import logger
from playwright.async_api import Page

from .context import FrameworkContext
from .element_actions import ElementActions
from .smart_locator import ElementRef, ElementTimeoutError, Target


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"


class MissingSelectorGroupError(LookupError):
    """Raised when a page's selector group, or one of its elements, is not configured."""

    def __init__(self, path: str, page_class: str = ""):
        self.path = path
        self.page_class = page_class
        owner = f" (required by {page_class})" if page_class else ""
        super().__init__(f"Selectors not configured at '{path}'{owner}")


class DegradedReadinessWarning(UserWarning):
    """A readiness probe gave up on every anchor and fell back to a fixed delay."""
    pass


class PageState(Enum):
    CONSTRUCTED = "constructed"
    READY = "ready"


class BasePage:
    """
    Base class for all page objects.

    Subclasses declare where their selectors live and which elements they
    cannot work without:

        class LoginPage(BasePage):
            SITE = "parabank"
            PAGE_KEY = "parabank.loginPage"
            REQUIRED_ELEMENTS = ("usernameInput", "passwordInput", "loginButton")

            @allure.step("Login as {username}")
            async def login(self, username: str, password: str) -> None:
                await self.actions.fill(self.el("usernameInput"), username)
                await self.actions.fill(self.el("passwordInput"), password)
                await self.actions.click(self.el("loginButton"))

    A page without PAGE_KEY has no elements and serves generic checks.
    """

    # Override in subclasses
    SITE: str = "parabank"
    PAGE_KEY: Optional[str] = None
    REQUIRED_ELEMENTS: Tuple[str, ...] = ()
    URL_PATH: str = ""

    is_generic: bool = False

    def __init__(self, page: Page, context: FrameworkContext):
        """
        Resolve selectors and build element references.

        Args:
            page: Playwright Page (the session this object is bound to)
            context: Framework context (settings + selector registry)

        Raises:
            MissingSelectorGroupError: Group or a required element is absent
        """
        self.page = page
        self.context = context
        self.settings = context.settings

        group = self._resolve_group()

        self.base_url = self.settings.site_url(self.SITE)
        self.page_timeout = self.settings.page_timeout
        self.element_timeout = self.settings.element_timeout
        self.actions = ElementActions(
            page,
            element_timeout=self.element_timeout,
            page_timeout=self.page_timeout,
        )
        self.elements: Dict[str, ElementRef] = {
            name: ElementRef.from_selector(selector, name=name)
            for name, selector in group.items()
            if not isinstance(selector, dict)
        }
        self.state = PageState.CONSTRUCTED
        logger.debug(f"{type(self).__name__} constructed with {len(self.elements)} elements")

    def _resolve_group(self) -> Dict[str, object]:
        if not self.PAGE_KEY:
            return {}

        group = self.context.registry.resolve_group(self.PAGE_KEY)
        if group is None:
            raise MissingSelectorGroupError(self.PAGE_KEY, type(self).__name__)

        for name in self.REQUIRED_ELEMENTS:
            if name not in group or isinstance(group[name], dict):
                raise MissingSelectorGroupError(f"{self.PAGE_KEY}.{name}", type(self).__name__)
        return group

    def el(self, name: str) -> ElementRef:
        """Return the named element of this page."""
        try:
            return self.elements[name]
        except KeyError:
            raise MissingSelectorGroupError(
                f"{self.PAGE_KEY}.{name}", type(self).__name__
            ) from None

    # =========================================================================
    # Navigation
    # =========================================================================

    def resolve_url(self, path: str = "") -> str:
        """Join a relative path to the site base URL; absolute URLs pass through."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def navigate(self, path: Optional[str] = None) -> None:
        """
        Navigate to this page (URL_PATH) or to an explicit path.

        Args:
            path: Relative path or absolute URL
        """
        url = self.resolve_url(self.URL_PATH if path is None else path)
        await self.actions.navigate(url, timeout=self.page_timeout)

    @property
    def current_url(self) -> str:
        return self.page.url

    async def title(self) -> str:
        return await self.page.title()

    # =========================================================================
    # Readiness
    # =========================================================================

    async def wait_for_page_load(self) -> None:
        """Wait until the page is usable, then mark it READY."""
        with allure.step(f"Wait for {type(self).__name__} to load"):
            await self._wait_until_ready()
        self.state = PageState.READY
        logger.debug(f"{type(self).__name__} ready: {self.page.url}")

    async def _wait_until_ready(self) -> None:
        """Readiness probe. Default: the 'load' state; pages override."""
        await self.actions.wait_for_load_state("load", timeout=self.page_timeout)

    async def wait_for_any(
        self,
        anchors: Iterable[Target],
        timeout: Optional[int] = None,
        fallback_delay: int = 5000,
    ) -> Optional[Target]:
        """
        Race several anchors; return the first one to become visible.

        Losing waits are cancelled before returning. When every anchor times
        out, a warning is logged, DegradedReadinessWarning is emitted and the
        call sleeps `fallback_delay` ms, then returns None.

        Args:
            anchors: Element names of this page, ElementRefs or selectors
            timeout: Per-anchor timeout in milliseconds
            fallback_delay: Fixed delay used when nothing shows up

        Raises:
            Any non-timeout error raised by one of the waits, unless another
            anchor became visible in the same batch
        """
        anchors = list(anchors)
        targets = [self.el(a) if isinstance(a, str) and a in self.elements else a for a in anchors]
        tasks = {
            asyncio.ensure_future(self.actions.wait_for_visible(target, timeout=timeout)): anchor
            for anchor, target in zip(anchors, targets)
        }
        pending = set(tasks)
        winner: Optional[Target] = None
        failure: Optional[BaseException] = None

        try:
            while pending and winner is None and failure is None:
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                for task in done:
                    error = task.exception()
                    if error is None:
                        if winner is None:
                            winner = tasks[task]
                    elif not isinstance(error, ElementTimeoutError):
                        failure = failure or error
        finally:
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        # A visible anchor wins over an engine error finishing in the same batch
        if winner is not None:
            logger.debug(f"{type(self).__name__} readiness anchor: {winner}")
            return winner
        if failure is not None:
            raise failure

        message = (
            f"{type(self).__name__}: none of {len(anchors)} readiness anchors became visible; "
            f"continuing after {fallback_delay}ms"
        )
        logger.warning(message)
        warnings.warn(message, DegradedReadinessWarning, stacklevel=2)
        await self.actions.pause(fallback_delay)
        return None

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def screenshot(self, name: str, full_page: bool = False, attach_to_allure: bool = True) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        image = await self.page.screenshot(path=str(filepath), full_page=full_page)
        if attach_to_allure:
            allure.attach(image, name=name, attachment_type=allure.attachment_type.PNG)

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    def locator_health_report(self) -> str:
        return self.actions.smart.get_health_report()

    # =========================================================================
    # Parsing Helpers
    # =========================================================================

    @staticmethod
    def digits_to_int(text: Optional[str], default: int = 0) -> int:
        """'1,234 comments' -> 1234; no digits -> default."""
        digits = re.sub(r"\D", "", text or "")
        return int(digits) if digits else default

    @staticmethod
    def first_int(text: Optional[str], default: int = 0) -> int:
        """First run of digits in the text: 'Page 3 of 10' -> 3."""
        match = re.search(r"\d+", text or "")
        return int(match.group()) if match else default

    @staticmethod
    def parse_amount(text: Optional[str]) -> float:
        """'$1,515.50' -> 1515.5; '-$20.00' -> -20.0."""
        cleaned = re.sub(r"[^\d.\-]", "", text or "")
        try:
            return float(cleaned)
        except ValueError:
            return 0.0


__all__ = [
    "BasePage",
    "DegradedReadinessWarning",
    "MissingSelectorGroupError",
    "PageState",
]
