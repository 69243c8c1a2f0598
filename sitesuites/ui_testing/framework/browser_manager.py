"""
================================================================================
Browser Manager
================================================================================

Owns the Playwright driver, one launched browser and the contexts opened
from it. Every test gets a fresh context, so cookies and storage never
leak between ParaBank sessions.

Launch options come from FrameworkSettings (browser, headless, slow_mo);
page_timeout becomes the default action and navigation timeout of each
context.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import Browser, BrowserContext
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, Playwright, async_playwright

from .settings import SUPPORTED_BROWSERS, FrameworkSettings


# Named viewports used by the layout checks
VIEWPORT_PRESETS: Dict[str, Dict[str, int]] = {
    "desktop": {"width": 1920, "height": 1080},
    "tablet": {"width": 768, "height": 1024},
    "mobile": {"width": 375, "height": 667},
}

LAUNCH_ARGS = ["--ignore-certificate-errors"]


class BrowserManager:
    """
    Browser lifecycle for one test (or one worker).

    Usage:
        async with BrowserManager.from_settings(settings) as manager:
            page = await manager.new_page()
            tablet = await manager.new_page(device="tablet")
    """

    def __init__(
        self,
        browser_type: str = "chromium",
        headless: bool = True,
        slow_mo: int = 0,
        page_timeout: int = 30000,
    ):
        if browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(f"Unsupported browser type: {browser_type}")
        self.browser_type = browser_type
        self.headless = headless
        self.slow_mo = slow_mo
        self.page_timeout = page_timeout

        self._driver: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._open_contexts: List[BrowserContext] = []

    @classmethod
    def from_settings(cls, settings: FrameworkSettings) -> "BrowserManager":
        return cls(
            browser_type=settings.browser,
            headless=settings.headless,
            slow_mo=settings.slow_mo,
            page_timeout=settings.page_timeout,
        )

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def start(self) -> None:
        """Start the driver and launch the configured browser."""
        self._driver = await async_playwright().start()
        engine = getattr(self._driver, self.browser_type)
        self._browser = await engine.launch(
            headless=self.headless,
            slow_mo=self.slow_mo,
            args=LAUNCH_ARGS,
        )
        logger.debug(f"Launched {self.browser_type} (headless={self.headless}, slow_mo={self.slow_mo}ms)")

    async def new_context(self, device: str = "desktop", **options: Any) -> BrowserContext:
        """
        Open an isolated context (own cookies and storage).

        Args:
            device: Key of VIEWPORT_PRESETS
            **options: Extra Playwright context options; an explicit
                `viewport` wins over `device`

        Raises:
            RuntimeError: start() has not been called
        """
        if self._browser is None:
            raise RuntimeError("Browser not started. Call start() first.")

        options.setdefault("viewport", VIEWPORT_PRESETS[device])
        options.setdefault("ignore_https_errors", True)
        context = await self._browser.new_context(**options)
        context.set_default_timeout(self.page_timeout)
        context.set_default_navigation_timeout(self.page_timeout)
        self._open_contexts.append(context)
        return context

    async def new_page(self, context: Optional[BrowserContext] = None, **context_options: Any) -> Page:
        """Page in `context`, or in a new context built from `context_options`."""
        if context is None:
            context = await self.new_context(**context_options)
        return await context.new_page()

    async def close(self) -> None:
        """Close every context, then the browser and the driver. Idempotent."""
        while self._open_contexts:
            context = self._open_contexts.pop()
            try:
                await context.close()
            except PlaywrightError as e:
                logger.debug(f"Context already closed: {e}")

        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._driver is not None:
            await self._driver.stop()
            self._driver = None
        logger.debug(f"{self.browser_type} closed")


__all__ = ["BrowserManager", "VIEWPORT_PRESETS"]
