"""
================================================================================
Bilibili Login Page
================================================================================

Login dialog with QR code / password / SMS tabs.

Bilibili serves the login UI either as a modal over the current page or as
a standalone page, so readiness races several anchors instead of waiting
for a single one.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger

from sitesuites.ui_testing.framework.page_base import BasePage


# Anchors raced by the readiness probe, any one is enough
READINESS_ANCHORS = (
    "loginForm",
    "qrCodeLoginTab",
    "passwordLoginTab",
    "mobileLoginTab",
    "closeButton",
)
ANCHOR_TIMEOUT = 10000
FALLBACK_DELAY = 5000


class LoginPage(BasePage):
    """Bilibili login dialog."""

    SITE = "bilibili"
    PAGE_KEY = "bilibili.loginPage"
    REQUIRED_ELEMENTS = READINESS_ANCHORS + ("usernameInput", "passwordInput", "loginSubmitButton")

    async def _wait_until_ready(self) -> None:
        await self.wait_for_any(READINESS_ANCHORS, timeout=ANCHOR_TIMEOUT, fallback_delay=FALLBACK_DELAY)

    # =========================================================================
    # Tabs
    # =========================================================================

    @allure.step("Switch to password login")
    async def switch_to_password_login(self) -> None:
        await self.actions.click(self.el("passwordLoginTab"))

    @allure.step("Switch to QR code login")
    async def switch_to_qr_code_login(self) -> None:
        await self.actions.click(self.el("qrCodeLoginTab"))

    @allure.step("Switch to SMS login")
    async def switch_to_mobile_login(self) -> None:
        await self.actions.click(self.el("mobileLoginTab"))

    async def is_qr_code_displayed(self) -> bool:
        return await self.actions.is_visible(self.el("qrCodeContainer"))

    # =========================================================================
    # Credential Login
    # =========================================================================

    async def enter_username(self, username: str) -> None:
        await self.actions.fill(self.el("usernameInput"), username)

    async def enter_password(self, password: str) -> None:
        await self.actions.fill(self.el("passwordInput"), password)

    @allure.step("Submit login form")
    async def submit_login(self) -> None:
        await self.actions.click(self.el("loginSubmitButton"))

    @allure.step("Login (username={username})")
    async def login(self, username: str, password: str) -> None:
        logger.info(f"Logging in to Bilibili as: {username}")
        await self.switch_to_password_login()
        await self.enter_username(username)
        await self.enter_password(password)
        await self.submit_login()

    async def get_error_message_text(self) -> Optional[str]:
        """Error tip text, or None when no error is shown."""
        if await self.actions.is_visible(self.el("errorMessage")):
            return (await self.actions.get_text(self.el("errorMessage"))).strip()
        return None

    async def is_login_failed(self) -> bool:
        return await self.actions.is_visible(self.el("errorMessage"))

    async def is_captcha_required(self) -> bool:
        return await self.actions.is_visible(self.el("captchaImage"))

    # =========================================================================
    # Links and Modal
    # =========================================================================

    @allure.step("Click forgot password")
    async def click_forget_password(self) -> None:
        await self.actions.click(self.el("forgetPasswordLink"))

    @allure.step("Click register")
    async def click_register(self) -> None:
        await self.actions.click(self.el("registerLink"))

    @allure.step("Close login dialog")
    async def close_login_modal(self) -> None:
        await self.actions.click(self.el("closeButton"))
