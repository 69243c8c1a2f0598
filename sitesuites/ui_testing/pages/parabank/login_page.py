"""
================================================================================
ParaBank Login Page
================================================================================

The login panel on the ParaBank landing page (`index.htm`).

Selectors: `parabank.loginPage` in locators.yaml.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from sitesuites.ui_testing.framework.page_base import BasePage


class LoginPage(BasePage):
    """ParaBank login panel."""

    SITE = "parabank"
    PAGE_KEY = "parabank.loginPage"
    REQUIRED_ELEMENTS = ("usernameInput", "passwordInput", "loginButton")
    URL_PATH = "index.htm"

    @allure.step("Open ParaBank login page")
    async def open(self) -> "LoginPage":
        await self.navigate()
        await self.wait_for_page_load()
        return self

    async def _wait_until_ready(self) -> None:
        await self.actions.wait_for_visible(self.el("usernameInput"), timeout=self.page_timeout)

    @allure.step("Login (username={username})")
    async def login(self, username: str, password: str) -> None:
        logger.info(f"Logging in to ParaBank as: {username}")
        await self.actions.fill(self.el("usernameInput"), username)
        await self.actions.fill(self.el("passwordInput"), password)
        await self.actions.click(self.el("loginButton"))

    @allure.step("Click register link")
    async def click_register_link(self) -> None:
        await self.actions.click(self.el("registerLink"))

    async def get_error_message(self) -> str:
        return (await self.actions.get_text(self.el("errorMessage"))).strip()

    async def get_welcome_message(self) -> str:
        return (await self.actions.get_text(self.el("welcomeMessage"))).strip()

    async def is_login_button_enabled(self) -> bool:
        return await self.actions.is_enabled(self.el("loginButton"))

    async def is_login_form_displayed(self) -> bool:
        username_ok = await self.actions.is_visible(self.el("usernameInput"), timeout=2000)
        password_ok = await self.actions.is_visible(self.el("passwordInput"), timeout=2000)
        return username_ok and password_ok
