"""
================================================================================
ParaBank Register Page
================================================================================

Customer sign-up form (`register.htm`).

The register button is configured as a fallback chain in locators.yaml;
whichever selector becomes visible first is clicked, and the locator
health report records any fallback hit.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import allure
from loguru import logger

from sitesuites.ui_testing.framework.page_base import BasePage
from sitesuites.ui_testing.framework.smart_locator import ElementTimeoutError


@dataclass
class PersonalInfo:
    first_name: str
    last_name: str
    address: str
    city: str
    state: str
    zip_code: str
    phone: str
    ssn: str


@dataclass
class AccountInfo:
    username: str
    password: str
    confirm_password: Optional[str] = None

    def __post_init__(self):
        if self.confirm_password is None:
            self.confirm_password = self.password


class RegisterPage(BasePage):
    """ParaBank registration form."""

    SITE = "parabank"
    PAGE_KEY = "parabank.registerPage"
    REQUIRED_ELEMENTS = (
        "registerForm",
        "firstNameInput",
        "lastNameInput",
        "addressInput",
        "cityInput",
        "stateInput",
        "zipCodeInput",
        "phoneInput",
        "ssnInput",
        "usernameInput",
        "passwordInput",
        "confirmPasswordInput",
        "registerButton",
        "errorMessages",
    )
    URL_PATH = "register.htm"

    async def _wait_until_ready(self) -> None:
        await self.actions.wait_for_visible(self.el("registerForm"), timeout=self.page_timeout)

    @allure.step("Fill personal information")
    async def fill_personal_info(self, info: PersonalInfo) -> None:
        await self.actions.fill(self.el("firstNameInput"), info.first_name)
        await self.actions.fill(self.el("lastNameInput"), info.last_name)
        await self.actions.fill(self.el("addressInput"), info.address)
        await self.actions.fill(self.el("cityInput"), info.city)
        await self.actions.fill(self.el("stateInput"), info.state)
        await self.actions.fill(self.el("zipCodeInput"), info.zip_code)
        await self.actions.fill(self.el("phoneInput"), info.phone)
        await self.actions.fill(self.el("ssnInput"), info.ssn)

    @allure.step("Fill account information")
    async def fill_account_info(self, info: AccountInfo) -> None:
        await self.actions.fill(self.el("usernameInput"), info.username)
        await self.actions.fill(self.el("passwordInput"), info.password)
        await self.actions.fill(self.el("confirmPasswordInput"), info.confirm_password)

    @allure.step("Click register button")
    async def click_register_button(self) -> None:
        await self.actions.wait_for_visible(self.el("registerForm"))
        button = await self.actions.wait_for_visible(self.el("registerButton"))
        await self.actions.scroll_to_element(button)
        await self.actions.click(button)

    @allure.step("Register new customer")
    async def register(self, personal: PersonalInfo, account: AccountInfo) -> None:
        logger.info(f"Registering ParaBank customer: {account.username}")
        await self.fill_personal_info(personal)
        await self.fill_account_info(account)
        await self.click_register_button()

    async def is_registration_successful(self) -> bool:
        """
        ParaBank confirms a sign-up in place on register.htm; some
        deployments redirect to the account overview instead.
        """
        try:
            await self.actions.wait_for_visible(self.el("accountCreatedText"), timeout=self.page_timeout)
            return True
        except ElementTimeoutError:
            landed = "overview.htm" in self.current_url
            if not landed:
                logger.info(f"Registration not confirmed (at {self.current_url})")
            return landed

    async def get_success_message(self) -> str:
        return (await self.actions.get_text(self.el("successMessage"))).strip()

    async def get_error_messages(self) -> List[str]:
        """Unique error texts across every configured error selector."""
        await self.actions.wait_for_load_state("load", timeout=self.page_timeout)
        messages: List[str] = []
        for selector in self.el("errorMessages").selectors:
            for text in await self.actions.all_texts(selector):
                if text not in messages:
                    messages.append(text)
        return messages
