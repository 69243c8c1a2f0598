"""
================================================================================
ParaBank Home Page
================================================================================

Signed-in landing area: left navigation, account overview table and the
"Open New Account" form.

================================================================================
"""

from __future__ import annotations

from typing import List, Optional

import allure
from loguru import logger

from sitesuites.ui_testing.framework.page_base import BasePage


class HomePage(BasePage):
    """ParaBank account services (post-login)."""

    SITE = "parabank"
    PAGE_KEY = "parabank.homePage"
    REQUIRED_ELEMENTS = (
        "accountOverviewLink",
        "transferFundsLink",
        "billPayLink",
        "logoutLink",
        "accountNumberLinks",
        "balanceAmounts",
    )
    URL_PATH = "overview.htm"

    async def _wait_until_ready(self) -> None:
        await self.actions.wait_for_visible(self.el("logoutLink"), timeout=self.page_timeout)

    # =========================================================================
    # Navigation Links
    # =========================================================================

    @allure.step("Open Accounts Overview")
    async def click_account_overview(self) -> None:
        await self.actions.click(self.el("accountOverviewLink"))

    @allure.step("Open Transfer Funds")
    async def click_transfer_funds(self) -> None:
        await self.actions.click(self.el("transferFundsLink"))

    @allure.step("Open Bill Pay")
    async def click_bill_pay(self) -> None:
        await self.actions.click(self.el("billPayLink"))

    @allure.step("Open Find Transactions")
    async def click_find_transactions(self) -> None:
        await self.actions.click(self.el("findTransactionsLink"))

    @allure.step("Open Update Contact Info")
    async def click_update_contact_info(self) -> None:
        await self.actions.click(self.el("updateContactInfoLink"))

    @allure.step("Log out")
    async def logout(self) -> None:
        await self.actions.click(self.el("logoutLink"))
        logger.info("Logged out of ParaBank")

    async def is_logged_in(self) -> bool:
        return await self.actions.is_visible(self.el("logoutLink"), timeout=2000)

    async def get_welcome_message(self) -> str:
        return (await self.actions.get_text(self.el("welcomeMessage"))).strip()

    # =========================================================================
    # Accounts
    # =========================================================================

    async def get_account_numbers(self) -> List[str]:
        """Account ids listed in the overview table."""
        links = await self.actions.wait_for_visible(self.el("accountNumberLinks"))
        return await self.actions.all_texts(links)

    async def get_account_balance(self, account_index: int = 0) -> float:
        """
        Balance of one account row, parsed from e.g. "$1,515.50".

        Args:
            account_index: Row index (0-based)
        """
        cell = self.actions.nth(self.el("balanceAmounts"), account_index)
        return self.parse_amount(await self.actions.get_text(cell))

    @allure.step("Open account at index {account_index}")
    async def click_account_number(self, account_index: int = 0) -> None:
        links = await self.actions.wait_for_visible(self.el("accountNumberLinks"))
        await self.actions.click(links.nth(account_index))

    @allure.step("Open new account")
    async def open_new_account(self, account_type: str = "SAVINGS", from_account_index: int = 0) -> Optional[str]:
        """
        Open a CHECKING or SAVINGS account funded from an existing one.

        Returns:
            The new account id, or None if the confirmation did not render
        """
        await self.actions.click(self.el("openAccountLink"))
        await self.actions.select_option(self.el("openAccountTypeSelect"), label=account_type)
        await self.actions.select_option(self.el("openAccountFromSelect"), index=from_account_index)
        await self.actions.click(self.el("openAccountButton"))

        if not await self.actions.is_visible(self.el("newAccountId"), timeout=self.page_timeout):
            logger.warning("New account confirmation not shown")
            return None
        account_id = (await self.actions.get_text(self.el("newAccountId"))).strip()
        logger.info(f"Opened {account_type} account: {account_id}")
        return account_id
