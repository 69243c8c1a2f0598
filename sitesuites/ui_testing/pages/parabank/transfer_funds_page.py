"""
ParaBank "Transfer Funds" form (`transfer.htm`).
"""

from __future__ import annotations

import allure
from loguru import logger

from sitesuites.ui_testing.framework.page_base import BasePage


class TransferFundsPage(BasePage):

    SITE = "parabank"
    PAGE_KEY = "parabank.transferPage"
    REQUIRED_ELEMENTS = ("amountInput", "fromAccountSelect", "toAccountSelect", "transferButton")
    URL_PATH = "transfer.htm"

    async def _wait_until_ready(self) -> None:
        await self.actions.wait_for_visible(self.el("amountInput"), timeout=self.page_timeout)

    @allure.step("Transfer {amount} (from #{from_account_index} to #{to_account_index})")
    async def transfer_funds(
        self,
        amount: float,
        from_account_index: int = 0,
        to_account_index: int = 1,
    ) -> None:
        """
        Submit a transfer between two of the customer's accounts.

        Accounts are chosen by their position in the dropdowns, since
        account ids differ per customer.
        """
        logger.info(f"Transferring {amount} from account #{from_account_index} to #{to_account_index}")
        await self.actions.fill(self.el("amountInput"), str(amount))
        await self.actions.select_option(self.el("fromAccountSelect"), index=from_account_index)
        await self.actions.select_option(self.el("toAccountSelect"), index=to_account_index)
        await self.actions.click(self.el("transferButton"))

    async def get_success_message(self) -> str:
        return (await self.actions.get_text(self.el("successMessage"))).strip()

    async def get_transferred_amount(self) -> float:
        return self.parse_amount(await self.actions.get_text(self.el("resultAmount")))

    async def get_error_message(self) -> str:
        return (await self.actions.get_text(self.el("errorMessage"))).strip()
