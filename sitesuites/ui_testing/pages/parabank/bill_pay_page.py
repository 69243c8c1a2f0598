"""
ParaBank "Bill Pay" form (`billpay.htm`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import allure
from loguru import logger

from sitesuites.ui_testing.framework.page_base import BasePage


@dataclass
class PayeeInfo:
    name: str
    address: str
    city: str
    state: str
    zip_code: str
    phone: str


@dataclass
class PaymentInfo:
    account: str
    amount: float
    verify_account: Optional[str] = None
    from_account_index: int = 0

    def __post_init__(self):
        if self.verify_account is None:
            self.verify_account = self.account


class BillPayPage(BasePage):

    SITE = "parabank"
    PAGE_KEY = "parabank.billPayPage"
    REQUIRED_ELEMENTS = (
        "payeeNameInput",
        "payeeAccountInput",
        "verifyAccountInput",
        "amountInput",
        "fromAccountSelect",
        "sendPaymentButton",
    )
    URL_PATH = "billpay.htm"

    async def _wait_until_ready(self) -> None:
        await self.actions.wait_for_visible(self.el("payeeNameInput"), timeout=self.page_timeout)

    @allure.step("Fill payee information")
    async def fill_payee_info(self, payee: PayeeInfo) -> None:
        await self.actions.fill(self.el("payeeNameInput"), payee.name)
        await self.actions.fill(self.el("payeeAddressInput"), payee.address)
        await self.actions.fill(self.el("payeeCityInput"), payee.city)
        await self.actions.fill(self.el("payeeStateInput"), payee.state)
        await self.actions.fill(self.el("payeeZipCodeInput"), payee.zip_code)
        await self.actions.fill(self.el("payeePhoneInput"), payee.phone)

    @allure.step("Fill payment information")
    async def fill_payment_info(self, payment: PaymentInfo) -> None:
        await self.actions.fill(self.el("payeeAccountInput"), payment.account)
        await self.actions.fill(self.el("verifyAccountInput"), payment.verify_account)
        await self.actions.fill(self.el("amountInput"), str(payment.amount))
        await self.actions.select_option(self.el("fromAccountSelect"), index=payment.from_account_index)

    @allure.step("Pay bill")
    async def pay_bill(self, payee: PayeeInfo, payment: PaymentInfo) -> None:
        logger.info(f"Paying {payment.amount} to {payee.name}")
        await self.fill_payee_info(payee)
        await self.fill_payment_info(payment)
        await self.actions.click(self.el("sendPaymentButton"))

    async def get_success_message(self) -> str:
        return (await self.actions.get_text(self.el("successMessage"))).strip()

    async def get_payee_name(self) -> str:
        return (await self.actions.get_text(self.el("payeeNameResult"))).strip()

    async def get_error_messages(self) -> List[str]:
        """Texts of the inline field errors currently shown (may be empty)."""
        if not await self.actions.is_visible(self.el("errorMessages")):
            return []
        return await self.actions.all_texts(self.el("errorMessages"))
