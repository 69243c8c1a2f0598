"""
ParaBank page objects (https://parabank.parasoft.com/parabank/).
"""

from .bill_pay_page import BillPayPage, PayeeInfo, PaymentInfo
from .home_page import HomePage
from .login_page import LoginPage
from .register_page import AccountInfo, PersonalInfo, RegisterPage
from .transfer_funds_page import TransferFundsPage

__all__ = [
    "AccountInfo",
    "BillPayPage",
    "HomePage",
    "LoginPage",
    "PayeeInfo",
    "PaymentInfo",
    "PersonalInfo",
    "RegisterPage",
    "TransferFundsPage",
]
