"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for the live-site suites (ParaBank and Bilibili).

Key Features:
- One framework context (settings + selector registry) per session
- Browser, context and page per test for isolation
- Page factory per test, cleared on teardown
- Screenshot capture on failure, attached to Allure
- Freshly registered ParaBank customer for flows that need an account

================================================================================
"""

import time
from typing import AsyncGenerator

import allure
import pytest
import pytest_asyncio
from loguru import logger
from playwright.async_api import Error as PlaywrightError, Page

from sitesuites.ui_testing.framework import BrowserManager, FrameworkContext
from sitesuites.ui_testing.framework.page_factory import PageFactory
from sitesuites.ui_testing.framework.test_data import TestDataManager
from sitesuites.ui_testing.pages.parabank import AccountInfo, PersonalInfo


# ================================================================================
# Session Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def framework_context() -> FrameworkContext:
    """Settings, logging and selector registry, built once per run."""
    return FrameworkContext.create()


@pytest.fixture(scope="session")
def test_data_manager() -> TestDataManager:
    return TestDataManager()


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest_asyncio.fixture
async def browser_manager(framework_context: FrameworkContext) -> AsyncGenerator[BrowserManager, None]:
    """
    Function-scoped browser manager.

    Each test gets its own browser so tests can run in parallel workers
    without sharing state.
    """
    async with BrowserManager.from_settings(framework_context.settings) as manager:
        yield manager


@pytest_asyncio.fixture
async def page(request, browser_manager: BrowserManager) -> AsyncGenerator[Page, None]:
    """
    Function-scoped page in a fresh browser context.

    Takes a full-page screenshot on teardown when the test body failed.
    """
    page = await browser_manager.new_page()
    yield page

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        try:
            screenshot = await page.screenshot(full_page=True)
            allure.attach(
                screenshot,
                name="failure_screenshot",
                attachment_type=allure.attachment_type.PNG,
            )
        except PlaywrightError as e:
            logger.warning(f"Failed to capture screenshot on failure: {e}")


@pytest.fixture
def page_factory(framework_context: FrameworkContext):
    """Page object factory; its cache never outlives a test."""
    factory = PageFactory(framework_context)
    yield factory
    factory.clear()


# ================================================================================
# ParaBank Fixtures
# ================================================================================

@pytest.fixture
def parabank_profile(test_data_manager: TestDataManager) -> dict:
    return test_data_manager.get_json("parabankUsers")


@pytest_asyncio.fixture
async def registered_user(page: Page, page_factory: PageFactory, parabank_profile: dict) -> AccountInfo:
    """
    Register a brand-new ParaBank customer and leave the session logged in.

    The public demo resets its database from time to time, so tests that
    need an account create their own instead of relying on a fixed user.
    """
    info = parabank_profile["personalInfo"]
    personal = PersonalInfo(
        first_name=info["firstName"],
        last_name=info["lastName"],
        address=info["address"],
        city=info["city"],
        state=info["state"],
        zip_code=info["zipCode"],
        phone=info["phone"],
        ssn=info["ssn"],
    )
    account = AccountInfo(
        username=f"testuser_{int(time.time() * 1000)}",
        password="testpassword123",
    )

    with allure.step(f"Register ParaBank user {account.username}"):
        register_page = page_factory.get_page(page, "parabank.register")
        await register_page.navigate()
        await register_page.wait_for_page_load()
        await register_page.register(personal, account)
        assert await register_page.is_registration_successful(), (
            f"Registration failed: {await register_page.get_error_messages()}"
        )

    logger.info(f"Registered ParaBank user: {account.username}")
    return account


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item for fixture teardown."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)
