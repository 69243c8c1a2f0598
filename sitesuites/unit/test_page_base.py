import warnings

import pytest

from sitesuites.ui_testing.framework import smart_locator
from sitesuites.ui_testing.framework.page_base import (
    BasePage,
    DegradedReadinessWarning,
    MissingSelectorGroupError,
    PageState,
)
from sitesuites.ui_testing.framework.smart_locator import ElementTimeoutError


DOCUMENT = {
    "app": {
        "home": {
            "loginBtn": "#login",
            "modal": ".modal",
            "page": ".page",
            "spinner": ".spinner",
            "submit": ["#submit", "button[type=submit]"],
        }
    }
}


class HomePage(BasePage):
    SITE = "parabank"
    PAGE_KEY = "app.home"
    REQUIRED_ELEMENTS = ("loginBtn",)
    URL_PATH = "index.htm"


class MissingGroupPage(BasePage):
    PAGE_KEY = "app.nope"


class MissingElementPage(BasePage):
    PAGE_KEY = "app.home"
    REQUIRED_ELEMENTS = ("loginBtn", "logoutBtn")


@pytest.fixture
def home(fake_page, make_context):
    return HomePage(fake_page, make_context(DOCUMENT))


def test_elements_built_from_group(home):
    assert home.state is PageState.CONSTRUCTED
    assert home.el("loginBtn").selector == "#login"
    assert home.el("submit").selectors == ("#submit", "button[type=submit]")
    assert home.el("submit").name == "submit"


def test_unknown_element_name_raises(home):
    with pytest.raises(MissingSelectorGroupError) as excinfo:
        home.el("nope")
    assert excinfo.value.path == "app.home.nope"


def test_missing_group_fails_before_any_element_is_built(fake_page, make_context, monkeypatch):
    built = []
    original = smart_locator.ElementRef.from_selector

    def spy(selector, name=None):
        built.append(name)
        return original(selector, name=name)

    monkeypatch.setattr(smart_locator.ElementRef, "from_selector", spy)

    with pytest.raises(MissingSelectorGroupError) as excinfo:
        MissingGroupPage(fake_page, make_context(DOCUMENT))

    assert excinfo.value.path == "app.nope"
    assert built == []


def test_missing_required_element_raises(fake_page, make_context):
    with pytest.raises(MissingSelectorGroupError) as excinfo:
        MissingElementPage(fake_page, make_context(DOCUMENT))

    assert excinfo.value.path == "app.home.logoutBtn"
    assert "MissingElementPage" in str(excinfo.value)


def test_page_without_key_is_empty(fake_page, make_context):
    page = BasePage(fake_page, make_context(DOCUMENT))

    assert page.elements == {}
    assert page.base_url == "https://parabank.parasoft.com/parabank/"


@pytest.mark.parametrize(
    "path,expected",
    [
        ("index.htm", "https://parabank.parasoft.com/parabank/index.htm"),
        ("/index.htm", "https://parabank.parasoft.com/parabank/index.htm"),
        ("", "https://parabank.parasoft.com/parabank/"),
        ("https://other.example.com/x", "https://other.example.com/x"),
    ],
)
def test_resolve_url(home, path, expected):
    assert home.resolve_url(path) == expected


@pytest.mark.asyncio
async def test_navigate_uses_url_path(fake_page, home):
    await home.navigate()

    assert fake_page.url == "https://parabank.parasoft.com/parabank/index.htm"
    assert home.current_url == fake_page.url

    await home.navigate("about.htm")
    assert fake_page.url.endswith("/parabank/about.htm")


@pytest.mark.asyncio
async def test_wait_for_page_load_marks_ready(fake_page, home):
    await home.wait_for_page_load()

    assert home.state is PageState.READY
    assert fake_page.calls_of("wait_for_load_state")[0][1] == "load"


@pytest.mark.asyncio
async def test_wait_for_any_returns_first_visible_and_cancels_losers(fake_page, home):
    fake_page.show(".page")
    fake_page.delays[".page"] = 0.01
    fake_page.hanging.add(".modal")

    winner = await home.wait_for_any(["modal", "page", "spinner"], timeout=100)

    assert winner == "page"
    assert fake_page.sleeps == []


@pytest.mark.asyncio
async def test_wait_for_any_degrades_to_fixed_delay(fake_page, home, log_records):
    with pytest.warns(DegradedReadinessWarning):
        winner = await home.wait_for_any(["modal", "spinner"], timeout=50, fallback_delay=5000)

    assert winner is None
    assert fake_page.sleeps == [5000]
    assert any("readiness anchors" in record["message"] for record in log_records)


@pytest.mark.asyncio
async def test_wait_for_any_prefers_visible_anchor_over_simultaneous_error(home, monkeypatch):
    async def wait_for_visible(target, timeout=None):
        if target.selector == ".modal":
            raise RuntimeError("Target page, context or browser has been closed")
        return target

    monkeypatch.setattr(home.actions, "wait_for_visible", wait_for_visible)

    for anchors in (["modal", "page"], ["page", "modal"]):
        assert await home.wait_for_any(anchors, timeout=100) == "page"


@pytest.mark.asyncio
async def test_wait_for_any_raises_engine_error_when_nothing_wins(home, monkeypatch):
    async def wait_for_visible(target, timeout=None):
        if target.selector == ".modal":
            raise RuntimeError("browser closed")
        raise ElementTimeoutError(target.selector, timeout)

    monkeypatch.setattr(home.actions, "wait_for_visible", wait_for_visible)

    with pytest.raises(RuntimeError, match="browser closed"):
        await home.wait_for_any(["modal", "spinner"], timeout=100)


@pytest.mark.asyncio
async def test_wait_for_any_accepts_raw_selectors(fake_page, home):
    fake_page.show("#raw")

    with warnings.catch_warnings():
        warnings.simplefilter("error", DegradedReadinessWarning)
        assert await home.wait_for_any(["#raw", "spinner"], timeout=50) == "#raw"


@pytest.mark.asyncio
async def test_screenshot_attaches_bytes(fake_page, home, tmp_path, monkeypatch):
    monkeypatch.setattr("sitesuites.ui_testing.framework.page_base.SCREENSHOT_DIR", tmp_path)

    path = await home.screenshot("home", full_page=True, attach_to_allure=False)

    assert path.parent == tmp_path
    assert path.name.startswith("home_")
    assert fake_page.calls_of("screenshot")[0][2] == {"full_page": True}


@pytest.mark.asyncio
async def test_locator_health_report(fake_page, home):
    fake_page.show("button[type=submit]")

    await home.actions.click(home.el("submit"))

    assert "fallback_1 -> button[type=submit]" in home.locator_health_report()


def test_parsing_helpers():
    assert BasePage.digits_to_int("1,234 comments") == 1234
    assert BasePage.digits_to_int("no digits", default=-1) == -1
    assert BasePage.first_int("Page 3 of 10") == 3
    assert BasePage.first_int(None, default=1) == 1
    assert BasePage.parse_amount("$1,515.50") == pytest.approx(1515.5)
    assert BasePage.parse_amount("-$20.00") == pytest.approx(-20.0)
    assert BasePage.parse_amount("n/a") == 0.0


def test_element_timeout_error_is_a_timeout():
    error = ElementTimeoutError("#x", 100)

    assert isinstance(error, TimeoutError)
    assert str(error) == "wait_for_visible timed out after 100ms for selector '#x'"
