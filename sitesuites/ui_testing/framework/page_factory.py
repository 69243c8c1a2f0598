"""
================================================================================
Page Factory
================================================================================

Name -> page object dispatch with one cached instance per
(browser page, canonical page name).

Name resolution:
    "Login", "login_page", "LoginPage"     -> <default_site>.login
    "parabank.transfer", "parabank.TransferFundsPage" -> parabank.transfer
    "SearchResults"                        -> bilibili.search

Unknown names resolve to a generic BasePage (no elements) flagged with
`is_generic = True`, plus a logged warning and UnknownPageWarning. With
`strict=True` they raise UnknownPageError instead.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
import warnings
from typing import Dict, Optional, Tuple, Type

from loguru import logger
from playwright.async_api import Page

from sitesuites.ui_testing.pages import bilibili, parabank

from .context import FrameworkContext
from .page_base import BasePage
from .settings import SUPPORTED_SITES


# Static dispatch table: "<site>.<page>" -> page class
PAGE_CLASSES: Dict[str, Type[BasePage]] = {
    "parabank.login": parabank.LoginPage,
    "parabank.register": parabank.RegisterPage,
    "parabank.home": parabank.HomePage,
    "parabank.transfer": parabank.TransferFundsPage,
    "parabank.billpay": parabank.BillPayPage,
    "bilibili.home": bilibili.HomePage,
    "bilibili.login": bilibili.LoginPage,
    "bilibili.search": bilibili.SearchResultsPage,
    "bilibili.video": bilibili.VideoPage,
}

# Alternative spellings -> page part of a PAGE_CLASSES key
PAGE_ALIASES: Dict[str, str] = {
    "homepage": "home",
    "overview": "home",
    "loginpage": "login",
    "registerpage": "register",
    "registration": "register",
    "transferfunds": "transfer",
    "transferfundspage": "transfer",
    "transferpage": "transfer",
    "billpaypage": "billpay",
    "videopage": "video",
    "searchresults": "search",
    "searchresultspage": "search",
}

_SEPARATORS = re.compile(r"[\s_\-]+")


class UnknownPageWarning(UserWarning):
    """A page name had no registered class; a generic page was returned."""
    pass


class UnknownPageError(KeyError):
    """Raised in strict mode for page names with no registered class."""

    def __init__(self, name: str, canonical: str):
        self.name = name
        self.canonical = canonical
        super().__init__(f"No page object registered for '{name}' (resolved as '{canonical}')")


def canonical_page_name(name: str, default_site: str = "bilibili") -> str:
    """
    Normalize a page name to "<site>.<page>".

    Case, whitespace, '_' and '-' are ignored; aliases are applied to the
    page part; names without a known site prefix use `default_site`.
    """
    normalized = _SEPARATORS.sub("", name.strip().lower())
    site, _, page_part = normalized.rpartition(".")
    if site not in SUPPORTED_SITES:
        site, page_part = default_site, normalized
    page_part = PAGE_ALIASES.get(page_part, page_part)
    return f"{site}.{page_part}"


class PageFactory:
    """
    Returns page objects, constructing each at most once per browser page.

    Usage:
        factory = PageFactory(context)
        home = factory.get_page(page, "home")
        assert factory.get_page(page, "Home") is home
        factory.clear()      # between tests; the browser page stays open
    """

    def __init__(self, context: FrameworkContext, strict: bool = False):
        """
        Args:
            context: Framework context handed to every page object
            strict: Raise UnknownPageError instead of returning a generic page
        """
        self.context = context
        self.strict = strict
        self._instances: Dict[Tuple[int, str], BasePage] = {}

    def get_page(self, session: Page, name: str) -> BasePage:
        """
        Return the cached page object for (session, name), creating it on miss.

        Args:
            session: Playwright Page the object is bound to
            name: Page name, any case, optionally "<site>." prefixed

        Raises:
            UnknownPageError: strict mode and no class for `name`
            MissingSelectorGroupError: the page's selectors are not configured
        """
        canonical = canonical_page_name(name, self.context.settings.default_site)
        key = (id(session), canonical)

        cached = self._instances.get(key)
        if cached is not None:
            return cached

        page_class = PAGE_CLASSES.get(canonical)
        if page_class is None:
            page_obj = self._generic_page(session, name, canonical)
        else:
            page_obj = page_class(session, self.context)
            logger.debug(f"Created {page_class.__name__} for '{name}'")

        self._instances[key] = page_obj
        return page_obj

    def _generic_page(self, session: Page, name: str, canonical: str) -> BasePage:
        if self.strict:
            raise UnknownPageError(name, canonical)

        message = f"Unknown page '{name}' (resolved as '{canonical}'); using generic BasePage"
        logger.warning(message)
        warnings.warn(message, UnknownPageWarning, stacklevel=3)

        page_obj = BasePage(session, self.context)
        page_obj.is_generic = True
        page_obj.base_url = self.context.settings.site_url(canonical.split(".", 1)[0])
        return page_obj

    def clear(self, session: Optional[Page] = None) -> None:
        """
        Drop cached page objects (all, or only those bound to `session`).

        Never closes the browser page.
        """
        if session is None:
            self._instances.clear()
        else:
            for key in [k for k in self._instances if k[0] == id(session)]:
                del self._instances[key]
        logger.debug("Page object cache cleared")

    @property
    def size(self) -> int:
        """Number of cached page objects."""
        return len(self._instances)


__all__ = [
    "PAGE_ALIASES",
    "PAGE_CLASSES",
    "PageFactory",
    "UnknownPageError",
    "UnknownPageWarning",
    "canonical_page_name",
]
