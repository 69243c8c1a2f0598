"""
================================================================================
Bilibili Home Page
================================================================================

Header (login entry, search box, avatar), navigation menu, the featured
carousel and the recommended video card grid.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from sitesuites.ui_testing.framework.page_base import BasePage


class HomePage(BasePage):
    """Bilibili front page."""

    SITE = "bilibili"
    PAGE_KEY = "bilibili.homePage"
    REQUIRED_ELEMENTS = ("loginButton", "searchInput", "searchButton", "videoCards", "featuredSection")
    URL_PATH = "/"

    async def _wait_until_ready(self) -> None:
        await self.actions.wait_for_visible(self.el("featuredSection"))
        await self.actions.wait_for_visible(self.el("videoCards"))
        await self.actions.wait_for_load_state("networkidle", timeout=self.page_timeout)

    @allure.step("Open Bilibili home page")
    async def navigate_to_home_page(self) -> None:
        logger.info("Navigating to Bilibili home page")
        await self.navigate()

    @allure.step("Click login entry")
    async def click_login_button(self) -> None:
        await self.actions.click(self.el("loginButton"))

    @allure.step("Search for {keyword}")
    async def search(self, keyword: str) -> None:
        logger.info(f"Searching for keyword: {keyword}")
        await self.actions.fill(self.el("searchInput"), keyword)
        await self.actions.click(self.el("searchButton"))

    @allure.step("Show search history")
    async def show_search_history(self) -> None:
        search_box = await self.actions.wait_for_visible(self.el("searchInput"))
        await self.actions.hover(search_box)
        await self.actions.wait_for_visible(self.el("searchHistory"))

    async def is_user_logged_in(self) -> bool:
        return await self.actions.is_visible(self.el("userAvatar"))

    @allure.step("Click user avatar")
    async def click_user_avatar(self) -> None:
        await self.actions.click(self.el("userAvatar"))

    @allure.step("Click navigation menu item {menu_item}")
    async def click_nav_menu_item(self, menu_item: str) -> None:
        await self.actions.click(self.actions.child(self.el("navMenu"), f"text={menu_item}"))

    # =========================================================================
    # Video Cards
    # =========================================================================

    async def get_video_card_count(self) -> int:
        await self.actions.wait_for_visible(self.el("videoCards"))
        return await self.actions.count(self.el("videoCards"))

    @allure.step("Click video card #{index}")
    async def click_video_card_by_index(self, index: int) -> None:
        await self.actions.click(self.actions.nth(self.el("videoCards"), index))

    @allure.step("Click video card {title}")
    async def click_video_card_by_title(self, title: str) -> None:
        await self.actions.click(self.actions.child(self.el("videoCards"), f"text={title}"))

    # =========================================================================
    # Section Probes
    # =========================================================================

    async def is_featured_section_visible(self) -> bool:
        return await self.actions.is_visible(self.el("featuredSection"))

    async def is_live_section_visible(self) -> bool:
        return await self.actions.is_visible(self.el("liveSection"))

    async def is_anime_section_visible(self) -> bool:
        return await self.actions.is_visible(self.el("animeSection"))

    async def is_game_section_visible(self) -> bool:
        return await self.actions.is_visible(self.el("gameSection"))

    async def is_footer_visible(self) -> bool:
        return await self.actions.is_visible(self.el("footer"))
