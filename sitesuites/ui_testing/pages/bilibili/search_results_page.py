"""
================================================================================
Bilibili Search Results Page
================================================================================

Result grid, filter tabs, sort options and pagination of
search.bilibili.com.

================================================================================
"""

from __future__ import annotations

from typing import List

import allure
from loguru import logger

from sitesuites.ui_testing.framework.page_base import BasePage


class SearchResultsPage(BasePage):
    """Bilibili search results."""

    SITE = "bilibili"
    PAGE_KEY = "bilibili.searchResultsPage"
    REQUIRED_ELEMENTS = ("searchInput", "searchButton", "videoResults", "resultCards", "resultTitles")

    async def _wait_until_ready(self) -> None:
        await self.actions.wait_for_visible(self.el("videoResults"))
        await self.actions.wait_for_load_state("networkidle", timeout=self.page_timeout)

    # =========================================================================
    # Search State
    # =========================================================================

    async def get_current_search_keyword(self) -> str:
        """Keyword shown in the results header, falling back to the search box value."""
        if await self.actions.is_visible(self.el("searchKeyword"), timeout=2000):
            return (await self.actions.get_text(self.el("searchKeyword"))).strip()
        return await self.actions.get_value(self.el("searchInput"))

    async def get_search_results_count(self) -> int:
        """Total hit count, e.g. "共 1000 条结果" -> 1000."""
        return self.first_int(await self.actions.get_text(self.el("resultsCount")))

    async def get_result_count_on_page(self) -> int:
        return await self.actions.count(self.el("resultCards"))

    async def is_empty_results(self) -> bool:
        return await self.actions.is_visible(self.el("emptyResults"))

    # =========================================================================
    # Filters and Sorting
    # =========================================================================

    @allure.step("Click filter tab {tab_name}")
    async def click_filter_tab(self, tab_name: str) -> None:
        await self.actions.click(self.actions.child(self.el("filterTabs"), f"text={tab_name}"))

    @allure.step("Sort by {sort_option}")
    async def select_sort_option(self, sort_option: str) -> None:
        await self.actions.click(self.el("sortDropdown"))
        await self.actions.click(self.actions.child(self.el("filterOptions"), f"text={sort_option}"))

    # =========================================================================
    # Results
    # =========================================================================

    @allure.step("Open result #{index}")
    async def click_result_card(self, index: int) -> None:
        await self.actions.click(self.actions.nth(self.el("resultCards"), index))

    @allure.step("Open result {title}")
    async def click_result_card_by_title(self, title: str) -> None:
        titles = await self.actions.wait_for_visible(self.el("resultTitles"))
        await self.actions.click(titles.filter(has_text=title))

    async def get_result_titles(self) -> List[str]:
        titles = await self.actions.wait_for_visible(self.el("resultTitles"))
        return await self.actions.all_texts(titles)

    async def get_result_authors(self) -> List[str]:
        authors = await self.actions.wait_for_visible(self.el("resultAuthors"))
        return await self.actions.all_texts(authors)

    async def get_result_views(self) -> List[str]:
        return await self.actions.all_texts(self.el("resultViews"))

    async def has_result_with_keyword(self, keyword: str) -> bool:
        needle = keyword.lower()
        return any(needle in title.lower() for title in await self.get_result_titles())

    # =========================================================================
    # Pagination
    # =========================================================================

    @allure.step("Go to next results page")
    async def go_to_next_page(self) -> None:
        await self.actions.click(self.el("nextPageButton"))

    @allure.step("Go to previous results page")
    async def go_to_previous_page(self) -> None:
        await self.actions.click(self.el("previousPageButton"))

    @allure.step("Go to results page {page_number}")
    async def go_to_page(self, page_number: int) -> None:
        await self.actions.click(self.actions.child(self.el("pagination"), f"text={page_number}"))

    async def get_current_page(self) -> int:
        return self.first_int(await self.actions.get_text(self.el("currentPage")), default=1)

    async def get_total_pages(self) -> int:
        return self.first_int(await self.actions.get_text(self.el("totalPages")), default=1)

    # =========================================================================
    # Related Searches
    # =========================================================================

    async def get_related_searches(self) -> List[str]:
        return await self.actions.all_texts(self.el("relatedSearches"))

    @allure.step("Click related search {term}")
    async def click_related_search(self, term: str) -> None:
        await self.actions.click(self.actions.child(self.el("relatedSearches"), f"text={term}"))

    @allure.step("Refine search with {keyword}")
    async def refine_search(self, keyword: str, wait: bool = False) -> None:
        logger.info(f"Refining search with keyword: {keyword}")
        await self.actions.fill(self.el("searchInput"), keyword)
        await self.actions.click(self.el("searchButton"))
        if wait:
            await self.wait_for_page_load()
