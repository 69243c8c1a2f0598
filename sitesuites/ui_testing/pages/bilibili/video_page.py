"""
================================================================================
Bilibili Video Page
================================================================================

Player controls (bpx player), danmaku, interaction bar, comments and the
related-video sidebar of a /video/BV... page.

================================================================================
"""

from __future__ import annotations

from typing import List

import allure
from loguru import logger

from sitesuites.ui_testing.framework.page_base import BasePage


class VideoPage(BasePage):
    """Bilibili video playback page."""

    SITE = "bilibili"
    PAGE_KEY = "bilibili.videoPage"
    REQUIRED_ELEMENTS = ("videoPlayer", "playButton", "progressBar", "videoTitle")

    async def _wait_until_ready(self) -> None:
        await self.actions.wait_for_visible(self.el("videoPlayer"), timeout=self.page_timeout)

    @allure.step("Open video {bvid}")
    async def open_video(self, bvid: str) -> None:
        await self.navigate(f"video/{bvid}")

    # =========================================================================
    # Player Controls
    # =========================================================================

    @allure.step("Play video")
    async def play_video(self) -> None:
        await self.actions.click(self.el("playButton"))

    @allure.step("Pause video")
    async def pause_video(self) -> None:
        await self.actions.click(self.el("pauseButton"))

    @allure.step("Seek to {position}%")
    async def seek_video(self, position: float) -> bool:
        """
        Click the progress bar at `position` percent of its width.

        Returns:
            False if the progress bar has no rendered box
        """
        if not 0 <= position <= 100:
            raise ValueError(f"Seek position must be within 0-100, got {position}")
        logger.info(f"Seeking video to position: {position}%")
        return await self.actions.click_at_ratio(self.el("progressBar"), position / 100)

    async def get_current_time(self) -> str:
        return (await self.actions.get_text(self.el("currentTime"))).strip()

    async def get_total_time(self) -> str:
        return (await self.actions.get_text(self.el("totalTime"))).strip()

    @allure.step("Toggle volume")
    async def toggle_volume(self) -> None:
        await self.actions.click(self.el("volumeControl"))

    @allure.step("Toggle fullscreen")
    async def toggle_fullscreen(self) -> None:
        await self.actions.click(self.el("fullscreenButton"))

    # =========================================================================
    # Danmaku
    # =========================================================================

    @allure.step("Send danmaku {message}")
    async def send_danmaku(self, message: str) -> None:
        await self.actions.fill(self.el("danmakuInput"), message)
        await self.actions.click(self.el("danmakuSendButton"))

    @allure.step("Open danmaku settings")
    async def open_danmaku_settings(self) -> None:
        await self.actions.click(self.el("danmakuSettings"))

    # =========================================================================
    # Comments
    # =========================================================================

    async def scroll_to_comments(self) -> None:
        await self.actions.scroll_to_element(self.el("commentsSection"))

    @allure.step("Post comment")
    async def post_comment(self, comment: str) -> None:
        logger.info(f"Posting comment: {comment}")
        await self.scroll_to_comments()
        await self.actions.fill(self.el("commentInput"), comment)
        await self.actions.click(self.el("commentSendButton"))

    async def get_comment_count(self) -> int:
        await self.scroll_to_comments()
        return self.digits_to_int(await self.actions.get_text(self.el("commentCount")))

    async def get_all_comments(self) -> List[str]:
        await self.scroll_to_comments()
        return await self.actions.all_texts(self.el("commentsList"))

    # =========================================================================
    # Interaction Bar
    # =========================================================================

    @allure.step("Like video")
    async def like_video(self) -> None:
        await self.actions.click(self.el("likeButton"))

    @allure.step("Give coins")
    async def coin_video(self) -> None:
        # Opens the coin dialog; the amount is chosen in the dialog.
        await self.actions.click(self.el("coinButton"))

    @allure.step("Favorite video")
    async def favorite_video(self) -> None:
        await self.actions.click(self.el("favoriteButton"))

    @allure.step("Share video")
    async def share_video(self) -> None:
        await self.actions.click(self.el("shareButton"))

    @allure.step("Subscribe to uploader")
    async def subscribe_to_up(self) -> None:
        await self.actions.click(self.el("subscribeButton"))

    # =========================================================================
    # Video Info
    # =========================================================================

    async def get_video_title(self) -> str:
        return (await self.actions.get_text(self.el("videoTitle"))).strip()

    async def get_up_name(self) -> str:
        return (await self.actions.get_text(self.el("upName"))).strip()

    async def get_view_count(self) -> int:
        return self.digits_to_int(await self.actions.get_text(self.el("viewCount")))

    async def get_video_tags(self) -> List[str]:
        return await self.actions.all_texts(self.el("videoTags"))

    async def get_description(self) -> str:
        return (await self.actions.get_text(self.el("videoDescription"))).strip()

    @allure.step("Open related video #{index}")
    async def click_related_video(self, index: int) -> None:
        await self.actions.click(self.actions.nth(self.el("relatedVideos"), index))

    async def is_player_visible(self) -> bool:
        return await self.actions.is_visible(self.el("videoPlayer"))
