"""
Bilibili page objects (https://www.bilibili.com).
"""

from .home_page import HomePage
from .login_page import LoginPage
from .search_results_page import SearchResultsPage
from .video_page import VideoPage

__all__ = [
    "HomePage",
    "LoginPage",
    "SearchResultsPage",
    "VideoPage",
]
