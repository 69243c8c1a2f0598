"""
================================================================================
Site Suites Pytest Configuration
================================================================================

Registers the project markers and tags collected tests by location:

    sitesuites/unit/...         -> unit
    sitesuites/ui_testing/...   -> ui, e2e
    *parabank* / *bilibili*     -> site marker

================================================================================
"""

import pytest


MARKERS = {
    # Priority
    "P0": "Blocking flows: login, registration, search",
    "P1": "Core account and playback features",
    "P2": "Secondary features and validation messages",
    "P3": "Exploratory and cosmetic checks",
    # Type
    "smoke": "Fast happy-path checks",
    "regression": "Full regression run",
    "e2e": "Live-site tests driving a real browser (need --run-e2e)",
    "unit": "Framework tests with in-memory Playwright fakes",
    # Area
    "ui": "Browser UI tests",
    "parabank": "ParaBank banking demo",
    "bilibili": "Bilibili video site",
}

SITES = ("parabank", "bilibili")


def pytest_configure(config):
    for name, description in MARKERS.items():
        config.addinivalue_line("markers", f"{name}: {description}")


def pytest_collection_modifyitems(config, items):
    """Add location-based markers to collected tests."""
    for item in items:
        parts = item.path.parts

        if "ui_testing" in parts:
            item.add_marker(pytest.mark.ui)
            item.add_marker(pytest.mark.e2e)
        if "unit" in parts:
            item.add_marker(pytest.mark.unit)

        for site in SITES:
            if site in item.name or site in item.path.name:
                item.add_marker(getattr(pytest.mark, site))


def pytest_report_header(config):
    return [
        "",
        "=" * 60,
        "Site Suites - ParaBank / Bilibili UI Regression",
        "=" * 60,
        "",
    ]
