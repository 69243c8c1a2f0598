"""
================================================================================
Page Objects
================================================================================

Registry-backed Page Object Model implementations, one subpackage per site.

Each page class declares:
    - SITE: which base URL it navigates against
    - PAGE_KEY: dotted path of its selector group in locators.yaml
    - REQUIRED_ELEMENTS: names that must be configured for it to work

Author: Automation Team
License: MIT
================================================================================
"""

from . import bilibili, parabank

__all__ = [
    "bilibili",
    "parabank",
]
