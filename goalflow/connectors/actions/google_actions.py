"""
Actions module for the Google connectors.
"""

import asyncio
from typing import Callable

from goalflow.connectors.helpers.selenium_helpers import SeleniumHelpers
from goalflow.connectors.locators.google import GoogleLocators
from goalflow.schemas.enums import LogLevel


class GoogleActions:
    """Encapsulates Google search actions."""

    def __init__(
        self,
        helpers: SeleniumHelpers,
        selectors: GoogleLocators,
        log_func: Callable,
        sleep: Callable = asyncio.sleep,
    ):
        self.helpers = helpers
        self.sel = selectors
        self.log = log_func
        self.sleep = sleep

    async def type_search(self, query: str) -> bool:
        box = self.helpers.first_present([self.sel.SEARCH_BOX])
        if box is None:
            await self.log("⚠️ Search box not found", LogLevel.WARN)
            return False
        await self.log(f"⌨️ Searching for: {query}")
        self.helpers.submit_search(box, query)
        return True

    async def scroll_results(self, settle: float = 2) -> None:
        self.helpers.scroll_by()
        await self.sleep(settle)
