"""
Actions module for the LinkedIn connectors.
Encapsulates feed, people-search, profile and post-composer interactions.
"""

import asyncio
from typing import Callable, Optional

from goalflow.connectors.helpers.selenium_helpers import SeleniumHelpers
from goalflow.connectors.locators.linkedin import LinkedInLocators
from goalflow.schemas.enums import LogLevel

PROFILE_SCROLLS = 6
PROFILE_SCROLL_PIXELS = 600
FEED_SCROLLS = 3
FEED_SCROLL_PIXELS = 500
EDITOR_ATTEMPTS = 3


class LinkedInActions:
    """Encapsulates LinkedIn page actions."""

    def __init__(
        self,
        helpers: SeleniumHelpers,
        selectors: LinkedInLocators,
        log_func: Callable,
        sleep: Callable = asyncio.sleep,
    ):
        self.helpers = helpers
        self.sel = selectors
        self.log = log_func
        self.sleep = sleep

    # ========== FEED ==========

    async def count_feed_posts(self) -> int:
        count = len(self.helpers.find_all(self.sel.FEED_POSTS))
        await self.log(f"📝 Found {count} posts with this hashtag.")
        return count

    async def scroll_feed(self, times: int = FEED_SCROLLS) -> None:
        for _ in range(times):
            self.helpers.scroll_by(FEED_SCROLL_PIXELS)
            await self.sleep(1.5)

    # ========== PEOPLE SEARCH / PROFILE ==========

    async def open_first_profile(self) -> Optional[str]:
        """Click the first result linking to a /in/ profile; returns its URL."""
        for link in self.helpers.find_all(self.sel.PROFILE_LINKS):
            href = link.get_attribute("href") or ""
            if "/in/" in href:
                link.click()
                await self.log(f"✅ Clicked on profile: {href}")
                await self.sleep(4)
                return href
        await self.log("⚠️ Could not find a clickable profile link.", LogLevel.WARN)
        return None

    async def load_profile_sections(self) -> None:
        await self.log("📜 Scrolling profile to load all sections...")
        for _ in range(PROFILE_SCROLLS):
            self.helpers.scroll_by(PROFILE_SCROLL_PIXELS)
            await self.sleep(0.8)
        self.helpers.scroll_to_top()
        await self.sleep(2)

    async def expand_hidden_content(self) -> int:
        await self.log("🔓 Expanding hidden content...")
        clicked = self.helpers.click_all(self.sel.SEE_MORE_BUTTONS)
        if clicked:
            await self.sleep(1.5)
        return clicked

    # ========== POST COMPOSER ==========

    async def open_composer(self) -> bool:
        await self.log("🖱️ Clicking 'Start a post'...")
        if self.helpers.click_first(self.sel.START_POST_BUTTONS):
            return True
        return self.helpers.click_button_with_text(self.sel.START_POST_TEXT)

    async def find_editor(self, attempts: int = EDITOR_ATTEMPTS, delay: float = 3):
        for attempt in range(1, attempts + 1):
            await self.sleep(delay)
            editor = self.helpers.first_present([self.sel.POST_EDITOR])
            if editor is not None:
                return editor
            await self.log(f"⏳ Post editor not found (attempt {attempt}/{attempts})", LogLevel.WARN)
            if attempt < attempts:
                await self.open_composer()
        return None

    async def type_post(self, editor, text: str) -> None:
        await self.log("✍️ Typing post content...")
        self.helpers.insert_text(editor, text)
        await self.sleep(1.5)
        await self.log("✅ Post content typed!")

    async def submit_post(self) -> bool:
        await self.sleep(3)
        return self.helpers.click_button_with_text(self.sel.POST_SUBMIT_TEXT, exact=True)
