"""
LinkedIn engagement connector.
Opens a hashtag feed and reviews its posts, leaving the session open for
manual comments and reactions.
"""

import re
from typing import Optional

from selenium.webdriver.remote.webdriver import WebDriver

from goalflow.connectors.actions.linkedin_actions import LinkedInActions
from goalflow.connectors.base import BaseConnector, WorkflowContext
from goalflow.connectors.helpers.selenium_helpers import SeleniumHelpers
from goalflow.connectors.locators.linkedin import LinkedInLocators
from goalflow.schemas.enums import LogLevel, TaskType

HASHTAG = re.compile(r"#\w+")
DEFAULT_HASHTAG = "#openclaw"


class LinkedInEngageConnector(BaseConnector):
    task_type = TaskType.LINKEDIN_ENGAGE
    default_query = DEFAULT_HASHTAG
    ready_locators = (LinkedInLocators.FEED_POSTS,)
    ready_timeout = None
    hold_seconds = 60
    action_label = "Reviewing hashtag posts"

    def extract_query(self, goal: Optional[str]) -> str:
        match = HASHTAG.search(goal or "")
        return match.group(0) if match else self.default_query

    def build_url(self, query: str) -> str:
        return LinkedInLocators.URL_HASHTAG_FEED.format(tag=query.lstrip("#").lower())

    async def act(self, driver: WebDriver, helpers: SeleniumHelpers, ctx: WorkflowContext, query: str) -> None:
        actions = LinkedInActions(helpers, LinkedInLocators(), ctx.log, sleep=ctx.sleep)
        ctx.result.data["posts_found"] = await actions.count_feed_posts()
        await actions.scroll_feed()
        await ctx.log("✅ Engagement review complete.", LogLevel.SUCCESS)
