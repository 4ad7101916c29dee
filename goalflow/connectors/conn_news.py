"""
News connector: Google News headlines for the goal's subject.
"""

from urllib.parse import quote

from selenium.webdriver.remote.webdriver import WebDriver

from goalflow.connectors.actions.google_actions import GoogleActions
from goalflow.connectors.base import BaseConnector, WorkflowContext
from goalflow.connectors.extractors import MAX_RESULTS, NEWS
from goalflow.connectors.helpers.selenium_helpers import SeleniumHelpers
from goalflow.connectors.locators.google import GoogleLocators
from goalflow.schemas.enums import LogLevel, TaskType
from goalflow.services.query_extractor import NEWS_STOPWORDS


class NewsConnector(BaseConnector):
    task_type = TaskType.NEWS
    default_query = "AI technology"
    stopwords = NEWS_STOPWORDS
    ready_locators = (GoogleLocators.RESULTS_CONTAINER,)
    ready_timeout = 15
    hold_seconds = 30
    action_label = "Loading headlines"

    def build_url(self, query: str) -> str:
        return GoogleLocators.URL_NEWS.format(query=quote(query, safe=""))

    async def act(self, driver: WebDriver, helpers: SeleniumHelpers, ctx: WorkflowContext, query: str) -> None:
        await ctx.log("📜 Loading headlines...")
        actions = GoogleActions(helpers, GoogleLocators(), ctx.log, sleep=ctx.sleep)
        await actions.scroll_results(settle=3)

        headlines = NEWS.extract(helpers, MAX_RESULTS) or []
        ctx.result.data["headlines"] = [item.model_dump() for item in headlines]
        for i, item in enumerate(headlines, start=1):
            await ctx.log(f"   {i}. {item.title}")
        await ctx.log(f"✅ News retrieved ({len(headlines)} headlines).", LogLevel.SUCCESS)
