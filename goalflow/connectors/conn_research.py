"""
Research connector.
Types the goal's subject into the Google home page and keeps the results
open for manual review.
"""

from selenium.webdriver.remote.webdriver import WebDriver

from goalflow.connectors.actions.google_actions import GoogleActions
from goalflow.connectors.base import BaseConnector, WorkflowContext
from goalflow.connectors.extractors import MAX_POST_RESULTS, SEARCH_RESULTS
from goalflow.connectors.helpers.selenium_helpers import SeleniumHelpers
from goalflow.connectors.locators.google import GoogleLocators
from goalflow.schemas.enums import LogLevel, TaskType
from goalflow.services.query_extractor import RESEARCH_STOPWORDS


class ResearchConnector(BaseConnector):
    task_type = TaskType.RESEARCH
    default_query = "latest technology trends"
    stopwords = RESEARCH_STOPWORDS
    ready_locators = (GoogleLocators.RESULTS_CONTAINER,)
    ready_timeout = None
    hold_seconds = 60
    action_label = "Researching"

    def build_url(self, query: str) -> str:
        return GoogleLocators.URL_HOME

    async def navigate(self, driver: WebDriver, helpers: SeleniumHelpers, ctx: WorkflowContext, query: str) -> None:
        if await self.goto(driver, self.build_url(query), ctx):
            actions = GoogleActions(helpers, GoogleLocators(), ctx.log, sleep=ctx.sleep)
            await actions.type_search(query)

    async def act(self, driver: WebDriver, helpers: SeleniumHelpers, ctx: WorkflowContext, query: str) -> None:
        actions = GoogleActions(helpers, GoogleLocators(), ctx.log, sleep=ctx.sleep)
        await actions.scroll_results()
        results = SEARCH_RESULTS.extract(helpers, MAX_POST_RESULTS) or []
        ctx.result.data["results"] = [item.model_dump() for item in results]
        await ctx.log(f"✅ Research results loaded ({len(results)}).", LogLevel.SUCCESS)
