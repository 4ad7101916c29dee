"""
Monitoring connector: Google search for competitor research.
"""

from urllib.parse import quote

from selenium.webdriver.remote.webdriver import WebDriver

from goalflow.connectors.actions.google_actions import GoogleActions
from goalflow.connectors.base import BaseConnector, WorkflowContext
from goalflow.connectors.extractors import MAX_RESULTS, SEARCH_RESULTS
from goalflow.connectors.helpers.selenium_helpers import SeleniumHelpers
from goalflow.connectors.locators.google import GoogleLocators
from goalflow.schemas.enums import LogLevel, TaskType
from goalflow.services.query_extractor import MONITOR_STOPWORDS


class MonitorConnector(BaseConnector):
    task_type = TaskType.MONITOR
    default_query = "competitor analysis"
    stopwords = MONITOR_STOPWORDS
    ready_locators = (GoogleLocators.RESULTS_CONTAINER,)
    ready_timeout = 15
    captcha_locators = (GoogleLocators.CAPTCHA,)
    hold_seconds = 60
    action_label = "Researching competitors"

    def build_url(self, query: str) -> str:
        return GoogleLocators.URL_SEARCH.format(query=quote(query, safe=""))

    async def act(self, driver: WebDriver, helpers: SeleniumHelpers, ctx: WorkflowContext, query: str) -> None:
        actions = GoogleActions(helpers, GoogleLocators(), ctx.log, sleep=ctx.sleep)
        await actions.scroll_results()
        results = SEARCH_RESULTS.extract(helpers, MAX_RESULTS) or []
        ctx.result.data["results"] = [item.model_dump() for item in results]
        await ctx.log(f"✅ Research results loaded ({len(results)}).", LogLevel.SUCCESS)
