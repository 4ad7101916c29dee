"""
Finance connector: Google Finance quote page.
"""

from urllib.parse import quote

from selenium.webdriver.remote.webdriver import WebDriver

from goalflow.connectors.base import BaseConnector, WorkflowContext
from goalflow.connectors.extractors import QUOTE
from goalflow.connectors.helpers.selenium_helpers import SeleniumHelpers
from goalflow.connectors.locators.google import GoogleLocators
from goalflow.schemas.enums import LogLevel, TaskType
from goalflow.services.query_extractor import FINANCE_STOPWORDS


class FinanceConnector(BaseConnector):
    task_type = TaskType.FINANCE
    default_query = "AAPL"
    stopwords = FINANCE_STOPWORDS
    ready_locators = (GoogleLocators.FINANCE_PRICE,)
    ready_timeout = 15
    hold_seconds = 30
    action_label = "Reading quote"

    def build_url(self, query: str) -> str:
        return GoogleLocators.URL_FINANCE_QUOTE.format(query=quote(query, safe=""))

    async def act(self, driver: WebDriver, helpers: SeleniumHelpers, ctx: WorkflowContext, query: str) -> None:
        quote_data = QUOTE.extract(helpers)
        if not quote_data:
            ctx.result.data["degraded"] = True
            await ctx.log(f"⚠️ No price found for {query}", LogLevel.WARN)
            return
        ctx.result.data["quote"] = quote_data
        label = quote_data.get("name") or query
        await ctx.log(f"📈 {label}: {quote_data['price']}", LogLevel.SUCCESS)
