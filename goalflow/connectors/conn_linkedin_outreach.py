"""
LinkedIn outreach connector: people search for manual messaging.
"""

from urllib.parse import quote

from selenium.webdriver.remote.webdriver import WebDriver

from goalflow.connectors.base import BaseConnector, WorkflowContext
from goalflow.connectors.extractors import MAX_RESULTS, PEOPLE
from goalflow.connectors.helpers.selenium_helpers import SeleniumHelpers
from goalflow.connectors.locators.linkedin import LinkedInLocators
from goalflow.schemas.enums import LogLevel, TaskType
from goalflow.services.query_extractor import OUTREACH_STOPWORDS


class LinkedInOutreachConnector(BaseConnector):
    task_type = TaskType.LINKEDIN_OUTREACH
    default_query = "AI Engineer"
    stopwords = OUTREACH_STOPWORDS
    ready_locators = (LinkedInLocators.PEOPLE_RESULTS,)
    ready_timeout = None
    hold_seconds = 60
    action_label = "Collecting people"

    def build_url(self, query: str) -> str:
        return LinkedInLocators.URL_PEOPLE_SEARCH.format(query=quote(query, safe=""))

    async def act(self, driver: WebDriver, helpers: SeleniumHelpers, ctx: WorkflowContext, query: str) -> None:
        people = PEOPLE.extract(helpers, MAX_RESULTS) or []
        ctx.result.data["people"] = [person.model_dump() for person in people]
        await ctx.log(f"✅ Found {len(people)} people for \"{query}\".", LogLevel.SUCCESS)
