"""
Data scraping connector.
Collects Google result headings and exports them to scraped_data.csv.
"""

from pathlib import Path
from typing import List, Optional
from urllib.parse import quote

from selenium.webdriver.remote.webdriver import WebDriver

from goalflow.connectors.base import BaseConnector, WorkflowContext
from goalflow.connectors.extractors import HEADINGS, MAX_RESULTS
from goalflow.connectors.helpers.selenium_helpers import SeleniumHelpers
from goalflow.connectors.locators.google import GoogleLocators
from goalflow.schemas.enums import LogLevel, TaskType
from goalflow.schemas.messages import Artifact
from goalflow.services.file_manager import FileManager, SCRAPED_CSV, SCRAPED_HEADER
from goalflow.services.query_extractor import SCRAPER_STOPWORDS


class ScraperConnector(BaseConnector):
    task_type = TaskType.SCRAPER
    default_query = "AI tools"
    stopwords = SCRAPER_STOPWORDS
    ready_locators = (GoogleLocators.RESULTS_CONTAINER,)
    ready_timeout = 15
    captcha_locators = (GoogleLocators.CAPTCHA,)
    hold_seconds = 30
    action_label = "Scraping data sources"

    def build_url(self, query: str) -> str:
        return GoogleLocators.URL_SEARCH.format(query=quote(query, safe=""))

    async def act(self, driver: WebDriver, helpers: SeleniumHelpers, ctx: WorkflowContext, query: str) -> None:
        headings = HEADINGS.extract(helpers, MAX_RESULTS) or []
        ctx.result.data["results"] = headings
        await ctx.log(f"📊 Extracted {len(headings)} results:")
        for i, heading in enumerate(headings, start=1):
            await ctx.log(f"   {i}. {heading}")

        ref = FileManager.write_csv(
            SCRAPED_CSV, SCRAPED_HEADER, [(heading,) for heading in headings], base_dir=ctx.output_dir
        )
        ctx.result.artifacts.append(ref)
        await ctx.log(f"💾 Saved data to: {ref.path}", LogLevel.SUCCESS)

    def placeholder_artifacts(self, query: str, output_dir: Optional[Path] = None) -> List[Artifact]:
        return [FileManager.placeholder_csv(SCRAPED_CSV, SCRAPED_HEADER, base_dir=output_dir)]
