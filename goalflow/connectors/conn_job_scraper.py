"""
LinkedIn job search connector.
Scrapes the public jobs search page and exports the listings to jobs.csv.
"""

from pathlib import Path
from typing import List, Optional
from urllib.parse import quote

from selenium.webdriver.remote.webdriver import WebDriver

from goalflow.connectors.base import BaseConnector, WorkflowContext
from goalflow.connectors.extractors import JOBS, MAX_JOBS
from goalflow.connectors.helpers.selenium_helpers import SeleniumHelpers
from goalflow.connectors.locators.linkedin import LinkedInLocators
from goalflow.schemas.enums import LogLevel, TaskType
from goalflow.schemas.messages import Artifact
from goalflow.services.file_manager import FileManager, JOBS_CSV, JOBS_HEADER
from goalflow.services.query_extractor import JOB_STOPWORDS


class JobScraperConnector(BaseConnector):
    task_type = TaskType.JOB_SCRAPER
    default_query = "AI Engineer"
    stopwords = JOB_STOPWORDS
    ready_locators = (LinkedInLocators.JOBS_RESULTS_LIST,)
    ready_timeout = 10
    hold_seconds = 30
    action_label = "Scraping job listings"

    def build_url(self, query: str) -> str:
        return LinkedInLocators.URL_JOBS_SEARCH.format(query=quote(query, safe=""))

    async def act(self, driver: WebDriver, helpers: SeleniumHelpers, ctx: WorkflowContext, query: str) -> None:
        await ctx.log("📜 Scrolling through job listings...")
        helpers.scroll_by()
        await ctx.sleep(2)

        jobs = JOBS.extract(helpers, MAX_JOBS) or []
        ctx.result.data["jobs"] = [job.model_dump() for job in jobs]
        await ctx.log(f"✅ Found {len(jobs)} job listings.", LogLevel.SUCCESS)
        if not jobs:
            return

        ref = FileManager.write_csv(
            JOBS_CSV,
            JOBS_HEADER,
            [(job.title, job.company, job.location, job.link) for job in jobs],
            base_dir=ctx.output_dir,
        )
        ctx.result.artifacts.append(ref)
        await ctx.log(f"💾 Saved {ref.rows} jobs to: {ref.path}")

    def placeholder_artifacts(self, query: str, output_dir: Optional[Path] = None) -> List[Artifact]:
        return [FileManager.placeholder_csv(JOBS_CSV, JOBS_HEADER, base_dir=output_dir)]
