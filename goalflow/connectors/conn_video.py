"""
Video connector: YouTube search results.
"""

from urllib.parse import quote

from selenium.webdriver.remote.webdriver import WebDriver

from goalflow.connectors.base import BaseConnector, WorkflowContext
from goalflow.connectors.extractors import MAX_RESULTS, VIDEOS
from goalflow.connectors.helpers.selenium_helpers import SeleniumHelpers
from goalflow.connectors.locators.youtube import YouTubeLocators
from goalflow.schemas.enums import LogLevel, TaskType
from goalflow.services.query_extractor import VIDEO_STOPWORDS


class VideoConnector(BaseConnector):
    task_type = TaskType.VIDEO
    default_query = "AI tutorials"
    stopwords = VIDEO_STOPWORDS
    ready_locators = (YouTubeLocators.VIDEO_CARDS,)
    ready_timeout = 15
    hold_seconds = 30
    action_label = "Collecting videos"

    def build_url(self, query: str) -> str:
        return YouTubeLocators.URL_SEARCH.format(query=quote(query, safe=""))

    async def act(self, driver: WebDriver, helpers: SeleniumHelpers, ctx: WorkflowContext, query: str) -> None:
        videos = VIDEOS.extract(helpers, MAX_RESULTS) or []
        ctx.result.data["videos"] = [video.model_dump() for video in videos]
        await ctx.log(f"✅ Videos found: {len(videos)}", LogLevel.SUCCESS)
