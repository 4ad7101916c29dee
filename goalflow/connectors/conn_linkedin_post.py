"""
LinkedIn posting connector.

Researches the goal's subject (a LinkedIn profile for a person, Google for a
topic), composes a post from whatever was found and types it into the
LinkedIn composer.
"""

import re
from pathlib import Path
from typing import List, Optional, Tuple
from urllib.parse import quote

from selenium.webdriver.remote.webdriver import WebDriver

from goalflow.connectors.actions.linkedin_actions import LinkedInActions
from goalflow.connectors.base import BaseConnector, SimulatedStep, WorkflowContext, WorkflowFailed
from goalflow.connectors.extractors import MAX_POST_RESULTS, PROFILE, SEARCH_RESULTS
from goalflow.connectors.helpers.selenium_helpers import SESSION_LOST_ERRORS, SeleniumHelpers
from goalflow.connectors.locators.google import GoogleLocators
from goalflow.connectors.locators.linkedin import LinkedInLocators
from goalflow.schemas.enums import LogLevel, TaskType, WorkflowState
from goalflow.schemas.messages import Artifact, ComposedText, ProfileRecord, SearchResult
from goalflow.services.content_composer import DEFAULT_TOPIC, compose
from goalflow.services.query_extractor import POST_STOPWORDS, extract_query

# A goal made of a single generic word is a plain "post something trending" request.
GENERIC_GOAL = re.compile(r"^(post|trending|linkedin|publish|write|content)\s*$")
TOPIC_REQUEST = re.compile(
    r"\b(trending|news|update|topic|industry|tech|ai|genai|gadgets|software|development"
    r"|coding|future|insights|market|summary)\b",
    re.IGNORECASE,
)
TRENDING_QUERY = "latest technology trends and news insights"
GOOGLE_READY_TIMEOUT = 15

TOPIC_FALLBACK_RESULTS: Tuple[SearchResult, ...] = (
    SearchResult(title="AI Agents Revolution", snippet="Autonomous AI agents are transforming productivity in 2025."),
    SearchResult(title="Generative AI in Enterprise", snippet="Businesses are rapidly adopting GenAI for custom workflows."),
    SearchResult(title="Sustainable Tech Growth", snippet="Green technology and renewable energy sectors are booming."),
    SearchResult(title="Cybersecurity Priorities", snippet="Zero-trust architecture remains critical for digital safety."),
    SearchResult(title="Future of Coding", snippet="AI-assisted development is accelerating software delivery."),
)
EMERGENCY_RESULTS: Tuple[SearchResult, ...] = (
    SearchResult(title="AI Trends 2025", snippet="Artificial Intelligence is evolving rapidly with agents."),
    SearchResult(title="Tech Innovation", snippet="New breakthroughs in quantum computing and automation."),
)


def is_custom_goal(goal: Optional[str]) -> bool:
    if not goal or not goal.strip():
        return False
    return not GENERIC_GOAL.match(goal.strip().lower())


def searches_people(goal: Optional[str], query: str) -> bool:
    """A custom subject that does not read like a topic is treated as a person."""
    return bool(query) and not TOPIC_REQUEST.search(goal or "")


class LinkedInPostConnector(BaseConnector):
    task_type = TaskType.LINKEDIN_POST
    stopwords = POST_STOPWORDS
    ready_timeout = None
    hold_seconds = 30
    action_label = "Drafting post"

    def __init__(self):
        self._people_search = False
        self._navigated = False

    def extract_query(self, goal: Optional[str]) -> str:
        if not is_custom_goal(goal):
            return ""
        return extract_query(goal, self.stopwords)

    def _google_url(self, query: str) -> str:
        return GoogleLocators.URL_SEARCH.format(query=quote(query or TRENDING_QUERY, safe=""))

    def build_url(self, query: str) -> str:
        if self._people_search:
            return LinkedInLocators.URL_PEOPLE_SEARCH.format(query=quote(query, safe=""))
        return self._google_url(query)

    # ========== RESEARCH ==========

    async def navigate(self, driver: WebDriver, helpers: SeleniumHelpers, ctx: WorkflowContext, query: str) -> None:
        self._people_search = searches_people(ctx.goal, query)
        ctx.result.data["research"] = "linkedin" if self._people_search else "google"
        if query:
            await ctx.log(f"🔎 Clean search query: \"{query}\"")
        self._navigated = await self.goto(driver, self.build_url(query), ctx)

    async def await_ready(self, helpers: SeleniumHelpers, ctx: WorkflowContext) -> bool:
        if not self._navigated:
            return False
        if self._people_search:
            return await self.wait_for(
                helpers, ctx, (LinkedInLocators.PEOPLE_RESULTS, LinkedInLocators.PEOPLE_RESULT_ENTITY), None
            )
        return await self._wait_for_google(helpers, ctx)

    async def _wait_for_google(self, helpers: SeleniumHelpers, ctx: WorkflowContext) -> bool:
        return await self.wait_for(
            helpers,
            ctx,
            (GoogleLocators.RESULTS_CONTAINER, GoogleLocators.RESULT_BLOCK),
            GOOGLE_READY_TIMEOUT,
            (GoogleLocators.CAPTCHA,),
        )

    async def _research_profile(
        self, actions: LinkedInActions, helpers: SeleniumHelpers, ctx: WorkflowContext
    ) -> Optional[ProfileRecord]:
        try:
            await ctx.sleep(2)
            if await actions.open_first_profile() is None:
                return None
            await actions.load_profile_sections()
            await actions.expand_hidden_content()
            await ctx.log("📋 Extracting detailed profile information...")
            profile = PROFILE.extract(helpers)
        except SESSION_LOST_ERRORS:
            raise
        except Exception as e:
            await ctx.log(f"⚠️ Profile visit failed: {e}", LogLevel.WARN)
            return None

        if profile is None:
            await ctx.log("⚠️ Profile could not be read. Will use search result data.", LogLevel.WARN)
            return None
        ctx.result.data["profile"] = profile.model_dump()
        await ctx.log(f"👤 Name: {profile.name}")
        if profile.headline:
            await ctx.log(f"💼 Headline: {profile.headline}")
        return profile

    async def _research_topic(
        self, driver: WebDriver, helpers: SeleniumHelpers, ctx: WorkflowContext, query: str
    ) -> List[SearchResult]:
        if not self._navigated or self._people_search:
            await ctx.log(f"🔍 Searching Google for \"{query or TRENDING_QUERY}\"...")
            if not await self.goto(driver, self._google_url(query), ctx):
                await ctx.log("⚠️ Google search failed. Using emergency topics.", LogLevel.WARN)
                return list(EMERGENCY_RESULTS)
            await self._wait_for_google(helpers, ctx)

        await ctx.sleep(2)
        results = SEARCH_RESULTS.extract(helpers, MAX_POST_RESULTS) or []
        if not results:
            await ctx.log("⚠️ Extracted 0 results. Using fallback topics.", LogLevel.WARN)
            return list(TOPIC_FALLBACK_RESULTS)
        await ctx.log(f"✅ Found {len(results)} relevant topic results.")
        return results

    # ========== PUBLISH ==========

    async def _publish(
        self, driver: WebDriver, helpers: SeleniumHelpers, actions: LinkedInActions, ctx: WorkflowContext, text: str
    ) -> None:
        await ctx.log("🌐 Navigating to LinkedIn Feed to post...")
        await self.goto(driver, LinkedInLocators.URL_FEED, ctx)
        await self.wait_for(helpers, ctx, LinkedInLocators.START_POST_BUTTONS, None)

        await actions.open_composer()
        editor = await actions.find_editor()
        if editor is None:
            raise WorkflowFailed("Could not find post editor textbox")

        await actions.type_post(editor, text)
        if await actions.submit_post():
            ctx.result.data["posted"] = True
            await ctx.log("🎉 Post action executed!", LogLevel.SUCCESS)
        else:
            ctx.result.data["posted"] = False
            await ctx.log("⚠️ Post button not found. Leaving the composer open for manual completion.", LogLevel.WARN)

    async def act(self, driver: WebDriver, helpers: SeleniumHelpers, ctx: WorkflowContext, query: str) -> None:
        actions = LinkedInActions(helpers, LinkedInLocators(), ctx.log, sleep=ctx.sleep)

        profile = None
        if self._people_search and self._navigated:
            profile = await self._research_profile(actions, helpers, ctx)
        results: List[SearchResult] = []
        if profile is None:
            results = await self._research_topic(driver, helpers, ctx, query)

        topic = query or DEFAULT_TOPIC
        text = compose(profile, results, fallback_topic=topic)
        ctx.result.artifacts.append(ComposedText(text=text, topic=None if profile else topic))
        ctx.result.data["post_kind"] = "profile" if profile else "topic"
        await ctx.log(f"📝 Composed {ctx.result.data['post_kind']} post ({len(text)} chars).")

        await self._publish(driver, helpers, actions, ctx, text)

    # ========== SIMULATION ==========

    def simulated_steps(self, query: str) -> List[SimulatedStep]:
        return [
            (WorkflowState.NAVIGATING, "🌐 [SIMULATION] Navigating to LinkedIn...", 1.0),
            (WorkflowState.ACTING, "✍️ [SIMULATION] Drafting post...", 1.0),
            (WorkflowState.DONE, "✅ [SIMULATION] Action completed", 0.5),
        ]

    def placeholder_artifacts(self, query: str, output_dir: Optional[Path] = None) -> List[Artifact]:
        return [ComposedText(text=compose(None, []))]
