import asyncio

import pytest
from selenium.common.exceptions import InvalidSessionIdException, TimeoutException
from selenium.webdriver.common.keys import Keys

from conftest import FakeDriver, FakeElement
from goalflow.connectors import conn_job_scraper
from goalflow.connectors.actions.google_actions import GoogleActions
from goalflow.connectors.conn_finance import FinanceConnector
from goalflow.connectors.conn_job_scraper import JobScraperConnector
from goalflow.connectors.conn_linkedin_engage import LinkedInEngageConnector
from goalflow.connectors.conn_linkedin_post import LinkedInPostConnector, TOPIC_FALLBACK_RESULTS
from goalflow.connectors.conn_research import ResearchConnector
from goalflow.connectors.conn_scraper import ScraperConnector
from goalflow.connectors.helpers.selenium_helpers import SeleniumHelpers
from goalflow.connectors.locators.google import GoogleLocators
from goalflow.connectors.registry import ConnectorRegistry
from goalflow.schemas.enums import TaskType, WorkflowState
from goalflow.schemas.messages import ComposedText, FileRef

FULL_RUN = [
    WorkflowState.IDLE,
    WorkflowState.NAVIGATING,
    WorkflowState.AWAITING_READY,
    WorkflowState.ACTING,
    WorkflowState.HOLDING,
    WorkflowState.DONE,
]

GOOGLE_RESULTS = "#search, #rso"
START_POST = "button.share-box-feed-entry__trigger"
EDITOR = ".ql-editor, .share-creation-state__text-editor, div[role='textbox']"


def _job_card(title, company, location, link):
    return FakeElement(children={
        ".base-search-card__title": [FakeElement(title)],
        ".base-search-card__subtitle": [FakeElement(company)],
        ".job-search-card__location": [FakeElement(location)],
        "a.base-card__full-link": [FakeElement(attrs={"href": link})],
    })


def _jobs_page():
    return FakeDriver({
        ".jobs-search__results-list": [FakeElement()],
        ".jobs-search__results-list li": [
            _job_card("ML Engineer", "Acme", "Remote", "https://jobs/1"),
            _job_card("AI Engineer", "Globex", "Berlin", "https://jobs/2"),
        ],
    })


def _composer_page(editor=None, post_button=None):
    elements = {
        GOOGLE_RESULTS: [FakeElement()],
        START_POST: [FakeElement()],
    }
    if editor is not None:
        elements[EDITOR] = [editor]
    if post_button is not None:
        elements["button"] = [post_button]
    return FakeDriver(elements)


def test_job_scraper_walks_every_state_and_writes_csv(make_ctx, sleep, tmp_path):
    driver = _jobs_page()
    ctx = make_ctx("find AI Engineer jobs")

    result = asyncio.run(JobScraperConnector().scrape(driver, ctx))

    assert result.success
    assert result.states == FULL_RUN
    assert result.state == WorkflowState.DONE
    assert driver.visited == ["https://www.linkedin.com/jobs/search?keywords=AI%20Engineer&location=Worldwide"]
    assert [job["title"] for job in result.data["jobs"]] == ["ML Engineer", "AI Engineer"]
    assert sleep.calls == [2, 30]

    (ref,) = result.artifacts
    assert isinstance(ref, FileRef) and ref.written and ref.rows == 2
    assert (tmp_path / "jobs.csv").read_text(encoding="utf-8") == (
        "Title,Company,Location,Link\n"
        '"ML Engineer","Acme","Remote","https://jobs/1"\n'
        '"AI Engineer","Globex","Berlin","https://jobs/2"'
    )


def test_bounded_wait_proceeds_when_page_never_loads(make_ctx, sleep, tmp_path):
    ctx = make_ctx("find AI Engineer jobs", hold_seconds=0)

    result = asyncio.run(JobScraperConnector().scrape(FakeDriver(), ctx))

    assert result.success
    assert result.states == FULL_RUN
    assert sleep.calls == [3, 3, 3, 3, 2]
    assert any("Page not ready after 10s" in line for line in result.log_lines)
    assert result.data["jobs"] == []
    assert result.artifacts == []
    assert not (tmp_path / "jobs.csv").exists()


def test_failed_extraction_degrades_instead_of_failing(make_ctx, monkeypatch):
    class Broken:
        def extract(self, helpers, limit):
            raise RuntimeError("layout changed")

    monkeypatch.setattr(conn_job_scraper, "JOBS", Broken())
    ctx = make_ctx("find AI Engineer jobs", hold_seconds=0)

    result = asyncio.run(JobScraperConnector().scrape(_jobs_page(), ctx))

    assert result.success
    assert result.states == FULL_RUN
    assert result.data["degraded"] is True
    assert any("layout changed" in line for line in result.log_lines)


def test_lost_session_propagates_out_of_scrape(make_ctx):
    driver = FakeDriver(get_error=InvalidSessionIdException("gone"))

    with pytest.raises(InvalidSessionIdException):
        asyncio.run(JobScraperConnector().scrape(driver, make_ctx("find jobs")))


def test_scraper_writes_csv_even_without_results(make_ctx, tmp_path):
    driver = FakeDriver(get_error=TimeoutException("page load timeout"))
    ctx = make_ctx("scrape data about robots", hold_seconds=0)

    result = asyncio.run(ScraperConnector().scrape(driver, ctx))

    assert result.success
    assert result.data["results"] == []
    assert any("Navigation failed" in line for line in result.log_lines)
    (ref,) = result.artifacts
    assert ref.rows == 0
    assert (tmp_path / "scraped_data.csv").read_text(encoding="utf-8") == "Result"


def test_captcha_turns_bounded_wait_into_unbounded(make_ctx):
    driver = FakeDriver({
        "iframe[src*='recaptcha'], #captcha-form, .g-recaptcha": [FakeElement()],
        "#search h3, #rso h3": [FakeElement("Robots are here")],
    })
    calls = []

    async def page_appears_late(seconds):
        calls.append(seconds)
        if len(calls) == 10:
            driver.elements[GOOGLE_RESULTS] = [FakeElement()]

    ctx = make_ctx("scrape data about robots", hold_seconds=0)
    ctx.sleep = page_appears_late

    result = asyncio.run(ScraperConnector().scrape(driver, ctx))

    assert calls == [3] * 10
    assert any("CAPTCHA detected" in line for line in result.log_lines)
    assert any("Page content loaded" in line for line in result.log_lines)
    assert result.data["results"] == ["Robots are here"]


def test_engage_opens_hashtag_feed(make_ctx, sleep):
    driver = FakeDriver({".feed-shared-update-v2, .occludable-update, article": [FakeElement()] * 3})
    ctx = make_ctx("comment on #OpenClaw posts", hold_seconds=0)

    result = asyncio.run(LinkedInEngageConnector().scrape(driver, ctx))

    assert driver.visited == ["https://www.linkedin.com/feed/hashtag/openclaw/"]
    assert result.data["posts_found"] == 3
    assert sleep.calls == [1.5, 1.5, 1.5]


def test_engage_defaults_to_openclaw_hashtag():
    assert LinkedInEngageConnector().extract_query("engage with the community") == "#openclaw"


def test_post_fails_when_editor_never_appears(make_ctx):
    ctx = make_ctx(None, hold_seconds=0)

    result = asyncio.run(LinkedInPostConnector().scrape(_composer_page(), ctx))

    assert not result.success
    assert result.state == WorkflowState.FAILED
    assert result.states[-1] == WorkflowState.FAILED
    assert WorkflowState.HOLDING not in result.states
    assert result.error == "Could not find post editor textbox"
    assert isinstance(result.artifacts[0], ComposedText)


def test_post_without_submit_button_is_done_with_warning(make_ctx):
    editor = FakeElement()
    ctx = make_ctx(None, hold_seconds=0)

    result = asyncio.run(LinkedInPostConnector().scrape(_composer_page(editor=editor), ctx))

    assert result.success
    assert result.state == WorkflowState.DONE
    assert result.data["posted"] is False
    assert any("Post button not found" in line for line in result.log_lines)
    (post,) = result.artifacts
    assert editor.keys == [post.text]


def test_trending_post_uses_fallback_topics(make_ctx):
    button = FakeElement("Post")
    driver = _composer_page(editor=FakeElement(), post_button=button)
    ctx = make_ctx("post", hold_seconds=0)

    result = asyncio.run(LinkedInPostConnector().scrape(driver, ctx))

    assert result.success
    assert result.data["posted"] is True
    assert button.clicks == 1
    assert driver.visited[0].startswith("https://www.google.com/search?q=latest%20technology%20trends")
    assert driver.visited[-1] == "https://www.linkedin.com/feed/"
    (post,) = result.artifacts
    assert post.topic == "Technology Trends"
    assert TOPIC_FALLBACK_RESULTS[0].title in post.text


def test_person_goal_researches_profile(make_ctx):
    editor = FakeElement()
    driver = _composer_page(editor=editor, post_button=FakeElement("Post"))
    profile_link = (
        ".entity-result__title-text a, "
        ".app-aware-link[href*='/in/'], "
        "a[href*='/in/'][class*='app-aware'], "
        ".reusable-search__result-container a[href*='/in/']"
    )
    link = FakeElement(attrs={"href": "https://www.linkedin.com/in/satya"})
    driver.elements.update({
        ".search-results-container, .reusable-search__result-container": [FakeElement()],
        profile_link: [link],
        "h1": [FakeElement("Satya Nadella")],
        ".text-body-medium": [FakeElement("Chairman and CEO at Microsoft")],
    })
    ctx = make_ctx("Create a post about Satya Nadella achievements", hold_seconds=0)

    result = asyncio.run(LinkedInPostConnector().scrape(driver, ctx))

    assert result.success
    assert driver.visited[0] == "https://www.linkedin.com/search/results/people/?keywords=Satya%20Nadella"
    assert link.clicks == 1
    assert result.data["research"] == "linkedin"
    assert result.data["post_kind"] == "profile"
    (post,) = result.artifacts
    assert post.topic is None
    assert post.text.startswith("🌟 Feature Spotlight: Satya Nadella | Chairman and CEO at Microsoft")
    assert editor.keys == [post.text]


def test_registry_has_a_connector_for_every_task_type():
    for task_type in TaskType:
        connector = ConnectorRegistry.get_connector(task_type)
        assert connector.task_type == task_type
        assert ConnectorRegistry.get_connector(task_type.value) is not connector


def test_registry_rejects_unknown_names():
    with pytest.raises(ValueError):
        ConnectorRegistry.get_connector("fax_machine")


def test_research_types_query_into_google(make_ctx):
    box = FakeElement()
    driver = FakeDriver({"textarea[name='q'], input[name='q']": [box], GOOGLE_RESULTS: [FakeElement()]})

    result = asyncio.run(ResearchConnector().scrape(driver, make_ctx("plan my trip to Japan", hold_seconds=0)))

    assert result.success
    assert driver.visited == ["https://www.google.com"]
    assert box.keys[-2:] == ["plan my trip to Japan", Keys.ENTER]
    assert result.data["results"] == []


def test_finance_without_price_is_degraded(make_ctx):
    ctx = make_ctx("check TSLA stock price", hold_seconds=0)

    result = asyncio.run(FinanceConnector().scrape(FakeDriver(), ctx))

    assert result.success
    assert result.data["degraded"] is True
    assert "quote" not in result.data


def test_google_actions_work_through_helpers(make_ctx, sleep):
    box = FakeElement()
    driver = FakeDriver({"textarea[name='q'], input[name='q']": [box]})
    ctx = make_ctx(None)
    actions = GoogleActions(SeleniumHelpers(driver), GoogleLocators(), ctx.log, sleep=ctx.sleep)

    assert asyncio.run(actions.type_search("robots"))
    asyncio.run(actions.scroll_results())

    assert box.keys[-2:] == ["robots", Keys.ENTER]
    assert driver.scripts == ["window.scrollBy(0, window.innerHeight);"]
    assert sleep.calls == [2]

    driver.elements.clear()
    assert not asyncio.run(actions.type_search("robots"))
    assert any("Search box not found" in line for line in ctx.result.log_lines)
