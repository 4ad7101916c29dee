"""
Page extractors.
Each Extractor holds an ordered list of strategies: a JavaScript snapshot of
the page first, then a traversal of WebElements. The first strategy that
returns something non-empty wins; a strategy that raises is skipped.
"""

import logging
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar

from goalflow.connectors.helpers.selenium_helpers import SESSION_LOST_ERRORS, SeleniumHelpers
from goalflow.connectors.locators.google import GoogleLocators
from goalflow.connectors.locators.linkedin import LinkedInLocators
from goalflow.connectors.locators.youtube import YouTubeLocators
from goalflow.schemas.messages import (
    Certification,
    Education,
    Experience,
    JobRecord,
    ProfileRecord,
    SearchResult,
    UNKNOWN_NAME,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
Strategy = Callable[[SeleniumHelpers, int], Optional[T]]

MAX_JOBS = 15
MAX_RESULTS = 10
MAX_POST_RESULTS = 5
MAX_EXPERIENCES = 10
MAX_PROFILE_SKILLS = 20
MAX_EDUCATION = 5
MAX_CERTIFICATIONS = 5
ABOUT_LIMIT = 1500
DESCRIPTION_LIMIT = 600


class Extractor(Generic[T]):
    """Tries each strategy in order until one returns a record."""

    def __init__(self, name: str, strategies: Sequence[Strategy]):
        self.name = name
        self.strategies = tuple(strategies)

    def extract(self, helpers: SeleniumHelpers, limit: int = MAX_RESULTS) -> Optional[T]:
        for strategy in self.strategies:
            try:
                value = strategy(helpers, limit)
            except SESSION_LOST_ERRORS:
                raise
            except Exception as e:
                logger.debug(f"{self.name}: strategy {strategy.__name__} failed: {e}")
                continue
            if value:
                return value
        return None


def _records(raw: Any, model, limit: int) -> list:
    if not isinstance(raw, list):
        return []
    return [model(**item) for item in raw if isinstance(item, dict)][:limit]


# ---- jobs ----

_JOBS_SCRIPT = """
const [cards, titleSel, companySel, locationSel, linkSel, unknown] = arguments;
return Array.from(document.querySelectorAll(cards)).map(item => ({
    title: item.querySelector(titleSel)?.innerText?.trim() || unknown,
    company: item.querySelector(companySel)?.innerText?.trim() || unknown,
    location: item.querySelector(locationSel)?.innerText?.trim() || unknown,
    link: item.querySelector(linkSel)?.href || ''
}));
"""


def _jobs_from_script(helpers: SeleniumHelpers, limit: int) -> List[JobRecord]:
    sel = LinkedInLocators
    raw = helpers.driver.execute_script(
        _JOBS_SCRIPT,
        sel.JOB_CARDS[1], sel.JOB_TITLE[1], sel.JOB_COMPANY[1], sel.JOB_LOCATION[1], sel.JOB_LINK[1],
        UNKNOWN_NAME,
    )
    return _records(raw, JobRecord, limit)


def _jobs_from_elements(helpers: SeleniumHelpers, limit: int) -> List[JobRecord]:
    sel = LinkedInLocators
    jobs = []
    for card in helpers.find_all(sel.JOB_CARDS)[:limit]:
        jobs.append(JobRecord(
            title=helpers.text_of(card, sel.JOB_TITLE) or UNKNOWN_NAME,
            company=helpers.text_of(card, sel.JOB_COMPANY) or UNKNOWN_NAME,
            location=helpers.text_of(card, sel.JOB_LOCATION) or UNKNOWN_NAME,
            link=helpers.attribute_of(card, sel.JOB_LINK, "href"),
        ))
    return jobs


JOBS: Extractor[List[JobRecord]] = Extractor("jobs", [_jobs_from_script, _jobs_from_elements])


# ---- Google results ----

_RESULTS_SCRIPT = """
const [blocks, titleSel, snippetSel] = arguments;
const results = [];
document.querySelectorAll(blocks).forEach(el => {
    const title = el.querySelector(titleSel)?.innerText?.trim();
    const snippet = el.querySelector(snippetSel)?.innerText?.trim();
    const link = el.querySelector('a')?.href;
    if (title && snippet && link) results.push({title, snippet, link});
});
return results;
"""


def _results_from_script(helpers: SeleniumHelpers, limit: int) -> List[SearchResult]:
    sel = GoogleLocators
    raw = helpers.driver.execute_script(
        _RESULTS_SCRIPT, sel.RESULT_BLOCK[1], sel.RESULT_TITLE[1], sel.RESULT_SNIPPET[1]
    )
    return _records(raw, SearchResult, limit)


def _results_from_elements(helpers: SeleniumHelpers, limit: int) -> List[SearchResult]:
    sel = GoogleLocators
    results = []
    for block in helpers.find_all(sel.RESULT_BLOCK):
        title = helpers.text_of(block, sel.RESULT_TITLE)
        snippet = helpers.text_of(block, sel.RESULT_SNIPPET)
        link = helpers.attribute_of(block, sel.RESULT_LINK, "href")
        if title and snippet and link:
            results.append(SearchResult(title=title, snippet=snippet, link=link))
        if len(results) == limit:
            break
    return results


SEARCH_RESULTS: Extractor[List[SearchResult]] = Extractor(
    "search_results", [_results_from_script, _results_from_elements]
)


def _headings_from_elements(helpers: SeleniumHelpers, limit: int) -> List[str]:
    headings = []
    for element in helpers.find_all(GoogleLocators.RESULT_HEADINGS):
        text = (element.text or "").strip()
        if text:
            headings.append(text)
        if len(headings) == limit:
            break
    return headings


HEADINGS: Extractor[List[str]] = Extractor("headings", [_headings_from_elements])


def _news_from_elements(helpers: SeleniumHelpers, limit: int) -> List[SearchResult]:
    sel = GoogleLocators
    items = []
    for card in helpers.find_all(sel.NEWS_CARDS)[:limit]:
        title = helpers.text_of(card, sel.NEWS_TITLE)
        if not title:
            continue
        source = helpers.text_of(card, sel.NEWS_SOURCE)
        snippet = helpers.text_of(card, sel.NEWS_SNIPPET)
        items.append(SearchResult(
            title=title,
            snippet=f"{source}: {snippet}" if source and snippet else (snippet or source),
            link=helpers.attribute_of(card, sel.RESULT_LINK, "href"),
        ))
    return items


def _news_from_headings(helpers: SeleniumHelpers, limit: int) -> List[SearchResult]:
    return [SearchResult(title=text) for text in _headings_from_elements(helpers, limit)]


NEWS: Extractor[List[SearchResult]] = Extractor("news", [_news_from_elements, _news_from_headings])


# ---- YouTube ----

def _videos_from_elements(helpers: SeleniumHelpers, limit: int) -> List[SearchResult]:
    sel = YouTubeLocators
    videos = []
    for card in helpers.find_all(sel.VIDEO_CARDS):
        title = helpers.text_of(card, sel.VIDEO_TITLE) or helpers.attribute_of(card, sel.VIDEO_TITLE, "title")
        if not title:
            continue
        videos.append(SearchResult(
            title=title,
            snippet=helpers.text_of(card, sel.VIDEO_CHANNEL),
            link=helpers.attribute_of(card, sel.VIDEO_TITLE, "href"),
        ))
        if len(videos) == limit:
            break
    return videos


VIDEOS: Extractor[List[SearchResult]] = Extractor("videos", [_videos_from_elements])


# ---- LinkedIn people search ----

def _people_from_elements(helpers: SeleniumHelpers, limit: int) -> List[SearchResult]:
    sel = LinkedInLocators
    people = []
    for card in helpers.find_all(sel.PEOPLE_RESULT_CARDS):
        name = helpers.text_of(card, sel.PEOPLE_RESULT_NAME)
        if not name:
            continue
        people.append(SearchResult(
            title=name,
            snippet=helpers.text_of(card, sel.PEOPLE_RESULT_HEADLINE),
            link=helpers.attribute_of(card, sel.PROFILE_LINKS, "href"),
        ))
        if len(people) == limit:
            break
    return people


PEOPLE: Extractor[List[SearchResult]] = Extractor("people", [_people_from_elements])


# ---- LinkedIn profile ----

_PROFILE_SCRIPT = """
const getText = (s) => document.querySelector(s)?.innerText?.trim() || '';
const span = (root, s) => root.querySelector(s + ' span[aria-hidden="true"]')?.innerText?.trim() || '';
const section = (id) => document.querySelector('#' + id)?.closest('section');
const [unknown, aboutLimit, descLimit] = arguments;

const experiences = [];
const expSec = section('experience');
if (expSec) {
    expSec.querySelectorAll('li.artdeco-list__item, :scope > div > div > div > ul > li').forEach(item => {
        const t = span(item, '.t-bold');
        const normals = item.querySelectorAll('.t-normal span[aria-hidden="true"]');
        const c = normals[0]?.innerText?.trim() || '';
        const d = normals[1]?.innerText?.trim() || '';
        const desc = span(item, '.inline-show-more-text');
        if (t) experiences.push({title: t, company: c, duration: d, description: desc.slice(0, descLimit)});
    });
}
const skills = [];
const skillSec = section('skills');
if (skillSec) {
    skillSec.querySelectorAll('li span[aria-hidden="true"]').forEach(s => {
        const txt = s.innerText?.trim();
        if (txt && txt.length > 1 && !skills.includes(txt)) skills.push(txt);
    });
}
const pairs = (id, a, b) => {
    const out = [];
    const sec = section(id);
    if (sec) {
        sec.querySelectorAll('li').forEach(item => {
            const first = span(item, '.t-bold');
            if (first) out.push({[a]: first, [b]: span(item, '.t-normal')});
        });
    }
    return out;
};
const aboutEl = document.querySelector('#about ~ div .inline-show-more-text, #about + div + div span[aria-hidden="true"]');
return {
    name: getText('h1') || unknown,
    headline: getText('.text-body-medium'),
    location: getText('.text-body-small[class*="break-words"]'),
    connections: getText('.t-bold[class*="link"]'),
    about: (aboutEl?.innerText?.trim() || '').slice(0, aboutLimit),
    experiences: experiences,
    skills: skills,
    education: pairs('education', 'school', 'degree'),
    certifications: pairs('licenses_and_certifications', 'name', 'issuer')
};
"""


def _trim_profile(raw: Dict[str, Any]) -> ProfileRecord:
    profile = ProfileRecord(**raw)
    profile.experiences = profile.experiences[:MAX_EXPERIENCES]
    profile.skills = profile.skills[:MAX_PROFILE_SKILLS]
    profile.education = profile.education[:MAX_EDUCATION]
    profile.certifications = profile.certifications[:MAX_CERTIFICATIONS]
    return profile


def _profile_from_script(helpers: SeleniumHelpers, limit: int) -> Optional[ProfileRecord]:
    raw = helpers.driver.execute_script(_PROFILE_SCRIPT, UNKNOWN_NAME, ABOUT_LIMIT, DESCRIPTION_LIMIT)
    if not isinstance(raw, dict):
        return None
    profile = _trim_profile(raw)
    return profile if profile.is_resolvable() else None


def _section_items(helpers: SeleniumHelpers, section_locator, item_locator=None) -> list:
    section = helpers.first_present([section_locator])
    if section is None:
        return []
    sel = LinkedInLocators
    return helpers.find_all(item_locator or sel.SECTION_ANY_ITEMS, root=section)


def _profile_from_elements(helpers: SeleniumHelpers, limit: int) -> Optional[ProfileRecord]:
    sel = LinkedInLocators
    driver = helpers.driver
    name = helpers.text_of(driver, sel.PROFILE_NAME)
    if not name:
        return None

    experiences = []
    for item in _section_items(helpers, sel.EXPERIENCE_SECTION, sel.SECTION_ITEMS):
        title = helpers.text_of(item, sel.ITEM_BOLD)
        if title:
            experiences.append(Experience(
                title=title,
                company=helpers.text_of(item, sel.ITEM_NORMAL),
                duration=helpers.text_of(item, sel.ITEM_NORMAL, index=1),
                description=helpers.text_of(item, sel.ITEM_DESCRIPTION)[:DESCRIPTION_LIMIT],
            ))

    skills: List[str] = []
    skills_section = helpers.first_present([sel.SKILLS_SECTION])
    if skills_section is not None:
        for element in helpers.find_all(sel.ITEM_SPANS, root=skills_section):
            text = (element.text or "").strip()
            if len(text) > 1 and text not in skills:
                skills.append(text)

    education = [
        Education(school=school, degree=helpers.text_of(item, sel.ITEM_NORMAL))
        for item in _section_items(helpers, sel.EDUCATION_SECTION)
        for school in [helpers.text_of(item, sel.ITEM_BOLD)] if school
    ]
    certifications = [
        Certification(name=cert, issuer=helpers.text_of(item, sel.ITEM_NORMAL))
        for item in _section_items(helpers, sel.CERTIFICATIONS_SECTION)
        for cert in [helpers.text_of(item, sel.ITEM_BOLD)] if cert
    ]

    return _trim_profile({
        "name": name,
        "headline": helpers.text_of(driver, sel.PROFILE_HEADLINE),
        "location": helpers.text_of(driver, sel.PROFILE_LOCATION),
        "connections": helpers.text_of(driver, sel.PROFILE_CONNECTIONS),
        "about": helpers.text_of(driver, sel.PROFILE_ABOUT)[:ABOUT_LIMIT],
        "experiences": experiences,
        "skills": skills,
        "education": education,
        "certifications": certifications,
    })


PROFILE: Extractor[ProfileRecord] = Extractor("profile", [_profile_from_script, _profile_from_elements])


# ---- Google Finance ----

def _quote_from_elements(helpers: SeleniumHelpers, limit: int) -> Dict[str, str]:
    sel = GoogleLocators
    driver = helpers.driver
    price = helpers.text_of(driver, sel.FINANCE_PRICE)
    if not price:
        return {}
    return {"price": price, "name": helpers.text_of(driver, sel.FINANCE_NAME)}


QUOTE: Extractor[Dict[str, str]] = Extractor("quote", [_quote_from_elements])
