from dataclasses import dataclass
from selenium.webdriver.common.by import By


@dataclass(frozen=True)
class LinkedInLocators:
    """Locators for the LinkedIn surfaces (jobs, feed, people search, profile)."""

    URL_JOBS_SEARCH = "https://www.linkedin.com/jobs/search?keywords={query}&location=Worldwide"
    URL_HASHTAG_FEED = "https://www.linkedin.com/feed/hashtag/{tag}/"
    URL_PEOPLE_SEARCH = "https://www.linkedin.com/search/results/people/?keywords={query}"
    URL_FEED = "https://www.linkedin.com/feed/"

    # Jobs search (public page)
    JOBS_RESULTS_LIST = (By.CSS_SELECTOR, ".jobs-search__results-list")
    JOB_CARDS = (By.CSS_SELECTOR, ".jobs-search__results-list li")
    JOB_TITLE = (By.CSS_SELECTOR, ".base-search-card__title")
    JOB_COMPANY = (By.CSS_SELECTOR, ".base-search-card__subtitle")
    JOB_LOCATION = (By.CSS_SELECTOR, ".job-search-card__location")
    JOB_LINK = (By.CSS_SELECTOR, "a.base-card__full-link")

    # Hashtag feed
    FEED_POSTS = (By.CSS_SELECTOR, ".feed-shared-update-v2, .occludable-update, article")

    # People search
    PEOPLE_RESULTS = (By.CSS_SELECTOR, ".search-results-container, .reusable-search__result-container")
    PEOPLE_RESULT_ENTITY = (By.CSS_SELECTOR, ".entity-result, [data-chameleon-result-urn]")
    PEOPLE_RESULT_CARDS = (By.CSS_SELECTOR, ".reusable-search__result-container, .entity-result")
    PEOPLE_RESULT_NAME = (By.CSS_SELECTOR, ".entity-result__title-text a span[aria-hidden='true']")
    PEOPLE_RESULT_HEADLINE = (By.CSS_SELECTOR, ".entity-result__primary-subtitle")
    PROFILE_LINKS = (
        By.CSS_SELECTOR,
        ".entity-result__title-text a, "
        ".app-aware-link[href*='/in/'], "
        "a[href*='/in/'][class*='app-aware'], "
        ".reusable-search__result-container a[href*='/in/']",
    )

    # Profile page
    PROFILE_NAME = (By.TAG_NAME, "h1")
    PROFILE_HEADLINE = (By.CSS_SELECTOR, ".text-body-medium")
    PROFILE_LOCATION = (By.CSS_SELECTOR, ".text-body-small[class*='break-words']")
    PROFILE_CONNECTIONS = (By.CSS_SELECTOR, ".t-bold[class*='link']")
    PROFILE_ABOUT = (By.CSS_SELECTOR, "#about ~ div .inline-show-more-text, #about + div + div span[aria-hidden='true']")
    SEE_MORE_BUTTONS = (
        By.CSS_SELECTOR,
        "button.inline-show-more-text__button, [aria-label*='see more'], [aria-label*='Show more']",
    )
    EXPERIENCE_SECTION = (By.XPATH, "//*[@id='experience']/ancestor::section[1]")
    SKILLS_SECTION = (By.XPATH, "//*[@id='skills']/ancestor::section[1]")
    EDUCATION_SECTION = (By.XPATH, "//*[@id='education']/ancestor::section[1]")
    CERTIFICATIONS_SECTION = (By.XPATH, "//*[@id='licenses_and_certifications']/ancestor::section[1]")
    SECTION_ITEMS = (By.CSS_SELECTOR, "li.artdeco-list__item")
    SECTION_ANY_ITEMS = (By.TAG_NAME, "li")
    ITEM_BOLD = (By.CSS_SELECTOR, ".t-bold span[aria-hidden='true']")
    ITEM_NORMAL = (By.CSS_SELECTOR, ".t-normal span[aria-hidden='true']")
    ITEM_DESCRIPTION = (By.CSS_SELECTOR, ".inline-show-more-text span[aria-hidden='true']")
    ITEM_SPANS = (By.CSS_SELECTOR, "li span[aria-hidden='true']")

    # Post composer
    START_POST_BUTTONS = (
        (By.CSS_SELECTOR, "button.share-box-feed-entry__trigger"),
        (By.CSS_SELECTOR, ".share-box-feed-entry__trigger"),
        (By.XPATH, "//button[.//span[normalize-space()='Start a post']]"),
    )
    START_POST_TEXT = "Start a post"
    POST_EDITOR = (By.CSS_SELECTOR, ".ql-editor, .share-creation-state__text-editor, div[role='textbox']")
    POST_SUBMIT_TEXT = "Post"
