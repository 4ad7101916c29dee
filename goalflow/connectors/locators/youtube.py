from dataclasses import dataclass
from selenium.webdriver.common.by import By


@dataclass(frozen=True)
class YouTubeLocators:
    """Locators for YouTube search results."""

    URL_SEARCH = "https://www.youtube.com/results?search_query={query}"

    RESULTS_CONTAINER = (By.CSS_SELECTOR, "ytd-section-list-renderer, #contents")
    VIDEO_CARDS = (By.CSS_SELECTOR, "ytd-video-renderer")
    VIDEO_TITLE = (By.CSS_SELECTOR, "#video-title")
    VIDEO_CHANNEL = (By.CSS_SELECTOR, "#channel-name #text, ytd-channel-name a")
