from dataclasses import dataclass
from selenium.webdriver.common.by import By


@dataclass(frozen=True)
class GoogleLocators:
    """Locators for Google web search, news and finance."""

    URL_HOME = "https://www.google.com"
    URL_SEARCH = "https://www.google.com/search?q={query}"
    URL_NEWS = "https://www.google.com/search?q={query}&tbm=nws"
    URL_FINANCE_QUOTE = "https://www.google.com/finance/quote/{query}"

    # Search
    SEARCH_BOX = (By.CSS_SELECTOR, "textarea[name='q'], input[name='q']")
    RESULTS_CONTAINER = (By.CSS_SELECTOR, "#search, #rso")
    RESULT_BLOCK = (By.CSS_SELECTOR, "#search .g, #rso .g")
    RESULT_HEADINGS = (By.CSS_SELECTOR, "#search h3, #rso h3")
    RESULT_TITLE = (By.TAG_NAME, "h3")
    RESULT_SNIPPET = (By.CSS_SELECTOR, ".VwiC3b, .IsZvec, .st")
    RESULT_LINK = (By.TAG_NAME, "a")

    # CAPTCHA interstitial
    CAPTCHA = (By.CSS_SELECTOR, "iframe[src*='recaptcha'], #captcha-form, .g-recaptcha")

    # News (tbm=nws)
    NEWS_CARDS = (By.CSS_SELECTOR, "#search .SoaBEf, #rso .SoaBEf, #search div.dbsr")
    NEWS_TITLE = (By.CSS_SELECTOR, "[role='heading'], .n0jPhd, h3")
    NEWS_SNIPPET = (By.CSS_SELECTOR, ".GI74Re, .Y3v8qd")
    NEWS_SOURCE = (By.CSS_SELECTOR, ".MgUUmf, .NUnG9d")

    # Finance quote
    FINANCE_PRICE = (By.CSS_SELECTOR, "div.YMlKec.fxKbKc, .YMlKec")
    FINANCE_NAME = (By.CSS_SELECTOR, "div.zzDege, h1")
