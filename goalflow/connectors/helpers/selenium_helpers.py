from selenium.common.exceptions import (
    InvalidSessionIdException,
    NoSuchWindowException,
    WebDriverException,
)
from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys
from typing import Iterable, Optional, Sequence, Tuple

Locator = Tuple[str, str]

# The browser went away; polling or retrying cannot recover from these.
SESSION_LOST_ERRORS = (InvalidSessionIdException, NoSuchWindowException)


class SeleniumHelpers:
    def __init__(self, driver):
        self.driver = driver

    def find_all(self, locator: Locator, root=None) -> list:
        """find_elements that treats a flaky DOM as 'nothing found'."""
        scope = root if root is not None else self.driver
        try:
            return list(scope.find_elements(*locator))
        except SESSION_LOST_ERRORS:
            raise
        except WebDriverException:
            return []

    def first_present(self, locators: Iterable[Locator], root=None):
        for locator in locators:
            elements = self.find_all(locator, root=root)
            if elements:
                return elements[0]
        return None

    def is_any_present(self, locators: Iterable[Locator]) -> bool:
        return self.first_present(locators) is not None

    def text_of(self, root, locator: Locator, index: int = 0) -> str:
        elements = self.find_all(locator, root=root)
        if len(elements) <= index:
            return ""
        try:
            return (elements[index].text or "").strip()
        except SESSION_LOST_ERRORS:
            raise
        except WebDriverException:
            return ""

    def attribute_of(self, root, locator: Locator, name: str) -> str:
        element = self.first_present([locator], root=root)
        if element is None:
            return ""
        try:
            return (element.get_attribute(name) or "").strip()
        except SESSION_LOST_ERRORS:
            raise
        except WebDriverException:
            return ""

    def click_first(self, locators: Sequence[Locator]) -> bool:
        """Click the first displayed, enabled element among ``locators``."""
        for locator in locators:
            for element in self.find_all(locator):
                try:
                    if element.is_displayed() and element.is_enabled():
                        element.click()
                        return True
                except SESSION_LOST_ERRORS:
                    raise
                except WebDriverException:
                    continue
        return False

    def click_button_with_text(self, text: str, exact: bool = False) -> bool:
        """Click the first enabled button whose visible text matches ``text``."""
        for button in self.find_all((By.TAG_NAME, "button")):
            try:
                label = (button.text or "").strip()
                matched = label == text if exact else text in label
                if matched and button.is_enabled():
                    button.click()
                    return True
            except SESSION_LOST_ERRORS:
                raise
            except WebDriverException:
                continue
        return False

    def click_all(self, locator: Locator) -> int:
        clicked = 0
        for element in self.find_all(locator):
            try:
                element.click()
                clicked += 1
            except SESSION_LOST_ERRORS:
                raise
            except WebDriverException:
                continue
        return clicked

    def scroll_by(self, pixels: Optional[int] = None) -> None:
        if pixels is None:
            self.driver.execute_script("window.scrollBy(0, window.innerHeight);")
        else:
            self.driver.execute_script("window.scrollBy(0, arguments[0]);", pixels)

    def scroll_to_top(self) -> None:
        self.driver.execute_script("window.scrollTo(0, 0);")

    def insert_text(self, element, text: str) -> None:
        """
        Type ``text`` into a contenteditable or input element.
        ChromeDriver's send_keys rejects characters outside the BMP (emoji),
        so the text is inserted through the editing API first.
        """
        element.click()
        inserted = self.driver.execute_script(
            """
            const el = arguments[0];
            const text = arguments[1];
            el.focus();
            return document.execCommand('insertText', false, text);
            """,
            element,
            text,
        )
        if not inserted:
            element.send_keys(text)

    def submit_search(self, element, text: str) -> None:
        element.click()
        element.send_keys(Keys.CONTROL, "a")
        element.send_keys(Keys.BACKSPACE)
        element.send_keys(text)
        element.send_keys(Keys.ENTER)
