import logging
from typing import Dict, List, Optional

import pytest

from goalflow.connectors.base import WorkflowContext, make_run_logger
from goalflow.schemas.messages import WorkflowResult


class FakeElement:
    """Stand-in for a WebElement; children are keyed by selector value."""

    def __init__(self, text="", attrs=None, children=None, displayed=True, enabled=True):
        self.text = text
        self.attrs = attrs or {}
        self.children: Dict[str, List["FakeElement"]] = children or {}
        self.displayed = displayed
        self.enabled = enabled
        self.clicks = 0
        self.keys = []

    def find_elements(self, by, value):
        return list(self.children.get(value, []))

    def get_attribute(self, name):
        return self.attrs.get(name)

    def is_displayed(self):
        return self.displayed

    def is_enabled(self):
        return self.enabled

    def click(self):
        self.clicks += 1

    def send_keys(self, *keys):
        self.keys.extend(keys)


class FakeDriver:
    """Stand-in for a WebDriver; page elements are keyed by selector value."""

    def __init__(self, elements=None, get_error: Optional[Exception] = None):
        self.elements: Dict[str, List[FakeElement]] = elements or {}
        self.get_error = get_error
        self.visited = []
        self.scripts = []
        self.session_id = "fake-session"
        self.quit_called = False
        self.page_load_timeout = None

    def set_page_load_timeout(self, seconds):
        self.page_load_timeout = seconds

    def get(self, url):
        self.visited.append(url)
        if self.get_error is not None:
            raise self.get_error

    def find_elements(self, by, value):
        return list(self.elements.get(value, []))

    def execute_script(self, script, *args):
        # No JavaScript engine: extractors fall back to element traversal.
        self.scripts.append(script)
        return None

    def quit(self):
        self.quit_called = True


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeSleep:
    """Records requested delays and advances the fake clock instead of waiting."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)
        self.clock.advance(seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleep(clock):
    return FakeSleep(clock)


@pytest.fixture
def make_ctx(tmp_path, sleep, clock):
    def _make(goal=None, hold_seconds=None, poll_interval=3.0):
        result = WorkflowResult(goal=goal)
        return WorkflowContext(
            goal=goal,
            result=result,
            log=make_run_logger(logging.getLogger("tests"), result),
            output_dir=tmp_path,
            poll_interval=poll_interval,
            hold_seconds=hold_seconds,
            sleep=sleep,
            clock=clock,
        )
    return _make
