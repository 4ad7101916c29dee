import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, FrozenSet, List, Optional, Sequence, Tuple

from selenium.webdriver.remote.webdriver import WebDriver

from goalflow.config import settings
from goalflow.connectors.helpers.readiness import wait_until_ready
from goalflow.connectors.helpers.selenium_helpers import SESSION_LOST_ERRORS, Locator, SeleniumHelpers
from goalflow.schemas.enums import LogLevel, TaskType, WorkflowState
from goalflow.schemas.messages import Artifact, LogEntry, WorkflowResult
from goalflow.services.query_extractor import query_or_default

logger = logging.getLogger(__name__)

RunLogger = Callable[..., Awaitable[None]]
LogSink = Callable[[LogEntry], None]
SimulatedStep = Tuple[WorkflowState, str, float]

_PY_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.SUCCESS: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


class WorkflowFailed(RuntimeError):
    """A required UI surface never appeared after every retry."""


def make_run_logger(logger, result: WorkflowResult, source: str = "workflow", sink: Optional[LogSink] = None):
    async def log(msg: str, level: LogLevel = LogLevel.INFO):
        logger.log(_PY_LEVELS[level], f"[{source}] {msg}")
        entry = LogEntry(level=level, message=msg, source=source)
        result.log_lines.append(f"[{entry.timestamp.strftime('%H:%M:%S')}] {msg}")
        result.entries.append(entry)
        if sink is not None:
            try:
                sink(entry)
            except Exception:
                logger.exception("Log sink rejected entry")
    return log


@dataclass
class WorkflowContext:
    """Everything a connector needs besides the driver."""
    goal: Optional[str]
    result: WorkflowResult
    log: RunLogger
    output_dir: Optional[Path] = None
    poll_interval: float = field(default_factory=lambda: settings.POLL_INTERVAL_SECONDS)
    hold_seconds: Optional[float] = None
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    clock: Callable[[], float] = time.monotonic


class BaseConnector(ABC):
    """
    Interface that all workflows must implement.

    ``scrape`` walks Idle -> Navigating -> AwaitingReady -> Acting -> Holding
    and ends in Done or Failed. Subclasses describe their surface through the
    class attributes below and implement ``build_url`` and ``act``.
    """

    task_type: TaskType
    default_query: str = ""
    stopwords: FrozenSet[str] = frozenset()
    ready_locators: Tuple[Locator, ...] = ()
    ready_timeout: Optional[float] = None  # None waits until the page is ready
    captcha_locators: Tuple[Locator, ...] = ()
    hold_seconds: float = 30
    action_label: str = "Working"

    @property
    def name(self) -> str:
        return self.task_type.value

    def extract_query(self, goal: Optional[str]) -> str:
        return query_or_default(goal, self.stopwords, self.default_query)

    @abstractmethod
    def build_url(self, query: str) -> str:
        pass

    @abstractmethod
    async def act(self, driver: WebDriver, helpers: SeleniumHelpers, ctx: WorkflowContext, query: str) -> None:
        """Workflow-specific extraction or interaction. Fills ``ctx.result``."""

    # ========== STEPS ==========

    async def goto(self, driver: WebDriver, url: str, ctx: WorkflowContext) -> bool:
        await ctx.log(f"🌐 Navigating to: {url}")
        try:
            await asyncio.to_thread(driver.get, url)
            return True
        except SESSION_LOST_ERRORS:
            raise
        except Exception as e:
            await ctx.log(f"⚠️ Navigation failed: {e}", LogLevel.WARN)
            return False

    async def navigate(self, driver: WebDriver, helpers: SeleniumHelpers, ctx: WorkflowContext, query: str) -> None:
        await self.goto(driver, self.build_url(query), ctx)

    async def wait_for(
        self,
        helpers: SeleniumHelpers,
        ctx: WorkflowContext,
        locators: Sequence[Locator],
        timeout: Optional[float],
        captcha_locators: Sequence[Locator] = (),
    ) -> bool:
        """Poll for any of ``locators``; a CAPTCHA on screen lifts the timeout."""
        def captcha_on_screen() -> bool:
            return bool(captcha_locators) and helpers.is_any_present(captcha_locators)

        async def on_wait(attempt: int):
            if attempt == 1:
                await ctx.log("⏳ Waiting for page content... (log in if needed, the workflow will wait)")
            else:
                logger.debug(f"Still waiting for page content (poll {attempt})")

        async def poll(limit: Optional[float]) -> bool:
            return await wait_until_ready(
                lambda: helpers.is_any_present(locators),
                interval=ctx.poll_interval,
                timeout=limit,
                sleep=ctx.sleep,
                clock=ctx.clock,
                on_wait=on_wait,
            )

        if timeout is not None and captcha_on_screen():
            await ctx.log("⚠️ CAPTCHA detected! Please solve it manually.", LogLevel.WARN)
            timeout = None
        ready = await poll(timeout)
        if not ready and captcha_on_screen():
            await ctx.log("⚠️ CAPTCHA detected! Please solve it manually.", LogLevel.WARN)
            ready = await poll(None)

        if ready:
            await ctx.log("✅ Page content loaded.")
        else:
            await ctx.log(f"⚠️ Page not ready after {timeout:g}s, proceeding anyway", LogLevel.WARN)
        return ready

    async def await_ready(self, helpers: SeleniumHelpers, ctx: WorkflowContext) -> bool:
        if not self.ready_locators:
            return True
        return await self.wait_for(helpers, ctx, self.ready_locators, self.ready_timeout, self.captcha_locators)

    async def hold(self, ctx: WorkflowContext) -> None:
        seconds = ctx.hold_seconds if ctx.hold_seconds is not None else self.hold_seconds
        if seconds <= 0:
            return
        await ctx.log(f"⏳ Keeping browser open for {seconds:g} seconds...")
        await ctx.sleep(seconds)

    # ========== SIMULATION ==========

    def simulated_steps(self, query: str) -> List[SimulatedStep]:
        """(state, message, relative delay) replayed when no browser is available."""
        return [
            (WorkflowState.NAVIGATING, f"🌐 [SIMULATION] Navigating to: {self.build_url(query)}", 1.0),
            (WorkflowState.ACTING, f"⚙️ [SIMULATION] {self.action_label}...", 1.0),
            (WorkflowState.DONE, "✅ [SIMULATION] Action completed", 0.5),
        ]

    def placeholder_artifacts(self, query: str, output_dir: Optional[Path] = None) -> List[Artifact]:
        return []

    # ========== MAIN ==========

    async def _enter(self, ctx: WorkflowContext, state: WorkflowState) -> None:
        ctx.result.state = state
        ctx.result.states.append(state)
        level = LogLevel.ERROR if state == WorkflowState.FAILED else LogLevel.INFO
        await ctx.log(f"➡️ State: {state.value}", level)

    async def scrape(self, driver: WebDriver, ctx: WorkflowContext) -> WorkflowResult:
        result = ctx.result
        result.task_type = self.task_type
        helpers = SeleniumHelpers(driver)
        query = self.extract_query(ctx.goal)
        result.data["query"] = query

        if not result.states:
            await self._enter(ctx, WorkflowState.IDLE)
        try:
            await self._enter(ctx, WorkflowState.NAVIGATING)
            try:
                await self.navigate(driver, helpers, ctx, query)
            except SESSION_LOST_ERRORS:
                raise
            except Exception as e:
                await ctx.log(f"⚠️ Navigation step failed: {e}", LogLevel.WARN)

            await self._enter(ctx, WorkflowState.AWAITING_READY)
            await self.await_ready(helpers, ctx)

            await self._enter(ctx, WorkflowState.ACTING)
            try:
                await self.act(driver, helpers, ctx, query)
            except (WorkflowFailed,) + SESSION_LOST_ERRORS:
                raise
            except Exception as e:
                result.data["degraded"] = True
                await ctx.log(f"⚠️ {self.action_label} step failed: {e}", LogLevel.WARN)

            await self._enter(ctx, WorkflowState.HOLDING)
            await self.hold(ctx)
        except WorkflowFailed as e:
            result.success = False
            result.error = str(e)
            await ctx.log(f"❌ {e}", LogLevel.ERROR)
            await self._enter(ctx, WorkflowState.FAILED)
            return result

        result.success = True
        await self._enter(ctx, WorkflowState.DONE)
        return result
