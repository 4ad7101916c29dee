"""
Session providers.
A provider hands out a session able to run one connector: a live Selenium
browser, or a simulation that replays the connector's steps as log lines
without touching the outside world.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from goalflow.config import settings
from goalflow.connectors.base import BaseConnector, WorkflowContext
from goalflow.schemas.enums import WorkflowState
from goalflow.schemas.messages import WorkflowResult
from goalflow.worker.executor import SeleniumExecutor, SessionUnavailable

logger = logging.getLogger(__name__)


class Session(ABC):
    simulated: bool = False

    @abstractmethod
    async def run(self, connector: BaseConnector, ctx: WorkflowContext) -> WorkflowResult:
        pass

    async def close(self) -> None:
        pass


class SessionProvider(ABC):
    @abstractmethod
    async def open(self) -> Session:
        """Return a ready session or raise."""


class BrowserSession(Session):
    def __init__(self, executor: SeleniumExecutor):
        self.executor = executor

    async def run(self, connector: BaseConnector, ctx: WorkflowContext) -> WorkflowResult:
        await ctx.log(f"🔌 Connected to browser session: {self.executor.driver.session_id}")
        return await connector.scrape(self.executor.driver, ctx)

    async def close(self) -> None:
        await asyncio.to_thread(self.executor.stop)


class RealSessionProvider(SessionProvider):
    """Starts a Selenium session, giving up after the startup timeout."""

    def __init__(
        self,
        executor_factory: Callable[[], SeleniumExecutor] = SeleniumExecutor,
        startup_timeout: Optional[float] = None,
    ):
        self.executor_factory = executor_factory
        self.startup_timeout = settings.SESSION_STARTUP_TIMEOUT if startup_timeout is None else startup_timeout

    async def open(self) -> Session:
        executor = self.executor_factory()
        try:
            await asyncio.wait_for(asyncio.to_thread(executor.start), self.startup_timeout)
        except asyncio.TimeoutError:
            executor.abandon()
            raise SessionUnavailable(f"Launch timeout after {self.startup_timeout:g}s")
        except asyncio.CancelledError:
            executor.abandon()
            raise
        except SessionUnavailable:
            raise
        except Exception as e:
            executor.abandon()
            raise SessionUnavailable(f"Chrome launch failed: {e}") from e
        return BrowserSession(executor)


class SimulatedSession(Session):
    simulated = True

    def __init__(self, step_delay: float):
        self.step_delay = step_delay

    async def run(self, connector: BaseConnector, ctx: WorkflowContext) -> WorkflowResult:
        result = ctx.result
        result.task_type = connector.task_type
        result.simulated = True
        query = connector.extract_query(ctx.goal)
        result.data["query"] = query

        await ctx.log(f"🧪 [SIMULATION] Executing goal: {ctx.goal or '(default LinkedIn post)'}")
        for state, message, delay in connector.simulated_steps(query):
            await ctx.sleep(delay * self.step_delay)
            result.state = state
            result.states.append(state)
            await ctx.log(message)

        result.artifacts.extend(connector.placeholder_artifacts(query, ctx.output_dir))
        result.state = WorkflowState.DONE
        result.success = True
        return result


class SimulatedSessionProvider(SessionProvider):
    def __init__(self, step_delay: Optional[float] = None):
        self.step_delay = settings.SIMULATION_STEP_DELAY if step_delay is None else step_delay

    async def open(self) -> Session:
        return SimulatedSession(self.step_delay)
