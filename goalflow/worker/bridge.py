"""
Execution bridge.
The single entry point for running a goal: classify it, pick the connector,
run it on a live browser when one can be had and on the simulator otherwise.
Callers always get a WorkflowResult back.
"""

import asyncio
import logging
import time
from pathlib import Path
from typing import Awaitable, Callable, Optional

from goalflow.config import settings
from goalflow.connectors.base import BaseConnector, LogSink, WorkflowContext, make_run_logger
from goalflow.connectors.registry import ConnectorRegistry
from goalflow.schemas.enums import LogLevel, WorkflowState
from goalflow.schemas.messages import WorkflowResult
from goalflow.services.goal_classifier import classify
from goalflow.worker.session import RealSessionProvider, SessionProvider, SimulatedSessionProvider

logger = logging.getLogger(__name__)


class ExecutionBridge:
    def __init__(
        self,
        real_provider: Optional[SessionProvider] = None,
        simulated_provider: Optional[SessionProvider] = None,
        *,
        registry=ConnectorRegistry,
        force_simulation: Optional[bool] = None,
        output_dir: Optional[Path] = None,
        hold_seconds: Optional[float] = None,
        poll_interval: Optional[float] = None,
        log_sink: Optional[LogSink] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.real_provider = real_provider or RealSessionProvider()
        self.simulated_provider = simulated_provider or SimulatedSessionProvider()
        self.registry = registry
        self.force_simulation = settings.FORCE_SIMULATION if force_simulation is None else force_simulation
        self.output_dir = output_dir
        self.hold_seconds = settings.HOLD_SECONDS if hold_seconds is None else hold_seconds
        self.poll_interval = settings.POLL_INTERVAL_SECONDS if poll_interval is None else poll_interval
        self.log_sink = log_sink
        self.sleep = sleep
        self.clock = clock

    def select_provider(self) -> SessionProvider:
        return self.simulated_provider if self.force_simulation else self.real_provider

    async def execute(self, goal: Optional[str], *, agent_name: Optional[str] = None, source: str = "on-demand") -> WorkflowResult:
        """Run ``goal`` end to end. Never raises, except on cancellation."""
        result = WorkflowResult(goal=goal)
        log = make_run_logger(logger, result, source=agent_name or source, sink=self.log_sink)
        try:
            return await self._execute(goal, result, log)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception(f"❌ Execution failed: {e}")
            result.success = False
            result.error = str(e)
            result.state = WorkflowState.FAILED
            result.states.append(WorkflowState.FAILED)
            await log(f"❌ Unexpected error: {e}", LogLevel.ERROR)
            return result

    async def _execute(self, goal, result: WorkflowResult, log) -> WorkflowResult:
        task_type = classify(goal)
        result.task_type = task_type
        await log(f"🧠 Goal Analysis: \"{goal or '(default LinkedIn post)'}\"")
        await log(f"📋 Detected Task Type: {task_type.value.upper()}")

        connector = self.registry.get_connector(task_type)
        ctx = WorkflowContext(
            goal=goal,
            result=result,
            log=log,
            output_dir=self.output_dir,
            poll_interval=self.poll_interval,
            hold_seconds=self.hold_seconds,
            sleep=self.sleep,
            clock=self.clock,
        )

        provider = self.select_provider()
        try:
            session = await provider.open()
        except Exception as e:
            await log(f"⚠️ Could not start a browser session: {e}", LogLevel.WARN)
            await log("👉 Switching to SIMULATION MODE.", LogLevel.WARN)
            return await self._simulate(connector, ctx)

        try:
            return await session.run(connector, ctx)
        except Exception as e:
            failure = e
        finally:
            await session.close()
            await log("🛑 Session ended")

        await log(f"⚠️ Live run aborted: {failure}", LogLevel.WARN)
        await log("👉 Switching to SIMULATION MODE.", LogLevel.WARN)
        self._reset(result)
        return await self._simulate(connector, ctx)

    @staticmethod
    def _reset(result: WorkflowResult) -> None:
        # Keep the log of the aborted attempt; drop everything it produced.
        result.artifacts.clear()
        result.data.clear()
        result.states.clear()
        result.state = WorkflowState.IDLE
        result.error = None
        result.success = False

    async def _simulate(self, connector: BaseConnector, ctx: WorkflowContext) -> WorkflowResult:
        session = await self.simulated_provider.open()
        try:
            return await session.run(connector, ctx)
        finally:
            await session.close()
