"""
Scheduler loop.
Every tick fires the enabled jobs whose next run has passed, reschedules
them from their cron expression and counts the run on the owning agent.
Executions run as background tasks; a tick never waits for them.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from goalflow.beat_schedule import next_run_or_fallback
from goalflow.config import settings
from goalflow.models.agents import ScheduledJob
from goalflow.repositories import AgentRepository, repo
from goalflow.utils.date_utils import ensure_aware, get_now
from goalflow.worker.bridge import ExecutionBridge

logger = logging.getLogger(__name__)


class Scheduler:
    def __init__(
        self,
        repository: Optional[AgentRepository] = None,
        bridge: Optional[ExecutionBridge] = None,
        *,
        tick_seconds: Optional[float] = None,
        clock: Callable[[], datetime] = get_now,
    ):
        self.repository = repository or repo
        self.bridge = bridge or ExecutionBridge()
        self.tick_seconds = settings.SCHEDULER_TICK_SECONDS if tick_seconds is None else tick_seconds
        self.clock = clock
        self._lock = asyncio.Lock()
        self._in_flight: Dict[str, asyncio.Task] = {}

    def is_running(self, agent_id: str) -> bool:
        task = self._in_flight.get(agent_id)
        return task is not None and not task.done()

    @property
    def in_flight(self) -> List[asyncio.Task]:
        return [task for task in self._in_flight.values() if not task.done()]

    async def tick(self, now: Optional[datetime] = None) -> List[ScheduledJob]:
        """Fire every due job once; returns the jobs that fired."""
        now = ensure_aware(now or self.clock())
        fired = []
        async with self._lock:
            for job in self.repository.list_jobs():
                if not job.enabled or job.next_run_at > now:
                    continue

                job.next_run_at, _ = next_run_or_fallback(job.schedule, now)
                if self.is_running(job.agent_id):
                    logger.warning(f"⏭️ {job.agent_name} is still running, skipping this occurrence")
                    continue

                self._fire(job)
                job.last_run_at = now
                self.repository.record_run(job.agent_id, now)
                fired.append(job)
        return fired

    def _fire(self, job: ScheduledJob) -> None:
        agent = self.repository.get_agent(job.agent_id)
        goal = agent.goal if agent else None
        logger.info(f"🚀 Starting agent: {job.agent_name}")
        task = asyncio.create_task(
            self.bridge.execute(goal, agent_name=job.agent_name, source="scheduler"),
            name=f"agent-{job.agent_id}",
        )
        self._in_flight[job.agent_id] = task
        task.add_done_callback(lambda t, agent_id=job.agent_id, name=job.agent_name: self._finished(agent_id, name, t))

    def _finished(self, agent_id: str, agent_name: str, task: asyncio.Task) -> None:
        if self._in_flight.get(agent_id) is task:
            del self._in_flight[agent_id]
        if task.cancelled():
            logger.info(f"🛑 {agent_name} cancelled")
            return
        error = task.exception()
        if error is not None:
            logger.error(f"❌ {agent_name} crashed: {error}")
            return
        result = task.result()
        mode = "simulation" if result.simulated else "browser"
        if result.success:
            logger.info(f"✅ Agent \"{agent_name}\" finished successfully ({mode})")
        else:
            logger.warning(f"⚠️ Agent \"{agent_name}\" failed ({mode}): {result.error}")

    async def run_forever(self, stop_event: Optional[asyncio.Event] = None) -> None:
        stop_event = stop_event or asyncio.Event()
        logger.info(f"⏰ Scheduler started (tick every {self.tick_seconds:g}s)")
        try:
            while not stop_event.is_set():
                await self.tick()
                try:
                    await asyncio.wait_for(stop_event.wait(), timeout=self.tick_seconds)
                except asyncio.TimeoutError:
                    pass
        finally:
            await self.shutdown()
            logger.info("⏰ Scheduler stopped")

    async def shutdown(self) -> None:
        """Cancel in-flight executions; their sessions close on the way out."""
        tasks = self.in_flight
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._in_flight.clear()
