"""
In-memory repository for agents and their scheduled jobs.
Stands in for the host application's store; the scheduler only needs the
operations below.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from goalflow.beat_schedule import describe_schedule, next_run_or_fallback
from goalflow.models.agents import Agent, ScheduledJob
from goalflow.utils.date_utils import get_now

logger = logging.getLogger(__name__)


class AgentRepository:
    """Repository for managing Agent and ScheduledJob records"""

    def __init__(self):
        self._agents: Dict[str, Agent] = {}
        self._jobs: Dict[str, ScheduledJob] = {}

    # ---- agents ----

    def add_agent(self, agent: Agent, now: Optional[datetime] = None) -> Agent:
        """
        Store an agent. An agent with a schedule also gets its ScheduledJob,
        due at the next cron occurrence.
        """
        self._agents[agent.id] = agent
        if agent.schedule:
            self.add_schedule(agent.id, agent.schedule, now=now)
        logger.info(f"🤖 Agent added: {agent.name}")
        return agent

    def get_agent(self, agent_id: str) -> Optional[Agent]:
        return self._agents.get(agent_id)

    def list_agents(self) -> List[Agent]:
        return list(self._agents.values())

    def delete_agent(self, agent_id: str) -> bool:
        """Delete an agent together with every job that runs it."""
        agent = self._agents.pop(agent_id, None)
        if agent is None:
            return False
        for job in self.jobs_for_agent(agent_id):
            del self._jobs[job.id]
        logger.info(f"🗑️ Agent deleted: {agent.name}")
        return True

    def record_run(self, agent_id: str, when: datetime) -> None:
        agent = self._agents.get(agent_id)
        if agent is None:
            return
        agent.runs += 1
        agent.last_run_at = when

    # ---- schedules ----

    def add_schedule(self, agent_id: str, schedule: str, now: Optional[datetime] = None) -> ScheduledJob:
        agent = self._agents.get(agent_id)
        if agent is None:
            raise ValueError(f"Agent '{agent_id}' not found")

        next_run_at, _ = next_run_or_fallback(schedule, now or get_now())
        job = ScheduledJob(
            agent_id=agent_id,
            agent_name=agent.name,
            schedule=schedule,
            description=describe_schedule(schedule),
            next_run_at=next_run_at,
        )
        self._jobs[job.id] = job
        logger.info(f"📅 Scheduled {agent.name}: {job.description} (next run {next_run_at.isoformat()})")
        return job

    def get_job(self, job_id: str) -> Optional[ScheduledJob]:
        return self._jobs.get(job_id)

    def list_jobs(self) -> List[ScheduledJob]:
        return list(self._jobs.values())

    def jobs_for_agent(self, agent_id: str) -> List[ScheduledJob]:
        return [job for job in self._jobs.values() if job.agent_id == agent_id]

    def set_job_enabled(self, job_id: str, enabled: bool) -> bool:
        job = self._jobs.get(job_id)
        if job is None:
            return False
        job.enabled = enabled
        return True

    def delete_job(self, job_id: str) -> bool:
        return self._jobs.pop(job_id, None) is not None


def default_agents() -> List[Agent]:
    """The demo agents shipped with a fresh install."""
    return [
        Agent(
            name="Trending LinkedIn Agent",
            role="Content Creator",
            goal=(
                "Search top trending topics in OpenClaw, write a LinkedIn post, "
                "wait for approval, then post via browser automation."
            ),
            tools={"browser", "search", "linkedin"},
            schedule="0 9 * * *",
        ),
        Agent(
            name="Hashtag Comment Agent",
            role="Community Promoter",
            goal=(
                "Every hour, search LinkedIn for #openclaw posts and comment "
                "promoting the GitHub repo and desktop app."
            ),
            tools={"browser", "linkedin", "search"},
            schedule="0 * * * *",
        ),
    ]


repo = AgentRepository()
