import asyncio
from datetime import datetime, timedelta, timezone

from goalflow.models.agents import Agent
from goalflow.repositories import AgentRepository
from goalflow.scheduler import Scheduler
from goalflow.schemas.messages import WorkflowResult

NOW = datetime(2026, 1, 5, 10, 7, tzinfo=timezone.utc)
AN_HOUR_AGO = NOW - timedelta(hours=1)


class RecordingBridge:
    def __init__(self, gate: asyncio.Event = None):
        self.gate = gate
        self.calls = []

    async def execute(self, goal, *, agent_name=None, source="on-demand"):
        self.calls.append((goal, agent_name, source))
        if self.gate is not None:
            await self.gate.wait()
        return WorkflowResult(goal=goal, success=True, simulated=True)


def _repository(*agents, created=AN_HOUR_AGO):
    repository = AgentRepository()
    for agent in agents:
        repository.add_agent(agent, now=created)
    return repository


def test_due_job_fires_once_and_is_rescheduled():
    async def scenario():
        agent = Agent(name="Job Hunter", goal="find AI Engineer jobs", schedule="0 * * * *")
        repository = _repository(agent)
        bridge = RecordingBridge()
        scheduler = Scheduler(repository, bridge, clock=lambda: NOW)

        fired = await scheduler.tick(NOW)
        again = await scheduler.tick(NOW)
        await asyncio.gather(*scheduler.in_flight)

        (job,) = repository.list_jobs()
        assert fired == [job]
        assert again == []
        assert job.next_run_at == datetime(2026, 1, 5, 11, 0, tzinfo=timezone.utc)
        assert job.next_run_at > NOW
        assert job.last_run_at == NOW
        assert agent.runs == 1
        assert agent.last_run_at == NOW
        assert bridge.calls == [("find AI Engineer jobs", "Job Hunter", "scheduler")]

    asyncio.run(scenario())


def test_invalid_cron_retries_an_hour_later_and_stays_enabled():
    async def scenario():
        repository = _repository(Agent(name="Broken", goal="latest news", schedule="whenever"), created=NOW - timedelta(hours=2))
        scheduler = Scheduler(repository, RecordingBridge())

        fired = await scheduler.tick(NOW)
        await asyncio.gather(*scheduler.in_flight)

        (job,) = repository.list_jobs()
        assert fired == [job]
        assert job.enabled
        assert job.next_run_at == NOW + timedelta(hours=1)

    asyncio.run(scenario())


def test_disabled_job_is_skipped_and_keeps_its_next_run():
    async def scenario():
        repository = _repository(Agent(name="Idle", goal="latest news", schedule="0 * * * *"))
        (job,) = repository.list_jobs()
        repository.set_job_enabled(job.id, False)
        due_at = job.next_run_at
        bridge = RecordingBridge()

        fired = await Scheduler(repository, bridge).tick(NOW)

        assert fired == []
        assert job.next_run_at == due_at
        assert bridge.calls == []

    asyncio.run(scenario())


def test_due_jobs_in_one_tick_run_concurrently():
    async def scenario():
        gate = asyncio.Event()
        repository = _repository(
            Agent(name="News", goal="latest AI news", schedule="0 * * * *"),
            Agent(name="Videos", goal="watch AI videos", schedule="*/15 * * * *"),
        )
        bridge = RecordingBridge(gate)
        scheduler = Scheduler(repository, bridge)

        fired = await scheduler.tick(NOW)
        await asyncio.sleep(0)

        assert len(fired) == 2
        assert len(scheduler.in_flight) == 2
        assert {name for _, name, _ in bridge.calls} == {"News", "Videos"}

        gate.set()
        await asyncio.gather(*scheduler.in_flight)
        assert scheduler.in_flight == []

    asyncio.run(scenario())


def test_running_agent_is_not_started_twice():
    async def scenario():
        gate = asyncio.Event()
        agent = Agent(name="Slow", goal="latest AI news", schedule="0 * * * *")
        repository = _repository(agent)
        bridge = RecordingBridge(gate)
        scheduler = Scheduler(repository, bridge)

        await scheduler.tick(NOW)
        later = NOW + timedelta(hours=1)
        skipped = await scheduler.tick(later)

        (job,) = repository.list_jobs()
        assert skipped == []
        assert scheduler.is_running(agent.id)
        assert agent.runs == 1
        assert job.next_run_at == datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)

        gate.set()
        await asyncio.gather(*scheduler.in_flight)
        assert not scheduler.is_running(agent.id)

    asyncio.run(scenario())


def test_shutdown_cancels_in_flight_runs():
    async def scenario():
        repository = _repository(Agent(name="Stuck", goal="latest AI news", schedule="0 * * * *"))
        scheduler = Scheduler(repository, RecordingBridge(asyncio.Event()))

        await scheduler.tick(NOW)
        tasks = scheduler.in_flight
        await scheduler.shutdown()

        assert scheduler.in_flight == []
        assert all(task.cancelled() for task in tasks)

    asyncio.run(scenario())


def test_run_forever_stops_on_event():
    async def scenario():
        repository = _repository(Agent(name="Job Hunter", goal="find jobs", schedule="0 * * * *"))
        bridge = RecordingBridge()
        scheduler = Scheduler(repository, bridge, tick_seconds=0.01, clock=lambda: NOW)
        stop = asyncio.Event()

        loop = asyncio.create_task(scheduler.run_forever(stop))
        await asyncio.sleep(0.05)
        stop.set()
        await asyncio.wait_for(loop, timeout=1)

        assert len(bridge.calls) == 1

    asyncio.run(scenario())
