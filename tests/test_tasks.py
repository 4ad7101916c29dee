import asyncio

from goalflow import tasks
from goalflow.schemas.enums import TaskType
from goalflow.worker.bridge import ExecutionBridge
from goalflow.worker.session import SimulatedSessionProvider


def _sandbox_bridge(tmp_path):
    return ExecutionBridge(
        simulated_provider=SimulatedSessionProvider(step_delay=0),
        force_simulation=True,
        output_dir=tmp_path,
    )


def test_run_goal_executes_synchronously(tmp_path):
    result = tasks.run_goal("check TSLA stock price", bridge=_sandbox_bridge(tmp_path))

    assert result.success
    assert result.simulated
    assert result.task_type == TaskType.FINANCE
    assert result.data["query"] == "TSLA"


def test_execute_uses_shared_bridge(monkeypatch, tmp_path):
    bridge = _sandbox_bridge(tmp_path)
    monkeypatch.setattr(tasks, "_bridge", bridge)

    assert tasks.get_bridge() is bridge
    result = asyncio.run(tasks.execute("scrape data about robots"))
    assert result.task_type == TaskType.SCRAPER
    assert result.artifacts[0].path == str(tmp_path / "scraped_data.csv")
