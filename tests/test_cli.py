from goalflow import cli
from goalflow.config import settings


def test_classify_prints_task_type(capsys):
    assert cli.main(["classify", "find AI Engineer jobs"]) == 0
    assert capsys.readouterr().out.strip() == "job_scraper"


def test_simulated_run(capsys, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "SIMULATION_STEP_DELAY", 0.0)
    monkeypatch.setattr(settings, "ARTIFACTS_DIR", str(tmp_path))

    assert cli.main(["run", "--simulate", "--goal", "find AI Engineer jobs"]) == 0

    out = capsys.readouterr().out
    assert "Result: success [simulated] state=done" in out
    assert "jobs.csv (0 rows, not written)" in out
    assert not (tmp_path / "jobs.csv").exists()


def test_schedule_without_agents_exits_with_error():
    assert cli.main(["schedule"]) == 2


def test_build_repository_loads_demo_and_custom_agents():
    repository = cli.build_repository(True, [["Hunter", "find AI jobs", "*/30 * * * *"]])

    assert [agent.name for agent in repository.list_agents()] == [
        "Trending LinkedIn Agent",
        "Hashtag Comment Agent",
        "Hunter",
    ]
    assert len(repository.list_jobs()) == 3
