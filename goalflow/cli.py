"""Command line interface for goalflow."""

import argparse
import asyncio
import json
import logging
from typing import List, Optional

from goalflow.models.agents import Agent
from goalflow.repositories import AgentRepository, default_agents
from goalflow.scheduler import Scheduler
from goalflow.schemas.messages import WorkflowResult
from goalflow.services.goal_classifier import classify
from goalflow.worker.bridge import ExecutionBridge

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="goalflow", description="Run free-text automation goals in a browser.")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging output")
    commands = parser.add_subparsers(dest="command", required=True)

    classify_cmd = commands.add_parser("classify", help="Print the task type a goal maps to")
    classify_cmd.add_argument("goal", help="Free-text goal")

    run_cmd = commands.add_parser("run", help="Execute a goal once")
    run_cmd.add_argument("--goal", default=None, help="Free-text goal; omitted runs the default LinkedIn post")
    run_cmd.add_argument("--simulate", action="store_true", help="Skip the browser and simulate the workflow")
    run_cmd.add_argument("--hold", type=float, default=None, help="Seconds to keep the page open after acting")
    run_cmd.add_argument("--json", action="store_true", help="Print the full result as JSON")

    schedule_cmd = commands.add_parser("schedule", help="Run the scheduler until interrupted")
    schedule_cmd.add_argument("--demo", action="store_true", help="Load the demo agents")
    schedule_cmd.add_argument(
        "--agent",
        nargs=3,
        action="append",
        default=[],
        metavar=("NAME", "GOAL", "CRON"),
        help="Add a scheduled agent; may be repeated",
    )
    schedule_cmd.add_argument("--simulate", action="store_true", help="Simulate every scheduled run")
    schedule_cmd.add_argument("--tick", type=float, default=None, help="Seconds between scheduler ticks")
    return parser.parse_args(argv)


def print_result(result: WorkflowResult, as_json: bool = False) -> None:
    if as_json:
        print(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    for line in result.log_lines:
        print(line)
    status = "success" if result.success else f"failed ({result.error})"
    mode = "simulated" if result.simulated else "live"
    print(f"\nResult: {status} [{mode}] state={result.state.value}")
    for artifact in result.artifacts:
        if hasattr(artifact, "path"):
            print(f"  file: {artifact.path} ({artifact.rows} rows{'' if artifact.written else ', not written'})")
        else:
            print(f"  text:\n{artifact.text}")


async def _schedule(repository: AgentRepository, bridge: ExecutionBridge, tick: Optional[float]) -> None:
    scheduler = Scheduler(repository, bridge, tick_seconds=tick)
    await scheduler.run_forever(asyncio.Event())


def build_repository(demo: bool, agents: List[List[str]]) -> AgentRepository:
    repository = AgentRepository()
    if demo:
        for agent in default_agents():
            repository.add_agent(agent)
    for name, goal, cron in agents:
        repository.add_agent(Agent(name=name, goal=goal, schedule=cron, tools={"browser"}))
    return repository


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "classify":
        print(classify(args.goal).value)
        return 0

    if args.command == "run":
        bridge = ExecutionBridge(force_simulation=True if args.simulate else None, hold_seconds=args.hold)
        result = asyncio.run(bridge.execute(args.goal))
        print_result(result, as_json=args.json)
        return 0 if result.success else 1

    repository = build_repository(args.demo, args.agent)
    if not repository.list_jobs():
        logger.error("❌ Nothing to schedule: pass --demo or --agent NAME GOAL CRON")
        return 2

    bridge = ExecutionBridge(force_simulation=True if args.simulate else None)
    try:
        asyncio.run(_schedule(repository, bridge, args.tick))
    except KeyboardInterrupt:
        logger.info("👋 Interrupted")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
