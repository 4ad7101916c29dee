"""
Invocation surface for goalflow.
On-demand runs and scheduled runs both end up in ExecutionBridge.execute.
"""

import asyncio
import logging
from typing import Optional

from goalflow.schemas.messages import WorkflowResult
from goalflow.worker.bridge import ExecutionBridge

logger = logging.getLogger(__name__)

_bridge: Optional[ExecutionBridge] = None


def get_bridge() -> ExecutionBridge:
    global _bridge
    if _bridge is None:
        _bridge = ExecutionBridge()
    return _bridge


async def execute(goal: Optional[str], bridge: Optional[ExecutionBridge] = None) -> WorkflowResult:
    """
    Run a goal now.

    :param goal: free-text automation goal; None or blank runs the default post workflow
    :param bridge: bridge to run on; defaults to the shared, settings-driven one
    :return: WorkflowResult, whether the run was live or simulated
    """
    bridge = bridge or get_bridge()
    logger.info(f"🔄 Starting run: goal={goal!r}")
    result = await bridge.execute(goal)
    status = "✅ succeeded" if result.success else "❌ failed"
    logger.info(f"{status}: run_id={result.run_id} task={result.task_type.value if result.task_type else None} simulated={result.simulated}")
    return result


def run_goal(goal: Optional[str], bridge: Optional[ExecutionBridge] = None) -> WorkflowResult:
    """Synchronous wrapper for callers without an event loop."""
    return asyncio.run(execute(goal, bridge))
