"""
Agent and schedule records.
The durable copies live in the host application's store; these models are
what the engine reads and updates.
"""

from datetime import datetime
from typing import Optional, Set
from pydantic import BaseModel, Field
import uuid

from goalflow.schemas.enums import AgentStatus
from goalflow.utils.date_utils import get_now


def generate_uuid():
    """Generate UUID string for record IDs"""
    return str(uuid.uuid4())


class Agent(BaseModel):
    """Automation configuration an execution runs as"""
    id: str = Field(default_factory=generate_uuid)
    name: str
    role: Optional[str] = None
    goal: Optional[str] = None
    tools: Set[str] = Field(default_factory=set)
    schedule: Optional[str] = None  # Cron expression for periodic execution
    status: AgentStatus = AgentStatus.PAUSED
    runs: int = 0
    last_run_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=get_now)


class ScheduledJob(BaseModel):
    """Recurring binding between an agent and a cron expression"""
    id: str = Field(default_factory=generate_uuid)
    agent_id: str
    agent_name: str = "Unknown Agent"
    schedule: str
    description: Optional[str] = None
    next_run_at: datetime
    last_run_at: Optional[datetime] = None
    enabled: bool = True
