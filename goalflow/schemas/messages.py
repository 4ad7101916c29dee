from pydantic import BaseModel, Field
from datetime import datetime
from typing import Dict, Any, List, Optional, Union
import uuid

from goalflow.schemas.enums import LogLevel, TaskType, WorkflowState
from goalflow.utils.date_utils import get_now

UNKNOWN_NAME = "Unknown"


def generate_run_id() -> str:
    return str(uuid.uuid4())


class LogEntry(BaseModel):
    level: LogLevel = LogLevel.INFO
    message: str
    source: str = "workflow"
    timestamp: datetime = Field(default_factory=get_now)


class SearchResult(BaseModel):
    title: str
    snippet: str = ""
    link: str = ""


class JobRecord(BaseModel):
    title: str = UNKNOWN_NAME
    company: str = UNKNOWN_NAME
    location: str = UNKNOWN_NAME
    link: str = ""


class Experience(BaseModel):
    title: str
    company: str = ""
    duration: str = ""
    description: str = ""


class Education(BaseModel):
    school: str
    degree: str = ""


class Certification(BaseModel):
    name: str
    issuer: str = ""


class ProfileRecord(BaseModel):
    """Best-effort extraction of a LinkedIn profile page."""
    name: str = UNKNOWN_NAME
    headline: str = ""
    location: str = ""
    connections: str = ""
    about: str = ""
    experiences: List[Experience] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)

    def is_resolvable(self) -> bool:
        name = (self.name or "").strip()
        return bool(name) and name != UNKNOWN_NAME


class FileRef(BaseModel):
    path: str
    rows: int = 0
    written: bool = True  # False for simulated placeholders
    preview: str = ""


class ComposedText(BaseModel):
    text: str
    topic: Optional[str] = None


Artifact = Union[FileRef, ComposedText]


class WorkflowResult(BaseModel):
    run_id: str = Field(default_factory=generate_run_id)
    goal: Optional[str] = None
    task_type: Optional[TaskType] = None
    success: bool = False
    simulated: bool = False
    state: WorkflowState = WorkflowState.IDLE
    states: List[WorkflowState] = Field(default_factory=list)
    artifacts: List[Artifact] = Field(default_factory=list)
    log_lines: List[str] = Field(default_factory=list)
    entries: List[LogEntry] = Field(default_factory=list)
    data: Dict[str, Any] = Field(default_factory=dict)
    error: Optional[str] = None
