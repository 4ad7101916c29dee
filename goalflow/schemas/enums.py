from enum import Enum


class TaskType(str, Enum):
    JOB_SCRAPER = "job_scraper"
    NEWS = "news"
    VIDEO = "video"
    FINANCE = "finance"
    LINKEDIN_ENGAGE = "linkedin_engage"
    LINKEDIN_OUTREACH = "linkedin_outreach"
    MONITOR = "monitor"
    SCRAPER = "scraper"
    RESEARCH = "research"
    LINKEDIN_POST = "linkedin_post"


class WorkflowState(str, Enum):
    IDLE = "idle"
    NAVIGATING = "navigating"
    AWAITING_READY = "awaiting_ready"
    ACTING = "acting"
    HOLDING = "holding"
    DONE = "done"
    FAILED = "failed"


class AgentStatus(str, Enum):
    RUNNING = "running"
    PAUSED = "paused"


class LogLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARN = "warn"
    ERROR = "error"
