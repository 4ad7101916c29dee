"""
Goal classification.
Maps a free-text automation goal onto exactly one TaskType using an ordered
table of whole-word rules. The first matching rule wins.
"""

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Sequence, Tuple

from goalflow.schemas.enums import TaskType


@dataclass(frozen=True)
class ClassificationRule:
    task_type: TaskType
    pattern: Pattern[str]

    def matches(self, text: str) -> bool:
        return bool(self.pattern.search(text))


def _rule(task_type: TaskType, *words: str) -> ClassificationRule:
    return ClassificationRule(task_type, re.compile(r"\b(?:" + "|".join(words) + r")\b"))


# Order matters: "job hiring news" is a job search, not a news lookup.
DEFAULT_RULES: Tuple[ClassificationRule, ...] = (
    _rule(TaskType.JOB_SCRAPER, r"jobs?", r"hiring", r"careers?", r"recruit\w*", r"vacanc(?:y|ies)", r"openings?"),
    _rule(TaskType.NEWS, r"news", r"updates?", r"headlines?", r"current events", r"breaking"),
    _rule(TaskType.VIDEO, r"videos?", r"youtube", r"watch", r"clips?", r"tutorials?"),
    _rule(TaskType.FINANCE, r"stocks?", r"prices?", r"markets?", r"finance", r"trading", r"crypto"),
    _rule(TaskType.LINKEDIN_ENGAGE, r"comment\w*", r"engage\w*", r"repl(?:y|ies)", r"interact", r"react", r"likes?"),
    _rule(TaskType.LINKEDIN_OUTREACH, r"email", r"outreach", r"messages?", r"contact", r"connect", r"dm"),
    _rule(TaskType.MONITOR, r"monitor", r"track", r"competitors?", r"spy", r"analy[sz]e", r"audit"),
    _rule(TaskType.SCRAPER, r"scrape", r"extract", r"data", r"collect", r"gather", r"crawl"),
    _rule(TaskType.LINKEDIN_POST, r"linkedin", r"posts?", r"trending", r"publish", r"write", r"content", r"blog"),
)

# A goal that says something but matches no rule is researched.
UNMATCHED_TASK = TaskType.RESEARCH
# No goal at all runs the demo posting flow.
NO_GOAL_TASK = TaskType.LINKEDIN_POST


def classify(goal: Optional[str], rules: Sequence[ClassificationRule] = DEFAULT_RULES) -> TaskType:
    """Return the task type for ``goal``. Pure and deterministic."""
    if goal is None or not goal.strip():
        return NO_GOAL_TASK

    text = goal.lower()
    for rule in rules:
        if rule.matches(text):
            return rule.task_type
    return UNMATCHED_TASK
