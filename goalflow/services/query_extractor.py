"""
Search phrase extraction.
Strips instruction words from a goal so that only its subject is sent to
a search surface. Every workflow owns an immutable stop-word table.
"""

import string
from typing import Collection, FrozenSet, Optional

# Scheduling and agent-setup noise shared by every workflow.
SCHEDULING_WORDS: FrozenSet[str] = frozenset({
    "every", "hour", "hourly", "daily", "morning", "evening", "weekly", "agent", "setup", "create",
})

JOB_STOPWORDS = SCHEDULING_WORDS | {
    "scrape", "search", "find", "look", "for", "jobs", "job", "hiring", "linkedin", "on", "the",
}
NEWS_STOPWORDS = SCHEDULING_WORDS | {
    "news", "update", "updates", "headline", "headlines", "latest", "check", "monitor", "about", "on", "the",
}
VIDEO_STOPWORDS = SCHEDULING_WORDS | {
    "video", "videos", "youtube", "watch", "clip", "clips", "find", "search", "on", "for", "the",
}
FINANCE_STOPWORDS = SCHEDULING_WORDS | {
    "stock", "stocks", "price", "prices", "market", "finance", "check", "monitor", "track", "trading",
    "crypto", "of", "the", "for",
}
OUTREACH_STOPWORDS = SCHEDULING_WORDS | {
    "email", "outreach", "message", "messages", "contact", "connect", "dm", "send", "to", "on", "linkedin",
    "with",
}
MONITOR_STOPWORDS = SCHEDULING_WORDS | {
    "monitor", "track", "competitor", "competitors", "spy", "analyze", "analyse", "audit", "on", "the",
}
SCRAPER_STOPWORDS = SCHEDULING_WORDS | {
    "scrape", "extract", "data", "collect", "gather", "crawl", "from", "the",
}
RESEARCH_STOPWORDS = SCHEDULING_WORDS | {
    "make", "build", "automate", "automation", "browser", "via", "then", "and", "the", "for", "with", "using",
}

# Strips instruction verbs and profile jargon so only the person or topic remains.
POST_STOPWORDS: FrozenSet[str] = frozenset({
    "create", "make", "build", "setup", "set", "up", "agent", "that", "which", "will",
    "please", "and", "or", "but", "post", "on", "linkedin", "linked", "from", "glorify",
    "his", "her", "their", "its", "my", "your", "achievements", "accomplishments",
    "the", "a", "an", "publish", "write", "about", "search", "find", "look", "scrape",
    "extract", "collect", "internet", "web", "online", "then", "also", "should", "would",
    "could", "it", "them", "this", "these", "those", "to", "for", "in", "at", "of",
    "by", "with", "into", "some", "is", "are", "was", "were", "be", "been", "do", "does",
    "did", "top", "ten", "best", "latest", "can", "who", "what", "how", "i", "me", "we",
    "you", "he", "she", "they", "has", "have", "had",
    "past", "experiences", "experience", "information", "details", "detail", "profile",
    "work", "highlight", "highlights", "show", "tell", "get", "check", "recent", "current",
    "background", "history", "career", "resume", "bio", "summary", "info", "data",
    "all", "list", "give", "need", "want", "know", "see", "just", "only",
    "skills", "skill", "education", "qualifications", "posts", "activity", "feed",
    "using", "use", "via", "through", "go", "visit", "open", "navigate",
})


def _normalize(token: str) -> str:
    return token.strip(string.punctuation).lower()


def extract_query(goal: Optional[str], stopwords: Collection[str]) -> str:
    """
    Drop stop words from ``goal`` and rejoin the rest with single spaces.

    Matching is case-insensitive and ignores surrounding punctuation. The
    result may be empty; use :func:`query_or_default` before searching.
    """
    if not goal:
        return ""
    stop = {word.lower() for word in stopwords}
    kept = [token for token in goal.split() if _normalize(token) not in stop]
    return " ".join(kept).strip()


def query_or_default(goal: Optional[str], stopwords: Collection[str], default: str) -> str:
    return extract_query(goal, stopwords) or default
