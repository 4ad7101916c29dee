"""
Post composition.
Builds the text typed into the LinkedIn editor from whatever the research
step produced: a profile, a list of search results, or nothing at all.
"""

import re
from typing import List, Optional, Sequence

from goalflow.schemas.messages import ProfileRecord, SearchResult

ELLIPSIS = "..."

ABOUT_CAP = 400
ABOUT_MIN_LENGTH = 30
HEADLINE_CAP = 160
EXPERIENCE_FIELD_CAP = 120
EXPERIENCE_DESCRIPTION_CAP = 250
EXPERIENCE_DESCRIPTION_MIN_LENGTH = 20
MAX_SKILLS = 10
RESULT_TITLE_CAP = 120
RESULT_SNIPPET_CAP = 240
TOPIC_CAP = 80

DEFAULT_TOPIC = "Technology Trends"
GENERIC_POST = "🚀 Excited to share updates on technology! What are you working on today? #Tech #Innovation"

PROFILE_HASHTAGS = "#Hiring #TechTalent #Leadership #Innovation"
TOPIC_HASHTAGS = "#Tech #Innovation #Future"
_HASHTAG_SKIP = {"at", "the", "and", "for", "with"}


def truncate(text: Optional[str], cap: int) -> str:
    """Cut ``text`` to ``cap`` characters, marking the cut with an ellipsis."""
    text = (text or "").strip()
    if len(text) <= cap:
        return text
    return text[:cap] + ELLIPSIS


def headline_hashtags(headline: str, limit: int = 3) -> List[str]:
    tags = []
    for word in re.split(r"[\s|,·@]+", headline or ""):
        clean = re.sub(r"[^A-Za-z0-9]", "", word)
        if len(clean) <= 3 or clean.lower() in _HASHTAG_SKIP:
            continue
        tags.append("#" + clean[0].upper() + clean[1:])
        if len(tags) == limit:
            break
    return tags


def topic_hashtag(topic: str) -> str:
    clean = re.sub(r"[^A-Za-z0-9]", "", topic or "")
    return f"#{clean}" if clean else "#Tech"


def _headline_domain(headline: str) -> str:
    return re.split(r"[|,·@]+", headline)[0].strip() or "Tech"


def _profile_post(profile: ProfileRecord) -> str:
    name = truncate(profile.name, EXPERIENCE_FIELD_CAP)
    headline = truncate(profile.headline, HEADLINE_CAP) or "technology professional"
    domain = _headline_domain(headline)
    location = truncate(profile.location, EXPERIENCE_FIELD_CAP)
    about = (profile.about or "").strip()

    lines = [
        f"🌟 Feature Spotlight: {name} | {headline} 🚀",
        "",
        f"I want to take a moment to highlight an exceptional talent in the {domain} space.",
        "",
    ]
    if location:
        lines += [f"📍 Based in {location}", ""]
    if len(about) > ABOUT_MIN_LENGTH:
        lines += [f"📝 About {name}:", f'"{truncate(about, ABOUT_CAP)}"', ""]

    lines.append("💼 Professional Journey & Impact:")
    if profile.experiences:
        for exp in profile.experiences:
            line = f"→ {truncate(exp.title, EXPERIENCE_FIELD_CAP)}"
            if exp.company:
                line += f" at {truncate(exp.company, EXPERIENCE_FIELD_CAP)}"
            if exp.duration:
                line += f" ({truncate(exp.duration, EXPERIENCE_FIELD_CAP)})"
            description = (exp.description or "").strip()
            if len(description) > EXPERIENCE_DESCRIPTION_MIN_LENGTH:
                line += f"\n   {truncate(description, EXPERIENCE_DESCRIPTION_CAP)}"
            lines.append(line)
    else:
        lines.append(f"→ {headline}")
    lines.append("")

    skills = [truncate(skill, EXPERIENCE_FIELD_CAP) for skill in profile.skills[:MAX_SKILLS]]
    if skills:
        lines += ["🛠️ Key Skills & Expertise:", " • ".join(skills), ""]

    if profile.education:
        lines.append("🎓 Education:")
        for edu in profile.education:
            degree = f" | {truncate(edu.degree, EXPERIENCE_FIELD_CAP)}" if edu.degree else ""
            lines.append(f"🎓 {truncate(edu.school, EXPERIENCE_FIELD_CAP)}{degree}")
        lines.append("")

    if profile.certifications:
        lines.append("📜 Certifications:")
        for cert in profile.certifications:
            issuer = f" ({truncate(cert.issuer, EXPERIENCE_FIELD_CAP)})" if cert.issuer else ""
            lines.append(f"📜 {truncate(cert.name, EXPERIENCE_FIELD_CAP)}{issuer}")
        lines.append("")

    lines.append(f"🏆 Why You Should Know (Or Hire!) {name}:")
    lines.append(f"→ Deep expertise in {domain} backed by real-world experience")
    if len(profile.experiences) > 1:
        lines.append(f"→ Demonstrated career growth ({len(profile.experiences)} roles) and adaptability")
    if skills:
        lines.append(f"→ Verified technical stack: {', '.join(skills[:3])}")
    lines += [
        "→ A professional who brings both skill and passion to the table",
        "",
        f"If you are looking for top-tier talent in {domain}, look no further.",
        f"Connect with {name} and see the impact for yourself! 👇",
        "",
        " ".join(headline_hashtags(headline) + [PROFILE_HASHTAGS]),
    ]
    return "\n".join(lines)


def _topic_post(results: Sequence[SearchResult], topic: str) -> str:
    topic = truncate(topic, TOPIC_CAP) or DEFAULT_TOPIC
    lines = [
        f"🚀 Insights on {topic} 🌐",
        "",
        f"Here's what's happening in the world of {topic} right now:",
        "",
    ]
    for result in results:
        lines.append(f"🔹 {truncate(result.title, RESULT_TITLE_CAP)}")
        if result.snippet:
            lines.append(f"   {truncate(result.snippet, RESULT_SNIPPET_CAP)}")
        lines.append("")
    lines += [
        "💡 My Take:",
        "The pace of innovation in this space is incredible. We are seeing rapid shifts that",
        f"will redefine how we approach {topic}.",
        "",
        "What do you think about these developments? Drop your thoughts below! 👇",
        "",
        f"{topic_hashtag(topic)} {TOPIC_HASHTAGS}",
    ]
    return "\n".join(lines)


def compose(
    profile: Optional[ProfileRecord],
    results: Sequence[SearchResult],
    fallback_topic: Optional[str] = None,
) -> str:
    """
    Compose a LinkedIn post.

    A resolvable profile wins over search results, and search results win
    over the fixed generic post. The returned text is never empty.
    """
    if profile is not None and profile.is_resolvable():
        return _profile_post(profile)
    if results:
        return _topic_post(results, fallback_topic or DEFAULT_TOPIC)
    return GENERIC_POST
