"""Per-post decisions: convert to a report, delete, or keep a mapping."""

from dataclasses import dataclass
from datetime import datetime

from .config import CURRENT_TEMPLATE_VERSIONS
from .dates import get_date_category, hours_since, is_match_finished
from .extraction import extract_match_time
from .models import BlogPost
from .titles import is_report_post

# Today's posts stay live this long before they become reports
LIVE_WINDOW_HOURS = 4

# Deletion thresholds
MAX_POST_AGE_HOURS = 24
UNTIMED_POST_AGE_HOURS = 6


@dataclass
class Decision:
    """Outcome of a decision function."""

    act: bool
    reason: str


def has_current_template(post: BlogPost) -> bool:
    """Check if a post body was generated by one of the current templates."""
    return any(version in post.content for version in CURRENT_TEMPLATE_VERSIONS)


def decide_conversion(post: BlogPost, now: datetime, live_hours: float = LIVE_WINDOW_HOURS) -> Decision:
    """Decide whether a match post should be rewritten as a match report.

    Args:
        post: Match post
        now: Current time
        live_hours: How long a same-day post stays live

    Returns:
        Decision with act=True to convert
    """
    if is_report_post(post):
        if has_current_template(post):
            return Decision(False, "already has the current report template")
        return Decision(True, "refreshing old report template")

    category = get_date_category(post.published, now)

    if category == "older":
        return Decision(True, "post is older than yesterday")
    if category == "yesterday":
        return Decision(True, "yesterday's match")
    if category == "today":
        age = hours_since(post.published, now)
        if age > live_hours:
            return Decision(True, f"today's match is {age:.1f} hours old")
        return Decision(False, f"today's match is only {age:.1f} hours old, keeping as live")
    return Decision(False, "post is scheduled in the future")


def decide_deletion(post: BlogPost, now: datetime) -> Decision:
    """Decide whether a live match post has expired.

    Args:
        post: Match post
        now: Current time

    Returns:
        Decision with act=True to delete
    """
    age = hours_since(post.published, now)
    if age > MAX_POST_AGE_HOURS:
        return Decision(True, f"post is {age:.1f} hours old (>{MAX_POST_AGE_HOURS}h)")

    match_time = extract_match_time(post.content)
    if match_time:
        if is_match_finished(match_time, post.published, now):
            return Decision(True, f"match at {match_time} is finished")
        return Decision(False, f"match at {match_time} is still current or upcoming")

    if age > UNTIMED_POST_AGE_HOURS:
        return Decision(True, f"no match time and post is {age:.1f} hours old (>{UNTIMED_POST_AGE_HOURS}h)")
    return Decision(False, f"no match time and post is only {age:.1f} hours old")


def decide_mapping_retention(post: BlogPost | None, now: datetime) -> Decision:
    """Decide whether a URL mapping is still worth tracking.

    Returns:
        Decision with act=True to keep the mapping
    """
    if post is None:
        return Decision(False, "post not found in blog")

    category = get_date_category(post.published, now)
    if category == "older":
        return Decision(False, "post is older than yesterday")
    return Decision(True, f"post is current ({category}, report: {is_report_post(post)})")
