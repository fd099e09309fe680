"""Date bucketing and match timing helpers.

All functions are pure: the current time is always passed in. Calendar days
are evaluated in ``now``'s timezone, so pass an aware ``now`` (see
``Settings.now``).
"""

import re
from datetime import datetime, timedelta

from .models import DateCategory

MATCH_DURATION = timedelta(hours=3)

# Placeholder values used by live posts when no kickoff time is known
_FINISHED_MARKERS = {"TBD", "انتهت"}

_CLOCK_RE = re.compile(r"(\d{1,2}):(\d{2})")


def _to_local(published: datetime, now: datetime) -> datetime:
    """Express ``published`` in ``now``'s timezone (naive values are taken as local)."""
    if published.tzinfo is None or now.tzinfo is None:
        return published.replace(tzinfo=now.tzinfo)
    return published.astimezone(now.tzinfo)


def get_date_category(published: datetime, now: datetime) -> DateCategory:
    """Bucket a publish timestamp relative to the current date.

    Args:
        published: Post publish time
        now: Current time

    Returns:
        "today", "yesterday", "older" (two or more days back) or "future"
    """
    days_back = (now.date() - _to_local(published, now).date()).days

    if days_back == 0:
        return "today"
    if days_back == 1:
        return "yesterday"
    if days_back >= 2:
        return "older"
    return "future"


def hours_since(published: datetime, now: datetime) -> float:
    """Age of a post in hours (negative for scheduled posts)."""
    return (now - _to_local(published, now)).total_seconds() / 3600


def parse_clock(time_string: str) -> tuple[int, int] | None:
    """Parse "H:MM" with optional AM/PM into a 24h (hour, minute) tuple.

    Returns:
        Tuple of (hour, minute), or None if no clock time is present
    """
    match = _CLOCK_RE.search(time_string)
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2))
    lowered = time_string.lower()

    if "pm" in lowered and hour != 12:
        hour += 12
    elif "am" in lowered and hour == 12:
        hour = 0

    if hour > 23 or minute > 59:
        return None
    return hour, minute


def is_match_finished(
    time_string: str | None,
    published: datetime,
    now: datetime,
    duration: timedelta = MATCH_DURATION,
) -> bool:
    """Check whether a match announced in a post is over.

    The kickoff is the given clock time on the post's publish day. A match
    counts as finished ``duration`` after kickoff. Missing, placeholder or
    unparseable times count as finished.

    Args:
        time_string: Kickoff time as written in the post (e.g. "9:00 PM")
        published: Post publish time
        now: Current time
        duration: Time from kickoff until the match is considered over

    Returns:
        True if the match is over
    """
    if not time_string or time_string.strip() in _FINISHED_MARKERS:
        return True

    clock = parse_clock(time_string)
    if clock is None:
        return True

    hour, minute = clock
    kickoff = _to_local(published, now).replace(hour=hour, minute=minute, second=0, microsecond=0)
    return now > kickoff + duration
