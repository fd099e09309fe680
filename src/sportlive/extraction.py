"""Extract match data from the HTML body of an existing live post."""

import re

from bs4 import BeautifulSoup

from .models import MatchTeams, PostMatchData
from .titles import extract_teams_from_title

_TIME_RE = re.compile(r"⏰\s*(\d{1,2}:\d{2}(?:\s*[AP]M)?)", re.IGNORECASE)

# Tried in order: emoji then label followed by a tag, then bare emoji text
_BROADCASTER_PATTERNS = [
    re.compile(r"📺[^<]*?<[^>]*>([^<]+)", re.IGNORECASE),
    re.compile(r"القناة الناقلة[^<]*?<[^>]*>([^<]+)", re.IGNORECASE),
    re.compile(r"📺\s*([^<\n]+)", re.IGNORECASE),
]


def extract_match_time(content: str) -> str | None:
    """Kickoff time written as "⏰ 9:00 PM" in live posts."""
    match = _TIME_RE.search(content)
    return match.group(1) if match else None


def extract_broadcaster(content: str) -> str | None:
    """TV channel announced in a live post."""
    for pattern in _BROADCASTER_PATTERNS:
        match = pattern.search(content)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None


def extract_team_logos(content: str, teams: MatchTeams) -> tuple[str | None, str | None]:
    """Pick team logos from <img> tags by comparing alt text with team names.

    Args:
        content: Post HTML
        teams: Teams parsed from the title

    Returns:
        Tuple of (home_logo, away_logo); either may be None
    """
    soup = BeautifulSoup(content, "html.parser")
    home_logo = None
    away_logo = None

    for img in soup.find_all("img"):
        alt = (img.get("alt") or "").strip()
        src = img.get("src")
        if not alt or not src:
            continue

        if alt in teams.home_team or teams.home_team in alt:
            home_logo = src
        elif alt in teams.away_team or teams.away_team in alt:
            away_logo = src

    return home_logo, away_logo


def extract_post_data(content: str, title: str) -> PostMatchData | None:
    """Collect everything a match report needs from a live post.

    Args:
        content: Post HTML body
        title: Post title

    Returns:
        PostMatchData, or None if the title does not name two teams
    """
    teams = extract_teams_from_title(title)
    if not teams:
        return None

    home_logo, away_logo = extract_team_logos(content, teams)

    return PostMatchData(
        **teams.model_dump(),
        match_time=extract_match_time(content),
        broadcaster=extract_broadcaster(content),
        home_logo=home_logo,
        away_logo=away_logo,
    )
