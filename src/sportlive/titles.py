"""Team and league extraction from post titles and match URLs."""

import re
from urllib.parse import unquote

from .models import BlogPost, MatchTeams

REPORT_TITLE_PREFIX = "تقرير المباراة"
REPORT_CSS_CLASS = "match-report"

_REPORT_PREFIX_RE = re.compile(rf"{REPORT_TITLE_PREFIX}:\s*")
_TITLE_RE = re.compile(r"(.+?)\s+(?:vs|ضد)\s+(.+?)(?:\s+-\s+(.+))?$", re.IGNORECASE)

MATCH_TITLE_PATTERNS = [
    re.compile(r"vs\s", re.IGNORECASE),
    re.compile(r"\s-\s.*(?:league|cup|championship|liga|premier|serie|bundesliga|ligue)", re.IGNORECASE),
    re.compile("مباراة"),
    re.compile("ضد"),
]

# Age-group marker in Arabic slugs, e.g. "تحت 21" (under 21)
_AGE_GROUP_RE = re.compile(r"\s*تحت\s*\d+\s*")

# Characters compared when pairing names from different sources
TEAM_PREFIX_LENGTH = 8


def extract_teams_from_title(title: str) -> MatchTeams | None:
    """Split a "Home vs Away - League" title.

    Works on live titles and on generated report titles ("تقرير المباراة: ...").

    Args:
        title: Post or page title

    Returns:
        MatchTeams, or None if the title names no fixture
    """
    clean_title = _REPORT_PREFIX_RE.sub("", title).strip()
    match = _TITLE_RE.search(clean_title)
    if not match:
        return None

    return MatchTeams(
        home_team=match.group(1).strip(),
        away_team=match.group(2).strip(),
        league=(match.group(3) or "").strip(),
    )


def is_match_post(title: str) -> bool:
    """Check if a post title looks like a match post."""
    return any(pattern.search(title) for pattern in MATCH_TITLE_PATTERNS)


def is_report_post(post: BlogPost) -> bool:
    """Check if a post was already converted to a match report."""
    return REPORT_TITLE_PREFIX in post.title or REPORT_CSS_CLASS in post.content


def _clean_slug_team(slug: str) -> str:
    name = _AGE_GROUP_RE.sub(" ", slug.replace("-", " "))
    return " ".join(name.split())


def decode_match_url(url: str) -> MatchTeams | None:
    """Recover team names from a percent-encoded Arabic match URL.

    Slugs look like ``/matches/<home>-و-<away>-في-<competition>/``.

    Args:
        url: Absolute or relative match URL

    Returns:
        MatchTeams (league left empty), or None if the slug has no "-و-" split
    """
    decoded = unquote(url)
    if "/matches/" not in decoded:
        return None

    slug = decoded.split("/matches/", 1)[1].rstrip("/")
    if "-و-" not in slug:
        return None

    home_part, away_part = slug.split("-و-", 1)
    away_part = away_part.split("-في-", 1)[0]

    home_team = _clean_slug_team(home_part)
    away_team = _clean_slug_team(away_part)
    if not home_team or not away_team:
        return None

    return MatchTeams(home_team=home_team, away_team=away_team)


def _names_match(a: str, b: str) -> bool:
    a_lower, b_lower = a.lower(), b.lower()
    return b_lower[:TEAM_PREFIX_LENGTH] in a_lower or a_lower[:TEAM_PREFIX_LENGTH] in b_lower


def teams_match(a: MatchTeams, b: MatchTeams) -> bool:
    """Loosely compare two fixtures coming from different sources.

    Each side matches when either name contains the first eight characters of
    the other, which tolerates suffixes such as age groups or sponsor names.
    """
    if not all([a.home_team, a.away_team, b.home_team, b.away_team]):
        return False
    return _names_match(a.home_team, b.home_team) and _names_match(a.away_team, b.away_team)


def mapping_key(teams: MatchTeams) -> str:
    """Stable key for match-urls.json entries."""
    return f"{teams.home_team}-{teams.away_team}".replace(" ", "-").lower()


def readable_key(teams: MatchTeams) -> str:
    """Human-readable label for match-urls.json entries."""
    return f"{teams.home_team} vs {teams.away_team}"
