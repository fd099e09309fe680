"""Parse match listings and match pages from the source sports site.

Single source of truth for:
- Listing page -> fixtures with their detail links
- Match page -> score, events, logos, lineups and competition

Parsing never raises on unexpected markup; missing data stays at the
MatchDetails defaults.
"""

import re
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from .config import SOURCE_SITE
from .models import MatchDetails, MatchEvent, ScrapedMatch
from .titles import decode_match_url, extract_teams_from_title

MAX_GOALS = 20

# Labelled patterns first, then any bare "A - B"
_SCORE_PATTERNS = [
    re.compile(r"نتيجة.*?(\d+)\s*[-:]\s*(\d+)"),
    re.compile(r"score.*?(\d+)\s*[-:]\s*(\d+)", re.IGNORECASE),
    re.compile(r"(\d+)\s*[-:]\s*(\d+)"),
]

# "9:00", "21:30": kickoff times, never scores
_CLOCK_RE = re.compile(r"\d{1,2}:\d{2}")

_EVENT_PATTERNS = [
    re.compile(r"(\d+)['′]\s*([^0-9\n\r]{3,50})"),
    re.compile(r"(\d+)\s*دقيقة\s*([^0-9\n\r]{3,50})"),
    re.compile(r"الدقيقة\s*(\d+)\s*([^0-9\n\r]{3,50})"),
]

# (keywords, type, icon), first hit wins
_EVENT_TYPES = [
    (("هدف", "goal"), "هدف", "⚽"),
    (("صفراء", "yellow"), "بطاقة صفراء", "🟨"),
    (("حمراء", "red"), "بطاقة حمراء", "🟥"),
    (("تبديل", "substitution"), "تبديل", "🔄"),
]

COMPETITION_KEYWORDS = ["أوروبا", "يورو", "تحت", "بطولة", "دوري", "كأس"]

LOGO_ALT_MARKERS = ["تحت", "U19", "U20", "U21"]

_STADIUM_RE = re.compile(r"(?:الملعب|ملعب|Stadium)\s*[:：]?\s*([^\n]{3,60})", re.IGNORECASE)
_KICKOFF_RE = re.compile(r"(?:التوقيت|⏰)\s*[:：]?\s*(\d{1,2}:\d{2}(?:\s*[AP]M)?)", re.IGNORECASE)
_LINEUP_CLASS_RE = re.compile(r"lineup|formation", re.IGNORECASE)


def parse_match_listing(html: str, base_url: str = SOURCE_SITE) -> list[ScrapedMatch]:
    """Find match links on a listing page.

    Match links carry percent-encoded Arabic slugs, so only hrefs containing
    both "/matches/" and "%" are considered.

    Args:
        html: Listing page HTML
        base_url: Site root used to absolutise relative links

    Returns:
        Unique matches in page order
    """
    soup = BeautifulSoup(html, "html.parser")
    matches: list[ScrapedMatch] = []
    seen: set[str] = set()

    for link in soup.find_all("a", href=True):
        href = link["href"]
        if "/matches/" not in href or "%" not in href:
            continue

        full_href = href if href.startswith("http") else urljoin(base_url, href)
        teams = decode_match_url(full_href)
        if not teams:
            continue

        key = f"{teams.home_team}-{teams.away_team}"
        if key in seen:
            continue
        seen.add(key)

        matches.append(
            ScrapedMatch(
                home_team=teams.home_team,
                away_team=teams.away_team,
                title=f"{teams.home_team} ضد {teams.away_team}",
                match_link=full_href,
            )
        )

    return matches


def extract_score(text: str) -> tuple[int, int] | None:
    """First plausible "A - B" score in the page text."""
    for pattern in _SCORE_PATTERNS:
        for match in pattern.finditer(text):
            if _CLOCK_RE.fullmatch(text, match.start(1), match.end()):
                continue
            home, away = int(match.group(1)), int(match.group(2))
            if home <= MAX_GOALS and away <= MAX_GOALS:
                return home, away
    return None


def classify_event(text: str) -> tuple[str, str]:
    """Map event text to an Arabic event type and an icon."""
    lowered = text.lower()
    for keywords, event_type, icon in _EVENT_TYPES:
        if any(keyword in lowered for keyword in keywords):
            return event_type, icon
    return "حدث", "⚽"


def extract_events(text: str) -> list[MatchEvent]:
    """Timeline events such as "45' هدف محمد صلاح"."""
    events: list[MatchEvent] = []
    seen: set[tuple[str, str]] = set()

    for pattern in _EVENT_PATTERNS:
        for match in pattern.finditer(text):
            minute = match.group(1)
            event_text = match.group(2).strip()
            if len(event_text) <= 3 or (minute, event_text) in seen:
                continue
            seen.add((minute, event_text))

            event_type, icon = classify_event(event_text)
            events.append(MatchEvent(minute=minute, text=event_text, type=event_type, icon=icon))

    return events


def extract_competition(text: str) -> str:
    """Competition name following the first known keyword, or ""."""
    for keyword in COMPETITION_KEYWORDS:
        if keyword not in text:
            continue
        match = re.search(rf"({re.escape(keyword)}[^.\n]{{10,80}})", text)
        if match:
            return match.group(1).strip()
    return ""


def _logo_candidates(soup: BeautifulSoup) -> list[tuple[str, str]]:
    logos = []
    for img in soup.find_all("img"):
        src = img.get("src") or img.get("data-src")
        alt = img.get("alt") or ""
        if not src or "wp-content/uploads" not in src:
            continue
        if any(marker in alt for marker in LOGO_ALT_MARKERS) or "/202" in src:
            logos.append((src, alt.strip()))
    return logos


def _is_lineup_container(tag: Tag) -> bool:
    # Player items often carry "lineup-player"; they are never containers
    if tag.name == "li":
        return False
    return bool(_LINEUP_CLASS_RE.search(" ".join(tag.get("class") or [])))


def extract_lineups(soup: BeautifulSoup) -> tuple[list[str], list[str]]:
    """Players from the first two lineup containers (home, then away)."""
    # Innermost only: .lineups wrapping .lineup-home and .lineup-away
    containers = [c for c in soup.find_all(_is_lineup_container) if not c.find(_is_lineup_container)]

    lineups: list[list[str]] = []
    for container in containers[:2]:
        players = [li.get_text(" ", strip=True) for li in container.find_all("li")]
        lineups.append([p for p in players if p])

    while len(lineups) < 2:
        lineups.append([])
    return lineups[0], lineups[1]


def parse_match_page(html: str) -> MatchDetails:
    """Extract a match report from a match page.

    Args:
        html: Match page HTML

    Returns:
        MatchDetails; fields that could not be found keep their defaults
    """
    soup = BeautifulSoup(html, "html.parser")
    details = MatchDetails()

    logos = _logo_candidates(soup)
    if len(logos) >= 2:
        details.home_logo, details.home_team = logos[0]
        details.away_logo, details.away_team = logos[1]

    page_title = soup.title.get_text(strip=True) if soup.title else ""
    title_teams = extract_teams_from_title(page_title)
    if title_teams:
        details.home_team = details.home_team or title_teams.home_team
        details.away_team = details.away_team or title_teams.away_team

    body = soup.body or soup
    text = body.get_text("\n")

    score = extract_score(text)
    if score:
        details.home_score, details.away_score = score
        details.score_found = True

    details.events = extract_events(text)
    details.league = extract_competition(text)
    details.home_lineup, details.away_lineup = extract_lineups(soup)

    stadium = _STADIUM_RE.search(text)
    if stadium:
        details.stadium = stadium.group(1).strip()

    kickoff = _KICKOFF_RE.search(text)
    if kickoff:
        details.kickoff = kickoff.group(1)

    return details
