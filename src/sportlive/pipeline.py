"""Blog maintenance runs: convert, delete, clean mappings, publish reports.

Every run walks its items sequentially, records each outcome in a
PipelineLogger and pauses between write calls to stay under the API rate
limit. A failed API call only fails its own item.
"""

import time
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from rich.console import Console

from .blogger import BloggerClient, BloggerError
from .config import YESTERDAY_MATCHES_URL
from .dates import get_date_category
from .extraction import extract_post_data
from .fetch import FetchError, fetch_html
from .lifecycle import decide_conversion, decide_deletion, decide_mapping_retention
from .logger import PipelineLogger
from .mappings import find_mapping_key, load_url_mappings, record_url_mapping, save_url_mappings
from .models import BlogPost, MatchTeams
from .render import generate_match_report, generate_rich_match_report
from .scrape import parse_match_listing, parse_match_page
from .titles import extract_teams_from_title, is_match_post, teams_match

console = Console()

# Recent posts searched when pairing scraped matches with blog posts
RECENT_POSTS_FOR_REPORTS = 20


def _pause(delay: float) -> None:
    if delay > 0:
        time.sleep(delay)


def _describe_error(error: BloggerError) -> str:
    return f"{error}\n{error.payload}" if error.payload else str(error)


def fetch_match_posts(client: BloggerClient, logger: PipelineLogger, max_results: int) -> list[BlogPost]:
    """List posts and keep those whose title names a fixture.

    A listing failure is logged and yields no posts.
    """
    try:
        posts = client.list_posts(max_results=max_results)
    except BloggerError as e:
        logger.log_failure("list posts", _describe_error(e))
        console.print(f"[red]✗ Could not list posts:[/red] {e}")
        return []

    match_posts = [post for post in posts if is_match_post(post.title)]
    console.print(f"Found {len(match_posts)} match posts out of {len(posts)} total posts")
    return match_posts


def convert_match_posts(
    client: BloggerClient,
    logger: PipelineLogger,
    now: datetime,
    delay: float = 30.0,
    max_posts: int = 500,
    dry_run: bool = False,
) -> dict[str, int]:
    """Rewrite finished live match posts as static match reports.

    Args:
        client: Blogger client with write access
        logger: Run logger
        now: Current time
        delay: Seconds to wait after each update attempt
        max_posts: Number of recent posts to inspect
        dry_run: Decide and log without updating

    Returns:
        Outcome counts
    """
    for post in fetch_match_posts(client, logger, max_posts):
        decision = decide_conversion(post, now)
        if not decision.act:
            logger.log_skip(post.title, decision.reason)
            console.print(f"[dim]  ⊘ {post.title}: {decision.reason}[/dim]")
            continue

        data = extract_post_data(post.content, post.title)
        if data is None:
            logger.log_skip(post.title, "could not extract teams from title")
            console.print(f"[yellow]  ⊘ {post.title}: no teams in title[/yellow]")
            continue

        category = get_date_category(post.published, now)
        report = generate_match_report(data, category, post.published)
        logger.log_detail(f"- {post.title} ({category}) → {report.title}")

        if dry_run:
            logger.log_skip(post.title, f"dry run, would convert: {decision.reason}")
            console.print(f"[cyan]  ↳ {post.title}: would convert ({decision.reason})[/cyan]")
            continue

        try:
            client.update_post(post.id, report.title, report.content)
            logger.log_success(post.title, decision.reason)
            console.print(f"[green]  ✓ {post.title}:[/green] {decision.reason}")
        except BloggerError as e:
            logger.log_failure(post.title, _describe_error(e))
            console.print(f"[red]  ✗ {post.title}:[/red] {e}")

        _pause(delay)

    return logger.counts()


def delete_old_match_posts(
    client: BloggerClient,
    logger: PipelineLogger,
    now: datetime,
    mappings_path: Path,
    delay: float = 10.0,
    max_posts: int = 500,
    dry_run: bool = False,
) -> dict[str, int]:
    """Delete expired live match posts and forget their URL mappings.

    Args:
        client: Blogger client with write access
        logger: Run logger
        now: Current time
        mappings_path: Path to match-urls.json
        delay: Seconds to wait after each delete attempt
        max_posts: Number of recent posts to inspect
        dry_run: Decide and log without deleting

    Returns:
        Outcome counts plus "mappings_removed"

    Raises:
        MappingStoreError: If the mappings file is corrupt
    """
    mappings = load_url_mappings(mappings_path)
    removed_keys: list[str] = []

    for post in fetch_match_posts(client, logger, max_posts):
        decision = decide_deletion(post, now)
        if not decision.act:
            logger.log_skip(post.title, decision.reason)
            console.print(f"[dim]  ⊘ {post.title}: {decision.reason}[/dim]")
            continue

        if dry_run:
            logger.log_skip(post.title, f"dry run, would delete: {decision.reason}")
            console.print(f"[cyan]  ↳ {post.title}: would delete ({decision.reason})[/cyan]")
            continue

        try:
            deleted = client.delete_post(post.id)
        except BloggerError as e:
            logger.log_failure(post.title, _describe_error(e))
            console.print(f"[red]  ✗ {post.title}:[/red] {e}")
            _pause(delay)
            continue

        reason = decision.reason if deleted else f"{decision.reason} (already deleted)"
        logger.log_success(post.title, reason)
        console.print(f"[green]  ✓ {post.title}:[/green] {reason}")

        key = find_mapping_key(mappings, post.url)
        if key:
            mapping = mappings.pop(key)
            removed_keys.append(key)
            logger.log_detail(f"- removed mapping {mapping.readable_key or key}")

        _pause(delay)

    if removed_keys:
        save_url_mappings(mappings_path, mappings)
        console.print(f"Saved mappings (removed {len(removed_keys)} entries)")

    return {**logger.counts(), "mappings_removed": len(removed_keys)}


def clean_url_mappings(
    client: BloggerClient,
    logger: PipelineLogger,
    now: datetime,
    mappings_path: Path,
    delay: float = 2.0,
    dry_run: bool = False,
) -> dict[str, int]:
    """Drop mappings whose post is gone or older than yesterday.

    A lookup error keeps the mapping; it is checked again on the next run.

    Args:
        client: Blogger client (read access is enough)
        logger: Run logger; successes are removed mappings
        now: Current time
        mappings_path: Path to match-urls.json
        delay: Seconds to wait between lookups
        dry_run: Decide and log without rewriting the file

    Returns:
        Outcome counts plus "mappings_kept"

    Raises:
        MappingStoreError: If the mappings file is corrupt
    """
    mappings = load_url_mappings(mappings_path)
    if not mappings:
        console.print("No URL mappings to clean")
        return {**logger.counts(), "mappings_kept": 0}

    console.print(f"Checking {len(mappings)} URL mappings...")
    kept = {}

    for key, mapping in mappings.items():
        label = mapping.readable_key or key
        try:
            post = client.find_post_by_url(mapping.url)
        except BloggerError as e:
            kept[key] = mapping
            logger.log_failure(label, _describe_error(e))
            console.print(f"[red]  ✗ {label}:[/red] {e}")
            _pause(delay)
            continue

        decision = decide_mapping_retention(post, now)
        if decision.act:
            kept[key] = mapping
            logger.log_skip(label, decision.reason)
            console.print(f"[dim]  📌 {label}: {decision.reason}[/dim]")
        elif dry_run:
            logger.log_skip(label, f"dry run, would remove: {decision.reason}")
            console.print(f"[cyan]  ↳ {label}: would remove ({decision.reason})[/cyan]")
        else:
            logger.log_success(label, decision.reason)
            console.print(f"[green]  🗑 {label}:[/green] {decision.reason}")

        _pause(delay)

    if len(kept) < len(mappings) and not dry_run:
        save_url_mappings(mappings_path, kept)
        console.print(f"Saved mappings ({len(kept)} entries)")

    return {**logger.counts(), "mappings_kept": len(kept)}


def publish_match_reports(
    client: BloggerClient,
    logger: PipelineLogger,
    now: datetime,
    mappings_path: Path,
    fetch: Callable[..., str] = fetch_html,
    proxy: str | None = None,
    listing_url: str = YESTERDAY_MATCHES_URL,
    limit: int = 5,
    delay: float = 20.0,
    dry_run: bool = False,
) -> dict[str, int]:
    """Scrape yesterday's matches and publish rich reports over their posts.

    Args:
        client: Blogger client with write access
        logger: Run logger
        now: Current time (report date)
        mappings_path: Path to match-urls.json; updated posts are recorded here
        fetch: HTML fetcher, called as fetch(url, proxy=proxy)
        proxy: CORS proxy prefix for the source site
        listing_url: Page listing yesterday's matches
        limit: Maximum matches processed per run
        delay: Seconds to wait after each match
        dry_run: Scrape and render without updating

    Returns:
        Outcome counts plus "matches_found"

    Raises:
        MappingStoreError: If the mappings file is corrupt
    """
    try:
        matches = parse_match_listing(fetch(listing_url, proxy=proxy))
    except FetchError as e:
        logger.log_failure("match listing", str(e))
        console.print(f"[red]✗ Could not fetch match listing:[/red] {e}")
        return {**logger.counts(), "matches_found": 0}

    console.print(f"Found {len(matches)} yesterday matches")
    if not matches:
        return {**logger.counts(), "matches_found": 0}

    candidates: list[tuple[MatchTeams, BlogPost]] = []
    for post in fetch_match_posts(client, logger, RECENT_POSTS_FOR_REPORTS):
        teams = extract_teams_from_title(post.title)
        if teams:
            candidates.append((teams, post))

    mappings = load_url_mappings(mappings_path)
    recorded = 0

    for match in matches[:limit]:
        match_teams = MatchTeams(home_team=match.home_team, away_team=match.away_team)
        target = next((post for teams, post in candidates if teams_match(teams, match_teams)), None)
        if target is None:
            logger.log_skip(match.title, "no matching post on the blog")
            console.print(f"[dim]  ⊘ {match.title}: no matching post[/dim]")
            continue

        try:
            details = parse_match_page(fetch(match.match_link, proxy=proxy))
        except FetchError as e:
            logger.log_failure(match.title, str(e))
            console.print(f"[red]  ✗ {match.title}:[/red] {e}")
            _pause(delay)
            continue

        report = generate_rich_match_report(details, match, now)
        logger.log_detail(
            f"- {match.title}: score {'yes' if details.score_found else 'no'}, "
            f"events {len(details.events)}, logos {'yes' if details.home_logo else 'no'}"
        )

        if dry_run:
            logger.log_skip(match.title, f"dry run, would update: {target.title}")
            console.print(f"[cyan]  ↳ {match.title}: would update {target.title}[/cyan]")
            continue

        try:
            client.update_post(target.id, report.title, report.content)
            logger.log_success(match.title, f"updated {target.title}")
            console.print(f"[green]  ✓ {match.title}:[/green] updated {target.title}")
            if target.url:
                record_url_mapping(mappings, match_teams, target.url)
                recorded += 1
        except BloggerError as e:
            logger.log_failure(match.title, _describe_error(e))
            console.print(f"[red]  ✗ {match.title}:[/red] {e}")

        _pause(delay)

    if recorded:
        save_url_mappings(mappings_path, mappings)

    return {**logger.counts(), "matches_found": len(matches)}
