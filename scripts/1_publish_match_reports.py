#!/usr/bin/env python3
"""Stage 1: Publish rich match reports for yesterday's matches.

Scrapes the source site's "yesterday" listing, reads each match page (score,
events, lineups) and rewrites the matching blog post as a full report.

Usage:
    uv run python scripts/1_publish_match_reports.py            # Update matching posts
    uv run python scripts/1_publish_match_reports.py --dry-run  # Scrape and render only
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv
from rich.console import Console

from sportlive.blogger import BloggerClient
from sportlive.config import ConfigError, load_settings
from sportlive.logger import PipelineLogger
from sportlive.pipeline import publish_match_reports

# Load environment variables from .env file
load_dotenv()

console = Console()


def main() -> None:
    """Publish reports for up to five of yesterday's matches."""
    dry_run = "--dry-run" in sys.argv

    try:
        settings = load_settings(require_token=not dry_run)
    except ConfigError as e:
        console.print(f"[red]ERROR: {e}[/red]")
        console.print("Set them in .env file or export BLOG_ID=... API_KEY=... ACCESS_TOKEN=...")
        sys.exit(1)

    logger = PipelineLogger("match-reports")

    console.print("\n[bold]Stage 1: Publish Match Reports[/bold]")
    console.print(f"Blog ID: {settings.blog_id}")
    console.print(f"CORS proxy: {settings.cors_proxy or 'disabled'}")
    console.print(f"Dry run: {dry_run}\n")

    summary = None
    try:
        with BloggerClient(settings.blog_id, settings.api_key, settings.access_token) as client:
            summary = publish_match_reports(
                client,
                logger,
                settings.now(),
                settings.mappings_path,
                proxy=settings.cors_proxy,
                delay=0 if dry_run else 20.0,
                dry_run=dry_run,
            )
    except Exception as e:
        console.print(f"[red bold]Error:[/red bold] {e}")
        logger.log_failure("run aborted", str(e))
        raise SystemExit(1) from e
    finally:
        # Keep the report of items processed before an abort
        log_path = logger.write(additional_summary={"Matches found": summary["matches_found"]} if summary else None)
        console.print(f"\n[dim]Log saved to: {log_path}[/dim]")

    console.print("\n[bold]Summary:[/bold]")
    console.print(f"  ✅ Updated: {summary['successful']}")
    console.print(f"  ❌ Failed: {summary['failed']}")
    console.print(f"  ⊘ Skipped: {summary['skipped']}")
    console.print(f"  📊 Matches found: {summary['matches_found']}")

    console.print("\n[green]✓ Match report stage complete[/green]")


if __name__ == "__main__":
    main()
