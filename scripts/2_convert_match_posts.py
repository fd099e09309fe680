#!/usr/bin/env python3
"""Stage 2: Convert finished live match posts into static match reports.

Posts from yesterday or earlier, and today's posts older than four hours,
are rewritten with the current report template. Posts already on the
current template are left alone.

Usage:
    uv run python scripts/2_convert_match_posts.py            # Convert posts
    uv run python scripts/2_convert_match_posts.py --dry-run  # Only log decisions
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv
from rich.console import Console

from sportlive.blogger import BloggerClient
from sportlive.config import ConfigError, load_settings
from sportlive.logger import PipelineLogger
from sportlive.pipeline import convert_match_posts

# Load environment variables from .env file
load_dotenv()

console = Console()


def main() -> None:
    """Convert every eligible match post on the blog."""
    dry_run = "--dry-run" in sys.argv

    try:
        settings = load_settings(require_token=not dry_run)
    except ConfigError as e:
        console.print(f"[red]ERROR: {e}[/red]")
        console.print("Required: BLOG_ID, API_KEY, ACCESS_TOKEN")
        sys.exit(1)

    logger = PipelineLogger("convert-match-posts", action="Converted")

    console.print("\n[bold]Stage 2: Convert Match Posts to Reports[/bold]")
    console.print(f"Blog ID: {settings.blog_id}")
    console.print(f"Dry run: {dry_run}\n")

    try:
        with BloggerClient(settings.blog_id, settings.api_key, settings.access_token) as client:
            summary = convert_match_posts(
                client, logger, settings.now(), delay=0 if dry_run else 30.0, dry_run=dry_run
            )
    except Exception as e:
        console.print(f"[red bold]Error:[/red bold] {e}")
        logger.log_failure("run aborted", str(e))
        raise SystemExit(1) from e
    finally:
        # Keep the report of posts processed before an abort
        log_path = logger.write()
        console.print(f"\n[dim]Log saved to: {log_path}[/dim]")

    console.print("\n[bold]Summary:[/bold]")
    console.print(f"  ✅ Converted to reports: {summary['successful']}")
    console.print(f"  ⊘ Skipped (already reports or too recent): {summary['skipped']}")
    console.print(f"  ❌ Errors: {summary['failed']}")
    console.print(f"  📊 Total processed: {summary['total']}")

    console.print("\n[green]✓ Conversion stage complete[/green]")


if __name__ == "__main__":
    main()
