#!/usr/bin/env python3
"""Stage 3: Delete expired live match posts.

A post goes when it is more than 24 hours old, when its announced kickoff
was more than three hours ago, or when it has no kickoff time and is more
than six hours old. Mappings pointing at deleted posts are removed from
match-urls.json.

Usage:
    uv run python scripts/3_delete_old_posts.py            # Delete posts
    uv run python scripts/3_delete_old_posts.py --dry-run  # Only log decisions
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv
from rich.console import Console

from sportlive.blogger import BloggerClient
from sportlive.config import ConfigError, load_settings
from sportlive.logger import PipelineLogger
from sportlive.pipeline import delete_old_match_posts

# Load environment variables from .env file
load_dotenv()

console = Console()


def main() -> None:
    """Delete every expired match post on the blog."""
    dry_run = "--dry-run" in sys.argv

    try:
        settings = load_settings(require_token=not dry_run)
    except ConfigError as e:
        console.print(f"[red]ERROR: {e}[/red]")
        console.print("Required: BLOG_ID, API_KEY, ACCESS_TOKEN")
        sys.exit(1)

    logger = PipelineLogger("delete-old-posts", action="Deleted")

    console.print("\n[bold]Stage 3: Delete Old Match Posts[/bold]")
    console.print(f"Blog ID: {settings.blog_id}")
    console.print(f"Mappings file: {settings.mappings_path}")
    console.print(f"Dry run: {dry_run}\n")

    summary = None
    try:
        with BloggerClient(settings.blog_id, settings.api_key, settings.access_token) as client:
            summary = delete_old_match_posts(
                client,
                logger,
                settings.now(),
                settings.mappings_path,
                delay=0 if dry_run else 10.0,
                dry_run=dry_run,
            )
    except Exception as e:
        console.print(f"[red bold]Error:[/red bold] {e}")
        logger.log_failure("run aborted", str(e))
        raise SystemExit(1) from e
    finally:
        # Keep the report of posts deleted before an abort
        log_path = logger.write(
            additional_summary={"Cleaned mappings": summary["mappings_removed"]} if summary else None
        )
        console.print(f"\n[dim]Log saved to: {log_path}[/dim]")

    console.print("\n[bold]Summary:[/bold]")
    console.print(f"  ✅ Deleted: {summary['successful']}")
    console.print(f"  ⊘ Skipped: {summary['skipped']}")
    console.print(f"  ❌ Errors: {summary['failed']}")
    console.print(f"  📊 Total processed: {summary['total']}")
    console.print(f"  🧹 Cleaned mappings: {summary['mappings_removed']}")

    console.print("\n[green]✓ Deletion stage complete[/green]")


if __name__ == "__main__":
    main()
