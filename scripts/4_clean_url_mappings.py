#!/usr/bin/env python3
"""Stage 4: Prune match-urls.json.

Drops mappings whose post no longer exists or was published before
yesterday. Only read access to the blog is needed.

Usage:
    uv run python scripts/4_clean_url_mappings.py            # Rewrite the file
    uv run python scripts/4_clean_url_mappings.py --dry-run  # Only log decisions
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv
from rich.console import Console

from sportlive.blogger import BloggerClient
from sportlive.config import ConfigError, load_settings
from sportlive.logger import PipelineLogger
from sportlive.pipeline import clean_url_mappings

# Load environment variables from .env file
load_dotenv()

console = Console()


def main() -> None:
    """Check every tracked mapping against the blog."""
    dry_run = "--dry-run" in sys.argv

    try:
        settings = load_settings(require_token=False)
    except ConfigError as e:
        console.print(f"[red]ERROR: {e}[/red]")
        console.print("Required: BLOG_ID, API_KEY")
        sys.exit(1)

    logger = PipelineLogger("clean-url-mappings", action="Removed")

    console.print("\n[bold]Stage 4: Clean URL Mappings[/bold]")
    console.print(f"Mappings file: {settings.mappings_path}")
    console.print(f"Dry run: {dry_run}\n")

    summary = None
    try:
        with BloggerClient(settings.blog_id, settings.api_key) as client:
            summary = clean_url_mappings(
                client,
                logger,
                settings.now(),
                settings.mappings_path,
                delay=0 if dry_run else 2.0,
                dry_run=dry_run,
            )
    except Exception as e:
        console.print(f"[red bold]Error:[/red bold] {e}")
        logger.log_failure("run aborted", str(e))
        raise SystemExit(1) from e
    finally:
        # Keep the report of mappings checked before an abort
        log_path = logger.write(additional_summary={"Final count": summary["mappings_kept"]} if summary else None)
        console.print(f"\n[dim]Log saved to: {log_path}[/dim]")

    console.print("\n[bold]Summary:[/bold]")
    console.print(f"  📌 Kept: {summary['mappings_kept']}")
    console.print(f"  🗑️ Removed: {summary['successful']}")
    console.print(f"  ❌ Errors: {summary['failed']}")

    console.print("\n[green]✓ Cleanup stage complete[/green]")


if __name__ == "__main__":
    main()
