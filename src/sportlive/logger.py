"""Markdown run reports for the blog maintenance scripts."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any


class PipelineLogger:
    """Collect per-post outcomes of one run and write them as a markdown report."""

    def __init__(self, stage_name: str, log_dir: Path = Path("logs"), action: str = "Updated"):
        """Initialize logger for a run.

        Args:
            stage_name: Run name used in the file name (e.g. "delete-old-posts")
            log_dir: Directory to store reports
            action: Past-tense heading for successful items (e.g. "Deleted")
        """
        self.stage_name = stage_name
        self.log_dir = log_dir
        self.action = action
        self.start_time = datetime.now(tz=timezone.utc)

        timestamp = self.start_time.strftime("%Y-%m-%d-%H-%M")
        self.log_path = log_dir / f"{timestamp}-{stage_name}.md"

        self.successful: list[str] = []
        self.failed: list[tuple[str, str]] = []
        self.skipped: list[str] = []
        self.details: list[str] = []

    def log_success(self, item: str, details: str = "") -> None:
        self.successful.append(f"- ✅ {item}: {details}" if details else f"- ✅ {item}")

    def log_failure(self, item: str, error: str) -> None:
        self.failed.append((item, error))

    def log_skip(self, item: str, reason: str = "") -> None:
        self.skipped.append(f"- ⊘ {item}: {reason}" if reason else f"- ⊘ {item}")

    def log_detail(self, message: str) -> None:
        self.details.append(message)

    def counts(self) -> dict[str, int]:
        """Outcome counts for console summaries and tests."""
        return {
            "successful": len(self.successful),
            "failed": len(self.failed),
            "skipped": len(self.skipped),
            "total": len(self.successful) + len(self.failed) + len(self.skipped),
        }

    def render(self, additional_summary: dict[str, Any] | None = None) -> str:
        """Build the markdown report text."""
        duration = datetime.now(tz=timezone.utc) - self.start_time
        seconds = int(duration.total_seconds())
        counts = self.counts()

        lines = [
            f"# {self.stage_name} - {self.start_time.strftime('%Y-%m-%d %H:%M:%S')} UTC",
            "",
            f"**Duration:** {seconds // 60}m {seconds % 60}s",
            "",
            "## Summary",
            f"- ✅ {counts['successful']} {self.action.lower()}",
            f"- ❌ {counts['failed']} failed",
            f"- ⊘ {counts['skipped']} skipped",
            f"- 📊 {counts['total']} processed",
        ]
        for key, value in (additional_summary or {}).items():
            lines.append(f"- {key}: {value}")
        lines.append("")

        if self.successful:
            lines += [f"## {self.action}", *self.successful, ""]

        if self.failed:
            lines.append("## Failed")
            for item, error in self.failed:
                lines.append(f"- ❌ {item}")
                lines.extend(f"  {error_line}" for error_line in error.split("\n"))
            lines.append("")

        if self.skipped:
            lines += ["## Skipped", *self.skipped, ""]

        if self.details:
            lines += ["## Details", *self.details, ""]

        return "\n".join(lines)

    def write(self, additional_summary: dict[str, Any] | None = None) -> Path:
        """Write the report to disk.

        Returns:
            Path to the written report
        """
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_path.write_text(self.render(additional_summary), encoding="utf-8")
        return self.log_path
