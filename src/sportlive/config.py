"""Runtime configuration for the sportlive scripts.

Values come from the environment. Scripts call ``load_dotenv()`` first, so a
local ``.env`` file works too.
"""

import os
from datetime import datetime, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic import BaseModel

BLOGGER_API_BASE = "https://www.googleapis.com/blogger/v3"
SOURCE_SITE = "https://www.kooralivetv.com"
YESTERDAY_MATCHES_URL = f"{SOURCE_SITE}/matches-yesterday/"
DEFAULT_CORS_PROXY = "https://api.allorigins.win/raw?url="
DEFAULT_MAPPINGS_PATH = Path("match-urls.json")
LOCALTIME_PATH = Path("/etc/localtime")

# Markers written as the first line of generated post bodies
REPORT_TEMPLATE_VERSION = "SPORTLIVE_V2_2025"
RICH_REPORT_TEMPLATE_VERSION = "SPORTLIVE_REPORT_V1_2025"
CURRENT_TEMPLATE_VERSIONS = (REPORT_TEMPLATE_VERSION, RICH_REPORT_TEMPLATE_VERSION)


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""


class Settings(BaseModel):
    """Validated runtime settings."""

    blog_id: str
    api_key: str
    access_token: str | None = None
    mappings_path: Path = DEFAULT_MAPPINGS_PATH
    cors_proxy: str | None = DEFAULT_CORS_PROXY
    timezone: str | None = None

    def now(self) -> datetime:
        """Current time, timezone-aware, in the configured zone."""
        if self.timezone:
            return datetime.now(ZoneInfo(self.timezone))
        return datetime.now(local_zone())


def local_zone(localtime_path: Path = LOCALTIME_PATH) -> tzinfo:
    """The system timezone, with its DST rules.

    Read from the zone file behind /etc/localtime. Without one (e.g. on
    Windows) only the current UTC offset is known; set SPORTLIVE_TIMEZONE
    there so posts from before a DST change land on the right day.
    """
    try:
        with localtime_path.open("rb") as f:
            return ZoneInfo.from_file(f, key="localtime")
    except (OSError, ValueError):
        return datetime.now().astimezone().tzinfo


def load_settings(require_token: bool = True) -> Settings:
    """Build settings from environment variables.

    Args:
        require_token: Whether ACCESS_TOKEN is mandatory (write operations)

    Returns:
        Settings instance

    Raises:
        ConfigError: If any required variable is missing or the timezone is unknown
    """
    required = ["BLOG_ID", "API_KEY"]
    if require_token:
        required.append("ACCESS_TOKEN")

    missing = [name for name in required if not os.getenv(name)]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    # Empty CORS_PROXY disables the proxy, unset keeps the default
    cors_proxy = os.getenv("CORS_PROXY", DEFAULT_CORS_PROXY) or None

    timezone = os.getenv("SPORTLIVE_TIMEZONE") or None
    if timezone:
        try:
            ZoneInfo(timezone)
        except (KeyError, ValueError) as e:
            raise ConfigError(f"Unknown timezone in SPORTLIVE_TIMEZONE: {timezone}") from e

    return Settings(
        blog_id=os.environ["BLOG_ID"],
        api_key=os.environ["API_KEY"],
        access_token=os.getenv("ACCESS_TOKEN") or None,
        mappings_path=Path(os.getenv("MATCH_URLS_PATH") or DEFAULT_MAPPINGS_PATH),
        cors_proxy=cors_proxy,
        timezone=timezone,
    )
