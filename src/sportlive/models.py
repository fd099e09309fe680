"""Data models for blog posts, scraped matches and URL mappings.

These Pydantic models define the shapes passed between the fetch, extraction,
rendering and pipeline stages.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Type aliases
DateCategory = Literal["today", "yesterday", "older", "future"]


class BlogPost(BaseModel):
    """A post as returned by the Blogger API."""

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str = ""
    content: str = ""
    url: str = ""
    published: datetime

    @field_validator("title", "content", "url", mode="before")
    @classmethod
    def none_to_empty(cls, v: str | None) -> str:
        """The API omits or nulls out empty fields."""
        return v or ""


class MatchTeams(BaseModel):
    """Teams (and optional league) parsed from a post title or a match URL."""

    home_team: str
    away_team: str
    league: str = ""


class PostMatchData(MatchTeams):
    """Everything recoverable from an existing live match post."""

    match_time: str | None = None
    broadcaster: str | None = None
    home_logo: str | None = None
    away_logo: str | None = None


class ScrapedMatch(BaseModel):
    """A match found on the source site's listing page."""

    home_team: str
    away_team: str
    title: str
    match_link: str


class MatchEvent(BaseModel):
    """A single timeline event (goal, card, substitution)."""

    minute: str
    text: str
    type: str = "حدث"
    icon: str = "⚽"


class MatchDetails(BaseModel):
    """Details scraped from a match page. Unknown fields stay at their defaults."""

    home_team: str = ""
    away_team: str = ""
    home_score: int = 0
    away_score: int = 0
    score_found: bool = False
    home_logo: str = ""
    away_logo: str = ""
    home_lineup: list[str] = Field(default_factory=list)
    away_lineup: list[str] = Field(default_factory=list)
    events: list[MatchEvent] = Field(default_factory=list)
    league: str = ""
    stadium: str = ""
    kickoff: str = ""


class GeneratedPost(BaseModel):
    """Rendered title and HTML body ready to PUT back to the blog."""

    title: str
    content: str


class UrlMapping(BaseModel):
    """One entry of match-urls.json.

    Unknown keys are kept so that a load/save cycle never drops data.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    url: str
    readable_key: str | None = Field(default=None, alias="readableKey")
