"""Flat-file store of tracked match post URLs (match-urls.json).

The file is a JSON object mapping a match key to ``{"url", "readableKey"}``.
It is read fully and rewritten fully on every change.
"""

import json
from pathlib import Path

from pydantic import ValidationError

from .models import MatchTeams, UrlMapping
from .titles import mapping_key, readable_key

UrlMappings = dict[str, UrlMapping]


class MappingStoreError(Exception):
    """Raised when the mappings file cannot be parsed."""


def load_url_mappings(path: Path) -> UrlMappings:
    """Load all mappings.

    Args:
        path: Path to match-urls.json

    Returns:
        Mappings keyed by match key; empty if the file does not exist

    Raises:
        MappingStoreError: If the file is not a JSON object of mapping entries
    """
    if not path.exists():
        return {}

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MappingStoreError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise MappingStoreError(f"{path} must contain a JSON object")

    try:
        return {key: UrlMapping.model_validate(entry) for key, entry in data.items()}
    except ValidationError as e:
        raise MappingStoreError(f"Invalid mapping entry in {path}: {e}") from e


def save_url_mappings(path: Path, mappings: UrlMappings) -> Path:
    """Rewrite the mappings file.

    Only keys present on load (or set explicitly) are written, so a
    load/save cycle reproduces the file, explicit nulls included.

    Returns:
        Path to the written file
    """
    data = {key: mapping.model_dump(by_alias=True, exclude_unset=True) for key, mapping in mappings.items()}
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path


def find_mapping_key(mappings: UrlMappings, url: str) -> str | None:
    """Key of the first mapping pointing at ``url``."""
    return next((key for key, mapping in mappings.items() if mapping.url == url), None)


def record_url_mapping(mappings: UrlMappings, teams: MatchTeams, url: str) -> str:
    """Add or replace the mapping for a match.

    Returns:
        The mapping key used
    """
    key = mapping_key(teams)
    mappings[key] = UrlMapping(url=url, readableKey=readable_key(teams))
    return key
