import zoneinfo
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from sportlive.config import DEFAULT_CORS_PROXY, ConfigError, load_settings, local_zone

ENV_VARS = ["BLOG_ID", "API_KEY", "ACCESS_TOKEN", "MATCH_URLS_PATH", "CORS_PROXY", "SPORTLIVE_TIMEZONE"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_missing_variables_are_all_reported():
    with pytest.raises(ConfigError) as excinfo:
        load_settings()

    message = str(excinfo.value)
    assert "BLOG_ID" in message
    assert "API_KEY" in message
    assert "ACCESS_TOKEN" in message


def test_token_optional_for_read_only_runs(monkeypatch):
    monkeypatch.setenv("BLOG_ID", "123")
    monkeypatch.setenv("API_KEY", "key")

    settings = load_settings(require_token=False)

    assert settings.access_token is None
    assert settings.mappings_path == Path("match-urls.json")
    assert settings.cors_proxy == DEFAULT_CORS_PROXY
    assert settings.now().tzinfo is not None

    with pytest.raises(ConfigError, match="ACCESS_TOKEN"):
        load_settings()


def test_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("BLOG_ID", "123")
    monkeypatch.setenv("API_KEY", "key")
    monkeypatch.setenv("ACCESS_TOKEN", "token")
    monkeypatch.setenv("MATCH_URLS_PATH", str(tmp_path / "urls.json"))
    monkeypatch.setenv("CORS_PROXY", "")
    monkeypatch.setenv("SPORTLIVE_TIMEZONE", "UTC")

    settings = load_settings()

    assert settings.access_token == "token"
    assert settings.mappings_path == tmp_path / "urls.json"
    assert settings.cors_proxy is None
    assert settings.now().utcoffset().total_seconds() == 0


def test_unknown_timezone(monkeypatch):
    monkeypatch.setenv("BLOG_ID", "123")
    monkeypatch.setenv("API_KEY", "key")
    monkeypatch.setenv("SPORTLIVE_TIMEZONE", "Mars/Olympus_Mons")

    with pytest.raises(ConfigError, match="Unknown timezone"):
        load_settings(require_token=False)


def zone_file(name: str) -> Path:
    for root in zoneinfo.TZPATH:
        candidate = Path(root) / name
        if candidate.is_file():
            return candidate
    pytest.skip(f"no tz database entry for {name}")


def test_local_zone_keeps_dst_rules():
    zone = local_zone(zone_file("Europe/Berlin"))

    assert zone.utcoffset(datetime(2026, 7, 1)) == timedelta(hours=2)
    assert zone.utcoffset(datetime(2026, 1, 1)) == timedelta(hours=1)


def test_local_zone_without_zone_file(tmp_path):
    zone = local_zone(tmp_path / "localtime")

    assert datetime(2026, 10, 18, tzinfo=zone).utcoffset() is not None
