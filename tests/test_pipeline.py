import json
from urllib.parse import quote

import pytest

from sportlive.blogger import BloggerError
from sportlive.config import RICH_REPORT_TEMPLATE_VERSION, YESTERDAY_MATCHES_URL
from sportlive.fetch import FetchError
from sportlive.logger import PipelineLogger
from sportlive.pipeline import (
    clean_url_mappings,
    convert_match_posts,
    delete_old_match_posts,
    publish_match_reports,
)


class FakeBlogger:
    """In-memory stand-in for BloggerClient."""

    def __init__(self, posts=(), failing=(), gone=(), lookups=None, list_error=None):
        self.posts = list(posts)
        self.failing = set(failing)
        self.gone = set(gone)
        self.lookups = lookups or {}
        self.list_error = list_error
        self.updated = []
        self.deleted = []

    def list_posts(self, max_results=500, **kwargs):
        if self.list_error:
            raise self.list_error
        return self.posts[:max_results]

    def update_post(self, post_id, title, content):
        if post_id in self.failing:
            raise BloggerError(f"HTTP 500 for PUT /posts/{post_id}", status_code=500, payload="backend error")
        self.updated.append((post_id, title, content))

    def delete_post(self, post_id):
        if post_id in self.failing:
            raise BloggerError(f"HTTP 500 for DELETE /posts/{post_id}", status_code=500)
        self.deleted.append(post_id)
        return post_id not in self.gone

    def find_post_by_url(self, post_url):
        result = self.lookups.get(post_url)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def logger(tmp_path):
    return PipelineLogger("test-run", log_dir=tmp_path / "logs")


def write_mappings(path, mappings):
    path.write_text(json.dumps(mappings, ensure_ascii=False), encoding="utf-8")


def read_mappings(path):
    return json.loads(path.read_text(encoding="utf-8"))


# convert_match_posts


def test_convert_match_posts(make_post, now, logger):
    yesterday = make_post(content="<p>⏰ 9:00 PM</p>", hours_ago=30)
    live = make_post(title="Arsenal vs Chelsea", hours_ago=1)
    news = make_post(title="Transfer window news", hours_ago=40)
    report = make_post(content="<!-- SPORTLIVE_V2_2025 --><div class='match-report'></div>", hours_ago=40)
    broken = make_post(title="Ajax vs PSV - Eredivisie", hours_ago=30)
    client = FakeBlogger([yesterday, live, news, report, broken], failing={broken.id})

    summary = convert_match_posts(client, logger, now, delay=0)

    assert summary == {"successful": 1, "failed": 1, "skipped": 2, "total": 4}
    post_id, title, content = client.updated[0]
    assert post_id == yesterday.id
    assert title == "تقرير المباراة: Real Madrid ضد Barcelona - La Liga"
    assert "انتهت مباراة الأمس" in content
    assert "backend error" in logger.failed[0][1]


def test_convert_skips_titles_without_teams(make_post, now, logger):
    client = FakeBlogger([make_post(title="مباراة اليوم المهمة", hours_ago=30)])

    summary = convert_match_posts(client, logger, now, delay=0)

    assert summary["skipped"] == 1
    assert client.updated == []


def test_convert_dry_run_updates_nothing(make_post, now, logger):
    client = FakeBlogger([make_post(hours_ago=30)])

    summary = convert_match_posts(client, logger, now, delay=0, dry_run=True)

    assert summary["skipped"] == 1
    assert client.updated == []


def test_listing_failure_is_logged(now, logger):
    client = FakeBlogger(list_error=BloggerError("HTTP 403 for GET /posts", status_code=403))

    summary = convert_match_posts(client, logger, now, delay=0)

    assert summary == {"successful": 0, "failed": 1, "skipped": 0, "total": 1}


# delete_old_match_posts


def test_delete_old_match_posts(make_post, now, logger, tmp_path):
    expired = make_post(hours_ago=30)
    upcoming = make_post(content="<p>⏰ 9:00 PM</p>", hours_ago=2)
    already_gone = make_post(title="Arsenal vs Chelsea", hours_ago=26)
    broken = make_post(title="Ajax vs PSV", hours_ago=40)
    client = FakeBlogger([expired, upcoming, already_gone, broken], failing={broken.id}, gone={already_gone.id})

    mappings_path = tmp_path / "match-urls.json"
    write_mappings(
        mappings_path,
        {
            "real-madrid-barcelona": {"url": expired.url, "readableKey": "Real Madrid vs Barcelona"},
            "ahly-zamalek": {"url": "https://sportlive.example.com/2026/10/other.html"},
        },
    )

    summary = delete_old_match_posts(client, logger, now, mappings_path, delay=0)

    assert summary == {"successful": 2, "failed": 1, "skipped": 1, "total": 4, "mappings_removed": 1}
    assert client.deleted == [expired.id, already_gone.id]
    assert list(read_mappings(mappings_path)) == ["ahly-zamalek"]
    assert "already deleted" in logger.successful[1]


def test_delete_dry_run_keeps_posts_and_mappings(make_post, now, logger, tmp_path):
    expired = make_post(hours_ago=30)
    client = FakeBlogger([expired])
    mappings_path = tmp_path / "match-urls.json"
    write_mappings(mappings_path, {"real-madrid-barcelona": {"url": expired.url}})
    before = mappings_path.read_text(encoding="utf-8")

    summary = delete_old_match_posts(client, logger, now, mappings_path, delay=0, dry_run=True)

    assert summary["mappings_removed"] == 0
    assert client.deleted == []
    assert mappings_path.read_text(encoding="utf-8") == before


# clean_url_mappings


def test_clean_url_mappings(make_post, now, logger, tmp_path):
    current = make_post(hours_ago=30)
    stale = make_post(hours_ago=60)
    mappings_path = tmp_path / "match-urls.json"
    write_mappings(
        mappings_path,
        {
            "current": {"url": current.url, "readableKey": "Current"},
            "stale": {"url": stale.url},
            "missing": {"url": "https://sportlive.example.com/2026/10/deleted.html"},
            "unreachable": {"url": "https://sportlive.example.com/2026/10/timeout.html"},
        },
    )
    client = FakeBlogger(
        lookups={
            current.url: current,
            stale.url: stale,
            "https://sportlive.example.com/2026/10/timeout.html": BloggerError("Request failed"),
        }
    )

    summary = clean_url_mappings(client, logger, now, mappings_path, delay=0)

    assert summary == {"successful": 2, "failed": 1, "skipped": 1, "total": 4, "mappings_kept": 2}
    assert sorted(read_mappings(mappings_path)) == ["current", "unreachable"]


def test_clean_without_mappings_file(now, logger, tmp_path):
    mappings_path = tmp_path / "match-urls.json"

    summary = clean_url_mappings(FakeBlogger(), logger, now, mappings_path, delay=0)

    assert summary["mappings_kept"] == 0
    assert not mappings_path.exists()


def test_clean_dry_run_leaves_file(now, logger, tmp_path):
    mappings_path = tmp_path / "match-urls.json"
    write_mappings(mappings_path, {"gone": {"url": "https://sportlive.example.com/gone.html"}})

    summary = clean_url_mappings(FakeBlogger(), logger, now, mappings_path, delay=0, dry_run=True)

    assert summary["successful"] == 0
    assert summary["skipped"] == 1
    assert list(read_mappings(mappings_path)) == ["gone"]


# publish_match_reports

SITE = "https://www.kooralivetv.com"
AHLY_LINK = f"{SITE}/matches/{quote('الأهلي-و-الزمالك-في-الدوري-المصري')}/"
PYRAMIDS_LINK = f"{SITE}/matches/{quote('بيراميدز-و-المصري')}/"

LISTING_HTML = f"""
<html><body>
  <a href="{AHLY_LINK}">الأهلي ضد الزمالك</a>
  <a href="{PYRAMIDS_LINK}">بيراميدز ضد المصري</a>
</body></html>
"""

MATCH_HTML = """
<html><head><title>الأهلي ضد الزمالك</title></head>
<body>
  <p>نتيجة المباراة 2 - 1</p>
  <p>23' هدف وسام أبو علي</p>
</body></html>
"""


def fake_fetch(pages):
    calls = []

    def fetch(url, proxy=None):
        calls.append((url, proxy))
        page = pages.get(url)
        if page is None:
            raise FetchError(f"HTTP 404 for {url}")
        return page

    fetch.calls = calls
    return fetch


def test_publish_match_reports(make_post, now, logger, tmp_path):
    post = make_post(title="الأهلي ضد الزمالك - الدوري المصري", hours_ago=20)
    client = FakeBlogger([post, make_post(title="Weekly news", hours_ago=3)])
    fetch = fake_fetch({YESTERDAY_MATCHES_URL: LISTING_HTML, AHLY_LINK: MATCH_HTML})
    mappings_path = tmp_path / "match-urls.json"

    summary = publish_match_reports(
        client, logger, now, mappings_path, fetch=fetch, proxy="https://proxy.example/?u=", delay=0
    )

    assert summary == {"successful": 1, "failed": 0, "skipped": 1, "total": 2, "matches_found": 2}
    post_id, title, content = client.updated[0]
    assert post_id == post.id
    assert title == "تقرير المباراة: الأهلي ضد الزمالك"
    assert content.startswith(f"<!-- {RICH_REPORT_TEMPLATE_VERSION} -->")
    assert "2 - 1" in content
    assert all(proxy == "https://proxy.example/?u=" for _, proxy in fetch.calls)
    assert read_mappings(mappings_path) == {
        "الأهلي-الزمالك": {"url": post.url, "readableKey": "الأهلي vs الزمالك"}
    }


def test_publish_listing_unavailable(now, logger, tmp_path):
    client = FakeBlogger()

    summary = publish_match_reports(client, logger, now, tmp_path / "m.json", fetch=fake_fetch({}), delay=0)

    assert summary["matches_found"] == 0
    assert summary["failed"] == 1
    assert client.updated == []


def test_publish_match_page_unavailable_leaves_post(make_post, now, logger, tmp_path):
    client = FakeBlogger([make_post(title="الأهلي ضد الزمالك", hours_ago=20)])
    fetch = fake_fetch({YESTERDAY_MATCHES_URL: LISTING_HTML})

    summary = publish_match_reports(client, logger, now, tmp_path / "m.json", fetch=fetch, delay=0)

    assert summary["failed"] == 1
    assert client.updated == []
    assert not (tmp_path / "m.json").exists()


def test_publish_dry_run(make_post, now, logger, tmp_path):
    client = FakeBlogger([make_post(title="الأهلي ضد الزمالك", hours_ago=20)])
    fetch = fake_fetch({YESTERDAY_MATCHES_URL: LISTING_HTML, AHLY_LINK: MATCH_HTML})

    summary = publish_match_reports(client, logger, now, tmp_path / "m.json", fetch=fetch, delay=0, dry_run=True)

    assert summary["successful"] == 0
    assert client.updated == []
