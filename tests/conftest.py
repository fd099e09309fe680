from datetime import datetime, timedelta, timezone

import pytest

from sportlive.models import BlogPost

NOW = datetime(2026, 10, 18, 22, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_post():
    """Build a BlogPost published ``hours_ago`` before NOW."""
    counter = iter(range(1, 10_000))

    def _make(title="Real Madrid vs Barcelona - La Liga", content="", hours_ago=1.0, url=None, post_id=None):
        post_id = post_id or str(next(counter))
        return BlogPost(
            id=post_id,
            title=title,
            content=content,
            url=url or f"https://sportlive.example.com/2026/10/post-{post_id}.html",
            published=NOW - timedelta(hours=hours_ago),
        )

    return _make
