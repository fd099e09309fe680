from datetime import datetime, timezone

import pytest

from sportlive.config import REPORT_TEMPLATE_VERSION, RICH_REPORT_TEMPLATE_VERSION
from sportlive.lifecycle import decide_conversion, has_current_template
from sportlive.models import BlogPost, MatchDetails, MatchEvent, PostMatchData, ScrapedMatch
from sportlive.render import (
    NOT_AVAILABLE,
    arabic_digits,
    format_arabic_date,
    format_arabic_timestamp,
    generate_match_report,
    generate_rich_match_report,
    report_title,
)

PUBLISHED = datetime(2026, 10, 17, 19, 0, tzinfo=timezone.utc)

DATA = PostMatchData(
    home_team="Real Madrid",
    away_team="Barcelona",
    league="La Liga",
    match_time="9:00 PM",
    broadcaster="beIN Sports 1",
    home_logo="https://cdn.example.com/real.png",
)

MATCH = ScrapedMatch(
    home_team="الأهلي",
    away_team="الزمالك",
    title="الأهلي ضد الزمالك",
    match_link="https://www.kooralivetv.com/matches/x/",
)


def test_arabic_dates():
    assert arabic_digits(2026) == "٢٠٢٦"
    assert format_arabic_date(datetime(2026, 10, 18)) == "١٨ أكتوبر ٢٠٢٦"
    assert format_arabic_timestamp(datetime(2026, 10, 18, 21, 5, 0)) == "١٨/١٠/٢٠٢٦، ٩:٠٥:٠٠ م"
    assert format_arabic_timestamp(datetime(2026, 1, 2, 0, 30, 0)) == "٢/١/٢٠٢٦، ١٢:٣٠:٠٠ ص"


def test_report_title():
    assert report_title("الأهلي", "الزمالك") == "تقرير المباراة: الأهلي ضد الزمالك"
    assert report_title("A", "B", "Cup") == "تقرير المباراة: A ضد B - Cup"


@pytest.mark.parametrize(
    "category, color",
    [("today", "#27ae60"), ("yesterday", "#f39c12"), ("older", "#95a5a6")],
)
def test_match_report_colour_follows_category(category, color):
    report = generate_match_report(DATA, category, PUBLISHED)

    assert f"border-bottom: 3px solid {color};" in report.content


def test_match_report_content():
    report = generate_match_report(DATA, "yesterday", PUBLISHED)

    assert report.title == "تقرير المباراة: Real Madrid ضد Barcelona - La Liga"
    assert report.content.startswith(f"<!-- {REPORT_TEMPLATE_VERSION} -->")
    assert 'class="match-report"' in report.content
    assert "انتهت مباراة الأمس" in report.content
    assert "9:00 PM" in report.content
    assert "beIN Sports 1" in report.content
    assert 'src="https://cdn.example.com/real.png"' in report.content
    assert "١٧ أكتوبر ٢٠٢٦" in report.content


def test_match_report_escapes_text():
    data = DATA.model_copy(update={"home_team": "Brighton & Hove", "broadcaster": "<script>x</script>"})

    report = generate_match_report(data, "older", PUBLISHED)

    assert "Brighton &amp; Hove" in report.content
    assert "<script>" not in report.content


def test_generated_report_is_not_converted_again(now):
    report = generate_match_report(DATA, "older", PUBLISHED)
    post = BlogPost(id="1", title=report.title, content=report.content, published=PUBLISHED)

    assert has_current_template(post)
    assert decide_conversion(post, now).act is False


def test_rich_report_with_score_events_and_lineups(now):
    details = MatchDetails(
        home_team="الأهلي",
        away_team="الزمالك",
        home_score=2,
        away_score=1,
        score_found=True,
        events=[MatchEvent(minute=str(m), text=f"حدث رقم {m}") for m in range(1, 11)],
        home_lineup=["الشناوي"],
        league="الدوري المصري",
        stadium="استاد القاهرة",
    )

    report = generate_rich_match_report(details, MATCH, now)

    assert report.title == "تقرير المباراة: الأهلي ضد الزمالك - الدوري المصري"
    assert report.content.startswith(f"<!-- {RICH_REPORT_TEMPLATE_VERSION} -->")
    assert "2 - 1" in report.content
    assert "حدث رقم 8" in report.content
    assert "حدث رقم 9" not in report.content
    assert "الشناوي" in report.content
    assert "استاد القاهرة" in report.content
    assert "١٨ أكتوبر ٢٠٢٦" in report.content


def test_rich_report_falls_back_to_listing_teams(now):
    report = generate_rich_match_report(MatchDetails(), MATCH, now)

    assert report.title == "تقرير المباراة: الأهلي ضد الزمالك"
    assert NOT_AVAILABLE in report.content
    assert "التشكيلة" not in report.content
    assert "أحداث المباراة</h3>" not in report.content
