"""Render match reports as inline-styled HTML post bodies.

Two templates exist:
- the post-derived report (REPORT_TEMPLATE_VERSION) replaces a live match
  post once the match is over, using only what the live post contained
- the rich report (RICH_REPORT_TEMPLATE_VERSION) is built from a scraped
  match page and carries score, events and lineups

Both start with an HTML comment naming the template version; the pipelines
use it to detect posts that are already up to date.
"""

from datetime import datetime
from html import escape

from .config import REPORT_TEMPLATE_VERSION, RICH_REPORT_TEMPLATE_VERSION
from .models import DateCategory, GeneratedPost, MatchDetails, PostMatchData, ScrapedMatch
from .titles import REPORT_TITLE_PREFIX

NOT_AVAILABLE = "غير متوفر"
UNSPECIFIED = "غير محدد"
MAX_RENDERED_EVENTS = 8

ARABIC_MONTHS = [
    "يناير",
    "فبراير",
    "مارس",
    "أبريل",
    "مايو",
    "يونيو",
    "يوليو",
    "أغسطس",
    "سبتمبر",
    "أكتوبر",
    "نوفمبر",
    "ديسمبر",
]

_ARABIC_DIGITS = str.maketrans("0123456789", "٠١٢٣٤٥٦٧٨٩")

# category -> (header colour, status icon, status text)
_CATEGORY_STYLE: dict[str, tuple[str, str, str]] = {
    "today": ("#27ae60", "🔴", "مباراة اليوم"),
    "yesterday": ("#f39c12", "✅", "انتهت المباراة"),
}
_DEFAULT_STYLE = ("#95a5a6", "📋", "مباراة منتهية")

RICH_HEADER_COLOR = "#f39c12"
AWAY_COLOR = "#e74c3c"


def arabic_digits(value: int | str) -> str:
    """Write digits with Arabic-Indic numerals."""
    return str(value).translate(_ARABIC_DIGITS)


def format_arabic_date(dt: datetime) -> str:
    """Long Egyptian-Arabic date, e.g. "١٨ أكتوبر ٢٠٢٦"."""
    return f"{arabic_digits(dt.day)} {ARABIC_MONTHS[dt.month - 1]} {arabic_digits(dt.year)}"


def format_arabic_timestamp(dt: datetime) -> str:
    """Short date and 12h time, e.g. "١٨/١٠/٢٠٢٦، ٩:٠٥:٠٠ م"."""
    hour = dt.hour % 12 or 12
    period = "ص" if dt.hour < 12 else "م"
    date_part = arabic_digits(f"{dt.day}/{dt.month}/{dt.year}")
    time_part = arabic_digits(f"{hour}:{dt.minute:02d}:{dt.second:02d}")
    return f"{date_part}، {time_part} {period}"


def report_title(home_team: str, away_team: str, league: str = "") -> str:
    """Title shared by both report templates."""
    title = f"{REPORT_TITLE_PREFIX}: {home_team} ضد {away_team}"
    return f"{title} - {league}" if league else title


def _team_logo(logo: str | None, team: str, color: str, size: int = 70, fallback: str = "⚽") -> str:
    if logo:
        return (
            f'<img src="{escape(logo)}" alt="{escape(team)}" '
            f'style="width: {size}px; height: {size}px; object-fit: contain;">'
        )
    return f'<span style="color: {color}; font-size: 28px; font-weight: bold;">{fallback}</span>'


def _team_block(side: str, team: str, logo: str | None, color: str, label: str) -> str:
    return f"""
      <div class="team {side}-team" style="text-align: center; flex: 1; min-width: 200px;">
        <div class="team-logo" style="width: 80px; height: 80px; border-radius: 50%; margin: 0 auto 15px; display: flex; align-items: center; justify-content: center; box-shadow: 0 5px 15px rgba(0,0,0,0.2); background: white; border: 3px solid {color}; overflow: hidden;">
          {_team_logo(logo, team, color)}
        </div>
        <h3 style="color: #2c3e50; margin: 0; font-size: 20px; font-weight: 600; word-wrap: break-word;">{escape(team)}</h3>
        <p style="color: #7f8c8d; margin: 5px 0 0 0; font-size: 14px;">{label}</p>
      </div>"""


def _info_card(icon: str, label: str, value: str, color: str) -> str:
    return f"""
      <div class="info-card" style="padding: 20px; background: linear-gradient(135deg, #f8f9fa 0%, #e9ecef 100%); border-radius: 10px; border-left: 4px solid {color};">
        <div style="display: flex; align-items: center; gap: 10px; margin-bottom: 8px;">
          <span style="font-size: 20px;">{icon}</span>
          <strong style="color: #2c3e50; font-size: 16px;">{label}</strong>
        </div>
        <p style="margin: 0; color: #34495e; font-size: 15px;">{escape(value)}</p>
      </div>"""


def _section_heading(icon: str, text: str, color: str, text_color: str = "#2c3e50") -> str:
    return f"""
    <h3 style="color: {text_color}; margin: 0 0 20px 0; font-size: 20px; display: flex; align-items: center; gap: 10px;">
      <span style="background: {color}; color: white; width: 35px; height: 35px; border-radius: 50%; display: flex; align-items: center; justify-content: center; font-size: 16px;">{icon}</span>
      {text}
    </h3>"""


def _paragraph(html: str) -> str:
    return f'<p style="margin: 0 0 15px 0;">{html}</p>'


def _note(text: str, background: str, border: str, extra_style: str = "") -> str:
    return (
        f'<p style="margin: 0; padding: 15px; background: {background}; border-radius: 8px; '
        f'border-left: 4px solid {border};{extra_style}">{text}</p>'
    )


def _summary(data: PostMatchData, category: DateCategory, color: str, date_text: str) -> str:
    """Category-specific summary paragraphs."""
    home = escape(data.home_team)
    away = escape(data.away_team)
    league = escape(data.league or "البطولة")
    teams = f"بين فريق <strong>{home}</strong> وفريق <strong>{away}</strong> في إطار منافسات <strong>{league}</strong>."

    def strong(value: str) -> str:
        return f'<strong style="color: {color};">{escape(value)}</strong>'

    parts: list[str] = []
    if category == "today":
        parts.append(_paragraph(f"{strong('مباراة اليوم')} {teams}"))
        if data.match_time:
            parts.append(_paragraph(f"⏰ موعد انطلاق المباراة: {strong(data.match_time)}"))
        if data.broadcaster:
            parts.append(_paragraph(f"📺 يمكن متابعة المباراة عبر قناة: {strong(data.broadcaster)}"))
        parts.append(_note("سيتم تحديث النتائج والأحداث تلقائياً بعد انتهاء المباراة.", "#e8f5e8", "#27ae60"))
    elif category == "yesterday":
        parts.append(_paragraph(f"{strong('انتهت مباراة الأمس')} {teams}"))
        if data.match_time:
            parts.append(_paragraph(f"⏰ أقيمت المباراة في تمام الساعة: {strong(data.match_time)}"))
        if data.broadcaster:
            parts.append(_paragraph(f"📺 نقلت المباراة عبر قناة: {strong(data.broadcaster)}"))
        parts.append(
            _note(
                "للحصول على النتائج التفصيلية والملخص الكامل، يرجى متابعة القنوات الرياضية المختصة.",
                "#fff3cd",
                "#f39c12",
            )
        )
    else:
        parts.append(_paragraph(f"{strong('مباراة منتهية')} {teams}"))
        parts.append(_paragraph(f"📅 أقيمت هذه المباراة بتاريخ: {strong(date_text)}"))
        if data.match_time:
            parts.append(_paragraph(f"⏰ في تمام الساعة: {strong(data.match_time)}"))
        parts.append(
            _note(
                "هذه مباراة من الأرشيف وقد انتهت منذ فترة.",
                "#f8f9fa",
                "#95a5a6",
                " color: #7f8c8d; font-style: italic;",
            )
        )

    return "\n         ".join(parts)


def _quick_link(href: str, icon: str, text: str, background: str) -> str:
    return f"""
      <a href="{href}" style="display: flex; align-items: center; gap: 10px; padding: 15px; background: {background}; color: white; text-decoration: none; border-radius: 8px; font-weight: 600; transition: all 0.3s ease; box-shadow: 0 3px 10px rgba(0,0,0,0.2);">
        <span style="font-size: 18px;">{icon}</span>
        {text}
      </a>"""


REPORT_STYLES = """
<style>
.match-report a:hover {
  transform: translateY(-2px);
  box-shadow: 0 5px 15px rgba(0,0,0,0.3) !important;
}

@media (max-width: 768px) {
  .teams-display {
    flex-direction: column !important;
    gap: 30px !important;
  }

  .vs-section {
    order: 2;
    margin: 20px 0 !important;
  }

  .home-team {
    order: 1;
  }

  .away-team {
    order: 3;
  }

  .info-grid {
    grid-template-columns: 1fr !important;
  }

  .links-section div {
    grid-template-columns: 1fr !important;
  }
}

@media (max-width: 480px) {
  .match-report {
    margin: 10px !important;
    padding: 15px !important;
  }

  .teams-container {
    padding: 20px !important;
  }

  .match-info, .summary-section, .links-section {
    padding: 20px !important;
  }
}
</style>
"""


def generate_match_report(data: PostMatchData, category: DateCategory, published: datetime) -> GeneratedPost:
    """Build the static report that replaces a live match post.

    Args:
        data: Match data extracted from the live post
        category: Date category of the post
        published: Post publish time (shown as the match date)

    Returns:
        GeneratedPost with report title and HTML body
    """
    color, status_icon, status_text = _CATEGORY_STYLE.get(category, _DEFAULT_STYLE)
    date_text = format_arabic_date(published)

    cards = [
        _info_card("🏆", "البطولة", data.league or UNSPECIFIED, color),
        _info_card("📅", "التاريخ", date_text, color),
    ]
    if data.match_time:
        cards.append(_info_card("⏰", "التوقيت", data.match_time, color))
    if data.broadcaster:
        cards.append(_info_card("📺", "القناة الناقلة", data.broadcaster, color))

    links = "".join(
        [
            _quick_link("/", "🏠", "الصفحة الرئيسية", color),
            _quick_link("/", "⚽", "مباريات أخرى", "#34495e"),
            _quick_link("/", "📺", "البث المباشر", AWAY_COLOR),
        ]
    )

    content = f"""<!-- {REPORT_TEMPLATE_VERSION} -->
<div class="match-report" style="max-width: 800px; margin: 20px auto; padding: 20px; background: linear-gradient(135deg, #f8f9fa 0%, #ffffff 100%); border-radius: 15px; box-shadow: 0 10px 30px rgba(0,0,0,0.1); font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif; border: 1px solid #e9ecef;">

  <div class="header" style="text-align: center; margin-bottom: 30px; padding-bottom: 20px; border-bottom: 3px solid {color};">
    <h1 style="color: #2c3e50; margin: 0; font-size: 28px; font-weight: 700;">
      📊 تقرير المباراة
    </h1>
    <p style="color: #7f8c8d; margin: 10px 0 0 0; font-size: 16px;">{escape(data.league or "مباراة كرة قدم")}</p>
  </div>

  <div class="teams-container" style="background: white; padding: 30px; border-radius: 12px; margin-bottom: 25px; box-shadow: 0 5px 15px rgba(0,0,0,0.08);">
    <div class="teams-display" style="display: flex; justify-content: space-between; align-items: center; gap: 20px; flex-wrap: wrap;">
      {_team_block("home", data.home_team, data.home_logo, color, "الفريق المضيف")}

      <div class="vs-section" style="text-align: center; margin: 0 20px;">
        <div style="background: {color}; color: white; width: 60px; height: 60px; border-radius: 50%; display: flex; align-items: center; justify-content: center; margin: 0 auto 10px; font-weight: bold; font-size: 18px; box-shadow: 0 5px 15px rgba(0,0,0,0.2);">
          VS
        </div>
        <p style="color: #95a5a6; margin: 0; font-size: 12px;">{date_text}</p>
      </div>
      {_team_block("away", data.away_team, data.away_logo, AWAY_COLOR, "الفريق الضيف")}
    </div>
  </div>

  <div class="status-section" style="text-align: center; margin-bottom: 30px;">
    <div style="display: inline-block; padding: 15px 30px; background: {color}; color: white; border-radius: 50px; font-weight: 600; font-size: 16px; box-shadow: 0 5px 15px rgba(0,0,0,0.2);">
      {status_icon} {status_text}
    </div>
  </div>

  <div class="match-info" style="background: white; padding: 25px; border-radius: 12px; margin-bottom: 25px; box-shadow: 0 5px 15px rgba(0,0,0,0.08);">
    {_section_heading("📋", "معلومات المباراة", color)}
    <div class="info-grid" style="display: grid; grid-template-columns: repeat(auto-fit, minmax(280px, 1fr)); gap: 15px;">
      {"".join(cards)}
    </div>
  </div>

  <div class="summary-section" style="background: linear-gradient(135deg, #ffffff 0%, #f8f9fa 100%); padding: 25px; border-radius: 12px; margin-bottom: 25px; border: 1px solid #e9ecef;">
    {_section_heading("🎯", "ملخص المباراة", color, text_color=color)}
    <div style="color: #2c3e50; line-height: 1.8; font-size: 16px;">
      {_summary(data, category, color, date_text)}
    </div>
  </div>

  <div class="links-section" style="background: white; padding: 25px; border-radius: 12px; box-shadow: 0 5px 15px rgba(0,0,0,0.08);">
    {_section_heading("🔗", "روابط سريعة", color)}
    <div style="display: grid; grid-template-columns: repeat(auto-fit, minmax(180px, 1fr)); gap: 12px;">{links}
    </div>
  </div>

</div>
{REPORT_STYLES}"""

    return GeneratedPost(title=report_title(data.home_team, data.away_team, data.league), content=content)


def _score_team(team: str, logo: str, fallback: str) -> str:
    if logo:
        badge = (
            f'<img src="{escape(logo)}" alt="{escape(team)}" '
            'style="width: 50px; height: 50px; object-fit: contain; border-radius: 50%;">'
        )
    else:
        badge = f'<span style="font-size: 24px;">{fallback}</span>'
    return f"""
      <div style="text-align: center; flex: 1; min-width: 120px;">
        <div style="width: 60px; height: 60px; border-radius: 50%; margin: 0 auto 2%; display: flex; align-items: center; justify-content: center; background: rgba(255,255,255,0.2);">
          {badge}
        </div>
        <h3 style="margin: 0; font-size: clamp(14px, 3vw, 18px);">{escape(team)}</h3>
      </div>"""


def _events_section(details: MatchDetails) -> str:
    if not details.events:
        return ""

    rows = "".join(
        f"""
      <div style="display: flex; align-items: center; gap: 3%; padding: 2%; margin-bottom: 2%; background: #f8f9fa; border-radius: 8px; border-left: 4px solid {RICH_HEADER_COLOR};">
        <div style="background: {RICH_HEADER_COLOR}; color: white; width: 40px; height: 40px; border-radius: 50%; display: flex; align-items: center; justify-content: center; font-weight: bold;">{escape(event.minute)}'</div>
        <span style="font-size: 20px;">{event.icon}</span>
        <div style="flex: 1;">
          <p style="margin: 0; color: #2c3e50; font-weight: bold;">{escape(event.text)}</p>
          <p style="margin: 0; color: #7f8c8d; font-size: 14px;">{escape(event.type)}</p>
        </div>
      </div>"""
        for event in details.events[:MAX_RENDERED_EVENTS]
    )
    return f"""
  <div style="background: white; padding: 3%; border-radius: 12px; margin-bottom: 3%; box-shadow: 0 5px 15px rgba(0,0,0,0.08);">
    <h3 style="color: #2c3e50; margin: 0 0 2% 0; font-size: clamp(18px, 4vw, 22px);">⚽ أحداث المباراة</h3>{rows}
  </div>"""


def _lineup_column(team: str, players: list[str]) -> str:
    items = "".join(f'<li style="padding: 4px 0; color: #34495e;">{escape(p)}</li>' for p in players)
    return f"""
      <div style="flex: 1; min-width: 160px;">
        <h4 style="margin: 0 0 2% 0; color: #2c3e50;">{escape(team)}</h4>
        <ul style="margin: 0; padding-right: 20px;">{items or f"<li>{NOT_AVAILABLE}</li>"}</ul>
      </div>"""


def _lineups_section(details: MatchDetails, home: str, away: str) -> str:
    if not details.home_lineup and not details.away_lineup:
        return ""
    return f"""
  <div style="background: white; padding: 3%; border-radius: 12px; margin-bottom: 3%; box-shadow: 0 5px 15px rgba(0,0,0,0.08);">
    <h3 style="color: #2c3e50; margin: 0 0 2% 0; font-size: clamp(18px, 4vw, 22px);">👥 التشكيلة</h3>
    <div style="display: flex; gap: 3%; flex-wrap: wrap;">{_lineup_column(home, details.home_lineup)}{_lineup_column(away, details.away_lineup)}
    </div>
  </div>"""


def _rich_info_row(label: str, value: str) -> str:
    return f"""
      <div style="padding: 3%; background: #f8f9fa; border-radius: 10px; border-left: 4px solid {RICH_HEADER_COLOR}; margin-bottom: 2%; width: 100%;">
        <p style="margin: 0; color: #34495e;"><strong>{label}:</strong> {value}</p>
      </div>"""


def generate_rich_match_report(details: MatchDetails, match: ScrapedMatch, now: datetime) -> GeneratedPost:
    """Build a full report from a scraped match page.

    Args:
        details: Scraped match details
        match: Listing entry the details belong to (fallback team names)
        now: Generation time (shown as date and last update)

    Returns:
        GeneratedPost with report title and HTML body
    """
    home = details.home_team or match.home_team
    away = details.away_team or match.away_team
    final_score = f"{details.home_score} - {details.away_score}" if details.score_found else NOT_AVAILABLE
    competition = details.league or UNSPECIFIED

    info_rows = [
        _rich_info_row("🏆 البطولة", escape(competition)),
        _rich_info_row("📅 التاريخ", format_arabic_date(now)),
        _rich_info_row("🎯 النتيجة", final_score),
    ]
    if details.stadium:
        info_rows.append(_rich_info_row("🏟️ الملعب", escape(details.stadium)))
    if details.kickoff:
        info_rows.append(_rich_info_row("⏰ التوقيت", escape(details.kickoff)))
    info_rows.append(_rich_info_row("📊 أحداث المباراة", f"{len(details.events)} حدث"))
    info_rows.append(_rich_info_row("🔄 آخر تحديث", format_arabic_timestamp(now)))

    competition_clause = f" في إطار منافسات <strong>{escape(competition)}</strong>" if details.league else ""
    score_clause = f" بنتيجة <strong>{final_score}</strong>" if details.score_found else ""

    content = f"""<!-- {RICH_REPORT_TEMPLATE_VERSION} -->
<div class="match-report" style="max-width: 95%; margin: 2% auto; padding: 2%; background: linear-gradient(135deg, #f8f9fa 0%, #ffffff 100%); border-radius: 15px; box-shadow: 0 10px 30px rgba(0,0,0,0.1); font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;">

  <div class="header" style="text-align: center; margin-bottom: 3%; padding-bottom: 2%; border-bottom: 3px solid {RICH_HEADER_COLOR};">
    <h1 style="color: #2c3e50; margin: 0; font-size: clamp(20px, 5vw, 28px); font-weight: 700;">
      📊 تقرير المباراة الشامل
    </h1>
    <p style="color: #7f8c8d; margin: 1% 0 0 0; font-size: clamp(14px, 3vw, 16px);">{escape(competition)}</p>
  </div>

  <div class="score-section" style="background: linear-gradient(135deg, {RICH_HEADER_COLOR} 0%, #34495e 100%); color: white; padding: 3%; border-radius: 12px; margin-bottom: 3%; text-align: center;">
    <h2 style="margin: 0 0 2% 0; font-size: clamp(18px, 4vw, 24px);">النتيجة النهائية</h2>
    <div style="display: flex; justify-content: center; align-items: center; gap: 3%; flex-wrap: wrap;">{_score_team(home, details.home_logo, "🏠")}
      <div style="background: rgba(255,255,255,0.2); padding: 2% 4%; border-radius: 12px; min-width: 120px;">
        <span style="font-size: clamp(24px, 8vw, 48px); font-weight: bold;">{final_score}</span>
      </div>{_score_team(away, details.away_logo, "🏃")}
    </div>
  </div>
{_events_section(details)}{_lineups_section(details, home, away)}
  <div style="background: white; padding: 3%; border-radius: 12px; margin-bottom: 3%; box-shadow: 0 5px 15px rgba(0,0,0,0.08); width: 100%;">
    <h3 style="color: #2c3e50; margin: 0 0 2% 0; font-size: clamp(18px, 4vw, 22px);">📋 معلومات المباراة</h3>
    <div style="display: block; width: 100%;">{"".join(info_rows)}
    </div>
  </div>

  <div style="background: #fff3cd; padding: 3%; border-radius: 12px; margin-bottom: 3%; border-left: 4px solid #ffc107;">
    <h3 style="color: #856404; margin: 0 0 2% 0;">🎯 معلومات عامة</h3>
    <p style="margin: 0 0 2% 0; color: #856404;">
      <strong>انتهت المباراة</strong> بين فريق <strong>{escape(home)}</strong> وفريق <strong>{escape(away)}</strong>{competition_clause}{score_clause}.
    </p>
    <p style="margin: 0; font-weight: 600; color: #856404;">
      للحصول على النتائج التفصيلية والملخص الكامل، يرجى متابعة القنوات الرياضية المختصة.
    </p>
  </div>

  <div style="background: #d4edda; padding: 3%; border-radius: 12px; border-left: 4px solid #28a745;">
    <h3 style="color: #155724; margin: 0 0 2% 0;">🔔 ملاحظة مهمة</h3>
    <p style="margin: 0; color: #155724;">
      هذا تقرير تلقائي يتم إنشاؤه لأرشفة معلومات المباراة. للحصول على النتائج الدقيقة والتفاصيل الكاملة، يرجى متابعة القنوات الرياضية الرسمية أو المواقع المتخصصة.
    </p>
  </div>

</div>"""

    return GeneratedPost(title=report_title(home, away, details.league), content=content)
