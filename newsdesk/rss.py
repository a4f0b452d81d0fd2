"""
RSS 2.0 rendering for article listings.

Items keep the order of the listing they come from (most recent first).
"""

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Iterable, Optional

from jinja2 import Environment, select_autoescape

from newsdesk.models import Article

RSS_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>{{ title }}</title>
    <link>{{ site_url }}/</link>
    <description>{{ description }}</description>
    <lastBuildDate>{{ build_date }}</lastBuildDate>
    {%- for item in items %}
    <item>
      <title>{{ item.title }}</title>
      <link>{{ item.link }}</link>
      <guid isPermaLink="true">{{ item.link }}</guid>
      <description>{{ item.summary }}</description>
      <pubDate>{{ item.pub_date }}</pubDate>
      {%- if item.category %}
      <category>{{ item.category }}</category>
      {%- endif %}
    </item>
    {%- endfor %}
  </channel>
</rss>
"""

_env = Environment(autoescape=select_autoescape(default_for_string=True, default=True))
_template = _env.from_string(RSS_TEMPLATE)


def rfc822(value: datetime) -> str:
    """Format a naive-UTC (or aware) datetime for RSS."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value)


def article_link(site_url: str, article: Article) -> str:
    return f"{site_url.rstrip('/')}/articles/{article.slug}"


def render_rss(
    articles: Iterable[Article],
    site_url: str,
    title: str,
    description: str = "",
    build_date: Optional[datetime] = None,
) -> str:
    items = [
        {
            "title": a.title,
            "link": article_link(site_url, a),
            "summary": a.summary,
            "pub_date": rfc822(a.published_at),
            "category": a.category.name if a.category else None,
        }
        for a in articles
    ]
    return _template.render(
        title=title,
        site_url=site_url.rstrip("/"),
        description=description,
        build_date=rfc822(build_date or datetime.now(timezone.utc)),
        items=items,
    )
