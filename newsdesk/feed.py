"""
Homepage aggregation.

Builds the homepage view model from one raw listing of recent articles:

 - top story: the most recent visible article flagged ``is_top_story``; without
   one, the most recent visible article is promoted
 - latest: the raw listing without the top story (matched by id)
 - trending: the head of ``latest``. This is a fixed slice standing in for real
   engagement ranking, not derived from any traffic data.
 - tags: the tag cloud, served from the read-through cache

Storage errors are not caught here: a failed lookup fails the whole homepage
rather than rendering it half empty.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from newsdesk.cache import TAG_CLOUD_KEY, ReadThroughCache
from newsdesk.models import Article, Tag
from newsdesk.repository import ArticleRepository, TagRepository

logger = logging.getLogger("newsdesk.feed")


@dataclass
class Homepage:
    top_story: Optional[Article] = None
    latest: List[Article] = field(default_factory=list)
    trending: List[Article] = field(default_factory=list)
    tags: List[Tag] = field(default_factory=list)


def exclude_article(articles: List[Article], excluded: Optional[Article], limit: int) -> List[Article]:
    """First ``limit`` entries of ``articles`` that are not ``excluded`` (compared by id)."""
    excluded_id = excluded.id if excluded is not None else None
    kept = []
    for article in articles:
        if len(kept) >= limit:
            break
        if article.id == excluded_id:
            continue
        kept.append(article)
    return kept


class FeedAggregator:
    def __init__(
        self,
        articles: ArticleRepository,
        tags: TagRepository,
        cache: ReadThroughCache,
        raw_limit: int = 15,
        latest_size: int = 10,
        trending_size: int = 3,
        tag_cloud_ttl: Optional[float] = None,
    ):
        self.articles = articles
        self.tags = tags
        self.cache = cache
        self.raw_limit = raw_limit
        self.latest_size = latest_size
        self.trending_size = trending_size
        self.tag_cloud_ttl = tag_cloud_ttl

    def tag_cloud(self) -> List[Tag]:
        return self.cache.get_or_compute(TAG_CLOUD_KEY, self.tags.find_all_ordered_by_name, ttl_seconds=self.tag_cloud_ttl)

    def build_homepage(self, now: Optional[datetime] = None) -> Homepage:
        flagged = self.articles.find_top_stories(limit=1, now=now)
        recent = self.articles.find_recent(self.raw_limit, now=now)

        if flagged:
            top_story = flagged[0]
        elif recent:
            top_story = recent[0]
            logger.debug("No flagged top story, promoting article id=%s", top_story.id)
        else:
            top_story = None

        latest = exclude_article(recent, top_story, self.latest_size)
        if len(latest) < self.latest_size and len(recent) == self.raw_limit:
            logger.warning("Raw listing of %d articles yielded only %d latest entries", self.raw_limit, len(latest))

        return Homepage(
            top_story=top_story,
            latest=latest,
            trending=latest[:self.trending_size],
            tags=self.tag_cloud(),
        )
