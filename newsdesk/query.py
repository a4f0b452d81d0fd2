"""
Article query composition.

Every public listing (paged index, tag/category filters, search, homepage, RSS)
builds its query here so that they share one visibility predicate and one ordering.
Pagination offsets are computed against that ordering, so it must not vary
between call sites.

Predicates on tags and categories are expressed as EXISTS sub-selects: the
composed query yields exactly one row per article, whatever gets eager-loaded
on top of it later.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import false, or_
from sqlalchemy.orm import Query, Session

from newsdesk.models import Article, Category, Tag

# publishedAt DESC, priority DESC; id breaks exact ties so offsets stay stable
CONTRACT_ORDERING = (
    Article.published_at.desc(),
    Article.priority.desc(),
    Article.id.desc(),
)


def utcnow() -> datetime:
    """Naive UTC "now", matching how published_at is stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass
class ArticleFilters:
    """
    Optional predicates for an article listing.

    ``search_terms`` is None when no search applies; an empty list is a search
    with nothing to look for and matches no article at all.
    """
    tag: Optional[str] = None
    category: Optional[str] = None
    search_terms: Optional[List[str]] = None
    visible_only: bool = True
    case_sensitive: bool = False


def _title_matches(term: str, case_sensitive: bool):
    if case_sensitive:
        return Article.title.contains(term, autoescape=True)
    return Article.title.icontains(term, autoescape=True)


def compose_article_query(db: Session, filters: ArticleFilters, now: Optional[datetime] = None) -> Query:
    """Return an ordered ``Query`` of articles matching ``filters``."""
    query = db.query(Article)

    if filters.visible_only:
        query = query.filter(Article.published_at <= (now or utcnow()))

    if filters.tag is not None:
        query = query.filter(Article.tags.any(Tag.name == filters.tag))

    if filters.category is not None:
        query = query.filter(Article.category.has(Category.slug == filters.category))

    if filters.search_terms is not None:
        if not filters.search_terms:
            query = query.filter(false())
        else:
            query = query.filter(or_(*[_title_matches(t, filters.case_sensitive) for t in filters.search_terms]))

    return query.order_by(*CONTRACT_ORDERING)
