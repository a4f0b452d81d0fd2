"""
Read-side lookups for articles, tags and categories.

Public listings go through ``compose_article_query`` so visibility and ordering
are the same everywhere; paged and sized listings go through ``Paginator``.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from newsdesk.config import settings
from newsdesk.models import Article, Category, Tag
from newsdesk.pagination import Page, Paginator
from newsdesk.query import ArticleFilters, compose_article_query
from newsdesk.search import tokenize

logger = logging.getLogger("newsdesk.repository")

# relations shown on listing cards
LISTING_RELATIONS = (Article.author, Article.category, Article.tags)
# relations shown on the article page
DETAIL_RELATIONS = (
    Article.author,
    Article.category,
    Article.tags,
    Article.comments,
    Article.images,
    Article.videos,
)


class ArticleRepository:
    def __init__(self, db: Session, page_size: int = None, case_sensitive: bool = None):
        self.db = db
        self.page_size = page_size if page_size is not None else settings.PAGE_SIZE
        self.case_sensitive = settings.SEARCH_CASE_SENSITIVE if case_sensitive is None else case_sensitive

    def _paginator(self, filters: ArticleFilters, now: Optional[datetime] = None, eager=LISTING_RELATIONS) -> Paginator:
        return Paginator(compose_article_query(self.db, filters, now=now), page_size=self.page_size, eager=eager)

    def find_latest(self, page: int = 1, tag: Optional[str] = None, category: Optional[str] = None,
                    now: Optional[datetime] = None) -> Page:
        """Page through visible articles, optionally restricted to a tag name and/or a category slug."""
        filters = ArticleFilters(tag=tag, category=category)
        return self._paginator(filters, now=now).paginate(page)

    def find_by_search_query(self, query: str, limit: int = None, now: Optional[datetime] = None) -> List[Article]:
        """
        Visible articles whose title contains any term of ``query``.

        A query without usable terms returns an empty list, never the full listing.
        """
        terms = tokenize(query)
        if not terms:
            return []

        limit = limit if limit is not None else self.page_size
        filters = ArticleFilters(search_terms=terms, case_sensitive=self.case_sensitive)
        logger.debug("Searching titles for %s", terms)
        return self._paginator(filters, now=now).fetch_slice(0, limit)

    def find_top_stories(self, limit: int = 5, now: Optional[datetime] = None) -> List[Article]:
        """Visible articles flagged as top story, most recent first."""
        query = compose_article_query(self.db, ArticleFilters(), now=now).filter(Article.is_top_story.is_(True))
        return Paginator(query, page_size=self.page_size, eager=LISTING_RELATIONS).fetch_slice(0, limit)

    def find_recent(self, limit: int, now: Optional[datetime] = None) -> List[Article]:
        """The ``limit`` most recent visible articles."""
        return self._paginator(ArticleFilters(), now=now).fetch_slice(0, limit)

    def find_one_by_slug(self, slug: str, now: Optional[datetime] = None) -> Optional[Article]:
        """Visible article with its full relation graph, or None."""
        query = compose_article_query(self.db, ArticleFilters(), now=now).filter(Article.slug == slug)
        return query.options(*[joinedload(attr) for attr in DETAIL_RELATIONS]).first()


class TagRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_one_by_name(self, name: str) -> Optional[Tag]:
        return self.db.query(Tag).filter(Tag.name == name).first()

    def find_all_ordered_by_name(self) -> List[Tag]:
        return self.db.query(Tag).order_by(Tag.name).all()


class CategoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_one_by_slug(self, slug: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.slug == slug).first()

    def find_all_ordered_by_name(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name).all()
