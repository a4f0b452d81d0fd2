"""
FastAPI application entrypoint.

Exposes endpoints:
 - GET / : homepage (top story, latest, trending, tag cloud)
 - GET /articles : paged listing, filtered by ?tag= or ?category=
 - GET /articles/page/{page} : same listing, page in the path
 - GET /articles/rss.xml : RSS feed of the first page of the listing
 - GET /articles/search?q= : title search
 - GET /articles/{slug} : single article with comments and media
 - GET /categories : category menu
 - GET /tags : tag cloud
 - GET /health : simple health check

On startup the DB is created (if missing) and, when SEED_DEMO_DATA is set, demo content is loaded.
"""

import logging
from typing import List, Optional
from fastapi import FastAPI, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from newsdesk.cache import CATEGORY_MENU_KEY, ReadThroughCache
from newsdesk.db import SessionLocal, init_db, get_db
from newsdesk.feed import FeedAggregator
from newsdesk.fixtures import load_fixtures
from newsdesk.repository import ArticleRepository, CategoryRepository, TagRepository
from newsdesk.rss import render_rss
from newsdesk.schemas import ArticleDetailOut, ArticleOut, CategoryOut, HomepageOut, PageOut, SearchOut, TagOut
from newsdesk.config import settings

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, "INFO"))
logger = logging.getLogger("newsdesk.main")

app = FastAPI(title="Newsdesk", version="0.1.0")
# the only state shared between requests
app.state.cache = ReadThroughCache()

@app.on_event("startup")
def startup_event():
    init_db()
    if settings.SEED_DEMO_DATA:
        db = SessionLocal()
        try:
            load_fixtures(db)
        finally:
            db.close()
    logger.info("Application startup complete (page size=%s).", settings.PAGE_SIZE)

@app.exception_handler(SQLAlchemyError)
def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Storage failure while serving %s", request.url.path, exc_info=exc)
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})

def get_cache(request: Request) -> ReadThroughCache:
    return request.app.state.cache

def get_articles(db: Session = Depends(get_db)) -> ArticleRepository:
    return ArticleRepository(db)

def get_feed(
    db: Session = Depends(get_db),
    articles: ArticleRepository = Depends(get_articles),
    cache: ReadThroughCache = Depends(get_cache),
) -> FeedAggregator:
    return FeedAggregator(
        articles,
        TagRepository(db),
        cache,
        raw_limit=settings.HOMEPAGE_RAW_LIMIT,
        latest_size=settings.HOMEPAGE_LATEST_SIZE,
        trending_size=settings.HOMEPAGE_TRENDING_SIZE,
        tag_cloud_ttl=settings.TAG_CLOUD_TTL_SECONDS,
    )

def _listing(
    db: Session,
    articles: ArticleRepository,
    page: int,
    tag: Optional[str],
    category: Optional[str],
) -> PageOut:
    """
    Resolve the listing filters the way the index page does: a tag wins over a
    category, and with neither the configured default category applies.
    Unknown names still filter, so they produce an empty page.
    """
    if tag is not None:
        category = None
    elif category is None and settings.DEFAULT_CATEGORY_SLUG:
        category = settings.DEFAULT_CATEGORY_SLUG

    result = PageOut.model_validate(articles.find_latest(page, tag=tag, category=category))
    if tag is not None:
        found = TagRepository(db).find_one_by_name(tag)
        result.tag_name = found.name if found else None
    if category is not None:
        found = CategoryRepository(db).find_one_by_slug(category)
        result.category_name = found.name if found else None
    return result

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/", response_model=HomepageOut)
def homepage(feed: FeedAggregator = Depends(get_feed)):
    return HomepageOut.model_validate(feed.build_homepage())

@app.get("/articles", response_model=PageOut)
def list_articles(
    page: int = 1,
    tag: Optional[str] = None,
    category: Optional[str] = None,
    db: Session = Depends(get_db),
    articles: ArticleRepository = Depends(get_articles),
):
    return _listing(db, articles, page, tag, category)

@app.get("/articles/page/{page}", response_model=PageOut)
def list_articles_paginated(
    page: int,
    tag: Optional[str] = None,
    category: Optional[str] = None,
    db: Session = Depends(get_db),
    articles: ArticleRepository = Depends(get_articles),
):
    return _listing(db, articles, page, tag, category)

@app.get("/articles/rss.xml")
def articles_rss(
    tag: Optional[str] = None,
    category: Optional[str] = None,
    db: Session = Depends(get_db),
    articles: ArticleRepository = Depends(get_articles),
):
    listing = _listing(db, articles, 1, tag, category)
    xml = render_rss(
        listing.items,
        site_url=settings.SITE_URL,
        title=settings.SITE_TITLE,
        description=settings.SITE_DESCRIPTION,
    )
    return Response(content=xml, headers={"Content-Type": "text/xml; charset=UTF-8"})

@app.get("/articles/search", response_model=SearchOut)
def search_articles(q: str = Query(""), articles: ArticleRepository = Depends(get_articles)):
    found = articles.find_by_search_query(q) if q else []
    return SearchOut(query=q, articles=[ArticleOut.model_validate(a) for a in found])

@app.get("/articles/{slug}", response_model=ArticleDetailOut)
def get_article(slug: str, articles: ArticleRepository = Depends(get_articles)):
    article = articles.find_one_by_slug(slug)
    if not article:
        raise HTTPException(status_code=404, detail="Article not found")
    return article

@app.get("/categories", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db), cache: ReadThroughCache = Depends(get_cache)):
    return cache.get_or_compute(
        CATEGORY_MENU_KEY,
        CategoryRepository(db).find_all_ordered_by_name,
        ttl_seconds=settings.CATEGORY_MENU_TTL_SECONDS,
    )

@app.get("/tags", response_model=List[TagOut])
def list_tags(feed: FeedAggregator = Depends(get_feed)):
    return feed.tag_cloud()
