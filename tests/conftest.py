from datetime import datetime, timedelta

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from newsdesk.db import create_db_engine, init_db
from newsdesk.fixtures import slugify
from newsdesk.models import Article, ArticleImage, ArticleVideo, Category, Tag, User

NOW = datetime(2026, 3, 1, 12, 0, 0)


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def now():
    return NOW


class ContentBuilder:
    """Creates rows with just enough data to satisfy the schema."""

    def __init__(self, db):
        self.db = db
        self._author = None
        self._categories = {}
        self._tags = {}

    @property
    def author(self) -> User:
        if self._author is None:
            self._author = User(full_name="Jane Doe", username="jane", email="jane@example.com")
            self.db.add(self._author)
            self.db.flush()
        return self._author

    def category(self, slug: str = "news", name: str = None) -> Category:
        if slug not in self._categories:
            category = Category(name=name or slug.title(), slug=slug)
            self.db.add(category)
            self.db.flush()
            self._categories[slug] = category
        return self._categories[slug]

    def tag(self, name: str) -> Tag:
        if name not in self._tags:
            tag = Tag(name=name)
            self.db.add(tag)
            self.db.flush()
            self._tags[name] = tag
        return self._tags[name]

    def article(
        self,
        title: str,
        published_at: datetime,
        category: str = "news",
        tags=(),
        priority: int = 0,
        is_top_story: bool = False,
        images=(),
        videos=(),
    ) -> Article:
        article = Article(
            title=title,
            slug=slugify(title),
            summary=f"Summary of {title}",
            content=f"Content of {title}",
            published_at=published_at,
            priority=priority,
            is_top_story=is_top_story,
            author=self.author,
            category=self.category(category),
            tags=[self.tag(name) for name in tags],
        )
        for position, name in images:
            article.images.append(ArticleImage(image_name=name, position=position))
        for position, url in videos:
            article.videos.append(ArticleVideo(url=url, position=position))
        self.db.add(article)
        self.db.commit()
        return article

    def articles(self, count: int, start: datetime, step: timedelta = timedelta(hours=1), **kwargs):
        """``count`` articles titled "Article NN", newest first, ``step`` apart going back from ``start``."""
        return [
            self.article(f"Article {index:02d}", start - step * index, **kwargs)
            for index in range(count)
        ]


@pytest.fixture
def content(db):
    return ContentBuilder(db)
