"""
Demo content for development databases.

Provides:
 - load_fixtures(db_session) : create the demo authors, categories, tags and articles

Every row is looked up by its natural key (username, slug, tag name) before being
created, so running the loader twice leaves the database unchanged.
Content is deterministic: the same phrases always get the same tags, category,
priority and relative publication date.
"""

import logging
import re
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from newsdesk.models import Article, Category, Comment, Tag, User
from newsdesk.query import utcnow

logger = logging.getLogger("newsdesk.fixtures")

USERS = [
    # (full_name, username, email)
    ("Jane Doe", "jane_admin", "jane_admin@example.com"),
    ("Tom Doe", "tom_admin", "tom_admin@example.com"),
    ("John Doe", "john_user", "john_user@example.com"),
]

CATEGORIES = [
    # (name, slug, description, color)
    ("International", "international", "Internationale Nachrichten und Ereignisse", "#1f77b4"),
    ("Inland", "inland", "Nachrichten aus dem Inland", "#ff7f0e"),
    ("Wirtschaft", "wirtschaft", "Wirtschafts- und Finanznachrichten", "#2ca02c"),
    ("Web", "web", "Internet, Technologie und Digitales", "#d62728"),
    ("Sport", "sport", "Sportnachrichten und Ergebnisse", "#9467bd"),
    ("Kultur", "kultur", "Kultur, Kunst und Unterhaltung", "#8c564b"),
    ("Wissenschaft", "wissenschaft", "Wissenschaft und Forschung", "#e377c2"),
]

TAGS = ["lorem", "ipsum", "consectetur", "adipiscing", "incididunt", "labore", "voluptate", "dolore", "pariatur"]

PHRASES = [
    "Lorem ipsum dolor sit amet consectetur adipiscing elit",
    "Pellentesque vitae velit ex",
    "Mauris dapibus risus quis suscipit vulputate",
    "Eros diam egestas libero eu vulputate risus",
    "In hac habitasse platea dictumst",
    "Morbi tempus commodo mattis",
    "Ut suscipit posuere justo at vulputate",
    "Ut eleifend mauris et risus ultrices egestas",
    "Aliquam sodales odio id eleifend tristique",
    "Urna nisl sollicitudin id varius orci quam id turpis",
    "Nulla porta lobortis ligula vel egestas",
    "Curabitur aliquam euismod dolor non ornare",
    "Sed varius a risus eget aliquam",
    "Nunc viverra elit ac laoreet suscipit",
    "Pellentesque et sapien pulvinar consectetur",
    "Ubi est barbatus nix",
    "Abnobas sunt hilotaes de placidus vita",
    "Ubi est audax amicitia",
    "Eposs sunt solems de superbus fortis",
    "Vae humani generis",
    "Diatrias tolerare tanquam noster caesium",
    "Teres talis saepe tractare de camerarius flavum sensorem",
    "Silva de secundus galatae demitto quadra",
    "Sunt accentores vitare salvus flavum parses",
    "Potus sensim ad ferox abnoba",
    "Sunt seculaes transferre talis camerarius fluctuies",
    "Era brevis ratione est",
    "Sunt torquises imitari velox mirabilis medicinaes",
    "Mineralis persuadere omnes finises desiderium",
    "Bassus fatalis classiss virtualiter transferre de flavum",
]

ARTICLE_CONTENT = (
    "Lorem ipsum dolor sit amet consectetur adipisicing elit, sed do eiusmod tempor "
    "incididunt ut labore et **dolore magna aliqua**: Duis aute irure dolor in "
    "reprehenderit in voluptate velit esse cillum dolore eu fugiat nulla pariatur.\n\n"
    "Praesent id fermentum lorem. Ut est lorem, fringilla at accumsan nec, euismod at "
    "nunc. Aenean mattis sollicitudin mattis. Nullam pulvinar vestibulum bibendum."
)

COMMENTS_PER_ARTICLE = 5
# index into PHRASES of the article flagged as top story
TOP_STORY_INDEX = 2


def slugify(value: str) -> str:
    """Lowercase ``value`` and join its alphanumeric runs with hyphens."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.strip().lower()).strip("-")
    return slug or "article"


def upsert_user(db: Session, full_name: str, username: str, email: str) -> User:
    user = db.query(User).filter(User.username == username).first()
    if user:
        return user
    user = User(full_name=full_name, username=username, email=email)
    db.add(user)
    db.flush()
    return user


def upsert_category(db: Session, name: str, slug: str, description: Optional[str], color: Optional[str]) -> Category:
    """Create or find a Category row by slug, refreshing its display fields."""
    category = db.query(Category).filter(Category.slug == slug).first()
    if category:
        category.name = name
        category.description = description
        category.color = color
        return category
    category = Category(name=name, slug=slug, description=description, color=color)
    db.add(category)
    db.flush()
    return category


def upsert_tag(db: Session, name: str) -> Tag:
    tag = db.query(Tag).filter(Tag.name == name).first()
    if tag:
        return tag
    tag = Tag(name=name)
    db.add(tag)
    db.flush()
    return tag


def _tags_for(index: int, tags: List[Tag]) -> List[Tag]:
    count = 2 + index % 3
    return [tags[(index + offset) % len(tags)] for offset in range(count)]


def _summary(index: int) -> str:
    words = PHRASES[(index + 1) % len(PHRASES)]
    return f"{words}. {PHRASES[(index + 7) % len(PHRASES)]}."


def load_fixtures(db: Session, now: Optional[datetime] = None) -> Dict[str, int]:
    """
    Seed the demo data set and commit.

    Articles are published one per day going back from ``now`` (the first phrase
    is the most recent). Returns how many articles were created.
    """
    now = now or utcnow()

    users = [upsert_user(db, *row) for row in USERS]
    categories = [upsert_category(db, *row) for row in CATEGORIES]
    tags = [upsert_tag(db, name) for name in TAGS]
    commenter = users[-1]

    created = 0
    for index, title in enumerate(PHRASES):
        slug = slugify(title)
        if db.query(Article.id).filter(Article.slug == slug).first():
            logger.debug("Skipping existing article %s", slug)
            continue

        published_at = now - timedelta(days=index, minutes=index)
        article = Article(
            title=title,
            slug=slug,
            summary=_summary(index),
            lead=PHRASES[(index + 3) % len(PHRASES)] if index % 2 == 0 else None,
            content=ARTICLE_CONTENT,
            published_at=published_at,
            priority=index % 3,
            is_top_story=index == TOP_STORY_INDEX,
            author=users[index % 2],
            category=categories[index % len(categories)],
            tags=_tags_for(index, tags),
        )
        for position in range(1, COMMENTS_PER_ARTICLE + 1):
            article.comments.append(
                Comment(
                    content=_summary(index + position),
                    published_at=published_at + timedelta(seconds=position),
                    author=commenter,
                )
            )
        db.add(article)
        created += 1

    db.commit()
    logger.info("Fixtures loaded: %d new articles (%d total phrases)", created, len(PHRASES))
    return {"articles": created}
