from newsdesk.fixtures import CATEGORIES, PHRASES, TAGS, TOP_STORY_INDEX, load_fixtures, slugify
from newsdesk.models import Article, Category, Comment, Tag
from newsdesk.repository import ArticleRepository


def test_slugify():
    assert slugify("Lorem ipsum dolor sit amet") == "lorem-ipsum-dolor-sit-amet"
    assert slugify("  Growth of 50% -- expected!  ") == "growth-of-50-expected"
    assert slugify("!!!") == "article"


def test_load_fixtures_creates_demo_content(db, now):
    result = load_fixtures(db, now=now)

    assert result == {"articles": len(PHRASES)}
    assert db.query(Category).count() == len(CATEGORIES)
    assert db.query(Tag).count() == len(TAGS)
    assert db.query(Comment).count() == len(PHRASES) * 5
    flagged = db.query(Article).filter(Article.is_top_story.is_(True)).all()
    assert [a.title for a in flagged] == [PHRASES[TOP_STORY_INDEX]]


def test_load_fixtures_is_idempotent(db, now):
    load_fixtures(db, now=now)
    result = load_fixtures(db, now=now)

    assert result == {"articles": 0}
    assert db.query(Article).count() == len(PHRASES)
    assert db.query(Tag).count() == len(TAGS)


def test_every_article_has_two_to_four_tags(db, now):
    load_fixtures(db, now=now)

    counts = {len(a.tags) for a in db.query(Article).all()}
    assert counts <= {2, 3, 4}


def test_fixture_listing_pages(db, now):
    load_fixtures(db, now=now)

    repo = ArticleRepository(db, page_size=10)
    pages = [repo.find_latest(p, now=now) for p in (1, 2, 3, 4)]

    assert [len(p.items) for p in pages] == [10, 10, 10, 0]
    assert pages[0].items[0].title == PHRASES[0]
    assert sum(len(p.items) for p in pages) == pages[0].total_items == len(PHRASES)


def test_lowercase_search_finds_the_lorem_article(db, now):
    load_fixtures(db, now=now)

    found = ArticleRepository(db).find_by_search_query("lorem", now=now)

    assert [a.title for a in found] == [PHRASES[0]]
