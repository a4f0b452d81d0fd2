from datetime import timedelta

import pytest
from sqlalchemy import event

from newsdesk.models import Article
from newsdesk.pagination import Page, Paginator
from newsdesk.query import ArticleFilters, compose_article_query


@pytest.fixture
def statements(engine):
    """Collects every SQL statement sent while the test runs."""
    captured = []

    def before_execute(conn, cursor, statement, parameters, context, executemany):
        captured.append(statement)

    event.listen(engine, "before_cursor_execute", before_execute)
    yield captured
    event.remove(engine, "before_cursor_execute", before_execute)


def listing(db, now, **filters):
    return compose_article_query(db, ArticleFilters(**filters), now=now)


class TestPage:
    def test_total_pages_rounds_up(self):
        assert Page(items=[], current_page=1, page_size=10, total_items=21).total_pages == 3

    def test_no_items_means_no_pages(self):
        page = Page(items=[], current_page=1, page_size=10, total_items=0)
        assert page.total_pages == 0
        assert not page.has_next
        assert not page.has_previous

    def test_neighbours(self):
        page = Page(items=[], current_page=2, page_size=10, total_items=30)
        assert page.previous_page == 1
        assert page.next_page == 3
        last = Page(items=[], current_page=3, page_size=10, total_items=30)
        assert last.next_page is None


class TestPaginate:
    def test_pages_cover_every_article_once(self, db, content, now):
        content.articles(25, now - timedelta(minutes=1))
        paginator = Paginator(listing(db, now), page_size=10, eager=(Article.tags,))

        pages = [paginator.paginate(p) for p in range(1, 4)]

        assert [len(p.items) for p in pages] == [10, 10, 5]
        assert {p.total_items for p in pages} == {25}
        assert {p.total_pages for p in pages} == {3}
        seen = [a.title for p in pages for a in p.items]
        assert seen == [f"Article {i:02d}" for i in range(25)]

    def test_page_below_one_is_clamped(self, db, content, now):
        content.articles(3, now - timedelta(minutes=1))
        paginator = Paginator(listing(db, now), page_size=2)

        for requested in (0, -5):
            page = paginator.paginate(requested)
            assert page.current_page == 1
            assert [a.title for a in page.items] == ["Article 00", "Article 01"]

    def test_page_past_the_end_is_empty_but_counted(self, db, content, now):
        content.articles(5, now - timedelta(minutes=1))
        page = Paginator(listing(db, now), page_size=2).paginate(9)

        assert page.items == []
        assert page.total_items == 5
        assert page.total_pages == 3
        assert page.current_page == 9
        assert not page.has_next

    def test_empty_result(self, db, now):
        page = Paginator(listing(db, now), page_size=10).paginate(1)

        assert page.items == []
        assert page.total_items == 0
        assert page.total_pages == 0

    def test_invalid_page_size(self, db, now):
        with pytest.raises(ValueError):
            Paginator(listing(db, now), page_size=0)


class TestJoinedCollections:
    def test_children_do_not_inflate_the_page(self, db, content, now):
        content.articles(14, now - timedelta(hours=1))
        content.article("Busy", now - timedelta(minutes=30), tags=["t1", "t2", "t3", "t4", "t5"])
        db.expunge_all()

        paginator = Paginator(listing(db, now), page_size=15, eager=(Article.author, Article.category, Article.tags))
        page = paginator.paginate(1)

        assert page.total_items == 15
        assert len(page.items) == 15
        assert len({a.id for a in page.items}) == 15
        assert page.items[0].title == "Busy"
        assert [t.name for t in page.items[0].tags] == ["t1", "t2", "t3", "t4", "t5"]

    def test_children_do_not_shift_offsets(self, db, content, now):
        content.article("First", now - timedelta(minutes=1), tags=["t1", "t2", "t3"],
                        images=[(0, "a.jpg"), (1, "b.jpg")])
        content.articles(4, now - timedelta(hours=1), tags=["t1", "t2"])
        db.expunge_all()

        paginator = Paginator(listing(db, now), page_size=2, eager=(Article.tags, Article.images))
        pages = [paginator.paginate(p) for p in (1, 2, 3)]

        assert [[a.title for a in p.items] for p in pages] == [
            ["First", "Article 00"],
            ["Article 01", "Article 02"],
            ["Article 03"],
        ]

    def test_hydrated_rows_keep_contract_order(self, db, content, now):
        # later ids published earlier: IN (...) order would differ from listing order
        content.article("Oldest", now - timedelta(days=3), tags=["x"])
        content.article("Middle", now - timedelta(days=2), tags=["x", "y"])
        content.article("Newest", now - timedelta(days=1), tags=["y"])
        content.article("Same time high", now - timedelta(days=2), priority=3, tags=["x"])
        db.expunge_all()

        items = Paginator(listing(db, now), page_size=10, eager=(Article.tags,)).paginate(1).items

        assert [a.title for a in items] == ["Newest", "Same time high", "Middle", "Oldest"]

    def test_two_phase_fetch_when_collections_are_eager(self, db, content, now, statements):
        content.articles(3, now - timedelta(minutes=1), tags=["t1"])
        paginator = Paginator(listing(db, now), page_size=10, eager=(Article.tags,))
        assert paginator.joins_collections

        statements.clear()
        paginator.fetch_slice(0, 10)

        assert len(statements) == 2
        assert " IN " in statements[1]

    def test_single_query_for_scalar_relations(self, db, content, now, statements):
        content.articles(3, now - timedelta(minutes=1))
        db.expunge_all()
        paginator = Paginator(listing(db, now), page_size=10, eager=(Article.author, Article.category))
        assert not paginator.joins_collections

        statements.clear()
        items = paginator.fetch_slice(0, 10)

        # categories came with the rows: no lazy loads
        assert [a.category.slug for a in items] == ["news"] * 3
        assert len(statements) == 1

    def test_count_is_distinct_roots(self, db, content, now):
        content.article("Busy", now - timedelta(minutes=30), tags=["t1", "t2", "t3"])
        content.article("Quiet", now - timedelta(minutes=40))

        assert Paginator(listing(db, now), eager=(Article.tags,)).count() == 2
        assert Paginator(listing(db, now, tag="t2")).count() == 1
