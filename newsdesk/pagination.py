"""
Offset pagination over composed queries.

Eager-loading a one-to-many relation through a JOIN repeats the parent row once
per child, so LIMIT/OFFSET applied to the joined statement pages through rows,
not articles: an article with five tags would fill five slots of the page. When
a collection is eager-loaded the paginator therefore works in two phases:

1. select only the ordered root ids, with LIMIT/OFFSET;
2. load those ids with every relation join-fetched, then restore the order of
   phase 1 (``IN (...)`` gives no ordering guarantee).

The total is always ``COUNT(DISTINCT <root pk>)``. When only scalar
(many-to-one) relations are eager-loaded a single statement is enough.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from sqlalchemy import distinct, func, inspect as sa_inspect
from sqlalchemy.orm import Query, joinedload

from newsdesk.config import settings

logger = logging.getLogger("newsdesk.pagination")


@dataclass
class Page:
    items: List[Any]
    current_page: int
    page_size: int
    total_items: int
    total_pages: int = field(init=False)

    def __post_init__(self):
        self.total_pages = math.ceil(self.total_items / self.page_size) if self.total_items else 0

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def previous_page(self) -> Optional[int]:
        return self.current_page - 1 if self.has_previous else None

    @property
    def next_page(self) -> Optional[int]:
        return self.current_page + 1 if self.has_next else None

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


class Paginator:
    """
    Pages through a query of root entities.

    ``query`` must select a single mapped entity and carry its ordering; its rows
    must be unique per root (filter through EXISTS rather than JOIN). ``eager``
    lists relationship attributes of that entity to join-fetch on the results.
    """

    def __init__(self, query: Query, page_size: int = None, eager: Sequence = ()):
        if page_size is None:
            page_size = settings.PAGE_SIZE
        if page_size < 1:
            raise ValueError("page_size must be a positive integer")
        self.query = query
        self.page_size = page_size
        self.eager = tuple(eager)

        self._root = query.column_descriptions[0]["entity"]
        mapper = sa_inspect(self._root)
        self._pk_column = mapper.primary_key[0]
        self._pk_attr = mapper.get_property_by_column(self._pk_column).key

    @property
    def joins_collections(self) -> bool:
        return any(attr.property.uselist for attr in self.eager)

    def count(self) -> int:
        """Number of distinct root entities matching the query."""
        total = self.query.order_by(None).with_entities(func.count(distinct(self._pk_column))).scalar()
        return total or 0

    def paginate(self, page: int = 1) -> Page:
        page = max(1, int(page))
        total = self.count()
        offset = (page - 1) * self.page_size
        items = self.fetch_slice(offset, self.page_size) if offset < total else []
        return Page(items=items, current_page=page, page_size=self.page_size, total_items=total)

    def fetch_slice(self, offset: int, limit: int) -> List[Any]:
        """Return up to ``limit`` hydrated roots starting at ``offset``, in query order."""
        loaders = [joinedload(attr) for attr in self.eager]

        if not self.joins_collections:
            return self.query.options(*loaders).limit(limit).offset(offset).all()

        ids = [row[0] for row in self.query.with_entities(self._pk_column).limit(limit).offset(offset).all()]
        if not ids:
            return []
        logger.debug("Hydrating %d %s rows", len(ids), self._root.__name__)

        rows = (
            self.query.session.query(self._root)
            .options(*loaders)
            .filter(self._pk_column.in_(ids))
            .all()
        )
        rank = {pk: index for index, pk in enumerate(ids)}
        rows.sort(key=lambda row: rank[getattr(row, self._pk_attr)])
        return rows
