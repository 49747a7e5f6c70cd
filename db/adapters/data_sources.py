"""
Data source adapters for the paginator.

The paginator only needs two things from whatever holds the items: the slice
for an offset/limit pair and the total number of items. Each adapter below
provides both for one kind of storage:

- QueryDataSource: SQLAlchemy ORM Query
- IdListDataSource: ORM Query paginated by a pre-selected list of ids
  (fetch-join collections)
- TextDataSource: raw SQL with :limit/:offset bind parameters
- SequenceDataSource: an already materialized iterable
"""

import collections.abc
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from sqlalchemy.orm import Query, Session
from sqlalchemy.sql.elements import TextClause

logger = logging.getLogger(__name__)


class DataSource(ABC):
    """Capability interface: fetch an ordered slice and count all items."""

    @abstractmethod
    def fetch(self, offset: int, limit: int) -> Sequence[Any]:
        """Return the items at ``offset`` up to ``limit`` items, in a stable order."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Return the number of items across all pages."""
        pass


class QueryDataSource(DataSource):
    """
    Paginates a SQLAlchemy ORM query with OFFSET/LIMIT.

    With ``fetch_join_collection`` set, both the slice and the count are made
    DISTINCT over the selected entity so that joined child rows do not
    inflate them. The query's ORDER BY must then only reference selected
    columns.
    """

    def __init__(self, query: Query, fetch_join_collection: bool = False):
        self.query = query
        self.fetch_join_collection = fetch_join_collection

    def _base_query(self) -> Query:
        if self.fetch_join_collection:
            return self.query.distinct()
        return self.query

    def fetch(self, offset: int, limit: int) -> List[Any]:
        items = self._base_query().offset(offset).limit(limit).all()
        logger.debug(f"Fetched {len(items)} rows at offset {offset} (limit {limit})")
        return items

    def count(self) -> int:
        # Ordering is irrelevant for COUNT and slows it down
        return self._base_query().order_by(None).count()


class IdListDataSource(DataSource):
    """
    Paginates a query whose rows are expanded by a joined collection.

    ``id_loader(offset, limit)`` selects the ids of the root entities on the
    page; the full query is then filtered to those ids and run without
    OFFSET/LIMIT, so every root entity comes back with its whole collection.
    """

    def __init__(
        self,
        query: Query,
        id_loader: Callable[[int, int], Iterable[Any]],
        id_column,
        count_query: Optional[Query] = None
    ):
        self.query = query
        self.id_loader = id_loader
        self.id_column = id_column
        self.count_query = count_query
        self.id_list: Optional[List[Any]] = None

    def fetch(self, offset: int, limit: int) -> List[Any]:
        self.id_list = list(self.id_loader(offset, limit))

        if not self.id_list:
            return []

        return self.query.filter(self.id_column.in_(self.id_list)).all()

    def count(self) -> int:
        query = self.count_query if self.count_query is not None else self.query
        return query.order_by(None).distinct().count()


class TextDataSource(DataSource):
    """
    Paginates raw SQL executed on a session.

    The statement must contain ``LIMIT :limit OFFSET :offset``; the count
    statement must return a single scalar.
    """

    def __init__(
        self,
        session: Session,
        statement: TextClause,
        count_statement: TextClause,
        params: Optional[Dict[str, Any]] = None
    ):
        self.session = session
        self.statement = statement
        self.count_statement = count_statement
        self.params = params or {}

    def fetch(self, offset: int, limit: int) -> List[Any]:
        params = dict(self.params)
        params.update({'limit': limit, 'offset': offset})
        return self.session.execute(self.statement, params).all()

    def count(self) -> int:
        return self.session.execute(self.count_statement, self.params).scalar() or 0


class SequenceDataSource(DataSource):
    """Paginates items that are already in memory."""

    def __init__(self, items: Iterable[Any]):
        self.items = list(items)

    def fetch(self, offset: int, limit: int) -> List[Any]:
        return self.items[offset:offset + limit]

    def count(self) -> int:
        return len(self.items)


def as_data_source(source, fetch_join_collection: bool = False) -> DataSource:
    """
    Wrap a query or an iterable in the matching adapter.

    DataSource instances are returned unchanged.
    """
    if isinstance(source, DataSource):
        return source

    if isinstance(source, Query):
        return QueryDataSource(source, fetch_join_collection=fetch_join_collection)

    if isinstance(source, (str, bytes)) or not isinstance(source, collections.abc.Iterable):
        raise TypeError(f"Cannot paginate {type(source).__name__}")

    return SequenceDataSource(source)
