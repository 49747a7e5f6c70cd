"""
Repository for entry operations.
"""

from typing import Iterable, List, Optional
from sqlalchemy import desc, text
from sqlalchemy.orm import Query, Session, selectinload

from db.adapters.data_sources import IdListDataSource, TextDataSource
from db.models.models import Entry, Tag
from db.repositories.base_repository import BaseRepository


class EntryRepository(BaseRepository[Entry]):
    """Repository for entry operations."""

    def __init__(self, session: Session):
        super().__init__(session, Entry)

    def create_with_tags(self, title: str, tag_names: Iterable[str] = ()) -> Entry:
        """Create an entry, reusing existing tags by name."""
        entry = self.create(title=title)
        for name in tag_names:
            tag = self.session.query(Tag).filter(Tag.name == name).first()
            if tag is None:
                tag = Tag(name=name)
                self.session.add(tag)
            entry.tags.append(tag)
        self.session.flush()
        return entry

    def listing_query(self, title_filter: Optional[str] = None) -> Query:
        """Entries newest first, with a stable tie-break on id."""
        query = self.query()
        if title_filter:
            query = query.filter(Entry.title.ilike(f"%{title_filter}%"))
        return query.order_by(desc(Entry.created_at), desc(Entry.id))

    def tag_listing_query(self, tag_names: Optional[Iterable[str]] = None) -> Query:
        """Entries joined through their tags, one row per matching tag.

        Rows repeat for entries carrying several of ``tag_names`` (or several
        tags at all when no names are given).
        """
        query = self.query().join(Entry.tags)
        if tag_names:
            query = query.filter(Tag.name.in_(list(tag_names)))
        return query.order_by(Entry.id)

    def load_ids(self, offset: int, limit: int) -> List[int]:
        """Ids of the entries on one page of ``listing_query()``."""
        rows = self.listing_query()\
            .with_entities(Entry.id)\
            .offset(offset)\
            .limit(limit)\
            .all()
        return [row.id for row in rows]

    def tagged_data_source(self) -> IdListDataSource:
        """Paginate entries with their tags loaded, one page of root ids at a time."""
        query = self.listing_query().options(selectinload(Entry.tags))
        return IdListDataSource(
            query,
            id_loader=self.load_ids,
            id_column=Entry.id,
            count_query=self.query(),
        )

    def title_data_source(self) -> TextDataSource:
        """Paginate (id, title) rows with raw SQL."""
        statement = text("""
            SELECT e.id, e.title
            FROM entries e
            ORDER BY e.id
            LIMIT :limit OFFSET :offset
        """)
        count_statement = text("SELECT COUNT(*) FROM entries")
        return TextDataSource(self.session, statement, count_statement)
