"""
Tests for the paginator data source adapters against an in-memory SQLite database.
"""

import pytest
from sqlalchemy import text

from db.adapters.data_sources import (
    DataSource,
    QueryDataSource,
    IdListDataSource,
    TextDataSource,
    SequenceDataSource,
    as_data_source,
)
from db.models.models import Entry
from db.repositories.entry_repository import EntryRepository
from models.errors import EmptyPageError
from models.paginator_view_model import Paginator


class TestSequenceDataSource:

    def test_fetch_slices_items(self):
        source = SequenceDataSource(range(12))

        assert source.fetch(0, 5) == [0, 1, 2, 3, 4]
        assert source.fetch(10, 5) == [10, 11]
        assert source.fetch(20, 5) == []

    def test_count(self):
        assert SequenceDataSource(["a", "b"]).count() == 2


class TestQueryDataSource:

    def test_fetch_respects_order_offset_and_limit(self, db_session, seeded_entries):
        query = EntryRepository(db_session).listing_query()
        source = QueryDataSource(query)

        titles = [entry.title for entry in source.fetch(10, 10)]

        # Newest first: 25 .. 16 on page one, 15 .. 6 on page two
        assert titles == [f"Entry {number:03d}" for number in range(15, 5, -1)]

    def test_count_ignores_limit(self, db_session, seeded_entries):
        source = QueryDataSource(EntryRepository(db_session).listing_query())
        assert source.count() == 25

    def test_filtered_query(self, db_session, seeded_entries):
        source = QueryDataSource(EntryRepository(db_session).listing_query("Entry 01"))

        assert source.count() == 10
        assert len(source.fetch(0, 5)) == 5

    def test_joined_collection_inflates_rows_without_distinct(self, db_session, tagged_entries):
        query = EntryRepository(db_session).tag_listing_query()

        assert QueryDataSource(query).count() == 36
        assert QueryDataSource(query, fetch_join_collection=True).count() == 12

    def test_fetch_join_collection_fills_page(self, db_session, tagged_entries):
        query = EntryRepository(db_session).tag_listing_query()
        source = QueryDataSource(query, fetch_join_collection=True)

        entries = source.fetch(5, 5)

        assert [entry.title for entry in entries] == [f"Entry {n:03d}" for n in range(6, 11)]

    def test_tag_filter_rows_repeat_per_matching_tag(self, db_session, tagged_entries):
        query = EntryRepository(db_session).tag_listing_query(["python", "flask"])

        assert QueryDataSource(query).count() == 24
        assert QueryDataSource(query, fetch_join_collection=True).count() == 12

    def test_tag_filter_without_matches_is_empty(self, db_session, tagged_entries):
        query = EntryRepository(db_session).tag_listing_query(["rust"])
        source = QueryDataSource(query, fetch_join_collection=True)

        assert source.count() == 0
        assert source.fetch(0, 5) == []


class TestIdListDataSource:

    def test_fetch_loads_page_of_ids_with_tags(self, db_session, tagged_entries):
        source = EntryRepository(db_session).tagged_data_source()

        entries = source.fetch(0, 5)

        assert len(entries) == 5
        assert source.id_list == [entry.id for entry in entries]
        assert all([tag.name for tag in entry.tags] == ["flask", "python", "sqlalchemy"] for entry in entries)

    def test_count_counts_root_entities(self, db_session, tagged_entries):
        assert EntryRepository(db_session).tagged_data_source().count() == 12

    def test_empty_id_list_returns_no_items(self, db_session, tagged_entries):
        source = IdListDataSource(
            db_session.query(Entry),
            id_loader=lambda offset, limit: [],
            id_column=Entry.id,
        )

        assert source.fetch(0, 5) == []
        assert source.id_list == []

    def test_paginator_exposes_id_list(self, db_session, tagged_entries):
        source = EntryRepository(db_session).tagged_data_source()
        paginator = Paginator(source, items_per_page=5)

        page = paginator.page(3)

        assert len(page) == 2
        assert paginator.id_list == [entry.id for entry in page]

    def test_page_past_end_raises(self, db_session, tagged_entries):
        paginator = Paginator(EntryRepository(db_session).tagged_data_source(), items_per_page=5)

        with pytest.raises(EmptyPageError):
            paginator.page(4)


class TestTextDataSource:

    def test_fetch_and_count(self, db_session, seeded_entries):
        source = EntryRepository(db_session).title_data_source()

        rows = source.fetch(20, 10)

        assert source.count() == 25
        assert [row.title for row in rows] == [f"Entry {n:03d}" for n in range(21, 26)]

    def test_extra_params(self, db_session, seeded_entries):
        source = TextDataSource(
            db_session,
            text("SELECT id, title FROM entries WHERE id > :min_id ORDER BY id LIMIT :limit OFFSET :offset"),
            text("SELECT COUNT(*) FROM entries WHERE id > :min_id"),
            params={'min_id': 20},
        )

        assert source.count() == 5
        assert len(source.fetch(0, 10)) == 5
        assert source.params == {'min_id': 20}


class TestAsDataSource:

    def test_data_source_is_returned_unchanged(self):
        source = SequenceDataSource([1])
        assert as_data_source(source) is source

    def test_query_is_wrapped(self, db_session):
        source = as_data_source(db_session.query(Entry), fetch_join_collection=True)

        assert isinstance(source, QueryDataSource)
        assert source.fetch_join_collection is True

    def test_list_is_wrapped(self):
        assert isinstance(as_data_source([1, 2]), SequenceDataSource)

    @pytest.mark.parametrize("value", [42, "abc", None])
    def test_unsupported_types(self, value):
        with pytest.raises(TypeError):
            as_data_source(value)

    def test_data_source_is_abstract(self):
        with pytest.raises(TypeError):
            DataSource()
