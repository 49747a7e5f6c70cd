"""Controller for the paginated entry listing.

Handles only routing and HTTP concerns: binds the paginator form, opens a
session, and hands the repository query to the Paginator view model.
"""

import logging
from typing import Any, Dict

from flask import render_template, request

from config import PAGINATOR_DEFAULT_WINDOW
from db.database import get_session_context
from db.repositories.entry_repository import EntryRepository
from forms import PaginatorForm
from models.errors import InvalidPageError
from models.paginator_view_model import Paginator

logger = logging.getLogger(__name__)


class EntryController:
    """Controller for the entry listing routes"""

    def __init__(self, display_window_size: int = PAGINATOR_DEFAULT_WINDOW):
        self.display_window_size = display_window_size

    def _bind_form(self):
        """Validate page and size from the query string.

        Returns:
            Tuple of (page, size)

        Raises:
            InvalidPageError: If page is not a positive integer
        """
        form = PaginatorForm.from_request(request)
        if not form.validate():
            if form.page.errors:
                logger.info(f"Rejected page parameter {request.args.get('page')!r}: {form.page.errors}")
                raise InvalidPageError(page=request.args.get('page'))
            # An unusable size falls back to the default
            form.size.data = form.size.default

        # Optional() lets an empty "size=" through with no value
        if form.size.data is None:
            form.size.data = form.size.default

        return form.page.data, form.size.data

    def entries(self):
        """Render one page of entries with its pager.

        Returns:
            Flask Response (rendered template)
        """
        page_number, size = self._bind_form()
        title_filter = request.args.get("q")

        with get_session_context() as session:
            repository = EntryRepository(session)
            paginator = Paginator.from_request(
                request,
                repository.listing_query(title_filter),
                items_per_page=size,
                display_window_size=self.display_window_size,
            )
            page = paginator.page(page_number)

            return render_template(
                "entries.html",
                paginator=paginator,
                page=page,
                query=title_filter,
            )

    def api_entries(self) -> Dict[str, Any]:
        """
        GET /api/entries?page=1&size=20&tagged=1&tag=python&tag=flask

        Returns one page of entries with page window metadata and links.
        """
        page_number, size = self._bind_form()
        tagged = request.args.get("tagged") is not None
        tag_names = request.args.getlist("tag")

        with get_session_context() as session:
            repository = EntryRepository(session)
            if tag_names:
                source = repository.tag_listing_query(tag_names)
            elif tagged:
                source = repository.tagged_data_source()
            else:
                source = repository.listing_query()
            paginator = Paginator.from_request(
                request,
                source,
                items_per_page=size,
                display_window_size=self.display_window_size,
                fetch_join_collection=bool(tag_names),
            )
            page = paginator.page(page_number)
            result = page.pagination

            return {
                'entries': [
                    {
                        'id': entry.id,
                        'title': entry.title,
                        'tags': [tag.name for tag in entry.tags] if tagged or tag_names else None,
                    }
                    for entry in page
                ],
                'pagination': {
                    'current_page': result.current_page,
                    'total_count': result.total_count,
                    'items_per_page': result.items_per_page,
                    'start_page': result.start_page,
                    'end_page': result.end_page,
                    'first_page': result.first_page,
                    'last_page': result.last_page,
                    'first_index': page.first_index,
                    'last_index': page.last_index,
                    'prev_page': page.prev_page,
                    'next_page': page.next_page,
                    'can_paginate': result.can_paginate,
                },
                'links': {
                    'current': page.current_page_link,
                    'prev': page.prev_page_link if page.has_prev_page else None,
                    'next': page.next_page_link if page.has_next_page else None,
                    'pages': {
                        str(number): page.link_for(number)
                        for number in result.display_page_range
                    },
                },
            }
