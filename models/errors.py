"""
Exceptions raised by the paginator view models.

Both errors represent a page the client asked for that does not exist, so
they subclass werkzeug's ``NotFound`` and Flask answers them with a 404
without any extra error handler.
"""

from werkzeug.exceptions import NotFound


class PaginationError(NotFound):
    """Base exception for pagination errors."""

    default_message = "page not found"

    def __init__(self, message: str = None, page=None):
        self.page = page
        self.message = message or self.default_message
        super().__init__(description=self.message)


class InvalidPageError(PaginationError):
    """
    Raised when the requested page is not a positive integer.

    Attributes:
        page: The raw value that was rejected (``0``, ``-1``, ``'abc'``, ...)
    """

    default_message = "page is invalid"


class EmptyPageError(PaginationError):
    """
    Raised when the data source has items but the requested page has none.

    Attributes:
        page: The page number past the end of the collection
        total_count: Number of items across all pages
    """

    default_message = "out of page index"

    def __init__(self, message: str = None, page=None, total_count: int = None):
        self.total_count = total_count
        super().__init__(message, page=page)
