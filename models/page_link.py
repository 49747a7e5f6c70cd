"""
Page link generator.

Builds the query string for "the current request's parameters, with the page
replaced". Links are cached per page number for the lifetime of the builder,
so repeated calls in one render pass return the same string.
"""

from typing import Any, Dict, Mapping, Optional


class PageLinkBuilder:
    """Generates and caches ``?key=value&...`` links for page numbers."""

    page_param = "page"

    def __init__(self, query: Optional[Mapping[str, Any]] = None):
        """
        Args:
            query: Query string parameters ({'name': 'value', ...}), in the
                order they should appear in generated links
        """
        self._query = dict(query or {})
        self._links: Dict[Any, str] = {}

    @classmethod
    def from_request(cls, request) -> "PageLinkBuilder":
        """Create a builder from a Flask request's query string (first value per key)."""
        return cls(request.args.to_dict())

    @property
    def query(self) -> Dict[str, Any]:
        """Copy of the base parameters."""
        return dict(self._query)

    def link_for(self, number) -> str:
        """Return the link for page ``number``, generating it on first use."""
        if self.has(number):
            return self._links[number]

        link = self._generate(number)
        self._links[number] = link
        return link

    def has(self, number) -> bool:
        """Return whether the link for ``number`` has already been generated."""
        return number in self._links

    def _generate(self, number) -> str:
        query = dict(self._query)
        query[self.page_param] = number
        return self.query_string(query)

    @staticmethod
    def query_string(query: Mapping[str, Any]) -> str:
        """
        Serialize parameters without escaping.

        Keys whose value is empty or None are emitted bare (``?q=x&flag``).
        An empty mapping serializes to an empty string.
        """
        if not query:
            return ''

        params = []
        for key, value in query.items():
            if value is None or value == '':
                params.append(str(key))
            else:
                params.append(f"{key}={value}")

        return '?' + '&'.join(params)
