"""Paged results for connections and searches.

A GraphCollection wraps one fetched page. It behaves like an immutable
sequence of the page's items and knows how to request the adjacent pages.
"""

import logging
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, Any, overload
from urllib.parse import parse_qsl, urlsplit, urlunsplit

from .exceptions import NoSuchPageError

if TYPE_CHECKING:
    from .client.base import BaseGraphClient

logger = logging.getLogger(__name__)

PageParams = tuple[str, dict[str, Any]]


class GraphCollection(Sequence[Any]):
    """One page of a paged API result.

    Paging links are read from the ``paging`` block when the response has
    one. Responses without it may carry legacy top-level ``next`` and
    ``previous`` links, which are used only when the client's config has
    ``legacy_paging`` enabled. The two styles are never mixed for one page.

    Example:
        >>> friends = api.get_connections("me", "friends")
        >>> len(friends)
        25
        >>> more = friends.next_page()
    """

    def __init__(self, response: dict[str, Any], api: "BaseGraphClient") -> None:
        self._raw = response
        self._api = api

    @classmethod
    def evaluate(cls, response: Any, api: "BaseGraphClient") -> Any:
        """Wrap a response in a collection if it's pageable.

        Args:
            response: Decoded API result
            api: Client used to fetch adjacent pages

        Returns:
            GraphCollection for ``{"data": [...]}`` mappings, else the
            response unchanged
        """
        if isinstance(response, dict) and isinstance(response.get("data"), list):
            return cls(response, api)
        return response

    @property
    def raw(self) -> dict[str, Any]:
        """The decoded response body this page was built from."""
        return self._raw

    @property
    def data(self) -> list[Any]:
        return list(self._raw["data"])

    @property
    def paging(self) -> dict[str, Any] | None:
        paging = self._raw.get("paging")
        return paging if isinstance(paging, dict) else None

    @property
    def cursors(self) -> dict[str, Any]:
        paging = self.paging
        if paging and isinstance(paging.get("cursors"), dict):
            return dict(paging["cursors"])
        return {}

    @property
    def summary(self) -> Any:
        return self._raw.get("summary")

    @overload
    def __getitem__(self, index: int) -> Any: ...

    @overload
    def __getitem__(self, index: slice) -> list[Any]: ...

    def __getitem__(self, index: int | slice) -> Any:
        return self._raw["data"][index]

    def __len__(self) -> int:
        return len(self._raw["data"])

    def __iter__(self) -> Iterator[Any]:
        return iter(self._raw["data"])

    def __eq__(self, other: object) -> bool:
        if isinstance(other, GraphCollection):
            return self._raw == other._raw
        if isinstance(other, list):
            return self._raw["data"] == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"GraphCollection({self._raw['data']!r})"

    def _link(self, direction: str) -> str | None:
        paging = self.paging
        if paging is not None:
            link = paging.get(direction)
        elif self._api.config.legacy_paging:
            link = self._raw.get(direction)
        else:
            link = None
        return link if isinstance(link, str) and link else None

    def next_page_params(self) -> PageParams | None:
        """Get (path, args) for the next page, or None on the last page."""
        link = self._link("next")
        return self.parse_page_url(link) if link else None

    def previous_page_params(self) -> PageParams | None:
        """Get (path, args) for the previous page, or None on the first page."""
        link = self._link("previous")
        return self.parse_page_url(link) if link else None

    def next_page(self) -> Any:
        """Fetch the next page.

        Returns:
            New GraphCollection for the next page

        Raises:
            NoSuchPageError: If this is the last page
        """
        params = self.next_page_params()
        if params is None:
            raise NoSuchPageError("No next page available for this collection")
        return self._api.get_page(params)

    def previous_page(self) -> Any:
        """Fetch the previous page.

        Raises:
            NoSuchPageError: If this is the first page
        """
        params = self.previous_page_params()
        if params is None:
            raise NoSuchPageError("No previous page available for this collection")
        return self._api.get_page(params)

    @staticmethod
    def parse_page_url(url: str) -> PageParams:
        """Split a paging link into a bare URL and its query arguments.

        The access token is dropped; the client adds its own.

        Example:
            >>> GraphCollection.parse_page_url(
            ...     "https://graph.facebook.com/me/friends?limit=2&after=QVFI"
            ... )
            ('https://graph.facebook.com/me/friends', {'limit': '2', 'after': 'QVFI'})
        """
        parts = urlsplit(url)
        args = {
            key: value
            for key, value in parse_qsl(parts.query, keep_blank_values=True)
            if key != "access_token"
        }
        bare_url = urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
        return bare_url, args
