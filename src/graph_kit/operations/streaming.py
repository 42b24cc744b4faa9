"""Streaming pagination utilities for large connections.

This module provides a generator that follows next-page links lazily,
allowing memory-efficient iteration over every item of a connection.
"""

from collections.abc import Generator
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..collection import GraphCollection


def stream_collection(
    collection: "GraphCollection",
    max_pages: int | None = None,
) -> Generator[Any, None, None]:
    """Yield every item of a collection, fetching further pages as needed.

    Each page is requested only once the previous one has been consumed.

    Args:
        collection: First page, as returned by get_connections or search
        max_pages: Stop after this many pages (including the first)

    Yields:
        Items one at a time

    Example:
        >>> friends = api.get_connections("me", "friends")
        >>> for friend in stream_collection(friends):
        ...     print(friend["name"])
    """
    page: GraphCollection | None = collection
    pages_read = 0

    while page is not None:
        yield from page
        pages_read += 1

        if max_pages is not None and pages_read >= max_pages:
            break

        # Empty pages still carry a next link on some endpoints
        if not page or page.next_page_params() is None:
            break

        page = page.next_page()
