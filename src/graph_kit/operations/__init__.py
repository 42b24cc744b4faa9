"""Operations module for graph-kit.

Helpers used by the clients: response classification, media argument
parsing, and streaming pagination.
"""

from graph_kit.operations.errors import check_response
from graph_kit.operations.media import (
    ContentURL,
    is_url,
    parse_media_args,
    resolve_media_source,
)
from graph_kit.operations.streaming import stream_collection

__all__ = [
    "ContentURL",
    "check_response",
    "is_url",
    "parse_media_args",
    "resolve_media_source",
    "stream_collection",
]
