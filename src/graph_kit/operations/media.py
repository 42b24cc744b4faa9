"""Argument parsing for photo and video uploads.

put_picture and put_video accept several positional call shapes:

    put_picture(file, [content_type], [args], [target_id], [options])
    put_picture(path_to_file, [content_type], [args], [target_id], [options])
    put_picture(picture_url, [args], [target_id], [options])

URLs have no content type slot. This module resolves those shapes into the
(target_id, connection, args, options) form used by put_object.
"""

from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple
from urllib.parse import urlparse

from ..exceptions import ArgumentError
from ..uploadable_io import UploadableIO


class ContentURL(NamedTuple):
    """Media hosted at a remote URL, fetched by the API server itself."""

    url: str


MediaSource = ContentURL | UploadableIO


def is_url(data: Any) -> bool:
    """Check whether data is an absolute http(s) URL.

    Example:
        >>> is_url("https://example.com/cat.jpg")
        True
        >>> is_url("/tmp/cat.jpg")
        False
    """
    if not isinstance(data, str):
        return False
    try:
        parsed = urlparse(data)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def resolve_media_source(source: Any, content_type: str | None = None) -> MediaSource:
    """Inspect an upload source and wrap it in the matching media type.

    Args:
        source: URL string, file path, binary handle, bytes, or an existing
            UploadableIO (returned unchanged)
        content_type: Optional MIME type hint (ignored for URLs)

    Returns:
        ContentURL for remote URLs, UploadableIO for everything else

    Raises:
        ArgumentError: If the source can't be uploaded
        FileNotFoundError: If source is a missing local path
    """
    if is_url(source):
        return ContentURL(source)
    if isinstance(source, UploadableIO):
        return source

    try:
        return UploadableIO(source, content_type)
    except TypeError as e:
        raise ArgumentError(str(e)) from e


def parse_media_args(
    media_args: Sequence[Any], connection: str
) -> tuple[str, str, dict[str, Any], dict[str, Any]]:
    """Normalize positional upload arguments for put_object.

    Args:
        media_args: 1 to 5 positional values, as passed to put_picture/put_video
        connection: Target connection ("photos" or "videos")

    Returns:
        Tuple of (target_id, connection, args, options)

    Raises:
        ArgumentError: On a wrong number of arguments

    Example:
        >>> target, conn, args, options = parse_media_args(
        ...     ["http://example.com/y.jpg", {"message": "hi"}], "photos"
        ... )
        >>> target, conn, args["url"]
        ('me', 'photos', 'http://example.com/y.jpg')
    """
    if not 1 <= len(media_args) <= 5:
        method = "put_picture" if connection == "photos" else "put_video"
        raise ArgumentError(
            f"Wrong number of arguments for {method}: expected 1 to 5, got {len(media_args)}"
        )

    first = media_args[0]
    url = is_url(first)

    # Only byte sources have a content type slot, and only when the
    # following value isn't already the args mapping
    has_content_type = (
        not url and len(media_args) > 1 and not isinstance(media_args[1], Mapping)
    )
    offset = 1 if has_content_type else 0

    def positional(index: int) -> Any:
        index += offset
        return media_args[index] if index < len(media_args) else None

    args = dict(positional(1) or {})
    target_id = positional(2) or "me"
    options = dict(positional(3) or {})

    source = resolve_media_source(first, media_args[1] if has_content_type else None)
    if isinstance(source, ContentURL):
        args["url"] = source.url
    else:
        args["source"] = source

    return str(target_id), connection, args, options
