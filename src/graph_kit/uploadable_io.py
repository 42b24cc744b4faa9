"""Byte source wrapper for media uploads.

UploadableIO hides where upload bytes come from (a path on disk, an open
binary handle, or an in-memory buffer) so the transport can stream it as a
multipart field.
"""

import io
import mimetypes
from pathlib import Path
from typing import IO, Any

DEFAULT_CONTENT_TYPE = "application/octet-stream"
DEFAULT_FILENAME = "upload"


class UploadableIO:
    """A file to upload, with its name and content type.

    Args:
        source: File path, open binary handle, or bytes
        content_type: MIME type; guessed from the file name when omitted
        filename: Name sent in the multipart field; derived from the source
            when omitted

    Raises:
        FileNotFoundError: If source is a path that doesn't exist
        TypeError: If source is not a supported type

    Example:
        >>> upload = UploadableIO("photo.jpg")
        >>> upload.content_type
        'image/jpeg'
    """

    def __init__(
        self,
        source: str | Path | bytes | bytearray | IO[bytes],
        content_type: str | None = None,
        filename: str | None = None,
    ) -> None:
        self._path: Path | None = None
        self._data: bytes | None = None
        self._handle: IO[bytes] | None = None
        self._owns_handle = False

        if isinstance(source, (str, Path)):
            path = Path(source)
            if not path.is_file():
                raise FileNotFoundError(f"File not found: {source}")
            self._path = path
            default_name = path.name
        elif isinstance(source, (bytes, bytearray)):
            self._data = bytes(source)
            default_name = DEFAULT_FILENAME
        elif hasattr(source, "read"):
            self._handle = source
            name = getattr(source, "name", None)
            default_name = Path(name).name if isinstance(name, str) and name else DEFAULT_FILENAME
        else:
            raise TypeError(
                f"Cannot upload {type(source).__name__}: expected a path, bytes, or binary file"
            )

        self._filename = filename or default_name
        self._content_type = (
            content_type or mimetypes.guess_type(self._filename)[0] or DEFAULT_CONTENT_TYPE
        )

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def content_type(self) -> str:
        return self._content_type

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def io(self) -> IO[bytes]:
        """Binary handle for the upload, opened lazily for paths and buffers."""
        if self._handle is None:
            if self._path is not None:
                self._handle = open(self._path, "rb")
            elif self._data is not None:
                self._handle = io.BytesIO(self._data)
            else:
                raise ValueError(f"Upload {self.filename!r} has no readable source")
            self._owns_handle = True
        return self._handle

    def to_file_tuple(self) -> tuple[str, IO[bytes], str]:
        """Build an httpx multipart file tuple."""
        return (self.filename, self.io, self.content_type)

    def close(self) -> None:
        """Close the handle if this wrapper opened it."""
        if self._owns_handle and self._handle is not None:
            self._handle.close()
            self._handle = None
            self._owns_handle = False

    def __enter__(self) -> "UploadableIO":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"UploadableIO(filename={self.filename!r}, content_type={self.content_type!r})"
