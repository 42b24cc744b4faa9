"""Protocols for the collaborators graph-kit depends on.

Any object satisfying these protocols can be injected into GraphAPI, which
keeps the request core independent of a concrete HTTP library.
"""

from typing import Any, Protocol, runtime_checkable

from .models.call import RawResponse


@runtime_checkable
class Transport(Protocol):
    """Executes a single HTTP request.

    Implementations raise graph_kit.exceptions.TransportError (or a
    subclass) on network failure or cancellation.
    """

    def request(
        self,
        verb: str,
        url: str,
        params: dict[str, Any],
        options: dict[str, Any],
    ) -> RawResponse:
        """Send a request and return the raw response.

        Args:
            verb: HTTP method (GET, POST, DELETE)
            url: Absolute request URL
            params: Request parameters; UploadableIO values are file fields
            options: Per-call options (headers, timeout)

        Returns:
            RawResponse with the undecoded body text
        """
        ...

    def close(self) -> None:
        """Release any pooled connections."""
        ...


@runtime_checkable
class ByteSource(Protocol):
    """Something that can be attached as a multipart file field."""

    @property
    def content_type(self) -> str: ...

    @property
    def filename(self) -> str: ...

    def to_file_tuple(self) -> tuple[str, Any, str]: ...

    def close(self) -> None: ...
