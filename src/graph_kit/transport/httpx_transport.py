"""Default HTTP transport built on httpx.

GET and DELETE parameters travel in the query string, POST parameters in
a form body. Any UploadableIO parameter switches the body to multipart.
"""

import logging
from typing import Any

import httpx

from ..exceptions import (
    ConnectionError as GraphConnectionError,
)
from ..exceptions import (
    TimeoutError as GraphTimeoutError,
)
from ..exceptions import TransportError
from ..models.call import RawResponse
from ..models.config import GraphConfig
from ..uploadable_io import UploadableIO

logger = logging.getLogger(__name__)


class HTTPXTransport:
    """Transport that sends requests with an httpx.Client.

    Example:
        >>> transport = HTTPXTransport(GraphConfig())
        >>> response = transport.request("GET", "https://graph.facebook.com/me", {}, {})
        >>> response.status
        200
    """

    def __init__(self, config: GraphConfig, http_client: httpx.Client | None = None) -> None:
        """Initialize the transport.

        Args:
            config: Client configuration (timeout, TLS, pool size)
            http_client: Pre-configured httpx client; not closed by close()
        """
        self.config = config
        self._client = http_client or self._create_default_http_client()
        self._owns_client = http_client is None

    def _create_default_http_client(self) -> httpx.Client:
        """Create default HTTP client with connection pooling."""
        return httpx.Client(
            timeout=self.config.timeout,
            verify=self.config.verify_ssl,
            limits=httpx.Limits(
                max_connections=self.config.max_connections,
                max_keepalive_connections=self.config.max_connections,
            ),
        )

    def close(self) -> None:
        """Close the httpx client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def request(
        self,
        verb: str,
        url: str,
        params: dict[str, Any],
        options: dict[str, Any],
    ) -> RawResponse:
        """Send one request.

        Args:
            verb: HTTP method
            url: Absolute URL
            params: Request parameters
            options: ``headers`` and ``timeout`` are honoured

        Returns:
            RawResponse with the body as text

        Raises:
            ConnectionError: If the host can't be reached
            TimeoutError: If the request times out
            TransportError: On any other httpx failure
        """
        files = {
            key: value.to_file_tuple()
            for key, value in params.items()
            if isinstance(value, UploadableIO)
        }
        fields = {key: value for key, value in params.items() if key not in files}

        kwargs: dict[str, Any] = {"headers": options.get("headers")}
        if "timeout" in options:
            kwargs["timeout"] = options["timeout"]

        if verb == "POST":
            kwargs["data"] = fields
            if files:
                kwargs["files"] = files
        else:
            kwargs["params"] = fields

        try:
            response = self._client.request(verb, url, **kwargs)
        except httpx.ConnectError as e:
            raise GraphConnectionError(f"Failed to connect to {url}: {e}") from e
        except httpx.TimeoutException as e:
            raise GraphTimeoutError(f"Request to {url} timed out: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP request to {url} failed: {e}") from e

        return RawResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.text,
        )
