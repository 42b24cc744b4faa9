"""Graph API client.

The Graph API is made up of objects (people, pages, events, photos) and
the connections between them (friends, photo tags, event RSVPs). This
client provides access to those primitive types in a generic way.
"""

import logging
from typing import Any

from ..exceptions import BatchScopeError
from ..models.config import GraphConfig
from ..protocols import Transport
from ..transport.httpx_transport import HTTPXTransport
from .base import BaseGraphClient
from .batch import GraphBatchAPI
from .methods import GraphAPIMethods

logger = logging.getLogger(__name__)


class GraphAPI(GraphAPIMethods, BaseGraphClient):
    """Synchronous Graph API client.

    Example:
        ```python
        from graph_kit import GraphAPI

        with GraphAPI("access-token") as api:
            user = api.get_object("me")
            friends = api.get_connections(user["id"], "friends")

            with api.batch() as batch:
                me = batch.get_object("me")
                picture = batch.get_picture("me")

            print(me.result, picture.result)
        ```
    """

    def __init__(
        self,
        access_token: str | None = None,
        config: GraphConfig | None = None,
        transport: Transport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            access_token: OAuth token; overrides the one in config
            config: Client configuration (defaults loaded from the environment)
            transport: HTTP transport (defaults to an httpx-based transport)
        """
        if config is None:
            config = GraphConfig()
        self._owns_transport = transport is None
        super().__init__(
            config,
            transport or HTTPXTransport(config),
            access_token=access_token,
        )
        self._open_batch: GraphBatchAPI | None = None

        logger.info(
            f"Initialized Graph API client for {config.get_base_url()} "
            f"(token: {'set' if self.access_token else 'none'})"
        )

    def __enter__(self) -> "GraphAPI":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            self._transport.close()
        logger.info("Closed Graph API client")

    def batch(self, http_options: dict[str, Any] | None = None) -> GraphBatchAPI:
        """Open a batch scope.

        Calls made on the returned scope are collected and sent as a single
        request when it executes. Only one scope may be open per client.

        Args:
            http_options: Options for the combined request

        Raises:
            BatchScopeError: If a batch is already open on this client
        """
        if self._open_batch is not None:
            raise BatchScopeError("A batch is already open on this client; execute it first")
        self._open_batch = GraphBatchAPI(self, http_options)
        return self._open_batch

    def _release_batch(self, scope: GraphBatchAPI) -> None:
        if self._open_batch is scope:
            self._open_batch = None

