"""Request dispatching for Graph API clients.

This module turns a logical Call into one transport request and classifies
the outcome: API errors are raised, pageable results become
GraphCollections, and the call's post-processing runs last.
"""

import json
import logging
from typing import Any

from ..collection import GraphCollection, PageParams
from ..exceptions import GraphError, MissingAccessTokenError, TransportError
from ..models.call import Call, HTTPComponent, HTTPVerb, RawResponse
from ..models.config import GraphConfig
from ..operations.errors import check_response
from ..protocols import Transport
from ..uploadable_io import UploadableIO

logger = logging.getLogger(__name__)


class BaseGraphClient:
    """Foundation shared by GraphAPI and batch scopes.

    Holds the configuration, access token and transport, and implements
    the single-call dispatcher. Not intended to be used directly - use
    GraphAPI instead.
    """

    def __init__(
        self,
        config: GraphConfig,
        transport: Transport,
        access_token: str | None = None,
    ) -> None:
        """Initialize the base client.

        Args:
            config: Client configuration
            transport: Transport used for every request
            access_token: Overrides the token from config when given
        """
        self.config = config
        self._transport = transport
        self._access_token = access_token or config.get_access_token()

    @property
    def access_token(self) -> str | None:
        return self._access_token

    def graph_call(
        self,
        path: str,
        args: dict[str, Any] | None = None,
        verb: HTTPVerb = "GET",
        options: dict[str, Any] | None = None,
        post_process: Any = None,
    ) -> Any:
        """Make a call to the Graph API.

        Args:
            path: Object id, ``id/connection`` path, or absolute page URL
            args: Request parameters
            verb: HTTP method
            options: Per-call options (``headers``, ``timeout``,
                ``http_component``, ``video``)
            post_process: Optional function applied to the final result

        Returns:
            Decoded result, GraphCollection for pageable results, or the
            output of post_process

        Raises:
            MissingAccessTokenError: On POST/DELETE without an access token
            GraphAPIError: If the API returns an error body
            TransportError: On network or decoding failure
        """
        call = Call(
            path=path,
            verb=verb,
            args=args or {},
            options=options or {},
            post_process=post_process,
        )
        return self.dispatch(call)

    def dispatch(self, call: Call) -> Any:
        """Check preconditions and execute a call."""
        self._check_access_token(call)
        return self._execute(call)

    def get_page(self, params: PageParams) -> Any:
        """Fetch a page of a GraphCollection from its (path, args) params."""
        path, args = params
        return self.graph_call(path, args, "GET")

    def _check_access_token(self, call: Call) -> None:
        if call.requires_access_token and not self.access_token:
            action = "Delete" if call.verb == "DELETE" else "Write"
            raise MissingAccessTokenError(
                f"{action} operations require an access token",
                details={"path": call.path, "verb": call.verb},
            )

    def _execute(self, call: Call) -> Any:
        response = self._api(call)
        return self._process(call, self._select_component(call, response))

    def _process(self, call: Call, result: Any) -> Any:
        """Classify, wrap, and post-process a selected response component."""
        error = check_response(result)
        if error is not None:
            raise error

        result = GraphCollection.evaluate(result, self)

        if call.post_process is not None:
            return call.post_process(result)
        return result

    def _select_component(self, call: Call, response: RawResponse) -> Any:
        component = call.http_component
        if component == HTTPComponent.HEADERS:
            return response.headers
        if component == HTTPComponent.STATUS:
            return response.status
        return self._decode_body(response.body, response.status)

    def _decode_body(self, body: Any, status: int) -> Any:
        if not isinstance(body, (str, bytes, bytearray)):
            return body
        try:
            return json.loads(body)
        except ValueError as e:
            logger.warning(f"Undecodable response body (HTTP {status})")
            raise TransportError(
                f"Response body is not valid JSON (HTTP {status}): {e}",
                status_code=status,
                details={"body": body[:500]},
            ) from e

    def _api(self, call: Call) -> RawResponse:
        """Send a call through the transport, adding the access token."""
        url = self._build_url(call.path, video=bool(call.options.get("video")))
        params = self._encode_args(call.args)

        logger.debug(f"{call.verb} {url} params={sorted(params)}")

        try:
            response = self._transport.request(call.verb, url, params, call.options)
        except GraphError:
            raise
        except Exception as e:
            raise TransportError(
                f"Request failed: {e}", details={"url": url, "verb": call.verb}
            ) from e
        finally:
            for value in params.values():
                if isinstance(value, UploadableIO):
                    value.close()

        logger.debug(f"Response: {response.status}")
        return response

    def _build_url(self, path: str, video: bool = False) -> str:
        """Build the full URL for a path.

        Args:
            path: Relative API path, or an absolute URL (kept as-is)
            video: Use the video upload host

        Returns:
            Complete URL
        """
        if path.startswith(("http://", "https://")):
            return path
        base = self.config.get_base_url(video=video)
        path = path.strip("/")
        return f"{base}/{path}" if path else base

    def _encode_args(self, args: dict[str, Any]) -> dict[str, Any]:
        params: dict[str, Any] = {}
        for key, value in args.items():
            if value is None:
                continue
            if isinstance(value, (UploadableIO, str)):
                params[key] = value
            elif isinstance(value, (bool, dict, list, tuple)):
                # Structured values travel as embedded JSON strings
                params[key] = json.dumps(value)
            else:
                params[key] = str(value)

        if self.access_token and "access_token" not in params:
            params["access_token"] = self.access_token

        return params
