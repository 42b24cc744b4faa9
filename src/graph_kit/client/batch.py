"""Batch API support.

A batch scope collects calls and sends them to the API as one request.
The combined response is split back into one result per call, each
classified independently, so a failing call never aborts its siblings.
"""

import json
import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode, urlsplit

from ..exceptions import BatchScopeError, GraphError, TransportError
from ..models.call import Call, HTTPComponent
from ..operations.errors import check_response
from ..uploadable_io import UploadableIO
from .base import BaseGraphClient
from .methods import GraphAPIMethods

if TYPE_CHECKING:
    from .graph_api import GraphAPI

logger = logging.getLogger(__name__)

_PENDING = object()


class BatchOperation:
    """Placeholder for a call registered in a batch.

    Returned in place of the call's result while the batch is open. Once
    the batch executes, ``result`` holds the processed value or the
    GraphError the call failed with.
    """

    def __init__(self, call: Call, index: int) -> None:
        self.call = call
        self.index = index
        self._result: Any = _PENDING

    @property
    def done(self) -> bool:
        return self._result is not _PENDING

    @property
    def result(self) -> Any:
        """The call's result, or the error it failed with."""
        if not self.done:
            raise BatchScopeError("Batch has not been executed yet")
        return self._result

    @property
    def failed(self) -> bool:
        return self.done and isinstance(self._result, GraphError)

    def value(self) -> Any:
        """Return the result, raising the captured error if the call failed."""
        result = self.result
        if isinstance(result, GraphError):
            raise result
        return result

    def resolve(self, result: Any) -> None:
        self._result = result

    def to_batch_params(
        self, access_token: str | None
    ) -> tuple[dict[str, Any], dict[str, UploadableIO]]:
        """Serialize the call for the ``batch`` parameter.

        Args:
            access_token: Token of the batch request; a call-level token is
                only sent when it differs

        Returns:
            Tuple of (request description, attached files by field name)
        """
        args: dict[str, Any] = {}
        files: dict[str, UploadableIO] = {}

        for key, value in self.call.args.items():
            if value is None:
                continue
            if isinstance(value, UploadableIO):
                files[f"op{self.index}_file{len(files)}"] = value
            elif isinstance(value, (bool, dict, list, tuple)):
                args[key] = json.dumps(value)
            else:
                args[key] = str(value)

        if args.get("access_token") == access_token:
            args.pop("access_token")

        relative_url = _relative_path(self.call.path)
        request: dict[str, Any] = {"method": self.call.verb}

        if self.call.verb == "POST":
            request["relative_url"] = relative_url
            request["body"] = urlencode(args)
        else:
            query = urlencode(args)
            request["relative_url"] = f"{relative_url}?{query}" if query else relative_url

        if files:
            request["attached_files"] = ",".join(files)

        return request, files


def _relative_path(path: str) -> str:
    # Absolute page URLs carry the host (and version); the batch endpoint
    # wants the path below it
    if path.startswith(("http://", "https://")):
        return urlsplit(path).path.lstrip("/")
    return path.strip("/")


def _headers_from_fragment(fragment: dict[str, Any]) -> dict[str, str]:
    return {
        str(header["name"]).lower(): header["value"]
        for header in fragment.get("headers") or []
        if isinstance(header, dict) and "name" in header and "value" in header
    }


class GraphBatchAPI(GraphAPIMethods, BaseGraphClient):
    """A batch scope bound to a GraphAPI client.

    Exposes the same verb methods as GraphAPI; each returns a
    BatchOperation. Use as a context manager to execute on exit:

        with api.batch() as batch:
            me = batch.get_object("me")
            friends = batch.get_connections("me", "friends")
        me.result, friends.result

    or call ``execute()`` explicitly. A scope executes exactly once.
    """

    def __init__(self, owner: "GraphAPI", http_options: dict[str, Any] | None = None) -> None:
        super().__init__(owner.config, owner._transport, access_token=owner.access_token)
        self._owner = owner
        self._http_options = dict(http_options or {})
        self._operations: list[BatchOperation] = []
        self._executed = False

    @property
    def operations(self) -> list[BatchOperation]:
        return list(self._operations)

    @property
    def results(self) -> list[Any]:
        """Results of all operations, in registration order."""
        return [op.result for op in self._operations]

    def __len__(self) -> int:
        return len(self._operations)

    def __enter__(self) -> "GraphBatchAPI":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if exc_type is not None:
            # Calls registered before the exception are dropped, not sent
            logger.info(f"Discarding batch of {len(self._operations)} calls after error")
            self._discard()
            return
        self.execute()

    def batch(self, http_options: dict[str, Any] | None = None) -> "GraphBatchAPI":
        raise BatchScopeError("Batches cannot be nested")

    def _execute(self, call: Call) -> BatchOperation:
        if self._executed:
            raise BatchScopeError("Batch has already been executed")
        if len(self._operations) >= self.config.max_batch_size:
            raise BatchScopeError(
                f"Batch requests are limited to {self.config.max_batch_size} calls"
            )

        operation = BatchOperation(call, len(self._operations))
        self._operations.append(operation)
        logger.debug(f"Registered batch call {operation.index}: {call.verb} {call.path}")
        return operation

    def _discard(self) -> None:
        self._executed = True
        self._owner._release_batch(self)

    def execute(self, http_options: dict[str, Any] | None = None) -> list[Any]:
        """Send all registered calls as one request.

        Args:
            http_options: Options for the combined request, merged over
                the ones given when the batch was opened

        Returns:
            One entry per registered call, in registration order: the
            processed result, or the GraphError that call failed with

        Raises:
            BatchScopeError: If the batch was already executed
            GraphError: If the combined request itself failed; every
                operation also receives this error as its result
        """
        if self._executed:
            raise BatchScopeError("Batch has already been executed")
        self._discard()

        if not self._operations:
            return []

        options = {**self._http_options, **(http_options or {})}
        batch_requests: list[dict[str, Any]] = []
        args: dict[str, Any] = {}

        for operation in self._operations:
            request, files = operation.to_batch_params(self.access_token)
            batch_requests.append(request)
            args.update(files)

        args["batch"] = json.dumps(batch_requests)

        logger.info(f"Executing batch of {len(self._operations)} calls")

        try:
            response = self._owner._api(Call(path="", verb="POST", args=args, options=options))
            fragments = self._decode_body(response.body, response.status)

            error = check_response(fragments)
            if error is not None:
                raise error

            if not isinstance(fragments, list) or len(fragments) != len(self._operations):
                raise TransportError(
                    f"Batch response does not match the {len(self._operations)} calls sent",
                    status_code=response.status,
                )
        except GraphError as e:
            for operation in self._operations:
                operation.resolve(e)
            raise

        for operation, fragment in zip(self._operations, fragments):
            operation.resolve(self._resolve_fragment(operation.call, fragment))

        return self.results

    def _resolve_fragment(self, call: Call, fragment: Any) -> Any:
        if fragment is None:
            return TransportError("Batch call did not complete")
        if not isinstance(fragment, dict):
            return TransportError(
                "Malformed batch fragment", details={"fragment": fragment}
            )

        try:
            component = call.http_component
            if component == HTTPComponent.HEADERS:
                result = _headers_from_fragment(fragment)
            elif component == HTTPComponent.STATUS:
                result = fragment.get("code")
            else:
                result = self._decode_body(fragment.get("body"), fragment.get("code") or 0)

            # Process through the owner so pages fetch outside this batch
            return self._owner._process(call, result)
        except GraphError as e:
            return e
