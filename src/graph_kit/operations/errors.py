"""Classification of decoded API responses."""

from typing import Any

from ..exceptions import GraphAPIError


def check_response(body: Any) -> GraphAPIError | None:
    """Return the API error carried by a decoded response body, if any.

    Only a mapping with an ``error`` key is an error. The error is returned
    rather than raised so batch execution can store it as a result.

    Example:
        >>> check_response({"error": {"type": "OAuthException", "message": "bad"}})
        GraphAPIError('OAuthException: bad')
        >>> check_response({"data": []}) is None
        True
    """
    if isinstance(body, dict) and "error" in body:
        return GraphAPIError(body["error"])
    return None
