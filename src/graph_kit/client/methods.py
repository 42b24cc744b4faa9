"""Verb-level Graph API operations shared by clients and batch scopes.

Example:

    user = api.get_object("me")
    friends = api.get_connections(user["id"], "friends")
"""

import json
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from ..models.call import HTTPComponent
from ..operations.media import parse_media_args


def _join_ids(ids: str | Iterable[Any]) -> str:
    if isinstance(ids, str):
        return ids
    return ",".join(str(i) for i in ids)


def _location_header(headers: dict[str, str]) -> str | None:
    return headers.get("location")


def _simplify_multiquery(results: Any) -> Any:
    if isinstance(results, Sequence) and not isinstance(results, str):
        return {item["name"]: item["fql_result_set"] for item in results}
    return results or None


def _extract_access_token(result: Any) -> str | None:
    return result.get("access_token") if isinstance(result, dict) else None


class GraphAPIMethods:
    """Verb-level Graph API operations.

    Mixed into GraphAPI and GraphBatchAPI. Every method funnels into
    ``graph_call``; in a batch scope the call is registered instead of sent
    and a BatchOperation placeholder is returned.
    """

    graph_call: Callable[..., Any]

    # Objects

    def get_object(
        self, id: str, args: dict[str, Any] | None = None, options: dict[str, Any] | None = None
    ) -> Any:
        """Fetch the given object from the graph.

        Example:
            >>> api.get_object("me")
            {'id': '1234', 'name': 'Jane'}
        """
        return self.graph_call(id, args, "GET", options)

    def get_objects(
        self,
        ids: str | Iterable[Any],
        args: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        """Fetch several objects at once, keyed by id.

        If any of the ids is invalid the whole call fails.
        """
        ids = _join_ids(ids)
        if not ids:
            return []
        return self.graph_call("", {**(args or {}), "ids": ids}, "GET", options)

    def put_object(
        self,
        parent_object: str,
        connection_name: str,
        args: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        """Write an object to the graph, connected to the given parent.

        Most write operations require extended permissions.

        Example:
            >>> api.put_object("me", "feed", {"message": "Hello, world"})
            {'id': '1234_5678'}
        """
        return self.graph_call(f"{parent_object}/{connection_name}", args, "POST", options)

    def delete_object(self, id: str, options: dict[str, Any] | None = None) -> Any:
        """Delete the object with the given id."""
        return self.graph_call(id, {}, "DELETE", options)

    # Connections

    def get_connections(
        self,
        id: str,
        connection_name: str,
        args: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        """Fetch the connections for the given object.

        Returns:
            GraphCollection of connected objects
        """
        return self.graph_call(f"{id}/{connection_name}", args, "GET", options)

    def put_connections(
        self,
        id: str,
        connection_name: str,
        args: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        return self.graph_call(f"{id}/{connection_name}", args, "POST", options)

    def delete_connections(
        self,
        id: str,
        connection_name: str,
        args: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        return self.graph_call(f"{id}/{connection_name}", args, "DELETE", options)

    # Media (photos and videos)
    # To delete photos or videos, use delete_object(object_id)

    def get_picture(
        self,
        object_id: str,
        args: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        """Get the URL of an object's picture.

        The API answers with a redirect, so the URL is read from the
        Location header rather than the body.
        """
        options = {**(options or {}), "http_component": HTTPComponent.HEADERS}
        return self.graph_call(
            f"{object_id}/picture", args, "GET", options, post_process=_location_header
        )

    def put_picture(self, *picture_args: Any) -> Any:
        """Upload a photo.

        Can be called in several ways:

            put_picture(file, [content_type], [args], [target_id], [options])
            put_picture(path_to_file, [content_type], [args], [target_id], [options])
            put_picture(picture_url, [args], [target_id], [options])

        Example:
            >>> api.put_picture("cat.jpg", "image/jpeg", {"message": "Cat"}, "1234")
            >>> api.put_picture("http://example.com/cat.jpg", {"message": "Cat"})
        """
        return self.put_object(*parse_media_args(picture_args, "photos"))

    def put_video(self, *video_args: Any) -> Any:
        """Upload a video. Accepts the same call shapes as put_picture."""
        target_id, connection, args, options = parse_media_args(video_args, "videos")
        options["video"] = True
        return self.put_object(target_id, connection, args, options)

    # Wall posts
    # To get wall posts, use get_connections(user, "feed")

    def put_wall_post(
        self,
        message: str,
        attachment: dict[str, Any] | None = None,
        profile_id: str = "me",
        options: dict[str, Any] | None = None,
    ) -> Any:
        """Post a message to a wall, with an optional attachment.

        ``attachment`` may hold ``name``, ``link``, ``caption``,
        ``description`` and ``picture``.
        """
        return self.put_object(
            profile_id, "feed", {**(attachment or {}), "message": message}, options
        )

    def put_comment(
        self, object_id: str, message: str, options: dict[str, Any] | None = None
    ) -> Any:
        return self.put_object(object_id, "comments", {"message": message}, options)

    def put_like(self, object_id: str, options: dict[str, Any] | None = None) -> Any:
        return self.put_object(object_id, "likes", {}, options)

    def delete_like(self, object_id: str, options: dict[str, Any] | None = None) -> Any:
        return self.graph_call(f"{object_id}/likes", {}, "DELETE", options)

    # Search

    def search(
        self,
        search_terms: str | None,
        args: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        args = dict(args or {})
        if search_terms is not None:
            args["q"] = search_terms
        return self.graph_call("search", args, "GET", options)

    # Convenience methods for endpoints that need non-standard input

    def fql_query(
        self, query: str, args: dict[str, Any] | None = None, options: dict[str, Any] | None = None
    ) -> Any:
        return self.get_object("fql", {**(args or {}), "q": query}, options)

    def fql_multiquery(
        self,
        queries: dict[str, str] | None = None,
        args: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        """Run several named FQL queries in one call.

        Returns:
            Mapping of query name to its result set
        """
        return self.graph_call(
            "fql",
            {**(args or {}), "q": json.dumps(queries or {})},
            "GET",
            options,
            post_process=_simplify_multiquery,
        )

    def get_page_access_token(
        self,
        object_id: str,
        args: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        return self.graph_call(
            object_id,
            {**(args or {}), "fields": "access_token"},
            "GET",
            options,
            post_process=_extract_access_token,
        )

    def get_comments_for_urls(
        self,
        urls: str | Iterable[str] | None = None,
        args: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        """Fetch comments for the given URLs (iterable or comma-separated)."""
        ids = _join_ids(urls or [])
        if not ids:
            return []
        return self.get_object("comments", {**(args or {}), "ids": ids}, options)

    def set_app_restrictions(
        self,
        app_id: str,
        restrictions: dict[str, Any],
        args: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        return self.graph_call(
            app_id,
            {**(args or {}), "restrictions": json.dumps(restrictions)},
            "POST",
            options,
        )

