"""Tests for batch requests."""

import json
from typing import Any
from urllib.parse import parse_qs

import pytest

from graph_kit import (
    BatchOperation,
    BatchScopeError,
    GraphAPI,
    GraphAPIError,
    GraphCollection,
    GraphConfig,
    MissingAccessTokenError,
    TransportError,
)


def fragment(body: Any, code: int = 200, headers: dict[str, str] | None = None) -> dict:
    """Build one entry of a batch response."""
    return {
        "code": code,
        "headers": [{"name": k, "value": v} for k, v in (headers or {}).items()],
        "body": json.dumps(body) if body is not None else None,
    }


class TestBatchRegistration:
    """Tests for collecting calls in a batch scope."""

    def test_calls_return_placeholders(self, api: GraphAPI, transport: Any) -> None:
        batch = api.batch()

        operation = batch.get_object("me")

        assert isinstance(operation, BatchOperation)
        assert operation.done is False
        assert transport.requests == []
        with pytest.raises(BatchScopeError):
            operation.result

    def test_second_open_batch_fails(self, api: GraphAPI) -> None:
        api.batch()

        with pytest.raises(BatchScopeError):
            api.batch()

    def test_nested_batch_fails(self, api: GraphAPI) -> None:
        batch = api.batch()

        with pytest.raises(BatchScopeError):
            batch.batch()

    def test_new_batch_after_execute(self, api: GraphAPI, transport: Any) -> None:
        batch = api.batch()
        batch.get_object("me")
        transport.queue([fragment({"id": "1"})])
        batch.execute()

        assert isinstance(api.batch(), type(batch))

    def test_token_guard_applies(self, anonymous_api: GraphAPI, transport: Any) -> None:
        batch = anonymous_api.batch()

        with pytest.raises(MissingAccessTokenError):
            batch.put_object("me", "feed", {"message": "hi"})

        assert len(batch) == 0
        assert transport.requests == []

    def test_batch_size_limit(self, transport: Any) -> None:
        config = GraphConfig(access_token="token", max_batch_size=2, _env_file=None)
        batch = GraphAPI(config=config, transport=transport).batch()
        batch.get_object("1")
        batch.get_object("2")

        with pytest.raises(BatchScopeError, match="limited to 2"):
            batch.get_object("3")


class TestBatchExecution:
    """Tests for executing a batch."""

    def test_single_request_in_order(self, api: GraphAPI, transport: Any) -> None:
        """Test that N calls produce one request and N ordered results."""
        transport.queue(
            [
                fragment({"id": "1", "name": "Me"}),
                fragment({"data": [{"id": "2"}], "paging": {}}),
                fragment({"id": "3_4"}),
            ]
        )

        with api.batch() as batch:
            me = batch.get_object("me", {"fields": "id,name"})
            friends = batch.get_connections("me", "friends")
            post = batch.put_object("me", "feed", {"message": "Hello"})

        assert len(transport.requests) == 1
        verb, url, params, _ = transport.requests[0]
        assert verb == "POST"
        assert url == "https://graph.example.com"
        assert params["access_token"] == "test-token-12345678"

        sent = json.loads(params["batch"])
        assert [r["method"] for r in sent] == ["GET", "GET", "POST"]
        assert sent[0]["relative_url"] == "me?fields=id%2Cname"
        assert sent[1]["relative_url"] == "me/friends"
        assert sent[2]["relative_url"] == "me/feed"
        assert parse_qs(sent[2]["body"]) == {"message": ["Hello"]}

        assert me.result == {"id": "1", "name": "Me"}
        assert isinstance(friends.result, GraphCollection)
        assert list(friends.result) == [{"id": "2"}]
        assert post.result == {"id": "3_4"}
        assert batch.results == [me.result, friends.result, post.result]

    def test_execute_returns_results(self, api: GraphAPI, transport: Any) -> None:
        batch = api.batch()
        batch.get_object("1")
        batch.get_object("2")
        transport.queue([fragment({"id": "1"}), fragment({"id": "2"})])

        assert batch.execute() == [{"id": "1"}, {"id": "2"}]

    def test_failing_call_does_not_abort_siblings(self, api: GraphAPI, transport: Any) -> None:
        transport.queue(
            [
                fragment({"id": "1"}),
                fragment({"error": {"type": "GraphMethodException", "message": "Bad id"}}, 400),
                fragment({"id": "3"}),
            ]
        )

        batch = api.batch()
        first = batch.get_object("1")
        second = batch.get_object("bad")
        third = batch.get_object("3")
        results = batch.execute()

        assert results[0] == {"id": "1"}
        assert isinstance(results[1], GraphAPIError)
        assert results[1].raw_payload["message"] == "Bad id"
        assert results[2] == {"id": "3"}
        assert second.failed
        assert not first.failed and not third.failed
        with pytest.raises(GraphAPIError):
            second.value()
        assert third.value() == {"id": "3"}

    def test_null_fragment(self, api: GraphAPI, transport: Any) -> None:
        transport.queue([fragment({"id": "1"}), None])

        batch = api.batch()
        batch.get_object("1")
        timed_out = batch.get_object("2")
        batch.execute()

        assert isinstance(timed_out.result, TransportError)

    def test_malformed_fragment(self, api: GraphAPI, transport: Any) -> None:
        transport.queue([fragment({"id": "1"}), "garbage", fragment({"id": "3"})])

        batch = api.batch()
        first = batch.get_object("1")
        second = batch.get_object("2")
        third = batch.get_object("3")
        batch.execute()

        assert first.result == {"id": "1"}
        assert isinstance(second.result, TransportError)
        assert "Malformed" in str(second.result)
        assert third.result == {"id": "3"}

    def test_header_entries_without_value_skipped(self, api: GraphAPI, transport: Any) -> None:
        transport.queue(
            [
                {
                    "code": 302,
                    "headers": [
                        {"name": "ETag"},
                        "junk",
                        {"name": "Location", "value": "https://cdn.example.com/p.jpg"},
                    ],
                    "body": None,
                }
            ]
        )

        with api.batch() as batch:
            picture = batch.get_picture("me")

        assert picture.result == "https://cdn.example.com/p.jpg"

    def test_undecodable_fragment(self, api: GraphAPI, transport: Any) -> None:
        transport.queue([{"code": 500, "headers": [], "body": "<html>"}])

        batch = api.batch()
        operation = batch.get_object("1")
        batch.execute()

        assert isinstance(operation.result, TransportError)
        assert operation.result.status_code == 500

    def test_post_processing_per_call(self, api: GraphAPI, transport: Any) -> None:
        """Test that each call's post-processing runs on its own fragment."""
        transport.queue(
            [
                fragment(None, 302, {"Location": "https://cdn.example.com/p.jpg"}),
                fragment({"id": "page_1", "access_token": "page-token"}),
            ]
        )

        with api.batch() as batch:
            picture = batch.get_picture("me")
            token = batch.get_page_access_token("page_1")

        assert picture.result == "https://cdn.example.com/p.jpg"
        assert token.result == "page-token"

    def test_collection_pages_outside_batch(self, api: GraphAPI, transport: Any) -> None:
        transport.queue(
            [fragment({"data": [1], "paging": {"next": "https://graph.example.com/me/f?p=2"}})]
        )
        with api.batch() as batch:
            feed = batch.get_connections("me", "f")

        transport.queue({"data": [2]})
        next_page = feed.result.next_page()

        assert list(next_page) == [2]
        assert len(transport.requests) == 2
        assert transport.requests[1][0] == "GET"

    def test_transport_failure_fails_every_call(self, api: GraphAPI, transport: Any) -> None:
        failure = TransportError("network down")
        transport.fail(failure)

        batch = api.batch()
        operations = [batch.get_object("1"), batch.get_object("2")]

        with pytest.raises(TransportError):
            batch.execute()

        assert all(op.result is failure for op in operations)

    def test_unexpected_transport_exception_fails_every_call(
        self, api: GraphAPI, transport: Any
    ) -> None:
        transport.fail(OSError("socket reset"))

        batch = api.batch()
        operations = [batch.get_object("1"), batch.get_object("2")]

        with pytest.raises(TransportError, match="socket reset"):
            batch.execute()

        assert all(isinstance(op.result, TransportError) for op in operations)
        assert isinstance(operations[0].result.__cause__, OSError)

    def test_error_body_fails_every_call(self, api: GraphAPI, transport: Any) -> None:
        transport.queue({"error": {"type": "OAuthException", "message": "Expired"}})

        batch = api.batch()
        operations = [batch.get_object("1"), batch.get_object("2")]

        with pytest.raises(GraphAPIError):
            batch.execute()

        assert all(isinstance(op.result, GraphAPIError) for op in operations)

    def test_fragment_count_mismatch(self, api: GraphAPI, transport: Any) -> None:
        transport.queue([fragment({"id": "1"})])

        batch = api.batch()
        batch.get_object("1")
        batch.get_object("2")

        with pytest.raises(TransportError, match="does not match"):
            batch.execute()

    def test_execute_twice(self, api: GraphAPI, transport: Any) -> None:
        batch = api.batch()
        batch.get_object("1")
        transport.queue([fragment({"id": "1"})])
        batch.execute()

        with pytest.raises(BatchScopeError):
            batch.execute()
        with pytest.raises(BatchScopeError):
            batch.get_object("2")

    def test_empty_batch(self, api: GraphAPI, transport: Any) -> None:
        with api.batch() as batch:
            pass

        assert batch.results == []
        assert transport.requests == []

    def test_exception_in_block_discards(self, api: GraphAPI, transport: Any) -> None:
        with pytest.raises(RuntimeError):
            with api.batch() as batch:
                batch.get_object("1")
                raise RuntimeError("boom")

        assert transport.requests == []
        # The client can open a new batch afterwards
        api.batch()

    def test_http_options(self, api: GraphAPI, transport: Any) -> None:
        transport.queue([fragment({"id": "1"})])

        batch = api.batch({"timeout": 10})
        batch.get_object("1")
        batch.execute({"headers": {"X-Test": "1"}})

        assert transport.requests[0][3] == {"timeout": 10, "headers": {"X-Test": "1"}}

    def test_attached_files(self, api: GraphAPI, transport: Any) -> None:
        transport.queue([fragment({"id": "photo_1"}), fragment({"id": "photo_2"})])

        with api.batch() as batch:
            batch.put_picture(b"first", "image/png", {"message": "one"})
            batch.put_picture("http://x/y.jpg", {"message": "two"})

        params = transport.requests[0][2]
        sent = json.loads(params["batch"])
        assert sent[0]["attached_files"] == "op0_file0"
        assert sent[0]["relative_url"] == "me/photos"
        assert "op0_file0" in params
        assert "attached_files" not in sent[1]
        assert parse_qs(sent[1]["body"])["url"] == ["http://x/y.jpg"]

    def test_page_url_made_relative(self, api: GraphAPI, transport: Any) -> None:
        transport.queue([fragment({"data": []})])

        with api.batch() as batch:
            batch.get_page(("https://graph.example.com/v2.0/me/feed", {"after": "X"}))

        sent = json.loads(transport.requests[0][2]["batch"])
        assert sent[0]["relative_url"] == "v2.0/me/feed?after=X"
