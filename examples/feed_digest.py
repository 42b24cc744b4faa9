#!/usr/bin/env python3
"""Feed Digest Example

Prints the current user's profile, the first pages of their feed, and a
few objects fetched together in one batch request.

Usage:
    1. Set GRAPH_ACCESS_TOKEN (or put it in a .env file)
    2. Run: python feed_digest.py

Environment Variables:
    GRAPH_ACCESS_TOKEN: OAuth access token
    GRAPH_API_VERSION: Optional version prefix, e.g. v2.0
"""

from graph_kit import GraphAPI, GraphError, load_config, stream_collection

# ============================================================================
# CONFIGURATION
# ============================================================================

MAX_FEED_PAGES = 3
BATCH_IDS = ["me", "4", "5"]

# ============================================================================


def main() -> None:
    """Print a short digest of the authenticated user's graph."""
    config = load_config()
    if not config.get_access_token():
        raise ValueError("GRAPH_ACCESS_TOKEN not configured.")

    with GraphAPI(config=config) as api:
        profile = api.get_object("me", {"fields": "id,name"})
        print(f"Logged in as {profile['name']} ({profile['id']})")
        print(f"Picture: {api.get_picture('me')}")

        print("\nRecent posts:")
        feed = api.get_connections("me", "feed", {"limit": 10})
        for post in stream_collection(feed, max_pages=MAX_FEED_PAGES):
            print(f"  - {post.get('message', '(no message)')[:60]}")

        print("\nBatch lookup:")
        with api.batch() as batch:
            operations = [batch.get_object(object_id) for object_id in BATCH_IDS]

        for object_id, operation in zip(BATCH_IDS, operations):
            if operation.failed:
                print(f"  {object_id}: failed ({operation.result})")
            else:
                print(f"  {object_id}: {operation.result.get('name', '?')}")


if __name__ == "__main__":
    try:
        main()
    except GraphError as e:
        print(f"Graph API error: {e}")
        raise SystemExit(1) from e
