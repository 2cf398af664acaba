"""
Blog post handlers

Each operation is an independent load -> validate -> mutate -> save sequence
against the store. Nothing is cached between calls.

Index conventions differ per operation and are part of the public API:
- get_post takes a 1-indexed id
- update_post and delete_post take a 0-indexed id
"""
import logging
from typing import Optional

from apps.blog.schemas import PostPayload
from apps.blog.storage import (
    CollectionNotFoundError,
    Document,
    PostStore,
    StoreError,
    empty_document,
)
from apps.shared.errors import NotFoundError, ValidationError, server_error

logger = logging.getLogger(__name__)

POST_NOT_FOUND = "Post not found"


async def _load(store: PostStore, failure: str, missing_ok: bool) -> Document:
    """
    Load the collection, mapping storage errors to API errors.

    Args:
        store: Collection store
        failure: Message for the 500 response if reading fails
        missing_ok: Treat a missing file as an empty collection instead of 404
    """
    try:
        return await store.load()
    except CollectionNotFoundError:
        if missing_ok:
            return empty_document()
        raise NotFoundError(POST_NOT_FOUND)
    except StoreError as exc:
        raise server_error(exc, failure)


async def _save(store: PostStore, doc: Document, failure: str) -> None:
    try:
        await store.save(doc)
    except StoreError as exc:
        raise server_error(exc, failure)


async def list_posts(store: PostStore) -> list:
    """All posts in stored order. A missing file is an empty list."""
    doc = await _load(store, "Failed to read posts", missing_ok=True)
    return doc["posts"]


async def get_post(store: PostStore, post_id: int) -> Optional[dict]:
    """
    Post at 1-indexed position post_id.

    The bound check accepts 0 <= post_id <= len(posts). Ids that pass it but
    point at nothing (post_id == 0) return None rather than 404.
    """
    doc = await _load(store, "Failed to read post", missing_ok=False)
    posts = doc["posts"]

    if post_id < 0 or post_id >= len(posts) + 1:
        logger.warning("Invalid post request: id=%s (have %d posts)", post_id, len(posts))
        raise NotFoundError(POST_NOT_FOUND)

    index = post_id - 1
    # posts[-1] would wrap around to the last post
    if index < 0:
        return None
    return posts[index]


async def create_post(store: PostStore, payload: Optional[PostPayload]) -> dict:
    """Append a post and return it. A missing file starts a new collection."""
    if payload is None or not payload.is_complete():
        raise ValidationError("You gotta fill in everything man")

    doc = await _load(store, "Failed to create post", missing_ok=True)
    post = payload.to_post()
    doc["posts"].append(post)
    await _save(store, doc, "Failed to create post")

    logger.info("Created post %d: %r", len(doc["posts"]), post["title"])
    return post


async def update_post(store: PostStore, post_id: int, payload: Optional[PostPayload]) -> dict:
    """Replace the post at 0-indexed post_id with payload. No field merging."""
    doc = await _load(store, "Failed to update post", missing_ok=False)
    posts = doc["posts"]

    if post_id < 0 or post_id >= len(posts):
        logger.warning("Invalid post update: id=%s (have %d posts)", post_id, len(posts))
        raise NotFoundError(POST_NOT_FOUND)

    if payload is None or not payload.is_complete():
        raise ValidationError("All fields are required")

    posts[post_id] = payload.to_post()
    await _save(store, doc, "Failed to update post")

    logger.info("Replaced post at index %d", post_id)
    return posts[post_id]


async def delete_post(store: PostStore, post_id: int) -> list:
    """Remove the post at 0-indexed post_id. Returns the removed posts as a list."""
    doc = await _load(store, "Failed to delete post", missing_ok=False)
    posts = doc["posts"]

    if post_id < 0 or post_id >= len(posts):
        logger.warning("Invalid post delete: id=%s (have %d posts)", post_id, len(posts))
        raise NotFoundError(POST_NOT_FOUND)

    removed = posts[post_id:post_id + 1]
    del posts[post_id]
    await _save(store, doc, "Failed to delete post")

    logger.info("Deleted post at index %d", post_id)
    return removed


async def search_posts(store: PostStore, query: Optional[str]) -> list:
    """Posts whose title contains query, case-insensitive. No query returns all posts."""
    doc = await _load(store, "Failed to search posts", missing_ok=True)
    posts = doc["posts"]
    if not query:
        return posts

    needle = query.casefold()
    return [
        post for post in posts
        if isinstance(post, dict) and needle in str(post.get("title", "")).casefold()
    ]
