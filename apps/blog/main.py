"""
Blog API

CRUD endpoints for blog posts stored in a single JSON file.
GET /api/posts/{id} is 1-indexed; PUT and DELETE are 0-indexed.
"""
import os
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, APIRouter, Depends, Request
from fastapi.staticfiles import StaticFiles

from apps.blog import service
from apps.blog.schemas import (
    HealthResponse,
    PostCreated,
    PostDeleted,
    PostPayload,
    PostReplaced,
)
from apps.blog.storage import JsonFileStore, PostStore
from apps.shared.api_headers import setup_api_headers
from apps.shared.cors import setup_cors
from apps.shared.errors import setup_error_handlers

logger = logging.getLogger(__name__)

ROOT_DIR = Path(__file__).resolve().parents[2]
DATA_FILE = os.getenv("BLOG_DATA_FILE", str(ROOT_DIR / "data.json"))
PUBLIC_DIR = os.getenv("BLOG_PUBLIC_DIR", str(ROOT_DIR / "public"))


def get_store(request: Request) -> PostStore:
    """Store bound to the app; swapped for an in-memory store in tests."""
    return request.app.state.store


router = APIRouter(prefix="/api")


@router.get("/health", response_model=HealthResponse)
def health():
    """Health check endpoint - no I/O"""
    return {"status": "OK", "message": "Blog API is running"}


@router.get("/posts")
async def list_posts(store: PostStore = Depends(get_store)):
    """All posts in stored order."""
    return await service.list_posts(store)


# Registered before /posts/{post_id} so "search" is not read as an id
@router.get("/posts/search")
async def search_posts(q: Optional[str] = None, store: PostStore = Depends(get_store)):
    """Posts whose title contains q (case-insensitive)."""
    return await service.search_posts(store, q)


@router.get("/posts/{post_id}")
async def get_post(post_id: int, store: PostStore = Depends(get_store)):
    """Single post by 1-indexed position. May be null for id 0."""
    return await service.get_post(store, post_id)


@router.post("/posts", response_model=PostCreated)
async def create_post(
    payload: Optional[PostPayload] = None,
    store: PostStore = Depends(get_store),
):
    post = await service.create_post(store, payload)
    return {"post": post}


@router.put("/posts/{post_id}", response_model=PostReplaced)
async def update_post(
    post_id: int,
    payload: Optional[PostPayload] = None,
    store: PostStore = Depends(get_store),
):
    """Replace the post at 0-indexed post_id entirely."""
    post = await service.update_post(store, post_id, payload)
    return {"success": "post replaced.", "post": post}


@router.delete("/posts/{post_id}", response_model=PostDeleted)
async def delete_post(post_id: int, store: PostStore = Depends(get_store)):
    """Remove the post at 0-indexed post_id."""
    removed = await service.delete_post(store, post_id)
    return {"message": "eradicated", "postToDestroy": removed}


def create_app(store: Optional[PostStore] = None, public_dir: Optional[str] = None) -> FastAPI:
    """
    Build the Blog API app.

    Args:
        store: Post store; defaults to the JSON file at BLOG_DATA_FILE
        public_dir: Static directory served at /; defaults to BLOG_PUBLIC_DIR
    """
    app = FastAPI(
        title="Blog API",
        version="1.0.0",
        description="Blog posts persisted as one JSON document",
    )
    app.state.store = store if store is not None else JsonFileStore(DATA_FILE)

    setup_cors(app)
    setup_api_headers(app)
    setup_error_handlers(app, not_found_message=service.POST_NOT_FOUND)

    app.include_router(router)

    # Mounted last so API routes win
    public_dir = public_dir or PUBLIC_DIR
    if os.path.isdir(public_dir):
        app.mount("/", StaticFiles(directory=public_dir, html=True), name="public")
    else:
        logger.debug("No public directory at %s, static files disabled", public_dir)

    return app
