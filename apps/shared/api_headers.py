"""Baseline response headers for JSON API routes."""

from fastapi import FastAPI, Request
from fastapi.responses import Response


def setup_api_headers(app: FastAPI, prefix: str = "/api") -> None:
    """Add nosniff to every response and disable caching under prefix."""

    @app.middleware("http")
    async def add_api_headers(request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        if request.url.path.startswith(prefix):
            response.headers.setdefault("Cache-Control", "no-store")
        return response
