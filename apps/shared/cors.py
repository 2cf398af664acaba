"""Centralized CORS configuration for the API services."""

import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


# Local frontends (dev only when an allow-list is configured)
DEV_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://localhost:8080",
]


def get_allowed_origins() -> list[str]:
    """
    Allowed CORS origins for the current environment.

    CORS_ORIGINS is a comma separated allow-list. Without it every origin is
    allowed outside production, and none in production.
    """
    env = os.getenv("ENVIRONMENT", "development")
    configured = os.getenv("CORS_ORIGINS", "")
    origins = [o.strip().rstrip("/") for o in configured.split(",") if o.strip()]

    if not origins:
        return [] if env == "production" else ["*"]

    if env != "production":
        origins.extend(o for o in DEV_ORIGINS if o not in origins)

    return origins


def setup_cors(app: FastAPI) -> None:
    """Add CORS middleware to a FastAPI app."""
    origins = get_allowed_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentials with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
