"""
Service entry point

Run with:  python -m app.main
or:        uvicorn app.main:app --port 8080
"""
import os
import logging

import uvicorn

from apps.blog.main import DATA_FILE, create_app

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("blog-service")

app = create_app()


if __name__ == "__main__":
    logger.info(f"Blog API server running on http://localhost:{PORT} (data: {DATA_FILE})")
    uvicorn.run(app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())
