"""
Post storage

The whole post collection lives in one JSON document: {"posts": [...]}.
Every request loads the full document and mutations write the full document
back. There is no locking, so concurrent writers race (last writer wins).

Usage:
    store = JsonFileStore("/srv/blog/data.json")
    doc = await store.load()
    doc["posts"].append(post)
    await store.save(doc)
"""
import copy
import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

import aiofiles
import aiofiles.os

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


class StoreError(Exception):
    """Collection could not be read or written."""


class CollectionNotFoundError(StoreError):
    """The collection document does not exist yet."""


class CorruptCollectionError(StoreError):
    """The collection document is not valid JSON or has no posts array."""


def empty_document() -> Document:
    return {"posts": []}


def check_document(doc: Any) -> Document:
    """Raise CorruptCollectionError unless doc looks like {"posts": [...]}."""
    if not isinstance(doc, dict) or not isinstance(doc.get("posts"), list):
        raise CorruptCollectionError("Collection document has no 'posts' array")
    return doc


class PostStore(Protocol):
    """Load/save capability for the post collection."""

    async def load(self) -> Document:
        ...

    async def save(self, doc: Document) -> None:
        ...


class JsonFileStore:
    """Collection document persisted as a UTF-8 JSON file."""

    def __init__(self, path):
        self.path = Path(path)

    async def load(self) -> Document:
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
        except FileNotFoundError as exc:
            raise CollectionNotFoundError(str(self.path)) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise StoreError(f"Could not read {self.path}: {exc}") from exc

        try:
            doc = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorruptCollectionError(f"Invalid JSON in {self.path}: {exc}") from exc

        return check_document(doc)

    async def save(self, doc: Document) -> None:
        # Write to a sibling temp file and rename over the target so a reader
        # never sees a half-written document.
        payload = json.dumps(doc, ensure_ascii=False, indent=2)
        tmp_path = None
        replaced = False
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=".tmp-", suffix=".json"
            )
            os.close(fd)
            # mkstemp creates 0600; keep the document's mode across writes
            os.chmod(tmp_path, self._file_mode())
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
            await aiofiles.os.replace(tmp_path, self.path)
            replaced = True
        except OSError as exc:
            raise StoreError(f"Could not write {self.path}: {exc}") from exc
        finally:
            if not replaced and tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        logger.debug("Saved %d posts to %s", len(doc.get("posts", [])), self.path)

    def _file_mode(self) -> int:
        """Mode of the existing document, or 0666 minus umask for a new one."""
        try:
            return stat.S_IMODE(os.stat(self.path).st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask


class InMemoryStore:
    """
    Store that keeps the document in memory.

    A document of None behaves like a missing file. load() and save() copy the
    document so callers never share state, same as re-reading a file.
    """

    def __init__(self, doc: Optional[Document] = None):
        self.doc = copy.deepcopy(doc)
        self.saves = 0

    async def load(self) -> Document:
        if self.doc is None:
            raise CollectionNotFoundError("in-memory collection")
        return check_document(copy.deepcopy(self.doc))

    async def save(self, doc: Document) -> None:
        self.doc = copy.deepcopy(doc)
        self.saves += 1
