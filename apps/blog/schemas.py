"""
Pydantic schemas for the Blog API.

Request bodies are only presence-checked; any field may be missing here so the
handlers can answer with the route's own 400 message.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict

POST_FIELDS = ("title", "content", "author", "createdAt")


class PostPayload(BaseModel):
    """Body of POST /api/posts and PUT /api/posts/{id}. Unknown fields are dropped."""
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    createdAt: Optional[str] = None

    def is_complete(self) -> bool:
        """True when every field is present and non-empty."""
        return all(getattr(self, field) for field in POST_FIELDS)

    def to_post(self) -> dict:
        """Stored representation, always exactly the four post fields."""
        return {field: getattr(self, field) for field in POST_FIELDS}


class Post(BaseModel):
    """A stored blog post. Identity is its position in the collection."""
    title: str
    content: str
    author: str
    createdAt: str


class PostCreated(BaseModel):
    post: Post


class PostReplaced(BaseModel):
    success: str
    post: Post


class PostDeleted(BaseModel):
    # Removed entries come straight from the file and are returned as stored
    message: str
    postToDestroy: list


class HealthResponse(BaseModel):
    status: str
    message: str
