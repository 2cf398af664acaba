import copy

import pytest
from fastapi.testclient import TestClient

from apps.blog.main import create_app
from apps.blog.storage import InMemoryStore, JsonFileStore

SAMPLE_POSTS = [
    {
        "title": "First post",
        "content": "Hello world",
        "author": "ada",
        "createdAt": "2024-01-01T10:00:00Z",
    },
    {
        "title": "Second Post about Python",
        "content": "Snakes all the way down",
        "author": "grace",
        "createdAt": "2024-01-02T10:00:00Z",
    },
    {
        "title": "third",
        "content": "lowercase title",
        "author": "linus",
        "createdAt": "2024-01-03T10:00:00Z",
    },
]


@pytest.fixture()
def empty_store():
    """Store with no document, like a data file that was never written."""
    return InMemoryStore()


@pytest.fixture()
def store():
    return InMemoryStore({"posts": SAMPLE_POSTS})


def make_client(store, tmp_path) -> TestClient:
    app = create_app(store=store, public_dir=str(tmp_path / "no-public"))
    return TestClient(app)


@pytest.fixture()
def client(store, tmp_path):
    return make_client(store, tmp_path)


@pytest.fixture()
def empty_client(empty_store, tmp_path):
    return make_client(empty_store, tmp_path)


@pytest.fixture()
def data_file(tmp_path):
    return tmp_path / "data" / "data.json"


@pytest.fixture()
def file_client(data_file, tmp_path):
    return make_client(JsonFileStore(data_file), tmp_path)


@pytest.fixture()
def sample_posts():
    return copy.deepcopy(SAMPLE_POSTS)
