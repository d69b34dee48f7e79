"""Shared fixtures: an in-memory stand-in for the motor client."""
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from backend.app.config import Settings
from backend.app.database import ConnectionManager
from backend.app.main import create_app


class FakeCursor:
    def __init__(self, documents):
        self._documents = list(documents)

    def sort(self, key, direction):
        # Missing values sort lowest, like MongoDB's null ordering.
        present = [d for d in self._documents if d.get(key) is not None]
        missing = [d for d in self._documents if d.get(key) is None]
        present.sort(key=lambda d: d[key], reverse=direction < 0)
        self._documents = present + missing if direction < 0 else missing + present
        return self

    async def to_list(self, length=None):
        return [dict(d) for d in self._documents]


class FakeCollection:
    def __init__(self):
        self.documents = {}

    def find(self, query=None):
        return FakeCursor(self.documents.values())

    async def insert_one(self, document):
        document = dict(document)
        document.setdefault("_id", ObjectId())
        self.documents[document["_id"]] = document
        return SimpleNamespace(inserted_id=document["_id"])

    async def find_one(self, query):
        document = self.documents.get(query["_id"])
        return dict(document) if document is not None else None

    async def delete_one(self, query):
        removed = self.documents.pop(query["_id"], None)
        return SimpleNamespace(deleted_count=1 if removed is not None else 0)


class FakeDatabase:
    def __init__(self, name):
        self.name = name
        self.collections = {}

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection())


class FakeAdmin:
    def __init__(self, error=None):
        self.commands = []
        self._error = error

    async def command(self, name):
        self.commands.append(name)
        if self._error is not None:
            raise self._error
        return {"ok": 1.0}


class FakeMongoClient:
    """Mimics the slice of AsyncIOMotorClient the service uses."""

    def __init__(self, uri, ping_error=None, **kwargs):
        self.uri = uri
        self.kwargs = kwargs
        self.admin = FakeAdmin(ping_error)
        self.closed = False
        self._databases = {}

    def __getitem__(self, name):
        return self._databases.setdefault(name, FakeDatabase(name))

    def get_default_database(self, default=None):
        return self[default]

    def close(self):
        self.closed = True


class FakeClientFactory:
    """Counts how many clients (connections) get created."""

    def __init__(self):
        self.clients = []
        self.ping_errors = []

    def fail_next_connect(self, error):
        """Make the next created client's ping raise `error`."""
        self.ping_errors.append(error)

    def __call__(self, uri, **kwargs):
        ping_error = self.ping_errors.pop(0) if self.ping_errors else None
        client = FakeMongoClient(uri, ping_error=ping_error, **kwargs)
        self.clients.append(client)
        return client

    def collection(self, name="answers"):
        """The collection behind the first connected client."""
        return self.clients[0].get_default_database(default="test")[name]


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway upload directory."""
    settings = Settings()
    # Environment values are loaded in __post_init__; pin the ones tests rely on.
    settings.mongo_uri = "mongodb://localhost:27017/answers-test"
    settings.mongo_db_name = ""
    settings.answers_collection = "answers"
    settings.upload_dir = str(tmp_path / "uploads")
    return settings


@pytest.fixture
def client_factory():
    return FakeClientFactory()


@pytest.fixture
def connection_manager(settings, client_factory):
    manager = ConnectionManager(settings, client_factory=client_factory)
    yield manager
    manager.reset()


@pytest.fixture
def app(settings, connection_manager):
    return create_app(settings=settings, connection_manager=connection_manager)


@pytest.fixture
def client(app):
    """Create a test client."""
    return TestClient(app)
