"""Test fixtures - in-memory MongoDB collections + FastAPI test client.

- Every test gets a fresh FakeDatabase patched in as the global database,
  so the real stores, workflow and routes run without a MongoDB server
- FakeCollection implements only the Collection calls the stores make
- fail_on lets a test make a single collection method raise PyMongoError
"""

import copy
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

import app.db.mongodb as mongodb_module
from app.main import app
from app.services.mongo_service import ApplicationStore, StudentStore


class FakeCollection:
    def __init__(self, name):
        self.name = name
        self.docs = []
        self.indexes = []
        self.fail_on = {}

    def _check(self, method):
        error = self.fail_on.get(method)
        if error is not None:
            raise error

    def _match(self, query):
        for doc in self.docs:
            if all(doc.get(key) == value for key, value in (query or {}).items()):
                return doc
        return None

    @staticmethod
    def _apply(doc, update):
        for key, value in update.get("$set", {}).items():
            doc[key] = value
        for key, value in update.get("$inc", {}).items():
            doc[key] = doc.get(key, 0) + value
        for key, value in update.get("$addToSet", {}).items():
            values = doc.setdefault(key, [])
            if value not in values:
                values.append(value)

    def insert_one(self, doc):
        self._check("insert_one")
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    def find_one(self, query=None):
        self._check("find_one")
        doc = self._match(query)
        return copy.deepcopy(doc)

    def find(self, query=None):
        self._check("find")
        return [
            copy.deepcopy(doc) for doc in self.docs
            if all(doc.get(key) == value for key, value in (query or {}).items())
        ]

    def update_one(self, query, update):
        self._check("update_one")
        doc = self._match(query)
        if doc is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        self._apply(doc, update)
        return SimpleNamespace(matched_count=1, modified_count=1)

    def find_one_and_update(self, query, update, return_document=False):
        self._check("find_one_and_update")
        doc = self._match(query)
        if doc is None:
            return None
        before = copy.deepcopy(doc)
        self._apply(doc, update)
        # pymongo's ReturnDocument.AFTER is True
        return copy.deepcopy(doc) if return_document else before

    def find_one_and_delete(self, query):
        self._check("find_one_and_delete")
        doc = self._match(query)
        if doc is not None:
            self.docs.remove(doc)
        return doc

    def create_index(self, keys, **kwargs):
        self.indexes.append((keys, kwargs))
        return str(keys)


class FakeDatabase(dict):
    """Collections are created on first access, like pymongo."""

    def __init__(self):
        super().__init__()
        self.client = SimpleNamespace(
            admin=SimpleNamespace(command=lambda name: {"ok": 1.0})
        )

    def __missing__(self, name):
        collection = self[name] = FakeCollection(name)
        return collection


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeDatabase()
    monkeypatch.setattr(mongodb_module, "_db", db)
    return db


@pytest.fixture
def client(fake_db):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def students(fake_db):
    return StudentStore()


@pytest.fixture
def applications(fake_db):
    return ApplicationStore()


@pytest.fixture
def make_student(students):
    """Insert a student directly and return its id."""

    def _make(points=0, badges=None, name="Asha", email=None):
        doc = students.create({
            "name": name,
            "email": email or f"{ObjectId()}@example.com",
            "password": "not-a-hash",
            "points": points,
            "badges": list(badges or [])
        })
        return doc["_id"]

    return _make


@pytest.fixture
def store_failure():
    return PyMongoError("connection reset")


def _register(client, account_type="Company", name="Acme", email=None, password="secret123"):
    """Register through the API and return (user, auth headers)."""
    res = client.post("/auth/register", json={
        "name": name,
        "email": email or f"{ObjectId()}@example.com",
        "password": password,
        "type": account_type,
    })
    assert res.status_code == 201, res.text
    body = res.json()
    return body["user"], {"Authorization": f"Bearer {body['access_token']}"}


@pytest.fixture
def register_account(client):
    def _make(*args, **kwargs):
        return _register(client, *args, **kwargs)
    return _make


@pytest.fixture
def company(register_account):
    return register_account("Company", name="Acme")


@pytest.fixture
def other_company(register_account):
    return register_account("Company", name="Globex")
