import os
import sys
import tempfile
from unittest.mock import MagicMock

import pytest

# Keep the test run's log file out of the working tree
os.environ.setdefault("LOG_FILE", os.path.join(tempfile.gettempdir(), "reindexer-tests.log"))

# Add the parent directory to sys.path to allow importing reindexer
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from reindexer.logger import logger


def _matches(document, query):
    for field, condition in query.items():
        value = document.get(field)
        if isinstance(condition, dict):
            if "$in" in condition and value not in condition["$in"]:
                return False
            if "$gt" in condition and not value > condition["$gt"]:
                return False
        elif value != condition:
            return False
    return True


class FakeCursor:
    """In-memory stand-in for a motor cursor"""

    def __init__(self, collection, documents, fail_after=None):
        self.collection = collection
        self.documents = list(documents)
        self.fail_after = fail_after
        self.closed = False

    def sort(self, key, direction=1):
        self.documents.sort(key=lambda doc: doc[key], reverse=direction < 0)
        return self

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for position, document in enumerate(self.documents):
            if self.fail_after is not None and position == self.fail_after:
                raise ConnectionError("cursor lost")
            self.collection.fetched.append(document["_id"])
            yield dict(document)

    async def close(self):
        self.closed = True


class FakeCollection:
    """In-memory stand-in for a motor collection"""

    def __init__(self, name, documents=(), fail_after=None):
        self.name = name
        self.fail_after = fail_after
        self.documents = [dict(doc) for doc in documents]
        self.queries = []
        self.fetched = []
        self.saved = []
        self.cursors = []

    async def count_documents(self, query):
        self.queries.append(("count", query))
        return len([doc for doc in self.documents if _matches(doc, query)])

    def find(self, query):
        self.queries.append(("find", query))
        cursor = FakeCursor(
            self, [doc for doc in self.documents if _matches(doc, query)], self.fail_after
        )
        self.cursors.append(cursor)
        return cursor

    async def find_one(self, query, projection=None):
        self.queries.append(("find_one", query))
        for document in self.documents:
            if _matches(document, query):
                if projection:
                    return {key: document[key] for key in projection if key in document}
                return dict(document)
        return None

    async def find_one_and_update(self, query, update, return_document=None):
        for document in self.documents:
            if _matches(document, query):
                self.saved.append(document["_id"])
                document.update(update.get("$set", {}))
                return dict(document)
        return None


class FakeDatabase:
    def __init__(self, *collections):
        self.collections = {collection.name: collection for collection in collections}

    async def list_collection_names(self):
        return list(self.collections)

    def get_collection(self, name):
        return self.collections[name]


class RecordingHook:
    """Search hook recording the documents it was fired for"""

    def __init__(self, fail_on=None):
        self.calls = []
        self.fail_on = fail_on

    async def __call__(self, document):
        self.calls.append(document.id)
        if self.fail_on is not None and document.id == self.fail_on:
            raise RuntimeError(f"Indexing failed for {document.id}")


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test"""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def algolia():
    """Configured Algolia stand-in mapping widgets and users to indexes"""
    config = MagicMock()
    config.is_configured.return_value = True
    config.indexes = {"widgets": "test_widgets", "users": "test_users"}
    config.index_name_for.side_effect = config.indexes.get
    return config
