"""
Document store access for the couplet corpus.

CoupletStore wraps a single MongoDB collection. It is constructed once at
startup (``CoupletStore.connect``) and handed to the request handlers; the
handlers only ever read from it. ``close`` releases the client.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from config import Settings
from errors import StoreError

logger = logging.getLogger(__name__)

# Stored documents are returned without Mongo's internal id
_PROJECTION = {"_id": 0}


class CoupletStore:
    def __init__(self, collection: Collection, client: Optional[MongoClient] = None):
        self.collection = collection
        self._client = client

    @classmethod
    def connect(cls, settings: Settings, client: Optional[MongoClient] = None) -> "CoupletStore":
        """Open the configured collection. A ready-made client may be passed in."""
        if client is None:
            client = MongoClient(settings.database_url)
        collection = client[settings.database_name][settings.collection]
        logger.info(
            "Opened couplet store %s.%s", settings.database_name, settings.collection
        )
        return cls(collection, client=client)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("Closed couplet store")

    def ensure_indexes(self) -> None:
        try:
            self.collection.create_index([("number", ASCENDING)], unique=True)
            for field in ("division.number", "section.number", "chapter.number"):
                self.collection.create_index([(field, ASCENDING)])
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    def find(self, query: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """All documents matching ``query``, ordered by couplet number."""
        try:
            cursor = self.collection.find(query or {}, _PROJECTION).sort("number", ASCENDING)
            return list(cursor)
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    def count(self, query: Optional[Dict[str, Any]] = None) -> int:
        try:
            return self.collection.count_documents(query or {})
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    def find_one(self, number: int) -> Optional[Dict[str, Any]]:
        try:
            return self.collection.find_one({"number": number}, _PROJECTION)
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    def replace_all(self, documents: Iterable[Dict[str, Any]]) -> int:
        """Drop every stored couplet and insert ``documents``. Used by the corpus build."""
        docs = [dict(d) for d in documents]
        try:
            self.collection.delete_many({})
            if docs:
                self.collection.insert_many(docs)
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return len(docs)

    def ping(self) -> bool:
        try:
            self.collection.database.command("ping")
            return True
        except PyMongoError as e:
            logger.warning("Store ping failed: %s", e)
            return False
