"""
MongoDB access for the hotel backend.

`Store` is the only place that talks to pymongo. It is built once at
application startup, handed to the handlers, and closed on shutdown. Every
driver failure is logged and re-raised as `StoreUnavailable` so callers never
see driver details.
"""

import logging
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bson import ObjectId
from pymongo import ASCENDING, MongoClient
from pymongo.errors import PyMongoError

from errors import InvalidIdentifier, StoreUnavailable

logger = logging.getLogger(__name__)

CONTACTS = "contacts"
BOOKINGS = "bookings"
USERS = "users"
SESSIONS = "sessions"


def now_utc():
    return datetime.now(timezone.utc)


def to_object_id(value: str) -> ObjectId:
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidIdentifier()
    return ObjectId(value)


def to_str_id(doc):
    if doc is None:
        return None
    d = dict(doc)
    if "_id" in d:
        d["id"] = str(d.pop("_id"))
    return d


def _guarded(method):
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except PyMongoError:
            target = f" on '{args[0]}'" if args else ""
            logger.exception(f"Store call {method.__name__}{target} failed")
            raise StoreUnavailable()
    return wrapper


class Store:
    """
    Narrow document store interface over one MongoDB database.
    """

    def __init__(self, client: MongoClient, database_name: str):
        self.client = client
        self.db = client[database_name]

    @classmethod
    def connect(cls, url: str, database_name: str, **client_kwargs) -> "Store":
        client_kwargs.setdefault("serverSelectionTimeoutMS", 5000)
        return cls(MongoClient(url, **client_kwargs), database_name)

    @property
    def name(self) -> str:
        return self.db.name

    def open(self, session_ttl_seconds: int = 24 * 60 * 60):
        """
        Create the indexes the application relies on.
        """
        try:
            self.db[USERS].create_index([("username", ASCENDING)], unique=True)
            self.db[SESSIONS].create_index([("token", ASCENDING)], unique=True)
            # expires_at already holds the deadline
            self.db[SESSIONS].create_index([("expires_at", ASCENDING)], expireAfterSeconds=0)
        except PyMongoError:
            # The API still serves requests; each store call reports its own failure.
            logger.exception("Could not create indexes")
        logger.info(f"Store opened on database '{self.name}' (session TTL {session_ttl_seconds}s)")

    def close(self):
        self.client.close()
        logger.info("Store closed")

    @_guarded
    def find(
        self,
        collection: str,
        filter: Optional[Dict[str, Any]] = None,
        sort: Optional[Sequence[Tuple[str, int]]] = None,
        projection: Optional[Sequence[str]] = None,
    ) -> List[Dict[str, Any]]:
        fields = {name: 1 for name in projection} if projection else None
        cursor = self.db[collection].find(filter or {}, fields)
        if sort:
            cursor = cursor.sort(list(sort))
        return list(cursor)

    @_guarded
    def find_by_id(self, collection: str, oid: ObjectId) -> Optional[Dict[str, Any]]:
        return self.db[collection].find_one({"_id": oid})

    @_guarded
    def find_one(self, collection: str, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self.db[collection].find_one(filter)

    @_guarded
    def insert(self, collection: str, document: Dict[str, Any]) -> str:
        result = self.db[collection].insert_one(dict(document))
        return str(result.inserted_id)

    @_guarded
    def update_by_id(self, collection: str, oid: ObjectId, fields: Dict[str, Any]) -> int:
        result = self.db[collection].update_one({"_id": oid}, {"$set": fields})
        return result.matched_count

    @_guarded
    def delete_by_id(self, collection: str, oid: ObjectId) -> int:
        result = self.db[collection].delete_one({"_id": oid})
        return result.deleted_count

    @_guarded
    def delete(self, collection: str, filter: Dict[str, Any]) -> int:
        result = self.db[collection].delete_many(filter)
        return result.deleted_count

    @_guarded
    def count(self, collection: str, filter: Optional[Dict[str, Any]] = None) -> int:
        return self.db[collection].count_documents(filter or {})

    @_guarded
    def collection_names(self) -> List[str]:
        return self.db.list_collection_names()
