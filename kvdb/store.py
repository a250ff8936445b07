from __future__ import annotations

import logging
from typing import Any, Callable

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument

from .connection import GLOBAL_CLIENTS, database_for
from .errors import StoreNotReadyError
from .interfaces import KeyValueStore
from .json_values import OMITTED, dump_json
from .paths import value_field, walk_path
from .records import DbRecord
from .settings import DEFAULT_VALUE_LOGGING_MAX_JSON_LENGTH, get_settings

logger = logging.getLogger(__name__)

_RECORD_PROJECTION = {"_id": 0, "key": 1, "value": 1}


def _push_values(values: tuple[Any, ...]) -> list[Any]:
    # push("k", "p", [1, 2]) means push("k", "p", 1, 2)
    if len(values) == 1 and isinstance(values[0], list):
        return list(values[0])
    return list(values)


class NoCacheDB(KeyValueStore):
    """
    Key/value access to a collection of {key, value} records.

    Every call is a database round trip. Edge cases (no key, no path, nothing
    to push) return None/False instead of raising; driver errors propagate.
    """

    def __init__(self) -> None:
        self._collection: AsyncIOMotorCollection | None = None
        self.value_logging_max_json_length: int = DEFAULT_VALUE_LOGGING_MAX_JSON_LENGTH
        self._log_debug: Callable[[str], Any] = logger.debug

    async def init(
        self,
        connection_string: str | None = None,
        collection: str | None = None,
        value_logging_max_json_length: int | bool | None = None,
        debug_logger: Callable[[str], Any] | None = None,
        *,
        client: Any | None = None,
        database: str | None = None,
    ) -> "NoCacheDB":
        settings = get_settings()

        if client is None:
            client = GLOBAL_CLIENTS.connect(connection_string or settings.connection_string)

        self._collection = database_for(client, database or settings.database)[
            collection or settings.collection
        ]

        if debug_logger is not None:
            self._log_debug = debug_logger
        if value_logging_max_json_length is None:
            self.value_logging_max_json_length = settings.value_logging_max_json_length
        else:
            self.value_logging_max_json_length = int(value_logging_max_json_length or 0)

        logger.debug("Store bound to collection %s", self._collection.name)
        return self

    @property
    def ready(self) -> bool:
        return self._collection is not None

    @property
    def collection(self) -> AsyncIOMotorCollection:
        if self._collection is None:
            raise StoreNotReadyError(f"{type(self).__name__}.init() has not been awaited")
        return self._collection

    def save_log(self, msg: str, value: Any = OMITTED) -> "NoCacheDB":
        json_value = dump_json(value)
        if json_value is not None and self.value_logging_max_json_length >= len(json_value):
            msg = f"{msg}, value: {json_value}"
        self._log_debug(msg)
        return self

    async def reduce(self) -> list[DbRecord]:
        docs = await self.collection.find({}, _RECORD_PROJECTION).to_list(length=None)
        return [DbRecord.from_document(doc) for doc in docs]

    async def get(self, db_key: str | None = None, path: str | None = None) -> Any:
        if not db_key:
            return None

        doc = await self.collection.find_one({"key": db_key})
        if doc is None:
            return None
        return walk_path(doc.get("value"), path)

    async def _upsert(self, db_key: str, update: dict[str, Any]) -> Any:
        doc = await self.collection.find_one_and_update(
            {"key": db_key},
            update,
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return doc.get("value")

    async def set(self, db_key: str, value: Any, overwrite: bool = False) -> Any:
        if not db_key:
            return None

        self.save_log(
            f"setting collection {db_key}, {'overwriting existing data' if overwrite else ''}", value
        )

        update: dict[str, Any] = {"$set": {"value": value}}
        if not overwrite:
            update["$setOnInsert"] = {"key": db_key}
        return await self._upsert(db_key, update)

    async def update(self, db_key: str, path: str, value: Any) -> Any:
        if not path:
            return None

        self.save_log(f"updating {db_key}.{path}", value)
        return await self._upsert(db_key, {"$set": {value_field(path): value}})

    async def push(self, db_key: str, path: str, *values: Any) -> Any:
        return await self._push("$push", db_key, path, values)

    async def push_to_set(self, db_key: str, path: str, *values: Any) -> Any:
        return await self._push("$addToSet", db_key, path, values)

    async def _push(self, operator: str, db_key: str, path: str, values: tuple[Any, ...]) -> Any:
        items = _push_values(values)
        if not db_key or not items:
            return None

        self.save_log(f"pushing data to {db_key}.{path}", items)
        return await self._upsert(db_key, {operator: {value_field(path): {"$each": items}}})

    async def unset(self, db_key: str, path: str) -> Any:
        """Remove one nested field, creating the record if needed. Returns the new value."""
        self.save_log(f"deleting {db_key}.{path}")
        return await self._upsert(db_key, {"$unset": {value_field(path): ""}})

    async def delete(self, db_key: str | None = None, path: str | None = None) -> bool:
        if not db_key:
            return False

        if path:
            await self.unset(db_key, path)
            return True

        self.save_log(f"deleting {db_key}")
        result = await self.collection.delete_one({"key": db_key})
        return result.deleted_count > 0

    def __repr__(self) -> str:
        return f"<{type(self).__name__} ready={self.ready}>"
