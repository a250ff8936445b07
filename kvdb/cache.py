from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping

from .interfaces import KeyValueStore
from .json_values import OMITTED
from .paths import walk_path
from .records import DbRecord
from .store import NoCacheDB

logger = logging.getLogger(__name__)


class DB(KeyValueStore):
    """
    NoCacheDB plus an in-memory mirror of the whole collection.

    - init() loads every record into the mirror (the only bulk load).
    - get()/reduce() answer from the mirror without touching the database.
    - Writes go to the database first; the value it returns is then written
      to the mirror. The two steps are not atomic: if the second one fails
      the mirror stays stale until fetch()/fetch_all().
    """

    def __init__(self, store: NoCacheDB | None = None) -> None:
        self._store = store if store is not None else NoCacheDB()
        self._cache: dict[str, Any] = {}

    async def init(
        self,
        connection_string: str | None = None,
        collection: str | None = None,
        value_logging_max_json_length: int | bool | None = None,
        debug_logger: Callable[[str], Any] | None = None,
        *,
        client: Any | None = None,
        database: str | None = None,
    ) -> "DB":
        await self._store.init(
            connection_string,
            collection,
            value_logging_max_json_length,
            debug_logger,
            client=client,
            database=database,
        )
        return await self.fetch_all()

    @property
    def store(self) -> NoCacheDB:
        return self._store

    @property
    def ready(self) -> bool:
        return self._store.ready

    @property
    def cache(self) -> Mapping[str, Any]:
        return MappingProxyType(self._cache)

    @property
    def value_logging_max_json_length(self) -> int:
        return self._store.value_logging_max_json_length

    @value_logging_max_json_length.setter
    def value_logging_max_json_length(self, length: int) -> None:
        self._store.value_logging_max_json_length = length

    def save_log(self, msg: str, value: Any = OMITTED) -> "DB":
        self._store.save_log(msg, value)
        return self

    async def fetch_all(self) -> "DB":
        records = await self._store.reduce()
        # rebuilt, not merged: keys the store no longer has are dropped
        self._cache = {record.key: record.value for record in records}
        logger.debug("Mirrored %d records", len(records))
        return self

    async def fetch(self, db_key: str) -> Any:
        """Reload one record from the database into the mirror."""
        value = await self._store.get(db_key)
        self._remember(db_key, value)
        return value

    def reduce(self) -> list[DbRecord]:
        return [DbRecord(key=key, value=value) for key, value in self._cache.items()]

    def get(self, db_key: str | None = None, path: str | None = None) -> Any:
        if not db_key:
            return None
        return walk_path(self._cache.get(db_key), path)

    def _remember(self, db_key: str, value: Any) -> None:
        self._cache[db_key] = value

    async def _write_through(self, db_key: str, write: Awaitable[Any]) -> Any:
        value = await write
        self._remember(db_key, value)
        return value

    async def set(self, db_key: str, value: Any, overwrite: bool = False) -> Any:
        return await self._write_through(db_key, self._store.set(db_key, value, overwrite))

    async def update(self, db_key: str, path: str, value: Any) -> Any:
        return await self._write_through(db_key, self._store.update(db_key, path, value))

    async def push(self, db_key: str, path: str, *values: Any) -> Any:
        return await self._write_through(db_key, self._store.push(db_key, path, *values))

    async def push_to_set(self, db_key: str, path: str, *values: Any) -> Any:
        return await self._write_through(db_key, self._store.push_to_set(db_key, path, *values))

    async def delete(self, db_key: str | None = None, path: str | None = None) -> bool:
        if not db_key:
            return False

        if path:
            await self._write_through(db_key, self._store.unset(db_key, path))
            return True

        deleted_from_db = await self._store.delete(db_key)
        deleted_from_cache = self._cache.pop(db_key, OMITTED) is not OMITTED

        # Either side counts: a stale mirror entry alone still reports True.
        return deleted_from_db or deleted_from_cache

    def __repr__(self) -> str:
        return f"<{type(self).__name__} ready={self.ready} keys={len(self._cache)}>"
