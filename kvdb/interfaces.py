from __future__ import annotations

from typing import Any, Callable, Protocol

from .json_values import OMITTED


class KeyValueStore(Protocol):
    """
    What both store variants offer: one record per key, holding a nested value.

    Mutations always suspend on the database. Reads (get, reduce) are
    coroutines on the uncached store and plain calls on the cached one.
    """

    value_logging_max_json_length: int

    async def init(
        self,
        connection_string: str | None = None,
        collection: str | None = None,
        value_logging_max_json_length: int | bool | None = None,
        debug_logger: Callable[[str], Any] | None = None,
        *,
        client: Any | None = None,
        database: str | None = None,
    ) -> "KeyValueStore": ...

    def save_log(self, msg: str, value: Any = OMITTED) -> "KeyValueStore": ...

    def get(self, db_key: str | None = None, path: str | None = None) -> Any: ...
    def reduce(self) -> Any: ...

    async def set(self, db_key: str, value: Any, overwrite: bool = False) -> Any: ...
    async def update(self, db_key: str, path: str, value: Any) -> Any: ...
    async def push(self, db_key: str, path: str, *values: Any) -> Any: ...
    async def push_to_set(self, db_key: str, path: str, *values: Any) -> Any: ...
    async def delete(self, db_key: str | None = None, path: str | None = None) -> bool: ...
