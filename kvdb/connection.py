from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Mongo's own default when the connection string names no database.
FALLBACK_DATABASE = "test"


class ClientRegistry:
    """
    Holds the one database client shared by every store in the process.

    The first successful connect() wins; later calls reuse the live client
    and ignore their connection string.
    """

    def __init__(self, factory: Callable[[str], Any] = AsyncIOMotorClient) -> None:
        self._guard = threading.Lock()
        self._factory = factory
        self._client: Any | None = None

    @property
    def active(self) -> Any | None:
        return self._client

    def connect(self, connection_string: str | None) -> Any:
        with self._guard:
            if self._client is not None:
                return self._client
            if not connection_string:
                raise ConfigurationError("A connection string is required!")
            self._client = self._factory(connection_string)
            logger.info("Connected database client (%s)", type(self._client).__name__)
            return self._client

    def install(self, client: Any) -> Any:
        """Adopt an already created client, replacing nothing if one is live."""
        with self._guard:
            if self._client is None:
                self._client = client
            return self._client

    def close(self) -> None:
        with self._guard:
            client, self._client = self._client, None
        if client is None:
            return
        client.close()
        logger.info("Closed database client")


GLOBAL_CLIENTS = ClientRegistry()


def database_for(client: Any, name: str | None = None) -> AsyncIOMotorDatabase:
    if name:
        return client[name]
    return client.get_default_database(FALLBACK_DATABASE)
