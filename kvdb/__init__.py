from __future__ import annotations

from .cache import DB
from .connection import GLOBAL_CLIENTS, ClientRegistry
from .errors import ConfigurationError, KvdbError, StoreNotReadyError
from .interfaces import KeyValueStore
from .records import DbRecord
from .settings import Settings, get_settings
from .store import NoCacheDB

__all__ = [
    "DB",
    "NoCacheDB",
    "KeyValueStore",
    "DbRecord",
    "ClientRegistry",
    "GLOBAL_CLIENTS",
    "Settings",
    "get_settings",
    "KvdbError",
    "ConfigurationError",
    "StoreNotReadyError",
]
