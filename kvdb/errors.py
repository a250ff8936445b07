from __future__ import annotations


class KvdbError(Exception):
    """Base class for errors raised by this package (not by the database driver)."""


class ConfigurationError(KvdbError):
    """No connection string was given and no client is connected yet."""


class StoreNotReadyError(KvdbError, RuntimeError):
    """A store operation was attempted before ``init()`` completed."""
