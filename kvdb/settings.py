from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_COLLECTION = "db-collections"
DEFAULT_VALUE_LOGGING_MAX_JSON_LENGTH = 20


def _env_max_length(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    raw = raw.strip().lower()
    if raw in ("0", "false", "no", "off"):
        return 0
    return int(raw)


@dataclass(frozen=True)
class Settings:
    # Connection
    connection_string: str
    database: str | None

    # Collection holding the {key, value} records
    collection: str

    # Debug logging; 0 never embeds values in log lines
    value_logging_max_json_length: int


def get_settings(env_file: str | None = "local.env") -> Settings:
    if env_file:
        # Existing environment variables win over the file.
        load_dotenv(env_file, override=False)

    connection_string = os.getenv("KVDB_CONNECTION_STRING", "").strip()
    database = os.getenv("KVDB_DATABASE", "").strip() or None
    collection = os.getenv("KVDB_COLLECTION", "").strip() or DEFAULT_COLLECTION

    value_logging_max_json_length = _env_max_length(
        "KVDB_VALUE_LOGGING_MAX_JSON_LENGTH", DEFAULT_VALUE_LOGGING_MAX_JSON_LENGTH
    )

    return Settings(
        connection_string=connection_string,
        database=database,
        collection=collection,
        value_logging_max_json_length=value_logging_max_json_length,
    )
