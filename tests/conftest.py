from __future__ import annotations

from pathlib import Path
import sys

import pytest


# kvdb is importable without an install; tests/fakes.py is imported as a top-level module.
TESTS_DIR = Path(__file__).resolve().parent
for _path in (TESTS_DIR.parent, TESTS_DIR):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from fakes import FakeClient, FakeCollection  # noqa: E402


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Run from an empty directory with no KVDB_* variables so a developer's
    local.env or shell settings never leak into tests.
    """
    for name in (
        "KVDB_CONNECTION_STRING",
        "KVDB_DATABASE",
        "KVDB_COLLECTION",
        "KVDB_VALUE_LOGGING_MAX_JSON_LENGTH",
    ):
        # set-then-delete so teardown also removes values load_dotenv() put there
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def registry(monkeypatch: pytest.MonkeyPatch, clean_env: Path):
    """
    A fresh client registry that builds FakeClients instead of Motor clients.
    """
    import kvdb.connection as connection
    import kvdb.store as store

    fresh = connection.ClientRegistry(factory=FakeClient)
    monkeypatch.setattr(connection, "GLOBAL_CLIENTS", fresh)
    monkeypatch.setattr(store, "GLOBAL_CLIENTS", fresh)
    return fresh


@pytest.fixture
def fake_client(registry) -> FakeClient:
    return registry.connect("mongodb://fake/kvdb-tests")


@pytest.fixture
def fake_collection(fake_client: FakeClient) -> FakeCollection:
    return fake_client["kvdb-tests"]["db-collections"]
