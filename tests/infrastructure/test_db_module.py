"""Tests for the ledger database engine helpers."""

import pytest
from sqlalchemy import text

from bookkeeping.infrastructure import db as db_module


@pytest.fixture()
def fresh_engine(monkeypatch):
    monkeypatch.setattr(db_module, "_ledger_engine", None)
    monkeypatch.delenv(db_module.LEDGER_DB_URL_ENV, raising=False)


def test_ledger_engine_url_comes_from_dotenv(fresh_engine, monkeypatch) -> None:
    """The URL should be read after .env is loaded, and the engine reused."""
    urls = []

    def fake_load_dotenv():
        monkeypatch.setenv(db_module.LEDGER_DB_URL_ENV, "sqlite:///ledger.db")

    def fake_create_engine(url):
        urls.append(url)
        return object()

    monkeypatch.setattr(db_module.dotenv, "load_dotenv", fake_load_dotenv)
    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)

    engine = db_module.get_ledger_engine()

    assert db_module.get_ledger_engine() is engine
    assert urls == ["sqlite:///ledger.db"]


def test_ledger_engine_requires_url(fresh_engine, monkeypatch) -> None:
    """A missing LEDGER_DB_URL should name the variable in the error."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)

    with pytest.raises(RuntimeError, match="LEDGER_DB_URL"):
        db_module.get_ledger_engine()


def test_created_engine_is_pooled_and_usable(tmp_path) -> None:
    """Engines should use a five-connection queue pool."""
    engine = db_module._create_engine(f"sqlite:///{tmp_path / 'ledger.db'}")

    with engine.connect() as conn:
        assert conn.execute(text("SELECT 1")).scalar() == 1
    assert isinstance(engine.pool, db_module.QueuePool)
    assert engine.pool.size() == 5
    engine.dispose()


def test_adapters_share_the_ledger_engine(monkeypatch) -> None:
    """Every adapter should hand out the same module-level engine."""
    shared = object()
    monkeypatch.setattr(db_module, "_ledger_engine", shared)

    first = db_module.SqlAlchemyDatabaseEngineAdapter()
    second = db_module.SqlAlchemyDatabaseEngineAdapter()

    assert first.get_ledger_engine() is shared
    assert second.get_ledger_engine() is shared
