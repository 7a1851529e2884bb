import pytest

from designflow.database import bootstrap


@pytest.fixture
def schema_db(recording_db, monkeypatch):
    monkeypatch.setattr(bootstrap, "ensure_database_exists", lambda db_config: None)
    monkeypatch.setattr(bootstrap, "_conn_factory", lambda db_config: recording_db)
    return recording_db


def _label_backfills(db):
    return [s for s in db.sql() if s.startswith("UPDATE art_types SET is_variation")]


def test_backfill_runs_when_variation_column_is_added(schema_db):
    schema_db.results = [None, None]

    bootstrap.apply_schema({})

    assert len(_label_backfills(schema_db)) == 1
    assert any(s.startswith("UPDATE demand_items") for s in schema_db.sql())
    assert schema_db.events == ["connect", "commit", "close"]


def test_restart_keeps_flags_set_by_admins(schema_db):
    # both columns already exist, e.g. an admin cleared is_variation on a "Variação" type
    schema_db.results = [{"?column?": 1}, {"?column?": 1}]

    bootstrap.apply_schema({})

    assert _label_backfills(schema_db) == []
    assert not any(s.startswith("UPDATE demand_items") for s in schema_db.sql())


def test_schema_ddl_is_applied_between_column_checks_and_backfill(schema_db):
    schema_db.results = [None, None]

    bootstrap.apply_schema({})

    statements = schema_db.sql()
    assert "information_schema.columns" in statements[0]
    assert "information_schema.columns" in statements[1]
    assert "CREATE TABLE IF NOT EXISTS users" in statements[2]
    assert statements[3].startswith("UPDATE art_types SET is_variation = true")
