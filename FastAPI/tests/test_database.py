import pytest

import app.database as dbmod

ALL_TABLES = [
    "career_objectives",
    "career_recommendations",
    "job_interactions",
    "job_search_sessions",
    "resume_analyses",
    "user_profiles",
    "users",
]


class _Inspector:
    def __init__(self, names):
        self.names = names

    def get_table_names(self):
        return self.names


def test_get_db_closes_session_even_when_handler_fails(monkeypatch):
    class _DB:
        closed = False

        def close(self):
            self.closed = True

    inst = _DB()
    monkeypatch.setattr(dbmod, "SessionLocal", lambda: inst)
    gen = dbmod.get_db()
    assert next(gen) is inst
    with pytest.raises(ValueError):
        gen.throw(ValueError("handler blew up"))
    assert inst.closed is True


def test_register_models_lists_every_table():
    assert dbmod.register_models() == ALL_TABLES


def test_missing_tables(monkeypatch):
    monkeypatch.setattr(dbmod, "inspect", lambda _engine: _Inspector(["users", "user_profiles"]))
    assert dbmod.missing_tables() == [t for t in ALL_TABLES if t not in ("users", "user_profiles")]


def test_init_db_propagates_create_failure(monkeypatch):
    def _boom(bind):
        raise RuntimeError("db fail")

    monkeypatch.setattr(dbmod.Base.metadata, "create_all", _boom)
    with pytest.raises(RuntimeError):
        dbmod.init_db()


def test_ensure_tables_exist_creates_only_missing(monkeypatch):
    created = {}
    monkeypatch.setattr(dbmod, "inspect", lambda _engine: _Inspector([t for t in ALL_TABLES if t != "job_search_sessions"]))
    monkeypatch.setattr(
        dbmod.Base.metadata, "create_all", lambda bind, tables: created.update(names=[t.name for t in tables])
    )
    assert dbmod.ensure_tables_exist() == ["job_search_sessions"]
    assert created["names"] == ["job_search_sessions"]


def test_ensure_tables_exist_noop_when_complete(monkeypatch):
    monkeypatch.setattr(dbmod, "inspect", lambda _engine: _Inspector(list(ALL_TABLES)))
    monkeypatch.setattr(dbmod.Base.metadata, "create_all", lambda **kw: pytest.fail("should not create"))
    assert dbmod.ensure_tables_exist() == []


def test_ensure_tables_exist_failure(monkeypatch):
    def _boom(_engine):
        raise RuntimeError("inspect failed")

    monkeypatch.setattr(dbmod, "inspect", _boom)
    with pytest.raises(RuntimeError):
        dbmod.ensure_tables_exist()
