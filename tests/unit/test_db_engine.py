"""Tests for engine construction."""
from sqlalchemy import inspect

import fittrack.config
import fittrack.db.engine
from fittrack.db.engine import get_engine


class TestGetEngine:
    def test_explicit_url_creates_tables(self, tmp_path):
        engine = get_engine(f"sqlite:///{tmp_path / 'a.db'}")
        tables = set(inspect(engine).get_table_names())
        assert {"activity", "activitypathpoint"} <= tables

    def test_explicit_url_is_not_cached(self, tmp_path, monkeypatch):
        monkeypatch.setattr(fittrack.db.engine, "_engine", None)
        get_engine(f"sqlite:///{tmp_path / 'a.db'}")
        assert fittrack.db.engine._engine is None

    def test_default_engine_follows_settings_and_is_cached(self, tmp_path, monkeypatch):
        url = f"sqlite:///{tmp_path / 'settings.db'}"
        monkeypatch.setenv("FITTRACK_DATABASE_URL", url)
        monkeypatch.setattr(fittrack.config, "_settings", None)
        monkeypatch.setattr(fittrack.db.engine, "_engine", None)

        engine = get_engine()
        assert str(engine.url) == url
        assert get_engine() is engine
