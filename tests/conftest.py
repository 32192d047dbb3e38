"""
Shared fixtures: every test that touches the database gets its own SQLite file.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the shopapi package importable when running from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from shopapi.core import config as core_config  # noqa: E402
from shopapi.db import create_tables  # noqa: E402
from shopapi.db import session as db_session  # noqa: E402


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Point DATABASE_URL at a temporary SQLite file and build the schema."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    # settings and engine are cached; drop them so the new URL is read
    core_config.get_settings.cache_clear()
    db_session.reset_caches()

    create_tables.drop_all()
    create_tables.create_all()

    yield db_file

    create_tables.drop_all()
    db_session.get_engine().dispose()
    db_session.reset_caches()
    core_config.get_settings.cache_clear()
