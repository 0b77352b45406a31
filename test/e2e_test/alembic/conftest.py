"""Fixtures for Alembic migration tests."""

from pathlib import Path

import pytest
from alembic.config import Config

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'migration.db'}"


@pytest.fixture
def alembic_config(database_url: str) -> Config:
    """Alembic config pointing at the project scripts and a throwaway SQLite file.

    The config is built without ``alembic.ini`` so the migration run leaves the
    logging configuration of the test session untouched.
    """
    config = Config()
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", database_url)
    return config
