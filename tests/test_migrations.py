# /tests/test_migrations.py

import importlib.util
from pathlib import Path

import pytest
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import inspect

from app.db.database import build_engine

VERSIONS_DIR = Path(__file__).resolve().parent.parent / "alembic" / "versions"


def _load_revision(filename):
    location = importlib.util.spec_from_file_location(filename[:-3], VERSIONS_DIR / filename)
    module = importlib.util.module_from_spec(location)
    location.loader.exec_module(module)
    return module


def _schema(engine):
    inspector = inspect(engine)
    schema = {}
    for table in sorted(inspector.get_table_names()):
        columns = {
            c["name"]: (str(c["type"]), c["nullable"], c.get("default"))
            for c in inspector.get_columns(table)
        }
        indexes = sorted(index["name"] for index in inspector.get_indexes(table))
        foreign_keys = [(fk["referred_table"], fk["options"].get("ondelete")) for fk in inspector.get_foreign_keys(table)]
        schema[table] = {"columns": columns, "indexes": indexes, "foreign_keys": foreign_keys}
    return schema


@pytest.fixture
def migrated_engine():
    engine = build_engine("sqlite://")
    revision = _load_revision("0001_create_artwork_groups_and_artworks.py")
    with engine.begin() as connection:
        with Operations.context(MigrationContext.configure(connection)):
            revision.upgrade()
    yield engine
    engine.dispose()


def test_initial_revision_matches_the_orm_schema(engine, migrated_engine):
    assert _schema(migrated_engine) == _schema(engine)


def test_timestamps_default_to_now_in_both_tables(migrated_engine):
    inspector = inspect(migrated_engine)
    for table in ("artwork_groups", "artworks"):
        defaults = {c["name"]: c.get("default") for c in inspector.get_columns(table)}
        assert defaults["created_at"] == "CURRENT_TIMESTAMP"
        assert defaults["updated_at"] == "CURRENT_TIMESTAMP"


def test_downgrade_drops_both_tables(migrated_engine):
    revision = _load_revision("0001_create_artwork_groups_and_artworks.py")
    with migrated_engine.begin() as connection:
        with Operations.context(MigrationContext.configure(connection)):
            revision.downgrade()
    assert inspect(migrated_engine).get_table_names() == []
