# File: tests/conftest.py
# Shared fixtures: sample column facts, generation options and a real
# SQLite database reached through Django for the introspection tests.

import pytest
from pathlib import Path
from typing import Any, Generator, List

from django.db import connections

from gostruct_generator.domain.models import ColumnFact, GenerationOptions, TableSchema
from gostruct_generator.introspection_django import setup_django


USERS_TABLE_DDL = """
    CREATE TABLE users (
        id INTEGER NOT NULL PRIMARY KEY,
        email VARCHAR(100) NOT NULL,
        nickname VARCHAR(50),
        score DOUBLE,
        created_at DATETIME NOT NULL,
        avatar BLOB,
        settings JSON
    )
"""

AUDIT_TABLE_DDL = """
    CREATE TABLE audit_log (
        event_id BIGINT NOT NULL PRIMARY KEY,
        http_url TEXT
    )
"""


@pytest.fixture
def all_tags_options() -> GenerationOptions:
    """All four toggles on, rich (guregu) null wrappers."""
    return GenerationOptions(
        json_annotation=True,
        gorm_annotation=True,
        validate_annotation=True,
        use_alternate_null_wrappers=True,
    )


@pytest.fixture
def users_columns() -> List[ColumnFact]:
    return [
        ColumnFact(name="id", source_type="int", nullable=False),
        ColumnFact(name="email", source_type="varchar", nullable=False),
        ColumnFact(name="created_at", source_type="datetime", nullable=False),
    ]


@pytest.fixture
def users_table(users_columns) -> TableSchema:
    return TableSchema(
        name="users",
        columns=users_columns,
        primary_keys=["id"],
        column_lengths={"email": 100},
    )


@pytest.fixture(scope="session")
def sqlite_db(tmp_path_factory) -> Generator[Path, Any, None]:
    """
    Configures Django against a temporary SQLite file holding two tables.
    Django settings can only be configured once per process, so this is
    session scoped and is the only place that calls setup_django().
    """
    db_path = tmp_path_factory.mktemp("sqlite") / "catalog.sqlite3"
    setup_django(
        {"default": {"ENGINE": "django.db.backends.sqlite3", "NAME": str(db_path)}},
        "test-secret-key",
    )
    with connections["default"].cursor() as cursor:
        cursor.execute(USERS_TABLE_DDL)
        cursor.execute(AUDIT_TABLE_DDL)
    yield db_path
    connections["default"].close()
