import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import django
from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections

from gostruct_generator.constants import SupportedDatabases
from gostruct_generator.domain.field_composer import parse_declared_length
from gostruct_generator.domain.models import ColumnFact, TableSchema
from gostruct_generator.exceptions import (
    DatabaseConnectionError,
    SchemaIntrospectionError,
    raise_introspection_error,
)


logger = logging.getLogger(__name__)

# --- Catalog Queries (MySQL) ---
MYSQL_COLUMNS_QUERY = """
    select
        column_name,
        data_type,
        is_nullable,
        column_type
    from
        information_schema.columns
    where
        table_schema = database()
        and table_name = %s
    order by
        ordinal_position
"""

MYSQL_INDEXES_QUERY = """
    select
        index_name,
        column_name
    from
        information_schema.statistics
    where
        table_schema = database()
        and table_name = %s
"""

MYSQL_PRIMARY_INDEX = "PRIMARY"

# --- Django Setup Helper ---
_django_setup_done = False


def setup_django(db_settings: Dict[str, Any], secret_key: str):
    """Configures minimal Django settings and runs django.setup()."""
    global _django_setup_done
    if _django_setup_done:
        logger.debug("Django setup already performed.")
        return

    logger.info("Configuring Django settings for introspection...")
    plain_db_settings: Dict[str, Dict[str, Any]] = {}
    for alias, db_model in db_settings.items():
        if hasattr(db_model, 'model_dump') and callable(db_model.model_dump):
            # Drop None values so Django falls back to its own defaults
            plain_db_settings[alias] = db_model.model_dump(exclude_none=True)
        elif isinstance(db_model, dict):
            plain_db_settings[alias] = db_model
        else:
            logger.error(f"Unexpected type for database settings '{alias}': {type(db_model)}. Expected Pydantic model or dict.")
            raise TypeError(f"Invalid database settings type for alias '{alias}'.")
    logger.debug(f"Using DB aliases for Django: {', '.join(plain_db_settings)}")

    try:
        settings.configure(
            SECRET_KEY=secret_key,
            DATABASES=plain_db_settings,
            TIME_ZONE='UTC',
            USE_TZ=True,
        )
        django.setup()
    except Exception as e:
        logger.error(f"Failed to configure Django: {e}", exc_info=True)
        raise
    _django_setup_done = True
    logger.info("Django setup complete.")


def _get_connection(db_alias: str):
    if not _django_setup_done:
        raise RuntimeError("Django has not been set up. Call setup_django() first.")
    conn = connections[db_alias]
    try:
        conn.ensure_connection()
    except Exception as e:
        raise DatabaseConnectionError(
            f"Could not connect to database alias '{db_alias}': {e}",
            engine=conn.settings_dict.get('ENGINE'),
        ) from e
    if conn.vendor not in SupportedDatabases.VENDORS:
        raise_introspection_error(
            f"Database vendor '{conn.vendor}' is not supported for introspection.",
            vendor=conn.vendor,
        )
    return conn


# --- Row Parsing ---
def split_declared_type(declared_type: str) -> Tuple[str, Optional[int]]:
    """
    Split a declared column type into its lower-cased base name and length.

    Example:
        >>> split_declared_type("VARCHAR(100)")
        ('varchar', 100)
        >>> split_declared_type("datetime")
        ('datetime', None)
    """
    declared_type = (declared_type or "").strip()
    base = declared_type.split("(", 1)[0].strip().lower()
    return base, parse_declared_length(declared_type)


def parse_mysql_rows(
    table_name: str,
    column_rows: Sequence[Sequence[Any]],
    index_rows: Sequence[Sequence[Any]],
) -> TableSchema:
    """Builds a TableSchema from information_schema.columns/statistics rows."""
    columns: List[ColumnFact] = []
    column_lengths: Dict[str, int] = {}
    for column_name, data_type, is_nullable, column_type in column_rows:
        length = parse_declared_length(column_type)
        if length is not None:
            column_lengths[column_name.lower()] = length
        columns.append(
            ColumnFact(
                name=column_name,
                source_type=(data_type or "").lower(),
                nullable=str(is_nullable).upper() == "YES",
            )
        )

    primary_keys = [
        column_name for index_name, column_name in index_rows
        if index_name == MYSQL_PRIMARY_INDEX
    ]
    return TableSchema(
        name=table_name,
        columns=columns,
        primary_keys=primary_keys,
        column_lengths=column_lengths,
    )


def parse_sqlite_rows(table_name: str, pragma_rows: Sequence[Sequence[Any]]) -> TableSchema:
    """Builds a TableSchema from PRAGMA table_info rows (cid, name, type, notnull, dflt_value, pk)."""
    columns: List[ColumnFact] = []
    primary_keys: List[str] = []
    column_lengths: Dict[str, int] = {}
    for _cid, column_name, declared_type, notnull, _default, pk in pragma_rows:
        source_type, length = split_declared_type(declared_type)
        if length is not None:
            column_lengths[column_name.lower()] = length
        if pk:
            primary_keys.append(column_name)
        columns.append(
            ColumnFact(name=column_name, source_type=source_type, nullable=not notnull)
        )
    return TableSchema(
        name=table_name,
        columns=columns,
        primary_keys=primary_keys,
        column_lengths=column_lengths,
    )


# --- Main Introspection Functions ---
def list_tables(db_alias: str = DEFAULT_DB_ALIAS) -> List[str]:
    """Lists the base tables (no views) of the configured database."""
    conn = _get_connection(db_alias)
    with conn.cursor() as cursor:
        table_names = conn.introspection.table_names(cursor)
    logger.info(f"Found {len(table_names)} tables in database alias '{db_alias}'.")
    return table_names


def introspect_table(table_name: str, db_alias: str = DEFAULT_DB_ALIAS) -> TableSchema:
    """Introspects one table through the catalog of the configured database."""
    conn = _get_connection(db_alias)
    logger.info(f"Introspecting table: {table_name}")

    try:
        with conn.cursor() as cursor:
            if conn.vendor == "mysql":
                cursor.execute(MYSQL_COLUMNS_QUERY, [table_name])
                column_rows = cursor.fetchall()
                cursor.execute(MYSQL_INDEXES_QUERY, [table_name])
                index_rows = cursor.fetchall()
                table = parse_mysql_rows(table_name, column_rows, index_rows)
            else:
                cursor.execute(f"PRAGMA table_info({conn.ops.quote_name(table_name)})")
                table = parse_sqlite_rows(table_name, cursor.fetchall())
    except DatabaseError as e:
        raise SchemaIntrospectionError(
            f"Catalog query failed for table '{table_name}': {e}",
            table=table_name,
            vendor=conn.vendor,
        ) from e

    if not table.columns:
        raise_introspection_error(
            f"Table '{table_name}' has no columns or does not exist.",
            table=table_name,
            vendor=conn.vendor,
        )

    logger.debug(
        f"Table '{table_name}': {len(table.columns)} columns, primary key {table.primary_keys}"
    )
    return table
