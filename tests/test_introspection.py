"""
Tests for catalog introspection through Django connections.

The MySQL path is exercised with mocked connections; the SQLite path runs
against a real temporary database (see the ``sqlite_db`` fixture).
"""

from unittest import TestCase
from unittest.mock import MagicMock, patch

import pytest
from django.db import DatabaseError

from gostruct_generator.domain.models import ColumnFact, GenerationOptions
from gostruct_generator.exceptions import DatabaseConnectionError, SchemaIntrospectionError
from gostruct_generator.introspection_django import (
    introspect_table,
    list_tables,
    parse_mysql_rows,
    parse_sqlite_rows,
    setup_django,
    split_declared_type,
)
from gostruct_generator.mapper import build_model_info


MODULE = "gostruct_generator.introspection_django"

MYSQL_COLUMN_ROWS = [
    ("id", "int", "NO", "int(11)"),
    ("Email", "varchar", "NO", "varchar(255)"),
    ("price", "decimal", "YES", "decimal(10,2)"),
    ("status", "enum", "NO", "enum('draft','live')"),
    ("updated_at", "timestamp", "NO", "timestamp"),
]

MYSQL_INDEX_ROWS = [
    ("PRIMARY", "id"),
    ("idx_email", "Email"),
]


def _mock_connection(vendor="mysql"):
    conn = MagicMock()
    conn.vendor = vendor
    conn.settings_dict = {"ENGINE": f"django.db.backends.{vendor}"}
    cursor = MagicMock()
    conn.cursor.return_value.__enter__.return_value = cursor
    return conn, cursor


class TestRowParsing(TestCase):
    """Test cases for the catalog row parsers"""

    def test_split_declared_type(self):
        """Test splitting a declared type into base name and length"""
        assert split_declared_type("VARCHAR(100)") == ("varchar", 100)
        assert split_declared_type("datetime") == ("datetime", None)
        assert split_declared_type("DECIMAL(10, 2)") == ("decimal", None)
        assert split_declared_type("") == ("", None)
        assert split_declared_type(None) == ("", None)

    def test_parse_mysql_rows(self):
        """Test MySQL catalog rows become a TableSchema"""
        table = parse_mysql_rows("products", MYSQL_COLUMN_ROWS, MYSQL_INDEX_ROWS)
        assert table.name == "products"
        assert [c.name for c in table.columns] == ["id", "Email", "price", "status", "updated_at"]
        assert table.columns[1] == ColumnFact("Email", "varchar", nullable=False)
        assert table.columns[2].nullable is True
        assert table.primary_keys == ["id"]
        # decimal(10,2) and the enum list are not lengths
        assert table.column_lengths == {"id": 11, "email": 255}

    def test_parse_sqlite_rows(self):
        """Test SQLite pragma rows become a TableSchema"""
        rows = [
            (0, "id", "INTEGER", 1, None, 1),
            (1, "title", "VARCHAR(80)", 0, None, 0),
            (2, "tenant", "TEXT", 1, None, 2),
        ]
        table = parse_sqlite_rows("posts", rows)
        assert [c.source_type for c in table.columns] == ["integer", "varchar", "text"]
        assert [c.nullable for c in table.columns] == [False, True, False]
        assert table.primary_keys == ["id", "tenant"]
        assert table.column_lengths == {"title": 80}


class TestIntrospectMysql(TestCase):
    """Test cases for introspect_table against a mocked MySQL connection"""

    def setUp(self):
        self.conn, self.cursor = _mock_connection("mysql")
        patchers = [
            patch(f"{MODULE}._django_setup_done", True),
            patch(f"{MODULE}.connections", {"default": self.conn}),
        ]
        for patcher in patchers:
            patcher.start()
            self.addCleanup(patcher.stop)

    def test_queries_columns_then_indexes(self):
        """Test MySQL columns are queried before indexes"""
        self.cursor.fetchall.side_effect = [MYSQL_COLUMN_ROWS, MYSQL_INDEX_ROWS]

        table = introspect_table("products")

        assert self.cursor.execute.call_count == 2
        first_sql, first_params = self.cursor.execute.call_args_list[0].args
        assert "information_schema.columns" in first_sql
        assert first_params == ["products"]
        second_sql, _ = self.cursor.execute.call_args_list[1].args
        assert "information_schema.statistics" in second_sql
        assert table.primary_keys == ["id"]

    def test_generated_fields(self):
        """Test MySQL introspection feeds field generation"""
        self.cursor.fetchall.side_effect = [MYSQL_COLUMN_ROWS, MYSQL_INDEX_ROWS]
        options = GenerationOptions(gorm_annotation=True, validate_annotation=True)

        model = build_model_info(introspect_table("products"), "model", options)

        assert model.rendered_fields == [
            'ID int `gorm:"column:id;primary_key" validate:"required" json:"id"`',
            'Email string `gorm:"column:Email" validate:"required,max=255" json:"Email"`',
            'Price sql.NullFloat64 `gorm:"column:price" validate:"" json:"price"`',
            'Status string `gorm:"column:status" validate:"required" json:"status"`',
            'UpdatedAt time.Time `gorm:"column:updated_at" validate:"" json:"updated_at"`',
        ]

    def test_missing_table(self):
        """Test a table without columns raises SchemaIntrospectionError"""
        self.cursor.fetchall.side_effect = [[], []]
        with self.assertRaises(SchemaIntrospectionError) as ctx:
            introspect_table("ghost")
        assert ctx.exception.context["table"] == "ghost"

    def test_database_error_is_wrapped(self):
        """Test database errors are wrapped in SchemaIntrospectionError"""
        self.cursor.execute.side_effect = DatabaseError("permission denied")
        with self.assertRaises(SchemaIntrospectionError) as ctx:
            introspect_table("products")
        assert "permission denied" in str(ctx.exception)
        assert ctx.exception.context["vendor"] == "mysql"

    def test_connection_failure(self):
        """Test connection failures raise DatabaseConnectionError"""
        self.conn.ensure_connection.side_effect = Exception("connection refused")
        with self.assertRaises(DatabaseConnectionError) as ctx:
            introspect_table("products")
        assert ctx.exception.context["engine"] == "django.db.backends.mysql"

    def test_unsupported_vendor(self):
        """Test vendors other than MySQL and SQLite are rejected"""
        self.conn.vendor = "postgresql"
        with self.assertRaises(SchemaIntrospectionError):
            introspect_table("products")


class TestDjangoSetup(TestCase):
    """Test cases for the Django setup guard"""

    def test_introspection_requires_setup(self):
        """Test introspection fails before Django is set up"""
        with patch(f"{MODULE}._django_setup_done", False):
            with self.assertRaises(RuntimeError):
                introspect_table("users")

    def test_invalid_settings_type(self):
        """Test settings that are neither models nor dicts are rejected"""
        with patch(f"{MODULE}._django_setup_done", False), \
                patch(f"{MODULE}.settings", new=MagicMock()) as mock_settings:
            with self.assertRaises(TypeError):
                setup_django({"default": 42}, "secret")
            mock_settings.configure.assert_not_called()


def test_sqlite_list_tables(sqlite_db):
    """Test listing tables of a SQLite database"""
    assert list_tables() == ["audit_log", "users"]


def test_sqlite_introspect_table(sqlite_db):
    """Test introspecting a SQLite table"""
    table = introspect_table("users")
    assert [c.name for c in table.columns] == [
        "id", "email", "nickname", "score", "created_at", "avatar", "settings",
    ]
    assert table.primary_keys == ["id"]
    assert table.column_lengths == {"email": 100, "nickname": 50}
    assert table.columns[0].nullable is False
    assert table.columns[2].nullable is True


def test_sqlite_end_to_end(sqlite_db):
    """Test a SQLite table renders to Go fields"""
    options = GenerationOptions(
        json_annotation=True,
        gorm_annotation=True,
        validate_annotation=True,
        use_alternate_null_wrappers=False,
    )
    model = build_model_info(introspect_table("users"), "model", options)
    assert model.struct_name == "Users"
    assert model.rendered_fields == [
        'ID int `gorm:"column:id;primary_key" validate:"required" json:"id"`',
        'Email string `gorm:"column:email" validate:"required,max=100" json:"email"`',
        'Nickname sql.NullString `gorm:"column:nickname" validate:"max=50" json:"nickname"`',
        'Score sql.NullFloat64 `gorm:"column:score" validate:"" json:"score"`',
        'CreatedAt time.Time `gorm:"column:created_at" validate:"" json:"created_at"`',
        'Avatar []byte `gorm:"column:avatar" validate:"" json:"avatar"`',
    ]


def test_sqlite_unknown_table(sqlite_db):
    """Test an unknown SQLite table raises SchemaIntrospectionError"""
    with pytest.raises(SchemaIntrospectionError):
        introspect_table("no_such_table")


def test_setup_is_performed_once(sqlite_db):
    """Test a second setup call is ignored"""
    # A second call must not try to reconfigure Django settings
    setup_django({"default": {"ENGINE": "django.db.backends.sqlite3", "NAME": ":memory:"}}, "x")
    assert list_tables() == ["audit_log", "users"]
