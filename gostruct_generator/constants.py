"""
Centralized constants for the Go struct generator.

This module contains the initialism list, the SQL type name catalogue, the Go
type names emitted by the generator and the default configuration values, so
that contributors can adjust generated output from a single place.
"""

from typing import Dict, FrozenSet, Tuple


# =============================================================================
# CORE CONFIGURATION
# =============================================================================

class DefaultConfig:
    """Default configuration values."""

    OUTPUT_DIR = "./generated_models"
    PACKAGE_NAME = "model"
    DB_ALIAS = "default"

    # Generation toggles
    JSON_ANNOTATION = True
    GORM_ANNOTATION = False
    VALIDATE_ANNOTATION = False
    GUREGU_TYPES = False


class SupportedDatabases:
    """Supported database engines."""

    MYSQL = 'django.db.backends.mysql'
    SQLITE = 'django.db.backends.sqlite3'

    SUPPORTED = [MYSQL, SQLITE]

    # Django connection.vendor values handled by introspection
    VENDORS = ('mysql', 'sqlite')


# =============================================================================
# NAMING
# =============================================================================

# Only add entries that are highly unlikely to be non-initialisms.
# "ID" is fine, "AND" is not.
COMMON_INITIALISMS: FrozenSet[str] = frozenset({
    "API",
    "ASCII",
    "CPU",
    "CSS",
    "DNS",
    "EOF",
    "GUID",
    "HTML",
    "HTTP",
    "HTTPS",
    "ID",
    "IP",
    "JSON",
    "LHS",
    "QPS",
    "RAM",
    "RHS",
    "RPC",
    "SLA",
    "SMTP",
    "SSH",
    "TLS",
    "TTL",
    "UI",
    "UID",
    "UUID",
    "URI",
    "URL",
    "UTF8",
    "VM",
    "XML",
})

DIGIT_WORDS: Tuple[str, ...] = (
    "zero",
    "one",
    "two",
    "three",
    "four",
    "five",
    "six",
    "seven",
    "eight",
    "nine",
)

# Used when sanitization leaves nothing to build a name from
FALLBACK_FIELD_NAME = "Field"

# Prepended when a name starts with a letter that has no upper case (e.g. CJK)
EXPORTED_NAME_PREFIX = "X"


# =============================================================================
# GO TYPES
# =============================================================================

class GoTypes:
    """Go type names emitted in field declarations."""

    BYTE_ARRAY = "[]byte"
    INT = "int"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"
    TIME = "time.Time"

    # gopkg.in/guregu/null.v3 wrappers
    GUREGU_NULL_INT = "null.Int"
    GUREGU_NULL_FLOAT = "null.Float"
    GUREGU_NULL_STRING = "null.String"
    GUREGU_NULL_TIME = "null.Time"

    # database/sql wrappers
    SQL_NULL_INT = "sql.NullInt64"
    SQL_NULL_FLOAT = "sql.NullFloat64"
    SQL_NULL_STRING = "sql.NullString"


class GoImports:
    """Import paths required by the qualified Go types."""

    DATABASE_SQL = "database/sql"
    TIME = "time"
    GUREGU_NULL = "gopkg.in/guregu/null.v3"

    # Type qualifier prefix -> import path
    BY_QUALIFIER: Dict[str, str] = {
        "sql.": DATABASE_SQL,
        "time.": TIME,
        "null.": GUREGU_NULL,
    }


# =============================================================================
# SQL TYPES
# =============================================================================

class SqlTypeNames:
    """Lower-cased catalog type names grouped by how they map to Go."""

    INTEGER = ("tinyint", "smallint", "mediumint", "int", "integer")
    BIG_INTEGER = ("bigint",)
    TEXT = ("char", "enum", "varchar", "longtext", "mediumtext", "text", "tinytext")
    TIME = ("date", "datetime", "time", "timestamp")
    DOUBLE = ("decimal", "double")
    FLOAT = ("float",)
    BINARY = ("binary", "blob", "longblob", "mediumblob", "varbinary")

    # Only this type gets a max=N validation rule
    VARIABLE_LENGTH_TEXT = "varchar"


# =============================================================================
# TAGS
# =============================================================================

class TagNames:
    """Struct tag keys and the policies attached to them."""

    GORM = "gorm"
    VALIDATE = "validate"
    JSON = "json"

    RULE_REQUIRED = "required"
    RULE_MAX = "max"

    # Timestamps managed by the database are never marked required
    REQUIRED_EXEMPT_COLUMNS: FrozenSet[str] = frozenset({"created_at", "updated_at"})


# =============================================================================
# FILES
# =============================================================================

class FileExtensions:
    """File extensions used by the generator."""

    GO = ".go"
    TEMPLATE = ".j2"


MODEL_TEMPLATE_NAME = "model.go.j2"
