"""
SQL to Go type mapping.

The mapping is a pure lookup keyed by ``(category, nullable, style)``. Every
combination is spelled out in ``GO_TYPE_TABLE`` so the table can be checked
by enumeration; source types outside the catalogue map to ``None``.
"""

from typing import Dict, Optional, Tuple

from ..constants import GoTypes, SqlTypeNames
from .models import GenerationOptions, NullWrapperStyle, SqlTypeCategory


SQL_TYPE_CATEGORIES: Dict[str, SqlTypeCategory] = {}
for _category, _names in (
    (SqlTypeCategory.INTEGER, SqlTypeNames.INTEGER),
    (SqlTypeCategory.BIG_INTEGER, SqlTypeNames.BIG_INTEGER),
    (SqlTypeCategory.TEXT, SqlTypeNames.TEXT),
    (SqlTypeCategory.TIME, SqlTypeNames.TIME),
    (SqlTypeCategory.DOUBLE, SqlTypeNames.DOUBLE),
    (SqlTypeCategory.FLOAT, SqlTypeNames.FLOAT),
    (SqlTypeCategory.BINARY, SqlTypeNames.BINARY),
):
    for _name in _names:
        SQL_TYPE_CATEGORIES[_name] = _category


# category -> (not null, nullable rich, nullable driver)
_GO_TYPES_BY_CATEGORY: Dict[SqlTypeCategory, Tuple[str, str, str]] = {
    SqlTypeCategory.INTEGER: (GoTypes.INT, GoTypes.GUREGU_NULL_INT, GoTypes.SQL_NULL_INT),
    SqlTypeCategory.BIG_INTEGER: (GoTypes.INT64, GoTypes.GUREGU_NULL_INT, GoTypes.SQL_NULL_INT),
    SqlTypeCategory.TEXT: (GoTypes.STRING, GoTypes.GUREGU_NULL_STRING, GoTypes.SQL_NULL_STRING),
    # database/sql has no time wrapper
    SqlTypeCategory.TIME: (GoTypes.TIME, GoTypes.GUREGU_NULL_TIME, GoTypes.TIME),
    SqlTypeCategory.DOUBLE: (GoTypes.FLOAT64, GoTypes.GUREGU_NULL_FLOAT, GoTypes.SQL_NULL_FLOAT),
    SqlTypeCategory.FLOAT: (GoTypes.FLOAT32, GoTypes.GUREGU_NULL_FLOAT, GoTypes.SQL_NULL_FLOAT),
    # nullability is ignored for byte slices
    SqlTypeCategory.BINARY: (GoTypes.BYTE_ARRAY, GoTypes.BYTE_ARRAY, GoTypes.BYTE_ARRAY),
}


def _build_go_type_table() -> Dict[Tuple[SqlTypeCategory, bool, NullWrapperStyle], str]:
    table = {}
    for category in SqlTypeCategory:
        not_null, rich, driver = _GO_TYPES_BY_CATEGORY[category]
        for style in NullWrapperStyle:
            table[(category, False, style)] = not_null
        table[(category, True, NullWrapperStyle.RICH)] = rich
        table[(category, True, NullWrapperStyle.DRIVER)] = driver
    return table


GO_TYPE_TABLE: Dict[Tuple[SqlTypeCategory, bool, NullWrapperStyle], str] = _build_go_type_table()


def categorize_sql_type(source_type: str) -> Optional[SqlTypeCategory]:
    """Return the category of a catalog type name, or None if it has no Go type."""
    return SQL_TYPE_CATEGORIES.get(source_type.strip().lower())


def map_sql_type(
    source_type: str, nullable: bool, options: GenerationOptions
) -> Optional[str]:
    """
    Map a catalog type name to a Go type name.

    Args:
        source_type: Lower-cased catalog type name (e.g. ``varchar``)
        nullable: Whether the column accepts NULL
        options: Generation options; only the null wrapper style is read

    Returns:
        The Go type name, or None when the type is unsupported.

    Example:
        >>> map_sql_type("bigint", False, GenerationOptions())
        'int64'
        >>> map_sql_type("json", False, GenerationOptions()) is None
        True
    """
    category = categorize_sql_type(source_type)
    if category is None:
        return None
    return GO_TYPE_TABLE[(category, bool(nullable), options.null_wrapper_style)]


class TypeMapper:
    """Type mapper bound to one set of generation options."""

    def __init__(self, options: GenerationOptions):
        self.options = options

    def map_type(self, source_type: str, nullable: bool) -> Optional[str]:
        return map_sql_type(source_type, nullable, self.options)
