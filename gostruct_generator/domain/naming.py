"""
Naming convention utilities for the Go struct generator.

This module turns raw database column and table names into exported Go
identifiers. Go style requires initialisms to keep a consistent case, so
``user_id`` becomes ``UserID`` rather than ``UserId`` and ``http_url``
becomes ``HTTPURL``.
"""

import re
from typing import List

from ..constants import (
    COMMON_INITIALISMS,
    DIGIT_WORDS,
    EXPORTED_NAME_PREFIX,
    FALLBACK_FIELD_NAME,
)


# Underscores and anything that is not a Unicode letter or digit split tokens
_SEPARATOR_RE = re.compile(r"[\W_]+")


def stringify_first_char(name: str) -> str:
    """
    Replace a leading digit with its English word.

    Example:
        >>> stringify_first_char("2fa_code")
        'two_fa_code'
        >>> stringify_first_char("user")
        'user'
    """
    if not name:
        return name
    first = name[0]
    if first in "0123456789":
        return f"{DIGIT_WORDS[int(first)]}_{name[1:]}"
    return name


def _split_tokens(name: str) -> List[str]:
    return [token for token in _SEPARATOR_RE.split(name) if token]


def _format_token(token: str) -> str:
    upper = token.upper()
    if upper in COMMON_INITIALISMS:
        return upper
    return token[0].upper() + token[1:]


def format_field_name(name: str) -> str:
    """
    Convert a raw column name into an exported Go field name.

    Args:
        name: The column name as reported by the database catalog

    Returns:
        A PascalCase identifier with common initialisms upper-cased. Empty
        input is returned unchanged.

    Example:
        >>> format_field_name("user_id")
        'UserID'
        >>> format_field_name("2fa_code")
        'TwoFaCode'
        >>> format_field_name("_id")
        'ID'
        >>> format_field_name("café_name")
        'CaféName'
    """
    if not name:
        return name

    tokens = _split_tokens(stringify_first_char(name))
    if not tokens:
        return FALLBACK_FIELD_NAME

    # Leading separators can hide a digit from stringify_first_char ("_2fa")
    if tokens[0][0] in "0123456789":
        tokens = _split_tokens(stringify_first_char(tokens[0])) + tokens[1:]

    result = "".join(_format_token(token) for token in tokens)
    if not result[0].isupper():
        result = EXPORTED_NAME_PREFIX + result
    return result


def format_struct_name(table_name: str) -> str:
    """Default struct name for a table: the table name formatted like a field."""
    return format_field_name(table_name)


def to_snake_case(name: str) -> str:
    """
    Convert CamelCase or PascalCase to snake_case.

    Example:
        >>> to_snake_case("UserAccount")
        'user_account'
        >>> to_snake_case("XMLHttpRequest")
        'xml_http_request'
    """
    if not isinstance(name, str):
        raise TypeError(f"Expected string, got {type(name).__name__}")

    name = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    name = re.sub("__([A-Z])", r"_\1", name)
    name = re.sub("([a-z0-9])([A-Z])", r"\1_\2", name)
    return name.lower()


def is_exported_identifier(name: str) -> bool:
    """Check that a name can be used as an exported Go identifier."""
    if not name or not name.isidentifier():
        return False
    return name[0].isupper()
