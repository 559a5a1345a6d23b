"""
Field composition domain logic for the Go struct generator.

This module turns introspected column facts into struct field declarations:
it normalizes the field name, maps the SQL type and assembles the struct tag
clauses in a fixed order (gorm, validate, json).
"""

import logging
import re
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from ..constants import SqlTypeNames, TagNames
from .models import ColumnFact, FieldDeclaration, GenerationOptions
from .naming import format_field_name
from .type_mapping import TypeMapper


logger = logging.getLogger(__name__)

_DECLARED_LENGTH_RE = re.compile(r"[+-]?[0-9]+")


def parse_declared_length(column_type: str) -> Optional[int]:
    """
    Parse the length out of a catalog type string such as ``varchar(255)``.

    The text between the first ``(`` and the last ``)`` must be an optionally
    signed run of ASCII digits; anything else (no parentheses, whitespace,
    ``decimal(10,2)``, ``enum('a','b')``) means no length is known.
    """
    if not column_type:
        return None
    start = column_type.find("(")
    end = column_type.rfind(")")
    if start < 0 or end <= start:
        return None
    text = column_type[start + 1:end]
    if not _DECLARED_LENGTH_RE.fullmatch(text):
        return None
    return int(text, 10)


def resolve_column_facts(
    columns: Iterable[ColumnFact],
    primary_keys: Iterable[str],
    column_lengths: Dict[str, int],
) -> List[ColumnFact]:
    """
    Attach primary-key membership and declared lengths to columns.

    Both lookups match column names case-insensitively. Columns already
    flagged as primary keys stay flagged, and a length already present on a
    column is kept when the lengths mapping has none for it.
    """
    pk_names = {name.lower() for name in primary_keys}
    lengths = {name.lower(): length for name, length in column_lengths.items()}

    resolved = []
    for column in columns:
        key = column.name.lower()
        resolved.append(
            replace(
                column,
                is_primary_key=column.is_primary_key or key in pk_names,
                declared_length=lengths.get(key, column.declared_length),
            )
        )
    return resolved


def gorm_clause(column: ColumnFact) -> str:
    if column.is_primary_key:
        return f'{TagNames.GORM}:"column:{column.name};primary_key"'
    return f'{TagNames.GORM}:"column:{column.name}"'


def validation_rules(column: ColumnFact) -> List[str]:
    """Validation rules derived from nullability and declared length."""
    rules = []
    if not column.nullable and column.name.lower() not in TagNames.REQUIRED_EXEMPT_COLUMNS:
        rules.append(TagNames.RULE_REQUIRED)
    if (
        column.source_type.lower() == SqlTypeNames.VARIABLE_LENGTH_TEXT
        and column.declared_length is not None
    ):
        rules.append(f"{TagNames.RULE_MAX}={column.declared_length}")
    return rules


def validate_clause(column: ColumnFact) -> str:
    return f'{TagNames.VALIDATE}:"{",".join(validation_rules(column))}"'


def json_clause(column: ColumnFact) -> str:
    return f'{TagNames.JSON}:"{column.name}"'


class FieldComposer:
    """
    Builds field declarations for the columns of one table.

    Example:
        >>> composer = FieldComposer(GenerationOptions(json_annotation=True))
        >>> composer.compose(ColumnFact("user_id", "bigint", False)).render()
        'UserID int64 `json:"user_id"`'
    """

    def __init__(self, options: GenerationOptions):
        self.options = options
        self.type_mapper = TypeMapper(options)

    def compose(self, column: ColumnFact) -> Optional[FieldDeclaration]:
        """Compose one declaration, or return None for an unsupported type."""
        go_type = self.type_mapper.map_type(column.source_type.lower(), column.nullable)
        if go_type is None:
            logger.debug(
                f"Skipping column '{column.name}': no Go type for '{column.source_type}'."
            )
            return None

        annotations = []
        if self.options.gorm_annotation:
            annotations.append(gorm_clause(column))
        if self.options.validate_annotation:
            annotations.append(validate_clause(column))
        if self.options.json_annotation:
            annotations.append(json_clause(column))

        return FieldDeclaration(
            name=format_field_name(column.name),
            go_type=go_type,
            annotations=tuple(annotations),
        )

    def compose_all(self, columns: Iterable[ColumnFact]) -> List[FieldDeclaration]:
        """Compose declarations in column order, dropping unsupported columns."""
        fields = []
        for column in columns:
            declaration = self.compose(column)
            if declaration is not None:
                fields.append(declaration)
        return fields


def compose_field(column: ColumnFact, options: GenerationOptions) -> Optional[FieldDeclaration]:
    return FieldComposer(options).compose(column)


def generate_fields(
    columns: Iterable[ColumnFact], options: GenerationOptions
) -> List[FieldDeclaration]:
    return FieldComposer(options).compose_all(columns)
