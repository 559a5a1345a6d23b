"""
Domain module for the Go struct generator.

This module contains the pure core of the generator: column facts, name
normalization, SQL to Go type mapping and struct field composition. Nothing
here touches the database or the file system.
"""

from .models import (
    ColumnFact,
    FieldDeclaration,
    GenerationOptions,
    ModelInfo,
    NullWrapperStyle,
    SqlTypeCategory,
    TableSchema,
)

from .naming import (
    format_field_name,
    format_struct_name,
    is_exported_identifier,
    stringify_first_char,
    to_snake_case,
)

from .type_mapping import (
    GO_TYPE_TABLE,
    TypeMapper,
    categorize_sql_type,
    map_sql_type,
)

from .field_composer import (
    FieldComposer,
    compose_field,
    generate_fields,
    parse_declared_length,
    resolve_column_facts,
)

__all__ = [
    # Core models
    'ColumnFact',
    'FieldDeclaration',
    'GenerationOptions',
    'ModelInfo',
    'NullWrapperStyle',
    'SqlTypeCategory',
    'TableSchema',

    # Naming
    'format_field_name',
    'format_struct_name',
    'is_exported_identifier',
    'stringify_first_char',
    'to_snake_case',

    # Type mapping
    'GO_TYPE_TABLE',
    'TypeMapper',
    'categorize_sql_type',
    'map_sql_type',

    # Field composition
    'FieldComposer',
    'compose_field',
    'generate_fields',
    'parse_declared_length',
    'resolve_column_facts',
]
