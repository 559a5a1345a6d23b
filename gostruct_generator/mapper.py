"""
Model assembly for the Go struct generator.

This module glues introspection output to the domain layer: it resolves
primary keys and declared lengths onto the column facts, composes the field
declarations and wraps them in a ``ModelInfo`` ready for rendering.

Example:
    >>> from gostruct_generator.mapper import build_model_info
    >>> model = build_model_info(table_schema, package_name="model", options=options)
    >>> model.rendered_fields
"""

import logging
from typing import Optional

from gostruct_generator.domain.field_composer import FieldComposer, resolve_column_facts
from gostruct_generator.domain.models import GenerationOptions, ModelInfo, TableSchema
from gostruct_generator.domain.naming import format_struct_name


logger = logging.getLogger(__name__)


def build_model_info(
    table: TableSchema,
    package_name: str,
    options: GenerationOptions,
    struct_name: Optional[str] = None,
) -> ModelInfo:
    """
    Build the struct model for one introspected table.

    Args:
        table: Introspected table schema
        package_name: Go package clause of the generated file
        options: Generation toggles
        struct_name: Struct name; defaults to the formatted table name

    Returns:
        ModelInfo with one field per supported column, in column order
    """
    struct_name = struct_name or format_struct_name(table.name)
    columns = resolve_column_facts(table.columns, table.primary_keys, table.column_lengths)

    fields = FieldComposer(options).compose_all(columns)
    skipped = len(columns) - len(fields)
    if skipped:
        logger.debug(f"{skipped} column(s) of '{table.name}' have no Go type and were left out.")

    logger.debug(f"Mapped table '{table.name}' to struct '{struct_name}' with {len(fields)} fields.")
    return ModelInfo(
        package_name=package_name,
        struct_name=struct_name,
        table_name=table.name,
        fields=fields,
    )
