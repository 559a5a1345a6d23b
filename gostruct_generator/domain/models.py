"""
Core domain models for the Go struct generator.

These models represent the essential concepts of the generation domain and
are independent of the database layer and of the template used to render
the final Go source file.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..constants import GoImports


class NullWrapperStyle(Enum):
    """Representation used for nullable columns."""

    RICH = "rich"      # gopkg.in/guregu/null.v3 wrappers
    DRIVER = "driver"  # database/sql wrappers


class SqlTypeCategory(Enum):
    """Categories of source SQL types that have a Go representation."""

    INTEGER = "integer"
    BIG_INTEGER = "big_integer"
    TEXT = "text"
    TIME = "time"
    DOUBLE = "double"
    FLOAT = "float"
    BINARY = "binary"


@dataclass(frozen=True)
class ColumnFact:
    """
    Introspected facts about a single table column.

    ``source_type`` is the catalog type name without its parenthesized
    suffix (``varchar``, not ``varchar(255)``); the declared length, if the
    catalog reported one, lives in ``declared_length``.
    """

    name: str
    source_type: str
    nullable: bool
    is_primary_key: bool = False
    declared_length: Optional[int] = None


@dataclass(frozen=True)
class GenerationOptions:
    """
    The four generation toggles, set once per run.

    ``use_alternate_null_wrappers`` selects the guregu ``null.*`` wrappers
    for nullable columns instead of the ``database/sql`` ones.
    """

    json_annotation: bool = True
    gorm_annotation: bool = False
    validate_annotation: bool = False
    use_alternate_null_wrappers: bool = False

    @property
    def null_wrapper_style(self) -> NullWrapperStyle:
        if self.use_alternate_null_wrappers:
            return NullWrapperStyle.RICH
        return NullWrapperStyle.DRIVER

    @property
    def any_annotation(self) -> bool:
        return self.json_annotation or self.gorm_annotation or self.validate_annotation


@dataclass(frozen=True)
class FieldDeclaration:
    """One generated struct field: exported name, Go type and struct tags."""

    name: str
    go_type: str
    annotations: Tuple[str, ...] = ()

    @property
    def tag(self) -> str:
        """Struct tag body, clauses separated by a single space."""
        return " ".join(self.annotations)

    def render(self) -> str:
        if self.annotations:
            return f"{self.name} {self.go_type} `{self.tag}`"
        return f"{self.name} {self.go_type}"

    def __str__(self) -> str:
        return self.render()


@dataclass
class TableSchema:
    """Everything introspection knows about one table."""

    name: str
    columns: List[ColumnFact] = field(default_factory=list)
    primary_keys: List[str] = field(default_factory=list)
    column_lengths: Dict[str, int] = field(default_factory=dict)


@dataclass
class ModelInfo:
    """
    A generated struct together with the naming metadata needed to render it.

    Package, struct and table names are supplied by the caller; only
    ``fields`` is produced by the field composer.
    """

    package_name: str
    struct_name: str
    table_name: str
    fields: List[FieldDeclaration] = field(default_factory=list)
    short_struct_name: str = ""

    def __post_init__(self):
        if not self.short_struct_name and self.struct_name:
            self.short_struct_name = self.struct_name[0].lower()

    @property
    def rendered_fields(self) -> List[str]:
        return [declaration.render() for declaration in self.fields]

    @property
    def imports(self) -> List[str]:
        """Sorted import paths needed by the field types."""
        paths = set()
        for declaration in self.fields:
            for qualifier, path in GoImports.BY_QUALIFIER.items():
                if declaration.go_type.startswith(qualifier):
                    paths.add(path)
        return sorted(paths)
