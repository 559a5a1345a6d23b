"""Generate Go struct definitions from relational table metadata."""

__version__ = "0.1.0"
