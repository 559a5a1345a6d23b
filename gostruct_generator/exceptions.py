"""
Custom exception hierarchy for the Go struct generator.

The pure domain layer never raises for well-formed input; these exceptions
belong to the edges of the tool (configuration, database access, file
output) and carry context plus recovery suggestions for the user.
"""

from typing import Any, Dict, List, Optional


class GoStructGeneratorError(Exception):
    """
    Base exception for all Go struct generator errors.

    Provides rich context and error recovery guidance.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [self.message]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class ConfigurationError(GoStructGeneratorError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if config_file:
            context['config_file'] = config_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the configuration file syntax",
                "Verify the 'databases' section has a 'default' entry",
                "Pass --struct only together with a single --table",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CONFIG_ERROR"
        )


class SchemaIntrospectionError(GoStructGeneratorError):
    """Raised when database schema introspection fails."""

    def __init__(self, message: str, table: str = None, vendor: str = None, **kwargs):
        context = kwargs.get('context', {})
        if table:
            context['table'] = table
        if vendor:
            context['vendor'] = vendor

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Verify the table exists in the configured database",
                "Check database user permissions on the catalog",
                "Use a supported engine (MySQL or SQLite)",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="INTROSPECTION_ERROR"
        )


class DatabaseConnectionError(GoStructGeneratorError):
    """Raised when database connection fails."""

    def __init__(self, message: str, engine: str = None, **kwargs):
        context = kwargs.get('context', {})
        if engine:
            context['engine'] = engine

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check database server is running",
                "Verify connection credentials",
                "Ensure the database driver (mysqlclient) is installed",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="DATABASE_CONNECTION_ERROR"
        )


class CodeGenerationError(GoStructGeneratorError):
    """Raised when rendering or writing a Go source file fails."""

    def __init__(self, message: str, table: str = None, output_path: str = None, **kwargs):
        context = kwargs.get('context', {})
        if table:
            context['table'] = table
        if output_path:
            context['output_path'] = output_path

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the output directory is writable",
                "Check the template directory is installed with the package",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CODE_GENERATION_ERROR"
        )


# Convenience functions for common error patterns
def raise_configuration_error(message: str, config_file: str = None, **kwargs):
    """Convenience function to raise configuration errors."""
    raise ConfigurationError(message, config_file=config_file, **kwargs)


def raise_introspection_error(message: str, table: str = None, vendor: str = None, **kwargs):
    """Convenience function to raise introspection errors."""
    raise SchemaIntrospectionError(message, table=table, vendor=vendor, **kwargs)

