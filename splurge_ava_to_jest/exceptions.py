"""Custom exception classes for the AVA-to-Jest migration tool.

This module defines a small hierarchy of exceptions used by the
migration pipeline. Each exception carries an optional ``details``
mapping that contains structured context (for example source file and
location) to help callers diagnose failures programmatically.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from typing import Any


class MigrationError(Exception):
    """Base exception for migration-related errors.

    Args:
        message: Human-readable error message.
        details: Optional mapping with structured diagnostic data.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ParseError(MigrationError):
    """Raised when source text cannot be parsed into a syntax tree.

    Args:
        message: Error message describing the parse failure.
        source_file: Path to the file being parsed.
        line: Optional 1-based line number where the error occurred.
        column: Optional 1-based column where the error occurred.
    """

    def __init__(self, message: str, source_file: str, line: int | None = None, column: int | None = None):
        details: dict[str, Any] = {"source_file": source_file}
        if line is not None:
            details["line"] = line
        if column is not None:
            details["column"] = column
        super().__init__(message, details)
        self.source_file = source_file
        self.line = line
        self.column = column


class TransformationError(MigrationError):
    """Raised when a transformation pass cannot be applied.

    Args:
        message: Human-readable description of the failure.
        pass_name: Optional name of the pass that failed.
        node_type: Optional syntax node type that caused the error.
    """

    def __init__(self, message: str, pass_name: str | None = None, node_type: str | None = None):
        details: dict[str, Any] = {}
        if pass_name:
            details["pass_name"] = pass_name
        if node_type:
            details["node_type"] = node_type
        super().__init__(message, details)


class FormattingError(MigrationError):
    """Raised when the external code formatter fails.

    Args:
        message: Description of the formatter failure.
        command: The formatter command line that was run.
        stderr: Optional standard error captured from the formatter.
    """

    def __init__(self, message: str, command: list[str], stderr: str | None = None):
        details: dict[str, Any] = {"command": command}
        if stderr:
            details["stderr"] = stderr
        super().__init__(message, details)


class ValidationError(MigrationError):
    """Raised when input or configuration validation fails.

    Args:
        message: Description of the validation failure.
        validation_type: Identifier for the kind of validation performed.
        field: Optional field name that failed validation.
    """

    def __init__(self, message: str, validation_type: str, field: str | None = None):
        details: dict[str, Any] = {"validation_type": validation_type}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConfigurationError(MigrationError):
    """Raised when an application configuration is invalid.

    Args:
        message: Human readable description of the configuration problem.
        config_key: Optional configuration key that caused the error.
    """

    def __init__(self, message: str, config_key: str | None = None):
        details: dict[str, Any] = {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
