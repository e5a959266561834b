#!/usr/bin/env python3
"""
Schema Errors

Exceptions raised by the schema store and validator. Core inference never
raises on JSON input; these cover persistence and validation failures, each
carrying the context a caller needs to report it.
"""

from typing import Any, List, Optional
from pathlib import Path


class SchemaError(RuntimeError):
    """Base class for schema persistence and validation errors."""


class SchemaNotFoundError(SchemaError):
    """Raised when no schema file exists for a folder/name pair."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Schema file not found: {path}")
        self.path = path


class SchemaLoadError(SchemaError):
    """Raised when a schema file is not valid JSON or not a valid schema."""

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class SchemaValidationError(SchemaError):
    """Raised when a document does not conform to its schema."""

    def __init__(self, message: str, *, diagnostics: Optional[List[Any]] = None) -> None:
        super().__init__(message)
        self.diagnostics = diagnostics or []
