#!/usr/bin/env python3
"""
Schema file persistence.

Schemas live under a base directory as <folder>/<name>_schema.json, where
folder may itself be nested (e.g. "vpp/Asset Manager").
"""

from pathlib import Path
from typing import Any, Dict, Union
import json
import logging

from schema_errors import SchemaLoadError, SchemaNotFoundError


logger = logging.getLogger(__name__)

SCHEMA_SUFFIX = "_schema.json"


class SchemaStore:
    """Reads and writes schema documents below a base directory."""

    def __init__(self, base_path: Union[str, Path]):
        self.base_path = Path(base_path)

    def schema_path(self, folder: str, name: str) -> Path:
        """Full path of the schema file for a folder/name pair."""
        return self.base_path / folder / f"{name}{SCHEMA_SUFFIX}"

    def exists(self, folder: str, name: str) -> bool:
        return self.schema_path(folder, name).is_file()

    def save(self, folder: str, name: str, schema: Dict[str, Any]) -> Path:
        """Write a schema, creating parent directories as needed."""
        path = self.schema_path(folder, name)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(schema, f, indent=2)

        logger.info("JSON schema saved to %s", path)
        return path

    def load(self, folder: str, name: str) -> Dict[str, Any]:
        """
        Read a schema document.

        Raises:
            SchemaNotFoundError: no file for this folder/name
            SchemaLoadError: the file is not valid JSON
        """
        path = self.schema_path(folder, name)
        if not path.is_file():
            raise SchemaNotFoundError(path)

        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise SchemaLoadError(f"Invalid JSON in {path}: {e}", path=path) from e
