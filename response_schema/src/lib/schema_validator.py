#!/usr/bin/env python3
"""
Schema validation against stored response schemas.

Acceptance is decided by the jsonschema library (Draft-07, with the format
rules of format_detection). This module only loads schemas, runs the engine, and
explains the mismatches it reports.
"""

from dataclasses import dataclass, replace
from itertools import islice
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import json
import logging

from jsonschema import Draft7Validator, FormatChecker
from jsonschema.exceptions import SchemaError as JSONSchemaError

from format_detection import FORMAT_PATTERNS
from infer_schema import build_schema_document
from schema_diagnostics import Mismatch, explain, format_report, join_path
from schema_errors import SchemaError, SchemaLoadError, SchemaValidationError
from schema_store import SchemaStore


logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_DIR = "api-schemas"


def _strings_only(test):
    # Format keywords only constrain strings; other types pass.
    def check(instance: Any) -> bool:
        return not isinstance(instance, str) or test(instance)
    return check


def build_format_checker() -> FormatChecker:
    """
    Draft-07 format checker whose rules for the detected formats are the
    detector's own predicates, so an inferred schema accepts its samples.
    Formats the detector never emits keep the library's checks.
    """
    checker = FormatChecker()
    for fmt, test in FORMAT_PATTERNS:
        checker.checks(fmt)(_strings_only(test))
    return checker


FORMAT_CHECKER = build_format_checker()


@dataclass
class ValidatorConfig:
    """Default options for SchemaValidator.validate."""

    create_schema: bool = False
    verbose: bool = True
    throw_on_error: bool = False
    all_errors: bool = False
    sample_chars: int = 500


def find_mismatches(
    schema: Dict[str, Any],
    document: Any,
    all_errors: bool = False,
) -> List[Mismatch]:
    """
    Run the Draft-07 engine and collect its mismatches.

    Args:
        schema: A JSON Schema document
        document: The decoded JSON value to check
        all_errors: Report every mismatch instead of only the first

    Returns:
        Mismatches with slash-delimited instance paths ("/" for the root)

    Raises:
        SchemaLoadError: the schema itself is malformed
    """
    try:
        Draft7Validator.check_schema(schema)
    except JSONSchemaError as e:
        raise SchemaLoadError(f"Invalid schema: {e.message}") from e

    validator = Draft7Validator(schema, format_checker=FORMAT_CHECKER)
    errors = validator.iter_errors(document)
    if not all_errors:
        errors = islice(errors, 1)

    return [
        Mismatch(
            path=join_path(error.absolute_path),
            message=error.message,
            expected=error.validator_value if error.validator == "type" else None,
            segments=tuple(error.absolute_path),
        )
        for error in errors
    ]


class SchemaValidator:
    """Creates response schemas from samples and validates bodies against them."""

    def __init__(
        self,
        schema_base_path: Union[str, Path, SchemaStore] = DEFAULT_SCHEMA_DIR,
        config: Optional[ValidatorConfig] = None,
    ):
        if isinstance(schema_base_path, SchemaStore):
            self.store = schema_base_path
        else:
            self.store = SchemaStore(schema_base_path)
        self.config = config or ValidatorConfig()

    def create_json_schema(self, folder: str, name: str, sample: Any) -> Path:
        """Infer a schema from a sample body and save it."""
        schema = build_schema_document(sample)
        return self.store.save(folder, name, schema)

    def schema_exists(self, folder: str, name: str) -> bool:
        return self.store.exists(folder, name)

    def get_schema_path(self, folder: str, name: str) -> Path:
        return self.store.schema_path(folder, name)

    def validate(
        self,
        folder: str,
        name: str,
        body: Any,
        *,
        create_schema: Optional[bool] = None,
        verbose: Optional[bool] = None,
        throw_on_error: Optional[bool] = None,
        all_errors: Optional[bool] = None,
    ) -> bool:
        """
        Validate a body against the stored schema for folder/name.

        Keyword arguments override the matching ValidatorConfig fields.
        With create_schema, a missing schema is first inferred from the body.

        Returns:
            True if the body conforms, False otherwise

        Raises:
            SchemaValidationError: the body does not conform and throw_on_error is set
            SchemaError: the schema cannot be loaded and throw_on_error is set
        """
        overrides = {
            "create_schema": create_schema,
            "verbose": verbose,
            "throw_on_error": throw_on_error,
            "all_errors": all_errors,
        }
        options = replace(self.config, **{k: v for k, v in overrides.items() if v is not None})
        schema_path = self.store.schema_path(folder, name)

        if options.create_schema and not self.store.exists(folder, name):
            if options.verbose:
                logger.info("Creating new schema: %s/%s", folder, name)
            self.create_json_schema(folder, name, body)

        try:
            schema = self.store.load(folder, name)
            mismatches = find_mismatches(schema, body, all_errors=options.all_errors)
        except SchemaError as e:
            if options.verbose:
                logger.error("Error loading or validating schema file: %s (path: %s)", e, schema_path)
            if options.throw_on_error:
                raise
            return False

        if not mismatches:
            if options.verbose:
                logger.info("Schema validation passed: %s/%s", folder, name)
            return True

        diagnostics = explain(body, mismatches)

        if options.verbose:
            report = [
                "SCHEMA VALIDATION ERRORS:",
                f"Schema: {folder}/{name}",
                f"File: {schema_path}",
                format_report(diagnostics),
            ]
            if isinstance(body, (dict, list)):
                sample = json.dumps(body, indent=2, default=str)
                report.append(f"Response sample (first {options.sample_chars} chars):")
                report.append(sample[:options.sample_chars] + "...")
            logger.error("\n".join(report))

        if options.throw_on_error:
            raise SchemaValidationError(
                f"Schema validation failed for {folder}/{name}",
                diagnostics=diagnostics,
            )

        return False


def create_validator(schema_base_path: Union[str, Path] = DEFAULT_SCHEMA_DIR) -> SchemaValidator:
    """Convenience constructor."""
    return SchemaValidator(schema_base_path)
