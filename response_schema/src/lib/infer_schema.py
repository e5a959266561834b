#!/usr/bin/env python3
"""
JSON Schema Inference Library

Infers Draft-07 JSON schemas from sample response documents.

Arrays of objects are inferred from ALL of their items, not just the first
one, so that nullable fields, type unions and string formats reflect every
sample. The same merge runs at every nesting depth.
"""

from dataclasses import dataclass
from numbers import Number
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from format_detection import detect_format


DRAFT_07 = "http://json-schema.org/draft-07/schema#"
UNKNOWN_TYPE = "unknown"


@dataclass(frozen=True)
class FieldDescriptor:
    """Aggregated type information for one field across a sample set."""

    types: Tuple[str, ...] = ()
    nullable: bool = False
    format: Optional[str] = None

    def type_union(self) -> Union[str, List[str]]:
        """Single type tag, or a list of tags with "null" last when nullable."""
        tags = list(self.types)
        if self.nullable or not tags:
            tags.append("null")
        return tags[0] if len(tags) == 1 else tags

    def to_schema(self) -> Dict[str, Any]:
        """Render as a JSON Schema fragment."""
        if UNKNOWN_TYPE in self.types:
            return {}

        schema: Dict[str, Any] = {"type": self.type_union()}
        if self.format:
            schema["format"] = self.format
        return schema


def infer_type(value: Any) -> str:
    """
    Infer the JSON type of a single value.

    Returns one of: null, boolean, object, array, number, string
    (or "unknown" for values that did not come from a JSON decoder)
    """
    if value is None:
        return "null"
    elif isinstance(value, bool):
        return "boolean"
    elif isinstance(value, dict):
        return "object"
    elif isinstance(value, (list, tuple)):
        return "array"
    elif isinstance(value, Number):
        return "number"
    elif isinstance(value, str):
        return "string"
    else:
        return UNKNOWN_TYPE


def describe(value: Any) -> Dict[str, Any]:
    """
    Build a type descriptor for a single value.

    Arrays and objects are not inspected here; that is the assembler's job.

    Returns:
        {"type": <tag>} plus "format" for strings matching a known format
    """
    value_type = infer_type(value)
    descriptor = {"type": value_type}

    if value_type == "string":
        fmt = detect_format(value)
        if fmt:
            descriptor["format"] = fmt

    return descriptor


def _object_samples(samples: Iterable[Any]) -> List[Dict[str, Any]]:
    """Keep only the mapping entries of a sample sequence."""
    return [item for item in samples if isinstance(item, dict)]


def _field_names(objects: List[Dict[str, Any]]) -> List[str]:
    """Union of keys across objects, in first-seen order."""
    names: Dict[str, None] = {}
    for item in objects:
        for key in item:
            names.setdefault(key, None)
    return list(names)


def _merge_values(values: Iterable[Any], nullable: bool = False) -> FieldDescriptor:
    """
    Merge the observed values of one field into a FieldDescriptor.

    A format survives only when the field is purely string-typed and every
    string value detected the same format. One unformatted string, or a
    value of another type, drops it.
    """
    types: Dict[str, None] = {}
    formats = set()
    unformatted = False

    for value in values:
        if value is None:
            nullable = True
            continue

        descriptor = describe(value)
        types.setdefault(descriptor["type"], None)

        fmt = descriptor.get("format")
        if fmt:
            formats.add(fmt)
        elif descriptor["type"] == "string":
            unformatted = True

    fmt = None
    if len(types) == 1 and len(formats) == 1 and not unformatted:
        fmt = next(iter(formats))

    return FieldDescriptor(types=tuple(types), nullable=nullable, format=fmt)


def merge_fields(samples: Iterable[Any]) -> Dict[str, FieldDescriptor]:
    """
    Scan every sample object and aggregate per-field type information.

    Strategy per field:
        1. Collect the non-null types seen across all samples.
        2. Mark nullable if any sample is missing the field or has null.
        3. Record a format only if every non-null value agrees on it.

    Args:
        samples: Sibling sample values; non-object entries are ignored

    Returns:
        Map of field name to FieldDescriptor (empty for no objects)
    """
    objects = _object_samples(samples)
    merged = {}

    for key in _field_names(objects):
        present = [item[key] for item in objects if key in item]
        merged[key] = _merge_values(present, nullable=len(present) < len(objects))

    return merged


def required_fields(samples: Iterable[Any]) -> List[str]:
    """
    Fields present and non-null in EVERY sample object.

    A field is optional if it is absent or null in at least one sample.
    """
    objects = _object_samples(samples)
    if not objects:
        return []

    return [
        key for key in _field_names(objects)
        if all(item.get(key) is not None for item in objects)
    ]


def infer_schema_from_samples(samples: Iterable[Any]) -> Dict[str, Any]:
    """
    Infer one object schema from a set of sibling sample objects.

    Nested objects and arrays are merged across all siblings too, so
    nullability and unions are correct at every depth.

    Args:
        samples: Sibling sample values (e.g. the items of a response array)

    Returns:
        {"type": "object", "properties": {...}, "required": [...]}
    """
    objects = _object_samples(samples)
    properties = {}

    for key, descriptor in merge_fields(objects).items():
        node = descriptor.to_schema()

        if "object" in descriptor.types:
            nested = infer_schema_from_samples(item.get(key) for item in objects)
            node["properties"] = nested["properties"]
            node["required"] = nested["required"]

        if "array" in descriptor.types:
            elements = [
                element
                for item in objects
                if isinstance(item.get(key), (list, tuple))
                for element in item[key]
            ]
            items = _infer_items_schema(elements)
            if items is not None:
                node["items"] = items

        properties[key] = node

    return {
        "type": "object",
        "properties": properties,
        "required": required_fields(objects),
    }


def _infer_items_schema(elements: List[Any]) -> Optional[Dict[str, Any]]:
    """
    Items schema for the elements of one or more arrays, or None.

    Only arrays whose first element is an object get a field-aware items
    schema; non-object siblings are left out of the merge. Arrays of one
    scalar type get that type. Anything else stays untyped.
    """
    if not elements:
        return None

    if isinstance(elements[0], dict):
        return infer_schema_from_samples(elements)

    if any(isinstance(element, (dict, list, tuple)) for element in elements):
        return None

    descriptor = _merge_values(elements)
    if len(descriptor.types) > 1 or UNKNOWN_TYPE in descriptor.types:
        return None

    return descriptor.to_schema()


def _infer_array_schema(arr: List[Any]) -> Dict[str, Any]:
    """Infer schema for an array."""
    schema: Dict[str, Any] = {"type": "array"}

    items = _infer_items_schema(list(arr))
    if items is not None:
        schema["items"] = items

    return schema


def infer_schema(sample: Any) -> Dict[str, Any]:
    """
    Main entry point: Infer a JSON schema from one decoded JSON document.

    Args:
        sample: A scalar, object, or array (typically an API response body)

    Returns:
        A schema node describing the sample. A plain object is treated as a
        one-sample set: its non-null keys are required.
    """
    if isinstance(sample, (list, tuple)):
        return _infer_array_schema(sample)

    if isinstance(sample, dict):
        return infer_schema_from_samples([sample])

    descriptor = describe(sample)
    if descriptor["type"] == UNKNOWN_TYPE:
        return {}
    return descriptor


def build_schema_document(sample: Any) -> Dict[str, Any]:
    """Infer a schema and stamp it with the Draft-07 dialect identifier."""
    document = {"$schema": DRAFT_07}
    document.update(infer_schema(sample))
    return document
