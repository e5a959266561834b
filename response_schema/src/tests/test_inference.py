#!/usr/bin/env python3
"""
Test suite for schema inference: type descriptors, field merging,
required fields and recursive assembly.
"""

import pytest
from pathlib import Path
import sys

# Add lib to path
sys.path.insert(0, str(Path(__file__).parent.parent / "lib"))

from generate_samples import SampleGenerator
from schema_validator import find_mismatches
from infer_schema import (
    DRAFT_07,
    FieldDescriptor,
    build_schema_document,
    describe,
    infer_schema,
    infer_schema_from_samples,
    infer_type,
    merge_fields,
    required_fields,
)


def _type_set(node):
    t = node.get("type")
    return set(t) if isinstance(t, list) else {t}


class TestInferType:
    """Test basic type inference."""

    def test_infer_null(self):
        assert infer_type(None) == "null"

    def test_infer_boolean(self):
        assert infer_type(True) == "boolean"
        assert infer_type(False) == "boolean"

    def test_infer_number(self):
        assert infer_type(42) == "number"
        assert infer_type(-2.5) == "number"

    def test_infer_string(self):
        assert infer_type("hello") == "string"
        assert infer_type("") == "string"

    def test_infer_object(self):
        assert infer_type({}) == "object"

    def test_infer_array(self):
        assert infer_type([]) == "array"
        assert infer_type([1, 2, 3]) == "array"

    def test_unknown_kind(self):
        assert infer_type(object()) == "unknown"


class TestDescribe:
    """Test single-value type descriptors."""

    def test_scalars(self):
        assert describe(None) == {"type": "null"}
        assert describe(True) == {"type": "boolean"}
        assert describe(1.5) == {"type": "number"}
        assert describe("hello") == {"type": "string"}

    def test_string_with_format(self):
        assert describe("user@example.com") == {"type": "string", "format": "email"}

    def test_compound_values_are_not_inspected(self):
        assert describe([{"a": 1}]) == {"type": "array"}
        assert describe({"a": "2024-07-25"}) == {"type": "object"}

    def test_never_raises(self):
        assert describe(object()) == {"type": "unknown"}


class TestFieldDescriptor:
    """Test rendering of merged field information."""

    def test_single_type(self):
        assert FieldDescriptor(("number",)).to_schema() == {"type": "number"}

    def test_nullable_union_puts_null_last(self):
        descriptor = FieldDescriptor(("string",), nullable=True, format="date-time")
        assert descriptor.to_schema() == {"type": ["string", "null"], "format": "date-time"}

    def test_only_null(self):
        assert FieldDescriptor((), nullable=True).to_schema() == {"type": "null"}

    def test_unknown_type_is_unconstrained(self):
        assert FieldDescriptor(("unknown",)).to_schema() == {}


class TestMergeFields:
    """Test cross-sample field merging."""

    def test_empty(self):
        assert merge_fields([]) == {}

    def test_non_objects_are_ignored(self):
        assert merge_fields([1, "a", None, [1]]) == {}
        merged = merge_fields([{"a": 1}, "noise"])
        assert merged["a"] == FieldDescriptor(("number",), nullable=False)

    def test_nullable_from_absence(self):
        merged = merge_fields([{"a": 1}, {"a": 2, "b": 3}])
        assert merged["a"].nullable is False
        assert merged["b"].nullable is True
        assert merged["b"].types == ("number",)

    def test_nullable_from_explicit_null(self):
        merged = merge_fields([{"a": 1}, {"a": None}])
        assert merged["a"].types == ("number",)
        assert merged["a"].nullable is True

    def test_mixed_types_make_union_without_format(self):
        merged = merge_fields([{"v": "2024-07-25"}, {"v": 3}])
        assert merged["v"].types == ("string", "number")
        assert merged["v"].format is None
        assert merged["v"].to_schema() == {"type": ["string", "number"]}

    def test_format_kept_when_all_agree(self):
        merged = merge_fields([
            {"t": "2024-07-25T00:00:00Z"},
            {"t": None},
            {"t": "2024-07-26T10:00:00Z"},
        ])
        assert merged["t"].format == "date-time"
        assert merged["t"].to_schema() == {"type": ["string", "null"], "format": "date-time"}

    def test_format_dropped_on_disagreement(self):
        merged = merge_fields([{"t": "2024-07-25T00:00:00Z"}, {"t": "not-a-date"}])
        assert merged["t"].types == ("string",)
        assert merged["t"].format is None

    def test_format_dropped_on_different_formats(self):
        merged = merge_fields([{"t": "2024-07-25"}, {"t": "2024-07-25T00:00:00Z"}])
        assert merged["t"].format is None

    def test_field_order_is_first_seen(self):
        merged = merge_fields([{"b": 1, "a": 1}, {"c": 1}])
        assert list(merged) == ["b", "a", "c"]


class TestRequiredFields:
    """Test required-field calculation."""

    def test_empty(self):
        assert required_fields([]) == []

    def test_absent_field_is_optional(self):
        assert required_fields([{"a": 1}, {"a": 2, "b": 3}]) == ["a"]
        assert required_fields([{"b": 3, "a": 2}, {"a": 1}]) == ["a"]

    def test_null_field_is_optional(self):
        assert required_fields([{"a": 1, "b": None}, {"a": 2, "b": 1}]) == ["a"]

    def test_falsy_values_are_present(self):
        assert required_fields([{"a": 0, "b": "", "c": False}]) == ["a", "b", "c"]


class TestInferSchema:
    """Test the recursive schema assembler."""

    def test_scalar_root(self):
        assert infer_schema("https://example.com") == {"type": "string", "format": "uri"}
        assert infer_schema(None) == {"type": "null"}
        assert infer_schema(7) == {"type": "number"}

    def test_empty_array(self):
        assert infer_schema([]) == {"type": "array"}

    def test_end_to_end_array_of_objects(self):
        schema = infer_schema([
            {"id": 1, "name": "A", "tag": None},
            {"id": 2, "name": "B"},
        ])
        assert schema == {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": "number"},
                    "name": {"type": "string"},
                    "tag": {"type": "null"},
                },
                "required": ["id", "name"],
            },
        }

    def test_non_object_siblings_are_excluded(self):
        schema = infer_schema([{"a": 1}, 5, "x", {"a": 2}])
        assert schema["items"]["properties"] == {"a": {"type": "number"}}
        assert schema["items"]["required"] == ["a"]

    def test_scalar_array(self):
        assert infer_schema([1, 2.5, 3]) == {"type": "array", "items": {"type": "number"}}
        assert infer_schema(["a@b.io", "c@d.io"]) == {
            "type": "array",
            "items": {"type": "string", "format": "email"},
        }

    def test_heterogeneous_array_is_untyped(self):
        assert infer_schema([1, "a"]) == {"type": "array"}
        assert infer_schema(["a", {"b": 1}]) == {"type": "array"}
        assert infer_schema([[1], [2]]) == {"type": "array"}

    def test_plain_object(self):
        schema = infer_schema({
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "count": 3,
            "deleted": None,
        })
        assert schema == {
            "type": "object",
            "properties": {
                "id": {"type": "string", "format": "uuid"},
                "count": {"type": "number"},
                "deleted": {"type": "null"},
            },
            "required": ["id", "count"],
        }

    def test_nested_object_inside_plain_object(self):
        schema = infer_schema({"meta": {"created": "2024-07-25", "by": "ops"}})
        meta = schema["properties"]["meta"]
        assert meta["type"] == "object"
        assert meta["properties"]["created"] == {"type": "string", "format": "date"}
        assert meta["required"] == ["created", "by"]

    def test_nested_objects_merge_across_siblings(self):
        schema = infer_schema([
            {"config": {"capacity": 100, "type": "solar"}},
            {"config": {"capacity": 150}},
            {"config": None},
        ])
        config = schema["items"]["properties"]["config"]
        assert config["type"] == ["object", "null"]
        assert config["properties"]["capacity"] == {"type": "number"}
        assert config["properties"]["type"] == {"type": ["string", "null"]}
        assert config["required"] == ["capacity"]

    def test_nested_arrays_merge_all_items(self):
        schema = infer_schema({
            "data": [
                {"orders": [{"sku": "A", "qty": 1}]},
                {"orders": [{"sku": "B"}, {"sku": "C", "qty": None}]},
            ]
        })
        data = schema["properties"]["data"]
        assert data["type"] == "array"
        orders = data["items"]["properties"]["orders"]
        assert orders["type"] == "array"
        assert orders["items"]["required"] == ["sku"]
        assert orders["items"]["properties"]["qty"] == {"type": ["number", "null"]}

    def test_infer_schema_from_samples(self):
        schema = infer_schema_from_samples([{"a": "x"}, {"a": "y", "b": True}])
        assert schema["type"] == "object"
        assert schema["required"] == ["a"]
        assert schema["properties"]["b"] == {"type": ["boolean", "null"]}

    def test_build_schema_document(self):
        document = build_schema_document([{"a": 1}])
        assert list(document)[0] == "$schema"
        assert document["$schema"] == DRAFT_07
        assert document["type"] == "array"

    def test_calls_do_not_share_state(self):
        first = infer_schema([{"a": 1}])
        first["items"]["required"].append("zzz")
        second = infer_schema([{"a": 1}])
        assert second["items"]["required"] == ["a"]


class TestIdempotence:
    """Re-inferring with more valid samples never narrows the schema."""

    SAMPLES = [
        {
            "id": "123e4567-e89b-12d3-a456-426614174000",
            "name": "Test Asset 1",
            "createdAt": "2024-07-25T13:36:08Z",
            "updatedAt": "2024-07-25 13:36:08",
            "owner": {"email": "alice@example.com", "team": "ops"},
            "readings": [{"value": 1.5, "at": "10:00:00"}],
            "note": None,
        },
        {
            "id": "223e4567-e89b-12d3-a456-426614174001",
            "name": "Test Asset 2",
            "createdAt": "2024-07-26T08:00:00Z",
            "updatedAt": "2024-07-26T08:00:00",
            "owner": {"email": "bob@example.com"},
            "readings": [],
            "note": "checked",
        },
    ]

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_reinference_is_never_narrower(self, seed):
        first = infer_schema(self.SAMPLES)["items"]

        generated = SampleGenerator(seed=seed).generate_samples(first, count=25)
        second = infer_schema(self.SAMPLES + generated)["items"]

        assert set(second["required"]) <= set(first["required"])
        for key, node in first["properties"].items():
            assert _type_set(second["properties"][key]) >= _type_set(node)

    def test_generated_samples_keep_formats(self):
        first = infer_schema(self.SAMPLES)["items"]
        generated = SampleGenerator(seed=7).generate_samples(first, count=25)
        second = infer_schema(self.SAMPLES + generated)["items"]

        assert second["properties"]["id"]["format"] == "uuid"
        assert second["properties"]["createdAt"]["format"] == "date-time"
        assert second["properties"]["updatedAt"]["format"] == "date-time"

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_schema_accepts_samples_and_generated(self, seed):
        schema = build_schema_document(self.SAMPLES)
        generated = SampleGenerator(seed=seed).generate_samples(schema["items"], count=25)

        assert find_mismatches(schema, self.SAMPLES, all_errors=True) == []
        assert find_mismatches(schema, generated, all_errors=True) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
