#!/usr/bin/env python3
"""
Generate sample response bodies from inferred schemas.

Every generated value conforms to the schema it came from, including string
formats, so generated sets can be fed back into inference or validation.
"""

import random
import string
import uuid
from datetime import datetime, timedelta
from typing import Any, Dict, List


WORDS = ['lorem', 'ipsum', 'dolor', 'sit', 'amet', 'consectetur', 'adipiscing']


class SampleGenerator:
    """Generate diverse JSON values from a Draft-07 response schema."""

    def __init__(self, seed: int = 42, optional_rate: float = 0.6):
        """Initialize with a seed for reproducibility."""
        self.random = random.Random(seed)
        self.optional_rate = optional_rate

    def generate_samples(self, schema: Dict[str, Any], count: int = 100) -> List[Any]:
        """Generate multiple values from schema."""
        return [self.generate_from_schema(schema) for _ in range(count)]

    def generate_from_schema(self, schema: Dict[str, Any]) -> Any:
        """Generate a single value conforming to schema."""
        schema_type = schema.get("type")

        if isinstance(schema_type, list):
            # Union - pick one member
            schema_type = self.random.choice(schema_type)

        if schema_type == "object":
            return self._generate_object(schema)
        elif schema_type == "array":
            return self._generate_array(schema)
        elif schema_type == "string":
            return self._generate_string(schema)
        elif schema_type == "number":
            return self._generate_number()
        elif schema_type == "boolean":
            return self.random.choice([True, False])
        elif schema_type == "null":
            return None
        else:
            # No type constraint
            return self._generate_random_string()

    def _generate_object(self, schema: Dict[str, Any]) -> Dict[str, Any]:
        """Generate an object; required fields always, optional ones sometimes."""
        obj = {}
        properties = schema.get("properties", {})
        required = set(schema.get("required", []))

        for prop, prop_schema in properties.items():
            if prop in required:
                value = self.generate_from_schema(prop_schema)
                # Required means non-null
                while value is None:
                    value = self.generate_from_schema(prop_schema)
                obj[prop] = value
            elif self.random.random() < self.optional_rate:
                obj[prop] = self.generate_from_schema(prop_schema)

        return obj

    def _generate_array(self, schema: Dict[str, Any]) -> List[Any]:
        """Generate an array; untyped arrays stay empty."""
        items_schema = schema.get("items")
        if not isinstance(items_schema, dict):
            return []

        length = self.random.randint(0, 4)
        return [self.generate_from_schema(items_schema) for _ in range(length)]

    def _generate_string(self, schema: Dict[str, Any]) -> str:
        """Generate a string in the schema's format, if any."""
        format_type = schema.get("format")

        if format_type == "date-time":
            return self._generate_datetime().strftime("%Y-%m-%dT%H:%M:%SZ")
        elif format_type == "date":
            return self._generate_datetime().strftime("%Y-%m-%d")
        elif format_type == "time":
            return self._generate_datetime().strftime("%H:%M:%SZ")
        elif format_type == "duration":
            return f"P{self.random.randint(1, 30)}DT{self.random.randint(1, 23)}H"
        elif format_type == "uuid":
            return str(uuid.UUID(int=self.random.getrandbits(128), version=4))
        elif format_type == "email":
            names = ['alice', 'bob', 'charlie', 'diana', 'eve', 'frank']
            domains = ['example.com', 'test.org', 'demo.net', 'sample.io']
            return f"{self.random.choice(names)}{self.random.randint(1, 999)}@{self.random.choice(domains)}"
        elif format_type == "uri":
            paths = ['api', 'v1', 'data', 'resource']
            return f"https://example.com/{'/'.join(self.random.sample(paths, 2))}"
        elif format_type == "ipv4":
            return ".".join(str(self.random.randint(0, 255)) for _ in range(4))
        elif format_type == "ipv6":
            return ":".join(f"{self.random.randint(0, 65535):x}" for _ in range(8))
        elif format_type == "hostname":
            return f"api{self.random.randint(1, 99)}.example.com"
        else:
            return self._generate_random_string()

    def _generate_number(self) -> float:
        if self.random.random() < 0.5:
            return self.random.randint(-1000, 1000)
        return round(self.random.uniform(-1000, 1000), 2)

    def _generate_random_string(self) -> str:
        """Generate a free-text string that matches no known format."""
        if self.random.random() < 0.5:
            return ' '.join(self.random.choices(WORDS, k=self.random.randint(2, 5)))
        return ''.join(self.random.choices(string.ascii_lowercase, k=self.random.randint(3, 12)))

    def _generate_datetime(self) -> datetime:
        base = datetime(2020, 1, 1)
        return base + timedelta(
            days=self.random.randint(0, 1825),
            seconds=self.random.randint(0, 86399),
        )
