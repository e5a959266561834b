#!/usr/bin/env python3
"""
Validation Diagnostics

Turns the structural mismatches reported by the validation engine into
human-readable "expected vs. actual" lines by looking the offending value up
in the validated document.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Tuple, Union
import json


class _Undefined:
    """Marker for a path that does not exist in a document."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


def escape_segment(segment: Union[str, int]) -> str:
    """Escape one path segment the JSON Pointer way."""
    return str(segment).replace("~", "~0").replace("/", "~1")


def unescape_segment(segment: str) -> str:
    """Reverse escape_segment."""
    return segment.replace("~1", "/").replace("~0", "~")


def join_path(segments: Iterable[Union[str, int]]) -> str:
    """
    Build a slash-delimited instance path; the root is "/".

    Empty keys are kept as empty segments, so ["a", ""] is "/a/". A lone
    empty key at the top level also renders as "/"; callers that need to
    tell it apart from the root keep the raw segments.
    """
    parts = [escape_segment(s) for s in segments]
    return "/" + "/".join(parts)


def resolve_segments(document: Any, segments: Iterable[Union[str, int]]) -> Any:
    """Walk already-split keys and indices; UNDEFINED when one is missing."""
    current = document

    for segment in segments:
        if isinstance(current, dict):
            key = str(segment)
            if key not in current:
                return UNDEFINED
            current = current[key]
        elif isinstance(current, (list, tuple)):
            if isinstance(segment, int) and not isinstance(segment, bool):
                index = segment
            elif isinstance(segment, str) and segment.isdecimal():
                index = int(segment)
            else:
                return UNDEFINED
            if not 0 <= index < len(current):
                return UNDEFINED
            current = current[index]
        else:
            return UNDEFINED

    return current


def resolve_path(document: Any, path: str) -> Any:
    """
    Find the value at an instance path.

    Args:
        document: The decoded JSON document that was validated
        path: Slash-delimited keys and/or array indices; only a bare "" or
            "/" is the root, every other segment (empty ones included) is
            looked up

    Returns:
        The value at that path (possibly None), or UNDEFINED when any
        segment does not exist
    """
    if path in ("", "/"):
        return document

    if path.startswith("/"):
        path = path[1:]
    return resolve_segments(document, [unescape_segment(raw) for raw in path.split("/")])


def render_value(value: Any) -> str:
    """JSON text for a value, "undefined" for a missing one."""
    if value is UNDEFINED:
        return "undefined"
    return json.dumps(value, default=str)


@dataclass(frozen=True)
class Mismatch:
    """One structural mismatch as reported by the validation engine."""

    path: str
    message: str
    expected: Optional[Any] = None
    # Raw keys and indices behind path, when the engine supplied them.
    segments: Optional[Tuple[Union[str, int], ...]] = None


@dataclass(frozen=True)
class Diagnostic:
    """A mismatch paired with the value actually found in the document."""

    index: int
    path: str
    message: str
    expected: Optional[Any]
    actual: Any

    def lines(self) -> List[str]:
        out = [f"{self.index}. At {self.path}: {self.message}"]
        if self.expected:
            expected = self.expected
            if isinstance(expected, (list, tuple)):
                expected = ",".join(expected)
            out.append(f"   Expected type: {expected}")
        out.append(f"   Actual value: {render_value(self.actual)}")
        return out


def _actual_value(document: Any, mismatch: Mismatch) -> Any:
    if mismatch.segments is not None:
        return resolve_segments(document, mismatch.segments)
    return resolve_path(document, mismatch.path)


def explain(document: Any, mismatches: Iterable[Mismatch]) -> List[Diagnostic]:
    """Attach the actual value at each mismatch path, numbering from 1."""
    return [
        Diagnostic(
            index=index,
            path=mismatch.path,
            message=mismatch.message,
            expected=mismatch.expected,
            actual=_actual_value(document, mismatch),
        )
        for index, mismatch in enumerate(mismatches, start=1)
    ]


def format_report(diagnostics: Iterable[Diagnostic]) -> str:
    """Render diagnostics as a multi-line report."""
    lines = []
    for diagnostic in diagnostics:
        lines.extend(diagnostic.lines())
    return "\n".join(lines)
