#!/usr/bin/env python3
"""
String Format Detection

Classifies string values into JSON Schema `format` keywords.

Detection is an ordered cascade: the first matching rule wins. Several formats
are syntactic subsets of others (a date is a prefix of a date-time, an IPv4
address is also a valid dotted hostname), so the order of FORMAT_PATTERNS is
part of the contract.

Supported formats:
    date-time  ISO 8601 timestamp        2024-07-25T13:36:08.365Z
    date       ISO 8601 calendar date    2024-07-25
    time       ISO 8601 time of day      13:36:08.365Z
    duration   ISO 8601 duration         P1Y2M3DT4H5M6S
    uuid       RFC 4122 UUID (v1-v5)     550e8400-e29b-41d4-a716-446655440000
    email      local@domain              user@example.com
    uri        absolute URI              https://api.example.com/v1
    ipv4       dotted quad               192.168.1.1
    ipv6       full or compressed        2001:db8::1
    hostname   RFC 1123 FQDN             api.example.com
"""

from typing import Callable, List, Optional, Tuple
import re


_DATETIME_RE = re.compile(
    r'\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:?\d{2})?',
    re.IGNORECASE | re.ASCII,
)
_DATE_RE = re.compile(r'\d{4}-\d{2}-\d{2}', re.ASCII)
_TIME_RE = re.compile(
    r'\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:?\d{2})?',
    re.IGNORECASE | re.ASCII,
)
# At least one designator after P, and after T when a time part is present
_DURATION_RE = re.compile(
    r'P(?!$)(\d+Y)?(\d+M)?(\d+W)?(\d+D)?(T(?!$)(\d+H)?(\d+M)?(\d+(\.\d+)?S)?)?',
    re.ASCII,
)
_UUID_RE = re.compile(
    r'[0-9a-f]{8}-[0-9a-f]{4}-[0-5][0-9a-f]{3}-[089ab][0-9a-f]{3}-[0-9a-f]{12}',
    re.IGNORECASE,
)
_EMAIL_RE = re.compile(r'[^\s@"()<>\[\]\\,;:]+@[^\s@]+\.[^\s@]+')
_URI_RE = re.compile(r'[a-zA-Z][a-zA-Z0-9+\-.]*://\S+')
_OCTET = r'(25[0-5]|2[0-4]\d|1\d{2}|[1-9]?\d)'
_IPV4_RE = re.compile(rf'({_OCTET}\.){{3}}{_OCTET}', re.ASCII)
_HEXTET_RE = re.compile(r'[0-9a-f]{1,4}', re.IGNORECASE)
_IPV6_FULL_RE = re.compile(r'([0-9a-f]{1,4}:){7}[0-9a-f]{1,4}', re.IGNORECASE)
_LABEL = r'(?!-)[a-zA-Z0-9-]{1,63}(?<!-)'
_HOSTNAME_RE = re.compile(rf'{_LABEL}(\.{_LABEL})+')

MAX_EMAIL_LENGTH = 254
MAX_HOSTNAME_LENGTH = 253


def _is_iso_datetime(s: str) -> bool:
    """Check if string is an ISO 8601 datetime."""
    return _DATETIME_RE.fullmatch(s) is not None


def _is_iso_date(s: str) -> bool:
    """Check if string is an ISO 8601 date with no time component."""
    return _DATE_RE.fullmatch(s) is not None


def _is_iso_time(s: str) -> bool:
    """Check if string is an ISO 8601 time with no date component."""
    return _TIME_RE.fullmatch(s) is not None


def _is_iso_duration(s: str) -> bool:
    """Check if string is an ISO 8601 duration."""
    return _DURATION_RE.fullmatch(s) is not None


def _is_uuid(s: str) -> bool:
    """Check if string is an RFC 4122 UUID."""
    return _UUID_RE.fullmatch(s) is not None


def _is_email(s: str) -> bool:
    """Check if string is an email."""
    return len(s) <= MAX_EMAIL_LENGTH and _EMAIL_RE.fullmatch(s) is not None


def _is_uri(s: str) -> bool:
    """Check if string is an absolute URI."""
    return _URI_RE.fullmatch(s) is not None


def _is_ipv4(s: str) -> bool:
    """Check if string is IPv4."""
    return _IPV4_RE.fullmatch(s) is not None


def _is_ipv6(s: str) -> bool:
    """Check if string is IPv6, either expanded or with one '::' compression."""
    if _IPV6_FULL_RE.fullmatch(s):
        return True

    if "::" not in s:
        return False

    sides = s.split("::")
    if len(sides) != 2:
        return False

    left = sides[0].split(":") if sides[0] else []
    right = sides[1].split(":") if sides[1] else []
    groups = left + right

    return len(groups) <= 7 and all(_HEXTET_RE.fullmatch(g) for g in groups)


def _is_hostname(s: str) -> bool:
    """Check if string is a fully qualified hostname (a bare word is not)."""
    return (
        len(s) <= MAX_HOSTNAME_LENGTH
        and "." in s
        and _HOSTNAME_RE.fullmatch(s) is not None
    )


FORMAT_PATTERNS: List[Tuple[str, Callable[[str], bool]]] = [
    ("date-time", _is_iso_datetime),
    ("date", _is_iso_date),
    ("time", _is_iso_time),
    ("duration", _is_iso_duration),
    ("uuid", _is_uuid),
    ("email", _is_email),
    ("uri", _is_uri),
    ("ipv4", _is_ipv4),
    ("ipv6", _is_ipv6),
    ("hostname", _is_hostname),
]


def detect_format(value: str) -> Optional[str]:
    """
    Detect if a string matches a known format.

    Args:
        value: The string to classify. Non-strings are accepted and never match.

    Returns:
        The first matching format name from FORMAT_PATTERNS, or None.
    """
    if not isinstance(value, str) or not value.strip():
        return None

    for fmt, test in FORMAT_PATTERNS:
        if test(value):
            return fmt

    return None
