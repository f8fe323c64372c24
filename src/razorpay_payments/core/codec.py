"""
Small decoding helpers shared by the resource models.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

__all__ = [
    "expect_entity",
    "optional",
    "parse_list",
    "parse_notes",
    "parse_optional_timestamp",
    "parse_timestamp",
]

T = TypeVar("T")


def expect_entity(payload: Mapping[str, Any], expected: str) -> None:
    """
    Check the ``entity`` tag of ``payload`` when the service sent one.
    """
    entity = payload.get("entity")
    if entity is not None and entity != expected:
        raise ValueError(f"expected entity to be {expected!r}, got {entity!r}")


def parse_timestamp(value: Any) -> datetime:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected unix timestamp, got {value!r}")
    return datetime.fromtimestamp(value, tz=timezone.utc)


def parse_optional_timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    return parse_timestamp(value)


def optional(parse: Callable[[Any], T], value: Any) -> Optional[T]:
    if value is None:
        return None
    return parse(value)


def parse_list(parse: Callable[[Any], T], value: Any) -> List[T]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"expected array, got {type(value).__name__}")
    return [parse(item) for item in value]


def parse_notes(value: Any) -> Dict[str, str]:
    """
    Decode a ``notes`` object.

    The service encodes an empty notes object as ``[]``; that, ``null`` and a
    missing field all decode to ``{}``. Any other array is rejected.
    """
    if value is None:
        return {}
    if isinstance(value, list):
        if value:
            raise TypeError("notes must be an object or an empty array")
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"notes must be an object, got {type(value).__name__}")
    return {str(key): "" if item is None else str(item) for key, item in value.items()}
