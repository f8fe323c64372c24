"""
Helpers for turning request parameters into what goes on the wire.

Parameter objects expose ``as_payload()``; plain mappings are accepted as
well. Read methods flatten the normalised payload into query pairs, write
methods send it as a JSON body.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple, Union

from .errors import SerializationError

__all__ = [
    "Payload",
    "SupportsPayload",
    "bool_as_int",
    "compact",
    "encode_body",
    "encode_query",
    "normalize_payload",
    "to_timestamp",
]


class SupportsPayload(Protocol):
    def as_payload(self) -> Dict[str, Any]:
        ...


Payload = Union[Mapping[str, Any], SupportsPayload]

_SCALARS = (bool, str, int, float)


def to_timestamp(value: datetime) -> int:
    return int(value.timestamp())


def bool_as_int(value: Optional[bool]) -> Optional[int]:
    if value is None:
        return None
    return 1 if value else 0


def compact(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is ``None``."""
    return {key: value for key, value in values.items() if value is not None}


def normalize_payload(value: Any) -> Any:
    """
    Recursively convert ``value`` into plain JSON-compatible data.

    Enums become their value, datetimes unix seconds, and parameter objects
    are expanded through ``as_payload()``.
    """
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, str):
        return str(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, datetime):
        return to_timestamp(value)
    as_payload = getattr(value, "as_payload", None)
    if callable(as_payload):
        return normalize_payload(as_payload())
    if isinstance(value, Mapping):
        return {str(key): normalize_payload(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_payload(item) for item in value]
    raise SerializationError(
        f"Cannot serialize value of type {type(value).__name__}"
    )


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(payload: Optional[Payload]) -> List[Tuple[str, str]]:
    """
    Flatten ``payload`` into query-string pairs.

    The top level must be an object whose values are scalars or arrays of
    scalars; each array element becomes a repeated pair under the same key.
    Nested objects are not representable and raise
    :class:`SerializationError`.
    """
    if payload is None:
        return []
    value = normalize_payload(payload)
    if not isinstance(value, dict):
        raise SerializationError("top level value should be a map")

    records: List[Tuple[str, str]] = []
    for key, item in value.items():
        if isinstance(item, _SCALARS):
            records.append((key, _stringify(item)))
        elif isinstance(item, list):
            for element in item:
                if not isinstance(element, _SCALARS):
                    raise SerializationError(
                        f"Unsupported value in list for {key!r}, "
                        "cannot serialize nested map and list"
                    )
                records.append((key, _stringify(element)))
        else:
            raise SerializationError(
                f"Unsupported value for {key!r}, cannot serialize nested map"
            )
    return records


def encode_body(payload: Optional[Payload]) -> Any:
    """Normalise ``payload`` for use as a JSON request body."""
    if payload is None:
        return None
    return normalize_payload(payload)
