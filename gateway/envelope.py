"""
Response envelope handling.

The backend sometimes returns the payload directly and sometimes wraps it
as ``{"data": ...}``. Bodies are classified once, then unwrapped before any
normalization runs.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class Bare:
    """Payload returned as-is."""
    payload: Any


@dataclass(frozen=True)
class Wrapped:
    """Payload returned under a ``data`` key."""
    payload: Any


Envelope = Union[Bare, Wrapped]


def parse_envelope(body: Any) -> Envelope:
    """Classify a decoded JSON body."""
    if isinstance(body, dict) and "data" in body:
        return Wrapped(body["data"])
    return Bare(body)


def unwrap_collection(body: Any) -> List[Any]:
    """
    Extract a list of items from a collection response.

    Args:
        body: Decoded JSON body

    Returns:
        The item list, or an empty list when no array can be found
    """
    payload = parse_envelope(body).payload
    if isinstance(payload, list):
        return payload
    return []


def unwrap_entity(body: Any) -> Optional[Dict[str, Any]]:
    """
    Extract a single entity from a response.

    Args:
        body: Decoded JSON body

    Returns:
        The entity mapping, or None when the body holds no object
    """
    payload = parse_envelope(body).payload
    if isinstance(payload, dict) and payload:
        return payload
    return None
