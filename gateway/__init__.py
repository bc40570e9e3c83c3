"""Normalization gateway between the domain model and the backend REST API."""

from .client import create_http_client
from .envelope import Bare, Envelope, Wrapped, parse_envelope, unwrap_collection, unwrap_entity
from .errors import ConnectivityError, GatewayError, TransportError
from .normalizers import (
    CustomerNormalizer,
    FieldMap,
    FieldRule,
    Normalizer,
    ReservationNormalizer,
    TableNormalizer,
    customer_normalizer,
    reservation_normalizer,
    table_normalizer,
)
from .repositories import (
    CustomerRepository,
    ReservationRepository,
    ResourceRepository,
    TableRepository,
)
from .session import Gateway, open_gateway

__all__ = [
    # Client
    "create_http_client",
    # Envelope
    "Bare",
    "Envelope",
    "Wrapped",
    "parse_envelope",
    "unwrap_collection",
    "unwrap_entity",
    # Errors
    "ConnectivityError",
    "GatewayError",
    "TransportError",
    # Normalizers
    "CustomerNormalizer",
    "FieldMap",
    "FieldRule",
    "Normalizer",
    "ReservationNormalizer",
    "TableNormalizer",
    "customer_normalizer",
    "reservation_normalizer",
    "table_normalizer",
    # Repositories
    "CustomerRepository",
    "ReservationRepository",
    "ResourceRepository",
    "TableRepository",
    # Session
    "Gateway",
    "open_gateway",
]
