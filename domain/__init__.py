"""Domain layer for the reservation gateway."""

from .enums import NotificationType, Resource
from .models import (
    Customer,
    CustomerSummary,
    Reservation,
    Table,
    TableSummary,
)

__all__ = [
    # Enums
    "NotificationType",
    "Resource",
    # Models
    "Customer",
    "CustomerSummary",
    "Reservation",
    "Table",
    "TableSummary",
]
