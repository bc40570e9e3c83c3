"""Domain enums for the reservation gateway."""

from enum import Enum


class NotificationType(str, Enum):
    """Notification category, which determines its visual style."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


class Resource(str, Enum):
    """REST resources exposed by the backend."""

    CUSTOMERS = "customers"
    TABLES = "tables"
    RESERVATIONS = "reservations"
