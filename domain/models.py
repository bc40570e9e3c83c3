"""Domain models using Pydantic v2 for the reservation gateway."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Customer(BaseModel):
    """Restaurant customer."""

    id: Optional[int] = Field(None, description="Server-assigned id, absent until persisted")
    name: str = Field(..., description="Full name")
    email: str = Field(..., description="Email address")
    phone: Optional[str] = Field(None, description="Contact phone number")
    address: Optional[str] = Field(None, description="Postal address")
    created_at: Optional[str] = Field(None, description="ISO-8601 creation timestamp")
    updated_at: Optional[str] = Field(None, description="ISO-8601 last update timestamp")

    model_config = ConfigDict(frozen=True)

    @property
    def is_persisted(self) -> bool:
        """Whether the backend has assigned an id."""
        return self.id is not None


class Table(BaseModel):
    """Dining table."""

    id: Optional[int] = None
    table_number: Union[str, int] = Field(..., description="Table label or number")
    capacity: int = Field(..., description="Seats available at the table")
    location: str = Field("", description="Where the table sits, e.g. terrace")

    model_config = ConfigDict(frozen=True)

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


class CustomerSummary(BaseModel):
    """Read-only customer projection embedded in a reservation."""

    id: Optional[int] = None
    name: str = ""

    model_config = ConfigDict(frozen=True)


class TableSummary(BaseModel):
    """Read-only table projection embedded in a reservation."""

    id: Optional[int] = None
    table_number: Union[str, int] = "-"

    model_config = ConfigDict(frozen=True)


class Reservation(BaseModel):
    """Table reservation for a customer."""

    id: Optional[int] = None
    date: str = Field(..., description="Reservation date (YYYY-MM-DD)")
    time: str = Field(..., description="Reservation time (HH:MM or HH:MM:SS)")
    number_of_people: int = Field(..., description="Party size")
    customer_id: Optional[int] = Field(None, description="Customer foreign key")
    table_id: Optional[int] = Field(None, description="Table foreign key")
    customer: Optional[CustomerSummary] = None
    table: Optional[TableSummary] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_persisted(self) -> bool:
        return self.id is not None
