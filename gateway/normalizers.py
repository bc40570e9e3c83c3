"""
Field normalization between the backend wire format and domain models.

The backend names fields in Spanish and does not always agree with itself on
which name or relation shape it sends. Every domain attribute is described by
a ``FieldRule`` listing the wire names to try on read, in priority order; the
first name is the canonical one written back. Reads are lenient, writes emit
only canonical names.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel

from core.config import settings
from core.utils_datetime import format_wire_time
from domain.models import Customer, CustomerSummary, Reservation, Table, TableSummary


EntityT = TypeVar("EntityT", bound=BaseModel)


# ============================================================================
# Coercion helpers
# ============================================================================

def coerce_int(value: Any) -> Optional[int]:
    """Best-effort integer coercion; None when the value is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        try:
            if "." in text:
                number = float(text)
                return int(number) if number.is_integer() else None
            return int(text)
        except ValueError:
            return None
    return None


def coerce_text(value: Any) -> Optional[str]:
    """Scalars become strings (phone numbers often arrive as numbers)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def coerce_label(value: Any) -> Optional[Any]:
    """Table labels may be strings or numbers; anything else is unreadable."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int)):
        return value
    return None


# ============================================================================
# Declarative field tables
# ============================================================================

@dataclass(frozen=True)
class FieldRule:
    """How one domain attribute maps onto the wire."""
    attr: str
    wire_names: Tuple[str, ...]
    default: Any = None
    coerce: Optional[Callable[[Any], Any]] = None
    writable: bool = True

    @property
    def wire_name(self) -> str:
        """Canonical name emitted on write."""
        return self.wire_names[0]

    def read(self, payload: Mapping[str, Any]) -> Any:
        for key in self.wire_names:
            value = payload.get(key)
            if value is None:
                continue
            if self.coerce is not None:
                value = self.coerce(value)
                if value is None:
                    continue
            return value
        return self.default


class FieldMap:
    """Ordered collection of field rules for one entity."""

    def __init__(self, *rules: FieldRule):
        self.rules: Sequence[FieldRule] = rules

    def read(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        return {rule.attr: rule.read(payload) for rule in self.rules}

    def write(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        wire: Dict[str, Any] = {}
        for rule in self.rules:
            if not rule.writable:
                continue
            value = values.get(rule.attr)
            if value is not None:
                wire[rule.wire_name] = value
        return wire

    def __iter__(self):
        return iter(self.rules)


ID_RULE = FieldRule("id", ("id",), coerce=coerce_int)

CUSTOMER_FIELDS = FieldMap(
    ID_RULE,
    FieldRule("name", ("nombre", "name"), default="", coerce=coerce_text),
    FieldRule("email", ("correo", "email"), default="", coerce=coerce_text),
    FieldRule("phone", ("telefono", "phone"), coerce=coerce_text),
    FieldRule("address", ("direccion", "address"), coerce=coerce_text),
    FieldRule("created_at", ("created_at",), coerce=coerce_text, writable=False),
    FieldRule("updated_at", ("updated_at",), coerce=coerce_text, writable=False),
)

TABLE_FIELDS = FieldMap(
    ID_RULE,
    FieldRule("table_number", ("numero_mesa", "table_number", "tableNumber"), default="", coerce=coerce_label),
    FieldRule("capacity", ("capacidad", "capacity"), default=0, coerce=coerce_int),
    FieldRule("location", ("ubicacion", "location"), default="", coerce=coerce_text),
)

RESERVATION_FIELDS = FieldMap(
    ID_RULE,
    FieldRule("date", ("fecha", "date"), default="", coerce=coerce_text),
    FieldRule("time", ("hora", "time"), default="", coerce=coerce_text),
    FieldRule(
        "number_of_people",
        ("numero_de_personas", "number_of_people", "numberOfPeople"),
        default=0,
        coerce=coerce_int,
    ),
    FieldRule("customer_id", ("comensal_id", "customer_id", "customerId"), coerce=coerce_int),
    FieldRule("table_id", ("mesa_id", "table_id", "tableId"), coerce=coerce_int),
)

# Embedded relations, read only
TABLE_SUMMARY_FIELDS = FieldMap(
    ID_RULE,
    FieldRule("table_number", ("numero_mesa", "table_number", "tableNumber"), default="-", coerce=coerce_label),
)

CUSTOMER_SUMMARY_FIELDS = FieldMap(
    ID_RULE,
    FieldRule("name", ("nombre", "name"), default="", coerce=coerce_text),
)

NESTED_TABLE_KEYS = ("mesa", "table")
NESTED_CUSTOMER_KEYS = ("comensal", "customer")


# ============================================================================
# Normalizers
# ============================================================================

class Normalizer(Generic[EntityT]):
    """Bidirectional mapping between a wire payload and a domain entity."""

    model: Type[EntityT]
    fields: FieldMap

    def to_domain(self, payload: Mapping[str, Any]) -> EntityT:
        """Build a domain entity from a wire payload."""
        return self.model(**self.fields.read(payload))

    def to_wire(self, entity: EntityT) -> Dict[str, Any]:
        """Project a domain entity onto the backend's field names."""
        return self.fields.write(entity.model_dump())


class CustomerNormalizer(Normalizer[Customer]):
    model = Customer
    fields = CUSTOMER_FIELDS


class TableNormalizer(Normalizer[Table]):
    model = Table
    fields = TABLE_FIELDS


class ReservationNormalizer(Normalizer[Reservation]):
    """
    Reservation mapping, including the embedded table and customer relations.

    The table relation comes from a nested object when the backend sends one,
    otherwise it is synthesized from the foreign key using ``label_template``.
    The customer relation is only ever taken from a nested object.
    """

    model = Reservation
    fields = RESERVATION_FIELDS

    def __init__(self, label_template: Optional[str] = None):
        self.label_template = label_template or settings.table_label_template

    def to_domain(self, payload: Mapping[str, Any]) -> Reservation:
        values = self.fields.read(payload)
        values["table"] = self._read_table(payload, values["table_id"])
        values["customer"] = self._read_customer(payload, values["customer_id"])
        return self.model(**values)

    def to_wire(self, entity: Reservation) -> Dict[str, Any]:
        wire = super().to_wire(entity)
        if "hora" in wire:
            wire["hora"] = format_wire_time(wire["hora"])
        return wire

    def _read_table(self, payload: Mapping[str, Any], table_id: Optional[int]) -> Optional[TableSummary]:
        nested = _nested_object(payload, NESTED_TABLE_KEYS)
        if nested is not None:
            values = TABLE_SUMMARY_FIELDS.read(nested)
            if values["id"] is None:
                values["id"] = table_id
            return TableSummary(**values)
        if table_id is not None:
            return TableSummary(id=table_id, table_number=self.label_template.format(table_id=table_id))
        return None

    def _read_customer(self, payload: Mapping[str, Any], customer_id: Optional[int]) -> Optional[CustomerSummary]:
        nested = _nested_object(payload, NESTED_CUSTOMER_KEYS)
        if nested is None:
            return None
        values = CUSTOMER_SUMMARY_FIELDS.read(nested)
        if values["id"] is None:
            values["id"] = customer_id
        return CustomerSummary(**values)


def _nested_object(payload: Mapping[str, Any], keys: Sequence[str]) -> Optional[Mapping[str, Any]]:
    for key in keys:
        value = payload.get(key)
        if isinstance(value, dict):
            return value
    return None


customer_normalizer = CustomerNormalizer()
table_normalizer = TableNormalizer()
reservation_normalizer = ReservationNormalizer()
