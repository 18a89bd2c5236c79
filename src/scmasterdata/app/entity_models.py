from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4


ENTITY_ITEM_TYPE = "item_type"
ENTITY_UOM = "uom"
ENTITY_PORT_OF_DISCHARGE = "port_of_discharge"
ENTITY_ITEM_CATEGORY = "item_category"
ENTITY_FINAL_DESTINATION = "final_destination"
ENTITY_COUNTRY = "country"
ENTITY_CITY = "city"
ENTITY_SHIPPING_LINE = "shipping_line"
ENTITY_CONSIGNEE = "consignee"
ENTITY_VENDOR = "vendor"
ENTITY_CUSTOMER = "customer"

ENTITY_KINDS: tuple[str, ...] = (
    ENTITY_ITEM_TYPE,
    ENTITY_UOM,
    ENTITY_PORT_OF_DISCHARGE,
    ENTITY_ITEM_CATEGORY,
    ENTITY_FINAL_DESTINATION,
    ENTITY_COUNTRY,
    ENTITY_CITY,
    ENTITY_SHIPPING_LINE,
    ENTITY_CONSIGNEE,
    ENTITY_VENDOR,
    ENTITY_CUSTOMER,
)

# Bookkeeping attributes owned by the list store, never part of an editable form.
_RECORD_META_FIELDS: frozenset[str] = frozenset({"record_id", "created_at"})


def _utc_iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return str(value).strip()


def _safe_record_id(value: Any) -> str:
    normalized = _as_text(value)
    return normalized or uuid4().hex


@dataclass(slots=True)
class EntityRecord:
    """A master-data row as owned by the host list store."""

    record_id: str
    code: str
    title: str
    created_at: str = field(default_factory=_utc_iso_now)

    @classmethod
    def editable_field_names(cls) -> tuple[str, ...]:
        return tuple(
            entry.name for entry in fields(cls) if entry.name not in _RECORD_META_FIELDS
        )

    @classmethod
    def from_mapping(cls, value: Mapping[str, Any] | None) -> EntityRecord:
        if not isinstance(value, Mapping):
            return cls(record_id=uuid4().hex, code="", title="")
        kwargs: dict[str, Any] = {
            "record_id": _safe_record_id(value.get("record_id") or value.get("id")),
        }
        for name in cls.editable_field_names():
            kwargs[name] = _as_text(value.get(name))
        created_at = _as_text(value.get("created_at") or value.get("createdAt"))
        if created_at:
            kwargs["created_at"] = created_at
        return cls(**kwargs)

    def to_mapping(self) -> dict[str, str]:
        payload = {"record_id": _safe_record_id(self.record_id)}
        for name in self.editable_field_names():
            payload[name] = _as_text(getattr(self, name, ""))
        payload["created_at"] = _as_text(self.created_at)
        return payload

    def field_value(self, name: str) -> str:
        """Returns the form-ready text for ``name``; unknown names read as blank."""
        if name in _RECORD_META_FIELDS:
            return ""
        value = getattr(self, name, None)
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    def form_values(self, field_names: Iterable[str]) -> dict[str, str]:
        return {name: self.field_value(name) for name in field_names}


@dataclass(slots=True)
class ItemTypeRecord(EntityRecord):
    description: str = ""


@dataclass(slots=True)
class UomRecord(EntityRecord):
    prefix: str = ""


@dataclass(slots=True)
class PortOfDischargeRecord(EntityRecord):
    description: str = ""


@dataclass(slots=True)
class ItemCategoryRecord(EntityRecord):
    item_type_id: str = ""
    description: str = ""


@dataclass(slots=True)
class FinalDestinationRecord(EntityRecord):
    description: str = ""


@dataclass(slots=True)
class CountryRecord(EntityRecord):
    country_code: str = ""


@dataclass(slots=True)
class CityRecord(EntityRecord):
    country: str = ""


@dataclass(slots=True)
class ShippingLineRecord(EntityRecord):
    shipping_line_code: str = ""


@dataclass(slots=True)
class ConsigneeRecord(EntityRecord):
    pass


@dataclass(slots=True)
class VendorRecord(EntityRecord):
    currency: str = ""
    contact_person: str = ""
    vendor_type: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    country: str = ""
    notes: str = ""


@dataclass(slots=True)
class CustomerRecord(EntityRecord):
    currency: str = ""
    contact_person: str = ""
    credit_limit: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    country: str = ""
    tax_id: str = ""
    notes: str = ""


RECORD_TYPES: dict[str, type[EntityRecord]] = {
    ENTITY_ITEM_TYPE: ItemTypeRecord,
    ENTITY_UOM: UomRecord,
    ENTITY_PORT_OF_DISCHARGE: PortOfDischargeRecord,
    ENTITY_ITEM_CATEGORY: ItemCategoryRecord,
    ENTITY_FINAL_DESTINATION: FinalDestinationRecord,
    ENTITY_COUNTRY: CountryRecord,
    ENTITY_CITY: CityRecord,
    ENTITY_SHIPPING_LINE: ShippingLineRecord,
    ENTITY_CONSIGNEE: ConsigneeRecord,
    ENTITY_VENDOR: VendorRecord,
    ENTITY_CUSTOMER: CustomerRecord,
}


def normalize_entity_kind(value: Any) -> str:
    text = _as_text(value).casefold().replace("-", "_").replace(" ", "_")
    if text == "unit_of_measure":
        return ENTITY_UOM
    if text not in RECORD_TYPES:
        raise KeyError(f"Unknown entity kind: {value!r}")
    return text


def record_type_for(entity_kind: str) -> type[EntityRecord]:
    return RECORD_TYPES[normalize_entity_kind(entity_kind)]


def record_identity(record: EntityRecord | None) -> str | None:
    if record is None:
        return None
    return _as_text(record.record_id)
