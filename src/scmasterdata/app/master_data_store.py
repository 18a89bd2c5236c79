from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from scmasterdata.app.entity_models import (
    EntityRecord,
    normalize_entity_kind,
    record_type_for,
)


class MasterDataStore:
    """In-memory list of one entity kind, as kept by the host list views."""

    def __init__(self, entity_kind: str, *, logger: logging.Logger | None = None) -> None:
        self.entity_kind = normalize_entity_kind(entity_kind)
        self._record_type = record_type_for(self.entity_kind)
        self._logger = logger or logging.getLogger("scmasterdata.store")
        self._records: list[EntityRecord] = []
        self._next_id = 1

    @property
    def records(self) -> tuple[EntityRecord, ...]:
        return tuple(self._records)

    def record_by_id(self, record_id: str) -> EntityRecord | None:
        key = str(record_id or "").strip()
        for record in self._records:
            if record.record_id == key:
                return record
        return None

    def save(self, values: Mapping[str, Any], *, editing: EntityRecord | None = None) -> EntityRecord:
        field_names = self._record_type.editable_field_names()
        cleaned = {name: str(values.get(name) or "") for name in field_names}
        existing = self.record_by_id(editing.record_id) if editing is not None else None
        if existing is not None:
            updated = replace(existing, **cleaned)
            for index, row in enumerate(self._records):
                if row.record_id == existing.record_id:
                    self._records[index] = updated
                    break
            self._logger.info("Updated %s %s", self.entity_kind, updated.record_id)
            return updated

        record = self._record_type(record_id=str(self._next_id), **cleaned)
        self._next_id += 1
        self._records.append(record)
        self._logger.info("Created %s %s", self.entity_kind, record.record_id)
        return record

    def delete(self, record_id: str) -> bool:
        key = str(record_id or "").strip()
        before = len(self._records)
        self._records = [record for record in self._records if record.record_id != key]
        removed = len(self._records) != before
        if removed:
            self._logger.info("Deleted %s %s", self.entity_kind, key)
        return removed

    def choice_options(self) -> list[tuple[str, str]]:
        return [(f"{record.code} - {record.title}", record.record_id) for record in self._records]
