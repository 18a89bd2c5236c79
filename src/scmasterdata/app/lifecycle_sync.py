from __future__ import annotations

import logging

from scmasterdata.app.entity_models import EntityRecord, record_identity
from scmasterdata.app.form_controller import FormController


def should_reinitialize(
    prev_open: bool,
    prev_record_id: str | None,
    next_open: bool,
    next_record_id: str | None,
) -> bool:
    """Decides whether a panel transition must reseed the form.

    Reseeds on every closed -> open transition and whenever the bound record
    changes while the panel stays open. Closed panels never reseed.
    """
    if not next_open:
        return False
    if not prev_open:
        return True
    return prev_record_id != next_record_id


class LifecycleSynchronizer:
    def __init__(self, controller: FormController, *, logger: logging.Logger | None = None) -> None:
        self._controller = controller
        self._logger = logger or logging.getLogger("scmasterdata.forms")
        self._open = False
        self._record: EntityRecord | None = None
        self._reinitialize_count = 0

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def record(self) -> EntityRecord | None:
        return self._record

    @property
    def editing(self) -> bool:
        return self._open and self._record is not None

    @property
    def reinitialize_count(self) -> int:
        return self._reinitialize_count

    def update(self, open_: bool, record: EntityRecord | None) -> bool:
        next_open = bool(open_)
        reseed = should_reinitialize(
            self._open,
            record_identity(self._record),
            next_open,
            record_identity(record),
        )
        self._open = next_open
        self._record = record
        if reseed:
            self._seed()
        return reseed

    def _seed(self) -> None:
        schema = self._controller.schema
        if self._record is None:
            self._controller.reset()
            mode = "create"
        else:
            self._controller.initialize(self._record.form_values(schema.field_names))
            mode = "edit"
        self._reinitialize_count += 1
        self._logger.debug(
            "Reinitialized %s form (%s, record=%s)",
            schema.name,
            mode,
            record_identity(self._record) or "-",
        )
