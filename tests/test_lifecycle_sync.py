import pytest

from scmasterdata.app.entity_models import UomRecord
from scmasterdata.app.entity_schemas import UOM_EDITOR
from scmasterdata.app.form_controller import FormController
from scmasterdata.app.lifecycle_sync import LifecycleSynchronizer, should_reinitialize


KILOGRAM = UomRecord(record_id="1", code="KG", title="Kilogram", prefix="kg")
METER = UomRecord(record_id="2", code="M", title="Meter", prefix="m")


@pytest.mark.parametrize(
    "prev_open, prev_id, next_open, next_id, expected",
    [
        (False, None, True, None, True),
        (False, "1", True, "1", True),
        (True, "1", True, "2", True),
        (True, "1", True, None, True),
        (True, None, True, "1", True),
        (True, "1", True, "1", False),
        (True, None, True, None, False),
        (True, "1", False, "1", False),
        (False, None, False, "1", False),
        (False, "1", False, "2", False),
    ],
)
def test_should_reinitialize_transition_table(prev_open, prev_id, next_open, next_id, expected):
    assert should_reinitialize(prev_open, prev_id, next_open, next_id) is expected


@pytest.fixture
def controller():
    return FormController(UOM_EDITOR.schema)


@pytest.fixture
def synchronizer(controller):
    return LifecycleSynchronizer(controller)


def test_opening_with_record_seeds_its_values(controller, synchronizer):
    record = UomRecord(record_id="9", code="KG", title="Kilogram")
    assert synchronizer.update(True, record) is True
    assert controller.values == {"code": "KG", "title": "Kilogram", "prefix": ""}
    assert synchronizer.editing is True


def test_opening_without_record_seeds_blank(controller, synchronizer):
    controller.initialize({"code": "OLD", "title": "Stale", "prefix": "x"})
    synchronizer.update(True, None)
    assert controller.values == {"code": "", "title": "", "prefix": ""}
    assert synchronizer.editing is False


def test_retargeting_while_open_discards_unsaved_edits(controller, synchronizer):
    synchronizer.update(True, KILOGRAM)
    controller.set_field("title", "Kilogram (edited)")
    synchronizer.update(True, METER)
    assert controller.values == {"code": "M", "title": "Meter", "prefix": "m"}


def test_repeated_update_does_not_thrash_user_input(controller, synchronizer):
    synchronizer.update(True, KILOGRAM)
    controller.set_field("code", "KGS")
    assert synchronizer.update(True, KILOGRAM) is False
    assert controller.value("code") == "KGS"
    assert synchronizer.reinitialize_count == 1


def test_closed_updates_are_no_ops(controller, synchronizer):
    controller.set_field("code", "KEEP")
    assert synchronizer.update(False, KILOGRAM) is False
    assert synchronizer.update(False, METER) is False
    assert controller.value("code") == "KEEP"
    assert synchronizer.reinitialize_count == 0


def test_reopening_same_record_reseeds(controller, synchronizer):
    synchronizer.update(True, KILOGRAM)
    controller.set_field("title", "Changed")
    synchronizer.update(False, KILOGRAM)
    synchronizer.update(True, KILOGRAM)
    assert controller.value("title") == "Kilogram"
    assert synchronizer.reinitialize_count == 2
