import pytest

from scmasterdata.app.entity_models import (
    ItemTypeRecord,
    UomRecord,
    record_identity,
    record_type_for,
)
from scmasterdata.app.master_data_store import MasterDataStore


class TestEntityRecords:
    def test_editable_field_names_exclude_bookkeeping(self):
        assert UomRecord.editable_field_names() == ("code", "title", "prefix")
        assert ItemTypeRecord.editable_field_names() == ("code", "title", "description")

    def test_from_mapping_accepts_legacy_keys(self):
        record = ItemTypeRecord.from_mapping(
            {"id": 4, "code": " RAW ", "title": "Raw Material", "createdAt": "2024-01-02T00:00:00+00:00"}
        )
        assert record.record_id == "4"
        assert record.code == "RAW"
        assert record.description == ""
        assert record.created_at == "2024-01-02T00:00:00+00:00"

    def test_to_mapping_round_trips_fields(self):
        record = UomRecord(record_id="1", code="KG", title="Kilogram", prefix="kg")
        mapping = record.to_mapping()
        assert mapping["prefix"] == "kg"
        assert UomRecord.from_mapping(mapping) == record

    def test_form_values_read_unknown_and_meta_fields_as_blank(self):
        record = UomRecord(record_id="1", code="KG", title="Kilogram")
        assert record.form_values(("code", "title", "description", "record_id")) == {
            "code": "KG",
            "title": "Kilogram",
            "description": "",
            "record_id": "",
        }

    def test_record_identity(self):
        assert record_identity(None) is None
        assert record_identity(UomRecord(record_id=" 7 ", code="KG", title="Kilogram")) == "7"

    def test_unknown_kind_raises(self):
        with pytest.raises(KeyError):
            record_type_for("warehouse")


class TestMasterDataStore:
    def test_create_appends_with_incrementing_ids(self):
        store = MasterDataStore("uom")
        first = store.save({"code": "KG", "title": "Kilogram", "prefix": "kg"})
        second = store.save({"code": "M", "title": "Meter", "prefix": "m"})
        assert isinstance(first, UomRecord)
        assert (first.record_id, second.record_id) == ("1", "2")
        assert [record.code for record in store.records] == ["KG", "M"]
        assert first.created_at

    def test_edit_updates_in_place_and_keeps_identity(self):
        store = MasterDataStore("uom")
        original = store.save({"code": "KG", "title": "Kilogram", "prefix": "kg"})
        updated = store.save({"code": "KGM", "title": "Kilogram", "prefix": "kg"}, editing=original)
        assert updated.record_id == original.record_id
        assert updated.created_at == original.created_at
        assert len(store.records) == 1
        assert store.record_by_id(original.record_id).code == "KGM"

    def test_save_ignores_non_record_keys(self):
        store = MasterDataStore("item_type")
        record = store.save({"code": "RAW", "title": "Raw", "record_id": "99"})
        assert record.record_id == "1"
        assert record.description == ""

    def test_delete(self):
        store = MasterDataStore("item_type")
        record = store.save({"code": "RAW", "title": "Raw"})
        assert store.delete(record.record_id) is True
        assert store.delete(record.record_id) is False
        assert store.records == ()

    def test_choice_options(self):
        store = MasterDataStore("item_type")
        store.save({"code": "RAW", "title": "Raw Material"})
        assert store.choice_options() == [("RAW - Raw Material", "1")]
