"""
Tests for the declarative field rules and the pure validator functions.
"""

import pytest

from scmasterdata.app.entity_schemas import (
    CONSIGNEE_EDITOR,
    COUNTRY_EDITOR,
    CUSTOMER_EDITOR,
    ENTITY_EDITOR_CONFIGS,
    ITEM_TYPE_EDITOR,
    SHIPPING_LINE_EDITOR,
    UOM_EDITOR,
    VENDOR_EDITOR,
    editor_config,
)
from scmasterdata.app.validation_schema import (
    CrossFieldRule,
    FieldRule,
    ValidationSchema,
    optional_rule,
    required_rule,
    validate_field,
    validate_values,
)


UOM_SCHEMA = UOM_EDITOR.schema


class TestCodeRule:
    @pytest.mark.parametrize("code", ["KG", "M", "PCS", "A1", "1234567890", "ABCDEFGHIJ"])
    def test_uppercase_alphanumeric_codes_pass(self, code):
        assert validate_field(UOM_SCHEMA, "code", code) == []

    @pytest.mark.parametrize("code", ["kg", "Kg", "K G", "KG-1", "ABCDEFGHIJK"])
    def test_invalid_codes_fail_with_code_message(self, code):
        violations = validate_field(UOM_SCHEMA, "code", code)
        assert violations
        assert "UOM code" in violations[0]

    def test_lowercase_is_not_normalized(self):
        assert validate_field(UOM_SCHEMA, "code", "kg") == [
            "UOM code must contain only uppercase letters and numbers"
        ]

    def test_too_long_reports_length_before_pattern(self):
        violations = validate_field(UOM_SCHEMA, "code", "abcdefghijk")
        assert violations == [
            "UOM code must be 10 characters or less",
            "UOM code must contain only uppercase letters and numbers",
        ]

    @pytest.mark.parametrize("blank", ["", "   ", None])
    def test_blank_and_whitespace_are_required_violations(self, blank):
        assert validate_field(UOM_SCHEMA, "code", blank) == ["UOM code is required"]

    def test_letters_only_code_for_country(self):
        schema = COUNTRY_EDITOR.schema
        assert validate_field(schema, "code", "US") == []
        assert validate_field(schema, "code", "U5") == [
            "Country code must contain only uppercase letters"
        ]
        assert validate_field(schema, "code", "USAA") == [
            "Country code must be 3 characters or less"
        ]


class TestTitleAndOptionalRules:
    @pytest.mark.parametrize("title", ["Kg", "Kilogram", "A very long descriptive title"])
    def test_titles_of_two_or_more_characters_pass(self, title):
        assert validate_field(UOM_SCHEMA, "title", title) == []

    def test_empty_title_is_required(self):
        assert validate_field(UOM_SCHEMA, "title", "") == ["Title is required"]

    def test_single_character_title_fails(self):
        assert validate_field(UOM_SCHEMA, "title", "K") == ["Title must be at least 2 characters"]

    def test_description_is_unconstrained(self):
        schema = ITEM_TYPE_EDITOR.schema
        assert validate_field(schema, "description", "") == []
        assert validate_field(schema, "description", "x" * 500) == []

    def test_prefix_is_required_and_bounded(self):
        assert validate_field(UOM_SCHEMA, "prefix", "") == ["Prefix is required"]
        assert validate_field(UOM_SCHEMA, "prefix", "kg") == []
        assert validate_field(UOM_SCHEMA, "prefix", "abcdef") == [
            "Prefix must be 5 characters or less"
        ]


class TestValidateValues:
    def test_returns_first_violation_for_invalid_fields_only(self):
        errors = validate_values(UOM_SCHEMA, {"code": "kg", "title": "Kilogram", "prefix": ""})
        assert errors == {
            "code": "UOM code must contain only uppercase letters and numbers",
            "prefix": "Prefix is required",
        }

    def test_missing_fields_are_treated_as_blank(self):
        errors = validate_values(UOM_SCHEMA, {})
        assert set(errors) == {"code", "title", "prefix"}

    def test_valid_values_produce_no_errors(self):
        assert validate_values(UOM_SCHEMA, {"code": "KG", "title": "Kilogram", "prefix": "kg"}) == {}

    def test_cross_field_rule_runs_after_field_rule(self):
        schema = ValidationSchema(
            name="range",
            rules=(required_rule("low", "Low"), required_rule("high", "High")),
            cross_rules=(
                CrossFieldRule(
                    field_name="high",
                    message="High must not sort before low",
                    check=lambda values: values["high"] >= values["low"],
                ),
            ),
        )
        assert validate_values(schema, {"low": "B", "high": "A"}) == {
            "high": "High must not sort before low"
        }
        assert validate_values(schema, {"low": "B", "high": ""}) == {"high": "High is required"}
        assert validate_values(schema, {"low": "A", "high": "B"}) == {}


class TestSchemaDefinition:
    def test_duplicate_field_rule_is_rejected(self):
        with pytest.raises(ValueError):
            ValidationSchema(name="dup", rules=(optional_rule("a"), optional_rule("a")))

    def test_cross_rule_must_target_known_field(self):
        with pytest.raises(ValueError):
            ValidationSchema(
                name="bad",
                rules=(optional_rule("a"),),
                cross_rules=(CrossFieldRule("b", "nope", lambda values: True),),
            )

    def test_unknown_field_lookup_raises(self):
        with pytest.raises(KeyError):
            validate_field(UOM_SCHEMA, "unknown", "x")

    def test_field_rule_default_messages(self):
        rule = FieldRule(name="ref", required=True, min_length=3, pattern=r"^[a-z]+$")
        assert rule.violations("") == ["ref is required"]
        assert rule.violations("a1") == [
            "ref must be at least 3 characters",
            "ref has an invalid format",
        ]

    def test_uom_has_three_independent_fields(self):
        assert UOM_SCHEMA.field_names == ("code", "title", "prefix")
        assert tuple(descriptor.name for descriptor in UOM_EDITOR.fields) == UOM_SCHEMA.field_names

    def test_every_editor_config_matches_its_record_type(self):
        for kind, config in ENTITY_EDITOR_CONFIGS.items():
            assert set(config.schema.field_names) == set(config.record_type.editable_field_names()), kind

    def test_editor_config_lookup_accepts_aliases(self):
        assert editor_config("Unit of Measure") is UOM_EDITOR
        assert editor_config("port-of-discharge").entity_kind == "port_of_discharge"
        with pytest.raises(KeyError):
            editor_config("warehouse")


VALID_VENDOR = {
    "currency": "USD",
    "code": "VEND001",
    "title": "ABC Suppliers",
    "contact_person": "John Smith",
    "vendor_type": "Trade",
    "email": "john@supplier.com",
    "phone": "+1234567890",
    "address": "1 Harbour Road",
    "city": "New York",
    "country": "United States",
    "notes": "",
}


class TestPartySchemas:
    def test_valid_vendor_passes(self):
        assert validate_values(VENDOR_EDITOR.schema, VALID_VENDOR) == {}

    @pytest.mark.parametrize("email", ["john", "john@", "john@supplier", "john @supplier.com"])
    def test_invalid_email(self, email):
        assert validate_field(VENDOR_EDITOR.schema, "email", email) == [
            "Please enter a valid email address"
        ]

    def test_email_and_phone_are_required(self):
        errors = validate_values(VENDOR_EDITOR.schema, {**VALID_VENDOR, "email": "", "phone": " "})
        assert errors == {"email": "Email is required", "phone": "Phone number is required"}

    @pytest.mark.parametrize("phone", ["+1234567890", "923001234567", "7"])
    def test_valid_phone(self, phone):
        assert validate_field(VENDOR_EDITOR.schema, "phone", phone) == []

    @pytest.mark.parametrize("phone", ["0123456", "+12-345", "12345678901234567", "phone"])
    def test_invalid_phone(self, phone):
        assert validate_field(VENDOR_EDITOR.schema, "phone", phone) == [
            "Please enter a valid phone number"
        ]

    def test_vendor_requires_type_and_currency(self):
        errors = validate_values(VENDOR_EDITOR.schema, {**VALID_VENDOR, "vendor_type": "", "currency": ""})
        assert errors == {"currency": "Currency is required", "vendor_type": "Vendor type is required"}

    @pytest.mark.parametrize("limit", ["", "50000", "12.5", " 1e3 "])
    def test_credit_limit_accepts_blank_or_numbers(self, limit):
        values = {**VALID_VENDOR, "tax_id": "", "credit_limit": limit}
        values.pop("vendor_type")
        assert validate_values(CUSTOMER_EDITOR.schema, values) == {}

    @pytest.mark.parametrize("limit", ["fifty", "12,000", "nan"])
    def test_credit_limit_rejects_non_numbers(self, limit):
        values = {**VALID_VENDOR, "credit_limit": limit}
        assert validate_values(CUSTOMER_EDITOR.schema, values) == {
            "credit_limit": "Credit limit must be a valid number"
        }

    def test_customer_code_message(self):
        assert validate_field(CUSTOMER_EDITOR.schema, "code", "cust1") == [
            "Customer code must contain only uppercase letters and numbers"
        ]


class TestShippingAndConsigneeSchemas:
    def test_shipping_line_code_is_letters_only(self):
        schema = SHIPPING_LINE_EDITOR.schema
        assert validate_field(schema, "code", "MSK") == []
        assert validate_field(schema, "code", "MS1") == [
            "Shipping line code must contain only uppercase letters"
        ]
        assert validate_field(schema, "shipping_line_code", "0" * 11) == [
            "Code must be 10 characters or less"
        ]
        assert validate_field(schema, "title", "M") == [
            "Shipping line name must be at least 2 characters"
        ]

    def test_consignee_code_has_no_pattern(self):
        schema = CONSIGNEE_EDITOR.schema
        assert validate_field(schema, "code", "c-001 a") == []
        assert validate_field(schema, "code", "x" * 11) == [
            "Consignee code must be 10 characters or less"
        ]
        assert validate_values(schema, {}) == {
            "code": "Consignee code is required",
            "title": "Consignee name is required",
        }
