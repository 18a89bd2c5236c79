from __future__ import annotations

from dataclasses import dataclass

from scmasterdata.app.entity_models import (
    ENTITY_CITY,
    ENTITY_CONSIGNEE,
    ENTITY_COUNTRY,
    ENTITY_CUSTOMER,
    ENTITY_FINAL_DESTINATION,
    ENTITY_ITEM_CATEGORY,
    ENTITY_ITEM_TYPE,
    ENTITY_PORT_OF_DISCHARGE,
    ENTITY_SHIPPING_LINE,
    ENTITY_UOM,
    ENTITY_VENDOR,
    EntityRecord,
    normalize_entity_kind,
    record_type_for,
)
from scmasterdata.app.validation_schema import (
    CrossFieldRule,
    FieldRule,
    ValidationSchema,
    code_rule,
    email_rule,
    is_blank_or_number,
    optional_rule,
    phone_rule,
    required_rule,
    title_rule,
)


CONTROL_TEXT = "text"
CONTROL_TEXTAREA = "textarea"
CONTROL_CHOICE = "choice"
CONTROL_KINDS: tuple[str, ...] = (CONTROL_TEXT, CONTROL_TEXTAREA, CONTROL_CHOICE)


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    name: str
    label: str
    control: str = CONTROL_TEXT
    placeholder: str = ""
    options: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        if self.control not in CONTROL_KINDS:
            raise ValueError(f"Unsupported control kind '{self.control}' for field '{self.name}'")
        if self.options and self.control != CONTROL_CHOICE:
            raise ValueError(f"Only choice fields take fixed options, not '{self.name}'")


@dataclass(frozen=True, slots=True)
class EntityEditorConfig:
    entity_kind: str
    new_button_text: str
    create_title: str
    create_description: str
    edit_title: str
    edit_description: str
    schema: ValidationSchema
    fields: tuple[FieldDescriptor, ...]

    def __post_init__(self) -> None:
        if tuple(entry.name for entry in self.fields) != self.schema.field_names:
            raise ValueError(
                f"Field descriptors for '{self.entity_kind}' must match the schema field order"
            )

    @property
    def record_type(self) -> type[EntityRecord]:
        return record_type_for(self.entity_kind)

    def field_required(self, name: str) -> bool:
        return self.schema.rule(name).required

    def display_label(self, descriptor: FieldDescriptor) -> str:
        if self.field_required(descriptor.name):
            return f"{descriptor.label} *"
        return descriptor.label

    def heading(self, *, editing: bool) -> tuple[str, str]:
        if editing:
            return self.edit_title, self.edit_description
        return self.create_title, self.create_description


_DESCRIPTION_FIELD = FieldDescriptor(
    name="description",
    label="Description",
    control=CONTROL_TEXTAREA,
    placeholder="Enter description (optional)",
)


ITEM_TYPE_EDITOR = EntityEditorConfig(
    entity_kind=ENTITY_ITEM_TYPE,
    new_button_text="New Item Type",
    create_title="New Item Type",
    create_description="Enter item type details",
    edit_title="Edit Item Type",
    edit_description="Update item type details",
    schema=ValidationSchema(
        name=ENTITY_ITEM_TYPE,
        rules=(
            code_rule("Item type code"),
            title_rule(),
            optional_rule("description"),
        ),
    ),
    fields=(
        FieldDescriptor("code", "Item Type Code", placeholder="e.g., RAW, FIN"),
        FieldDescriptor("title", "Item Type Name", placeholder="e.g., Raw Material, Finished Product"),
        _DESCRIPTION_FIELD,
    ),
)

UOM_EDITOR = EntityEditorConfig(
    entity_kind=ENTITY_UOM,
    new_button_text="New UOM",
    create_title="UOM Information",
    create_description="Enter UOM details",
    edit_title="Edit Unit of Measurement",
    edit_description="Update UOM details",
    schema=ValidationSchema(
        name=ENTITY_UOM,
        rules=(
            code_rule("UOM code"),
            title_rule(),
            required_rule("prefix", "Prefix", max_length=5),
        ),
    ),
    fields=(
        FieldDescriptor("code", "UOM Code", placeholder="e.g., KG, M, PCS"),
        FieldDescriptor("title", "Title", placeholder="e.g., Kilogram, Meter, Pieces"),
        FieldDescriptor("prefix", "Prefix", placeholder="e.g., kg, m, pcs"),
    ),
)

PORT_OF_DISCHARGE_EDITOR = EntityEditorConfig(
    entity_kind=ENTITY_PORT_OF_DISCHARGE,
    new_button_text="New Port of Discharge",
    create_title="Port of Discharge Information",
    create_description="Enter port of discharge details",
    edit_title="Edit Port of Discharge",
    edit_description="Update port of discharge details",
    schema=ValidationSchema(
        name=ENTITY_PORT_OF_DISCHARGE,
        rules=(
            code_rule("Port of discharge code"),
            title_rule(),
            optional_rule("description"),
        ),
    ),
    fields=(
        FieldDescriptor("code", "Port Code", placeholder="e.g., USNYC, USLA"),
        FieldDescriptor(
            "title",
            "Port Name",
            placeholder="e.g., Port of New York, Port of Los Angeles",
        ),
        _DESCRIPTION_FIELD,
    ),
)

ITEM_CATEGORY_EDITOR = EntityEditorConfig(
    entity_kind=ENTITY_ITEM_CATEGORY,
    new_button_text="New Item Category",
    create_title="New Item Category",
    create_description="Enter item category details",
    edit_title="Edit Item Category",
    edit_description="Update item category details",
    schema=ValidationSchema(
        name=ENTITY_ITEM_CATEGORY,
        rules=(
            code_rule("Item category code"),
            title_rule(),
            required_rule("item_type_id", "Item type"),
            optional_rule("description"),
        ),
    ),
    fields=(
        FieldDescriptor("code", "Item Category Code", placeholder="e.g., FABR, ACCS"),
        FieldDescriptor("title", "Item Category Name", placeholder="e.g., Fabrics, Accessories"),
        FieldDescriptor("item_type_id", "Item Type", control=CONTROL_CHOICE, placeholder="Select item type"),
        _DESCRIPTION_FIELD,
    ),
)

FINAL_DESTINATION_EDITOR = EntityEditorConfig(
    entity_kind=ENTITY_FINAL_DESTINATION,
    new_button_text="New Final Destination",
    create_title="Final Destination Information",
    create_description="Enter final destination details",
    edit_title="Edit Final Destination",
    edit_description="Update final destination details",
    schema=ValidationSchema(
        name=ENTITY_FINAL_DESTINATION,
        rules=(
            code_rule("Final destination code"),
            title_rule(),
            optional_rule("description"),
        ),
    ),
    fields=(
        FieldDescriptor("code", "Final Destination Code", placeholder="e.g., NYC, LON"),
        FieldDescriptor("title", "Destination Name", placeholder="e.g., New York City, London"),
        _DESCRIPTION_FIELD,
    ),
)

COUNTRY_EDITOR = EntityEditorConfig(
    entity_kind=ENTITY_COUNTRY,
    new_button_text="New Country",
    create_title="Country Information",
    create_description="Enter country details",
    edit_title="Edit Country",
    edit_description="Update country details",
    schema=ValidationSchema(
        name=ENTITY_COUNTRY,
        rules=(
            code_rule("Country code", max_length=3, letters_only=True),
            required_rule("country_code", "Code", max_length=10),
            title_rule("Country name"),
        ),
    ),
    fields=(
        FieldDescriptor("code", "Country Code", placeholder="US"),
        FieldDescriptor("country_code", "Code", placeholder="USA"),
        FieldDescriptor("title", "Country Name", placeholder="United States"),
    ),
)

CITY_EDITOR = EntityEditorConfig(
    entity_kind=ENTITY_CITY,
    new_button_text="New City",
    create_title="City Information",
    create_description="Enter city details",
    edit_title="Edit City",
    edit_description="Update city details",
    schema=ValidationSchema(
        name=ENTITY_CITY,
        rules=(
            code_rule("City code", max_length=3, letters_only=True),
            title_rule(),
            required_rule("country", "Country"),
        ),
    ),
    fields=(
        FieldDescriptor("code", "Code", placeholder="ISB"),
        FieldDescriptor("title", "Title", placeholder="Islamabad"),
        FieldDescriptor("country", "Country", control=CONTROL_CHOICE, placeholder="Select country"),
    ),
)

SHIPPING_LINE_EDITOR = EntityEditorConfig(
    entity_kind=ENTITY_SHIPPING_LINE,
    new_button_text="New Shipping Line",
    create_title="Shipping Line Information",
    create_description="Enter Shipping Line details",
    edit_title="Edit Shipping Line",
    edit_description="Update Shipping Line details",
    schema=ValidationSchema(
        name=ENTITY_SHIPPING_LINE,
        rules=(
            code_rule("Shipping line code", max_length=3, letters_only=True),
            required_rule("shipping_line_code", "Code", max_length=10),
            title_rule("Shipping line name"),
        ),
    ),
    fields=(
        FieldDescriptor("code", "Shipping Line Code", placeholder="MSK"),
        FieldDescriptor("shipping_line_code", "Code", placeholder="0001"),
        FieldDescriptor("title", "Shipping Line Name", placeholder="MAERSK"),
    ),
)

CONSIGNEE_EDITOR = EntityEditorConfig(
    entity_kind=ENTITY_CONSIGNEE,
    new_button_text="New Consignee",
    create_title="Consignee Information",
    create_description="Enter consignee details",
    edit_title="Edit Consignee",
    edit_description="Update consignee details",
    schema=ValidationSchema(
        name=ENTITY_CONSIGNEE,
        rules=(
            required_rule("code", "Consignee code", max_length=10),
            title_rule("Consignee name"),
        ),
    ),
    fields=(
        FieldDescriptor("code", "Consignee Code", placeholder="0001"),
        FieldDescriptor("title", "Consignee Name", placeholder="Consignee Name"),
    ),
)

_VENDOR_CURRENCIES: tuple[tuple[str, str], ...] = (
    ("USD - US Dollar", "USD"),
    ("PKR - Pakistani Rupee", "PKR"),
    ("ZMW - Zambian Kwacha", "ZMW"),
    ("MZN - Mozambican Metical", "MZN"),
    ("INR - Indian Rupee", "INR"),
)
_CUSTOMER_CURRENCIES: tuple[tuple[str, str], ...] = (
    ("USD - US Dollar", "USD"),
    ("EUR - Euro", "EUR"),
    ("GBP - British Pound", "GBP"),
    ("JPY - Japanese Yen", "JPY"),
    ("CAD - Canadian Dollar", "CAD"),
    ("AUD - Australian Dollar", "AUD"),
    ("CHF - Swiss Franc", "CHF"),
    ("CNY - Chinese Yuan", "CNY"),
    ("INR - Indian Rupee", "INR"),
    ("BDT - Bangladeshi Taka", "BDT"),
)
_VENDOR_TYPES: tuple[tuple[str, str], ...] = (("Trade", "Trade"), ("No Trade", "No Trade"))

_NOTES_FIELD = FieldDescriptor(
    name="notes",
    label="Notes",
    control=CONTROL_TEXTAREA,
    placeholder="Enter additional notes (optional)",
)


def _party_contact_rules() -> tuple[FieldRule, ...]:
    return (
        email_rule(),
        phone_rule(),
        required_rule("address", "Address"),
        required_rule("city", "City"),
        required_rule("country", "Country"),
    )


def _party_contact_fields(email_placeholder: str) -> tuple[FieldDescriptor, ...]:
    return (
        FieldDescriptor("email", "Email", placeholder=email_placeholder),
        FieldDescriptor("phone", "Phone", placeholder="e.g., +1234567890"),
        FieldDescriptor("address", "Address", control=CONTROL_TEXTAREA, placeholder="Enter full address"),
        FieldDescriptor("city", "City", placeholder="e.g., New York"),
        FieldDescriptor("country", "Country", placeholder="e.g., United States"),
    )


VENDOR_EDITOR = EntityEditorConfig(
    entity_kind=ENTITY_VENDOR,
    new_button_text="New Vendor",
    create_title="Vendor Information",
    create_description="Enter vendor details",
    edit_title="Edit Vendor",
    edit_description="Update vendor details",
    schema=ValidationSchema(
        name=ENTITY_VENDOR,
        rules=(
            required_rule("currency", "Currency"),
            code_rule("Vendor code"),
            title_rule("Vendor name"),
            required_rule("contact_person", "Contact person"),
            required_rule("vendor_type", "Vendor type"),
            *_party_contact_rules(),
            optional_rule("notes"),
        ),
    ),
    fields=(
        FieldDescriptor(
            "currency",
            "Currency",
            control=CONTROL_CHOICE,
            placeholder="Select currency...",
            options=_VENDOR_CURRENCIES,
        ),
        FieldDescriptor("code", "Vendor Code", placeholder="e.g., VEND001"),
        FieldDescriptor("title", "Vendor Name", placeholder="e.g., ABC Suppliers"),
        FieldDescriptor("contact_person", "Contact Person", placeholder="e.g., John Smith"),
        FieldDescriptor(
            "vendor_type",
            "Vendor Type",
            control=CONTROL_CHOICE,
            placeholder="Select category",
            options=_VENDOR_TYPES,
        ),
        *_party_contact_fields("e.g., john@supplier.com"),
        _NOTES_FIELD,
    ),
)

CUSTOMER_EDITOR = EntityEditorConfig(
    entity_kind=ENTITY_CUSTOMER,
    new_button_text="New Customer",
    create_title="Customer Information",
    create_description="Enter customer details",
    edit_title="Edit Customer",
    edit_description="Update customer details",
    schema=ValidationSchema(
        name=ENTITY_CUSTOMER,
        rules=(
            required_rule("currency", "Currency"),
            code_rule("Customer code"),
            title_rule("Customer name"),
            required_rule("contact_person", "Contact person"),
            optional_rule("credit_limit"),
            *_party_contact_rules(),
            optional_rule("tax_id"),
            optional_rule("notes"),
        ),
        cross_rules=(
            CrossFieldRule(
                field_name="credit_limit",
                message="Credit limit must be a valid number",
                check=lambda values: is_blank_or_number(values.get("credit_limit")),
            ),
        ),
    ),
    fields=(
        FieldDescriptor(
            "currency",
            "Currency",
            control=CONTROL_CHOICE,
            placeholder="Select currency...",
            options=_CUSTOMER_CURRENCIES,
        ),
        FieldDescriptor("code", "Customer Code", placeholder="e.g., CUST001"),
        FieldDescriptor("title", "Customer Name", placeholder="e.g., ABC Corporation"),
        FieldDescriptor("contact_person", "Contact Person", placeholder="e.g., John Smith"),
        FieldDescriptor("credit_limit", "Credit Limit", placeholder="e.g., 50000"),
        *_party_contact_fields("e.g., john@company.com"),
        FieldDescriptor("tax_id", "Tax ID", placeholder="Tax identification number (optional)"),
        _NOTES_FIELD,
    ),
)


ENTITY_EDITOR_CONFIGS: dict[str, EntityEditorConfig] = {
    config.entity_kind: config
    for config in (
        ITEM_TYPE_EDITOR,
        UOM_EDITOR,
        PORT_OF_DISCHARGE_EDITOR,
        ITEM_CATEGORY_EDITOR,
        FINAL_DESTINATION_EDITOR,
        COUNTRY_EDITOR,
        CITY_EDITOR,
        SHIPPING_LINE_EDITOR,
        CONSIGNEE_EDITOR,
        VENDOR_EDITOR,
        CUSTOMER_EDITOR,
    )
}


def editor_config(entity_kind: str) -> EntityEditorConfig:
    return ENTITY_EDITOR_CONFIGS[normalize_entity_kind(entity_kind)]
