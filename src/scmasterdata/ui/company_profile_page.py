from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QFormLayout,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from scmasterdata.app.form_controller import FormController
from scmasterdata.app.validation_schema import ValidationSchema, required_rule
from scmasterdata.ui.widgets.form_styling import set_invalid_state
from scmasterdata.ui.widgets.logo_upload_box import LogoUploadBox


COMPANY_PROFILE_SCHEMA = ValidationSchema(
    name="company_profile",
    rules=(
        required_rule("company_name", "Company name"),
        required_rule("company_address", "Company address"),
    ),
)


class CompanyProfilePage(QWidget):
    saved = Signal(dict)

    def __init__(
        self,
        *,
        on_save: Callable[[dict[str, Any]], None] | None = None,
        parent: QWidget | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(parent)
        self._on_save = on_save
        self._logger = logger or logging.getLogger("scmasterdata.ui.profile")
        self._controller = FormController(COMPANY_PROFILE_SCHEMA, logger=self._logger)
        self._loading = False
        self.setObjectName("CompanyProfilePage")

        root = QVBoxLayout(self)
        root.setContentsMargins(24, 24, 24, 24)
        root.setSpacing(16)

        card = QFrame(self)
        card.setObjectName("PermitFormCard")
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(16, 14, 16, 14)
        card_layout.setSpacing(10)

        title = QLabel("Company Information", card)
        title.setObjectName("PermitFormTitle")
        card_layout.addWidget(title)

        form = QFormLayout()
        form.setContentsMargins(0, 0, 0, 0)
        form.setRowWrapPolicy(QFormLayout.RowWrapPolicy.WrapAllRows)
        form.setVerticalSpacing(10)

        name_input = QLineEdit(card)
        name_input.setObjectName("PermitFormInput")
        name_input.setPlaceholderText("Enter company name")
        name_input.textChanged.connect(lambda text: self._on_field_edited("company_name", text))
        name_error = self._error_label(card)
        form.addRow(QLabel("Company Name", card), self._stack(card, name_input, name_error))
        self._name_input = name_input

        address_input = QPlainTextEdit(card)
        address_input.setObjectName("PermitFormTextArea")
        address_input.setPlaceholderText("Enter company address")
        address_input.setFixedHeight(80)
        address_input.textChanged.connect(
            lambda: self._on_field_edited("company_address", address_input.toPlainText())
        )
        address_error = self._error_label(card)
        form.addRow(QLabel("Company Address", card), self._stack(card, address_input, address_error))
        self._address_input = address_input

        logo_box = LogoUploadBox(parent=card, logger=self._logger)
        form.addRow(QLabel("Upload Logo", card), logo_box)
        self._logo_box = logo_box
        card_layout.addLayout(form)

        self._field_widgets: dict[str, QWidget] = {
            "company_name": name_input,
            "company_address": address_input,
        }
        self._error_labels: dict[str, QLabel] = {
            "company_name": name_error,
            "company_address": address_error,
        }

        footer = QHBoxLayout()
        footer.setContentsMargins(0, 0, 0, 0)
        footer.setSpacing(8)
        save_button = QPushButton("Save", card)
        save_button.setObjectName("PermitFormPrimaryButton")
        save_button.clicked.connect(self.submit)
        footer.addWidget(save_button, 1)
        clear_button = QPushButton("Clear", card)
        clear_button.setObjectName("PermitFormSecondaryButton")
        clear_button.clicked.connect(self.clear)
        footer.addWidget(clear_button, 1)
        card_layout.addLayout(footer)
        self._save_button = save_button
        self._clear_button = clear_button

        root.addWidget(card)
        root.addStretch(1)

    @property
    def logo_box(self) -> LogoUploadBox:
        return self._logo_box

    @property
    def controller(self) -> FormController:
        return self._controller

    def submit(self) -> bool:
        result = self._controller.submit()
        self._refresh_errors()
        if not result.ok:
            return False
        profile: dict[str, Any] = dict(result.values)
        profile["logo"] = self._logo_box.selected_file
        if self._on_save is not None:
            self._on_save(profile)
        self.saved.emit(profile)
        return True

    def clear(self) -> None:
        self._loading = True
        try:
            self._name_input.clear()
            self._address_input.clear()
        finally:
            self._loading = False
        self._controller.reset()
        self._refresh_errors()
        self._logo_box.clear()

    def dispose(self) -> None:
        self._logo_box.dispose()

    def closeEvent(self, event) -> None:
        self.dispose()
        super().closeEvent(event)

    def _on_field_edited(self, field_name: str, value: str) -> None:
        if self._loading:
            return
        message = self._controller.set_field(field_name, value)
        set_invalid_state(self._field_widgets[field_name], self._error_labels[field_name], message=message)

    def _refresh_errors(self) -> None:
        for field_name, widget in self._field_widgets.items():
            set_invalid_state(
                widget,
                self._error_labels[field_name],
                message=self._controller.error(field_name),
            )

    @staticmethod
    def _error_label(parent: QWidget) -> QLabel:
        label = QLabel(parent)
        label.setObjectName("FieldErrorLabel")
        label.setWordWrap(True)
        label.setVisible(False)
        return label

    @staticmethod
    def _stack(parent: QWidget, field_widget: QWidget, error_label: QLabel) -> QWidget:
        cell = QWidget(parent)
        layout = QVBoxLayout(cell)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)
        layout.addWidget(field_widget)
        layout.addWidget(error_label)
        return cell
