from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QAbstractButton,
    QComboBox,
    QFormLayout,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from scmasterdata.app.entity_models import EntityRecord
from scmasterdata.app.entity_schemas import (
    CONTROL_CHOICE,
    CONTROL_TEXTAREA,
    EntityEditorConfig,
    FieldDescriptor,
)
from scmasterdata.app.form_controller import FormController
from scmasterdata.app.lifecycle_sync import LifecycleSynchronizer
from scmasterdata.app.settings_store import DEFAULT_DRAWER_WIDTH, normalize_drawer_width
from scmasterdata.ui.widgets.form_styling import set_dirty_bubble_state, set_invalid_state


SaveCallback = Callable[[dict[str, str]], None]
OpenChangeCallback = Callable[[bool], None]


class EntityEditorPanel(QFrame):
    """Right-anchored editor for one master-data entity kind.

    The host owns the open flag and the record being edited and pushes both in
    through ``set_state``. The panel reports back through ``on_open_change`` /
    ``open_changed`` and, after a valid submit, ``on_save`` / ``saved`` with the
    schema's field values only. The trigger emits ``create_requested`` before
    asking to open, so a host editing a record can drop it first.
    """

    saved = Signal(dict)
    open_changed = Signal(bool)
    create_requested = Signal()

    def __init__(
        self,
        config: EntityEditorConfig,
        *,
        on_save: SaveCallback | None = None,
        on_open_change: OpenChangeCallback | None = None,
        trigger_button: QAbstractButton | None = None,
        choice_options: Mapping[str, Sequence[tuple[str, str]]] | None = None,
        drawer_width: int = DEFAULT_DRAWER_WIDTH,
        parent: QWidget | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(parent)
        self._config = config
        self._on_save = on_save
        self._on_open_change = on_open_change
        self._logger = logger or logging.getLogger("scmasterdata.ui.editor")
        self._controller = FormController(config.schema, logger=self._logger)
        self._synchronizer = LifecycleSynchronizer(self._controller, logger=self._logger)
        self._form_loading = False
        self._inputs: dict[str, QWidget] = {}
        self._error_labels: dict[str, QLabel] = {}

        self.setObjectName("EntityEditorPanel")
        self.setProperty("entityKind", config.entity_kind)
        self.setFixedWidth(normalize_drawer_width(drawer_width))
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Expanding)

        if trigger_button is None:
            trigger_button = QPushButton(config.new_button_text)
            trigger_button.setObjectName("EntityEditorTriggerButton")
        trigger_button.clicked.connect(self._on_trigger_clicked)
        self._trigger_button = trigger_button

        self._build_layout()
        for field_name, options in (choice_options or {}).items():
            self.set_choice_options(field_name, options)
        self._apply_heading()
        self._sync_dirty_bubble()
        self.setVisible(False)

    @property
    def config(self) -> EntityEditorConfig:
        return self._config

    @property
    def controller(self) -> FormController:
        return self._controller

    @property
    def synchronizer(self) -> LifecycleSynchronizer:
        return self._synchronizer

    @property
    def trigger_button(self) -> QAbstractButton:
        return self._trigger_button

    @property
    def save_button(self) -> QPushButton:
        return self._save_button

    @property
    def cancel_button(self) -> QPushButton:
        return self._cancel_button

    @property
    def is_open(self) -> bool:
        return self._synchronizer.is_open

    @property
    def mode(self) -> str:
        if not self._synchronizer.is_open:
            return "closed"
        return "edit" if self._synchronizer.editing else "create"

    def input_widget(self, field_name: str) -> QWidget:
        return self._inputs[field_name]

    def error_text(self, field_name: str) -> str:
        label = self._error_labels[field_name]
        return label.text() if not label.isHidden() else ""

    def heading_text(self) -> tuple[str, str]:
        return self._title_label.text(), self._description_label.text()

    def set_state(self, open_: bool, record: EntityRecord | None = None) -> None:
        if self._synchronizer.update(open_, record):
            self._load_controller_values()
        self._apply_heading()
        self.setVisible(self._synchronizer.is_open)

    def set_choice_options(self, field_name: str, options: Sequence[tuple[str, str]]) -> None:
        combo = self._inputs.get(field_name)
        if not isinstance(combo, QComboBox):
            raise KeyError(f"'{field_name}' is not a choice field of {self._config.entity_kind}")
        descriptor = self._descriptor(field_name)
        selected = self._controller.value(field_name)
        combo.blockSignals(True)
        combo.clear()
        combo.addItem(descriptor.placeholder or "Select...", "")
        for label, value in options:
            combo.addItem(str(label), str(value))
        self._select_combo_value(combo, selected)
        combo.blockSignals(False)

    def submit(self) -> bool:
        result = self._controller.submit()
        self._refresh_all_errors()
        if not result.ok:
            return False
        if self._on_save is not None:
            try:
                self._on_save(dict(result.values))
            except Exception:
                self._logger.exception("Save callback failed for %s", self._config.entity_kind)
                raise
        self.saved.emit(dict(result.values))
        self._reset_form()
        self._notify_open_change(False)
        return True

    def cancel(self) -> None:
        self._reset_form()
        self._notify_open_change(False)

    def _build_layout(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        header = QFrame(self)
        header.setObjectName("EntityEditorHeader")
        header_layout = QVBoxLayout(header)
        header_layout.setContentsMargins(16, 12, 16, 12)
        header_layout.setSpacing(4)

        title_row = QHBoxLayout()
        title_row.setContentsMargins(0, 0, 0, 0)
        title_row.setSpacing(8)
        title = QLabel(header)
        title.setObjectName("EntityEditorTitle")
        title_row.addWidget(title, 0)
        title_row.addStretch(1)
        dirty_bubble = QLabel("Empty", header)
        dirty_bubble.setObjectName("AdminDirtyBubble")
        dirty_bubble.setProperty("dirtyState", "empty")
        title_row.addWidget(dirty_bubble, 0, Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        header_layout.addLayout(title_row)
        self._title_label = title
        self._dirty_bubble = dirty_bubble

        description = QLabel(header)
        description.setObjectName("EntityEditorDescription")
        description.setWordWrap(True)
        header_layout.addWidget(description)
        self._description_label = description
        root.addWidget(header, 0)

        body = QWidget(self)
        body.setObjectName("EntityEditorBody")
        form = QFormLayout(body)
        form.setContentsMargins(16, 12, 16, 12)
        form.setHorizontalSpacing(12)
        form.setVerticalSpacing(10)
        form.setRowWrapPolicy(QFormLayout.RowWrapPolicy.WrapAllRows)
        for descriptor in self._config.fields:
            self._add_field_row(form, body, descriptor)
        root.addWidget(body, 1)

        footer = QFrame(self)
        footer.setObjectName("EntityEditorFooter")
        footer_layout = QHBoxLayout(footer)
        footer_layout.setContentsMargins(16, 12, 16, 12)
        footer_layout.setSpacing(8)

        save_button = QPushButton("Save", footer)
        save_button.setObjectName("PermitFormPrimaryButton")
        save_button.clicked.connect(self.submit)
        footer_layout.addWidget(save_button, 1)
        self._save_button = save_button

        cancel_button = QPushButton("Cancel", footer)
        cancel_button.setObjectName("PermitFormSecondaryButton")
        cancel_button.clicked.connect(self.cancel)
        footer_layout.addWidget(cancel_button, 0)
        self._cancel_button = cancel_button
        root.addWidget(footer, 0)

    def _add_field_row(self, form: QFormLayout, parent: QWidget, descriptor: FieldDescriptor) -> None:
        label = QLabel(self._config.display_label(descriptor), parent)
        label.setObjectName("InlineFormFieldLabel")

        cell = QWidget(parent)
        cell_layout = QVBoxLayout(cell)
        cell_layout.setContentsMargins(0, 0, 0, 0)
        cell_layout.setSpacing(4)

        name = descriptor.name
        if descriptor.control == CONTROL_CHOICE:
            widget: QWidget = QComboBox(cell)
            widget.setObjectName("PermitFormCombo")
            widget.addItem(descriptor.placeholder or "Select...", "")
            for option_label, option_value in descriptor.options:
                widget.addItem(option_label, option_value)
            widget.currentIndexChanged.connect(
                lambda _index, combo=widget, field_name=name: self._on_field_edited(
                    field_name, combo.currentData() or ""
                )
            )
        elif descriptor.control == CONTROL_TEXTAREA:
            widget = QPlainTextEdit(cell)
            widget.setObjectName("PermitFormTextArea")
            widget.setPlaceholderText(descriptor.placeholder)
            widget.setFixedHeight(72)
            widget.textChanged.connect(
                lambda editor=widget, field_name=name: self._on_field_edited(
                    field_name, editor.toPlainText()
                )
            )
        else:
            widget = QLineEdit(cell)
            widget.setObjectName("PermitFormInput")
            widget.setPlaceholderText(descriptor.placeholder)
            widget.textChanged.connect(
                lambda text, field_name=name: self._on_field_edited(field_name, text)
            )
        cell_layout.addWidget(widget)

        error_label = QLabel(cell)
        error_label.setObjectName("FieldErrorLabel")
        error_label.setWordWrap(True)
        error_label.setVisible(False)
        cell_layout.addWidget(error_label)

        form.addRow(label, cell)
        self._inputs[name] = widget
        self._error_labels[name] = error_label

    def _descriptor(self, field_name: str) -> FieldDescriptor:
        for descriptor in self._config.fields:
            if descriptor.name == field_name:
                return descriptor
        raise KeyError(field_name)

    def _on_trigger_clicked(self, *_args: object) -> None:
        self.create_requested.emit()
        self._notify_open_change(True)

    def _on_field_edited(self, field_name: str, value: object) -> None:
        if self._form_loading:
            return
        message = self._controller.set_field(field_name, value)
        set_invalid_state(
            self._inputs[field_name],
            self._error_labels[field_name],
            message=message,
        )
        self._sync_dirty_bubble()

    def _notify_open_change(self, open_: bool) -> None:
        if self._on_open_change is not None:
            self._on_open_change(bool(open_))
        self.open_changed.emit(bool(open_))

    def _reset_form(self) -> None:
        self._controller.reset()
        self._load_controller_values()

    def _load_controller_values(self) -> None:
        self._form_loading = True
        try:
            for field_name, widget in self._inputs.items():
                value = self._controller.value(field_name)
                if isinstance(widget, QComboBox):
                    self._select_combo_value(widget, value)
                elif isinstance(widget, QPlainTextEdit):
                    widget.setPlainText(value)
                elif isinstance(widget, QLineEdit):
                    widget.setText(value)
        finally:
            self._form_loading = False
        self._refresh_all_errors()
        self._sync_dirty_bubble()

    def _select_combo_value(self, combo: QComboBox, value: str) -> None:
        index = combo.findData(value)
        if index < 0 and value:
            combo.addItem(value, value)
            index = combo.findData(value)
        combo.setCurrentIndex(index if index >= 0 else 0)

    def _refresh_all_errors(self) -> None:
        for field_name, widget in self._inputs.items():
            set_invalid_state(
                widget,
                self._error_labels[field_name],
                message=self._controller.error(field_name),
            )

    def _apply_heading(self) -> None:
        title, description = self._config.heading(editing=self._synchronizer.editing)
        self._title_label.setText(title)
        self._description_label.setText(description)
        self._sync_dirty_bubble()

    def _sync_dirty_bubble(self) -> None:
        set_dirty_bubble_state(
            self._dirty_bubble,
            state=self._controller.dirty_state(editing=self._synchronizer.editing),
        )
