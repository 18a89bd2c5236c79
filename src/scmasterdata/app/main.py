from __future__ import annotations

import logging
import sys
from typing import Sequence

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QHBoxLayout,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPushButton,
    QStackedLayout,
    QVBoxLayout,
    QWidget,
)

from scmasterdata.app.entity_models import (
    ENTITY_CITY,
    ENTITY_COUNTRY,
    ENTITY_ITEM_CATEGORY,
    ENTITY_ITEM_TYPE,
    ENTITY_KINDS,
    EntityRecord,
)
from scmasterdata.app.entity_schemas import editor_config
from scmasterdata.app.master_data_store import MasterDataStore
from scmasterdata.app.settings_store import (
    load_dark_mode,
    load_drawer_width,
    load_last_entity_kind,
    load_log_level,
    save_dark_mode,
    save_last_entity_kind,
)
from scmasterdata.ui.company_profile_page import CompanyProfilePage
from scmasterdata.ui.widgets.entity_editor_panel import EntityEditorPanel


APP_VERSION = "0.1.0"
_COMPANY_PROFILE_KEY = "company_profile"
_LOGGER = logging.getLogger("scmasterdata.app")

_BASE_STYLESHEET = """
QLabel#FieldErrorLabel { color: #dc2626; font-size: 11px; }
QLineEdit[invalid="true"], QPlainTextEdit[invalid="true"], QComboBox[invalid="true"] {
    border: 1px solid #ef4444;
}
QLabel#AdminDirtyBubble { border-radius: 8px; padding: 2px 8px; font-size: 11px; }
QLabel#AdminDirtyBubble[dirtyState="dirty"] { background: #fef3c7; color: #92400e; }
QLabel#AdminDirtyBubble[dirtyState="clean"] { background: #dcfce7; color: #166534; }
QLabel#AdminDirtyBubble[dirtyState="empty"] { background: #e5e7eb; color: #374151; }
QPushButton#PermitFormPrimaryButton, QPushButton#EntityEditorTriggerButton {
    background: #0077C5; color: white; padding: 4px 12px;
}
QFrame#EntityEditorPanel { border-left: 1px solid #e5e7eb; }
"""
_DARK_OVERRIDES = """
QWidget { background: #1f2933; color: #e5e7eb; }
QFrame#EntityEditorPanel { border-left: 1px solid #374151; }
"""


def apply_app_theme(app: QApplication, *, mode: str) -> None:
    normalized = mode if mode in ("light", "dark") else "light"
    app.setProperty("scmasterdata.theme_mode", normalized)
    stylesheet = _BASE_STYLESHEET
    if normalized == "dark":
        stylesheet += _DARK_OVERRIDES
    app.setStyleSheet(stylesheet)


class EntityListView(QWidget):
    """Host for one entity kind: owns the list, the open flag and the edited record."""

    records_changed = Signal()

    def __init__(
        self,
        entity_kind: str,
        store: MasterDataStore,
        *,
        drawer_width: int,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._drawer_open = False
        self._editing: EntityRecord | None = None
        config = editor_config(entity_kind)

        self._panel = EntityEditorPanel(
            config,
            on_save=self._handle_save,
            on_open_change=self._handle_open_change,
            drawer_width=drawer_width,
            parent=self,
        )
        self._panel.create_requested.connect(self._clear_editing)

        root = QHBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        list_host = QWidget(self)
        list_layout = QVBoxLayout(list_host)
        list_layout.setContentsMargins(16, 16, 16, 16)
        list_layout.setSpacing(8)

        toolbar = QHBoxLayout()
        toolbar.setSpacing(8)
        toolbar.addWidget(self._panel.trigger_button)
        edit_button = QPushButton("Edit", list_host)
        edit_button.clicked.connect(self._edit_selected)
        toolbar.addWidget(edit_button)
        delete_button = QPushButton("Delete", list_host)
        delete_button.clicked.connect(self.delete_selected)
        toolbar.addWidget(delete_button)
        toolbar.addStretch(1)
        list_layout.addLayout(toolbar)

        records_list = QListWidget(list_host)
        records_list.setObjectName("EntityRecordList")
        records_list.itemDoubleClicked.connect(lambda _item: self._edit_selected())
        list_layout.addWidget(records_list, 1)
        self._records_list = records_list

        root.addWidget(list_host, 1)
        root.addWidget(self._panel, 0)

    @property
    def panel(self) -> EntityEditorPanel:
        return self._panel

    @property
    def store(self) -> MasterDataStore:
        return self._store

    def refresh(self) -> None:
        self._records_list.clear()
        for record in self._store.records:
            item = QListWidgetItem(f"{record.code}  {record.title}")
            item.setData(Qt.ItemDataRole.UserRole, record.record_id)
            self._records_list.addItem(item)

    def open_editor(self, record: EntityRecord | None) -> None:
        self._editing = record
        self._drawer_open = True
        self._panel.set_state(True, record)

    def select_record(self, record_id: str) -> bool:
        for row in range(self._records_list.count()):
            item = self._records_list.item(row)
            if str(item.data(Qt.ItemDataRole.UserRole) or "") == str(record_id):
                self._records_list.setCurrentRow(row)
                return True
        return False

    def delete_selected(self, *_args: object) -> bool:
        record = self._selected_record()
        if record is None:
            return False
        if not self._confirm_dialog(
            "Delete Record",
            f"Are you sure you want to delete {record.code} - {record.title}?",
        ):
            return False
        self._store.delete(record.record_id)
        if self._editing is not None and self._editing.record_id == record.record_id:
            self._handle_open_change(False)
        self.refresh()
        self.records_changed.emit()
        return True

    def _confirm_dialog(self, title: str, message: str) -> bool:
        answer = QMessageBox.question(
            self,
            title,
            message,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        return answer == QMessageBox.StandardButton.Yes

    def _selected_record(self) -> EntityRecord | None:
        item = self._records_list.currentItem()
        if item is None:
            return None
        return self._store.record_by_id(str(item.data(Qt.ItemDataRole.UserRole) or ""))

    def _edit_selected(self) -> None:
        record = self._selected_record()
        if record is not None:
            self.open_editor(record)

    def _clear_editing(self) -> None:
        self._editing = None

    def _handle_open_change(self, open_: bool) -> None:
        self._drawer_open = bool(open_)
        if not self._drawer_open:
            self._editing = None
        self._panel.set_state(self._drawer_open, self._editing)

    def _handle_save(self, values: dict[str, str]) -> None:
        self._store.save(values, editing=self._editing)
        self.refresh()
        self.records_changed.emit()


class MasterDataWindow(QWidget):
    def __init__(self, *, initial_kind: str = ENTITY_ITEM_TYPE, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Master Data")
        self.resize(1080, 680)
        drawer_width = load_drawer_width()

        self._stores = {kind: MasterDataStore(kind) for kind in ENTITY_KINDS}
        self._views: dict[str, EntityListView] = {}

        root = QHBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        nav_host = QWidget(self)
        nav_host.setFixedWidth(200)
        nav_layout = QVBoxLayout(nav_host)
        nav_layout.setContentsMargins(0, 0, 0, 8)
        nav_layout.setSpacing(8)
        nav = QListWidget(nav_host)
        nav.setObjectName("MasterDataNav")
        nav_layout.addWidget(nav, 1)

        self._dark_mode_enabled = load_dark_mode(default=False)
        dark_mode_toggle = QCheckBox("Dark mode", nav_host)
        dark_mode_toggle.setObjectName("PluginGeneralToggle")
        dark_mode_toggle.setChecked(self._dark_mode_enabled)
        dark_mode_toggle.toggled.connect(self._on_dark_mode_changed)
        nav_layout.addWidget(dark_mode_toggle, 0)
        self._dark_mode_toggle = dark_mode_toggle
        root.addWidget(nav_host, 0)

        stack_host = QWidget(self)
        stack = QStackedLayout(stack_host)
        root.addWidget(stack_host, 1)
        self._stack = stack
        self._nav = nav

        for kind in ENTITY_KINDS:
            view = EntityListView(kind, self._stores[kind], drawer_width=drawer_width, parent=stack_host)
            self._views[kind] = view
            stack.addWidget(view)
            item = QListWidgetItem(editor_config(kind).new_button_text.removeprefix("New "))
            item.setData(Qt.ItemDataRole.UserRole, kind)
            nav.addItem(item)

        self._profile_page = CompanyProfilePage(
            on_save=lambda profile: _LOGGER.info(
                "Saved company profile for %s", profile.get("company_name", "")
            ),
            parent=stack_host,
        )
        stack.addWidget(self._profile_page)
        profile_item = QListWidgetItem("Company Profile")
        profile_item.setData(Qt.ItemDataRole.UserRole, _COMPANY_PROFILE_KEY)
        nav.addItem(profile_item)

        self._wire_choice_sources()
        nav.currentRowChanged.connect(self._on_nav_changed)
        nav.setCurrentRow(list(ENTITY_KINDS).index(initial_kind) if initial_kind in ENTITY_KINDS else 0)

    def view(self, entity_kind: str) -> EntityListView:
        return self._views[entity_kind]

    @property
    def dark_mode_toggle(self) -> QCheckBox:
        return self._dark_mode_toggle

    def closeEvent(self, event) -> None:
        self._profile_page.dispose()
        super().closeEvent(event)

    def _wire_choice_sources(self) -> None:
        item_type_view = self._views[ENTITY_ITEM_TYPE]
        category_panel = self._views[ENTITY_ITEM_CATEGORY].panel
        country_view = self._views[ENTITY_COUNTRY]
        city_panel = self._views[ENTITY_CITY].panel

        def _sync_item_types(*_args: object) -> None:
            category_panel.set_choice_options("item_type_id", item_type_view.store.choice_options())

        def _sync_countries(*_args: object) -> None:
            city_panel.set_choice_options(
                "country",
                [(record.title, record.title) for record in country_view.store.records],
            )

        item_type_view.records_changed.connect(_sync_item_types)
        country_view.records_changed.connect(_sync_countries)
        _sync_item_types()
        _sync_countries()

    def _on_nav_changed(self, row: int) -> None:
        item = self._nav.item(row)
        if item is None:
            return
        key = str(item.data(Qt.ItemDataRole.UserRole) or "")
        if key == _COMPANY_PROFILE_KEY:
            self._stack.setCurrentWidget(self._profile_page)
            return
        view = self._views.get(key)
        if view is None:
            return
        self._stack.setCurrentWidget(view)
        view.refresh()
        save_last_entity_kind(key)

    def _on_dark_mode_changed(self, enabled: bool) -> None:
        self._dark_mode_enabled = bool(enabled)
        save_dark_mode(self._dark_mode_enabled)
        mode = "dark" if self._dark_mode_enabled else "light"
        app = QApplication.instance()
        if app is not None:
            apply_app_theme(app, mode=mode)


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, level or load_log_level(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run(argv: Sequence[str] | None = None) -> int:
    configure_logging()
    app = QApplication.instance()
    if app is None:
        app = QApplication(list(argv or sys.argv))

    app.setApplicationName("scmasterdata")
    app.setApplicationVersion(APP_VERSION)

    theme_mode = "dark" if load_dark_mode(default=False) else "light"
    apply_app_theme(app, mode=theme_mode)
    _LOGGER.info("Starting master data editor %s (%s theme)", APP_VERSION, theme_mode)

    window = MasterDataWindow(initial_kind=load_last_entity_kind())
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(run())
