from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QFileDialog, QFrame, QLabel, QPushButton, QVBoxLayout, QWidget

from scmasterdata.app.upload_validator import (
    CandidateFile,
    PreviewHandle,
    UploadDecision,
    UploadValidator,
)


_IMAGE_FILE_FILTER = "Images (*.png *.jpg *.jpeg *.gif *.bmp *.webp *.svg);;All Files (*)"


class LogoUploadBox(QFrame):
    """Click-to-upload logo picker with inline preview and rejection message."""

    selection_changed = Signal()

    def __init__(
        self,
        *,
        validator: UploadValidator | None = None,
        parent: QWidget | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__(parent)
        self._logger = logger or logging.getLogger("scmasterdata.ui.upload")
        self._validator = validator if validator is not None else UploadValidator(logger=self._logger)
        self.setObjectName("LogoUploadBox")
        # Deleting the widget releases the final preview handle.
        validator_ref = self._validator
        self.destroyed.connect(lambda *_args: validator_ref.close())

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        pick_button = QPushButton("Click to upload logo\nImage, max 2MB", self)
        pick_button.setObjectName("LogoUploadDropArea")
        pick_button.setCursor(Qt.CursorShape.PointingHandCursor)
        pick_button.setMinimumHeight(140)
        pick_button.setToolTip("Upload company logo")
        pick_button.clicked.connect(self.choose_file)
        layout.addWidget(pick_button)
        self._pick_button = pick_button

        preview_label = QLabel(self)
        preview_label.setObjectName("LogoPreview")
        preview_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        preview_label.setVisible(False)
        layout.addWidget(preview_label)
        self._preview_label = preview_label

        error_label = QLabel(self)
        error_label.setObjectName("FieldErrorLabel")
        error_label.setWordWrap(True)
        error_label.setVisible(False)
        layout.addWidget(error_label)
        self._error_label = error_label

    @property
    def validator(self) -> UploadValidator:
        return self._validator

    @property
    def selected_file(self) -> CandidateFile | None:
        return self._validator.selected_file

    def error_text(self) -> str:
        return self._error_label.text() if not self._error_label.isHidden() else ""

    def choose_file(self, *_args: object) -> None:
        path, _selected_filter = QFileDialog.getOpenFileName(
            self,
            "Upload Logo",
            "",
            _IMAGE_FILE_FILTER,
        )
        if not path:
            self.select_file(None)
            return
        self.select_path(path)

    def select_path(self, path: Path | str) -> UploadDecision:
        try:
            return self.select_file(CandidateFile.from_path(path))
        except OSError as exc:
            self._logger.warning("Could not read logo file %s: %s", path, exc)
            self._show_error(f"Could not read file: {Path(path).name}")
            return UploadDecision(accepted=False, error=self._error_label.text())

    def select_file(self, candidate: CandidateFile | None) -> UploadDecision:
        decision = self._validator.select(candidate)
        self._refresh()
        if decision.accepted:
            self.selection_changed.emit()
        return decision

    def clear(self) -> None:
        self._validator.clear()
        self._refresh()
        self.selection_changed.emit()

    def dispose(self) -> None:
        self._validator.close()
        self._preview_label.clear()

    def _show_error(self, message: str) -> None:
        self._error_label.setText(message)
        self._error_label.setVisible(bool(message))

    def _refresh(self) -> None:
        self._show_error(self._validator.error)
        handle = self._validator.preview_handle
        if handle is None:
            self._preview_label.clear()
            self._preview_label.setVisible(False)
            self._pick_button.setText("Click to upload logo\nImage, max 2MB")
            return
        self._render_preview(handle)
        self._pick_button.setText("Click to change the image")

    def _render_preview(self, handle: PreviewHandle) -> None:
        pixmap = QPixmap()
        if pixmap.loadFromData(handle.data):
            self._preview_label.setPixmap(
                pixmap.scaled(
                    240,
                    120,
                    Qt.AspectRatioMode.KeepAspectRatio,
                    Qt.TransformationMode.SmoothTransformation,
                )
            )
        else:
            selected = self._validator.selected_file
            self._preview_label.setText(selected.name if selected is not None else "Preview unavailable")
        self._preview_label.setVisible(True)
