from __future__ import annotations

from PySide6.QtWidgets import QLabel, QWidget


def repolish(widget: QWidget | None) -> None:
    if widget is None:
        return
    style = widget.style()
    if style is None:
        return
    style.unpolish(widget)
    style.polish(widget)
    widget.update()


def set_dirty_bubble_state(bubble: QLabel | None, *, state: str) -> None:
    if bubble is None:
        return
    normalized_state = str(state or "").strip().casefold()
    if normalized_state not in {"dirty", "clean", "empty"}:
        normalized_state = "clean"
    bubble_text = {
        "dirty": "Unsaved",
        "clean": "Saved",
        "empty": "Empty",
    }.get(normalized_state, "Saved")
    bubble.setText(bubble_text)
    bubble.setProperty("dirtyState", normalized_state)
    repolish(bubble)


def set_invalid_state(field_widget: QWidget | None, error_label: QLabel | None, *, message: str) -> None:
    text = str(message or "").strip()
    if field_widget is not None:
        field_widget.setProperty("invalid", "true" if text else "false")
        repolish(field_widget)
    if error_label is not None:
        error_label.setText(text)
        error_label.setVisible(bool(text))
