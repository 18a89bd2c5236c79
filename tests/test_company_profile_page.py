from pathlib import Path

import pytest
from PySide6.QtWidgets import QWidget

from scmasterdata.app.upload_validator import ERROR_NOT_IMAGE, ERROR_TOO_LARGE, CandidateFile
from scmasterdata.ui.company_profile_page import CompanyProfilePage
from scmasterdata.ui.widgets.logo_upload_box import LogoUploadBox


@pytest.fixture
def png_path(tmp_path):
    path = tmp_path / "logo.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 64)
    return path


class TestLogoUploadBox:
    def test_select_valid_path(self, qtbot, png_path):
        box = LogoUploadBox()
        qtbot.addWidget(box)
        with qtbot.waitSignal(box.selection_changed):
            decision = box.select_path(png_path)
        assert decision.accepted is True
        assert box.selected_file.name == "logo.png"
        assert box.error_text() == ""
        assert box.validator.registry.live_count == 1

    def test_rejected_file_keeps_previous_preview(self, qtbot, png_path, tmp_path):
        box = LogoUploadBox()
        qtbot.addWidget(box)
        box.select_path(png_path)
        handle = box.validator.preview_handle

        notes = tmp_path / "notes.txt"
        notes.write_text("hello", encoding="utf-8")
        decision = box.select_path(notes)

        assert decision.error == ERROR_NOT_IMAGE
        assert box.error_text() == ERROR_NOT_IMAGE
        assert box.validator.preview_handle is handle
        assert box.selected_file.name == "logo.png"

    def test_oversized_image_is_rejected(self, qtbot):
        box = LogoUploadBox()
        qtbot.addWidget(box)
        decision = box.select_file(CandidateFile("big.jpg", "image/jpeg", 3 * 1024 * 1024, b""))
        assert decision.error == ERROR_TOO_LARGE
        assert box.error_text() == ERROR_TOO_LARGE
        assert box.selected_file is None

    def test_missing_file_reports_read_error(self, qtbot, tmp_path):
        box = LogoUploadBox()
        qtbot.addWidget(box)
        decision = box.select_path(tmp_path / "gone.png")
        assert decision.accepted is False
        assert box.error_text() == "Could not read file: gone.png"

    def test_dispose_releases_preview(self, qtbot, png_path):
        box = LogoUploadBox()
        qtbot.addWidget(box)
        box.select_path(png_path)
        box.dispose()
        assert box.validator.registry.live_count == 0
        assert box.selected_file is None

    def test_deleting_the_widget_releases_preview(self, qtbot, png_path):
        host = QWidget()
        qtbot.addWidget(host)
        box = LogoUploadBox(parent=host)
        box.select_path(png_path)
        registry = box.validator.registry
        assert registry.live_count == 1

        with qtbot.waitSignal(box.destroyed, timeout=2000):
            box.deleteLater()
        assert registry.live_count == 0

    def test_large_video_is_rejected_without_reading_it(self, qtbot, tmp_path, monkeypatch):
        movie = tmp_path / "movie.mp4"
        with movie.open("wb") as handle:
            handle.truncate(50 * 1024 * 1024)
        reads = []
        monkeypatch.setattr(Path, "read_bytes", lambda path: reads.append(path) or b"")
        box = LogoUploadBox()
        qtbot.addWidget(box)

        decision = box.select_path(movie)

        assert decision.error == ERROR_NOT_IMAGE
        assert box.error_text() == ERROR_NOT_IMAGE
        assert reads == []


class TestCompanyProfilePage:
    def test_save_requires_name_and_address(self, qtbot):
        saved = []
        page = CompanyProfilePage(on_save=saved.append)
        qtbot.addWidget(page)
        assert page.submit() is False
        assert saved == []
        assert page.controller.errors == {
            "company_name": "Company name is required",
            "company_address": "Company address is required",
        }

    def test_save_emits_profile_with_logo(self, qtbot, png_path):
        saved = []
        page = CompanyProfilePage(on_save=saved.append)
        qtbot.addWidget(page)
        page._name_input.setText("Acme Trading")
        page._address_input.setPlainText("1 Harbour Road")
        page.logo_box.select_path(png_path)

        assert page.submit() is True
        assert saved[0]["company_name"] == "Acme Trading"
        assert saved[0]["company_address"] == "1 Harbour Road"
        assert saved[0]["logo"].name == "logo.png"

    def test_clear_resets_fields_and_logo(self, qtbot, png_path):
        page = CompanyProfilePage()
        qtbot.addWidget(page)
        page._name_input.setText("Acme Trading")
        page._address_input.setPlainText("1 Harbour Road")
        page.logo_box.select_path(png_path)

        page.clear()

        assert page._name_input.text() == ""
        assert page._address_input.toPlainText() == ""
        assert page.controller.values == {"company_name": "", "company_address": ""}
        assert page.controller.errors == {}
        assert page.logo_box.selected_file is None
        assert page.logo_box.validator.registry.live_count == 0
