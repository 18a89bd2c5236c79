import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    settings_file = tmp_path / "config" / "settings.json"
    monkeypatch.setenv("SCMASTERDATA_SETTINGS_PATH", str(settings_file))
    return settings_file
