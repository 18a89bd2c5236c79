from scmasterdata.ui.widgets.entity_editor_panel import EntityEditorPanel
from scmasterdata.ui.widgets.logo_upload_box import LogoUploadBox

__all__ = [
    "EntityEditorPanel",
    "LogoUploadBox",
]
