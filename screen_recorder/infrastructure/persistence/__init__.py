from screen_recorder.infrastructure.persistence.local_artifact_store import LocalArtifactStore
from screen_recorder.infrastructure.persistence.settings_store import SettingsStore, get_default_home
from screen_recorder.infrastructure.persistence.viewer_page import write_viewer_page

__all__ = ["LocalArtifactStore", "SettingsStore", "get_default_home", "write_viewer_page"]
