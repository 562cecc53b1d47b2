from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path


class ArtifactStorePort(ABC):
    """Port for the build's permanent artifact storage."""

    @property
    @abstractmethod
    def root(self) -> Path:
        """Directory holding the archived artifacts of this build."""

    @abstractmethod
    async def archive(self, workspace: Path, artifacts: Mapping[str, str]) -> None:
        """Archive workspace files, mapping logical name to workspace-relative path."""

    @abstractmethod
    def archived_length(self, logical_name: str) -> int:
        """Byte length of an archived artifact, 0 when absent."""

    @abstractmethod
    def url_for(self, logical_name: str) -> str:
        """Link target for an archived artifact."""
