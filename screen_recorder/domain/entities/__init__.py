from screen_recorder.domain.entities.build_context import BuildContext
from screen_recorder.domain.entities.teardown_outcome import (
    ArchivedArtifact,
    ArchiveRecord,
    NeverStarted,
    NoArtifactProduced,
    TeardownOutcome,
)

__all__ = [
    "ArchiveRecord",
    "ArchivedArtifact",
    "BuildContext",
    "NeverStarted",
    "NoArtifactProduced",
    "TeardownOutcome",
]
