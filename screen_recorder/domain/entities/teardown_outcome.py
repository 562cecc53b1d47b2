from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from screen_recorder.domain.value_objects.recorder_enums import OutcomeKind


class ArchiveRecord(BaseModel, frozen=True):
    """Archived size vs workspace size of one artifact.

    The workspace copy may only be deleted while verified holds.
    """

    logical_name: str
    archived_size: int
    workspace_size: int

    @property
    def verified(self) -> bool:
        return self.archived_size == self.workspace_size


class ArchivedArtifact(BaseModel, frozen=True):
    kind: Literal[OutcomeKind.ARCHIVED_ARTIFACT] = OutcomeKind.ARCHIVED_ARTIFACT
    record: ArchiveRecord
    viewer_path: str | None = None
    started_at: datetime
    stopped_at: datetime


class NoArtifactProduced(BaseModel, frozen=True):
    kind: Literal[OutcomeKind.NO_ARTIFACT_PRODUCED] = OutcomeKind.NO_ARTIFACT_PRODUCED
    diagnostics: str = ""


class NeverStarted(BaseModel, frozen=True):
    kind: Literal[OutcomeKind.NEVER_STARTED] = OutcomeKind.NEVER_STARTED
    diagnostics: str = ""


TeardownOutcome = Annotated[
    ArchivedArtifact | NoArtifactProduced | NeverStarted,
    Field(discriminator="kind"),
]
