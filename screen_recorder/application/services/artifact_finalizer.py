import os
from datetime import datetime
from pathlib import Path

from loguru import logger

from screen_recorder.domain.entities.teardown_outcome import ArchivedArtifact, ArchiveRecord
from screen_recorder.domain.ports.artifact_store_port import ArtifactStorePort
from screen_recorder.domain.ports.build_logger_port import BuildLoggerPort
from screen_recorder.domain.value_objects.capture_spec import CaptureSpec
from screen_recorder.infrastructure.persistence.viewer_page import viewer_name_for, write_viewer_page

LABEL_TIME_FORMAT = "%Y-%m-%d T %H:%M:%S"


def format_video_label(started_at: datetime, stopped_at: datetime) -> str:
    start = started_at.astimezone().strftime(LABEL_TIME_FORMAT)
    end = stopped_at.astimezone().strftime(LABEL_TIME_FORMAT)
    return f"Video from {start} to {end}"


class ArtifactFinalizer:
    """Archives the recorded video, verifies it, and publishes a viewer page."""

    def __init__(self, store: ArtifactStorePort, build_logger: BuildLoggerPort) -> None:
        self.store = store
        self.build_logger = build_logger

    async def finalize(
        self,
        spec: CaptureSpec,
        workspace: Path,
        started_at: datetime,
        stopped_at: datetime,
    ) -> ArchivedArtifact:
        """Archive the stopped recording.

        Archiving errors propagate; viewer and link errors are logged only,
        since the video is already safe in the archive by then.
        """
        name = spec.artifact_name
        workspace_file = spec.output_file(workspace)

        await self.store.archive(workspace, {name: os.path.relpath(workspace_file, workspace)})
        record = ArchiveRecord(
            logical_name=name,
            archived_size=self.store.archived_length(name),
            workspace_size=workspace_file.stat().st_size,
        )
        self.release_workspace_copy(record, workspace_file)

        viewer_path: Path | None = None
        try:
            viewer_path = await write_viewer_page(self.store.root, name)
            self.build_logger.hyperlink(
                self.store.url_for(viewer_name_for(name)),
                format_video_label(started_at, stopped_at),
            )
        except OSError as e:
            logger.exception("Failed to write viewer page for {}", name)
            self.build_logger.error(f"ScreenRecorder: could not write viewer page: {e}")

        return ArchivedArtifact(
            record=record,
            viewer_path=str(viewer_path) if viewer_path else None,
            started_at=started_at,
            stopped_at=stopped_at,
        )

    def release_workspace_copy(self, record: ArchiveRecord, workspace_file: Path) -> bool:
        """Delete the workspace copy only when the archive holds the same number of bytes."""
        if not record.verified:
            self.build_logger.warning(
                f"ScreenRecorder: archived {record.logical_name} has {record.archived_size} bytes, "
                f"workspace copy has {record.workspace_size}; keeping {workspace_file}"
            )
            return False
        if not workspace_file.exists():
            return False
        workspace_file.unlink()
        logger.info("Removed workspace copy {}", workspace_file)
        return True
