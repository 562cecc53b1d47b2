from pathlib import Path

from pydantic import BaseModel, Field


class BuildContext(BaseModel, frozen=True):
    """The wrapped build step as seen by the recorder."""

    job_name: str
    build_number: int = Field(ge=0)
    workspace: Path
    home: Path
    build_url: str = ""
    inherited_env: dict[str, str] = {}

    def environment(self) -> dict[str, str]:
        """Macro environment: build variables layered over the inherited env."""
        env = dict(self.inherited_env)
        env.update(
            {
                "WORKSPACE": str(self.workspace),
                "JOB_NAME": self.job_name,
                "BUILD_NUMBER": str(self.build_number),
                "JENKINS_HOME": str(self.home),
            }
        )
        if self.build_url:
            env["BUILD_URL"] = self.build_url
        return env

    @property
    def build_dir(self) -> Path:
        return self.home / "jobs" / self.job_name / "builds" / str(self.build_number)

    @property
    def archive_dir(self) -> Path:
        return self.build_dir / "archive"
