from enum import Enum


class SupervisorState(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    STOPPING_REQUESTED = "stopping_requested"
    STOPPED = "stopped"
    FAILED_TO_START = "failed_to_start"


class OutcomeKind(str, Enum):
    ARCHIVED_ARTIFACT = "archived_artifact"
    NO_ARTIFACT_PRODUCED = "no_artifact_produced"
    NEVER_STARTED = "never_started"
