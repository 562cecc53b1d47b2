from screen_recorder.domain.ports.artifact_store_port import ArtifactStorePort
from screen_recorder.domain.ports.build_logger_port import BuildLoggerPort
from screen_recorder.domain.ports.content_policy_port import ContentPolicyPort

__all__ = [
    "ArtifactStorePort",
    "BuildLoggerPort",
    "ContentPolicyPort",
]
