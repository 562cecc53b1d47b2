from screen_recorder.application.services.artifact_finalizer import ArtifactFinalizer
from screen_recorder.application.services.policy_gate import PolicyGate

__all__ = ["ArtifactFinalizer", "PolicyGate"]
