from screen_recorder.infrastructure.security.content_policy import (
    DIRECTORY_CSP_PROPERTY,
    ProcessContentPolicy,
)

__all__ = ["DIRECTORY_CSP_PROPERTY", "ProcessContentPolicy"]
