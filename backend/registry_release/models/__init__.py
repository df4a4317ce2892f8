"""Registry Release data models — typed contracts for a release."""

from registry_release.models.release import (
    DraftRelease,
    ReleaseRequest,
    ReleaseResult,
)

__all__ = [
    "DraftRelease",
    "ReleaseRequest",
    "ReleaseResult",
]
