"""
Registry Release — Typed release data model.

The coordinator, the client and the CLI all work against these models.
No ad hoc result dicts cross module boundaries.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from registry_release.utils.validate import is_valid_plugin_id, is_valid_version


class ReleaseRequest(BaseModel):
    """
    One publish attempt.

    ``provider`` may be empty here; the coordinator reports a missing provider
    as a configuration error before any request.
    """

    plugin_id: str
    version: str
    provider: str = ""
    archive: Path
    spec: Path | None = None
    readme: Path | None = None

    @field_validator("plugin_id")
    @classmethod
    def _check_plugin_id(cls, v: str) -> str:
        if not is_valid_plugin_id(v):
            raise ValueError(f"Plugin id '{v}' is invalid")
        return v

    @field_validator("version")
    @classmethod
    def _check_version(cls, v: str) -> str:
        if not is_valid_version(v):
            raise ValueError(f"Plugin version '{v}' is not a valid semantic version")
        return v


class DraftRelease(BaseModel):
    """Server-side handle returned by draft creation."""

    model_config = ConfigDict(populate_by_name=True)

    release_id: int | str = Field(alias="releaseId")
    status: str | None = None


class ReleaseResult(BaseModel):
    success: bool
    skipped: bool = False
    message: str | None = None
