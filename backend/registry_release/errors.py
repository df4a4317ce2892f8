"""
Registry Release — Structured error catalog.

Every error has a code, human message, and suggested fix.
Exactly one error class describes each failure; callers branch on the
class and its fields, never on the message text.
"""

from __future__ import annotations

from typing import Any


class RegistryError(Exception):
    """Base error with structured code + suggestion."""

    def __init__(self, code: str, message: str, suggestion: str = "", detail: Any = None):
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "error_code": self.code,
            "message": self.message,
        }
        if self.suggestion:
            d["suggestion"] = self.suggestion
        if self.detail:
            d["detail"] = self.detail
        return d


class RegistryConfigError(RegistryError):
    """A required setting (token, provider) is missing. Raised before any request."""

    def __init__(self, message: str, suggestion: str = ""):
        super().__init__(
            code="CONFIG_ERROR",
            message=message,
            suggestion=suggestion or "Check the registry configuration of the plugin.",
        )


class ValidationError(RegistryError):
    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(
            code="VALIDATION_FAILED",
            message=f"Plugin metadata validation failed: {'; '.join(errors)}",
            suggestion=(
                "Plugin ids may contain letters, numbers and '-' (5 to 64 chars); "
                "versions must be valid semantic versions."
            ),
            detail=errors,
        )


class RegistryConnectionError(RegistryError):
    """Transport-level failure: refused, unresolved host, timed out or cancelled."""

    def __init__(self, endpoint: str, reason: str):
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(
            code="CONNECTION_FAILED",
            message=f"Unable to connect to plugin repository at {endpoint}: {reason}",
            suggestion="Check the registry URL and your network connection, then retry.",
        )


class RegistryHTTPError(RegistryError):
    """The registry answered with a non-200 status."""

    def __init__(self, endpoint: str, status: int, body: str = "", code: str = "HTTP_ERROR"):
        self.endpoint = endpoint
        self.status = status
        self.body = body
        message = f"Failed to release plugin to registry {endpoint}: HTTP {status}"
        if body:
            message = f"{message} - {body}"
        super().__init__(
            code=code,
            message=message,
            suggestion="Check your registry API key and the plugin metadata.",
            detail=body[:500] if body else None,
        )


class DuplicateReleaseError(RegistryHTTPError):
    """HTTP 409 on draft creation: this plugin version is already registered."""

    def __init__(self, endpoint: str, body: str = ""):
        super().__init__(endpoint, 409, body, code="DUPLICATE_RELEASE")
        self.suggestion = "Bump the plugin version, or release with duplicate skipping enabled."


class ArtifactNotFoundError(RegistryError):
    def __init__(self, path: str):
        super().__init__(
            code="ARTIFACT_NOT_FOUND",
            message=f"Plugin artifact not found: {path}",
            suggestion="Build the plugin first, or check the --archive / --spec / --readme paths.",
        )


class ArtifactReadError(RegistryError):
    def __init__(self, path: str, reason: str):
        super().__init__(
            code="ARTIFACT_UNREADABLE",
            message=f"Unable to read plugin artifact {path}: {reason}",
            suggestion="Check the file permissions; spec and README files must be UTF-8 text.",
        )


class MissingReadmeError(RegistryError):
    """README.md is missing or empty; the registry uses it as the plugin description."""

    MESSAGE = (
        "README.md file not found in the project root directory.\n"
        "\n"
        "Please create a README.md file with the following required sections:\n"
        "  1. Summary: Explain what the plugin does\n"
        "  2. Get Started: Setup and configuration instructions\n"
        "  3. Examples: Code examples with code blocks\n"
        "  4. License: Specify the plugin's license (e.g., Apache 2.0, MIT, GPL)\n"
        "\n"
        "Optional sections (include if relevant):\n"
        "  - What's new: Recent changes or new features\n"
        "  - Breaking changes: Incompatible changes users should be aware of\n"
        "\n"
        "Requirements:\n"
        "  - Content must be meaningful (no placeholder text like TODO, TBD, Lorem ipsum)\n"
        "  - Content must be in English\n"
        "\n"
        "This file will be used as the plugin description in the registry."
    )

    def __init__(self, path: str | None = None):
        super().__init__(
            code="MISSING_README",
            message=self.MESSAGE,
            suggestion="Add a non-empty README.md next to the plugin build file.",
            detail=path,
        )
