"""
Registry Release — Release coordinator.

Runs the pre-flight checks that need no network, then hands the release to
the RegistryClient in one of two modes:

  fail_on_duplicate=True   — an existing version fails the release
  fail_on_duplicate=False  — an existing version is reported as skipped
"""

from __future__ import annotations

from pathlib import Path

from registry_release.core.config import RegistryConfig
from registry_release.errors import MissingReadmeError, RegistryConfigError
from registry_release.models.release import ReleaseRequest, ReleaseResult
from registry_release.registry.client import RegistryClient
from registry_release.utils.files import read_artifact_text
from registry_release.utils.logging import logger


class ReleaseCoordinator:
    def __init__(self, config: RegistryConfig, client: RegistryClient | None = None):
        self.config = config
        self.client = client or RegistryClient(config.url, config.auth_token)

    @staticmethod
    def _check_readme(readme: Path | None) -> None:
        """The registry shows README.md as the plugin description; it must have content."""
        if readme is None or not readme.is_file():
            raise MissingReadmeError(str(readme) if readme else None)
        if not read_artifact_text(readme).strip():
            raise MissingReadmeError(str(readme))

    def _preflight(self, request: ReleaseRequest) -> None:
        self._check_readme(request.readme)
        if not request.provider:
            raise RegistryConfigError(
                "Plugin provider not specified - Provide a valid provider in the plugin configuration",
                suggestion="Pass --provider with the publishing organisation, e.g. 'seqera.io'.",
            )

    async def publish(self, request: ReleaseRequest, fail_on_duplicate: bool = True) -> ReleaseResult:
        """Validate, release, and turn the outcome into a user-facing result."""
        logger.info(
            "Releasing %s@%s to %s (on duplicate: %s)",
            request.plugin_id, request.version, self.config.url,
            "fail" if fail_on_duplicate else "skip",
        )
        self._preflight(request)

        if fail_on_duplicate:
            await self.client.release(
                request.plugin_id, request.version, request.archive, request.provider, request.spec,
            )
            result = ReleaseResult(success=True)
        else:
            result = await self.client.release_if_not_exists(
                request.plugin_id, request.version, request.archive, request.provider, request.spec,
            )

        if result.skipped:
            logger.info("  Registry response: %s", result.message)
            message = (
                f"ℹ️  Plugin '{request.plugin_id}' version {request.version} already exists "
                f"in registry [{self.config.url}] - skipping upload"
            )
        else:
            message = (
                f"🎉 SUCCESS! Plugin '{request.plugin_id}' version {request.version} has been "
                f"successfully released to the registry [{self.config.url}]!"
            )
        return result.model_copy(update={"message": message})
