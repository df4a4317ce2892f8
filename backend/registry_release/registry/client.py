"""
Registry Release — Plugin registry REST client.

Two-phase release: create draft → upload artifact.

Auth: ``Authorization: Bearer <api key>`` on every request.

Endpoints used (relative to the registry base URL):
  POST v1/plugins/release                    — create draft release (JSON)
  POST v1/plugins/release/{releaseId}/upload — upload plugin archive (multipart)

Nothing is retried here. A failed call is reported once; the caller (CI,
operator) decides whether to run the release again.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import httpx

from registry_release.core.config import normalize_url
from registry_release.errors import (
    DuplicateReleaseError,
    RegistryConfigError,
    RegistryConnectionError,
    RegistryHTTPError,
)
from registry_release.models.release import DraftRelease, ReleaseResult
from registry_release.registry.auth import BearerCredentials
from registry_release.registry.checksum import format_checksum
from registry_release.utils.files import read_artifact_bytes, read_artifact_text
from registry_release.utils.logging import logger, step_timer

CONNECT_TIMEOUT = 30.0
DRAFT_TIMEOUT = 60.0
UPLOAD_TIMEOUT = 300.0  # archives can be large

HTTP_CONFLICT = 409


class RegistryClient:
    """Async client for the plugin registry release API."""

    def __init__(
        self,
        url: str,
        auth_token: str | None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not auth_token:
            raise RegistryConfigError(
                "API key not specified - Provide a valid API key in 'publishing.registry' configuration"
            )
        self.url = normalize_url(str(url))
        self.credentials = BearerCredentials(auth_token)
        self.transport = transport

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        h = self.credentials.as_headers()
        if extra:
            h.update(extra)
        return h

    async def _post(self, endpoint: str, timeout: float, **kwargs: Any) -> httpx.Response:
        """POST once and map every transport-level failure to RegistryConnectionError."""
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(timeout, connect=CONNECT_TIMEOUT),
                transport=self.transport,
            ) as client:
                return await asyncio.wait_for(client.post(endpoint, **kwargs), timeout=timeout)
        except httpx.TransportError as exc:
            raise RegistryConnectionError(endpoint, str(exc) or type(exc).__name__) from exc
        except asyncio.TimeoutError as exc:
            raise RegistryConnectionError(endpoint, f"request timed out after {timeout:.0f}s") from exc
        except asyncio.CancelledError as exc:
            # The task's cancellation request is left pending (no uncancel()).
            raise RegistryConnectionError(endpoint, "request interrupted") from exc

    @staticmethod
    def _check_response(endpoint: str, resp: httpx.Response) -> None:
        if resp.status_code != 200:
            logger.error("  Registry %s returned %d: %s", endpoint, resp.status_code, resp.text)
            raise RegistryHTTPError(endpoint, resp.status_code, resp.text)

    # ---- Protocol phases ----

    async def create_draft_release(
        self,
        plugin_id: str,
        version: str,
        checksum: str,
        provider: str | None,
        spec: str | None = None,
    ) -> DraftRelease:
        """Phase 1: register the release metadata and return the draft handle."""
        if not provider:
            raise RegistryConfigError(
                "Plugin provider not specified - Provide a valid provider in the plugin configuration",
                suggestion="Set the provider (publishing organisation, e.g. 'seqera.io') of the plugin.",
            )

        endpoint = f"{self.url}v1/plugins/release"
        payload: dict[str, Any] = {
            "id": plugin_id,
            "version": version,
            "checksum": checksum,
            "provider": provider,
        }
        if spec is not None:
            payload["spec"] = spec

        with step_timer("Registry — create draft release"):
            resp = await self._post(
                endpoint,
                DRAFT_TIMEOUT,
                headers=self._headers({"Content-Type": "application/json"}),
                json=payload,
            )
            if resp.status_code == HTTP_CONFLICT:
                raise DuplicateReleaseError(endpoint, resp.text)
            self._check_response(endpoint, resp)

            try:
                draft = DraftRelease.model_validate(resp.json())
            except ValueError as exc:
                raise RegistryHTTPError(
                    endpoint, resp.status_code, resp.text, code="INVALID_RESPONSE"
                ) from exc

            logger.info("  Draft release %s created for %s@%s", draft.release_id, plugin_id, version)
            return draft

    async def upload_artifact(self, release_id: int | str, data: bytes, filename: str) -> None:
        """Phase 2: attach the plugin archive to a draft release."""
        endpoint = f"{self.url}v1/plugins/release/{release_id}/upload"

        with step_timer("Registry — upload artifact"):
            resp = await self._post(
                endpoint,
                UPLOAD_TIMEOUT,
                headers=self._headers(),
                files={"payload": (filename, data, "application/zip")},
            )
            self._check_response(endpoint, resp)
            logger.info("  Uploaded %d bytes → release %s", len(data), release_id)

    # ---- High-level operations ----

    @staticmethod
    def _read_artifacts(archive: str | Path, spec: str | Path | None) -> tuple[bytes, str, str | None]:
        data = read_artifact_bytes(archive)
        spec_text = read_artifact_text(spec) if spec is not None else None
        return data, format_checksum(data), spec_text

    async def release(
        self,
        plugin_id: str,
        version: str,
        archive: str | Path,
        provider: str | None,
        spec: str | Path | None = None,
    ) -> None:
        """Create the draft release, then upload the archive. Strictly sequential."""
        data, checksum, spec_text = self._read_artifacts(archive, spec)
        draft = await self.create_draft_release(plugin_id, version, checksum, provider, spec_text)
        await self.upload_artifact(draft.release_id, data, Path(archive).name)

    async def release_if_not_exists(
        self,
        plugin_id: str,
        version: str,
        archive: str | Path,
        provider: str | None,
        spec: str | Path | None = None,
    ) -> ReleaseResult:
        """
        Same as release(), but a duplicate draft (HTTP 409) is a skip, not a failure.

        Only draft creation is reinterpreted. Upload errors, including a 409
        from the upload endpoint, propagate unchanged.
        """
        data, checksum, spec_text = self._read_artifacts(archive, spec)
        try:
            draft = await self.create_draft_release(plugin_id, version, checksum, provider, spec_text)
        except DuplicateReleaseError as exc:
            logger.info("  %s@%s already exists in registry — skipping upload", plugin_id, version)
            return ReleaseResult(success=True, skipped=True, message=exc.message)

        await self.upload_artifact(draft.release_id, data, Path(archive).name)
        return ReleaseResult(success=True, skipped=False)
