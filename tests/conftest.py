"""Shared test configuration and fixtures for the registry release test suite."""

import sys
from pathlib import Path

import httpx
import pytest

# Add backend to Python path so imports work
backend_dir = str(Path(__file__).parent.parent / "backend")
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)


class RegistryStub:
    """
    Stand-in for the registry API, served through httpx.MockTransport.

    Records every request so tests can assert on count, order and content.
    """

    def __init__(
        self,
        draft_status: int = 200,
        draft_body: dict | str | None = None,
        upload_status: int = 200,
        upload_body: str = "",
    ):
        self.draft_status = draft_status
        self.draft_body = {"releaseId": 42} if draft_body is None else draft_body
        self.upload_status = upload_status
        self.upload_body = upload_body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/upload"):
            return httpx.Response(self.upload_status, text=self.upload_body)
        if isinstance(self.draft_body, dict):
            return httpx.Response(self.draft_status, json=self.draft_body)
        return httpx.Response(self.draft_status, text=self.draft_body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture
def registry_stub():
    return RegistryStub()


@pytest.fixture
def plugin_archive(tmp_path):
    archive = tmp_path / "test-plugin.zip"
    archive.write_text("fake plugin zip content")
    return archive


@pytest.fixture
def plugin_spec(tmp_path):
    spec = tmp_path / "spec.json"
    spec.write_text("fake plugin spec content")
    return spec


@pytest.fixture
def readme(tmp_path):
    path = tmp_path / "README.md"
    path.write_text("# nf-demo\n\n## Summary\nSays hello.\n")
    return path
