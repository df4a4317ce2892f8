"""
Registry Release — Artifact file reading.

Filesystem and decoding failures surface as catalog errors, never as raw
OSError / UnicodeDecodeError.
"""

from pathlib import Path

from registry_release.errors import ArtifactNotFoundError, ArtifactReadError


def read_artifact_bytes(path: str | Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except FileNotFoundError as exc:
        raise ArtifactNotFoundError(str(path)) from exc
    except OSError as exc:
        raise ArtifactReadError(str(path), exc.strerror or str(exc)) from exc


def read_artifact_text(path: str | Path) -> str:
    data = read_artifact_bytes(path)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ArtifactReadError(str(path), f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc
