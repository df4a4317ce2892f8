"""
Registry Release — Registry connection configuration.

Settings are resolved once per invocation from a layered chain, first
non-empty value wins:

  explicit value  >  project property  >  environment variable  >  default

The auth token has no default. The resolved RegistryConfig is immutable and
passed explicitly to whoever needs it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import dotenv_values

from registry_release.errors import RegistryConfigError

DEFAULT_REGISTRY_URL = "https://registry.nextflow.io/api"

URL_PROPERTY = "npr.apiUrl"
TOKEN_PROPERTY = "npr.apiKey"
URL_ENV_VAR = "NPR_API_URL"
TOKEN_ENV_VAR = "NPR_API_KEY"


@dataclass(frozen=True)
class RegistryConfig:
    """Resolved registry connection settings."""
    url: str
    auth_token: str


def _first_non_empty(*values: str | None) -> str | None:
    for value in values:
        if value:
            return value
    return None


def normalize_url(url: str) -> str:
    """Ensure the base URL ends with exactly one trailing slash."""
    return url if url.endswith("/") else url + "/"


def resolve_url(
    explicit: str | None,
    build_property: str | None,
    env_var: str | None,
    default: str = DEFAULT_REGISTRY_URL,
) -> str:
    return _first_non_empty(explicit, build_property, env_var) or default


def resolve_token(
    explicit: str | None,
    build_property: str | None,
    env_var: str | None,
) -> str:
    token = _first_non_empty(explicit, build_property, env_var)
    if not token:
        raise RegistryConfigError(
            "Registry authentication token must be configured either via the auth_token "
            f"setting, {TOKEN_PROPERTY} project property, or {TOKEN_ENV_VAR} environment variable",
            suggestion=f"Export {TOKEN_ENV_VAR}, add {TOKEN_PROPERTY}=<key> to gradle.properties, or pass --token.",
        )
    return token


def load_project_properties(path: str | Path) -> dict[str, str]:
    """Read a gradle.properties style file without touching os.environ."""
    path = Path(path)
    if not path.is_file():
        return {}
    return {k: v for k, v in dotenv_values(path).items() if v is not None}


def load_registry_config(
    url: str | None = None,
    auth_token: str | None = None,
    properties: Mapping[str, str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> RegistryConfig:
    props = properties or {}
    env = os.environ if environ is None else environ
    resolved_url = resolve_url(url, props.get(URL_PROPERTY), env.get(URL_ENV_VAR))
    token = resolve_token(auth_token, props.get(TOKEN_PROPERTY), env.get(TOKEN_ENV_VAR))
    return RegistryConfig(url=normalize_url(resolved_url), auth_token=token)
