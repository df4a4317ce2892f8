"""
Registry Release — Plugin metadata validation.

Plugin ids and versions are checked before anything is sent to the registry.
"""

import re

import semver

from registry_release.errors import ValidationError

_PLUGIN_ID_RE = re.compile(r"[a-zA-Z0-9-]{5,64}")


def is_valid_plugin_id(plugin_id: str) -> bool:
    return _PLUGIN_ID_RE.fullmatch(plugin_id) is not None


def is_valid_version(version: str) -> bool:
    """Strict semantic version: all three components, no prefix or stray whitespace."""
    try:
        parsed = semver.Version.parse(version)
    except (TypeError, ValueError):
        return False
    # parse() tolerates a trailing newline; the canonical form does not
    return str(parsed) == version


def validate_plugin_metadata(plugin_id: str, version: str) -> None:
    """
    Check the plugin id and version.
    Raises ValidationError listing every problem found.
    """
    errors: list[str] = []

    if not is_valid_plugin_id(plugin_id):
        errors.append(
            f"Plugin id '{plugin_id}' is invalid. Plugin ids can contain numbers, letters, and the '-' symbol"
        )
    if not is_valid_version(version):
        errors.append(
            f"Plugin version '{version}' is invalid. Plugin versions must be a valid semantic version (semver) string"
        )

    if errors:
        raise ValidationError(errors)
