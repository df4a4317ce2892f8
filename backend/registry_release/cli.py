"""
Registry Release — Command line entry point.

Commands:
  npr-release release                  — release, failing if the version exists
  npr-release release --skip-existing  — release, skipping an existing version

Configuration lookup (first non-empty wins):
  --url / --token  >  -P npr.apiUrl= / -P npr.apiKey=  >  gradle.properties
  >  NPR_API_URL / NPR_API_KEY (also read from .env)  >  default URL
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from pathlib import Path

import click
import httpx
from dotenv import load_dotenv

from registry_release.core.config import load_project_properties, load_registry_config
from registry_release.errors import ArtifactNotFoundError, RegistryError
from registry_release.models.release import ReleaseRequest
from registry_release.registry.client import RegistryClient
from registry_release.registry.coordinator import ReleaseCoordinator
from registry_release.utils.logging import logger
from registry_release.utils.validate import validate_plugin_metadata

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

SPEC_FILE = Path("build/resources/main/META-INF/spec.json")


@dataclass(frozen=True)
class CliContext:
    """Collaborators the commands use; tests swap in a mock transport."""
    transport: httpx.AsyncBaseTransport | None = None


def _parse_properties(values: tuple[str, ...]) -> dict[str, str]:
    props: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{item}'", param_hint="-P")
        props[key.strip()] = value.strip()
    return props


def _report_error(exc: RegistryError, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(exc.to_dict()), err=True)
        return
    click.echo(f"Error [{exc.code}]: {exc.message}", err=True)
    if exc.suggestion:
        click.echo(f"Suggestion: {exc.suggestion}", err=True)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="registry-release")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Release plugin archives to a plugin registry."""
    if ctx.obj is None:
        ctx.obj = CliContext()


@cli.command("release")
@click.option("--id", "plugin_id", required=True, help="Plugin id, e.g. nf-hello")
@click.option("--version", "version", required=True, help="Plugin semantic version")
@click.option("--provider", default="", help="Publishing organisation, e.g. seqera.io")
@click.option(
    "--project-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=".",
    show_default=True,
    help="Plugin project directory",
)
@click.option(
    "--archive",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    default=None,
    help="Plugin zip [default: build/distributions/<id>-<version>.zip]",
)
@click.option(
    "--spec",
    type=click.Path(path_type=Path, dir_okay=False, exists=True),
    default=None,
    help="Plugin spec JSON [default: build/resources/main/META-INF/spec.json if present]",
)
@click.option(
    "--readme",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Plugin description [default: README.md]",
)
@click.option(
    "--properties-file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Project properties [default: gradle.properties]",
)
@click.option("-P", "--property", "property_args", multiple=True, metavar="KEY=VALUE", help="Project property")
@click.option("--url", default=None, help="Registry API base URL")
@click.option("--token", default=None, help="Registry API key")
@click.option("--skip-existing", is_flag=True, help="Skip instead of failing when the version already exists")
@click.option("--json", "output_json", is_flag=True, help="Print the result or error as JSON")
@click.pass_obj
def release_cmd(
    ctx: CliContext,
    plugin_id: str,
    version: str,
    provider: str,
    project_dir: Path,
    archive: Path | None,
    spec: Path | None,
    readme: Path | None,
    properties_file: Path | None,
    property_args: tuple[str, ...],
    url: str | None,
    token: str | None,
    skip_existing: bool,
    output_json: bool,
) -> None:
    """Release the assembled plugin to the registry."""
    load_dotenv(project_dir / ".env")

    properties = load_project_properties(properties_file or project_dir / "gradle.properties")
    properties.update(_parse_properties(property_args))

    archive = archive or project_dir / "build" / "distributions" / f"{plugin_id}-{version}.zip"
    if spec is None and (project_dir / SPEC_FILE).is_file():
        spec = project_dir / SPEC_FILE

    try:
        validate_plugin_metadata(plugin_id, version)
        config = load_registry_config(url=url, auth_token=token, properties=properties)
        if not archive.is_file():
            raise ArtifactNotFoundError(str(archive))

        request = ReleaseRequest(
            plugin_id=plugin_id,
            version=version,
            provider=provider,
            archive=archive,
            spec=spec,
            readme=readme or project_dir / "README.md",
        )
        client = RegistryClient(config.url, config.auth_token, transport=ctx.transport)
        coordinator = ReleaseCoordinator(config, client)
        result = asyncio.run(coordinator.publish(request, fail_on_duplicate=not skip_existing))
    except RegistryError as exc:
        logger.error("Release of %s@%s failed: %s", plugin_id, version, exc.code)
        _report_error(exc, output_json)
        raise SystemExit(1) from exc

    if output_json:
        click.echo(result.model_dump_json())
    else:
        click.echo(result.message)


def main() -> None:
    cli()
