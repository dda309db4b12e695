"""CLI interface for docshift.

Command-line tool for deriving old paths, rewriting links and building
redirect tables.
"""

import json
import logging
from pathlib import Path

import click

from docshift.config import Config
from docshift.core.links import LinkRewriteContext, LinkRewriter
from docshift.core.old_paths import derive_old_paths
from docshift.core.redirects import Permalink, build_redirect_table

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover docshift.toml)",
)
language_option = click.option(
    "--language",
    "-l",
    "language_code",
    default="en",
    show_default=True,
    help="Language code of the page",
)
version_option = click.option(
    "--version",
    "-V",
    "version",
    default=None,
    help="Version of the page (default: the non-enterprise default version)",
)
latest_option = click.option(
    "--latest",
    default=None,
    help="Latest enterprise release (overrides config)",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """docshift - historical paths and local links for versioned docs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command("old-paths")
@click.argument("path")
@language_option
@version_option
@latest_option
@config_option
def old_paths(
    path: str,
    language_code: str,
    version: str | None,
    latest: str | None,
    config_path: Path | None,
) -> None:
    """Print every old path that redirects to PATH."""
    config = _load_config(config_path, latest)
    registry = config.registry()

    for old_path in sorted(
        derive_old_paths(path, language_code, version or registry.non_enterprise_default_version, registry)
    ):
        click.echo(old_path)


@cli.command("rewrite-link")
@click.argument("href")
@language_option
@version_option
@latest_option
@click.option("--dotcom-only", is_flag=True, help="Treat the link as dotcom-only")
@config_option
def rewrite_link(
    href: str,
    language_code: str,
    version: str | None,
    latest: str | None,
    dotcom_only: bool,
    config_path: Path | None,
) -> None:
    """Print the canonical form of a root-relative HREF."""
    if not href.startswith("/"):
        raise click.BadParameter("href must start with '/'", param_hint="HREF")

    config = _load_config(config_path, latest)
    registry = config.registry()
    rewriter = LinkRewriter(registry, _load_external_redirects(config))
    context = LinkRewriteContext(
        language_code=language_code,
        version=version or registry.non_enterprise_default_version,
        dotcom_only=dotcom_only,
    )
    click.echo(rewriter.rewrite(href, context))


@cli.command()
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the redirect table to a file instead of stdout",
)
@latest_option
@config_option
def redirects(
    manifest: Path,
    output: Path | None,
    latest: str | None,
    config_path: Path | None,
) -> None:
    """Build a redirect table from a MANIFEST of permalinks.

    MANIFEST is a JSON list of objects with href, languageCode, version
    and an optional redirectFrom list.
    """
    config = _load_config(config_path, latest)
    permalinks = _read_manifest(manifest)
    table = build_redirect_table(permalinks, config.registry())

    payload = json.dumps(table.to_dict(), indent=2)
    if output is None:
        click.echo(payload)
        return

    output.write_text(payload + "\n", encoding="utf-8")
    click.echo(f"Wrote {len(table)} redirects to {output}", err=True)
    if table.conflicts:
        click.echo(f"Ignored {table.conflicts} conflicting old paths", err=True)


def _load_config(config_path: Path | None, latest: str | None) -> Config:
    try:
        config = Config.load(config_path)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    return config.with_overrides(latest=latest)


def _load_external_redirects(config: Config) -> dict[str, str]:
    try:
        return config.load_external_redirects()
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e


def _read_manifest(path: Path) -> list[Permalink]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid manifest {path}: {e}") from e

    if not isinstance(data, list):
        raise click.ClickException("Manifest must be a JSON list of permalinks")

    permalinks: list[Permalink] = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise click.ClickException(f"Manifest entry {i} must be an object")
        try:
            href = entry["href"]
            language_code = entry["languageCode"]
            version = entry["version"]
        except KeyError as e:
            raise click.ClickException(f"Manifest entry {i} is missing {e}") from e
        redirect_from = entry.get("redirectFrom", [])
        if not isinstance(redirect_from, list):
            raise click.ClickException(f"Manifest entry {i}: redirectFrom must be a list")
        permalinks.append(
            Permalink(
                href=href,
                language_code=language_code,
                version=version,
                redirect_from=tuple(redirect_from),
            )
        )
    return permalinks


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
