"""CLI entry point for postman-to-http."""

import logging
from pathlib import Path

import click

from postman_to_http.config import ConverterConfig, load_config
from postman_to_http.converter.batch import BatchReport, run_batch
from postman_to_http.errors import ConfigError

USAGE = "Usage: postman-to-http [OPTIONS] <collections-dir> <environments-dir>"


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _echo_report(report: BatchReport) -> None:
    for outcome in report.outcomes:
        if outcome.ok:
            click.echo(f"Converted {outcome.kind}: {outcome.source.name}")
            for err in outcome.item_errors:
                click.echo(f"  {err}")
        else:
            click.echo(outcome.error)
    click.echo(f"Done! {len(report.succeeded)} converted, {len(report.failed)} failed.")


@click.command()
@click.argument("dirs", nargs=-1, type=click.Path(path_type=Path))
@click.option("-o", "--output-root", default=Path("."), type=click.Path(file_okay=False, path_type=Path), help="Directory in which the output folders are created.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML file overriding output names and suffixes.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, dirs: tuple[Path, ...], output_root: Path, config_path: Path | None, verbose: bool):
    """Convert Postman collections and environments into .http and .env files."""
    if len(dirs) != 2:
        click.echo(USAGE)
        ctx.exit(1)

    _setup_logging(verbose)
    collections_dir, environments_dir = dirs

    config = ConverterConfig()
    if config_path is not None:
        try:
            config = load_config(config_path)
        except ConfigError as e:
            raise click.BadParameter(str(e), param_hint="--config") from e

    try:
        report = run_batch(collections_dir, environments_dir, output_root, config)
    except OSError as e:
        click.echo(f"Error: {e}")
        ctx.exit(1)

    _echo_report(report)
