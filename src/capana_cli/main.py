"""
capana CLI - main entry point.
"""
import logging
from typing import Optional

import click

from capture.exceptions import CaptureOpenError
from export.exceptions import OutputPathError
from settings.exceptions import ConfigError
from settings.loader import DEFAULT_CONFIG_FILE, load_config
from utils.logger_config import setup_logger
from .export import export_capture, prepare_export

LOGGED_PACKAGES = ("capana_cli", "capture", "dataframe", "export", "settings")


@click.command()
@click.argument("target", required=False)
@click.option("--config", "-c", "config_path", default=DEFAULT_CONFIG_FILE, show_default=True,
              help="Configuration file")
@click.option("--info", "dry_run", is_flag=True,
              help="Print configuration information and exit (dry run)")
@click.option("--count", "-n", type=int, default=0, show_default=True,
              help="Live capture only: stop after N packets (0 = until Ctrl+C)")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None,
              help="Also write log messages to this file")
def cli(target: Optional[str], config_path: str, dry_run: bool, count: int, verbose: bool,
        log_file: Optional[str]):
    """
    capana - export packet captures to CSV, one column per layer field.

    TARGET is a capture file (.pcap, .pcapng, .cap) or a network interface.

    Examples:
      capana -c capana.conf.yml default.pcap
      capana -c capana.conf.yml --count 500 en0
    """
    level = logging.DEBUG if verbose else logging.INFO
    try:
        for name in LOGGED_PACKAGES:
            setup_logger(name, level, log_file=log_file)
    except OSError as e:
        raise click.ClickException(f"Opening log file: {e}")

    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e))

    if not target:
        raise click.ClickException(
            'Please, provide a filename or network interface: "capana default.pcap" or "capana en0"'
        )

    if dry_run:
        click.echo("Dry run information:")
        for line in config.describe():
            click.echo(line)
        return

    try:
        prepared = prepare_export(config, target)
    except (ConfigError, OutputPathError) as e:
        raise click.ClickException(str(e))

    try:
        output_path, rows = export_capture(config, target, count=count, prepared=prepared)
    except (CaptureOpenError, OSError) as e:
        raise click.ClickException(str(e))

    click.echo(f"{rows} packets written to {output_path}")


if __name__ == "__main__":
    cli()
