"""
Capture -> CSV pipeline behind the CLI.
"""
import logging
from typing import Optional, Tuple

import click

from capture.packet_decoder import ScapyLayerDecoder
from capture.scapy_backend import capture_name, open_capture
from dataframe.tabulator import Tabulator
from export.csv_writer import CsvExporter, resolve_output_path
from settings.capture_spec import CaptureSpec, resolve_capture_spec
from settings.loader import CapanaConfig

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 1000


def prepare_export(config: CapanaConfig, target: str) -> Tuple[CaptureSpec, str]:
    """
    Everything that can fail before the capture is opened.

    Raises:
        CaptureSpecError: malformed Capture section or Payload.filter
        OutputPathError: unusable output target
    """
    spec = resolve_capture_spec(config.capture)
    output_path = resolve_output_path(config.config.output or ".", capture_name(target))
    return spec, output_path


def export_capture(config: CapanaConfig, target: str, count: int = 0,
                   prepared: Optional[Tuple[CaptureSpec, str]] = None) -> Tuple[str, int]:
    """
    Tabulate every packet of ``target`` and write the CSV.

    Returns:
        (output path, rows written)

    Raises:
        CaptureOpenError: capture file or interface cannot be opened
    """
    spec, output_path = prepared or prepare_export(config, target)
    decoder = ScapyLayerDecoder()
    tabulator = Tabulator(spec)

    with open_capture(target,
                      snaplen=config.config.snaplen,
                      promiscuous=config.config.promiscuous,
                      count=count) as packets:
        try:
            for packet in packets:
                tabulator.add_packet(decoder.decode(tabulator.row_count, packet))
                if config.config.progress and tabulator.row_count % PROGRESS_EVERY == 0:
                    click.echo(f"\rProcessed {tabulator.row_count} packets", nl=False, err=True)
        except KeyboardInterrupt:
            click.echo("\nStopping capture...", err=True)

    if config.config.progress:
        click.echo(f"\rProcessed {tabulator.row_count} packets", err=True)

    if tabulator.row_count and logger.isEnabledFor(logging.DEBUG):
        for line in tabulator.frame.dump_line(tabulator.row_count - 1):
            logger.debug(line)

    logger.info("Tabulated %d packets, %d columns discovered", tabulator.row_count, len(tabulator.frame))
    rows = CsvExporter(output_path).write(spec.schema, tabulator.frame, tabulator.row_count)
    return output_path, rows
