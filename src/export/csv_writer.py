"""
CSV export of a tabulated capture.

The header is the schema, verbatim and in declaration order; internal
column discovery order never leaks into the file. Each packet becomes one
row. Columns never populated are written as empty cells.
"""
import csv
import logging
import os
from typing import Sequence

from dataframe.frame import Dataframe
from .exceptions import OutputPathError

logger = logging.getLogger(__name__)

CSV_EXTENSION = ".csv"


def resolve_output_path(output: str, capture_name: str) -> str:
    """
    Decide where the CSV goes.

    Args:
        output: a path ending in .csv inside an existing directory, or an
            existing directory
        capture_name: base name of the capture, used inside a directory

    Raises:
        OutputPathError: output is neither
    """
    if output.lower().endswith(CSV_EXTENSION):
        parent = os.path.dirname(output) or "."
        if not os.path.isdir(parent):
            raise OutputPathError(f"Output directory does not exist: {parent!r}")
        return output
    if os.path.isdir(output):
        return os.path.join(output, capture_name + CSV_EXTENSION)
    raise OutputPathError(
        f"Output must be a {CSV_EXTENSION} file or an existing directory: {output!r}"
    )


class CsvExporter:
    """Writes a Dataframe to a delimited file in schema order."""

    def __init__(self, path: str, delimiter: str = ","):
        self.path = path
        self.delimiter = delimiter

    def write(self, schema: Sequence[str], frame: Dataframe, row_count: int) -> int:
        """
        Write header plus ``row_count`` rows. Returns the number of rows written.

        The file is flushed after the header and after every row.
        """
        with open(self.path, "w", encoding="utf-8", newline="") as fh:
            writer = csv.writer(fh, delimiter=self.delimiter, lineterminator="\n")
            writer.writerow(schema)
            fh.flush()

            for index in range(row_count):
                writer.writerow(self._row(schema, frame, index))
                fh.flush()

        logger.info("Wrote %d rows x %d columns to %s", row_count, len(schema), self.path)
        return row_count

    @staticmethod
    def _row(schema: Sequence[str], frame: Dataframe, index: int) -> list:
        row = []
        for key in schema:
            cell = frame.cell(key, index)
            row.append("" if cell is None else cell.render())
        return row
