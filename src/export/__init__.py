"""
Tabular export.
"""

from .exceptions import OutputPathError
from .csv_writer import CsvExporter, resolve_output_path

__all__ = [
    'OutputPathError',
    'CsvExporter',
    'resolve_output_path',
]
