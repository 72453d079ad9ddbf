"""
Schema-on-read columnar accumulation of decoded packets.
"""

from .frame import Dataframe, Series
from .payload import PayloadWindowFilter, render_window
from .tabulator import Tabulator, tabulate

__all__ = [
    'Dataframe',
    'Series',
    'PayloadWindowFilter',
    'render_window',
    'Tabulator',
    'tabulate',
]
