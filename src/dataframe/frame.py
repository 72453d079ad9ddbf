"""
Columnar accumulator.

One Series per ``Layer.Field`` key, one cell per packet. Columns are
discovered as packets arrive; even_out() keeps every column at the same
row count once a packet is done.

Usage per packet, in index order:

    frame.append(i, "IP", "src", "SourceIPField", Value.text("10.0.0.1"))
    ...
    frame.even_out(i)
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from models.values import ABSENT, Value

logger = logging.getLogger(__name__)


@dataclass
class Series:
    """Per-packet cells of one column."""
    layer: str
    type_label: str = ""
    cells: List[Value] = field(default_factory=list)
    last_index: int = -1
    """Packet index of the most recent append."""

    @property
    def length(self) -> int:
        return len(self.cells)

    def pad_to(self, length: int) -> None:
        missing = length - len(self.cells)
        if missing > 0:
            self.cells.extend([ABSENT] * missing)


class Dataframe:
    """Series keyed by ``Layer.Field``, in first-seen order."""

    def __init__(self):
        self._series: Dict[str, Series] = {}

    def __len__(self) -> int:
        return len(self._series)

    def __contains__(self, key: str) -> bool:
        return key in self._series

    def keys(self) -> Iterator[str]:
        return iter(self._series)

    def series(self, key: str) -> Optional[Series]:
        return self._series.get(key)

    def append(self, index: int, layer: str, key: str, type_label: str, value: Value) -> None:
        """
        Store value for packet ``index`` under ``layer.key``.

        A new column is back-filled with absent cells for every earlier
        packet. An existing column gets value as its next cell: callers must
        append in increasing index order and run even_out() between packets.
        """
        column = f"{layer}.{key}"
        series = self._series.get(column)
        if series is None:
            series = Series(layer=layer, type_label=type_label)
            series.pad_to(index)
            self._series[column] = series
            logger.debug("New column %s (%s) at packet %d", column, type_label, index)
        series.cells.append(value)
        series.last_index = index

    def even_out(self, index: int) -> None:
        """Pad every column to ``index + 1`` cells. No-op where already long enough."""
        for series in self._series.values():
            series.pad_to(index + 1)

    def cell(self, key: str, index: int) -> Optional[Value]:
        """Cell at ``index``, or None when the column is unknown or too short."""
        series = self._series.get(key)
        if series is None or index >= series.length:
            return None
        return series.cells[index]

    def dump_line(self, index: int) -> List[str]:
        """Describe row ``index`` across all columns, for debugging."""
        lines = []
        for key, series in self._series.items():
            if series.length > index:
                data = series.cells[index].render()
            else:
                data = "<missing>"
            lines.append(
                f"Key:{key} Ind:{series.last_index} Layer:{series.layer} "
                f"Data: {data} s.Length {series.length}"
            )
        return lines

    def dump_key(self, key: str) -> List[str]:
        """Every rendered cell of one column, for debugging."""
        series = self._series.get(key)
        if series is None:
            return []
        return [f"*{i}>{cell.render()}" for i, cell in enumerate(series.cells)]
