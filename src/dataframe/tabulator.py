"""
Per-packet tabulation.

Feeds each DecodedPacket into a Dataframe: applies the capture field set,
derives the payload columns, adds the synthetic layer-stack and metadata
columns, then evens out the frame before the next packet.
"""
import logging
from typing import Iterable, List, Optional, Set, Tuple

from models.packet import DecodedLayer, DecodedPacket
from models.values import Value
from settings.capture_spec import (
    CaptureSpec,
    FRAME_LAYER,
    METADATA_LAYER,
    PAYLOAD_LENGTH_FIELD,
)
from .frame import Dataframe
from .payload import PayloadWindowFilter

logger = logging.getLogger(__name__)


class Tabulator:
    """Builds a Dataframe from decoded packets, one packet at a time."""

    def __init__(self, spec: CaptureSpec, frame: Optional[Dataframe] = None):
        self.spec = spec
        self.frame = frame if frame is not None else Dataframe()
        self.payload_filter = PayloadWindowFilter(spec.window) if spec.window else None
        self._next_index = 0

    @property
    def row_count(self) -> int:
        return self._next_index

    def add_packets(self, packets: Iterable[DecodedPacket]) -> int:
        for packet in packets:
            self.add_packet(packet)
        return self.row_count

    def add_packet(self, packet: DecodedPacket) -> None:
        index = self._next_index
        if packet.index != index:
            raise ValueError(
                f"Packet index mismatch: expected {index}, got {packet.index}. "
                f"Packets must be tabulated in capture order starting at 0."
            )

        written: Set[str] = set()
        for layer in packet.layers:
            if layer.is_failure:
                self._put(index, written, FRAME_LAYER, "DecodeFailure", "bool", Value.boolean(True))
                continue
            for name, type_label, value in self._layer_columns(layer):
                if self.spec.accepts(layer.name, name):
                    self._put(index, written, layer.name, name, type_label, value)

        self._put(index, written, FRAME_LAYER, "layers", "[]string", Value.text(packet.stack_summary))
        if packet.metadata is not None:
            meta = packet.metadata
            self._put(index, written, METADATA_LAYER, "Timestamp", "time.Time", Value.text(meta.timestamp_iso))
            self._put(index, written, METADATA_LAYER, "CaptureLength", "int", Value.integer(meta.captured_length))
            self._put(index, written, METADATA_LAYER, "Length", "int", Value.integer(meta.original_length))
            self._put(index, written, METADATA_LAYER, "Truncated", "bool", Value.boolean(meta.is_truncated))

        self.frame.even_out(index)
        self._next_index += 1

    def _layer_columns(self, layer: DecodedLayer) -> List[Tuple[str, str, Value]]:
        if layer.is_payload:
            payload = layer.payload or b""
            if self.payload_filter is not None:
                return self.payload_filter.columns(payload)
            return [(PAYLOAD_LENGTH_FIELD, "int", Value.integer(len(payload)))]
        return [(f.name, f.type_label, f.value) for f in layer.fields if not f.value.is_absent]

    def _put(self, index: int, written: Set[str], layer: str, field: str,
             type_label: str, value: Value) -> None:
        # One cell per key per packet; the outermost layer wins (e.g. IP-in-IP)
        key = f"{layer}.{field}"
        if key in written:
            return
        written.add(key)
        self.frame.append(index, layer, field, type_label, value)


def tabulate(spec: CaptureSpec, packets: Iterable[DecodedPacket]) -> Tabulator:
    """Convenience wrapper: tabulate every packet and return the tabulator."""
    tabulator = Tabulator(spec)
    tabulator.add_packets(packets)
    logger.debug("Tabulated %d packets into %d columns", tabulator.row_count, len(tabulator.frame))
    return tabulator
