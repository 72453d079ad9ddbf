# Packet data model
"""
Decoded packet models for capana.

THESE MODELS ARE IMMUTABLE - the dataframe only ever reads them.
A decoder turns whatever the capture library hands us into these objects,
so the rest of the pipeline never touches library-specific packet types.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple

from .values import Value

# Layer name reported for the decoder's catch-all raw payload layer
PAYLOAD_LAYER = "Payload"

# Layer name reported when the decoder could not extract a layer
DECODE_FAILURE_LAYER = "DecodeFailure"


@dataclass(frozen=True)
class LayerField:
    """One named field of a decoded layer."""
    name: str
    value: Value
    type_label: str = ""
    """Decoder-specific type name, carried for diagnostics only."""


@dataclass(frozen=True)
class DecodedLayer:
    """
    A named protocol section of a packet.

    fields keeps the decoder's declaration order. payload is only set
    on the catch-all payload layer.
    """
    name: str
    fields: Tuple[LayerField, ...] = field(default_factory=tuple)
    payload: Optional[bytes] = None

    def __post_init__(self):
        # Ensure fields is a tuple (immutable)
        if not isinstance(self.fields, tuple):
            object.__setattr__(self, 'fields', tuple(self.fields))

    @property
    def is_payload(self) -> bool:
        return self.name == PAYLOAD_LAYER

    @property
    def is_failure(self) -> bool:
        return self.name == DECODE_FAILURE_LAYER


@dataclass(frozen=True)
class PacketMetadata:
    """Capture metadata that is not part of any protocol layer."""

    timestamp: float
    """Seconds since Unix epoch, with fractional part."""

    captured_length: int
    """Bytes actually captured (may be less than original due to snaplen)"""

    original_length: int
    """Bytes on the wire (original packet size)"""

    @property
    def is_truncated(self) -> bool:
        """True if captured length < original length (snaplen limited)."""
        return self.captured_length < self.original_length

    @property
    def timestamp_iso(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc).isoformat()


@dataclass(frozen=True)
class DecodedPacket:
    """
    A packet after protocol decoding.

    index is 0-based and strictly increasing across one capture.
    """
    index: int
    layers: Tuple[DecodedLayer, ...] = field(default_factory=tuple)
    metadata: Optional[PacketMetadata] = None

    def __post_init__(self):
        if not isinstance(self.layers, tuple):
            object.__setattr__(self, 'layers', tuple(self.layers))

    @property
    def layer_names(self) -> Tuple[str, ...]:
        return tuple(layer.name for layer in self.layers)

    @property
    def stack_summary(self) -> str:
        """String representation of the layer stack."""
        return ":".join(self.layer_names) if self.layers else "unknown"
