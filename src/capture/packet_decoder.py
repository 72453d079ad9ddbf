"""
Scapy packet -> DecodedPacket.

Scapy does the protocol dissection; this module only flattens each
dissected layer into an ordered list of (field name, value, type label):
- layer names are scapy class names (Ether, IP, TCP, ...),
- the catch-all Raw layer is reported as the Payload layer,
- fields follow the layer's fields_desc declaration order,
- a layer whose fields cannot be read becomes a DecodeFailure layer, and so
  does a Raw that scapy fell back to because the announced next protocol
  failed to dissect.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from scapy.all import NoPayload, Packet, Padding, Raw
from scapy.fields import FlagValue

from models.packet import (
    DECODE_FAILURE_LAYER,
    PAYLOAD_LAYER,
    DecodedLayer,
    DecodedPacket,
    LayerField,
    PacketMetadata,
)
from models.values import ABSENT, Value

logger = logging.getLogger(__name__)


class ScapyLayerDecoder:
    """Decodes scapy packets into the library-neutral packet model."""

    def decode(self, index: int, packet: Packet) -> DecodedPacket:
        return DecodedPacket(
            index=index,
            layers=tuple(self.layers(packet)),
            metadata=packet_metadata(packet),
        )

    def layers(self, packet: Packet) -> List[DecodedLayer]:
        decoded = []
        layer, underlayer = packet, None
        while layer is not None and not isinstance(layer, NoPayload):
            decoded.append(self.decode_layer(layer, underlayer))
            layer, underlayer = layer.payload, layer
        return decoded

    def decode_layer(self, layer: Packet, underlayer: Optional[Packet] = None) -> DecodedLayer:
        # Padding subclasses Raw but is link-layer trailer, not payload
        if isinstance(layer, Raw) and not isinstance(layer, Padding):
            if dissection_fell_back(layer, underlayer):
                logger.debug("Undecodable payload under %s layer (%d bytes)",
                             type(underlayer).__name__, len(layer.load))
                return DecodedLayer(name=DECODE_FAILURE_LAYER)
            return DecodedLayer(name=PAYLOAD_LAYER, payload=bytes(layer.load))
        try:
            fields = [
                LayerField(
                    name=fld.name,
                    value=to_value(fld, layer, layer.getfieldval(fld.name)),
                    type_label=type(fld).__name__,
                )
                for fld in layer.fields_desc
            ]
        except Exception as e:
            logger.debug("Failed to decode %s layer: %s", type(layer).__name__, e)
            return DecodedLayer(name=DECODE_FAILURE_LAYER)
        return DecodedLayer(name=type(layer).__name__, fields=tuple(fields))


def dissection_fell_back(layer: Packet, underlayer: Optional[Packet]) -> bool:
    """
    True if ``layer`` is the Raw that scapy substitutes when dissecting the
    protocol the underlayer announced failed (e.g. a truncated TCP header).
    """
    if underlayer is None:
        return False
    try:
        expected = underlayer.guess_payload_class(bytes(layer.load))
    except Exception:
        return False
    return not issubclass(expected, Raw)


def to_value(fld: Any, layer: Packet, raw: Any) -> Value:
    """Convert a scapy field value into a tagged cell Value."""
    if raw is None:
        return ABSENT
    if isinstance(raw, bool):
        return Value.boolean(raw)
    if isinstance(raw, FlagValue):
        return Value.text(str(raw))
    if isinstance(raw, int):
        return Value.integer(raw)
    if isinstance(raw, str):
        return Value.text(raw)
    if isinstance(raw, (bytes, bytearray)):
        return Value.raw_bytes(raw)
    return Value.text(fld.i2repr(layer, raw))


def packet_metadata(packet: Packet) -> PacketMetadata:
    original = getattr(packet, "original", None)
    captured = len(original) if original else len(bytes(packet))
    wirelen = getattr(packet, "wirelen", None) or captured
    return PacketMetadata(
        timestamp=float(packet.time),
        captured_length=captured,
        original_length=wirelen,
    )
