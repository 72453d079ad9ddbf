"""
Packet and cell data models.
"""

from .packet import (
    DecodedLayer,
    DecodedPacket,
    LayerField,
    PacketMetadata,
    PAYLOAD_LAYER,
    DECODE_FAILURE_LAYER,
)
from .values import ABSENT, Value, ValueKind

__all__ = [
    'DecodedLayer',
    'DecodedPacket',
    'LayerField',
    'PacketMetadata',
    'PAYLOAD_LAYER',
    'DECODE_FAILURE_LAYER',
    'ABSENT',
    'Value',
    'ValueKind',
]
