"""
Cell values stored by the dataframe.

Every cell is a tagged Value: the kind says how the data renders in the
exported CSV. ABSENT marks a field that was not observed for a packet.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ValueKind(Enum):
    INTEGER = "integer"
    TEXT = "text"
    BOOLEAN = "boolean"
    BYTES = "bytes"
    ABSENT = "absent"


@dataclass(frozen=True)
class Value:
    """A single typed cell value."""
    kind: ValueKind
    data: Any = None

    @classmethod
    def integer(cls, data: int) -> "Value":
        return cls(ValueKind.INTEGER, int(data))

    @classmethod
    def text(cls, data: str) -> "Value":
        return cls(ValueKind.TEXT, str(data))

    @classmethod
    def boolean(cls, data: bool) -> "Value":
        return cls(ValueKind.BOOLEAN, bool(data))

    @classmethod
    def raw_bytes(cls, data: bytes) -> "Value":
        return cls(ValueKind.BYTES, bytes(data))

    @property
    def is_absent(self) -> bool:
        return self.kind is ValueKind.ABSENT

    def render(self) -> str:
        """Canonical text for CSV output."""
        if self.kind is ValueKind.ABSENT:
            return ""
        if self.kind is ValueKind.BOOLEAN:
            return "true" if self.data else "false"
        if self.kind is ValueKind.BYTES:
            return self.data.hex()
        return str(self.data)

    def __str__(self) -> str:
        return self.render()


ABSENT = Value(ValueKind.ABSENT)
