"""Payload window filter: length and bounded hex rendering of raw payload."""
from typing import List, Tuple

from models.values import Value
from settings.capture_spec import PAYLOAD_FILTER_FIELD, PAYLOAD_LENGTH_FIELD, PayloadWindow


def render_window(payload: bytes, window: PayloadWindow) -> str:
    """
    Hex-render the bytes of payload at offsets lo..hi inclusive.

    Each byte becomes two lowercase hex digits followed by ':'. Offsets past
    the end of the payload are skipped, so a window beyond the payload
    yields an empty string.
    """
    return "".join(f"{b:02x}:" for b in payload[window.lo:window.hi + 1])


class PayloadWindowFilter:
    def __init__(self, window: PayloadWindow):
        self.window = window

    def columns(self, payload: bytes) -> List[Tuple[str, str, Value]]:
        """(field, type label, value) for the two derived payload columns."""
        return [
            (PAYLOAD_LENGTH_FIELD, "int", Value.integer(len(payload))),
            (PAYLOAD_FILTER_FIELD, "string", Value.text(render_window(payload, self.window))),
        ]
