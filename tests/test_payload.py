import os
import sys

# Add src to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
src_path = os.path.join(project_root, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from dataframe.payload import PayloadWindowFilter, render_window
from models.values import Value
from settings.capture_spec import PayloadWindow

PAYLOAD = bytes(range(0xa0, 0xaa))  # 10 bytes


def test_window_renders_only_selected_offsets():
    assert render_window(PAYLOAD, PayloadWindow(2, 5)) == "a2:a3:a4:a5:"


def test_full_window_renders_every_byte():
    rendered = render_window(PAYLOAD, PayloadWindow(0, len(PAYLOAD) - 1))
    groups = rendered.split(":")[:-1]
    assert len(groups) == len(PAYLOAD)
    assert groups == [f"{b:02x}" for b in PAYLOAD]


def test_window_past_payload_end_is_truncated():
    assert render_window(PAYLOAD, PayloadWindow(8, 20)) == "a8:a9:"
    assert render_window(PAYLOAD, PayloadWindow(10, 20)) == ""
    assert render_window(b"", PayloadWindow(0, 4)) == ""


def test_hex_is_lowercase_two_digits():
    assert render_window(b"\x0a\xff\x00", PayloadWindow(0, 2)) == "0a:ff:00:"


def test_filter_columns():
    columns = PayloadWindowFilter(PayloadWindow(2, 5)).columns(PAYLOAD)
    assert columns == [
        ("Length", "int", Value.integer(10)),
        ("filter", "string", Value.text("a2:a3:a4:a5:")),
    ]
