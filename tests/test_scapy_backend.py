"""
Tests for the scapy capture source helpers.
Run with: python -m pytest tests/test_scapy_backend.py
"""
import os
import sys

# Add src to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
src_path = os.path.join(project_root, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from scapy.all import IP, UDP, Ether, Raw

from capture import scapy_backend
from capture.packet_decoder import packet_metadata
from capture.scapy_backend import capture_name, is_capture_file


class QuietSocket:
    """Live socket stand-in: returns None until its queued frames show up."""

    def __init__(self, frames, idle=2):
        self.frames = list(frames)
        self.idle = idle

    def recv(self):
        if self.idle:
            self.idle -= 1
            return None
        return self.frames.pop(0)


def _frame():
    pkt = Ether(bytes(Ether() / IP(src="10.0.0.1", dst="10.0.0.2") / UDP(sport=1, dport=2) / Raw(b"x" * 10)))
    pkt.time = 1700000000.0
    return pkt


def test_capture_file_detection():
    assert is_capture_file("trace.pcap")
    assert is_capture_file("TRACE.PCAPNG")
    assert not is_capture_file("en0")


def test_capture_name():
    assert capture_name(os.path.join("captures", "trace.pcap")) == "trace"
    assert capture_name("en0") == "en0"


def test_sniff_backs_off_while_socket_is_quiet(monkeypatch):
    naps = []
    monkeypatch.setattr(scapy_backend.time, "sleep", naps.append)

    packets = list(scapy_backend._sniff(QuietSocket([_frame(), _frame()]), snaplen=0, count=2))

    assert len(packets) == 2
    assert naps == [scapy_backend.POLL_INTERVAL] * 2


def test_sniff_stops_after_count(monkeypatch):
    monkeypatch.setattr(scapy_backend.time, "sleep", lambda _: None)
    sock = QuietSocket([_frame(), _frame(), _frame()], idle=0)

    packets = list(scapy_backend._sniff(sock, snaplen=0, count=1))

    assert len(packets) == 1
    assert len(sock.frames) == 2


def test_snaplen_cuts_frame_and_keeps_wire_length():
    frame = _frame()
    cut = scapy_backend._apply_snaplen(frame, 20)
    meta = packet_metadata(cut)

    assert meta.captured_length == 20
    assert meta.original_length == len(bytes(frame))
    assert meta.is_truncated
    assert cut.time == frame.time


def test_snaplen_leaves_short_frames_alone():
    frame = _frame()
    assert scapy_backend._apply_snaplen(frame, 1500) is frame
    assert scapy_backend._apply_snaplen(frame, 0) is frame
