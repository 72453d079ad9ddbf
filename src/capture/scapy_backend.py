"""
Scapy-based capture sources.

open_capture() is a context manager yielding an iterator of scapy packets,
either read from a pcap/pcapng file or sniffed from a live interface.
The underlying handle is closed however the block is left.
"""
import logging
import os
import time
from contextlib import contextmanager
from typing import Iterator

from scapy.all import PcapReader, Packet, conf
from scapy.error import Scapy_Exception

from .exceptions import CaptureOpenError

logger = logging.getLogger(__name__)

CAPTURE_FILE_SUFFIXES = (".pcap", ".pcapng", ".cap")

# Seconds to wait before polling a quiet live socket again
POLL_INTERVAL = 0.05


def is_capture_file(target: str) -> bool:
    """True if target names a capture file rather than a network interface."""
    return target.lower().endswith(CAPTURE_FILE_SUFFIXES)


def capture_name(target: str) -> str:
    """Base name used for the output file: 'dir/trace.pcap' -> 'trace'."""
    base = os.path.basename(target.rstrip("/\\")) or target
    if is_capture_file(base):
        base = os.path.splitext(base)[0]
    return base


@contextmanager
def open_capture(target: str, snaplen: int = 0, promiscuous: bool = False,
                 count: int = 0) -> Iterator[Iterator[Packet]]:
    """
    Open a capture file or live interface.

    Args:
        target: capture file path or interface name
        snaplen: live captures only; frames are cut to this many bytes
        promiscuous: live captures only
        count: live captures only; stop after this many packets (0 = no limit)

    Raises:
        CaptureOpenError: if the source cannot be opened
    """
    if is_capture_file(target):
        with _open_offline(target) as packets:
            yield packets
    else:
        with _open_live(target, snaplen, promiscuous, count) as packets:
            yield packets


@contextmanager
def _open_offline(path: str) -> Iterator[Iterator[Packet]]:
    try:
        reader = PcapReader(path)
    except (OSError, Scapy_Exception) as e:
        raise CaptureOpenError(f"Failed to open capture file {path}: {e}") from e

    logger.info("Reading packets from %s", path)
    try:
        yield iter(reader)
    finally:
        reader.close()


@contextmanager
def _open_live(iface: str, snaplen: int, promiscuous: bool, count: int) -> Iterator[Iterator[Packet]]:
    try:
        sock = conf.L2listen(iface=iface, promisc=promiscuous)
    except (OSError, Scapy_Exception) as e:
        raise CaptureOpenError(f"Failed to open interface {iface}: {e}") from e

    logger.info("Capturing on %s (snaplen=%d, promiscuous=%s)", iface, snaplen, promiscuous)
    try:
        yield _sniff(sock, snaplen, count)
    finally:
        sock.close()


def _sniff(sock, snaplen: int, count: int) -> Iterator[Packet]:
    received = 0
    while count <= 0 or received < count:
        packet = sock.recv()
        if packet is None:
            # Non-blocking sockets return None while the interface is quiet
            time.sleep(POLL_INTERVAL)
            continue
        received += 1
        yield _apply_snaplen(packet, snaplen)


def _apply_snaplen(packet: Packet, snaplen: int) -> Packet:
    data = bytes(packet)
    if snaplen <= 0 or len(data) <= snaplen:
        return packet
    cut = packet.__class__(data[:snaplen])
    cut.time = packet.time
    cut.wirelen = len(data)
    return cut
