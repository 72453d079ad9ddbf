"""
Capture sources and layer decoding (scapy).
"""

from .exceptions import CaptureOpenError
from .scapy_backend import open_capture, is_capture_file, capture_name
from .packet_decoder import ScapyLayerDecoder

__all__ = [
    'CaptureOpenError',
    'open_capture',
    'is_capture_file',
    'capture_name',
    'ScapyLayerDecoder',
]
