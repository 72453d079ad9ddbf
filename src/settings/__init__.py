"""
Configuration document and capture specification.
"""

from .exceptions import ConfigError, CaptureSpecError
from .loader import CapanaConfig, RunConfig, PolicyConfig, load_config, parse_config
from .capture_spec import CaptureSpec, PayloadWindow, resolve_capture_spec

__all__ = [
    'ConfigError',
    'CaptureSpecError',
    'CapanaConfig',
    'RunConfig',
    'PolicyConfig',
    'load_config',
    'parse_config',
    'CaptureSpec',
    'PayloadWindow',
    'resolve_capture_spec',
]
