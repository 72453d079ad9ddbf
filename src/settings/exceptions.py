"""
Configuration errors. All of them are fatal at startup.
"""


class ConfigError(Exception):
    """Configuration document could not be read or has the wrong shape."""
    pass


class CaptureSpecError(ConfigError):
    """Capture section is malformed (bad entry, bad Payload.filter bounds)."""
    pass
