"""
Capture source errors.
"""


class CaptureOpenError(Exception):
    """Capture file or interface could not be opened."""
    pass
