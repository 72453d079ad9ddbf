"""
Export errors.
"""


class OutputPathError(Exception):
    """Output target is neither a .csv file path nor an existing directory."""
    pass
