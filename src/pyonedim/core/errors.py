"""
Exceptions raised by PyOneDim components.
"""


class OneDimError(Exception):
    """Base class for errors raised by flow domains and their components."""


class InvalidGridError(OneDimError, ValueError):
    """Grid coordinates are not strictly increasing."""


class UnsupportedConfigurationError(OneDimError, ValueError):
    """A requested option cannot be combined with the current setup."""


class UnknownTransportModelError(OneDimError, RuntimeError):
    """No usable transport model has been configured."""


class DataLengthMismatchError(OneDimError, ValueError):
    """A restored array does not match the expected point or species count."""
