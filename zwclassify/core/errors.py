"""Domain-specific errors for zwclassify.

Classification itself never raises: a missing data point is a normal outcome.
These errors cover loading quirk tables and device description files.
"""


class ZWClassifyError(Exception):
    """Base error for zwclassify."""


class QuirkValidationError(ZWClassifyError):
    """Raised when a quirk file does not conform to schema or semantics."""


class QuirkLoadError(ZWClassifyError):
    """Raised when reading quirk sources fails."""


class DeviceValidationError(ZWClassifyError):
    """Raised when a device description file is malformed."""


class DeviceLoadError(ZWClassifyError):
    """Raised when a device description file cannot be read."""
