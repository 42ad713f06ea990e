class BloomError(ValueError):
    """Base class for filters that cannot be built or restored."""


class InvalidSizeError(BloomError):
    """Byte size or expected item count is not a positive integer."""


class InvalidRateError(BloomError):
    """False positive rate is not strictly between 0 and 1."""


class InvalidStateError(BloomError):
    """Exported state or its encoded bytes cannot rebuild a filter."""


class IncompatibleFilterError(BloomError):
    """Filters differ in size, hash count or seeds and cannot be merged."""
