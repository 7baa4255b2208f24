"""Exception taxonomy for material and scattering construction.

All errors are reported synchronously to the caller of the operation that
detected them. None are retried automatically.
"""


class XtalScatterError(Exception):
    """Base class for all errors raised by xtal_scatter."""

    pass


class BadInput(XtalScatterError, ValueError):
    """Raised for malformed configuration strings or invalid material data."""

    pass


class MissingInfo(XtalScatterError, LookupError):
    """Raised when a required physical quantity is absent from a description."""

    pass


class InvalidInput(XtalScatterError, ValueError):
    """Raised for structural violations in a composition.

    Examples are duplicate elements or out-of-range atomic numbers.
    """

    pass
