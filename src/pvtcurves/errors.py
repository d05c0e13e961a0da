class PVTCurveError(Exception):
    """Base class for all pvtcurves-related errors."""

    pass


class ValidationError(PVTCurveError, ValueError):
    """Raised when input or collaborator data fails validation checks."""

    pass


class UnitConversionError(PVTCurveError):
    """Raised when a unit converter is applied before it is fully specified."""

    pass


class InternalLogicError(PVTCurveError, RuntimeError):
    """
    Raised when the curve/unit dispatch reaches a state it has no rule for.

    This signals a programming defect (e.g. an enumeration was extended without
    updating the dispatch tables), never bad caller input. It is not caught
    anywhere in the package.
    """

    pass
