import enum
import typing

import attrs
import numpy as np
from typing_extensions import Self, TypeAlias

from pvtcurves._precision import get_dtype
from pvtcurves.errors import ValidationError


__all__ = [
    "PhaseIndex",
    "RawCurve",
    "Graph",
    "Curve",
    "OneDimensionalArray",
    "ArrayInput",
    "as_value_array",
]

OneDimensionalArray: TypeAlias = np.ndarray
"""1D array of floating point samples, in the precision given by `get_dtype()`."""
ArrayInput = typing.Union[OneDimensionalArray, typing.Sequence[float]]
"""Anything that can be turned into a 1D array of samples."""


class PhaseIndex(enum.IntEnum):
    """Enum representing the fluid phases of a result set."""

    AQUA = 0
    """Water phase. Not supported by PVT curve queries."""
    LIQUID = 1
    """Oil phase."""
    VAPOUR = 2
    """Gas phase."""


class RawCurve(enum.Enum):
    """
    Enum representing the kind of PVT curve (or dynamic property) requested.

    The kind selects both the interpolant operation and which physical
    quantities occupy the axes of the resulting curve.
    """

    FVF = "fvf"
    """Formation volume factor."""
    VISCOSITY = "viscosity"
    """Phase viscosity."""
    SATURATED_STATE = "saturated_state"
    """Saturated state boundary, mixing ratio as a function of pressure."""


def as_value_array(values: typing.Optional[ArrayInput]) -> OneDimensionalArray:
    """
    Copy `values` into a new 1D array of the current precision.

    The returned array never shares memory with `values`.

    :param values: Sequence or array of samples. `None` is treated as empty.
    :return: Freshly allocated 1D array.
    """
    if values is None:
        return np.empty(0, dtype=get_dtype())
    array = np.array(values, dtype=get_dtype(), copy=True)
    if array.ndim != 1:
        raise ValidationError(f"Expected 1-dimensional samples, got shape {array.shape}")
    return array


@attrs.frozen(slots=True)
class Graph:
    """
    One two-column sample series of a PVT curve.

    The physical quantity on each axis depends on the curve kind, the phase and,
    for gas, on whether the fluid is miscible (see `pvtcurves.conversion`).
    The graph is frozen but its arrays are not: unit conversion rescales them
    in place, and callers mutate samples through the arrays (`graph.y[...] *= k`)
    rather than by rebinding `x` or `y`.
    """

    x: OneDimensionalArray = attrs.field(converter=as_value_array)
    """Independent variable samples (pressure or mixing ratio)."""
    y: OneDimensionalArray = attrs.field(converter=as_value_array)
    """Dependent variable samples (property value or mixing ratio)."""

    def __attrs_post_init__(self) -> None:
        if self.x.shape != self.y.shape:
            raise ValidationError(
                f"Graph columns must have equal length, got {self.x.size} and {self.y.size}"
            )

    @classmethod
    def empty(cls) -> Self:
        """Graph with zero samples."""
        return cls(x=(), y=())

    def copy(self) -> Self:
        """Deep copy. The new graph does not share sample memory with this one."""
        return type(self)(x=self.x, y=self.y)

    def __len__(self) -> int:
        return int(self.x.size)

    @property
    def is_empty(self) -> bool:
        return self.x.size == 0


Curve = typing.List[Graph]
"""
A PVT curve. More than one graph denotes a miscible fluid, one graph per fixed
mixing ratio; a single graph denotes an immiscible fluid or a directly sampled
property.
"""
