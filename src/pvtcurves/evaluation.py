"""Evaluation of PVT curves and dynamic properties against a phase interpolant."""

import logging
import typing

import numpy as np

from pvtcurves._precision import get_dtype
from pvtcurves.errors import InternalLogicError, ValidationError
from pvtcurves.interpolants import PVTInterpolant
from pvtcurves.types import ArrayInput, Curve, Graph, RawCurve, as_value_array

logger = logging.getLogger(__name__)

__all__ = ["empty_curve", "raw_pvt_curve", "dynamic_property"]


def empty_curve() -> Curve:
    """Curve with a single graph holding no samples."""
    return [Graph.empty()]


def raw_pvt_curve(
    pvt: typing.Optional[PVTInterpolant], curve: RawCurve, region_id: int
) -> Curve:
    """
    Tabulated curve of a region, in SI units.

    The result never shares sample memory with the interpolant so it may be
    converted in place.

    :param pvt: Phase interpolant, `None` if the result set has no tabulated
        data for the phase.
    :param curve: Kind of curve.
    :param region_id: Zero-based PVT region identifier.
    :return: Copy of the interpolant's curve, or `empty_curve()` when `pvt` is `None`.
    """
    if pvt is None:
        return empty_curve()

    return [graph.copy() for graph in pvt.get_pvt_curve(curve, region_id)]


def dynamic_property(
    pvt: typing.Optional[PVTInterpolant],
    property: RawCurve,
    region_id: int,
    pressure: ArrayInput,
    mix_ratio: typing.Optional[ArrayInput] = None,
) -> np.ndarray:
    """
    Evaluate formation volume factor or viscosity at pressure/mixing ratio samples.

    All inputs and outputs are in SI units.

    :param pvt: Phase interpolant, `None` if the result set has no tabulated
        data for the phase.
    :param property: `RawCurve.FVF` or `RawCurve.VISCOSITY`.
    :param region_id: Zero-based PVT region identifier.
    :param pressure: Phase pressure samples.
    :param mix_ratio: Mixing ratio samples (Rs for oil, Rv for gas). Empty or
        `None` means zero for every pressure sample.
    :return: Property values, empty when `pvt` is `None`.
    :raises InternalLogicError: If `property` has no dynamic formula. Callers
        filter out `RawCurve.SATURATED_STATE` beforehand.
    """
    if pvt is None:
        return np.empty(0, dtype=get_dtype())

    if property is RawCurve.FVF:
        evaluate = pvt.formation_volume_factor
    elif property is RawCurve.VISCOSITY:
        evaluate = pvt.viscosity
    else:
        raise InternalLogicError(
            f"No dynamic evaluation exists for {property!r}"
        )

    press = as_value_array(pressure)
    ratio = as_value_array(mix_ratio)
    if ratio.size == 0:
        ratio = np.zeros_like(press)
    elif ratio.size != press.size:
        raise ValidationError(
            f"Mixing ratio has {ratio.size} samples, pressure has {press.size}"
        )

    return np.array(evaluate(region_id, ratio, press), dtype=get_dtype(), copy=True)
