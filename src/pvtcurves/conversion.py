"""
Unit conversion of PVT curves and property values.

Which physical quantity sits on each axis of a curve depends on the curve kind,
the phase and, for gas, on miscibility:

| Curve            | Phase  | Graphs | X axis | Y axis |
|------------------|--------|--------|--------|--------|
| FVF              | Liquid | any    | Po     | Bo     |
| FVF              | Vapour | <= 1   | Pg     | Bg     |
| FVF              | Vapour | > 1    | Rv     | Bg     |
| Viscosity        | Liquid | any    | Po     | μo     |
| Viscosity        | Vapour | <= 1   | Pg     | μg     |
| Viscosity        | Vapour | > 1    | Rv     | μg     |
| Saturated state  | Liquid | any    | Po     | Rs     |
| Saturated state  | Vapour | any    | Pg     | Rv     |

Miscibility is inferred from the number of graphs: an immiscible fluid is a
single graph (or none), a miscible fluid has one graph per tabulated mixing
ratio.

Every function takes ownership of the container it is given, converts it in
place and returns it.
"""

import logging
import typing

import numpy as np

from pvtcurves import units
from pvtcurves.errors import InternalLogicError
from pvtcurves.types import Curve, Graph, PhaseIndex, RawCurve
from pvtcurves.units import PhysicalQuantity, UnitSystem

logger = logging.getLogger(__name__)

__all__ = [
    "is_miscible",
    "convert_curve",
    "convert_fvf_curve",
    "convert_viscosity_curve",
    "convert_saturated_state_curve",
    "convert_pvt_curve",
    "convert_dynamic_property",
    "convert_dynamic_inputs",
]


def _check_phase(phase: PhaseIndex) -> None:
    if phase not in (PhaseIndex.LIQUID, PhaseIndex.VAPOUR):
        raise InternalLogicError(f"Unsupported phase {phase!r} reached unit conversion")


def is_miscible(curve: Curve) -> bool:
    """
    Whether a curve describes a miscible fluid.

    The interpolants produce zero or one graph for immiscible fluids and one
    graph per tabulated mixing ratio for miscible fluids.

    :raises InternalLogicError: If `curve` is not a list of well-formed graphs.
    """
    if not isinstance(curve, list):
        raise InternalLogicError(
            f"PVT curve must be a list of graphs, got {type(curve).__name__}"
        )
    for graph in curve:
        if not isinstance(graph, Graph) or graph.x.shape != graph.y.shape:
            raise InternalLogicError(f"Malformed PVT curve graph: {graph!r}")
    return len(curve) > 1


def convert_curve(
    curve: Curve, cvrt_x: PhysicalQuantity, cvrt_y: PhysicalQuantity
) -> Curve:
    """
    Apply `cvrt_x` to the first column and `cvrt_y` to the second column of
    every graph.
    """
    is_miscible(curve)
    # Resolve both factors before touching any samples
    factor_x, factor_y = cvrt_x.factor, cvrt_y.factor
    logger.debug(
        f"Converting {len(curve)} graph(s): x as {cvrt_x.name} (x{factor_x:.6g}), "
        f"y as {cvrt_y.name} (x{factor_y:.6g})"
    )
    for graph in curve:
        cvrt_x.applied_to(graph.x)
        cvrt_y.applied_to(graph.y)
    return curve


def convert_fvf_curve(
    curve: Curve, phase: PhaseIndex, usys_from: UnitSystem, usys_to: UnitSystem
) -> Curve:
    _check_phase(phase)

    if phase == PhaseIndex.LIQUID:
        # Oil FVF.  First column is pressure, second column is Bo.
        return convert_curve(
            curve,
            units.Pressure().from_(usys_from).to(usys_to),
            units.OilFVF().from_(usys_from).to(usys_to),
        )

    cvrt_y = units.GasFVF().from_(usys_from).to(usys_to)
    if not is_miscible(curve):
        # Immiscible gas.  First column is Pg.
        return convert_curve(
            curve, units.Pressure().from_(usys_from).to(usys_to), cvrt_y
        )

    # Miscible gas.  First column is Rv.
    return convert_curve(
        curve, units.VaporisedOilGasRatio().from_(usys_from).to(usys_to), cvrt_y
    )


def convert_viscosity_curve(
    curve: Curve, phase: PhaseIndex, usys_from: UnitSystem, usys_to: UnitSystem
) -> Curve:
    _check_phase(phase)

    # Second column is viscosity irrespective of phase or miscibility
    cvrt_y = units.Viscosity().from_(usys_from).to(usys_to)

    if phase == PhaseIndex.LIQUID or not is_miscible(curve):
        return convert_curve(
            curve, units.Pressure().from_(usys_from).to(usys_to), cvrt_y
        )

    # Miscible gas.  First column is Rv.
    return convert_curve(
        curve, units.VaporisedOilGasRatio().from_(usys_from).to(usys_to), cvrt_y
    )


def convert_saturated_state_curve(
    curve: Curve, phase: PhaseIndex, usys_from: UnitSystem, usys_to: UnitSystem
) -> Curve:
    _check_phase(phase)

    # First column is Po or Pg
    cvrt_x = units.Pressure().from_(usys_from).to(usys_to)

    if phase == PhaseIndex.LIQUID:
        cvrt_y = units.DissolvedGasOilRatio().from_(usys_from).to(usys_to)
    else:
        cvrt_y = units.VaporisedOilGasRatio().from_(usys_from).to(usys_to)

    return convert_curve(curve, cvrt_x, cvrt_y)


CurveConverter = typing.Callable[[Curve, PhaseIndex, UnitSystem, UnitSystem], Curve]

_CURVE_CONVERTERS: typing.Dict[RawCurve, CurveConverter] = {
    RawCurve.FVF: convert_fvf_curve,
    RawCurve.VISCOSITY: convert_viscosity_curve,
    RawCurve.SATURATED_STATE: convert_saturated_state_curve,
}


def convert_pvt_curve(
    curve: Curve,
    kind: RawCurve,
    phase: PhaseIndex,
    usys_from: UnitSystem,
    usys_to: UnitSystem,
) -> Curve:
    """
    Convert a PVT curve between systems of units, in place.

    :param curve: Curve to convert. Ownership passes to this function.
    :param kind: Kind of curve, selects the axis quantities.
    :param phase: `PhaseIndex.LIQUID` or `PhaseIndex.VAPOUR`.
    :param usys_from: System the curve is expressed in.
    :param usys_to: System to express the curve in.
    :return: The converted curve.
    :raises InternalLogicError: If there is no conversion rule for `kind`.
    """
    try:
        converter = _CURVE_CONVERTERS[kind]
    except (KeyError, TypeError):
        raise InternalLogicError(f"No unit conversion rule for curve {kind!r}") from None

    return converter(curve, phase, usys_from, usys_to)


def convert_dynamic_property(
    values: np.ndarray,
    property: RawCurve,
    phase: PhaseIndex,
    usys_from: UnitSystem,
    usys_to: UnitSystem,
) -> np.ndarray:
    """
    Convert evaluated formation volume factor or viscosity values, in place.

    :raises InternalLogicError: If `property` is not FVF or viscosity.
    """
    _check_phase(phase)

    if property is RawCurve.VISCOSITY:
        cvrt = units.Viscosity()
    elif property is RawCurve.FVF:
        cvrt = units.OilFVF() if phase == PhaseIndex.LIQUID else units.GasFVF()
    else:
        raise InternalLogicError(f"No unit conversion rule for property {property!r}")

    return cvrt.from_(usys_from).to(usys_to).applied_to(values)


def convert_dynamic_inputs(
    pressure: np.ndarray,
    mix_ratio: np.ndarray,
    phase: PhaseIndex,
    usys_from: UnitSystem,
    usys_to: UnitSystem,
) -> typing.Tuple[np.ndarray, np.ndarray]:
    """
    Convert phase pressure and mixing ratio samples, in place.

    The mixing ratio is Rs for oil and Rv for gas.
    """
    _check_phase(phase)

    cvrt_p = units.Pressure().from_(usys_from).to(usys_to)
    if phase == PhaseIndex.LIQUID:
        cvrt_r = units.DissolvedGasOilRatio().from_(usys_from).to(usys_to)
    else:
        cvrt_r = units.VaporisedOilGasRatio().from_(usys_from).to(usys_to)

    return cvrt_p.applied_to(pressure), cvrt_r.applied_to(mix_ratio)
