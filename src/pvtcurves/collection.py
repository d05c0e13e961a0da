import logging
import numbers
import typing

import numpy as np

from pvtcurves._precision import get_dtype
from pvtcurves.config import Config
from pvtcurves.conversion import (
    convert_dynamic_inputs,
    convert_dynamic_property,
    convert_pvt_curve,
)
from pvtcurves.errors import InternalLogicError, ValidationError
from pvtcurves.evaluation import dynamic_property, empty_curve, raw_pvt_curve
from pvtcurves.grids import ActiveCellGrid
from pvtcurves.init import InitFileData
from pvtcurves.interpolants import PVTInterpolant
from pvtcurves.regions import RegionMap
from pvtcurves.types import ArrayInput, Curve, PhaseIndex, RawCurve, as_value_array
from pvtcurves.units import (
    UnitConvention,
    UnitSystem,
    create_unit_system,
    internal_unit_conventions,
    serialised_unit_conventions,
)

logger = logging.getLogger(__name__)

__all__ = ["ECLPvtCurveCollection"]

OutputUnits = typing.Optional[typing.Union[UnitSystem, UnitConvention, int]]


def _supported_phase(phase: typing.Any) -> typing.Optional[PhaseIndex]:
    """Oil or gas phase index for `phase`, `None` for anything else."""
    if isinstance(phase, bool) or not isinstance(phase, numbers.Integral):
        return None
    try:
        phase = PhaseIndex(phase)
    except ValueError:
        return None
    if phase in (PhaseIndex.LIQUID, PhaseIndex.VAPOUR):
        return phase
    return None


class ECLPvtCurveCollection:
    """
    Unit-aware PVT curves and dynamic properties of the oil and gas phases.

    Owns the cell to region map, the oil and gas interpolants and the native
    (serialised) and internal (SI) systems of units of one result set. An
    optional output system of units selects how results are expressed; without
    one, results are in SI.

    Invalid requests (unsupported phase, cell index out of bounds, no tabulated
    data for the phase) yield empty results rather than errors, so callers probe
    availability by checking for emptiness.

    Queries may run concurrently. `set_output_units` must not run concurrently
    with queries; callers serialise it themselves.

    Example:
    ```python
    grid = ActiveCellGrid.single(3)
    init = InitFileData.from_keywords(UnitConvention.FIELD, {"PVTNUM": [1, 1, 2]})
    pvt = ECLPvtCurveCollection(grid, init, oil=oil_interpolant, gas=gas_interpolant)

    pvt.set_output_units(UnitConvention.METRIC)
    curve = pvt.get_pvt_curve(RawCurve.FVF, PhaseIndex.LIQUID, active_cell=0)
    ```
    """

    def __init__(
        self,
        grid: ActiveCellGrid,
        init: InitFileData,
        oil: typing.Optional[PVTInterpolant] = None,
        gas: typing.Optional[PVTInterpolant] = None,
        config: typing.Optional[Config] = None,
    ) -> None:
        """
        :param grid: Active cell layout of the model.
        :param init: Initialisation data of the result set (region tags, unit convention).
        :param oil: Oil interpolant, `None` if the result set has no oil PVT data.
        :param gas: Gas interpolant, `None` if the result set has no gas PVT data.
        :param config: Collection configuration.
        """
        self.config = config or Config()
        self._region_map = RegionMap.from_grid(
            grid,
            init,
            keyword=self.config.region_keyword,
            default_region=self.config.default_region,
            warn_on_default=self.config.warn_on_default_region,
        )
        self._oil = oil
        self._gas = gas
        self._usys_native = serialised_unit_conventions(init, self.config.constants)
        self._usys_internal = internal_unit_conventions(self.config.constants)
        self._usys_output: typing.Optional[UnitSystem] = None

        logger.info(
            f"PVT curve collection initialised: {self._region_map.num_cells} cells, "
            f"{self._region_map.num_regions} region(s), native units {self._usys_native.name}, "
            f"oil={'yes' if oil is not None else 'no'}, gas={'yes' if gas is not None else 'no'}"
        )

    @property
    def region_map(self) -> RegionMap:
        return self._region_map

    @property
    def num_cells(self) -> int:
        return self._region_map.num_cells

    @property
    def native_units(self) -> UnitSystem:
        """System of units the result set is serialised in."""
        return self._usys_native

    @property
    def internal_units(self) -> UnitSystem:
        """Strict SI system of units used for all computations."""
        return self._usys_internal

    @property
    def output_units(self) -> typing.Optional[UnitSystem]:
        """System of units results are expressed in, `None` for SI."""
        return self._usys_output

    def set_output_units(self, usys: OutputUnits) -> None:
        """
        Replace the system of units for results.

        :param usys: System of units, or a unit convention to build the standard
            system for. `None` reverts to SI results.
        :raises ValidationError: If `usys` is a `bool` or an unknown convention code.
        """
        if isinstance(usys, bool):
            raise ValidationError(f"Invalid output unit convention {usys!r}")
        if usys is not None and not isinstance(usys, UnitSystem):
            usys = create_unit_system(usys, self.config.constants)

        self._usys_output = usys
        logger.debug(
            f"Output units set to {usys.name if usys is not None else 'SI (internal)'}"
        )

    def has_phase(self, phase: typing.Any) -> bool:
        """Whether the result set provides tabulated PVT data for `phase`."""
        return self._interpolant(_supported_phase(phase)) is not None

    def is_valid_request(self, phase: typing.Any, active_cell: typing.Any) -> bool:
        """Whether `phase` is oil or gas and `active_cell` is within bounds."""
        if _supported_phase(phase) is None:
            # We support "liquid" and "vapour" phase (oil/gas) properties only
            return False
        return self._region_map.is_valid_cell(active_cell)

    def _interpolant(
        self, phase: typing.Optional[PhaseIndex]
    ) -> typing.Optional[PVTInterpolant]:
        if phase == PhaseIndex.LIQUID:
            return self._oil
        if phase == PhaseIndex.VAPOUR:
            return self._gas
        return None

    def get_pvt_curve(
        self, curve: RawCurve, phase: PhaseIndex, active_cell: int
    ) -> Curve:
        """
        Tabulated PVT curve of the region containing an active cell.

        :param curve: Kind of curve.
        :param phase: `PhaseIndex.LIQUID` (oil) or `PhaseIndex.VAPOUR` (gas).
        :param active_cell: Global active cell index.
        :return: Curve in output units (SI if none are set). A single empty graph
            for invalid requests or when the phase has no tabulated data.
        :raises InternalLogicError: If `curve` is not a `RawCurve`.
        """
        if not self.is_valid_request(phase, active_cell):
            logger.debug(
                f"Rejected {curve!r} curve request: phase={phase!r}, cell={active_cell!r}"
            )
            return empty_curve()
        if not isinstance(curve, RawCurve):
            raise InternalLogicError(f"Unknown PVT curve kind {curve!r}")

        phase = typing.cast(PhaseIndex, _supported_phase(phase))
        usys_output = self._usys_output
        region_id = self._region_map.resolve(active_cell)

        graphs = raw_pvt_curve(self._interpolant(phase), curve, region_id)
        if usys_output is None:
            return graphs

        return convert_pvt_curve(
            graphs, curve, phase, self._usys_internal, usys_output
        )

    def get_dynamic_property_si(
        self,
        property: RawCurve,
        phase: PhaseIndex,
        active_cell: int,
        pressure: ArrayInput,
        mix_ratio: typing.Optional[ArrayInput] = None,
    ) -> np.ndarray:
        """
        Evaluate formation volume factor or viscosity at SI samples.

        :param property: `RawCurve.FVF` or `RawCurve.VISCOSITY`. The saturated
            state has no dynamic formula and always yields an empty result.
        :param phase: `PhaseIndex.LIQUID` (oil) or `PhaseIndex.VAPOUR` (gas).
        :param active_cell: Global active cell index.
        :param pressure: Phase pressure samples (Pa).
        :param mix_ratio: Rs (oil) or Rv (gas) samples in SI. Empty means zero.
        :return: SI property values, empty for invalid requests.
        """
        if (
            not self.is_valid_request(phase, active_cell)
            or property is RawCurve.SATURATED_STATE
        ):
            logger.debug(
                f"Rejected dynamic {property!r} request: phase={phase!r}, cell={active_cell!r}"
            )
            return np.empty(0, dtype=get_dtype())

        phase = typing.cast(PhaseIndex, _supported_phase(phase))
        region_id = self._region_map.resolve(active_cell)
        return dynamic_property(
            self._interpolant(phase), property, region_id, pressure, mix_ratio
        )

    def get_dynamic_property_native(
        self,
        property: RawCurve,
        phase: PhaseIndex,
        active_cell: int,
        pressure: ArrayInput,
        mix_ratio: typing.Optional[ArrayInput] = None,
    ) -> np.ndarray:
        """
        Evaluate formation volume factor or viscosity at samples in native units.

        Inputs are copied, converted to SI, evaluated, and the result is
        expressed in output units (SI if none are set). The caller's arrays are
        never modified.

        :param property: `RawCurve.FVF` or `RawCurve.VISCOSITY`.
        :param phase: `PhaseIndex.LIQUID` (oil) or `PhaseIndex.VAPOUR` (gas).
        :param active_cell: Global active cell index.
        :param pressure: Phase pressure samples in native units.
        :param mix_ratio: Rs (oil) or Rv (gas) samples in native units. Empty means zero.
        :return: Property values, empty for invalid requests.
        """
        if (
            not self.is_valid_request(phase, active_cell)
            or property is RawCurve.SATURATED_STATE
        ):
            logger.debug(
                f"Rejected dynamic {property!r} request: phase={phase!r}, cell={active_cell!r}"
            )
            return np.empty(0, dtype=get_dtype())

        phase = typing.cast(PhaseIndex, _supported_phase(phase))
        usys_output = self._usys_output

        # 1) Native -> SI, on private copies
        press, ratio = convert_dynamic_inputs(
            as_value_array(pressure),
            as_value_array(mix_ratio),
            phase,
            self._usys_native,
            self._usys_internal,
        )

        # 2) Evaluate in strict SI
        values = self.get_dynamic_property_si(
            property, phase, active_cell, press, ratio
        )
        if usys_output is None:
            return values

        # 3) SI -> output units
        return convert_dynamic_property(
            values, property, phase, self._usys_internal, usys_output
        )
