"""
Systems of units and single-quantity unit converters.

A `UnitSystem` records the SI value of one unit of each basic quantity. Derived
quantities (mixing ratios, formation volume factors) are scaled from those.
Converters are immutable and built fluently:

```python
import numpy as np
from pvtcurves.units import (
    Pressure,
    UnitConvention,
    create_unit_system,
    internal_unit_conventions,
)

field = create_unit_system(UnitConvention.FIELD)
si = internal_unit_conventions()
pressures = np.array([14.696, 3000.0])
Pressure().from_(field).to(si).applied_to(pressures)  # now in Pa
```
"""

import enum
import logging
import math
import typing

import attrs
import numpy as np
from typing_extensions import Self

from pvtcurves.constants import Constants, c
from pvtcurves.errors import UnitConversionError, ValidationError

if typing.TYPE_CHECKING:
    from pvtcurves.init import InitFileData

logger = logging.getLogger(__name__)

__all__ = [
    "UnitConvention",
    "UnitSystem",
    "PhysicalQuantity",
    "Pressure",
    "Viscosity",
    "DissolvedGasOilRatio",
    "VaporisedOilGasRatio",
    "OilFVF",
    "GasFVF",
    "create_unit_system",
    "internal_unit_conventions",
    "serialised_unit_conventions",
]


class UnitConvention(enum.IntEnum):
    """
    Unit convention codes, as recorded in the header of a result set.

    Codes 1 through 4 are the conventions a simulator may serialise results in.
    SI is the internal reference frame used for all computations.
    """

    SI = 0
    METRIC = 1
    FIELD = 2
    LAB = 3
    PVT_M = 4


def _positive_finite(instance: typing.Any, attribute: attrs.Attribute, value: float) -> None:
    if not (math.isfinite(value) and value > 0.0):
        raise ValidationError(
            f"Unit scale `{attribute.name}` must be positive and finite, got {value}"
        )


@attrs.frozen(slots=True)
class UnitSystem:
    """
    Immutable description of one system of units.

    Every scale is the SI value of one unit of the quantity in this system,
    e.g. `pressure=1e5` for a system measuring pressure in bar.
    """

    name: str
    """Human readable name of the system (e.g. 'FIELD')."""
    pressure: float = attrs.field(validator=_positive_finite)
    """Pressure unit (Pa)."""
    reservoir_volume: float = attrs.field(validator=_positive_finite)
    """Reservoir volume unit (m³)."""
    surface_volume_liquid: float = attrs.field(validator=_positive_finite)
    """Liquid surface volume unit (m³)."""
    surface_volume_gas: float = attrs.field(validator=_positive_finite)
    """Gas surface volume unit (m³)."""
    viscosity: float = attrs.field(validator=_positive_finite)
    """Viscosity unit (Pa·s)."""
    density: float = attrs.field(validator=_positive_finite)
    """Density unit (kg/m³)."""
    depth: float = attrs.field(validator=_positive_finite)
    """Length/depth unit (m)."""
    time: float = attrs.field(validator=_positive_finite)
    """Time unit (s)."""
    convention: typing.Optional[UnitConvention] = None
    """Convention this system was built from, if any."""

    def dissolved_gas_oil_ratio(self) -> float:
        """Rs unit: gas surface volume per liquid surface volume."""
        return self.surface_volume_gas / self.surface_volume_liquid

    def vaporised_oil_gas_ratio(self) -> float:
        """Rv unit: liquid surface volume per gas surface volume."""
        return self.surface_volume_liquid / self.surface_volume_gas

    def oil_formation_volume_factor(self) -> float:
        """Bo unit: reservoir volume per liquid surface volume."""
        return self.reservoir_volume / self.surface_volume_liquid

    def gas_formation_volume_factor(self) -> float:
        """Bg unit: reservoir volume per gas surface volume."""
        return self.reservoir_volume / self.surface_volume_gas

    def __str__(self) -> str:
        return self.name


UnitScale = typing.Callable[[UnitSystem], float]


@attrs.frozen(slots=True)
class PhysicalQuantity:
    """
    Converter for a single physical quantity between two systems of units.

    Instances are immutable; `from_` and `to` return new converters. Only a
    converter with both a source and a target system may be applied.
    """

    name: str
    """Name of the quantity being converted."""
    scale: UnitScale = attrs.field(repr=False)
    """Returns the SI value of one unit of this quantity in a given system."""
    source: typing.Optional[UnitSystem] = None
    target: typing.Optional[UnitSystem] = None

    def from_(self, usys: UnitSystem) -> Self:
        """Converter with `usys` as the system values are currently expressed in."""
        return attrs.evolve(self, source=usys)

    def to(self, usys: UnitSystem) -> Self:
        """Converter with `usys` as the system values should be expressed in."""
        return attrs.evolve(self, target=usys)

    @property
    def factor(self) -> float:
        """Multiplicative factor taking values from the source to the target system."""
        if self.source is None or self.target is None:
            raise UnitConversionError(
                f"{self.name} converter requires both a source and a target system of units"
            )
        return self.scale(self.source) / self.scale(self.target)

    def applied_to(self, values: np.ndarray) -> np.ndarray:
        """
        Convert `values` in place.

        :param values: Floating point array. Modified in place.
        :return: `values`, for chaining.
        """
        if not isinstance(values, np.ndarray):
            raise ValidationError(
                f"In-place {self.name} conversion requires a numpy array, got {type(values).__name__}"
            )
        factor = self.factor
        if factor != 1.0:
            values *= factor
        return values


def Pressure() -> PhysicalQuantity:
    """Pressure converter (Po, Pg)."""
    return PhysicalQuantity(name="Pressure", scale=lambda usys: usys.pressure)


def Viscosity() -> PhysicalQuantity:
    """Viscosity converter (μo, μg)."""
    return PhysicalQuantity(name="Viscosity", scale=lambda usys: usys.viscosity)


def DissolvedGasOilRatio() -> PhysicalQuantity:
    """Dissolved gas/oil ratio converter (Rs)."""
    return PhysicalQuantity(
        name="DissolvedGasOilRatio", scale=UnitSystem.dissolved_gas_oil_ratio
    )


def VaporisedOilGasRatio() -> PhysicalQuantity:
    """Vaporised oil/gas ratio converter (Rv)."""
    return PhysicalQuantity(
        name="VaporisedOilGasRatio", scale=UnitSystem.vaporised_oil_gas_ratio
    )


def OilFVF() -> PhysicalQuantity:
    """Oil formation volume factor converter (Bo)."""
    return PhysicalQuantity(name="OilFVF", scale=UnitSystem.oil_formation_volume_factor)


def GasFVF() -> PhysicalQuantity:
    """Gas formation volume factor converter (Bg)."""
    return PhysicalQuantity(name="GasFVF", scale=UnitSystem.gas_formation_volume_factor)


def _si_units(k: typing.Any) -> UnitSystem:
    return UnitSystem(
        name="SI",
        pressure=k.PASCAL,
        reservoir_volume=k.CUBIC_METER,
        surface_volume_liquid=k.CUBIC_METER,
        surface_volume_gas=k.CUBIC_METER,
        viscosity=k.PASCAL_SECOND,
        density=k.KILOGRAM / k.CUBIC_METER,
        depth=k.METER,
        time=k.SECOND,
        convention=UnitConvention.SI,
    )


def _metric_units(k: typing.Any) -> UnitSystem:
    return UnitSystem(
        name="METRIC",
        pressure=k.BAR,
        reservoir_volume=k.CUBIC_METER,
        surface_volume_liquid=k.CUBIC_METER,
        surface_volume_gas=k.CUBIC_METER,
        viscosity=k.CENTIPOISE,
        density=k.KILOGRAM / k.CUBIC_METER,
        depth=k.METER,
        time=k.DAY,
        convention=UnitConvention.METRIC,
    )


def _field_units(k: typing.Any) -> UnitSystem:
    return UnitSystem(
        name="FIELD",
        pressure=k.PSI,
        reservoir_volume=k.BARREL,
        surface_volume_liquid=k.BARREL,
        surface_volume_gas=k.CUBIC_FOOT,
        viscosity=k.CENTIPOISE,
        density=k.POUND / k.CUBIC_FOOT,
        depth=k.FOOT,
        time=k.DAY,
        convention=UnitConvention.FIELD,
    )


def _lab_units(k: typing.Any) -> UnitSystem:
    return UnitSystem(
        name="LAB",
        pressure=k.ATM,
        reservoir_volume=k.CUBIC_CENTIMETER,
        surface_volume_liquid=k.CUBIC_CENTIMETER,
        surface_volume_gas=k.CUBIC_CENTIMETER,
        viscosity=k.CENTIPOISE,
        density=k.GRAM / k.CUBIC_CENTIMETER,
        depth=k.CENTIMETER,
        time=k.HOUR,
        convention=UnitConvention.LAB,
    )


def _pvt_m_units(k: typing.Any) -> UnitSystem:
    return UnitSystem(
        name="PVT-M",
        pressure=k.ATM,
        reservoir_volume=k.CUBIC_METER,
        surface_volume_liquid=k.CUBIC_METER,
        surface_volume_gas=k.CUBIC_METER,
        viscosity=k.CENTIPOISE,
        density=k.KILOGRAM / k.CUBIC_METER,
        depth=k.METER,
        time=k.DAY,
        convention=UnitConvention.PVT_M,
    )


_UNIT_SYSTEM_BUILDERS: typing.Dict[
    UnitConvention, typing.Callable[[typing.Any], UnitSystem]
] = {
    UnitConvention.SI: _si_units,
    UnitConvention.METRIC: _metric_units,
    UnitConvention.FIELD: _field_units,
    UnitConvention.LAB: _lab_units,
    UnitConvention.PVT_M: _pvt_m_units,
}


def create_unit_system(
    convention: typing.Union[UnitConvention, int],
    constants: typing.Optional[Constants] = None,
) -> UnitSystem:
    """
    Build the standard system of units for a unit convention.

    :param convention: Unit convention, or its integer code.
    :param constants: Scale factors to build from. Defaults to the global constants `c`.
    :return: Unit system for `convention`.
    :raises ValidationError: If `convention` is not a known unit convention.
    """
    try:
        convention = UnitConvention(convention)
    except ValueError:
        raise ValidationError(f"Unsupported unit convention: {convention!r}") from None

    return _UNIT_SYSTEM_BUILDERS[convention](constants if constants is not None else c)


def internal_unit_conventions(
    constants: typing.Optional[Constants] = None,
) -> UnitSystem:
    """Strict SI system of units, the reference frame for all computations."""
    return create_unit_system(UnitConvention.SI, constants)


def serialised_unit_conventions(
    init: "InitFileData", constants: typing.Optional[Constants] = None
) -> UnitSystem:
    """
    System of units the result set's data is serialised in.

    :param init: Initialisation data whose header records the unit convention.
    :param constants: Scale factors to build from. Defaults to the global constants `c`.
    """
    usys = create_unit_system(init.unit_convention, constants)
    logger.debug(f"Result set serialised in {usys.name} units")
    return usys
