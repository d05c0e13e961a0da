import typing

import numpy as np

from pvtcurves.types import Curve, RawCurve

__all__ = ["PVTInterpolant"]


@typing.runtime_checkable
class PVTInterpolant(typing.Protocol):
    """
    Protocol for the tabulated PVT property model of one phase (oil or gas).

    Implementations hold one table per PVT region and evaluate in strict SI
    units. For oil the mixing ratio is the dissolved gas/oil ratio (Rs); for gas
    it is the vaporised oil/gas ratio (Rv).
    """

    def get_pvt_curve(self, curve: RawCurve, region_id: int) -> Curve:
        """
        Tabulated curve of a region.

        :param curve: Kind of curve.
        :param region_id: Zero-based PVT region identifier.
        :return: One graph for immiscible fluids, one graph per tabulated mixing
            ratio for miscible fluids.
        """
        ...

    def formation_volume_factor(
        self, region_id: int, mix_ratio: np.ndarray, pressure: np.ndarray
    ) -> np.ndarray:
        """
        Formation volume factor at each (mixing ratio, pressure) sample.

        :param region_id: Zero-based PVT region identifier.
        :param mix_ratio: Mixing ratio samples, same length as `pressure`.
        :param pressure: Phase pressure samples (Pa).
        """
        ...

    def viscosity(
        self, region_id: int, mix_ratio: np.ndarray, pressure: np.ndarray
    ) -> np.ndarray:
        """
        Phase viscosity (Pa·s) at each (mixing ratio, pressure) sample.

        :param region_id: Zero-based PVT region identifier.
        :param mix_ratio: Mixing ratio samples, same length as `pressure`.
        :param pressure: Phase pressure samples (Pa).
        """
        ...
