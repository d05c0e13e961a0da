"""Pytest configuration.

Makes `import pvtcurves` work without installing the package, and provides
recording fake interpolants in strict SI units.
"""

import sys
from pathlib import Path

_SRC = Path(__file__).resolve().parents[1] / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

import numpy as np  # noqa: E402
import pytest  # noqa: E402

from pvtcurves import (  # noqa: E402
    ActiveCellGrid,
    ECLPvtCurveCollection,
    Graph,
    InitFileData,
    RawCurve,
    UnitConvention,
)


def oil_fvf(region_id, rs, po):
    # Bo = 1.2 at (region 0, Rs 0, Po 200)
    return 1.2 + 0.1 * region_id + 1.0e-3 * rs + 1.0e-9 * (po - 200.0)


def oil_viscosity(region_id, rs, po):
    return 1.0e-3 * (1.0 + region_id) * (1.0 + 1.0e-8 * po) + 1.0e-6 * rs


def gas_fvf(region_id, rv, pg):
    return 5.0e-3 * (1.0 + region_id) / (1.0 + 1.0e-7 * pg) + 0.1 * rv


def gas_viscosity(region_id, rv, pg):
    return 1.5e-5 * (1.0 + region_id) * (1.0 + 1.0e-8 * pg) + 1.0e-4 * rv


class FakeInterpolant:
    """Phase interpolant with closed-form properties that records every call."""

    def __init__(self, curves, fvf, viscosity):
        self.curves = curves
        self.fvf = fvf
        self.visc = viscosity
        self.calls = []

    def get_pvt_curve(self, curve, region_id):
        self.calls.append(("curve", curve, region_id))
        return self.curves[curve]

    def formation_volume_factor(self, region_id, mix_ratio, pressure):
        self.calls.append(("fvf", region_id, mix_ratio.copy(), pressure.copy()))
        return self.fvf(region_id, mix_ratio, pressure)

    def viscosity(self, region_id, mix_ratio, pressure):
        self.calls.append(("viscosity", region_id, mix_ratio.copy(), pressure.copy()))
        return self.visc(region_id, mix_ratio, pressure)


def make_graph(x, y):
    return Graph(x=np.asarray(x, dtype=float), y=np.asarray(y, dtype=float))


@pytest.fixture()
def oil_curves():
    """Live oil: two FVF/viscosity graphs (one per Rs), pressure on x."""
    return {
        RawCurve.FVF: [
            make_graph([1.0e6, 2.0e7], [1.10, 1.05]),
            make_graph([5.0e6, 2.5e7], [1.30, 1.25]),
        ],
        RawCurve.VISCOSITY: [
            make_graph([1.0e6, 2.0e7], [1.5e-3, 1.6e-3]),
            make_graph([5.0e6, 2.5e7], [1.0e-3, 1.1e-3]),
        ],
        RawCurve.SATURATED_STATE: [make_graph([1.0e6, 5.0e6], [20.0, 90.0])],
    }


@pytest.fixture()
def gas_curves():
    """Wet gas: three FVF/viscosity graphs (one per pressure), Rv on x."""
    return {
        RawCurve.FVF: [
            make_graph([0.0, 1.0e-4], [1.0e-2, 1.1e-2]),
            make_graph([0.0, 2.0e-4], [5.0e-3, 5.5e-3]),
            make_graph([0.0, 3.0e-4], [3.0e-3, 3.3e-3]),
        ],
        RawCurve.VISCOSITY: [
            make_graph([0.0, 1.0e-4], [1.2e-5, 1.3e-5]),
            make_graph([0.0, 2.0e-4], [1.5e-5, 1.6e-5]),
            make_graph([0.0, 3.0e-4], [1.9e-5, 2.0e-5]),
        ],
        RawCurve.SATURATED_STATE: [make_graph([1.0e6, 2.0e7], [1.0e-4, 3.0e-4])],
    }


@pytest.fixture()
def oil(oil_curves):
    return FakeInterpolant(oil_curves, oil_fvf, oil_viscosity)


@pytest.fixture()
def gas(gas_curves):
    return FakeInterpolant(gas_curves, gas_fvf, gas_viscosity)


@pytest.fixture()
def grid():
    return ActiveCellGrid.single(3)


@pytest.fixture()
def field_init():
    return InitFileData.from_keywords(UnitConvention.FIELD, {"PVTNUM": [1, 1, 2]})


@pytest.fixture()
def collection(grid, field_init, oil, gas):
    return ECLPvtCurveCollection(grid, field_init, oil=oil, gas=gas)
