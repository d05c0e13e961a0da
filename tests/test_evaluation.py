import numpy as np
import pytest

from pvtcurves import InternalLogicError, RawCurve, ValidationError
from pvtcurves.evaluation import dynamic_property, empty_curve, raw_pvt_curve


def test_absent_interpolant_gives_single_empty_graph():
    curve = raw_pvt_curve(None, RawCurve.FVF, 0)
    assert len(curve) == 1
    assert curve[0].is_empty


def test_empty_curve_is_fresh_per_call():
    assert empty_curve() is not empty_curve()


def test_raw_curve_does_not_alias_interpolant(oil, oil_curves):
    curve = raw_pvt_curve(oil, RawCurve.FVF, 1)
    curve[0].x[...] *= 10.0
    curve[0].y[:] = 0.0

    np.testing.assert_array_equal(oil_curves[RawCurve.FVF][0].x, [1.0e6, 2.0e7])
    np.testing.assert_array_equal(oil_curves[RawCurve.FVF][0].y, [1.10, 1.05])
    assert oil.calls == [("curve", RawCurve.FVF, 1)]


def test_dynamic_fvf(oil):
    values = dynamic_property(oil, RawCurve.FVF, 0, [200.0], [0.0])
    np.testing.assert_allclose(values, [1.2])


def test_dynamic_viscosity_uses_viscosity_operation(gas):
    dynamic_property(gas, RawCurve.VISCOSITY, 1, [1.0e7], [1.0e-4])
    assert gas.calls[0][0] == "viscosity"
    assert gas.calls[0][1] == 1


@pytest.mark.parametrize("mix_ratio", [None, [], np.empty(0)])
def test_empty_mix_ratio_means_zero(oil, mix_ratio):
    pressure = [1.0e6, 2.0e6, 3.0e6]
    values = dynamic_property(oil, RawCurve.FVF, 0, pressure, mix_ratio)
    expected = dynamic_property(oil, RawCurve.FVF, 0, pressure, [0.0, 0.0, 0.0])

    np.testing.assert_array_equal(values, expected)
    np.testing.assert_array_equal(oil.calls[0][2], np.zeros(3))


def test_absent_interpolant_gives_empty_values():
    values = dynamic_property(None, RawCurve.VISCOSITY, 0, [1.0e6], [0.0])
    assert values.size == 0


def test_saturated_state_has_no_dynamic_formula(oil):
    with pytest.raises(InternalLogicError):
        dynamic_property(oil, RawCurve.SATURATED_STATE, 0, [1.0e6], [0.0])


def test_mismatched_sample_lengths(oil):
    with pytest.raises(ValidationError):
        dynamic_property(oil, RawCurve.FVF, 0, [1.0e6, 2.0e6], [0.0])
