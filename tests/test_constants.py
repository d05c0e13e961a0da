import numpy as np
import pytest

from pvtcurves import Constant, Constants, c, get_constant, get_floating_point_info, with_precision


def test_default_scales():
    constants = Constants()
    assert constants.BAR == 1.0e5
    assert constants.PSI == pytest.approx(6894.757293168361)
    assert constants.BARREL == pytest.approx(0.158987294928)
    assert constants["CENTIPOISE"].unit == "Pa·s"
    assert "DAY" in constants


def test_raw_values_are_wrapped():
    constants = Constants()
    constants.ATM = 101000.0
    assert isinstance(constants["ATM"], Constant)
    assert constants.get("ATM") == 101000.0
    assert constants.get("FURLONG", 201.168) == 201.168


def test_unknown_constant_raises_attribute_error():
    with pytest.raises(AttributeError):
        Constants().FURLONG


def test_context_override_is_scoped():
    constants = Constants()
    constants.BAR = 2.0e5
    with constants():
        assert c.BAR == 2.0e5
        assert get_constant("BAR").value == 2.0e5
    assert c.BAR == 1.0e5


def test_precision_context():
    with with_precision(np.float32):
        assert get_floating_point_info().dtype == np.float32
    assert get_floating_point_info().dtype == np.float64
