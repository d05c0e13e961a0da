from contextlib import contextmanager
from contextvars import ContextVar

import numpy as np
import numpy.typing as npt


__all__ = ["get_dtype", "with_precision", "get_floating_point_info"]

_pvtcurves_dtype: ContextVar[npt.DTypeLike] = ContextVar(
    "_pvtcurves_dtype", default=np.float64
)


def get_dtype() -> npt.DTypeLike:
    """
    Get the floating point data type used for curve samples and property values.

    :return: The current data type. `float64` unless overridden with `with_precision`.
    """
    return _pvtcurves_dtype.get()


@contextmanager
def with_precision(dtype: npt.DTypeLike):
    """
    Context manager to temporarily set the data type, and hence the precision of curves and values.

    Unit conversion round trips lose accuracy below 64-bit precision.

    :param dtype: The data type to set within the context.
    """
    token = _pvtcurves_dtype.set(dtype)
    try:
        yield
    finally:
        _pvtcurves_dtype.reset(token)


def get_floating_point_info() -> np.finfo:
    """
    Get the floating point information for the current data type.

    :return: The floating point information.
    """
    return np.finfo(get_dtype())  # type: ignore
