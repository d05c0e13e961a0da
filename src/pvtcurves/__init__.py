"""
*pvtcurves*

Unit-aware oil and gas PVT curves (formation volume factor, viscosity,
saturated state) of a discretised reservoir model.
"""

from ._precision import *  # noqa
from .errors import *  # noqa
from .constants import *  # noqa
from .types import *  # noqa
from .units import *  # noqa
from .init import *  # noqa
from .grids import *  # noqa
from .regions import *  # noqa
from .config import *  # noqa
from .interpolants import *  # noqa
from .evaluation import *  # noqa
from .conversion import *  # noqa
from .collection import *  # noqa

__version__ = "0.1.0"
