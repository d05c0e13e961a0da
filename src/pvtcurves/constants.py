"""Unit scale factors used to describe systems of units"""

from contextvars import ContextVar
import typing

import attrs


__all__ = ["Constant", "Constants", "c", "ConstantsContext", "get_constant"]


@attrs.frozen(slots=True)
class Constant:
    """
    A constant value with optional description and unit.

    Scale factors are always expressed as the SI value of one unit,
    e.g. one bar is `1e5` Pa.
    """

    value: typing.Any
    """The actual value of the constant."""

    description: typing.Optional[str] = None
    """Optional description of what this constant represents."""

    unit: typing.Optional[str] = None
    """Optional unit of measurement for this constant."""

    def __str__(self) -> str:
        return f"{self.value}{self.unit or ''}"


_POUND = 0.45359237
_FOOT = 0.3048
_INCH = 0.0254
_GRAVITY = 9.80665

DEFAULT_CONSTANTS: typing.Dict[str, typing.Union[typing.Any, Constant]] = {
    # Pressure
    "PASCAL": Constant(value=1.0, description="One pascal", unit="Pa"),
    "BAR": Constant(value=1.0e5, description="One bar", unit="Pa"),
    "PSI": Constant(
        value=_POUND * _GRAVITY / (_INCH * _INCH),
        description="One pound-force per square inch",
        unit="Pa",
    ),
    "ATM": Constant(value=101325.0, description="One standard atmosphere", unit="Pa"),
    # Volume
    "CUBIC_METER": Constant(value=1.0, description="One cubic metre", unit="m³"),
    "CUBIC_CENTIMETER": Constant(
        value=1.0e-6, description="One cubic centimetre", unit="m³"
    ),
    "CUBIC_FOOT": Constant(
        value=_FOOT * _FOOT * _FOOT, description="One cubic foot", unit="m³"
    ),
    "BARREL": Constant(
        value=42.0 * 231.0 * _INCH * _INCH * _INCH,
        description="One (oil) barrel, 42 US gallons",
        unit="m³",
    ),
    # Viscosity
    "PASCAL_SECOND": Constant(value=1.0, description="One pascal-second", unit="Pa·s"),
    "CENTIPOISE": Constant(value=1.0e-3, description="One centipoise", unit="Pa·s"),
    # Length
    "METER": Constant(value=1.0, description="One metre", unit="m"),
    "CENTIMETER": Constant(value=1.0e-2, description="One centimetre", unit="m"),
    "FOOT": Constant(value=_FOOT, description="One international foot", unit="m"),
    # Mass
    "KILOGRAM": Constant(value=1.0, description="One kilogram", unit="kg"),
    "GRAM": Constant(value=1.0e-3, description="One gram", unit="kg"),
    "POUND": Constant(value=_POUND, description="One avoirdupois pound", unit="kg"),
    # Time
    "SECOND": Constant(value=1.0, description="One second", unit="s"),
    "HOUR": Constant(value=3600.0, description="One hour", unit="s"),
    "DAY": Constant(value=86400.0, description="One day", unit="s"),
}


class Constants:
    """
    Unit scale factors used to build the standard systems of units.

    All constants are stored in an internal dictionary and can be accessed via dot notation.
    Use __getattr__ for value access and __getitem__ for `Constant` object access.
    """

    __slots__ = ("_store",)

    def __new__(cls) -> "Constants":
        instance = super().__new__(cls)
        instance._store = {}
        return instance

    def __init__(self) -> None:
        for name, value in DEFAULT_CONSTANTS.items():
            self[name] = value

    def __getattr__(self, name: str) -> typing.Any:
        """Get a constant's value using dot notation.

        :param name: Name of the constant
        :return: Value of the constant (unwrapped from `Constant` object)
        :raises AttributeError: If the constant does not exist
        """
        if name.startswith("_"):
            return object.__getattribute__(self, name)

        try:
            return self._store[name].value
        except KeyError:
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            ) from None

    def __getitem__(self, name: str) -> Constant:
        """Get the `Constant` object (with metadata) using bracket notation.

        :raises KeyError: If the constant does not exist
        """
        return self._store[name]

    def __setattr__(self, name: str, value: typing.Union[typing.Any, Constant]) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self[name] = value

    def __setitem__(self, name: str, value: typing.Union[typing.Any, Constant]) -> None:
        """Set a constant, wrapping raw values in `Constant` objects."""
        self._store[name] = value if isinstance(value, Constant) else Constant(value)

    def __contains__(self, name: str) -> bool:
        return name in self._store

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(constants={len(self._store)})"

    def get(self, name: str, default: typing.Any = None) -> typing.Any:
        """Get a constant's value with a default fallback.

        :param name: Name of the constant
        :param default: Default value if constant doesn't exist
        :return: Value of the constant or default
        """
        constant = self._store.get(name)
        if constant is None:
            return default
        return constant.value

    def get_constant(
        self, name: str, default: typing.Optional[Constant] = None
    ) -> typing.Optional[Constant]:
        return self._store.get(name, default)

    def __call__(self) -> "ConstantsContext":
        """
        Create a context manager that temporarily makes this instance the one
        seen through the global constants proxy `pvtcurves.c`.

        :return: `ConstantsContext` for temporary overrides
        """
        return ConstantsContext(self)


_constants_context: ContextVar[Constants] = ContextVar(
    "constants_context", default=Constants()
)


class ConstantsContext:
    """
    Context manager for temporary global `Constants` overrides.

    Upon exiting the context, the previous `Constants` instance is restored.
    """

    def __init__(self, constants: Constants) -> None:
        self._new_constants = constants
        self._token = None

    def __enter__(self) -> Constants:
        self._token = _constants_context.set(self._new_constants)
        return self._new_constants

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        if self._token is not None:
            _constants_context.reset(self._token)


class _ConstantsProxy:
    """Proxy to the `Constants` instance active in the current context."""

    @property
    def _constants(self) -> Constants:
        return _constants_context.get()

    def __getattr__(self, name: str) -> typing.Any:
        return getattr(self._constants, name)

    def __getitem__(self, name: str) -> Constant:
        return self._constants[name]


c = _ConstantsProxy()
"""Global proxy to access unit scale factors."""


def get_constant(name: str) -> typing.Optional[Constant]:
    """Get a `Constant` object by name from the global constants.

    :param name: Name of the constant
    :return: `Constant` object or None if not found
    """
    return c._constants.get_constant(name)
