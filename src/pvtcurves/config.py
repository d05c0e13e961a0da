import attrs

from pvtcurves.constants import Constants

__all__ = ["Config"]


@attrs.frozen
class Config:
    """PVT curve collection configuration."""

    region_keyword: str = attrs.field(
        default="PVTNUM", validator=attrs.validators.min_len(1)
    )
    """Per-cell keyword holding the one-based PVT region tags."""
    default_region: int = attrs.field(default=1, validator=attrs.validators.ge(1))
    """
    One-based region tag assigned to every cell when the region keyword is
    missing from one or more grids.
    """
    warn_on_default_region: bool = True
    """Whether to log a warning when every cell falls back to `default_region`."""
    constants: Constants = attrs.field(factory=Constants)
    """Unit scale factors used to build the native and internal systems of units."""
