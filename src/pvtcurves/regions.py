import logging
import numbers
import typing

import attrs
import numpy as np
from typing_extensions import Self

from pvtcurves.errors import ValidationError
from pvtcurves.grids import ActiveCellGrid
from pvtcurves.init import InitFileData

logger = logging.getLogger(__name__)

__all__ = ["RegionMap"]


def _region_tags(value: typing.Any) -> np.ndarray:
    tags = np.array(value, dtype=np.int64, copy=True).ravel()
    tags.setflags(write=False)
    return tags


@attrs.frozen(eq=False)
class RegionMap:
    """
    Maps active cells to zero-based PVT region identifiers.

    Region tags are the traditional one-based identifiers (e.g. PVTNUM); the
    identifier of a cell is its tag minus one, a valid index into the
    region-indexed tables of the PVT interpolants.
    """

    tags: np.ndarray = attrs.field(converter=_region_tags)
    """One-based region tag per active cell."""

    def __attrs_post_init__(self) -> None:
        if self.tags.size and self.tags.min() < 1:
            raise ValidationError(
                f"Region tags must be one-based, found tag {int(self.tags.min())}"
            )

    @classmethod
    def uniform(cls, num_cells: int, region: int = 1) -> Self:
        """Every one of `num_cells` cells in the same one-based `region`."""
        return cls(tags=np.full(num_cells, region, dtype=np.int64))

    @classmethod
    def from_grid(
        cls,
        grid: ActiveCellGrid,
        init: InitFileData,
        keyword: str = "PVTNUM",
        default_region: int = 1,
        warn_on_default: bool = True,
    ) -> Self:
        """
        Read region tags of all active cells.

        If the keyword is missing in one or more of the grids, all cells are put
        in `default_region`. There is no partial assignment.

        :param grid: Active cell layout.
        :param init: Initialisation data holding the region keyword.
        :param keyword: Region keyword name.
        :param default_region: One-based tag used when the keyword is missing.
        :param warn_on_default: Log a warning when falling back to `default_region`.
        """
        tags = grid.raw_linearised_cell_data(init, keyword, dtype=np.int64)
        if tags.size == 0:
            if warn_on_default and grid.num_cells > 0:
                logger.warning(
                    f"{keyword} missing in one or more grids. "
                    f"Putting all {grid.num_cells} cells in region {default_region}"
                )
            return cls.uniform(grid.num_cells, default_region)
        return cls(tags=tags)

    @property
    def num_cells(self) -> int:
        return int(self.tags.size)

    @property
    def num_regions(self) -> int:
        """Largest region tag in use (0 when there are no cells)."""
        return int(self.tags.max()) if self.tags.size else 0

    def __len__(self) -> int:
        return self.num_cells

    def is_valid_cell(self, cell: typing.Any) -> bool:
        """Whether `cell` is an integer index into the active cells."""
        if isinstance(cell, bool) or not isinstance(cell, numbers.Integral):
            return False
        return bool(0 <= cell < self.num_cells)

    def resolve(self, cell: int) -> int:
        """
        Zero-based region identifier of an active cell.

        Callers guarantee `0 <= cell < num_cells`.
        """
        return int(self.tags[cell]) - 1
