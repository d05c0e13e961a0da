import typing

import attrs
import numpy as np
from typing_extensions import Self

from pvtcurves.errors import ValidationError
from pvtcurves.init import MAIN_GRID, InitFileData

__all__ = ["ActiveCellGrid"]


def _active_cell_counts(value: typing.Mapping[str, int]) -> typing.Dict[str, int]:
    counts = {}
    for grid_id, count in value.items():
        count = int(count)
        if count < 0:
            raise ValidationError(
                f"Active cell count of grid {grid_id!r} must be non-negative, got {count}"
            )
        counts[grid_id] = count
    return counts


@attrs.frozen
class ActiveCellGrid:
    """
    Active cell layout of a model's main grid and its local grid refinements.

    Active cells are numbered globally: the main grid's cells first, then each
    local grid's cells in insertion order.
    """

    active_cells: typing.Mapping[str, int] = attrs.field(converter=_active_cell_counts)
    """Number of active cells per grid, keyed by grid identifier."""

    @classmethod
    def single(cls, num_cells: int) -> Self:
        """Layout with only a main grid of `num_cells` active cells."""
        return cls(active_cells={MAIN_GRID: num_cells})

    @property
    def num_cells(self) -> int:
        """Total number of active cells across all grids."""
        return sum(self.active_cells.values())

    @property
    def grid_ids(self) -> typing.List[str]:
        return list(self.active_cells)

    def raw_linearised_cell_data(
        self,
        init: InitFileData,
        keyword: str,
        dtype: typing.Any = int,
    ) -> np.ndarray:
        """
        Per active cell values of `keyword`, concatenated across all grids.

        :param init: Initialisation data holding the keyword arrays.
        :param keyword: Name of the per-cell keyword (e.g. 'PVTNUM').
        :param dtype: Element type of the result.
        :return: Array of `num_cells` values, or an empty array if any grid
            lacks the keyword.
        :raises ValidationError: If a grid's keyword array does not have one
            value per active cell.
        """
        chunks = []
        for grid_id, count in self.active_cells.items():
            if not init.have_keyword_data(keyword, grid_id):
                return np.empty(0, dtype=dtype)

            data = np.asarray(init.keyword_data(keyword, grid_id)).ravel()
            if data.size != count:
                raise ValidationError(
                    f"Keyword {keyword!r} of grid {grid_id!r} has {data.size} values, "
                    f"expected one per active cell ({count})"
                )
            chunks.append(data.astype(dtype))

        if not chunks:
            return np.empty(0, dtype=dtype)
        return np.concatenate(chunks)
