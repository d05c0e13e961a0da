"""In-memory view of a result set's initialisation data."""

import typing

import attrs
import numpy as np
from typing_extensions import Self

from pvtcurves.errors import ValidationError
from pvtcurves.units import UnitConvention

__all__ = ["MAIN_GRID", "InitFileData"]

MAIN_GRID = ""
"""Identifier of the main (global) grid. Local grid refinements use their own names."""

KeywordArrays = typing.Mapping[str, np.ndarray]


def _to_unit_convention(value: typing.Union[UnitConvention, int]) -> UnitConvention:
    try:
        return UnitConvention(value)
    except ValueError:
        raise ValidationError(f"Unsupported unit convention: {value!r}") from None


def _freeze_keywords(
    keywords: typing.Mapping[str, typing.Mapping[str, typing.Any]],
) -> typing.Dict[str, typing.Dict[str, np.ndarray]]:
    frozen = {}
    for grid_id, arrays in keywords.items():
        frozen[grid_id] = {}
        for keyword, values in arrays.items():
            array = np.array(values, copy=True)
            array.setflags(write=False)
            frozen[grid_id][keyword] = array
    return frozen


@attrs.frozen
class InitFileData:
    """
    Per-grid keyword arrays and header information of a result set.

    Arrays are copied on construction and stored read-only.
    """

    unit_convention: UnitConvention = attrs.field(converter=_to_unit_convention)
    """Unit convention the keyword data is serialised in."""
    keywords: typing.Mapping[str, KeywordArrays] = attrs.field(
        factory=dict, converter=_freeze_keywords
    )
    """Keyword arrays keyed by grid identifier, then keyword name."""

    @classmethod
    def from_keywords(
        cls,
        unit_convention: typing.Union[UnitConvention, int],
        keywords: typing.Mapping[str, typing.Any],
        local_grids: typing.Optional[
            typing.Mapping[str, typing.Mapping[str, typing.Any]]
        ] = None,
    ) -> Self:
        """
        Build from main grid keywords plus optional local grid keywords.

        :param unit_convention: Unit convention of the data.
        :param keywords: Keyword arrays of the main grid.
        :param local_grids: Keyword arrays of each local grid, keyed by grid name.
        """
        all_keywords = {MAIN_GRID: dict(keywords)}
        for grid_id, arrays in (local_grids or {}).items():
            if grid_id == MAIN_GRID:
                raise ValidationError("Local grid name must not be empty")
            all_keywords[grid_id] = dict(arrays)
        return cls(unit_convention=unit_convention, keywords=all_keywords)

    def have_keyword_data(self, keyword: str, grid_id: str = MAIN_GRID) -> bool:
        """Whether `keyword` exists for grid `grid_id`."""
        return keyword in self.keywords.get(grid_id, {})

    def keyword_data(self, keyword: str, grid_id: str = MAIN_GRID) -> np.ndarray:
        """
        Read-only keyword array of a grid.

        :raises ValidationError: If the keyword does not exist for the grid.
        """
        try:
            return self.keywords[grid_id][keyword]
        except KeyError:
            raise ValidationError(
                f"Keyword {keyword!r} not present for grid {grid_id!r}"
            ) from None
