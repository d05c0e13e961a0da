import logging

import numpy as np
import pytest

from pvtcurves import ActiveCellGrid, InitFileData, RegionMap, UnitConvention, ValidationError


def test_resolve_subtracts_one():
    grid = ActiveCellGrid.single(3)
    init = InitFileData.from_keywords(UnitConvention.METRIC, {"PVTNUM": [1, 1, 2]})
    regions = RegionMap.from_grid(grid, init)

    assert [regions.resolve(cell) for cell in range(3)] == [0, 0, 1]
    assert regions.num_regions == 2
    assert len(regions) == 3


def test_missing_keyword_puts_all_cells_in_default_region(caplog):
    grid = ActiveCellGrid.single(10)
    init = InitFileData.from_keywords(UnitConvention.METRIC, {})

    with caplog.at_level(logging.WARNING, logger="pvtcurves.regions"):
        regions = RegionMap.from_grid(grid, init)

    assert regions.num_cells == 10
    assert all(regions.resolve(cell) == 0 for cell in range(10))
    assert "PVTNUM missing" in caplog.text


def test_missing_keyword_without_warning(caplog):
    grid = ActiveCellGrid.single(4)
    init = InitFileData.from_keywords(UnitConvention.METRIC, {})

    with caplog.at_level(logging.WARNING, logger="pvtcurves.regions"):
        regions = RegionMap.from_grid(grid, init, default_region=3, warn_on_default=False)

    assert caplog.text == ""
    assert regions.resolve(2) == 2


def test_local_grid_cells_follow_main_grid():
    grid = ActiveCellGrid(active_cells={"": 2, "LGR1": 3})
    init = InitFileData.from_keywords(
        UnitConvention.FIELD,
        {"PVTNUM": [1, 2]},
        local_grids={"LGR1": {"PVTNUM": [3, 3, 1]}},
    )
    regions = RegionMap.from_grid(grid, init)
    np.testing.assert_array_equal(regions.tags, [1, 2, 3, 3, 1])


def test_keyword_missing_in_one_local_grid_uses_default_everywhere():
    grid = ActiveCellGrid(active_cells={"": 2, "LGR1": 3})
    init = InitFileData.from_keywords(
        UnitConvention.FIELD,
        {"PVTNUM": [2, 2]},
        local_grids={"LGR1": {"SATNUM": [1, 1, 1]}},
    )
    regions = RegionMap.from_grid(grid, init, warn_on_default=False)
    np.testing.assert_array_equal(regions.tags, [1, 1, 1, 1, 1])


def test_keyword_length_must_match_active_cells():
    grid = ActiveCellGrid.single(4)
    init = InitFileData.from_keywords(UnitConvention.FIELD, {"PVTNUM": [1, 1, 2]})
    with pytest.raises(ValidationError):
        RegionMap.from_grid(grid, init)


def test_tags_must_be_one_based():
    with pytest.raises(ValidationError):
        RegionMap(tags=[1, 0, 2])


@pytest.mark.parametrize(
    "cell, valid",
    [
        (0, True),
        (2, True),
        (3, False),
        (-1, False),
        (1.0, False),
        (True, False),
        (np.int32(1), True),
    ],
)
def test_is_valid_cell(cell, valid):
    assert RegionMap.uniform(3).is_valid_cell(cell) is valid


def test_tags_are_read_only():
    regions = RegionMap(tags=[1, 2])
    with pytest.raises(ValueError):
        regions.tags[0] = 5
