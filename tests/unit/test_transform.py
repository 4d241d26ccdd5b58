from __future__ import annotations

import pytest

from imigrate.models.config_models import TransformStep
from imigrate.services.transform import TransformError, apply_transforms


@pytest.fixture()
def table() -> list[list[object]]:
    return [
        ["Plant Code", "Mix Name", "Unit Name"],
        ["01", "M1", "kg/m^3"],
        ["02", "M1", "L"],
        ["03", "m2", "L"],
    ]


def test_set_column(table):
    result = apply_transforms(table, [TransformStep("set_column", "Plant Code", {"value": "ABC"})])
    assert [r[0] for r in result.rows[1:]] == ["ABC", "ABC", "ABC"]
    assert result.cells_modified == 3
    assert result.rows_modified == 3


def test_map_column_mapping(table):
    step = TransformStep("map_column", "Unit Name", {"mapping": {"L": "litre"}})
    result = apply_transforms(table, [step])
    assert [r[2] for r in result.rows[1:]] == ["kg/m^3", "litre", "litre"]
    assert result.cells_modified == 2


def test_map_column_mapping_matches_numbers_by_text():
    table = [["Plant Code"], [1], [2]]
    result = apply_transforms(table, [TransformStep("map_column", "Plant Code", {"mapping": {"1": "01"}})])
    assert result.rows[1:] == [["01"], [2]]


def test_map_column_function(table):
    result = apply_transforms(table, [TransformStep("map_column", "Mix Name", {"function": "upper"})])
    assert [r[1] for r in result.rows[1:]] == ["M1", "M1", "M2"]
    assert result.rows_modified == 1


def test_filter_rows_equals_and_keep_false(table):
    kept = apply_transforms(table, [TransformStep("filter_rows", "Unit Name", {"equals": "L"})])
    assert [r[0] for r in kept.rows[1:]] == ["02", "03"]
    dropped = apply_transforms(table, [TransformStep("filter_rows", "Unit Name", {"equals": "L", "keep": False})])
    assert [r[0] for r in dropped.rows[1:]] == ["01"]
    assert dropped.original_rows == 3
    assert dropped.new_rows == 1


def test_filter_rows_not_equals_and_contains(table):
    result = apply_transforms(table, [TransformStep("filter_rows", "Mix Name", {"not_equals": "M1"})])
    assert [r[1] for r in result.rows[1:]] == ["m2"]
    result = apply_transforms(table, [TransformStep("filter_rows", "Unit Name", {"contains": "kg"})])
    assert [r[0] for r in result.rows[1:]] == ["01"]


def test_rename_header(table):
    result = apply_transforms(table, [TransformStep("rename_header", "Mix Name", {"to": "Mix Code"})])
    assert result.rows[0] == ["Plant Code", "Mix Code", "Unit Name"]
    assert result.cells_modified == 0


def test_steps_apply_in_order(table):
    steps = [
        TransformStep("rename_header", "Mix Name", {"to": "Mix"}),
        TransformStep("map_column", "Mix", {"function": "lower"}),
        TransformStep("filter_rows", "Mix", {"equals": "m1"}),
    ]
    result = apply_transforms(table, steps)
    assert result.rows == [["Plant Code", "Mix", "Unit Name"], ["01", "m1", "kg/m^3"], ["02", "m1", "L"]]


def test_input_table_not_mutated(table):
    snapshot = [r[:] for r in table]
    apply_transforms(table, [TransformStep("set_column", "Plant Code", {"value": "X"})])
    assert table == snapshot


def test_unknown_column(table):
    with pytest.raises(TransformError, match="column not found"):
        apply_transforms(table, [TransformStep("set_column", "Plant", {"value": "X"})])


def test_unknown_operation(table):
    with pytest.raises(TransformError, match="unknown operation"):
        apply_transforms(table, [TransformStep("drop_table", "Plant Code")])


def test_empty_table():
    with pytest.raises(TransformError):
        apply_transforms([], [])
