from __future__ import annotations

import math

import pytest

from imigrate.converters.extractors import (
    coerce_quantity,
    extract_slump,
    extract_strength,
    is_empty_value,
    is_zero_or_empty,
    leading_number,
    split_range,
    to_number,
    unit_for_material_type,
)
from imigrate.models.profile import MaterialType


@pytest.mark.parametrize(
    "name, expected",
    [
        ("25 MPA Mix", 25.0),
        ("0.4 Mpa flowable fill", 0.4),
        ("32.5MPA", 32.5),
        ("30", 30.0),
        (35, 35.0),
    ],
)
def test_extract_strength_leading_number(name, expected):
    assert extract_strength(name) == expected


@pytest.mark.parametrize("name", ["Special Mix", " 25 MPA", "MPA 25", "", None])
def test_extract_strength_empty(name):
    # anchored at position 0: leading whitespace or text means no strength
    assert extract_strength(name) is None


def test_extract_slump_quoted_mm():
    assert extract_slump("Slump '80'mm") == 80.0
    assert extract_slump("('120'mm)") == 120.0


def test_extract_slump_word_pattern():
    assert extract_slump("Slump 80mm") == 80.0
    assert extract_slump("target SLUMP   95mm max") == 95.0


def test_extract_slump_bare_number():
    assert extract_slump("80") == 80.0
    assert extract_slump("  75.5 ") == 75.5
    assert extract_slump(100) == 100.0


def test_extract_slump_ladder_order():
    # quoted form wins over the "Slump NNmm" form when both are present
    assert extract_slump("Slump 90mm / '80'mm") == 80.0


@pytest.mark.parametrize("value", ["no data", "80 mm approx", "", None, float("nan")])
def test_extract_slump_empty(value):
    assert extract_slump(value) is None


@pytest.mark.parametrize(
    "material_type, unit",
    [
        (MaterialType.AGGREGATE, "kg/m^3"),
        (MaterialType.CEMENT, "kg/m^3"),
        (MaterialType.ADMIXTURE, "mL/100kg CM"),
        (MaterialType.WATER, "L"),
        ("Admixture", "mL/100kg CM"),
        ("Fiber", ""),
    ],
)
def test_unit_for_material_type(material_type, unit):
    assert unit_for_material_type(material_type) == unit


def test_is_empty_value():
    assert is_empty_value(None)
    assert is_empty_value("")
    assert is_empty_value(float("nan"))
    assert not is_empty_value(" ")
    assert not is_empty_value(0)
    assert not is_empty_value("0")


@pytest.mark.parametrize("value", [None, "", float("nan"), 0, 0.0, "0"])
def test_is_zero_or_empty_true(value):
    assert is_zero_or_empty(value)


@pytest.mark.parametrize("value", [1, 0.5, "180", "0.0", "abc"])
def test_is_zero_or_empty_false(value):
    assert not is_zero_or_empty(value)


def test_to_number():
    assert to_number(180) == 180
    assert to_number(" 180 ") == 180.0
    assert to_number("1e2") == 100.0
    assert to_number("180 L") is None
    assert to_number("") is None
    assert to_number(None) is None
    assert to_number(True) is None
    assert to_number(float("inf")) is None
    assert to_number("nan") is None


@pytest.mark.parametrize(
    "value, expected",
    [
        ("180 L", 180.0),
        ("180kg", 180.0),
        ("  12.5 gal", 12.5),
        (".5", 0.5),
        ("-3 units", -3.0),
        ("1e2x", 100.0),
        (150, 150),
        (0, 0),
    ],
)
def test_leading_number(value, expected):
    assert leading_number(value) == expected


@pytest.mark.parametrize("value", ["L 180", "", "  ", "abc", None, True, "1e999"])
def test_leading_number_none(value):
    assert leading_number(value) is None


def test_coerce_quantity_passthrough():
    assert coerce_quantity("350") == 350.0
    assert isinstance(coerce_quantity("350"), float)
    assert coerce_quantity(45) == 45
    assert coerce_quantity("1,200") == "1,200"  # unparsable -> original value
    assert coerce_quantity(None) == ""
    assert coerce_quantity(0.333333) == 0.333333  # no rounding


def test_split_range():
    assert split_range("10-20") == (10.0, 20.0)
    assert split_range(" 5.5 - 7 ") == (5.5, 7.0)
    assert split_range("10 to 20") == ("", "")
    assert split_range("10-") == ("", "")
    assert split_range(None) == ("", "")
    low, high = split_range("0-0")
    assert low == 0 and high == 0 and not math.isnan(low)
