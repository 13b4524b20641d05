import math
from fractions import Fraction
import pytest
from tools.normalize import FIELD_BOUNDS, clamp, normalize_field, normalize_inputs, with_field
from tools.pricing import PredictionInputs

ODD_VALUES = [-1e9, -1, 0, 0.5, 3.7, 150, 1999.9, 50_000, 1e12, math.nan, math.inf, -math.inf, "", "abc", None, "1,500",
              10 ** 400, -(10 ** 400), Fraction(10 ** 400, 3)]


def test_square_feet_boundaries():
    assert normalize_field("square_feet", 50) == 200
    assert normalize_field("square_feet", 50_000) == 20_000
    assert normalize_field("square_feet", 1500) == 1500


def test_ground_floor_clamps_to_one():
    assert normalize_field("floors", 0) == 1
    assert normalize_field("floors", 31) == 30


def test_year_built_clamped():
    assert normalize_field("year_built", 1850) == 1900
    assert normalize_field("year_built", 2030) == 2025


@pytest.mark.parametrize("name", list(FIELD_BOUNDS))
def test_clamp_idempotent_and_in_domain(name):
    lo, hi = FIELD_BOUNDS[name]
    for raw in ODD_VALUES:
        once = normalize_field(name, raw)
        assert lo <= once <= hi
        assert normalize_field(name, once) == once


def test_clamp_plain():
    assert clamp(5, 1, 10) == 5
    assert clamp(-5, 1, 10) == 1
    assert clamp(50, 1, 10) == 10


def test_non_finite_keeps_previous_value():
    assert normalize_field("bedrooms", math.nan, previous=7) == 7
    assert normalize_field("bedrooms", "", previous=7) == 7
    assert normalize_field("square_feet", math.inf, previous=900) == 900


def test_non_finite_without_previous_uses_default():
    assert normalize_field("bedrooms", math.nan) == 3
    assert normalize_field("projection_years", "x") == 5


def test_numeric_text_is_accepted():
    assert normalize_field("square_feet", "1,500") == 1500
    assert normalize_field("bathrooms", " 4 ") == 4


def test_unknown_field_rejected():
    with pytest.raises(KeyError):
        normalize_field("garages", 2)


def test_with_field_touches_only_that_field():
    base = PredictionInputs()
    out = with_field(base, "square_feet", 10)
    assert out.square_feet == 200
    assert out.bedrooms == base.bedrooms and out.location == base.location
    assert base.square_feet == 1200


def test_with_field_empty_text_keeps_current():
    base = PredictionInputs(bedrooms=6)
    assert with_field(base, "bedrooms", "").bedrooms == 6


def test_location_accepts_any_string():
    assert with_field(PredictionInputs(), "location", "Atlantis").location == "Atlantis"


def test_normalize_inputs_from_mapping():
    out = normalize_inputs({"bedrooms": 500, "square_feet": "50", "location": "Pune", "extra": 1})
    assert out == PredictionInputs(bedrooms=120, square_feet=200, location="Pune")


def test_reals_beyond_float_range_clamp_to_bounds():
    assert normalize_field("bedrooms", 10 ** 400) == 120
    assert normalize_field("bedrooms", -(10 ** 400)) == 1
    assert normalize_field("square_feet", Fraction(10 ** 400, 7), previous=900) == 20_000
