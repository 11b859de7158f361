import itertools
import math
from concurrent.futures import ThreadPoolExecutor

import pytest

from shoesize_api.converter import (
    CM_PER_INCH,
    EU_FACTOR,
    REGRESSIONS,
    Category,
    SizeUnit,
    convert,
    from_canonical,
    to_canonical,
)
from shoesize_api.errors import (
    ConversionError,
    InvalidCategoryError,
    InvalidUnitError,
    NonFiniteValueError,
)


# plausible values per unit, used for round trips and monotonicity
SAMPLES = {
    SizeUnit.EU: [20.0, 35.5, 42.0, 46.5],
    SizeUnit.US: [1.0, 5.5, 8.0, 12.0],
    SizeUnit.UK: [1.0, 4.5, 7.0, 11.5],
    SizeUnit.CM: [15.0, 22.3, 26.5, 30.1],
    SizeUnit.INCH: [6.0, 8.8, 10.43, 11.9],
}


def cm_per_unit(unit, category):
    if unit is SizeUnit.CM:
        return 1.0
    if unit is SizeUnit.INCH:
        return CM_PER_INCH
    if unit is SizeUnit.EU:
        return 1.0 / EU_FACTOR
    return REGRESSIONS[(category, unit)].slope


def test_eu_to_cm_men():
    assert convert(42, "eu", "cm", "men") == 26.5


def test_cm_to_eu_men():
    assert convert(26.5, "cm", "eu", "men") == 42.0


def test_inch_to_cm():
    assert convert(10.43, "in", "cm", "men") == 26.49


def test_eu_to_us_uk_inch_men():
    assert convert(42, SizeUnit.EU, SizeUnit.US, Category.MEN) == 8.36
    assert convert(42, SizeUnit.EU, SizeUnit.UK, Category.MEN) == 7.86
    assert convert(42, SizeUnit.EU, SizeUnit.INCH, Category.MEN) == 10.43


def test_us_category_offsets_differ():
    men = convert(8, "us", "cm", "men")
    women = convert(8, "us", "cm", "women")
    assert men == 26.19
    assert women == 24.88
    assert men != women


def test_women_uk_to_cm():
    assert convert(5, "uk", "cm", "women") == 24.19


def test_kids_eu_uses_own_offset():
    assert convert(30, "eu", "cm", "kids") == 19.5
    assert convert(30, "eu", "cm", "men") == 18.5


@pytest.mark.parametrize("unit", list(SizeUnit))
@pytest.mark.parametrize("category", list(Category))
def test_identity_returns_value_untouched(unit, category):
    for value in (42.123456, 7.0049, 0.001, 3):
        assert convert(value, unit, unit, category) == value


def test_identity_keeps_type():
    assert convert(42, "eu", "eu", "men") == 42
    assert isinstance(convert(42, "eu", "eu", "men"), int)


@pytest.mark.parametrize("category", list(Category))
def test_round_trip_within_rounding(category):
    for a, b in itertools.permutations(SizeUnit, 2):
        # the rounded intermediate is off by at most half a unit of b,
        # which maps back to a through the slope between the two units
        tol = 0.005 * cm_per_unit(b, category) / cm_per_unit(a, category) + 0.005 + 1e-9
        for v in SAMPLES[a]:
            there = convert(v, a, b, category)
            back = convert(there, b, a, category)
            assert abs(back - v) <= tol, (a, b, v, there, back)


@pytest.mark.parametrize("category", list(Category))
@pytest.mark.parametrize("unit", list(SizeUnit))
def test_canonical_transforms_are_inverses(category, unit):
    for v in SAMPLES[unit]:
        cm = to_canonical(v, unit, category)
        assert math.isclose(from_canonical(cm, unit, category), v, rel_tol=1e-12)


@pytest.mark.parametrize("category", list(Category))
def test_monotonic_increasing(category):
    for a, b in itertools.permutations(SizeUnit, 2):
        lo, hi = SAMPLES[a][0], SAMPLES[a][-1]
        values = [lo + 0.5 * i for i in range(int((hi - lo) / 0.5) + 1)]
        results = [convert(v, a, b, category) for v in values]
        assert all(x < y for x, y in zip(results, results[1:])), (a, b)


def test_deterministic_across_threads():
    expected = convert(42, "eu", "in", "women")
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: convert(42, "eu", "in", "women"), range(200)))
    assert set(results) == {expected}


def test_units_and_categories_are_case_insensitive():
    assert convert(42, "EU", " Cm ", "Men") == 26.5


def test_unknown_unit_raises():
    with pytest.raises(InvalidUnitError):
        convert(42, "mm", "cm", "men")
    with pytest.raises(InvalidUnitError):
        convert(42, "eu", None, "men")


def test_unknown_category_raises():
    with pytest.raises(InvalidCategoryError) as exc:
        convert(42, "eu", "us", "adults")
    assert exc.value.category == "adults"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), -float("inf"), "42", None, True])
def test_non_finite_or_non_numeric_value_raises(value):
    with pytest.raises(NonFiniteValueError):
        convert(value, "eu", "us", "men")


def test_nan_rejected_even_for_identity():
    with pytest.raises(NonFiniteValueError):
        convert(float("nan"), "eu", "eu", "men")


def test_errors_are_value_errors():
    assert issubclass(ConversionError, ValueError)
    for cls in (InvalidUnitError, InvalidCategoryError, NonFiniteValueError):
        assert issubclass(cls, ConversionError)


def test_non_positive_values_are_not_rejected():
    # plausibility is left to the caller
    assert convert(0, "in", "cm", "men") == 0.0
    assert convert(-1, "cm", "eu", "men") == 0.75
