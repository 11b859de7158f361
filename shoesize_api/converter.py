"""Shoe size conversion engine.

Every conversion is routed through foot length in centimeters: the source
size is mapped to cm, then cm is mapped to the target standard. Each standard
therefore needs only one forward and one inverse formula per category, and
both are derived from the same table entry so they stay exact inverses.

The module holds no state; all functions are safe to call from any thread.
"""
import math
from enum import Enum
from numbers import Real
from typing import Dict, NamedTuple, Tuple, Union

from .errors import InvalidCategoryError, InvalidUnitError, NonFiniteValueError


class SizeUnit(str, Enum):
    EU = "eu"
    US = "us"
    UK = "uk"
    CM = "cm"
    INCH = "in"


class Category(str, Enum):
    MEN = "men"
    WOMEN = "women"
    KIDS = "kids"


class Affine(NamedTuple):
    """cm = (size - offset) * slope + base"""

    offset: float
    slope: float
    base: float

    def to_cm(self, size: float) -> float:
        return (size - self.offset) * self.slope + self.base

    def from_cm(self, cm: float) -> float:
        return (cm - self.base) / self.slope + self.offset


DECIMALS = 2
CM_PER_INCH = 2.54
# EU = (cm + offset) * 1.5, one EU step is one Paris point (2/3 cm)
EU_FACTOR = 1.5

EU_OFFSETS: Dict[Category, float] = {
    Category.MEN: 1.5,
    Category.WOMEN: 1.5,
    Category.KIDS: 0.5,
}

REGRESSIONS: Dict[Tuple[Category, SizeUnit], Affine] = {
    (Category.MEN, SizeUnit.US): Affine(offset=6.0, slope=0.846, base=24.5),
    (Category.MEN, SizeUnit.UK): Affine(offset=5.5, slope=0.846, base=24.5),
    (Category.WOMEN, SizeUnit.US): Affine(offset=4.0, slope=0.846, base=21.5),
    (Category.WOMEN, SizeUnit.UK): Affine(offset=3.0, slope=0.846, base=22.5),
    (Category.KIDS, SizeUnit.US): Affine(offset=-10.0, slope=0.8, base=0.0),
    (Category.KIDS, SizeUnit.UK): Affine(offset=-10.0, slope=0.8, base=0.0),
}

# increment used by input widgets for each standard
UNIT_STEPS: Dict[SizeUnit, float] = {
    SizeUnit.EU: 0.5,
    SizeUnit.US: 0.5,
    SizeUnit.UK: 0.5,
    SizeUnit.CM: 0.1,
    SizeUnit.INCH: 0.1,
}


UnitLike = Union[SizeUnit, str]
CategoryLike = Union[Category, str]


def as_unit(unit: UnitLike) -> SizeUnit:
    if isinstance(unit, SizeUnit):
        return unit
    try:
        return SizeUnit(unit.strip().lower())
    except (AttributeError, ValueError):
        raise InvalidUnitError(unit) from None


def as_category(category: CategoryLike) -> Category:
    if isinstance(category, Category):
        return category
    try:
        return Category(category.strip().lower())
    except (AttributeError, ValueError):
        raise InvalidCategoryError(category) from None


def check_value(value) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise NonFiniteValueError(value)
    if not math.isfinite(value):
        raise NonFiniteValueError(value)
    return value


def to_canonical(value: float, from_unit: SizeUnit, category: Category) -> float:
    """Foot length in cm for a size given in `from_unit`. Not rounded."""
    if from_unit is SizeUnit.CM:
        return value
    if from_unit is SizeUnit.INCH:
        return value * CM_PER_INCH
    if from_unit is SizeUnit.EU:
        return value / EU_FACTOR - EU_OFFSETS[category]
    return REGRESSIONS[(category, from_unit)].to_cm(value)


def from_canonical(cm: float, to_unit: SizeUnit, category: Category) -> float:
    """Inverse of `to_canonical`. Not rounded."""
    if to_unit is SizeUnit.CM:
        return cm
    if to_unit is SizeUnit.INCH:
        return cm / CM_PER_INCH
    if to_unit is SizeUnit.EU:
        return (cm + EU_OFFSETS[category]) * EU_FACTOR
    return REGRESSIONS[(category, to_unit)].from_cm(cm)


def convert(value: float, from_unit: UnitLike, to_unit: UnitLike, category: CategoryLike) -> float:
    """Convert `value` from one sizing standard to another for `category`.

    Units and category may be given as enum members or their string values.
    A same-unit conversion returns `value` untouched; anything else is rounded
    once, to DECIMALS places, after the cm round trip.

    Raises InvalidUnitError, InvalidCategoryError or NonFiniteValueError.
    """
    src = as_unit(from_unit)
    dst = as_unit(to_unit)
    cat = as_category(category)
    check_value(value)
    if src is dst:
        return value
    cm = to_canonical(value, src, cat)
    return float(round(from_canonical(cm, dst, cat), DECIMALS))
