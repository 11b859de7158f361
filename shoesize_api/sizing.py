import math
from typing import Dict, List

from .config import settings
from .converter import (
    UNIT_STEPS,
    CategoryLike,
    SizeUnit,
    UnitLike,
    as_category,
    as_unit,
    check_value,
    convert,
)


# EU slider bounds of the converter UI
CHART_EU_MIN = 15.0
CHART_EU_MAX = 50.0
CHART_EU_STEP = 0.5
# finer steps collide once EU sizes are rounded to 6 places
CHART_MIN_STEP = 1e-6


def unit_step(unit: UnitLike) -> float:
    return UNIT_STEPS[as_unit(unit)]


def convert_all(value: float, from_unit: UnitLike, category: CategoryLike) -> Dict[SizeUnit, float]:
    """Express `value` in every supported unit.

    The source unit keeps the input value as-is; the others are converted
    independently from it, so no rounded result feeds another conversion.
    """
    src = as_unit(from_unit)
    cat = as_category(category)
    return {unit: convert(value, src, unit, cat) for unit in SizeUnit}


def size_chart(
    category: CategoryLike,
    start: float = CHART_EU_MIN,
    stop: float = CHART_EU_MAX,
    step: float = CHART_EU_STEP,
) -> List[Dict[SizeUnit, float]]:
    """One row per EU size in [start, stop], each row holding every unit."""
    cat = as_category(category)
    for v in (start, stop, step):
        check_value(v)
    if step < CHART_MIN_STEP:
        raise ValueError(f"step must be at least {CHART_MIN_STEP}")
    if start > stop:
        raise ValueError("start must not exceed stop")

    # index-based stepping; accumulating the step drifts on binary floats
    span = (stop - start) / step
    if not math.isfinite(span) or span + 1e-9 >= settings.CHART_MAX_ROWS:
        raise ValueError(f"chart would exceed the limit of {settings.CHART_MAX_ROWS} rows")
    count = int(span + 1e-9) + 1

    rows: List[Dict[SizeUnit, float]] = []
    for i in range(count):
        eu = float(round(start + i * step, 6))
        rows.append(convert_all(eu, SizeUnit.EU, cat))
    return rows
