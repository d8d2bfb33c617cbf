"""Bounds checks shared by the projection calculators.

Each check records a reason under the field name in ``errors``; callers raise
InvalidAssumptions once every field has been looked at.
"""

from __future__ import annotations

import math

from revproj.errors import InvalidAssumptions
from revproj.models import MAX_HORIZON_MONTHS


def is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def check_finite(errors: dict[str, str], name: str, value: object) -> bool:
    """Record non-numeric or non-finite values. True when ``value`` is usable."""
    if not is_number(value):
        errors[name] = "must be a number"
        return False
    if not math.isfinite(value):  # type: ignore[arg-type]
        errors[name] = "must be finite"
        return False
    return True


def check_horizon(errors: dict[str, str], horizon: object, name: str = "horizon_months") -> None:
    if not is_number(horizon) or not float(horizon).is_integer():  # type: ignore[arg-type]
        errors[name] = "must be a whole number of months"
    elif not 1 <= horizon <= MAX_HORIZON_MONTHS:  # type: ignore[operator]
        errors[name] = f"must be between 1 and {MAX_HORIZON_MONTHS}"


def ensure_finite(month: int | None, **values: float) -> None:
    """Reject a run whose carried state overflowed to inf or nan."""
    bad = [name for name, value in values.items() if not math.isfinite(value)]
    if bad:
        where = f" at month {month}" if month is not None else ""
        raise InvalidAssumptions(
            {name: f"overflows{where}; use smaller inputs" for name in bad}
        )
