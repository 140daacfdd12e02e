"""
Rate Conversion and Rounding

Shared numeric helpers for the calculators: annual-to-period rate
conversion, the annuity-due future value, and the rounding policy used
for currency amounts.
"""

import math

MONTHS_PER_YEAR = 12
DAYS_PER_YEAR = 365


def finite_or_zero(value: float) -> float:
    """Return value as a float, or 0.0 if it is not a finite number."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def round_half_up(value: float) -> int:
    """
    Round to the nearest whole currency unit.

    Exact halves round toward positive infinity (2.5 -> 3, -2.5 -> -2),
    which is the rounding the calculators have always displayed.

    Args:
        value: Amount to round

    Returns:
        Rounded amount as an int
    """
    return math.floor(finite_or_zero(value) + 0.5)


def round_to_paise(value: float) -> float:
    """Round to 1/100 of a currency unit, halves toward positive infinity."""
    return math.floor(finite_or_zero(value) * 100 + 0.5) / 100


def months_in(years: float) -> int:
    """Number of whole months in a (possibly fractional) number of years."""
    return max(0, round_half_up(finite_or_zero(years) * MONTHS_PER_YEAR))


def annual_to_monthly_rate(annual_percent: float) -> float:
    """
    Convert an annual percentage to the equivalent effective monthly rate.

    Compounding the returned rate twelve times gives back the annual rate.

    Args:
        annual_percent: Annual rate in percent (e.g., 12 for 12%)

    Returns:
        Monthly rate as decimal, or 0.0 for a zero or non-finite rate
    """
    rate = finite_or_zero(annual_percent) / 100
    if rate == 0:
        return 0.0
    if rate <= -1:
        return -1.0
    return ((1 + rate) ** (1 / MONTHS_PER_YEAR)) - 1


def nominal_period_rate(annual_percent: float, periods_per_year: int) -> float:
    """Nominal per-period rate: annual percent split evenly across periods."""
    if periods_per_year <= 0:
        return 0.0
    return finite_or_zero(annual_percent) / 100 / periods_per_year


def annuity_due_future_value(payment: float, rate: float, periods: float) -> float:
    """
    Future value of equal payments made at the start of each period.

    F = P * [((1 + i)^n - 1) / i] * (1 + i)

    Args:
        payment: Amount paid each period
        rate: Per-period rate as decimal
        periods: Number of periods

    Returns:
        Future value; P * n when the rate is zero
    """
    if rate == 0:
        return payment * periods
    factor = (((1 + rate) ** periods) - 1) / rate
    return payment * factor * (1 + rate)
