"""
Interest Calculations

Compound interest, NSC, simple interest and fixed deposit maturity.
These instruments use the nominal model: the annual rate divided by the
number of compounding periods per year.
"""

import enum
from typing import Dict, Sequence, Union

from app.calculations.rates import (
    DAYS_PER_YEAR,
    MONTHS_PER_YEAR,
    finite_or_zero,
    round_half_up,
)


class CompoundingFrequency(str, enum.Enum):
    """How often interest is compounded in a year."""

    yearly = "Yearly"
    half_yearly = "Half-Yearly"
    quarterly = "Quarterly"

    @property
    def periods_per_year(self) -> int:
        return _PERIODS_PER_YEAR[self]


class DurationUnit(str, enum.Enum):
    """Unit a deposit tenure is entered in."""

    years = "Years"
    months = "Months"
    days = "Days"


class InterestType(str, enum.Enum):
    compound = "compound"
    simple = "simple"


_PERIODS_PER_YEAR = {
    CompoundingFrequency.yearly: 1,
    CompoundingFrequency.half_yearly: 2,
    CompoundingFrequency.quarterly: 4,
}

# Cycling order for each calculator's frequency pill
COMPOUND_INTEREST_FREQUENCIES = (
    CompoundingFrequency.yearly,
    CompoundingFrequency.half_yearly,
    CompoundingFrequency.quarterly,
)
NSC_FREQUENCIES = (
    CompoundingFrequency.yearly,
    CompoundingFrequency.half_yearly,
)

NSC_TENURE_YEARS = 5


def periods_per_year(
    frequency: Union[CompoundingFrequency, str],
    allowed: Sequence[CompoundingFrequency] = COMPOUND_INTEREST_FREQUENCIES,
) -> int:
    """
    Map a frequency to compounding periods per year.

    Unknown values, and values outside ``allowed``, compound yearly.
    """
    try:
        freq = CompoundingFrequency(frequency)
    except ValueError:
        return 1
    if freq not in allowed:
        return 1
    return freq.periods_per_year


def calculate_compound_interest(
    principal: float,
    rate: float,
    years: float,
    frequency: Union[CompoundingFrequency, str] = CompoundingFrequency.yearly,
) -> Dict:
    """
    Calculate compound interest: A = P * (1 + r/n)^(n * t).

    Args:
        principal: Amount invested
        rate: Annual rate in percent
        years: Term in years
        frequency: Compounding frequency (Yearly, Half-Yearly, Quarterly)

    Returns:
        Dict with invested_amount, estimated_returns, total_amount and n.
        If principal, rate or years is not positive the principal is
        returned unchanged with zero returns.
    """
    p = finite_or_zero(principal)
    r = finite_or_zero(rate)
    t = finite_or_zero(years)
    n = periods_per_year(frequency)

    if p <= 0 or r <= 0 or t <= 0:
        invested = round_half_up(p)
        return {
            "invested_amount": invested,
            "estimated_returns": 0,
            "total_amount": invested,
            "n": n,
        }

    amount = p * ((1 + r / 100 / n) ** (n * t))

    return {
        "invested_amount": round_half_up(p),
        "estimated_returns": round_half_up(amount - p),
        "total_amount": round_half_up(amount),
        "n": n,
    }


def calculate_nsc(
    principal: float,
    rate: float,
    years: float = NSC_TENURE_YEARS,
    frequency: Union[CompoundingFrequency, str] = CompoundingFrequency.yearly,
) -> Dict:
    """
    Calculate National Savings Certificate maturity.

    Same compounding as ``calculate_compound_interest`` but only yearly or
    half-yearly compounding is recognised; anything else compounds yearly.
    """
    p = finite_or_zero(principal)
    r = finite_or_zero(rate)
    t = finite_or_zero(years)
    n = periods_per_year(frequency, allowed=NSC_FREQUENCIES)

    if p <= 0 or r <= 0 or t <= 0:
        invested = round_half_up(p)
        return {
            "invested_amount": invested,
            "total_interest": 0,
            "total_amount": invested,
            "n": n,
            "years": t,
        }

    amount = p * ((1 + r / 100 / n) ** (n * t))

    return {
        "invested_amount": round_half_up(p),
        "total_interest": round_half_up(amount - p),
        "total_amount": round_half_up(amount),
        "n": n,
        "years": t,
    }


def calculate_simple_interest(principal: float, rate: float, years: float) -> Dict:
    """Calculate simple interest: SI = P * R * T / 100."""
    p = finite_or_zero(principal)
    r = finite_or_zero(rate)
    t = finite_or_zero(years)

    if p <= 0 or r <= 0 or t <= 0:
        invested = round_half_up(p)
        return {
            "invested_amount": invested,
            "estimated_returns": 0,
            "total_amount": invested,
        }

    interest = p * r * t / 100

    return {
        "invested_amount": round_half_up(p),
        "estimated_returns": round_half_up(interest),
        "total_amount": round_half_up(p + interest),
    }


def _coerce(enum_cls, value, default):
    """Enum member for value, or default when value is not one of its members."""
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _years_in(duration: float, unit: DurationUnit) -> float:
    if unit == DurationUnit.months:
        return duration / MONTHS_PER_YEAR
    if unit == DurationUnit.days:
        return duration / DAYS_PER_YEAR
    return duration


def calculate_fd(
    investment: float,
    rate: float,
    duration: float,
    unit: Union[DurationUnit, str] = DurationUnit.years,
    interest_type: Union[InterestType, str] = InterestType.compound,
) -> Dict:
    """
    Calculate fixed deposit maturity.

    Compound interest is applied per unit of the tenure: yearly for a
    tenure in years, monthly (r/12) for months and daily (r/365) for days.
    Simple interest converts the tenure to years first. An unrecognized
    unit is read as Years and an unrecognized interest type as compound.

    Args:
        investment: Deposit amount
        rate: Annual rate in percent
        duration: Tenure, expressed in ``unit``
        unit: Years, Months or Days
        interest_type: "compound" or "simple"

    Returns:
        Dict with invested_amount, estimated_returns and total_value
    """
    p = finite_or_zero(investment)
    r = finite_or_zero(rate) / 100
    d = finite_or_zero(duration)
    unit = _coerce(DurationUnit, unit, DurationUnit.years)

    if _coerce(InterestType, interest_type, InterestType.compound) == InterestType.simple:
        interest = p * r * _years_in(d, unit)
        maturity = p + interest
    elif d <= 0:
        maturity = p
    else:
        if unit == DurationUnit.months:
            period_rate = r / MONTHS_PER_YEAR
        elif unit == DurationUnit.days:
            period_rate = r / DAYS_PER_YEAR
        else:
            period_rate = r
        maturity = p * (max(0.0, 1 + period_rate) ** d)

    return {
        "invested_amount": round_half_up(p),
        "estimated_returns": round_half_up(maturity - p),
        "total_value": round_half_up(maturity),
    }
