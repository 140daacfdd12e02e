"""
Systematic Withdrawal Plan (SWP) Calculations

A fixed amount is withdrawn from a growing corpus every month. Because
the withdrawal is a fixed amount rather than a share of the balance the
plan is simulated month by month instead of using a closed form.

Each month the balance first grows by the effective monthly rate and is
rounded to 1/100 of a unit, then the withdrawal (rounded to a whole unit)
is taken out. Growing before withdrawing gives a different final balance
than the reverse order, so the order is fixed. The balance is allowed to
go negative: that models a depleted fund.
"""

from typing import Dict, Iterator, List

from app.calculations.rates import (
    annual_to_monthly_rate,
    months_in,
    round_half_up,
    round_to_paise,
)


def swp_schedule(
    investment: float,
    withdrawal: float,
    rate: float,
    years: float,
) -> Iterator[Dict]:
    """
    Yield one row per simulated month.

    Args:
        investment: Starting corpus
        withdrawal: Amount withdrawn each month
        rate: Expected annual return in percent
        years: Withdrawal period in years

    Yields:
        Dict with month, opening_balance, growth, withdrawal and
        closing_balance
    """
    monthly_rate = annual_to_monthly_rate(rate)
    amount = round_half_up(withdrawal)
    balance = round_to_paise(investment)

    for month in range(1, months_in(years) + 1):
        opening = balance
        if monthly_rate != 0:
            balance = round_to_paise(balance * (1 + monthly_rate))
        grown = balance
        balance = round_to_paise(balance - amount)

        yield {
            "month": month,
            "opening_balance": opening,
            "growth": round_to_paise(grown - opening),
            "withdrawal": amount,
            "closing_balance": balance,
        }


def calculate_swp(
    investment: float,
    withdrawal: float,
    rate: float,
    years: float,
) -> Dict:
    """
    Calculate the outcome of a systematic withdrawal plan.

    Returns:
        Dict with invested_amount, total_withdrawal and final_value
    """
    balance = round_to_paise(investment)
    total_withdrawn = 0

    for row in swp_schedule(investment, withdrawal, rate, years):
        total_withdrawn += row["withdrawal"]
        balance = row["closing_balance"]

    return {
        "invested_amount": round_half_up(investment),
        "total_withdrawal": total_withdrawn,
        "final_value": round_half_up(balance),
    }


def summarize_schedule(schedule: List[Dict]) -> Dict:
    """Totals for a month-by-month SWP schedule."""
    if not schedule:
        return {"months": 0, "total_growth": 0.0, "total_withdrawal": 0, "depleted_in_month": None}

    depleted = next(
        (row["month"] for row in schedule if row["closing_balance"] < 0), None
    )
    return {
        "months": len(schedule),
        "total_growth": round_to_paise(sum(row["growth"] for row in schedule)),
        "total_withdrawal": sum(row["withdrawal"] for row in schedule),
        "depleted_in_month": depleted,
    }
