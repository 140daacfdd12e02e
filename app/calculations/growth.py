"""
Market-Linked Growth Calculations

SIP (monthly contributions), lumpsum and step-up SIP projections.
Monthly compounding uses the effective monthly rate derived from the
annual return, not the nominal annual/12 split.
"""

from typing import Dict

from app.calculations.rates import (
    annual_to_monthly_rate,
    annuity_due_future_value,
    finite_or_zero,
    months_in,
    round_half_up,
    round_to_paise,
)


def calculate_sip(amount: float, annual_return: float, years: float) -> Dict:
    """
    Calculate the maturity value of a monthly SIP.

    Contributions are made at the start of each month (annuity-due).
    Amounts are not rounded; callers round for display.

    Args:
        amount: Monthly investment
        annual_return: Expected annual return in percent (e.g., 12)
        years: Investment period in years

    Returns:
        Dict with maturity, total_invested, gain, monthly_rate and months
    """
    monthly_rate = annual_to_monthly_rate(annual_return)
    months = months_in(years)
    monthly_amount = finite_or_zero(amount)
    total_invested = monthly_amount * months

    if monthly_rate == 0:
        return {
            "maturity": total_invested,
            "total_invested": total_invested,
            "gain": 0.0,
            "monthly_rate": monthly_rate,
            "months": months,
        }

    maturity = annuity_due_future_value(monthly_amount, monthly_rate, months)

    return {
        "maturity": maturity,
        "total_invested": total_invested,
        "gain": maturity - total_invested,
        "monthly_rate": monthly_rate,
        "months": months,
    }


def calculate_lumpsum(amount: float, annual_return: float, years: float) -> Dict:
    """
    Calculate compound growth of a single upfront investment.

    Args:
        amount: Principal invested today
        annual_return: Expected annual return in percent
        years: Holding period in years

    Returns:
        Dict with maturity, total_invested and gain (unrounded)
    """
    principal = finite_or_zero(amount)
    rate = finite_or_zero(annual_return) / 100
    yrs = max(0.0, finite_or_zero(years))

    maturity = principal * (max(0.0, 1 + rate) ** yrs)

    return {
        "maturity": maturity,
        "total_invested": principal,
        "gain": maturity - principal,
    }


def calculate_step_up_sip(
    monthly_investment: float,
    step_up_pct: float,
    annual_return: float,
    years: float,
) -> Dict:
    """
    Simulate a SIP whose contribution rises by a fixed percentage each year.

    Each month the contribution (rounded to whole units) is added first,
    then the balance grows by the effective monthly rate. The balance is
    kept to 1/100 of a unit throughout.

    Args:
        monthly_investment: Starting monthly contribution
        step_up_pct: Yearly increase in the contribution, in percent
        annual_return: Expected annual return in percent
        years: Investment period in years

    Returns:
        Dict with months, monthly_rate, invested_amount,
        estimated_returns and total_value
    """
    months = months_in(years)
    monthly_rate = annual_to_monthly_rate(annual_return)
    step = finite_or_zero(step_up_pct) / 100
    base = finite_or_zero(monthly_investment)

    balance = 0.0
    total_invested = 0

    for month in range(months):
        year_index = month // 12
        contribution = round_half_up(base * ((1 + step) ** year_index))

        balance = round_to_paise(balance + contribution)
        total_invested += contribution

        if monthly_rate != 0:
            balance = round_to_paise(balance * (1 + monthly_rate))

    total_value = round_half_up(balance)

    return {
        "months": months,
        "monthly_rate": monthly_rate,
        "invested_amount": total_invested,
        "estimated_returns": total_value - total_invested,
        "total_value": total_value,
    }
