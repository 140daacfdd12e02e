"""
Small-Savings Deposit Calculations

PPF (yearly deposits), recurring deposits (monthly deposits) and
Sukanya Samriddhi Yojana.
"""

from typing import Dict

from app.calculations.rates import (
    MONTHS_PER_YEAR,
    annuity_due_future_value,
    finite_or_zero,
    nominal_period_rate,
    round_half_up,
    round_to_paise,
)

SSY_CONTRIBUTION_YEARS = 15
SSY_MATURITY_YEARS = 21


def calculate_ppf(yearly_investment: float, years: float, rate: float) -> Dict:
    """
    Calculate PPF maturity for deposits made at the start of each year.

    Args:
        yearly_investment: Amount deposited every year
        years: Number of yearly deposits
        rate: Annual interest rate in percent

    Returns:
        Dict with invested_amount, total_interest and maturity_value
    """
    p = finite_or_zero(yearly_investment)
    n = finite_or_zero(years)
    i = finite_or_zero(rate) / 100

    invested = round_half_up(p * n)

    if i == 0:
        return {
            "invested_amount": invested,
            "total_interest": 0,
            "maturity_value": invested,
        }

    maturity = round_half_up(annuity_due_future_value(p, i, n))

    return {
        "invested_amount": invested,
        "total_interest": maturity - invested,
        "maturity_value": maturity,
    }


def calculate_rd(monthly_investment: float, rate: float, total_months: int) -> Dict:
    """
    Calculate recurring deposit maturity.

    Monthly deposits at the start of each month, compounded at the
    nominal monthly rate (annual rate / 12).
    """
    p = finite_or_zero(monthly_investment)
    r = finite_or_zero(rate)
    n = max(0, int(total_months or 0))

    if p <= 0 or n <= 0 or r <= 0:
        invested = round_half_up(p * n)
        return {
            "invested_amount": invested,
            "estimated_returns": 0,
            "total_value": invested,
            "total_months": n,
        }

    monthly_rate = nominal_period_rate(r, MONTHS_PER_YEAR)
    future_value = annuity_due_future_value(p, monthly_rate, n)
    invested = p * n

    return {
        "invested_amount": round_half_up(invested),
        "estimated_returns": round_half_up(future_value - invested),
        "total_value": round_half_up(future_value),
        "total_months": n,
    }


def calculate_ssy(yearly_investment: float, rate: float, start_year: int) -> Dict:
    """
    Calculate Sukanya Samriddhi Yojana maturity.

    The account runs for 21 years. Interest is applied monthly at the
    nominal monthly rate; the yearly deposit is credited at the end of
    months 12, 24, ..., 180 (the first 15 years). The balance is kept to
    1/100 of a unit each month.

    Args:
        yearly_investment: Deposit made each year
        rate: Annual interest rate in percent
        start_year: Calendar year the account is opened

    Returns:
        Dict with contributions, invested_amount, total_interest,
        maturity_value and maturity_year
    """
    p = finite_or_zero(yearly_investment)
    monthly_rate = nominal_period_rate(rate, MONTHS_PER_YEAR)
    total_months = SSY_MATURITY_YEARS * MONTHS_PER_YEAR
    last_deposit_month = SSY_CONTRIBUTION_YEARS * MONTHS_PER_YEAR

    balance = 0.0
    for month in range(1, total_months + 1):
        balance = round_to_paise(balance * (1 + monthly_rate))
        if month % MONTHS_PER_YEAR == 0 and month <= last_deposit_month:
            balance = round_to_paise(balance + p)

    maturity_value = round_half_up(balance)
    invested = round_half_up(p * SSY_CONTRIBUTION_YEARS)

    return {
        "contributions": SSY_CONTRIBUTION_YEARS,
        "invested_amount": invested,
        "total_interest": maturity_value - invested,
        "maturity_value": maturity_value,
        "maturity_year": int(finite_or_zero(start_year)) + SSY_MATURITY_YEARS,
    }
