"""
Retirement Calculations

NPS corpus, gratuity payout and EPF accumulation.
"""

from typing import Dict

from app.calculations.rates import (
    MONTHS_PER_YEAR,
    annuity_due_future_value,
    finite_or_zero,
    months_in,
    nominal_period_rate,
    round_half_up,
    round_to_paise,
)

# Statutory ceiling on tax-free gratuity (10 lakh)
GRATUITY_CAP = 1_000_000

# Gratuity is 15 days' wages per year of service, on a 26-day month
GRATUITY_DAYS_PER_YEAR = 15
WORKING_DAYS_PER_MONTH = 26

# Share of the NPS corpus that must buy an annuity at retirement
NPS_MIN_ANNUITY_RATIO = 0.4

DEFAULT_NPS_RETIREMENT_AGE = 60
DEFAULT_EPF_RETIREMENT_AGE = 58


def calculate_nps(
    monthly_investment: float,
    annual_return: float,
    age: float,
    retirement_age: float = DEFAULT_NPS_RETIREMENT_AGE,
) -> Dict:
    """
    Calculate the NPS corpus at retirement.

    Monthly contributions from ``age`` until ``retirement_age`` are
    compounded at the nominal monthly rate (annual return / 12) as an
    annuity-due.

    Args:
        monthly_investment: Contribution per month
        annual_return: Expected annual return in percent
        age: Current age in years
        retirement_age: Age at which contributions stop

    Returns:
        Dict with total_investment, interest_earned, maturity_amount,
        min_annuity_investment, tenure_years and total_months
    """
    p = finite_or_zero(monthly_investment)
    r = finite_or_zero(annual_return)
    tenure_years = max(0.0, finite_or_zero(retirement_age) - finite_or_zero(age))
    n = months_in(tenure_years)

    if p <= 0 or n <= 0 or r <= 0:
        invested = round_half_up(p * n)
        return {
            "total_investment": invested,
            "interest_earned": 0,
            "maturity_amount": invested,
            "min_annuity_investment": round_half_up(invested * NPS_MIN_ANNUITY_RATIO),
            "tenure_years": tenure_years,
            "total_months": n,
        }

    monthly_rate = nominal_period_rate(r, MONTHS_PER_YEAR)
    future_value = annuity_due_future_value(p, monthly_rate, n)
    invested = p * n
    maturity_amount = round_half_up(future_value)

    return {
        "total_investment": round_half_up(invested),
        "interest_earned": round_half_up(future_value - invested),
        "maturity_amount": maturity_amount,
        "min_annuity_investment": round_half_up(maturity_amount * NPS_MIN_ANNUITY_RATIO),
        "tenure_years": tenure_years,
        "total_months": n,
    }


def calculate_gratuity(monthly_salary: float, years_of_service: float) -> Dict:
    """
    Calculate gratuity: G = n * b * 15 / 26, capped at 10 lakh.

    ``n`` is years of service rounded to the nearest whole year (x.5
    rounds up) and ``b`` is the last drawn monthly basic salary plus DA.

    Args:
        monthly_salary: Last drawn monthly basic + DA
        years_of_service: Completed years of service

    Returns:
        Dict with rounded_years, gratuity_raw, gratuity_capped, capped
        and cap. Non-positive salary or service yields zero gratuity.
    """
    salary = finite_or_zero(monthly_salary)
    years = finite_or_zero(years_of_service)

    if salary <= 0 or years <= 0:
        return {
            "rounded_years": round_half_up(years),
            "gratuity_raw": 0,
            "gratuity_capped": 0,
            "capped": False,
            "cap": GRATUITY_CAP,
        }

    rounded_years = round_half_up(years)
    raw = rounded_years * salary * GRATUITY_DAYS_PER_YEAR / WORKING_DAYS_PER_MONTH
    gratuity_raw = round_half_up(raw)

    return {
        "rounded_years": rounded_years,
        "gratuity_raw": gratuity_raw,
        "gratuity_capped": round_half_up(min(raw, GRATUITY_CAP)),
        "capped": gratuity_raw > GRATUITY_CAP,
        "cap": GRATUITY_CAP,
    }


def calculate_epf(
    monthly_salary: float,
    age: float,
    contribution_pct: float,
    annual_increase: float,
    rate: float,
    retirement_age: float = DEFAULT_EPF_RETIREMENT_AGE,
    include_employer: bool = True,
) -> Dict:
    """
    Simulate EPF accumulation month by month until retirement.

    Salary rises by ``annual_increase`` at the start of each new year
    (months 13, 25, ...). Employee and employer contributions are the
    same percentage of salary, rounded to whole units, and are credited
    at the start of the month before that month's interest is applied.
    The employer share goes entirely to EPF (no EPS split).

    Args:
        monthly_salary: Basic + DA per month today
        age: Current age
        contribution_pct: Employee contribution in percent of salary
        annual_increase: Yearly salary increase in percent
        rate: EPF annual interest rate in percent
        retirement_age: Age at which contributions stop
        include_employer: Whether the matching employer share is added

    Returns:
        Dict with months, years_to_retire, invested_employee,
        invested_employer, total_invested, total_interest, maturity_value
    """
    years_to_retire = max(0.0, finite_or_zero(retirement_age) - finite_or_zero(age))
    months = months_in(years_to_retire)
    monthly_rate = nominal_period_rate(rate, MONTHS_PER_YEAR)
    share = finite_or_zero(contribution_pct) / 100
    increase = finite_or_zero(annual_increase) / 100

    salary = finite_or_zero(monthly_salary)
    balance = 0.0
    invested_employee = 0
    invested_employer = 0

    for month in range(1, months + 1):
        if month > 1 and (month - 1) % MONTHS_PER_YEAR == 0:
            salary = round_to_paise(salary * (1 + increase))

        employee = round_half_up(salary * share)
        employer = round_half_up(salary * share) if include_employer else 0

        balance = round_to_paise(balance + employee + employer)
        invested_employee += employee
        invested_employer += employer

        balance = round_to_paise(balance * (1 + monthly_rate))

    total_invested = invested_employee + invested_employer
    maturity_value = round_half_up(balance)

    return {
        "months": months,
        "years_to_retire": years_to_retire,
        "invested_employee": invested_employee,
        "invested_employer": invested_employer,
        "total_invested": total_invested,
        "total_interest": maturity_value - total_invested,
        "maturity_value": maturity_value,
    }
