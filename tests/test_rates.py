"""
Tests for rate conversion and rounding helpers.
"""

import math

from app.calculations.rates import (
    annual_to_monthly_rate,
    annuity_due_future_value,
    finite_or_zero,
    months_in,
    nominal_period_rate,
    round_half_up,
    round_to_paise,
)


class TestRounding:
    """Test the currency rounding policy."""

    def test_half_rounds_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(692307.69) == 692308

    def test_negative_half_rounds_toward_positive(self):
        assert round_half_up(-2.5) == -2
        assert round_half_up(-2.6) == -3

    def test_non_finite_rounds_to_zero(self):
        assert round_half_up(float("nan")) == 0
        assert round_half_up(float("inf")) == 0

    def test_round_to_paise(self):
        assert round_to_paise(10.125) == 10.13
        assert round_to_paise(99.994) == 99.99

    def test_months_in(self):
        assert months_in(10) == 120
        assert months_in(0.5) == 6
        assert months_in(2.625) == 32  # 31.5 months rounds up
        assert months_in(-3) == 0


class TestFiniteOrZero:
    """Test numeric coercion."""

    def test_non_numbers_are_zero(self):
        assert finite_or_zero("abc") == 0.0
        assert finite_or_zero(None) == 0.0
        assert finite_or_zero(float("nan")) == 0.0

    def test_numbers_pass_through(self):
        assert finite_or_zero("7.5") == 7.5
        assert finite_or_zero(-3) == -3.0


class TestRateConversion:
    """Test annual/monthly rate conversion."""

    def test_annual_to_monthly_compounds_back(self):
        monthly = annual_to_monthly_rate(12)
        assert abs(monthly - 0.009489) < 1e-6
        assert abs((1 + monthly) ** 12 - 1.12) < 1e-12

    def test_zero_and_non_finite_rate(self):
        assert annual_to_monthly_rate(0) == 0
        assert annual_to_monthly_rate(float("nan")) == 0
        assert annual_to_monthly_rate(float("inf")) == 0

    def test_nominal_period_rate(self):
        assert math.isclose(nominal_period_rate(12, 12), 0.01)
        assert math.isclose(nominal_period_rate(6, 2), 0.03)
        assert nominal_period_rate(6, 0) == 0


class TestAnnuityDue:
    """Test annuity-due future value."""

    def test_zero_rate_is_sum_of_payments(self):
        assert annuity_due_future_value(1000, 0, 12) == 12000

    def test_single_period(self):
        # One payment at the start of the period earns one period of interest
        assert math.isclose(annuity_due_future_value(1000, 0.1, 1), 1100.0)

    def test_two_periods(self):
        # 1000 * 1.1^2 + 1000 * 1.1
        assert math.isclose(annuity_due_future_value(1000, 0.1, 2), 2310.0)
