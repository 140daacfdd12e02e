"""
Calculator Instruments

One entry per calculator: its parameter limits, default values, choice
options (compounding frequency, tenure unit) and the formula that turns
safe values into a result.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, Tuple

from app.calculations import deposits, growth, interest, retirement, withdrawal
from app.calculations.interest import (
    COMPOUND_INTEREST_FREQUENCIES,
    NSC_FREQUENCIES,
    DurationUnit,
    InterestType,
)
from app.calculations.rates import months_in, round_half_up
from app.config import get_settings
from app.inputs.limits import Limit, LimitSet, describe as describe_limits


@dataclass(frozen=True)
class Option:
    """A choice parameter, cycled through ``choices`` in order."""

    name: str
    choices: Tuple[str, ...]
    default: Optional[str] = None
    # choice -> numeric parameter that becomes active when it is selected
    linked_parameters: Mapping[str, str] = field(default_factory=dict)

    @property
    def initial(self) -> str:
        return self.default if self.default is not None else self.choices[0]

    def next(self, current: str) -> str:
        """Choice after ``current``; unknown values restart at the first."""
        if current not in self.choices:
            return self.choices[0]
        idx = self.choices.index(current)
        return self.choices[(idx + 1) % len(self.choices)]


ComputeFn = Callable[[Dict[str, float], Dict[str, str]], Dict]


@dataclass(frozen=True)
class Instrument:
    """Everything a CalculatorSession needs to run one calculator."""

    key: str
    title: str
    limits: LimitSet
    defaults: Mapping[str, float]
    compute: ComputeFn
    options: Tuple[Option, ...] = ()

    def option(self, name: str) -> Optional[Option]:
        return next((opt for opt in self.options if opt.name == name), None)

    def describe(self) -> Dict:
        return {
            "key": self.key,
            "title": self.title,
            "limits": describe_limits(self.limits),
            "defaults": dict(self.defaults),
            "options": {
                opt.name: {"choices": list(opt.choices), "default": opt.initial}
                for opt in self.options
            },
        }


def _round_money(result: Dict, keys: Tuple[str, ...]) -> Dict:
    """Round the monetary fields of an unrounded result for display."""
    rounded = dict(result)
    for key in keys:
        rounded[key] = round_half_up(result[key])
    return rounded


_GROWTH_MONEY = ("maturity", "total_invested", "gain")


def _sip(values, options):
    result = growth.calculate_sip(values["amount"], values["annual_return"], values["years"])
    return _round_money(result, _GROWTH_MONEY)


def _lumpsum(values, options):
    result = growth.calculate_lumpsum(values["amount"], values["annual_return"], values["years"])
    return _round_money(result, _GROWTH_MONEY)


def _mutual_fund(values, options):
    result = growth.calculate_lumpsum(values["investment"], values["rate"], values["years"])
    return {
        "maturity": round_half_up(result["maturity"]),
        "invested_amount": round_half_up(result["total_invested"]),
        "gain": round_half_up(result["maturity"]) - round_half_up(result["total_invested"]),
    }


def _step_up_sip(values, options):
    return growth.calculate_step_up_sip(
        values["monthly_investment"],
        values["step_up_pct"],
        values["annual_return"],
        values["years"],
    )


def _compound_interest(values, options):
    return interest.calculate_compound_interest(
        values["principal"], values["rate"], values["years"], options["frequency"]
    )


def _nsc(values, options):
    return interest.calculate_nsc(
        values["principal"], values["rate"], values["years"], options["frequency"]
    )


def _simple_interest(values, options):
    return interest.calculate_simple_interest(values["principal"], values["rate"], values["years"])


_FD_UNIT_PARAMETERS = {
    DurationUnit.years.value: "years",
    DurationUnit.months.value: "months",
    DurationUnit.days.value: "days",
}


def _fd(values, options):
    unit = options["unit"]
    return interest.calculate_fd(
        values["investment"],
        values["rate"],
        values[_FD_UNIT_PARAMETERS[unit]],
        unit,
        options["interest_type"],
    )


_RD_UNIT_PARAMETERS = {
    DurationUnit.years.value: "years",
    DurationUnit.months.value: "months",
}


def _rd(values, options):
    if options["unit"] == DurationUnit.years.value:
        total_months = months_in(values["years"])
    else:
        total_months = max(0, round_half_up(values["months"]))
    return deposits.calculate_rd(values["monthly_investment"], values["rate"], total_months)


def _ppf(values, options):
    return deposits.calculate_ppf(values["yearly_investment"], values["years"], values["rate"])


def _ssy(values, options):
    settings = get_settings()
    return deposits.calculate_ssy(
        values["yearly_investment"], settings.ssy_interest_rate, values["start_year"]
    )


def _nps(values, options):
    settings = get_settings()
    return retirement.calculate_nps(
        values["monthly_investment"],
        values["annual_return"],
        values["age"],
        settings.nps_retirement_age,
    )


def _gratuity(values, options):
    return retirement.calculate_gratuity(values["monthly_salary"], values["years_of_service"])


def _epf(values, options):
    settings = get_settings()
    return retirement.calculate_epf(
        values["monthly_salary"],
        values["age"],
        values["contribution_pct"],
        values["annual_increase"],
        settings.epf_interest_rate,
        retirement_age=settings.epf_retirement_age,
        include_employer=settings.epf_include_employer,
    )


def _swp(values, options):
    return withdrawal.calculate_swp(
        values["investment"], values["withdrawal"], values["rate"], values["years"]
    )


_FREQUENCY = "frequency"


INSTRUMENTS: Dict[str, Instrument] = {
    inst.key: inst
    for inst in (
        Instrument(
            key="sip",
            title="SIP Calculator",
            limits=LimitSet({
                "amount": Limit(1000, 200000),
                "annual_return": Limit(1, 30, "%"),
                "years": Limit(1, 40),
            }),
            defaults={"amount": 25000, "annual_return": 12, "years": 10},
            compute=_sip,
        ),
        Instrument(
            key="lumpsum",
            title="Lumpsum Calculator",
            limits=LimitSet({
                "amount": Limit(1000, 10000000),
                "annual_return": Limit(1, 30, "%"),
                "years": Limit(1, 40),
            }),
            defaults={"amount": 100000, "annual_return": 12, "years": 10},
            compute=_lumpsum,
        ),
        Instrument(
            key="mutual-fund",
            title="Mutual Fund Returns Calculator",
            limits=LimitSet({
                "investment": Limit(500, 10000000),
                "rate": Limit(1, 50, "%"),
                "years": Limit(1, 40),
            }),
            defaults={"investment": 25000, "rate": 12, "years": 10},
            compute=_mutual_fund,
        ),
        Instrument(
            key="step-up-sip",
            title="Step-Up SIP Calculator",
            limits=LimitSet({
                "monthly_investment": Limit(100, 1000000),
                "step_up_pct": Limit(1, 50, "%"),
                "annual_return": Limit(1, 30, "%"),
                "years": Limit(1, 40),
            }),
            defaults={
                "monthly_investment": 25000,
                "step_up_pct": 10,
                "annual_return": 12,
                "years": 10,
            },
            compute=_step_up_sip,
        ),
        Instrument(
            key="compound-interest",
            title="Compound Interest Calculator",
            limits=LimitSet({
                "principal": Limit(1000, 10000000),
                "rate": Limit(1, 50, "%"),
                "years": Limit(1, 30),
            }),
            defaults={"principal": 100000, "rate": 6, "years": 5},
            compute=_compound_interest,
            options=(
                Option(_FREQUENCY, tuple(f.value for f in COMPOUND_INTEREST_FREQUENCIES)),
            ),
        ),
        Instrument(
            key="nsc",
            title="NSC Calculator",
            limits=LimitSet({
                "principal": Limit(1000, 10000000),
                "rate": Limit(1, 10, "%"),
                "years": Limit(interest.NSC_TENURE_YEARS, interest.NSC_TENURE_YEARS),
            }),
            defaults={"principal": 100000, "rate": 6, "years": interest.NSC_TENURE_YEARS},
            compute=_nsc,
            options=(Option(_FREQUENCY, tuple(f.value for f in NSC_FREQUENCIES)),),
        ),
        Instrument(
            key="simple-interest",
            title="Simple Interest Calculator",
            limits=LimitSet({
                "principal": Limit(1000, 10000000),
                "rate": Limit(1, 50, "%"),
                "years": Limit(1, 30),
            }),
            defaults={"principal": 100000, "rate": 6, "years": 5},
            compute=_simple_interest,
        ),
        Instrument(
            key="fd",
            title="FD Calculator",
            limits=LimitSet({
                "investment": Limit(5000, 10000000),
                "rate": Limit(1, 15),
                "years": Limit(1, 25),
                "months": Limit(1, 11),
                "days": Limit(1, 31),
            }),
            defaults={"investment": 100000, "rate": 6.5, "years": 5, "months": 5, "days": 5},
            compute=_fd,
            options=(
                Option(
                    "unit",
                    tuple(_FD_UNIT_PARAMETERS),
                    linked_parameters=_FD_UNIT_PARAMETERS,
                ),
                Option("interest_type", tuple(t.value for t in InterestType)),
            ),
        ),
        Instrument(
            key="rd",
            title="RD Calculator",
            limits=LimitSet({
                "monthly_investment": Limit(500, 1000000),
                "rate": Limit(1, 15),
                "years": Limit(1, 10),
                "months": Limit(1, 9),
            }),
            defaults={"monthly_investment": 50000, "rate": 6.5, "years": 3, "months": 3},
            compute=_rd,
            options=(
                Option(
                    "unit",
                    tuple(_RD_UNIT_PARAMETERS),
                    linked_parameters=_RD_UNIT_PARAMETERS,
                ),
            ),
        ),
        Instrument(
            key="ppf",
            title="PPF Calculator",
            limits=LimitSet({
                "yearly_investment": Limit(500, 150000),
                "years": Limit(15, 50),
                "rate": Limit(0.1, 50, "%"),
            }),
            defaults={"yearly_investment": 10000, "years": 15, "rate": 7.1},
            compute=_ppf,
        ),
        Instrument(
            key="ssy",
            title="Sukanya Samriddhi Yojana Calculator",
            limits=LimitSet({
                "yearly_investment": Limit(250, 150000),
                "girl_age": Limit(1, 10),
                "start_year": Limit(2018, 2030),
            }),
            defaults={"yearly_investment": 10000, "girl_age": 5, "start_year": 2021},
            compute=_ssy,
        ),
        Instrument(
            key="nps",
            title="NPS Calculator",
            limits=LimitSet({
                "monthly_investment": Limit(500, 150000),
                "annual_return": Limit(8, 15, "%"),
                "age": Limit(18, 60),
            }),
            defaults={"monthly_investment": 10000, "annual_return": 9, "age": 20},
            compute=_nps,
        ),
        Instrument(
            key="gratuity",
            title="Gratuity Calculator",
            limits=LimitSet({
                "monthly_salary": Limit(10000, 100000000),
                "years_of_service": Limit(5, 50),
            }),
            defaults={"monthly_salary": 60000, "years_of_service": 20},
            compute=_gratuity,
        ),
        Instrument(
            key="epf",
            title="EPF Calculator",
            limits=LimitSet({
                "monthly_salary": Limit(1000, 500000),
                "age": Limit(15, 58),
                "contribution_pct": Limit(12, 20, "%"),
                "annual_increase": Limit(0, 15, "%"),
            }),
            defaults={
                "monthly_salary": 50000,
                "age": 30,
                "contribution_pct": 12,
                "annual_increase": 5,
            },
            compute=_epf,
        ),
        Instrument(
            key="swp",
            title="SWP Calculator",
            limits=LimitSet({
                "investment": Limit(10000, 10000000),
                "withdrawal": Limit(500, 1000000),
                "rate": Limit(1, 30),
                "years": Limit(1, 30),
            }),
            defaults={"investment": 500000, "withdrawal": 10000, "rate": 8, "years": 5},
            compute=_swp,
        ),
    )
}


def get_instrument(key: str) -> Instrument:
    """
    Look up an instrument by key.

    Raises:
        KeyError: If no calculator is registered under ``key``
    """
    return INSTRUMENTS[key]
