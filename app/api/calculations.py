"""
Calculator API endpoints.

These endpoints accept raw form input and return canonical values,
validation flags and the calculated result. Each request runs in its
own session; nothing is kept between requests.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from app.calculations.withdrawal import summarize_schedule, swp_schedule
from app.inputs.instruments import INSTRUMENTS, Instrument
from app.inputs.session import CalculatorInputError, CalculatorSession

logger = logging.getLogger(__name__)

router = APIRouter()

RawValue = Optional[Union[float, str]]


class CalculationInput(BaseModel):
    """Raw form values and option choices for one calculator."""

    values: Dict[str, RawValue] = {}
    options: Dict[str, str] = {}


class ValidationOutput(BaseModel):
    error: bool
    message: str


class CalculationResponse(BaseModel):
    """Canonical inputs, validation flags and result."""

    instrument: str
    state: str
    values: Dict[str, float]
    safe_values: Dict[str, float]
    options: Dict[str, str]
    errors: Dict[str, ValidationOutput]
    has_errors: bool
    result: Dict[str, Any]


class CycleInput(BaseModel):
    """Current choice of an option to advance."""

    option: str
    current: str


class CycleResponse(BaseModel):
    option: str
    value: str


class ScheduleResponse(BaseModel):
    """SWP month-by-month schedule."""

    result: Dict[str, Any]
    summary: Dict[str, Any]
    schedule: List[Dict[str, Any]]


def _instrument(key: str) -> Instrument:
    instrument = INSTRUMENTS.get(key)
    if instrument is None:
        raise HTTPException(status_code=404, detail=f"Unknown calculator '{key}'")
    return instrument


def _session(instrument: Instrument, inputs: CalculationInput) -> CalculatorSession:
    try:
        session = CalculatorSession(instrument, options=inputs.options)
        session.update(inputs.values)
    except CalculatorInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return session


@router.get("/instruments")
async def list_instruments():
    """List every calculator with its limits, defaults and options."""
    return {"instruments": [inst.describe() for inst in INSTRUMENTS.values()]}


@router.get("/instruments/{key}")
async def get_instrument_detail(key: str):
    """Describe one calculator."""
    return _instrument(key).describe()


@router.post("/swp/schedule", response_model=ScheduleResponse)
async def calculate_swp_schedule(inputs: CalculationInput):
    """Month-by-month SWP balances for the given inputs."""
    session = _session(_instrument("swp"), inputs)
    safe = session.safe_values
    schedule = list(
        swp_schedule(safe["investment"], safe["withdrawal"], safe["rate"], safe["years"])
    )
    return ScheduleResponse(
        result=session.result,
        summary=summarize_schedule(schedule),
        schedule=schedule,
    )


@router.post("/{key}", response_model=CalculationResponse)
async def calculate(key: str, inputs: CalculationInput):
    """Canonicalize raw input for a calculator and compute its result."""
    instrument = _instrument(key)
    session = _session(instrument, inputs)
    logger.info(f"Calculated {key} with {len(inputs.values)} input(s)")
    return CalculationResponse(**session.snapshot())


@router.post("/{key}/cycle", response_model=CycleResponse)
async def cycle_option(key: str, inputs: CycleInput):
    """Return the choice that follows ``current`` for a calculator option."""
    option = _instrument(key).option(inputs.option)
    if option is None:
        raise HTTPException(
            status_code=400, detail=f"Unknown option '{inputs.option}' for {key}"
        )
    return CycleResponse(option=option.name, value=option.next(inputs.current))
