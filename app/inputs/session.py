"""
Calculator Session

Generic input controller shared by every calculator. A session owns one
set of parameters for one instrument: it canonicalizes each edit, flags
values below their minimum, and recomputes the result from safe values.

State moves Idle -> Editing -> Validated -> Computed. Every edit runs the
whole pipeline synchronously, so a session is never left in Editing or
Validated once ``set_value`` returns.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from app.inputs.instruments import Instrument, get_instrument
from app.inputs.limits import (
    Limit,
    ValidationResult,
    canonicalize,
    is_below_minimum,
    safe_value,
    validate,
)

logger = logging.getLogger(__name__)


class CalculatorInputError(ValueError):
    """Raised when a caller addresses a session incorrectly."""


class UnknownParameterError(CalculatorInputError):
    pass


class ReadOnlyParameterError(CalculatorInputError):
    pass


class InvalidOptionError(CalculatorInputError):
    pass


class SessionState(str, enum.Enum):
    idle = "idle"
    editing = "editing"
    validated = "validated"
    computed = "computed"


@dataclass
class Parameter:
    """One numeric input of a calculator."""

    name: str
    limit: Limit
    value: float  # canonical value, always finite and >= 0
    raw: Any = None

    @property
    def below_minimum(self) -> bool:
        return is_below_minimum(self.value, self.limit)

    @property
    def safe(self) -> float:
        return safe_value(self.value, self.limit)


class CalculatorSession:
    """
    Mutable parameter set and cached result for one calculator.

    Args:
        instrument: Instrument or its registry key (e.g. "sip")
        initial: Optional starting values overriding the defaults
        options: Optional starting choices (e.g. {"frequency": "Quarterly"})
    """

    def __init__(
        self,
        instrument,
        initial: Optional[Mapping[str, Any]] = None,
        options: Optional[Mapping[str, str]] = None,
    ):
        if not isinstance(instrument, Instrument):
            instrument = get_instrument(instrument)
        self.instrument = instrument
        self.state = SessionState.idle
        self._result: Optional[Dict] = None
        self._errors: Dict[str, ValidationResult] = {}

        self.parameters: Dict[str, Parameter] = {}
        for name, limit in instrument.limits.items():
            default = instrument.defaults[name]
            self.parameters[name] = Parameter(
                name=name,
                limit=limit,
                value=canonicalize(default, limit.max),
                raw=default,
            )
        self.options: Dict[str, str] = {opt.name: opt.initial for opt in instrument.options}

        for name, raw in (initial or {}).items():
            self._assign(self._editable(name), raw)
        for name, choice in (options or {}).items():
            self._check_option(name, choice)
            self.options[name] = choice

    def __repr__(self) -> str:
        return f"CalculatorSession({self.instrument.key!r}, state={self.state.value})"

    def _parameter(self, name: str) -> Parameter:
        try:
            return self.parameters[name]
        except KeyError:
            logger.warning(f"Unknown parameter '{name}' for {self.instrument.key}")
            raise UnknownParameterError(
                f"Unknown parameter '{name}' for {self.instrument.key}"
            ) from None

    def _editable(self, name: str) -> Parameter:
        param = self._parameter(name)
        if param.limit.read_only:
            raise ReadOnlyParameterError(f"{name} is fixed for {self.instrument.key}")
        return param

    def _assign(self, param: Parameter, raw: Any) -> None:
        param.raw = raw
        param.value = canonicalize(raw, param.limit.max)
        logger.debug(f"{self.instrument.key}.{param.name}: {raw!r} -> {param.value}")

    def _check_option(self, name: str, choice: str) -> None:
        option = self.instrument.option(name)
        if option is None:
            raise InvalidOptionError(f"Unknown option '{name}' for {self.instrument.key}")
        if choice not in option.choices:
            raise InvalidOptionError(
                f"Invalid {name} '{choice}' for {self.instrument.key}; "
                f"expected one of {', '.join(option.choices)}"
            )

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def set_value(self, name: str, raw: Any) -> Dict:
        """
        Apply a raw edit to a parameter and recompute.

        Empty or malformed input is stored as 0; input above the maximum is
        clamped to it. Values below the minimum are kept and flagged.

        Returns:
            The recomputed result
        """
        param = self._editable(name)
        self.state = SessionState.editing
        self._assign(param, raw)
        return self.refresh()

    def update(self, values: Mapping[str, Any]) -> Dict:
        """
        Apply several raw edits and recompute once.

        Every name is checked before any value changes, so a bad name
        leaves the session as it was.
        """
        params = [(self._editable(name), raw) for name, raw in values.items()]
        if not params:
            return self.result
        self.state = SessionState.editing
        for param, raw in params:
            self._assign(param, raw)
        return self.refresh()

    def set_option(self, name: str, choice: str) -> Dict:
        """Select a choice option (frequency, unit, ...) and recompute."""
        self._check_option(name, choice)
        self.state = SessionState.editing
        self.options[name] = choice
        self._restore_linked_default(name, choice)
        return self.refresh()

    def cycle_option(self, name: str) -> str:
        """Advance an option to its next choice and recompute."""
        option = self.instrument.option(name)
        if option is None:
            raise InvalidOptionError(f"Unknown option '{name}' for {self.instrument.key}")
        choice = option.next(self.options[name])
        self.set_option(name, choice)
        return choice

    def _restore_linked_default(self, name: str, choice: str) -> None:
        # Switching tenure unit brings the newly active field back to its
        # default if it was left empty or below its minimum.
        linked = self.instrument.option(name).linked_parameters.get(choice)
        if linked is None:
            return
        param = self.parameters[linked]
        if param.below_minimum:
            param.value = canonicalize(self.instrument.defaults[linked], param.limit.max)
            param.raw = self.instrument.defaults[linked]

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def refresh(self) -> Dict:
        """Run validation and computation for the current values."""
        self._errors = {
            name: validate(param.value, param.limit)
            for name, param in self.parameters.items()
        }
        self.state = SessionState.validated

        self._result = self.instrument.compute(self.safe_values, dict(self.options))
        self.state = SessionState.computed
        logger.debug(f"{self.instrument.key} recomputed: {self._result}")
        return self._result

    @property
    def result(self) -> Dict:
        if self.state == SessionState.idle or self._result is None:
            return self.refresh()
        return self._result

    @property
    def errors(self) -> Dict[str, ValidationResult]:
        if self.state == SessionState.idle:
            self.refresh()
        return dict(self._errors)

    @property
    def has_errors(self) -> bool:
        return any(v.error for v in self.errors.values())

    @property
    def values(self) -> Dict[str, float]:
        return {name: param.value for name, param in self.parameters.items()}

    @property
    def safe_values(self) -> Dict[str, float]:
        return {name: param.safe for name, param in self.parameters.items()}

    def snapshot(self) -> Dict:
        """Everything a view needs to render the calculator."""
        result = self.result
        return {
            "instrument": self.instrument.key,
            "state": self.state.value,
            "values": self.values,
            "safe_values": self.safe_values,
            "options": dict(self.options),
            "errors": {name: v.as_dict() for name, v in self.errors.items()},
            "has_errors": self.has_errors,
            "result": result,
        }
