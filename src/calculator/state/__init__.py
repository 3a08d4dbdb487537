"""State tax calculation module."""

from calculator.state.state_tax_config import StateConfigError, StateTaxConfig, StateTaxType
from calculator.state.state_tax_engine import StateInfo, StateTaxEngine
from calculator.state.state_registry import (
    NO_INCOME_TAX_STATES,
    StateCalculatorRegistry,
    register_calculator,
    register_state,
)
from calculator.state.base_state_calculator import BaseStateCalculator, StateTaxInput
from calculator.state.state_codes import STATE_NAMES, normalize_state
from calculator.state.state_result import (
    StateTaxCalculationError,
    StateTaxOk,
    StateTaxOutcome,
    StateTaxResult,
    StateTaxUnsupported,
)

# Import calculators and configs to register them
from calculator.state import calculators  # noqa: F401
from calculator.state import configs  # noqa: F401

__all__ = [
    "StateConfigError",
    "StateTaxConfig",
    "StateTaxType",
    "StateInfo",
    "StateTaxEngine",
    "StateCalculatorRegistry",
    "NO_INCOME_TAX_STATES",
    "register_calculator",
    "register_state",
    "BaseStateCalculator",
    "StateTaxInput",
    "STATE_NAMES",
    "normalize_state",
    "StateTaxCalculationError",
    "StateTaxOk",
    "StateTaxOutcome",
    "StateTaxResult",
    "StateTaxUnsupported",
]
