"""State tax engine - orchestrates state tax calculations."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from calculator.state.base_state_calculator import StateTaxInput
from calculator.state.state_codes import normalize_state
from calculator.state.state_registry import StateCalculatorRegistry
from calculator.state.state_result import (
    StateTaxCalculationError,
    StateTaxOk,
    StateTaxOutcome,
    StateTaxResult,
    StateTaxUnsupported,
)
from calculator.state.state_tax_config import StateTaxType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateInfo:
    state: str
    name: str
    type: str
    rates: str
    has_standard_deduction: bool
    has_personal_exemption: bool
    notes: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class StateTaxEngine:
    """
    Orchestrates state tax calculations.

    This engine normalizes the state, looks up its table and calculator
    in the registry and runs the calculation. It never raises: unknown
    states and unexpected failures come back as outcome variants that
    still carry a zero-tax ``StateTaxResult``.
    """

    def __init__(self, tax_year: int = 2025):
        """
        Initialize the state tax engine.

        Args:
            tax_year: Tax year of the state tables to use
        """
        self.tax_year = tax_year

    def calculate_state_tax(self, tax_input: StateTaxInput) -> StateTaxOutcome:
        """
        Calculate state tax for one taxpayer.

        Args:
            tax_input: State, filing status, income figures and household facts

        Returns:
            StateTaxOk, StateTaxUnsupported or StateTaxCalculationError
        """
        raw_state = tax_input.state
        state = normalize_state(raw_state)
        logger.debug(f"Normalized state '{raw_state}' to '{state}'")

        calculator = StateCalculatorRegistry.get_calculator(state, self.tax_year)
        if calculator is None:
            logger.warning(f"Unsupported state '{state}' (input '{raw_state}') for {self.tax_year}")
            return StateTaxUnsupported(result=self._unsupported_result(state, raw_state))

        try:
            result = calculator.calculate(tax_input)
        except Exception as e:
            logger.exception(f"Error calculating state tax for {state}")
            return StateTaxCalculationError(
                result=StateTaxResult.empty(
                    state=state,
                    state_name=calculator.config.state_name,
                    tax_type="Calculation Error",
                    note=f"Error calculating state tax: {e}. Please consult a tax professional.",
                ),
                error=str(e),
            )

        logger.info(
            f"State tax for {result.state_name}: ${result.state_tax:,.2f} "
            f"({result.tax_type}, effective {result.effective_rate:.2f}%)"
        )
        return StateTaxOk(result=result)

    @staticmethod
    def _unsupported_result(state: str, raw_state: str) -> StateTaxResult:
        return StateTaxResult.empty(
            state=state,
            state_name=f"{raw_state} (Unsupported)",
            tax_type="Unsupported State",
            note=(
                f"State '{raw_state}' is not supported in this version. "
                f"Please consult a tax professional for {raw_state} state tax calculations."
            ),
        )

    def get_state_info(self, state: str) -> Optional[StateInfo]:
        """
        Describe a state's tax structure.

        Args:
            state: State code or name

        Returns:
            StateInfo, or None if the state has no table
        """
        config = StateCalculatorRegistry.get_config(normalize_state(state), self.tax_year)
        if config is None:
            return None

        if config.tax_type == StateTaxType.FLAT:
            flat_rate = config.brackets["single"][0][1]
            rates = f"Flat rate: {flat_rate * 100:.2f}%"
        elif config.tax_type == StateTaxType.PROGRESSIVE:
            brackets = config.brackets["single"]
            rates = f"{brackets[0][1] * 100:.2f}% - {brackets[-1][1] * 100:.2f}%"
        elif config.tax_type == StateTaxType.SPECIAL:
            rates = f"{config.rate * 100:.2f}% on {config.special_tax_type.value}"
        else:
            rates = "No state income tax"

        return StateInfo(
            state=config.state_code,
            name=config.state_name,
            type=config.tax_type.value,
            rates=rates,
            has_standard_deduction=bool(config.standard_deduction),
            has_personal_exemption=config.personal_exemption is not None,
            notes=list(config.notes),
        )

    def get_all_states(self) -> List[str]:
        """
        Get list of states with a table for this year.

        Returns:
            Sorted list of state codes
        """
        return StateCalculatorRegistry.get_supported_states(self.tax_year)

    def is_state_supported(self, state: str) -> bool:
        return StateCalculatorRegistry.is_supported(normalize_state(state), self.tax_year)

    def has_income_tax(self, state: str) -> bool:
        """
        Check if a state taxes any personal income.

        Washington counts: it taxes capital gains. Unknown states return False.
        """
        config = StateCalculatorRegistry.get_config(normalize_state(state), self.tax_year)
        return config is not None and config.tax_type != StateTaxType.NO_TAX
