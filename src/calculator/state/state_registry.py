"""State table and calculator registry for dynamic lookup."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Type

from calculator.state.base_state_calculator import BaseStateCalculator
from calculator.state.state_tax_config import StateTaxConfig, StateTaxType


# States without a personal income tax
NO_INCOME_TAX_STATES = frozenset({
    "AK",  # Alaska
    "FL",  # Florida
    "NV",  # Nevada
    "SD",  # South Dakota
    "TN",  # Tennessee
    "TX",  # Texas
    "WY",  # Wyoming
    "NH",  # New Hampshire (dividends and interest tax repealed for 2025)
})


class StateCalculatorRegistry:
    """
    Registry for state tax tables and calculators.

    Tables are registered per state code and tax year; calculators are
    registered once per ``StateTaxType`` and built around a table on lookup.
    """

    # Storage: state_code -> tax_year -> config
    _configs: Dict[str, Dict[int, StateTaxConfig]] = {}
    # Storage: tax type -> calculator_class
    _calculators: Dict[StateTaxType, Type[BaseStateCalculator]] = {}

    @classmethod
    def register(cls, config: StateTaxConfig) -> None:
        """
        Register a validated state table.

        Raises:
            StateConfigError: If the table is malformed
        """
        config.validate()
        cls._configs.setdefault(config.state_code.upper(), {})[config.tax_year] = config

    @classmethod
    def register_calculator(cls, tax_type: StateTaxType, calculator_class: Type[BaseStateCalculator]) -> None:
        cls._calculators[tax_type] = calculator_class

    @classmethod
    def get_config(cls, state_code: str, tax_year: int) -> Optional[StateTaxConfig]:
        """
        Get the table for a state and year.

        Args:
            state_code: Two-letter state code
            tax_year: Tax year

        Returns:
            StateTaxConfig or None if not supported
        """
        return cls._configs.get(state_code.upper(), {}).get(tax_year)

    @classmethod
    def get_calculator(
        cls,
        state_code: str,
        tax_year: int
    ) -> Optional[BaseStateCalculator]:
        """
        Get calculator instance for a state and year.

        Args:
            state_code: Two-letter state code
            tax_year: Tax year

        Returns:
            Calculator instance or None if not supported
        """
        config = cls.get_config(state_code, tax_year)
        if config is None:
            return None

        calculator_class = cls._calculators.get(config.tax_type)
        if not calculator_class:
            return None

        return calculator_class(config)

    @classmethod
    def get_supported_states(cls, tax_year: int) -> List[str]:
        """
        Get list of supported state codes for a tax year.

        Args:
            tax_year: Tax year to check

        Returns:
            Sorted list of supported state codes
        """
        supported = []
        for state_code, years in cls._configs.items():
            if tax_year in years:
                supported.append(state_code)
        return sorted(supported)

    @classmethod
    def is_supported(cls, state_code: str, tax_year: int) -> bool:
        return cls.get_config(state_code, tax_year) is not None


def register_state(config: StateTaxConfig) -> StateTaxConfig:
    """
    Validate and register a state table, returning it unchanged.

    Usage:
        CALIFORNIA = register_state(StateTaxConfig(state_code="CA", ...))
    """
    StateCalculatorRegistry.register(config)
    return config


def register_calculator(tax_type: StateTaxType) -> Callable:
    """
    Decorator to register the calculator for a tax type.

    Usage:
        @register_calculator(StateTaxType.FLAT)
        class FlatTaxCalculator(BracketedStateCalculator):
            ...
    """
    def decorator(cls: Type[BaseStateCalculator]) -> Type[BaseStateCalculator]:
        StateCalculatorRegistry.register_calculator(tax_type, cls)
        return cls
    return decorator
