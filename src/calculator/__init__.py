from .tax_calculator import CombinedSummary, LegacyTaxEstimate, TaxCalculator, UnifiedTaxResult
from .engine import FederalTaxEngine
from .federal_result import BalanceStatus, ComprehensiveTaxResult
from .tax_year_config import TaxYearConfig
from .validation import CalculationInputValidator, ValidationIssue
from .state import (
    StateTaxEngine,
    StateTaxConfig,
    StateTaxInput,
    StateTaxResult,
    StateCalculatorRegistry,
    BaseStateCalculator,
    NO_INCOME_TAX_STATES,
)

__all__ = [
    "TaxCalculator",
    "UnifiedTaxResult",
    "CombinedSummary",
    "LegacyTaxEstimate",
    "FederalTaxEngine",
    "BalanceStatus",
    "ComprehensiveTaxResult",
    "TaxYearConfig",
    "CalculationInputValidator",
    "ValidationIssue",
    "StateTaxEngine",
    "StateTaxConfig",
    "StateTaxInput",
    "StateTaxResult",
    "StateCalculatorRegistry",
    "BaseStateCalculator",
    "NO_INCOME_TAX_STATES",
]
