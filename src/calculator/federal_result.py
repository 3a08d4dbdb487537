"""
Result objects of the 11-phase federal calculation.

Every phase is an immutable record; monetary fields are floats already
rounded to the cent by the engine. ``to_dict`` gives the JSON-ready form
consumed by the API and the filing wizard.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class BalanceStatus(str, Enum):
    REFUND = "refund"
    OWED = "owed"
    EVEN = "even"


def _convert(obj):
    if isinstance(obj, Decimal):
        return float(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {k: _convert(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_convert(v) for v in obj]
    return obj


class _Serializable:
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return _convert(asdict(self))


@dataclass(frozen=True)
class IncomeCollection(_Serializable):
    """Phase 1: income by source document family."""
    w2_income: float
    form_1099_int: float
    form_1099_div: float
    form_1099_nec: float
    form_1099_misc: float  # misc + rents/royalties + other
    qualified_dividends: float = 0.0
    capital_gains: float = 0.0
    tax_exempt_interest: float = 0.0


@dataclass(frozen=True)
class IncomeAggregation(_Serializable):
    total_ordinary_income: float
    total_preferential_income: float
    total_tax_exempt_income: float


@dataclass(frozen=True)
class AdjustedGrossIncome(_Serializable):
    total_income: float
    above_the_line_deductions: float
    adjusted_gross_income: float


@dataclass(frozen=True)
class DeductionDetermination(_Serializable):
    standard_deduction: float
    itemized_deductions: float
    selected_deduction: float
    use_standard_deduction: bool


@dataclass(frozen=True)
class TaxableIncome(_Serializable):
    agi: float
    deduction: float
    taxable_income: float


@dataclass(frozen=True)
class BracketLine(_Serializable):
    bracket_range: str  # "$11,000 - $44,725" or "$578,100+"
    rate: float
    taxable_in_bracket: float
    tax_from_bracket: float
    cumulative_tax: float


@dataclass(frozen=True)
class RegularTax(_Serializable):
    ordinary_income_tax: float
    bracket_breakdown: Tuple[BracketLine, ...]
    marginal_rate: float  # fraction, e.g. 0.12


@dataclass(frozen=True)
class SelfEmploymentTax(_Serializable):
    total_se_income: float
    net_se_income: float  # after the 92.35% multiplier
    social_security_tax: float
    medicare_tax: float
    additional_medicare_tax: float
    total_se_tax: float
    se_deduction: float  # deductible half

    @classmethod
    def zero(cls) -> "SelfEmploymentTax":
        return cls(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class InvestmentTax(_Serializable):
    qualified_dividends: float
    capital_gains: float
    preferential_rate_tax: float
    net_investment_income: float
    niit_tax: float
    total_investment_tax: float


@dataclass(frozen=True)
class TotalTaxLiability(_Serializable):
    regular_tax: float
    self_employment_tax: float
    investment_tax: float
    niit_tax: float
    total_tax: float


@dataclass(frozen=True)
class WithholdingsAndCredits(_Serializable):
    federal_income_tax: float
    social_security_tax: float
    medicare_tax: float
    state_tax: float
    total_withholdings: float


@dataclass(frozen=True)
class FinalBalance(_Serializable):
    total_tax_liability: float
    total_withholdings: float  # federal income tax withheld only
    estimated_tax_payments: float
    balance_due: float
    refund_amount: float
    final_status: BalanceStatus


@dataclass(frozen=True)
class CalculationPhases(_Serializable):
    income_collection: IncomeCollection
    income_aggregation: IncomeAggregation
    adjusted_gross_income: AdjustedGrossIncome
    deduction_determination: DeductionDetermination
    taxable_income: TaxableIncome
    regular_tax: RegularTax
    self_employment_tax: SelfEmploymentTax
    investment_tax: InvestmentTax
    total_tax_liability: TotalTaxLiability
    withholdings_and_credits: WithholdingsAndCredits
    final_balance: FinalBalance


@dataclass(frozen=True)
class TaxSummary(_Serializable):
    adjusted_gross_income: float
    taxable_income: float
    total_tax_liability: float
    total_withholdings: float  # all four withholding buckets
    final_balance: float  # negative means refund
    effective_tax_rate: float  # fraction of AGI
    marginal_tax_rate: float
    after_tax_income: float


@dataclass(frozen=True)
class CalculationMetadata(_Serializable):
    filing_status: str
    tax_year: int
    calculation_date: str  # ISO-8601, UTC
    standard_deduction_used: bool
    calculation_id: Optional[str] = None


@dataclass(frozen=True)
class ComprehensiveTaxResult(_Serializable):
    phases: CalculationPhases
    summary: TaxSummary
    metadata: CalculationMetadata

    @property
    def is_refund(self) -> bool:
        return self.phases.final_balance.final_status == BalanceStatus.REFUND
