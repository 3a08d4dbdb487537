"""
Unified federal and state tax calculator.

Runs the federal engine on a document ledger, the state engine when the
taxpayer's state is known, and combines both into one summary.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Union

from calculator.decimal_math import add, cents, subtract
from calculator.engine import FederalTaxEngine
from calculator.federal_result import ComprehensiveTaxResult
from calculator.state import StateTaxEngine, StateTaxInput, StateTaxOutcome, StateTaxResult
from calculator.tax_year_config import TaxYearConfig
from calculator.validation import CalculationInputValidator, ValidationIssue
from config.settings import get_settings
from models.ledger import TaxDocumentData
from models.taxpayer import FilingStatus, PersonalInfo, normalize_filing_status
from services.logging_config import calculation_id_var

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CombinedSummary:
    total_tax_liability: float
    total_withholdings: float  # federal + state income tax withheld
    final_balance: float  # negative means refund
    is_refund: bool
    state_tax: float
    federal_tax: float


@dataclass(frozen=True)
class UnifiedTaxResult:
    federal_result: ComprehensiveTaxResult
    state_tax_result: Optional[StateTaxOutcome]
    combined_summary: CombinedSummary
    validation_issues: List[ValidationIssue] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "federal_result": self.federal_result.to_dict(),
            "state_tax_result": self.state_tax_result.to_dict() if self.state_tax_result else None,
            "combined_summary": asdict(self.combined_summary),
            "validation_issues": [issue.to_dict() for issue in self.validation_issues],
        }


@dataclass(frozen=True)
class LegacyTaxEstimate:
    """Wages-only estimate; rates are percentages with two decimals."""
    total_income: float
    standard_deduction: float
    taxable_income: float
    estimated_tax: float
    effective_tax_rate: float
    marginal_tax_rate: float


class TaxCalculator:
    """Calculate federal and state income tax liability"""

    def __init__(
        self,
        config: Optional[TaxYearConfig] = None,
        include_state: bool = True
    ):
        """
        Initialize the tax calculator.

        Args:
            config: Federal tax configuration. Defaults to the configured tax year.
            include_state: Whether to calculate state taxes. Defaults to True.
        """
        self._config = config or TaxYearConfig.for_year(get_settings().tax_year)
        self._federal_engine = FederalTaxEngine(config=self._config)
        self._validator = CalculationInputValidator()
        self._state_engine = StateTaxEngine(tax_year=self._config.tax_year) if include_state else None

    def get_unified_tax_calculation(
        self,
        ledger: TaxDocumentData,
        personal_info: Optional[PersonalInfo] = None,
        use_itemized: bool = False,
        itemized_amount: float = 0.0,
        estimated_payments: float = 0.0,
    ) -> UnifiedTaxResult:
        """
        Federal calculation, state calculation when a state is known, and
        the combined balance.

        Negative itemized deductions or estimated payments are reported as
        validation errors and treated as zero.
        """
        if personal_info is None:
            personal_info = PersonalInfo(filing_status=get_settings().default_filing_status)
        status = personal_info.filing_status

        token = calculation_id_var.set(uuid.uuid4().hex[:12])
        try:
            issues = self._validator.validate(
                ledger,
                use_itemized=use_itemized,
                itemized_amount=itemized_amount,
                estimated_payments=estimated_payments,
                standard_deduction=self._config.standard_deduction_for(status),
            )
            for issue in issues:
                logger.warning(f"Input issue ({issue.severity}) on {issue.field}: {issue.message}")
            itemized_amount = max(0.0, itemized_amount)
            estimated_payments = max(0.0, estimated_payments)

            federal = self._federal_engine.calculate(
                ledger,
                filing_status=status,
                use_itemized=use_itemized,
                itemized_amount=itemized_amount,
                estimated_payments=estimated_payments,
            )

            state_outcome = None
            if personal_info.state and self._state_engine:
                agi = federal.summary.adjusted_gross_income
                state_outcome = self._state_engine.calculate_state_tax(
                    StateTaxInput(
                        state=personal_info.state,
                        filing_status=status,
                        income=agi,
                        federal_agi=agi,
                        itemized_deductions=itemized_amount if use_itemized else 0.0,
                        dependents=personal_info.dependents,
                        age=personal_info.age,
                        is_blind=personal_info.is_blind,
                        spouse_age=personal_info.spouse_age,
                        spouse_is_blind=personal_info.spouse_is_blind,
                        dividends=ledger.income.dividends,
                        interest=ledger.income.interest,
                        capital_gains=0.0,
                        dependents_under_17=personal_info.dependents_under_17,
                        dependents_over_17=personal_info.dependents_over_17,
                    )
                )

            summary = self._combine(ledger, federal, state_outcome)
            logger.info(
                f"Unified calculation: federal ${summary.federal_tax:,.2f}, "
                f"state ${summary.state_tax:,.2f}, balance ${summary.final_balance:,.2f}"
            )
            return UnifiedTaxResult(
                federal_result=federal,
                state_tax_result=state_outcome,
                combined_summary=summary,
                validation_issues=issues,
            )
        finally:
            calculation_id_var.reset(token)

    @staticmethod
    def _combine(
        ledger: TaxDocumentData,
        federal: ComprehensiveTaxResult,
        state_outcome: Optional[StateTaxOutcome],
    ) -> CombinedSummary:
        federal_tax = federal.summary.total_tax_liability
        state_tax = state_outcome.result.state_tax if state_outcome else 0.0
        total_tax = add(federal_tax, state_tax)
        withholdings = add(ledger.withholdings.federal_tax, ledger.withholdings.state_tax)
        balance = subtract(total_tax, withholdings)
        return CombinedSummary(
            total_tax_liability=cents(total_tax),
            total_withholdings=cents(withholdings),
            final_balance=cents(balance),
            is_refund=balance < 0,
            state_tax=state_tax,
            federal_tax=federal_tax,
        )

    def calculate_tax(
        self,
        total_income: float,
        filing_status: Union[FilingStatus, str] = FilingStatus.SINGLE,
    ) -> LegacyTaxEstimate:
        """
        Estimate federal tax treating all income as wages.
        For a full breakdown, use get_unified_tax_calculation.
        """
        result = self._federal_engine.calculate(
            TaxDocumentData.from_totals(wages=total_income),
            filing_status=normalize_filing_status(filing_status),
        )
        summary = result.summary
        return LegacyTaxEstimate(
            total_income=summary.adjusted_gross_income,
            standard_deduction=result.phases.deduction_determination.standard_deduction,
            taxable_income=summary.taxable_income,
            estimated_tax=summary.total_tax_liability,
            effective_tax_rate=round(summary.effective_tax_rate * 100, 2),
            marginal_tax_rate=round(summary.marginal_tax_rate * 100, 2),
        )

    def legacy_summary(
        self,
        ledger: TaxDocumentData,
        personal_info: Optional[PersonalInfo] = None,
    ) -> Dict[str, Any]:
        """
        Dashboard summary: the wages-only estimate on the ledger's total
        income plus state tax, state withholdings and the state's identity.
        """
        personal_info = personal_info or PersonalInfo()
        estimate = self.calculate_tax(ledger.total_income(), personal_info.filing_status)

        state_result: Optional[StateTaxResult] = None
        if personal_info.state and self._state_engine:
            state_result = self._state_engine.calculate_state_tax(
                StateTaxInput(
                    state=personal_info.state,
                    filing_status=personal_info.filing_status,
                    income=estimate.total_income,
                    federal_agi=estimate.total_income,
                    dependents=personal_info.dependents,
                    dividends=ledger.income.dividends,
                    interest=ledger.income.interest,
                )
            ).result

        return {
            **asdict(estimate),
            "state_tax": state_result.state_tax if state_result else 0.0,
            "state_withholdings": cents(ledger.withholdings.state_tax),
            "state_name": state_result.state_name if state_result else None,
            "state_abbreviation": state_result.state if state_result else None,
        }

    def is_state_supported(self, state_code: str) -> bool:
        """Check if a state is supported for tax calculation."""
        if not self._state_engine:
            return False
        return self._state_engine.is_state_supported(state_code)

    def get_supported_states(self) -> list:
        """Get list of supported state codes."""
        if not self._state_engine:
            return []
        return self._state_engine.get_all_states()
