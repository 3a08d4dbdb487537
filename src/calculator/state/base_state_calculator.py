"""Base classes for state tax calculators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Tuple

from pydantic import BaseModel, Field, field_validator

from calculator.decimal_math import (
    HUNDRED,
    add,
    cents,
    divide,
    floor_zero,
    multiply,
    rate,
    subtract,
)
from calculator.state.state_result import AppliedCredit, StateBracketLine, StateTaxResult
from calculator.state.state_tax_config import CreditCondition, StateCredit, StateTaxConfig
from models.taxpayer import FilingStatus, normalize_filing_status


class StateTaxInput(BaseModel):
    """Everything a state calculation may look at."""

    state: str
    filing_status: FilingStatus = FilingStatus.SINGLE
    income: float = 0.0
    federal_agi: float = 0.0
    itemized_deductions: float = Field(default=0.0, ge=0)
    dependents: int = Field(default=0, ge=0)
    age: int = Field(default=0, ge=0)
    is_blind: bool = False
    spouse_age: int = Field(default=0, ge=0)
    spouse_is_blind: bool = False
    dividends: float = 0.0
    interest: float = 0.0
    capital_gains: float = 0.0
    dependents_under_17: int = Field(default=0, ge=0)
    dependents_over_17: int = Field(default=0, ge=0)

    @field_validator("filing_status", mode="before")
    @classmethod
    def _coerce_filing_status(cls, value):
        return normalize_filing_status(value)


def percent(numerator, denominator) -> float:
    """numerator / denominator x 100, or 0 when the denominator is not positive."""
    if denominator <= 0:
        return 0.0
    return float(rate(divide(multiply(numerator, HUNDRED), denominator)))


class BaseStateCalculator(ABC):
    """
    Abstract base class for state tax calculators.

    One subclass exists per ``StateTaxType``; the state-specific numbers
    all come from the ``StateTaxConfig`` it is built with.
    """

    tax_type_label: str = ""

    def __init__(self, config: StateTaxConfig):
        self.config = config

    @abstractmethod
    def calculate(self, tax_input: StateTaxInput) -> StateTaxResult:
        """
        Calculate state tax for one taxpayer.

        Args:
            tax_input: Normalized state calculation input

        Returns:
            StateTaxResult with tax, rates and bracket breakdown
        """
        pass


class BracketedStateCalculator(BaseStateCalculator):
    """
    Shared pipeline of flat and progressive states.

    starting income -> deduction -> exemptions -> bracket tax -> credits
    """

    def calculate(self, tax_input: StateTaxInput) -> StateTaxResult:
        config = self.config
        status = tax_input.filing_status

        starting_income = self.get_starting_income(tax_input)
        standard_deduction = self.get_standard_deduction(tax_input)

        deduction = standard_deduction
        if config.allows_itemization and tax_input.itemized_deductions > standard_deduction:
            deduction = tax_input.itemized_deductions

        taxable = floor_zero(subtract(starting_income, deduction))
        exemption = self.get_personal_exemption(status, tax_input.dependents, starting_income)
        taxable = floor_zero(subtract(taxable, exemption))

        tax, marginal_rate, breakdown = self.calculate_brackets(taxable, status)

        credits = self.calculate_credits(tax_input)
        state_tax = floor_zero(subtract(tax, add(*(c.amount for c in credits))))

        return StateTaxResult(
            state=config.state_code,
            state_name=config.state_name,
            tax_type=self.tax_type_label,
            state_tax=cents(state_tax),
            effective_rate=percent(state_tax, tax_input.income),
            marginal_rate=float(multiply(marginal_rate, HUNDRED)),
            taxable_income=cents(taxable),
            credits=tuple(credits),
            breakdown=tuple(breakdown),
            notes=config.notes,
            standard_deduction=cents(standard_deduction),
            personal_exemption=cents(exemption),
        )

    def get_starting_income(self, tax_input: StateTaxInput) -> float:
        """Federal AGI for states that start from it, otherwise the supplied income."""
        if self.config.uses_federal_agi:
            return tax_input.federal_agi
        return tax_input.income

    def get_standard_deduction(self, tax_input: StateTaxInput) -> float:
        """Standard deduction with the 65+/blind additions (spouse too on joint returns)."""
        config = self.config
        if not config.standard_deduction:
            return 0.0

        amount = config.get_standard_deduction(tax_input.filing_status)
        joint = tax_input.filing_status == FilingStatus.MARRIED_JOINT

        if config.additional_deduction_65_plus:
            if tax_input.age >= 65:
                amount += config.additional_deduction_65_plus
            if joint and tax_input.spouse_age >= 65:
                amount += config.additional_deduction_65_plus
        if config.additional_deduction_blind:
            if tax_input.is_blind:
                amount += config.additional_deduction_blind
            if joint and tax_input.spouse_is_blind:
                amount += config.additional_deduction_blind

        return amount

    def get_personal_exemption(self, filing_status: FilingStatus, dependents: int = 0, income: float = 0.0) -> float:
        exemption = self.config.personal_exemption
        if exemption is None:
            return 0.0

        total = exemption.taxpayer
        if filing_status == FilingStatus.MARRIED_JOINT:
            total += exemption.spouse
        if dependents > 0:
            total += exemption.dependent * dependents

        if exemption.phase_out:
            total -= min(total, exemption.phase_out.reduction(income))

        return max(0.0, total)

    def calculate_credits(self, tax_input: StateTaxInput) -> List[AppliedCredit]:
        applied = []
        for credit in self.config.credits:
            amount = self._credit_amount(credit, tax_input)
            if amount > 0:
                applied.append(AppliedCredit(name=credit.name, amount=cents(amount)))
        return applied

    @staticmethod
    def _credit_amount(credit: StateCredit, tax_input: StateTaxInput) -> float:
        if credit.condition == CreditCondition.DEPENDENT:
            amount = credit.amount * tax_input.dependents
        elif credit.condition == CreditCondition.DEPENDENT_UNDER_17:
            amount = credit.amount * tax_input.dependents_under_17
        elif credit.condition == CreditCondition.DEPENDENT_OVER_17:
            amount = credit.amount * tax_input.dependents_over_17
        elif credit.filing_status is None or credit.filing_status == tax_input.filing_status:
            amount = credit.amount
        else:
            amount = 0.0

        if credit.phase_out:
            amount = max(0.0, amount - credit.phase_out.reduction(tax_input.income))
        return amount

    @abstractmethod
    def calculate_brackets(
        self, taxable_income: Decimal, filing_status: FilingStatus
    ) -> Tuple[Decimal, float, List[StateBracketLine]]:
        """
        Tax before credits.

        Returns:
            (tax rounded to cents, marginal rate as a fraction, bracket lines)
        """
        pass


def bracket_line(label: str, taxable_amount: Decimal, bracket_rate: float, tax: Decimal) -> StateBracketLine:
    return StateBracketLine(
        bracket=label,
        taxable_amount=cents(taxable_amount),
        rate=bracket_rate,
        tax=cents(tax),
    )


__all__ = [
    "BaseStateCalculator",
    "BracketedStateCalculator",
    "StateTaxInput",
    "bracket_line",
    "percent",
]
