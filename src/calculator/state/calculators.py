"""Concrete calculators, one per state tax type."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Tuple

from calculator.decimal_math import (
    ZERO,
    bracket_ceiling,
    calculate_tax_in_bracket,
    cents,
    floor_zero,
    format_money,
    min_decimal,
    money,
    multiply,
    subtract,
    to_decimal,
)
from calculator.state.base_state_calculator import (
    BaseStateCalculator,
    BracketedStateCalculator,
    StateTaxInput,
    bracket_line,
    percent,
)
from calculator.state.state_registry import register_calculator
from calculator.state.state_result import StateBracketLine, StateTaxResult
from calculator.state.state_tax_config import SpecialTaxType, StateTaxType
from models.taxpayer import FilingStatus

NO_TAX_NOTE = "This state does not impose a personal income tax."


@register_calculator(StateTaxType.NO_TAX)
class NoIncomeTaxCalculator(BaseStateCalculator):
    tax_type_label = "No State Income Tax"

    def calculate(self, tax_input: StateTaxInput) -> StateTaxResult:
        return StateTaxResult(
            state=self.config.state_code,
            state_name=self.config.state_name,
            tax_type=self.tax_type_label,
            state_tax=0.0,
            effective_rate=0.0,
            marginal_rate=0.0,
            taxable_income=0.0,
            notes=self.config.notes or (NO_TAX_NOTE,),
        )


@register_calculator(StateTaxType.SPECIAL)
class SpecialTaxCalculator(BaseStateCalculator):
    """States that tax only one kind of investment income (WA capital gains)."""

    _LABELS = {
        SpecialTaxType.CAPITAL_GAINS: "Capital Gains Tax",
        SpecialTaxType.DIVIDENDS_INTEREST: "Dividends & Interest Tax",
    }

    def calculate(self, tax_input: StateTaxInput) -> StateTaxResult:
        config = self.config
        if config.special_tax_type == SpecialTaxType.CAPITAL_GAINS:
            base = tax_input.capital_gains
        else:
            base = tax_input.dividends + tax_input.interest
        tax_type = self._LABELS[config.special_tax_type]

        taxable = floor_zero(subtract(base, config.exemption))
        tax = money(multiply(taxable, config.rate))

        breakdown: Tuple[StateBracketLine, ...] = ()
        if taxable > 0:
            label = f"{config.rate * 100:.2f}% on {tax_type.lower()} over {format_money(config.exemption)}"
            breakdown = (bracket_line(label, taxable, config.rate, tax),)

        return StateTaxResult(
            state=config.state_code,
            state_name=config.state_name,
            tax_type=tax_type,
            state_tax=cents(tax),
            effective_rate=percent(tax, base),
            marginal_rate=float(multiply(config.rate, 100)),
            taxable_income=cents(taxable),
            breakdown=breakdown,
            notes=config.notes,
        )


@register_calculator(StateTaxType.FLAT)
class FlatTaxCalculator(BracketedStateCalculator):
    """Single rate above the floor of the only bracket."""

    tax_type_label = "Flat Rate"

    def calculate_brackets(
        self, taxable_income: Decimal, filing_status: FilingStatus
    ) -> Tuple[Decimal, float, List[StateBracketLine]]:
        brackets = self.config.get_brackets(filing_status)
        floor, flat_rate = brackets[0] if brackets else (0.0, 0.0)

        taxable_amount = floor_zero(subtract(taxable_income, floor))
        tax = money(multiply(taxable_amount, flat_rate))

        breakdown = []
        if taxable_amount > 0:
            label = f"{flat_rate * 100:.2f}% on income over {format_money(floor)}"
            breakdown.append(bracket_line(label, taxable_amount, flat_rate, tax))

        return tax, flat_rate, breakdown


@register_calculator(StateTaxType.PROGRESSIVE)
class ProgressiveTaxCalculator(BracketedStateCalculator):
    tax_type_label = "Progressive"

    def calculate_brackets(
        self, taxable_income: Decimal, filing_status: FilingStatus
    ) -> Tuple[Decimal, float, List[StateBracketLine]]:
        brackets = self.config.get_brackets(filing_status)
        total = ZERO
        marginal_rate = 0.0
        breakdown = []

        for index, (floor, bracket_rate) in enumerate(brackets):
            if taxable_income <= to_decimal(floor):
                break
            ceiling = bracket_ceiling(brackets, index)
            bracket_tax = calculate_tax_in_bracket(taxable_income, floor, ceiling, bracket_rate)
            top = taxable_income if ceiling is None else min_decimal(taxable_income, ceiling)
            in_bracket = subtract(top, floor)

            total += bracket_tax
            marginal_rate = bracket_rate

            upper = format_money(ceiling - 1) if ceiling is not None else "above"
            label = f"{bracket_rate * 100:.2f}% on income {format_money(floor)} - {upper}"
            breakdown.append(bracket_line(label, in_bracket, bracket_rate, bracket_tax))

        return money(total), marginal_rate, breakdown
