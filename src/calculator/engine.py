from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Tuple, Union

from calculator.decimal_math import (
    ZERO,
    add,
    bracket_ceiling,
    calculate_tax_in_bracket,
    cents,
    divide,
    floor_zero,
    format_money,
    max_decimal,
    min_decimal,
    money,
    multiply,
    subtract,
    to_decimal,
)
from calculator.federal_result import (
    AdjustedGrossIncome,
    BalanceStatus,
    BracketLine,
    CalculationMetadata,
    CalculationPhases,
    ComprehensiveTaxResult,
    DeductionDetermination,
    FinalBalance,
    IncomeAggregation,
    IncomeCollection,
    InvestmentTax,
    RegularTax,
    SelfEmploymentTax,
    TaxableIncome,
    TaxSummary,
    TotalTaxLiability,
    WithholdingsAndCredits,
)
from calculator.tax_year_config import TaxYearConfig
from models.ledger import TaxDocumentData
from models.taxpayer import FilingStatus, normalize_filing_status
from services.logging_config import CalculationLogger, calculation_id_var


class FederalTaxEngine:
    """
    Federal income tax engine following the 11-phase Form 1040 procedure.

    1. Income collection      5. Taxable income       9. Total liability
    2. Income aggregation     6. Regular tax         10. Withholdings
    3. AGI                    7. Self-employment tax 11. Final balance
    4. Deduction              8. Investment tax / NIIT

    Every monetary output is rounded to the cent at its own phase. The
    engine trusts its inputs (they come from a validated ledger) and has
    no internal error handling.
    """

    def __init__(self, config: Optional[TaxYearConfig] = None):
        self.config = config or TaxYearConfig.for_2025()

    def calculate(
        self,
        ledger: TaxDocumentData,
        filing_status: Union[FilingStatus, str] = FilingStatus.SINGLE,
        use_itemized: bool = False,
        itemized_amount: float = 0.0,
        estimated_payments: float = 0.0,
    ) -> ComprehensiveTaxResult:
        """Execute the full federal calculation for one ledger."""
        status = normalize_filing_status(filing_status)
        log = CalculationLogger(__name__)
        log.start_calculation(
            self.config.tax_year,
            status.value,
            total_income=cents(ledger.total_income()),
            use_itemized=use_itemized,
        )

        # PHASE 1: Income collection
        income = ledger.income
        phase1 = IncomeCollection(
            w2_income=cents(income.wages),
            form_1099_int=cents(income.interest),
            form_1099_div=cents(income.dividends),
            form_1099_nec=cents(income.non_employee_compensation),
            form_1099_misc=cents(add(income.miscellaneous_income, income.rental_royalties, income.other)),
        )
        log.log_phase("income_collection", **phase1.to_dict())

        # PHASE 2: Income aggregation
        phase2 = IncomeAggregation(
            total_ordinary_income=cents(add(
                phase1.w2_income,
                phase1.form_1099_int,
                phase1.form_1099_div,
                phase1.form_1099_nec,
                phase1.form_1099_misc,
            )),
            total_preferential_income=cents(add(phase1.qualified_dividends, phase1.capital_gains)),
            total_tax_exempt_income=cents(phase1.tax_exempt_interest),
        )
        log.log_phase("income_aggregation", **phase2.to_dict())

        # PHASE 3: AGI. The SE deduction is a single pass over NEC income.
        se_tax = self._calculate_self_employment_tax(phase1.form_1099_nec, status)
        total_income = add(phase2.total_ordinary_income, phase2.total_preferential_income)
        phase3 = AdjustedGrossIncome(
            total_income=cents(total_income),
            above_the_line_deductions=se_tax.se_deduction,
            adjusted_gross_income=cents(floor_zero(subtract(total_income, se_tax.se_deduction))),
        )
        agi = phase3.adjusted_gross_income
        log.log_phase("adjusted_gross_income", **phase3.to_dict())

        # PHASE 4: Deduction
        phase4 = self._determine_deduction(status, use_itemized, itemized_amount)
        log.log_phase("deduction_determination", **phase4.to_dict())

        # PHASE 5: Taxable income
        phase5 = TaxableIncome(
            agi=agi,
            deduction=phase4.selected_deduction,
            taxable_income=cents(floor_zero(subtract(agi, phase4.selected_deduction))),
        )
        taxable_income = phase5.taxable_income
        log.log_phase("taxable_income", **phase5.to_dict())

        # PHASE 6: Regular tax
        ordinary_tax, bracket_lines = self._compute_ordinary_income_tax(taxable_income, status)
        phase6 = RegularTax(
            ordinary_income_tax=ordinary_tax,
            bracket_breakdown=tuple(bracket_lines),
            marginal_rate=self._get_marginal_rate(taxable_income, status),
        )
        log.log_phase("regular_tax", tax=ordinary_tax, marginal_rate=phase6.marginal_rate)

        # PHASE 7: Self-employment tax
        phase7 = se_tax
        log.log_phase("self_employment_tax", **phase7.to_dict())

        # PHASE 8: Investment tax
        phase8 = self._calculate_investment_tax(
            phase1.qualified_dividends, phase1.capital_gains, agi, taxable_income, status
        )
        log.log_phase("investment_tax", **phase8.to_dict())

        # PHASE 9: Total liability
        total_tax = cents(add(phase6.ordinary_income_tax, phase7.total_se_tax, phase8.total_investment_tax))
        phase9 = TotalTaxLiability(
            regular_tax=phase6.ordinary_income_tax,
            self_employment_tax=phase7.total_se_tax,
            investment_tax=phase8.preferential_rate_tax,
            niit_tax=phase8.niit_tax,
            total_tax=total_tax,
        )
        log.log_phase("total_tax_liability", **phase9.to_dict())

        # PHASE 10: Withholdings
        withheld = ledger.withholdings
        phase10 = WithholdingsAndCredits(
            federal_income_tax=cents(withheld.federal_tax),
            social_security_tax=cents(withheld.social_security_tax),
            medicare_tax=cents(withheld.medicare_tax),
            state_tax=cents(withheld.state_tax),
            total_withholdings=cents(withheld.total()),
        )
        log.log_phase("withholdings_and_credits", **phase10.to_dict())

        # PHASE 11: Final balance
        phase11, balance = self._calculate_final_balance(
            total_tax, phase10.federal_income_tax, estimated_payments
        )
        log.log_phase("final_balance", **phase11.to_dict())

        summary = TaxSummary(
            adjusted_gross_income=agi,
            taxable_income=taxable_income,
            total_tax_liability=total_tax,
            total_withholdings=phase10.total_withholdings,
            final_balance=balance,
            effective_tax_rate=float(divide(total_tax, agi, default=0)) if agi > 0 else 0.0,
            marginal_tax_rate=phase6.marginal_rate,
            after_tax_income=cents(subtract(agi, total_tax)),
        )
        metadata = CalculationMetadata(
            filing_status=status.value,
            tax_year=self.config.tax_year,
            calculation_date=datetime.now(timezone.utc).isoformat(),
            standard_deduction_used=phase4.use_standard_deduction,
            calculation_id=calculation_id_var.get(),
        )

        log.log_result(total_tax, balance, phase11.final_status.value, summary.effective_tax_rate)

        return ComprehensiveTaxResult(
            phases=CalculationPhases(
                income_collection=phase1,
                income_aggregation=phase2,
                adjusted_gross_income=phase3,
                deduction_determination=phase4,
                taxable_income=phase5,
                regular_tax=phase6,
                self_employment_tax=phase7,
                investment_tax=phase8,
                total_tax_liability=phase9,
                withholdings_and_credits=phase10,
                final_balance=phase11,
            ),
            summary=summary,
            metadata=metadata,
        )

    def _determine_deduction(
        self,
        status: FilingStatus,
        use_itemized: bool,
        itemized_amount: float,
    ) -> DeductionDetermination:
        standard = self.config.standard_deduction_for(status)
        itemized = cents(itemized_amount)
        selected = max(itemized, standard) if use_itemized else standard
        return DeductionDetermination(
            standard_deduction=cents(standard),
            itemized_deductions=itemized,
            selected_deduction=cents(selected),
            use_standard_deduction=not use_itemized or itemized <= standard,
        )

    def _compute_ordinary_income_tax(
        self,
        taxable_income: float,
        filing_status: FilingStatus,
    ) -> Tuple[float, List[BracketLine]]:
        """Progressive tax with one breakdown line per bracket reached."""
        brackets = self.config.brackets_for(filing_status)

        tax = ZERO
        breakdown: List[BracketLine] = []

        for idx, (floor, rate) in enumerate(brackets):
            if taxable_income <= floor:
                continue
            ceiling = bracket_ceiling(brackets, idx)
            top = taxable_income if ceiling is None else min(taxable_income, ceiling)
            amount = subtract(top, floor)
            bracket_tax = calculate_tax_in_bracket(taxable_income, floor, ceiling, rate)
            tax += bracket_tax

            if amount > 0:
                breakdown.append(BracketLine(
                    bracket_range=(
                        f"{format_money(floor)}+" if ceiling is None
                        else f"{format_money(floor)} - {format_money(ceiling)}"
                    ),
                    rate=rate,
                    taxable_in_bracket=cents(amount),
                    tax_from_bracket=cents(bracket_tax),
                    cumulative_tax=cents(tax),
                ))

        return cents(tax), breakdown

    def _get_marginal_rate(self, taxable_income: float, filing_status: FilingStatus) -> float:
        """Rate of the highest bracket reached; 0 when there is no taxable income."""
        marginal_rate = 0.0
        for floor, rate in self.config.brackets_for(filing_status):
            if taxable_income > floor:
                marginal_rate = rate
        return marginal_rate

    def _calculate_self_employment_tax(
        self,
        se_income: float,
        filing_status: FilingStatus,
    ) -> SelfEmploymentTax:
        """
        Schedule SE on 1099-NEC income.

        SE Tax = 12.4% Social Security (up to wage base) + 2.9% Medicare (no cap)
        + 0.9% Additional Medicare over the filing-status threshold.
        SE Tax Deduction = 50% of SE tax (above-the-line adjustment)
        """
        if se_income <= 0:
            return SelfEmploymentTax.zero()

        net_se = multiply(se_income, self.config.se_net_earnings_factor)
        ss_tax = multiply(min_decimal(net_se, self.config.ss_wage_base), self.config.ss_rate)
        medicare_tax = multiply(net_se, self.config.medicare_rate)
        threshold = self.config.additional_medicare_threshold_for(filing_status)
        additional_medicare = multiply(
            floor_zero(subtract(net_se, threshold)), self.config.additional_medicare_tax_rate
        )

        total = add(ss_tax, medicare_tax, additional_medicare)
        deduction = multiply(total, self.config.se_deductible_share)

        return SelfEmploymentTax(
            total_se_income=cents(se_income),
            net_se_income=cents(net_se),
            social_security_tax=cents(ss_tax),
            medicare_tax=cents(medicare_tax),
            additional_medicare_tax=cents(additional_medicare),
            total_se_tax=cents(total),
            se_deduction=cents(deduction),
        )

    def _compute_preferential_tax(
        self,
        preferential_income: float,
        taxable_income: float,
        filing_status: FilingStatus,
    ) -> Decimal:
        """
        Qualified dividends + LTCG at 0/15/20%.

        The preferential income occupies the top of taxable income, from
        (taxable income - preferential income) up to taxable income, and
        each slice is taxed at the capital-gain rate of the bracket it falls in.
        """
        if preferential_income <= 0 or taxable_income <= 0:
            return ZERO

        brackets = self.config.capital_gains_brackets_for(filing_status)
        start = floor_zero(subtract(taxable_income, preferential_income))
        top = to_decimal(taxable_income)
        tax = ZERO
        for idx, (floor, rate) in enumerate(brackets):
            ceiling = bracket_ceiling(brackets, idx)
            low = max_decimal(start, floor)
            high = top if ceiling is None else min_decimal(top, ceiling)
            if high > low:
                tax += multiply(subtract(high, low), rate)
        return tax

    def _calculate_niit(self, net_investment_income: float, agi: float, filing_status: FilingStatus) -> Decimal:
        """
        Net Investment Income Tax (3.8%).

        NIIT = 3.8% x lesser of net investment income and AGI over threshold.
        """
        threshold = self.config.niit_threshold_for(filing_status)
        if agi <= threshold:
            return ZERO
        return multiply(min_decimal(net_investment_income, subtract(agi, threshold)), self.config.niit_rate)

    def _calculate_investment_tax(
        self,
        qualified_dividends: float,
        capital_gains: float,
        agi: float,
        taxable_income: float,
        filing_status: FilingStatus,
    ) -> InvestmentTax:
        investment_income = add(qualified_dividends, capital_gains)
        preferential = self._compute_preferential_tax(float(investment_income), taxable_income, filing_status)
        niit = self._calculate_niit(float(investment_income), agi, filing_status)
        return InvestmentTax(
            qualified_dividends=cents(qualified_dividends),
            capital_gains=cents(capital_gains),
            preferential_rate_tax=cents(preferential),
            net_investment_income=cents(investment_income),
            niit_tax=cents(niit),
            total_investment_tax=cents(add(preferential, niit)),
        )

    def _calculate_final_balance(
        self,
        total_tax: float,
        federal_withholding: float,
        estimated_payments: float,
    ) -> Tuple[FinalBalance, float]:
        payments = add(federal_withholding, estimated_payments)
        balance = money(subtract(total_tax, payments))

        if balance > 0:
            status = BalanceStatus.OWED
        elif balance < 0:
            status = BalanceStatus.REFUND
        else:
            status = BalanceStatus.EVEN

        final = FinalBalance(
            total_tax_liability=total_tax,
            total_withholdings=federal_withholding,
            estimated_tax_payments=cents(estimated_payments),
            balance_due=float(max_decimal(balance, 0)),
            refund_amount=float(abs(balance)) if balance < 0 else 0.0,
            final_status=status,
        )
        return final, float(balance)
