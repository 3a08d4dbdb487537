"""
Income/withholding ledger built from classified document fields.

The ledger is rebuilt on every calculation request; upstream documents can
change between requests so nothing here is cached.
"""

from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class IncomeCategory(str, Enum):
    """Ledger income buckets."""
    WAGES = "wages"
    INTEREST = "interest"
    DIVIDENDS = "dividends"
    NON_EMPLOYEE_COMPENSATION = "non_employee_compensation"
    MISCELLANEOUS_INCOME = "miscellaneous_income"
    RENTAL_ROYALTIES = "rental_royalties"
    OTHER = "other"


class WithholdingCategory(str, Enum):
    """Ledger withholding buckets. UNKNOWN is audited but credited nowhere."""
    FEDERAL_TAX = "federal_tax"
    STATE_TAX = "state_tax"
    SOCIAL_SECURITY_TAX = "social_security_tax"
    MEDICARE_TAX = "medicare_tax"
    UNKNOWN = "unknown"


# Income category -> key used in a document's contributed amounts
CONTRIBUTION_KEYS: Dict[IncomeCategory, str] = {
    IncomeCategory.WAGES: "wages",
    IncomeCategory.INTEREST: "interest",
    IncomeCategory.DIVIDENDS: "dividends",
    IncomeCategory.NON_EMPLOYEE_COMPENSATION: "non_employee_comp",
    IncomeCategory.MISCELLANEOUS_INCOME: "misc_income",
    IncomeCategory.RENTAL_ROYALTIES: "rental_royalties",
    IncomeCategory.OTHER: "other",
}


class IncomeTotals(BaseModel):
    wages: float = 0.0  # W-2 Box 1 only
    interest: float = 0.0  # 1099-INT Boxes 1, 3, 8, 9
    dividends: float = 0.0  # 1099-DIV Boxes 1a, 2a-2f, 3, 5, 8, 9, 10
    non_employee_compensation: float = 0.0  # 1099-NEC Box 1
    miscellaneous_income: float = 0.0  # 1099-MISC Boxes 3, 5, 6, 8-12
    rental_royalties: float = 0.0  # 1099-MISC Boxes 1, 2
    other: float = 0.0

    def total(self) -> float:
        return (
            self.wages
            + self.interest
            + self.dividends
            + self.non_employee_compensation
            + self.miscellaneous_income
            + self.rental_royalties
            + self.other
        )


class WithholdingTotals(BaseModel):
    federal_tax: float = 0.0
    state_tax: float = 0.0
    social_security_tax: float = 0.0
    medicare_tax: float = 0.0

    def total(self) -> float:
        return self.federal_tax + self.state_tax + self.social_security_tax + self.medicare_tax


class FieldSource(BaseModel):
    """Provenance of one counted field."""
    field_name: str
    amount: float
    confidence: float
    mapped_to: str
    box: str
    box_details: str = ""
    description: str = ""


class DocumentBreakdown(BaseModel):
    """Audit entry for one processed document."""
    id: str
    file_name: str
    document_type: str
    confidence: float
    contributed_amounts: Dict[str, float] = Field(default_factory=dict)
    sources: List[FieldSource] = Field(default_factory=list)

    def contribution(self, category: IncomeCategory) -> float:
        return self.contributed_amounts.get(CONTRIBUTION_KEYS[category], 0.0)


class LedgerBreakdown(BaseModel):
    by_document: List[DocumentBreakdown] = Field(default_factory=list)


class TaxDocumentData(BaseModel):
    """
    Aggregated income and withholding totals for one calculation request.

    Totals accumulate through add_income/add_withholding so every bucket
    update has a matching per-document contribution.
    """
    income: IncomeTotals = Field(default_factory=IncomeTotals)
    withholdings: WithholdingTotals = Field(default_factory=WithholdingTotals)
    breakdown: LedgerBreakdown = Field(default_factory=LedgerBreakdown)

    def add_income(
        self,
        category: IncomeCategory,
        amount: float,
        document: Optional[DocumentBreakdown] = None,
    ) -> None:
        field_name = category.value
        setattr(self.income, field_name, getattr(self.income, field_name) + amount)
        if document is not None:
            key = CONTRIBUTION_KEYS[category]
            document.contributed_amounts[key] = document.contributed_amounts.get(key, 0.0) + amount

    def add_withholding(self, category: WithholdingCategory, amount: float) -> bool:
        """Credit a withholding bucket; returns False for UNKNOWN, which has no bucket."""
        if category == WithholdingCategory.UNKNOWN:
            return False
        field_name = category.value
        setattr(self.withholdings, field_name, getattr(self.withholdings, field_name) + amount)
        return True

    def total_income(self) -> float:
        return self.income.total()

    def total_withholdings(self) -> float:
        return self.withholdings.total()

    @classmethod
    def from_totals(
        cls,
        wages: float = 0.0,
        interest: float = 0.0,
        dividends: float = 0.0,
        non_employee_compensation: float = 0.0,
        miscellaneous_income: float = 0.0,
        rental_royalties: float = 0.0,
        other: float = 0.0,
        federal_withholding: float = 0.0,
        state_withholding: float = 0.0,
    ) -> "TaxDocumentData":
        """Ledger without document provenance, for manual entry and the legacy summary."""
        return cls(
            income=IncomeTotals(
                wages=wages,
                interest=interest,
                dividends=dividends,
                non_employee_compensation=non_employee_compensation,
                miscellaneous_income=miscellaneous_income,
                rental_royalties=rental_royalties,
                other=other,
            ),
            withholdings=WithholdingTotals(
                federal_tax=federal_withholding,
                state_tax=state_withholding,
            ),
        )
