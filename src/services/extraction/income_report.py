"""
Income and withholding breakdown report.

Explains, per ledger bucket, which IRS boxes were counted, which were
deliberately excluded, and which documents and fields contributed each
dollar. Built purely from a TaxDocumentData so it always agrees with the
totals used for the tax calculation.
"""

from typing import Dict, List, Tuple

from pydantic import BaseModel, Field

from calculator.decimal_math import cents
from models.ledger import (
    DocumentBreakdown,
    FieldSource,
    IncomeCategory,
    TaxDocumentData,
    WithholdingCategory,
)


class IncomeSource(BaseModel):
    document: str
    document_type: str
    confidence: float
    contribution: float
    extracted_fields: List[FieldSource] = Field(default_factory=list)


class IncomeSection(BaseModel):
    amount: float
    description: str
    box_references: List[str]
    excludes: List[str] = Field(default_factory=list)
    sources: List[IncomeSource] = Field(default_factory=list)


class WithholdingField(BaseModel):
    field_name: str
    amount: float
    confidence: int  # percent
    box: str
    box_details: str
    calculation_note: str


class WithholdingDocument(BaseModel):
    document: str
    document_type: str
    confidence: int  # percent
    total_contribution: float
    extracted_fields: List[WithholdingField] = Field(default_factory=list)


class WithholdingSection(BaseModel):
    amount: float
    description: str
    source_boxes: List[str]
    document_breakdown: List[WithholdingDocument] = Field(default_factory=list)


class IncomeReport(BaseModel):
    total_income: float
    total_withholdings: float
    income_breakdown: Dict[str, IncomeSection]
    withholdings_breakdown: Dict[str, WithholdingSection]


# category -> (description, box references, excluded boxes)
_INCOME_SECTIONS: Dict[IncomeCategory, Tuple[str, List[str], List[str]]] = {
    IncomeCategory.WAGES: (
        "W-2 Box 1: Wages, tips, other compensation",
        ["W-2 Box 1"],
        ["Box 3 (Social Security wages)", "Box 5 (Medicare wages)", "Box 7 (Social Security tips, inside Box 1)",
         "Box 16 (State wages)"],
    ),
    IncomeCategory.INTEREST: (
        "1099-INT interest income (Box 1, Box 3 Treasury, Box 8 tax-exempt, Box 9 private activity)",
        ["1099-INT Box 1", "1099-INT Box 3", "1099-INT Box 8", "1099-INT Box 9"],
        ["Box 2 (Early withdrawal penalty)", "Box 4 (Federal tax withheld)", "Box 5 (Investment expenses)",
         "Box 6 (Foreign tax paid)"],
    ),
    IncomeCategory.DIVIDENDS: (
        "1099-DIV dividend income (Box 1a ordinary, Box 2a-2f capital gains, Box 3, Box 5, Box 8-10)",
        ["1099-DIV Box 1a", "1099-DIV Box 2a-2f", "1099-DIV Box 3", "1099-DIV Box 5", "1099-DIV Box 8-10"],
        ["Box 1b (Qualified dividends - subset of 1a)", "Box 4 (Federal tax withheld)",
         "Box 6 (Investment expenses)", "Box 7 (Foreign tax paid)"],
    ),
    IncomeCategory.NON_EMPLOYEE_COMPENSATION: (
        "1099-NEC Box 1: Nonemployee compensation",
        ["1099-NEC Box 1"],
        ["Box 4 (Federal tax withheld)"],
    ),
    IncomeCategory.MISCELLANEOUS_INCOME: (
        "1099-MISC income (Box 3 other income, Box 5 fishing, Box 6 medical, Box 8-12)",
        ["1099-MISC Box 3", "1099-MISC Box 5", "1099-MISC Box 6", "1099-MISC Box 8-12"],
        ["Box 4 (Federal tax withheld)"],
    ),
    IncomeCategory.RENTAL_ROYALTIES: (
        "1099-MISC rents and royalties",
        ["1099-MISC Box 1", "1099-MISC Box 2"],
        [],
    ),
    IncomeCategory.OTHER: (
        "Other qualifying taxable income from various sources",
        ["Various"],
        [],
    ),
}

_WITHHOLDING_SECTIONS: Dict[WithholdingCategory, Tuple[str, List[str]]] = {
    WithholdingCategory.FEDERAL_TAX: (
        "Federal income tax withheld (not included in income)",
        ["W-2 Box 2", "1099-INT Box 4", "1099-DIV Box 4", "1099-NEC Box 4", "1099-MISC Box 4"],
    ),
    WithholdingCategory.STATE_TAX: (
        "State income tax withheld (not included in income)",
        ["W-2 State boxes", "1099-INT Box 17"],
    ),
    WithholdingCategory.SOCIAL_SECURITY_TAX: (
        "Social Security tax withheld (not included in income)",
        ["W-2 Box 4"],
    ),
    WithholdingCategory.MEDICARE_TAX: (
        "Medicare tax withheld (not included in income)",
        ["W-2 Box 6"],
    ),
}


def display_document_type(document_type: str) -> str:
    """
    >>> display_document_type("FORM_1099_INT")
    '1099-INT'
    """
    return document_type.replace("FORM_", "", 1).replace("_", "-", 1)


def _income_section(ledger: TaxDocumentData, category: IncomeCategory) -> IncomeSection:
    description, boxes, excludes = _INCOME_SECTIONS[category]
    sources = [
        IncomeSource(
            document=doc.file_name,
            document_type=doc.document_type,
            confidence=doc.confidence,
            contribution=doc.contribution(category),
            extracted_fields=[s for s in doc.sources if s.mapped_to == category.value],
        )
        for doc in ledger.breakdown.by_document
        if doc.contribution(category) > 0
    ]
    return IncomeSection(
        amount=getattr(ledger.income, category.value),
        description=description,
        box_references=boxes,
        excludes=excludes,
        sources=sources,
    )


def _withholding_document(doc: DocumentBreakdown, category: WithholdingCategory) -> WithholdingDocument:
    fields = [s for s in doc.sources if s.mapped_to == category.value and s.amount > 0]
    return WithholdingDocument(
        document=doc.file_name,
        document_type=display_document_type(doc.document_type),
        confidence=round(doc.confidence * 100),
        total_contribution=cents(sum(f.amount for f in fields)),
        extracted_fields=[
            WithholdingField(
                field_name=f.field_name,
                amount=f.amount,
                confidence=round(f.confidence * 100),
                box=f.box,
                box_details=f.box_details or f.description,
                calculation_note=f"Extracted from {f.box}: ${f.amount:,.2f}",
            )
            for f in fields
        ],
    )


def _withholding_section(ledger: TaxDocumentData, category: WithholdingCategory) -> WithholdingSection:
    description, boxes = _WITHHOLDING_SECTIONS[category]
    documents = [_withholding_document(doc, category) for doc in ledger.breakdown.by_document]
    return WithholdingSection(
        amount=getattr(ledger.withholdings, category.value),
        description=description,
        source_boxes=boxes,
        document_breakdown=[d for d in documents if d.extracted_fields],
    )


def build_income_report(ledger: TaxDocumentData) -> IncomeReport:
    """Per-bucket explanation of a ledger's income and withholding totals."""
    return IncomeReport(
        total_income=cents(ledger.total_income()),
        total_withholdings=cents(ledger.total_withholdings()),
        income_breakdown={
            category.value: _income_section(ledger, category) for category in _INCOME_SECTIONS
        },
        withholdings_breakdown={
            category.value: _withholding_section(ledger, category) for category in _WITHHOLDING_SECTIONS
        },
    )


__all__ = [
    "IncomeReport",
    "IncomeSection",
    "WithholdingSection",
    "build_income_report",
    "display_document_type",
]
