#!/usr/bin/env python3
"""
Example script showing how to run the document engine programmatically:
OCR documents in, income ledger and federal + state tax out.
"""
import json
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from models.documents import ExtractedField, SourceDocument
from models.taxpayer import FilingStatus, PersonalInfo
from calculator.tax_calculator import TaxCalculator
from services.extraction import DocumentAggregator, build_income_report, extract_user_state
from services.logging_config import configure_logging_from_settings


def make_document(doc_id, file_name, document_type, fields, confidence=0.95):
    return SourceDocument(
        id=doc_id,
        file_name=file_name,
        document_type=document_type,
        confidence=confidence,
        fields=[
            ExtractedField(field_name=name, field_value=value, confidence=confidence)
            for name, value in fields.items()
        ],
    )


def print_result(result):
    federal = result.federal_result
    print(f"AGI:              ${federal.summary.adjusted_gross_income:,.2f}")
    print(f"Taxable income:   ${federal.summary.taxable_income:,.2f}")
    for line in federal.phases.regular_tax.bracket_breakdown:
        print(f"  {line.bracket_range:<22} {line.rate:>5.0%}  ${line.tax_from_bracket:,.2f}")
    print(f"Federal tax:      ${result.combined_summary.federal_tax:,.2f}")

    if result.state_tax_result is not None:
        state = result.state_tax_result.result
        print(f"{state.state_name} tax: ${state.state_tax:,.2f} ({state.effective_rate:.2f}% effective)")
        for note in state.notes:
            print(f"  note: {note}")

    summary = result.combined_summary
    label = "Refund" if summary.is_refund else "Balance due"
    print(f"{label}:      ${abs(summary.final_balance):,.2f}")
    for issue in result.validation_issues:
        print(f"  [{issue.severity}] {issue.field}: {issue.message}")


def example_w2_and_interest():
    """Example: W-2 employee with bank interest, state read from the W-2"""
    print("Example 1: W-2 and 1099-INT")
    print("=" * 60)

    documents = [
        make_document("w2-1", "acme_w2.pdf", "W-2", {
            "WagesTipsAndOtherCompensation_Box1": "60,000.00",
            "FederalIncomeTaxWithheld_Box2": "5000",
            "SocialSecurityTaxWithheld_Box4": "3720",
            "MedicareTaxWithheld_Box6": "870",
            "State": "CA",
            "StateIncomeTax": "2500",
        }),
        make_document("int-1", "bank_1099int.pdf", "FORM_1099_INT", {
            "InterestIncome_Box1": "1000",
        }),
    ]

    ledger = DocumentAggregator().aggregate(documents)
    state = extract_user_state(documents)

    result = TaxCalculator().get_unified_tax_calculation(ledger, PersonalInfo(state=state))
    print_result(result)

    report = build_income_report(ledger)
    print(json.dumps(report.model_dump()["withholdings_breakdown"]["federal_tax"], indent=2))
    print()


def example_contractor():
    """Example: 1099-NEC contractor filing jointly in Illinois"""
    print("Example 2: Self-Employment Income")
    print("=" * 60)

    documents = [
        make_document("nec-1", "client_a.pdf", "1099-NEC", {
            "NonemployeeCompensation_Box1": "85000",
        }),
        make_document("nec-2", "client_b.pdf", "1099-NEC", {
            "NonemployeeCompensation_Box1": "15000",
            "FederalIncomeTaxWithheld_Box4": "1500",
        }),
    ]

    ledger = DocumentAggregator().aggregate(documents)
    personal_info = PersonalInfo(
        filing_status=FilingStatus.MARRIED_JOINT,
        state="Illinois",
        dependents=2,
    )

    result = TaxCalculator().get_unified_tax_calculation(
        ledger, personal_info, estimated_payments=12000.0
    )
    print_result(result)
    print()


def example_itemized_deductions():
    """Example: Itemized deductions and an unsupported state"""
    print("Example 3: Itemized Deductions")
    print("=" * 60)

    documents = [
        make_document("w2-2", "finance_llc_w2.pdf", "W2", {
            "WagesTipsAndOtherCompensation_Box1": "120000",
            "FederalIncomeTaxWithheld_Box2": "22000",
        }),
        make_document("div-1", "broker_1099div.pdf", "FORM_1099_DIV", {
            "Transactions": json.dumps({
                "type": "array",
                "value": [{"type": "object", "value": {
                    "Box1a": {"value": {"valueNumber": 3000}, "confidence": 0.9},
                    "Box2a": {"value": {"valueNumber": 1200}, "confidence": 0.9},
                    "Box4": {"value": {"valueNumber": 300}, "confidence": 0.9},
                }}],
            }),
        }),
    ]

    ledger = DocumentAggregator().aggregate(documents)
    result = TaxCalculator().get_unified_tax_calculation(
        ledger,
        PersonalInfo(state="New Mexico"),
        use_itemized=True,
        itemized_amount=30000.0,
    )
    print_result(result)
    print()


if __name__ == "__main__":
    configure_logging_from_settings()

    example_w2_and_interest()
    example_contractor()
    example_itemized_deductions()

    print("=" * 60)
    print("All examples completed!")
    print("=" * 60)
