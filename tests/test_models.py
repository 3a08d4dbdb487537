"""Tests for taxpayer, document and ledger models."""

import pytest
from pydantic import ValidationError

from models.documents import DocumentType, ExtractedField, SourceDocument
from models.ledger import (
    DocumentBreakdown,
    IncomeCategory,
    TaxDocumentData,
    WithholdingCategory,
)
from models.taxpayer import FilingStatus, PersonalInfo, normalize_filing_status


class TestFilingStatus:
    @pytest.mark.parametrize("raw,expected", [
        ("single", FilingStatus.SINGLE),
        ("married-jointly", FilingStatus.MARRIED_JOINT),
        ("marriedFilingJointly", FilingStatus.MARRIED_JOINT),
        ("MFJ", FilingStatus.MARRIED_JOINT),
        ("Married Filing Separately", FilingStatus.MARRIED_SEPARATE),
        ("head_of_household", FilingStatus.HEAD_OF_HOUSEHOLD),
        ("HOH", FilingStatus.HEAD_OF_HOUSEHOLD),
        ("qualifying_surviving_spouse", FilingStatus.QUALIFYING_WIDOW),
        (FilingStatus.MARRIED_SEPARATE, FilingStatus.MARRIED_SEPARATE),
    ])
    def test_aliases(self, raw, expected):
        assert normalize_filing_status(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "divorced"])
    def test_unknown_falls_back_to_single(self, raw):
        assert normalize_filing_status(raw) == FilingStatus.SINGLE


class TestPersonalInfo:
    def test_defaults(self):
        info = PersonalInfo()
        assert info.filing_status == FilingStatus.SINGLE
        assert info.state is None
        assert info.dependents == 0

    def test_filing_status_is_coerced(self):
        assert PersonalInfo(filing_status="married-jointly").filing_status == FilingStatus.MARRIED_JOINT

    def test_blank_state_is_none(self):
        assert PersonalInfo(state="   ").state is None

    def test_negative_dependents_rejected(self):
        with pytest.raises(ValidationError):
            PersonalInfo(dependents=-1)


class TestDocumentType:
    @pytest.mark.parametrize("raw,expected", [
        ("W2", DocumentType.W2),
        ("W-2", DocumentType.W2),
        ("FORM_W2", DocumentType.W2),
        ("1099-INT", DocumentType.FORM_1099_INT),
        ("form_1099_div", DocumentType.FORM_1099_DIV),
        ("1099 NEC", DocumentType.FORM_1099_NEC),
        ("FORM_1099_MISC", DocumentType.FORM_1099_MISC),
        ("FORM_1040", DocumentType.FORM_1040),
        ("receipt", DocumentType.OTHER),
        (None, DocumentType.OTHER),
    ])
    def test_from_raw(self, raw, expected):
        assert DocumentType.from_raw(raw) == expected

    def test_is_1099(self):
        assert DocumentType.FORM_1099_NEC.is_1099
        assert not DocumentType.W2.is_1099


class TestSourceDocument:
    def test_enum_document_type_is_stored_as_value(self):
        document = SourceDocument(id="d", document_type=DocumentType.FORM_1099_INT)
        assert document.document_type == "FORM_1099_INT"
        assert document.canonical_type == DocumentType.FORM_1099_INT

    def test_missing_type_is_other(self):
        assert SourceDocument(id="d", document_type=None).document_type == "OTHER"

    def test_effective_confidence_prefers_document_value(self):
        document = SourceDocument(
            id="d", confidence=0.7,
            fields=[ExtractedField(field_name="a", confidence=0.2)],
        )
        assert document.effective_confidence() == 0.7

    def test_effective_confidence_falls_back_to_field_mean(self):
        document = SourceDocument(id="d", fields=[
            ExtractedField(field_name="a", confidence=0.5),
            ExtractedField(field_name="b", confidence=1.0),
        ])
        assert document.effective_confidence() == pytest.approx(0.75)

    def test_effective_confidence_without_fields(self):
        assert SourceDocument(id="d").effective_confidence() == 0.0

    def test_field_confidence_bounds(self):
        with pytest.raises(ValidationError):
            ExtractedField(field_name="a", confidence=1.2)


class TestTaxDocumentData:
    def test_add_income_tracks_contribution(self):
        ledger = TaxDocumentData()
        document = DocumentBreakdown(id="d", file_name="f.pdf", document_type="W2", confidence=0.9)

        ledger.add_income(IncomeCategory.WAGES, 1000.0, document)
        ledger.add_income(IncomeCategory.WAGES, 500.0, document)
        ledger.add_income(IncomeCategory.NON_EMPLOYEE_COMPENSATION, 200.0, document)

        assert ledger.income.wages == 1500.0
        assert document.contributed_amounts == {"wages": 1500.0, "non_employee_comp": 200.0}
        assert document.contribution(IncomeCategory.WAGES) == 1500.0
        assert document.contribution(IncomeCategory.INTEREST) == 0.0

    def test_add_withholding(self):
        ledger = TaxDocumentData()

        assert ledger.add_withholding(WithholdingCategory.MEDICARE_TAX, 870.0) is True
        assert ledger.add_withholding(WithholdingCategory.UNKNOWN, 50.0) is False

        assert ledger.withholdings.medicare_tax == 870.0
        assert ledger.total_withholdings() == 870.0

    def test_from_totals(self):
        ledger = TaxDocumentData.from_totals(
            wages=50000.0, interest=100.0, rental_royalties=900.0,
            federal_withholding=4000.0, state_withholding=1000.0,
        )

        assert ledger.total_income() == 51000.0
        assert ledger.total_withholdings() == 5000.0
        assert ledger.breakdown.by_document == []
