"""Tests for building the income/withholding ledger from documents."""

import pytest

from calculator.engine import FederalTaxEngine
from config.settings import ExtractionSettings
from models.documents import ExtractedField
from models.taxpayer import FilingStatus
from services.extraction.document_aggregator import (
    DocumentAggregator,
    extract_tax_data_from_documents,
)


@pytest.fixture
def aggregator():
    return DocumentAggregator(ExtractionSettings())


class TestAggregation:
    def test_w2_and_1099_int(self, aggregator, w2_document, form_1099_int_document):
        ledger = aggregator.aggregate([w2_document, form_1099_int_document])

        assert ledger.income.wages == 60000.0
        assert ledger.income.interest == 1000.0
        assert ledger.total_income() == 61000.0

        assert ledger.withholdings.federal_tax == 5000.0
        assert ledger.withholdings.state_tax == 2500.0
        assert ledger.withholdings.social_security_tax == 3720.0
        assert ledger.withholdings.medicare_tax == 870.0

    def test_breakdown_per_document(self, aggregator, w2_document, form_1099_int_document):
        ledger = aggregator.aggregate([w2_document, form_1099_int_document])

        w2_entry, int_entry = ledger.breakdown.by_document
        assert w2_entry.id == "w2-1"
        assert w2_entry.file_name == "acme_w2.pdf"
        assert w2_entry.contributed_amounts == {"wages": 60000.0}
        assert int_entry.contributed_amounts == {"interest": 1000.0}

        assert [s.box for s in w2_entry.sources] == ["Box 1", "Box 2", "Box 4", "Box 6", "State"]
        assert [s.mapped_to for s in int_entry.sources] == ["interest"]

    def test_withholdings_never_count_as_income(self, aggregator, document_factory):
        document = document_factory("W2", {
            "FederalIncomeTaxWithheld": "5000",
            "StateIncomeTax": "1200",
        })

        ledger = aggregator.aggregate([document])

        assert ledger.total_income() == 0.0
        assert ledger.total_withholdings() == 6200.0

    def test_empty_input(self, aggregator):
        ledger = aggregator.aggregate([])
        assert ledger.total_income() == 0.0
        assert ledger.breakdown.by_document == []


class TestConfidenceFilters:
    def test_low_confidence_document_is_skipped(self, aggregator, document_factory):
        document = document_factory("W2", {"Wages": "60000"}, confidence=0.05)

        ledger = aggregator.aggregate([document])

        assert ledger.income.wages == 0.0
        assert ledger.breakdown.by_document == []

    def test_low_confidence_field_is_dropped(self, aggregator, document_factory):
        document = document_factory("W2", {"Wages": "60000"}, field_confidence=0.2)
        ledger = aggregator.aggregate([document])
        assert ledger.income.wages == 0.0

    def test_missing_document_confidence_uses_field_mean(self, aggregator, document_factory):
        document = document_factory("W2", {"Wages": "60000"}, confidence=None, field_confidence=0.6)

        ledger = aggregator.aggregate([document])

        assert ledger.income.wages == 60000.0
        assert ledger.breakdown.by_document[0].confidence == 0.6

    def test_thresholds_from_environment(self, monkeypatch, w2_document):
        monkeypatch.setenv("EXTRACTION_MIN_DOCUMENT_CONFIDENCE", "0.99")
        ledger = extract_tax_data_from_documents([w2_document])
        assert ledger.total_income() == 0.0

    @pytest.mark.parametrize("value", [
        "", None, "0.00", "-150", "n/a",
        "NaN", "Infinity", '{"value": {"valueNumber": NaN}}',
    ])
    def test_unusable_values_are_skipped(self, aggregator, document_factory, value):
        document = document_factory("FORM_1099_INT", {"InterestIncome": value})

        ledger = aggregator.aggregate([document])

        assert ledger.income.interest == 0.0
        assert ledger.breakdown.by_document[0].sources == []

    @pytest.mark.parametrize("value", ["NaN", "Infinity", '{"value": {"valueNumber": NaN}}'])
    def test_non_finite_wages_still_calculate(self, aggregator, document_factory, value):
        document = document_factory("W2", {"Wages": value, "FederalIncomeTaxWithheld": "500"})

        ledger = aggregator.aggregate([document])
        result = FederalTaxEngine().calculate(ledger, filing_status=FilingStatus.SINGLE)

        assert ledger.income.wages == 0.0
        assert result.summary.total_tax_liability == 0.0
        assert result.phases.final_balance.refund_amount == 500.0


class TestDeduplication:
    def test_same_box_same_amount_counted_once(self, aggregator, document_factory):
        document = document_factory("FORM_1099_INT", {
            "InterestIncome": "1000",
            "Box1": "1000",
        })

        ledger = aggregator.aggregate([document])

        assert ledger.income.interest == 1000.0
        assert len(ledger.breakdown.by_document[0].sources) == 1

    def test_same_amount_in_different_boxes_is_kept(self, aggregator, document_factory):
        document = document_factory("FORM_1099_INT", {
            "InterestIncome": "500",
            "InterestOnTreasuries": "500",
        })
        ledger = aggregator.aggregate([document])
        assert ledger.income.interest == 1000.0

    def test_same_amount_on_two_documents_is_kept(self, aggregator, document_factory):
        first = document_factory("W2", {"Wages": "30000"}, doc_id="w2-a")
        second = document_factory("W2", {"Wages": "30000"}, doc_id="w2-b")

        ledger = aggregator.aggregate([first, second])

        assert ledger.income.wages == 60000.0

    def test_ignored_fields_do_not_block_counted_ones(self, aggregator, document_factory):
        # Box 3 shares Box 1's amount but is ignored, so Box 1 still counts
        document = document_factory("W2", {
            "SocialSecurityWages": "60000",
            "WagesTipsAndOtherCompensation": "60000",
        })
        ledger = aggregator.aggregate([document])
        assert ledger.income.wages == 60000.0


class TestTransactionArrays:
    def test_dividend_transactions(self, aggregator, document_factory, transaction_payload):
        document = document_factory("FORM_1099_DIV", {
            "transactions": transaction_payload({
                "Box1a": (193992, 0.9),
                "Box1b": (150000, 0.9),
                "Box4": (500, 0.9),
            }),
            # The flat field repeats Box 1a and must not double count
            "TotalOrdinaryDividends": "193992",
        })

        ledger = aggregator.aggregate([document])

        assert ledger.income.dividends == 193992.0
        assert ledger.withholdings.federal_tax == 500.0
        names = [s.field_name for s in ledger.breakdown.by_document[0].sources]
        assert names == ["transactions_Box1a", "transactions_Box4"]

    def test_low_confidence_boxes_are_dropped(self, aggregator, document_factory, transaction_payload):
        document = document_factory("FORM_1099_INT", {
            "transactions": transaction_payload({"Box1": (1200, 0.1), "Box3": (300, 0.9)}),
        })

        ledger = aggregator.aggregate([document])

        assert ledger.income.interest == 300.0


class TestUnknownWithholding:
    def test_recorded_but_not_credited(self, aggregator, document_factory):
        document = document_factory("FORM_1099_NEC", {
            "NonemployeeCompensation": "12000",
            "StateTaxWithheld": "300",
        })

        ledger = aggregator.aggregate([document])

        assert ledger.income.non_employee_compensation == 12000.0
        assert ledger.total_withholdings() == 0.0
        sources = ledger.breakdown.by_document[0].sources
        assert [s.mapped_to for s in sources] == ["non_employee_compensation", "unknown"]


class TestLegacyTotalIncome:
    def test_name_heuristic_double_counts(self, aggregator):
        fields = [
            ExtractedField(field_name="TotalOrdinaryDividends", field_value="1000", confidence=0.9),
            ExtractedField(field_name="QualifiedDividends", field_value="800", confidence=0.9),
            ExtractedField(field_name="FederalIncomeTaxWithheld", field_value="5000", confidence=0.9),
            ExtractedField(field_name="EmployerName", field_value="Acme", confidence=0.9),
        ]
        assert aggregator.legacy_total_income([fields]) == 1800.0

    def test_threshold_is_exclusive(self, aggregator):
        fields = [ExtractedField(field_name="Wages", field_value="60000", confidence=0.3)]
        assert aggregator.legacy_total_income([fields]) == 0.0
