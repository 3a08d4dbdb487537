"""Tests for the unified federal + state calculator."""

import pytest

from calculator.state import (
    StateTaxEngine,
    StateTaxInput,
    StateTaxOk,
    StateTaxUnsupported,
)
from calculator.tax_calculator import TaxCalculator
from models.ledger import TaxDocumentData
from models.taxpayer import FilingStatus, PersonalInfo
from services.extraction.document_aggregator import DocumentAggregator
from services.logging_config import calculation_id_var


@pytest.fixture
def calculator():
    return TaxCalculator()


@pytest.fixture
def w2_ledger(w2_document):
    return DocumentAggregator().aggregate([w2_document])


def expected_state_tax(state, income, **kwargs):
    outcome = StateTaxEngine().calculate_state_tax(
        StateTaxInput(state=state, income=income, federal_agi=income, **kwargs)
    )
    return outcome.result.state_tax


class TestUnifiedCalculation:
    def test_federal_and_state(self, calculator, w2_ledger):
        result = calculator.get_unified_tax_calculation(w2_ledger, PersonalInfo(state="CA"))

        assert result.federal_result.summary.total_tax_liability == 5460.50
        assert isinstance(result.state_tax_result, StateTaxOk)
        assert result.state_tax_result.result.state == "CA"

        summary = result.combined_summary
        assert summary.federal_tax == 5460.50
        assert summary.state_tax == expected_state_tax("CA", 60000.0)
        assert summary.state_tax > 0
        assert summary.total_tax_liability == pytest.approx(5460.50 + summary.state_tax)

    def test_combined_withholdings_are_income_tax_only(self, calculator, w2_ledger):
        summary = calculator.get_unified_tax_calculation(w2_ledger, PersonalInfo(state="CA")).combined_summary

        assert summary.total_withholdings == 7500.0
        assert summary.final_balance == pytest.approx(summary.total_tax_liability - 7500.0)
        assert summary.is_refund == (summary.final_balance < 0)

    def test_no_state_skips_state_engine(self, calculator, wages_ledger):
        result = calculator.get_unified_tax_calculation(wages_ledger, PersonalInfo())

        assert result.state_tax_result is None
        assert result.combined_summary.state_tax == 0.0
        assert result.combined_summary.final_balance == 460.50
        assert result.combined_summary.is_refund is False

    def test_no_income_tax_state(self, calculator, wages_ledger):
        result = calculator.get_unified_tax_calculation(wages_ledger, PersonalInfo(state="Texas"))

        assert isinstance(result.state_tax_result, StateTaxOk)
        assert result.combined_summary.state_tax == 0.0

    def test_unsupported_state(self, calculator, wages_ledger):
        result = calculator.get_unified_tax_calculation(wages_ledger, PersonalInfo(state="ZZ"))

        assert isinstance(result.state_tax_result, StateTaxUnsupported)
        assert result.combined_summary.state_tax == 0.0
        assert result.combined_summary.federal_tax == 5460.50

    def test_state_disabled(self, wages_ledger):
        result = TaxCalculator(include_state=False).get_unified_tax_calculation(
            wages_ledger, PersonalInfo(state="CA")
        )
        assert result.state_tax_result is None

    def test_default_personal_info(self, calculator, wages_ledger):
        result = calculator.get_unified_tax_calculation(wages_ledger)

        assert result.federal_result.metadata.filing_status == FilingStatus.SINGLE.value
        assert result.state_tax_result is None

    def test_negative_itemized_is_reported_and_ignored(self, calculator, wages_ledger):
        result = calculator.get_unified_tax_calculation(
            wages_ledger, use_itemized=True, itemized_amount=-500.0
        )

        [issue] = result.validation_issues
        assert issue.field == "itemized_amount"
        assert issue.severity == "error"
        assert result.federal_result.summary.total_tax_liability == 5460.50

    def test_negative_estimated_payments_are_ignored(self, calculator, wages_ledger):
        result = calculator.get_unified_tax_calculation(wages_ledger, estimated_payments=-100.0)

        assert [issue.field for issue in result.validation_issues] == ["estimated_payments"]
        assert result.federal_result.phases.final_balance.estimated_tax_payments == 0.0

    def test_calculation_id_scoped_to_run(self, calculator, wages_ledger):
        first = calculator.get_unified_tax_calculation(wages_ledger)
        second = calculator.get_unified_tax_calculation(wages_ledger)

        assert first.federal_result.metadata.calculation_id
        assert first.federal_result.metadata.calculation_id != second.federal_result.metadata.calculation_id
        assert calculation_id_var.get() is None

    def test_to_dict(self, calculator, w2_ledger):
        data = calculator.get_unified_tax_calculation(w2_ledger, PersonalInfo(state="IL")).to_dict()

        assert set(data) == {"federal_result", "state_tax_result", "combined_summary", "validation_issues"}
        assert data["state_tax_result"]["kind"] == "ok"
        assert data["state_tax_result"]["state"] == "IL"
        assert data["validation_issues"] == []


class TestLegacyEstimate:
    def test_calculate_tax(self, calculator):
        estimate = calculator.calculate_tax(60000.0, "single")

        assert estimate.total_income == 60000.0
        assert estimate.standard_deduction == 13850.0
        assert estimate.taxable_income == 46150.0
        assert estimate.estimated_tax == 5460.50
        assert estimate.effective_tax_rate == 9.1
        assert estimate.marginal_tax_rate == 22.0

    def test_legacy_summary_with_state(self, calculator):
        ledger = TaxDocumentData.from_totals(wages=60000.0, state_withholding=1800.0)

        summary = calculator.legacy_summary(ledger, PersonalInfo(state="pennsylvania"))

        assert summary["estimated_tax"] == 5460.50
        assert summary["state_tax"] == 1842.0
        assert summary["state_withholdings"] == 1800.0
        assert summary["state_name"] == "Pennsylvania"
        assert summary["state_abbreviation"] == "PA"

    def test_legacy_summary_without_state(self, calculator, wages_ledger):
        summary = calculator.legacy_summary(wages_ledger)

        assert summary["state_tax"] == 0.0
        assert summary["state_name"] is None
        assert summary["state_abbreviation"] is None


class TestStateSupport:
    def test_supported_states(self, calculator):
        states = calculator.get_supported_states()

        assert len(states) == 50
        assert "CA" in states
        assert "NM" not in states
        assert calculator.is_state_supported("ca")
        assert not calculator.is_state_supported("NM")

    def test_without_state_engine(self):
        calculator = TaxCalculator(include_state=False)

        assert calculator.get_supported_states() == []
        assert calculator.is_state_supported("CA") is False
