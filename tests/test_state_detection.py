"""Tests for detecting the taxpayer's state from documents."""

import json

from services.extraction.state_detection import extract_user_state


class TestExtractUserState:
    def test_state_from_w2(self, w2_document):
        assert extract_user_state([w2_document]) == "CA"

    def test_state_from_1099(self, document_factory):
        document = document_factory("FORM_1099_INT", {
            "InterestIncome": "1000",
            "PayerState": " ny ",
        })
        assert extract_user_state([document]) == "NY"

    def test_envelope_value(self, document_factory):
        document = document_factory("W2", {
            "EmployerState": json.dumps({"value": {"valueString": "IL"}, "confidence": 0.9}),
        })
        assert extract_user_state([document]) == "IL"

    def test_tax_fields_are_not_state_fields(self, document_factory):
        document = document_factory("W2", {
            "StateIncomeTax": "TX",
            "StateTaxWithheld": "FL",
        })
        assert extract_user_state([document]) is None

    def test_values_that_are_not_codes_are_skipped(self, document_factory):
        document = document_factory("W2", {
            "State": "California",
            "StateWagesTipsEtc": "60000",
            "EmployerStateAbbrev": "CA",
        })
        assert extract_user_state([document]) == "CA"

    def test_other_document_types_are_ignored(self, document_factory):
        document = document_factory("FORM_1040", {"State": "TX"})
        assert extract_user_state([document]) is None

    def test_first_document_wins(self, document_factory):
        first = document_factory("W2", {"State": "OR"}, doc_id="a")
        second = document_factory("FORM_1099_NEC", {"State": "WA"}, doc_id="b")
        assert extract_user_state([first, second]) == "OR"

    def test_no_documents(self):
        assert extract_user_state([]) is None
