"""Tests for OCR field value extraction."""

import json

import pytest

from models.documents import DocumentType
from services.extraction.field_values import (
    extract_envelope_value,
    extract_structured_schema,
    extract_transaction_boxes,
    parse_amount,
    structured_schema_amounts,
)


class TestEnvelopeValue:
    def test_nested_value_number(self):
        raw = json.dumps({"value": {"valueNumber": 60000}, "confidence": 0.98})
        envelope = extract_envelope_value(raw)
        assert envelope.value == 60000
        assert envelope.confidence == 0.98

    def test_nested_value_string(self):
        envelope = extract_envelope_value({"value": {"valueString": "CA"}, "confidence": 0.9})
        assert envelope.value == "CA"

    def test_top_level_value_number(self):
        assert extract_envelope_value('{"valueNumber": 12.5}').value == 12.5

    def test_plain_value_key(self):
        envelope = extract_envelope_value('{"value": "1,000"}')
        assert envelope.value == "1,000"
        assert envelope.confidence == 0.0

    def test_plain_string(self):
        envelope = extract_envelope_value("Acme Corp")
        assert envelope.value == "Acme Corp"
        assert envelope.confidence == 1.0

    @pytest.mark.parametrize("raw", [None, ""])
    def test_missing(self, raw):
        envelope = extract_envelope_value(raw)
        assert envelope.value is None
        assert envelope.confidence == 0.0


class TestParseAmount:
    @pytest.mark.parametrize("raw,expected", [
        ("$1,234.50", 1234.5),
        ("60,000.00", 60000.0),
        ("12345", 12345.0),
        (500, 500.0),
        (250.75, 250.75),
        ('{"value": {"valueNumber": 60000}}', 60000.0),
        ('{"value": {"valueString": "$2,500"}}', 2500.0),
        ("n/a", 0.0),
        ("-", 0.0),
        (None, 0.0),
        (True, 0.0),
        ({"unexpected": ["shape"]}, 0.0),
        ("NaN", 0.0),
        ("Infinity", 0.0),
        ("-Infinity", 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
        ('{"value": {"valueNumber": NaN}}', 0.0),
        ('{"valueNumber": Infinity}', 0.0),
    ])
    def test_parse_amount(self, raw, expected):
        assert parse_amount(raw) == expected


class TestTransactionBoxes:
    def test_div_boxes(self, transaction_payload):
        raw = transaction_payload({
            "Box1a": (193992, 0.9),
            "Box1b": (150000, None),
            "Box2a": (0, 0.9),
        })

        boxes = extract_transaction_boxes(raw, "FORM_1099_DIV", default_confidence=0.8)

        assert [(b.box_name, b.value, b.confidence) for b in boxes] == [
            ("Box1a", 193992.0, 0.9),
            ("Box1b", 150000.0, 0.8),
        ]

    def test_int_boxes(self, transaction_payload):
        raw = transaction_payload({"Box1": (1200, 0.95), "Box4": (120, 0.95)})
        boxes = extract_transaction_boxes(raw, DocumentType.FORM_1099_INT.value, default_confidence=0.8)
        assert [b.box_name for b in boxes] == ["Box1", "Box4"]

    def test_default_confidence_from_settings(self, monkeypatch, transaction_payload):
        monkeypatch.setenv("EXTRACTION_DEFAULT_BOX_CONFIDENCE", "0.7")
        raw = transaction_payload({"Box1a": (100, None)})

        [box] = extract_transaction_boxes(raw, "FORM_1099_DIV")

        assert box.confidence == 0.7

    def test_other_document_types_have_no_arrays(self, transaction_payload):
        raw = transaction_payload({"Box1": (100, 0.9)})
        assert extract_transaction_boxes(raw, "W2", default_confidence=0.8) == []

    @pytest.mark.parametrize("raw", ["1000", '{"type": "object"}', '{"type": "array", "value": "x"}', None])
    def test_not_an_array(self, raw):
        assert extract_transaction_boxes(raw, "FORM_1099_DIV", default_confidence=0.8) == []

    def test_malformed_transactions_are_skipped(self):
        raw = json.dumps({"type": "array", "value": [
            "junk",
            {"type": "object", "value": "junk"},
            {"type": "object", "value": {"Box1a": {"value": {"valueNumber": "12"}}}},
            {"type": "object", "value": {"Box1a": {"value": {"valueNumber": 12}}}},
        ]})
        boxes = extract_transaction_boxes(raw, "FORM_1099_DIV", default_confidence=0.8)
        assert [(b.box_name, b.value) for b in boxes] == [("Box1a", 12.0)]

    def test_non_finite_boxes_are_skipped(self, transaction_payload):
        raw = transaction_payload({
            "Box1a": (float("nan"), 0.9),
            "Box1b": (float("inf"), 0.9),
            "Box2a": (300, 0.9),
        })
        boxes = extract_transaction_boxes(raw, "FORM_1099_DIV", default_confidence=0.8)
        assert [(b.box_name, b.value) for b in boxes] == [("Box2a", 300.0)]


class TestStructuredSchema:
    def test_w2_wages(self):
        raw = json.dumps({"w2": {"wages": {"value": 60000, "confidence": 0.97}}})
        assert structured_schema_amounts(raw, "W2") == {"wages": 60000.0}

    def test_only_matching_form_is_read(self):
        raw = json.dumps({"w2": {"wages": {"value": 60000}}})
        assert structured_schema_amounts(raw, "FORM_1099_INT") == {}

    def test_non_finite_amount_is_dropped(self):
        assert structured_schema_amounts('{"w2": {"wages": {"value": NaN}}}', "W2") == {}

    @pytest.mark.parametrize("raw", ["60000", "plain text", {"w2": {"wages": {"value": 1}}}])
    def test_not_structured(self, raw):
        assert structured_schema_amounts(raw, "W2") == {}

    def test_build_ledger(self, document_factory):
        document = document_factory("FORM_1099_NEC", {
            "payload": json.dumps({"form1099NEC": {"nonemployeeCompensation": {"value": 8500}}}),
        })

        ledger = extract_structured_schema(document)

        assert ledger.income.non_employee_compensation == 8500.0
        assert ledger.total_income() == 8500.0
