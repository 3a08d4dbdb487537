"""Pytest configuration and fixtures for test suite."""

import json
import sys
from pathlib import Path
from typing import Optional

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from models.documents import ExtractedField, SourceDocument  # noqa: E402
from models.ledger import TaxDocumentData  # noqa: E402


ENGINE_ENV_PREFIXES = ("TAX_ENGINE_", "EXTRACTION_", "LOG_")


@pytest.fixture(autouse=True)
def clean_engine_env(monkeypatch):
    """Tests start without any engine settings from the developer's shell."""
    import os
    for key in list(os.environ):
        if key.startswith(ENGINE_ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    yield


def make_document(
    document_type: str,
    fields: dict,
    confidence: Optional[float] = 0.95,
    field_confidence: float = 0.95,
    doc_id: str = "doc-1",
    file_name: Optional[str] = None,
) -> SourceDocument:
    """Build a SourceDocument from a {field_name: value} mapping."""
    return SourceDocument(
        id=doc_id,
        file_name=file_name or f"{document_type.lower()}.pdf",
        document_type=document_type,
        confidence=confidence,
        fields=[
            ExtractedField(field_name=name, field_value=value, confidence=field_confidence)
            for name, value in fields.items()
        ],
    )


@pytest.fixture
def document_factory():
    """Provide the make_document builder to tests."""
    return make_document


@pytest.fixture
def w2_document():
    """W-2 with $60,000 wages, $5,000 federal and $2,500 state withholding, issued in CA."""
    return make_document(
        "W2",
        {
            "WagesTipsAndOtherCompensation_Box1": "60,000.00",
            "FederalIncomeTaxWithheld_Box2": "5000",
            "SocialSecurityWages_Box3": "60000",
            "SocialSecurityTaxWithheld_Box4": "3720",
            "MedicareWagesAndTips_Box5": "60000",
            "MedicareTaxWithheld_Box6": "870",
            "State": "CA",
            "StateWagesTipsEtc_Box16": "60000",
            "StateIncomeTax": "2500",
        },
        doc_id="w2-1",
        file_name="acme_w2.pdf",
    )


@pytest.fixture
def form_1099_int_document():
    """1099-INT with $1,000 interest and a $50 early withdrawal penalty."""
    return make_document(
        "FORM_1099_INT",
        {
            "InterestIncome_Box1": "1000",
            "EarlyWithdrawalPenalty_Box2": "50",
        },
        doc_id="int-1",
        file_name="bank_1099int.pdf",
    )


@pytest.fixture
def wages_ledger():
    """Ledger with $60,000 wages and $5,000 federal withholding."""
    return TaxDocumentData.from_totals(wages=60000.0, federal_withholding=5000.0)


def build_transaction_payload(boxes: dict) -> str:
    """
    JSON transaction array with one transaction holding ``boxes``.

    ``boxes`` maps box name -> (value, confidence); a None confidence
    leaves the confidence key out.
    """
    entries = {}
    for box_name, (value, confidence) in boxes.items():
        entry = {"value": {"valueNumber": value}}
        if confidence is not None:
            entry["confidence"] = confidence
        entries[box_name] = entry
    return json.dumps({"type": "array", "value": [{"type": "object", "value": entries}]})


@pytest.fixture
def transaction_payload():
    """Provide the transaction array builder to tests."""
    return build_transaction_payload
