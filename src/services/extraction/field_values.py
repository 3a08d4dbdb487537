"""
Value extraction from OCR vendor payloads.

The document intelligence service stores field values in several shapes:
plain strings ("$1,234.56"), bare numbers, JSON-encoded envelopes such as
``{"value": {"valueNumber": 1234.56}, "confidence": 0.98}`` and, for 1099
forms, transaction arrays whose objects hold one entry per box. Everything
here degrades to 0 / empty results instead of raising.
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from config.settings import ExtractionSettings
from models.documents import DocumentType, SourceDocument
from models.ledger import IncomeCategory, TaxDocumentData

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^0-9.\-]")

DIV_TRANSACTION_BOXES: Tuple[str, ...] = (
    "Box1a", "Box1b", "Box2a", "Box2b", "Box2c", "Box2d", "Box2e", "Box2f",
    "Box3", "Box4", "Box5", "Box6",
)
INT_TRANSACTION_BOXES: Tuple[str, ...] = tuple(f"Box{n}" for n in range(1, 14))


@dataclass(frozen=True)
class EnvelopeValue:
    """A value pulled out of a vendor envelope together with its confidence."""
    value: Any
    confidence: float


@dataclass(frozen=True)
class TransactionBox:
    """One numeric box read from a transaction array."""
    box_name: str
    value: float
    confidence: float


def _decode(raw: Any) -> Tuple[Any, bool]:
    """JSON-decode strings; returns (value, decoded_from_json)."""
    if isinstance(raw, str):
        try:
            return json.loads(raw), True
        except (ValueError, TypeError):
            return raw, False
    return raw, False


def extract_envelope_value(raw: Any) -> EnvelopeValue:
    """
    Unwrap a vendor field value.

    Lookup order for mappings: value.valueNumber, value.valueString,
    valueNumber, valueString, value, then the mapping itself. Non-JSON
    strings and bare scalars are returned as-is with confidence 1.0.
    """
    if raw is None or raw == "":
        return EnvelopeValue(None, 0.0)

    parsed, _ = _decode(raw)

    if isinstance(parsed, dict):
        confidence = parsed.get("confidence") or 0.0
        inner = parsed.get("value")

        if isinstance(inner, dict) and _is_number(inner.get("valueNumber")):
            return EnvelopeValue(inner["valueNumber"], confidence)
        if isinstance(inner, dict) and isinstance(inner.get("valueString"), str):
            return EnvelopeValue(inner["valueString"], confidence)
        if _is_number(parsed.get("valueNumber")):
            return EnvelopeValue(parsed["valueNumber"], confidence)
        if isinstance(parsed.get("valueString"), str):
            return EnvelopeValue(parsed["valueString"], confidence)
        if "value" in parsed:
            return EnvelopeValue(inner, confidence)
        return EnvelopeValue(parsed, confidence)

    return EnvelopeValue(parsed, 1.0)


def _is_number(value: Any) -> bool:
    # JSON decoding accepts NaN and Infinity; neither is an amount
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def parse_amount(raw: Any) -> float:
    """
    Numeric amount of a raw field value, 0.0 when it cannot be parsed.

    >>> parse_amount('{"value": {"valueNumber": 60000}}')
    60000.0
    >>> parse_amount("$1,234.50")
    1234.5
    >>> parse_amount("n/a")
    0.0
    """
    extracted = extract_envelope_value(raw).value

    if _is_number(extracted):
        return float(extracted)

    if isinstance(extracted, str):
        cleaned = _NON_NUMERIC.sub("", extracted)
        try:
            amount = float(cleaned)
        except ValueError:
            return 0.0
        return amount if math.isfinite(amount) else 0.0

    return 0.0


def extract_transaction_boxes(
    raw: Any,
    document_type: str,
    default_confidence: Optional[float] = None,
) -> List[TransactionBox]:
    """
    Read box values from a transaction-array payload.

    Shape: ``{"type": "array", "value": [{"type": "object", "value":
    {"Box1a": {"value": {"valueNumber": 193992}, "confidence": 0.9}}}]}``.
    Only 1099-DIV and 1099-INT documents carry these arrays.
    """
    if default_confidence is None:
        default_confidence = ExtractionSettings().default_box_confidence

    parsed, _ = _decode(raw)
    if not isinstance(parsed, dict) or parsed.get("type") != "array":
        return []
    transactions = parsed.get("value")
    if not isinstance(transactions, list):
        return []

    doc_type = DocumentType.from_raw(document_type)
    if doc_type == DocumentType.FORM_1099_DIV:
        box_names = DIV_TRANSACTION_BOXES
    elif doc_type == DocumentType.FORM_1099_INT:
        box_names = INT_TRANSACTION_BOXES
    else:
        return []

    boxes: List[TransactionBox] = []
    for transaction in transactions:
        if not isinstance(transaction, dict) or transaction.get("type") != "object":
            continue
        data = transaction.get("value")
        if not isinstance(data, dict):
            continue
        for box_name in box_names:
            entry = data.get(box_name)
            if not isinstance(entry, dict):
                continue
            inner = entry.get("value")
            number = inner.get("valueNumber") if isinstance(inner, dict) else None
            # zero-valued boxes carry nothing to count
            if not _is_number(number) or not number:
                continue
            boxes.append(TransactionBox(
                box_name=box_name,
                value=float(number),
                confidence=entry.get("confidence") or default_confidence,
            ))

    logger.debug(f"Extracted {len(boxes)} box values from {document_type} transaction array")
    return boxes


# (document type, schema root, schema field, ledger income field)
_STRUCTURED_SCHEMA_PATHS: Tuple[Tuple[DocumentType, str, str, str], ...] = (
    (DocumentType.FORM_1099_INT, "form1099INT", "interestIncome", "interest"),
    (DocumentType.FORM_1099_DIV, "form1099DIV", "totalOrdinaryDividends", "dividends"),
    (DocumentType.FORM_1099_NEC, "form1099NEC", "nonemployeeCompensation", "non_employee_compensation"),
    (DocumentType.W2, "w2", "wages", "wages"),
)


def structured_schema_amounts(raw: Any, document_type: str) -> Dict[str, float]:
    """
    Income amounts from a structured-schema payload.

    Structured payloads nest the value under the form, for example
    ``{"w2": {"wages": {"value": 60000, "confidence": 0.97}}}``. Returns
    a mapping of ledger income field -> amount (empty when the payload
    is not structured or carries no amount for this document type).
    """
    parsed, decoded = _decode(raw)
    if not decoded or not isinstance(parsed, dict):
        return {}

    doc_type = DocumentType.from_raw(document_type)
    amounts: Dict[str, float] = {}
    for schema_type, root, name, income_field in _STRUCTURED_SCHEMA_PATHS:
        if schema_type != doc_type:
            continue
        section = parsed.get(root)
        entry = section.get(name) if isinstance(section, dict) else None
        value = entry.get("value") if isinstance(entry, dict) else None
        if _is_number(value) and value:
            amounts[income_field] = amounts.get(income_field, 0.0) + float(value)
    return amounts


def extract_structured_schema(document: SourceDocument) -> TaxDocumentData:
    """
    Build a ledger from a document whose fields carry structured-schema JSON.

    Used for documents produced by the structured extraction model, where
    the usual field-by-field classification finds nothing.
    """
    ledger = TaxDocumentData()
    for field in document.fields:
        for income_field, amount in structured_schema_amounts(
            field.field_value, document.document_type
        ).items():
            ledger.add_income(IncomeCategory(income_field), amount)
    return ledger
