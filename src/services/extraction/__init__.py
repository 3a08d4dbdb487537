"""Document field extraction, classification and aggregation."""

from .classification_rules import ClassifiedField, FieldClassification
from .document_aggregator import DocumentAggregator, extract_tax_data_from_documents
from .field_classifier import classify_tax_field
from .field_values import (
    extract_envelope_value,
    extract_structured_schema,
    extract_transaction_boxes,
    parse_amount,
)
from .income_report import IncomeReport, build_income_report
from .state_detection import extract_user_state

__all__ = [
    "ClassifiedField",
    "DocumentAggregator",
    "FieldClassification",
    "IncomeReport",
    "build_income_report",
    "classify_tax_field",
    "extract_envelope_value",
    "extract_structured_schema",
    "extract_transaction_boxes",
    "extract_tax_data_from_documents",
    "extract_user_state",
    "parse_amount",
]
