"""
Services Module - document processing and infrastructure services.

- extraction: OCR field value parsing, IRS box classification, ledger
  aggregation, state detection and income breakdown reports
- logging_config: structured logging for calculation runs
"""

from .extraction import (
    DocumentAggregator,
    build_income_report,
    classify_tax_field,
    extract_tax_data_from_documents,
    extract_user_state,
)

__all__ = [
    "DocumentAggregator",
    "build_income_report",
    "classify_tax_field",
    "extract_tax_data_from_documents",
    "extract_user_state",
]
