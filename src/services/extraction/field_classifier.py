"""
Tax field classification.

Maps one OCR field (name, numeric value, document type) onto the IRS box
it represents and decides whether it is income, a withholding, or
informational data that must not be counted.
"""

import logging
from typing import Optional

from models.documents import DocumentType
from services.extraction.classification_rules import (
    RULES,
    UNCLASSIFIED,
    ClassifiedField,
    FieldClassification,
)

logger = logging.getLogger(__name__)

__all__ = ["ClassifiedField", "FieldClassification", "classify_tax_field"]


def classify_tax_field(
    field_name: str,
    value: float,
    document_type: Optional[str],
) -> ClassifiedField:
    """
    Classify a document field.

    Args:
        field_name: OCR field name, in any case (e.g. "WagesTipsAndOtherCompensation",
            "transactions_[0].Box1a").
        value: Parsed numeric value; used only for tracing.
        document_type: Raw or canonical document type string.

    Returns:
        The first matching rule's classification, or an ``ignore`` result
        with box "Unknown" when no rule matches. Never raises.
    """
    name = (field_name or "").lower()
    doc_type = DocumentType.from_raw(document_type)

    for rule in RULES:
        if rule.applies_to(doc_type) and rule.predicate(name):
            result = rule.result
            break
    else:
        result = UNCLASSIFIED

    logger.debug(
        f"Classified {field_name}={value} ({doc_type.value}) as "
        f"{result.classification.value}/{result.category} [{result.box}]"
    )
    return result
