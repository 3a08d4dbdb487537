"""Detect the taxpayer's state of residence from uploaded documents."""

import logging
from typing import Iterable, Optional

from models.documents import DocumentType, ExtractedField, SourceDocument
from services.extraction.field_values import extract_envelope_value

logger = logging.getLogger(__name__)


def _is_state_field(field_name: str, document_type: DocumentType) -> bool:
    name = field_name.lower()
    plain_state = "state" in name and "tax" not in name and "withheld" not in name
    if document_type == DocumentType.W2:
        return plain_state or "employerstate" in name or "state_id" in name
    return plain_state


def _state_code(field: ExtractedField) -> Optional[str]:
    value = extract_envelope_value(field.field_value).value
    if not isinstance(value, str):
        return None
    code = value.strip().upper()
    return code if len(code) == 2 else None


def extract_user_state(documents: Iterable[SourceDocument]) -> Optional[str]:
    """
    Return the first two-letter state code found on a W-2 or 1099.

    There is no default: None means state tax is not computed.
    """
    for document in documents:
        doc_type = document.canonical_type
        if doc_type != DocumentType.W2 and not doc_type.is_1099:
            continue

        for field in document.fields:
            if not _is_state_field(field.field_name, doc_type):
                continue
            code = _state_code(field)
            if code:
                logger.info(f"Detected state {code} from {doc_type.value} field {field.field_name}")
                return code

    logger.info("No state found in documents; state tax will not be calculated")
    return None
