"""
Document Aggregator - builds the income/withholding ledger from OCR documents.

Every usable field of every usable document is classified onto its IRS box
and accumulated into exactly one bucket. Withholdings never land in income,
and a value repeated under several field names on the same document (the
OCR vendor reports some boxes both flat and inside transaction arrays) is
counted once.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from calculator.decimal_math import cents
from config.settings import ExtractionSettings
from models.documents import ExtractedField, SourceDocument
from models.ledger import (
    DocumentBreakdown,
    FieldSource,
    IncomeCategory,
    TaxDocumentData,
    WithholdingCategory,
)
from services.extraction.field_classifier import (
    ClassifiedField,
    FieldClassification,
    classify_tax_field,
)
from services.extraction.field_values import extract_transaction_boxes, parse_amount

logger = logging.getLogger(__name__)

_INCOME_CATEGORIES = {category.value: category for category in IncomeCategory}
_WITHHOLDING_CATEGORIES = {category.value: category for category in WithholdingCategory}

_LEGACY_INCOME_MARKERS = (
    "wages", "compensation", "dividend", "interest", "income", "box1", "box2", "box3",
)

DedupKey = Tuple[str, str, float]


class DocumentAggregator:
    """
    Classifies document fields and accumulates them into a TaxDocumentData.

    Example:
        aggregator = DocumentAggregator()
        ledger = aggregator.aggregate(documents)
        print(ledger.income.wages, ledger.withholdings.federal_tax)
    """

    def __init__(self, settings: Optional[ExtractionSettings] = None):
        self.settings = settings or ExtractionSettings()

    def aggregate(self, documents: Iterable[SourceDocument]) -> TaxDocumentData:
        ledger = TaxDocumentData()
        processed = 0

        for document in documents:
            confidence = document.effective_confidence()
            if confidence < self.settings.min_document_confidence:
                logger.info(
                    f"Skipping {document.file_name}: confidence {confidence:.0%} "
                    f"below {self.settings.min_document_confidence:.0%}"
                )
                continue

            ledger.breakdown.by_document.append(self._aggregate_document(document, confidence, ledger))
            processed += 1

        logger.info(
            f"Aggregated {processed} documents: income ${ledger.total_income():,.2f}, "
            f"withholdings ${ledger.total_withholdings():,.2f}"
        )
        return ledger

    def _aggregate_document(
        self,
        document: SourceDocument,
        confidence: float,
        ledger: TaxDocumentData,
    ) -> DocumentBreakdown:
        entry = DocumentBreakdown(
            id=document.id,
            file_name=document.file_name,
            document_type=document.document_type,
            confidence=confidence,
        )
        # Dedup is per document: the same amount on two documents is two amounts.
        seen: Set[DedupKey] = set()

        for field in document.fields:
            for field_name, amount, field_confidence in self._field_amounts(document, field):
                classified = classify_tax_field(field_name, amount, document.document_type)
                if not classified.is_counted:
                    logger.debug(f"Ignored {field_name} ({classified.box}): {classified.box_details}")
                    continue

                key = (document.document_type, classified.box, amount)
                if key in seen:
                    logger.debug(
                        f"Duplicate skipped: {field_name} on {document.file_name} "
                        f"({classified.box} ${amount:,.2f} already counted)"
                    )
                    continue
                seen.add(key)

                self._post(ledger, entry, classified, amount)
                entry.sources.append(FieldSource(
                    field_name=field_name,
                    amount=amount,
                    confidence=field_confidence,
                    mapped_to=classified.category,
                    box=classified.box,
                    box_details=classified.box_details,
                    description=classified.description,
                ))

        return entry

    def _field_amounts(
        self,
        document: SourceDocument,
        field: ExtractedField,
    ) -> List[Tuple[str, float, float]]:
        """Usable (field name, amount, confidence) triples carried by one field."""
        if field.field_value is None or field.field_value == "":
            return []
        if field.confidence < self.settings.min_field_confidence:
            return []

        boxes = extract_transaction_boxes(
            field.field_value,
            document.document_type,
            default_confidence=self.settings.default_box_confidence,
        )
        if boxes:
            return [
                (f"transactions_{box.box_name}", box.value, box.confidence)
                for box in boxes
                if box.value > 0 and box.confidence >= self.settings.min_field_confidence
            ]

        amount = parse_amount(field.field_value)
        if amount <= 0:
            return []
        return [(field.field_name, amount, field.confidence)]

    @staticmethod
    def _post(
        ledger: TaxDocumentData,
        entry: DocumentBreakdown,
        classified: ClassifiedField,
        amount: float,
    ) -> None:
        if classified.classification == FieldClassification.INCOME:
            category = _INCOME_CATEGORIES.get(classified.category, IncomeCategory.OTHER)
            ledger.add_income(category, amount, entry)
            return

        category = _WITHHOLDING_CATEGORIES.get(classified.category, WithholdingCategory.UNKNOWN)
        if not ledger.add_withholding(category, amount):
            logger.warning(f"Unclassified withholding ${amount:,.2f} recorded but not credited")

    def legacy_total_income(self, field_groups: Iterable[Sequence[ExtractedField]]) -> float:
        """
        Name-heuristic income total without box classification.

        Kept for callers that predate the ledger; it cannot tell Box 1b
        from Box 1a and will double count such pairs.
        """
        logger.warning("legacy_total_income is deprecated; use aggregate() instead")

        total = 0.0
        for fields in field_groups:
            for field in fields:
                if field.field_value is None or field.confidence <= self.settings.min_field_confidence:
                    continue
                name = field.field_name.lower()
                if not any(marker in name for marker in _LEGACY_INCOME_MARKERS):
                    continue
                if "withheld" in name or "tax" in name:
                    continue
                amount = parse_amount(field.field_value)
                if amount > 0:
                    total += amount
        return cents(total)


def extract_tax_data_from_documents(documents: Iterable[SourceDocument]) -> TaxDocumentData:
    """Build the ledger for one calculation request using the environment's settings."""
    return DocumentAggregator().aggregate(documents)
