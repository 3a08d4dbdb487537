"""
Source documents as handed over by the OCR collaborator.

Each uploaded file becomes one SourceDocument carrying the flattened
(field name, raw value, confidence) triples the vendor returned.
"""

from enum import Enum
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class DocumentType(str, Enum):
    """Document types the classifier has box-mapping rules for."""
    W2 = "W2"
    FORM_1099_INT = "FORM_1099_INT"
    FORM_1099_DIV = "FORM_1099_DIV"
    FORM_1099_NEC = "FORM_1099_NEC"
    FORM_1099_MISC = "FORM_1099_MISC"
    FORM_1040 = "FORM_1040"
    OTHER = "OTHER"

    @property
    def is_1099(self) -> bool:
        return self.value.startswith("FORM_1099")

    @classmethod
    def from_raw(cls, raw: Optional[str]) -> "DocumentType":
        """
        Canonicalize a vendor or database document type string.

        Matching is by substring on the lower-cased, separator-free form,
        so "W-2", "FORM_W2", "1099-INT" and "form_1099_int" all resolve.
        """
        if not raw:
            return cls.OTHER
        if isinstance(raw, cls):
            return raw

        key = str(raw).lower().replace("-", "").replace("_", "").replace(" ", "")
        if "w2" in key:
            return cls.W2
        if "1040" in key:
            return cls.FORM_1040
        if "int" in key:
            return cls.FORM_1099_INT
        if "div" in key:
            return cls.FORM_1099_DIV
        if "nec" in key:
            return cls.FORM_1099_NEC
        if "misc" in key:
            return cls.FORM_1099_MISC
        return cls.OTHER


class ExtractedField(BaseModel):
    """One OCR field. ``field_value`` may be a plain string, a number or a vendor envelope."""
    field_name: str
    field_value: Optional[Any] = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)

    model_config = ConfigDict(frozen=True)


class SourceDocument(BaseModel):
    """An uploaded tax document and its extracted fields."""
    id: str
    file_name: str = "unknown"
    document_type: str = DocumentType.OTHER.value
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    fields: List[ExtractedField] = Field(default_factory=list)

    @field_validator("document_type", mode="before")
    @classmethod
    def _enum_to_value(cls, value):
        if isinstance(value, Enum):
            return value.value
        return value or DocumentType.OTHER.value

    @property
    def canonical_type(self) -> DocumentType:
        return DocumentType.from_raw(self.document_type)

    def effective_confidence(self) -> float:
        """Document confidence, or the mean field confidence when the vendor gave none."""
        if self.confidence is not None:
            return self.confidence
        if not self.fields:
            return 0.0
        return sum(f.confidence for f in self.fields) / len(self.fields)
