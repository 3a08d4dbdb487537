from .taxpayer import FilingStatus, PersonalInfo, normalize_filing_status
from .documents import DocumentType, ExtractedField, SourceDocument
from .ledger import (
    DocumentBreakdown,
    FieldSource,
    IncomeCategory,
    IncomeTotals,
    LedgerBreakdown,
    TaxDocumentData,
    WithholdingCategory,
    WithholdingTotals,
)

__all__ = [
    'FilingStatus',
    'PersonalInfo',
    'normalize_filing_status',
    'DocumentType',
    'ExtractedField',
    'SourceDocument',
    'DocumentBreakdown',
    'FieldSource',
    'IncomeCategory',
    'IncomeTotals',
    'LedgerBreakdown',
    'TaxDocumentData',
    'WithholdingCategory',
    'WithholdingTotals',
]
