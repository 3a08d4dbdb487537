"""
IRS box mapping rules for W-2 and 1099 document fields.

Rules are evaluated top to bottom and the first match wins, so ordering
encodes precedence: ignore rules for look-alike fields (Social Security
wages, qualified dividends, state identification numbers) sit ahead of the
income and withholding rules that would otherwise claim them.

Box references match OCR field names such as ``Box1``,
``transactions_Box3`` or ``transactions_[0].Box1a``. A box pattern never
matches a longer box number: ``box1`` does not match ``box10`` and
``box3`` does not match ``box13``.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, FrozenSet, Tuple

from models.documents import DocumentType
from models.ledger import IncomeCategory, WithholdingCategory


class FieldClassification(str, Enum):
    INCOME = "income"
    WITHHOLDING = "withholding"
    IGNORE = "ignore"


IGNORE_CATEGORY = "ignore"


@dataclass(frozen=True)
class ClassifiedField:
    """Outcome of classifying one document field."""
    classification: FieldClassification
    category: str
    box: str
    description: str
    box_details: str

    @property
    def is_counted(self) -> bool:
        return self.classification != FieldClassification.IGNORE


FieldPredicate = Callable[[str], bool]


@dataclass(frozen=True)
class ClassificationRule:
    """
    One row of the rule table.

    ``document_types`` empty means the rule applies to every document type.
    The predicate receives the lower-cased field name.
    """
    document_types: FrozenSet[DocumentType]
    predicate: FieldPredicate
    result: ClassifiedField

    def applies_to(self, document_type: DocumentType) -> bool:
        return not self.document_types or document_type in self.document_types


# =============================================================================
# PREDICATE BUILDERS
# =============================================================================

def box(box_id: str) -> FieldPredicate:
    pattern = re.compile(rf"(?:transactions_)?(?:\[0\]\.)?box{re.escape(box_id)}(?!\d)")
    return lambda name: pattern.search(name) is not None


def contains(*needles: str) -> FieldPredicate:
    return lambda name: any(needle in name for needle in needles)


def contains_all(*needles: str) -> FieldPredicate:
    return lambda name: all(needle in name for needle in needles)


def excludes(*needles: str) -> FieldPredicate:
    return lambda name: not any(needle in name for needle in needles)


def any_of(*predicates: FieldPredicate) -> FieldPredicate:
    return lambda name: any(predicate(name) for predicate in predicates)


def all_of(*predicates: FieldPredicate) -> FieldPredicate:
    return lambda name: all(predicate(name) for predicate in predicates)


# =============================================================================
# RESULT BUILDERS
# =============================================================================

def income(category: IncomeCategory, box_label: str, description: str, details: str) -> ClassifiedField:
    return ClassifiedField(FieldClassification.INCOME, category.value, box_label, description, details)


def withholding(category: WithholdingCategory, box_label: str, description: str, details: str) -> ClassifiedField:
    return ClassifiedField(FieldClassification.WITHHOLDING, category.value, box_label, description, details)


def ignore(box_label: str, description: str, details: str) -> ClassifiedField:
    return ClassifiedField(FieldClassification.IGNORE, IGNORE_CATEGORY, box_label, description, details)


def _rule(document_types, predicate: FieldPredicate, result: ClassifiedField) -> ClassificationRule:
    if isinstance(document_types, DocumentType):
        document_types = (document_types,)
    return ClassificationRule(frozenset(document_types), predicate, result)


W2 = DocumentType.W2
INT = DocumentType.FORM_1099_INT
DIV = DocumentType.FORM_1099_DIV
NEC = DocumentType.FORM_1099_NEC
MISC = DocumentType.FORM_1099_MISC
ANY: Tuple[DocumentType, ...] = ()

_FEDERAL = WithholdingCategory.FEDERAL_TAX
_STATE = WithholdingCategory.STATE_TAX


def _interest(box_label: str, description: str, details: str) -> ClassifiedField:
    return income(IncomeCategory.INTEREST, box_label, description, f"1099-INT {box_label}: {details}")


def _dividend(box_label: str, description: str, details: str = "") -> ClassifiedField:
    return income(IncomeCategory.DIVIDENDS, box_label, description, f"1099-DIV {box_label}: {details or description}")


def _misc(box_label: str, description: str, details: str = "") -> ClassifiedField:
    return income(
        IncomeCategory.MISCELLANEOUS_INCOME, box_label, description,
        f"1099-MISC {box_label}: {details or description}",
    )


def _federal_withheld(form: str, box_label: str) -> ClassifiedField:
    return withholding(_FEDERAL, box_label, "Federal tax withheld", f"{form} {box_label}: Federal income tax withheld")


# =============================================================================
# RULE TABLE
# =============================================================================

RULES: Tuple[ClassificationRule, ...] = (
    # State identification numbers look numeric but are never amounts.
    _rule(ANY, contains("stateidentification", "stateid", "state_id", "stateno", "statenumber"),
          ignore("State ID", "State identification number (NOT a withholding amount)",
                 "State identification number - NOT a tax withholding amount")),
    _rule(INT, box("16"),
          ignore("Box 16", "State identification number (NOT a withholding amount)",
                 "1099-INT Box 16: State identification number - NOT a tax withholding amount")),

    # ---- W-2 ----------------------------------------------------------------
    _rule(W2, contains("socialsecuritywages"),
          ignore("Box 3", "Social Security wages (different basis)",
                 "Social Security wages - different from income calculation (Box 3)")),
    _rule(W2, contains("medicarewages"),
          ignore("Box 5", "Medicare wages (different basis)",
                 "Medicare wages - different from income calculation (Box 5)")),
    _rule(W2, all_of(contains("state"), contains("wages")),
          ignore("Box 16", "State wages (different basis)",
                 "State wages, tips, etc. - state basis, already counted in Box 1 (Box 16)")),
    _rule(W2, all_of(contains("local"), contains("wages")),
          ignore("Box 18", "Local wages (different basis)",
                 "Local wages, tips, etc. - local basis, already counted in Box 1 (Box 18)")),
    _rule(W2, any_of(
              contains("wagestipsandothercompensation", "wagestipsothercompensation"),
              contains_all("wages", "tips"),
              all_of(contains("wages"), excludes("withheld", "tax", "social", "medicare", "state", "local")),
          ),
          income(IncomeCategory.WAGES, "Box 1", "Wages, tips, and other compensation",
                 "W-2 Box 1: Wages, tips, and other compensation (includes ALL employment income + tips)")),
    _rule(W2, contains("socialsecuritytips", "tips"),
          ignore("Box 7", "Social Security tips (included in Box 1)",
                 "W-2 Box 7: Social Security tips - already included in Box 1 wages")),
    _rule(W2, contains("federalincometaxwithheld", "federaltaxwithheld"),
          withholding(_FEDERAL, "Box 2", "Federal tax withheld", "Federal income tax withheld from wages (Box 2)")),
    _rule(W2, contains("socialsecuritytaxwithheld"),
          withholding(WithholdingCategory.SOCIAL_SECURITY_TAX, "Box 4", "Social Security tax withheld",
                      "Social Security tax withheld from wages (Box 4)")),
    _rule(W2, contains("medicaretaxwithheld"),
          withholding(WithholdingCategory.MEDICARE_TAX, "Box 6", "Medicare tax withheld",
                      "Medicare tax withheld from wages (Box 6)")),
    _rule(W2, any_of(contains("stateincometax", "stateincome"), contains_all("state", "withheld")),
          withholding(_STATE, "State", "State income tax withheld", "State income tax withheld from wages")),

    # ---- 1099-INT -------------------------------------------------------------
    _rule(INT, any_of(contains("interestincome"), box("1")),
          _interest("Box 1", "Interest income", "Interest income from banks, etc.")),
    _rule(INT, any_of(contains("interestontreasuries"), box("3")),
          _interest("Box 3", "Interest on US Treasury obligations",
                    "Interest on U.S. Savings Bonds and Treasury obligations")),
    _rule(INT, any_of(contains("taxexemptinterest"), box("8")),
          _interest("Box 8", "Tax-exempt interest", "Tax-exempt interest (may be subject to AMT)")),
    _rule(INT, any_of(contains("specifiedprivateactivity"), box("9")),
          _interest("Box 9", "Specified private activity bond interest",
                    "Specified private activity bond interest")),
    _rule(INT, box("10"),
          ignore("Box 10", "Market discount (adjustment)", "1099-INT Box 10: Market discount - adjustment, not income")),
    _rule(INT, box("11"),
          ignore("Box 11", "Bond premium (adjustment)", "1099-INT Box 11: Bond premium - adjustment, not income")),
    _rule(INT, box("12"),
          ignore("Box 12", "Bond premium on Treasury securities",
                 "1099-INT Box 12: Bond premium on Treasury securities - adjustment")),
    _rule(INT, box("13"),
          ignore("Box 13", "Bond premium on tax-exempt bonds",
                 "1099-INT Box 13: Bond premium on tax-exempt bonds - adjustment")),
    _rule(INT, any_of(contains("earlywithdrawalpenalty"), box("2")),
          ignore("Box 2", "Early withdrawal penalty (not income)",
                 "1099-INT Box 2: Early withdrawal penalty - penalty, not income")),
    _rule(INT, any_of(contains("federaltaxwithheld"), box("4")), _federal_withheld("1099-INT", "Box 4")),
    _rule(INT, any_of(contains("investmentexpenses"), box("5")),
          ignore("Box 5", "Investment expenses (deduction)",
                 "1099-INT Box 5: Investment expenses - deduction, not income")),
    _rule(INT, any_of(contains("foreigntaxpaid"), box("6")),
          ignore("Box 6", "Foreign tax paid (credit)", "1099-INT Box 6: Foreign tax paid - tax credit, not income")),
    _rule(INT, any_of(contains("statetaxwithheld"), contains_all("state", "withheld"), box("17")),
          withholding(_STATE, "Box 17", "State tax withheld", "1099-INT Box 17: State income tax withheld")),
    _rule(INT, box("14"),
          ignore("Box 14", "Payer state number (not income)",
                 "1099-INT Box 14: Payer state number - not income or withholding")),
    _rule(INT, box("15"),
          ignore("Box 15", "State income (usually blank)", "1099-INT Box 15: State income - usually blank")),

    # ---- 1099-DIV -------------------------------------------------------------
    _rule(DIV, any_of(contains("totalordinarydividends"), box("1a")),
          _dividend("Box 1a", "Total ordinary dividends", "Total ordinary dividends (primary dividend income)")),
    _rule(DIV, any_of(contains("totalcapitalgaindistributions"), box("2a")),
          _dividend("Box 2a", "Total capital gain distributions")),
    _rule(DIV, box("2b"), _dividend("Box 2b", "Unrecaptured Section 1250 gain")),
    _rule(DIV, box("2c"), _dividend("Box 2c", "Section 1202 gain")),
    _rule(DIV, box("2d"), _dividend("Box 2d", "Collectibles gain", "Collectibles (28% rate) gain")),
    _rule(DIV, box("2e"), _dividend("Box 2e", "Section 897 ordinary dividends")),
    _rule(DIV, box("2f"), _dividend("Box 2f", "Section 897 capital gain")),
    _rule(DIV, any_of(contains("nondividenddistributions"), box("3")),
          _dividend("Box 3", "Nondividend distributions (return of capital)")),
    _rule(DIV, any_of(contains("section199adividends"), box("5")), _dividend("Box 5", "Section 199A dividends")),
    _rule(DIV, box("8"), _dividend("Box 8", "Cash liquidation distributions")),
    _rule(DIV, box("9"), _dividend("Box 9", "Noncash liquidation distributions")),
    _rule(DIV, box("10"), _dividend("Box 10", "Exempt-interest dividends")),
    _rule(DIV, any_of(contains("qualifieddividends"), box("1b")),
          ignore("Box 1b", "Qualified dividends (subset of 1a)",
                 "1099-DIV Box 1b: Qualified dividends - subset of Box 1a, would double-count")),
    _rule(DIV, any_of(contains("federaltaxwithheld"), box("4")), _federal_withheld("1099-DIV", "Box 4")),
    _rule(DIV, any_of(contains("investmentexpenses"), box("6")),
          ignore("Box 6", "Investment expenses", "1099-DIV Box 6: Investment expenses - deduction, not income")),
    _rule(DIV, any_of(contains("foreigntaxpaid"), box("7")),
          ignore("Box 7", "Foreign tax paid (credit)", "1099-DIV Box 7: Foreign tax paid - tax credit, not income")),

    # ---- 1099-NEC -------------------------------------------------------------
    _rule(NEC, any_of(contains("nonemployeecompensation"), box("1")),
          income(IncomeCategory.NON_EMPLOYEE_COMPENSATION, "Box 1", "Nonemployee compensation",
                 "1099-NEC Box 1: Nonemployee compensation (primary self-employment income)")),
    _rule(NEC, any_of(contains("federaltaxwithheld"), box("4")), _federal_withheld("1099-NEC", "Box 4")),
    _rule(NEC, any_of(contains("directsalesindicator"), box("2")),
          ignore("Box 2", "Direct sales indicator (checkbox)",
                 "1099-NEC Box 2: Direct sales indicator - checkbox, not income amount")),

    # ---- 1099-MISC ------------------------------------------------------------
    _rule(MISC, any_of(contains("rents"), box("1")),
          income(IncomeCategory.RENTAL_ROYALTIES, "Box 1", "Rents", "1099-MISC Box 1: Rents")),
    _rule(MISC, any_of(contains("royalties"), box("2")),
          income(IncomeCategory.RENTAL_ROYALTIES, "Box 2", "Royalties", "1099-MISC Box 2: Royalties")),
    _rule(MISC, any_of(contains("otherincome"), box("3")), _misc("Box 3", "Other income")),
    _rule(MISC, any_of(contains("fishingboatproceeds"), box("5")), _misc("Box 5", "Fishing boat proceeds")),
    _rule(MISC, any_of(contains("medicalandhealthcarepayments", "medicalpayments"), box("6")),
          _misc("Box 6", "Medical and health care payments")),
    _rule(MISC, any_of(contains("substitutepayments"), box("8")),
          _misc("Box 8", "Substitute payments", "Substitute payments in lieu of dividends")),
    _rule(MISC, any_of(contains("cropinsurance"), box("9")), _misc("Box 9", "Crop insurance proceeds")),
    _rule(MISC, any_of(contains("grossproceeds"), box("10")),
          _misc("Box 10", "Gross proceeds to attorney", "Gross proceeds paid to attorney")),
    _rule(MISC, any_of(contains("excessgolden"), box("11")), _misc("Box 11", "Excess golden parachute payments")),
    _rule(MISC, any_of(contains("section409adeferrals"), box("12")), _misc("Box 12", "Section 409A deferrals")),
    _rule(MISC, any_of(contains("federaltaxwithheld"), box("4")), _federal_withheld("1099-MISC", "Box 4")),

    # ---- Fallback -------------------------------------------------------------
    _rule(ANY, contains("withheld", "tax"),
          withholding(WithholdingCategory.UNKNOWN, "Unknown", "Unclassified withholding",
                      "Unclassified tax withholding field")),
)

UNCLASSIFIED = ignore("Unknown", "Unclassified field", "Field not recognized for income or withholding purposes")
