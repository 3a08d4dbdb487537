from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from models.ledger import TaxDocumentData


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    message: str
    severity: str = "error"  # "error" | "warning"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class CalculationInputValidator:
    """
    Sanity checks on the caller-supplied inputs of a unified calculation.

    Errors name inputs the calculation cannot use as given (the orchestrator
    substitutes zero); warnings name inputs that are legal but probably not
    what the user meant.
    """

    def validate(
        self,
        ledger: TaxDocumentData,
        use_itemized: bool,
        itemized_amount: float,
        estimated_payments: float,
        standard_deduction: float,
    ) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []

        if itemized_amount < 0:
            issues.append(ValidationIssue("itemized_amount", "Itemized deductions cannot be negative."))
        elif use_itemized and itemized_amount < standard_deduction:
            issues.append(
                ValidationIssue(
                    "itemized_amount",
                    f"Itemized deductions (${itemized_amount:,.2f}) are below the standard deduction "
                    f"(${standard_deduction:,.2f}); the standard deduction will be used.",
                    severity="warning",
                )
            )

        if estimated_payments < 0:
            issues.append(ValidationIssue("estimated_payments", "Estimated tax payments cannot be negative."))

        if ledger.total_income() <= 0 and ledger.total_withholdings() > 0:
            issues.append(
                ValidationIssue(
                    "withholdings",
                    "Withholdings were found but no income; confirm the income documents were uploaded.",
                    severity="warning",
                )
            )

        return issues

    @staticmethod
    def has_errors(issues: List[ValidationIssue]) -> bool:
        return any(issue.severity == "error" for issue in issues)
