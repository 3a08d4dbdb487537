"""
State calculation results.

``StateTaxEngine.calculate_state_tax`` returns one of three outcome
variants. Each wraps a complete ``StateTaxResult`` so callers that only
want numbers can read ``outcome.result`` without branching.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class StateTaxKind(str, Enum):
    OK = "ok"
    UNSUPPORTED = "unsupported"
    CALCULATION_ERROR = "calculation_error"


@dataclass(frozen=True)
class StateBracketLine:
    bracket: str  # "5.00% on income $10,000 - $39,999"
    taxable_amount: float
    rate: float
    tax: float


@dataclass(frozen=True)
class AppliedCredit:
    name: str
    amount: float


@dataclass(frozen=True)
class StateTaxResult:
    state: str
    state_name: str
    tax_type: str
    state_tax: float
    effective_rate: float  # percent
    marginal_rate: float  # percent
    taxable_income: float
    credits: Tuple[AppliedCredit, ...] = ()
    breakdown: Tuple[StateBracketLine, ...] = ()
    notes: Tuple[str, ...] = ()
    standard_deduction: Optional[float] = None
    personal_exemption: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["credits"] = [asdict(c) for c in self.credits]
        data["breakdown"] = [asdict(b) for b in self.breakdown]
        data["notes"] = list(self.notes)
        return data

    @classmethod
    def empty(cls, state: str, state_name: str, tax_type: str, note: str) -> "StateTaxResult":
        """Zero-tax result carrying a single explanatory note."""
        return cls(
            state=state,
            state_name=state_name,
            tax_type=tax_type,
            state_tax=0.0,
            effective_rate=0.0,
            marginal_rate=0.0,
            taxable_income=0.0,
            notes=(note,),
        )


@dataclass(frozen=True)
class StateTaxOk:
    result: StateTaxResult
    kind: StateTaxKind = StateTaxKind.OK

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, **self.result.to_dict()}


@dataclass(frozen=True)
class StateTaxUnsupported:
    result: StateTaxResult
    kind: StateTaxKind = StateTaxKind.UNSUPPORTED

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, **self.result.to_dict()}


@dataclass(frozen=True)
class StateTaxCalculationError:
    result: StateTaxResult
    error: str = ""
    kind: StateTaxKind = StateTaxKind.CALCULATION_ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "error": self.error, **self.result.to_dict()}


StateTaxOutcome = Union[StateTaxOk, StateTaxUnsupported, StateTaxCalculationError]
