"""State tax configuration dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from models.taxpayer import FilingStatus


# Type alias for bracket tables: filing_status -> [(floor, rate), ...]
StateBracketTable = Dict[str, List[Tuple[float, float]]]


class StateConfigError(ValueError):
    """A state table entry is malformed."""


class StateTaxType(str, Enum):
    NO_TAX = "NO_TAX"
    FLAT = "FLAT"
    PROGRESSIVE = "PROGRESSIVE"
    SPECIAL = "SPECIAL"


class SpecialTaxType(str, Enum):
    CAPITAL_GAINS = "CAPITAL_GAINS"
    DIVIDENDS_INTEREST = "DIVIDENDS_INTEREST"


class CreditCondition(str, Enum):
    DEPENDENT = "dependent"
    DEPENDENT_UNDER_17 = "dependent_under_17"
    DEPENDENT_OVER_17 = "dependent_over_17"


@dataclass(frozen=True)
class PhaseOut:
    """Linear reduction of ``rate`` per dollar of income above ``start_income``."""
    start_income: float
    rate: float

    def reduction(self, income: float) -> float:
        if income <= self.start_income:
            return 0.0
        return (income - self.start_income) * self.rate


@dataclass(frozen=True)
class PersonalExemption:
    taxpayer: float = 0.0
    spouse: float = 0.0
    dependent: float = 0.0
    phase_out: Optional[PhaseOut] = None


@dataclass(frozen=True)
class StateCredit:
    """
    A flat state credit.

    With a ``condition`` the amount is multiplied by the matching dependent
    count; otherwise it applies once when ``filing_status`` is unset or
    equal to the taxpayer's status.
    """
    name: str
    amount: float
    condition: Optional[CreditCondition] = None
    filing_status: Optional[FilingStatus] = None
    phase_out: Optional[PhaseOut] = None


@dataclass(frozen=True)
class StateTaxConfig:
    """
    Configuration for a specific state and tax year.

    Bracket and standard deduction tables are keyed by ``FilingStatus.value``;
    a status missing from a table falls back to single. A scalar standard
    deduction applies to every status.
    """

    # Basic identification
    state_code: str
    state_name: str
    tax_year: int
    tax_type: StateTaxType

    # FLAT / PROGRESSIVE
    brackets: Optional[StateBracketTable] = None
    standard_deduction: Optional[Union[float, Dict[str, float]]] = None
    personal_exemption: Optional[PersonalExemption] = None
    credits: Tuple[StateCredit, ...] = ()
    uses_federal_agi: bool = False
    allows_itemization: bool = False
    additional_deduction_65_plus: float = 0.0
    additional_deduction_blind: float = 0.0

    # SPECIAL
    special_tax_type: Optional[SpecialTaxType] = None
    rate: float = 0.0
    exemption: float = 0.0

    notes: Tuple[str, ...] = ()

    @property
    def is_flat_tax(self) -> bool:
        return self.tax_type == StateTaxType.FLAT

    def get_brackets(self, filing_status: FilingStatus) -> List[Tuple[float, float]]:
        """Get tax brackets for a filing status."""
        if not self.brackets:
            return []
        return self.brackets.get(filing_status.value, self.brackets.get(FilingStatus.SINGLE.value, []))

    def get_standard_deduction(self, filing_status: FilingStatus) -> float:
        """Base standard deduction for a filing status, before age/blind additions."""
        if not self.standard_deduction:
            return 0.0
        if isinstance(self.standard_deduction, (int, float)):
            return float(self.standard_deduction)
        amount = self.standard_deduction.get(filing_status.value)
        if amount:
            return amount
        return self.standard_deduction.get(FilingStatus.SINGLE.value, 0.0)

    def validate(self) -> "StateTaxConfig":
        """
        Check the entry is internally consistent.

        Raises:
            StateConfigError: On a missing or malformed field
        """
        code = self.state_code
        if len(code) != 2 or not code.isupper():
            raise StateConfigError(f"invalid state code {code!r}")

        if self.tax_type in (StateTaxType.FLAT, StateTaxType.PROGRESSIVE):
            if not self.brackets or FilingStatus.SINGLE.value not in self.brackets:
                raise StateConfigError(f"{code}: {self.tax_type.value} state needs single brackets")
            for status, table in self.brackets.items():
                if not table:
                    raise StateConfigError(f"{code}: empty bracket table for {status}")
                floors = [floor for floor, _ in table]
                if floors != sorted(floors) or len(set(floors)) != len(floors):
                    raise StateConfigError(f"{code}: bracket floors for {status} must strictly ascend")
                if any(rate < 0 or rate >= 1 for _, rate in table):
                    raise StateConfigError(f"{code}: bracket rate out of range for {status}")
            if self.is_flat_tax and any(len(table) != 1 for table in self.brackets.values()):
                raise StateConfigError(f"{code}: flat-tax state must have exactly one bracket per status")

        if self.tax_type == StateTaxType.SPECIAL:
            if self.special_tax_type is None:
                raise StateConfigError(f"{code}: special state needs special_tax_type")
            if not 0 < self.rate < 1:
                raise StateConfigError(f"{code}: special rate out of range")

        if self.tax_type == StateTaxType.NO_TAX and self.brackets:
            raise StateConfigError(f"{code}: no-tax state must not define brackets")

        return self
