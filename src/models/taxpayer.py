from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, Field, field_validator


class FilingStatus(str, Enum):
    """IRS filing status options"""
    SINGLE = "single"
    MARRIED_JOINT = "married_joint"
    MARRIED_SEPARATE = "married_separate"
    HEAD_OF_HOUSEHOLD = "head_of_household"
    QUALIFYING_WIDOW = "qualifying_widow"


# Spellings seen from the filing wizard, the OCR layer and older API clients.
_FILING_STATUS_ALIASES = {
    "single": FilingStatus.SINGLE,
    "married_joint": FilingStatus.MARRIED_JOINT,
    "married_jointly": FilingStatus.MARRIED_JOINT,
    "married_filing_jointly": FilingStatus.MARRIED_JOINT,
    "marriedfilingjointly": FilingStatus.MARRIED_JOINT,
    "mfj": FilingStatus.MARRIED_JOINT,
    "married_separate": FilingStatus.MARRIED_SEPARATE,
    "married_separately": FilingStatus.MARRIED_SEPARATE,
    "married_filing_separately": FilingStatus.MARRIED_SEPARATE,
    "marriedfilingseparately": FilingStatus.MARRIED_SEPARATE,
    "mfs": FilingStatus.MARRIED_SEPARATE,
    "head_of_household": FilingStatus.HEAD_OF_HOUSEHOLD,
    "headofhousehold": FilingStatus.HEAD_OF_HOUSEHOLD,
    "hoh": FilingStatus.HEAD_OF_HOUSEHOLD,
    "qualifying_widow": FilingStatus.QUALIFYING_WIDOW,
    "qualifying_widower": FilingStatus.QUALIFYING_WIDOW,
    "qualifyingwidow": FilingStatus.QUALIFYING_WIDOW,
    "qualifying_surviving_spouse": FilingStatus.QUALIFYING_WIDOW,
    "qw": FilingStatus.QUALIFYING_WIDOW,
}


def normalize_filing_status(status: Union[str, FilingStatus, None]) -> FilingStatus:
    """
    Map any accepted spelling of a filing status to FilingStatus.

    Accepts enum members, "married-jointly", "marriedFilingJointly",
    "married_joint", "MFJ" and so on. Unknown or empty values fall back
    to single.
    """
    if isinstance(status, FilingStatus):
        return status
    if not status:
        return FilingStatus.SINGLE

    key = str(status).strip().lower().replace("-", "_").replace(" ", "_")
    return _FILING_STATUS_ALIASES.get(key, FilingStatus.SINGLE)


class PersonalInfo(BaseModel):
    """
    Taxpayer facts the unified calculation needs beyond the document ledger.

    The state engine runs only when ``state`` is set.
    """
    filing_status: FilingStatus = FilingStatus.SINGLE
    state: Optional[str] = Field(default=None, description="State name or two-letter code")
    dependents: int = Field(default=0, ge=0)
    dependents_under_17: int = Field(default=0, ge=0)
    dependents_over_17: int = Field(default=0, ge=0)
    age: int = Field(default=0, ge=0)
    is_blind: bool = False
    spouse_age: int = Field(default=0, ge=0)
    spouse_is_blind: bool = False

    @field_validator("filing_status", mode="before")
    @classmethod
    def _coerce_filing_status(cls, value):
        return normalize_filing_status(value)

    @field_validator("state", mode="before")
    @classmethod
    def _blank_state_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value
