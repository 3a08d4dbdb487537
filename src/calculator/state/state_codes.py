"""State code normalization."""

from typing import Dict

STATE_NAMES: Dict[str, str] = {
    "AL": "Alabama",
    "AK": "Alaska",
    "AZ": "Arizona",
    "AR": "Arkansas",
    "CA": "California",
    "CO": "Colorado",
    "CT": "Connecticut",
    "DE": "Delaware",
    "DC": "District of Columbia",
    "FL": "Florida",
    "GA": "Georgia",
    "HI": "Hawaii",
    "ID": "Idaho",
    "IL": "Illinois",
    "IN": "Indiana",
    "IA": "Iowa",
    "KS": "Kansas",
    "KY": "Kentucky",
    "LA": "Louisiana",
    "ME": "Maine",
    "MD": "Maryland",
    "MA": "Massachusetts",
    "MI": "Michigan",
    "MN": "Minnesota",
    "MS": "Mississippi",
    "MO": "Missouri",
    "MT": "Montana",
    "NE": "Nebraska",
    "NV": "Nevada",
    "NH": "New Hampshire",
    "NJ": "New Jersey",
    "NM": "New Mexico",
    "NY": "New York",
    "NC": "North Carolina",
    "ND": "North Dakota",
    "OH": "Ohio",
    "OK": "Oklahoma",
    "OR": "Oregon",
    "PA": "Pennsylvania",
    "RI": "Rhode Island",
    "SC": "South Carolina",
    "SD": "South Dakota",
    "TN": "Tennessee",
    "TX": "Texas",
    "UT": "Utah",
    "VT": "Vermont",
    "VA": "Virginia",
    "WA": "Washington",
    "WV": "West Virginia",
    "WI": "Wisconsin",
    "WY": "Wyoming",
}

_NAME_TO_CODE: Dict[str, str] = {name.upper(): code for code, name in STATE_NAMES.items()}

# Abbreviations people actually type
_VARIATIONS: Dict[str, str] = {
    "CALIF": "CA",
    "CAL": "CA",
    "CALI": "CA",
    "FLA": "FL",
    "FLOR": "FL",
    "TEX": "TX",
    "NYC": "NY",
    "PENN": "PA",
    "PENNA": "PA",
}


def normalize_state(state_input: str) -> str:
    """
    Normalize user or OCR state input to a two-letter code.

    Full names and common abbreviations map to their code; any other
    two-letter alphabetic input is returned as-is, so an unknown code
    such as ``ZZ`` still reaches the engine and is reported unsupported.

    >>> normalize_state(" california ")
    'CA'
    >>> normalize_state("Penna")
    'PA'
    """
    if not state_input:
        return ""

    value = state_input.strip().upper()

    if value in _NAME_TO_CODE:
        return _NAME_TO_CODE[value]

    if len(value) == 2 and value.isascii() and value.isalpha():
        return value

    return _VARIATIONS.get(value, value)
