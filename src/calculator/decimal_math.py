"""
Decimal Math Utilities for Tax Calculations.

Provides precise decimal arithmetic to avoid floating point errors
in tax calculations. Phase outputs of the engines are rounded with
money() at every phase boundary, never deferred to the end.

Why Decimal?
- Float: 0.1 + 0.2 = 0.30000000000000004
- Decimal: 0.1 + 0.2 = 0.3

This matters for:
- Bracket floors that must compare exactly ($44,725 vs $44,725.00001)
- Rounding to pennies (IRS requires exact cent amounts)
- Audit trails where a $0.01 discrepancy flags a document
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union, Optional, List, Tuple
import logging

logger = logging.getLogger(__name__)

# Type alias for values that can be converted to Decimal
Numeric = Union[int, float, str, Decimal]

# (floor, rate) pairs in ascending floor order; a bracket runs to the next floor
BracketList = List[Tuple[float, float]]

MONEY_PLACES = Decimal("0.01")  # Round to pennies
RATE_PLACES = Decimal("0.0001")  # 4 decimal places for rates

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Numeric) -> Decimal:
    """
    Convert a numeric value to Decimal.

    Args:
        value: Value to convert (int, float, str, or Decimal)

    Returns:
        Decimal representation

    Examples:
        >>> to_decimal(100.50)
        Decimal('100.5')
        >>> to_decimal("100.50")
        Decimal('100.50')
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # Convert float to string first to preserve representation
        return Decimal(str(value))
    return Decimal(value)


def money(value: Numeric) -> Decimal:
    """
    Convert value to money (rounded half-up to pennies).

    Examples:
        >>> money(100.999)
        Decimal('101.00')
        >>> money(0.125)
        Decimal('0.13')
    """
    return to_decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def cents(value: Numeric) -> float:
    """Round to pennies and hand back a float for result objects."""
    return float(money(value))


def rate(value: Numeric) -> Decimal:
    """
    Convert value to a rate (4 decimal places).

    Examples:
        >>> rate(0.22)
        Decimal('0.2200')
    """
    return to_decimal(value).quantize(RATE_PLACES, rounding=ROUND_HALF_UP)


def add(*values: Numeric) -> Decimal:
    """
    Add multiple values with Decimal precision.

    Examples:
        >>> add(100.10, 200.20, 300.30)
        Decimal('600.60')
    """
    result = ZERO
    for v in values:
        result += to_decimal(v)
    return result


def subtract(a: Numeric, b: Numeric) -> Decimal:
    """Subtract b from a with Decimal precision."""
    return to_decimal(a) - to_decimal(b)


def multiply(a: Numeric, b: Numeric) -> Decimal:
    """Multiply two values with Decimal precision."""
    return to_decimal(a) * to_decimal(b)


def divide(a: Numeric, b: Numeric, default: Optional[Numeric] = None) -> Decimal:
    """
    Divide a by b with Decimal precision.

    Args:
        a: Dividend
        b: Divisor
        default: Value to return if division by zero (None raises error)

    Raises:
        InvalidOperation: If b is zero and no default provided
    """
    b_dec = to_decimal(b)
    if b_dec == 0:
        if default is not None:
            return to_decimal(default)
        raise InvalidOperation("Division by zero")
    return to_decimal(a) / b_dec


def min_decimal(*values: Numeric) -> Decimal:
    """Find minimum of values with Decimal precision."""
    return min(to_decimal(v) for v in values)


def max_decimal(*values: Numeric) -> Decimal:
    """Find maximum of values with Decimal precision."""
    return max(to_decimal(v) for v in values)


def floor_zero(value: Numeric) -> Decimal:
    """max(0, value) as Decimal."""
    return max_decimal(0, value)


def bracket_ceiling(brackets: BracketList, index: int) -> Optional[float]:
    """Upper bound of bracket ``index`` (the next floor), or None for the top bracket."""
    if index + 1 < len(brackets):
        return brackets[index + 1][0]
    return None


def calculate_tax_in_bracket(
    income: Numeric,
    bracket_start: Numeric,
    bracket_end: Optional[Numeric],
    rate_value: Numeric
) -> Decimal:
    """
    Unrounded tax for the slice of income inside one bracket.

    Args:
        income: Total taxable income
        bracket_start: Floor of the bracket
        bracket_end: Ceiling of the bracket (None for the open top bracket)
        rate_value: Tax rate for this bracket (e.g., 0.22 for 22%)

    Examples:
        >>> calculate_tax_in_bracket(46150, 44725, 95375, 0.22)
        Decimal('313.50')
    """
    income_d = to_decimal(income)
    start_d = to_decimal(bracket_start)

    if income_d <= start_d:
        return ZERO

    top = income_d if bracket_end is None else min_decimal(income_d, bracket_end)
    taxable_in_bracket = top - start_d
    if taxable_in_bracket <= 0:
        return ZERO

    return multiply(taxable_in_bracket, rate_value)


def calculate_progressive_tax(income: Numeric, brackets: BracketList) -> Decimal:
    """
    Calculate tax using progressive (floor, rate) brackets.

    Each bracket applies from its floor up to the next bracket's floor.

    Examples:
        >>> brackets = [(0, 0.10), (11000, 0.12), (44725, 0.22)]
        >>> calculate_progressive_tax(46150, brackets)
        Decimal('5460.50')
    """
    total_tax = ZERO
    for index, (floor, rate_value) in enumerate(brackets):
        total_tax += calculate_tax_in_bracket(
            income, floor, bracket_ceiling(brackets, index), rate_value
        )
    return money(total_tax)


def format_money(value: Numeric, cents_places: bool = False) -> str:
    """
    Format value as a dollar string with thousands separators.

    Whole-dollar output matches the labels used in bracket descriptions.

    Examples:
        >>> format_money(262500)
        '$262,500'
        >>> format_money(1234567.891, cents_places=True)
        '$1,234,567.89'
    """
    m = money(value)
    if cents_places:
        return f"${m:,.2f}"
    if m == m.to_integral_value():
        return f"${int(m):,}"
    return f"${m:,.2f}"
