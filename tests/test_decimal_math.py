"""
Tests for Decimal Math Utilities.

Tests verify:
1. Decimal precision eliminates floating point errors
2. Money rounding is half-up to the cent
3. Bracket helpers agree with hand-computed tax
4. Formatting matches the labels used in breakdowns
"""

import pytest
from decimal import Decimal, InvalidOperation


class TestDecimalConversion:
    """Tests for value conversion to Decimal."""

    def test_to_decimal_from_int(self):
        from calculator.decimal_math import to_decimal
        result = to_decimal(100)
        assert result == Decimal("100")
        assert isinstance(result, Decimal)

    def test_to_decimal_from_float(self):
        """Floats go through str() so 100.5 stays 100.5."""
        from calculator.decimal_math import to_decimal
        assert to_decimal(100.50) == Decimal("100.5")

    def test_to_decimal_from_string(self):
        from calculator.decimal_math import to_decimal
        assert to_decimal("100.50") == Decimal("100.50")

    def test_to_decimal_from_decimal(self):
        """Test Decimal passes through unchanged."""
        from calculator.decimal_math import to_decimal
        original = Decimal("100.50")
        assert to_decimal(original) is original


class TestMoneyRounding:
    """Tests for money rounding functions."""

    def test_money_rounds_half_up(self):
        from calculator.decimal_math import money
        assert money(100.994) == Decimal("100.99")
        assert money(100.995) == Decimal("101.00")
        assert money(0.125) == Decimal("0.13")

    def test_cents_returns_float(self):
        from calculator.decimal_math import cents
        result = cents(Decimal("1412.955"))
        assert result == 1412.96
        assert isinstance(result, float)

    def test_rate_precision(self):
        from calculator.decimal_math import rate
        assert rate(0.22) == Decimal("0.2200")
        assert rate(0.1234567) == Decimal("0.1235")


class TestArithmetic:
    """Tests for Decimal arithmetic operations."""

    def test_add_multiple_values(self):
        from calculator.decimal_math import add
        assert add(100.10, 200.20, 300.30) == Decimal("600.60")

    def test_add_avoids_float_error(self):
        from calculator.decimal_math import add
        # Classic float: 0.1 + 0.2 = 0.30000000000000004
        assert add(0.1, 0.2) == Decimal("0.3")

    def test_add_nothing_is_zero(self):
        from calculator.decimal_math import add, ZERO
        assert add() == ZERO

    def test_subtract(self):
        from calculator.decimal_math import subtract
        assert subtract(100.50, 25.25) == Decimal("75.25")

    def test_multiply(self):
        from calculator.decimal_math import multiply
        assert multiply(100, 0.22) == Decimal("22.00")

    def test_divide(self):
        from calculator.decimal_math import divide
        assert divide(100, 4) == Decimal("25")

    def test_divide_by_zero_with_default(self):
        from calculator.decimal_math import divide
        assert divide(100, 0, default=0) == Decimal("0")

    def test_divide_by_zero_raises(self):
        from calculator.decimal_math import divide
        with pytest.raises(InvalidOperation):
            divide(100, 0)


class TestMinMax:
    """Tests for min/max helpers."""

    def test_min_decimal(self):
        from calculator.decimal_math import min_decimal
        assert min_decimal(100, 50, 75) == Decimal("50")

    def test_max_decimal(self):
        from calculator.decimal_math import max_decimal
        assert max_decimal(100, 50, 75) == Decimal("100")

    @pytest.mark.parametrize("value,expected", [
        (-50, Decimal("0")),
        (0, Decimal("0")),
        (42.5, Decimal("42.5")),
    ])
    def test_floor_zero(self, value, expected):
        from calculator.decimal_math import floor_zero
        assert floor_zero(value) == expected


class TestTaxBracketCalculations:
    """Tests for tax bracket calculations."""

    BRACKETS = [(0.0, 0.10), (11000.0, 0.12), (44725.0, 0.22)]

    def test_bracket_ceiling_is_next_floor(self):
        from calculator.decimal_math import bracket_ceiling
        assert bracket_ceiling(self.BRACKETS, 0) == 11000.0
        assert bracket_ceiling(self.BRACKETS, 2) is None

    def test_calculate_tax_in_bracket_below(self):
        from calculator.decimal_math import calculate_tax_in_bracket
        assert calculate_tax_in_bracket(40000, 44725, 95375, 0.22) == Decimal("0")

    def test_calculate_tax_in_bracket_partial(self):
        from calculator.decimal_math import calculate_tax_in_bracket
        # (46150 - 44725) * 0.22 = 1425 * 0.22
        assert calculate_tax_in_bracket(46150, 44725, 95375, 0.22) == Decimal("313.50")

    def test_calculate_tax_in_bracket_full(self):
        from calculator.decimal_math import calculate_tax_in_bracket
        # (44725 - 11000) * 0.12 = 33725 * 0.12
        assert calculate_tax_in_bracket(60000, 11000, 44725, 0.12) == Decimal("4047.00")

    def test_open_top_bracket(self):
        from calculator.decimal_math import calculate_tax_in_bracket
        assert calculate_tax_in_bracket(700000, 578100, None, 0.37) == Decimal("45103.00")

    def test_progressive_tax_multiple_brackets(self):
        from calculator.decimal_math import calculate_progressive_tax
        # 1100 + 4047 + 313.50
        assert calculate_progressive_tax(46150, self.BRACKETS) == Decimal("5460.50")

    def test_progressive_tax_at_bracket_boundary(self):
        from calculator.decimal_math import calculate_progressive_tax
        assert calculate_progressive_tax(11000, self.BRACKETS) == Decimal("1100.00")

    def test_progressive_tax_determinism(self):
        from calculator.decimal_math import calculate_progressive_tax
        results = [calculate_progressive_tax(75000, self.BRACKETS) for _ in range(100)]
        assert all(r == results[0] for r in results)


class TestFormatting:
    """Tests for formatting functions."""

    @pytest.mark.parametrize("value,expected", [
        (0, "$0"),
        (262500, "$262,500"),
        (1234567.891, "$1,234,567.89"),
    ])
    def test_format_money(self, value, expected):
        from calculator.decimal_math import format_money
        assert format_money(value) == expected

    def test_format_money_with_cents(self):
        from calculator.decimal_math import format_money
        assert format_money(100, cents_places=True) == "$100.00"
