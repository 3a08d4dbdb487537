"""Tests for state code normalization."""

import pytest

from calculator.state.state_codes import STATE_NAMES, normalize_state


class TestNormalizeState:
    @pytest.mark.parametrize("raw,expected", [
        ("CA", "CA"),
        ("ca", "CA"),
        ("  tx ", "TX"),
        ("California", "CA"),
        ("new york", "NY"),
        ("District of Columbia", "DC"),
        ("Calif", "CA"),
        ("FLA", "FL"),
        ("Tex", "TX"),
        ("NYC", "NY"),
        ("Penna", "PA"),
    ])
    def test_known_inputs(self, raw, expected):
        assert normalize_state(raw) == expected

    def test_unknown_two_letter_code_passes_through(self):
        assert normalize_state("zz") == "ZZ"

    def test_unknown_text_is_upper_cased(self):
        assert normalize_state("Atlantis") == "ATLANTIS"

    @pytest.mark.parametrize("raw", ["", None])
    def test_empty(self, raw):
        assert normalize_state(raw) == ""

    def test_every_name_round_trips(self):
        for code, name in STATE_NAMES.items():
            assert normalize_state(name) == code
            assert normalize_state(code.lower()) == code
