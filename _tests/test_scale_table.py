"""
Unit tests for the scale table and exact-decimal helpers.

Tests:
1. Coarseness levels map to exact powers of ten and back
2. Ordering follows side length
3. Parsing rejects non-numbers, non-finite values and unsupported types
4. Arithmetic and formatting never drift or print trailing zeros
5. ExactCoordinate equality ignores representation scale

Run with: python -m pytest Fog_Machine/_tests/test_scale_table.py -v
"""

from decimal import Decimal

import pytest

from Fog_Machine.errors import InvalidFormat, InvalidScale, UnsupportedElement
from Fog_Machine.models.data_models import ExactCoordinate
from Fog_Machine.scale_table import (
    Coarseness,
    add,
    compare,
    format_decimal,
    level_of,
    multiply,
    parse_decimal,
    rescale,
    scale_of,
    value_of,
)


# ═══════════════════════════════════════════════════════════════════════════
# COARSENESS LEVELS
# ═══════════════════════════════════════════════════════════════════════════


class TestCoarsenessLevels:
    """Level <-> decimal conversion."""

    @pytest.mark.parametrize(
        "level, expected",
        [
            (Coarseness.SUPER_DUPER_COARSE, "1"),
            (Coarseness.SUPER_COARSE, "0.1"),
            (Coarseness.COARSE, "0.01"),
            (Coarseness.MEDIUM, "0.001"),
            (Coarseness.FINE, "0.0001"),
        ],
    )
    def test_value_of(self, level, expected):
        assert value_of(level) == Decimal(expected)
        assert str(level.decimal) == expected

    def test_level_of_ignores_trailing_zeros(self):
        assert level_of("0.010") is Coarseness.COARSE
        assert level_of(Decimal("1.000")) is Coarseness.SUPER_DUPER_COARSE
        assert level_of(0.001) is Coarseness.MEDIUM

    @pytest.mark.parametrize("value", ["0.5", "10", "0.00001", "0"])
    def test_level_of_rejects_unsupported_magnitudes(self, value):
        with pytest.raises(InvalidScale):
            level_of(value)

    def test_total_order(self):
        assert (
            Coarseness.SUPER_DUPER_COARSE
            > Coarseness.SUPER_COARSE
            > Coarseness.COARSE
            > Coarseness.MEDIUM
            > Coarseness.FINE
        )
        assert max(Coarseness) is Coarseness.SUPER_DUPER_COARSE

    def test_scale_matches_fractional_digits(self):
        for level in Coarseness:
            assert level.scale == scale_of(level.decimal)

    def test_from_name_is_case_insensitive(self):
        assert Coarseness.from_name("fine") is Coarseness.FINE
        assert Coarseness.from_name(" Super_Coarse ") is Coarseness.SUPER_COARSE

    def test_from_name_unknown(self):
        with pytest.raises(InvalidScale, match="Unknown coarseness"):
            Coarseness.from_name("ultra")


# ═══════════════════════════════════════════════════════════════════════════
# PARSING
# ═══════════════════════════════════════════════════════════════════════════


class TestParseDecimal:
    """Caller values -> Decimal."""

    def test_float_uses_shortest_repr(self):
        assert parse_decimal(0.1) == Decimal("0.1")
        assert parse_decimal(0.1).as_tuple() == Decimal("0.1").as_tuple()

    def test_string_is_stripped(self):
        assert parse_decimal("  -12.5 ") == Decimal("-12.5")

    def test_exponent_notation(self):
        assert parse_decimal("1E-3") == Decimal("0.001")

    @pytest.mark.parametrize("value", ["abc", "", "1,5", "NaN", "Infinity", float("inf")])
    def test_invalid_values(self, value):
        with pytest.raises(InvalidFormat):
            parse_decimal(value)

    @pytest.mark.parametrize("value", [True, None, [1], object()])
    def test_unsupported_types(self, value):
        with pytest.raises(UnsupportedElement):
            parse_decimal(value)


# ═══════════════════════════════════════════════════════════════════════════
# ARITHMETIC AND FORMATTING
# ═══════════════════════════════════════════════════════════════════════════


class TestExactArithmetic:
    """add / multiply / compare / scale_of / rescale."""

    def test_add_is_exact(self):
        assert add(Decimal("0.1"), Decimal("0.2")) == Decimal("0.3")

    def test_add_keeps_larger_scale(self):
        assert add(Decimal("1.5"), Decimal("0.0001")).as_tuple().exponent == -4

    def test_repeated_addition_does_not_drift(self):
        total = Decimal(0)
        for _ in range(10000):
            total = add(total, Decimal("0.0001"))
        assert total == Decimal(1)

    def test_multiply(self):
        assert multiply(Decimal("0.001"), 37) == Decimal("0.037")

    def test_compare_ignores_scale(self):
        assert compare(Decimal("0.10"), Decimal("0.1")) == 0
        assert compare(Decimal("-1"), Decimal("0.0001")) == -1
        assert compare(Decimal("2"), Decimal("1.9999")) == 1

    @pytest.mark.parametrize(
        "value, expected",
        [("0.0100", 2), ("120", 0), ("0", 0), ("0.000", 0), ("-179.9", 1), ("1E-4", 4)],
    )
    def test_scale_of(self, value, expected):
        assert scale_of(Decimal(value)) == expected

    def test_rescale(self):
        assert str(rescale(Decimal("0.5"), 3)) == "0.500"

    def test_rescale_refuses_to_round(self):
        with pytest.raises(InvalidFormat):
            rescale(Decimal("0.0005"), 3)

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("0.0100", "0.01"),
            ("1E+2", "100"),
            ("100.000", "100"),
            ("-0.000", "0"),
            ("-179.9", "-179.9"),
            ("0.0001", "0.0001"),
        ],
    )
    def test_format_decimal(self, value, expected):
        assert format_decimal(Decimal(value)) == expected

    def test_long_values_are_never_rounded(self):
        """More significant digits than the default 28-digit context."""
        long_fraction = Decimal("0.10000000000000000000000000001")
        assert scale_of(long_fraction) == 29
        assert format_decimal(long_fraction) == "0.10000000000000000000000000001"

        long_integer = Decimal("12345678901234567890123456789.000")
        assert scale_of(long_integer) == 0
        assert format_decimal(long_integer) == "12345678901234567890123456789"
        assert format_decimal(add(long_integer, Decimal(1))) == "12345678901234567890123456790"

    def test_arithmetic_beyond_exact_precision(self):
        with pytest.raises(InvalidFormat):
            add(Decimal("1E+70"), Decimal("1"))


# ═══════════════════════════════════════════════════════════════════════════
# EXACT COORDINATE
# ═══════════════════════════════════════════════════════════════════════════


class TestExactCoordinate:
    """Equality, hashing and scale of coordinate pairs."""

    def test_equal_across_scales(self):
        a = ExactCoordinate(Decimal("0.10"), Decimal("5"))
        b = ExactCoordinate(Decimal("0.1"), Decimal("5.000"))
        assert a == b
        assert len({a, b}) == 1

    def test_scale_is_max_of_axes(self):
        coordinate = ExactCoordinate.parse("1.25", "3.0")
        assert coordinate.longitude_scale == 2
        assert coordinate.latitude_scale == 0
        assert coordinate.scale == 2

    def test_offset_and_text(self):
        coordinate = ExactCoordinate.parse("-0.001", "0.009").offset(
            Decimal("0.001"), Decimal("0.001")
        )
        assert coordinate.as_text() == ("0", "0.01")
        assert str(coordinate) == "(0, 0.01)"
