"""
Scale Table and Exact-Decimal Arithmetic

ARCHITECTURAL OVERVIEW:
=======================
Responsibility: Enumerate the five supported side-length magnitudes and
provide exact decimal arithmetic for every coordinate the generators emit.

Every coordinate is a decimal.Decimal, i.e. an (unscaled integer, exponent)
pair. Binary floats never take part in arithmetic: float inputs are converted
through their shortest repr, and add/multiply run under a context that traps
Inexact so a rounding step can never slip through silently.

Key Functions:
- value_of() / level_of(): Coarseness <-> exact decimal
- parse_decimal(): caller value -> Decimal (InvalidFormat / UnsupportedElement)
- add() / multiply(): exact arithmetic
- scale_of(): fractional digits after stripping insignificant zeros
- compare(): exact ordering independent of representation scale
- format_decimal(): minimal plain text (no trailing zeros, no exponent)

For Navigation: Use VS Code outline (Ctrl+Shift+O)
"""

from decimal import Decimal, Inexact, InvalidOperation, localcontext
from enum import Enum
from functools import total_ordering
from typing import Any

from Fog_Machine.errors import InvalidFormat, InvalidScale, UnsupportedElement

# Wide enough for any sum of degree values at FINE precision.
_EXACT_PRECISION = 64


# ═══════════════════════════════════════════════════════════════════════════
# 📏 COARSENESS LEVELS
# ═══════════════════════════════════════════════════════════════════════════


@total_ordering
class Coarseness(Enum):
    """Supported Tile/Zone side lengths in decimal degrees.

    The member value is the number of fractional digits of the side length,
    so the decimal value is 10^-value. Ordering follows the side length:
    SUPER_DUPER_COARSE > SUPER_COARSE > COARSE > MEDIUM > FINE.
    """

    SUPER_DUPER_COARSE = 0  # Δ1
    SUPER_COARSE = 1  # Δ0.1
    COARSE = 2  # Δ0.01
    MEDIUM = 3  # Δ0.001
    FINE = 4  # Δ0.0001

    @property
    def decimal(self) -> Decimal:
        """Exact side length, e.g. Decimal('0.001') for MEDIUM."""
        return value_of(self)

    @property
    def scale(self) -> int:
        """Number of fractional digits of the side length."""
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "Coarseness":
        """Look up a level by (case-insensitive) name.

        Raises:
            InvalidScale: If no level has that name.
        """
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            valid = ", ".join(member.name for member in cls)
            raise InvalidScale(
                f"Unknown coarseness '{name}'. Expected one of: {valid}"
            ) from None

    def __lt__(self, other: "Coarseness") -> bool:
        if not isinstance(other, Coarseness):
            return NotImplemented
        return self.decimal < other.decimal


# ═══════════════════════════════════════════════════════════════════════════
# 🔁 LEVEL <-> DECIMAL
# ═══════════════════════════════════════════════════════════════════════════


def value_of(level: Coarseness) -> Decimal:
    """Exact decimal side length of a coarseness level."""
    return Decimal((0, (1,), -level.value))


def level_of(value: Any) -> Coarseness:
    """Map an exact decimal back to its coarseness level.

    Args:
        value: Anything parse_decimal() accepts, e.g. "0.01" or Decimal("0.010").

    Returns:
        The Coarseness whose side length equals value.

    Raises:
        InvalidScale: If value is not exactly one of the five magnitudes.
    """
    if isinstance(value, Coarseness):
        return value
    decimal_value = parse_decimal(value, "coarseness")
    for level in Coarseness:
        if level.decimal == decimal_value:
            return level
    raise InvalidScale(
        f"Invalid coarseness value: {value}. "
        f"Supported values are 1, 0.1, 0.01, 0.001 and 0.0001"
    )


# ═══════════════════════════════════════════════════════════════════════════
# 🔢 PARSING AND ARITHMETIC
# ═══════════════════════════════════════════════════════════════════════════


def parse_decimal(value: Any, what: str = "value") -> Decimal:
    """Convert a caller-supplied number to an exact Decimal.

    Args:
        value: str, int, float or Decimal. Floats go through repr(), so 0.1
            becomes Decimal('0.1') rather than its binary expansion.
        what: Name of the field, used in error messages.

    Raises:
        InvalidFormat: If the value is not a finite decimal number.
        UnsupportedElement: If the value has an unsupported type.
    """
    if isinstance(value, bool):
        raise UnsupportedElement(f"Unsupported {what} type: bool ({value})")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidFormat(f"Invalid {what}: '{value}'") from None
    else:
        raise UnsupportedElement(
            f"Unsupported {what} type: {type(value).__name__} ({value!r})"
        )

    if not result.is_finite():
        raise InvalidFormat(f"Invalid {what}: '{value}' is not a finite number")
    return result


def add(a: Decimal, b: Decimal) -> Decimal:
    """Exact sum; the result scale is the larger operand scale.

    Raises:
        InvalidFormat: If the exact sum needs more than 64 significant digits.
    """
    with localcontext() as ctx:
        ctx.prec = _EXACT_PRECISION
        ctx.traps[Inexact] = True
        try:
            return a + b
        except (Inexact, InvalidOperation):
            raise InvalidFormat(f"{a} + {b} cannot be computed exactly") from None


def multiply(a: Decimal, b: Any) -> Decimal:
    """Exact product of a decimal and an integer or decimal factor."""
    with localcontext() as ctx:
        ctx.prec = _EXACT_PRECISION
        ctx.traps[Inexact] = True
        try:
            return a * Decimal(b)
        except (Inexact, InvalidOperation):
            raise InvalidFormat(f"{a} * {b} cannot be computed exactly") from None


def _strip_zeros(x: Decimal) -> Decimal:
    """Drop trailing zero digits from the coefficient without rounding.

    Decimal.normalize() rounds to the context precision; this never does.
    """
    sign, digits, exponent = x.as_tuple()
    end = len(digits)
    while end > 1 and digits[end - 1] == 0:
        end -= 1
    return Decimal((sign, digits[:end], exponent + len(digits) - end))


def scale_of(x: Decimal) -> int:
    """Count of fractional digits after stripping insignificant zeros.

    Examples:
        scale_of(Decimal("0.0100")) == 2
        scale_of(Decimal("120")) == 0
    """
    if x == 0:
        return 0
    return max(0, -_strip_zeros(x).as_tuple().exponent)


def compare(a: Decimal, b: Decimal) -> int:
    """Exact three-way comparison: -1, 0 or 1."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def rescale(x: Decimal, scale: int) -> Decimal:
    """Express x with exactly `scale` fractional digits.

    Raises:
        InvalidFormat: If x carries more significant fractional digits than
            `scale` (the conversion would round).
    """
    with localcontext() as ctx:
        ctx.prec = _EXACT_PRECISION
        ctx.traps[Inexact] = True
        try:
            return x.quantize(Decimal((0, (1,), -scale)))
        except (Inexact, InvalidOperation):
            raise InvalidFormat(
                f"{x} cannot be expressed with {scale} fractional digits"
            ) from None


def format_decimal(x: Decimal) -> str:
    """Minimal plain-text literal: no trailing zeros, no exponent, no '-0'."""
    if x == 0:
        return "0"
    return format(_strip_zeros(x), "f")


__all__ = [
    "Coarseness",
    "value_of",
    "level_of",
    "parse_decimal",
    "add",
    "multiply",
    "scale_of",
    "compare",
    "rescale",
    "format_decimal",
]
