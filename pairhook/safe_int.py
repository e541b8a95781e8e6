"""Checked integer wrapper for ledger amounts.

SafeInt makes arithmetic on token amounts fail loudly instead of silently
producing values the ledger cannot represent:
- Division by zero raises DivisionByZero
- Subtraction below zero raises Underflow
- Range checks for uint256/uint128/int128 run when a value leaves the wrapper

Usage pattern:
    from pairhook.safe_int import S

    def amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
        numerator = S(reserve_out) * S(amount_in)
        denominator = S(amount_in) * 2 + S(reserve_in)
        return (numerator // denominator).value
"""

from __future__ import annotations

UINT256_MAX = 2**256 - 1
UINT128_MAX = 2**128 - 1
INT128_MAX = 2**127 - 1
INT128_MIN = -(2**127)


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division or modulo by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce a negative result."""

    pass


class Uint256Overflow(SafeIntError):
    """Value is negative or exceeds 2^256-1."""

    pass


class Uint128Overflow(SafeIntError):
    """Value is negative or exceeds 2^128-1."""

    pass


class Int128Overflow(SafeIntError):
    """Value falls outside the signed 128-bit delta range."""

    pass


class SafeInt:
    """Integer with checked arithmetic.

    Subtraction is unsigned (raises on a negative result); use
    ``signed_sub`` when a signed delta is the intended result.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    def __radd__(self, other: int) -> SafeInt:
        return SafeInt(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If the result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __rsub__(self, other: int) -> SafeInt:
        result = other - self._value
        if result < 0:
            raise Underflow(f"Underflow: {other} - {self._value} = {result}")
        return SafeInt(result)

    def signed_sub(self, other: SafeInt | int) -> SafeInt:
        """Subtract allowing a negative result (for signed deltas)."""
        return SafeInt(self._value - _extract_value(other))

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __rmul__(self, other: int) -> SafeInt:
        return SafeInt(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Floor division.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Division rounding toward positive infinity.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Ceiling division by zero: {self._value}")
        return SafeInt(-(-self._value // other_val))

    def __neg__(self) -> SafeInt:
        return SafeInt(-self._value)

    def __abs__(self) -> SafeInt:
        return SafeInt(abs(self._value))

    def min(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(min(self._value, _extract_value(other)))

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    # --- Range checks on exit ---

    def to_uint256(self) -> int:
        """Return the value, validating uint256 bounds.

        Raises:
            Uint256Overflow: If value is negative or exceeds 2^256-1
        """
        if not 0 <= self._value <= UINT256_MAX:
            raise Uint256Overflow(f"Value out of uint256 range: {self._value}")
        return self._value

    def to_uint128(self) -> int:
        """Return the value, validating uint128 bounds.

        Raises:
            Uint128Overflow: If value is negative or exceeds 2^128-1
        """
        if not 0 <= self._value <= UINT128_MAX:
            raise Uint128Overflow(f"Value out of uint128 range: {self._value}")
        return self._value

    def to_int128(self) -> int:
        """Return the value, validating the signed delta range.

        Raises:
            Int128Overflow: If value falls outside [-2^127, 2^127-1]
        """
        if not INT128_MIN <= self._value <= INT128_MAX:
            raise Int128Overflow(f"Value out of int128 range: {self._value}")
        return self._value


def _extract_value(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
