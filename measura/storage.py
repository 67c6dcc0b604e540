"""Storage types that quantity values can be held in.

Each storage type describes how a numeric value is represented: as a
fixed-width or unbounded integer, as a rational number with a bounded or
unbounded numerator and denominator, or as a single- or double-precision
floating point number.
"""

from __future__ import annotations

import math
import struct
from enum import Enum
from fractions import Fraction

_Bounds = tuple  # (lower, upper); either end may be None for "unbounded"


class StorageType(Enum):
    """Underlying representation of a quantity's value."""

    USIZE = "usize"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    ISIZE = "isize"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"
    BIGINT = "bigint"
    BIGUINT = "biguint"
    RATIONAL = "rational"
    RATIONAL32 = "rational32"
    RATIONAL64 = "rational64"
    BIGRATIONAL = "bigrational"
    F32 = "f32"
    F64 = "f64"

    def coerce(self, value):
        """Convert ``value`` to this storage type's Python representation.

        Integer types truncate toward zero; rational types approximate floats
        within the bounds of their numerator and denominator; ``f32`` rounds to
        single precision. Raises ``OverflowError`` when the value does not fit,
        ``ValueError`` for NaN or infinity in a non-float type and ``TypeError``
        for non-numeric input.
        """
        if isinstance(value, bool) or not isinstance(value, (int, float, Fraction)):
            raise TypeError(f"cannot store {type(value).__name__} as {self.value}")
        family, bounds = _INFO[self]
        if family == "float":
            return _to_float(value, single=self is StorageType.F32)
        if family == "int":
            if isinstance(value, float) and not math.isfinite(value):
                raise ValueError(f"{value!r} cannot be stored as {self.value}")
            result = int(value)
            _check_bounds(result, bounds, self)
            return result
        return self._to_ratio(value)

    def is_float(self):
        """Return True for floating point storage types."""
        return _INFO[self][0] == "float"

    def is_signed(self):
        """Return True for storage types that can hold negative values."""
        return self in _CATEGORIES["signed"]

    def _to_ratio(self, value):
        """Convert ``value`` to the rational type used for this storage's conversions."""
        if isinstance(value, bool) or not isinstance(value, (int, float, Fraction)):
            raise TypeError(f"cannot convert {type(value).__name__} to a ratio")
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError(f"{value!r} cannot be represented as a ratio")
        family, bounds = _INFO[self]
        if family == "float":
            return Fraction(value)
        return _bounded_fraction(Fraction(value), bounds, self)


def _signed(bits):
    return (-(1 << (bits - 1)), (1 << (bits - 1)) - 1)


def _unsigned(bits):
    return (0, (1 << bits) - 1)


_INFO = {
    StorageType.USIZE: ("int", _unsigned(64)),
    StorageType.U8: ("int", _unsigned(8)),
    StorageType.U16: ("int", _unsigned(16)),
    StorageType.U32: ("int", _unsigned(32)),
    StorageType.U64: ("int", _unsigned(64)),
    StorageType.U128: ("int", _unsigned(128)),
    StorageType.ISIZE: ("int", _signed(64)),
    StorageType.I8: ("int", _signed(8)),
    StorageType.I16: ("int", _signed(16)),
    StorageType.I32: ("int", _signed(32)),
    StorageType.I64: ("int", _signed(64)),
    StorageType.I128: ("int", _signed(128)),
    StorageType.BIGINT: ("int", (None, None)),
    StorageType.BIGUINT: ("int", (0, None)),
    StorageType.RATIONAL: ("ratio", _signed(64)),
    StorageType.RATIONAL32: ("ratio", _signed(32)),
    StorageType.RATIONAL64: ("ratio", _signed(64)),
    StorageType.BIGRATIONAL: ("ratio", (None, None)),
    StorageType.F32: ("float", (None, None)),
    StorageType.F64: ("float", (None, None)),
}

_PRIM_INT = (
    StorageType.USIZE,
    StorageType.U8,
    StorageType.U16,
    StorageType.U32,
    StorageType.U64,
    StorageType.U128,
    StorageType.ISIZE,
    StorageType.I8,
    StorageType.I16,
    StorageType.I32,
    StorageType.I64,
    StorageType.I128,
)

_CATEGORIES = {
    "all": tuple(StorageType),
    "primint": _PRIM_INT,
    "ratio": (
        StorageType.RATIONAL,
        StorageType.RATIONAL32,
        StorageType.RATIONAL64,
        StorageType.BIGRATIONAL,
    ),
    "float": (StorageType.F32, StorageType.F64),
    "signed": (
        StorageType.ISIZE,
        StorageType.I8,
        StorageType.I16,
        StorageType.I32,
        StorageType.I64,
        StorageType.I128,
        StorageType.BIGINT,
        StorageType.RATIONAL,
        StorageType.RATIONAL32,
        StorageType.RATIONAL64,
        StorageType.BIGRATIONAL,
        StorageType.F32,
        StorageType.F64,
    ),
    "unsigned": (
        StorageType.USIZE,
        StorageType.U8,
        StorageType.U16,
        StorageType.U32,
        StorageType.U64,
        StorageType.U128,
        StorageType.BIGUINT,
    ),
}


def _check_bounds(number, bounds, storage):
    lower, upper = bounds
    if (lower is not None and number < lower) or (upper is not None and number > upper):
        raise OverflowError(f"{number} does not fit in {storage.value}")


def _bounded_fraction(exact, bounds, storage):
    lower, upper = bounds
    if (lower is not None and exact < lower) or (upper is not None and exact > upper):
        raise OverflowError(f"{exact} does not fit in a ratio of {storage.value}")
    if upper is None or exact.denominator <= upper:
        return exact
    approx = exact.limit_denominator(upper)
    _check_bounds(approx.numerator, bounds, storage)
    return approx


def _to_float(value, single):
    try:
        result = float(value)
    except OverflowError:
        result = math.inf if value > 0 else -math.inf
    if not single or not math.isfinite(result):
        return result
    try:
        return struct.unpack("<f", struct.pack("<f", result))[0]
    except OverflowError:
        return math.copysign(math.inf, result)


def _expand(arg):
    if isinstance(arg, StorageType):
        return (arg,)
    if not isinstance(arg, str):
        raise TypeError(f"storage type must be a name or StorageType, not {type(arg).__name__}")
    key = arg.lower()
    if key in _CATEGORIES:
        return _CATEGORIES[key]
    try:
        return (StorageType(key),)
    except ValueError:
        raise ValueError(f"unknown storage type or category: {arg!r}") from None


def resolve_types(*args):
    """Expand storage type names and categories into a tuple of storage types.

    Categories are ``All``, ``PrimInt``, ``Ratio``, ``Float``, ``Signed`` and
    ``Unsigned``; matching is case-insensitive. With no arguments every
    storage type is returned. Order follows the arguments, without repeats.
    """
    if not args:
        args = ("All",)
    result = []
    for arg in args:
        for storage in _expand(arg):
            if storage not in result:
                result.append(storage)
    return tuple(result)