"""Quantities: values of a given dimension held in a set of base units."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction

from measura.storage import StorageType, resolve_types
from measura.system import BaseUnits, Dimension, change_base, from_base, to_base
from measura.unit import Unit

_RATIO_TYPES = frozenset(resolve_types("Ratio"))


class FpCategory(Enum):
    """Floating point classification of a quantity's value."""

    NAN = "nan"
    INFINITE = "infinite"
    ZERO = "zero"
    SUBNORMAL = "subnormal"
    NORMAL = "normal"


def _family(storage):
    if storage.is_float():
        return "float"
    if storage in _RATIO_TYPES:
        return "ratio"
    return "int"


def _int_bounds(storage):
    if storage is StorageType.BIGINT:
        return None, None
    if storage is StorageType.BIGUINT:
        return 0, None
    name = storage.value
    bits = 64 if name.endswith("size") else int(name[1:])
    if name.startswith("u"):
        return 0, (1 << bits) - 1
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


def _div(storage, a, b):
    family = _family(storage)
    if family == "float":
        if b == 0:
            if a == 0 or math.isnan(a) or math.isnan(b):
                return math.nan
            return math.copysign(math.inf, a) * math.copysign(1.0, b)
        return a / b
    if family == "int":
        if b == 0:
            raise ZeroDivisionError("attempt to divide by zero")
        quotient = abs(a) // abs(b)
        return -quotient if (a < 0) != (b < 0) else quotient
    return Fraction(a) / Fraction(b)


def _rem(storage, a, b):
    family = _family(storage)
    if family == "float":
        if b == 0 or math.isinf(a) or math.isnan(a) or math.isnan(b):
            return math.nan
        return math.fmod(a, b)
    if family == "int":
        return a - b * _div(storage, a, b)
    if b == 0:
        raise ZeroDivisionError("attempt to calculate the remainder with a divisor of zero")
    a, b = Fraction(a), Fraction(b)
    return a - b * math.trunc(a / b)


def _round_half_away(x):
    truncated = math.trunc(x)
    if abs(x - truncated) >= 0.5:
        truncated += 1 if x > 0 else -1
    return float(truncated)


@dataclass(frozen=True)
class QuantityKind:
    """A named quantity (such as length) with its dimension and units."""

    name: str
    description: str
    dimension: Dimension
    all_units: tuple
    base_units: BaseUnits | None = None

    def __post_init__(self):
        object.__setattr__(self, "all_units", tuple(self.all_units))
        if not isinstance(self.dimension, Dimension):
            raise TypeError("a quantity kind needs a Dimension")
        for unit in self.all_units:
            if not isinstance(unit, Unit):
                raise TypeError(f"units must be Unit, not {type(unit).__name__}")

    @property
    def base(self):
        """Base units that values of this kind are held in."""
        if self.base_units is not None:
            return self.base_units
        return self.dimension.system.default_units()

    def new(self, unit, value):
        """Create a quantity of ``value`` given in ``unit``."""
        if unit not in self.all_units:
            raise TypeError(f"{getattr(unit, 'name', unit)!r} is not a unit of {self.name}")
        base = self.base
        return Quantity(self.dimension, base, to_base(self.dimension, base, unit, value), self)

    def units(self):
        """Iterate over the units of this kind, in definition order."""
        return iter(self.all_units)

    def zero(self):
        """Return the zero quantity of this kind."""
        return Quantity(self.dimension, self.base, 0, self)


@dataclass(frozen=True, eq=False)
class Quantity:
    """A value of some dimension, stored in a set of base units."""

    dimension: Dimension
    base_units: BaseUnits
    value: object
    kind: QuantityKind | None = field(default=None)

    def __post_init__(self):
        if not isinstance(self.dimension, Dimension):
            raise TypeError("a quantity needs a Dimension")
        if not isinstance(self.base_units, BaseUnits):
            raise TypeError("a quantity needs BaseUnits")
        object.__setattr__(self, "value", self.storage.coerce(self.value))

    @property
    def storage(self):
        """Storage type of the value."""
        return self.base_units.storage

    def _with(self, value, dimension=None, kind=None):
        if dimension is None:
            return Quantity(self.dimension, self.base_units, value, self.kind)
        return Quantity(dimension, self.base_units, value, kind)

    def _require_float(self, operation):
        if not self.storage.is_float():
            raise TypeError(f"{operation} requires a floating point storage type")

    def _converted(self, other):
        """Value of ``other``, a quantity of the same dimension, in this one's base units."""
        if not isinstance(other, Quantity):
            raise TypeError(f"expected a Quantity, not {type(other).__name__}")
        if other.dimension != self.dimension:
            raise TypeError(f"dimensions differ: {self.dimension} and {other.dimension}")
        return change_base(self.dimension, self.base_units, other.base_units, other.value)

    def _check_unit(self, unit):
        if self.kind is not None and unit not in self.kind.all_units:
            raise TypeError(f"{getattr(unit, 'name', unit)!r} is not a unit of {self.kind.name}")

    def get(self, unit):
        """Return the value expressed in ``unit``."""
        self._check_unit(unit)
        return from_base(self.dimension, self.base_units, unit, self.value)

    def _rounded(self, unit, function, operation):
        self._require_float(operation)
        value = self.get(unit)
        if math.isfinite(value):
            value = function(value)
        return self._with(to_base(self.dimension, self.base_units, unit, value))

    def floor(self, unit):
        """Round down to a whole number of ``unit``."""
        return self._rounded(unit, lambda v: float(math.floor(v)), "floor")

    def ceil(self, unit):
        """Round up to a whole number of ``unit``."""
        return self._rounded(unit, lambda v: float(math.ceil(v)), "ceil")

    def round(self, unit):
        """Round to the nearest whole number of ``unit``, halves away from zero."""
        return self._rounded(unit, _round_half_away, "round")

    def trunc(self, unit):
        """Drop the fractional part of the value in ``unit``."""
        return self._rounded(unit, lambda v: float(math.trunc(v)), "trunc")

    def fract(self, unit):
        """Keep only the fractional part of the value in ``unit``."""
        self._require_float("fract")
        value = self.get(unit)
        value = value - math.trunc(value) if math.isfinite(value) else math.nan
        return self._with(to_base(self.dimension, self.base_units, unit, value))

    def is_nan(self):
        """Return True if the value is NaN."""
        self._require_float("is_nan")
        return math.isnan(self.value)

    def is_infinite(self):
        """Return True if the value is positive or negative infinity."""
        self._require_float("is_infinite")
        return math.isinf(self.value)

    def is_finite(self):
        """Return True if the value is neither infinite nor NaN."""
        self._require_float("is_finite")
        return math.isfinite(self.value)

    def is_normal(self):
        """Return True if the value is not zero, infinite, subnormal or NaN."""
        return self.classify() is FpCategory.NORMAL

    def classify(self):
        """Return the floating point category of the value."""
        self._require_float("classify")
        v = self.value
        if math.isnan(v):
            return FpCategory.NAN
        if math.isinf(v):
            return FpCategory.INFINITE
        if v == 0:
            return FpCategory.ZERO
        smallest = 2.0**-126 if self.storage is StorageType.F32 else 2.0**-1022
        return FpCategory.SUBNORMAL if abs(v) < smallest else FpCategory.NORMAL

    def is_sign_positive(self):
        """Return True if the sign bit is clear, including +0.0 and infinity."""
        self._require_float("is_sign_positive")
        return math.copysign(1.0, self.value) > 0

    def is_sign_negative(self):
        """Return True if the sign bit is set, including -0.0 and -infinity."""
        self._require_float("is_sign_negative")
        return math.copysign(1.0, self.value) < 0

    def is_zero(self):
        """Return True if the value is zero."""
        return self.value == 0

    def abs(self):
        """Return the absolute value."""
        if not self.storage.is_signed():
            raise TypeError("abs requires a signed storage type")
        return self._with(abs(self.value))

    def signum(self):
        """Return one base unit carrying the sign of the value."""
        if not self.storage.is_signed():
            raise TypeError("signum requires a signed storage type")
        v = self.value
        if self.storage.is_float():
            return self._with(v if math.isnan(v) else math.copysign(1.0, v))
        return self._with((v > 0) - (v < 0))

    def cbrt(self):
        """Cube root; every dimension exponent must be divisible by three."""
        self._require_float("cbrt")
        dimension = self.dimension.root(3)
        v = self.value
        value = v if not math.isfinite(v) or v == 0 else math.copysign(abs(v) ** (1 / 3), v)
        return self._with(value, dimension)

    def sqrt(self):
        """Square root; NaN for negative values. Exponents must be even."""
        self._require_float("sqrt")
        dimension = self.dimension.root(2)
        v = self.value
        return self._with(math.nan if v < 0 else math.sqrt(v), dimension)

    def powi(self, exponent):
        """Raise to an integer power."""
        self._require_float("powi")
        dimension = self.dimension**exponent
        if not isinstance(dimension, Dimension):
            raise TypeError(f"exponent must be an integer, not {type(exponent).__name__}")
        v = self.value
        try:
            value = v**exponent
        except ZeroDivisionError:
            value = math.copysign(math.inf, v) if exponent % 2 else math.inf
        except OverflowError:
            value = math.inf if v > 0 or exponent % 2 == 0 else -math.inf
        return self._with(value, dimension)

    def recip(self):
        """Return the reciprocal, 1/x."""
        self._require_float("recip")
        return self._with(_div(self.storage, 1.0, self.value), self.dimension.recip())

    def hypot(self, other):
        """Length of the hypotenuse given two legs of the same dimension."""
        self._require_float("hypot")
        return self._with(math.hypot(self.value, self._converted(other)))

    def mul_add(self, a, b):
        """Compute ``self * a + b``."""
        self._require_float("mul_add")
        product = self * a
        return product._with(product.value + product._converted(b))

    def max(self, other):
        """Return the larger quantity, ignoring NaN."""
        self._require_float("max")
        v, w = self.value, self._converted(other)
        if math.isnan(v):
            return self._with(w)
        if math.isnan(w):
            return self._with(v)
        return self._with(max(v, w))

    def min(self, other):
        """Return the smaller quantity, ignoring NaN."""
        self._require_float("min")
        v, w = self.value, self._converted(other)
        if math.isnan(v):
            return self._with(w)
        if math.isnan(w):
            return self._with(v)
        return self._with(min(v, w))

    def _saturate(self, value):
        if _family(self.storage) != "int":
            raise TypeError("saturating arithmetic requires an integer storage type")
        lower, upper = _int_bounds(self.storage)
        if lower is not None:
            value = max(lower, value)
        if upper is not None:
            value = min(upper, value)
        return self._with(value)

    def saturating_add(self, other):
        """Add, clamping at the storage type's bounds."""
        return self._saturate(self.value + self._converted(other))

    def saturating_sub(self, other):
        """Subtract, clamping at the storage type's bounds."""
        return self._saturate(self.value - self._converted(other))

    def __add__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        return self._with(self.value + self._converted(other))

    def __sub__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        return self._with(self.value - self._converted(other))

    def __mod__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        return self._with(_rem(self.storage, self.value, self._converted(other)))

    def _other_value(self, other):
        return change_base(other.dimension, self.base_units, other.base_units, other.value)

    def __mul__(self, other):
        if isinstance(other, Quantity):
            return self._with(
                self.value * self._other_value(other), self.dimension * other.dimension
            )
        if isinstance(other, (int, float, Fraction)) and not isinstance(other, bool):
            return self._with(self.value * self.storage.coerce(other))
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, (int, float, Fraction)) and not isinstance(other, bool):
            return self._with(self.storage.coerce(other) * self.value)
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, Quantity):
            value = _div(self.storage, self.value, self._other_value(other))
            return self._with(value, self.dimension / other.dimension)
        if isinstance(other, (int, float, Fraction)) and not isinstance(other, bool):
            return self._with(_div(self.storage, self.value, self.storage.coerce(other)))
        return NotImplemented

    def __rtruediv__(self, other):
        if isinstance(other, (int, float, Fraction)) and not isinstance(other, bool):
            value = _div(self.storage, self.storage.coerce(other), self.value)
            return self._with(value, self.dimension.recip())
        return NotImplemented

    def __neg__(self):
        if not self.storage.is_signed():
            raise TypeError("negation requires a signed storage type")
        return self._with(-self.value)

    def __abs__(self):
        return self.abs()

    def __eq__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        if other.dimension != self.dimension:
            return False
        return self.value == self._converted(other)

    def __hash__(self):
        system = self.dimension.system
        default = BaseUnits(system, system.default_units().units, self.storage)
        try:
            value = change_base(self.dimension, default, self.base_units, self.value)
        except (OverflowError, ValueError):
            value = self.value
        return hash((self.dimension, value))

    def __lt__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value < self._converted(other)

    def __le__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value <= self._converted(other)

    def __gt__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value > self._converted(other)

    def __ge__(self, other):
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value >= self._converted(other)

    def __repr__(self):
        parts = [repr(self.value)]
        for unit, exponent in zip(self.base_units.units, self.dimension.exponents):
            if exponent:
                parts.append(f"{unit.abbreviation}^{exponent}")
        return " ".join(parts)


def quantity_sum(quantities):
    """Sum an iterable of quantities of one dimension; it must not be empty."""
    iterator = iter(quantities)
    try:
        total = next(iterator)
    except StopIteration:
        raise ValueError("cannot sum an empty sequence of quantities") from None
    if not isinstance(total, Quantity):
        raise TypeError(f"expected a Quantity, not {type(total).__name__}")
    for quantity in iterator:
        total = total + quantity
    return total