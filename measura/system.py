"""Systems of quantities, their dimensions and conversions between base units."""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from functools import lru_cache

from measura.storage import StorageType
from measura.unit import ConstantOp, Unit, define_units


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class BaseQuantity:
    """A base quantity of a system: its name, base unit and dimension symbol."""

    name: str
    unit: Unit
    symbol: str


@dataclass(frozen=True)
class System:
    """A system of quantities together with the name of its system of units."""

    name: str
    units_name: str
    quantities: tuple

    def __post_init__(self):
        quantities = tuple(self.quantities)
        object.__setattr__(self, "quantities", quantities)
        if not quantities:
            raise ValueError("a system needs at least one base quantity")
        for quantity in quantities:
            if not isinstance(quantity, BaseQuantity):
                raise TypeError(
                    f"base quantities must be BaseQuantity, not {type(quantity).__name__}"
                )
            if not isinstance(quantity.unit, Unit):
                raise TypeError(f"base unit of {quantity.name!r} must be a Unit")
        names = [quantity.name for quantity in quantities]
        symbols = [quantity.symbol for quantity in quantities]
        if len(set(names)) != len(names):
            raise ValueError("base quantity names must be unique")
        if len(set(symbols)) != len(symbols):
            raise ValueError("base quantity symbols must be unique")

    @property
    def symbols(self):
        """Dimension symbols of the base quantities, in order."""
        return tuple(quantity.symbol for quantity in self.quantities)

    @property
    def names(self):
        """Names of the base quantities, in order."""
        return tuple(quantity.name for quantity in self.quantities)

    def dimension(self, *exponents):
        """Return the dimension with the given exponent for each base quantity."""
        return Dimension(self, tuple(exponents))

    def one(self):
        """Return dimension one, where every exponent is zero."""
        return Dimension(self, (0,) * len(self.quantities))

    def base_units(self, *units):
        """Return a set of base units, one unit for each base quantity in order."""
        return BaseUnits(self, tuple(units))

    def default_units(self):
        """Return the system's own base units."""
        return BaseUnits(self, tuple(quantity.unit for quantity in self.quantities))


@dataclass(frozen=True)
class Dimension:
    """A product of powers of a system's base quantities."""

    system: System
    exponents: tuple

    def __post_init__(self):
        exponents = tuple(self.exponents)
        object.__setattr__(self, "exponents", exponents)
        if not isinstance(self.system, System):
            raise TypeError("a dimension needs a System")
        if len(exponents) != len(self.system.quantities):
            raise ValueError(
                f"expected {len(self.system.quantities)} exponents, got {len(exponents)}"
            )
        for exponent in exponents:
            if not _is_int(exponent):
                raise TypeError(f"exponents must be integers, not {type(exponent).__name__}")

    def _combine(self, other, sign):
        if not isinstance(other, Dimension):
            return NotImplemented
        if other.system != self.system:
            raise TypeError("dimensions belong to different systems")
        return Dimension(
            self.system,
            tuple(a + sign * b for a, b in zip(self.exponents, other.exponents)),
        )

    def __mul__(self, other):
        return self._combine(other, 1)

    def __truediv__(self, other):
        return self._combine(other, -1)

    def __pow__(self, exponent):
        if not _is_int(exponent):
            return NotImplemented
        return Dimension(self.system, tuple(e * exponent for e in self.exponents))

    def root(self, n):
        """Return the n-th root; every exponent must be divisible by ``n``."""
        if not _is_int(n) or n <= 0:
            raise ValueError(f"root must be a positive integer, not {n!r}")
        if any(e % n for e in self.exponents):
            raise ValueError(f"dimension {self} is not divisible by {n}")
        return Dimension(self.system, tuple(e // n for e in self.exponents))

    def recip(self):
        """Return the reciprocal dimension."""
        return Dimension(self.system, tuple(-e for e in self.exponents))

    def is_one(self):
        """Return True if every exponent is zero."""
        return not any(self.exponents)

    def __getitem__(self, key):
        for quantity, exponent in zip(self.system.quantities, self.exponents):
            if key in (quantity.symbol, quantity.name):
                return exponent
        raise KeyError(key)

    def __str__(self):
        parts = [
            f"{symbol}^{exponent}"
            for symbol, exponent in zip(self.system.symbols, self.exponents)
            if exponent
        ]
        return " ".join(parts) or "1"


@dataclass(frozen=True)
class BaseUnits:
    """One unit per base quantity of a system, and the storage type for values."""

    system: System
    units: tuple
    storage: StorageType = StorageType.F64

    def __post_init__(self):
        units = tuple(self.units)
        object.__setattr__(self, "units", units)
        if not isinstance(self.system, System):
            raise TypeError("base units need a System")
        if not isinstance(self.storage, StorageType):
            raise TypeError("storage must be a StorageType")
        if len(units) != len(self.system.quantities):
            raise ValueError(
                f"expected {len(self.system.quantities)} base units, got {len(units)}"
            )
        for unit in units:
            if not isinstance(unit, Unit):
                raise TypeError(f"base units must be Unit, not {type(unit).__name__}")
            if unit.offset:
                raise ValueError(
                    f"unit {unit.name!r} has a constant term and cannot be a base unit"
                )

    def _check(self, dimension):
        if not isinstance(dimension, Dimension):
            raise TypeError("expected a Dimension")
        if dimension.system != self.system:
            raise ValueError("dimension and base units belong to different systems")

    def factor(self, dimension):
        """Return the product of base unit coefficients raised to the dimension's exponents."""
        self._check(dimension)
        result = _one(self.storage)
        for unit, exponent in zip(self.units, dimension.exponents):
            result = result * unit.coefficient_as(self.storage) ** exponent
        return result


def _one(storage):
    return 1.0 if storage.is_float() else Fraction(1)


def _to_conversion(storage, value):
    stored = storage.coerce(value)
    return float(stored) if storage.is_float() else Fraction(stored)


def _check_unit(unit):
    if not isinstance(unit, Unit):
        raise TypeError(f"expected a Unit, not {type(unit).__name__}")


def from_base(dimension, base_units, unit, value):
    """Convert ``value``, held in ``base_units``, to ``unit``."""
    _check_unit(unit)
    storage = base_units.storage
    factor = base_units.factor(dimension)
    v = _to_conversion(storage, value)
    coefficient = unit.coefficient_as(storage)
    constant = unit.constant_as(ConstantOp.SUB, storage)
    if coefficient < factor:
        result = v * (factor / coefficient) - constant
    else:
        result = v / (coefficient / factor) - constant
    return storage.coerce(result)


def to_base(dimension, base_units, unit, value):
    """Convert ``value``, given in ``unit``, to ``base_units``."""
    _check_unit(unit)
    storage = base_units.storage
    factor = base_units.factor(dimension)
    v = _to_conversion(storage, value)
    coefficient = unit.coefficient_as(storage)
    constant = unit.constant_as(ConstantOp.ADD, storage)
    if coefficient >= factor:
        result = (v + constant) * (coefficient / factor)
    else:
        result = ((v + constant) * coefficient) / factor
    return storage.coerce(result)


def change_base(dimension, left_units, right_units, value):
    """Convert ``value`` held in ``right_units`` to ``left_units``."""
    left_units._check(dimension)
    right_units._check(dimension)
    if left_units.storage is not right_units.storage:
        raise ValueError("base units use different storage types")
    storage = left_units.storage
    v = _to_conversion(storage, value)
    for left, right, exponent in zip(left_units.units, right_units.units, dimension.exponents):
        v = v * right.coefficient_as(storage) ** exponent / left.coefficient_as(storage) ** exponent
    return storage.coerce(v)


@lru_cache(maxsize=None)
def isq():
    """Return the International System of Quantities with SI base units."""
    units = define_units(
        ("meter", 1.0, "m", "meter", "meters"),
        ("kilogram", 1.0, "kg", "kilogram", "kilograms"),
        ("second", 1.0, "s", "second", "seconds"),
        ("ampere", 1.0, "A", "ampere", "amperes"),
        ("kelvin", 1.0, "K", "kelvin", "kelvins"),
        ("mole", 1.0, "mol", "mole", "moles"),
        ("candela", 1.0, "cd", "candela", "candelas"),
    )
    bases = (
        ("length", "L"),
        ("mass", "M"),
        ("time", "T"),
        ("electric_current", "I"),
        ("thermodynamic_temperature", "Th"),
        ("amount_of_substance", "N"),
        ("luminous_intensity", "J"),
    )
    return System(
        "ISQ",
        "SI",
        tuple(
            BaseQuantity(name, unit, symbol) for (name, symbol), unit in zip(bases, units)
        ),
    )