"""Measurement units and the conversion factors that relate them to base units."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from measura.storage import StorageType


class ConstantOp(Enum):
    """Direction of a conversion that applies a unit's constant term."""

    ADD = "add"
    SUB = "sub"


@dataclass(frozen=True)
class Unit:
    """A unit of measurement for one quantity.

    ``coefficient`` multiplies a value in this unit to reach the quantity's
    base unit; ``offset`` is the optional constant term added before the
    multiplication (as for temperature scales).
    """

    name: str
    coefficient: float
    abbreviation: str
    singular: str
    plural: str
    offset: float | None = None

    def constant(self, op):
        """Return the constant term for a conversion in direction ``op``.

        A unit without a constant term yields ``-0.0`` when adding and ``0.0``
        when subtracting.
        """
        if not isinstance(op, ConstantOp):
            raise TypeError(f"op must be a ConstantOp, not {type(op).__name__}")
        if self.offset is not None:
            return self.offset
        return -0.0 if op is ConstantOp.ADD else 0.0

    def coefficient_as(self, storage):
        """Return the coefficient in the conversion type used for ``storage``."""
        return _convert(self.coefficient, storage)

    def constant_as(self, op, storage):
        """Return the constant term in the conversion type used for ``storage``."""
        return _convert(self.constant(op), storage)


def _convert(value, storage):
    if not isinstance(storage, StorageType):
        raise TypeError(f"storage must be a StorageType, not {type(storage).__name__}")
    if storage.is_float():
        return storage.coerce(value)
    return storage._to_ratio(value)


_PREFIXES = {
    "yotta": 1.0e24,
    "zetta": 1.0e21,
    "exa": 1.0e18,
    "peta": 1.0e15,
    "tera": 1.0e12,
    "giga": 1.0e9,
    "mega": 1.0e6,
    "kilo": 1.0e3,
    "hecto": 1.0e2,
    "deca": 1.0e1,
    "none": 1.0,
    "deci": 1.0e-1,
    "centi": 1.0e-2,
    "milli": 1.0e-3,
    "micro": 1.0e-6,
    "nano": 1.0e-9,
    "pico": 1.0e-12,
    "femto": 1.0e-15,
    "atto": 1.0e-18,
    "zepto": 1.0e-21,
    "yocto": 1.0e-24,
    "kibi": float(2**10),
    "mebi": float(2**20),
    "gibi": float(2**30),
    "tebi": float(2**40),
    "pebi": float(2**50),
    "exbi": float(2**60),
    "zebi": float(2**70),
    "yobi": float(2**80),
}


def prefix(name):
    """Return the multiplying factor of a named SI or binary prefix."""
    try:
        return _PREFIXES[name]
    except KeyError:
        raise ValueError(f"unknown prefix: {name!r}") from None


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_conversion(conversion, name):
    if _is_number(conversion):
        return float(conversion), None
    if isinstance(conversion, tuple) and len(conversion) in (1, 2):
        if not all(_is_number(part) for part in conversion):
            raise ValueError(f"conversion for {name!r} must be numeric")
        coefficient = float(conversion[0])
        offset = float(conversion[1]) if len(conversion) == 2 else None
        return coefficient, offset
    raise ValueError(
        f"conversion for {name!r} must be a number or a (coefficient[, constant]) tuple"
    )


def define_units(*specs):
    """Build units from ``(name, conversion, abbreviation, singular, plural)`` specs.

    ``conversion`` is either a coefficient or a ``(coefficient, constant)``
    tuple. Returns the units as a tuple, in the order given.
    """
    units = []
    seen = set()
    for spec in specs:
        try:
            name, conversion, abbreviation, singular, plural = spec
        except (TypeError, ValueError):
            raise ValueError(f"malformed unit specification: {spec!r}") from None
        if not isinstance(name, str) or not name.isidentifier():
            raise ValueError(f"unit name must be an identifier: {name!r}")
        if name in seen:
            raise ValueError(f"duplicate unit: {name!r}")
        for text in (abbreviation, singular, plural):
            if not isinstance(text, str):
                raise ValueError(f"unit descriptions for {name!r} must be strings")
        coefficient, offset = _parse_conversion(conversion, name)
        if not math.isfinite(coefficient):
            raise ValueError(f"coefficient for {name!r} must be finite")
        seen.add(name)
        units.append(Unit(name, coefficient, abbreviation, singular, plural, offset))
    return tuple(units)