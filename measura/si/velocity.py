"""Velocity (base unit meter per second, m · s⁻¹)."""

from __future__ import annotations

from functools import lru_cache

from measura.quantity import QuantityKind
from measura.system import isq
from measura.unit import define_units, prefix

_PREFIXES = (
    ("yotta", "Y"),
    ("zetta", "Z"),
    ("exa", "E"),
    ("peta", "P"),
    ("tera", "T"),
    ("giga", "G"),
    ("mega", "M"),
    ("kilo", "k"),
    ("hecto", "h"),
    ("deca", "da"),
    ("none", ""),
    ("deci", "d"),
    ("centi", "c"),
    ("milli", "m"),
    ("micro", "µ"),
    ("nano", "n"),
    ("pico", "p"),
    ("femto", "f"),
    ("atto", "a"),
    ("zepto", "z"),
    ("yocto", "y"),
)

_CUSTOMARY = (
    ("foot_per_hour", 8.466_666_666_666_667e-5, "ft/h", "foot per hour", "feet per hour"),
    ("foot_per_minute", 5.08e-3, "ft/min", "foot per minute", "feet per minute"),
    ("foot_per_second", 3.048e-1, "ft/s", "foot per second", "feet per second"),
    ("inch_per_second", 2.54e-2, "in/s", "inch per second", "inches per second"),
    (
        "kilometer_per_hour",
        2.777_777_777_777_778e-1,
        "km/h",
        "kilometer per hour",
        "kilometers per hour",
    ),
    ("knot", 5.144_444_444_444_445e-1, "kn", "knot", "knots"),
    ("mile_per_hour", 4.470_4e-1, "mi/h", "mile per hour", "miles per hour"),
    ("mile_per_minute", 2.682_24e1, "mi/min", "mile per minute", "miles per minute"),
    ("mile_per_second", 1.609_344e3, "mi/s", "mile per second", "miles per second"),
    (
        "millimeter_per_minute",
        1.666_666_666_666_666_667e-5,
        "mm/min",
        "millimeter per minute",
        "millimeters per minute",
    ),
)


def _metric_specs():
    for name, symbol in _PREFIXES:
        stem = "meter" if name == "none" else f"{name}meter"
        yield (
            f"{stem}_per_second",
            prefix(name),
            f"{symbol}m/s",
            f"{stem} per second",
            f"{stem}s per second",
        )


@lru_cache(maxsize=None)
def velocity():
    """Return the velocity quantity kind of the ISQ, dimension LT⁻¹."""
    return QuantityKind(
        "Velocity",
        "velocity",
        isq().dimension(1, 0, -1, 0, 0, 0, 0),
        define_units(*_metric_specs(), *_CUSTOMARY),
    )