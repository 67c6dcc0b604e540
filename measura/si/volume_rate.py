"""Volume rate (base unit cubic meter per second, m³ · s⁻¹)."""

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
    (
        "acre_foot_per_second",
        1.233_489e3,
        "ac · ft/s",
        "acre-foot per second",
        "acre-feet per second",
    ),
    ("barrel_per_second", 1.589_873e-1, "bbl/s", "barrel per second", "barrels per second"),
    ("bushel_per_second", 3.523_907e-2, "bu/s", "bushel per second", "bushels per second"),
    ("cord_per_second", 3.624_556e0, "cords/s", "cord per second", "cords per second"),
    (
        "cubic_foot_per_second",
        2.831_685e-2,
        "ft³/s",
        "cubic foot per second",
        "cubic feet per second",
    ),
    (
        "cubic_foot_per_minute",
        4.719_474e-4,
        "ft³/min",
        "cubic foot per minute",
        "cubic feet per minute",
    ),
    (
        "cubic_inch_per_second",
        1.638_706e-5,
        "in³/s",
        "cubic inch per second",
        "cubic inches per second",
    ),
    (
        "cubic_inch_per_minute",
        2.731_177e-7,
        "in³/min",
        "cubic inch per minute",
        "cubic inches per minute",
    ),
    (
        "cubic_mile_per_second",
        4.168_182e9,
        "mi³/s",
        "cubic mile per second",
        "cubic miles per second",
    ),
    (
        "cubic_yard_per_second",
        7.645_549e-1,
        "yd³/s",
        "cubic yard per second",
        "cubic yards per second",
    ),
    (
        "cubic_yard_per_minute",
        1.274_258e-2,
        "yd³/min",
        "cubic yard per minute",
        "cubic yards per minute",
    ),
    ("cup_per_second", 2.365_882e-4, "cup/s", "cup per second", "cups per second"),
    (
        "fluid_ounce_per_second",
        2.957_353e-5,
        "fl oz/s",
        "fluid ounce per second",
        "fluid ounces per second",
    ),
    (
        "fluid_ounce_imperial_per_second",
        2.841_306e-5,
        "fl oz (UK)/s",
        "Imperial fluid ounce per second",
        "Imperial fluid ounces per second",
    ),
    (
        "gallon_imperial_per_second",
        4.546_09e-3,
        "gal (UK)/s",
        "Imperial gallon per second",
        "Imperial gallons per second",
    ),
    ("gallon_per_second", 3.785_412e-3, "gal/s", "gallon per second", "gallons per second"),
    ("gallon_per_minute", 6.309_020e-5, "gal/min", "gallon per minute", "gallons per minute"),
    ("gallon_per_day", 4.381_264e-8, "gal/d", "gallon per day", "gallons per day"),
    (
        "gill_imperial_per_second",
        1.420_653e-4,
        "gi (UK)/s",
        "Imperial gill per second",
        "Imperial gills per second",
    ),
    ("gill_per_second", 1.182_941e-4, "gi/s", "gill per second", "gills per second"),
    ("peck_per_second", 8.809_768e-3, "pk/s", "peck per second", "pecks per second"),
    (
        "pint_dry_per_second",
        5.506_105e-4,
        "dry pt/s",
        "dry pint per second",
        "dry pints per second",
    ),
    (
        "pint_liquid_per_second",
        4.731_765e-4,
        "liq pt/s",
        "liquid pint per second",
        "liquid pints per second",
    ),
    (
        "quart_dry_per_second",
        1.101_221e-3,
        "dry qt/s",
        "dry quart per second",
        "dry quarts per second",
    ),
    (
        "quart_liquid_per_second",
        9.463_529e-4,
        "liq qt/s",
        "liquid quart per second",
        "liquid quarts per second",
    ),
    ("stere_per_second", 1.0e0, "st/s", "stere per second", "steres per second"),
    (
        "tablespoon_per_second",
        1.478_676e-5,
        "tbsp/s",
        "tablespoon per second",
        "tablespoons per second",
    ),
    (
        "teaspoon_per_second",
        4.928_922e-6,
        "tsp/s",
        "teaspoon per second",
        "teaspoons per second",
    ),
    (
        "register_ton_per_second",
        2.831_685e0,
        "RT/s",
        "register ton per second",
        "register tons per second",
    ),
)


def _cubic_specs():
    for name, symbol in _PREFIXES:
        if name == "none":
            yield (
                "cubic_meter_per_second",
                prefix("none"),
                "m³/s",
                "cubic meter per second",
                "cubic meters per second",
            )
            continue
        factor = prefix(name)
        yield (
            f"cubic_{name}meter_per_second",
            factor * factor * factor,
            f"{symbol}m³/s",
            f"cubic {name}meter per second",
            f"cubic {name}meters per second",
        )


def _liter_specs():
    milli = prefix("milli")
    for name, symbol in _PREFIXES:
        if name == "none":
            yield ("liter_per_second", milli, "L/s", "liter per second", "liters per second")
            continue
        yield (
            f"{name}liter_per_second",
            milli * prefix(name),
            f"{symbol}L/s",
            f"{name}liter per second",
            f"{name}liters per second",
        )


@lru_cache(maxsize=None)
def volume_rate():
    """Return the volume rate quantity kind of the ISQ, dimension L³T⁻¹."""
    return QuantityKind(
        "VolumeRate",
        "volume rate",
        isq().dimension(3, 0, -1, 0, 0, 0, 0),
        define_units(*_cubic_specs(), *_liter_specs(), *_CUSTOMARY),
    )