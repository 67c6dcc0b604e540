"""Volume (base unit cubic meter, m³)."""

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
    ("acre_foot", 1.233_489e3, "ac · ft", "acre-foot", "acre-feet"),
    ("barrel", 1.589_873e-1, "bbl", "barrel", "barrels"),
    ("bushel", 3.523_907e-2, "bu", "bushel", "bushels"),
    ("cord", 3.624_556e0, "cords", "cord", "cords"),
    ("cubic_foot", 2.831_685e-2, "ft³", "cubic foot", "cubic feet"),
    ("cubic_inch", 1.638_706e-5, "in³", "cubic inch", "cubic inches"),
    ("cubic_mile", 4.168_182e9, "mi³", "cubic mile", "cubic miles"),
    ("cubic_yard", 7.645_549e-1, "yd³", "cubic yard", "cubic yards"),
    ("cup", 2.365_882e-4, "cup", "cup", "cups"),
    ("fluid_ounce", 2.957_353e-5, "fl oz", "fluid ounce", "fluid ounces"),
    (
        "fluid_ounce_imperial",
        2.841_306e-5,
        "fl oz (UK)",
        "Imperial fluid ounce",
        "Imperial fluid ounces",
    ),
    ("gallon_imperial", 4.546_09e-3, "gal (UK)", "Imperial gallon", "Imperial gallons"),
    ("gallon", 3.785_412e-3, "gal", "gallon", "gallons"),
    ("gill_imperial", 1.420_653e-4, "gi (UK)", "Imperial gill", "Imperial gills"),
    ("gill", 1.182_941e-4, "gi", "gill", "gills"),
)

_OTHER = (
    ("peck", 8.809_768e-3, "pk", "peck", "pecks"),
    ("pint_dry", 5.506_105e-4, "dry pt", "dry pint", "dry pints"),
    ("pint_liquid", 4.731_765e-4, "liq pt", "liquid pint", "liquid pints"),
    ("quart_dry", 1.101_221e-3, "dry qt", "dry quart", "dry quarts"),
    ("quart_liquid", 9.463_529e-4, "liq qt", "liquid quart", "liquid quarts"),
    ("stere", 1.0e0, "st", "stere", "steres"),
    ("tablespoon", 1.478_676e-5, "tbsp", "tablespoon", "tablespoons"),
    ("teaspoon", 4.928_922e-6, "tsp", "teaspoon", "teaspoons"),
    ("register_ton", 2.831_685e0, "RT", "register ton", "register tons"),
)


def _cubic_specs():
    for name, symbol in _PREFIXES:
        if name == "none":
            yield ("cubic_meter", prefix("none"), "m³", "cubic meter", "cubic meters")
            continue
        factor = prefix(name)
        yield (
            f"cubic_{name}meter",
            factor * factor * factor,
            f"{symbol}m³",
            f"cubic {name}meter",
            f"cubic {name}meters",
        )


def _liter_specs():
    milli = prefix("milli")
    for name, symbol in _PREFIXES:
        if name == "none":
            yield ("liter", milli, "L", "liter", "liters")
            continue
        yield (f"{name}liter", milli * prefix(name), f"{symbol}L", f"{name}liter", f"{name}liters")


@lru_cache(maxsize=None)
def volume():
    """Return the volume quantity kind of the ISQ, dimension L³."""
    return QuantityKind(
        "Volume",
        "volume",
        isq().dimension(3, 0, 0, 0, 0, 0, 0),
        define_units(*_cubic_specs(), *_CUSTOMARY, *_liter_specs(), *_OTHER),
    )