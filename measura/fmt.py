"""Formatting quantities in a chosen unit, and parsing them back from text."""

from __future__ import annotations

import math
import re
import struct
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction

from measura.quantity import Quantity, QuantityKind
from measura.storage import StorageType, resolve_types
from measura.system import Dimension, from_base
from measura.unit import Unit

_RATIO_TYPES = frozenset(resolve_types("Ratio"))
_UNSIGNED_TYPES = frozenset(resolve_types("Unsigned"))

_SPEC = re.compile(
    r"(?:(?P<fill>.)?(?P<align>[<>=^]))?"
    r"(?P<sign>[-+ ])?"
    r"(?P<alt>#)?"
    r"(?P<zero>0)?"
    r"(?P<width>[0-9]+)?"
    r"(?P<grouping>[,_])?"
    r"(?:\.(?P<precision>[0-9]+))?"
    r"(?P<type>[a-zA-Z%]?)",
    re.DOTALL,
)

_INT_TEXT = re.compile(r"[+-]?[0-9]+")
_RATIO_TEXT = re.compile(r"(?P<numer>[+-]?[0-9]+)(?:/(?P<denom>[+-]?[0-9]+))?")
_FLOAT_TEXT = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)",
    re.IGNORECASE,
)


class DisplayStyle(Enum):
    """How a unit is written after the value."""

    ABBREVIATION = "abbreviation"
    DESCRIPTION = "description"


class ParseQuantityError(ValueError):
    """Text could not be parsed as a quantity.

    ``kind`` is one of ``NO_SEPARATOR``, ``VALUE_PARSE_ERROR`` or
    ``UNKNOWN_UNIT``.
    """

    NO_SEPARATOR = "no_separator"
    VALUE_PARSE_ERROR = "value_parse_error"
    UNKNOWN_UNIT = "unknown_unit"

    _MESSAGES = {
        NO_SEPARATOR: "no space between quantity and units",
        VALUE_PARSE_ERROR: "error parsing unit quantity",
        UNKNOWN_UNIT: "unrecognized unit of measure",
    }

    def __init__(self, kind):
        if kind not in self._MESSAGES:
            raise ValueError(f"unknown parse error kind: {kind!r}")
        super().__init__(self._MESSAGES[kind])
        self.kind = kind

    def __eq__(self, other):
        if not isinstance(other, ParseQuantityError):
            return NotImplemented
        return self.kind == other.kind

    def __hash__(self):
        return hash(self.kind)


@dataclass(frozen=True, eq=False)
class Arguments:
    """A display style and unit, waiting for a quantity to format."""

    dimension: Dimension
    unit: Unit
    style: DisplayStyle
    kind: QuantityKind | None = None

    def __post_init__(self):
        if not isinstance(self.dimension, Dimension):
            raise TypeError("format arguments need a Dimension")
        if not isinstance(self.unit, Unit):
            raise TypeError(f"expected a Unit, not {type(self.unit).__name__}")
        if not isinstance(self.style, DisplayStyle):
            raise TypeError(f"style must be a DisplayStyle, not {type(self.style).__name__}")
        if self.kind is not None and self.unit not in self.kind.all_units:
            raise TypeError(f"{self.unit.name!r} is not a unit of {self.kind.name}")

    def with_quantity(self, quantity):
        """Bind a quantity of the matching dimension to these arguments."""
        if not isinstance(quantity, Quantity):
            raise TypeError(f"expected a Quantity, not {type(quantity).__name__}")
        if quantity.dimension != self.dimension:
            raise TypeError(
                f"dimensions differ: {self.dimension} and {quantity.dimension}"
            )
        return QuantityArguments(self, quantity)


@dataclass(frozen=True, eq=False)
class QuantityArguments:
    """A quantity with the unit and style it is to be displayed in."""

    arguments: Arguments
    quantity: Quantity

    def _value(self):
        quantity = self.quantity
        return from_base(
            quantity.dimension, quantity.base_units, self.arguments.unit, quantity.value
        )

    def _label(self, value):
        unit = self.arguments.unit
        if self.arguments.style is DisplayStyle.ABBREVIATION:
            return unit.abbreviation
        return unit.singular if value == 1 else unit.plural

    def __format__(self, spec):
        value = self._value()
        text = _format_value(value, spec, self.quantity.storage)
        return f"{text} {self._label(value)}"

    def __str__(self):
        return self.__format__("")

    def __repr__(self):
        value = self._value()
        return f"{value!r} {self._label(value)}"


def format_args(kind, unit, style):
    """Return arguments that display quantities of ``kind`` in ``unit``."""
    if not isinstance(kind, QuantityKind):
        raise TypeError(f"expected a QuantityKind, not {type(kind).__name__}")
    return Arguments(kind.dimension, unit, style, kind)


def into_format_args(quantity, unit, style):
    """Bind ``quantity`` to a unit and style for display."""
    if not isinstance(quantity, Quantity):
        raise TypeError(f"expected a Quantity, not {type(quantity).__name__}")
    return Arguments(quantity.dimension, unit, style, quantity.kind).with_quantity(quantity)


def parse_quantity(kind, text):
    """Parse ``"<value> <unit>"`` into a quantity of ``kind``.

    The unit may be given by abbreviation, singular or plural description.
    Raises ``ParseQuantityError`` when the text does not parse.
    """
    if not isinstance(kind, QuantityKind):
        raise TypeError(f"expected a QuantityKind, not {type(kind).__name__}")
    if not isinstance(text, str):
        raise TypeError(f"expected a str, not {type(text).__name__}")
    value_text, separator, unit_text = text.partition(" ")
    if not separator:
        raise ParseQuantityError(ParseQuantityError.NO_SEPARATOR)
    value = _parse_value(value_text, kind.base.storage)
    unit_text = unit_text.strip()
    for unit in kind.all_units:
        if unit_text in (unit.abbreviation, unit.singular, unit.plural):
            return kind.new(unit, value)
    raise ParseQuantityError(ParseQuantityError.UNKNOWN_UNIT)


def _parse_value(text, storage):
    error = ParseQuantityError(ParseQuantityError.VALUE_PARSE_ERROR)
    try:
        if storage.is_float():
            if not _FLOAT_TEXT.fullmatch(text):
                raise error
            return storage.coerce(float(text))
        if storage in _RATIO_TYPES:
            match = _RATIO_TEXT.fullmatch(text)
            if not match:
                raise error
            numer = int(match["numer"])
            denom = int(match["denom"]) if match["denom"] is not None else 1
            if denom == 0:
                raise error
            storage.coerce(numer)
            return storage.coerce(Fraction(numer, denom))
        if not _INT_TEXT.fullmatch(text):
            raise error
        if storage in _UNSIGNED_TYPES and text.startswith("-"):
            raise error
        return storage.coerce(int(text))
    except (OverflowError, ValueError, TypeError) as exc:
        if isinstance(exc, ParseQuantityError):
            raise
        raise error from None


def _shortest_single(x):
    for precision in range(1, 10):
        text = format(x, f".{precision}g")
        if struct.unpack("<f", struct.pack("<f", float(text)))[0] == x:
            return text
    return repr(x)


def _float_body(x, single):
    """Positional notation with the fewest digits that read back as ``x``."""
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "inf"
    text = format(Decimal(_shortest_single(x) if single else repr(x)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _pad(body, negative, match, force_no_sign=False):
    if force_no_sign:
        sign = ""
    elif negative:
        sign = "-"
    elif match["sign"] == "+":
        sign = "+"
    elif match["sign"] == " ":
        sign = " "
    else:
        sign = ""
    width = int(match["width"] or 0)
    if match["align"] is None and match["zero"]:
        return sign + body.rjust(width - len(sign), "0")
    fill = match["fill"] or " "
    align = match["align"] or ">"
    if align == "=":
        return sign + body.rjust(width - len(sign), fill)
    text = sign + body
    if len(text) >= width:
        return text
    padding = width - len(text)
    if align == "<":
        return text + fill * padding
    if align == "^":
        left = padding // 2
        return fill * left + text + fill * (padding - left)
    return fill * padding + text


def _format_value(value, spec, storage):
    match = _SPEC.fullmatch(spec)
    if match is None:
        return format(value, spec)
    if isinstance(value, Fraction):
        if match["precision"] is not None or match["grouping"] is not None:
            raise ValueError(f"format spec {spec!r} is not supported for ratios")
        part_spec = ("#" if match["alt"] else "") + match["type"]
        numer, denom = abs(value.numerator), value.denominator
        body = format(numer, part_spec)
        if denom != 1:
            body = f"{body}/{format(denom, part_spec)}"
        return _pad(body, value < 0, match)
    if isinstance(value, float) and not match["type"] and match["grouping"] is None:
        if match["precision"] is not None:
            return format(value, spec + "f")
        body = _float_body(abs(value), storage is StorageType.F32)
        negative = math.copysign(1.0, value) < 0 and not math.isnan(value)
        return _pad(body, negative, match, force_no_sign=math.isnan(value))
    return format(value, spec)