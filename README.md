# measura

measura models physical quantities whose dimension is tracked alongside the
value. Quantities of the same dimension can be added, subtracted and compared;
multiplying or dividing quantities combines their dimensions; and values are
converted between units on the way in and on the way out.

It has no runtime dependencies beyond the Python standard library and needs
Python 3.10 or later.

## Installing

```
pip install measura
```

To run the test suite, install the `test` extra and run pytest:

```
pip install "measura[test]"
pytest
```

## A short example

```python
from measura.fmt import DisplayStyle, into_format_args, parse_quantity
from measura.si.velocity import velocity

kind = velocity()
units = {unit.name: unit for unit in kind.units()}
mps = units["meter_per_second"]

speed = kind.new(units["kilometer_per_second"], 1.0)
speed.get(mps)                                                   # 1000.0
format(into_format_args(speed, mps, DisplayStyle.ABBREVIATION))  # "1000 m/s"
format(into_format_args(speed, mps, DisplayStyle.DESCRIPTION))   # "1000 meters per second"

parse_quantity(kind, "2 km/s").get(mps)                          # 2000.0
```

## Concepts

- **Systems of quantities** (`measura.system`). A `System` is built from
  `BaseQuantity` entries, each with a name, a base unit and a dimension
  symbol. `isq()` returns the International System of Quantities with its
  seven base quantities (length, mass, time, electric current, thermodynamic
  temperature, amount of substance, luminous intensity). `System.dimension(...)`
  builds a `Dimension` from one exponent per base quantity, and `System.one()`
  is the dimension whose exponents are all zero. Dimensions multiply, divide,
  raise to integer powers, take exact roots with `root(n)` (a `ValueError` if
  an exponent is not divisible), invert with `recip()`, and report
  `is_one()`.

- **Base units** (`BaseUnits`). A quantity's value is stored in a set of base
  units, one per base quantity, together with a `StorageType` (double
  precision float unless given). `System.default_units()` uses the system's
  own base units; `System.base_units(...)` picks others. A unit with a
  constant term cannot be a base unit. `BaseUnits.factor(dimension)` gives the
  combined coefficient for a dimension, and `from_base`, `to_base` and
  `change_base` move a value between a unit, the stored representation and
  another set of base units.

- **Units** (`measura.unit`). A `Unit` has a name, a coefficient to the base
  unit, an abbreviation, singular and plural descriptions and an optional
  constant term (for scales such as degrees Fahrenheit). `Unit.constant(op)`
  returns that term for a `ConstantOp`; `Unit.coefficient_as` and
  `Unit.constant_as` return the factors in the number type used for a given
  storage type. `prefix(name)` gives SI and binary prefix factors ("kilo",
  "milli", "kibi", ...), and `define_units(...)` builds a tuple of units from
  `(name, conversion, abbreviation, singular, plural)` entries.

- **Storage types** (`measura.storage`). `StorageType` lists fixed-width
  integers, unbounded integers, bounded and unbounded rationals, and single
  and double precision floats. `coerce(value)` converts a number to the type,
  raising `OverflowError` when it does not fit. `resolve_types(...)` expands
  names and the groups `All`, `PrimInt`, `Ratio`, `Float`, `Signed` and
  `Unsigned` into storage types.

- **Quantities** (`measura.quantity`). A `QuantityKind` (such as velocity or
  volume) creates quantities with `new(unit, value)`, iterates its units with
  `units()` and gives a zero with `zero()`. A `Quantity` reads back in any unit
  with `get(unit)`; offers `floor`, `ceil`, `round`, `trunc` and `fract` in a
  chosen unit; the floating-point predicates `is_nan`, `is_infinite`,
  `is_finite`, `is_normal`, `is_sign_positive`, `is_sign_negative` and
  `classify` (returning an `FpCategory`); and `is_zero`, `abs`, `signum`,
  `sqrt`, `cbrt`, `powi`, `recip`, `hypot`, `mul_add`, `max`, `min`,
  `saturating_add` and `saturating_sub`. Operators `+`, `-`, `%` and the
  comparisons need quantities of the same dimension (a `TypeError`
  otherwise) and convert between differing base units. `*` and `/` accept
  quantities or plain numbers and combine dimensions; the result of
  multiplying or dividing two quantities carries no kind. `quantity_sum` adds
  up a non-empty iterable of quantities.

- **Formatting and parsing** (`measura.fmt`). `into_format_args(quantity,
  unit, style)` returns a `QuantityArguments` that formats the quantity in a
  unit with a `DisplayStyle`: the abbreviation, or the description (singular
  for a value of exactly one, plural otherwise). Format specifications such as
  `"+"`, `"05"`, `"e"` or `".2"` apply to the number. `format_args(kind, unit,
  style)` returns reusable `Arguments` to bind to quantities with
  `with_quantity`. `parse_quantity(kind, text)` reads `"<value> <unit>"`, where
  the unit is an abbreviation, singular or plural description, and raises
  `ParseQuantityError` whose `kind` is `NO_SEPARATOR`, `VALUE_PARSE_ERROR` or
  `UNKNOWN_UNIT`.

## SI catalogue

`measura.si` provides three ready-made kinds in the ISQ:

- `measura.si.velocity.velocity()` — metres per second with every SI prefix
  from yotta to yocto, plus feet per hour, minute and second, inches per
  second, kilometres per hour, knots, miles per hour, minute and second, and
  millimetres per minute.
- `measura.si.volume.volume()` — cubic metres and litres with every SI
  prefix, plus customary units such as acre-feet, barrels, bushels, cords,
  cubic feet, inches, miles and yards, cups, fluid ounces, gallons, gills,
  pecks, pints, quarts, steres, tablespoons, teaspoons and register tons.
- `measura.si.volume_rate.volume_rate()` — the same volume units per second,
  plus cubic feet, cubic inches, cubic yards and gallons per minute and
  gallons per day.

## What it does not include

The catalogue holds only velocity, volume and volume rate. There are no
ready-made kinds for length, mass, time or any other quantity; to work with
them, define units with `define_units`, a dimension with `isq().dimension(...)`
and build a `QuantityKind`, or create a `Quantity` directly from a dimension,
base units and a value. There is no command-line program.