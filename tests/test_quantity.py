import dataclasses
import math

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from measura.quantity import FpCategory, Quantity, QuantityKind, quantity_sum
from measura.storage import StorageType
from measura.system import BaseQuantity, System
from measura.unit import define_units

KILOMETER, METER = define_units(
    ("kilometer", 1.0e3, "km", "kilometer", "kilometers"),
    ("meter", 1.0, "m", "meter", "meters"),
)
(KILOGRAM,) = define_units(("kilogram", 1.0, "kg", "kilogram", "kilograms"))
KELVIN, FAHRENHEIT = define_units(
    ("kelvin", 1.0, "K", "kelvin", "kelvins"),
    ("degree_fahrenheit", (5.0 / 9.0, 459.67), "°F", "degree Fahrenheit", "degrees Fahrenheit"),
)

SYSTEM = System(
    "Q",
    "U",
    (
        BaseQuantity("length", METER, "L"),
        BaseQuantity("mass", KILOGRAM, "M"),
        BaseQuantity("thermodynamic_temperature", KELVIN, "Th"),
    ),
)


def kinds(storage=StorageType.F64, kilo=False):
    units = (
        SYSTEM.base_units(KILOMETER, KILOGRAM, KELVIN)
        if kilo
        else SYSTEM.default_units()
    )
    units = dataclasses.replace(units, storage=storage)
    length = QuantityKind("Length", "length", SYSTEM.dimension(1, 0, 0), (KILOMETER, METER), units)
    mass = QuantityKind("Mass", "mass", SYSTEM.dimension(0, 1, 0), (KILOGRAM,), units)
    return length, mass


def fract(x):
    return x - math.trunc(x)


def test_description_and_units():
    length, mass = kinds()
    assert length.description == "length"
    assert mass.description == "mass"
    units = length.units()
    assert next(units).abbreviation == "km"
    assert len(list(units)) == 1


def test_struct_literal():
    length, _ = kinds()
    q = Quantity(length.dimension, length.base, 1.0)
    assert q.value == 1.0


@pytest.mark.parametrize("storage", [StorageType.F64, StorageType.F32, StorageType.I64])
def test_new_default_units(storage):
    length, mass = kinds(storage)
    assert length.new(KILOMETER, 1).value == storage.coerce(1000.0)
    assert length.new(METER, 1).value == storage.coerce(1.0)
    assert mass.new(KILOGRAM, 1).value == storage.coerce(1.0)


@pytest.mark.parametrize("storage", [StorageType.F64, StorageType.F32])
def test_new_and_get_kilo_units(storage):
    length, mass = kinds(storage, kilo=True)
    l1 = length.new(KILOMETER, 1.0)
    l2 = length.new(METER, 1.0)
    m1 = mass.new(KILOGRAM, 1.0)
    assert l1.value == 1.0
    assert l2.value == storage.coerce(1.0e-3)
    assert m1.value == 1.0
    assert l1.get(METER) == 1000.0
    assert l2.get(METER) == 1.0
    assert l1.get(KILOMETER) == 1.0
    assert l2.get(KILOMETER) == storage.coerce(0.001)
    assert m1.get(KILOGRAM) == 1.0


def test_get_default_units():
    length, mass = kinds()
    l1, l2 = length.new(KILOMETER, 1.0), length.new(METER, 1.0)
    assert l1.get(METER) == 1000.0
    assert l2.get(METER) == 1.0
    assert l1.get(KILOMETER) == 1.0
    assert l2.get(KILOMETER) == 0.001
    assert mass.new(KILOGRAM, 1.0).get(KILOGRAM) == 1.0


def test_foreign_unit_rejected():
    length, _ = kinds()
    with pytest.raises(TypeError):
        length.new(KILOGRAM, 1.0)
    with pytest.raises(TypeError):
        length.new(METER, 1.0).get(KILOGRAM)


def test_debug_format():
    length, mass = kinds()
    assert repr(length.new(METER, 1.0)) == "1.0 m^1"
    assert repr(1.0 / length.new(METER, 1.0)) == "1.0 m^-1"
    assert repr(length.new(METER, 1.23) * mass.new(KILOGRAM, 1.0)) == "1.23 m^1 kg^1"


@pytest.mark.parametrize("kilo", [False, True])
def test_floor(kilo):
    length, mass = kinds(kilo=kilo)
    l1, l2 = length.new(KILOMETER, 3.9999), length.new(KILOMETER, 3.0001)
    l3, l4 = length.new(METER, 3.9999), length.new(METER, 3.0001)
    assert l1.floor(KILOMETER).get(KILOMETER) == 3.0
    assert l1.floor(METER).get(METER) == 3999.0
    assert l2.floor(KILOMETER).get(KILOMETER) == 3.0
    assert l2.floor(METER).get(METER) == 3000.0
    assert l3.floor(KILOMETER).get(KILOMETER) == 0.0
    assert l3.floor(METER).get(METER) == 3.0
    assert l4.floor(KILOMETER).get(KILOMETER) == 0.0
    assert l4.floor(METER).get(METER) == 3.0
    assert mass.new(KILOGRAM, 3.9999).floor(KILOGRAM).get(KILOGRAM) == 3.0
    assert mass.new(KILOGRAM, 3.0001).floor(KILOGRAM).get(KILOGRAM) == 3.0


@pytest.mark.parametrize("kilo", [False, True])
def test_ceil(kilo):
    length, mass = kinds(kilo=kilo)
    l1, l2 = length.new(KILOMETER, 3.9999), length.new(KILOMETER, 3.0001)
    l3, l4 = length.new(METER, 3.9999), length.new(METER, 3.0001)
    assert l1.ceil(KILOMETER).get(KILOMETER) == 4.0
    assert l1.ceil(METER).get(METER) == 4000.0
    assert l2.ceil(KILOMETER).get(KILOMETER) == 4.0
    assert l2.ceil(METER).get(METER) == 3001.0
    assert l3.ceil(KILOMETER).get(KILOMETER) == 1.0
    assert l3.ceil(METER).get(METER) == 4.0
    assert l4.ceil(KILOMETER).get(KILOMETER) == 1.0
    assert l4.ceil(METER).get(METER) == 4.0
    assert mass.new(KILOGRAM, 3.9999).ceil(KILOGRAM).get(KILOGRAM) == 4.0
    assert mass.new(KILOGRAM, 3.0001).ceil(KILOGRAM).get(KILOGRAM) == 4.0


@pytest.mark.parametrize("kilo", [False, True])
def test_round(kilo):
    length, mass = kinds(kilo=kilo)
    l1, l2 = length.new(KILOMETER, 3.3), length.new(KILOMETER, 3.5)
    l3, l4 = length.new(METER, 3.3), length.new(METER, 3.5)
    assert l1.round(KILOMETER).get(KILOMETER) == 3.0
    assert l1.round(METER).get(METER) == 3300.0
    assert l2.round(KILOMETER).get(KILOMETER) == 4.0
    assert l2.round(METER).get(METER) == 3500.0
    assert l3.round(KILOMETER).get(KILOMETER) == 0.0
    assert l3.round(METER).get(METER) == 3.0
    assert l4.round(KILOMETER).get(KILOMETER) == 0.0
    assert l4.round(METER).get(METER) == 4.0
    assert mass.new(KILOGRAM, 3.3).round(KILOGRAM).get(KILOGRAM) == 3.0
    assert mass.new(KILOGRAM, 3.5).round(KILOGRAM).get(KILOGRAM) == 4.0


@pytest.mark.parametrize("kilo", [False, True])
def test_trunc(kilo):
    length, mass = kinds(kilo=kilo)
    l1, l2 = length.new(KILOMETER, 3.3), length.new(KILOMETER, 3.5)
    l3, l4 = length.new(METER, 3.3), length.new(METER, 3.5)
    assert l1.trunc(KILOMETER).get(KILOMETER) == 3.0
    assert l1.trunc(METER).get(METER) == 3300.0
    assert l2.trunc(KILOMETER).get(KILOMETER) == 3.0
    assert l2.trunc(METER).get(METER) == 3500.0
    assert l3.trunc(KILOMETER).get(KILOMETER) == 0.0
    assert l3.trunc(METER).get(METER) == 3.0
    assert l4.trunc(KILOMETER).get(KILOMETER) == 0.0
    assert l4.trunc(METER).get(METER) == 3.0
    assert mass.new(KILOGRAM, 3.3).trunc(KILOGRAM).get(KILOGRAM) == 3.0
    assert mass.new(KILOGRAM, 3.5).trunc(KILOGRAM).get(KILOGRAM) == 3.0


@pytest.mark.parametrize("kilo", [False, True])
def test_fract(kilo):
    length, mass = kinds(kilo=kilo)
    l1, l2 = length.new(KILOMETER, 3.3), length.new(METER, 3.3)
    close = lambda x: pytest.approx(x, rel=1e-9, abs=1e-15)  # noqa: E731
    assert l1.fract(KILOMETER).get(KILOMETER) == close(fract(3.3))
    assert l1.fract(KILOMETER).get(METER) == close(fract(3.3) * 1000.0)
    assert l1.fract(METER).get(KILOMETER) == close(fract(3.3 * 1000.0) / 1000.0)
    assert l1.fract(METER).get(METER) == close(fract(3.3 * 1000.0))
    assert l2.fract(KILOMETER).get(KILOMETER) == close(fract(3.3 / 1000.0))
    assert l2.fract(KILOMETER).get(METER) == close(fract(3.3 / 1000.0) * 1000.0)
    assert l2.fract(METER).get(KILOMETER) == close(fract(3.3) / 1000.0)
    assert l2.fract(METER).get(METER) == close(fract(3.3))
    assert mass.new(KILOGRAM, 3.3).fract(KILOGRAM).get(KILOGRAM) == close(fract(3.3))


def test_rounding_requires_float():
    length, _ = kinds(StorageType.I32)
    with pytest.raises(TypeError):
        length.new(METER, 3).floor(METER)


_finite = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False)


@given(_finite, _finite)
def test_add_mixed_units(l, r):
    k_length, _ = kinds(kilo=True)
    f_length, _ = kinds()
    result = k_length.new(METER, l) + f_length.new(METER, r)
    assert result.get(METER) == pytest.approx(l + r, rel=1e-9, abs=1e-6)
    assert result.base_units == k_length.base


@given(_finite, _finite)
def test_sub_mixed_units(l, r):
    k_length, _ = kinds(kilo=True)
    f_length, _ = kinds()
    result = k_length.new(METER, l) - f_length.new(METER, r)
    assert result.get(METER) == pytest.approx(l - r, rel=1e-9, abs=1e-6)


@given(_finite, _finite)
def test_mul_quantity_mixed(l, r):
    k_length, k_mass = kinds(kilo=True)
    f_length, _ = kinds()
    area = f_length.new(METER, l) * k_length.new(METER, r)
    assert area.value == pytest.approx(l * r, rel=1e-9, abs=1e-6)
    assert area.dimension == SYSTEM.dimension(2, 0, 0)
    lm = f_length.new(METER, l) * k_mass.new(KILOGRAM, r)
    assert lm.value == pytest.approx(l * r, rel=1e-9, abs=1e-6)


@given(_finite, _finite)
def test_div_quantity_mixed(l, r):
    assume(abs(r) > 1e-3)
    k_length, _ = kinds(kilo=True)
    f_length, _ = kinds()
    ratio = f_length.new(METER, l) / k_length.new(METER, r)
    assert ratio.value == pytest.approx(l / r, rel=1e-9, abs=1e-9)
    assert ratio.dimension.is_one()


@given(_finite, _finite)
def test_comparisons_match_values(l, r):
    length, _ = kinds()
    a, b = length.new(METER, l), length.new(METER, r)
    assert (a < b) == (l < r)
    assert (a <= b) == (l <= r)
    assert (a > b) == (l > r)
    assert (a == b) == (l == r)


def test_equality_across_units():
    k_length, _ = kinds(kilo=True)
    f_length, _ = kinds()
    assert k_length.new(KILOMETER, 2.0) == f_length.new(METER, 2000.0)
    assert hash(k_length.new(KILOMETER, 2.0)) == hash(f_length.new(METER, 2000.0))


def test_mixed_dimension_errors():
    length, mass = kinds()
    with pytest.raises(TypeError):
        length.new(METER, 1.0) + mass.new(KILOGRAM, 1.0)
    with pytest.raises(TypeError):
        length.new(METER, 1.0) < mass.new(KILOGRAM, 1.0)
    assert (length.new(METER, 1.0) == mass.new(KILOGRAM, 1.0)) is False


def test_integer_division_and_remainder():
    length, _ = kinds(StorageType.I32)
    assert (length.new(METER, -7) / 2).value == -3
    assert (length.new(METER, -7) % length.new(METER, 2)).value == -1
    with pytest.raises(ZeroDivisionError):
        length.new(METER, 1) / 0


def test_float_remainder_and_division_by_zero():
    length, _ = kinds()
    assert (length.new(METER, -7.5) % length.new(METER, 2.0)).value == -1.5
    assert (length.new(METER, 1.0) / 0.0).value == math.inf
    assert math.isnan((length.new(METER, 1.0) % length.new(METER, 0.0)).value)


def test_saturating():
    length, _ = kinds(StorageType.I8)
    assert length.new(METER, 100).saturating_add(length.new(METER, 100)).value == 127
    assert length.new(METER, -100).saturating_sub(length.new(METER, 100)).value == -128
    unsigned, _ = kinds(StorageType.U8)
    assert unsigned.new(METER, 1).saturating_sub(unsigned.new(METER, 5)).value == 0
    with pytest.raises(TypeError):
        kinds()[0].new(METER, 1.0).saturating_add(kinds()[0].new(METER, 1.0))


def test_neg_and_abs():
    length, _ = kinds()
    assert (-length.new(METER, 2.0)).value == -2.0
    assert length.new(METER, -2.0).abs().value == 2.0
    unsigned, _ = kinds(StorageType.U32)
    with pytest.raises(TypeError):
        -unsigned.new(METER, 2)


def test_signum():
    length, _ = kinds()
    assert length.new(METER, -3.0).signum().value == -1.0
    assert length.new(METER, 0.0).signum().value == 1.0
    assert math.isnan(length.new(METER, math.nan).signum().value)
    ints, _ = kinds(StorageType.I32)
    assert ints.new(METER, 0).signum().value == 0


def test_roots_powers_and_recip():
    length, _ = kinds()
    volume = length.new(METER, 2.0).powi(3)
    assert volume.value == 8.0
    assert volume.dimension == SYSTEM.dimension(3, 0, 0)
    root = volume.cbrt()
    assert root.value == pytest.approx(2.0)
    assert root.dimension == SYSTEM.dimension(1, 0, 0)
    area = length.new(METER, 4.0) * length.new(METER, 1.0)
    assert area.sqrt().value == 2.0
    with pytest.raises(ValueError):
        length.new(METER, 4.0).sqrt()
    assert math.isnan((area * -1.0).sqrt().value)
    inverse = length.new(METER, 4.0).recip()
    assert inverse.value == 0.25
    assert inverse.dimension == SYSTEM.dimension(-1, 0, 0)


def test_float_predicates():
    length, _ = kinds()
    assert length.new(METER, math.nan).is_nan()
    assert length.new(METER, math.inf).is_infinite()
    assert not length.new(METER, math.inf).is_finite()
    assert length.new(METER, 1.0).is_normal()
    assert length.new(METER, 0.0).classify() is FpCategory.ZERO
    assert length.new(METER, 1e-310).classify() is FpCategory.SUBNORMAL
    assert length.new(METER, -0.0).is_sign_negative()
    assert length.new(METER, 0.0).is_sign_positive()
    assert length.zero().is_zero()


def test_hypot_max_min_mul_add():
    length, mass = kinds()
    k_length, _ = kinds(kilo=True)
    assert length.new(METER, 3.0).hypot(length.new(METER, 4.0)).value == 5.0
    assert length.new(METER, 3.0).hypot(k_length.new(METER, 4.0)).get(METER) == pytest.approx(5.0)
    assert length.new(METER, 1.0).max(length.new(METER, math.nan)).value == 1.0
    assert length.new(METER, 1.0).min(length.new(METER, 2.0)).value == 1.0
    area = length.new(METER, 1.0) * length.new(METER, 1.0)
    result = length.new(METER, 2.0).mul_add(length.new(METER, 3.0), area)
    assert result.value == 7.0
    with pytest.raises(TypeError):
        length.new(METER, 2.0).mul_add(length.new(METER, 3.0), mass.new(KILOGRAM, 1.0))


def test_quantity_sum():
    length, _ = kinds()
    total = quantity_sum(length.new(METER, v) for v in (1.0, 2.0, 3.5))
    assert total.value == 6.5
    with pytest.raises(ValueError):
        quantity_sum([])


def test_scalar_multiplication_keeps_kind():
    length, _ = kinds()
    doubled = 2.0 * length.new(METER, 3.0)
    assert doubled.value == 6.0
    assert doubled.kind is length