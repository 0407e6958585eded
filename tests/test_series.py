"""Tests for q-series and eta products."""

import pytest

from sage.rings.cc import CC
from sage.rings.complex_mpfr import ComplexField
from sage.rings.integer_ring import ZZ
from sage.rings.power_series_ring import PowerSeriesRing
from sage.rings.rational_field import QQ

from codetheta import EtaProduct, frame_shape, QExpansion


def test_frame_shape():
    x = ZZ['x'].gen()
    assert frame_shape((x - 1)**7 * (x + 1)) == EtaProduct({1: 6, 2: 1})
    assert frame_shape((x**2 + x + 1) * (x - 1)) == EtaProduct({3: 1})
    assert frame_shape((x + 1)**8) == EtaProduct({1: -8, 2: 8})
    with pytest.raises(ValueError):
        frame_shape(x**2 - 2)


def test_eta_product_invariants():
    e = EtaProduct({1: 6, 2: 1})
    assert e.degree() == 8
    assert e.weight() == ZZ(7) / 2
    assert e.frame_shape_string() == '1^6 2^1'
    assert e * ~e == EtaProduct({})


def test_discriminant():
    f = EtaProduct({1: 24}).qexp(6)
    assert f.shift() == 1
    assert f.coefficients() == {1: 1, 2: -24, 3: 252, 4: -1472, 5: 4830, 6: -6048}


def test_q_expansion_arithmetic():
    q = PowerSeriesRing(ZZ, 'q').gen()
    f = QExpansion(ZZ(-1) / 3, (1 + 248*q).add_bigoh(3))
    assert f.valuation() == ZZ(-1) / 3
    assert (f + f) == 2 * f
    assert (f - f).series() == 0
    assert (f * ~f).shift() == 0
    with pytest.raises(ValueError):
        f + QExpansion(0, (1 + q).add_bigoh(3))


def test_change_ring():
    q = PowerSeriesRing(ZZ, 'q').gen()
    f = QExpansion(ZZ(-1) / 3, (1 + 248*q).add_bigoh(3)).change_ring(QQ)
    assert f.series().base_ring() is QQ
    assert f.shift() == ZZ(-1) / 3
    assert f.is_integral()


def test_evaluation():
    f = EtaProduct({1: 24}).qexp(30)
    x = f(CC.gen())
    y = f(CC.gen(), bits = 100)
    assert x.parent() is ComplexField(53)
    assert y.parent() is ComplexField(100)
    assert x.real() > 0
    assert abs(x - CC(y)) < 1e-15
    with pytest.raises(ValueError):
        f(-CC.gen())
