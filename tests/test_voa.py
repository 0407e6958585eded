"""Tests for order doubling and the trace functions of lifts."""

import pytest

from sage.combinat.root_system.cartan_matrix import CartanMatrix
from sage.matrix.special import identity_matrix
from sage.rings.integer_ring import ZZ

from codetheta import (
    construct_order_doubling_kernel,
    EvenLattice,
    kernel_for_order_doubling,
    OrderDoublingError,
    OrderDoublingFailure,
    voa_character,
)


def e8():
    return EvenLattice(CartanMatrix(['E', 8]))


def test_order_doubling():
    L = e8()
    r = L.reflection(L.roots()[0])
    assert r.has_order_doubling()
    assert r.lift_order() == 4
    minus = L.automorphism(-identity_matrix(ZZ, 8))
    assert not minus.has_order_doubling()
    assert minus.lift_order() == 2


def test_kernel():
    L = e8()
    r = L.reflection(L.roots()[0])
    result = construct_order_doubling_kernel(r, 2)
    assert result
    assert result.index() == 2
    K = kernel_for_order_doubling(r, 2)
    assert K.nrows() == 8
    minus = L.automorphism(-identity_matrix(ZZ, 8))
    assert construct_order_doubling_kernel(minus, 2).index() == 1


def test_typed_failures():
    L = EvenLattice(CartanMatrix(['A', 2]))
    s, t = L.reflection([1, 0]), L.reflection([0, 1])
    g = s * t
    assert g.order() == 3
    result = construct_order_doubling_kernel(g, 2)
    assert not result
    assert result.failure() is OrderDoublingFailure.ODD_ORDER
    with pytest.raises(OrderDoublingError) as e:
        kernel_for_order_doubling(g, 2)
    assert e.value.failure is OrderDoublingFailure.ODD_ORDER
    with pytest.raises(OrderDoublingError) as e:
        kernel_for_order_doubling(s, 1)
    assert e.value.failure is OrderDoublingFailure.ODD_POWER
    with pytest.raises(ValueError):
        kernel_for_order_doubling(s, 1)


def test_fallback_to_eta_quotient():
    L = EvenLattice(CartanMatrix(['A', 2]))
    g = L.reflection([1, 0]) * L.reflection([0, 1])
    assert voa_character(g, 1, prec = 5) == g.eta_quotient(5)
    assert voa_character(g, 2, prec = 5) == g.eta_quotient(5, k = 2)


def test_characters_of_a_reflection():
    L = e8()
    r = L.reflection(L.roots()[0])
    chi = r.voa_characters(prec = 4)
    assert sorted(chi) == [1, 2, 3, 4]
    assert chi[4] == L.identity().eta_quotient(4)
    assert chi[1] == r.eta_quotient(4)
    assert chi[2].series().list()[:2] == [1, 24]
    assert all(f.is_integral() for f in chi.values())
