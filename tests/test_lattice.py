"""Tests for even lattices and their automorphisms."""

import pytest

from sage.combinat.root_system.cartan_matrix import CartanMatrix
from sage.matrix.constructor import matrix
from sage.matrix.special import identity_matrix
from sage.rings.integer_ring import ZZ

from codetheta import EtaProduct, EvenLattice, named_code


def e8():
    return EvenLattice(CartanMatrix(['E', 8]))


def test_theta_series():
    f = e8().theta_series(5)
    assert f.list() == [1, 240, 2160, 6720, 17520]
    L = EvenLattice(matrix(ZZ, 0, 0))
    assert L.theta_series(3).list() == [1]


def test_invalid_lattices():
    with pytest.raises(ValueError):
        EvenLattice(matrix([[1]]))
    with pytest.raises(ValueError):
        EvenLattice(matrix([[2, 3], [3, 2]]))


def test_automorphism_group():
    A = e8().automorphism_group()
    assert A.order() == 696729600
    for g in A.gens():
        S = e8().gram_matrix()
        assert g.matrix() * S * g.matrix().transpose() == S


def test_minus_one():
    L = e8()
    g = L.automorphism(-identity_matrix(ZZ, 8))
    assert g.order() == 2
    assert g.eta_product() == EtaProduct({1: -8, 2: 8})
    assert g.fixed_sublattice().rank() == 0
    f = g.eta_quotient(5)
    assert f.shift() == ZZ(-1) / 3
    assert f.series().list() == [1, -8, 28, -64, 134]


def test_identity_eta_quotient():
    L = e8()
    f = L.identity().eta_quotient(4)
    assert f.series().list() == [1, 248, 4124, 34752]


def test_reflection():
    L = e8()
    r = L.roots()[0]
    g = L.reflection(r)
    assert g.order() == 2
    assert g(r) == -r
    assert g.eta_product() == EtaProduct({1: 6, 2: 1})
    assert g.fixed_sublattice().root_system() == 'E7'
    assert (g * g).order() == 1
    with pytest.raises(ValueError):
        L.reflection(2 * r)


def test_non_automorphism():
    with pytest.raises(ValueError):
        e8().automorphism(2 * identity_matrix(ZZ, 8))


def test_isometry():
    assert named_code('e8').lattice().is_isometric(e8())
    assert not named_code('d16+').lattice().is_isometric(e8() + e8())
    assert named_code('e8^2').lattice().is_isometric(e8() + e8())


def test_roots():
    assert len(e8().roots()) == 120
    assert len(named_code('g24').lattice().roots()) == 24
    assert EvenLattice(CartanMatrix(['D', 4])).root_system() == 'D4'
    assert (EvenLattice(CartanMatrix(['A', 3])) + EvenLattice(CartanMatrix(['E', 6]))).root_system() == 'E6 + A3'


def test_group_membership():
    L = e8()
    A = L.automorphism_group()
    assert L.reflection(L.roots()[0]) in A
    assert L.identity() in A
    assert EvenLattice(CartanMatrix(['A', 2])).identity() not in A
    assert None not in A


def test_conjugacy_classes():
    L = EvenLattice(CartanMatrix(['A', 2]))
    A = L.automorphism_group()
    assert A.order() == 12
    reps = A.conjugacy_classes_representatives()
    assert len(reps) == 6
    assert all(g in A for g in reps)
    assert sorted(g.order() for g in reps) == [1, 2, 2, 2, 3, 6]
    assert len(set(g.eta_product() for g in reps)) == 5
