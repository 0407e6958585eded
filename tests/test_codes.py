"""Tests for doubly even codes and Construction A."""

import pytest

from sage.matrix.constructor import matrix
from sage.rings.finite_rings.finite_field_constructor import GF

from codetheta import named_code, orbit_types, SelfDualCode


@pytest.mark.parametrize('name, length, weight', [('e8', 8, 4), ('e8^2', 16, 4), ('d16+', 16, 4), ('d24+', 24, 4), ('g24', 24, 8)])
def test_named_codes(name, length, weight):
    C = named_code(name)
    assert C.length() == length
    assert C.is_doubly_even()
    assert C.is_self_dual()
    assert C.minimum_weight() == weight
    assert all(len(X) % 4 == 0 for X in C.supports())


def test_super_code():
    assert named_code('g24').is_super_code()
    assert not named_code('d24+').is_super_code()


def test_invalid_codes():
    with pytest.raises(ValueError):
        SelfDualCode(matrix(GF(2), [[1, 1, 0, 0]]))
    with pytest.raises(ValueError):
        SelfDualCode(matrix(GF(2), [[1, 1, 1, 1, 0, 0], [0, 0, 1, 1, 1, 1], [1, 0, 1, 0, 1, 0]]))
    with pytest.raises(ValueError):
        named_code('e9')


def test_automorphism_groups():
    assert named_code('e8').automorphism_group().order() == 1344
    assert named_code('g24').automorphism_group().order() == 244823040


def test_construction_a():
    for name in ['e8', 'd16+', 'g24']:
        L = named_code(name).lattice()
        assert L.is_unimodular()
        assert L.rank() == named_code(name).length()
    assert named_code('e8').lattice().root_system() == 'E8'
    assert named_code('d16+').lattice().root_system() == 'D16'
    assert named_code('e8^2').lattice().root_system() == 'E8^2'
    assert named_code('g24').lattice().root_system() == 'A1^24'


def test_invariant_codewords():
    C = named_code('g24')
    G = C.automorphism_group()
    assert C.invariant_codewords(orbit_types(G.one(), 24)).dimension() == 12
    assert C.invariant_codewords(orbit_types(G, 24)).dimension() == 1
