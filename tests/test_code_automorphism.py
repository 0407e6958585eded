"""Tests comparing the code approach with the lattice approach."""

import pytest

from codetheta import CodeAutomorphism, EtaProduct, named_code, orbit_types, subgroup_theta_series
from codetheta.code_automorphism import signed_permutation_matrix
from codetheta.codes import support


def twisted_automorphisms(C):
    N = C.length()
    G = C.automorphism_group()
    for sigma in G.conjugacy_classes_representatives():
        V = C.invariant_codewords(orbit_types(sigma, N))
        for X in sorted(set(support(c) for c in V), key = sorted)[:4]:
            yield CodeAutomorphism(C, sigma, X = X)


def test_code_and_lattice_approaches_agree():
    C = named_code('e8')
    for g in twisted_automorphisms(C):
        h = g.lattice_automorphism()
        assert g.order() == h.order()
        assert g.eta_product() == h.eta_product()
        assert g.theta_series(6) == h.theta_series(6)


def test_eta_quotients_have_integer_coefficients():
    C = named_code('e8')
    for g in twisted_automorphisms(C):
        f = g.eta_quotient(6)
        assert f.is_integral()
        assert f.shift() == -g.eta_product().shift()


def test_identity():
    C = named_code('g24')
    g = CodeAutomorphism(C, C.automorphism_group().one())
    assert g.eta_product() == EtaProduct({1: 24})
    assert g.theta_series(3).list() == [1, 48, 195408]
    assert g.eta_quotient(3) == g.lattice_automorphism().eta_quotient(3)


def test_negation_of_all_coordinates():
    C = named_code('e8')
    g = CodeAutomorphism(C, C.automorphism_group().one(), X = range(1, 9))
    assert g.order() == 2
    assert g.theta_series(4).list() == [1, 0, 0, 0]
    assert g.lattice_automorphism().matrix() == -g.lattice_automorphism().matrix() ** 0


def test_invalid_input():
    C = named_code('e8')
    sigma = [s for s in C.automorphism_group().gens() if s.order() > 1][0]
    moved = sigma.cycle_tuples()[0]
    with pytest.raises(ValueError):
        CodeAutomorphism(C, sigma, X = [moved[0]])
    with pytest.raises(ValueError):
        CodeAutomorphism(C, '(1,2)')


def test_signed_permutation_matrix():
    C = named_code('e8')
    sigma = C.automorphism_group().gens()[0]
    P = signed_permutation_matrix(sigma, 8)
    assert P.transpose() * P == P ** 0
    assert P.det() in [1, -1]


def test_subgroups():
    C = named_code('e8')
    G = C.automorphism_group()
    assert subgroup_theta_series(C, G, 3).list() == [1, 0, 2]
    assert subgroup_theta_series(C, G.subgroup([G.one()]), 3) == C.lattice().theta_series(3)
