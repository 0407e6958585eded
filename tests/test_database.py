"""Tests for lattice identification."""

from sage.combinat.root_system.cartan_matrix import CartanMatrix
from sage.matrix.constructor import matrix
from sage.rings.integer_ring import ZZ

from codetheta import EvenLattice, LatticeDatabase, named_code


def test_lookup():
    D = LatticeDatabase(max_rank = 8)
    assert D.lookup(named_code('e8').lattice()) == 'E8'
    assert D.lookup(EvenLattice(2 * matrix(ZZ, CartanMatrix(['D', 4])))) == 'D4(2)'
    assert D.lookup(EvenLattice(matrix([[2, 0], [0, 2]]))) is None
    assert 'E7' in D.names()


def test_identify():
    D = LatticeDatabase(max_rank = 8)
    assert D.identify(EvenLattice(matrix(ZZ, 0, 0))) == '0'
    assert D.identify(EvenLattice(matrix([[2, 0], [0, 2]]))) == 'A1^2'
    assert D.identify(EvenLattice(matrix([[4, 0], [0, 4]]))) == '(A1^2)(2)'
    assert D.identify(EvenLattice(matrix([[2, 1], [1, 4]]))) == 'A1 [rank 2, det 7]'
    assert D.identify(EvenLattice(matrix([[4, 1], [1, 4]]))) == 'no roots [rank 2, det 15]'


def test_identify_fixed_sublattices():
    D = LatticeDatabase(max_rank = 8)
    L = EvenLattice(CartanMatrix(['E', 8]))
    g = L.reflection(L.roots()[0])
    assert D.identify(g.fixed_sublattice()) == 'E7'


def test_named_lattices():
    D = LatticeDatabase(max_rank = 24)
    assert D.names()[-5:] == ['BW16', 'D16+', 'N(D24)', 'N(A1^24)', 'Leech']
    entries = dict(D)
    leech = entries['Leech']
    assert leech.determinant() == 1
    assert not leech.roots()
    assert leech.theta_series(3).list() == [1, 0, 196560]
    bw = entries['BW16']
    assert bw.determinant() == 256
    assert not bw.roots()
    assert bw.theta_series(3).list() == [1, 0, 4320]
    assert D.identify(named_code('g24').lattice()) == 'N(A1^24)'
    assert D.identify(named_code('d24+').lattice()) == 'N(D24)'
    assert D.identify(named_code('d16+').lattice()) == 'D16+'
    assert D.identify(named_code('e8^2').lattice()) == 'E8^2'
