r"""

A small database of named lattices, used to identify fixed sublattices

"""

# ****************************************************************************
#       Copyright (C) 2026 The codetheta developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 2 of the License, or
# (at your option) any later version.
#                  https://www.gnu.org/licenses/
# ****************************************************************************

from sage.coding.reed_muller_code import ReedMullerCode
from sage.combinat.root_system.cartan_matrix import CartanMatrix
from sage.matrix.constructor import matrix
from sage.matrix.special import identity_matrix
from sage.rings.finite_rings.finite_field_constructor import GF
from sage.rings.integer_ring import ZZ

from .codes import named_code
from .lattice import EvenLattice


def _root_lattices(max_rank):
    for n in range(1, max_rank + 1):
        yield 'A%d'%n, ['A', n]
        if n >= 4:
            yield 'D%d'%n, ['D', n]
        if n in [6, 7, 8]:
            yield 'E%d'%n, ['E', n]

def _gram_matrix(rows, N, scale):
    r"""
    The Gram matrix B*B^T / scale, where B is a basis of the span of 'rows' in ZZ^N.
    """
    B = matrix(ZZ, rows).echelon_form()
    B = B.matrix_from_rows(range(N))
    return B * B.transpose() / scale

def _leech_lattice():
    r"""
    The Leech lattice, as the vectors x in ZZ^24 generated by 2*g (g in the Golay code), 4*(e_i + e_j) and (-3, 1, ..., 1), with the inner product x*y / 8.
    """
    N = 24
    rows = [[2 * x.lift() for x in c] for c in named_code('g24').generator_matrix().rows()]
    I = identity_matrix(ZZ, N)
    rows.extend(4 * (I[i] + I[j]) for i in range(N) for j in range(i + 1, N))
    rows.append([-3] + [1] * (N - 1))
    return EvenLattice(_gram_matrix(rows, N, 8), name = 'Leech')

def _barnes_wall_lattice():
    r"""
    The Barnes-Wall lattice BW16, by Construction D from the Reed-Muller codes RM(1, 4) in RM(3, 4), with the inner product x*y / 2.
    """
    N = 16
    rows = [[x.lift() for x in c] for c in ReedMullerCode(GF(2), 1, 4).generator_matrix().rows()]
    rows.extend([2 * x.lift() for x in c] for c in ReedMullerCode(GF(2), 3, 4).generator_matrix().rows())
    rows.extend((4 * identity_matrix(ZZ, N)).rows())
    return EvenLattice(_gram_matrix(rows, N, 2), name = 'BW16')

_named_lattices = [
    ('BW16', 16, _barnes_wall_lattice),
    ('D16+', 16, lambda: named_code('d16+').lattice()),
    ('N(D24)', 24, lambda: named_code('d24+').lattice()),
    ('N(A1^24)', 24, lambda: named_code('g24').lattice()),
    ('Leech', 24, _leech_lattice),
]


class LatticeDatabase(object):
    r"""
    Irreducible root lattices A_n (n >= 1), D_n (n >= 4) and E6, E7, E8 up to the given rank, their rescalings by 2 up to rank 8, and the lattices BW16, D16+, the Niemeier lattices N(D24) and N(A1^24) and the Leech lattice when max_rank allows them.

    INPUT:
    - ``max_rank`` -- (default 24)

    EXAMPLES::

        sage: from codetheta import *
        sage: D = LatticeDatabase(max_rank = 8)
        sage: D
        Database of 32 lattices of rank at most 8
        sage: D.lookup(named_code('e8').lattice())
        'E8'
        sage: D.identify(EvenLattice(matrix([[2, 0], [0, 2]])))
        'A1^2'
        sage: LatticeDatabase(max_rank = 16).names()[-2:]
        ['BW16', 'D16+']
    """

    def __init__(self, max_rank = 24):
        entries = []
        for name, t in _root_lattices(max_rank):
            S = matrix(ZZ, CartanMatrix(t))
            entries.append((name, EvenLattice(S, name = name)))
        for name, t in _root_lattices(min(max_rank, 8)):
            name = '%s(2)'%name
            S = 2 * matrix(ZZ, CartanMatrix(t))
            entries.append((name, EvenLattice(S, name = name)))
        for name, n, f in _named_lattices:
            if n <= max_rank:
                entries.append((name, f()))
        self.__entries = entries
        self.__max_rank = max_rank

    def __repr__(self):
        return 'Database of %d lattices of rank at most %d'%(len(self), self.__max_rank)

    def __iter__(self):
        return iter(self.__entries)

    def __len__(self):
        return len(self.__entries)

    def names(self):
        return [name for name, _ in self.__entries]

    def max_rank(self):
        return self.__max_rank

    def lookup(self, L):
        r"""
        Return the name of a database entry isometric to L, or None.

        Entries are compared by rank, determinant, number of roots and root system before PARI qfisom is called.
        """
        for name, M in self.__entries:
            if M.rank() != L.rank() or M.determinant() != L.determinant():
                continue
            if M.gram_matrix() == L.gram_matrix():
                return name
            if len(M.roots()) != len(L.roots()) or M.root_system() != L.root_system():
                continue
            if L.is_isometric(M):
                return name
        return None

    def _name(self, L, verbose = False):
        name = self.lookup(L)
        if name is not None:
            return name
        if verbose:
            print('I did not find %s in the database.'%L)
        if L.is_generated_by_roots():
            return L.root_system()
        S = L.gram_matrix()
        if all(x % 2 == 0 for x in S.list()) and all(S[i, i] % 4 == 0 for i in range(S.nrows())):
            name = self._name(L.rescaled(ZZ(1) / 2), verbose = verbose)
            if name is None:
                return None
            if name.endswith('(2)') and ' ' not in name:
                return '%s(4)'%name[:-3]
            if ' ' in name or '^' in name:
                return '(%s)(2)'%name
            return '%s(2)'%name
        return None

    def identify(self, L, verbose = False):
        r"""
        Describe the lattice L by a name.

        We try (in order) a database lookup, the root system of L if L is generated by its roots, and the name of L rescaled by 1/2 followed by '(2)'. The zero lattice is called '0'. A lattice that is not found this way is described by its root system, rank and determinant.

        OUTPUT: a string

        EXAMPLES::

            sage: from codetheta import *
            sage: D = LatticeDatabase(max_rank = 8)
            sage: D.identify(EvenLattice(CartanMatrix(['E', 8])) + EvenLattice(CartanMatrix(['A', 1])))
            'E8 + A1'
            sage: D.identify(EvenLattice(matrix([[8, -4], [-4, 8]])))
            'A2(4)'
            sage: D.identify(EvenLattice(matrix([[2, 1], [1, 4]])))
            'A1 [rank 2, det 7]'
            sage: D.identify(EvenLattice(matrix([[4, 1], [1, 4]])))
            'no roots [rank 2, det 15]'
        """
        if not L.rank():
            return '0'
        name = self._name(L, verbose = verbose)
        if name is not None:
            return name
        return '%s [rank %d, det %d]'%(L.root_system() or 'no roots', L.rank(), L.determinant())
