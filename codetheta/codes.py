r"""

Doubly even self-dual binary codes and their automorphism groups

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

from sage.coding.golay_code import GolayCode
from sage.coding.linear_code import LinearCode
from sage.matrix.constructor import matrix
from sage.matrix.special import block_diagonal_matrix
from sage.modules.free_module import span
from sage.rings.finite_rings.finite_field_constructor import GF
from sage.rings.integer import Integer


def support(c):
    r"""
    The set of positions in {1,...,N} at which the codeword c is nonzero.

    EXAMPLES::

        sage: from codetheta import *
        sage: support(vector(GF(2), [1, 0, 1, 1, 0]))
        frozenset({1, 3, 4})
    """
    return frozenset(i + 1 for i, x in enumerate(c) if x)


class SelfDualCode(object):
    r"""
    The SelfDualCode class represents doubly even binary linear codes, usually self-dual.

    INPUT:

    Construct a SelfDualCode using SelfDualCode(M), where

    - ``M`` -- a generator matrix over GF(2) (or an integer matrix that is reduced mod 2)

    - ``name`` -- optional (default None); a name used when printing

    The rows of M must span a doubly even code (every weight divisible by 4); otherwise we raise a ValueError, since the Construction A lattice would not be even.

    EXAMPLES::

        sage: from codetheta import *
        sage: C = named_code('e8')
        sage: C
        Binary code e8 of length 8 and dimension 4
        sage: C.minimum_weight(), C.is_self_dual(), C.is_super_code()
        (4, True, False)
        sage: C.automorphism_group().order()
        1344
    """

    def __init__(self, generator_matrix, name = None):
        M = matrix(GF(2), generator_matrix)
        M = M.matrix_from_rows(M.pivot_rows())
        for i, x in enumerate(M.rows()):
            if x.hamming_weight() % 4:
                raise ValueError('This code is not doubly even.')
            if any(x.dot_product(y) for y in M.rows()[:i]):
                raise ValueError('This code is not self-orthogonal.')
        self.__generator_matrix = M
        self.__name = name

    def __repr__(self):
        if self.__name:
            return 'Binary code %s of length %d and dimension %d'%(self.__name, self.length(), self.dimension())
        return 'Binary code of length %d and dimension %d'%(self.length(), self.dimension())

    def __eq__(self, other):
        try:
            return self.length() == other.length() and self.generator_matrix().row_space() == other.generator_matrix().row_space()
        except AttributeError:
            return False

    def __hash__(self):
        return hash(tuple(map(tuple, self.generator_matrix().echelon_form().rows())))

    def __add__(self, other):
        r"""
        Direct sum of codes.
        """
        M = block_diagonal_matrix([self.generator_matrix(), other.generator_matrix()])
        return SelfDualCode(M)

    ## invariants

    def dimension(self):
        return self.__generator_matrix.nrows()

    def generator_matrix(self):
        return self.__generator_matrix

    def length(self):
        return self.__generator_matrix.ncols()

    def linear_code(self):
        r"""
        The underlying Sage LinearCode.
        """
        try:
            return self.__linear_code
        except AttributeError:
            self.__linear_code = LinearCode(self.__generator_matrix)
            return self.__linear_code

    def minimum_weight(self):
        try:
            return self.__minimum_weight
        except AttributeError:
            self.__minimum_weight = Integer(self.linear_code().minimum_distance())
            return self.__minimum_weight

    def name(self):
        return self.__name

    def is_doubly_even(self):
        r"""
        Whether every codeword has weight divisible by 4.

        For a self-orthogonal code it is enough to check the generators, since wt(x + y) = wt(x) + wt(y) - 2*|x * y|.
        """
        rows = self.__generator_matrix.rows()
        return all(x.hamming_weight() % 4 == 0 for x in rows) and not any(x.dot_product(y) for x in rows for y in rows)

    def is_self_dual(self):
        return self.length() == 2 * self.dimension()

    def is_super_code(self):
        r"""
        Whether the minimum weight is greater than 4.

        In that case the only roots of the Construction A lattice are the vectors +/- 2e_i, so its automorphism group is the group 2^N : Aut(C) of signed permutations and every conjugacy class is reached from the code.
        """
        return self.minimum_weight() > 4

    ## codewords

    def codewords(self):
        r"""
        The list of all codewords.
        """
        return list(self.__generator_matrix.row_space())

    def supports(self):
        r"""
        The list of supports of all codewords, as subsets of {1,...,N}.

        EXAMPLES::

            sage: from codetheta import *
            sage: sorted(len(x) for x in named_code('e8').supports())
            [0, 4, 4, 4, 4, 4, 4, 4, 4, 4, 4, 4, 4, 4, 4, 8]
        """
        return [support(c) for c in self.codewords()]

    def invariant_codewords(self, orbits):
        r"""
        Compute the codewords that are constant on each of the given orbits.

        INPUT:
        - ``orbits`` -- a list of subsets (or Orbit's) that partition {1,...,N}

        OUTPUT: a vector space over GF(2)
        """
        N = self.length()
        V = span([[int(i + 1 in o) for i in range(N)] for o in orbits], GF(2))
        return self.__generator_matrix.row_space().intersection(V)

    ## groups

    def automorphism_group(self):
        r"""
        The group of coordinate permutations of {1,...,N} that preserve the code.
        """
        try:
            return self.__automorphism_group
        except AttributeError:
            self.__automorphism_group = self.linear_code().permutation_automorphism_group()
            return self.__automorphism_group

    def initialize(self, verbose = False):
        r"""
        Compute the data the rest of the package works from.

        OUTPUT: a tuple (gens, codewords, N) where gens generate the automorphism group, codewords is the list of all codewords and N is the length.
        """
        if verbose:
            print('I am computing the automorphism group of %s.'%self)
        G = self.automorphism_group()
        if verbose:
            print('The automorphism group has order %d.'%G.order())
        return G.gens(), self.codewords(), self.length()

    ## constructions

    def automorphism(self, sigma, X = None):
        r"""
        The automorphism epsilon_X * sigma of the Construction A lattice.

        See CodeAutomorphism.
        """
        from .code_automorphism import CodeAutomorphism
        return CodeAutomorphism(self, sigma, X = X)

    def lattice(self):
        r"""
        The Construction A lattice {x in ZZ^N : x mod 2 in C}, with the inner product x*y / 2.
        """
        try:
            return self.__lattice
        except AttributeError:
            from .lattice import CodeLattice
            self.__lattice = CodeLattice(self)
            return self.__lattice


## named codes

def _hamming_code():
    return matrix(GF(2), [[1, 1, 1, 1, 0, 0, 0, 0], [0, 0, 1, 1, 1, 1, 0, 0], [0, 0, 0, 0, 1, 1, 1, 1], [1, 0, 1, 0, 1, 0, 1, 0]])

def _d_code(n):
    r"""
    The code d_n^+ of length n (n divisible by 8): tetrads 1111 shifted by two, glued with (01)^(n/2).
    """
    m = n // 2
    rows = [[int(2 * i <= j < 2 * i + 4) for j in range(n)] for i in range(m - 1)]
    rows.append([j % 2 for j in range(n)])
    return matrix(GF(2), rows)

def _golay_code():
    return GolayCode(GF(2), extended = True).generator_matrix()

_named_codes = {
    'e8' : _hamming_code,
    'e8^2' : lambda: block_diagonal_matrix([_hamming_code(), _hamming_code()]),
    'd16+' : lambda: _d_code(16),
    'd24+' : lambda: _d_code(24),
    'g24' : _golay_code,
}

def named_code(name):
    r"""
    Built-in doubly even self-dual codes.

    INPUT:
    - ``name`` -- one of 'e8' (the extended Hamming code), 'e8^2', 'd16+', 'd24+', 'g24' (the extended Golay code)

    EXAMPLES::

        sage: from codetheta import *
        sage: named_code('g24')
        Binary code g24 of length 24 and dimension 12
        sage: named_code('g24').minimum_weight()
        8
    """
    try:
        f = _named_codes[name]
    except KeyError:
        raise ValueError('Unknown code %s. The named codes are %s.'%(name, ', '.join(_named_codes))) from None
    return SelfDualCode(f(), name = name)
