r"""

Even lattices, Construction A and lattice automorphisms

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

import cypari2
pari = cypari2.Pari()

from collections import Counter

from sage.arith.functions import lcm
from sage.groups.matrix_gps.finitely_generated import MatrixGroup
from sage.matrix.constructor import matrix
from sage.matrix.special import identity_matrix
from sage.modules.free_module_element import vector
from sage.rings.integer import Integer
from sage.rings.integer_ring import ZZ
from sage.rings.power_series_ring import PowerSeriesRing
from sage.rings.rational_field import QQ

from .code_automorphism import signed_permutation_matrix
from .series import frame_shape, QExpansion


class EvenLattice(object):
    r"""
    The EvenLattice class represents positive-definite even lattices.

    INPUT:

    Construct an EvenLattice using EvenLattice(S), where

    - ``S`` -- a symmetric integral matrix with even diagonal (the Gram matrix). The norm of a vector x (in coordinates) is x*S*x.

    - ``name`` -- optional (default None)

    EXAMPLES::

        sage: from codetheta import *
        sage: L = EvenLattice(CartanMatrix(['E', 8]))
        sage: L
        Even lattice of rank 8 and determinant 1
        sage: L.theta_series(5)
        1 + 240*q + 2160*q^2 + 6720*q^3 + 17520*q^4 + O(q^5)
        sage: L.root_system()
        'E8'
    """

    def __init__(self, gram_matrix, name = None):
        S = matrix(QQ, gram_matrix)
        if S.denominator() != 1:
            raise ValueError('This lattice is not integral.')
        S = S.change_ring(ZZ)
        if S != S.transpose():
            raise ValueError('The Gram matrix is not symmetric.')
        if any(S[i, i] % 2 for i in range(S.nrows())):
            raise ValueError('This lattice is not even.')
        if S.nrows() and not S.is_positive_definite():
            raise ValueError('This lattice is not positive-definite.')
        self.__gram_matrix = S
        self.__name = name

    def __repr__(self):
        if self.__name:
            return 'Even lattice %s of rank %d and determinant %d'%(self.__name, self.rank(), self.determinant())
        return 'Even lattice of rank %d and determinant %d'%(self.rank(), self.determinant())

    def __eq__(self, other):
        try:
            return self.gram_matrix() == other.gram_matrix()
        except AttributeError:
            return False

    def __hash__(self):
        return hash(tuple(self.__gram_matrix.list()))

    def __add__(self, other):
        r"""
        Orthogonal direct sum.
        """
        from sage.matrix.special import block_diagonal_matrix
        return EvenLattice(block_diagonal_matrix([self.gram_matrix(), other.gram_matrix()]))

    ## invariants

    def determinant(self):
        try:
            return self.__determinant
        except AttributeError:
            self.__determinant = self.__gram_matrix.determinant()
            return self.__determinant

    def gram_matrix(self):
        return self.__gram_matrix

    def is_unimodular(self):
        return self.determinant() == 1

    def name(self):
        return self.__name

    def rank(self):
        return self.__gram_matrix.nrows()

    def norm(self, v):
        r"""
        The norm v*S*v of a vector given in coordinates.
        """
        v = vector(ZZ, v)
        return v * self.__gram_matrix * v

    def theta_series(self, prec = 20):
        r"""
        Compute the theta series sum_x q^(x*S*x / 2) up to precision 'prec'.

        ALGORITHM: PARI qfrep with flag 1 counts vectors of norms 2, 4, ..., 2*(prec - 1) up to sign.

        EXAMPLES::

            sage: from codetheta import *
            sage: EvenLattice(matrix([[2, 1], [1, 2]])).theta_series(6)
            1 + 6*q + 6*q^3 + 6*q^4 + O(q^6)
        """
        R = PowerSeriesRing(ZZ, 'q')
        if not self.rank() or prec <= 1:
            return R(1).add_bigoh(prec)
        c = pari(self.__gram_matrix).qfrep(prec - 1, 1)
        return R([1] + [2 * ZZ(x) for x in c]).add_bigoh(prec)

    ## roots

    def roots(self):
        r"""
        The vectors of norm 2, up to sign (in coordinates).
        """
        try:
            return self.__roots
        except AttributeError:
            if not self.rank():
                self.__roots = []
                return self.__roots
            _, _, vs_matrix = pari(self.__gram_matrix).qfminim(2)
            self.__roots = [vector(ZZ, v) for v in vs_matrix.sage().columns()]
            return self.__roots

    def root_sublattice_basis(self):
        r"""
        A basis (in coordinates) of the sublattice spanned by the roots.
        """
        R = self.roots()
        if not R:
            return matrix(ZZ, 0, self.rank())
        B = matrix(ZZ, R).echelon_form()
        return B.matrix_from_rows(range(B.rank()))

    def is_generated_by_roots(self):
        B = self.root_sublattice_basis()
        if B.nrows() < self.rank():
            return False
        return (B * self.__gram_matrix * B.transpose()).determinant() == self.determinant()

    def root_system(self):
        r"""
        The root system of self, as a string such as 'E8^2' or 'D10 + E7^2'.

        The irreducible components are read off from the number of roots and the rank of each connected component.

        EXAMPLES::

            sage: from codetheta import *
            sage: named_code('g24').lattice().root_system()
            'A1^24'
            sage: EvenLattice(matrix([[2, 1], [1, 4]])).root_system()
            'A1'
        """
        R = self.roots()
        S = self.__gram_matrix
        n = len(R)
        seen = [False] * n
        components = Counter()
        for i in range(n):
            if seen[i]:
                continue
            seen[i] = True
            stack = [i]
            comp = []
            while stack:
                j = stack.pop()
                comp.append(R[j])
                Sj = S * R[j]
                for h in range(n):
                    if not seen[h] and Sj * R[h]:
                        seen[h] = True
                        stack.append(h)
            components[_root_type(matrix(ZZ, comp).rank(), len(comp))] += 1
        order = {'E' : 0, 'D' : 1, 'A' : 2}
        L = sorted(components.items(), key = lambda x: (order[x[0][0]], -x[0][1]))
        return ' + '.join('%s%d'%t + ('^%d'%m if m > 1 else '') for t, m in L)

    ## isometries

    def is_isometric(self, other):
        r"""
        Test whether self and other are isometric (PARI qfisom).
        """
        if self.rank() != other.rank() or self.determinant() != other.determinant():
            return False
        if not self.rank():
            return True
        return bool(pari(self.__gram_matrix).qfisom(other.gram_matrix()))

    def automorphism(self, A):
        return LatticeAutomorphism(self, A)

    def automorphism_group(self):
        try:
            return self.__automorphism_group
        except AttributeError:
            self.__automorphism_group = LatticeAutomorphismGroup(self)
            return self.__automorphism_group

    def identity(self):
        return LatticeAutomorphism(self, identity_matrix(ZZ, self.rank()), check = False)

    def reflection(self, r):
        r"""
        The reflection x -> x - <x, r> r in a root r (given in coordinates).

        EXAMPLES::

            sage: from codetheta import *
            sage: L = EvenLattice(CartanMatrix(['A', 2]))
            sage: L.reflection([1, 0]).matrix()
            [-1  0]
            [ 1  1]
        """
        r = vector(ZZ, r)
        S = self.__gram_matrix
        if self.norm(r) != 2:
            raise ValueError('%s is not a root.'%r)
        A = identity_matrix(ZZ, self.rank()) - (S * r).column() * r.row()
        return LatticeAutomorphism(self, A, check = False)

    ## sublattices

    def sublattice(self, basis, name = None):
        r"""
        The sublattice spanned by the rows of 'basis' (in coordinates of self).
        """
        B = matrix(ZZ, basis)
        return EvenLattice(B * self.__gram_matrix * B.transpose(), name = name)

    def rescaled(self, a):
        r"""
        The lattice with Gram matrix a*S.
        """
        return EvenLattice(a * self.__gram_matrix)


def _root_type(n, m):
    r"""
    Identify an irreducible simply-laced root system from its rank n and its number m of roots up to sign.
    """
    if m == n * (n + 1) // 2:
        return ('A', n)
    elif n >= 4 and m == n * (n - 1):
        return ('D', n)
    elif (n, m) in [(6, 36), (7, 63), (8, 120)]:
        return ('E', n)
    raise ValueError('There is no irreducible root system of rank %d with %d positive roots.'%(n, m))


class CodeLattice(EvenLattice):
    r"""
    The Construction A lattice of a doubly even binary code C.

    This is {x in ZZ^N : x mod 2 in C} with the inner product x*y / 2. Vectors are written in the coordinates of a basis (the Hermite normal form of the rows of C and 2*ZZ^N); basis_matrix() converts to ZZ^N.

    EXAMPLES::

        sage: from codetheta import *
        sage: L = named_code('e8').lattice()
        sage: L.determinant(), L.root_system()
        (1, 'E8')
        sage: L.automorphism_group().order()
        696729600
    """

    def __init__(self, code):
        N = code.length()
        rows = [[x.lift() for x in c] for c in code.generator_matrix().rows()]
        rows.extend((2 * identity_matrix(ZZ, N)).rows())
        B = matrix(ZZ, rows).echelon_form()
        B = B.matrix_from_rows(range(N))
        super().__init__(B * B.transpose() / 2)
        self.__code = code
        self.__basis_matrix = B

    def __repr__(self):
        return 'Construction A lattice of %s'%self.__code

    def basis_matrix(self):
        return self.__basis_matrix

    def code(self):
        return self.__code

    def code_automorphism(self, sigma, X = None):
        r"""
        The lattice automorphism epsilon_X * sigma, where sigma permutes coordinates and epsilon_X negates the coordinates in X.
        """
        B = self.__basis_matrix
        P = signed_permutation_matrix(sigma, self.__code.length(), X = X)
        A = B * P * B.inverse()
        if A.denominator() != 1:
            raise ValueError('This permutation is not an automorphism of the code.')
        return LatticeAutomorphism(self, A.change_ring(ZZ), check = False)


class LatticeAutomorphism(object):
    r"""
    Automorphisms of even lattices.

    INPUT:

    - ``lattice`` -- an EvenLattice with Gram matrix S

    - ``A`` -- an integral matrix with A*S*A^T = S. It acts on coordinate row vectors by x -> x*A.

    - ``check`` -- (default True) whether to test A*S*A^T = S

    EXAMPLES::

        sage: from codetheta import *
        sage: L = EvenLattice(CartanMatrix(['E', 8]))
        sage: g = L.automorphism(-identity_matrix(8))
        sage: g.order(), g.eta_product()
        (2, eta(q)^-8*eta(q^2)^8)
        sage: g.eta_quotient(5)
        q^(-1/3) - 8*q^(2/3) + 28*q^(5/3) - 64*q^(8/3) + 134*q^(11/3) + O(q^(14/3))
    """

    def __init__(self, lattice, A, check = True):
        A = matrix(ZZ, A)
        if check:
            S = lattice.gram_matrix()
            if A * S * A.transpose() != S:
                raise ValueError('This is not an automorphism of the lattice.')
        self.__lattice = lattice
        self.__matrix = A

    def __repr__(self):
        return 'Automorphism of order %d of %s'%(self.order(), self.__lattice)

    def __eq__(self, other):
        try:
            return self.lattice() == other.lattice() and self.matrix() == other.matrix()
        except AttributeError:
            return False

    def __hash__(self):
        return hash(tuple(self.__matrix.list()))

    def __call__(self, v):
        return vector(ZZ, v) * self.__matrix

    def __mul__(self, other):
        r"""
        Composition: (g * h)(x) = g(h(x)).
        """
        return LatticeAutomorphism(self.__lattice, other.matrix() * self.__matrix, check = False)

    def __invert__(self):
        return LatticeAutomorphism(self.__lattice, self.__matrix.inverse().change_ring(ZZ), check = False)

    def __pow__(self, n):
        if n < 0:
            return (~self).__pow__(-n)
        n = n % self.order()
        return LatticeAutomorphism(self.__lattice, self.__matrix ** n, check = False)

    def lattice(self):
        return self.__lattice

    def matrix(self):
        return self.__matrix

    ## invariants

    def characteristic_polynomial(self):
        try:
            return self.__charpoly
        except AttributeError:
            self.__charpoly = self.__matrix.charpoly()
            return self.__charpoly

    def order(self):
        r"""
        The order of self, read off from the cyclotomic factors of the characteristic polynomial.
        """
        try:
            return self.__order
        except AttributeError:
            p = self.characteristic_polynomial()
            d = [f.is_cyclotomic(certificate = True) for f, _ in p.factor()]
            if not all(d):
                raise ValueError('This automorphism does not have finite order.')
            self.__order = Integer(lcm(d)) if d else Integer(1)
            return self.__order

    def eta_product(self):
        r"""
        The eta product attached to the frame shape of self.
        """
        try:
            return self.__eta_product
        except AttributeError:
            self.__eta_product = frame_shape(self.characteristic_polynomial())
            return self.__eta_product
    frame_shape = eta_product

    def fixed_sublattice_basis(self, k = 1):
        r"""
        A basis (in coordinates) of the sublattice fixed by self^k.
        """
        A = (self ** k).matrix()
        return (A - identity_matrix(ZZ, A.nrows())).left_kernel().basis_matrix()

    def fixed_sublattice(self, k = 1):
        return self.__lattice.sublattice(self.fixed_sublattice_basis(k = k))

    def theta_series(self, prec = 20, k = 1):
        r"""
        The theta series of the sublattice fixed by self^k.
        """
        return self.fixed_sublattice(k = k).theta_series(prec)

    def eta_quotient(self, prec = 20, k = 1, verbose = False):
        r"""
        Compute the quotient of the fixed-sublattice theta series of self^k by the eta product of self^k.

        INPUT:
        - ``prec`` -- precision (default 20)
        - ``k`` -- the power (default 1)
        - ``verbose`` -- boolean (default False)

        OUTPUT: QExpansion

        EXAMPLES::

            sage: from codetheta import *
            sage: L = EvenLattice(CartanMatrix(['E', 8]))
            sage: L.identity().eta_quotient(4)
            q^(-1/3) + 248*q^(2/3) + 4124*q^(5/3) + 34752*q^(8/3) + O(q^(11/3))
        """
        g = self ** k
        if verbose:
            print('I am computing the fixed sublattice of an automorphism with frame shape %s.'%g.eta_product().frame_shape_string())
        theta = g.theta_series(prec)
        return QExpansion(0, theta) / g.eta_product().qexp(prec)

    ## vertex operator algebras

    def has_order_doubling(self):
        r"""
        Whether lifts of self to the lattice vertex operator algebra have order twice the order of self.

        EXAMPLES::

            sage: from codetheta import *
            sage: L = EvenLattice(CartanMatrix(['E', 8]))
            sage: L.reflection(L.roots()[0]).has_order_doubling()
            True
            sage: L.automorphism(-identity_matrix(8)).has_order_doubling()
            False
        """
        from .voa import has_order_doubling
        return has_order_doubling(self)

    def lift_order(self):
        n = self.order()
        if self.has_order_doubling():
            return n + n
        return n

    def voa_character(self, k = 1, prec = 20, verbose = False):
        from .voa import voa_character
        return voa_character(self, k = k, prec = prec, verbose = verbose)

    def voa_characters(self, prec = 20, verbose = False):
        from .voa import voa_characters
        return voa_characters(self, prec = prec, verbose = verbose)


class LatticeAutomorphismGroup(object):
    r"""
    The automorphism group of an even lattice, computed with PARI qfauto.
    """

    def __init__(self, lattice):
        self.__lattice = lattice
        if lattice.rank():
            o, gens = pari(lattice.gram_matrix()).qfauto()
            self.__order = Integer(o)
            self.__gens = [LatticeAutomorphism(lattice, matrix(ZZ, g.sage()).transpose(), check = False) for g in gens]
        else:
            self.__order = Integer(1)
            self.__gens = []

    def __repr__(self):
        return 'Automorphism group of order %d of %s'%(self.__order, self.__lattice)

    def __contains__(self, g):
        try:
            A, L = g.matrix(), g.lattice()
        except AttributeError:
            return False
        S = self.__lattice.gram_matrix()
        return L == self.__lattice and A * S * A.transpose() == S

    def __len__(self):
        return int(self.__order)

    def gens(self):
        return list(self.__gens)

    def lattice(self):
        return self.__lattice

    def order(self):
        return self.__order

    def group(self):
        r"""
        The group as a Sage MatrixGroup over ZZ (acting on coordinate row vectors from the right).
        """
        try:
            return self.__group
        except AttributeError:
            n = self.__lattice.rank()
            gens = [g.matrix() for g in self.__gens] or [identity_matrix(ZZ, n)]
            self.__group = MatrixGroup(gens)
            return self.__group

    def conjugacy_classes_representatives(self, verbose = False):
        r"""
        A list of LatticeAutomorphism's representing the conjugacy classes.

        This calls GAP and can be slow for large groups.
        """
        if verbose:
            print('I am computing the conjugacy classes of a group of order %d.'%self.__order)
        L = self.__lattice
        return [LatticeAutomorphism(L, g.matrix(), check = False) for g in self.group().conjugacy_classes_representatives()]
