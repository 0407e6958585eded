r"""

Lifts of lattice automorphisms to lattice vertex operator algebras: order doubling and trace functions

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

from enum import Enum

from sage.matrix.constructor import matrix
from sage.matrix.special import identity_matrix
from sage.rings.finite_rings.finite_field_constructor import GF
from sage.rings.integer_ring import ZZ
from sage.rings.polynomial.polynomial_ring_constructor import PolynomialRing

from .series import QExpansion


class OrderDoublingFailure(Enum):
    r"""
    The reasons why the kernel construction for order doubling does not apply.
    """
    ODD_ORDER = 1
    ODD_POWER = 2

    def message(self):
        if self is OrderDoublingFailure.ODD_ORDER:
            return 'The automorphism has odd order, so there is no order doubling.'
        return 'The power k is odd, so there is no order doubling kernel.'


class OrderDoublingError(ValueError):
    r"""
    Raised when the kernel for order doubling is requested for an automorphism of odd order or for an odd power.
    """

    def __init__(self, failure):
        self.failure = failure
        super().__init__(failure.message())


class KernelConstruction(object):
    r"""
    The result of constructing the kernel sublattice for order doubling: either a basis of the kernel or an OrderDoublingFailure.

    A KernelConstruction is true exactly when the construction succeeded.
    """

    def __init__(self, kernel = None, fixed = None, failure = None):
        if (kernel is None) == (failure is None):
            raise ValueError('Exactly one of kernel and failure must be given.')
        self.__kernel = kernel
        self.__fixed = fixed
        self.__failure = failure

    def __repr__(self):
        if self.__failure is not None:
            return 'Failed kernel construction (%s)'%self.__failure.name
        return 'Kernel of index %d in a fixed sublattice of rank %d'%(self.index(), self.__kernel.nrows())

    def __bool__(self):
        return self.__failure is None

    def failure(self):
        return self.__failure

    def fixed_sublattice_basis(self):
        return self.__fixed

    def kernel(self):
        r"""
        A basis (in lattice coordinates) of the kernel. Raises OrderDoublingError if the construction failed.
        """
        if self.__failure is not None:
            raise OrderDoublingError(self.__failure)
        return self.__kernel

    def index(self):
        r"""
        The index of the kernel in the fixed sublattice (1 or 2).
        """
        K, F = self.kernel(), self.__fixed
        if not K.nrows():
            return 1
        return ZZ(((K * K.transpose()).determinant() / (F * F.transpose()).determinant()).sqrt())


def _failure(g, k):
    if g.order() % 2:
        return OrderDoublingFailure.ODD_ORDER
    if k % 2:
        return OrderDoublingFailure.ODD_POWER
    return None

def _parity_form(g, k, F):
    r"""
    The reduced parity form on the sublattice with basis F, as a polynomial.
    """
    S = g.lattice().gram_matrix()
    h = (g ** (k // 2)).matrix()
    M = F * S * h.transpose() * F.transpose()
    m = M.nrows()
    R = PolynomialRing(GF(2), max(m, 1), 'x')
    x = R.gens()
    f = sum((M[i, j] * x[i] * x[j] for i in range(m) for j in range(m)), R(0))
    I = R.ideal([y * y + y for y in x])
    f = I.reduce(f)
    if f.degree() > 1:
        raise ValueError('The parity form %s is not linear.'%f)
    return f

def parity_form(g, k):
    r"""
    Compute the GF(2) polynomial sum_ij M_ij x_i x_j of the form alpha -> <alpha, g^(k/2) alpha> on the sublattice fixed by g^k, reduced modulo the field equations x_i^2 + x_i.

    The pairing <alpha, g^(k/2) beta> is symmetric on the fixed sublattice, so the reduced polynomial is linear: its coefficient of x_i is the parity of <f_i, g^(k/2) f_i> for the i-th basis vector f_i.

    INPUT:
    - ``g`` -- a LatticeAutomorphism of even order
    - ``k`` -- an even integer

    OUTPUT: a polynomial over GF(2) in the variables x0, x1, ...

    EXAMPLES::

        sage: from codetheta import *
        sage: L = EvenLattice(CartanMatrix(['A', 1]))
        sage: parity_form(L.reflection([1]), 2)
        0
        sage: L = EvenLattice(CartanMatrix(['A', 2]))
        sage: parity_form(L.reflection([1, 0]), 2)
        x1
    """
    failure = _failure(g, k)
    if failure is not None:
        raise OrderDoublingError(failure)
    return _parity_form(g, k, g.fixed_sublattice_basis(k))

def construct_order_doubling_kernel(g, k):
    r"""
    Construct the sublattice K of L^(g^k) on which <alpha, g^(k/2) alpha> is even.

    OUTPUT: a KernelConstruction. It fails (with a typed failure) if g has odd order or k is odd; it does not raise in those cases.

    EXAMPLES::

        sage: from codetheta import *
        sage: L = EvenLattice(CartanMatrix(['E', 8]))
        sage: construct_order_doubling_kernel(L.reflection(L.roots()[0]), 2)
        Kernel of index 2 in a fixed sublattice of rank 8
        sage: construct_order_doubling_kernel(L.reflection(L.roots()[0]), 1)
        Failed kernel construction (ODD_POWER)
    """
    failure = _failure(g, k)
    if failure is not None:
        return KernelConstruction(failure = failure)
    F = g.fixed_sublattice_basis(k)
    m = F.nrows()
    f = _parity_form(g, k, F)
    if not m:
        return KernelConstruction(kernel = F, fixed = F)
    v = [f.monomial_coefficient(y) for y in f.parent().gens()[:m]]
    # vectors c with sum v_i c_i = 0 mod 2, lifted and glued with 2*ZZ^m
    rows = [[a.lift() for a in c] for c in matrix(GF(2), m, 1, v).left_kernel().basis()]
    rows.extend((2 * identity_matrix(ZZ, m)).rows())
    B = matrix(ZZ, rows).echelon_form()
    B = B.matrix_from_rows(range(m))
    return KernelConstruction(kernel = B * F, fixed = F)

def kernel_for_order_doubling(g, k):
    r"""
    The kernel sublattice for order doubling (see construct_order_doubling_kernel()), as a basis matrix in lattice coordinates.

    Raises OrderDoublingError if g has odd order or k is odd.
    """
    return construct_order_doubling_kernel(g, k).kernel()

def has_order_doubling(g):
    r"""
    Test whether the lifts of g to the lattice vertex operator algebra have order twice the order n of g.

    This happens exactly when n is even and <alpha, g^(n/2) alpha> is odd for some alpha in L.
    """
    n = g.order()
    if n % 2:
        return False
    return bool(parity_form(g, n))

def voa_character(g, k = 1, prec = 20, verbose = False):
    r"""
    Compute the trace of the k-th power of a standard lift of g on the lattice vertex operator algebra.

    If the kernel construction succeeds, this is (2*Theta_K - Theta_F) / eta_(g^k), where F is the sublattice fixed by g^k and K is the kernel for order doubling. If g has odd order or k is odd then it is Theta_F / eta_(g^k).

    INPUT:
    - ``g`` -- a LatticeAutomorphism
    - ``k`` -- the power (default 1)
    - ``prec`` -- precision (default 20)
    - ``verbose`` -- boolean (default False)

    OUTPUT: QExpansion

    EXAMPLES::

        sage: from codetheta import *
        sage: L = EvenLattice(CartanMatrix(['E', 8]))
        sage: g = L.reflection(L.roots()[0])
        sage: g.lift_order()
        4
        sage: voa_character(g, 2, prec = 2)
        q^(-1/3) + 24*q^(2/3) + O(q^(5/3))
    """
    L = g.lattice()
    eta = (g ** k).eta_product().qexp(prec)
    result = construct_order_doubling_kernel(g, k)
    if result:
        if verbose:
            print('I am using the kernel of index %d for k = %d.'%(result.index(), k))
        theta_F = L.sublattice(result.fixed_sublattice_basis()).theta_series(prec)
        theta_K = L.sublattice(result.kernel()).theta_series(prec)
        theta = 2 * theta_K - theta_F
    else:
        if verbose:
            print('%s I am computing the eta quotient for k = %d instead.'%(result.failure().message(), k))
        theta = g.theta_series(prec, k = k)
    return QExpansion(0, theta) / eta

def voa_characters(g, prec = 20, verbose = False):
    r"""
    The traces of the powers of a standard lift of g, for k = 1, ..., lift order.

    OUTPUT: a dictionary {k: QExpansion}
    """
    n = g.lift_order()
    if verbose:
        print('The lift has order %d.'%n)
    return {k : voa_character(g, k = k, prec = prec, verbose = verbose) for k in range(1, n + 1)}
