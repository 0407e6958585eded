r"""

Automorphisms of Construction A lattices coming from code automorphisms

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

from sage.arith.functions import lcm
from sage.matrix.constructor import matrix
from sage.rings.integer import Integer
from sage.rings.integer_ring import ZZ

from .assembly import code_theta_series, orbit_eta_product
from .codes import support
from .orbits import OrbitType, orbit_types
from .series import QExpansion


def negated_set(X):
    r"""
    Convert X (None, a codeword or an iterable of positions) into a frozenset of positions.
    """
    if X is None:
        return frozenset()
    try:
        X.hamming_weight
        return support(X)
    except AttributeError:
        return frozenset(Integer(i) for i in X)

def _images(sigma, N):
    images = list(range(N + 1))
    for c in sigma.cycle_tuples():
        for j, i in enumerate(c):
            images[i] = c[(j + 1) % len(c)]
    return images

def signed_permutation_matrix(sigma, N, X = None):
    r"""
    The matrix of epsilon_X * sigma acting on row vectors of ZZ^N: the entry in position i moves to sigma(i), and is negated if i lies in X.

    EXAMPLES::

        sage: from codetheta import *
        sage: signed_permutation_matrix(PermutationGroupElement('(1,2)'), 3, X = [3])
        [ 0  1  0]
        [ 1  0  0]
        [ 0  0 -1]
    """
    X = negated_set(X)
    images = _images(sigma, N)
    P = matrix(ZZ, N, N)
    for i in range(1, N + 1):
        P[i - 1, images[i] - 1] = -1 if i in X else 1
    return P


class CodeAutomorphism(object):
    r"""
    The automorphism epsilon_X * sigma of the Construction A lattice of a code C, where sigma is a permutation automorphism of C and epsilon_X negates the coordinates in a sigma-invariant set X.

    Invariants are computed from the orbit types of sigma relative to X, without building the lattice automorphism group.

    INPUT:
    - ``code`` -- a SelfDualCode
    - ``sigma`` -- an element of code.automorphism_group()
    - ``X`` -- (default None) a sigma-invariant set of positions, or a codeword whose support is used

    EXAMPLES::

        sage: from codetheta import *
        sage: C = named_code('e8')
        sage: g = C.automorphism(C.automorphism_group().one(), X = range(1, 9))
        sage: g.order(), g.eta_product()
        (2, eta(q)^-8*eta(q^2)^8)
        sage: g.theta_series(5)
        1 + O(q^5)
        sage: g.eta_quotient(5) == g.lattice_automorphism().eta_quotient(5)
        True
    """

    def __init__(self, code, sigma, X = None):
        G = code.automorphism_group()
        try:
            sigma = G(sigma)
        except (TypeError, ValueError):
            raise ValueError('This permutation is not an automorphism of the code.') from None
        X = negated_set(X)
        N = code.length()
        if not X.issubset(range(1, N + 1)):
            raise ValueError('The set X is not contained in {1,...,%d}.'%N)
        if any(sigma(i) not in X for i in X):
            raise ValueError('The set X is not invariant under sigma.')
        self.__code = code
        self.__sigma = sigma
        self.__X = X

    def __repr__(self):
        if self.__X:
            return 'Automorphism %s of %s with negated coordinates %s'%(self.__sigma, self.__code, sorted(self.__X))
        return 'Automorphism %s of %s'%(self.__sigma, self.__code)

    def code(self):
        return self.__code

    def negated_set(self):
        return self.__X

    def sigma(self):
        return self.__sigma

    def orbits(self):
        r"""
        The orbits of sigma on {1,...,N} together with their types relative to X.
        """
        try:
            return self.__orbits
        except AttributeError:
            self.__orbits = orbit_types(self.__sigma, self.__code.length(), X = self.__X)
            return self.__orbits

    def order(self):
        r"""
        The order of epsilon_X * sigma. A negated odd cycle of length l has order 2l.
        """
        return Integer(lcm([o.length() * (2 if o.type() is OrbitType.III else 1) for o in self.orbits()]))

    def cycle_type(self):
        return list(self.__sigma.cycle_type())

    def eta_product(self):
        return orbit_eta_product(self.orbits())

    def theta_series(self, prec = 20, verbose = False):
        r"""
        The theta series of the fixed sublattice, assembled from codewords.
        """
        return code_theta_series(self.__code, self.orbits(), prec = prec, verbose = verbose)

    def eta_quotient(self, prec = 20, verbose = False):
        r"""
        Compute the eta quotient Theta_{L^g} / eta_g.

        EXAMPLES::

            sage: from codetheta import *
            sage: C = named_code('e8')
            sage: C.automorphism(C.automorphism_group().one()).eta_quotient(4)
            q^(-1/3) + 248*q^(2/3) + 4124*q^(5/3) + 34752*q^(8/3) + O(q^(11/3))
        """
        if verbose:
            print('I am computing the eta quotient of %s.'%self)
        return QExpansion(0, self.theta_series(prec, verbose = verbose)) / self.eta_product().qexp(prec)

    ## the lattice approach

    def matrix(self):
        return signed_permutation_matrix(self.__sigma, self.__code.length(), X = self.__X)

    def lattice_automorphism(self):
        r"""
        The same automorphism as a LatticeAutomorphism of the Construction A lattice.
        """
        return self.__code.lattice().code_automorphism(self.__sigma, X = self.__X)

    def fixed_sublattice(self):
        return self.lattice_automorphism().fixed_sublattice()


def subgroup_theta_series(code, H, prec = 20, verbose = False):
    r"""
    Compute the theta series of the sublattice of the Construction A lattice that is fixed by a permutation subgroup H of Aut(C).

    EXAMPLES::

        sage: from codetheta import *
        sage: C = named_code('e8')
        sage: subgroup_theta_series(C, C.automorphism_group(), 3)
        1 + 2*q^2 + O(q^3)
    """
    G = code.automorphism_group()
    if not H.is_subgroup(G):
        raise ValueError('This is not a subgroup of the automorphism group of the code.')
    orbits = orbit_types(H, code.length())
    if verbose:
        print('The subgroup of order %d has orbit lengths %s.'%(H.order(), [o.length() for o in orbits]))
    return code_theta_series(code, orbits, prec = prec, verbose = verbose)
