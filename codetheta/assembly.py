r"""

Assembly of eta products and fixed-sublattice theta series from orbit types

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

from collections import Counter

from sage.misc.misc_c import prod
from sage.rings.integer_ring import ZZ
from sage.rings.power_series_ring import PowerSeriesRing

from .orbits import OrbitType
from .series import EtaProduct


## eta factors

def _cycle(l):
    return EtaProduct({l : 1})

def _negated_cycle(l):
    r"""
    An odd cycle of length l with all signs negated has characteristic polynomial x^l + 1 = (x^(2l) - 1) / (x^l - 1).
    """
    return EtaProduct({2 * l : 1, l : -1})

ETA_FACTORS = {
    OrbitType.I : _cycle,
    OrbitType.II : _cycle,
    OrbitType.III : _negated_cycle,
    OrbitType.IV : _cycle,
}


## theta factors
# series in r = q^(1/4), truncated at r^bound

def _orbit_theta(l, parity, bound):
    r"""
    The sum of r^(l*a^2) over all integers a congruent to ``parity`` mod 2.

    A fixed vector restricted to an orbit of length l (not of type III) has all entries equal to +/- a, and its contribution to x*x/4 is l*a^2/4.
    """
    c = [0] * bound
    if parity:
        a = 1
        while l * a * a < bound:
            c[l * a * a] += 2
            a += 2
    else:
        c[0] = 1
        a = 2
        while l * a * a < bound:
            c[l * a * a] += 2
            a += 2
    return PowerSeriesRing(ZZ, 'r')(c).add_bigoh(bound)

def _zero_theta(l, parity, bound):
    r"""
    Vectors fixed by a negated odd cycle vanish on it.
    """
    R = PowerSeriesRing(ZZ, 'r')
    if parity:
        return R(0).add_bigoh(bound)
    return R(1).add_bigoh(bound)

THETA_FACTORS = {
    OrbitType.I : _orbit_theta,
    OrbitType.II : _orbit_theta,
    OrbitType.III : _zero_theta,
    OrbitType.IV : _orbit_theta,
}


def orbit_eta_product(orbits):
    r"""
    Compute the eta product of the automorphism epsilon_X * sigma from the orbit types of sigma relative to X.

    EXAMPLES::

        sage: from codetheta import *
        sage: orbit_eta_product(orbit_types(PermutationGroupElement('(1,2,3)(4,5)'), 8, X = [4, 5, 6]))
        eta(q)*eta(q^2)^2*eta(q^3)
    """
    return prod([ETA_FACTORS[o.type()](o.length()) for o in orbits], EtaProduct({}))

def code_theta_series(code, orbits, prec = 20, verbose = False):
    r"""
    Compute the theta series of the sublattice of the Construction A lattice fixed by the automorphism (or group) with the given orbits.

    A fixed vector x reduces mod 2 to a codeword constant on every orbit. We sum over those codewords, grouping together codewords with the same multiset of (orbit type, orbit length, parity), and multiply one-dimensional theta series orbit by orbit.

    INPUT:
    - ``code`` -- a SelfDualCode
    - ``orbits`` -- a list of Orbit's (see orbit_types())
    - ``prec`` -- precision (default 20)
    - ``verbose`` -- boolean (default False)

    OUTPUT: a power series in q over ZZ

    EXAMPLES::

        sage: from codetheta import *
        sage: C = named_code('e8')
        sage: code_theta_series(C, orbit_types(C.automorphism_group().one(), 8), prec = 5)
        1 + 240*q + 2160*q^2 + 6720*q^3 + 17520*q^4 + O(q^5)
    """
    counts = Counter()
    for c in code.invariant_codewords(orbits):
        key = []
        for o in orbits:
            p = int(c[o.points()[0] - 1])
            if p and o.type() is OrbitType.III:
                break
            key.append((o.type().value, o.length(), p))
        else:
            counts[tuple(sorted(key))] += 1
    if verbose:
        print('I am assembling the theta series from %d classes of fixed codewords.'%len(counts))
    bound = 4 * prec
    R = PowerSeriesRing(ZZ, 'r')
    factors = {}
    def factor(t, l, p):
        try:
            return factors[(t, l, p)]
        except KeyError:
            factors[(t, l, p)] = f = THETA_FACTORS[OrbitType(t)](l, p, bound)
            return f
    f = R(0).add_bigoh(bound)
    for key, m in counts.items():
        f += m * prod([factor(*x) for x in key], R(1).add_bigoh(bound))
    c = f.padded_list(bound)
    return PowerSeriesRing(ZZ, 'q')([c[4 * i] for i in range(prec)]).add_bigoh(prec)
