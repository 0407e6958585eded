r"""

Orbits of permutation groups on the coordinates of a code, and their types relative to a set of negated coordinates

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

from sage.groups.perm_gps.permgroup import PermutationGroup


class OrbitType(Enum):
    r"""
    The type of an orbit O relative to a set X of coordinates:

    - I -- O is disjoint from X and has odd length
    - II -- O is disjoint from X and has even length
    - III -- O is contained in X and has odd length
    - IV -- O is contained in X and has even length
    """
    I = 1
    II = 2
    III = 3
    IV = 4

    def __repr__(self):
        return 'Type %s'%self.name

    @classmethod
    def classify(cls, points, X):
        r"""
        Classify the orbit ``points`` relative to the set X.

        EXAMPLES::

            sage: from codetheta import *
            sage: OrbitType.classify((1, 2, 3), {1, 2, 3, 4})
            Type III
            sage: OrbitType.classify((5, 6), {1, 2, 3, 4})
            Type II
        """
        points = set(points)
        inside = points.issubset(X)
        if not inside and not points.isdisjoint(X):
            raise ValueError('The set X is not a union of orbits.')
        if inside:
            return [cls.III, cls.IV][len(points) % 2 == 0]
        return [cls.I, cls.II][len(points) % 2 == 0]

    def is_negated(self):
        r"""
        Whether orbits of this type lie in the negated set X.
        """
        return self in (OrbitType.III, OrbitType.IV)


class Orbit(object):
    r"""
    An orbit of a permutation group on {1,...,N}, together with its type.
    """

    def __init__(self, points, X = ()):
        self.__points = tuple(sorted(points))
        self.__type = OrbitType.classify(self.__points, set(X))

    def __repr__(self):
        return '%s orbit %s'%(self.__type.name, self.__points)

    def __eq__(self, other):
        try:
            return self.points() == other.points() and self.type() == other.type()
        except AttributeError:
            return False

    def __hash__(self):
        return hash((self.__points, self.__type))

    def __iter__(self):
        return iter(self.__points)

    def __len__(self):
        return len(self.__points)

    def length(self):
        return len(self.__points)

    def points(self):
        return self.__points

    def type(self):
        return self.__type


def _generators(H):
    try:
        gens = H.gens()
    except AttributeError:
        gens = [H]
    return [g.cycle_tuples() for g in gens if not g.is_one()]

def orbit_types(H, N, X = ()):
    r"""
    Partition {1,...,N} into orbits of H and classify them relative to X.

    INPUT:
    - ``H`` -- a permutation group on {1,...,N}, or a single permutation
    - ``N`` -- the degree
    - ``X`` -- (default empty) a subset of {1,...,N} that is a union of orbits

    OUTPUT: a list of Orbit's, sorted by length. Orbits of equal length stay in the order of their smallest point.

    EXAMPLES::

        sage: from codetheta import *
        sage: g = PermutationGroupElement('(1,2,3)(4,5)')
        sage: orbit_types(g, 8, X = [4, 5, 6])
        [III orbit (6,), I orbit (7,), I orbit (8,), IV orbit (4, 5), I orbit (1, 2, 3)]
    """
    N = int(N)
    orbits = PermutationGroup(_generators(H), domain = list(range(1, N + 1))).orbits()
    X = set(X)
    L = [Orbit(o, X) for o in sorted(orbits, key = min)]
    L.sort(key = len)
    return L

def is_orbit_partition(orbits, N):
    r"""
    Test whether a list of orbits is a set partition of {1,...,N}.

    EXAMPLES::

        sage: from codetheta import *
        sage: is_orbit_partition(orbit_types(PermutationGroupElement('(1,2)(3,4,5)'), 6), 6)
        True
    """
    seen = set()
    for o in orbits:
        for i in o:
            if i in seen or not 1 <= i <= N:
                return False
            seen.add(i)
    return len(seen) == N and sum(len(o) for o in orbits) == N

def orbit_type_signature(orbits):
    r"""
    The multiset of (type, length) pairs, as a sorted tuple.
    """
    return tuple(sorted((o.type().value, o.length()) for o in orbits))
