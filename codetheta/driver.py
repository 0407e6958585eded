r"""

Tables of eta quotients over conjugacy classes and subgroups

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

from sage.libs.gap.libgap import libgap

from .code_automorphism import CodeAutomorphism, subgroup_theta_series
from .codes import support
from .database import LatticeDatabase
from .orbits import orbit_type_signature, orbit_types


def _rule():
    print('-' * 60)

def _twists(code, sigma):
    r"""
    The distinct supports of codewords fixed by sigma, smallest first.
    """
    V = code.invariant_codewords(orbit_types(sigma, code.length()))
    return sorted(set(support(c) for c in V), key = lambda X: (len(X), sorted(X)))

def _cycle_set_classes(code, sigma):
    r"""
    Representatives of the sets of cycles of sigma up to the action of the centralizer of sigma in Aut(C).

    Sets of cycles are built one cycle at a time. Every set of k + 1 cycles is equivalent to a representative of size k extended by one cycle, so each level only needs the previous one. Two sets are compared by their cycle lengths and then with GAP's RepresentativeAction on the union of their cycles.

    OUTPUT: a list of lists of cycles (tuples of positions)
    """
    G = code.automorphism_group()
    C = G.centralizer(sigma).gap()
    cycles = sigma.cycle_tuples(singletons = True)
    def points(T):
        return sorted(i for j in T for i in cycles[j])
    def equivalent(T, U):
        if sorted(len(cycles[j]) for j in T) != sorted(len(cycles[j]) for j in U):
            return False
        return not C.RepresentativeAction(libgap(points(T)), libgap(points(U)), libgap.OnSets).is_bool()
    level = [frozenset()]
    reps = list(level)
    while level:
        new = []
        for T in level:
            for j in range(len(cycles)):
                if j in T:
                    continue
                U = T | {j}
                if not any(equivalent(U, V) for V in new):
                    new.append(U)
        reps.extend(new)
        level = new
    return [[cycles[j] for j in sorted(T)] for T in reps]

def _sign_twists(code, sigma):
    r"""
    Sets X such that the automorphisms epsilon_X * sigma represent every conjugacy class of 2^N : Aut(C) above sigma.

    Such a class is determined by the cycles of sigma carrying an odd number of signs, up to the centralizer of sigma. An odd cycle is negated entirely and an even cycle only in its first position.
    """
    L = []
    for T in _cycle_set_classes(code, sigma):
        X = frozenset(i for c in T for i in (c if len(c) % 2 else c[:1]))
        L.append(X)
    return L

def _automorphism(code, sigma, X):
    r"""
    epsilon_X * sigma, as a CodeAutomorphism if X is sigma-invariant and otherwise as an automorphism of the Construction A lattice.
    """
    if all(sigma(i) in X for i in X):
        return CodeAutomorphism(code, sigma, X = X)
    return code.lattice().code_automorphism(sigma, X = X)

def report_code_classes(code, prec = 10, twists = False, sigmas = None, database = None, verbose = False):
    r"""
    Print the eta quotients of the automorphisms epsilon_X * sigma, where sigma runs through conjugacy class representatives of Aut(C).

    If C has minimum weight greater than 4 then the automorphism group of its Construction A lattice is 2^N : Aut(C), and with twists = True the rows cover every conjugacy class of it. For other codes only the sets X supported on codewords fixed by sigma are used, and report_lattice_classes() has to be used to reach all of O(L).

    INPUT:
    - ``code`` -- a SelfDualCode
    - ``prec`` -- precision (default 10)
    - ``twists`` -- boolean (default False). If True then X runs through the twists described above; otherwise X is empty.
    - ``sigmas`` -- (default None) a list of elements of Aut(C) to use instead of the conjugacy class representatives
    - ``database`` -- a LatticeDatabase (default None; then a new one is built)
    - ``verbose`` -- boolean (default False)

    OUTPUT: a list of tuples (sigma, X, eta product, eta quotient, name of the fixed sublattice)

    EXAMPLES::

        sage: from codetheta import *
        sage: rows = report_code_classes(named_code('e8'), prec = 3)
        ------------------------------------------------------------
        ...
        sage: rows[0][4]
        'E8'
    """
    if database is None:
        database = LatticeDatabase(max_rank = code.length())
    gens, codewords, N = code.initialize(verbose = verbose)
    G = code.automorphism_group()
    super_code = code.is_super_code()
    if verbose:
        print('The code has %d codewords and its automorphism group has %d generators.'%(len(codewords), len(gens)))
        print('I am computing the conjugacy classes of Aut(C).')
    if sigmas is None:
        sigmas = G.conjugacy_classes_representatives()
    rows = []
    for sigma in sigmas:
        sigma = G(sigma)
        if not twists:
            X_list = [frozenset()]
        elif super_code:
            X_list = _sign_twists(code, sigma)
        else:
            X_list = _twists(code, sigma)
        if verbose and twists:
            print('I found %d twists of %s.'%(len(X_list), sigma))
        for X in X_list:
            g = _automorphism(code, sigma, X)
            f = g.eta_quotient(prec, verbose = verbose)
            name = database.identify(g.fixed_sublattice(), verbose = verbose)
            _rule()
            print('sigma = %s, X = %s'%(sigma, sorted(X)))
            print('order %d, cycle type %s, frame shape %s'%(g.order(), list(sigma.cycle_type()), g.eta_product().frame_shape_string()))
            print('eta quotient: %s'%f)
            print('fixed sublattice: %s'%name)
            rows.append((sigma, X, g.eta_product(), f, name))
    if not super_code:
        print('The minimum weight of %s is 4: only the automorphisms epsilon_X * sigma were covered. Use report_lattice_classes() for all of O(L).'%code)
    return rows

def report_lattice_classes(lattice, prec = 10, voa = True, database = None, verbose = False):
    r"""
    Print the eta quotients (and optionally the trace functions on the lattice vertex operator algebra) of conjugacy class representatives of O(L).

    INPUT:
    - ``lattice`` -- an EvenLattice
    - ``prec`` -- precision (default 10)
    - ``voa`` -- boolean (default True); whether to print order doubling and the traces of all powers of a lift
    - ``database`` -- a LatticeDatabase (default None; then a new one is built)
    - ``verbose`` -- boolean (default False)

    OUTPUT: a list of tuples (g, eta quotient, name of the fixed sublattice, lift order)
    """
    if database is None:
        database = LatticeDatabase(max_rank = lattice.rank())
    A = lattice.automorphism_group()
    if verbose:
        print('I computed %s.'%A)
    rows = []
    for g in A.conjugacy_classes_representatives(verbose = verbose):
        f = g.eta_quotient(prec, verbose = verbose)
        name = database.identify(g.fixed_sublattice(), verbose = verbose)
        _rule()
        print('order %d, frame shape %s'%(g.order(), g.eta_product().frame_shape_string()))
        print('eta quotient: %s'%f)
        print('fixed sublattice: %s'%name)
        n = g.order()
        if voa:
            n = g.lift_order()
            print('order doubling: %s, lift order %d'%(g.has_order_doubling(), n))
            for k, h in g.voa_characters(prec, verbose = verbose).items():
                print('  k = %d: %s'%(k, h))
        rows.append((g, f, name, n))
    return rows

def report_subgroups(code, prec = 10, max_order = None, verbose = False):
    r"""
    Print the orbit types and the fixed-sublattice theta series of conjugacy classes of subgroups of Aut(C).

    INPUT:
    - ``code`` -- a SelfDualCode
    - ``prec`` -- precision (default 10)
    - ``max_order`` -- (default None) if given, skip subgroups of larger order
    - ``verbose`` -- boolean (default False)

    OUTPUT: a list of tuples (H, orbit type signature, theta series)
    """
    N = code.length()
    G = code.automorphism_group()
    if verbose:
        print('I am computing the conjugacy classes of subgroups of a group of order %d.'%G.order())
    rows = []
    for H in G.conjugacy_classes_subgroups():
        if max_order is not None and H.order() > max_order:
            continue
        orbits = orbit_types(H, N)
        theta = subgroup_theta_series(code, H, prec = prec, verbose = verbose)
        _rule()
        print('subgroup of order %d with orbit lengths %s'%(H.order(), [o.length() for o in orbits]))
        print('theta series: %s'%theta)
        rows.append((H, orbit_type_signature(orbits), theta))
    return rows
