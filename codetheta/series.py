r"""

Truncated q-series with rational exponents and Dedekind eta products

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

from re import sub

from sage.arith.functions import lcm
from sage.arith.misc import divisors, moebius
from sage.functions.other import ceil
from sage.misc.misc_c import prod
from sage.modular.etaproducts import qexp_eta
from sage.rings.complex_mpfr import ComplexField
from sage.rings.integer import Integer
from sage.rings.integer_ring import ZZ
from sage.rings.power_series_ring import PowerSeriesRing
from sage.rings.rational_field import QQ


class QExpansion(object):
    r"""
    The QExpansion class represents q-series of the form q^shift * f(q), where f is a (truncated) power series and shift is a rational number.

    INPUT:

    - ``shift`` -- a rational number

    - ``f`` -- a power series in the variable 'q' over ZZ or QQ

    EXAMPLES::

        sage: from codetheta import *
        sage: R.<q> = PowerSeriesRing(ZZ)
        sage: QExpansion(-1/3, 1 + 248*q + 4124*q^2 + O(q^3))
        q^(-1/3) + 248*q^(2/3) + 4124*q^(5/3) + O(q^(8/3))
    """

    def __init__(self, shift, f):
        shift = QQ(shift)
        if f:
            v = f.valuation()
            if v:
                f = f.shift(-v)
                shift += v
        self.__shift = shift
        self.__f = f

    def __repr__(self):
        r"""
        Print the q-series with fractional exponents.

        The exponents of the underlying power series are shifted by self.shift() inside the string.
        """
        try:
            return self.__qexp_string
        except AttributeError:
            r = r'((?<!\w)q(?!\w)(\^-?\d+)?)|((?<!\^)\d+\s)' #identify exponents that are non integral
            x = self.__shift
            def b(y):
                y = y.string[slice(*y.span())]
                if y[0] != 'q':
                    return '%sq^(%s) '%([y[:-1]+'*',''][y == '1 '], x)
                try:
                    return 'q^(%s)'%(QQ(y[2:]) + x)
                except TypeError:
                    return 'q^(%s)'%(1 + x)
            s = str(self.__f)
            if x:
                s = sub(r, b, s)
            self.__qexp_string = s
            return s

    def series(self):
        r"""
        The power series f with self = q^shift * f.
        """
        return self.__f

    def shift(self):
        return self.__shift

    def precision(self):
        r"""
        The (rational) exponent of the error term.
        """
        return self.__f.prec() + self.__shift

    def valuation(self):
        f = self.__f
        if not f:
            return f.prec() + self.__shift
        return self.__shift + f.valuation()

    def coefficients(self):
        r"""
        Return a dictionary mapping exponents to the nonzero coefficients of self.

        EXAMPLES::

            sage: from codetheta import *
            sage: EtaProduct({1: 24}).qexp(3).coefficients()
            {1: 1, 2: -24, 3: 252}
        """
        x = self.__shift
        return {n + x: c for n, c in enumerate(self.__f.list()) if c}

    def is_integral(self):
        r"""
        Test whether every coefficient of self is an integer.
        """
        return all(c in ZZ for c in self.__f.list())

    def change_ring(self, R):
        return QExpansion(self.__shift, self.__f.change_ring(R))

    ## arithmetic

    def __add__(self, other):
        if other in QQ:
            other = QExpansion(0, self.__f.parent()(other).add_bigoh(self.__f.prec()))
        a, b = self.__shift, other.shift()
        if (a - b) not in ZZ:
            raise ValueError('Incompatible exponents')
        f, g = self.__f, other.series()
        if a > b:
            return QExpansion(b, f.shift(ZZ(a - b)) + g)
        return QExpansion(a, f + g.shift(ZZ(b - a)))
    __radd__ = __add__

    def __eq__(self, other):
        try:
            return self.__shift == other.shift() and self.__f == other.series()
        except AttributeError:
            return False

    def __hash__(self):
        return hash(repr(self))

    def __invert__(self):
        return QExpansion(-self.__shift, ~self.__f)

    def __mul__(self, other):
        if other in QQ:
            return QExpansion(self.__shift, other * self.__f)
        return QExpansion(self.__shift + other.shift(), self.__f * other.series())
    __rmul__ = __mul__

    def __neg__(self):
        return QExpansion(self.__shift, -self.__f)

    def __pow__(self, n):
        if n < 0:
            return (~self).__pow__(-n)
        return QExpansion(n * self.__shift, self.__f ** n)

    def __sub__(self, other):
        return self.__add__(-other)

    def __rsub__(self, other):
        return self.__neg__().__add__(other)

    def __truediv__(self, other):
        r"""
        Division of q-series. The divisor is normalized to have valuation zero before inverting.
        """
        if other in QQ:
            return QExpansion(self.__shift, self.__f / QQ(other))
        return self.__mul__(~other)
    __div__ = __truediv__

    ## evaluation

    def __call__(self, tau, bits = 53):
        r"""
        Evaluate the truncated q-series at a point tau in the upper half-plane.

        INPUT:
        - ``tau`` -- a complex number with positive imaginary part
        - ``bits`` -- the precision (in bits) of the complex field (default 53)

        OUTPUT: an element of ComplexField(bits)
        """
        CF = ComplexField(bits)
        tau = CF(tau)
        if tau.imag() <= 0:
            raise ValueError('%s does not lie in the upper half-plane.'%tau)
        two_pi_i = 2 * CF.pi() * CF.gen()
        q = (two_pi_i * tau).exp()
        h = sum(CF(c) * q ** n for n, c in enumerate(self.__f.list()))
        return (two_pi_i * tau * self.__shift).exp() * h


class EtaProduct(object):
    r"""
    Eta products prod_k eta(k*tau)^(a_k).

    INPUT:
    - ``frame_shape`` -- a dictionary {k: a_k} of nonzero integers, or a list of pairs (k, a_k)

    EXAMPLES::

        sage: from codetheta import *
        sage: EtaProduct({1: -8, 2: 8})
        eta(q)^-8*eta(q^2)^8
        sage: EtaProduct({1: -8, 2: 8}).weight()
        0
    """

    def __init__(self, frame_shape):
        d = {}
        for k, a in dict(frame_shape).items():
            k, a = Integer(k), Integer(a)
            if k <= 0:
                raise ValueError('Cycle lengths must be positive.')
            a += d.get(k, 0)
            if a:
                d[k] = a
            else:
                d.pop(k, None)
        self.__frame_shape = d

    def __repr__(self):
        def a(k, e):
            s = 'eta(q)' if k == 1 else 'eta(q^%d)'%k
            if e == 1:
                return s
            return s + '^%d'%e
        if not self.__frame_shape:
            return '1'
        return '*'.join(a(k, e) for k, e in sorted(self.__frame_shape.items()))

    def frame_shape(self):
        return dict(self.__frame_shape)

    def frame_shape_string(self):
        r"""
        The frame shape in the usual notation 1^a_1 2^a_2 ...
        """
        return ' '.join('%d^%d'%x for x in sorted(self.__frame_shape.items())) or '1'

    def cycle_lengths(self):
        return sorted(self.__frame_shape)

    def degree(self):
        r"""
        The degree sum_k k*a_k; this is the rank of the lattice that self belongs to.
        """
        return sum(k * a for k, a in self.__frame_shape.items())

    def weight(self):
        return sum(self.__frame_shape.values()) / Integer(2)

    def shift(self):
        r"""
        The exponent of the leading term q^(degree / 24).
        """
        return self.degree() / Integer(24)

    def qexp(self, prec = 20):
        r"""
        Compute the q-expansion of self up to precision O(q^(prec + shift)).

        EXAMPLES::

            sage: from codetheta import *
            sage: EtaProduct({1: 8, 2: -8}).qexp(4)
            q^(-1/3) - 8*q^(2/3) + 28*q^(5/3) - 64*q^(8/3) + O(q^(11/3))
        """
        R = PowerSeriesRing(ZZ, 'q')
        prec = Integer(prec)
        def eta_k(k, a):
            f = qexp_eta(R, ceil(prec / k) + 1).V(k)
            if a < 0:
                return (~f) ** (-a)
            return f ** a
        f = prod([eta_k(k, a) for k, a in self.__frame_shape.items()], R(1)).add_bigoh(prec)
        return QExpansion(self.shift(), f)

    def __eq__(self, other):
        try:
            return self.__frame_shape == other.frame_shape()
        except AttributeError:
            return False

    def __hash__(self):
        return hash(tuple(sorted(self.__frame_shape.items())))

    def __invert__(self):
        return EtaProduct({k: -a for k, a in self.__frame_shape.items()})

    def __mul__(self, other):
        d = self.frame_shape()
        for k, a in other.frame_shape().items():
            d[k] = d.get(k, 0) + a
        return EtaProduct(d)

    def __pow__(self, n):
        return EtaProduct({k: n * a for k, a in self.__frame_shape.items()})

    def __truediv__(self, other):
        return self.__mul__(~other)
    __div__ = __truediv__


def frame_shape(p):
    r"""
    Write a product of cyclotomic polynomials p as prod_k (x^k - 1)^(a_k).

    The exponents are found by Moebius inversion: if p = prod_d Phi_d^(e_d) then a_k = sum_{m | n/k} mu(m) e_(k*m).

    INPUT:
    - ``p`` -- a monic polynomial over ZZ all of whose roots are roots of unity

    OUTPUT: an EtaProduct

    EXAMPLES::

        sage: from codetheta import *
        sage: R.<x> = ZZ[]
        sage: frame_shape((x - 1)^7 * (x + 1))
        eta(q)^6*eta(q^2)
        sage: frame_shape((x^2 + x + 1) * (x - 1))
        eta(q^3)
    """
    e = {}
    for f, m in p.factor():
        d = f.is_cyclotomic(certificate = True)
        if not d:
            raise ValueError('%s is not a product of cyclotomic polynomials.'%p)
        e[d] = e.get(d, 0) + m
    if not e:
        return EtaProduct({})
    n = lcm(list(e))
    a = {}
    for k in divisors(n):
        s = sum(moebius(m) * e.get(k * m, 0) for m in divisors(n // k))
        if s:
            a[k] = s
    return EtaProduct(a)
