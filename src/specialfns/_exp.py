# specialfns/_exp.py
#
# Copyright (c) 2022, 2024, Giacomo Petrillo
#
# This file is part of specialfns.
#
# specialfns is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# specialfns is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with specialfns.  If not, see <http://www.gnu.org/licenses/>.

"""
Elementary functions computed accurately near their removable singularities.
The arguments are expected to be numpy scalars, see `_ieee.asfloat`.
"""

import math

import numpy

from . import _ieee

def sinh(x):
    """ Compute sinh(x) with small relative error also for |x| << 1 """
    ax = abs(x)
    if x == 0:
        return x
    elif ax < 0.12:
        # sinh(x) = x sum_k x^2k / (2k+1)!, the ratio of consecutive terms
        # is x^2 / u with u = 6, 20, 42, ...
        e = _ieee.eps / 10
        x2 = x * x
        y = 1
        t = 1
        u = 0
        k = 0
        while t > e:
            u += 8 * k + 6
            k += 1
            t = t * x2 / u
            y += t
        return x * y
    elif ax < 0.36:
        t = sinh(x / 3)
        return t * (3 + 4 * t * t)
    else:
        t = numpy.exp(x)
        return (t - 1 / t) / 2

def exprel(w):
    """ Compute (e^w - 1) / w """
    if w == 0:
        return numpy.float64(1)
    elif w == numpy.inf:
        return w
    elif w < -0.69 or w > 0.4:
        return (numpy.exp(w) - 1) / w
    else:
        # e^w - 1 = 2 e^(w/2) sinh(w/2)
        t = w / 2
        return numpy.exp(t) * sinh(t) / t

def log1p(w):
    """ Compute log(1 + w) """
    y0 = numpy.log(1 + w)
    if -0.2928 < w < 0.4142:
        # one step of a third order iteration on exp(y) = 1 + w, the residual
        # is computed without cancellation
        s = y0 * exprel(y0)
        r = (s - w) / (s + 1)
        return y0 - r * (6 - r) / (6 - 4 * r)
    return y0

_expm1x_coef = tuple(2 / math.factorial(k + 2) for k in range(17))[::-1]

def expm1x(x):
    r"""
    Compute :math:`(e^x - 1 - x) / (x^2/2) = {}_1F_1(1, 3, x)`.
    """
    if x == 0:
        return numpy.float64(1)
    elif abs(x) > 0.9:
        return (numpy.exp(x) - 1 - x) / (x * x / 2)
    else:
        return numpy.polyval(_expm1x_coef, x)

    # see also the GSL
    # https://www.gnu.org/software/gsl/doc/html/specfunc.html#relative-exponential-functions

def log1pmx(w):
    """
    Compute log(1 + w) - w, w > -1. This is -η²/2 in the uniform asymptotic
    expansion of the incomplete gamma function, with w = x/a - 1.
    """
    z = log1p(w)
    y0 = z - w
    s = expm1x(z) * z * z / 2 # = e^z - 1 - z
    r = (s + y0) / (s + 1 + z)
    return y0 - r * (6 - r) / (6 - 4 * r)

def sinpi(x):
    """ Compute sin(πx) exactly zero on the integers """
    if not numpy.isfinite(x):
        return numpy.float64(numpy.nan)
    if x < 0:
        return -sinpi(-x)
    n, r = divmod(x, 0.5)
    r *= numpy.pi
    n %= 4
    if n == 0:
        return numpy.sin(r)
    elif n == 1:
        return numpy.cos(r)
    elif n == 2:
        return -numpy.sin(r)
    else:
        return -numpy.cos(r)
