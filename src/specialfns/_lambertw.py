# specialfns/_lambertw.py
#
# Copyright (c) 2024, Giacomo Petrillo
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
Lambert W function, the inverse of w e^w. References:

R. M. Corless, G. H. Gonnet, D. E. G. Hare, D. J. Jeffrey, D. E. Knuth, "On
the Lambert W function" (1996), Adv. Comput. Math. 5, 329-359.

D. Veberic, "Having fun with Lambert W(x) function" (2009), arXiv:1003.1628.
"""

import numpy

from . import _ieee
from . import _errors
from . import _config
from . import _gvarext

_NAME = 'lambert_w'
_1_e = numpy.exp(-1)

# branch point series in p = √(2(ex + 1)), Corless et al. eq. 4.22
_branch_point_coef = (
    -1.0,
    1.0,
    -1.0 / 3.0,
    11.0 / 72.0,
    -43.0 / 540.0,
    769.0 / 17280.0,
    -221.0 / 8505.0,
    680863.0 / 43545600.0,
    -1963.0 / 204120.0,
    226287557.0 / 37623398400.0,
)

# rational approximations of W(x) / x, coefficients in ascending order, from
# Veberic (2009)
_pade_a1 = (1.0, 5.931375839364438, 11.39220550532913, 7.33888339911111, 0.653449016991959)
_pade_b1 = (1.0, 6.931373689597704, 16.82349461388016, 16.43072324143226, 5.115235195211697)
_pade_a2 = (1.0, 2.445053070726557, 1.343664225958226, 0.148440055397592, 0.0008047501729130)
_pade_b2 = (1.0, 3.444708986486002, 3.292489857371952, 0.916460018803122, 0.0530686404483322)

def _real_seed(x):
    if x < -0.32358170806015724:
        p = numpy.sqrt(2 + 2 * numpy.e * x)
        return numpy.polyval(_branch_point_coef[::-1], p)
    elif x < 0.14546954290661823:
        return x * numpy.polyval(_pade_a1[::-1], x) / numpy.polyval(_pade_b1[::-1], x)
    elif x < 8.706658967856612:
        return x * numpy.polyval(_pade_a2[::-1], x) / numpy.polyval(_pade_b2[::-1], x)

    # asymptotic series in log x, log log x
    a = numpy.log(x)
    b = numpy.log(a)
    return (
        a - b + b / a
        + b * (b - 2) / (2 * a ** 2)
        + b * (6 - 9 * b + 2 * b ** 2) / (6 * a ** 3)
        + b * (-12 + 36 * b - 22 * b ** 2 + 3 * b ** 3) / (12 * a ** 4)
        + b * (60 - 300 * b + 350 * b ** 2 - 125 * b ** 3 + 12 * b ** 4) / (60 * a ** 5)
    )

_REAL_TOL = 1e-14
_REAL_MAXITER = 10

def _lambert_w_real(x):
    if numpy.isnan(x):
        return x
    elif x < -_1_e:
        raise _errors.DomainError(_NAME, 'x must be >= -1/e on the real line', x=x)
    elif x == -_1_e:
        return numpy.float64(-1)
    elif x == 0 or x == numpy.inf:
        return x

    # Fritsch's iteration, see Veberic (2009), eq. 21
    w = _real_seed(x)
    for _ in range(_REAL_MAXITER):
        if w == -1:
            break
        z = numpy.log(x / w) - w
        q = 2 * (1 + w) * (1 + w + 2 / 3 * z)
        epsilon = z / (1 + w) * (q - z) / (q - 2 * z)
        wnew = w * (1 + epsilon)
        w = (w - 1) / 2 if wnew < -1 else wnew
        # z is the residual of log w + w = log x
        if abs(z) <= _REAL_TOL * (1 + abs(w)):
            break
    else:
        _config.nonconvergence(_NAME, "Fritsch's iteration", x=x)
    return w

_COMPLEX_TOL = 1e-14
_COMPLEX_MAXITER = 30

def _near_branch_point(z, k):
    """ whether W_k(z) is close to -1, with W_{-1} reaching the branch point
    from Im z >= +0 and W_1 from Im z <= -0 """
    if abs(z + _1_e) >= 0.3:
        return False
    if k == 0:
        return True
    elif k == -1:
        return not numpy.signbit(z.imag)
    elif k == 1:
        return bool(numpy.signbit(z.imag))
    return False

def _complex_seed(z, k):
    if _near_branch_point(z, k):
        p = numpy.sqrt(2 * numpy.e * z + 2)
        if k != 0:
            p = -p
        return -1 + p * (1 - p / 3 + 11 / 72 * p * p)

    # Padé approximant of W_0 around 0
    if k == 0 and -1 < z.real < 1.5 and abs(z.imag) < 1 and z.real > -0.2 - 2.5 * abs(z.imag):
        return z * (2 + z) / (2 + 3 * z)

    # asymptotic expansion, with the logarithm on the k-th branch
    L = numpy.log(z) + 2j * numpy.pi * k
    if L == 0:
        return L
    return L - numpy.log(L)

def _lambert_w_complex(z, k):
    if numpy.isnan(z):
        return numpy.complex128(complex(numpy.nan, numpy.nan))
    elif z == 0:
        return numpy.complex128(0 if k == 0 else -numpy.inf)
    elif z == -_1_e and k in (0, -1):
        return numpy.complex128(-1)
    elif not numpy.isfinite(z):
        return numpy.log(z) + 2j * numpy.pi * k

    # Halley's iteration on w e^w - z, Corless et al. eq. 5.9
    w = _complex_seed(z, k)
    for _ in range(_COMPLEX_MAXITER):
        ew = numpy.exp(w)
        f = w * ew - z
        if f == 0:
            break
        diff = f / (ew * (w + 1) - (w + 2) * f / (2 * w + 2))
        w -= diff
        if (
            abs(diff.real) < _COMPLEX_TOL * (2 + abs(w.real)) and
            abs(diff.imag) < _COMPLEX_TOL * (2 + abs(w.imag))
        ):
            break
    else:
        _config.nonconvergence(_NAME, "Halley's iteration", z=z, branch=k)
    return w

def _lambert_w_deriv(x, branch=None):
    w = lambert_w(x, branch)
    return 1 / (numpy.exp(w) * (1 + w))

@_gvarext.gvar_ufunc(_lambert_w_deriv)
@_ieee.ieee
def lambert_w(z, branch=None):
    """
    Compute the Lambert W function, the solution w of w e^w = z.

    Parameters
    ----------
    z : float or complex
        The argument.
    branch : int, optional
        The branch index k of W_k. If not specified and `z` is real, the
        principal branch is computed with real arithmetic. If specified, or
        if `z` is complex, the result is complex.

    Returns
    -------
    w : float or complex
        W_k(z). On the real line, W(-1/e) = -1 and W(0) = 0. In the complex
        case W_k(0) = -∞ for k != 0.

    Raises
    ------
    DomainError :
        If z is real, `branch` is not specified and z < -1/e.

    Notes
    -----
    The real case uses the initial guesses of Veberic (2009) refined with
    Fritsch's iteration. The complex case uses the initial guesses and
    Halley's iteration of Corless et al. (1996).
    """
    if branch is None and not _ieee.iscomplex(z):
        return _lambert_w_real(_ieee.asfloat(z))
    branch = 0 if branch is None else int(branch)
    return _lambert_w_complex(_ieee.ascomplex(z), branch)
