# specialfns/_incgamma.py
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
Regularized incomplete gamma functions P(a, x) and Q(a, x). Reference:
A. Gil, J. Segura, N. M. Temme, "Efficient and accurate algorithms for the
computation and inversion of the incomplete gamma function ratios" (2012),
SIAM J. Sci. Comput. 34(6), A2965-A2981. Equation numbers refer to it.
"""

import enum
import typing

import numpy

from . import _exp
from . import _gamma
from . import _ieee
from . import _errors
from . import _config
from . import _gvarext
from . import _erf

_NAME = 'incomplete_gamma_normalized'
_EPS = 1e-13
_MAXITER = 50
# the continued fraction needs about (log _CF_EPS)² / 16x terms, ~80 at x = 1
_CF_EPS = 1e-15
_CF_MAXITER = 100

class Method(enum.Enum):
    """ The algorithm used to compute P(a, x) or Q(a, x) """
    TAYLOR_SERIES = 'taylor series'
    CONTINUED_FRACTION = 'continued fraction'
    UNIFORM_ASYMPTOTIC = 'uniform asymptotic expansion'
    UNDERFLOW = 'underflow'

class Region(typing.NamedTuple):
    """ Where (a, x) falls in the plane. If `lower_first`, P is computed with
    `method` and Q = 1 - P, otherwise the other way around. """
    method: Method
    lower_first: bool

class IncompleteGamma(typing.NamedTuple):
    lower: float
    upper: float

def _check_domain(a, x):
    if x < 0:
        raise _errors.DomainError(_NAME, 'x must be >= 0', a=a, x=x)
    if a <= 0:
        raise _errors.DomainError(_NAME, 'a must be > 0', a=a, x=x)

def _alpha(x):
    """ boundary between the P and Q regions, eq. 2.1 """
    if x >= 0.5:
        return x
    return numpy.log(0.5) / numpy.log(0.5 * x)

def _select_region(a, x):
    if a > _alpha(x):
        if x < 0.3 * a or a < 12:
            return Region(Method.TAYLOR_SERIES, True)
        return Region(Method.UNIFORM_ASYMPTOTIC, True)

    lnx = numpy.log(_ieee.dwarf) if x < _ieee.dwarf else numpy.log(x)
    if a < -_ieee.dwarf / lnx:
        return Region(Method.UNDERFLOW, False)
    elif x < 1:
        return Region(Method.TAYLOR_SERIES, False)
    elif x > 2.35 * a or a < 12:
        return Region(Method.CONTINUED_FRACTION, False)
    else:
        return Region(Method.UNIFORM_ASYMPTOTIC, False)

@_ieee.ieee
def select_region(a, x):
    """
    Determine which algorithm computes the regularized incomplete gamma
    function at (a, x).

    Parameters
    ----------
    a, x : float
        The arguments, a > 0, x >= 0.

    Returns
    -------
    region : Region
        The method, and whether it is applied to P (``lower_first=True``) or Q.
    """
    a = _ieee.asfloat(a)
    x = _ieee.asfloat(x)
    _check_domain(a, x)
    return _select_region(a, x)

def _log1pmx_ratio(a, x):
    """ log(x / a) - (x - a) / a, taking the logarithm of x / a directly when
    x is far from a """
    mu = (x - a) / a
    if -0.2928 < mu < 0.4142:
        return _exp.log1pmx(mu)
    return numpy.log(x / a) - mu

def dfactor(a, x):
    """
    Compute x^a e^-x / Γ(a + 1), eq. 2.3. Raises `EvaluationOverflowError`
    if the result is not representable.
    """
    if a < 3 or x < 0.2:
        return numpy.exp(a * numpy.log(x) - x) / _gamma._gamma_real(a + 1)
    c = _log1pmx_ratio(a, x)
    if a * c > numpy.log(_ieee.giant):
        raise _errors.EvaluationOverflowError(_NAME, 'x^a e^-x / Γ(a + 1) overflows', a=a, x=x)
    return numpy.exp(a * c) / (numpy.sqrt(2 * numpy.pi * a) * _gamma.gammastar(a))

def _taylor_lower(a, x):
    """ P(a, x) = x^a e^-x / Γ(a + 1) sum_n x^n / (a + 1)_n, eq. 2.15 """
    dp = dfactor(a, x)
    if dp == 0:
        return dp
    s = 1
    t = 1
    d = a
    for _ in range(_MAXITER):
        d += 1
        t = x * t / d
        s += t
        if t / s <= _EPS:
            break
    else:
        _config.nonconvergence(_NAME, 'taylor series for P', a=a, x=x)
    return dp * s

def _taylor_upper(a, x):
    """ Q(a, x) = u + v, eqs. 2.22-2.24, accurate for a close to an integer """

    # u = 1 - x^a / Γ(1 + a), written with 1 - 1/Γ(1 + a) = a(1 - a) g(a)
    g = a * (1 - a) * _gamma.auxgam(a)
    lnx = numpy.log(x)
    w = a * lnx
    u = g - (1 - g) * w * _exp.exprel(w)

    # v = x^a / Γ(a) x / (1 + a) sum_n (-x)^n (1 + a) / ((a + n + 1) (n + 1)!)
    p = a * x
    q = a + 1
    r = a + 3
    t = 1
    v = 1
    for _ in range(_MAXITER):
        p += x
        q += r
        r += 2
        t = -p * t / q
        v += t
        if abs(t / v) <= _EPS:
            break
    else:
        _config.nonconvergence(_NAME, 'taylor series for Q', a=a, x=x)
    return u + a * (1 - g) * numpy.exp((a + 1) * lnx) * v / (a + 1)

def _continued_fraction_upper(a, x):
    """ Q(a, x) with the continued fraction of section 2.4, evaluated as
    the series 1 + sum_k t_k with t_k = p_1 ... p_k (eqs. 2.27-2.28) """
    dp = dfactor(a, x)
    if dp == 0:
        return dp
    p = 0
    q = (x - 1 - a) * (x + 1 - a)
    r = 4 * (x + 1 - a)
    s = 1 - a
    pk = 0
    t = 1
    S = 1
    for _ in range(_CF_MAXITER):
        p += s
        q += r
        r += 8
        s += 2
        tau = p * (1 + pk)
        pk = tau / (q - tau)
        t *= pk
        S += t
        # the terms decrease slowly, estimate the tail as a geometric series
        if abs(t * pk) < _CF_EPS * abs(S * (1 - pk)):
            break
    else:
        _config.nonconvergence(_NAME, 'continued fraction for Q', a=a, x=x)

    # a D(a, x) = x^a e^-x / Γ(a)
    return a * dp / (x + 1 - a) * S

# coefficients d_n of eq. 2.36, used to compute S_a(η)
_saeta_coef = (
    1.0,
    -1.0 / 3.0,
    1.0 / 12.0,
    -2.0 / 135.0,
    1.0 / 864.0,
    1.0 / 2835.0,
    -139.0 / 777600.0,
    1.0 / 25515.0,
    -571.0 / 261273600.0,
    -281.0 / 151559100.0,
    8.29671134095308601e-7,
    -1.76659527368260793e-7,
    6.70785354340149857e-9,
    1.02618097842403080e-8,
    -4.38203601845335319e-9,
    9.14769958223679023e-10,
    -2.55141939949462497e-11,
    -5.83077213255042507e-11,
    2.43619480206674162e-11,
    -5.02766928011417559e-12,
    1.10043920319561347e-13,
    3.37176326240098538e-13,
    -1.39238872241816207e-13,
    2.85348938070474432e-14,
    -5.13911183424257258e-16,
    -1.97522882943494428e-15,
    8.09952115670456133e-16,
)

def _saeta(a, eta):
    """ compute S_a(η), eq. 2.33 """
    d = _saeta_coef
    beta = [0.] * len(d)
    beta[25] = d[26]
    beta[24] = d[25]
    for m in range(24, 0, -1):
        beta[m - 1] = d[m] + (m + 1) * beta[m + 1] / a

    s = beta[0]
    y = eta
    for k in range(1, 25):
        t = beta[k] * y
        s += t
        y *= eta
        if abs(t / s) <= _EPS:
            break
    else:
        _config.nonconvergence(_NAME, 'series for S_a(η)', a=a, eta=eta)
    return s / (1 + beta[1] / a)

def _uniform_asymptotic(a, x, lower):
    """ P(a, x) or Q(a, x) with the uniform asymptotic expansion, eq. 2.30:

        Q(a, x) = 1/2 erfc(η √(a/2)) + e^(-aη²/2) / √(2πa) S_a(η),

    and P = 1 - Q, with the sign of the second term flipped. """
    dp = dfactor(a, x)
    if dp == 0:
        return dp
    sign = -1 if lower else 1
    mu = (x - a) / a
    y = -_log1pmx_ratio(a, x)
    eta = 0 if y < 0 else numpy.sqrt(2 * y)
    y *= a # = a η² / 2
    v = numpy.sqrt(abs(y))
    if mu < 0:
        eta = -eta
        v = -v
    erfc = _erf._erfc(sign * v)
    return erfc / 2 + sign * numpy.exp(-y) * _saeta(a, eta) / numpy.sqrt(2 * numpy.pi * a)

def _underflow(a, x):
    return numpy.float64(0)

_evaluators = {
    Region(Method.TAYLOR_SERIES, True): _taylor_lower,
    Region(Method.UNIFORM_ASYMPTOTIC, True): lambda a, x: _uniform_asymptotic(a, x, True),
    Region(Method.UNDERFLOW, False): _underflow,
    Region(Method.TAYLOR_SERIES, False): _taylor_upper,
    Region(Method.CONTINUED_FRACTION, False): _continued_fraction_upper,
    Region(Method.UNIFORM_ASYMPTOTIC, False): lambda a, x: _uniform_asymptotic(a, x, False),
}

def _incomplete_gamma(a, x):
    """ version without argument conversion and gvar support, for internal
    use """
    if numpy.isnan(a) or numpy.isnan(x):
        return IncompleteGamma(numpy.nan, numpy.nan)
    _check_domain(a, x)
    if x == numpy.inf:
        return IncompleteGamma(numpy.float64(1), numpy.float64(0))
    region = _select_region(a, x)
    value = _evaluators[region](a, x)
    if region.lower_first:
        return IncompleteGamma(value, 1 - value)
    else:
        return IncompleteGamma(1 - value, value)

def _incomplete_gamma_deriv(a, x):
    a = _ieee.asfloat(a)
    x = _ieee.asfloat(x)
    with numpy.errstate(all='ignore'):
        dP = numpy.exp((a - 1) * numpy.log(x) - x - _gamma._gammaln_real(a))
    return dP, -dP

@_gvarext.gvar_ufunc(_incomplete_gamma_deriv, argnum=1)
@_ieee.ieee
def incomplete_gamma_normalized(a, x):
    """
    Compute the regularized incomplete gamma functions.

    Parameters
    ----------
    a : float
        The shape parameter, a > 0.
    x : float
        The integration limit, x >= 0. May be a `gvar.GVar`.

    Returns
    -------
    lower, upper : float
        P(a, x) = γ(a, x) / Γ(a) and Q(a, x) = Γ(a, x) / Γ(a). Only one of the
        two is computed directly, the other is obtained as its complement to
        1, see `select_region`.

    Raises
    ------
    DomainError :
        If x < 0 or a <= 0.
    EvaluationOverflowError :
        If x^a e^-x / Γ(a + 1) can not be represented.

    Examples
    --------
    >>> incomplete_gamma_normalized(0.5, 0.5)
    IncompleteGamma(lower=0.682689492137086, upper=0.31731050786291404)
    """
    return _incomplete_gamma(_ieee.asfloat(a), _ieee.asfloat(x))
