# specialfns/_erf.py
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

import numpy

from . import _ieee
from . import _errors
from . import _config
from . import _gvarext
from . import _incgamma

_2_sqrtpi = 2 / numpy.sqrt(numpy.pi)
_1_sqrtpi = 1 / numpy.sqrt(numpy.pi)

def _erf(x):
    if numpy.isnan(x) or x == 0:
        return x
    elif numpy.isinf(x):
        return numpy.copysign(numpy.float64(1), x)
    elif abs(x) < 1e-10:
        return _2_sqrtpi * x * (1 - x * x / 3)
    p = _incgamma._incomplete_gamma(numpy.float64(0.5), x * x).lower
    return numpy.copysign(p, x)

def _erfc(x):
    if numpy.isnan(x):
        return x
    elif x == 0:
        return numpy.float64(1)
    elif x == numpy.inf:
        return numpy.float64(0)
    elif x == -numpy.inf:
        return numpy.float64(2)
    lower, upper = _incgamma._incomplete_gamma(numpy.float64(0.5), x * x)
    return upper if x > 0 else 1 + lower

def _erf_deriv(x):
    x = _ieee.asfloat(x)
    with numpy.errstate(all='ignore'):
        return _2_sqrtpi * numpy.exp(-x * x)

def _erfc_deriv(x):
    return -_erf_deriv(x)

@_gvarext.gvar_ufunc(_erf_deriv)
@_ieee.ieee
def erf(x):
    """
    Compute the error function erf(x) = 2/√π ∫_0^x e^-t² dt.

    It is computed as sign(x) P(1/2, x²), where P is the regularized lower
    incomplete gamma function.
    """
    return _erf(_ieee.asfloat(x))

@_gvarext.gvar_ufunc(_erfc_deriv)
@_ieee.ieee
def erfc(x):
    """
    Compute the complementary error function erfc(x) = 1 - erf(x), without
    cancellation for large positive x.
    """
    return _erfc(_ieee.asfloat(x))

# Cody (1969) rational approximations, coefficients in ascending order of
# degree. The denominators are monic and their leading 1 is omitted.

# e^x² erfc(x) for 0.5 <= x < 4
_cody_p3 = (
    1.23033935479799725272e3,
    2.05107837782607146532e3,
    1.71204761263407058314e3,
    8.81952221241769090411e2,
    2.98635138197400131132e2,
    6.61191906371416294775e1,
    8.88314979438837594118,
    5.64188496988670089180e-1,
    2.15311535474403846343e-8,
)
_cody_q3 = (
    1.23033935480374942043e3,
    3.43936767414372163696e3,
    4.36261909014324715820e3,
    3.29079923573345962678e3,
    1.62138957456669018874e3,
    5.37181101862009857509e2,
    1.17693950891312499305e2,
    1.57449261107098347253e1,
)

# (1/√π - x e^x² erfc(x)) x² in z = 1/x², x >= 4
_cody_p4 = (
    6.58749161529837803157e-4,
    1.60837851487422766278e-2,
    1.25781726111229246204e-1,
    3.60344899949804439429e-1,
    3.05326634961232344035e-1,
    1.63153871373020978498e-2,
)
_cody_q4 = (
    2.33520497626869185443e-3,
    6.05183413124413191178e-2,
    5.27905102951428412248e-1,
    1.87295284992346047209,
    2.56852019228982242072,
)

def _rational(x, p, q):
    return numpy.polyval(p[::-1], x) / numpy.polyval((1,) + q[::-1], x)

# above this 1/x² is negligible w.r.t. 1
_erfcx_xbig = 1 / numpy.sqrt(2 * _ieee.eps)

def _erfcx(x):
    if numpy.isnan(x):
        return x
    elif x < 0:
        return 2 * numpy.exp(x * x) - _erfcx(-x)
    elif x < 0.5:
        return numpy.exp(x * x) * _erfc(x)
    elif x < 4:
        return _rational(x, _cody_p3, _cody_q3)
    elif x > _erfcx_xbig:
        return _1_sqrtpi / x
    z = 1 / (x * x)
    return (_1_sqrtpi - z * _rational(z, _cody_p4, _cody_q4)) / x

def _erfcx_deriv(x):
    x = _ieee.asfloat(x)
    return 2 * x * erfcx(x) - _2_sqrtpi

@_gvarext.gvar_ufunc(_erfcx_deriv)
@_ieee.ieee
def erfcx(x):
    """
    Compute the scaled complementary error function e^x² erfc(x).

    For x >= 0.5 it uses the rational approximations of W. J. Cody, "Rational
    Chebyshev approximations for the error function" (1969), Math. Comp.
    23(107), 631-637, which do not underflow for large x. erfcx(-∞) = ∞.
    """
    return _erfcx(_ieee.asfloat(x))

_INV_EPS = 1e-13
_INV_MAXITER = 25

# Maclaurin series of the inverse error function in x, odd powers only, see
# D. Dominici, "Asymptotic analysis of the derivatives of the inverse error
# function" (2008), arXiv:math/0607230
_inv_erf_coef = (
    0.8862269254527580136490837416705725914,
    0.23201366653465449355353408258828482092,
    0.12755617530559795825399974141573007964,
    0.08655212924154753372964179262906019467,
    0.0649596177453854133820146686203173992,
    0.05173128198461637411263188588995263494,
    0.042836720651797349844651488262505239778748614494577,
    0.036465929308531626325579767243837255197189652833816,
    0.031689005021605446809609468464282901899488416427716,
    0.027980632964995224733430667242687604018208353124197,
    0.025022275841198349457169309105600322973899140592551,
    0.022609863318897574432816586571825165781991413545509,
    0.020606780379059001718768799653504673904926580322217,
    0.018918217250778854463498776390977373648034147062102,
    0.017476370562856546190429615204363584668515222571904,
    0.016231500987685251275294964378105742488956128532596,
    0.015146315063247805520385389047805864944448606003764,
    0.014192316002509964151153600056745641681784598884799,
)

def _inv_erf_seed(x):
    """ first guess of erf^-1(x) for 0 <= x < 1 """
    if x >= 0.999:
        # A. J. Strecok, "On the calculation of the inverse of the error
        # function" (1968), Math. Comp. 22(101), 144-158, eq. 13
        return numpy.sqrt(-numpy.log((1 - x) * (1 + x)))
    return x * numpy.polyval(_inv_erf_coef[::-1], x * x)

def _halley(name, func, sign, z, y, **arguments):
    """
    Solve func(z) = y starting from z, where func' = sign 2/√π e^-z². Since
    func'' = -2z func', Halley's step reduces to f / (f' + z f).
    """
    for _ in range(_INV_MAXITER):
        f = func(z) - y
        if f == 0:
            break
        fprime = sign * _2_sqrtpi * numpy.exp(-z * z)
        diff = f / (fprime + z * f)
        z -= diff
        if abs(diff) <= _INV_EPS * abs(z):
            break
    else:
        _config.nonconvergence(name, "Halley's iteration", **arguments)
    return z

def _inv_erf(x):
    if numpy.isnan(x):
        return x
    if abs(x) > 1:
        raise _errors.DomainError('inv_erf', 'x must be in [-1, 1]', x=x)
    if x < 0:
        return -_inv_erf(-x)
    elif x == 0:
        return x
    elif x == 1:
        return numpy.float64(numpy.inf)
    elif x > 0.5:
        # 1 - x is exact here
        return _inv_erfc(1 - x)
    z = _inv_erf_seed(x)
    return _halley('inv_erf', _erf, 1, z, x, x=x)

def _inv_erfc(q):
    if numpy.isnan(q):
        return q
    if not 0 <= q <= 2:
        raise _errors.DomainError('inv_erfc', 'q must be in [0, 2]', q=q)
    if q == 0:
        return numpy.float64(numpy.inf)
    elif q == 2:
        return numpy.float64(-numpy.inf)
    elif q > 1:
        return -_inv_erfc(2 - q)
    elif q >= 0.5:
        return _inv_erf(1 - q)
    if q <= 0.001:
        # same as the seed for x = 1 - q, without losing the digits of q
        z = numpy.sqrt(-numpy.log(q * (2 - q)))
    else:
        z = _inv_erf_seed(1 - q)
    return _halley('inv_erfc', _erfc, -1, z, q, q=q)

def _inv_erf_deriv(x):
    return 1 / _erf_deriv(inv_erf(x))

def _inv_erfc_deriv(q):
    return -1 / _erf_deriv(inv_erfc(q))

@_gvarext.gvar_ufunc(_inv_erf_deriv)
@_ieee.ieee
def inv_erf(x):
    """
    Compute the inverse of the error function.

    Parameters
    ----------
    x : float
        The argument, -1 <= x <= 1.

    Returns
    -------
    z : float
        The z such that erf(z) = x. Infinite for x = ±1.

    Raises
    ------
    DomainError :
        If |x| > 1.

    Notes
    -----
    The first guess comes from the Maclaurin series of erf^-1, or from the
    logarithmic asymptotic form close to ±1, and is refined with Halley's
    method on erf, or on erfc for x > 1/2, to keep the relative accuracy in
    the tails.
    """
    return _inv_erf(_ieee.asfloat(x))

@_gvarext.gvar_ufunc(_inv_erfc_deriv)
@_ieee.ieee
def inv_erfc(q):
    """
    Compute the inverse of the complementary error function.

    Parameters
    ----------
    q : float
        The argument, 0 <= q <= 2.

    Returns
    -------
    z : float
        The z such that erfc(z) = q. Infinite for q = 0 or 2.

    Raises
    ------
    DomainError :
        If q is outside [0, 2].
    """
    return _inv_erfc(_ieee.asfloat(q))
