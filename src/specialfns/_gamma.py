# specialfns/_gamma.py
#
# Copyright (c) 2022, 2023, 2024, Giacomo Petrillo
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
from scipy import special

from . import _exp
from . import _chebyshev
from . import _ieee
from . import _gvarext

# Lanczos approximation with the parameters of Pugh (2004, p. 116). The
# variant on p. 126 is less accurate, e.g., on Γ(14) = 13!.
_lanczos_r = 10.900511
_lanczos_coef = (
    2.48574089138753565546e-5,
    1.05142378581721974210,
    -3.45687097222016235469,
    4.51227709466894823700,
    -2.98285225323576655721,
    1.05639711577126713077,
    -1.95428773191645869583e-1,
    1.70970543404441224307e-2,
    -5.71926117404305781283e-4,
    4.63399473359905636708e-6,
    -2.71994908488607703910e-9,
)
_lanczos_norm = 2 * numpy.sqrt(numpy.e / numpy.pi)
_log_lanczos_norm = numpy.log(_lanczos_norm)
_log_pi = numpy.log(numpy.pi)
_sqrt_2pi = numpy.sqrt(2 * numpy.pi)
_log_sqrt_2pi = numpy.log(_sqrt_2pi)

def _lanczos_sum(x):
    s = _lanczos_coef[0]
    for i, d in enumerate(_lanczos_coef[1:], 1):
        s += d / (x + (i - 1))
    return s

def _gamma_lanczos(x):
    """ Γ(x) for Re x >= 1/2 """
    base = (x - 0.5 + _lanczos_r) / numpy.e
    # split the power to avoid overflowing before Γ(x) itself does
    half = base ** ((x - 0.5) / 2)
    return _lanczos_norm * half * _lanczos_sum(x) * half

def _gammaln_lanczos(x):
    """ log Γ(x) for Re x >= 1/2 """
    base = (x - 0.5 + _lanczos_r) / numpy.e
    return numpy.log(_lanczos_sum(x)) + _log_lanczos_norm + (x - 0.5) * numpy.log(base)

def _sinpi_complex(z):
    if z.imag == 0:
        return numpy.complex128(_exp.sinpi(z.real))
    return numpy.sin(numpy.pi * z)

def _gamma_real(x):
    if x < 0.5:
        # reflection, Γ(x) Γ(1 - x) = π / sin(πx); the sine is exactly zero on
        # the poles, yielding ±inf
        return numpy.pi / (_exp.sinpi(x) * _gamma_lanczos(1 - x))
    return _gamma_lanczos(x)

def _gamma_complex(z):
    if z.real < 0.5:
        return numpy.pi / (_sinpi_complex(z) * _gamma_lanczos(1 - z))
    return _gamma_lanczos(z)

def _gammaln_real(x):
    if x < 0.5:
        return _log_pi - numpy.log(abs(_exp.sinpi(x))) - _gammaln_lanczos(1 - x)
    return _gammaln_lanczos(x)

def _gammaln_complex(z):
    if z.real < 0.5:
        return _log_pi - numpy.log(_sinpi_complex(z)) - _gammaln_lanczos(1 - z)
    return _gammaln_lanczos(z)

def _gamma_deriv(x):
    return _gamma_real(_ieee.asfloat(x)) * special.digamma(x)

@_gvarext.gvar_ufunc(_gamma_deriv)
@_ieee.ieee
def gamma_value(x):
    """
    Compute the Gamma function.

    Parameters
    ----------
    x : float or complex
        The argument. If complex (including numpy complex types), the
        computation is done in the complex plane.

    Returns
    -------
    gamma : float or complex
        Γ(x). At the poles x = 0, -1, -2, ... the result is ±inf, following
        IEEE rules instead of raising.
    """
    if _ieee.iscomplex(x):
        return _gamma_complex(_ieee.ascomplex(x))
    return _gamma_real(_ieee.asfloat(x))

@_gvarext.gvar_ufunc(special.digamma)
@_ieee.ieee
def gamma_log_value(x):
    """
    Compute the logarithm of the Gamma function.

    For real `x`, the result is log|Γ(x)|. For complex `x`, it is a
    logarithm of Γ(x), not necessarily the principal one, but continuous
    in the right half plane.
    """
    if _ieee.iscomplex(x):
        return _gammaln_complex(_ieee.ascomplex(x))
    return _gammaln_real(_ieee.asfloat(x))

# g(a) such that 1 - 1/Γ(1 + a) = a (1 - a) g(a), as a Chebyshev series in
# t = 2a - 1 for 0 <= a <= 1, from Gil, Segura and Temme (2012, eq. 2.23)
_auxgam_coef = (
    -1.013609258009865776949,
    0.784903531024782283535e-1,
    0.67588668743258315530e-2,
    -0.12790434869623468120e-2,
    0.462939838642739585e-4,
    0.43381681744740352e-5,
    -0.5326872422618006e-6,
    0.172233457410539e-7,
    0.8300542107118e-9,
    -0.10553994239968e-9,
    0.39415842851e-11,
    0.362068537e-13,
    -0.107440229e-13,
    0.5000413e-15,
    -0.62452e-17,
    -0.5185e-18,
    0.347e-19,
    -0.9e-21,
)

def auxgam(a):
    """ compute g(a) = (1 - 1/Γ(1 + a)) / (a (1 - a)) for -1 <= a <= 1 """
    if a < 0:
        return -(1 + (1 + a) ** 2 * auxgam(1 + a)) / (1 - a)
    return _chebyshev.chebsum(_auxgam_coef, 2 * a - 1)

def lngam1(x):
    """ compute log Γ(1 + x) accurately for -1 < x <= 1 """
    return -_exp.log1p(x * (x - 1) * auxgam(x))

# Chebyshev series of 12x * stirling(x) in t = 18/x^2 - 1, 3 <= x < 12
_stirling_low = (
    1.996379051590076518221,
    -0.17971032528832887213e-2,
    0.131292857963846713e-4,
    -0.2340875228178749e-6,
    0.72291210671127e-8,
    -0.3280997607821e-9,
    0.198750709010e-10,
    -0.15092141830e-11,
    0.1375340084e-12,
    -0.145728923e-13,
    0.17532367e-14,
    -0.2351465e-15,
    0.346551e-16,
    -0.55471e-17,
    0.9548e-18,
    -0.1748e-18,
    0.332e-19,
    -0.58e-20,
)

# rational approximation of x * stirling(x) in z = 1/x^2, 12 <= x < 1000: the
# first 6 coefficients are the numerator, the last the denominator constant
_stirling_high = (
    0.25721014990011306473e-1,
    0.82475966166999631057e-1,
    -0.25328157302663562668e-2,
    0.60992926669463371e-3,
    -0.33543297638406e-3,
    0.250505279903e-3,
    0.30865217988013567769,
)

_stirling_asymp = (-1 / 1680, 1 / 1260, -1 / 360, 1 / 12)

def stirling(x):
    """
    Compute the remainder of the Stirling approximation,
    log Γ(x) - (x - 1/2) log x + x - log √(2π), x > 0.
    """
    if x < _ieee.dwarf:
        return _ieee.giant
    elif x < 1:
        return lngam1(x) - (x + 0.5) * numpy.log(x) + x - _log_sqrt_2pi
    elif x < 2:
        return lngam1(x - 1) - (x - 0.5) * numpy.log(x) + x - _log_sqrt_2pi
    elif x < 3:
        return lngam1(x - 2) - (x - 0.5) * numpy.log(x) + x - _log_sqrt_2pi + numpy.log(x - 1)
    elif x < 12:
        return _chebyshev.chebsum(_stirling_low, 18 / (x * x) - 1) / (12 * x)

    z = 1 / (x * x)
    if x < 1000:
        c = _stirling_high
        return numpy.polyval(c[5::-1], z) / (c[6] + z) / x
    else:
        return numpy.polyval(_stirling_asymp, z) / x

def gammastar(x):
    """
    Compute Γ*(x) = Γ(x) / (√(2π) x^(x - 1/2) e^-x), which tends to 1 for
    x -> ∞. Returns a huge number for x <= 0.
    """
    if x >= 3:
        return numpy.exp(stirling(x))
    elif x > 0:
        return _gamma_real(x) / (numpy.exp(-x + (x - 0.5) * numpy.log(x)) * _sqrt_2pi)
    else:
        return _ieee.giant
