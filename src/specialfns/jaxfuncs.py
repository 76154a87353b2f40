# specialfns/jaxfuncs.py
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

jax-compatible versions of the real functions of the library.

The functions accept arrays and broadcast them, and can be jitted, vmapped and
differentiated to any order w.r.t. x. The computation always runs on the host
in float64, and errors such as arguments out of domain produce nan. Arrays
are evaluated by calling the scalar functions element by element, there is no
vectorized implementation underneath.

============= ===================================================
function      equivalent
============= ===================================================
``gamma``     `gamma_value`
``gammaln``   `gamma_log_value`
``gammainc``  ``incomplete_gamma_normalized(a, x).lower``
``gammaincc`` ``incomplete_gamma_normalized(a, x).upper``
``erf``       `erf`
``erfc``      `erfc`
``erfinv``    `inv_erf`
``erfcinv``   `inv_erfc`
``lambertw``  `lambert_w` on the real principal branch
============= ===================================================

"""

from . import _patch_jax

from jax import numpy as jnp
from jax.scipy import special as jspecial

from . import _jaxext
from . import _gamma
from . import _incgamma
from . import _erf
from . import _lambertw

__all__ = [
    'gamma',
    'gammaln',
    'gammainc',
    'gammaincc',
    'erf',
    'erfc',
    'erfinv',
    'erfcinv',
    'lambertw',
]

def _gamma_deriv(x):
    return gamma(x) * jspecial.digamma(x)

gamma = _jaxext.makejaxufunc(_gamma.gamma_value, _gamma_deriv)
gammaln = _jaxext.makejaxufunc(_gamma.gamma_log_value, jspecial.digamma)

def _gammainc(a, x):
    return _incgamma.incomplete_gamma_normalized(a, x).lower

def _gammaincc(a, x):
    return _incgamma.incomplete_gamma_normalized(a, x).upper

def _gammainc_deriv(a, x):
    return jnp.exp((a - 1) * jnp.log(x) - x - jspecial.gammaln(a))

gammainc = _jaxext.makejaxufunc(_gammainc, None, _gammainc_deriv)
gammaincc = _jaxext.makejaxufunc(_gammaincc, None, lambda a, x: -_gammainc_deriv(a, x))

_2_sqrtpi = 2 / jnp.sqrt(jnp.pi)

def _erf_deriv(x):
    return _2_sqrtpi * jnp.exp(-jnp.square(x))

erf = _jaxext.makejaxufunc(_erf.erf, _erf_deriv)
erfc = _jaxext.makejaxufunc(_erf.erfc, lambda x: -_erf_deriv(x))

erfinv = _jaxext.makejaxufunc(_erf.inv_erf, lambda x: 1 / _erf_deriv(erfinv(x)))
erfcinv = _jaxext.makejaxufunc(_erf.inv_erfc, lambda q: -1 / _erf_deriv(erfcinv(q)))

def _lambert_w_principal(x):
    return _lambertw.lambert_w(x)

def _lambertw_deriv(x):
    w = lambertw(x)
    return 1 / (jnp.exp(w) * (1 + w))

lambertw = _jaxext.makejaxufunc(_lambert_w_principal, _lambertw_deriv)
