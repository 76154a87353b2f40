# specialfns/tests/test_gamma.py
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

import math

import numpy as np
from scipy import special
import pytest
from pytest import mark
import mpmath

import specialfns
from specialfns import _gamma

from . import util

gamma = np.vectorize(specialfns.gamma_value)
gammaln = np.vectorize(specialfns.gamma_log_value)

@mark.parametrize('x', [
    pytest.param(np.linspace(0.5, 10, 1000), id='small'),
    pytest.param(np.linspace(10, 170, 1000), id='large'),
    pytest.param(0.3 - np.arange(1, 30), id='negative'),
    pytest.param(np.linspace(-0.99, 0.49, 101), id='reflected'),
])
def test_gamma_real(x):
    util.assert_allclose(gamma(x), special.gamma(x), rtol=1e-12)

def test_gamma_known_values():
    util.assert_allclose(specialfns.gamma_value(0.5), np.sqrt(np.pi), rtol=1e-14)
    for n in range(1, 26):
        util.assert_allclose(specialfns.gamma_value(n), math.factorial(n - 1), rtol=1e-13)

def test_gamma_poles():
    for x in [0, -1, -2, -10, -100]:
        assert np.isinf(specialfns.gamma_value(float(x)))

def test_gamma_overflow():
    assert specialfns.gamma_value(172.) == np.inf
    assert np.isfinite(specialfns.gamma_value(171.))

def test_gamma_special_values():
    assert np.isnan(specialfns.gamma_value(np.nan))
    assert specialfns.gamma_value(np.inf) == np.inf

def test_gamma_complex():
    re, im = np.meshgrid(np.linspace(-5.05, 5, 31), np.linspace(-5, 5, 21))
    z = re + 1j * im
    util.assert_allclose(gamma(z), special.gamma(z), rtol=1e-11)

def test_gamma_complex_type():
    g = specialfns.gamma_value(3 + 0j)
    assert isinstance(g, complex)
    util.assert_allclose(g, 2, rtol=1e-14)
    g = specialfns.gamma_value(np.complex64(0.5))
    assert isinstance(g, complex)
    g = specialfns.gamma_value(3)
    assert not isinstance(g, complex)

@mark.parametrize('x', [
    pytest.param(np.linspace(0.5, 100, 1000), id='small'),
    pytest.param(np.logspace(2, 300, 1000), id='large'),
    pytest.param(0.3 - np.arange(1, 30), id='negative'),
])
def test_gammaln_real(x):
    util.assert_allclose(gammaln(x), special.gammaln(x), rtol=1e-13, atol=1e-14)

def test_gammaln_complex():
    re, im = np.meshgrid(np.linspace(-5.05, 5, 31), np.linspace(-5, 5, 21))
    z = re + 1j * im
    util.assert_allclose(np.exp(gammaln(z)), special.gamma(z), rtol=1e-11)
    z = 200 + 1j * np.linspace(-100, 100, 21)
    util.assert_allclose(gammaln(z), special.loggamma(z), rtol=1e-13)

@util.mpmath_ufunc
def auxgam(a):
    return (1 - mpmath.rgamma(1 + a)) / (a * (1 - a))

def test_auxgam():
    a = np.linspace(-0.99, 0.99, 100)
    util.assert_allclose(np.vectorize(_gamma.auxgam)(a), auxgam(a), rtol=1e-13)

@util.mpmath_ufunc
def lngam1(x):
    return mpmath.loggamma(1 + x)

def test_lngam1():
    x = np.linspace(-0.5, 1, 1001)
    util.assert_allclose(np.vectorize(_gamma.lngam1)(x), lngam1(x), rtol=1e-13, atol=1e-16)

@util.mpmath_ufunc
def stirling(x):
    return mpmath.loggamma(x) - (x - 0.5) * mpmath.log(x) + x - mpmath.log(mpmath.sqrt(2 * mpmath.pi))

@mark.parametrize('x', [
    pytest.param(np.linspace(0.01, 3, 300), id='lngam1'),
    pytest.param(np.linspace(3, 12, 300), id='chebyshev'),
    pytest.param(np.linspace(12, 1000, 300), id='rational'),
    pytest.param(np.logspace(3, 10, 300), id='asymptotic'),
])
def test_stirling(x):
    util.assert_allclose(np.vectorize(_gamma.stirling)(x), stirling(x), rtol=1e-12)

@util.mpmath_ufunc
def gammastar(x):
    return mpmath.gamma(x) / (mpmath.sqrt(2 * mpmath.pi) * x ** (x - 0.5) * mpmath.exp(-x))

def test_gammastar():
    x = np.linspace(0.1, 50, 500)
    util.assert_allclose(np.vectorize(_gamma.gammastar)(x), gammastar(x), rtol=1e-12)
    assert _gamma.gammastar(np.float64(0)) > 1e300
    assert _gamma.gammastar(np.float64(-1)) > 1e300
