# specialfns/tests/util.py
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

import functools

import numpy as np
import mpmath

def assert_allclose(actual, desired, *, rtol=0, atol=0, equal_nan=False, **kw):
    """ change the default arguments of np.testing.assert_allclose """
    np.testing.assert_allclose(actual, desired, rtol=rtol, atol=atol, equal_nan=equal_nan, **kw)

def mpmath_ufunc(func, dps=40):
    """ Decorator to evaluate an mpmath expression elementwise at increased
    precision, converting the arguments and the result to float """
    @np.vectorize
    @functools.wraps(func)
    def newfunc(*args):
        with mpmath.workdps(dps):
            return float(func(*map(mpmath.mpf, map(float, args))))
    return newfunc
