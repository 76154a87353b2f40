# specialfns/_ieee.py
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

import functools

import numpy

# largest and tiniest numbers used as range guards
giant = numpy.finfo(numpy.float64).max / 1000
dwarf = 1000 * numpy.finfo(numpy.float64).smallest_subnormal
eps = numpy.finfo(numpy.float64).eps

def ieee(func):
    """
    Decorator to evaluate `func` with numpy floating point errors silenced, so
    that infinities and nans propagate through the arithmetic like in C.
    """
    @functools.wraps(func)
    def newfunc(*args, **kw):
        with numpy.errstate(all='ignore'):
            return func(*args, **kw)
    return newfunc

def asfloat(x):
    """ convert a real scalar to numpy.float64, which follows IEEE rules
    instead of raising on division by zero """
    return numpy.float64(x)

def ascomplex(z):
    return numpy.complex128(z)

def iscomplex(x):
    return numpy.iscomplexobj(x)
