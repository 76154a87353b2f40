# specialfns/_gvarext.py
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

import gvar

def gvar_ufunc(deriv, argnum=0):
    """

    Decorator to make a scalar function accept a gvar argument.

    Parameters
    ----------
    deriv : callable
        The derivative of the function w.r.t. the argument at `argnum`, with
        the same signature as the function. If the function returns a tuple,
        `deriv` must return a tuple of derivatives of the same length.
    argnum : int, default 0
        The position of the argument that may be a gvar.

    Returns
    -------
    decorator : callable
        A decorator that wraps the function such that, if the argument at
        `argnum` is a `gvar.GVar`, the function is evaluated at its mean and
        the result is a `gvar.GVar` correlated with the input, with first
        order error propagation. Otherwise the function is called unchanged.

    """

    def decorator(func):

        @functools.wraps(func)
        def decorated_func(*args, **kw):
            x = args[argnum] if argnum < len(args) else None
            if not isinstance(x, gvar.GVar):
                return func(*args, **kw)

            args = args[:argnum] + (x.mean,) + args[argnum + 1:]
            out = func(*args, **kw)
            jac = deriv(*args, **kw)
            if isinstance(out, tuple):
                return type(out)(*(
                    gvar.gvar_function(x, o, d) for o, d in zip(out, jac)
                ))
            return gvar.gvar_function(x, out, jac)

        return decorated_func

    return decorator
