# specialfns/_jaxext/__init__.py
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

import numpy
import jax
from jax import numpy as jnp

from .. import _errors

def scalar_ufunc(scalarfunc):
    """
    Turn a scalar function of the library into a float64 numpy ufunc-like
    function. Failures of type `SpecialFunctionError` yield nan, like domain
    errors of numpy ufuncs.
    """
    def evaluate(*args):
        return _errors.evaluate(scalarfunc, *args).value
    return numpy.vectorize(evaluate, otypes=[numpy.float64])

def makejaxufunc(scalarfunc, *derivs):
    """
    
    Wrap a scalar real function to add jax support.
    
    Parameters
    ----------
    scalarfunc : callable
        Function of real scalars returning a real scalar. Keyword arguments
        not supported.
    derivs : sequence of callable
        Derivatives of the function w.r.t. each positional argument, with the
        same signature as `scalarfunc`, implemented with jax. Pass None to
        indicate a missing derivative. There must be as many derivatives as
        the arguments to `scalarfunc`.
    
    Return
    ------
    func : callable
        Wrapped `scalarfunc`, broadcasting over array arguments. Supports jit
        and vmap, but the calculation is performed on the host by calling
        `scalarfunc` elementwise.
    
    """

    ufunc = scalar_ufunc(scalarfunc)
    nondiff_argnums = [i for i, d in enumerate(derivs) if d is None]
    
    @functools.wraps(scalarfunc)
    @functools.partial(jax.custom_jvp, nondiff_argnums=nondiff_argnums)
    def func(*args):
        args = tuple(jnp.asarray(a, jnp.float64) for a in args)
        return pure_callback_ufunc(ufunc, jnp.float64, *args)

    @func.defjvp
    def func_jvp(*allargs):
        ndargs = allargs[:-2]
        dargs = allargs[-2]
        dargst = allargs[-1]
        
        itnd = iter(ndargs)
        itd = iter(dargs)
        args = [next(itnd) if d is None else next(itd) for d in derivs]
        
        result = func(*args)
        tangent = sum([
            d(*args) * t for t, d in
            zip(dargst, (d for d in derivs if d is not None))
        ])
        return result, tangent
    
    return func

def pure_callback_ufunc(callback, dtype, *args):
    """ version of jax.pure_callback for functions that broadcast their
    arguments """
    shape = jnp.broadcast_shapes(*(a.shape for a in args))
    ndim = len(shape)
    padded_args = [
        jnp.expand_dims(a, tuple(range(ndim - a.ndim)))
        for a in args
    ]
    result = jax.ShapeDtypeStruct(shape, dtype)
    return jax.pure_callback(callback, result, *padded_args, vmap_method='expand_dims')
