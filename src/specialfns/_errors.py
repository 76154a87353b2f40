# specialfns/_errors.py
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

import enum
import typing

import numpy

class ErrorKind(enum.Enum):
    """ The reason why an evaluation failed """
    DOMAIN = 'domain'
    OVERFLOW = 'overflow'
    CONVERGENCE = 'convergence'

class SpecialFunctionError(ArithmeticError):
    """
    Base class of the errors raised by the evaluators.

    Parameters
    ----------
    function : str
        The name of the function that failed.
    message : str
        What went wrong.
    **arguments :
        The arguments of the failed call, by name.

    Attributes
    ----------
    kind : ErrorKind
        The category of the error.
    function : str
    arguments : dict
    """

    kind = None

    def __init__(self, function, message, **arguments):
        self.function = function
        self.arguments = arguments
        args = ', '.join(f'{k}={v!r}' for k, v in arguments.items())
        super().__init__(f'{function}({args}): {message}')

class DomainError(SpecialFunctionError, ValueError):
    """ An argument is outside the domain of the function """
    kind = ErrorKind.DOMAIN

class EvaluationOverflowError(SpecialFunctionError, OverflowError):
    """ An intermediate quantity exceeds the floating point range """
    kind = ErrorKind.OVERFLOW

class ConvergenceError(SpecialFunctionError):
    """ An iterative evaluator hit its iteration cap before converging """
    kind = ErrorKind.CONVERGENCE

class ConvergenceWarning(RuntimeWarning):
    """ Emitted in place of `ConvergenceError` under the 'warn' policy """
    pass

class Result(typing.NamedTuple):
    """ Value of an evaluation together with the kind of its failure, if
    any. `value` is nan when `error` is not None. """
    value: typing.Any
    error: typing.Optional[ErrorKind] = None

    @property
    def ok(self):
        return self.error is None

def evaluate(func, *args, **kw):
    """
    Call a function of the library and report failures as values.

    Parameters
    ----------
    func : callable
        One of the evaluators, e.g., `inv_erf`.
    *args, **kw :
        Arguments passed to `func`.

    Returns
    -------
    result : Result
        ``Result(value, None)`` on success, ``Result(nan, kind)`` if `func`
        raised a `SpecialFunctionError`. A nan returned by `func` itself, e.g.,
        ``erf(nan)``, is a success.

    Examples
    --------
    >>> evaluate(inv_erf, 2.)
    Result(value=nan, error=<ErrorKind.DOMAIN: 'domain'>)
    """
    try:
        return Result(func(*args, **kw))
    except SpecialFunctionError as exc:
        return Result(numpy.nan, exc.kind)
