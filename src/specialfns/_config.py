# specialfns/_config.py
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

import contextlib
import contextvars
import warnings

from . import _errors

POLICIES = ('warn', 'raise', 'ignore')

_policy = contextvars.ContextVar('specialfns_convergence_policy', default='warn')

def get_convergence_policy():
    """ Return the current policy for iterations that do not converge, one
    of 'warn', 'raise', 'ignore'. """
    return _policy.get()

@contextlib.contextmanager
def convergence_policy(policy):
    """
    Context manager to set what happens when an iterative evaluator reaches
    its iteration cap without meeting its tolerance.

    Parameters
    ----------
    policy : {'warn', 'raise', 'ignore'}
        'warn' (default outside of any context) emits a `ConvergenceWarning`
        and returns the best estimate, 'raise' raises `ConvergenceError`,
        'ignore' silently returns the best estimate.

    Notes
    -----
    The setting is stored in a context variable, so it applies only to the
    current thread or asyncio task.

    Examples
    --------

    >>> with specialfns.convergence_policy('raise'):
    >>>     p, q = specialfns.incomplete_gamma_normalized(11.9, 12.)

    """
    if policy not in POLICIES:
        raise ValueError(f'convergence policy {policy!r} not in {POLICIES}')
    token = _policy.set(policy)
    try:
        yield policy
    finally:
        _policy.reset(token)

def nonconvergence(function, what, **arguments):
    """ Called by the evaluators when an iteration cap is reached. """
    policy = _policy.get()
    if policy == 'raise':
        raise _errors.ConvergenceError(function, f'{what} did not converge', **arguments)
    elif policy == 'warn':
        args = ', '.join(f'{k}={v!r}' for k, v in arguments.items())
        msg = f'{function}({args}): {what} did not converge, returning best estimate'
        warnings.warn(msg, _errors.ConvergenceWarning, stacklevel=3)
