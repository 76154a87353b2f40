# specialfns/tests/test_errors.py
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

import threading
import warnings

import numpy as np
import pytest
from pytest import mark

import specialfns
from specialfns import _config, _incgamma

@mark.parametrize('cls,bases,kind', [
    (specialfns.DomainError, (ValueError,), specialfns.ErrorKind.DOMAIN),
    (specialfns.EvaluationOverflowError, (OverflowError,), specialfns.ErrorKind.OVERFLOW),
    (specialfns.ConvergenceError, (), specialfns.ErrorKind.CONVERGENCE),
])
def test_hierarchy(cls, bases, kind):
    assert issubclass(cls, specialfns.SpecialFunctionError)
    assert issubclass(cls, ArithmeticError)
    for base in bases:
        assert issubclass(cls, base)
    assert cls.kind is kind
    exc = cls('somefunc', 'went wrong', a=1, x=2.5)
    assert exc.kind is kind
    assert exc.function == 'somefunc'
    assert exc.arguments == dict(a=1, x=2.5)
    assert str(exc) == 'somefunc(a=1, x=2.5): went wrong'

def test_warning_class():
    assert issubclass(specialfns.ConvergenceWarning, RuntimeWarning)

def test_evaluate_ok():
    result = specialfns.evaluate(specialfns.erf, 0.5)
    assert result.ok
    assert result.error is None
    assert result.value == specialfns.erf(0.5)

def test_evaluate_nan_is_ok():
    result = specialfns.evaluate(specialfns.erf, np.nan)
    assert result.ok
    assert np.isnan(result.value)

@mark.parametrize('func,args,kind', [
    (specialfns.inv_erf, (2.,), specialfns.ErrorKind.DOMAIN),
    (specialfns.inv_erfc, (-1.,), specialfns.ErrorKind.DOMAIN),
    (specialfns.incomplete_gamma_normalized, (0., 1.), specialfns.ErrorKind.DOMAIN),
    (specialfns.incomplete_gamma_normalized, (1., -1.), specialfns.ErrorKind.DOMAIN),
    (specialfns.lambert_w, (-1.,), specialfns.ErrorKind.DOMAIN),
])
def test_evaluate_error(func, args, kind):
    result = specialfns.evaluate(func, *args)
    assert not result.ok
    assert result.error is kind
    assert np.isnan(result.value)

def test_evaluate_kwargs():
    result = specialfns.evaluate(specialfns.lambert_w, -0.5, branch=0)
    assert result.ok
    assert isinstance(result.value, complex)

def test_evaluate_propagates_other_errors():
    with pytest.raises(ValueError) as excinfo:
        specialfns.evaluate(specialfns.erf, 'a')
    assert not isinstance(excinfo.value, specialfns.SpecialFunctionError)

def test_default_policy():
    assert specialfns.get_convergence_policy() == 'warn'

def test_invalid_policy():
    with pytest.raises(ValueError):
        with specialfns.convergence_policy('abort'):
            pass
    assert specialfns.get_convergence_policy() == 'warn'

def test_nested_policy():
    with specialfns.convergence_policy('raise') as policy:
        assert policy == 'raise'
        with specialfns.convergence_policy('ignore'):
            assert specialfns.get_convergence_policy() == 'ignore'
        assert specialfns.get_convergence_policy() == 'raise'
    assert specialfns.get_convergence_policy() == 'warn'

def test_policy_restored_on_error():
    with pytest.raises(KeyError):
        with specialfns.convergence_policy('ignore'):
            raise KeyError
    assert specialfns.get_convergence_policy() == 'warn'

def test_policy_thread_local():
    seen = []
    def target():
        seen.append(specialfns.get_convergence_policy())
    with specialfns.convergence_policy('raise'):
        thread = threading.Thread(target=target)
        thread.start()
        thread.join()
    assert seen == ['warn']

def test_ignore(monkeypatch):
    monkeypatch.setattr(_incgamma, '_MAXITER', 1)
    with specialfns.convergence_policy('ignore'):
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            p, q = specialfns.incomplete_gamma_normalized(10, 1)
    assert 0 < p < 1

def test_warning_message(monkeypatch):
    monkeypatch.setattr(_incgamma, '_MAXITER', 1)
    with pytest.warns(specialfns.ConvergenceWarning, match=r'incomplete_gamma_normalized\(a=.*x=.*\): taylor series for P did not converge'):
        specialfns.incomplete_gamma_normalized(10, 1)

def test_nonconvergence_raise():
    with specialfns.convergence_policy('raise'):
        with pytest.raises(specialfns.ConvergenceError) as excinfo:
            _config.nonconvergence('somefunc', 'the loop', x=1)
    assert excinfo.value.arguments == dict(x=1)
    assert 'the loop did not converge' in str(excinfo.value)
