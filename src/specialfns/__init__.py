# specialfns/__init__.py
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
Module of special functions computed to near machine precision

The scalar functions accept Python and numpy floats, complex numbers where
noted, and `gvar.GVar` objects. See `specialfns.jaxfuncs` for versions that
work with jax.
"""

__version__ = '0.1.0'

# first because it modifies global state
from . import _patch_jax

from ._errors import (
    ErrorKind,
    SpecialFunctionError,
    DomainError,
    EvaluationOverflowError,
    ConvergenceError,
    ConvergenceWarning,
    Result,
    evaluate,
)
from ._config import (
    convergence_policy,
    get_convergence_policy,
)
from ._gamma import (
    gamma_value,
    gamma_log_value,
)
from ._incgamma import (
    Method,
    Region,
    IncompleteGamma,
    select_region,
    incomplete_gamma_normalized,
)
from ._erf import (
    erf,
    erfc,
    erfcx,
    inv_erf,
    inv_erfc,
)
from ._lambertw import lambert_w

from . import jaxfuncs
