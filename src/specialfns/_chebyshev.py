# specialfns/_chebyshev.py
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

from numpy.polynomial import chebyshev

def chebsum(coef, t):
    """
    Compute a[0]/2 + sum_k=1^n a[k] T_k(t), where T_k are the Chebyshev
    polynomials of the first kind. Note the halved first coefficient, which
    is the convention of the tables in Gil, Segura and Temme (2012).
    """
    return chebyshev.chebval(t, coef) - coef[0] / 2
