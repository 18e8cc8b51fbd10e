# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the LinearConstraint class, a halfspace returned by constraints_list

import numpy as np

from pylazyset.common.constants import PYLAZYSET_ZERO
from pylazyset.common.exceptions import DimensionMismatchError


class LinearConstraint:
    r"""Halfspace :math:`\{x\ |\ a^\top x \leq b\}`.

    Args:
        a (array_like): Normal vector of the halfspace
        b (float): Offset of the halfspace

    Raises:
        ValueError: When a is not convertible into a 1D array of float or b is not a scalar
    """

    __slots__ = ("_a", "_b")

    def __init__(self, a, b):
        try:
            a = np.atleast_1d(np.squeeze(np.asarray(a, dtype=float)))
            b = float(np.squeeze(b))
        except (TypeError, ValueError) as err:
            raise ValueError("Expected a to be a 1D array of float and b to be a scalar!") from err
        if a.ndim != 1:
            raise ValueError(f"Expected a to be a 1D array. Got {np.array2string(a):s}")
        self._a = a
        self._b = b

    @property
    def a(self):
        """Normal vector of the halfspace"""
        return self._a

    @property
    def b(self):
        """Offset of the halfspace"""
        return self._b

    @property
    def dim(self):
        """Dimension of the halfspace"""
        return self._a.size

    def contains(self, x):
        """Check if a^T x <= b (up to PYLAZYSET_ZERO)

        Args:
            x (array_like): Point to test

        Raises:
            DimensionMismatchError: When x does not have self.dim elements

        Returns:
            bool: True if x satisfies the constraint
        """
        x = np.atleast_1d(np.squeeze(np.asarray(x, dtype=float)))
        if x.size != self.dim:
            raise DimensionMismatchError(f"Mismatch in dimensions (self.dim: {self.dim:d} and x.dim: {x.size:d})")
        return bool(self._a @ x - self._b <= PYLAZYSET_ZERO)

    __contains__ = contains

    def __eq__(self, other):
        if not isinstance(other, LinearConstraint):
            return NotImplemented
        return self.dim == other.dim and bool(np.allclose(self._a, other.a)) and bool(np.isclose(self._b, other.b))

    def __repr__(self):
        return f"LinearConstraint(a={np.array2string(self._a):s}, b={self._b:g})"
