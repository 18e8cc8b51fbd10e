# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the ZeroSet class

import numpy as np

from pylazyset.common import sanitize_matrix, sanitize_vector
from pylazyset.common.constants import PYLAZYSET_ZERO
from pylazyset.common.exceptions import DimensionMismatchError
from pylazyset.common.lazy_set import LazySet
from pylazyset.common.linear_constraint import LinearConstraint


class ZeroSet(LazySet):
    r"""ZeroSet class, the singleton :math:`\{0\}\subset\mathbb{R}^{\text{dim}}` containing only the origin.

    Args:
        dim (int): Dimension of the zero set

    Raises:
        ValueError: When dim is not a non-negative integer
    """

    _type_of_set = "ZeroSet"

    def __init__(self, dim):
        """Constructor for ZeroSet class"""
        if isinstance(dim, (bool, np.bool_)) or not isinstance(dim, (int, np.integer)) or dim < 0:
            raise ValueError(f"Expected dim to be a non-negative integer. Got {dim}!")
        self._dim = int(dim)

    @property
    def dim(self):
        """Dimension of the zero set"""
        return self._dim

    @property
    def is_empty(self):
        """A zero set is never empty"""
        return False

    @property
    def is_bounded(self):
        """A zero set is bounded"""
        return True

    def is_universal(self, witness=False):
        """Check whether a zero set is universal, which only happens in dimension 0.

        Args:
            witness (bool, optional): When True, also return a witness. Defaults to False.

        Returns:
            bool | tuple: Flag, or (flag, witness) when witness is True. The witness is the first standard axis vector.
        """
        if self.dim == 0:
            return (True, np.empty((0,))) if witness else True
        elif witness:
            return False, np.eye(self.dim)[0]
        return False

    def support_function(self, d):
        """Support function of the origin is always zero"""
        sanitize_vector(d, self.dim, name="direction")
        return 0.0

    def support_vector(self, d):
        """Support vector of the origin is the origin"""
        sanitize_vector(d, self.dim, name="direction")
        return np.zeros((self.dim,))

    def contains(self, x):
        """Check if x is the origin (up to PYLAZYSET_ZERO)

        Raises:
            DimensionMismatchError: When x does not have self.dim elements
        """
        x = sanitize_vector(x, self.dim, name="point")
        return bool(np.all(np.abs(x) <= PYLAZYSET_ZERO))

    def an_element(self):
        """Return the origin"""
        return np.zeros((self.dim,))

    def vertices_list(self, prune=True):
        """Return the single vertex (the origin) as a (1, dim) array"""
        return np.zeros((1, self.dim))

    def constraints_list(self):
        """Return the constraints x_i <= 0 and -x_i <= 0 for every coordinate i"""
        identity_matrix = np.eye(self.dim)
        return [LinearConstraint(e_i, 0) for e_i in identity_matrix] + [
            LinearConstraint(-e_i, 0) for e_i in identity_matrix
        ]

    def linear_map(self, M):
        """Map the origin by a matrix, which is the origin of dimension M.shape[0].

        Raises:
            DimensionMismatchError: When M does not have self.dim columns
        """
        M = sanitize_matrix(M)
        if M.shape[1] != self.dim:
            raise DimensionMismatchError(
                f"A linear map of size {M.shape} can not be applied to a set of dimension {self.dim:d}"
            )
        return self.__class__(M.shape[0])

    def translate(self, v):
        """Translate the origin to v, which yields a single-vertex polytope"""
        from pylazyset.Polytope import Polytope

        v = sanitize_vector(v, self.dim, name="translation vector")
        return Polytope(V=np.array([v]))

    def concretize(self):
        """Return the origin as a single-vertex polytope"""
        from pylazyset.Polytope import Polytope

        return Polytope(V=np.zeros((1, self.dim)))

    def copy(self):
        """Create a copy of the zero set"""
        return self.__class__(self.dim)

    def __eq__(self, Q):
        if isinstance(Q, ZeroSet):
            return self.dim == Q.dim
        return NotImplemented

    def __hash__(self):
        return hash((self.type_of_set, self.dim))

    def __repr__(self):
        return f"ZeroSet(dim={self.dim:d})"
