# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the EmptySet class

import numpy as np

from pylazyset.common import sanitize_matrix, sanitize_vector
from pylazyset.common.exceptions import DimensionMismatchError
from pylazyset.common.lazy_set import LazySet
from pylazyset.common.linear_constraint import LinearConstraint


class EmptySet(LazySet):
    """EmptySet class, the set without any element in a space of a given dimension.

    Args:
        dim (int): Dimension of the ambient space

    Raises:
        ValueError: When dim is not a non-negative integer

    Notes:
        The empty set is absorbing for linear maps and inverse linear maps.
    """

    _type_of_set = "EmptySet"

    def __init__(self, dim):
        """Constructor for EmptySet class"""
        if isinstance(dim, (bool, np.bool_)) or not isinstance(dim, (int, np.integer)) or dim < 0:
            raise ValueError(f"Expected dim to be a non-negative integer. Got {dim}!")
        self._dim = int(dim)

    @property
    def dim(self):
        """Dimension of the ambient space"""
        return self._dim

    @property
    def is_empty(self):
        """An empty set is empty"""
        return True

    @property
    def is_bounded(self):
        """An empty set is bounded"""
        return True

    def is_universal(self, witness=False):
        """An empty set is not universal. The witness is the origin."""
        return (False, np.zeros((self.dim,))) if witness else False

    def support_function(self, d):
        """Supremum over an empty set, which is -np.inf"""
        sanitize_vector(d, self.dim, name="direction")
        return -np.inf

    def support_vector(self, d):
        """An empty set has no support vector.

        Raises:
            ValueError: Always (after the dimension check)
        """
        sanitize_vector(d, self.dim, name="direction")
        raise ValueError("Set must be non-empty for support vector evaluation.")

    def contains(self, x):
        """No point is contained in an empty set

        Raises:
            DimensionMismatchError: When x does not have self.dim elements
        """
        sanitize_vector(x, self.dim, name="point")
        return False

    def an_element(self):
        """An empty set has no element.

        Raises:
            ValueError: Always
        """
        raise ValueError("An empty set does not have any element!")

    def vertices_list(self, prune=True):
        """Return an empty (0, dim) array of vertices"""
        return np.empty((0, self.dim))

    def constraints_list(self):
        """Return an infeasible pair of constraints, x_1 <= -1 and -x_1 <= -1. The list is empty in dimension 0."""
        if self.dim == 0:
            return []
        e_1 = np.eye(self.dim)[0]
        return [LinearConstraint(e_1, -1), LinearConstraint(-e_1, -1)]

    def linear_map(self, M):
        """Map an empty set by a matrix, which is the empty set of dimension M.shape[0].

        Raises:
            DimensionMismatchError: When M does not have self.dim columns
        """
        M = sanitize_matrix(M)
        if M.shape[1] != self.dim:
            raise DimensionMismatchError(
                f"A linear map of size {M.shape} can not be applied to a set of dimension {self.dim:d}"
            )
        if M.shape[0] == self.dim:
            return self
        return self.__class__(M.shape[0])

    def translate(self, v):
        """Translate an empty set, which returns the empty set itself"""
        sanitize_vector(v, self.dim, name="translation vector")
        return self

    def concretize(self):
        """Return an empty polytope of the same dimension"""
        from pylazyset.Polytope import Polytope

        return Polytope(dim=self.dim)

    def copy(self):
        """Create a copy of the empty set"""
        return self.__class__(self.dim)

    def __eq__(self, Q):
        if isinstance(Q, EmptySet):
            return self.dim == Q.dim
        return NotImplemented

    def __hash__(self):
        return hash((self.type_of_set, self.dim))

    def __repr__(self):
        return f"EmptySet(dim={self.dim:d})"
