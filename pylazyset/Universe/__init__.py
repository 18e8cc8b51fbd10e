# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the Universe class

import numpy as np

from pylazyset.common import sanitize_matrix, sanitize_vector
from pylazyset.common.constants import DEFAULT_NORM_TYPE
from pylazyset.common.exceptions import DimensionMismatchError, NotSupportedError
from pylazyset.common.lazy_set import LazySet


class Universe(LazySet):
    r"""Universe class, the set of all points :math:`\mathbb{R}^{\text{dim}}`.

    Args:
        dim (int): Dimension of the universe

    Raises:
        ValueError: When dim is not a non-negative integer

    Notes:
        The universe is fully described by its dimension. It is unbounded and non-empty, and has no constraints.
    """

    _type_of_set = "Universe"

    def __init__(self, dim):
        """Constructor for Universe class"""
        if isinstance(dim, (bool, np.bool_)) or not isinstance(dim, (int, np.integer)) or dim < 0:
            raise ValueError(f"Expected dim to be a non-negative integer. Got {dim}!")
        self._dim = int(dim)

    @property
    def dim(self):
        """Dimension of the universe"""
        return self._dim

    @property
    def is_empty(self):
        """A universe is never empty"""
        return False

    @property
    def is_bounded(self):
        """A universe is unbounded"""
        return False

    def is_universal(self, witness=False):
        """Check whether a universe is universal.

        Args:
            witness (bool, optional): When True, also return a witness. Defaults to False.

        Returns:
            bool | tuple: True, or (True, empty vector) when witness is True.
        """
        return (True, np.empty((0,))) if witness else True

    def support_function(self, d):
        """Evaluate the support function of a universe.

        Args:
            d (array_like): Direction

        Raises:
            DimensionMismatchError: When d does not have self.dim elements

        Returns:
            float: 0 if the direction is all zero, and np.inf otherwise.
        """
        d = sanitize_vector(d, self.dim, name="direction")
        return 0.0 if not np.any(d) else np.inf

    def support_vector(self, d):
        """Compute the support vector of a universe.

        Args:
            d (array_like): Direction

        Raises:
            DimensionMismatchError: When d does not have self.dim elements

        Returns:
            numpy.ndarray: A vector with np.inf where d is positive, -np.inf where d is negative, and 0 where d is zero.
        """
        d = sanitize_vector(d, self.dim, name="direction")
        return np.where(d > 0, np.inf, np.where(d < 0, -np.inf, 0.0))

    def contains(self, x):
        """Check whether a given point is contained in a universe.

        Args:
            x (array_like): Point

        Raises:
            DimensionMismatchError: When x does not have self.dim elements

        Returns:
            bool: Always True
        """
        sanitize_vector(x, self.dim, name="point")
        return True

    def an_element(self):
        """Return the origin, an element of the universe"""
        return np.zeros((self.dim,))

    def norm(self, p=DEFAULT_NORM_TYPE):
        """A universe does not have a norm.

        Raises:
            NotSupportedError: Always
        """
        raise NotSupportedError("A universe does not have a norm!")

    def radius(self, p=DEFAULT_NORM_TYPE):
        """A universe does not have a radius.

        Raises:
            NotSupportedError: Always
        """
        raise NotSupportedError("A universe does not have a radius!")

    def diameter(self, p=DEFAULT_NORM_TYPE):
        """A universe does not have a diameter.

        Raises:
            NotSupportedError: Always
        """
        raise NotSupportedError("A universe does not have a diameter!")

    def translate(self, v):
        """Translate a universe by a vector, which returns the universe itself.

        Args:
            v (array_like): Translation vector

        Raises:
            ValueError: When v is not a single point
            DimensionMismatchError: When v does not have self.dim elements

        Returns:
            Universe: self
        """
        sanitize_vector(v, self.dim, name="translation vector")
        return self

    def inverse_linear_map(self, Minv):
        r"""Compute the set :math:`\{y: M_{\text{inv}} y\in\mathbb{R}^{\text{dim}}\}`, which is a universe.

        Args:
            Minv (array_like): Matrix with self.dim rows

        Raises:
            DimensionMismatchError: When Minv does not have self.dim rows

        Returns:
            Universe: Universe of dimension Minv.shape[1]
        """
        Minv = sanitize_matrix(Minv, name="Minv")
        if Minv.shape[0] != self.dim:
            raise DimensionMismatchError(
                f"A linear map of size {Minv.shape} can not be applied to a universe of dimension {self.dim:d}"
            )
        return self.__class__(Minv.shape[1])

    def constraints(self):
        """Iterate over the constraints of a universe, which has none"""
        return iter(())

    def constraints_list(self):
        """Return the list of constraints of a universe, which is empty"""
        return []

    def constrained_dimensions(self):
        """Return the indices in which a universe is constrained, which is empty"""
        return np.empty((0,), dtype=int)

    def copy(self):
        """Create a copy of the universe"""
        return self.__class__(self.dim)

    def __eq__(self, Q):
        if isinstance(Q, Universe):
            return self.dim == Q.dim
        return NotImplemented

    def __hash__(self):
        return hash((self.type_of_set, self.dim))

    def __repr__(self):
        return f"Universe(dim={self.dim:d})"
