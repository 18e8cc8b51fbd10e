# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the LinearMap class, the lazy image of a set under a matrix

import numpy as np

from pylazyset.common import (
    concretize,
    convex_hull,
    is_empty_set,
    is_invertible,
    is_linear_map,
    is_scalar,
    is_zero_set,
    linear_map,
    map_support_vector,
    require_capability,
    sanitize_matrix,
    sanitize_vector,
)
from pylazyset.common.exceptions import DimensionMismatchError, MissingCapabilityError
from pylazyset.common.lazy_set import LazySet


class LinearMap(LazySet):
    r"""LinearMap class, the lazy image :math:`M\mathcal{X} = \{Mx: x\in\mathcal{X}\}` of a set under a matrix.

    Construction applies the following rules in order:

    #. A scalar equal to 1 returns X itself (no wrapper). Any other scalar :math:`\alpha` is promoted to
       :math:`\alpha I`.
    #. M must have X.dim columns.
    #. A linear map of a linear map is fused, :math:`A(B\mathcal{X})=(AB)\mathcal{X}`.
    #. The image of a ZeroSet is the ZeroSet of dimension M.shape[0].
    #. The image of an EmptySet is an EmptySet of dimension M.shape[0] (the same object when the dimension is
       unchanged).
    #. Otherwise, (M, X) is stored as given.

    Args:
        M (float | array_like): Scalar or matrix with X.dim columns
        X (LazySet): Set to map

    Raises:
        TypeError: When M is not convertible into a 2D numpy array of float
        DimensionMismatchError: When M does not have X.dim columns

    Notes:
        Queries recurse into X. The support function is :math:`\rho_{M\mathcal{X}}(d)=\rho_{\mathcal{X}}(M^\top d)`
        and a support vector is :math:`M\nu_{\mathcal{X}}(M^\top d)`.
    """

    _type_of_set = "LinearMap"
    is_operation_type = True

    def __new__(cls, M, X):
        if is_scalar(M):
            if M == 1:
                return X
            M = float(M) * np.eye(X.dim)
        M = sanitize_matrix(M)
        if M.shape[1] != X.dim:
            raise DimensionMismatchError(
                f"A linear map of size {M.shape} can not be applied to a set of dimension {X.dim:d}"
            )
        elif is_linear_map(X):
            return cls(M @ X.M, X.X)
        elif is_zero_set(X) or is_empty_set(X):
            return X.linear_map(M)
        self = super().__new__(cls)
        M.setflags(write=False)
        self._M = M
        self._X = X
        return self

    @property
    def M(self):
        """Matrix of the linear map (read-only)"""
        return self._M

    @property
    def X(self):
        """Wrapped set"""
        return self._X

    @property
    def matrix(self):
        """Matrix of the linear map (read-only)"""
        return self._M

    @property
    def vector(self):
        """Translation vector of the map, which is zero for a linear map"""
        return np.zeros((self.dim,))

    @property
    def set(self):
        """Wrapped set"""
        return self._X

    @property
    def dim(self):
        """Dimension of the image, the number of rows of M"""
        return self._M.shape[0]

    @property
    def is_empty(self):
        """The image is empty if and only if the wrapped set is empty"""
        return self._X.is_empty

    @property
    def is_bounded(self):
        """Check if the image is bounded.

        Returns:
            bool: True when the wrapped set is bounded or M is zero. Otherwise, we check if the support function is
            finite along every standard axis vector and its negation.
        """
        if not np.any(self._M) or self._X.is_bounded:
            return True
        lb, ub = self.minimum_volume_circumscribing_rectangle()
        return bool(np.isfinite(np.hstack((lb, ub))).all())

    def is_universal(self, witness=False):
        """Check if the image is the universal set.

        Args:
            witness (bool, optional): When True, also return a witness. Defaults to False.

        Raises:
            MissingCapabilityError: When M has full row rank but more columns than rows, and the wrapped set is not
                universal. The answer then depends on the shape of X that is not exposed through the interface.

        Returns:
            bool | tuple: Flag, or (flag, witness) when witness is True. When the flag is False, the witness is a point
            outside the image.

        Notes:
            - When M is not of full row rank, the image lies in the range of M, a proper subspace, and any nonzero
              vector orthogonal to the range of M is a witness.
            - When M is invertible, the image is universal if and only if X is universal, and the witness of X is
              mapped by M.
        """
        if self._X.is_empty:
            return (False, np.zeros((self.dim,))) if witness else False
        elif self.dim == 0:
            return (True, np.empty((0,))) if witness else True
        rank_M = np.linalg.matrix_rank(self._M)
        if rank_M < self.dim:
            if not witness:
                return False
            left_singular_vectors = np.linalg.svd(self._M)[0]
            return False, left_singular_vectors[:, rank_M]
        is_X_universal, X_witness = self._X.is_universal(witness=True)
        if is_X_universal:
            return (True, np.empty((0,))) if witness else True
        elif self._M.shape[0] != self._M.shape[1]:
            raise MissingCapabilityError(
                "Unable to decide universality of the image of a non-universal set under a wide matrix of full row "
                "rank!"
            )
        return (False, self._M @ X_witness) if witness else False

    def support_function(self, d):
        """Evaluate the support function of the image along d, which is the support function of X along M^T d

        Raises:
            DimensionMismatchError: When d does not have self.dim elements
        """
        d = sanitize_vector(d, self.dim, name="direction")
        return self._X.support_function(self._M.T @ d)

    def support_vector(self, d):
        """Compute a support vector of the image along d, which is M times a support vector of X along M^T d

        Raises:
            DimensionMismatchError: When d does not have self.dim elements
        """
        d = sanitize_vector(d, self.dim, name="direction")
        return map_support_vector(self._X.support_vector(self._M.T @ d), lambda v: self._M @ v)

    def contains(self, x):
        """Check if x belongs to the image.

        Args:
            x (array_like): Point

        Raises:
            DimensionMismatchError: When x does not have self.dim elements
            MissingCapabilityError: When M is not invertible and the wrapped set can not be concretized into a set
                that supports a linear map

        Returns:
            bool: True if x belongs to the image

        Notes:
            When M is invertible, we solve My = x and check y in X. Otherwise, we check membership in the concrete
            image.
        """
        x = sanitize_vector(x, self.dim, name="point")
        if is_invertible(self._M):
            return bool(self._X.contains(np.linalg.solve(self._M, x)))
        concrete_X = concretize(self._X)
        require_capability(concrete_X, "linear_map", "check membership in the image under a singular matrix")
        return bool(concrete_X.linear_map(self._M).contains(x))

    def an_element(self):
        """Return M times an element of the wrapped set"""
        return self._M @ self._X.an_element()

    def vertices_list(self, prune=True):
        """Return the vertices of the image as a 2D numpy array (one vertex per row)

        Args:
            prune (bool, optional): When True, points that are not vertices of the image are removed. Defaults to
                True.

        Raises:
            MissingCapabilityError: When the wrapped set does not provide vertices_list

        Returns:
            numpy.ndarray: M times every vertex of X, pruned via convex_hull when prune is True
        """
        require_capability(self._X, "vertices_list", "compute the vertices of a linear map")
        V = np.atleast_2d(self._X.vertices_list())
        if V.shape[0] == 0:
            return np.empty((0, self.dim))
        V_mapped = V @ self._M.T
        return convex_hull(V_mapped) if prune else V_mapped

    def constraints_list(self):
        """Return the constraints of the concrete image

        Raises:
            MissingCapabilityError: When the image can not be concretized into a set that provides constraints_list
        """
        concrete_set = self.concretize()
        if is_linear_map(concrete_set):
            raise MissingCapabilityError(
                "Unable to compute the constraints of a linear map: the wrapped set of type "
                f"{type(self._X).__name__:s} does not support a concrete linear map!"
            )
        require_capability(concrete_set, "constraints_list", "compute the constraints of a linear map")
        return concrete_set.constraints_list()

    def linear_map(self, L):
        """Compute the lazy linear map L times the image, which is fused into a single LinearMap"""
        return self.__class__(L, self)

    def concretize(self):
        """Compute the image of the concretized wrapped set"""
        return linear_map(self._M, concretize(self._X))

    def copy(self):
        """Create a copy of the linear map (the wrapped set is shared)"""
        return self.__class__(self._M, self._X)

    def __str__(self):
        return f"LinearMap in R^{self.dim:d} of a {self._X.type_of_set:s} in R^{self._X.dim:d}"

    def __repr__(self):
        return f"LinearMap(M={np.array2string(self._M, separator=', '):s}, X={self._X!r})"
