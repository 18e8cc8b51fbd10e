# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the InverseLinearMap class, the lazy preimage of a set under an invertible matrix

import numpy as np

from pylazyset.common import (
    concretize,
    convex_hull,
    is_empty_set,
    is_inverse_linear_map,
    is_invertible,
    is_scalar,
    is_zero_set,
    linear_map,
    map_support_vector,
    require_capability,
    sanitize_matrix,
    sanitize_vector,
)
from pylazyset.common.exceptions import DimensionMismatchError, NotInvertibleError
from pylazyset.common.lazy_set import LazySet


class InverseLinearMap(LazySet):
    r"""InverseLinearMap class, the lazy set :math:`M^{-1}\mathcal{X} = \{y: My\in\mathcal{X}\}` for an invertible
    matrix M.

    Construction applies the following rules in order:

    #. A scalar equal to 1 returns X itself (no wrapper). Any other scalar :math:`\alpha` is promoted to
       :math:`\alpha I`.
    #. M must be a square matrix with X.dim rows.
    #. M must be invertible, unless check_invertibility is False.
    #. An inverse linear map of an inverse linear map is fused, :math:`M^{-1}(M_{\text{inner}}^{-1}\mathcal{Y}) =
       (M_{\text{inner}}M)^{-1}\mathcal{Y}`.
    #. The preimage of a ZeroSet is the ZeroSet of dimension M.shape[0].
    #. The preimage of an EmptySet is the same EmptySet.
    #. Otherwise, (M, X) is stored as given.

    Args:
        M (float | array_like): Scalar or invertible square matrix with X.dim rows
        X (LazySet): Set to map
        check_invertibility (bool, optional): When False, the invertibility check is skipped. Defaults to True.

    Raises:
        TypeError: When M is not convertible into a 2D numpy array of float
        DimensionMismatchError: When M is not a square matrix with X.dim rows
        NotInvertibleError: When M is not invertible and check_invertibility is True

    Notes:
        - Queries recurse into X and use linear solves with M instead of its inverse. The support function is
          :math:`\rho_{M^{-1}\mathcal{X}}(d)=\rho_{\mathcal{X}}(M^{-\top} d)`, a support vector is
          :math:`M^{-1}\nu_{\mathcal{X}}(M^{-\top} d)`, and :math:`y\in M^{-1}\mathcal{X}` if and only if
          :math:`My\in\mathcal{X}`.
        - Only :meth:`constraints_list` (for a V-Rep polytope), :meth:`linear_map`, and :meth:`concretize` compute
          :math:`M^{-1}` explicitly.
        - When check_invertibility is False and M is singular, the queries may raise numpy.linalg.LinAlgError or return
          meaningless values.
    """

    _type_of_set = "InverseLinearMap"
    is_operation_type = True

    def __new__(cls, M, X, check_invertibility=True):
        if is_scalar(M):
            if M == 1:
                return X
            M = float(M) * np.eye(X.dim)
        M = sanitize_matrix(M)
        if M.shape[0] != X.dim:
            raise DimensionMismatchError(
                f"An inverse linear map of size {M.shape} can not be applied to a set of dimension {X.dim:d}"
            )
        elif M.shape[0] != M.shape[1]:
            raise DimensionMismatchError(f"Expected M to be a square matrix. Got M: {M.shape} matrix")
        elif check_invertibility and not is_invertible(M):
            raise NotInvertibleError(
                f"Expected M to be invertible! Got M: {np.array2string(M, separator=', '):s}. Use "
                "check_invertibility=False to skip the check."
            )
        elif is_inverse_linear_map(X):
            return cls(X.M @ M, X.X, check_invertibility=False)
        elif is_zero_set(X):
            return X.__class__(M.shape[0])
        elif is_empty_set(X):
            return X
        self = super().__new__(cls)
        M.setflags(write=False)
        self._M = M
        self._X = X
        return self

    @property
    def M(self):
        """Matrix of the inverse linear map (read-only)"""
        return self._M

    @property
    def X(self):
        """Wrapped set"""
        return self._X

    @property
    def matrix(self):
        """Matrix of the inverse linear map (read-only)"""
        return self._M

    @property
    def vector(self):
        """Translation vector of the map, which is zero for an inverse linear map"""
        return np.zeros((self.dim,))

    @property
    def set(self):
        """Wrapped set"""
        return self._X

    @property
    def dim(self):
        """Dimension of the preimage, the number of rows of M"""
        return self._M.shape[0]

    @property
    def is_empty(self):
        """The preimage under an invertible matrix is empty if and only if the wrapped set is empty"""
        return self._X.is_empty

    @property
    def is_bounded(self):
        """The preimage under an invertible matrix is bounded if and only if the wrapped set is bounded"""
        return self._X.is_bounded

    def is_universal(self, witness=False):
        """Check if the preimage is the universal set, which happens if and only if the wrapped set is universal.

        Args:
            witness (bool, optional): When True, also return a witness. Defaults to False.

        Returns:
            bool | tuple: Flag, or (flag, witness) when witness is True. When the flag is False, the witness y solves
            My = w, where w is the witness of the wrapped set.
        """
        if not witness:
            return self._X.is_universal()
        is_X_universal, X_witness = self._X.is_universal(witness=True)
        if is_X_universal:
            return True, np.empty((0,))
        return False, np.linalg.solve(self._M, X_witness)

    def support_function(self, d):
        r"""Evaluate the support function of the preimage along d.

        Args:
            d (array_like): Direction

        Raises:
            DimensionMismatchError: When d does not have self.dim elements

        Returns:
            float: Support function of X along z, where z solves :math:`M^\top z = d`.
        """
        d = sanitize_vector(d, self.dim, name="direction")
        return self._X.support_function(np.linalg.solve(self._M.T, d))

    def support_vector(self, d):
        r"""Compute a support vector of the preimage along d.

        Args:
            d (array_like): Direction

        Raises:
            DimensionMismatchError: When d does not have self.dim elements

        Returns:
            numpy.ndarray: The solution y of :math:`My = \nu_{\mathcal{X}}(z)`, where z solves :math:`M^\top z = d`.
        """
        d = sanitize_vector(d, self.dim, name="direction")
        sv = self._X.support_vector(np.linalg.solve(self._M.T, d))
        return map_support_vector(sv, lambda v: np.linalg.solve(self._M, v))

    def contains(self, x):
        """Check if x belongs to the preimage, that is, if Mx belongs to the wrapped set

        Raises:
            DimensionMismatchError: When x does not have self.dim elements
        """
        x = sanitize_vector(x, self.dim, name="point")
        return bool(self._X.contains(self._M @ x))

    def an_element(self):
        """Return the solution y of My = w, where w is an element of the wrapped set"""
        return np.linalg.solve(self._M, self._X.an_element())

    def vertices_list(self, prune=True):
        """Return the vertices of the preimage as a 2D numpy array (one vertex per row)

        Args:
            prune (bool, optional): When True, points that are not vertices of the preimage are removed. Defaults to
                True.

        Raises:
            MissingCapabilityError: When the wrapped set does not provide vertices_list

        Returns:
            numpy.ndarray: The solutions y of My = v for every vertex v of X, pruned via convex_hull when prune is True
        """
        require_capability(self._X, "vertices_list", "compute the vertices of an inverse linear map")
        V = np.atleast_2d(self._X.vertices_list())
        if V.shape[0] == 0:
            return np.empty((0, self.dim))
        # Each column of the right-hand side is a vertex
        V_mapped = np.linalg.solve(self._M, V.T).T
        return convex_hull(V_mapped) if prune else V_mapped

    def constraints_list(self):
        r"""Return the constraints of the preimage.

        Raises:
            MissingCapabilityError: When the wrapped set does not provide constraints_list, or its concrete
                representation does not provide inverse_linear_map

        Returns:
            list: List of LinearConstraint

        Notes:
            We compute the preimage of the concretized wrapped set. For a polytope with (A, b, Ae, be), the preimage is
            :math:`\{y: AMy\leq b, A_eMy=b_e\}`, while a V-Rep polytope requires the explicit inverse of M.
        """
        require_capability(self._X, "constraints_list", "compute the constraints of an inverse linear map")
        concrete_X = concretize(self._X)
        require_capability(concrete_X, "inverse_linear_map", "compute the constraints of an inverse linear map")
        return concrete_X.inverse_linear_map(self._M).constraints_list()

    def linear_map(self, L):
        r"""Compute the linear map of the preimage, :math:`L M^{-1}\mathcal{X}`.

        Args:
            L (float | array_like): Scalar or matrix with self.dim columns

        Raises:
            DimensionMismatchError: When L does not have self.dim columns

        Returns:
            LazySet: The linear map of X under :math:`L M^{-1}`, concrete whenever X supports a linear map.
        """
        if is_scalar(L):
            L = float(L) * np.eye(self.dim)
        L = sanitize_matrix(L, name="L")
        if L.shape[1] != self.dim:
            raise DimensionMismatchError(
                f"A linear map of size {L.shape} can not be applied to a set of dimension {self.dim:d}"
            )
        return linear_map(L @ np.linalg.inv(self._M), self._X)

    def concretize(self):
        """Compute the linear map of the concretized wrapped set under the inverse of M"""
        return linear_map(np.linalg.inv(self._M), concretize(self._X))

    def copy(self):
        """Create a copy of the inverse linear map (the wrapped set is shared)"""
        return self.__class__(self._M, self._X, check_invertibility=False)

    def __str__(self):
        return f"InverseLinearMap in R^{self.dim:d} of a {self._X.type_of_set:s} in R^{self._X.dim:d}"

    def __repr__(self):
        return f"InverseLinearMap(M={np.array2string(self._M, separator=', '):s}, X={self._X!r})"
