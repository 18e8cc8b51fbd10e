# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

# Code purpose:  Define the methods involving a matrix or a point used with Polytope class

import cvxpy as cp
import numpy as np

from pylazyset.common import is_invertible, sanitize_matrix, sanitize_vector
from pylazyset.common.constants import PYLAZYSET_ZERO
from pylazyset.common.exceptions import DimensionMismatchError, NotInvertibleError


def linear_map(self, M):
    r"""Compute the image :math:`M\mathcal{P} = \{M x: x\in \mathcal{P}\}` of the polytope.

    Args:
        M (array_like): Scalar or matrix with self.dim columns

    Raises:
        TypeError: When M can not be converted into a 2D array of float
        DimensionMismatchError: When M does not have self.dim columns

    Returns:
        Polytope: The image of the polytope under M

    Notes:
        A scalar scales the polytope and keeps its representation. Otherwise, the image is the convex hull of the
        mapped vertices, which requires a vertex enumeration when the polytope is in H-Rep.
    """
    M = sanitize_matrix(M)
    if M.shape == (1, 1) and self.dim != 1:
        m = M[0, 0]
        if self.is_empty:
            return self.__class__(dim=self.dim)
        elif abs(m) <= PYLAZYSET_ZERO:
            return self.__class__(V=np.zeros((1, self.dim)))
        elif not self.in_H_rep:
            return self.__class__(V=m * self.V)
        # {m x | A x <= b} = {z | sign(m) A z <= |m| b}
        scaled_H_rep = {"A": np.sign(m) * self.A, "b": abs(m) * self.b}
        if self.n_equalities > 0:
            scaled_H_rep.update(Ae=np.sign(m) * self.Ae, be=abs(m) * self.be)
        return self.__class__(**scaled_H_rep)
    elif M.shape[1] != self.dim:
        raise DimensionMismatchError(f"Expected M to have {self.dim:d} columns. Got M with shape {M.shape}!")
    elif self.is_empty:
        return self.__class__(dim=M.shape[0])
    return self.__class__(V=self.V @ M.T)


def inverse_linear_map(self, Minv):
    r"""Compute the set :math:`\{y: M_{\text{inv}} y\in\mathcal{P}\}`, the preimage of the polytope under Minv.

    Args:
        Minv (array_like): An invertible array of size self.dim times self.dim

    Raises:
        TypeError: When Minv is not convertible into a 2D numpy array of float
        DimensionMismatchError: When Minv is not a square matrix of size self.dim times self.dim
        NotInvertibleError: When Minv is not invertible

    Returns:
        Polytope: The preimage :math:`\mathcal{R} = \{y: M_{\text{inv}} y\in \mathcal{P}\}`

    Notes:
        * This function accommodates :math:`\mathcal{P}` to be in H-Rep or in V-Rep. When :math:`\mathcal{P}` is in
          H-Rep, :math:`\{y|M_{\text{inv}}y\in\mathcal{P}\}=\{y|AM_{\text{inv}}y\leq b, A_eM_{\text{inv}}y = b_e\}`,
          which does not require a matrix inversion. On the other hand, when :math:`\mathcal{P}` is in V-Rep, the
          preimage is :math:`ConvexHull(M_{\text{inv}}^{-1}v_i)`.
        * We require Minv to be invertible in order to ensure that the resulting set is representable as a polytope.
        * For an empty polytope, the preimage is an empty polytope of the same dimension.
    """
    Minv = sanitize_matrix(Minv, name="Minv")
    if Minv.shape != (self.dim, self.dim):
        raise DimensionMismatchError(
            f"Expected Minv to be a square matrix of shape ({self.dim:d},{self.dim:d}). Got {Minv.shape}!"
        )
    elif not is_invertible(Minv):
        raise NotInvertibleError("Expected Minv to be invertible!")
    elif self.is_empty:
        return self.__class__(dim=self.dim)
    elif self.in_H_rep:
        if self.n_equalities > 0:
            return self.__class__(A=self.A @ Minv, b=self.b, Ae=self.Ae @ Minv, be=self.be)
        else:
            return self.__class__(A=self.A @ Minv, b=self.b)
    else:
        return linear_map(self, np.linalg.inv(Minv))


def contains(self, x):
    r"""Test whether a point, or each row of a matrix of points, lies in the polytope :math:`\mathcal{P}`.

    Args:
        x (array_like): A point, or a matrix whose rows are the points to test

    Raises:
        ValueError: When x is not convertible into a 2D array of float
        DimensionMismatchError: When the points do not have self.dim components

    Returns:
        bool | numpy.ndarray[bool]: A bool for a single point, and one bool per row of `x` otherwise.

    Notes:
        With an H-Rep, a point v is in :math:`\mathcal{P}` when :math:`Av\leq b` and :math:`A_ev=b_e` hold up to
        PYLAZYSET_ZERO. With only a V-Rep, one linear program per point computes the :math:`\infty`-norm distance
        of the point to :math:`\mathcal{P}`, and the point is contained when this distance is nearly zero.
    """
    try:
        test_points = np.atleast_2d(x).astype(float)
    except (TypeError, ValueError) as err:
        raise ValueError(f"Expected x to be convertible into a 2D array of float. Got {type(x)}!") from err
    if test_points.ndim > 2:
        raise ValueError(f"Expected x to be a point or a matrix of points. Got a {test_points.ndim:d}D array!")
    n_test_points, test_point_dim = test_points.shape
    if test_point_dim != self.dim:
        raise DimensionMismatchError(f"Test point dim. ({test_point_dim:d}) is different from set dim. ({self.dim:d})")
    elif self.is_empty:
        containment = np.zeros((n_test_points,), dtype="bool")
    elif self.in_H_rep:
        # Each column holds the slacks of one test point
        slack = self.b[:, None] - self.A @ test_points.T
        containment = (slack >= -PYLAZYSET_ZERO).all(axis=0)
        if self.n_equalities > 0:
            residual = self.Ae @ test_points.T - self.be[:, None]
            containment &= (np.abs(residual) <= PYLAZYSET_ZERO).all(axis=0)
    else:  # in_V_rep alone is available!
        containment = np.array([_distance_to_V_rep(self, point) <= PYLAZYSET_ZERO for point in test_points])
    if n_test_points == 1:
        return bool(containment[0])
    return containment


def _distance_to_V_rep(self, point):
    """Private function to compute the infinity-norm distance of a point to a polytope known only by its vertices"""
    x = cp.Variable((self.dim,))
    _, distance, _ = self.minimize(
        x,
        objective_to_minimize=cp.norm(point - x, "inf"),
        cvxpy_args=self.cvxpy_args_lp,
        task_str=f"compute the distance of {np.array2string(point):s} to the polytope",
    )
    return distance


def translate(self, v):
    r"""Compute the translate :math:`\mathcal{P} + v = \{x + v | x\in\mathcal{P}\}`.

    Args:
        v (array_like): Translation vector with self.dim components

    Raises:
        ValueError: When v is not a single point
        DimensionMismatchError: When v does not have self.dim components

    Returns:
        Polytope: The translated polytope, in the same representation(s) as the polytope

    Notes:
        A V-Rep is shifted vertex by vertex, while an H-Rep becomes :math:`\{x: A x \leq b + A v, A_e x = b_e + A_e
        v\}`.
    """
    v = sanitize_vector(v, self.dim, name="Translation vector")
    if self.is_empty:
        return self.__class__(dim=self.dim)
    elif self.in_V_rep:
        return self.__class__(V=self.V + v)
    shifted_H_rep = {"A": self.A, "b": self.b + self.A @ v}
    if self.n_equalities > 0:
        shifted_H_rep.update(Ae=self.Ae, be=self.be + self.Ae @ v)
    return self.__class__(**shifted_H_rep)
