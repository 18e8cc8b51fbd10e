# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

# Code purpose:  Reduce a collection of points to the vertices of its convex hull
# Coverage: This file has 1 untested statement to handle unexpected errors from pycddlib.

import cdd  # pycddlib -- for redundancy removal of lower-dimensional point clouds
import numpy as np
from scipy.spatial import ConvexHull  # for full-dimensional point clouds

from pylazyset.common.constants import PYLAZYSET_ZERO


def get_cdd_polyhedron_from_V(V):
    """Get CDD polyhedron in generator form from given V

    Args:
        V (array_like): n_vertices times n matrix

    Raises:
        ValueError: When cdd is unable to build the polyhedron

    Returns:
        cdd.Polyhedron: CDD Polyhedron
    """
    n_vertices = V.shape[0]
    # t is 1 to indicate that all are vertices
    tV_list = np.hstack((np.ones((n_vertices, 1)), V)).tolist()
    tV_cdd = cdd.matrix_from_array(tV_list, rep_type=cdd.RepType.GENERATOR)
    try:
        return cdd.polyhedron_from_matrix(tV_cdd)
    except RuntimeError as err:
        raise ValueError("Computation of CDD polyhedron failed due to numerical inconsistency in vertex list") from err


def affine_dimension(V):
    """Compute the dimension of the affine hull of the points in V (rows).

    Args:
        V (numpy.ndarray): Points arranged row-wise

    Returns:
        int: Affine dimension. -1 when there are no points.
    """
    if V.shape[0] == 0:
        return -1
    delta_vertices = V[1:] - V[0]
    if delta_vertices.size == 0:
        return 0
    delta_vertices[np.abs(delta_vertices) <= PYLAZYSET_ZERO] = 0
    return int(np.linalg.matrix_rank(delta_vertices))


def convex_hull(V):
    r"""Compute the vertices of the convex hull of a collection of points.

    Args:
        V (array_like): Points arranged row-wise. Matrix (N times dim).

    Raises:
        ValueError: When V is not convertible into a 2D array of float
        ValueError: When the redundancy removal fails

    Returns:
        numpy.ndarray: The subset of rows of V that are vertices of :math:`\text{ConvexHull}(V)`. Duplicates are
        removed.

    Notes:
        - 1-dimensional points are reduced to their minimum and maximum.
        - Full-dimensional point clouds use qhull (:class:`scipy.spatial.ConvexHull`).
        - Lower-dimensional point clouds (in dim > 1) use cdd for the removal of redundant points, since qhull requires
          a full-dimensional input.
    """
    try:
        V = np.atleast_2d(V).astype(float)
    except (TypeError, ValueError) as err:
        raise ValueError("Expected V to be convertible into a 2D numpy array of float!") from err
    if V.ndim != 2:
        raise ValueError(f"Expected V to be a 2D numpy array. Got {V.ndim:d}D array.")
    n_points, dim = V.shape
    if n_points <= 1:
        return V
    elif dim == 0:
        return V[:1, :]
    elif dim == 1:
        V_minimal = np.vstack((np.min(V, axis=0, keepdims=True), np.max(V, axis=0, keepdims=True)))
        if np.diff(V_minimal, axis=0) <= PYLAZYSET_ZERO:
            # Extrema are same. So pick only the top row.
            return V_minimal[:1, :]
        return V_minimal
    elif affine_dimension(V) == 0:
        return V[:1, :]
    elif affine_dimension(V) == dim:
        # Indices of the unique vertices forming the convex hull:
        return V[ConvexHull(V).vertices, :]
    else:
        cdd_polyhedron = get_cdd_polyhedron_from_V(V)
        tV_cdd_matrix = cdd.copy_generators(cdd_polyhedron)
        cdd.matrix_canonicalize(tV_cdd_matrix)  # Minimize redundant vertices
        tV = np.array(tV_cdd_matrix.array)
        if (tV[:, 0] == 0).any():  # pragma: no cover
            raise ValueError("Redundancy removal yielded rays! Possibly due to numerical issues!")
        return tV[:, 1:]
