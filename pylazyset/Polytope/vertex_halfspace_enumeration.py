# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

# Code purpose:  Define the methods for vertex-halfspace enumeration for the Polytope class
# Coverage: This file has 3 untested statements to handle unexpected errors from pycddlib.

import cdd  # pycddlib -- for vertex enumeration from H-representation
import numpy as np

from pylazyset.common.constants import PYLAZYSET_ZERO
from pylazyset.common.hull import convex_hull, get_cdd_polyhedron_from_V


def get_cdd_polyhedron_from_Ab_Aebe(A, b, Ae=None, be=None):
    """Build the cdd polyhedron {x | Ax <= b, Ae x = be} in inequality form

    Args:
        A (numpy.ndarray): Inequality coefficient vectors, arranged row-wise
        b (numpy.ndarray): Inequality constants
        Ae (numpy.ndarray, optional): Equality coefficient vectors, arranged row-wise. Defaults to None.
        be (numpy.ndarray, optional): Equality constants. Defaults to None.

    Returns:
        cdd.Polyhedron: CDD Polyhedron

    Notes:
        cdd describes b - Ax >= 0 by the rows [b, -A], and marks the rows of the equalities in lin_set.
    """
    H_cdd = cdd.matrix_from_array(np.column_stack((b, -A)), rep_type=cdd.RepType.INEQUALITY)
    if Ae is not None and Ae.size > 0:
        He_cdd = cdd.matrix_from_array(
            np.column_stack((be, -Ae)), lin_set=set(range(be.size)), rep_type=cdd.RepType.INEQUALITY
        )
        cdd.matrix_append_to(H_cdd, He_cdd)
    return cdd.polyhedron_from_matrix(H_cdd)


def determine_H_rep(self):
    """Compute a minimal halfspace representation of a V-Rep polytope with cdd.

    Raises:
        ValueError: When the halfspace enumeration fails

    Notes:
        Lower-dimensional polytopes get equality constraints. Nothing is done when the H-Rep is already available.
    """
    if self.in_H_rep:
        return
    elif self.is_empty:
        self._set_polytope_to_empty(self.dim)
        return
    try:
        set_attributes_minimal_Ab_Aebe_from_cdd_polyhedron(self, get_cdd_polyhedron_from_V(self.V))
    except ValueError as err:
        raise ValueError("Computation of H-rep failed!") from err


def determine_V_rep(self):
    """Compute the vertices of an H-Rep polytope with cdd.

    Raises:
        ValueError: When the vertex enumeration fails or returns rays. Rays mean that the polytope is unbounded, or
            that cdd ran into numerical issues.

    Notes:
        Nothing is done when the V-Rep is already available.
    """
    if self.in_V_rep:
        return
    elif self.is_empty:
        self._set_polytope_to_empty(self.dim)
        return
    try:
        cdd_polyhedron = get_cdd_polyhedron_from_Ab_Aebe(self.A, self.b, self.Ae, self.be)
        set_attributes_V_from_cdd(self, cdd.copy_generators(cdd_polyhedron))
    except ValueError as err:
        raise ValueError("Computation of V-rep failed!") from err


def minimize_H_rep(self):
    """Drop the redundant inequalities of the H-Rep with cdd.

    Raises:
        ValueError: When cdd fails to compute the minimal H-Rep
    """
    if self.is_empty:
        self._set_polytope_to_empty(self.dim)
        return
    try:
        cdd_polyhedron = get_cdd_polyhedron_from_Ab_Aebe(self.A, self.b, self.Ae, self.be)
        set_attributes_minimal_Ab_Aebe_from_cdd_polyhedron(self, cdd_polyhedron)
    except ValueError as err:  # pragma: no cover
        raise ValueError("Computation of minimal H-rep failed!") from err


def minimize_V_rep(self):
    """Drop the vertices that lie in the convex hull of the others, see :func:`pylazyset.common.hull.convex_hull`.

    Raises:
        ValueError: When the convex hull computation fails
    """
    if self.is_empty:
        self._set_polytope_to_empty(self.dim)
    elif self.n_vertices > 1:
        try:
            V_minimal = convex_hull(self.V)
        except ValueError as err:  # pragma: no cover
            raise ValueError("Computation of minimal V-rep failed!") from err
        self._set_attributes_from_V(V_minimal, erase_H_rep=False)


def set_attributes_minimal_Ab_Aebe_from_cdd_polyhedron(self, cdd_polyhedron):
    """Set (A, b, Ae, be) from the canonical inequality form of a cdd polyhedron

    Raises:
        ValueError: When cdd returns no rows at all
    """
    H_cdd_matrix = cdd.copy_inequalities(cdd_polyhedron)
    # Canonicalization removes redundant rows and moves implicit equalities to lin_set
    cdd.matrix_canonicalize(H_cdd_matrix)
    H_cdd_array = np.array(H_cdd_matrix.array)
    if H_cdd_array.size == 0:  # pragma: no cover
        raise ValueError("Did not expect facet list to be empty after minimization!")
    is_equality = np.isin(np.arange(H_cdd_array.shape[0]), list(H_cdd_matrix.lin_set))
    b, A = H_cdd_array[~is_equality, 0], -H_cdd_array[~is_equality, 1:]
    if is_equality.any():
        be, Ae = H_cdd_array[is_equality, 0], -H_cdd_array[is_equality, 1:]
    else:
        be, Ae = None, None
    self._set_attributes_from_Ab_Aebe(A, b, Ae=Ae, be=be, erase_V_rep=False, enable_warning=False)


def set_attributes_V_from_cdd(self, tV_cdd_matrix):
    """Set V from the generator matrix [t, V] returned by cdd, where t is 1 for vertices and 0 for rays.

    Raises:
        ValueError: When cdd returned rays
    """
    tV = np.array(tV_cdd_matrix.array)
    if (tV[:, 0] == 0).any():
        raise ValueError("Vertex enumeration yielded rays! Possibly due to numerical issues or unbounded polytope!")
    self._set_attributes_from_V(tV[:, 1:], erase_H_rep=False)


def valid_rows_with_not_all_zeros_in_A_and_no_inf_in_b(A, b):
    """Mark the rows of (A, b) that constrain the polytope, i.e., A has a nonzero entry and b is finite

    Returns:
        numpy.ndarray: Boolean mask with one entry per row of (A, b)
    """
    return (np.abs(A) > PYLAZYSET_ZERO).any(axis=1) & (b < np.inf)
