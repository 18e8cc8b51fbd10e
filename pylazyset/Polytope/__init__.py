# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

# Code purpose:  Define the Polytope class, the concrete polyhedral set used by the lazy operations

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Any, Literal, Optional, Sequence, cast

import numpy as np

if TYPE_CHECKING:
    import cvxpy

from pylazyset.common import minimize, sanitize_Ab, sanitize_and_identify_Aebe
from pylazyset.common.constants import DEFAULT_CVXPY_ARGS_LP, PYLAZYSET_ZERO
from pylazyset.common.hull import affine_dimension
from pylazyset.common.lazy_set import LazySet
from pylazyset.Polytope.operations_binary import contains, inverse_linear_map, linear_map, translate
from pylazyset.Polytope.operations_unary import (
    an_element,
    chebyshev_centering,
    constraints_list,
    is_universal,
    minimum_volume_circumscribing_rectangle,
    support_function,
    support_vector,
    vertices_list,
)
from pylazyset.Polytope.vertex_halfspace_enumeration import (
    determine_H_rep,
    determine_V_rep,
    minimize_H_rep,
    minimize_V_rep,
    valid_rows_with_not_all_zeros_in_A_and_no_inf_in_b,
)


class Polytope(LazySet):
    r"""Polytope class.

    A Polytope is the concrete set behind the lazy operations. It is described by halfspaces (H-Rep),
    :math:`\{x\ |\ Ax \leq b, A_e x = b_e\}`, by vertices (V-Rep), :math:`\text{ConvexHull}(v_i)`, or by both. The
    missing representation is enumerated with pycddlib when a query needs it.

    Construct a Polytope with exactly one of the following keyword combinations:

    #. (A, b) or (A, b, Ae, be) for an H-Rep polytope,
    #. V for a V-Rep polytope whose vertices are the rows of V,
    #. (lb, ub) for the axis-aligned cuboid :math:`\{x\ |\ lb\leq x \leq ub\}`,
    #. (c, h) for the axis-aligned cuboid centered at c with half-sides h, e.g., Polytope(c=np.zeros(n), h=1) is the
       unit :math:`\infty`-norm ball, and
    #. dim for an empty polytope in R^dim. Polytope() is the empty polytope in R^0.

    Args:
        dim (int, optional): Dimension of the empty polytope
        V (array_like, optional): Vertices, arranged row-wise
        A (array_like, optional): Inequality coefficient vectors, arranged row-wise
        b (array_like, optional): Inequality constants
        Ae (array_like, optional): Equality coefficient vectors, arranged row-wise
        be (array_like, optional): Equality constants
        lb (array_like, optional): Lower bounds of the cuboid
        ub (array_like, optional): Upper bounds of the cuboid
        c (array_like, optional): Center of the cuboid
        h (float | array_like, optional): Half-sides of the cuboid

    Raises:
        ValueError: When the keywords do not form one of the combinations above
        ValueError: When the arguments are not convertible into arrays of compatible dimensions
        ValueError: When an H-Rep is detected to be unbounded. The detection is a sufficient condition only.
        UserWarning: When rows of (A, b) with all zeros in A or np.inf in b, or rows of (Ae, be) with all zeros, are
            dropped
    """

    _type_of_set = "Polytope"

    def __init__(self, **kwargs: Any) -> None:
        """Constructor for Polytope class."""
        self._dim: int = 0
        self._A, self._b = np.empty((0, 1)), np.empty((0,))
        self._Ae, self._be = np.empty((0, 1)), np.empty((0,))
        self._V = np.empty((0, 1))
        self._in_H_rep: bool = False
        self._in_V_rep: bool = False
        # Lazily computed, None until a query needs them
        self._is_full_dimensional: Optional[bool] = None
        self._is_empty: Optional[bool] = None
        self._is_bounded: Optional[bool] = None
        self._cvxpy_args_lp = DEFAULT_CVXPY_ARGS_LP

        keywords = frozenset(kwargs)
        if keywords in (frozenset(), frozenset({"dim"})):
            self._set_polytope_to_empty(kwargs.get("dim", 0))
        elif keywords == {"V"}:
            self._set_attributes_from_V(kwargs["V"])
        elif keywords == {"lb", "ub"}:
            self._set_attributes_from_bounds(kwargs["lb"], kwargs["ub"])
        elif keywords == {"c", "h"}:
            self._set_attributes_from_center_and_half_sides(kwargs["c"], kwargs["h"])
        elif keywords in (frozenset({"A", "b"}), frozenset({"A", "b", "Ae", "be"})):
            self._set_attributes_from_Ab_Aebe(**kwargs)
        else:
            raise ValueError(
                f"Got invalid arguments {sorted(keywords)} while defining a polytope. Please specify either (A, b) or "
                "(A, b, Ae, be) or (lb, ub) or (c, h) or V or dim or NOTHING."
            )

    def _set_attributes_from_Ab_Aebe(
        self,
        A: Sequence[Sequence[float]] | np.ndarray,
        b: Sequence[float] | np.ndarray,
        Ae: Optional[Sequence[Sequence[float]] | np.ndarray] = None,
        be: Optional[Sequence[float] | np.ndarray] = None,
        erase_V_rep: bool = True,
        enable_warning: bool = True,
    ) -> None:
        r"""Protected method to set up the H-Rep from (A, b, Ae, be).

        Args:
            A (array_like): Inequality coefficient vectors, arranged row-wise
            b (array_like): Inequality constants
            Ae (array_like, optional): Equality coefficient vectors. Defaults to None (no equalities).
            be (array_like, optional): Equality constants. Defaults to None (no equalities).
            erase_V_rep (bool, optional): Drop any V-Rep held so far. Defaults to True.
            enable_warning (bool, optional): Warn when rows are dropped. Defaults to True.

        Raises:
            ValueError: When (A, b) or (Ae, be) is not a valid linear system, or they differ in the number of columns
            ValueError: When the H-Rep is detected to be unbounded

        Notes:
            When the equalities pin down a single point, the polytope is that point (in V-Rep as well) if it satisfies
            the inequalities, and empty otherwise.
        """
        A, b = sanitize_Ab(A, b)
        self._dim = A.shape[1]
        self._in_H_rep = True
        if Ae is None:
            Ae, be = np.empty((0, self.dim)), np.empty((0,))
        Ae, be, Aebe_status, solution_to_Ae_x_eq_be = sanitize_and_identify_Aebe(Ae, be)
        if Aebe_status == "no_Ae_be":
            Ae, be = np.empty((0, self.dim)), np.empty((0,))
        elif Ae.shape[1] != self.dim:
            raise ValueError(f"Expected A and Ae to have same number of columns. A: {A.shape}, Ae: {Ae.shape}")
        if A.size == 0:
            A, b = np.empty((0, self.dim)), np.empty((0,))
        self._A, self._b, self._Ae, self._be = A, b, Ae, be

        if Aebe_status == "infeasible" or (b == -np.inf).any():
            self._set_polytope_to_empty(self.dim)
            return
        elif Aebe_status == "single_point":
            if (A @ solution_to_Ae_x_eq_be - b > PYLAZYSET_ZERO).any():
                self._set_polytope_to_empty(self.dim)
                return
            # The inequalities are redundant for a single point
            self._A, self._b = np.empty((0, self.dim)), np.empty((0,))
            self._set_attributes_from_V(np.array([solution_to_Ae_x_eq_be]), erase_H_rep=False)
            self._is_full_dimensional = self.dim == 1
            return

        valid_rows_Ab = valid_rows_with_not_all_zeros_in_A_and_no_inf_in_b(A, b)
        if valid_rows_Ab.sum() < 2:
            # A bounded polytope that is not a single point needs at least two inequalities
            direction_str = "any direction" if Aebe_status == "no_Ae_be" and A.shape[0] > 0 else "some directions"
            raise ValueError(f"Polytope is not bounded in {direction_str:s}!")
        elif enable_warning and not valid_rows_Ab.all():
            warnings.warn("Removed some rows in A that had all zeros | b that had np.inf!", UserWarning)
        self._A, self._b = A[valid_rows_Ab], b[valid_rows_Ab]
        if erase_V_rep:
            self._V = np.empty((0, self.dim))
            self._in_V_rep = False

    def _set_attributes_from_bounds(self, lb: Any, ub: Any) -> None:
        """Protected method to set up an axis-aligned cuboid from its bounds (lb, ub).

        Notes:
            Coordinates with lb = ub become equality constraints, and a cuboid with lb = ub is a single vertex (V-Rep).
        """
        try:
            lb = np.atleast_1d(np.squeeze(lb)).astype(float)
            ub = np.atleast_1d(np.squeeze(ub)).astype(float)
        except (TypeError, ValueError) as err:
            raise ValueError("Expected lb, ub to convertible into 1D float numpy arrays") from err
        if lb.shape != ub.shape or lb.ndim != 1:
            raise ValueError(f"Expected lb, ub to be 1D arrays of the same shape. Got {lb.shape} and {ub.shape}!")
        n = lb.size
        if (lb > ub).any():
            self._set_polytope_to_empty(n)
            return
        elif np.isinf(lb).any() or np.isinf(ub).any():
            raise ValueError("Polytope is not bounded in some directions!")
        is_equality = np.abs(ub - lb) <= PYLAZYSET_ZERO
        if is_equality.all():
            self._set_attributes_from_V(np.array([(lb + ub) / 2]))
            return
        identity, midpoint = np.eye(n), (lb + ub) / 2
        A_bound = np.vstack((identity[~is_equality], -identity[~is_equality]))
        b_bound = np.hstack((ub[~is_equality], -lb[~is_equality]))
        if is_equality.any():
            self._set_attributes_from_Ab_Aebe(A_bound, b_bound, Ae=identity[is_equality], be=midpoint[is_equality])
        else:
            self._set_attributes_from_Ab_Aebe(A_bound, b_bound)
        self._is_full_dimensional, self._is_empty, self._is_bounded = not is_equality.any(), False, True

    def _set_attributes_from_center_and_half_sides(self, c: Any, h: Any) -> None:
        """Protected method to set up an axis-aligned cuboid from its center c and its half-sides h."""
        try:
            c = np.atleast_1d(np.squeeze(c)).astype(float)
            h = np.squeeze(h).astype(float)
        except (TypeError, ValueError) as err:
            raise ValueError("Expected c and h to be convertible into float arrays!") from err
        if c.ndim >= 2 or h.ndim >= 2 or (h.ndim == 1 and h.shape != c.shape):
            raise ValueError(f"Expected c as a 1D array, and h as a scalar or like c. Got {c.shape}, {h.shape}!")
        self._set_attributes_from_bounds(c - h, c + h)

    def _set_attributes_from_V(self, V: Any, erase_H_rep: bool = True) -> None:
        """Protected method to set up the V-Rep from the vertices V (arranged row-wise).

        Raises:
            ValueError: When V is not a 2D array. A 1D array is rejected, since a 1D polytope with many vertices and a
                single vertex in higher dimensions can not be told apart.
        """
        try:
            V = np.asarray(V, dtype=float)
        except (TypeError, ValueError) as err:
            raise ValueError("Expected V to be convertible into a 2-D numpy array of float.") from err
        if V.ndim != 2:
            raise ValueError(f"Expected V to be a 2-D numpy array. Got a {V.ndim:d}-D array.")
        elif V.size == 0:
            self._set_polytope_to_empty(V.shape[1])
            return
        self._dim = V.shape[1]
        self._V, self._in_V_rep = V, True
        self._is_empty, self._is_bounded = False, True
        if erase_H_rep:
            self._A, self._b = np.empty((0, self.dim)), np.empty((0,))
            self._Ae, self._be = np.empty((0, self.dim)), np.empty((0,))
            self._in_H_rep = False

    def _set_polytope_to_empty(self, dim: int) -> None:
        """Protected method to reset all representations to those of an empty polytope in R^dim"""
        self._dim = dim
        self._A, self._b = np.empty((0, dim)), np.empty((0,))
        self._Ae, self._be = np.empty((0, dim)), np.empty((0,))
        self._V = np.empty((0, dim))
        self._in_H_rep, self._in_V_rep = False, False
        self._is_full_dimensional, self._is_empty, self._is_bounded = dim == 0, True, True

    def _update_emptiness_full_dimensionality_for_h_rep_polytope(self) -> None:
        """Decide emptiness and full-dimensionality of an H-Rep polytope from its Chebyshev radius: -inf means empty,
        and a positive radius (or dim = 1) means full-dimensional."""
        _, chebyshev_radius = self.chebyshev_centering()
        self._is_empty = chebyshev_radius == -np.inf
        if self._is_empty:
            self._is_full_dimensional = self.dim == 0
        else:
            self._is_full_dimensional = chebyshev_radius > 0 or self.dim == 1

    @property
    def dim(self) -> int:
        """Dimension of the ambient space R^dim of the polytope"""
        return self._dim

    def _require_H_rep(self) -> None:
        if not self.in_H_rep:
            self.determine_H_rep()

    @property
    def A(self) -> np.ndarray:
        r"""Coefficient vectors of the inequalities :math:`Ax \leq b`, arranged row-wise. Enumerates the H-Rep when
        needed."""
        self._require_H_rep()
        return self._A

    @property
    def b(self) -> np.ndarray:
        r"""Constants of the inequalities :math:`Ax \leq b`"""
        self._require_H_rep()
        return self._b

    @property
    def H(self) -> np.ndarray:
        """Inequalities stacked as the matrix [A, b]"""
        return np.column_stack((self.A, self.b))

    @property
    def n_halfspaces(self) -> int:
        """Number of inequalities in the H-Rep"""
        return self.A.shape[0]

    @property
    def Ae(self) -> np.ndarray:
        r"""Coefficient vectors of the equalities :math:`A_e x = b_e`, arranged row-wise"""
        self._require_H_rep()
        return self._Ae

    @property
    def be(self) -> np.ndarray:
        r"""Constants of the equalities :math:`A_e x = b_e`"""
        self._require_H_rep()
        return self._be

    @property
    def n_equalities(self) -> int:
        """Number of equalities in the H-Rep"""
        return self.Ae.shape[0]

    @property
    def V(self) -> np.ndarray:
        """Vertices of the polytope, arranged row-wise. Enumerates the V-Rep when needed."""
        if self.in_H_rep and not self.in_V_rep:
            self.determine_V_rep()
        return self._V

    @property
    def n_vertices(self) -> int:
        """Number of vertices in the V-Rep"""
        return self.V.shape[0]

    @property
    def is_full_dimensional(self) -> bool:
        """Check if the affine hull of the polytope is R^dim

        Notes:
            A V-Rep polytope is full-dimensional when its vertices span an affine subspace of dimension dim. An H-Rep
            polytope is full-dimensional when its Chebyshev radius is positive.
        """
        if self._is_full_dimensional is None:
            if self.in_V_rep:
                self._is_full_dimensional = self.dim == 1 or affine_dimension(self.V) == self.dim
            else:
                self._update_emptiness_full_dimensionality_for_h_rep_polytope()
        return cast(bool, self._is_full_dimensional)

    @property
    def is_empty(self) -> bool:
        """Check if the polytope is empty. Solves a Chebyshev centering problem for an H-Rep polytope."""
        if self._is_empty is None:
            self._update_emptiness_full_dimensionality_for_h_rep_polytope()
        return cast(bool, self._is_empty)

    @property
    def is_bounded(self) -> bool:
        """Check if the polytope is bounded, i.e., its circumscribing rectangle is finite"""
        if self._is_bounded is None:
            try:
                lb, ub = self.minimum_volume_circumscribing_rectangle()
            except ValueError as err:
                raise ValueError(
                    "Unable to check boundedness, since the circumscribing rectangle could not be computed!"
                ) from err
            self._is_bounded = bool(np.isfinite(lb).all() and np.isfinite(ub).all())
        return cast(bool, self._is_bounded)

    @property
    def in_H_rep(self) -> bool:
        """Check if the H-Rep is available"""
        return self._in_H_rep

    @property
    def in_V_rep(self) -> bool:
        """Check if the V-Rep is available"""
        return self._in_V_rep

    @property
    def cvxpy_args_lp(self) -> dict[str, Any]:
        """Keyword arguments for cvxpy.Problem.solve in the linear programs of this polytope. Defaults to
        DEFAULT_CVXPY_ARGS_LP."""
        return self._cvxpy_args_lp

    @cvxpy_args_lp.setter
    def cvxpy_args_lp(self, value: dict[str, Any]) -> None:
        self._cvxpy_args_lp = value

    ################
    # CVXPY-focussed
    ################
    def containment_constraints(
        self, x: cvxpy.Variable, flatten_order: Literal["F", "C"] = "F"
    ) -> tuple[list[cvxpy.Constraint], Optional[cvxpy.Variable]]:
        """Get the CVXPY constraints that force x to lie in the polytope.

        Args:
            x (cvxpy.Variable): CVXPY variable with self.dim entries
            flatten_order (Literal["F", "C"]): Order used to flatten x. Defaults to "F".

        Raises:
            ValueError: When the polytope is empty

        Returns:
            tuple: (constraints, theta), where theta is the CVXPY variable of convex combination weights of the vertices
            for a V-Rep polytope, and None for an H-Rep polytope.
        """
        import cvxpy as cp

        x_flat = cp.reshape(x, (x.size,), order=flatten_order)
        if self.in_V_rep:
            theta = cp.Variable((self.n_vertices,), nonneg=True)
            return [x_flat == self.V.T @ theta, cp.sum(theta) == 1], theta
        elif not self.in_H_rep:
            raise ValueError("Containment constraints can not be generated for an empty polytope!")
        constraints = [self.A @ x_flat <= self.b]
        if self.n_equalities > 0:
            constraints.append(self.Ae @ x_flat == self.be)
        return constraints, None

    minimize = minimize

    ##################
    # Unary operations
    ##################
    def copy(self) -> Polytope:
        """Create a copy of the polytope, keeping all available representations"""
        if self.in_H_rep:
            copied = self.__class__(A=self.A, b=self.b, Ae=self.Ae, be=self.be)
            if self.in_V_rep:
                copied._set_attributes_from_V(V=self.V, erase_H_rep=False)
            return copied
        elif self.in_V_rep:
            return self.__class__(V=self.V)
        return self.__class__(dim=self.dim)

    an_element = an_element
    chebyshev_centering = chebyshev_centering
    constraints_list = constraints_list
    is_universal = is_universal
    minimum_volume_circumscribing_rectangle = minimum_volume_circumscribing_rectangle
    support_function = support_function
    support_vector = support_vector
    vertices_list = vertices_list

    ###########################
    # Comparison and binary operations
    ###########################
    contains = contains
    linear_map = linear_map
    inverse_linear_map = inverse_linear_map
    translate = translate

    ###########################
    # Vertex-halfspace enumeration
    ###########################
    determine_H_rep = determine_H_rep
    determine_V_rep = determine_V_rep
    minimize_H_rep = minimize_H_rep
    minimize_V_rep = minimize_V_rep

    #########################
    # Polytope representation
    #########################
    def __str__(self) -> str:
        if self.is_empty:
            return f"Polytope (empty) in R^{self.dim:d}"
        available_reps = [rep for rep, available in (("H-Rep", self.in_H_rep), ("V-Rep", self.in_V_rep)) if available]
        return f"Polytope in R^{self.dim:d} in {' and '.join(available_reps):s}"

    def __repr__(self) -> str:
        repr_str = str(self)
        if self.in_H_rep:
            equality_str = "equality constraint" if self.n_equalities == 1 else "equality constraints"
            repr_str += f"\n\tIn H-rep: {self.n_halfspaces:d} inequalities and {self.n_equalities:d} {equality_str:s}"
        if self.in_V_rep:
            vertex_str = "vertex" if self.n_vertices == 1 else "vertices"
            repr_str += f"\n\tIn V-rep: {self.n_vertices:d} {vertex_str:s}"
        return repr_str
