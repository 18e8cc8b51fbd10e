# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

# Code purpose:  Define the methods involving just the Polytope class

import cvxpy as cp
import numpy as np

from pylazyset.common import sanitize_vector
from pylazyset.common.constants import PYLAZYSET_ZERO
from pylazyset.common.hull import convex_hull
from pylazyset.common.lazy_set import LazySet
from pylazyset.common.linear_constraint import LinearConstraint


def chebyshev_centering(self):
    r"""Compute the Chebyshev center and radius, the center and radius of the largest ball inside the polytope.

    Raises:
        NotImplementedError: Unable to solve the linear program using CVXPY

    Returns:
        tuple: (center, radius). The center is None when the polytope is empty or unbounded.

    Notes:
        The center :math:`c` and radius :math:`R` solve the linear program (Section 8.5.1 in Boyd and Vandenberghe,
        Convex Optimization)

        .. math ::
            \text{maximize}     &\quad R \\
            \text{subject to}   &\quad a_i^\top c + R \|a_i\|_2 \leq b_i,\quad i=1,\ldots,m,\\
                                &\quad A_e c = b_e, \\
                                &\quad R \geq 0.

        The radius is reported as 0 when equalities are present, so that the center is a point in the relative interior
        of a lower-dimensional polytope. The radius is :math:`-\infty` for an empty polytope, 0 for a nonempty
        polytope that is not full-dimensional, positive for a full-dimensional polytope, and :math:`\infty` for an
        unbounded one. This LP requires an H-Rep and is used to decide emptiness and full-dimensionality.
    """
    if not self.in_H_rep and not self.in_V_rep:
        return None, -np.inf
    elif self.dim == 0:
        return np.zeros((0,)), 0
    center = cp.Variable((self.dim,))
    radius = cp.Variable()
    if self.n_halfspaces > 0:
        constraints = [radius >= -PYLAZYSET_ZERO, self.A @ center + radius * np.linalg.norm(self.A, axis=1) <= self.b]
    else:
        # Only equalities are present, so any bounded radius gives a feasible center
        constraints = [radius <= 1e4]
    if self.n_equalities > 0:
        constraints.append(self.Ae @ center == self.be)
    problem = cp.Problem(cp.Maximize(radius), constraints)
    try:
        problem.solve(**self.cvxpy_args_lp)
    except cp.error.SolverError as err:
        raise NotImplementedError(f"Unable to solve for the chebyshev centering! CVXPY returned error: {err}") from err
    if problem.status in [cp.OPTIMAL, cp.OPTIMAL_INACCURATE]:
        if self.n_equalities == 0 and radius.value >= PYLAZYSET_ZERO:
            return center.value, float(radius.value)
        return center.value, 0
    elif problem.status in [cp.UNBOUNDED, cp.UNBOUNDED_INACCURATE]:
        return None, np.inf
    elif problem.status in [cp.INFEASIBLE, cp.INFEASIBLE_INACCURATE]:
        return None, -np.inf
    raise NotImplementedError(f"Unhandled CVXPY status {problem.status} in chebyshev_centering!")  # pragma: no cover


def _compute_support_single_eta(self, eta):
    """Private function to compute the support function and a support vector of a non-empty polytope along eta. Instead,
    call `support_function` or `support_vector` methods. For an H-Rep polytope, this function uses :meth:`minimize`."""
    if self.in_V_rep:
        # Maximum of a linear function over conv(v_i) is attained at a vertex
        vertex_index = int(np.argmax(self.V @ eta))
        return float(self.V[vertex_index] @ eta), self.V[vertex_index].copy()
    x = cp.Variable((self.dim,))
    support_vector, negative_support_function_evaluation, _ = self.minimize(
        x,
        objective_to_minimize=-eta @ x,
        cvxpy_args=self.cvxpy_args_lp,
        task_str=f"evaluate the support function at eta = {np.array2string(np.array(eta)):s}",
    )
    return -float(negative_support_function_evaluation), support_vector


def support_function(self, d):
    r"""Evaluate the support function :math:`\rho_{\mathcal{P}}(d) = \max_{x\in\mathcal{P}} d^\top x`.

    Args:
        d (array_like): Support direction

    Raises:
        DimensionMismatchError: When d does not have self.dim elements
        NotImplementedError: Unable to solve the linear program using CVXPY

    Returns:
        float: Support function evaluation. -np.inf when the polytope is empty.

    Notes:
        For a V-Rep polytope, the support function is the maximum of :math:`d^\top v_i` over the vertices. For an
        H-Rep polytope, we solve a linear program with the constraints :math:`Ax\leq b, A_e x = b_e`.
    """
    d = sanitize_vector(d, self.dim, name="direction")
    if self.is_empty:
        return -np.inf
    return _compute_support_single_eta(self, d)[0]


def support_vector(self, d):
    r"""Compute a support vector :math:`\nu_{\mathcal{P}}(d) \in \arg\max_{x\in\mathcal{P}} d^\top x`.

    Args:
        d (array_like): Support direction

    Raises:
        DimensionMismatchError: When d does not have self.dim elements
        ValueError: When the polytope is empty
        NotImplementedError: Unable to solve the linear program using CVXPY

    Returns:
        numpy.ndarray: Support vector. For a V-Rep polytope, the support vector is a vertex.
    """
    d = sanitize_vector(d, self.dim, name="direction")
    if self.is_empty:
        raise ValueError("Set must be non-empty for support vector evaluation.")
    return _compute_support_single_eta(self, d)[1]


def an_element(self):
    """Return some element of the polytope, the first vertex (V-Rep) or the Chebyshev center (H-Rep)

    Raises:
        ValueError: When the polytope is empty
    """
    if self.is_empty:
        raise ValueError("An empty polytope does not have any element!")
    elif self.in_V_rep:
        return self.V[0].copy()
    else:
        return np.array(self.chebyshev_centering()[0], dtype=float)


def minimum_volume_circumscribing_rectangle(self):
    r"""Compute the minimum volume circumscribing rectangle for a polytope.

    Raises:
        ValueError: When polytope is empty

    Returns:
        tuple: A tuple of two elements
            - lb (numpy.ndarray): Lower bound :math:`l` on the polytope,
              :math:`\mathcal{P}\subseteq\{l\}\oplus\mathbb{R}_{\geq 0}`.
            - ub (numpy.ndarray): Upper bound :math:`u` on the polytope,
              :math:`\mathcal{P}\subseteq\{u\}\oplus(-\mathbb{R}_{\geq 0})`.

    Notes:
        For a V-Rep polytope, the bounds are the element-wise extrema of the vertices. Otherwise, we use 2n support
        function evaluations, where n is attr:`self.dim`.
    """
    if self.is_empty:
        raise ValueError("Can not compute circumscribing rectangle for an empty polytope!")
    elif self.in_V_rep:
        return np.min(self.V, axis=0), np.max(self.V, axis=0)
    return LazySet.minimum_volume_circumscribing_rectangle(self)


def is_universal(self, witness=False):
    """Check if the polytope is the universal set, which only happens for a non-empty polytope in dimension 0.

    Args:
        witness (bool, optional): When True, also return a witness. Defaults to False.

    Returns:
        bool | tuple: Flag, or (flag, witness) when witness is True. The witness is a point outside the bounding box
        of the polytope (or the origin for an empty polytope).
    """
    if self.dim == 0 and not self.is_empty:
        return (True, np.empty((0,))) if witness else True
    elif not witness:
        return False
    elif self.is_empty:
        return False, np.zeros((self.dim,))
    else:
        _, ub = self.minimum_volume_circumscribing_rectangle()
        return False, ub + 1


def vertices_list(self, prune=True):
    """Return the vertices of the polytope as a 2D numpy array (one vertex per row)

    Args:
        prune (bool, optional): When True, redundant points are removed via a convex hull. Defaults to True.

    Returns:
        numpy.ndarray: Vertices. A (0, self.dim) array for an empty polytope.

    Notes:
        This function requires the polytope to be in V-Rep, and performs a vertex enumeration when the polytope is in
        H-Rep.
    """
    if self.is_empty:
        return np.empty((0, self.dim))
    elif prune:
        return convex_hull(self.V)
    return self.V.copy()


def constraints_list(self):
    """Return the halfspaces describing the polytope as a list of LinearConstraint

    Returns:
        list: List of LinearConstraint. Every equality constraint appears as two opposing inequalities. For an empty
        polytope, we return the infeasible pair x_1 <= -1 and -x_1 <= -1.

    Notes:
        This function requires the polytope to be in H-Rep, and performs a halfspace enumeration when the polytope is
        in V-Rep.
    """
    if self.is_empty:
        if self.dim == 0:
            return []
        e_1 = np.eye(self.dim)[0]
        return [LinearConstraint(e_1, -1), LinearConstraint(-e_1, -1)]
    constraint_list = [LinearConstraint(a, b) for a, b in zip(self.A, self.b)]
    for ae, be in zip(self.Ae, self.be):
        constraint_list += [LinearConstraint(ae, be), LinearConstraint(-ae, -be)]
    return constraint_list
