# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

# Code purpose: Describe various methods that are common to different set representations.
# Coverage: This file has 1 untested statement to handle errors from np.linalg.lstsq.

import warnings

import cvxpy as cp
import numpy as np

from pylazyset.common.constants import DEFAULT_COND_TOL, PYLAZYSET_ZERO
from pylazyset.common.exceptions import DimensionMismatchError, MissingCapabilityError
from pylazyset.common.hull import convex_hull


def check_matrices_are_equal_ignoring_row_order(A, B):
    """Check that two matrices hold the same rows, possibly in a different order

    Args:
        A (array_like): First matrix
        B (array_like): Second matrix

    Returns:
        bool: True when A and B have the same shape and every row of A is close to some row of B
    """
    A = np.array(A, dtype=float)
    B = np.array(B, dtype=float)
    if A.shape != B.shape:
        return False
    return all(np.isclose(row, B).all(axis=1).any() for row in A)


def concretize(X):
    """Return a concrete (explicit) representation of X, or X itself when X is already concrete.

    Args:
        X (LazySet): Set to concretize

    Returns:
        LazySet: The concrete set
    """
    if hasattr(X, "concretize"):
        return X.concretize()
    return X


def has_constraints_list(Q):
    """Check if the set can produce a finite list of linear constraints

    Args:
        Q (object): Set to check

    Returns:
        bool: Returns True if the set exposes constraints_list, False otherwise
    """
    return hasattr(Q, "constraints_list")


def has_vertices_list(Q):
    """Check if the set can produce a finite list of vertices

    Args:
        Q (object): Set to check

    Returns:
        bool: Returns True if the set exposes vertices_list, False otherwise
    """
    return hasattr(Q, "vertices_list")


def _type_of_set(Q):
    return getattr(Q, "type_of_set", None)


def is_lazy_set(Q):
    """Check if the object implements the lazy set interface

    Args:
        Q (object): Object to check

    Returns:
        bool: Returns True if Q has a dimension, a support function, and a membership test
    """
    return all(hasattr(Q, attr) for attr in ("dim", "support_function", "support_vector", "contains"))


def is_polytope(Q):
    """Check if the set is a polytope

    Args:
        Q (object): Set to check

    Returns:
        bool: Returns True if the set is a polytope, False otherwise
    """
    return hasattr(Q, "in_H_rep")


def is_universe(Q):
    """Check if the set is a universe"""
    return _type_of_set(Q) == "Universe"


def is_zero_set(Q):
    """Check if the set is a zero set"""
    return _type_of_set(Q) == "ZeroSet"


def is_empty_set(Q):
    """Check if the set is an (explicit) empty set"""
    return _type_of_set(Q) == "EmptySet"


def is_linear_map(Q):
    """Check if the set is a lazy linear map"""
    return _type_of_set(Q) == "LinearMap"


def is_inverse_linear_map(Q):
    """Check if the set is a lazy inverse linear map"""
    return _type_of_set(Q) == "InverseLinearMap"


def is_invertible(M, cond_tol=DEFAULT_COND_TOL):
    """Check if a matrix is invertible

    Args:
        M (array_like): Matrix to check
        cond_tol (float, optional): Upper bound on the condition number. Defaults to DEFAULT_COND_TOL.

    Returns:
        bool: True if M is a square matrix of finite entries with condition number below cond_tol, False otherwise.

    Notes:
        The check uses the 2-norm condition number. A singular matrix has an infinite (or a very large) condition
        number.
    """
    M = np.atleast_2d(M).astype(float)
    if M.ndim != 2 or M.shape[0] != M.shape[1]:
        return False
    elif M.size == 0:
        return True
    elif not np.isfinite(M).all():
        return False
    with warnings.catch_warnings():
        # numpy warns when computing the condition number of a singular matrix
        warnings.simplefilter("ignore", RuntimeWarning)
        condition_number = np.linalg.cond(M)
    return bool(condition_number < cond_tol)


def is_scalar(M):
    """Check if M is a real scalar (or a 0-dimensional array)"""
    return np.ndim(M) == 0 and not isinstance(M, (str, bytes))


def linear_map(M, X):
    r"""Compute the linear map :math:`M X = \{Mx: x\in X\}`, concretely whenever X supports it.

    Args:
        M (array_like): Matrix (or scalar) with X.dim columns
        X (LazySet): Set to map

    Returns:
        LazySet: The image computed by X.linear_map when X provides it (for example, a polytope), and a lazy
        :class:`pylazyset.LinearMap` otherwise.
    """
    if hasattr(X, "linear_map"):
        if is_scalar(M):
            M = float(M) * np.eye(X.dim)
        return X.linear_map(M)
    else:
        from pylazyset.LinearMap import LinearMap

        return LinearMap(M, X)


def map_support_vector(sv, apply_map):
    """Map a support vector whose coordinates may be +-inf through a linear map

    Args:
        sv (numpy.ndarray): Support vector of the wrapped set, possibly with +-inf coordinates
        apply_map (callable): Function that applies the linear map to a finite vector

    Returns:
        numpy.ndarray: The mapped support vector, with +-inf coordinates instead of NaN

    Notes:
        The vector sv is split into a finite part f and a direction r that holds the signs of the infinite
        coordinates. The mapped vector is apply_map(f) where apply_map(r) is zero, and takes the sign of apply_map(r)
        times infinity elsewhere.
    """
    sv = np.asarray(sv, dtype=float)
    infinite_coordinates = np.isinf(sv)
    if not infinite_coordinates.any():
        return apply_map(sv)
    finite_part = np.where(infinite_coordinates, 0.0, sv)
    unbounded_direction = np.where(infinite_coordinates, np.sign(sv), 0.0)
    mapped_sv = np.asarray(apply_map(finite_part), dtype=float)
    mapped_direction = np.asarray(apply_map(unbounded_direction), dtype=float)
    mapped_sv[mapped_direction > PYLAZYSET_ZERO] = np.inf
    mapped_sv[mapped_direction < -PYLAZYSET_ZERO] = -np.inf
    return mapped_sv


def minimize(self, x, objective_to_minimize, cvxpy_args, task_str="solve the convex program"):
    """Minimize a CVXPY objective over x, subject to x lying in the set.

    Args:
        x (cvxpy.Variable): Decision variable of size self.dim
        objective_to_minimize (cvxpy.Expression): Convex objective in x
        cvxpy_args (dict): Keyword arguments for cvxpy.Problem.solve
        task_str (str, optional): Description of the task used in error messages.

    Raises:
        NotImplementedError: CVXPY failed or returned an unexpected status

    Returns:
        tuple: (minimizer, optimal value, CVXPY status). The minimizer is a vector of NaNs and the optimal value is
        np.inf (infeasible or empty set) or -np.inf (unbounded) when no minimizer exists.

    Notes:
        The containment of x is described by the set's containment_constraints method. A set that can not produce
        these constraints, such as an empty polytope, is treated as infeasible.
    """
    no_minimizer = np.full((self.dim,), np.nan)
    try:
        constraints, _ = self.containment_constraints(x)
    except ValueError:
        return no_minimizer, np.inf, cp.INFEASIBLE
    problem = cp.Problem(cp.Minimize(objective_to_minimize), constraints)
    try:
        problem.solve(**cvxpy_args)
    except cp.error.SolverError as err:
        raise NotImplementedError(f"Unable to {task_str:s}. CVXPY returned error: {str(err)}") from err
    if problem.status in [cp.OPTIMAL, cp.OPTIMAL_INACCURATE]:
        return x.value, problem.value, problem.status
    elif problem.status in [cp.UNBOUNDED, cp.UNBOUNDED_INACCURATE]:
        return no_minimizer, -np.inf, problem.status
    elif problem.status in [cp.INFEASIBLE, cp.INFEASIBLE_INACCURATE]:
        return no_minimizer, np.inf, problem.status
    raise NotImplementedError(f"Unable to {task_str:s}. CVXPY returned an unhandled status: {problem.status:s}.")


def require_capability(X, capability, task_str):
    """Raise MissingCapabilityError when X does not expose the method named capability.

    Args:
        X (object): Set to check
        capability (str): Name of the required method, e.g., "vertices_list"
        task_str (str): Task string to be used in error messages
    """
    if not hasattr(X, capability):
        raise MissingCapabilityError(
            f"Unable to {task_str:s}: the wrapped set of type {type(X).__name__:s} does not provide {capability:s}()!"
        )


def sanitize_Ab(A, b):
    """Convert (`A`, `b`) into a 2D matrix and a 1D vector describing the halfspaces Ax <= b

    Args:
        A (array_like): Coefficient vectors, stacked row-wise
        b (array_like): Constants, one per row of A

    Raises:
        ValueError: A or b is not convertible into a float array of the right dimension
        ValueError: A or b contains NaN, or A contains inf
        ValueError: A and b have a different number of rows

    Returns:
        (numpy.ndarray, numpy.ndarray): Sanitized A and b
    """
    try:
        A = np.atleast_2d(A).astype(float)
        b = np.atleast_1d(np.squeeze(b)).astype(float)
    except ValueError as err:
        raise ValueError("Expected A and b to be convertible into float arrays!") from err
    if A.ndim != 2 or b.ndim != 1:
        raise ValueError(f"Expected A and b to be 2D and 1D arrays respectively. Got {A.ndim:d}D and {b.ndim:d}D!")
    elif np.isnan(A).any() or np.isnan(b).any():
        raise ValueError("Expected A and b to be free from NaNs!")
    elif np.isinf(A).any():
        raise ValueError("Expected A to be free from infs!")
    elif A.shape[0] != b.size and not (A.shape[0] == 1 and b.size == 0):
        raise ValueError(f"Expected A and b to have the same number of rows. Got A: {A.shape[0]:d}, b: {b.size:d}!")
    return A, b


def sanitize_Aebe(Ae, be):
    """Convert (`Ae`, `be`) into the equality constraints Ae x = be, dropping the trivial rows 0 = 0

    Args:
        Ae (array_like): Coefficient vectors of the equalities, stacked row-wise
        be (array_like): Constants of the equalities

    Raises:
        ValueError: (Ae, be) is not a valid system of linear equations, or be contains inf
        UserWarning: Some rows were dropped

    Returns:
        tuple: Sanitized Ae and be, or (None, None) when no equality remains
    """
    try:
        Ae, be = sanitize_Ab(Ae, be)
    except ValueError as err:
        raise ValueError("Invalid linear system of equations (Ae, be)!") from err
    if np.isinf(be).any():
        raise ValueError(f"Expected be to be free from infs. Got {np.array2string(be):s}!")
    if Ae.size == 0:
        return None, None
    nontrivial_rows = (np.abs(Ae) > PYLAZYSET_ZERO).any(axis=1) | (np.abs(be) > PYLAZYSET_ZERO)
    if not nontrivial_rows.any():
        return None, None
    if not nontrivial_rows.all():
        warnings.warn("Removed some rows in (Ae, be) that had all zeros!", UserWarning)
    return Ae[nontrivial_rows], be[nontrivial_rows]


def sanitize_and_identify_Aebe(Ae, be):
    """Sanitize (`Ae`, `be`) and classify the affine set {x | Ae x = be}

    Args:
        Ae (array_like): Coefficient vectors of the equalities, stacked row-wise
        be (array_like): Constants of the equalities

    Raises:
        ValueError: (Ae, be) is not a valid system of linear equations

    Returns:
        tuple: A tuple with four items:
            #. Ae (numpy.ndarray | None): Sanitized Ae, None when no equality remains.
            #. be (numpy.ndarray | None): Sanitized be, None when no equality remains.
            #. status (str): One of "no_Ae_be", "affine_set", "single_point", and "infeasible".
            #. solution (numpy.ndarray | None): A least-squares solution of Ae x = be. None for "no_Ae_be".
    """
    Ae, be = sanitize_Aebe(Ae, be)
    if Ae is None:
        return None, None, "no_Ae_be", None
    try:
        solution, _, rank_Ae, _ = np.linalg.lstsq(Ae, be, rcond=None)
    except np.linalg.LinAlgError as err:  # pragma: no cover
        raise ValueError("Provided (Ae, be) is not a valid system of linear equations.") from err
    if np.max(np.abs(Ae @ solution - be)) > PYLAZYSET_ZERO:
        status = "infeasible"
    elif rank_Ae == Ae.shape[1]:
        # As many independent equalities as dimensions pin down a single point
        status = "single_point"
    else:
        status = "affine_set"
    return Ae, be, status, solution


def sanitize_matrix(M, name="M"):
    """Sanitize a matrix into a 2D numpy array of float

    Args:
        M (array_like): Matrix to sanitize
        name (str, optional): Name used in error messages. Defaults to "M".

    Raises:
        TypeError: When M can not be converted into an array of float
        ValueError: When M has more than 2 dimensions

    Returns:
        numpy.ndarray: 2D matrix
    """
    try:
        M = np.atleast_2d(M).astype(float)
    except (TypeError, ValueError) as err:
        raise TypeError(f"Expected {name:s} to be 2D array_like that can be converted to float!") from err
    if M.ndim > 2:
        raise ValueError(f"{name:s} is must be convertible into a 2D numpy.ndarray. But got {M.ndim:d}D array.")
    return M


def sanitize_vector(v, dim, name="vector"):
    """Sanitize a point/direction/translation vector and check its dimension

    Args:
        v (array_like): Vector to sanitize
        dim (int): Expected number of elements
        name (str, optional): Name used in error messages. Defaults to "vector".

    Raises:
        ValueError: When v can not be converted into a 1D array of float
        DimensionMismatchError: When v does not have dim elements

    Returns:
        numpy.ndarray: 1D vector
    """
    try:
        v = np.atleast_1d(np.squeeze(np.asarray(v, dtype=float)))
    except (TypeError, ValueError) as err:
        raise ValueError(f"Expected {name:s} to be convertible into a 1D numpy array of float!") from err
    if dim == 0 and v.size == 0:
        return np.zeros((0,))
    elif v.ndim != 1:
        raise ValueError(f"Expected {name:s} to be a single point, but got {np.array2string(v):s}")
    elif v.size != dim:
        raise DimensionMismatchError(f"{name:s} dim. ({v.size:d}) is different from set dim. ({dim:d})")
    return v
