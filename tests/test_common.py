# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: Test methods common to all sets

import cvxpy as cp
import numpy as np
import pytest

from pylazyset import (
    DimensionMismatchError,
    EmptySet,
    InverseLinearMap,
    LinearMap,
    MissingCapabilityError,
    Polytope,
    Universe,
    ZeroSet,
    concretize,
    is_empty_set,
    is_inverse_linear_map,
    is_lazy_set,
    is_linear_map,
    is_polytope,
    is_universe,
    is_zero_set,
)
from pylazyset.common import (
    check_matrices_are_equal_ignoring_row_order,
    convex_hull,
    has_constraints_list,
    has_vertices_list,
    is_invertible,
    is_scalar,
    map_support_vector,
    require_capability,
    sanitize_matrix,
    sanitize_vector,
)
from pylazyset.common.constants import DEFAULT_CVXPY_ARGS_LP
from pylazyset.common.hull import affine_dimension


def test_check_matrices_are_equal_ignoring_row_order():
    assert check_matrices_are_equal_ignoring_row_order([[1, 2], [3, 4]], [[3, 4], [1, 2]])
    assert not check_matrices_are_equal_ignoring_row_order([[1, 2], [3, 4]], [[3, 4], [1, 3]])
    assert not check_matrices_are_equal_ignoring_row_order([[1, 2]], [[1, 2], [1, 2]])


def test_convex_hull():
    # Full-dimensional point cloud with interior points
    square = np.array([[0, 0], [1, 0], [0, 1], [1, 1]])
    points = np.vstack((square, [[0.5, 0.5], [0.2, 0.7]]))
    assert check_matrices_are_equal_ignoring_row_order(convex_hull(points), square)
    # 1-dimensional points
    assert check_matrices_are_equal_ignoring_row_order(convex_hull([[3], [1], [2]]), [[1], [3]])
    assert convex_hull([[1], [1]]).shape == (1, 1)
    # Lower-dimensional point cloud in 3D
    segment = [[0, 0, 0], [2, 2, 2], [1, 1, 1], [0.5, 0.5, 0.5]]
    assert check_matrices_are_equal_ignoring_row_order(convex_hull(segment), [[0, 0, 0], [2, 2, 2]])
    # Repeated points
    assert convex_hull([[1, 2], [1, 2], [1, 2]]).shape == (1, 2)
    # Trivial inputs
    assert convex_hull([[1, 2]]).shape == (1, 2)
    assert convex_hull(np.empty((0, 2))).shape == (0, 2)
    with pytest.raises(ValueError):
        convex_hull([["a", "b"]])


def test_affine_dimension():
    assert affine_dimension(np.empty((0, 3))) == -1
    assert affine_dimension(np.array([[1, 2, 3]])) == 0
    assert affine_dimension(np.array([[0, 0, 0], [1, 1, 1], [2, 2, 2]])) == 1
    assert affine_dimension(np.array([[0, 0], [1, 0], [0, 1]])) == 2


def test_is_invertible():
    assert is_invertible(np.eye(3))
    assert is_invertible([[1, 2], [0, 1]])
    assert is_invertible(2)
    assert not is_invertible([[1, 0], [0, 0]])
    assert not is_invertible([[1, 1], [1, 1 + 1e-12]])
    assert not is_invertible(np.ones((2, 3)))
    assert not is_invertible([[np.inf, 0], [0, 1]])
    assert is_invertible(np.empty((0, 0)))
    # Tolerance on the condition number
    assert is_invertible([[1, 0], [0, 1e-3]])
    assert not is_invertible([[1, 0], [0, 1e-3]], cond_tol=100)


def test_map_support_vector():
    M = np.array([[1, 1], [1, -1]])
    assert np.array_equal(map_support_vector(np.array([1, 2]), lambda v: M @ v), [3, -1])
    # Infinite coordinates cancel in the second row of M and keep the finite part there
    assert np.array_equal(map_support_vector(np.array([np.inf, np.inf]), lambda v: M @ v), [np.inf, 0])
    assert np.array_equal(map_support_vector(np.array([np.inf, 3]), lambda v: M @ v), [np.inf, np.inf])
    assert np.array_equal(map_support_vector(np.array([-np.inf, 3]), lambda v: M @ v), [-np.inf, -np.inf])


def test_sanitize_vector_and_matrix():
    assert np.array_equal(sanitize_vector([[1], [2]], 2), [1, 2])
    assert np.array_equal(sanitize_vector(5, 1), [5])
    assert sanitize_vector([], 0).shape == (0,)
    with pytest.raises(DimensionMismatchError):
        sanitize_vector([1, 2, 3], 2)
    with pytest.raises(ValueError):
        sanitize_vector([[1, 2], [3, 4]], 2)
    with pytest.raises(ValueError):
        sanitize_vector("abc", 1)
    assert sanitize_matrix(2).shape == (1, 1)
    assert sanitize_matrix([1, 2]).shape == (1, 2)
    with pytest.raises(TypeError):
        sanitize_matrix("abc")
    with pytest.raises(ValueError):
        sanitize_matrix(np.ones((2, 2, 2)))
    assert is_scalar(2) and is_scalar(np.float64(2)) and is_scalar(np.array(2))
    assert not is_scalar([2]) and not is_scalar("a")


def test_type_checks():
    X = Polytope(c=[0, 0], h=1)
    sets = [X, Universe(2), ZeroSet(2), EmptySet(2), LinearMap(2, X), InverseLinearMap(2, X)]
    checks = [is_polytope, is_universe, is_zero_set, is_empty_set, is_linear_map, is_inverse_linear_map]
    for index, S in enumerate(sets):
        assert is_lazy_set(S)
        assert [check(S) for check in checks] == [i == index for i in range(len(checks))]
    assert not is_lazy_set(np.eye(2))
    assert not is_polytope(np.eye(2))
    assert has_vertices_list(X) and has_constraints_list(X)
    assert not has_vertices_list(Universe(2)) and has_constraints_list(Universe(2))


def test_require_capability_and_concretize():
    X = Polytope(c=[0, 0], h=1)
    require_capability(X, "vertices_list", "enumerate vertices")
    with pytest.raises(MissingCapabilityError):
        require_capability(Universe(2), "vertices_list", "enumerate vertices")
    # MissingCapabilityError is a NotImplementedError
    with pytest.raises(NotImplementedError):
        require_capability(Universe(2), "vertices_list", "enumerate vertices")
    assert concretize(X) is X
    assert concretize(Universe(2)) == Universe(2)
    assert concretize(ZeroSet(2)).type_of_set == "Polytope"


def test_minimize_with_containment_constraints():
    P = Polytope(c=[1, 1], h=1)
    x = cp.Variable((2,))
    solution, value, status = P.minimize(x, cp.sum(x), DEFAULT_CVXPY_ARGS_LP, task_str="minimize sum")
    assert status == cp.OPTIMAL
    assert np.isclose(value, 0, atol=1e-6)
    assert np.allclose(solution, [0, 0], atol=1e-6)
    solution, value, status = Polytope(dim=2).minimize(x, cp.sum(x), DEFAULT_CVXPY_ARGS_LP)
    assert value == np.inf
    assert np.all(np.isnan(solution))
    with pytest.raises(ValueError):
        Polytope(dim=2).containment_constraints(x)
