# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

# Code purpose: Test the Polytope class, the concrete set used by the lazy operations

import numpy as np
import pytest

from pylazyset import DimensionMismatchError, LinearConstraint, NotInvertibleError, Polytope
from pylazyset.common import check_matrices_are_equal_ignoring_row_order


def test_init_V_rep():
    V = [[-1, 0], [1, 0], [0, 1], [0, 0.5]]
    P = Polytope(V=V)
    assert P.dim == 2
    assert P.in_V_rep and not P.in_H_rep
    assert not P.is_empty
    assert P.is_bounded
    assert P.is_full_dimensional
    assert P.type_of_set == "Polytope"
    assert "V-Rep" in str(P)
    assert "vertices" in repr(P)
    with pytest.raises(ValueError):
        Polytope(V=[1, 2, 3])
    with pytest.raises(ValueError):
        Polytope(V=[[1, 2]], dim=2)
    with pytest.raises(ValueError):
        Polytope(A=[[1, 0]], b=[1], V=[[1, 2]])


def test_init_H_rep():
    P = Polytope(A=[[1, 0], [0, 1], [-1, -1]], b=[1, 1, 0])
    assert P.in_H_rep and not P.in_V_rep
    assert not P.is_empty
    assert P.is_full_dimensional
    assert check_matrices_are_equal_ignoring_row_order(P.V, [[1, -1], [-1, 1], [1, 1]])
    assert P.in_V_rep and P.in_H_rep
    assert P.n_vertices == 3
    assert P.n_halfspaces == 3
    assert P.n_equalities == 0
    assert P.H.shape == (3, 3)
    with pytest.raises(ValueError):
        Polytope(A=[[1, 0], [0, 1]], b=[1, 1, 1])
    with pytest.raises(ValueError):
        # Unbounded in every direction
        Polytope(A=[[1, 0]], b=[1])
    with pytest.warns(UserWarning):
        Polytope(A=[[1, 0], [0, 1], [-1, -1], [0, 0]], b=[1, 1, 0, 1])


def test_init_bounds_and_empty():
    P = Polytope(lb=[-1, -2], ub=[1, 2])
    assert P.is_full_dimensional
    assert check_matrices_are_equal_ignoring_row_order(P.V, [[-1, -2], [-1, 2], [1, -2], [1, 2]])
    B = Polytope(c=[0, 0, 0], h=1)
    assert B.dim == 3
    assert B.n_vertices == 8
    P_point = Polytope(lb=[1, 1], ub=[1, 1])
    assert P_point.in_V_rep and P_point.n_vertices == 1
    P_flat = Polytope(lb=[0, 1], ub=[2, 1])
    assert not P_flat.is_full_dimensional
    assert P_flat.n_equalities == 1
    P_empty_bounds = Polytope(lb=[1, 1], ub=[0, 0])
    assert P_empty_bounds.is_empty
    assert Polytope(dim=3).is_empty
    assert Polytope().dim == 0
    P_infeasible = Polytope(A=[[1, 0], [-1, 0], [0, 1], [0, -1]], b=[-1, -1, 1, 1])
    assert P_infeasible.is_empty
    assert "empty" in str(P_infeasible)


def test_support_function_and_vector():
    for P in [Polytope(c=[0, 0], h=1), Polytope(V=[[-1, -1], [-1, 1], [1, -1], [1, 1]])]:
        assert np.isclose(P.support_function([1, 1]), 2)
        assert np.isclose(P.support_function([0, -3]), 3)
        assert np.isclose(P.support_function([0, 0]), 0)
        assert np.allclose(P.support_vector([1, 1]), [1, 1], atol=1e-4)
        assert np.allclose(P.support_vector([-1, -2]), [-1, -1], atol=1e-4)
        support_function_evaluations, support_vectors = P.support(np.eye(2))
        assert np.allclose(support_function_evaluations, [1, 1])
        assert support_vectors.shape == (2, 2)
        assert np.allclose(P.extreme([[-1, 0]])[0, 0], -1, atol=1e-4)
        with pytest.raises(DimensionMismatchError):
            P.support_function([1, 0, 0])
    P_empty = Polytope(dim=2)
    assert P_empty.support_function([1, 0]) == -np.inf
    with pytest.raises(ValueError):
        P_empty.support_vector([1, 0])


def test_contains():
    PV = Polytope(V=[[-1, 0], [1, 0], [0, 1]])
    PH = Polytope(A=[[-1, 0], [0, -1], [1, 1]], b=[0, 0, 1])
    for P, inside, outside in [(PV, [0, 0.5], [0, 1.5]), (PH, [0.2, 0.2], [1, 1])]:
        assert P.contains(inside)
        assert inside in P
        assert not P.contains(outside)
        containment = P.contains([inside, outside, inside])
        assert np.array_equal(containment, [True, False, True])
        with pytest.raises(DimensionMismatchError):
            P.contains([0, 0, 0])
    P_flat = Polytope(lb=[0, 1], ub=[2, 1])
    assert P_flat.contains([1, 1])
    assert not P_flat.contains([1, 1.1])
    assert not Polytope(dim=2).contains([0, 0])
    with pytest.raises(DimensionMismatchError):
        Polytope(dim=2).contains([0, 0, 0])


def test_an_element_and_is_universal():
    for P in [Polytope(c=[1, 1], h=0.5), Polytope(V=[[0, 0], [1, 0], [0, 1]])]:
        assert P.an_element() in P
        assert not P.is_universal()
        flag, witness = P.is_universal(witness=True)
        assert not flag
        assert witness not in P
    with pytest.raises(ValueError):
        Polytope(dim=2).an_element()
    flag, witness = Polytope(dim=2).is_universal(witness=True)
    assert not flag and witness.shape == (2,)


def test_vertices_list():
    P = Polytope(V=[[-1, 0], [1, 0], [0, 1], [0, 0.5], [0, 0]])
    assert check_matrices_are_equal_ignoring_row_order(P.vertices_list(), [[-1, 0], [1, 0], [0, 1]])
    assert P.vertices_list(prune=False).shape == (5, 2)
    P_segment = Polytope(V=[[0, 0, 0], [1, 1, 1], [0.5, 0.5, 0.5]])
    assert check_matrices_are_equal_ignoring_row_order(P_segment.vertices_list(), [[0, 0, 0], [1, 1, 1]])
    assert Polytope(dim=3).vertices_list().shape == (0, 3)


def test_constraints_list():
    P = Polytope(lb=[0, 1], ub=[2, 1])
    constraints = P.constraints_list()
    assert all(isinstance(c, LinearConstraint) for c in constraints)
    # 2 inequalities + 1 equality as two inequalities
    assert len(constraints) == 4
    assert all(c.contains([1, 1]) for c in constraints)
    assert not all(c.contains([1, 1.5]) for c in constraints)
    PV = Polytope(V=[[0, 0], [1, 0], [0, 1]])
    constraints = PV.constraints_list()
    assert len(constraints) == 3
    assert all(c.contains([0.2, 0.2]) for c in constraints)
    assert not all(c.contains([1, 1]) for c in constraints)
    empty_constraints = Polytope(dim=2).constraints_list()
    assert not all(c.contains([0, 0]) for c in empty_constraints)


def test_linear_map():
    P = Polytope(V=[[0, 0], [1, 0], [0, 1]])
    M = [[2, 0], [0, 3], [1, 1]]
    Q = P.linear_map(M)
    assert Q.dim == 3
    assert check_matrices_are_equal_ignoring_row_order(Q.V, [[0, 0, 0], [2, 0, 1], [0, 3, 1]])
    PH = Polytope(c=[0, 0], h=1)
    assert np.isclose(PH.linear_map(2).support_function([1, 0]), 2)
    assert np.isclose(PH.linear_map(-2).support_function([1, 1]), 4)
    assert PH.linear_map(0).n_vertices == 1
    with pytest.raises(DimensionMismatchError):
        P.linear_map(np.eye(3))
    assert Polytope(dim=2).linear_map(np.ones((4, 2))).dim == 4


def test_inverse_linear_map():
    M = np.array([[1, 2], [0, 1]])
    for P in [Polytope(c=[0, 0], h=1), Polytope(V=[[-1, -1], [-1, 1], [1, -1], [1, 1]])]:
        Q = P.inverse_linear_map(M)
        for y in np.random.default_rng(2).uniform(-2, 2, size=(20, 2)):
            if np.max(np.abs(M @ y)) < 1 - 1e-3 or np.max(np.abs(M @ y)) > 1 + 1e-3:
                assert Q.contains(y) == P.contains(M @ y)
        with pytest.raises(NotInvertibleError):
            P.inverse_linear_map([[1, 0], [0, 0]])
        with pytest.raises(DimensionMismatchError):
            P.inverse_linear_map(np.eye(3))
    assert Polytope(dim=2).inverse_linear_map(M).is_empty
    P_flat = Polytope(lb=[0, 1], ub=[2, 1])
    Q_flat = P_flat.inverse_linear_map(M)
    assert Q_flat.n_equalities == 1
    assert Q_flat.contains(np.linalg.solve(M, [1, 1]))


def test_translate():
    PV = Polytope(V=[[-1, 0], [1, 0], [0, 1]])
    PH = Polytope(A=[[-1, 0], [0, -1], [1, 1]], b=[0, 0, 1])
    for P in [PV, PH]:
        Q = P.translate([1, 2])
        assert check_matrices_are_equal_ignoring_row_order(Q.V, P.V + np.array([1, 2]))
        with pytest.raises(DimensionMismatchError):
            P.translate([1, 2, 3])
        with pytest.raises(ValueError):
            P.translate([[1, 2], [3, 4]])
    assert Polytope(dim=2).translate([1, 1]).is_empty


def test_vertex_halfspace_enumeration():
    P = Polytope(V=[[-1, 0], [1, 0], [0, 1], [0, 0.5]])
    P.minimize_V_rep()
    assert P.n_vertices == 3
    P.determine_H_rep()
    assert P.in_H_rep
    assert P.n_halfspaces == 3
    Q = Polytope(A=[[1, 0], [0, 1], [-1, -1], [1, 1]], b=[1, 1, 0, 5])
    Q.minimize_H_rep()
    assert Q.n_halfspaces == 3
    Q_copy = Q.copy()
    assert Q_copy is not Q
    assert check_matrices_are_equal_ignoring_row_order(Q_copy.V, Q.V)
    P_segment = Polytope(V=[[0, 0], [1, 1]])
    assert not P_segment.is_full_dimensional
    assert P_segment.n_equalities == 1


def test_chebyshev_centering_and_norms():
    P = Polytope(c=[1, 1], h=0.5)
    center, radius = P.chebyshev_centering()
    assert np.allclose(center, [1, 1], atol=1e-4)
    assert np.isclose(radius, 0.5, atol=1e-4)
    assert np.isclose(P.norm(), 1.5, atol=1e-4)
    assert np.isclose(P.radius(), 0.5, atol=1e-4)
    assert np.isclose(P.diameter(), 1, atol=1e-4)
    with pytest.raises(NotImplementedError):
        P.norm(p=2)
    lb, ub = Polytope(V=[[0, 0], [1, 2]]).minimum_volume_circumscribing_rectangle()
    assert np.allclose(lb, [0, 0]) and np.allclose(ub, [1, 2])
    with pytest.raises(ValueError):
        Polytope(dim=2).minimum_volume_circumscribing_rectangle()
