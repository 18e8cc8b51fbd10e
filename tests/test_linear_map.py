# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: Test the LinearMap class and the operator overloads of LazySet

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
    linear_map,
)
from pylazyset.common import check_matrices_are_equal_ignoring_row_order


def test_construction_rules():
    X = Polytope(c=[0, 0], h=1)
    assert LinearMap(1, X) is X
    LM = LinearMap(3, X)
    assert LM.type_of_set == "LinearMap"
    assert np.array_equal(LM.M, 3 * np.eye(2))
    with pytest.raises(DimensionMismatchError):
        LinearMap(np.ones((2, 3)), X)
    nested = LinearMap(np.ones((3, 2)), LinearMap([[1, 2], [3, 4]], X))
    assert nested.X is X
    assert np.allclose(nested.M, np.ones((3, 2)) @ np.array([[1, 2], [3, 4]]))
    assert LinearMap(np.ones((4, 3)), ZeroSet(3)) == ZeroSet(4)
    E = EmptySet(2)
    assert LinearMap(np.eye(2), E) is E
    assert LinearMap(np.ones((5, 2)), E) == EmptySet(5)
    assert LM.is_operation_type


def test_support_and_membership():
    rng = np.random.default_rng(0)
    X = Polytope(V=[[0, 0], [1, 0], [0, 1]])
    M = np.array([[1, 2], [3, -1]])
    LM = LinearMap(M, X)
    concrete_LM = LM.concretize()
    for d in rng.normal(size=(5, 2)):
        assert np.isclose(LM.support_function(d), concrete_LM.support_function(d))
        assert np.isclose(d @ LM.support_vector(d), LM.support_function(d))
    for x in rng.uniform(-3, 3, size=(10, 2)):
        assert LM.contains(x) == concrete_LM.contains(x)
    assert LM.contains(M @ np.array([0.2, 0.2]))
    assert LM.an_element() in LM
    with pytest.raises(DimensionMismatchError):
        LM.contains([1, 2, 3])
    with pytest.raises(DimensionMismatchError):
        LM.support_function([1])


def test_support_vector_of_wrapped_universe_has_no_nan():
    sv = LinearMap([[1, 0], [0, 2]], Universe(2)).support_vector([1, 0])
    assert not np.isnan(sv).any()
    assert np.array_equal(sv, [np.inf, 0])
    sv = LinearMap([[1, 2], [0, 1]], Universe(2)).support_vector([1, 0])
    assert not np.isnan(sv).any()
    assert np.array_equal(sv, [np.inf, np.inf])
    assert np.array_equal(LinearMap([[1, 2], [0, 1]], Universe(2)).support_vector([0, 0]), [0, 0])


def test_membership_under_singular_matrix():
    X = Polytope(c=[0, 0], h=1)
    LM = LinearMap([[1, 1], [1, 1]], X)
    assert LM.contains([1.5, 1.5])
    assert not LM.contains([1, 0])
    with pytest.raises(MissingCapabilityError):
        LinearMap([[1, 1], [1, 1]], Universe(2)).contains([0, 0])


def test_properties():
    X = Polytope(c=[0, 0], h=1)
    LM = LinearMap(np.ones((3, 2)), X)
    assert LM.dim == 3
    assert not LM.is_empty
    assert LM.is_bounded
    flag, witness = LM.is_universal(witness=True)
    assert not flag
    assert witness not in LM
    LU = LinearMap([[1, 0], [0, 0]], Universe(2))
    assert not LU.is_bounded
    assert not LU.is_universal()
    flag, witness = LU.is_universal(witness=True)
    # The image is the first axis, so the witness is along the second axis
    assert not flag and np.allclose(np.abs(witness), [0, 1])
    assert LinearMap(np.zeros((2, 2)), Universe(2)).is_bounded
    assert LinearMap(np.ones((1, 2)), Universe(2)).is_universal()
    LX = LinearMap([[2, 1], [1, 1]], X)
    flag, witness = LX.is_universal(witness=True)
    assert not flag
    assert witness not in LX
    with pytest.raises(MissingCapabilityError):
        LinearMap(np.ones((1, 2)), X).is_universal()
    assert LinearMap(np.ones((2, 2)), Polytope(dim=2)).is_empty


def test_vertices_and_constraints_list():
    X = Polytope(V=[[0, 0], [1, 0], [0, 1], [1, 1]])
    M = np.array([[1, 1], [1, -1]])
    LM = LinearMap(M, X)
    assert check_matrices_are_equal_ignoring_row_order(LM.vertices_list(), X.V @ M.T)
    LM_flat = LinearMap([[1, 1], [1, 1]], X)
    assert check_matrices_are_equal_ignoring_row_order(LM_flat.vertices_list(), [[0, 0], [2, 2]])
    assert LM_flat.vertices_list(prune=False).shape == (4, 2)
    constraints = LM.constraints_list()
    assert all(c.contains([1, 0]) for c in constraints)
    assert not all(c.contains([3, 0]) for c in constraints)
    with pytest.raises(MissingCapabilityError):
        LinearMap(M, Universe(2)).vertices_list()
    with pytest.raises(MissingCapabilityError):
        LinearMap(M, Universe(2)).constraints_list()


def test_linear_map_and_free_function():
    X = Polytope(c=[0, 0], h=1)
    LM = LinearMap([[1, 2], [0, 1]], Universe(2))
    fused = LM.linear_map([[2, 0], [0, 2]])
    assert isinstance(fused, LinearMap)
    assert np.allclose(fused.M, [[2, 4], [0, 2]])
    assert linear_map(2, X).type_of_set == "Polytope"
    assert isinstance(linear_map(np.eye(2), Universe(2)), LinearMap)


def test_accessors_and_repr():
    X = Polytope(c=[0, 0], h=1)
    LM = LinearMap([[1, 2], [0, 1]], X)
    assert LM.set is X and LM.X is X
    assert np.array_equal(LM.matrix, [[1, 2], [0, 1]])
    assert np.array_equal(LM.vector, [0, 0])
    assert "LinearMap" in str(LM)
    assert "LinearMap(M=" in repr(LM)
    assert LM.copy().X is X


def test_operators():
    X = Polytope(c=[0, 0], h=1)
    M = np.array([[1, 2], [0, 1]])
    assert isinstance(M @ X, LinearMap)
    assert isinstance(X @ M, InverseLinearMap)
    assert 1 * X is X
    scaled = 2 * X
    assert isinstance(scaled, LinearMap)
    assert np.isclose(scaled.support_function([1, 0]), 2)
    with pytest.raises(TypeError):
        X * 2
    with pytest.raises(TypeError):
        "abc" * X
    # Inverse then forward map by the same matrix recovers the set
    round_trip = M @ (X @ M)
    assert isinstance(round_trip, LinearMap)
    assert np.isclose(round_trip.support_function([1, 1]), 2)


def test_norm_radius_diameter():
    X = Polytope(c=[0, 0], h=1)
    LM = LinearMap([[2, 0], [0, 1]], X)
    assert np.isclose(LM.norm(), 2)
    assert np.isclose(LM.radius(), 2)
    assert np.isclose(LM.diameter(), 4)
    lb, ub = LM.minimum_volume_circumscribing_rectangle()
    assert np.allclose(lb, [-2, -1]) and np.allclose(ub, [2, 1])
