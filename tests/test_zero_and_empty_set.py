# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: Test the ZeroSet and EmptySet classes

import numpy as np
import pytest

from pylazyset import DimensionMismatchError, EmptySet, LinearConstraint, Polytope, ZeroSet
from pylazyset.common import check_matrices_are_equal_ignoring_row_order


def test_zero_set_queries():
    Z = ZeroSet(3)
    assert Z.dim == 3
    assert not Z.is_empty
    assert Z.is_bounded
    assert not Z.is_universal()
    flag, witness = Z.is_universal(witness=True)
    assert not flag and witness not in Z
    assert ZeroSet(0).is_universal()
    assert Z.support_function([1, -2, 3]) == 0
    assert np.array_equal(Z.support_vector([1, -2, 3]), np.zeros((3,)))
    assert Z.contains([0, 0, 0])
    assert not Z.contains([0, 1e-3, 0])
    assert np.array_equal(Z.an_element(), np.zeros((3,)))
    with pytest.raises(DimensionMismatchError):
        Z.support_function([1, 2])
    with pytest.raises(DimensionMismatchError):
        Z.contains([0, 0])
    with pytest.raises(ValueError):
        ZeroSet(-2)


def test_zero_set_polyhedral_capabilities():
    Z = ZeroSet(2)
    assert np.array_equal(Z.vertices_list(), np.zeros((1, 2)))
    constraints = Z.constraints_list()
    assert len(constraints) == 4
    assert all(c.contains([0, 0]) for c in constraints)
    assert not all(c.contains([0.1, 0]) for c in constraints)
    P = Z.concretize()
    assert P.in_V_rep
    assert np.array_equal(P.V, np.zeros((1, 2)))
    P_shifted = Z.translate([1, 2])
    assert np.array_equal(P_shifted.V, [[1, 2]])


def test_zero_set_linear_map():
    Z = ZeroSet(2)
    assert Z.linear_map(np.ones((4, 2))) == ZeroSet(4)
    with pytest.raises(DimensionMismatchError):
        Z.linear_map(np.ones((2, 3)))
    assert Z == ZeroSet(2)
    assert Z != ZeroSet(3)
    assert Z.copy() == Z
    assert repr(Z) == "ZeroSet(dim=2)"


def test_empty_set_queries():
    E = EmptySet(2)
    assert E.dim == 2
    assert E.is_empty
    assert E.is_bounded
    assert not E.is_universal()
    flag, witness = E.is_universal(witness=True)
    assert not flag and witness not in E
    assert E.support_function([1, 0]) == -np.inf
    with pytest.raises(ValueError):
        E.support_vector([1, 0])
    with pytest.raises(DimensionMismatchError):
        E.support_vector([1, 0, 0])
    with pytest.raises(DimensionMismatchError):
        E.support_function([1])
    assert not E.contains([0, 0])
    with pytest.raises(DimensionMismatchError):
        E.contains([0, 0, 0])
    with pytest.raises(ValueError):
        E.an_element()
    with pytest.raises(ValueError):
        E.norm()


def test_empty_set_polyhedral_capabilities():
    E = EmptySet(3)
    assert E.vertices_list().shape == (0, 3)
    constraints = E.constraints_list()
    assert constraints == [LinearConstraint([1, 0, 0], -1), LinearConstraint([-1, 0, 0], -1)]
    # No point satisfies both constraints
    for x in np.random.default_rng(1).normal(size=(10, 3)):
        assert not all(c.contains(x) for c in constraints)
    assert EmptySet(0).constraints_list() == []
    P = E.concretize()
    assert P.is_empty and P.dim == 3
    assert E.translate([1, 2, 3]) is E
    with pytest.raises(DimensionMismatchError):
        E.translate([1, 2])


def test_empty_set_linear_map():
    E = EmptySet(2)
    assert E.linear_map(np.eye(2)) is E
    assert E.linear_map(np.ones((3, 2))) == EmptySet(3)
    with pytest.raises(DimensionMismatchError):
        E.linear_map(np.ones((3, 3)))
    assert repr(E) == "EmptySet(dim=2)"
    assert E.copy() == E


def test_linear_constraint():
    c = LinearConstraint([1, 1], 1)
    assert c.dim == 2
    assert c.contains([0.5, 0.5])
    assert [0, 0] in c
    assert not c.contains([1, 1])
    assert c == LinearConstraint(np.array([[1], [1]]), np.array([1.0]))
    assert c != LinearConstraint([1, 1], 2)
    with pytest.raises(DimensionMismatchError):
        c.contains([0, 0, 0])
    with pytest.raises(ValueError):
        LinearConstraint([[1, 2], [3, 4]], 1)
    assert "LinearConstraint" in repr(c)


def test_polytope_from_constraints_of_zero_set():
    constraints = ZeroSet(2).constraints_list()
    A = np.array([c.a for c in constraints])
    b = np.array([c.b for c in constraints])
    P = Polytope(A=A, b=b)
    assert check_matrices_are_equal_ignoring_row_order(P.V, np.zeros((1, 2)))
