# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose: Check if data members and methods in pylazyset are consistent across the lazy set classes

import itertools as itert

import numpy as np

from pylazyset import EmptySet, InverseLinearMap, LinearMap, Polytope, Universe, ZeroSet
from pylazyset.common.lazy_set import LazySet

CLASS_DICT = {
    "universe": Universe,
    "zero_set": ZeroSet,
    "empty_set": EmptySet,
    "polytope": Polytope,
    "linear_map": LinearMap,
    "inverse_linear_map": InverseLinearMap,
}
REQUIRED_INTERFACE = set(LazySet.__abstractmethods__)
OPTIONAL_CAPABILITIES = [
    "vertices_list",
    "constraints_list",
    "linear_map",
    "inverse_linear_map",
    "translate",
    "concretize",
]
# The wrappers share their accessors with each other and with nothing else
DATA_MEMBERS_CLASS_SPECIFIC = {
    "universe": set(),
    "zero_set": set(),
    "empty_set": set(),
    "polytope": set(
        [
            "A",
            "b",
            "H",
            "Ae",
            "be",
            "V",
            "in_H_rep",
            "in_V_rep",
            "n_vertices",
            "n_halfspaces",
            "n_equalities",
            "is_full_dimensional",
            "cvxpy_args_lp",
        ]
    ),
    "linear_map": set(["M", "X", "matrix", "vector", "set"]),
    "inverse_linear_map": set(["M", "X", "matrix", "vector", "set"]),
}
METHODS_CLASS_SPECIFIC = {
    "universe": set(["constraints", "constrained_dimensions"]),
    "zero_set": set(),
    "empty_set": set(),
    "polytope": set(
        [
            "chebyshev_centering",
            "containment_constraints",
            "minimize",
            "determine_V_rep",  # Polytope-specific V-Rep <> H-Rep
            "determine_H_rep",  # Polytope-specific V-Rep <> H-Rep
            "minimize_V_rep",  # Polytope-specific V-Rep <> H-Rep
            "minimize_H_rep",  # Polytope-specific V-Rep <> H-Rep
        ]
    ),
    "linear_map": set(),
    "inverse_linear_map": set(),
}

data_members = {}
methods = {}
for class_name in CLASS_DICT:
    class_obj = CLASS_DICT[class_name]
    missing_interface = [v for v in REQUIRED_INTERFACE if v in getattr(class_obj, "__abstractmethods__", set())]
    if missing_interface:
        raise ValueError(f"{class_obj.__name__} does not implement {sorted(missing_interface)}")
    methods[class_name] = set([v for v in dir(class_obj) if callable(getattr(class_obj, v))])
    methods[class_name] -= METHODS_CLASS_SPECIFIC[class_name]
    data_members[class_name] = set([v for v in dir(class_obj) if not callable(getattr(class_obj, v))])
    data_members[class_name] -= DATA_MEMBERS_CLASS_SPECIFIC[class_name]

# Optional capabilities are reported separately, so drop them from the pairwise comparison
OPTIONAL_CAPABILITIES_PER_CLASS = {
    class_name: sorted(set(OPTIONAL_CAPABILITIES) & methods[class_name]) for class_name in CLASS_DICT
}
for class_name in CLASS_DICT:
    methods[class_name] -= set(OPTIONAL_CAPABILITIES)

METHODS_TO_DEFINE = {key: [] for key in CLASS_DICT.keys()}
DATA_MEMBERS_TO_DEFINE = {key: [] for key in CLASS_DICT.keys()}
for name_1, name_2 in itert.permutations(CLASS_DICT.keys(), 2):
    METHODS_TO_DEFINE[name_2].extend(methods[name_1] - methods[name_2])
    DATA_MEMBERS_TO_DEFINE[name_2].extend(data_members[name_1] - data_members[name_2])

for key in CLASS_DICT.keys():
    print("Class :", key)
    print("Optional capabilities:", OPTIONAL_CAPABILITIES_PER_CLASS[key])
    print("Data member:", np.unique(DATA_MEMBERS_TO_DEFINE[key]))
    print("Method:", np.unique(METHODS_TO_DEFINE[key]), "\n")
