# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

from setuptools import setup

with open("README.md", "r") as fh:
    long_description = fh.read()

# numpy>=1.14 for rcond=None correct defaults from https://stackoverflow.com/a/44678023
# scipy>=1.3.0 for qhull-based scipy.spatial.ConvexHull with the vertices attribute
# pycddlib>=3.0.0 for the functional API (matrix_from_array, polyhedron_from_matrix, copy_generators)
# cvxpy>=1.5.3 for CLARABEL as the default LP solver
INSTALL_REQUIRES = [
    "numpy>=1.14",
    "scipy>=1.3.0",
    "pycddlib>=3.0.0",
    "cvxpy>=1.5.3",
]
TESTS_REQUIRES = ["pytest", "coverage"]

setup(
    name="pylazyset",
    version="0.1.0",
    description="A Python package for lazy representations of convex sets and their (inverse) linear maps.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="AGPL-3.0-or-later",
    packages=[
        "pylazyset",
        "pylazyset.common",
        "pylazyset.Universe",
        "pylazyset.ZeroSet",
        "pylazyset.EmptySet",
        "pylazyset.Polytope",
        "pylazyset.LinearMap",
        "pylazyset.InverseLinearMap",
    ],
    install_requires=INSTALL_REQUIRES,
    extras_require={
        "with_tests": TESTS_REQUIRES,
    },
    python_requires=">=3.9",
    zip_safe=False,
)
