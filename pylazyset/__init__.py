# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
# Copyright (c) 2019 Tor Aksel N. Heirung
#
# SPDX-License-Identifier: AGPL-3.0-or-later
# SPDX-License-Identifier: MIT

# Code purpose:  __init__ script for pylazyset package

from .common import (
    concretize,
    convex_hull,
    is_empty_set,
    is_inverse_linear_map,
    is_invertible,
    is_lazy_set,
    is_linear_map,
    is_polytope,
    is_universe,
    is_zero_set,
    linear_map,
)
from .common.exceptions import (
    DimensionMismatchError,
    MissingCapabilityError,
    NotInvertibleError,
    NotSupportedError,
    PyLazySetError,
)
from .common.lazy_set import LazySet
from .common.linear_constraint import LinearConstraint
from .Universe import Universe
from .ZeroSet import ZeroSet
from .EmptySet import EmptySet
from .Polytope import Polytope
from .LinearMap import LinearMap
from .InverseLinearMap import InverseLinearMap
