# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the errors raised by the lazy set classes


class PyLazySetError(Exception):
    """Base class for errors raised by pylazyset"""


class DimensionMismatchError(PyLazySetError, ValueError):
    """An operand (point, direction, translation vector, or matrix) does not match the dimension of the set."""


class NotInvertibleError(PyLazySetError, ValueError):
    """A matrix that must be invertible failed the invertibility check."""


class NotSupportedError(PyLazySetError, ValueError):
    """The query has no finite answer for this set, e.g., the norm of an unbounded set."""


class MissingCapabilityError(PyLazySetError, NotImplementedError):
    """The wrapped set does not expose a capability (vertex or constraint list) required by the operation."""
