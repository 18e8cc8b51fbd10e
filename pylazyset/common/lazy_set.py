# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Define the LazySet class, the interface implemented by every set representation

from abc import ABC, abstractmethod

import numpy as np

from pylazyset.common.constants import DEFAULT_NORM_TYPE
from pylazyset.common.exceptions import DimensionMismatchError, NotSupportedError


class LazySet(ABC):
    r"""Interface shared by all set representations in pylazyset.

    A lazy set is described by its dimension, its support function :math:`\rho_{\mathcal{S}}(d) = \sup_{x\in
    \mathcal{S}} d^\top x`, a support vector attaining the supremum, a membership test, and a witness element. Sets
    obtained by operations on other sets (e.g., :class:`pylazyset.LinearMap`) answer these queries by recursing into
    the sets they wrap, without computing an explicit (vertex or halfspace) representation.

    Notes:
        - The support function in the zero direction is 0 for every non-empty set, even an unbounded one.
        - For unbounded sets, the support function may be np.inf and the support vector may have infinite entries.
        - Subclasses are immutable once constructed.
        - Operator overloads: ``M @ S`` is the linear map :math:`\{Mx: x\in\mathcal{S}\}`, ``S @ M`` is the inverse
          linear map :math:`\{y: My\in\mathcal{S}\}`, and ``a * S`` is the scaling of :math:`\mathcal{S}` by a.
    """

    _type_of_set = "LazySet"
    is_operation_type = False
    is_convex_type = True

    # Allows for numpy matrix times LazySet
    __array_ufunc__ = None

    @property
    def type_of_set(self):
        """Return the type of set

        Returns:
            str: Type of the set
        """
        return self._type_of_set

    @property
    @abstractmethod
    def dim(self):
        """Ambient dimension of the set"""

    @property
    @abstractmethod
    def is_empty(self):
        """Check if the set is empty"""

    @property
    @abstractmethod
    def is_bounded(self):
        """Check if the set is bounded"""

    @abstractmethod
    def is_universal(self, witness=False):
        """Check if the set is the universal set. When witness is True, return a tuple (flag, point) where point is
        some vector not in the set when flag is False, and an empty vector otherwise."""

    @abstractmethod
    def support_function(self, d):
        """Evaluate the support function of the set along the direction d"""

    @abstractmethod
    def support_vector(self, d):
        """Compute a support vector of the set along the direction d"""

    @abstractmethod
    def contains(self, x):
        """Check if the point x belongs to the set"""

    @abstractmethod
    def an_element(self):
        """Return some element of the set"""

    def __contains__(self, x):
        return self.contains(x)

    def concretize(self):
        """Return a concrete representation of the set. Sets that are not an operation on other sets return
        themselves."""
        return self

    def support(self, eta):
        r"""Evaluates the support function and support vector of a set.

        The support function of a set :math:`\mathcal{P}` is defined as :math:`\rho_{\mathcal{P}}(\eta) =
        \max_{x\in\mathcal{P}} \eta^\top x`. The support vector of a set :math:`\mathcal{P}` is defined as
        :math:`\nu_{\mathcal{P}}(\eta) = \arg\max_{x\in\mathcal{P}} \eta^\top x`.

        Args:
            eta (array_like): Support directions. Matrix (N times self.dim), where each row is a support direction.

        Raises:
            ValueError: eta is not convertible into a 2D array
            DimensionMismatchError: Mismatch in eta dimension

        Returns:
            tuple: A tuple with two items:
                1. support_function_evaluations (numpy.ndarray): Support function evaluation(s) as a 1D numpy.ndarray.
                   Vector (N,) with as many rows as eta.
                2. support_vectors (numpy.ndarray): Support vectors as a 2D numpy.ndarray. Matrix N x self.dim with as
                   many rows as eta.
        """
        try:
            eta = np.atleast_2d(eta).astype(float)
        except (TypeError, ValueError) as err:
            raise ValueError("Expected eta to be convertible into a 2D numpy array of float!") from err
        if eta.ndim > 2:
            raise ValueError("Expected eta to be a 1D/2D numpy array")
        elif eta.shape[1] != self.dim:
            raise DimensionMismatchError(
                f"eta dim. ({eta.shape[1]:d}), no. of columns, is different from set dimension ({self.dim:d})"
            )
        support_function_list = []
        support_vector_list = []
        for single_eta in eta:
            support_function_list.append(self.support_function(single_eta))
            support_vector_list.append(self.support_vector(single_eta))
        return np.array(support_function_list, dtype=float), np.array(support_vector_list, dtype=float)

    def extreme(self, eta):
        """Wrapper for :meth:`support` to compute the extreme point.

        Args:
            eta (array_like): Support directions. Matrix (N times self.dim), where each row is a support direction.

        Returns:
            numpy.ndarray: Support vector evaluation(s) as a 2D numpy.ndarray. The array has as many rows as eta.
        """
        return self.support(eta)[1]

    def minimum_volume_circumscribing_rectangle(self):
        r"""Compute the minimum volume circumscribing rectangle for a set.

        Raises:
            ValueError: When set is empty

        Returns:
            tuple: A tuple of two elements
                - lb (numpy.ndarray): Lower bound :math:`l` on the set,
                  :math:`\mathcal{P}\subseteq\{l\}\oplus\mathbb{R}_{\geq 0}`.
                - ub (numpy.ndarray): Upper bound :math:`u` on the set,
                  :math:`\mathcal{P}\subseteq\{u\}\oplus(-\mathbb{R}_{\geq 0})`.

        Notes:
            This function computes the lower/upper bound by an element-wise support computation (2n support function
            evaluations), where n is attr:`self.dim`,

            .. math::
                \inf_{x\in\mathcal{P}} e_i^\top x=-\sup_{x\in\mathcal{P}} -e_i^\top x=-\rho_{\mathcal{P}}(-e_i),

            where :math:`e_i\in\mathbb{R}^n` denotes the standard coordinate vector. Entries may be infinite for
            unbounded sets.
        """
        if self.is_empty:
            raise ValueError("Can not compute circumscribing rectangle for an empty set!")
        identity_matrix = np.eye(self.dim)
        lb = -np.array([self.support_function(-e_i) for e_i in identity_matrix], dtype=float)
        ub = np.array([self.support_function(e_i) for e_i in identity_matrix], dtype=float)
        return lb, ub

    def _bounding_box_for_norm(self, p, task_str):
        if str(p).lower() != "inf":
            raise NotImplementedError(f"Only the infinity norm is supported for {task_str:s}. Got p: {p}!")
        lb, ub = self.minimum_volume_circumscribing_rectangle()
        if not np.isfinite(np.hstack((lb, ub))).all():
            raise NotSupportedError(f"An unbounded set does not have a {task_str:s}!")
        return lb, ub

    def norm(self, p=DEFAULT_NORM_TYPE):
        r"""Compute the norm of the set, :math:`\max_{x\in\mathcal{S}}\|x\|_p`.

        Args:
            p (str, optional): Norm type. Only "inf" is supported. Defaults to DEFAULT_NORM_TYPE.

        Raises:
            NotImplementedError: When p is not "inf"
            NotSupportedError: When the set is unbounded
            ValueError: When the set is empty

        Returns:
            float: Norm of the set
        """
        lb, ub = self._bounding_box_for_norm(p, "norm")
        if self.dim == 0:
            return 0.0
        return float(np.max(np.abs(np.hstack((lb, ub)))))

    def radius(self, p=DEFAULT_NORM_TYPE):
        """Compute the radius of the smallest p-norm ball centered at the center of the bounding box that encloses the
        set.

        Args:
            p (str, optional): Norm type. Only "inf" is supported. Defaults to DEFAULT_NORM_TYPE.

        Raises:
            NotImplementedError: When p is not "inf"
            NotSupportedError: When the set is unbounded
            ValueError: When the set is empty

        Returns:
            float: Radius of the set
        """
        lb, ub = self._bounding_box_for_norm(p, "radius")
        if self.dim == 0:
            return 0.0
        return float(np.max(ub - lb) / 2)

    def diameter(self, p=DEFAULT_NORM_TYPE):
        """Compute the diameter of the set, twice its :meth:`radius`."""
        lb, ub = self._bounding_box_for_norm(p, "diameter")
        if self.dim == 0:
            return 0.0
        return float(np.max(ub - lb))

    ####################
    # Binary operations
    ####################
    def __matmul__(self, M):
        """Overload @ operator for inverse linear map (set times matrix). S @ M is {y: My in S}."""
        from pylazyset.InverseLinearMap import InverseLinearMap

        return InverseLinearMap(M, self)

    def __rmatmul__(self, M):
        """Overload @ operator for linear map (matrix times set)."""
        from pylazyset.LinearMap import LinearMap

        return LinearMap(M, self)

    def __mul__(self, x):
        """Do not allow LazySet * anything"""
        return NotImplemented

    def __rmul__(self, m):
        """Overload * operator for scaling by a scalar."""
        if np.ndim(m) != 0:
            raise TypeError(f"Unsupported operation: {type(m)} * {type(self).__name__:s}!")
        from pylazyset.LinearMap import LinearMap

        try:
            m = float(m)
        except (TypeError, ValueError) as err:
            raise TypeError(f"Unsupported operation: {type(m)} * {type(self).__name__:s}!") from err
        return LinearMap(m, self)

    def __str__(self):
        return f"{self.type_of_set:s} in R^{self.dim:d}"
