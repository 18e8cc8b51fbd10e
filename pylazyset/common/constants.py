# Copyright (C) 2020-2025 Mitsubishi Electric Research Laboratories (MERL)
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# Code purpose:  Specify the constants to be used for numerical tolerances, invertibility checks, and cvxpy problems

PYLAZYSET_ZERO = 1e-6  # Zero threshold for numerical stability

# A square matrix M is deemed invertible when cond(M) < DEFAULT_COND_TOL
DEFAULT_COND_TOL = 1e6

# Solvers used by default
DEFAULT_LP_SOLVER_STR = "CLARABEL"  # CLARABEL, MOSEK, CVXOPT, SCS, ECOS, GUROBI, OSQP

# CVXPY args used by default
DEFAULT_CVXPY_ARGS_LP = {"solver": DEFAULT_LP_SOLVER_STR}

# Norm used by norm, radius, and diameter when none is specified
DEFAULT_NORM_TYPE = "inf"
