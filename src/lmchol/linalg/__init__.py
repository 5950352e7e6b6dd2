"""
lmchol.linalg

Dense normal-equations / Cholesky kernels, batched over replications.

Conventions
-----------
- Replication axis: R
- Observation axis: n
- Parameter axis: k

Shapes
------
- X: (R, n, k)
- y: (R, n)
- XtX, L: (R, k, k)
- Xty, z, beta: (R, k)
"""
from .normal import cross, gram, normal_equations
from .chol import cholesky_lower, cholesky_solve, default_pivot_rtol, factor_and_solve, reconstruct
from .triangular import back_substitution, forward_substitution
from .solve import solve_ls

__all__ = [
    "gram",
    "cross",
    "normal_equations",
    "cholesky_lower",
    "cholesky_solve",
    "factor_and_solve",
    "default_pivot_rtol",
    "reconstruct",
    "forward_substitution",
    "back_substitution",
    "solve_ls",
]
