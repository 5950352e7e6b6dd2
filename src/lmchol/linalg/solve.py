from __future__ import annotations

from typing import Optional, Tuple

import torch

from lmchol.exceptions import ShapeError, SingularMatrixError
from lmchol.linalg.chol import factor_and_solve
from lmchol.linalg.normal import normal_equations


def solve_ls(
    X: torch.Tensor,
    y: torch.Tensor,
    *,
    pivot_rtol: Optional[float] = None,
    stacklevel: int = 2,
) -> Tuple[torch.Tensor, torch.Tensor, torch.Tensor, torch.Tensor]:
    """
    Solve least squares for each replication via the normal equations.

    X : (R,n,k)
    y : (R,n)
    returns (beta:(R,k), XtX:(R,k,k), Xty:(R,k), L:(R,k,k))

    stacklevel is forwarded to warnings.warn for the ill-conditioning warning.
    """
    if X.ndim != 3:
        raise ShapeError(f"X must be (R,n,k). Got {tuple(X.shape)}")
    if y.ndim != 2:
        raise ShapeError(f"y must be (R,n). Got {tuple(y.shape)}")
    if X.shape[0] != y.shape[0] or X.shape[1] != y.shape[1]:
        raise ShapeError(f"Batch/obs dims mismatch: X {tuple(X.shape)}, y {tuple(y.shape)}")

    _, n, k = X.shape
    if n < k:
        raise SingularMatrixError(
            f"Singular design matrix: n={n} observations cannot identify k={k} coefficients."
        )

    XtX, Xty = normal_equations(X, y)
    beta, L = factor_and_solve(XtX, Xty, pivot_rtol=pivot_rtol, stacklevel=stacklevel + 1)
    return beta, XtX, Xty, L
