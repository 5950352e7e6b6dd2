from __future__ import annotations

import math
import warnings
from typing import Optional, Tuple

import torch

from lmchol.exceptions import NonFiniteInputError, ShapeError, SingularMatrixError
from lmchol.linalg.triangular import back_substitution, forward_substitution


def default_pivot_rtol(k: int, dtype: torch.dtype) -> float:
    """Relative pivot threshold below which a diagonal step is treated as singular."""
    return 10.0 * k * torch.finfo(dtype).eps


def _check_square(A: torch.Tensor, name: str) -> None:
    if A.ndim != 3 or A.shape[-1] != A.shape[-2]:
        raise ShapeError(f"{name} must be (R,k,k). Got {tuple(A.shape)}")


def cholesky_lower(
    A: torch.Tensor,
    *,
    pivot_rtol: Optional[float] = None,
    check: bool = True,
    stacklevel: int = 2,
) -> torch.Tensor:
    """
    Batched Cholesky-Banachiewicz factorization A = L L^T.

    Rows are processed top to bottom, and within a row columns left to right,
    so every L[j,j] exists before any later entry divides by it.

    Parameters
    ----------
    A : (R,k,k) symmetric positive-definite
    pivot_rtol : a diagonal pivot d = A[i,i] - sum_{m<i} L[i,m]^2 is rejected
                 when d <= pivot_rtol * A[i,i]. Defaults to 10 * k * eps.
    stacklevel : passed to warnings.warn for the ill-conditioning warning.
    check : if False, skip pivot validation and return the raw factor
            (NaN entries possible for non-SPD input).

    Returns
    -------
    L : (R,k,k) lower triangular, zeros above the diagonal
    """
    _check_square(A, "A")
    if not A.is_floating_point():
        raise TypeError(f"A must be floating point. Got {A.dtype}")

    R, k, _ = A.shape
    if pivot_rtol is None:
        pivot_rtol = default_pivot_rtol(k, A.dtype)

    L = torch.zeros_like(A)
    min_ratio = math.inf

    for i in range(k):
        for j in range(i + 1):
            s = (L[:, i, :j] * L[:, j, :j]).sum(dim=-1)   # (R,)
            if i == j:
                d = A[:, i, i] - s
                if check:
                    ratio = _check_pivot(d, A[:, i, i], i, float(pivot_rtol))
                    min_ratio = min(min_ratio, ratio)
                L[:, i, i] = torch.sqrt(d)
            else:
                L[:, i, j] = (A[:, i, j] - s) / L[:, j, j]

    if check and min_ratio < math.sqrt(torch.finfo(A.dtype).eps):
        warnings.warn(
            f"Normal matrix is ill-conditioned (smallest relative pivot {min_ratio:.2e}). "
            "Coefficients may be inaccurate.",
            RuntimeWarning,
            stacklevel=stacklevel,
        )

    return L


def _check_pivot(d: torch.Tensor, a_ii: torch.Tensor, i: int, pivot_rtol: float) -> float:
    """Raise SingularMatrixError if any replication has a bad pivot; return the smallest d/a_ii."""
    bad = ~torch.isfinite(d) | (d <= 0) | (d <= pivot_rtol * a_ii.abs())
    if bool(bad.any()):
        reps = torch.nonzero(bad).flatten().tolist()
        shown = ", ".join(str(r) for r in reps[:10]) + (", ..." if len(reps) > 10 else "")
        raise SingularMatrixError(
            f"Singular or near-singular design matrix: normal matrix is not positive-definite "
            f"(pivot {i} failed in replication(s) {shown})."
        )
    return float((d / a_ii).min().item())


def reconstruct(L: torch.Tensor) -> torch.Tensor:
    """Return L L^T. L: (R,k,k)."""
    _check_square(L, "L")
    return L @ L.transpose(-1, -2)


def factor_and_solve(
    XtX: torch.Tensor,
    Xty: torch.Tensor,
    *,
    pivot_rtol: Optional[float] = None,
    stacklevel: int = 2,
) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Factor XtX = L L^T and solve L z = Xty, then L^T beta = z.

    Raises NonFiniteInputError if XtX or Xty is not finite (e.g. overflow while
    forming the normal equations) and SingularMatrixError if beta is not finite.

    XtX : (R,k,k)
    Xty : (R,k)
    returns (beta:(R,k), L:(R,k,k))
    """
    _check_square(XtX, "XtX")
    if Xty.ndim != 2 or Xty.shape != XtX.shape[:2]:
        raise ShapeError(f"Xty must be (R,k)={tuple(XtX.shape[:2])}. Got {tuple(Xty.shape)}")
    if not bool(torch.isfinite(XtX).all()) or not bool(torch.isfinite(Xty).all()):
        raise NonFiniteInputError(
            "Normal equations contain NaN or inf (non-finite input or overflow while forming XtX / Xty)."
        )

    L = cholesky_lower(XtX, pivot_rtol=pivot_rtol, stacklevel=stacklevel + 1)
    z = forward_substitution(L, Xty)
    beta = back_substitution(L, z)

    if not bool(torch.isfinite(beta).all()):
        raise SingularMatrixError(
            "Solution is not finite (overflow or near-singular normal matrix)."
        )
    return beta, L


def cholesky_solve(
    XtX: torch.Tensor,
    Xty: torch.Tensor,
    *,
    pivot_rtol: Optional[float] = None,
) -> torch.Tensor:
    """
    Solve XtX beta = Xty through L z = Xty, then L^T beta = z.

    XtX : (R,k,k)
    Xty : (R,k)
    returns beta : (R,k)
    """
    beta, _ = factor_and_solve(XtX, Xty, pivot_rtol=pivot_rtol, stacklevel=3)
    return beta
