# src/lmchol/models/ols.py
from __future__ import annotations

from typing import Any, Optional, Union

import numpy as np
import torch

from lmchol.linalg.solve import solve_ls
from lmchol.results import OLSFit
from lmchol.typing import as_batched_xy


def OLS(
    X,
    y,
    *,
    pivot_rtol: Optional[float] = None,
    store_factor: bool = True,
    dtype: Optional[torch.dtype] = None,
    device: Optional[Union[str, torch.device]] = None,
) -> OLSFit:
    """Batched OLS via the normal equations and a from-scratch Cholesky factorization.

    Inputs
    - X: (R,n,k) or (n,k) or pandas.DataFrame (single sample)
    - y: (R,n) or (n,) or pandas.Series / 1-col DataFrame (single sample)

    Raises
    - ShapeError          : inconsistent or empty dimensions
    - NonFiniteInputError : NaN/inf in X or y, or overflow in XtX / Xty
    - SingularMatrixError : XtX not positive-definite (collinear columns, n < k),
                            or a non-finite solution
    """
    X, y, param_names = as_batched_xy(X, y, dtype=dtype, device=device)

    beta, XtX, Xty, L = solve_ls(X, y, pivot_rtol=pivot_rtol, stacklevel=3)

    return OLSFit(
        params=beta,
        XtX=XtX,
        Xty=Xty,
        _nobs=int(X.shape[1]),
        chol=L if store_factor else None,
        param_names=param_names,
    )


def solve(
    X: Any,
    y: Any,
    *,
    dtype: Optional[torch.dtype] = None,
    device: Optional[Union[str, torch.device]] = None,
) -> torch.Tensor:
    """Least-squares coefficients beta = argmin ||X beta - y||^2.

    Returns (k,) for a single sample X:(n,k), y:(n,), and (R,k) for batched input.
    """
    single = _ndim(X) == 2

    Xb, yb, _ = as_batched_xy(X, y, dtype=dtype, device=device)
    beta, _, _, _ = solve_ls(Xb, yb, stacklevel=3)
    return beta[0] if single else beta


def _ndim(x: Any) -> int:
    # tensors, ndarrays and pandas objects carry ndim; nested lists do not
    nd = getattr(x, "ndim", None)
    return int(nd) if nd is not None else int(np.ndim(x))
