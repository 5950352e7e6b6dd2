from __future__ import annotations

from typing import Tuple

import torch

from lmchol.exceptions import ShapeError


def _check_xy(X: torch.Tensor, y: torch.Tensor) -> None:
    if X.ndim != 3:
        raise ShapeError(f"X must be (R,n,k). Got {tuple(X.shape)}")
    if y.ndim != 2:
        raise ShapeError(f"y must be (R,n). Got {tuple(y.shape)}")
    if X.shape[0] != y.shape[0] or X.shape[1] != y.shape[1]:
        raise ShapeError(f"Batch/obs dims mismatch: X {tuple(X.shape)}, y {tuple(y.shape)}")


def gram(X: torch.Tensor) -> torch.Tensor:
    """
    XtX[r,i,j] = sum_m X[r,m,i] * X[r,m,j]

    The observation axis is accumulated in index order (m = 0, ..., n-1) for
    every cell, so cells (i,j) and (j,i) see identical products in identical
    order and the result is exactly symmetric.

    X : (R,n,k)
    returns (R,k,k)
    """
    if X.ndim != 3:
        raise ShapeError(f"X must be (R,n,k). Got {tuple(X.shape)}")

    R, n, k = X.shape
    XtX = torch.zeros((R, k, k), device=X.device, dtype=X.dtype)
    for m in range(n):
        row = X[:, m, :]                                   # (R,k)
        XtX += row.unsqueeze(-1) * row.unsqueeze(-2)       # outer product
    return XtX


def cross(X: torch.Tensor, y: torch.Tensor) -> torch.Tensor:
    """
    Xty[r,i] = sum_m X[r,m,i] * y[r,m], accumulated in observation order.

    X : (R,n,k)
    y : (R,n)
    returns (R,k)
    """
    _check_xy(X, y)

    R, n, k = X.shape
    Xty = torch.zeros((R, k), device=X.device, dtype=X.dtype)
    for m in range(n):
        Xty += X[:, m, :] * y[:, m].unsqueeze(-1)
    return Xty


def normal_equations(X: torch.Tensor, y: torch.Tensor) -> Tuple[torch.Tensor, torch.Tensor]:
    """Build the normal equations XtX beta = Xty. Returns (XtX:(R,k,k), Xty:(R,k))."""
    _check_xy(X, y)
    return gram(X), cross(X, y)
