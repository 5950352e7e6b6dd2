from __future__ import annotations

import torch

from lmchol.exceptions import ShapeError


def _check_system(L: torch.Tensor, b: torch.Tensor) -> None:
    if L.ndim != 3 or L.shape[-1] != L.shape[-2]:
        raise ShapeError(f"L must be (R,k,k). Got {tuple(L.shape)}")
    if b.ndim != 2 or b.shape != L.shape[:2]:
        raise ShapeError(f"Right-hand side must be (R,k)={tuple(L.shape[:2])}. Got {tuple(b.shape)}")


def forward_substitution(L: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """
    Solve L z = b for lower-triangular L, first unknown to last.

    L : (R,k,k)
    b : (R,k)
    returns z : (R,k)
    """
    _check_system(L, b)
    k = L.shape[-1]
    z = torch.zeros_like(b)
    for i in range(k):
        s = (L[:, i, :i] * z[:, :i]).sum(dim=-1)
        z[:, i] = (b[:, i] - s) / L[:, i, i]
    return z


def back_substitution(L: torch.Tensor, z: torch.Tensor) -> torch.Tensor:
    """
    Solve L^T beta = z, last unknown to first, reading the lower factor
    transposed (L[j,i] for j > i) rather than materializing L^T.

    L : (R,k,k)
    z : (R,k)
    returns beta : (R,k)
    """
    _check_system(L, z)
    k = L.shape[-1]
    beta = torch.zeros_like(z)
    for i in range(k - 1, -1, -1):
        s = (L[:, i + 1 :, i] * beta[:, i + 1 :]).sum(dim=-1)
        beta[:, i] = (z[:, i] - s) / L[:, i, i]
    return beta
