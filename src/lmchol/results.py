# src/lmchol/results.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np
import torch

from lmchol.exceptions import ShapeError
from lmchol.typing import as_batched_xy, as_torch


@dataclass(frozen=True)
class OLSFit:
    """
    Coefficients of a batched least-squares fit plus the normal-equations
    quantities they were solved from.

    chol can be None if store_factor=False was passed to OLS.
    """

    params: torch.Tensor                 # (R,k)
    XtX: torch.Tensor                    # (R,k,k)
    Xty: torch.Tensor                    # (R,k)
    _nobs: int
    chol: Optional[torch.Tensor] = None  # (R,k,k) lower factor, XtX = L L'

    model_name: str = "OLS"
    method_name: str = "Cholesky (normal equations)"
    param_names: Optional[list[str]] = None

    @property
    def nobs(self) -> int:
        return int(self._nobs)

    @property
    def R(self) -> int:
        return int(self.params.shape[0])

    @property
    def k(self) -> int:
        return int(self.params.shape[1])

    def predict(self, X_new: Any) -> torch.Tensor:
        """
        Predict y for a new design matrix.

        - X_new: (n_new, k)     -> common design for all replications, returns (R, n_new)
        - X_new: (R, n_new, k)  -> per-replication design, returns (R, n_new)
        """
        Xn = as_torch(X_new, dtype=self.params.dtype, device=self.params.device)

        if Xn.ndim == 2:
            Xn = Xn.unsqueeze(0).expand(self.R, *Xn.shape)
        if Xn.ndim != 3:
            raise ShapeError(f"X_new must be (n_new,k) or (R,n_new,k). Got {tuple(Xn.shape)}")
        if Xn.shape[-1] != self.k:
            raise ShapeError(f"X_new has k={Xn.shape[-1]} but model has k={self.k}")
        if Xn.shape[0] != self.R:
            raise ShapeError(f"X_new has R={Xn.shape[0]} but results have R={self.R}")

        return (Xn @ self.params.unsqueeze(-1)).squeeze(-1)

    def ssr(self, X: Any, y: Any) -> torch.Tensor:
        """Sum of squared residuals ||y - X beta||^2 per replication. Returns (R,)."""
        Xb, yb, _ = as_batched_xy(X, y, dtype=self.params.dtype, device=self.params.device)
        if Xb.shape[0] == 1 and self.R > 1:
            Xb = Xb.expand(self.R, -1, -1)
            yb = yb.expand(self.R, -1)
        resid = yb - self.predict(Xb)
        return (resid * resid).sum(dim=1)

    def to_numpy(self) -> np.ndarray:
        """Detach params and move to a CPU NumPy array of shape (R,k)."""
        return self.params.detach().cpu().numpy()

    def __repr__(self) -> str:
        names = self.param_names or [f"x{j}" for j in range(self.k)]
        if self.R == 1:
            coefs = ", ".join(f"{nm}={float(b):.6g}" for nm, b in zip(names, self.params[0]))
            return f"{self.model_name}({self.method_name}; nobs={self.nobs}; {coefs})"
        return f"{self.model_name}({self.method_name}; R={self.R}, nobs={self.nobs}, k={self.k})"
