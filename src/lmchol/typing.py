# src/lmchol/typing.py
from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple, Union

import numpy as np
import torch

from lmchol.exceptions import NonFiniteInputError, ShapeError

ArrayLike = Union[torch.Tensor, np.ndarray, Sequence[Any]]


def _is_pandas_df(x: Any) -> bool:
    try:
        import pandas as pd  # type: ignore
        return isinstance(x, pd.DataFrame)
    except ImportError:
        return False


def _is_pandas_series(x: Any) -> bool:
    try:
        import pandas as pd  # type: ignore
        return isinstance(x, pd.Series)
    except ImportError:
        return False


def as_torch(
    x: Any,
    *,
    dtype: Optional[torch.dtype] = None,
    device: Optional[Union[str, torch.device]] = None,
) -> torch.Tensor:
    """
    Convert common array-likes to a floating torch.Tensor.

    Supports torch, numpy, nested lists, and pandas (if installed).
    Integer/bool inputs are promoted to float64 unless `dtype` is given.
    """
    if _is_pandas_df(x) or _is_pandas_series(x):
        x = x.to_numpy()  # type: ignore[attr-defined]

    t = x if isinstance(x, torch.Tensor) else torch.as_tensor(x)

    if dtype is not None:
        t = t.to(dtype=dtype)
    elif not t.is_floating_point():
        t = t.to(dtype=torch.float64)
    if device is not None:
        t = t.to(device=device)
    return t


def check_finite(t: torch.Tensor, *, name: str) -> None:
    if not bool(torch.isfinite(t).all()):
        raise NonFiniteInputError(f"{name} contains NaN or inf")


def as_batched_xy(
    X: Any,
    y: Any,
    *,
    dtype: Optional[torch.dtype] = None,
    device: Optional[Union[str, torch.device]] = None,
    check: bool = True,
) -> Tuple[torch.Tensor, torch.Tensor, Optional[list[str]]]:
    """
    Standardize inputs to:
      X: (R,n,k)
      y: (R,n)

    Accept:
      X: (n,k) or (R,n,k)
      y: (n,) or (R,n)

    Also returns param_names when X is a single-sample pandas.DataFrame.
    X and y end up on the same device with a common floating dtype.
    """
    param_names: Optional[list[str]] = None

    if _is_pandas_df(X):
        param_names = [str(c) for c in X.columns]  # type: ignore[attr-defined]
        X = X.to_numpy()  # type: ignore[attr-defined]

    if _is_pandas_series(y):
        y = y.to_numpy()  # type: ignore[attr-defined]
    elif _is_pandas_df(y):
        y_np = y.to_numpy()  # type: ignore[attr-defined]
        if y_np.ndim != 2 or y_np.shape[1] != 1:
            raise ShapeError("If y is a DataFrame, it must have exactly one column.")
        y = y_np[:, 0]

    Xt = as_torch(X, dtype=dtype, device=device)
    yt = as_torch(y, dtype=dtype, device=device)

    if dtype is None and Xt.dtype != yt.dtype:
        common = torch.promote_types(Xt.dtype, yt.dtype)
        Xt = Xt.to(dtype=common)
        yt = yt.to(dtype=common)
    if yt.device != Xt.device:
        yt = yt.to(device=Xt.device)

    if Xt.ndim == 2:
        Xt = Xt.unsqueeze(0)
    if yt.ndim == 1:
        yt = yt.unsqueeze(0)

    if Xt.ndim != 3:
        raise ShapeError(f"X must be (R,n,k) or (n,k). Got {tuple(Xt.shape)}")
    if yt.ndim != 2:
        raise ShapeError(f"y must be (R,n) or (n,). Got {tuple(yt.shape)}")
    if Xt.shape[0] != yt.shape[0] or Xt.shape[1] != yt.shape[1]:
        raise ShapeError(f"Batch/obs dims mismatch: X {tuple(Xt.shape)}, y {tuple(yt.shape)}")
    if 0 in Xt.shape:
        raise ShapeError(f"X must have R>=1, n>=1 and k>=1. Got {tuple(Xt.shape)}")

    if check:
        check_finite(Xt, name="X")
        check_finite(yt, name="y")

    if Xt.shape[0] != 1:
        param_names = None

    return Xt, yt, param_names
