import numpy as np
import pytest
import torch

from lmchol.exceptions import NonFiniteInputError, ShapeError
from lmchol.typing import as_batched_xy, as_torch


def test_as_torch_promotes_integers():
    assert as_torch([1, 2, 3]).dtype == torch.float64
    assert as_torch(np.array([1.0, 2.0], dtype=np.float32)).dtype == torch.float32
    assert as_torch([1, 2], dtype=torch.float32).dtype == torch.float32


def test_as_batched_xy_shapes(torch_dtype):
    X, y, names = as_batched_xy(torch.ones((6, 2), dtype=torch_dtype), torch.ones(6, dtype=torch_dtype))
    assert X.shape == (1, 6, 2)
    assert y.shape == (1, 6)
    assert names is None

    Xb, yb, _ = as_batched_xy(torch.ones((3, 6, 2), dtype=torch_dtype), torch.ones((3, 6), dtype=torch_dtype))
    assert Xb.shape == (3, 6, 2)
    assert yb.shape == (3, 6)


def test_as_batched_xy_common_dtype():
    X, y, _ = as_batched_xy(np.ones((4, 2), dtype=np.float32), np.ones(4, dtype=np.float64))
    assert X.dtype == torch.float64
    assert y.dtype == torch.float64


def test_as_batched_xy_rejects_bad_inputs(torch_dtype):
    with pytest.raises(ShapeError):
        as_batched_xy(torch.ones((3, 5, 2), dtype=torch_dtype), torch.ones((2, 5), dtype=torch_dtype))
    with pytest.raises(ShapeError):
        as_batched_xy(torch.ones(5, dtype=torch_dtype), torch.ones(5, dtype=torch_dtype))
    with pytest.raises(ShapeError):
        as_batched_xy(torch.ones((0, 5, 2), dtype=torch_dtype), torch.ones((0, 5), dtype=torch_dtype))
    with pytest.raises(NonFiniteInputError):
        as_batched_xy([[1.0, float("inf")]], [1.0])


def test_check_false_skips_finiteness(torch_dtype):
    X, _, _ = as_batched_xy([[1.0, float("nan")]], [1.0], check=False)
    assert torch.isnan(X).any()


def test_as_torch_accepts_pandas():
    pd = pytest.importorskip("pandas")

    t = as_torch(pd.Series([1, 2, 3]))
    assert t.dtype == torch.float64
    assert t.tolist() == [1.0, 2.0, 3.0]
    assert as_torch(pd.DataFrame({"a": [1.0, 2.0], "b": [3.0, 4.0]})).shape == (2, 2)
