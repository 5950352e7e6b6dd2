import pytest
import torch

from lmchol.exceptions import ShapeError
from lmchol.linalg import back_substitution, forward_substitution


def _lower(R: int, k: int, seed: int = 0, dtype=torch.float64) -> torch.Tensor:
    g = torch.Generator().manual_seed(seed)
    L = torch.tril(torch.randn((R, k, k), generator=g, dtype=dtype))
    # keep the diagonal well away from zero
    idx = torch.arange(k)
    L[:, idx, idx] = 1.0 + L[:, idx, idx].abs()
    return L


def test_forward_substitution_matches_reference(torch_dtype):
    L = _lower(3, 5, dtype=torch_dtype)
    b = torch.randn((3, 5), generator=torch.Generator().manual_seed(1), dtype=torch_dtype)

    z = forward_substitution(L, b)
    ref = torch.linalg.solve_triangular(L, b.unsqueeze(-1), upper=False).squeeze(-1)

    assert torch.allclose(z, ref, rtol=1e-12, atol=1e-12)


def test_back_substitution_solves_transposed_system(torch_dtype):
    L = _lower(2, 6, seed=3, dtype=torch_dtype)
    z = torch.randn((2, 6), generator=torch.Generator().manual_seed(4), dtype=torch_dtype)

    beta = back_substitution(L, z)

    # L' beta == z
    assert torch.allclose((L.transpose(-1, -2) @ beta.unsqueeze(-1)).squeeze(-1), z, rtol=1e-12, atol=1e-12)
    ref = torch.linalg.solve_triangular(L.transpose(-1, -2), z.unsqueeze(-1), upper=True).squeeze(-1)
    assert torch.allclose(beta, ref, rtol=1e-12, atol=1e-12)


def test_back_substitution_ignores_upper_triangle(torch_dtype):
    L = _lower(1, 4, seed=7, dtype=torch_dtype)
    z = torch.ones((1, 4), dtype=torch_dtype)

    garbage = L + torch.triu(torch.full_like(L, 99.0), diagonal=1)

    assert torch.equal(back_substitution(garbage, z), back_substitution(L, z))


def test_rhs_shape_mismatch_raises(torch_dtype):
    L = _lower(2, 3, dtype=torch_dtype)
    with pytest.raises(ShapeError):
        forward_substitution(L, torch.ones((2, 4), dtype=torch_dtype))
    with pytest.raises(ShapeError):
        back_substitution(L, torch.ones(3, dtype=torch_dtype))
