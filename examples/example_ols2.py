"""
Monte Carlo example: many replications of the same regression solved in one call.
"""

import torch

from lmchol import SingularMatrixError, solve


def main() -> None:
    torch.set_default_dtype(torch.float64)
    g = torch.Generator().manual_seed(0)

    R, n, k = 1000, 50, 3
    X = torch.randn((R, n, k), generator=g)
    X[:, :, 0] = 1.0
    beta_true = torch.tensor([0.5, -1.0, 2.0])
    y = (X @ beta_true.view(1, k, 1)).squeeze(-1) + 0.3 * torch.randn((R, n), generator=g)

    beta = solve(X, y)  # (R,k)
    print("mean beta :", beta.mean(dim=0).tolist())
    print("std  beta :", beta.std(dim=0).tolist())

    # Collinear design: the solver refuses instead of returning NaNs
    Xc = torch.stack([torch.ones(n), torch.ones(n)], dim=1)
    try:
        solve(Xc, y[0])
    except SingularMatrixError as e:
        print("collinear design rejected:", e)


if __name__ == "__main__":
    main()
