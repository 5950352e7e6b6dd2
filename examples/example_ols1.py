"""
Basic least-squares example on a single sample.

This script:
- Creates a simple regression dataset
- Fits OLS through the normal equations / Cholesky path
- Prints the coefficients and checks them against torch's QR solver
"""

import torch

from lmchol import OLS


def main() -> None:
    torch.set_default_dtype(torch.float64)

    # -----------------------------
    # Generate a single dataset
    # -----------------------------
    n = 200
    x1 = torch.randn(n)
    x2 = torch.randn(n)

    # Include constant manually
    X = torch.stack([torch.ones(n), x1, x2], dim=1)  # (n,k=3)

    beta_true = torch.tensor([1.0, 0.8, -0.2])
    eps = 0.5 * torch.randn(n)
    y = (X @ beta_true) + eps  # (n,)

    # -----------------------------
    # Fit (single sample => internally becomes R=1)
    # -----------------------------
    reg = OLS(X, y)
    print(reg)

    Q, Rm = torch.linalg.qr(X)
    beta_qr = torch.linalg.solve_triangular(Rm, (Q.T @ y).unsqueeze(-1), upper=True).squeeze(-1)
    print("max |beta - beta_qr| =", float((reg.params[0] - beta_qr).abs().max()))


if __name__ == "__main__":
    main()
