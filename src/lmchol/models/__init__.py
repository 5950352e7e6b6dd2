from lmchol.models.ols import OLS, solve

__all__ = ["OLS", "solve"]
