# src/lmchol/api.py
from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from lmchol.models.ols import OLS, solve

__all__ = ["OLS", "solve", "__version__"]

try:
    __version__ = version("lmchol")
except PackageNotFoundError:  # editable/local
    __version__ = "0.0.0"
