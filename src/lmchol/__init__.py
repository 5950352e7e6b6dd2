from lmchol.api import __version__
from lmchol.exceptions import (
    LmcholError,
    NonFiniteInputError,
    ShapeError,
    SingularMatrixError,
)
from lmchol.linalg import cholesky_lower, cholesky_solve, normal_equations
from lmchol.models.ols import OLS, solve
from lmchol.results import OLSFit

__all__ = [
    "OLS",
    "OLSFit",
    "solve",
    "normal_equations",
    "cholesky_lower",
    "cholesky_solve",
    "LmcholError",
    "ShapeError",
    "NonFiniteInputError",
    "SingularMatrixError",
    "__version__",
]
