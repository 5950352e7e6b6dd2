from __future__ import annotations


class LmcholError(Exception):
    """Base exception for lmchol."""


class ShapeError(LmcholError, ValueError):
    """Invalid input dimensions: wrong ndim, empty axes, or X/y mismatch."""


class NonFiniteInputError(LmcholError, ValueError):
    """X, y, or the normal equations built from them contain NaN or inf."""


class SingularMatrixError(LmcholError, RuntimeError):
    """Normal matrix is singular, near-singular, or not positive-definite."""

