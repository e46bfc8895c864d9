"""Exceptions raised when a point-placement contract is violated."""

from __future__ import annotations


class ManifoldError(Exception):
    """Base class for all manifold contract violations."""


class PureFunctionCalled(ManifoldError, NotImplementedError):
    """Raised when a hook that subclasses must override is called directly."""


class ImpossibleInDimension(ManifoldError, ValueError):
    """Raised when an operation has no meaning for the topological dimension."""

    def __init__(self, dim: int, operation: str | None = None):
        self.dim = dim
        self.operation = operation
        if operation is None:
            message = f"Impossible in dimension {dim}"
        else:
            message = f"{operation} is impossible in dimension {dim}"
        super().__init__(message)


class PointOutOfBounds(ManifoldError, ValueError):
    """Raised when a sample lies outside the periodic box."""


class InvalidQuadrature(ManifoldError, ValueError):
    """Raised when sample points and weights do not form a valid quadrature."""


class DimensionMismatch(ManifoldError, ValueError):
    """Raised when a point or quadrature does not match the manifold dimension."""


__all__ = [
    "ManifoldError",
    "PureFunctionCalled",
    "ImpossibleInDimension",
    "PointOutOfBounds",
    "InvalidQuadrature",
    "DimensionMismatch",
]
