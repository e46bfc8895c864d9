"""Geometry primitives for ManifoldRefine."""

from .chart import ManifoldChart
from .default_quadrature import get_default_quadrature
from .entity import GeometricEntity
from .errors import (
    DimensionMismatch,
    ImpossibleInDimension,
    InvalidQuadrature,
    ManifoldError,
    PointOutOfBounds,
    PureFunctionCalled,
)
from .flat import FlatManifold
from .manifold import Manifold
from .projected import PointProjectionFn, ProjectedManifold
from .quadrature import Quadrature

__all__ = [
    "Manifold",
    "FlatManifold",
    "ManifoldChart",
    "ProjectedManifold",
    "PointProjectionFn",
    "Quadrature",
    "GeometricEntity",
    "get_default_quadrature",
    "ManifoldError",
    "PureFunctionCalled",
    "ImpossibleInDimension",
    "PointOutOfBounds",
    "InvalidQuadrature",
    "DimensionMismatch",
]
