"""
ManifoldRefine: placement of new vertices during mesh refinement.

The package provides the manifold strategies that decide where a new vertex
goes when a line, quad or hex is subdivided: flat (optionally periodic) space,
chart-mapped curved manifolds and projection-based manifolds, together with the
default weighted sample sets they average.
"""

from .autodiff import jacobian_matrix, jacobian_operator
from .geometry import (
    FlatManifold,
    GeometricEntity,
    Manifold,
    ManifoldChart,
    ProjectedManifold,
    Quadrature,
    get_default_quadrature,
)

__all__ = [
    "jacobian_matrix",
    "jacobian_operator",
    "Manifold",
    "FlatManifold",
    "ManifoldChart",
    "ProjectedManifold",
    "Quadrature",
    "GeometricEntity",
    "get_default_quadrature",
]
