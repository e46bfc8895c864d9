"""Base strategy for placing new vertices on a refined mesh entity."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .default_quadrature import get_default_quadrature
from .entity import GeometricEntity
from .errors import DimensionMismatch, ImpossibleInDimension, PureFunctionCalled
from .quadrature import WEIGHT_SUM_TOLERANCE, Quadrature

SUPPORTED_DIMENSIONS = (1, 2, 3)
TANGENT_STEP = 1e-8


def weighted_average(points: np.ndarray, weights: np.ndarray) -> np.ndarray:
    """
    Return ``sum_i weights[i] * points[i]``.

    When the weights sum to one the sum is accumulated relative to the first
    sample, so identical samples reproduce that sample exactly. Otherwise the
    plain sum is returned.
    """

    if abs(float(np.sum(weights)) - 1.0) > WEIGHT_SUM_TOLERANCE:
        return weights @ points
    reference = points[0]
    return reference + weights @ (points - reference)


def as_point(value: Any, spacedim: int) -> np.ndarray:
    """Convert ``value`` to a flat float array with ``spacedim`` entries."""

    point = np.asarray(value, dtype=float).ravel()
    if point.shape != (spacedim,):
        raise DimensionMismatch(
            f"Expected a point with {spacedim} coordinates; got shape {point.shape}"
        )
    return point


@dataclass(frozen=True, eq=False)
class Manifold:
    """
    Places new points on mesh entities of topological dimension ``dim``.

    The generic algorithm takes the weighted average of a quadrature and hands
    it to :meth:`project_to_manifold`, which subclasses override to describe
    the actual geometry. The ``get_new_point_on_*`` helpers build the default
    quadrature of an entity and delegate to :meth:`get_new_point`, so
    subclasses that change the averaging only need to override that method.

    Parameters
    ----------
    dim:
        Topological dimension of the mesh cells (1, 2 or 3).
    spacedim:
        Dimension of the space the mesh lives in; at least ``dim``.
    laplace_smoothing:
        Use the Laplace-style weights (corners 1/16, lines 3/16) for quads.
    """

    dim: int
    spacedim: int
    laplace_smoothing: bool = field(default=False, kw_only=True)

    def __post_init__(self) -> None:
        if self.dim not in SUPPORTED_DIMENSIONS:
            raise ValueError(
                f"dim must be one of {SUPPORTED_DIMENSIONS}; got {self.dim}"
            )
        if self.spacedim < self.dim:
            raise ValueError(
                f"spacedim ({self.spacedim}) must not be smaller than dim ({self.dim})"
            )

    # ------------------------------------------------------------------
    # Geometry hooks
    # ------------------------------------------------------------------
    def project_to_manifold(
        self, surrounding_points: Sequence[Any] | np.ndarray, candidate: Any
    ) -> np.ndarray:
        """
        Map ``candidate`` onto the manifold.

        ``surrounding_points`` are the samples the candidate was averaged from
        and may be used as a starting guess by iterative projections.
        """

        raise PureFunctionCalled(
            f"{type(self).__name__} does not implement project_to_manifold()"
        )

    def get_new_point(self, quad: Quadrature) -> np.ndarray:
        """Project the weighted average of ``quad`` onto the manifold."""

        self._check_quadrature(quad)
        candidate = weighted_average(quad.points, quad.weights)
        return self.project_to_manifold(quad.points, candidate)

    def _check_quadrature(self, quad: Quadrature) -> None:
        if quad.spacedim != self.spacedim:
            raise DimensionMismatch(
                f"Quadrature lives in {quad.spacedim}-space; "
                f"manifold expects spacedim={self.spacedim}"
            )

    # ------------------------------------------------------------------
    # Entity-kind helpers
    # ------------------------------------------------------------------
    def get_new_point_on_line(self, line: GeometricEntity) -> np.ndarray:
        """New vertex in the middle of ``line``."""

        return self.get_new_point(get_default_quadrature(line, 1))

    def get_new_point_on_quad(self, quad: GeometricEntity) -> np.ndarray:
        """New vertex in the interior of ``quad``."""

        if self.dim < 2:
            raise ImpossibleInDimension(self.dim, "get_new_point_on_quad")
        quadrature = get_default_quadrature(
            quad, 2, with_laplace=self.laplace_smoothing
        )
        return self.get_new_point(quadrature)

    def get_new_point_on_hex(self, hex_: GeometricEntity) -> np.ndarray:
        """New vertex in the interior of ``hex_``; only meaningful for ``dim=3``."""

        if self.dim != 3:
            raise ImpossibleInDimension(self.dim, "get_new_point_on_hex")
        return self.get_new_point(get_default_quadrature(hex_, 3))

    def get_new_point_on_face(self, face: GeometricEntity) -> np.ndarray:
        """New vertex on a face: a line for ``dim=2``, a quad for ``dim=3``."""

        if self.dim == 2:
            return self.get_new_point_on_line(face)
        if self.dim == 3:
            return self.get_new_point_on_quad(face)
        raise ImpossibleInDimension(self.dim, "get_new_point_on_face")

    def get_new_point_on_cell(self, cell: GeometricEntity) -> np.ndarray:
        """New vertex in the interior of a cell of dimension ``dim``."""

        if self.dim == 1:
            return self.get_new_point_on_line(cell)
        if self.dim == 2:
            return self.get_new_point_on_quad(cell)
        return self.get_new_point_on_hex(cell)

    # ------------------------------------------------------------------
    # Derived operations
    # ------------------------------------------------------------------
    def get_intermediate_point(self, p1: Any, p2: Any, weight: float) -> np.ndarray:
        """
        Return the point at fraction ``weight`` of the way from ``p1`` to ``p2``.

        Parameters
        ----------
        p1, p2:
            End points on the manifold.
        weight:
            Value in ``[0, 1]``; ``0`` gives ``p1`` and ``1`` gives ``p2``.
        """

        if not 0.0 <= weight <= 1.0:
            raise ValueError(f"weight must lie in [0, 1]; got {weight}")
        points = np.vstack([as_point(p1, self.spacedim), as_point(p2, self.spacedim)])
        quad = Quadrature(points, np.array([1.0 - weight, weight]))
        return self.get_new_point(quad)

    def get_tangent_vector(self, x1: Any, x2: Any) -> np.ndarray:
        """
        Approximate the direction of the manifold curve from ``x1`` to ``x2``.

        The vector is scaled so that it corresponds to a unit parameter step,
        i.e. for flat space it equals ``x2 - x1``.
        """

        start = as_point(x1, self.spacedim)
        neighbour = self.get_intermediate_point(start, x2, TANGENT_STEP)
        return (neighbour - start) / TANGENT_STEP


__all__ = ["Manifold", "weighted_average", "as_point", "SUPPORTED_DIMENSIONS"]
