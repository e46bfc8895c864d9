"""Flat Euclidean space, optionally periodic along some axes."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from .errors import PointOutOfBounds
from .manifold import Manifold, as_point, weighted_average
from .quadrature import Quadrature

logger = logging.getLogger(__name__)

PERIODIC_BOX_TOLERANCE = 1e-10


def _periodicity_vector(periodicity: Any, spacedim: int) -> np.ndarray:
    if periodicity is None:
        vector = np.zeros(spacedim)
    else:
        vector = np.array(periodicity, dtype=float).ravel()
    if vector.shape != (spacedim,):
        raise ValueError(
            f"periodicity must have {spacedim} entries; got shape {vector.shape}"
        )
    if np.any(vector < 0.0):
        raise ValueError("periodicity entries must be non-negative (0 = not periodic)")
    vector.setflags(write=False)
    return vector


@dataclass(frozen=True, eq=False)
class FlatManifold(Manifold):
    """
    Euclidean space whose axes may wrap around.

    Parameters
    ----------
    dim, spacedim:
        Topological and embedding dimension, see :class:`Manifold`.
    periodicity:
        Period length per axis. ``0`` marks a non-periodic axis; an axis with
        period ``L`` identifies ``x`` and ``x + L``, and all points are
        expected to carry coordinates in ``[0, L)`` along it. ``None`` means
        no periodic axis.
    """

    periodicity: Any = None

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(
            self, "periodicity", _periodicity_vector(self.periodicity, self.spacedim)
        )

    @property
    def is_periodic(self) -> bool:
        """Whether at least one axis wraps around."""

        return bool(np.any(self.periodicity > 0.0))

    def project_to_manifold(
        self, surrounding_points: Sequence[Any] | np.ndarray, candidate: Any
    ) -> np.ndarray:
        return np.asarray(candidate, dtype=float)

    def get_new_point(self, quad: Quadrature) -> np.ndarray:
        """
        Weighted average of ``quad`` that respects the periodic axes.

        Along a periodic axis, samples further than half a period above the
        smallest sample are moved down by one period before averaging, so that
        points on both sides of the seam average to a point near the seam
        rather than to the middle of the box. The result is mapped back into
        ``[0, L)``.
        """

        if not self.is_periodic:
            return super().get_new_point(quad)

        self._check_quadrature(quad)
        points = quad.points
        axes = self.periodicity > 0.0
        periods = self.periodicity[axes]
        self._check_periodic_box(points[:, axes], periods)

        lowest = points[:, axes].min(axis=0)
        wrapped = (points[:, axes] - lowest) > periods / 2.0
        shifted = points.copy()
        shifted[:, axes] -= np.where(wrapped, periods, 0.0)
        if logger.isEnabledFor(logging.DEBUG) and wrapped.any():
            logger.debug(
                "Shifted %d periodic coordinates of %d samples before averaging",
                int(wrapped.sum()),
                quad.size,
            )

        result = weighted_average(shifted, quad.weights)
        folded = result[axes]
        folded = np.where(folded < 0.0, folded + periods, folded)
        # a tiny negative value plus L can round up to L itself
        folded = np.where(folded >= periods, folded - periods, folded)
        result[axes] = folded
        return self.project_to_manifold(points, result)

    def _check_periodic_box(self, coordinates: np.ndarray, periods: np.ndarray) -> None:
        below = coordinates < -PERIODIC_BOX_TOLERANCE
        above = coordinates >= periods
        if np.any(below | above):
            sample, axis = np.argwhere(below | above)[0]
            raise PointOutOfBounds(
                "One of the points does not lie in the periodic box: "
                f"sample {sample} has coordinate {coordinates[sample, axis]!r} "
                f"outside [0, {periods[axis]!r})"
            )

    def get_tangent_vector(self, x1: Any, x2: Any) -> np.ndarray:
        """
        Return ``x2 - x1``, taking the shorter way around periodic axes.
        """

        direction = as_point(x2, self.spacedim) - as_point(x1, self.spacedim)
        if not self.is_periodic:
            return direction
        axes = self.periodicity > 0.0
        periods = self.periodicity[axes]
        component = direction[axes]
        component = np.where(component > periods / 2.0, component - periods, component)
        component = np.where(component < -periods / 2.0, component + periods, component)
        direction[axes] = component
        return direction


__all__ = ["FlatManifold", "PERIODIC_BOX_TOLERANCE"]
