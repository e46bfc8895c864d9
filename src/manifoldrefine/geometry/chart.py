"""Curved manifolds described by a coordinate chart."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from ..autodiff import jacobian_matrix
from .errors import DimensionMismatch, PureFunctionCalled
from .flat import FlatManifold
from .manifold import Manifold, as_point
from .quadrature import Quadrature

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ManifoldChart(Manifold):
    """
    Manifold given by a bijection between real space and a chart space.

    Subclasses implement :meth:`pull_back` (real -> chart coordinates) and
    :meth:`push_forward` (chart -> real coordinates) such that
    ``push_forward(pull_back(p)) == p``. New points are averaged in chart
    coordinates by an internal :class:`FlatManifold`, which takes care of
    periodic chart axes such as angles, and then mapped back.

    Parameters
    ----------
    dim, spacedim:
        Topological and embedding dimension, see :class:`Manifold`.
    chartdim:
        Number of chart coordinates.
    chart_periodicity:
        Period of each chart coordinate (``0`` for non-periodic ones).
    """

    chartdim: int = 0
    chart_periodicity: Any = None
    sub_manifold: FlatManifold = field(init=False, repr=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        chartdim = self.chartdim or self.spacedim
        object.__setattr__(self, "chartdim", chartdim)
        sub_manifold = FlatManifold(self.dim, chartdim, self.chart_periodicity)
        object.__setattr__(self, "sub_manifold", sub_manifold)
        object.__setattr__(self, "chart_periodicity", sub_manifold.periodicity)

    # ------------------------------------------------------------------
    # Chart
    # ------------------------------------------------------------------
    def pull_back(self, space_point: np.ndarray) -> Any:
        """Chart coordinates of ``space_point``."""

        raise PureFunctionCalled(
            f"{type(self).__name__} does not implement pull_back()"
        )

    def push_forward(self, chart_point: np.ndarray) -> Any:
        """Real-space location of ``chart_point``."""

        raise PureFunctionCalled(
            f"{type(self).__name__} does not implement push_forward()"
        )

    def push_forward_gradient(self, chart_point: Any) -> np.ndarray:
        """
        Jacobian of :meth:`push_forward` at ``chart_point``.

        The default differentiates :meth:`push_forward` with JAX, which
        requires it to be written with ``jax.numpy``. Subclasses with a known
        derivative should override this method.

        Returns
        -------
        numpy.ndarray
            Matrix of shape ``(spacedim, chartdim)``.
        """

        return jacobian_matrix(self.push_forward, as_point(chart_point, self.chartdim))

    def _to_chart(self, space_point: Any) -> np.ndarray:
        chart_point = np.asarray(self.pull_back(space_point), dtype=float).ravel()
        if chart_point.shape != (self.chartdim,):
            raise DimensionMismatch(
                f"pull_back() returned shape {chart_point.shape}; "
                f"expected ({self.chartdim},)"
            )
        return chart_point

    def _to_space(self, chart_point: np.ndarray) -> np.ndarray:
        return as_point(self.push_forward(chart_point), self.spacedim)

    # ------------------------------------------------------------------
    # Manifold interface
    # ------------------------------------------------------------------
    def project_to_manifold(
        self, surrounding_points: Any, candidate: Any
    ) -> np.ndarray:
        return self._to_space(self._to_chart(candidate))

    def get_new_point(self, quad: Quadrature) -> np.ndarray:
        """Average ``quad`` in chart coordinates and map the result back."""

        self._check_quadrature(quad)
        chart_points = np.vstack([self._to_chart(point) for point in quad.points])
        chart_quad = Quadrature(chart_points, quad.weights, check=False)
        chart_point = self.sub_manifold.get_new_point(chart_quad)
        logger.debug("Averaged %d samples in chart space at %s", quad.size, chart_point)
        return self._to_space(chart_point)

    def get_tangent_vector(self, x1: Any, x2: Any) -> np.ndarray:
        """
        Tangent of the chart-space straight line from ``x1`` to ``x2``.

        The chart-space direction (shortest way around periodic chart axes) is
        mapped to real space with :meth:`push_forward_gradient` at ``x1``.
        """

        start = self._to_chart(as_point(x1, self.spacedim))
        end = self._to_chart(as_point(x2, self.spacedim))
        chart_direction = self.sub_manifold.get_tangent_vector(start, end)
        gradient = np.asarray(self.push_forward_gradient(start), dtype=float)
        if gradient.shape != (self.spacedim, self.chartdim):
            raise DimensionMismatch(
                f"push_forward_gradient() returned shape {gradient.shape}; "
                f"expected ({self.spacedim}, {self.chartdim})"
            )
        return gradient @ chart_direction


__all__ = ["ManifoldChart"]
