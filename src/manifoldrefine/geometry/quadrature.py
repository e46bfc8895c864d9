"""Weighted sample-point sets used to average existing vertices."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import InitVar, dataclass
from typing import Any

import numpy as np

from .errors import InvalidQuadrature

WEIGHT_SUM_TOLERANCE = 1e-10


def _frozen_array(value: Any, *, ndim: int, label: str) -> np.ndarray:
    array = np.array(value, dtype=float)
    if ndim == 2 and array.ndim == 1:
        array = array.reshape(-1, 1)
    if array.ndim != ndim:
        raise InvalidQuadrature(
            f"{label} must be a {ndim}-dimensional array; got shape {array.shape}"
        )
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class Quadrature:
    """
    Ordered pairing of sample points and averaging weights.

    Parameters
    ----------
    points:
        Sample points, one per row, with shape ``(n, spacedim)``. A flat
        sequence of scalars is read as ``n`` one-dimensional points.
    weights:
        Non-negative weights of shape ``(n,)`` aligned with ``points``.
    check:
        Verify that the weights are non-negative and sum to one. Defaults to
        ``__debug__`` so the check disappears under ``python -O``.
    """

    points: np.ndarray
    weights: np.ndarray
    check: InitVar[bool] = __debug__

    def __post_init__(self, check: bool) -> None:
        points = _frozen_array(self.points, ndim=2, label="points")
        weights = _frozen_array(self.weights, ndim=1, label="weights")
        if points.shape[0] == 0:
            raise InvalidQuadrature("A quadrature needs at least one sample point")
        if points.shape[0] != weights.shape[0]:
            raise InvalidQuadrature(
                f"Got {points.shape[0]} points but {weights.shape[0]} weights"
            )
        object.__setattr__(self, "points", points)
        object.__setattr__(self, "weights", weights)
        if check:
            self.validate()

    @classmethod
    def from_pairs(
        cls, pairs: Sequence[tuple[Any, float]], *, check: bool = __debug__
    ) -> Quadrature:
        """Build a quadrature from ``(point, weight)`` pairs."""

        if not pairs:
            raise InvalidQuadrature("A quadrature needs at least one sample point")
        points = [np.asarray(point, dtype=float).ravel() for point, _ in pairs]
        weights = [float(weight) for _, weight in pairs]
        return cls(np.vstack(points), np.asarray(weights), check=check)

    def validate(self, tol: float = WEIGHT_SUM_TOLERANCE) -> None:
        """Raise :class:`InvalidQuadrature` unless the weights partition one."""

        if not np.all(np.isfinite(self.weights)):
            raise InvalidQuadrature("Weights must be finite")
        if np.any(self.weights < 0.0):
            raise InvalidQuadrature("Weights must be non-negative")
        total = float(np.sum(self.weights))
        if not abs(total - 1.0) < tol:
            raise InvalidQuadrature(f"Weights should sum to 1; got {total!r}")

    @property
    def size(self) -> int:
        """Number of samples."""

        return int(self.points.shape[0])

    @property
    def spacedim(self) -> int:
        """Dimension of the space the samples live in."""

        return int(self.points.shape[1])

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[tuple[np.ndarray, float]]:
        for point, weight in zip(self.points, self.weights, strict=True):
            yield point, float(weight)

    def __repr__(self) -> str:  # pragma: no cover - formatting only
        return f"Quadrature(size={self.size}, spacedim={self.spacedim})"


__all__ = ["Quadrature", "WEIGHT_SUM_TOLERANCE"]
