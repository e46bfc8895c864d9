"""Manifolds given by a point projection, optionally backed by pymanopt."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

import numpy as np

from .manifold import Manifold

if TYPE_CHECKING:  # pragma: no cover - used only for type checking
    from pymanopt.manifolds.manifold import Manifold as PymanoptManifold
else:  # pragma: no cover - runtime fallback when type hints are unavailable
    PymanoptManifold = object

try:  # pragma: no cover - optional dependency already declared in pyproject
    from pymanopt.manifolds.manifold import Manifold as _PymanoptManifoldRuntime
except ImportError:  # pragma: no cover
    _PymanoptManifoldRuntime = None


class PointProjectionFn(Protocol):
    """Protocol for projecting an ambient point back onto the manifold."""

    def __call__(self, ambient_point: Any) -> Any: ...


def _identity_point_projection(value: Any) -> Any:
    """Return the supplied point unchanged (Euclidean manifold default)."""
    return value


@dataclass(frozen=True, eq=False)
class ProjectedManifold(Manifold):
    """
    Manifold whose new points are averaged in ambient space and projected.

    Parameters
    ----------
    dim, spacedim:
        Topological and embedding dimension, see :class:`Manifold`.
    project_point:
        Callable that projects an ambient point back onto the manifold. When
        omitted the identity map is used, which is appropriate for Euclidean
        manifolds.
    name:
        Human-readable identifier (e.g., ``"Sphere in R^3"``).
    data:
        Arbitrary metadata (e.g., the underlying pymanopt manifold instance).
    """

    project_point: PointProjectionFn | None = None
    name: str = ""
    data: Any | None = None

    def project_to_manifold(
        self, surrounding_points: Sequence[Any] | np.ndarray, candidate: Any
    ) -> np.ndarray:
        projector = self.project_point or _identity_point_projection
        return np.asarray(projector(np.asarray(candidate, dtype=float)), dtype=float)

    def random_point(self) -> Any:
        """
        Draw a random point on the manifold.

        Returns
        -------
        Any
            Ambient representation sampled from the wrapped manifold.
        """

        rand_fn = getattr(self.data, "random_point", None)
        if callable(rand_fn):
            return rand_fn()
        raise AttributeError("Underlying manifold does not expose random_point()")

    @classmethod
    def from_pymanopt(
        cls,
        manifold: PymanoptManifold,
        *,
        project_point: PointProjectionFn | None = None,
        dim: int | None = None,
        laplace_smoothing: bool = False,
    ) -> ProjectedManifold:
        """
        Wrap a ``pymanopt`` manifold so it can place refinement points.

        Parameters
        ----------
        manifold:
            Instance of :class:`pymanopt.manifolds.manifold.Manifold` whose
            points are flat vectors.
        project_point:
            Optional callable that projects ambient points onto ``manifold``.
            If omitted, averaged points are returned as they are.
        dim:
            Topological dimension of the mesh cells. Defaults to the intrinsic
            dimension of ``manifold`` (e.g. 2 for ``Sphere(3)``).
        laplace_smoothing:
            Forwarded to :class:`Manifold`.
        """

        if _PymanoptManifoldRuntime is None:  # pragma: no cover
            raise RuntimeError(
                "pymanopt is required to construct a manifold from a pymanopt manifold"
            )
        if not isinstance(manifold, _PymanoptManifoldRuntime):
            raise TypeError(
                "Expected a pymanopt.manifolds.manifold.Manifold instance; "
                f"got {type(manifold)!r}"
            )
        sample = np.asarray(manifold.random_point())
        if sample.ndim != 1:
            raise ValueError(
                "Only manifolds with vector-valued points can be used for mesh "
                f"refinement; got points of shape {sample.shape}"
            )
        return cls(
            dim if dim is not None else int(manifold.dim),
            int(sample.shape[0]),
            project_point,
            name=str(manifold),
            data=manifold,
            laplace_smoothing=laplace_smoothing,
        )


__all__ = ["ProjectedManifold", "PointProjectionFn"]
