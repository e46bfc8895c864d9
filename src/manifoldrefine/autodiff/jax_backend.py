"""
JAX-backed Jacobians of coordinate maps.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import numpy as np

VectorFunction = Callable[[Any], Any]


def _require_jax() -> Any:
    try:
        import jax
    except ImportError as exc:  # pragma: no cover - exercised without the extra
        raise RuntimeError(
            "JAX is required for automatic Jacobians. "
            "Install ManifoldRefine with the 'jax' extra or override "
            "push_forward_gradient() with an analytic version."
        ) from exc
    return jax


@dataclass(frozen=True)
class JacobianOperator:
    """
    Linear operator representation of a Jacobian.

    Attributes
    ----------
    shape:
        Tuple ``(output_dim, input_dim)`` of the flattened map.
    matvec:
        Callable mapping input-space directions to output-space directions.
    T_matvec:
        Callable mapping output-space covectors back to the input space.
    """

    shape: tuple[int, int]
    matvec: Callable[[Any], np.ndarray]
    T_matvec: Callable[[Any], np.ndarray]


def jacobian_matrix(function: VectorFunction, point: Any) -> np.ndarray:
    """
    Dense Jacobian of ``function`` at ``point``.

    Parameters
    ----------
    function:
        JAX-traceable callable mapping a flat array to a flat array.
    point:
        Evaluation point.

    Returns
    -------
    numpy.ndarray
        Matrix of shape ``(output_dim, input_dim)``.
    """

    jax = _require_jax()
    import jax.numpy as jnp

    base = jnp.asarray(np.asarray(point, dtype=float).ravel())
    matrix = jax.jacfwd(function)(base)
    return np.asarray(matrix, dtype=float).reshape(-1, base.shape[0])


def jacobian_operator(function: VectorFunction, point: Any) -> JacobianOperator:
    """
    Linearise ``function`` at ``point`` without forming the full matrix.

    Parameters
    ----------
    function:
        JAX-traceable callable mapping a flat array to a flat array.
    point:
        Evaluation point.

    Returns
    -------
    JacobianOperator
        Linear operator exposing ``matvec`` and ``T_matvec`` closures.
    """

    jax = _require_jax()
    import jax.numpy as jnp

    base = jnp.asarray(np.asarray(point, dtype=float).ravel())
    primal_output, jvp = jax.linearize(function, base)
    _, vjp = jax.vjp(function, base)

    def matvec(direction: Any) -> np.ndarray:
        tangent = jnp.asarray(np.asarray(direction, dtype=float).ravel())
        return np.asarray(jvp(tangent), dtype=float)

    def T_matvec(covector: Any) -> np.ndarray:
        (pulled,) = vjp(jnp.asarray(np.asarray(covector, dtype=float).ravel()))
        return np.asarray(pulled, dtype=float)

    operator_shape = (int(np.asarray(primal_output).size), int(base.shape[0]))

    return JacobianOperator(
        shape=operator_shape,
        matvec=matvec,
        T_matvec=T_matvec,
    )


__all__ = ["JacobianOperator", "jacobian_matrix", "jacobian_operator"]
