"""Automatic differentiation utilities."""

from .jax_backend import JacobianOperator, jacobian_matrix, jacobian_operator

__all__ = ["JacobianOperator", "jacobian_matrix", "jacobian_operator"]
