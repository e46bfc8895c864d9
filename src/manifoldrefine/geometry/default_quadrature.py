"""Canonical sample sets used to place new vertices during refinement.

The samples of a quad or hex are its corners plus one point per line (and per
face, for hexes). When a line or face has already been refined by a finer
neighbour, the vertex created back then is used instead of the geometric
center, so the new point on the coarse side coincides with the existing one.
"""

from __future__ import annotations

import numpy as np

from .entity import FACES_PER_CELL, LINES_PER_CELL, VERTICES_PER_CELL, GeometricEntity
from .errors import ImpossibleInDimension
from .quadrature import Quadrature

LINE_VERTEX_WEIGHT = 1.0 / 2.0

QUAD_WEIGHT = 1.0 / 8.0
LAPLACE_VERTEX_WEIGHT = 1.0 / 16.0
LAPLACE_LINE_WEIGHT = 3.0 / 16.0

HEX_VERTEX_WEIGHT = 1.0 / 128.0
HEX_LINE_WEIGHT = 7.0 / 192.0
HEX_FACE_WEIGHT = 1.0 / 12.0


def _as_point(value) -> np.ndarray:
    return np.asarray(value, dtype=float).ravel()


def _line_sample(line: GeometricEntity) -> np.ndarray:
    if line.has_children():
        return _as_point(line.child(0).vertex(1))
    return _as_point(line.center())


def _face_sample(face: GeometricEntity) -> np.ndarray:
    if face.has_children():
        return _as_point(face.isotropic_child(0).vertex(3))
    return _as_point(face.center())


def _vertices(entity: GeometricEntity, dim: int) -> list[np.ndarray]:
    return [_as_point(entity.vertex(i)) for i in range(VERTICES_PER_CELL[dim])]


def _line_quadrature(line: GeometricEntity) -> Quadrature:
    points = _vertices(line, 1)
    return Quadrature(np.vstack(points), np.full(2, LINE_VERTEX_WEIGHT))


def _quad_quadrature(quad: GeometricEntity, with_laplace: bool) -> Quadrature:
    points = _vertices(quad, 2)
    points.extend(_line_sample(quad.line(i)) for i in range(LINES_PER_CELL[2]))
    if with_laplace:
        weights = np.concatenate(
            [
                np.full(VERTICES_PER_CELL[2], LAPLACE_VERTEX_WEIGHT),
                np.full(LINES_PER_CELL[2], LAPLACE_LINE_WEIGHT),
            ]
        )
    else:
        weights = np.full(len(points), QUAD_WEIGHT)
    return Quadrature(np.vstack(points), weights)


def _hex_quadrature(hex_: GeometricEntity) -> Quadrature:
    points = _vertices(hex_, 3)
    points.extend(_line_sample(hex_.line(i)) for i in range(LINES_PER_CELL[3]))
    points.extend(_face_sample(hex_.face(i)) for i in range(FACES_PER_CELL[3]))
    weights = np.concatenate(
        [
            np.full(VERTICES_PER_CELL[3], HEX_VERTEX_WEIGHT),
            np.full(LINES_PER_CELL[3], HEX_LINE_WEIGHT),
            np.full(FACES_PER_CELL[3], HEX_FACE_WEIGHT),
        ]
    )
    return Quadrature(np.vstack(points), weights)


def get_default_quadrature(
    entity: GeometricEntity, dim: int, *, with_laplace: bool = False
) -> Quadrature:
    """
    Return the default quadrature of a mesh entity.

    Parameters
    ----------
    entity:
        Line, quad or hex accessor implementing :class:`GeometricEntity`.
    dim:
        Topological dimension of ``entity`` (1, 2 or 3).
    with_laplace:
        For quads, weight the line samples 3/16 and the corners 1/16 instead
        of 1/8 each. This pulls the new point towards the line midpoints and
        gives smoother interior meshes. Ignored for lines and hexes.

    Returns
    -------
    Quadrature
        2 samples for a line, 8 for a quad and 26 for a hex, vertices first.
    """

    if dim == 1:
        return _line_quadrature(entity)
    if dim == 2:
        return _quad_quadrature(entity, with_laplace)
    if dim == 3:
        return _hex_quadrature(entity)
    raise ImpossibleInDimension(dim, "Building a default quadrature")


__all__ = [
    "get_default_quadrature",
    "LINE_VERTEX_WEIGHT",
    "QUAD_WEIGHT",
    "LAPLACE_VERTEX_WEIGHT",
    "LAPLACE_LINE_WEIGHT",
    "HEX_VERTEX_WEIGHT",
    "HEX_LINE_WEIGHT",
    "HEX_FACE_WEIGHT",
]
