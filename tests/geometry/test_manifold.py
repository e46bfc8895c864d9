from __future__ import annotations

import numpy as np
import pytest
from manifoldrefine.geometry import (
    DimensionMismatch,
    FlatManifold,
    ImpossibleInDimension,
    Manifold,
    ProjectedManifold,
    PureFunctionCalled,
    Quadrature,
)

from ..utils.entities import (
    make_hex,
    make_line,
    make_quad,
    refine_line,
    unit_cube,
    unit_square,
)


def _skewed_quad(spacedim: int = 3):
    corners = unit_square(spacedim)
    corners[3] = corners[3] + 0.3
    return make_quad(corners)


def test_base_projection_is_not_implemented():
    manifold = Manifold(2, 2)
    with pytest.raises(PureFunctionCalled):
        manifold.project_to_manifold([np.zeros(2)], np.zeros(2))
    with pytest.raises(NotImplementedError):
        manifold.get_new_point(Quadrature([[0.0, 0.0], [1.0, 1.0]], [0.5, 0.5]))


@pytest.mark.parametrize(
    ("dim", "spacedim"),
    [(0, 1), (4, 4), (2, 1), (3, 2)],
)
def test_invalid_dimensions_are_rejected(dim, spacedim):
    with pytest.raises(ValueError):
        Manifold(dim, spacedim)


def test_weighted_centroid():
    manifold = ProjectedManifold(1, 2)
    quad = Quadrature([[0.0, 0.0], [4.0, 2.0]], [0.75, 0.25])
    assert np.allclose(manifold.get_new_point(quad), [1.0, 0.5])


@pytest.mark.parametrize("weights", [[1.0, 0.0, 0.0], [0.2, 0.3, 0.5], [1 / 3] * 3])
def test_identical_samples_reproduce_the_sample(weights):
    point = np.array([0.1, -7.3, 1e5])
    quad = Quadrature(np.vstack([point, point, point]), np.asarray(weights))
    result = ProjectedManifold(2, 3).get_new_point(quad)
    assert np.array_equal(result, point)


def test_unchecked_weights_give_the_plain_weighted_sum():
    quad = Quadrature([[1.0], [2.0]], [0.5, 0.6], check=False)
    result = ProjectedManifold(1, 1).get_new_point(quad)
    assert result[0] == pytest.approx(0.5 * 1.0 + 0.6 * 2.0)


def test_projection_is_applied_to_the_centroid():
    manifold = ProjectedManifold(
        1, 2, project_point=lambda p: p / np.linalg.norm(p), name="circle"
    )
    quad = Quadrature([[1.0, 0.0], [0.0, 1.0]], [0.5, 0.5])
    assert np.allclose(manifold.get_new_point(quad), [np.sqrt(0.5), np.sqrt(0.5)])


def test_quadrature_dimension_must_match():
    manifold = FlatManifold(1, 2)
    with pytest.raises(DimensionMismatch):
        manifold.get_new_point(Quadrature([[0.0], [1.0]], [0.5, 0.5]))


def test_new_point_on_line_is_the_midpoint():
    manifold = FlatManifold(1, 3)
    line = make_line([0.0, 0.0, 0.0], [2.0, 4.0, -2.0])
    assert np.allclose(manifold.get_new_point_on_line(line), [1.0, 2.0, -1.0])
    assert np.allclose(manifold.get_new_point_on_cell(line), [1.0, 2.0, -1.0])


def test_new_point_on_square_is_its_center():
    manifold = FlatManifold(2, 2)
    result = manifold.get_new_point_on_quad(make_quad(unit_square()))
    assert np.allclose(result, [0.5, 0.5])


def test_laplace_smoothing_changes_quad_weights():
    cell = make_quad([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [3.0, 3.0]])
    plain = FlatManifold(2, 2).get_new_point_on_quad(cell)
    smoothed = FlatManifold(2, 2, laplace_smoothing=True).get_new_point_on_quad(cell)
    # corners 1/8 + line centers 1/8
    assert np.allclose(plain, [1.0, 1.0])
    # corners 1/16 + line centers 3/16
    assert np.allclose(smoothed, [1.0, 1.0])
    skewed = make_quad([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [3.0, 3.0]])
    refine_line(skewed.line(3), midpoint=[1.5, 3.0])
    plain = FlatManifold(2, 2).get_new_point_on_quad(skewed)
    smoothed = FlatManifold(2, 2, laplace_smoothing=True).get_new_point_on_quad(skewed)
    assert plain[1] == pytest.approx(1.0 + 1.0 / 8.0)
    assert smoothed[1] == pytest.approx(1.0 + 3.0 / 16.0)


def test_new_point_on_unit_cube_is_its_center():
    manifold = FlatManifold(3, 3)
    assert np.allclose(manifold.get_new_point_on_hex(make_hex(unit_cube())), [0.5] * 3)
    assert np.allclose(manifold.get_new_point_on_cell(make_hex(unit_cube())), [0.5] * 3)


def test_cell_dispatch_matches_quad_for_surface_mesh():
    manifold = FlatManifold(2, 3)
    cell = _skewed_quad(3)
    assert np.array_equal(
        manifold.get_new_point_on_cell(cell), manifold.get_new_point_on_quad(cell)
    )


def test_face_dispatch():
    line = make_line([0.0, 0.0], [1.0, 1.0])
    assert np.allclose(FlatManifold(2, 2).get_new_point_on_face(line), [0.5, 0.5])
    face = _skewed_quad(3)
    manifold = FlatManifold(3, 3)
    assert np.array_equal(
        manifold.get_new_point_on_face(face), manifold.get_new_point_on_quad(face)
    )


@pytest.mark.parametrize("spacedim", [1, 2, 3])
def test_faces_do_not_exist_in_one_dimension(spacedim):
    manifold = FlatManifold(1, spacedim)
    line = make_line(np.zeros(spacedim), np.ones(spacedim))
    with pytest.raises(ImpossibleInDimension):
        manifold.get_new_point_on_face(line)
    with pytest.raises(ImpossibleInDimension):
        manifold.get_new_point_on_quad(line)


def test_hex_requires_three_dimensional_cells():
    with pytest.raises(ImpossibleInDimension):
        FlatManifold(2, 3).get_new_point_on_hex(make_hex(unit_cube()))


def test_intermediate_point():
    manifold = ProjectedManifold(1, 2)
    point = manifold.get_intermediate_point([0.0, 0.0], [4.0, 8.0], 0.25)
    assert np.allclose(point, [1.0, 2.0])
    with pytest.raises(ValueError):
        manifold.get_intermediate_point([0.0, 0.0], [4.0, 8.0], 1.5)
    with pytest.raises(DimensionMismatch):
        manifold.get_intermediate_point([0.0], [4.0, 8.0], 0.5)


def test_generic_tangent_vector_matches_difference_in_flat_space():
    manifold = ProjectedManifold(1, 2)
    tangent = manifold.get_tangent_vector([1.0, 1.0], [3.0, 0.0])
    assert np.allclose(tangent, [2.0, -1.0], atol=1e-6)


def test_generic_tangent_vector_on_projected_circle():
    manifold = ProjectedManifold(1, 2, project_point=lambda p: p / np.linalg.norm(p))
    tangent = manifold.get_tangent_vector([1.0, 0.0], [0.0, 1.0])
    # the projected chord starts out perpendicular to the radius
    assert tangent[0] == pytest.approx(0.0, abs=1e-6)
    assert tangent[1] > 0.0
