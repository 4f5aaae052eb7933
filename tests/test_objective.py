import numpy as np
import pytest

from ofmesh.objective import NodePatchObjective, SumNodePatchObjective
from ofmesh.quality import TriRadiusRatioQuality
from ofmesh.triangle_mesh import TriangleMesh


def _fan():
    nodes = [(0, 0), (1, 0), (1, 1), (0, 1), (0.4, 0.6)]
    cells = [(0, 1, 4), (1, 2, 4), (2, 3, 4), (3, 0, 4)]
    return TriangleMesh(nodes, cells)


def _objective(mesh=None):
    mesh = mesh or _fan()
    patch = mesh.node_to_cell().adj_entities_with_local(4)
    return mesh, SumNodePatchObjective(mesh, patch, TriRadiusRatioQuality)


def test_value_at_current_position_sums_patch_qualities():
    mesh, objective = _objective()
    quality = TriRadiusRatioQuality(mesh)
    expected = sum(quality.quality(c) for c in range(4))
    assert objective.value(mesh.nodes[4]) == pytest.approx(expected)


def test_value_leaves_mesh_unchanged():
    mesh, objective = _objective()
    before = [p.copy() for p in mesh.nodes]
    objective.value((0.5, 0.5))
    assert all(np.array_equal(a, b) for a, b in zip(before, mesh.nodes))


def test_value_at_other_position_matches_moved_mesh():
    mesh, objective = _objective()
    moved = _fan()
    moved.nodes[4] = np.array([0.5, 0.5])
    quality = TriRadiusRatioQuality(moved)
    expected = sum(quality.quality(c) for c in range(4))
    assert objective.value((0.5, 0.5)) == pytest.approx(expected)
    assert objective.value((0.5, 0.5)) < objective.value(mesh.nodes[4])


def test_gradient_is_mean_of_cell_gradients():
    mesh, objective = _objective()
    quality = TriRadiusRatioQuality(mesh)
    patch = objective.patch
    grads = [quality.gradient(c, j) for c, j in zip(patch.entities, patch.local)]
    assert np.allclose(objective.gradient(), sum(grads) / len(grads))


def test_direction_is_negative_gradient():
    _, objective = _objective()
    assert np.allclose(objective.direction(), -objective.gradient())


def test_gradient_matches_finite_differences_of_value():
    mesh, objective = _objective()
    base = mesh.nodes[4].copy()
    h = 1e-6
    fd = []
    for k in range(2):
        step = np.zeros(2)
        step[k] = h
        fd.append((objective.value(base + step) - objective.value(base - step)) / (2 * h))
    assert np.allclose(objective.gradient() * len(objective.patch), fd, rtol=1e-5, atol=1e-6)


def test_patch_without_local_indices_is_rejected():
    mesh = _fan()
    patch = mesh.node_to_cell().adj_entities(4)
    with pytest.raises(ValueError):
        SumNodePatchObjective(mesh, patch, TriRadiusRatioQuality)


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        NodePatchObjective()