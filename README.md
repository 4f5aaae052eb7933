# ofmesh

Mesh data structures and mesh-quality tools for numerical work.

## What it provides

- `ofmesh.vector.Vector` is a small dense vector of floats. It supports subtraction, in-place addition and subtraction, `norm` and `maxnorm`.
- `ofmesh.level_set` holds level-set functions for circles (`Circle2`, `SignedDistanceCircle2`), spheres (`Sphere3`, `SignedDistanceSphere3`), a double torus (`DoubleTorus3`) and an orthocircle (`Orthocircle3`). Each one can be called on a point and has a `sign` method. `SignedDistanceSphere3` adds `gradient` and `project`.
- `ofmesh.gobject` holds `GObjectType` (vertex, curve, surface, part) and the `GObject` record.
- `ofmesh.topology.MeshTopology` stores adjacency between mesh entities as offset and neighbour lists. It can also hold local indices. A single entry is returned as an `AdjEntitySet`.
- `ofmesh.triangle_mesh.TriangleMesh` and `ofmesh.hexahedron_mesh.HexahedronMesh` are unstructured meshes. Both provide:
  - topology construction (`init_top`)
  - measures and barycentres
  - boundary detection
  - adjacency relations (`node_to_cell`, `cell_to_cell`, and others)
  - uniform refinement

  The hexahedral mesh also gives trilinear and bilinear shape functions and Jacobi matrices.
- `ofmesh.halfedge_mesh.HalfEdgeMesh.from_mesh` builds a half-edge structure from a consistently oriented triangle mesh.
- `ofmesh.quality` provides cell quality measures with gradients:
  - `TriRadiusRatioQuality`
  - `TetRadiusRatioQuality`
  - `QuadPositiveJacobiQuality`
  - `HexPositiveJacobiQuality`

  Inverted cells get `INVALID_QUALITY`.
- `ofmesh.objective.SumNodePatchObjective` is the sum of cell qualities over the patch of cells around one node. It also gives the gradient and the descent direction at that node.
- `ofmesh.quad_jacobi_function.QuadJacobiPositiveQualityFunction` gives patch values and descent steps for quadrilateral meshes.
- `ofmesh.data_arrays` holds `ComponentDataArray` (fixed-size components) and `OffsetDataArray` (components given by an offset list).
- `ofmesh.gauss_legendre` gives Gauss–Legendre points and weights on [-1, 1] for 1 to 20 points. It also has `integrate` for integrals over an interval.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from ofmesh.triangle_mesh import TriangleMesh
from ofmesh.quality import TriRadiusRatioQuality
from ofmesh.gauss_legendre import integrate

mesh = TriangleMesh(
    nodes=[(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)],
    cells=[(1, 2, 0), (3, 0, 2)],
)
mesh.init_top()
print(mesh.number_of_edges())        # 5
print(mesh.is_boundary_edge())

mesh.uniform_refine(1)
print(mesh.number_of_cells())        # 8

quality = TriRadiusRatioQuality(mesh)
print(quality.quality_of_mesh())

print(integrate(lambda x: x * x, 0.0, 1.0, 3))  # 1/3
```

## What it does not do

- There is no sparse matrix type and no linear solver.
- Meshes are not read from or written to files such as VTK.
- Meshes are not generated from geometry. You build them from node and cell lists.
- There is no complete mesh-smoothing driver and no parallel or distributed optimisation. The package supplies quality measures and node-patch objectives, and you write the optimisation loop yourself.
- There is no command-line program.