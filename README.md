# meshrel

Sparse relations for describing mesh topology. They record which nodes belong
to each element and which elements touch each node. They also record how
several entity types (nodes, edges, tetrahedra, wedges, ...) connect to one
another.

## Modules

- `meshrel.o2m.O2M` is a one-to-many relation. Each element holds a list of
  node indices. It supports these operations:
  - transposition (`transpose`)
  - composition with another relation or a sequence (`*`)
  - union (`+` and `|`), intersection (`&`) and difference (`-`)
  - a topological order (`topological_order`), which raises `ValueError` on a
    cycle
  - a lexicographic order of the elements (`order`)
  - the indices of repeated elements (`duplicates`)
  - resizing, appending, compressing and renumbering (`resize`,
    `append_element`, `compress_elements`, `permute_nodes`)

  `append_element` raises `ValueError` when a node is repeated.
  `meshrel.o2m.from_sequence` builds the identity relation of a sequence.
- `meshrel.topology` provides three tables built from a relation and its
  transpose:
  - `node_positions` gives the position of each node inside its elements
  - `element_positions` gives the position of each element in its nodes'
    lists
  - `cliques` numbers the nodes of each element locally
- `meshrel.m2m.M2M` is a many-to-many relation. It stores the element-to-node
  side (`nfrome`) and rebuilds its transpose (`efromn`) on `synchronize`. It
  answers neighbour queries (`element_neighbours`, `node_neighbours`) and
  lookups from nodes to elements (`elements_with_nodes`,
  `elements_from_nodes`). It also builds `elements_to_elements` and
  `nodes_to_nodes`.
- `meshrel.mm2m.MM2M` is a square table of `M2M` relations indexed by
  `[element_type, node_type]`. Entities are marked with `mark_to_erase`.
  `compress` then clears them along with every element reachable from them.
  It also fills each diagonal relation so that it lists every entity of its
  type. The node-to-element queries (`all_elements`, `depth_first_search`)
  use the transposes as of the last synchronization. For that reason,
  `compress` once after building a matrix and before marking anything.
- `meshrel.ensight` writes EnSight geometry (`<name>.geoNNNN`) and case
  (`<name>.case`) files. `write_ensight` writes from flat arrays.
  `write_mesh` writes from an `MM2M` whose types follow `MeshType`.
  `step_extension` gives the four-digit step suffix.
- `meshrel.textio` holds small helpers:
  - pairs written as `(a, b)`: `format_pair`, `parse_pair`
  - fixed-size arrays written as `[x, y, z]`: `format_array`, `parse_array`
  - `file_exists`
  - `run_command`, which runs a shell command and returns its exit status

## Example

```python
from meshrel.o2m import O2M
from meshrel.m2m import M2M
from meshrel.mm2m import MM2M

elements = O2M([[0, 1, 2], [1, 2, 3]])
print(elements.transpose()[2])     # [0, 1]: elements that use node 2

mesh = M2M()
mesh.append_element([0, 1, 2])
mesh.append_element([1, 2, 3])
print(mesh.element_neighbours(0))  # [1]
print(mesh.node_neighbours(0))     # [1, 2]

NODE, EDGE = 0, 1
matrix = MM2M(2)
matrix.append_element(EDGE, NODE, [3, 0])
matrix.append_element(EDGE, NODE, [3, 1])
matrix.compress()                  # list all entities and synchronize
matrix.mark_to_erase(NODE, 0)
matrix.compress()                  # erases node 0 and the edge that uses it
print(matrix.active_element_count(EDGE))  # 1
```

## What it does not do

The package is a library only and has no command-line program. It does not
read meshes from files. The EnSight output holds geometry and a case file
with time steps; no variable (field) files are written.

## Tests

```
pip install -e .[test]
pytest
```