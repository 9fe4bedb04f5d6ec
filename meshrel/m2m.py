"""Many-to-many relation kept as an element-to-node relation plus its transpose."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from meshrel import topology
from meshrel.o2m import O2M


class M2M:
    """Elements-to-nodes relation with a lazily rebuilt nodes-to-elements side."""

    def __init__(self) -> None:
        self.nfrome = O2M()
        self.efromn = O2M()
        self.nodeloc: list[list[int]] = []
        self.elementloc: list[list[int]] = []
        self.isupdated = False

    def __repr__(self) -> str:
        return f"M2M({self.nfrome.lnods!r})"

    def append_element(self, nodes: Iterable[int]) -> int:
        """Append an element and return its index."""
        element = self.nfrome.append_element(nodes)
        self.isupdated = False
        return element

    def set_number_of_elements(self, nelem: int) -> None:
        """Resize the element list to ``nelem`` elements."""
        self.nfrome.resize(nelem)
        self.isupdated = False
        self.efromn.maxnode = nelem - 1

    def synchronize(self) -> None:
        """Rebuild the transpose and position tables if they are stale."""
        if not self.isupdated:
            self.efromn = self.nfrome.transpose()
            self.nodeloc = topology.node_positions(self.nfrome, self.efromn)
            self.elementloc = topology.element_positions(self.nfrome, self.efromn)
            self.isupdated = True

    def _elements_of(self, node: int) -> list[int]:
        if 0 <= node < self.efromn.nelems():
            return self.efromn[node]
        return []

    def elements_with_nodes(self, nodes: Sequence[int]) -> list[int]:
        """Elements that contain every one of the given nodes."""
        self.synchronize()
        if not nodes:
            return []
        common = set(self._elements_of(nodes[0]))
        for node in nodes[1:]:
            common &= set(self._elements_of(node))
        return sorted(common)

    def elements_from_nodes(self, nodes: Sequence[int]) -> list[int]:
        """Elements made of exactly as many nodes as given, all of them among them."""
        return [
            element
            for element in self.elements_with_nodes(nodes)
            if self.nfrome.nnodes(element) == len(nodes)
        ]

    def element_neighbours(self, element: int) -> list[int]:
        """Other elements sharing at least one node with ``element``."""
        self.synchronize()
        neighbours = {
            other
            for node in self.nfrome[element]
            for other in self.efromn[node]
            if other != element
        }
        return sorted(neighbours)

    def node_neighbours(self, node: int) -> list[int]:
        """Other nodes sharing at least one element with ``node``."""
        self.synchronize()
        neighbours = {
            other
            for element in self._elements_of(node)
            for other in self.nfrome[element]
            if other != node
        }
        return sorted(neighbours)

    def compress_elements(self, oldelementfromnew: Sequence[int]) -> None:
        """Keep only the listed elements, in the listed order."""
        if self.nfrome.nelems() > 0:
            self.nfrome.compress_elements(oldelementfromnew)
            self.isupdated = False
            self.synchronize()

    def permute_nodes(self, newnodefromold: Sequence[int]) -> None:
        """Renumber every node through ``newnodefromold``."""
        self.nfrome.permute_nodes(newnodefromold)
        self.isupdated = False
        self.synchronize()

    def elements_to_elements(self) -> M2M:
        """Relation from each element to every element sharing a node with it."""
        self.synchronize()
        result = M2M()
        result.nfrome = self.nfrome * self.efromn
        return result

    def nodes_to_nodes(self) -> M2M:
        """Relation from each node to every node sharing an element with it."""
        self.synchronize()
        result = M2M()
        result.nfrome = self.efromn * self.nfrome
        return result

    def cliques(self) -> list[list[int]]:
        """Local node-pair numbering of every element."""
        self.synchronize()
        return topology.cliques(self.nfrome, self.efromn)

    def order(self) -> list[int]:
        """Element indices sorted by their node lists."""
        return self.nfrome.order()

    def topological_order(self) -> list[int]:
        """Topological order of the element-to-node relation."""
        return self.nfrome.topological_order()