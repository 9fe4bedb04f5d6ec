"""One-to-many relation: each element owns an ordered list of node indices."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator, Sequence


def _max_node(lnods: Iterable[Iterable[int]], start: int) -> int:
    return max((node for nodes in lnods for node in nodes), default=start)


class O2M:
    """Relation mapping every element to the list of nodes it is made of."""

    def __init__(self, lnods: Iterable[Iterable[int]] | None = None) -> None:
        self.lnods: list[list[int]] = [list(nodes) for nodes in (lnods or [])]
        self.maxnode: int = max(0, _max_node(self.lnods, 0))

    @classmethod
    def _build(cls, lnods: list[list[int]], maxnode: int) -> O2M:
        rel = cls()
        rel.lnods = lnods
        rel.maxnode = maxnode
        return rel

    def __getitem__(self, element: int) -> list[int]:
        return self.lnods[element]

    def __len__(self) -> int:
        return len(self.lnods)

    def __iter__(self) -> Iterator[list[int]]:
        return iter(self.lnods)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, O2M):
            return NotImplemented
        return self.lnods == other.lnods and self.maxnode == other.maxnode

    def __repr__(self) -> str:
        return f"O2M({self.lnods!r}, maxnode={self.maxnode})"

    def nelems(self) -> int:
        """Number of elements in the relation."""
        return len(self.lnods)

    def nnodes(self, element: int) -> int:
        """Number of nodes of one element."""
        return len(self.lnods[element])

    def resize(self, nelem: int) -> None:
        """Grow or shrink to ``nelem`` elements; new elements are empty."""
        if nelem < 0:
            raise ValueError("number of elements must not be negative")
        if nelem < len(self.lnods):
            del self.lnods[nelem:]
        else:
            self.lnods.extend([] for _ in range(nelem - len(self.lnods)))

    def append_element(self, nodes: Iterable[int]) -> int:
        """Append an element with the given nodes and return its index."""
        nodes = list(nodes)
        if len(set(nodes)) != len(nodes):
            raise ValueError("Repeated nodes detected in the input.")
        self.lnods.append(nodes)
        self.maxnode = max([self.maxnode, *nodes])
        return len(self.lnods) - 1

    def duplicates(self) -> list[int]:
        """Indices of elements whose node list repeats an earlier element's."""
        seen: set[tuple[int, ...]] = set()
        result = []
        for index, nodes in enumerate(self.lnods):
            key = tuple(nodes)
            if key in seen:
                result.append(index)
            else:
                seen.add(key)
        return result

    def transpose(self) -> O2M:
        """Relation from each node to the elements that contain it."""
        if not self.lnods:
            return O2M()
        transposed: list[list[int]] = [[] for _ in range(self.maxnode + 1)]
        for element, nodes in enumerate(self.lnods):
            for node in nodes:
                transposed[node].append(element)
        return O2M._build(transposed, len(self.lnods) - 1)

    def __mul__(self, other: O2M | Sequence[int]) -> O2M:
        if not isinstance(other, O2M):
            other = from_sequence(other)
        camax = other.nelems() - 1
        rows = []
        for nodes in self.lnods:
            row: dict[int, None] = {}
            for ca in nodes:
                if ca > camax:
                    continue
                row.update(dict.fromkeys(other.lnods[ca]))
            rows.append(list(row))
        return O2M._build(rows, other.maxnode)

    def __add__(self, other: O2M) -> O2M:
        rows = []
        for element in range(max(len(self.lnods), len(other.lnods))):
            row: dict[int, None] = {}
            if element < len(self.lnods):
                row.update(dict.fromkeys(self.lnods[element]))
            if element < len(other.lnods):
                row.update(dict.fromkeys(other.lnods[element]))
            rows.append(list(row))
        return O2M._build(rows, max(self.maxnode, other.maxnode))

    def __or__(self, other: O2M) -> O2M:
        return self + other

    def __and__(self, other: O2M) -> O2M:
        rows = [
            sorted(set(mine) & set(theirs))
            for mine, theirs in zip(self.lnods, other.lnods)
        ]
        return O2M._build(rows, max(self.maxnode, other.maxnode))

    def __sub__(self, other: O2M) -> O2M:
        rows = []
        for element, nodes in enumerate(self.lnods):
            if element < len(other.lnods):
                rows.append(sorted(set(nodes) - set(other.lnods[element])))
            else:
                rows.append(list(nodes))
        return O2M._build(rows, max(self.maxnode, other.maxnode))

    def topological_order(self) -> list[int]:
        """Order elements so each comes before the elements it points to.

        Raises ValueError when the relation contains a cycle.
        """
        size = len(self.lnods)
        in_degree = [0] * size
        for nodes in self.lnods:
            for node in nodes:
                if not 0 <= node < size:
                    raise ValueError(f"node {node} is not an element of the relation")
                in_degree[node] += 1
        queue = deque(index for index, degree in enumerate(in_degree) if degree == 0)
        order = []
        while queue:
            current = queue.popleft()
            order.append(current)
            for neighbour in self.lnods[current]:
                in_degree[neighbour] -= 1
                if in_degree[neighbour] == 0:
                    queue.append(neighbour)
        if len(order) != size:
            raise ValueError(
                "The relation contains cycles, topological sort not possible."
            )
        return order

    def order(self) -> list[int]:
        """Element indices sorted by their node lists, ties kept in place."""
        return sorted(range(len(self.lnods)), key=lambda index: self.lnods[index])

    def compress_elements(self, oldelementfromnew: Sequence[int]) -> None:
        """Keep only the listed elements, in the listed order."""
        self.lnods = [list(self.lnods[old]) for old in oldelementfromnew]
        self.maxnode = _max_node(self.lnods, -1)

    def permute_nodes(self, newnodefromold: Sequence[int]) -> None:
        """Renumber every node through ``newnodefromold``."""
        self.lnods = [[newnodefromold[node] for node in nodes] for nodes in self.lnods]
        self.maxnode = _max_node(self.lnods, -1)


def from_sequence(sequence: Sequence[int]) -> O2M:
    """Identity relation with one element per item: element i holds node i."""
    size = len(sequence)
    return O2M._build([[element] for element in range(size)], max(size - 1, 0))