"""Matrix of many-to-many relations between several entity types."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from meshrel.m2m import M2M
from meshrel.o2m import O2M

Entity = tuple[int, int]


class MM2M:
    """Square table of relations indexed by (element type, node type).

    Entry ``[e, n]`` relates elements of type ``e`` to nodes of type ``n``.
    The diagonal entry ``[t, t]`` is the identity relation that lists the
    entities of type ``t`` once :meth:`compress` has run.  Queries that walk
    from nodes to elements use the transposed sides as of the last
    synchronization.
    """

    def __init__(self, ntypes: int = 0) -> None:
        self.m: list[list[M2M]] = []
        self.ntypes = 0
        self.listofmarked: list[Entity] = []
        self.set_number_of_types(ntypes)

    def __repr__(self) -> str:
        return f"MM2M(ntypes={self.ntypes})"

    def _check_type(self, entitytype: int) -> None:
        if not 0 <= entitytype < self.ntypes:
            raise IndexError(f"type {entitytype} is out of range")

    def __getitem__(self, key: tuple[int, int]) -> M2M:
        elementtype, nodetype = key
        self._check_type(elementtype)
        self._check_type(nodetype)
        return self.m[elementtype][nodetype]

    def set_number_of_types(self, ntypes: int) -> None:
        """Resize the table to ``ntypes`` x ``ntypes``, keeping existing entries."""
        if ntypes < 0:
            raise ValueError("number of types must not be negative")
        del self.m[ntypes:]
        for row in self.m:
            del row[ntypes:]
            row.extend(M2M() for _ in range(ntypes - len(row)))
        self.m.extend([M2M() for _ in range(ntypes)] for _ in range(ntypes - len(self.m)))
        self.ntypes = ntypes

    def nnodes(self, elementtype: int, element: int, nodetype: int) -> int:
        """Number of nodes of ``nodetype`` in one element of ``elementtype``."""
        relation = self[elementtype, nodetype].nfrome
        if not 0 <= element < relation.nelems():
            raise IndexError(f"element {element} is out of range")
        return relation.nnodes(element)

    def nelems(self, nodetype: int, node: int, elementtype: int) -> int:
        """Number of elements of ``elementtype`` containing one node; 0 if unknown."""
        efromn = self[elementtype, nodetype].efromn
        if not 0 <= node < efromn.nelems():
            return 0
        return efromn.nnodes(node)

    def element_count(self, elementtype: int) -> int:
        """Number of entities of a type, as held by its diagonal relation."""
        return self[elementtype, elementtype].nfrome.nelems()

    def active_element_count(self, elementtype: int) -> int:
        """Number of entities of a type that have not been erased."""
        return sum(1 for nodes in self[elementtype, elementtype].nfrome if nodes)

    def mark_to_erase(self, nodetype: int, node: int) -> None:
        """Schedule an entity for removal by the next :meth:`compress`."""
        self.listofmarked.append((nodetype, node))

    def all_elements(self, nodetype: int, node: int) -> list[Entity]:
        """Every (type, index) element of another type that contains the node."""
        if not 0 <= node < self[nodetype, nodetype].nfrome.nelems():
            return []
        found = {
            (elementtype, element)
            for elementtype in range(self.ntypes)
            if elementtype != nodetype
            for element in self._elements_of(elementtype, nodetype, node)
        }
        return sorted(found)

    def _elements_of(self, elementtype: int, nodetype: int, node: int) -> list[int]:
        efromn = self.m[elementtype][nodetype].efromn
        return efromn[node] if 0 <= node < efromn.nelems() else []

    def all_elements_of_type(self, nodetype: int) -> list[Entity]:
        """Every element containing any node of ``nodetype``."""
        found: set[Entity] = set()
        for node in range(self[nodetype, nodetype].nfrome.nelems()):
            found.update(self.all_elements(nodetype, node))
        return sorted(found)

    def all_nodes(self, elementtype: int, element: int) -> list[Entity]:
        """Every (type, index) node of one element, over all node types."""
        if not 0 <= element < self[elementtype, elementtype].nfrome.nelems():
            return []
        found = set()
        for nodetype in range(self.ntypes):
            relation = self.m[elementtype][nodetype].nfrome
            if element < relation.nelems():
                found.update((nodetype, node) for node in relation[element])
        return sorted(found)

    def all_nodes_of_type(self, elementtype: int) -> list[Entity]:
        """Every node of any element of ``elementtype``."""
        found: set[Entity] = set()
        for element in range(self[elementtype, elementtype].nfrome.nelems()):
            found.update(self.all_nodes(elementtype, element))
        return sorted(found)

    def depth_first_search(self, start: Entity) -> list[Entity]:
        """Entities reachable from ``start`` by walking up to containing elements."""
        visited: set[Entity] = set()
        stack = [tuple(start)]
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            stack.extend(
                entity
                for entity in self.all_elements(*current)
                if entity not in visited
            )
        return sorted(visited)

    def append_element(
        self, elementtype: int, nodetype: int, nodes: Iterable[int]
    ) -> int:
        """Append an element to one relation and return its index there."""
        return self[elementtype, nodetype].append_element(nodes)

    def set_number_of_elements(self, elementtype: int, nelem: int) -> None:
        """Grow every relation of ``elementtype`` to ``nelem`` elements."""
        if nelem < self[elementtype, elementtype].nfrome.nelems():
            raise ValueError(
                "New number of elements is less than the current number of elements."
            )
        for relation in self.m[elementtype]:
            relation.set_number_of_elements(nelem)

    def _entity_bound(self, entitytype: int) -> int:
        bound = 0
        for other in range(self.ntypes):
            outgoing = self.m[entitytype][other]
            incoming = self.m[other][entitytype]
            bound = max(
                bound,
                outgoing.nfrome.nelems(),
                outgoing.efromn.maxnode + 1,
                incoming.efromn.nelems(),
                incoming.nfrome.maxnode + 1,
            )
        return bound

    def compress(self) -> None:
        """Erase marked entities with everything built on them, then resynchronize.

        Each diagonal relation is extended to list every entity of its type.
        """
        marked = sorted(set(self.listofmarked))
        reached = [entity for start in marked for entity in self.depth_first_search(start)]
        self.listofmarked = sorted(set(marked) | set(reached))

        erased: list[list[int]] = [[] for _ in range(self.ntypes)]
        for entitytype, entity in self.listofmarked:
            self._check_type(entitytype)
            erased[entitytype].append(entity)

        for entitytype in range(self.ntypes):
            bound = self._entity_bound(entitytype)
            own = self.m[entitytype][entitytype]
            for entity in range(own.nfrome.nelems(), bound):
                own.append_element([entity])

        for entitytype in range(self.ntypes):
            for relation in self.m[entitytype]:
                for entity in erased[entitytype]:
                    if 0 <= entity < relation.nfrome.nelems():
                        relation.nfrome[entity].clear()
                relation.isupdated = False
                relation.synchronize()

    def type_topological_order(self) -> list[int]:
        """Types ordered so that each comes before the types it is built from.

        Raises ValueError when the type dependencies form a cycle.
        """
        dependencies = O2M(
            [
                nodetype
                for nodetype in range(self.ntypes)
                if nodetype != elementtype
                and self.m[elementtype][nodetype].nfrome.nelems() != 0
            ]
            for elementtype in range(self.ntypes)
        )
        return dependencies.topological_order()

    def elements_from_nodes(
        self, elementtype: int, nodetype: int, nodes: Sequence[int]
    ) -> list[int]:
        """Elements of one relation made of exactly the given nodes."""
        return self[elementtype, nodetype].elements_from_nodes(nodes)

    def elements_with_nodes(
        self, elementtype: int, nodetype: int, nodes: Sequence[int]
    ) -> list[int]:
        """Elements of one relation that contain all the given nodes."""
        return self[elementtype, nodetype].elements_with_nodes(nodes)