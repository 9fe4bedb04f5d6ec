"""Position and clique tables derived from a relation and its transpose."""

from __future__ import annotations

from meshrel.o2m import O2M


def node_positions(nodesfromelement: O2M, elementsfromnode: O2M) -> list[list[int]]:
    """For each node, the local position it takes in each element containing it.

    ``result[node][k]`` is the index of ``node`` inside the node list of the
    element ``elementsfromnode[node][k]``.
    """
    positions: list[list[int]] = [[] for _ in range(elementsfromnode.nelems())]
    for nodes in nodesfromelement:
        for local, node in enumerate(nodes):
            positions[node].append(local)
    return positions


def element_positions(
    nodesfromelement: O2M, elementsfromnode: O2M
) -> list[list[int]]:
    """For each element, where it sits in the element list of each of its nodes.

    ``result[element][i]`` is the index of ``element`` inside
    ``elementsfromnode[nodesfromelement[element][i]]``.
    """
    positions = [[0] * len(nodes) for nodes in nodesfromelement]
    for node, elements in enumerate(elementsfromnode):
        for pos, element in enumerate(elements):
            nodes = nodesfromelement[element]
            if node in nodes:
                positions[element][nodes.index(node)] = pos
    return positions


def cliques(nodesfromelement: O2M, elementsfromnode: O2M) -> list[list[int]]:
    """Local numbering of node pairs inside every element.

    For element ``e`` with ``n`` nodes, entry ``lnode2 + lnode1 * n`` holds the
    local index that node ``e[lnode2]`` receives in the neighbourhood of node
    ``e[lnode1]``; neighbours are numbered in order of first encounter.
    """
    locations = node_positions(nodesfromelement, elementsfromnode)
    result = [[0] * (len(nodes) * len(nodes)) for nodes in nodesfromelement]
    for node1, elements in enumerate(elementsfromnode):
        local: dict[int, int] = {}
        for lnode1, element in zip(locations[node1], elements):
            nodes = nodesfromelement[element]
            size = len(nodes)
            row = result[element]
            for lnode2, node2 in enumerate(nodes):
                row[lnode2 + lnode1 * size] = local.setdefault(node2, len(local))
    return result