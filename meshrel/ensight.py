"""Export of a relation matrix as an EnSight Gold geometry and case file."""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum
from pathlib import Path

from meshrel.mm2m import MM2M

MAX_PARTS = 7
MAX_ENTITIES = 99_999_999
MAX_STEPS = 9999

PART_NAMES = ("point", "bar2", "tria3", "quad4", "tetra4", "hexa8", "penta6")
NODES_PER_PART = (1, 2, 3, 4, 4, 8, 6)


class MeshType(IntEnum):
    """Entity type numbers used when exporting a mesh."""

    ISANELEMENT = 0
    NODE = 1
    POINT = 2
    EDGE = 3
    TRI = 4
    QUAD = 5
    TET = 6
    WEDGE = 7
    HEX = 8


# EnSight part number (1-based index into PART_NAMES) of each element type.
_PART_OF_TYPE = {
    MeshType.POINT: 1,
    MeshType.EDGE: 2,
    MeshType.TRI: 3,
    MeshType.QUAD: 4,
    MeshType.TET: 5,
    MeshType.WEDGE: 7,
    MeshType.HEX: 6,
}


def step_extension(number: int) -> str:
    """Four-digit, zero-padded file extension of an output step."""
    if number > MAX_STEPS:
        raise ValueError("Too many output files, please limit them to 9999 steps")
    if number <= 9:
        prefix = "000"
    elif number <= 99:
        prefix = "00"
    elif number <= 999:
        prefix = "0"
    else:
        prefix = ""
    return f"{prefix}{number}"


def _geometry_text(
    coordinates: Sequence[Sequence[float]],
    names: Sequence[str],
    part_of_element: Sequence[int],
    nodes_per_part: Sequence[int],
    element_offsets: Sequence[int],
    element_nodes: Sequence[int],
) -> str:
    out = [
        "Linha 1\n",
        "Linha 2\n",
        "node id given\n",
        "element id given\n",
        "coordinates\n",
        f"{len(coordinates):8d}\n",
    ]
    for node, point in enumerate(coordinates, start=1):
        components = "".join(f"{float(point[comp]):12.5e}" for comp in range(3))
        out.append(f"{node:8d}{components}\n")
    out.append("part 1\n")
    out.append("Only one part\n")
    for part in range(1, MAX_PARTS + 1):
        members = [
            element for element, owner in enumerate(part_of_element) if owner == part
        ]
        if not members:
            continue
        out.append(" \n")
        out.append(f"{names[part - 1]}\n")
        out.append(f"{len(members):8d}\n")
        count = nodes_per_part[part - 1]
        for element in members:
            start = element_offsets[element]
            nodes = "".join(f"{node:8d}" for node in element_nodes[start:start + count])
            out.append(f"{element + 1:8d}{nodes}\n")
    return "".join(out)


def _case_text(number: int, filename: str) -> str:
    out = [
        "FORMAT\n",
        "type:   ensight\n",
        "GEOMETRY\n",
        f"model: 1 {filename}.geo****\n",
        "VARIABLE\n",
        "TIME\n",
        f"time set: {1:8d}\n",
        f"number of steps: {number + 1:8d}\n",
        f"filename start number: {0:8d}\n",
        f"filename increment: {1:8d}\n",
        "time values:\n",
    ]
    total_steps = number + 1
    for step in range(total_steps):
        out.append(f"{step:8d}")
        if (step + 1) % 5 == 0:
            out.append("\n")
    if total_steps % 5 != 0:
        out.append("\n")
    return "".join(out)


def write_ensight(
    number: int,
    filename: str | Path,
    coordinates: Sequence[Sequence[float]],
    names: Sequence[str],
    part_of_element: Sequence[int],
    nodes_per_part: Sequence[int],
    element_offsets: Sequence[int],
    element_nodes: Sequence[int],
) -> tuple[Path, Path]:
    """Write ``<filename>.geoNNNN`` and ``<filename>.case`` for one step.

    ``part_of_element[i]`` is the 1-based part of element ``i``; its nodes are
    ``element_nodes[element_offsets[i]:]``, as many as the part prescribes.
    Returns the paths of the geometry and case files.
    """
    if len(coordinates) > MAX_ENTITIES or len(part_of_element) > MAX_ENTITIES:
        raise ValueError("Too large problem, more than 99,999,999 elements or nodes")
    extension = step_extension(number)
    base = str(filename)

    geo_path = Path(base + ".geo" + extension)
    with open(geo_path, "w", encoding="ascii") as geo_file:
        geo_file.write(
            _geometry_text(
                coordinates,
                names,
                part_of_element,
                nodes_per_part,
                element_offsets,
                element_nodes,
            )
        )

    case_path = Path(base + ".case")
    with open(case_path, "w", encoding="ascii") as case_file:
        case_file.write(_case_text(number, base))

    return geo_path, case_path


def write_mesh(
    relations: MM2M,
    number: int,
    coordinates: Sequence[Sequence[float]],
    filename: str | Path = "output",
) -> tuple[Path, Path]:
    """Export every non-erased element of a relation matrix as one EnSight step.

    Element types follow :class:`MeshType`; node indices come from the
    relation between each element type and the node type.
    """
    found: set[tuple[int, int]] = set()
    for entitytype in MeshType:
        if entitytype < relations.ntypes:
            found.update(relations.all_elements_of_type(entitytype))

    part_of_element: list[int] = []
    element_offsets = [0]
    element_nodes: list[int] = []
    for elementtype, element in sorted(found):
        part = _PART_OF_TYPE.get(elementtype)
        if part is None or MeshType.NODE >= relations.ntypes:
            continue
        nfrome = relations[elementtype, MeshType.NODE].nfrome
        if not 0 <= element < nfrome.nelems():
            continue
        nodes = nfrome[element]
        if not nodes:
            continue
        part_of_element.append(part)
        element_nodes.extend(node + 1 for node in nodes)
        element_offsets.append(element_offsets[-1] + len(nodes))

    return write_ensight(
        number,
        filename,
        coordinates,
        PART_NAMES,
        part_of_element,
        NODES_PER_PART,
        element_offsets,
        element_nodes,
    )