import pytest

from meshrel.ensight import (
    NODES_PER_PART,
    PART_NAMES,
    MeshType,
    step_extension,
    write_ensight,
    write_mesh,
)
from meshrel.mm2m import MM2M

COORDINATES = [(3.7, 4.0, 0.7), (3.0, 4.0, 0.0), (2.7, 4.0, 1.7), (2.0, 4.0, 1.0)]


def _fields(line):
    return [int(line[pos:pos + 8]) for pos in range(0, len(line), 8)]


def _section(lines, name):
    start = lines.index(name)
    count = int(lines[start + 1])
    return [_fields(line) for line in lines[start + 2:start + 2 + count]]


def _time_values(case_lines):
    start = case_lines.index("time values:")
    return [_fields(line) for line in case_lines[start + 1:]]


@pytest.mark.parametrize("number", [0, 5, 42, 999, 1234, 9999])
def test_step_extension_is_four_digits(number):
    ext = step_extension(number)
    assert len(ext) == 4
    assert int(ext) == number


def test_step_extension_rejects_too_many_steps():
    with pytest.raises(ValueError):
        step_extension(10000)


def _write_simple(tmp_path, number=0):
    # element 0: edge (part 2), element 1: tet (part 5)
    return write_ensight(
        number,
        tmp_path / "out",
        COORDINATES,
        PART_NAMES,
        [5, 2],
        NODES_PER_PART,
        [0, 4, 6],
        [1, 2, 3, 4, 2, 3],
    )


def test_geometry_header(tmp_path):
    geo_path, _ = _write_simple(tmp_path)
    assert geo_path.name == "out.geo" + step_extension(0)
    lines = geo_path.read_text().splitlines()
    assert lines[:5] == [
        "Linha 1",
        "Linha 2",
        "node id given",
        "element id given",
        "coordinates",
    ]
    assert len(lines[5]) == 8
    assert int(lines[5]) == len(COORDINATES)


def test_geometry_coordinates_round_trip(tmp_path):
    geo_path, _ = _write_simple(tmp_path)
    lines = geo_path.read_text().splitlines()
    node_lines = lines[6:6 + len(COORDINATES)]
    for index, (line, point) in enumerate(zip(node_lines, COORDINATES), start=1):
        assert len(line) == 8 + 3 * 12
        assert int(line[:8]) == index
        values = [float(line[8 + 12 * k:20 + 12 * k]) for k in range(3)]
        assert values == pytest.approx(list(point))
    assert lines[6 + len(COORDINATES):8 + len(COORDINATES)] == [
        "part 1",
        "Only one part",
    ]


def test_geometry_parts_in_part_order(tmp_path):
    geo_path, _ = _write_simple(tmp_path)
    lines = geo_path.read_text().splitlines()
    assert lines.index("bar2") < lines.index("tetra4")
    assert "tria3" not in lines
    assert _section(lines, "bar2") == [[2, 2, 3]]
    assert _section(lines, "tetra4") == [[1, 1, 2, 3, 4]]


def test_case_file(tmp_path):
    number = 6
    _, case_path = _write_simple(tmp_path, number)
    base = str(tmp_path / "out")
    lines = case_path.read_text().splitlines()
    assert lines[:6] == [
        "FORMAT",
        "type:   ensight",
        "GEOMETRY",
        f"model: 1 {base}.geo****",
        "VARIABLE",
        "TIME",
    ]
    assert int(lines[7].split(":")[1]) == number + 1
    rows = _time_values(lines)
    assert all(len(row) <= 5 for row in rows)
    assert [value for row in rows for value in row] == list(range(number + 1))


def test_case_file_ends_with_newline_on_full_row(tmp_path):
    _, case_path = _write_simple(tmp_path, 4)
    text = case_path.read_text()
    assert text.endswith("\n")
    assert not text.endswith("\n\n")


def test_write_ensight_rejects_too_many_steps(tmp_path):
    with pytest.raises(ValueError):
        _write_simple(tmp_path, 10000)
    assert not (tmp_path / "out.case").exists()


class _HugeCoordinates:
    def __len__(self):
        return 100_000_000

    def __iter__(self):
        raise AssertionError("must not be iterated")


def test_write_ensight_rejects_too_large_problem(tmp_path):
    with pytest.raises(ValueError):
        write_ensight(
            0, tmp_path / "big", _HugeCoordinates(), PART_NAMES, [], NODES_PER_PART, [0], []
        )


def _mesh():
    relations = MM2M(len(MeshType))
    relations.append_element(MeshType.TET, MeshType.NODE, [0, 1, 2, 3])
    relations.append_element(MeshType.EDGE, MeshType.NODE, [0, 1])
    relations.compress()
    return relations


def test_write_mesh_exports_elements(tmp_path):
    geo_path, case_path = write_mesh(_mesh(), 0, COORDINATES, tmp_path / "mesh")
    assert case_path.exists()
    lines = geo_path.read_text().splitlines()
    tets = _section(lines, "tetra4")
    edges = _section(lines, "bar2")
    assert len(tets) == 1 and len(edges) == 1
    assert tets[0][1:] == [1, 2, 3, 4]
    assert edges[0][1:] == [1, 2]


def test_write_mesh_skips_erased_elements(tmp_path):
    relations = _mesh()
    relations.mark_to_erase(MeshType.EDGE, 0)
    relations.compress()
    geo_path, _ = write_mesh(relations, 1, COORDINATES, tmp_path / "mesh")
    assert geo_path.name.endswith(step_extension(1))
    lines = geo_path.read_text().splitlines()
    assert "bar2" not in lines
    assert len(_section(lines, "tetra4")) == 1