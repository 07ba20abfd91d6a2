import re

import pytest

from osmtool.errors import ConfigError, PolyError
from osmtool.extract.poly_file_parser import PolyFileParser
from osmtool.geometry import Location, is_ccw

SQUARE_10 = ((10, 10), (20, 10), (20, 20), (10, 20))
SQUARE_20 = ((20, 20), (30, 20), (30, 30), (20, 30))
HOLE = ((11, 11), (11, 19), (19, 19), (19, 11))


def ring(label, *points):
    return "\n".join([label, *(f"{x} {y}" for x, y in points), "END"])


def poly(*rings, name="polygon"):
    return "\n".join([name, *rings, "END"]) + "\n"


ONE_OUTER = poly(ring("1", *SQUARE_10))
TWO_OUTER = poly(ring("1", *SQUARE_10), ring("2", *SQUARE_20))
OUTER_INNER = poly(ring("1", *SQUARE_10), ring("!2", *HOLE))
SECOND_POLYGON = poly(ring("1", *SQUARE_20), name="polygon2")


def parser_for(tmp_path, text, name="test.poly"):
    path = tmp_path / name
    path.write_bytes(text.encode("utf-8"))
    return PolyFileParser(path)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        PolyFileParser(tmp_path / "missing.poly")()


@pytest.mark.parametrize(
    "text, message",
    [
        pytest.param("", "is empty", id="empty"),
        pytest.param("polygon\n", "", id="one-line"),
        pytest.param("polygon\nEND\n", "at least one ring", id="two-line"),
        pytest.param("polygon\n1\n10 10\n20 10\n20 20\n", "", id="missing-end-ring"),
        pytest.param(
            "polygon\n1\n10 10\n20 10\n20 20\nEND\n",
            "on line 6:\nExpected 'END' for end of (multi)polygon.",
            id="missing-end-polygon",
        ),
        pytest.param("p\n1\n10 10\n20 10\nEND\nEND\n", "at least three lines", id="too-few"),
        pytest.param("p\n1\nfoo bar\n20 10\n20 20\nEND\nEND\n", "on line 3", id="bad-coordinates"),
    ],
)
def test_parse_errors(tmp_path, text, message):
    parser = parser_for(tmp_path, text)
    with pytest.raises(PolyError, match=re.escape(message)):
        parser()


def test_invalid_location(tmp_path):
    parser = parser_for(tmp_path, "p\n1\n200 10\n20 10\n20 20\nEND\nEND\n")
    with pytest.raises(ConfigError) as info:
        parser()
    assert str(info.value) == "Invalid location in boundary (multi)polygon: (200.000000, 10.000000)."


@pytest.mark.parametrize(
    "text, rings, outer_starts, inner_start",
    [
        pytest.param(ONE_OUTER, (1, 0), [(10.0, 10.0)], None, id="one-outer"),
        pytest.param(TWO_OUTER, (2, 0), [(10.0, 10.0), (20.0, 20.0)], None, id="two-outer"),
        pytest.param(OUTER_INNER, (1, 1), [(10.0, 10.0)], (11.0, 11.0), id="outer-inner"),
        pytest.param(
            OUTER_INNER + SECOND_POLYGON, (2, 1), [(10.0, 10.0), (20.0, 20.0)], (11.0, 11.0),
            id="two-polygons",
        ),
        pytest.param(
            OUTER_INNER + "\n" + SECOND_POLYGON, (2, 1), [(10.0, 10.0), (20.0, 20.0)], (11.0, 11.0),
            id="two-polygons-empty-line",
        ),
        pytest.param(ONE_OUTER.replace("\n", "\r\n"), (1, 0), [(10.0, 10.0)], None, id="crlf"),
    ],
)
def test_parse_polygons(tmp_path, text, rings, outer_starts, inner_start):
    area = parser_for(tmp_path, text)()
    assert area.num_rings() == rings
    outer = area.outer_rings()
    assert [r[0] for r in outer] == [Location(*start) for start in outer_starts]
    if inner_start is not None:
        assert area.inner_rings(outer[0])[0][0] == Location(*inner_start)


def test_rings_are_closed_and_oriented(tmp_path):
    # outer ring given clockwise, inner ring given counter-clockwise
    text = poly(
        ring("1", (10, 10), (10, 20), (20, 20), (20, 10)),
        ring("!2", (11, 11), (19, 11), (19, 19), (11, 19)),
        name="p",
    )
    area = parser_for(tmp_path, text)()
    outer = area.outer_rings()[0]
    inner = area.inner_rings(outer)[0]
    assert len(outer) == 5
    assert outer[0] == outer[-1]
    assert is_ccw(outer)
    assert inner[0] == inner[-1]
    assert not is_ccw(inner)


def test_already_closed_ring_is_not_closed_twice(tmp_path):
    text = poly(ring("1", (10, 10), (20, 10), (20, 20), (10, 10)), name="p")
    area = parser_for(tmp_path, text)()
    assert len(area.outer_rings()[0]) == 4


def test_scientific_and_tab_separated_coordinates(tmp_path):
    text = "p\n1\n\t1.0E1\t1e1\n20 10\n20 20\nEND\nEND\n"
    area = parser_for(tmp_path, text)()
    assert Location(10.0, 10.0) in area.outer_rings()[0]