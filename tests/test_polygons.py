import math

import pytest

from turtlekit.polygons import (
    PolygonLoadError,
    RegularPolygon,
    Square,
    Triangle,
    create_polygon,
    main,
)


@pytest.mark.parametrize("side", [0.5, 1.0, 7.0])
def test_square_area_scales_quadratically(side):
    assert Square(2 * side).area() == pytest.approx(4 * Square(side).area())


@pytest.mark.parametrize("side", [1.0, 3.0, 10.0])
def test_triangle_matches_equilateral_formula(side):
    assert Triangle(side).area() == pytest.approx(math.sqrt(3) / 4 * side**2)


@pytest.mark.parametrize("side", [2.0, 5.5])
def test_triangle_height_is_pythagorean(side):
    h = Triangle(side).height()
    assert h**2 + (side / 2) ** 2 == pytest.approx(side**2)


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        RegularPolygon(1.0)


@pytest.mark.parametrize(
    "name,cls",
    [("Square", Square), ("triangle", Triangle), ("plugins::Triangle", Triangle)],
)
def test_create_polygon_by_name(name, cls):
    polygon = create_polygon(name, 3.0)
    assert isinstance(polygon, cls)
    assert polygon.side_length == 3.0


def test_create_unknown_polygon_raises():
    with pytest.raises(PolygonLoadError):
        create_polygon("Hexagon", 1.0)


def test_main_prints_areas(capsys):
    assert main() == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["Triangle area: 43.30", "Square area: 100.00"]