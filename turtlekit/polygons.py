"""Regular polygons looked up by name, with their areas."""

from __future__ import annotations

import math
import sys
from abc import ABC, abstractmethod
from collections.abc import Sequence


class PolygonLoadError(LookupError):
    """Raised when no polygon type is registered under a name."""


class RegularPolygon(ABC):
    """A regular polygon given by its side length."""

    def __init__(self, side_length: float) -> None:
        self.side_length = float(side_length)

    @abstractmethod
    def area(self) -> float:
        """Area of the polygon."""


class Square(RegularPolygon):
    def area(self) -> float:
        return self.side_length * self.side_length


class Triangle(RegularPolygon):
    """Equilateral triangle."""

    def area(self) -> float:
        return 0.5 * self.side_length * self.height()

    def height(self) -> float:
        half = self.side_length / 2
        return math.sqrt(self.side_length * self.side_length - half * half)


_REGISTRY: dict[str, type[RegularPolygon]] = {
    "square": Square,
    "triangle": Triangle,
}


def create_polygon(name: str, side_length: float) -> RegularPolygon:
    """Build the polygon registered as ``name``.

    A namespace prefix such as ``plugins::Square`` is accepted and the
    lookup ignores case.
    """
    key = name.rsplit("::", 1)[-1].strip().lower()
    try:
        cls = _REGISTRY[key]
    except KeyError:
        raise PolygonLoadError(f"no polygon type named {name!r}") from None
    return cls(side_length)


def main(argv: Sequence[str] | None = None) -> int:
    """Print the areas of a triangle and a square of side 10."""
    del argv
    try:
        triangle = create_polygon("Triangle", 10.0)
        square = create_polygon("Square", 10.0)
        print(f"Triangle area: {triangle.area():.2f}")
        print(f"Square area: {square.area():.2f}")
    except PolygonLoadError as exc:
        print(f"The plugin failed to load for some reason. Error: {exc}")
    return 0


if __name__ == "__main__":
    sys.exit(main())