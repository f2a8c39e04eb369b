"""Unit tests for the handle based triangle collection."""
import pytest

from trisoup.core.geometry import Edge, Point, Triangle
from trisoup.core.soup import TriangleSoup


def make_square_soup():
    """Unit square split along the (1,0)-(0,1) diagonal."""
    soup = TriangleSoup()
    lower = soup.add(Triangle((0, 0), (1, 0), (0, 1)))
    upper = soup.add(Triangle((1, 0), (1, 1), (0, 1)))
    return soup, lower, upper


def test_add_remove_and_handles():
    soup, lower, upper = make_square_soup()
    assert len(soup) == 2
    assert lower != upper
    assert lower in soup and upper in soup
    removed = soup.remove(lower)
    assert removed == Triangle((0, 0), (1, 0), (0, 1))
    assert lower not in soup
    assert len(soup) == 1
    with pytest.raises(KeyError):
        soup.remove(lower)


def test_handles_are_never_reused():
    soup = TriangleSoup()
    h0 = soup.add(Triangle((0, 0), (1, 0), (0, 1)))
    soup.remove(h0)
    h1 = soup.add(Triangle((0, 0), (1, 0), (0, 1)))
    assert h1 != h0


def test_remove_by_handle_keeps_identical_twin():
    soup = TriangleSoup()
    tri = Triangle((0, 0), (1, 0), (0, 1))
    first = soup.add(tri)
    second = soup.add(Triangle((0, 0), (1, 0), (0, 1)))
    soup.remove(second)
    assert soup.handles() == [first]


def test_iteration_follows_insertion_order():
    soup, lower, upper = make_square_soup()
    soup.remove(lower)
    again = soup.add(Triangle((0, 0), (1, 0), (0, 1)))
    assert soup.handles() == [upper, again]
    assert [h for h, _ in soup.items()] == [upper, again]
    assert soup.triangles()[0] == Triangle((1, 0), (1, 1), (0, 1))
    assert list(soup) == soup.triangles()


def test_locate():
    soup, lower, upper = make_square_soup()
    assert soup.locate(Point(0.2, 0.2)) == lower
    assert soup.locate(Point(0.8, 0.8)) == upper
    # on the shared diagonal and outside: nobody contains it
    assert soup.locate(Point(0.5, 0.5)) is None
    assert soup.locate(Point(2, 2)) is None


def test_neighbor_and_one_sharing():
    soup, lower, upper = make_square_soup()
    diagonal = Edge((0, 1), (1, 0))
    assert soup.neighbor(lower, diagonal) == upper
    assert soup.neighbor(upper, diagonal) == lower
    assert soup.one_sharing(diagonal) == lower
    hull_edge = Edge((0, 0), (1, 0))
    assert soup.neighbor(lower, hull_edge) is None
    assert soup.one_sharing(hull_edge) == lower
    assert soup.one_sharing(Edge((5, 5), (6, 6))) is None


def test_nearest_edge():
    soup, lower, upper = make_square_soup()
    assert soup.nearest_edge(Point(0.5, 0.5)) == Edge((1, 0), (0, 1))
    assert soup.nearest_edge(Point(0.5, -0.25)) == Edge((0, 0), (1, 0))
    assert soup.nearest_edge(Point(1.5, 0.5)) == Edge((1, 0), (1, 1))


def test_nearest_edge_tie_keeps_first_triangle():
    below = Triangle((0, 0), (2, 0), (1, -1))
    above = Triangle((0, 2), (2, 2), (1, 3))
    p = Point(1, 1)  # distance 1 to both horizontal edges

    soup = TriangleSoup()
    soup.add(below)
    soup.add(above)
    assert soup.nearest_edge(p) == Edge((0, 0), (2, 0))

    soup = TriangleSoup()
    soup.add(above)
    soup.add(below)
    assert soup.nearest_edge(p) == Edge((0, 2), (2, 2))


def test_nearest_edge_empty_soup():
    assert TriangleSoup().nearest_edge(Point(0, 0)) is None


def test_purge():
    soup, lower, upper = make_square_soup()
    extra = soup.add(Triangle((1, 1), (2, 1), (2, 2)))
    assert soup.purge(Point(0, 0)) == 1
    assert soup.handles() == [upper, extra]
    assert soup.purge(Point(1, 1)) == 2
    assert len(soup) == 0
    assert soup.purge(Point(1, 1)) == 0


def test_clear():
    soup, _, _ = make_square_soup()
    soup.clear()
    assert len(soup) == 0
    assert soup.triangles() == []
