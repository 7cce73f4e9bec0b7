import math

import pytest

from hull_detour.errors import NonFiniteCoordinateError, NotAPolygonError, NotConvexError, PointInsidePolygonError
from hull_detour.geometry import GeometryUtils
from hull_detour.polygon import ConvexPolygon

SQUARE = [(0, 0), (2, 0), (2, 2), (0, 2)]
OCTAGON = [(1, 0), (3, 0), (4, 1), (4, 3), (3, 4), (1, 4), (0, 3), (0, 1)]


def _strictly_inside(polygon, point, tol=1e-9):
    sign = 1 if GeometryUtils.cross_product(*polygon.vertices[:2], *polygon.vertices[1:3]) > 0 else -1
    for a, b in polygon.edges():
        cross = GeometryUtils.cross_product(a, b, a, point) * sign
        if cross <= tol * max(1.0, GeometryUtils.distance(a, b)):
            return False
    return True


def _assert_avoids_interior(polygon, path, samples=50):
    for a, b in zip(path, path[1:]):
        for k in range(1, samples):
            t = k / samples
            p = (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)
            assert not _strictly_inside(polygon, p), f"segment {a} -> {b} enters the polygon at {p}"


def _alternate_detours(polygon, p1, p2):
    start = polygon._start_index(p1, polygon.classify(p1).closest_index)
    positive = polygon._first_turn(polygon.vertices, start) > 0
    lengths = []
    for clockwise in (True, False):
        check = polygon.is_direct_path_possible(p1, p2, start, positive, clockwise)
        assert not check.is_possible
        lengths.append(polygon.find_path(p1, p2, check.closest_vertex_index, positive, clockwise).distance)
    return lengths


# --- construction ---

@pytest.mark.parametrize("points", [[], [(0, 0)], [(0, 0), (1, 1)]])
def test_fewer_than_three_points_is_not_a_polygon(points):
    with pytest.raises(NotAPolygonError):
        ConvexPolygon(points)


def test_square_with_vertex_pushed_inward_is_not_convex():
    with pytest.raises(NotConvexError):
        ConvexPolygon([(0, 0), (2, 0), (0.5, 0.5), (0, 2)])


def test_error_messages():
    with pytest.raises(NotAPolygonError, match="at least three points"):
        ConvexPolygon([(0, 0), (1, 0)])
    with pytest.raises(NotConvexError, match="do not form a convex polygon"):
        ConvexPolygon([(0, 0), (2, 0), (0.5, 0.5), (0, 2)])


def test_collinear_vertices_are_allowed():
    polygon = ConvexPolygon([(0, 0), (1, 0), (2, 0), (2, 2), (0, 2)])
    assert len(polygon) == 5


def test_all_collinear_points_do_not_form_a_polygon():
    with pytest.raises(NotAPolygonError):
        ConvexPolygon([(0, 0), (1, 1), (2, 2)])


def _regular_pentagon(radius=10.0):
    return [
        (radius * math.cos(math.pi / 2 + 2 * math.pi * k / 5), radius * math.sin(math.pi / 2 + 2 * math.pi * k / 5))
        for k in range(5)
    ]


def test_regular_pentagon_is_convex():
    assert len(ConvexPolygon(_regular_pentagon())) == 5


def test_pentagram_winding_twice_is_not_convex():
    pentagon = _regular_pentagon()
    star = [pentagon[(2 * k) % 5] for k in range(5)]
    # все повороты одного знака, но кольцо обходит центр дважды
    assert not ConvexPolygon.is_convex(star)
    with pytest.raises(NotConvexError):
        ConvexPolygon(star)


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), -float("inf")])
def test_non_finite_vertex_is_rejected(bad):
    with pytest.raises(NonFiniteCoordinateError):
        ConvexPolygon([(0, 0), (2, 0), (bad, 2), (0, 2)])


def test_coincident_consecutive_vertices_are_rejected():
    with pytest.raises(NotAPolygonError):
        ConvexPolygon([(0, 0), (2, 0), (2, 0), (0, 2)])


def test_explicit_ring_closure_is_dropped():
    polygon = ConvexPolygon(SQUARE + [SQUARE[0]])
    assert polygon.vertices == tuple((float(x), float(y)) for x, y in SQUARE)


def test_clockwise_ring_is_kept_as_given():
    ring = list(reversed(SQUARE))
    polygon = ConvexPolygon(ring)
    assert polygon.vertices == tuple((float(x), float(y)) for x, y in ring)


def test_area_and_perimeter():
    polygon = ConvexPolygon(SQUARE)
    assert polygon.area() == pytest.approx(4.0)
    assert polygon.perimeter() == pytest.approx(8.0)


def test_get_vertex_index_wraps_both_ways():
    polygon = ConvexPolygon(SQUARE)
    assert polygon.get_vertex_index(3, 1, True) == 0
    assert polygon.get_vertex_index(0, 1, False) == 3
    assert polygon.get_vertex_index(1, 2, False) == 3


# --- classification ---

@pytest.mark.parametrize("ring", [SQUARE, list(reversed(SQUARE)), OCTAGON])
def test_centroid_is_interior_and_far_point_is_not(ring):
    polygon = ConvexPolygon(ring)
    cx = sum(p[0] for p in ring) / len(ring)
    cy = sum(p[1] for p in ring) / len(ring)
    assert polygon.classify((cx, cy)).is_interior
    assert not polygon.classify((100, -50)).is_interior


def test_boundary_points_are_not_interior():
    polygon = ConvexPolygon(SQUARE)
    assert not polygon.classify((0, 0)).is_interior
    assert not polygon.classify((1, 0)).is_interior
    assert not polygon.classify((2, 1.5)).is_interior


def test_closest_index_ties_break_on_first_vertex():
    polygon = ConvexPolygon(SQUARE)
    assert polygon.classify((1, 1)).closest_index == 0
    assert polygon.classify((-1, 1)).closest_index == 0
    assert polygon.classify((3, 3)).closest_index == 2


def test_point_near_collinear_vertex_is_interior():
    polygon = ConvexPolygon([(0, 0), (1, 0), (2, 0), (2, 2), (0, 2)])
    assert polygon.classify((1, 0.1)).is_interior


def test_point_beyond_flat_polygon_is_not_interior():
    # Ближайшая вершина (5, -0.1) лежит за ближним ребром
    polygon = ConvexPolygon([(0, 0), (5, -0.1), (10, 0)])
    check = polygon.classify((5, 1))
    assert check.closest_index == 1
    assert not check.is_interior


# --- shortest path ---

def test_interior_endpoints_fail():
    polygon = ConvexPolygon(SQUARE)
    with pytest.raises(PointInsidePolygonError, match="first point") as exc:
        polygon.find_shortest_path((1, 1), (5, 5))
    assert exc.value.which == 1
    with pytest.raises(PointInsidePolygonError, match="second point") as exc:
        polygon.find_shortest_path((5, 5), (1, 1.5))
    assert exc.value.which == 2


@pytest.mark.parametrize("p1, p2", [
    ((float("nan"), 1), (3, 1)),
    ((-1, 1), (float("inf"), 1)),
    ((-1, -float("inf")), (3, 1)),
])
def test_non_finite_endpoints_fail(p1, p2):
    polygon = ConvexPolygon(SQUARE)
    with pytest.raises(NonFiniteCoordinateError, match="non-finite"):
        polygon.find_shortest_path(p1, p2)


def test_blocked_segment_detours_with_clockwise_tie_break():
    polygon = ConvexPolygon(SQUARE)
    path = polygon.find_shortest_path((-1, 1), (3, 1))
    assert path == [(-1, 1), (0, 0), (2, 0), (3, 1)]
    assert GeometryUtils.path_length(path) == pytest.approx(2 + 2 * math.sqrt(2))
    # повторный запрос даёт тот же результат
    assert polygon.find_shortest_path((-1, 1), (3, 1)) == path


def test_clear_segment_is_returned_as_is():
    polygon = ConvexPolygon(SQUARE)
    assert polygon.find_shortest_path((-1, -1), (3, -1)) == [(-1, -1), (3, -1)]
    assert polygon.find_shortest_path((-1, 3), (3, 3)) == [(-1, 3), (3, 3)]


def test_segment_grazing_single_vertex_is_feasible():
    polygon = ConvexPolygon(SQUARE)
    assert polygon.find_shortest_path((-1, 1), (1, -1)) == [(-1, 1), (1, -1)]


def test_segment_along_edge_line_is_feasible():
    polygon = ConvexPolygon(SQUARE)
    assert polygon.find_shortest_path((-1, 0), (3, 0)) == [(-1, 0), (3, 0)]


def test_goal_in_front_of_polygon_is_reached_directly():
    polygon = ConvexPolygon(SQUARE)
    assert polygon.find_shortest_path((-2, 1), (-0.5, 1.2)) == [(-2, 1), (-0.5, 1.2)]


def test_goal_behind_long_near_edge_needs_detour():
    polygon = ConvexPolygon([(-10, 0), (10, 0), (10, 1), (-10, 1)])
    path = polygon.find_shortest_path((0, -1), (0, 2))
    assert path == [(0, -1), (10, 0), (10, 1), (0, 2)]
    assert GeometryUtils.path_length(path) == pytest.approx(1 + 2 * math.sqrt(101))


def test_start_on_polygon_vertex():
    polygon = ConvexPolygon(SQUARE)
    path = polygon.find_shortest_path((0, 0), (3, 3))
    assert path == [(0, 0), (2, 0), (3, 3)]
    assert GeometryUtils.path_length(path) == pytest.approx(2 + math.sqrt(10))
    assert polygon.find_shortest_path((0, 0), (-1, -1)) == [(0, 0), (-1, -1)]


def test_start_on_polygon_edge():
    polygon = ConvexPolygon(SQUARE)
    path = polygon.find_shortest_path((1, 0), (1, 3))
    assert path == [(1, 0), (2, 0), (2, 2), (1, 3)]


def test_shorter_side_wins():
    polygon = ConvexPolygon(SQUARE)
    path = polygon.find_shortest_path((-1, 0.5), (3, 0.5))
    assert path == [(-1, 0.5), (0, 0), (2, 0), (3, 0.5)]
    assert GeometryUtils.path_length(path) == pytest.approx(2 + 2 * math.hypot(1, 0.5))


def test_reverse_query_reverses_path():
    polygon = ConvexPolygon(SQUARE)
    forward = polygon.find_shortest_path((-1, 0.5), (3, 0.5))
    backward = polygon.find_shortest_path((3, 0.5), (-1, 0.5))
    assert backward == list(reversed(forward))


def test_clockwise_ring_gives_same_route():
    polygon = ConvexPolygon(list(reversed(SQUARE)))
    path = polygon.find_shortest_path((-1, 0.5), (3, 0.5))
    assert path == [(-1, 0.5), (0, 0), (2, 0), (3, 0.5)]


def test_hidden_closest_vertex_on_flat_polygon():
    polygon = ConvexPolygon([(0, 0), (5, -0.1), (10, 0)])
    path = polygon.find_shortest_path((5, 1), (5, -1))
    assert path == [(5, 1), (0, 0), (5, -1)]
    _assert_avoids_interior(polygon, path)


def test_polygon_is_not_mutated_by_queries():
    polygon = ConvexPolygon(OCTAGON)
    before = polygon.vertices
    polygon.find_shortest_path((-1, 2), (5, 2))
    assert polygon.vertices == before


QUERIES = [
    ((-1, 2), (5, 2)),
    ((2, -1), (2, 5)),
    ((-1, -1), (5, 5)),
    ((5, 0), (-1, 4)),
    ((2, -3), (6, 2)),
    ((-2, 3.5), (4.5, -0.5)),
    ((0, 0), (4, 4)),
    ((1, 0), (3, 4)),
    ((-3, 2), (-1, 2.5)),
]


@pytest.mark.parametrize("p1,p2", QUERIES)
@pytest.mark.parametrize("ring", [OCTAGON, list(reversed(OCTAGON))])
def test_paths_never_enter_the_interior(ring, p1, p2):
    polygon = ConvexPolygon(ring)
    path = polygon.find_shortest_path(p1, p2)
    assert path[0] == p1 and path[-1] == p2
    assert all(v in polygon.vertices for v in path[1:-1])
    _assert_avoids_interior(polygon, path)


@pytest.mark.parametrize("p1,p2", QUERIES)
def test_length_is_symmetric(p1, p2):
    polygon = ConvexPolygon(OCTAGON)
    there = GeometryUtils.path_length(polygon.find_shortest_path(p1, p2))
    back = GeometryUtils.path_length(polygon.find_shortest_path(p2, p1))
    assert there == pytest.approx(back)


@pytest.mark.parametrize("p1,p2", QUERIES)
def test_detour_is_not_longer_than_the_other_side(p1, p2):
    polygon = ConvexPolygon(OCTAGON)
    path = polygon.find_shortest_path(p1, p2)
    if len(path) == 2:
        return
    clockwise, counter_clockwise = _alternate_detours(polygon, p1, p2)
    length = GeometryUtils.path_length(path)
    assert length == pytest.approx(min(clockwise, counter_clockwise))
    assert max(clockwise, counter_clockwise) >= length - 1e-9
