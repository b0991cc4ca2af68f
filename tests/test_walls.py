from mazegen.generator import Room, Side, WallPoint, select_wall_point
from mazegen.generator.walls import wall_candidates
from maze_test_utils import is_corner, on_boundary


def test_candidates_exclude_corners():
    room = Room(10, 10, 5, 6)
    points = list(wall_candidates(room))
    # (w - 2) on top and bottom, (h - 2) on left and right
    assert len(points) == 2 * 3 + 2 * 4
    for p in points:
        assert on_boundary(room, p.x, p.y)
        assert not is_corner(room, p.x, p.y)


def test_candidate_sides_match_position():
    room = Room(10, 10, 5, 5)
    for p in wall_candidates(room):
        if p.side is Side.TOP:
            assert p.y == 10
        elif p.side is Side.BOTTOM:
            assert p.y == 14
        elif p.side is Side.LEFT:
            assert p.x == 10
        else:
            assert p.x == 14


def test_target_to_the_right_picks_right_wall():
    room = Room(10, 10, 5, 5)
    target = Room(30, 10, 5, 5)  # center (32.5, 12.5)
    point = select_wall_point(room, target)
    # y=12 and y=13 tie; the first one scanned wins
    assert point == WallPoint(14, 12, Side.RIGHT)


def test_target_above_picks_top_wall():
    room = Room(10, 20, 5, 5)
    target = Room(10, 2, 5, 5)  # center (12.5, 4.5)
    point = select_wall_point(room, target)
    assert point.side is Side.TOP
    assert point.y == 20


def test_diagonal_tie_prefers_top_over_left():
    room = Room(10, 10, 5, 5)
    target = Room(3, 3, 4, 4)  # center (5, 5): (11, 10) and (10, 11) are both 11 away
    assert select_wall_point(room, target) == WallPoint(11, 10, Side.TOP)


def test_room_without_interior_wall_cells_has_no_point():
    assert select_wall_point(Room(5, 5, 2, 2), Room(20, 20, 4, 4)) is None


def test_narrow_room_still_offers_side_walls():
    point = select_wall_point(Room(5, 5, 1, 5), Room(20, 5, 4, 4))
    assert point is not None
    assert point.side in (Side.LEFT, Side.RIGHT)


def test_outward_cell_steps_off_the_wall():
    assert WallPoint(3, 4, Side.TOP).outward_cell() == (3, 3)
    assert WallPoint(3, 4, Side.BOTTOM).outward_cell() == (3, 5)
    assert WallPoint(3, 4, Side.LEFT).outward_cell() == (2, 4)
    assert WallPoint(3, 4, Side.RIGHT).outward_cell() == (4, 4)


def test_side_serializes_as_plain_string():
    assert WallPoint(1, 2, Side.LEFT).to_dict() == {"x": 1, "y": 2, "side": "left"}
    assert Side("bottom") is Side.BOTTOM
