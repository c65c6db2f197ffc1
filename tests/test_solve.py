import pytest

from mazeway.errors import OutOfBoundsPosition, UnreachableGoal
from mazeway.grid import DOWN, LEFT, RIGHT, UP, DoorGrid
from mazeway.mapgen.carve import GridTopologyBuilder
from mazeway.mapgen.solve import PathSolver, SearchNode, manhattan, solve_path
from mazeway.rng import PMRandom

from maze_test_utils import P, ScriptedRandom, doors_from_pairs


def is_valid_path(doors, path):
    for a, b in zip(path, path[1:]):
        if b not in {n for _d, n in doors.neighbors(a)}:
            return False
    return True


def test_single_cell_path():
    g = DoorGrid(1, 1)
    assert solve_path(g, P(0, 0), P(0, 0)) == [P(0, 0)]


def test_two_by_one_path():
    g = doors_from_pairs(2, 1, [((0, 0), DOWN)])
    assert solve_path(g, P(0, 0), P(1, 0)) == [P(0, 0), P(1, 0)]


def test_scripted_three_by_three_literal_path():
    g = GridTopologyBuilder(ScriptedRandom([1, 0, 0, 2, 0, 0, 1, 0])).build(3, 3)
    path = solve_path(g, P(0, 0), P(2, 2))
    assert path == [P(0, 0), P(1, 0), P(1, 1), P(0, 1), P(0, 2), P(1, 2), P(2, 2)]
    # tree distance 6, longer than the Manhattan 4
    assert len(path) - 1 == 6


def test_hand_fixed_serpentine_returns_the_only_path():
    # 3x3 snake: right along row 0, down, left along row 1, down, right along row 2
    g = doors_from_pairs(3, 3, [
        ((0, 0), RIGHT), ((0, 1), RIGHT), ((0, 2), DOWN),
        ((1, 2), LEFT), ((1, 1), LEFT), ((1, 0), DOWN),
        ((2, 0), RIGHT), ((2, 1), RIGHT),
    ])
    expected = [P(0, 0), P(0, 1), P(0, 2), P(1, 2), P(1, 1), P(1, 0), P(2, 0), P(2, 1), P(2, 2)]
    assert solve_path(g, P(0, 0), P(2, 2)) == expected
    assert solve_path(g, P(2, 2), P(0, 0)) == expected[::-1]


def test_equal_cost_ties_break_by_row_then_col():
    # Fully open 2x2: both routes cost the same; (0,1) sorts before (1,0).
    g = doors_from_pairs(2, 2, [((0, 0), RIGHT), ((0, 0), DOWN), ((0, 1), DOWN), ((1, 0), RIGHT)])
    assert solve_path(g, P(0, 0), P(1, 1)) == [P(0, 0), P(0, 1), P(1, 1)]


def test_queued_cell_is_relaxed_in_place():
    # Cycle S(2,0)-(1,0)-(0,0)-(0,1)-(1,1)-(2,1)-S, then (1,1)-(1,2)-(0,2)=goal.
    # (1,1) is first queued from (0,1) with G=4, then reached from (2,1) with
    # G=2 before it is popped; its record is updated and not pushed again.
    g = doors_from_pairs(3, 3, [
        ((2, 0), UP), ((2, 0), RIGHT), ((1, 0), UP), ((0, 0), RIGHT),
        ((0, 1), DOWN), ((2, 1), UP), ((1, 1), RIGHT), ((1, 2), UP),
    ])
    solver = PathSolver()
    path = solver.solve(g, P(2, 0), P(0, 2))
    assert path == [P(2, 0), P(2, 1), P(1, 1), P(1, 2), P(0, 2)]
    assert solver.stats.relaxations == 1
    assert solver.stats.stale_pops == 0
    assert solver.stats.pushed == 8


def test_path_never_shorter_than_manhattan():
    for seed in (5, 6, 7, 8):
        for rows, cols in [(4, 4), (5, 9), (10, 3), (12, 12)]:
            g = GridTopologyBuilder(PMRandom(seed)).build(rows, cols)
            start, goal = P(0, 0), P(rows - 1, cols - 1)
            path = solve_path(g, start, goal)
            assert path[0] == start and path[-1] == goal
            assert is_valid_path(g, path)
            assert len(path) - 1 >= manhattan(start, goal)
            monotone = all(b.row >= a.row and b.col >= a.col for a, b in zip(path, path[1:]))
            if monotone:
                assert len(path) - 1 == manhattan(start, goal)


def test_unreachable_goal_raises():
    g = DoorGrid(1, 2)
    with pytest.raises(UnreachableGoal) as ei:
        solve_path(g, P(0, 0), P(0, 1))
    assert ei.value.goal == P(0, 1)


@pytest.mark.parametrize("start,goal", [
    (P(-1, 0), P(1, 1)),
    (P(0, 0), P(2, 0)),
    (P(0, 2), P(0, 0)),
    ((0, 0), (1, 5)),
])
def test_out_of_bounds_ends_rejected(start, goal):
    g = GridTopologyBuilder(PMRandom(1)).build(2, 2)
    with pytest.raises(OutOfBoundsPosition):
        solve_path(g, start, goal)


def test_tuple_ends_are_accepted():
    g = doors_from_pairs(2, 1, [((0, 0), DOWN)])
    assert solve_path(g, (0, 0), (1, 0)) == [P(0, 0), P(1, 0)]


def test_search_node_cost_tracks_relaxation():
    n = SearchNode(P(1, 1), g=4, h=2)
    assert n.cost == 6
    n.relax(2, P(2, 1))
    assert (n.g, n.cost, n.parent) == (2, 4, P(2, 1))


def test_seeded_three_by_three_golden_path():
    g = GridTopologyBuilder(PMRandom(2024)).build(3, 3)
    path = solve_path(g, P(0, 0), P(2, 2))
    assert path == [P(0, 0), P(0, 1), P(0, 2), P(1, 2), P(1, 1), P(2, 1), P(2, 2)]


def test_closed_check_on_pop_never_fires():
    # open_seen lets a cell onto the heap once, so nothing is popped twice.
    solver = PathSolver()
    for seed in (3, 11, 29):
        g = GridTopologyBuilder(PMRandom(seed)).build(9, 13)
        solver.solve(g, P(0, 0), P(8, 12))
        assert solver.stats.stale_pops == 0
        assert solver.stats.relaxations == 0
        assert solver.stats.expanded <= solver.stats.pushed
