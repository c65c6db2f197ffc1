import logging

import pytest

from mazeway.config import MazeConfig
from mazeway.engine.level import InMemoryLevel
from mazeway.engine.orchestrator import MazeOrchestrator
from mazeway.errors import InvalidConfiguration
from mazeway.mapgen.placement import ROLE_GROUND, ROLE_HINT, ROLE_PLAYER, ROLE_WALL
from mazeway.rng import PMRandom

from maze_test_utils import P, is_spanning_tree


def orchestrator(rows, cols, seed=42, **cfg):
    orch = MazeOrchestrator(MazeConfig(**cfg), PMRandom(seed))
    orch.configure(rows, cols)
    return orch


def test_unconfigured_generate_is_rejected_and_level_untouched():
    level = InMemoryLevel()
    keep = level.create_entity(ROLE_WALL, "old", "Wall_old")
    orch = MazeOrchestrator(rng=PMRandom(1))
    with pytest.raises(InvalidConfiguration):
        orch.generate(level)
    assert list(level.entities) == [keep]
    assert orch.doors is None and orch.path == []


@pytest.mark.parametrize("rows,cols", [(0, 5), (5, 0), (-2, 3)])
def test_configure_rejects_bad_sizes(rows, cols):
    orch = MazeOrchestrator(rng=PMRandom(1))
    with pytest.raises(InvalidConfiguration):
        orch.configure(rows, cols)
    assert (orch.rows, orch.cols) == (0, 0)


def test_size_cap_and_bad_config_rejected():
    with pytest.raises(InvalidConfiguration):
        orchestrator(10, 10, max_cells=50)
    orch = MazeOrchestrator(MazeConfig(rows=3, cols=3, cell_size=0.0), PMRandom(1))
    level = InMemoryLevel()
    with pytest.raises(InvalidConfiguration):
        orch.generate(level)
    assert len(level) == 0


def test_generate_places_every_role():
    orch = orchestrator(3, 3)
    level = InMemoryLevel()
    report = orch.generate(level)

    assert is_spanning_tree(orch.doors)
    assert orch.path[0] == P(0, 0) and orch.path[-1] == P(2, 2)
    assert len(level.by_role(ROLE_PLAYER)) == 1
    assert len(level.by_role(ROLE_GROUND)) == 1
    assert len(level.by_role(ROLE_WALL)) == 16
    assert len(level.by_role(ROLE_HINT)) == len(orch.path)
    assert len(level) == len(report.created) == len(report.layout.requests)
    assert report.skipped == [] and report.removed == 0

    player = level.by_name("Player")
    assert level.active_character == player.handle
    assert tuple(player.position) == pytest.approx((-15.0, -10.0, 0.0))


def test_positions_and_rotations_are_applied():
    orch = orchestrator(2, 1)
    level = InMemoryLevel()
    orch.generate(level)
    wall = level.by_name("Wall_1")
    assert tuple(wall.position) == pytest.approx((-10.0, -5.0, 0.0))
    assert wall.rotation.z == pytest.approx(0.7071067811865476)
    assert level.by_name("Wall_0").rotation.w == 1.0
    assert level.by_name("Hint_1").labels == ["hint", "step:1"]


def test_regeneration_clears_previous_but_keeps_essential():
    orch = orchestrator(4, 4)
    level = InMemoryLevel()
    camera = level.add_essential("camera", "asset/camera.json", "Camera")
    first = orch.generate(level)
    old_handles = set(first.created.values())

    orch.configure(2, 3)
    second = orch.generate(level)
    assert second.removed == len(old_handles)
    assert not old_handles & set(level.entities)
    assert camera in level.entities
    assert len(level) == len(second.created) + 1
    assert len(level.by_role(ROLE_PLAYER)) == 1


def test_creation_failures_are_skipped():
    orch = orchestrator(3, 3)
    level = InMemoryLevel(fail_roles={ROLE_HINT})
    report = orch.generate(level)
    assert report.skipped == [f"Hint_{i}" for i in range(len(orch.path))]
    assert level.by_role(ROLE_HINT) == []
    assert len(level.by_role(ROLE_WALL)) == 16


def test_none_handle_is_treated_as_failure(caplog):
    orch = orchestrator(2, 2)
    level = InMemoryLevel(fail_names={"Player"}, return_none=True)
    with caplog.at_level(logging.WARNING, logger="mazeway.engine.orchestrator"):
        report = orch.generate(level)
    assert report.skipped == ["Player"]
    assert level.active_character is None
    assert "placements skipped" in caplog.text


def test_seeded_runs_are_reproducible():
    a, b = orchestrator(8, 11, seed=42), orchestrator(8, 11, seed=42)
    a.generate(InMemoryLevel())
    b.generate(InMemoryLevel())
    assert a.doors.buf == b.doors.buf
    assert a.path == b.path


def test_successive_runs_draw_fresh_mazes():
    orch = orchestrator(10, 10)
    orch.generate(InMemoryLevel())
    first = list(orch.doors.buf)
    orch.generate(InMemoryLevel())
    assert orch.doors.buf != first


def test_report_times_each_phase(caplog):
    orch = orchestrator(5, 5, emit_hints=False)
    level = InMemoryLevel()
    with caplog.at_level(logging.INFO):
        report = orch.generate(level)
    assert list(report.phase_ms) == ["build", "solve", "derive", "clear", "emit"]
    assert all(ms >= 0.0 for ms in report.phase_ms.values())
    assert level.by_role(ROLE_HINT) == []
    assert "Path generate success!" in caplog.text
    assert "All operations have been completed" in caplog.text
