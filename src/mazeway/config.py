from dataclasses import dataclass

from .errors import InvalidConfiguration

# Asset definitions handed to the level when creating entities.
PLAYER_DEFINITION = "asset/objects/character/player/player.object.json"
GROUND_DEFINITION = "asset/objects/environment/floor/floor.object.json"
WALL_DEFINITION = "asset/objects/environment/wall/wall.object.json"
HINT_DEFINITION = "asset/objects/environment/label/label.object.json"

# Physical floor tile footprint (world units).
GROUND_TILE_WIDTH = 87.1536
GROUND_TILE_LENGTH = 49.7335

CELL_SIZE = 10.0
MAX_CELLS = 250_000


@dataclass(frozen=True)
class MazeConfig:
    rows: int = 0
    cols: int = 0
    cell_size: float = CELL_SIZE
    ground_tile_width: float = GROUND_TILE_WIDTH
    ground_tile_length: float = GROUND_TILE_LENGTH
    max_cells: int = MAX_CELLS
    emit_hints: bool = True

    player_definition: str = PLAYER_DEFINITION
    ground_definition: str = GROUND_DEFINITION
    wall_definition: str = WALL_DEFINITION
    hint_definition: str = HINT_DEFINITION

    def validate(self) -> "MazeConfig":
        validate_size(self.rows, self.cols, self.max_cells)
        if self.cell_size <= 0:
            raise InvalidConfiguration("cell_size must be positive")
        if self.ground_tile_width <= 0 or self.ground_tile_length <= 0:
            raise InvalidConfiguration("ground tile dimensions must be positive")
        return self


def validate_size(rows: int, cols: int, max_cells: int = MAX_CELLS) -> None:
    if isinstance(rows, bool) or isinstance(cols, bool) or not isinstance(rows, int) or not isinstance(cols, int):
        raise InvalidConfiguration(f"maze size must be integers, got rows={rows!r} cols={cols!r}")
    if rows <= 0 or cols <= 0:
        raise InvalidConfiguration(f"maze size has to be set first (rows={rows}, cols={cols})")
    if rows * cols > max_cells:
        raise InvalidConfiguration(f"{rows}x{cols} maze exceeds the {max_cells} cell limit")


@dataclass(frozen=True)
class DebugFlags:
    # Draw the solved path in debug overlays.
    show_way: bool = False


# Global flags (can be swapped by launcher)
FLAGS = DebugFlags()
