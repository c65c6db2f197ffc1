#!/usr/bin/env python3
# Minimal interactive maze viewer (no gameplay).
# - R: regenerate with the next maze from the same random state
# - W: toggle the hint path (show_way)
# - Up/Down: grow/shrink rows, Right/Left: grow/shrink cols
# - 60 Hz fixed loop

import argparse, logging

import pygame

from mazeway.config import DebugFlags, MazeConfig
from mazeway.engine.level import InMemoryLevel
from mazeway.engine.orchestrator import MazeOrchestrator
from mazeway.errors import MazeError
from mazeway.render.surface import draw_maze, surface_size
from mazeway.rng import PMRandom


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--rows", type=int, default=15)
    ap.add_argument("--cols", type=int, default=20)
    ap.add_argument("--cell", type=int, default=24, help="Cell size in pixels")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--show-way", action="store_true")
    ap.add_argument("--verbose", "-v", action="store_true")
    args = ap.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(name)s] %(levelname)s %(message)s")

    rng = PMRandom(args.seed) if args.seed is not None else None
    orch = MazeOrchestrator(MazeConfig(rows=args.rows, cols=args.cols), rng=rng)
    level = InMemoryLevel()
    flags = DebugFlags(show_way=args.show_way)

    def regenerate():
        try:
            report = orch.generate(level)
        except MazeError as e:
            print(f"[viewer] generation failed: {e}")
            return None
        return report

    pygame.init()
    clock = pygame.time.Clock()
    report = regenerate()
    if report is None:
        raise SystemExit(1)
    screen = pygame.display.set_mode(surface_size(orch.doors, args.cell))

    running = True
    while running:
        resize = False
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
            elif ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_ESCAPE:
                    running = False
                elif ev.key == pygame.K_r:
                    report = regenerate() or report
                elif ev.key == pygame.K_w:
                    flags = DebugFlags(show_way=not flags.show_way)
                elif ev.key in (pygame.K_UP, pygame.K_DOWN, pygame.K_RIGHT, pygame.K_LEFT):
                    rows, cols = orch.rows, orch.cols
                    if ev.key == pygame.K_UP:
                        rows += 1
                    elif ev.key == pygame.K_DOWN:
                        rows = max(1, rows - 1)
                    elif ev.key == pygame.K_RIGHT:
                        cols += 1
                    else:
                        cols = max(1, cols - 1)
                    orch.configure(rows, cols)
                    report = regenerate() or report
                    resize = True

        if resize:
            screen = pygame.display.set_mode(surface_size(orch.doors, args.cell))

        draw_maze(screen, orch.doors, orch.path, cell_px=args.cell, flags=flags)
        skipped = len(report.skipped) if report else 0
        pygame.display.set_caption(
            f"Maze Viewer — {orch.rows}x{orch.cols}  path {len(orch.path)}  entities {len(level)}"
            f"  skipped {skipped}  WAY:{flags.show_way}"
        )
        pygame.display.flip()
        clock.tick(60)

    pygame.quit()


if __name__ == "__main__":
    main()
