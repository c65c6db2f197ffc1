#!/usr/bin/env python3
import argparse, csv, logging, os, sys

from mazeway.config import DebugFlags, MazeConfig
from mazeway.errors import MazeError
from mazeway.mapgen.generator import generate_layout
from mazeway.render.overlay import ascii_maze, render_maze, save_png
from mazeway.rng import PMRandom


def make_layout(args):
    cfg = MazeConfig(rows=args.rows, cols=args.cols, emit_hints=not args.no_hints)
    rng = PMRandom(args.seed) if args.seed is not None else PMRandom.from_time()
    return generate_layout(cfg, rng)


def write_tsv(rows, path):
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, 'w', newline='') as f:
        w = csv.writer(f, delimiter='\t')
        for r in rows:
            w.writerow(r)


def cmd_emit(args):
    layout = make_layout(args)
    write_tsv(layout.doors.to_rows(), args.out)
    print(f"Wrote {args.out}")


def cmd_solve(args):
    layout = make_layout(args)
    for p in layout.path:
        print(f"{p.row},{p.col}")


def cmd_ascii(args):
    layout = make_layout(args)
    print(ascii_maze(layout.doors, layout.path if args.show_way else ()))


def cmd_png(args):
    layout = make_layout(args)
    img = render_maze(layout.doors, layout.path, cell_px=args.cell, flags=DebugFlags(show_way=args.show_way))
    save_png(img, args.out)
    print(f"Wrote {args.out}")


def cmd_place(args):
    layout = make_layout(args)
    rows = [["role", "index", "name", "x", "y", "z", "qw", "qx", "qy", "qz"]]
    for req in layout.requests:
        rows.append([req.role, req.index, req.name,
                     *(f"{v:.4f}" for v in req.position),
                     *(f"{v:.4f}" for v in req.rotation)])
    if args.out:
        write_tsv(rows, args.out)
        print(f"Wrote {len(rows) - 1} placements to {args.out}")
    else:
        csv.writer(sys.stdout, delimiter='\t').writerows(rows)


def build_parser():
    p = argparse.ArgumentParser(description="Generate and inspect spanning-tree mazes")
    p.add_argument('--verbose', '-v', action='store_true')
    sub = p.add_subparsers(dest='cmd', required=True)

    def common(sp):
        sp.add_argument('--rows', type=int, required=True)
        sp.add_argument('--cols', type=int, required=True)
        sp.add_argument('--seed', type=int, default=None, help="PMRandom seed (clock-seeded if omitted)")
        sp.add_argument('--no-hints', action='store_true', help="Skip hint marker placements")

    p1 = sub.add_parser('emit', help="Write per-cell door masks as TSV")
    common(p1)
    p1.add_argument('--out', type=str, required=True)
    p1.set_defaults(func=cmd_emit)

    p2 = sub.add_parser('solve', help="Print the corner-to-corner path")
    common(p2)
    p2.set_defaults(func=cmd_solve)

    p3 = sub.add_parser('ascii', help="Print a text drawing")
    common(p3)
    p3.add_argument('--show-way', action='store_true')
    p3.set_defaults(func=cmd_ascii)

    p4 = sub.add_parser('png', help="Render a PNG with Pillow")
    common(p4)
    p4.add_argument('--out', type=str, required=True)
    p4.add_argument('--cell', type=int, default=16, help="Cell size in pixels")
    p4.add_argument('--show-way', action='store_true')
    p4.set_defaults(func=cmd_png)

    p5 = sub.add_parser('place', help="List world placements as TSV")
    common(p5)
    p5.add_argument('--out', type=str, default=None)
    p5.set_defaults(func=cmd_place)
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="[%(name)s] %(levelname)s %(message)s")
    try:
        args.func(args)
    except MazeError as e:
        print(f"[mazetool] {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == '__main__':
    sys.exit(main())
