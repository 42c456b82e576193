"""Autoplay -- a headless forest-rails scene played by a simple script.

Demonstrates:
- Building an Engine from a GameConfig and a seed
- Advancing both cadences on a simulated timeline
- Issuing user actions (rails, fences) with the same injected time
- Listening to simulation signals

The script lays rails along the row farthest from the forest, one cell every
`--lay-every` seconds, fences off the forest edge nearest that row, and
re-taps a finished row to send the next train.

Run: python examples/autoplay.py --seed 7
"""

import argparse
import logging

from forest_rails import BuildMode, Cell, Engine, GameConfig, Orientation, Simulation
from forest_rails.log import setup_logging


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Headless forest-rails autoplay")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed")
    parser.add_argument("--rows", type=int, default=10, help="Grid rows")
    parser.add_argument("--cols", type=int, default=18, help="Grid columns")
    parser.add_argument("--seconds", type=float, default=300.0,
                        help="Simulated seconds before giving up")
    parser.add_argument("--lay-every", type=float, default=0.25,
                        help="Simulated seconds between scripted taps")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser.parse_args()


def pick_row(sim: Simulation) -> int | None:
    """Row with no forest that is farthest from any forest cell."""
    forest_rows = {cell.row for cell in sim.variants()}
    free = [r for r in range(sim.grid.rows) if r not in forest_rows]
    if not free:
        return None
    return max(free, key=lambda r: min(abs(r - fr) for fr in forest_rows))


def scripted_tap(sim: Simulation, row: int, now: float) -> None:
    for cell in sim.grid.row_cells(row):
        if not sim.has_rail(cell):
            sim.build_mode = BuildMode.RAIL
            sim.tap(cell, now)
            return
    # Row complete: fence the forest edge closest to it, then resend a train.
    sim.build_mode = BuildMode.FENCE
    for cell in sorted(sim.frontier(), key=lambda c: abs(c.row - row)):
        if sim.tap(cell, now):
            break
    if not any(t.row == row for t in sim.trains()):
        sim.place_rail(Cell(row, 0), now)


def main() -> None:
    args = parse_args()
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    config = GameConfig(rows=args.rows, cols=args.cols)
    engine = Engine(config, seed=args.seed)
    sim = engine.simulation
    sim.fence_orientation = Orientation.HORIZONTAL

    sim.signals.subscribe(
        "train_completed",
        lambda name, data: print(f"  train {data['train'].id} arrived ({data['completed']} done)"),
    )

    print(f"=== Autoplay {config.rows}x{config.cols}, seed {sim.seed} ===\n")
    engine.start(0.0)

    now = 0.0
    next_tap = 0.0
    row = pick_row(sim)
    while now < args.seconds and not sim.finished:
        now += config.pulse_interval
        engine.advance(now)
        if now >= next_tap and row is not None:
            if any(sim.is_forest(c) for c in sim.grid.row_cells(row)) and not sim.trains():
                row = pick_row(sim)
            if row is not None:
                scripted_tap(sim, row, now)
            next_tap = now + args.lay_every
    engine.stop()

    outcome = "won" if sim.won else "lost" if sim.lost else "undecided"
    print(f"\nScene {outcome} at t={now:.2f}s: "
          f"{sim.trains_completed} trains, {sim.forest_size()}/{config.area} forest cells.")


if __name__ == "__main__":
    main()
