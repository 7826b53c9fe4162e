"""Benchmark placement search latency across representative draw rows."""

from __future__ import annotations

import argparse
import json
import time

from slingo.config import DEFAULT_CONFIG, SlingoConfig
from slingo.models.board import Board, random_board_numbers
from slingo.models.draw import DrawRow
from slingo.solver.search import search_best_placement

# name -> (covered positions, draw row labels)
BENCHMARK_CASES: dict[str, tuple[list[list[int]], list[str]]] = {
    "single_wild": (
        [[0, 0], [1, 1], [2, 2]],
        ["wild", "none", "none", "none", "none"],
    ),
    "all_wilds": (
        [[0, 0], [1, 3], [2, 2], [3, 3]],
        ["wild", "wild", "wild", "wild", "wild"],
    ),
    "diagonal_setup": (
        [[0, 0], [1, 3], [2, 2], [3, 3]],
        ["super_wild", "wild", "none", "none", "none"],
    ),
    "four_super_wilds_plus_wild": (
        [],
        ["super_wild", "super_wild", "super_wild", "super_wild", "wild"],
    ),
    "five_super_wilds": (
        [],
        ["super_wild", "super_wild", "super_wild", "super_wild", "super_wild"],
    ),
}


def _pct(sorted_vals: list[float], pct: int) -> float:
    if not sorted_vals:
        return 0.0
    idx = int(round((pct / 100) * (len(sorted_vals) - 1)))
    return sorted_vals[idx]


def run_benchmark(iterations: int = 10, config: SlingoConfig = DEFAULT_CONFIG) -> dict:
    out: dict = {}
    numbers = random_board_numbers(config.board_size)
    start_all = time.perf_counter()

    for name, (covered, labels) in BENCHMARK_CASES.items():
        board = Board.from_positions(covered, numbers, size=config.board_size)
        draw_row = DrawRow.from_labels(labels, config.board_size)
        timings: list[float] = []
        mode = None
        candidates = 0
        best = 0.0

        for _ in range(iterations):
            t0 = time.perf_counter()
            result = search_best_placement(board, draw_row, config)
            timings.append((time.perf_counter() - t0) * 1000)
            if result is not None:
                mode = result.mode.value
                candidates = result.candidates_evaluated
                best = result.score

        s = sorted(timings)
        out[name] = {
            "mode": mode,
            "candidates": candidates,
            "best_score": round(best, 1),
            "mean_ms": round(sum(s) / len(s), 2) if s else 0,
            "p95_ms": round(_pct(s, 95), 2),
            "max_ms": round(max(s), 2) if s else 0,
        }

    out["meta"] = {
        "iterations": iterations,
        "total_elapsed_sec": round(time.perf_counter() - start_all, 2),
    }
    return out


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark Slingo placement search")
    parser.add_argument("--iterations", type=int, default=10, help="Searches per case")
    parser.add_argument("--json", action="store_true", help="Print raw JSON")
    args = parser.parse_args()

    if args.iterations < 1:
        parser.error("--iterations must be at least 1")

    result = run_benchmark(iterations=args.iterations)
    if args.json:
        print(json.dumps(result, indent=2))
        return

    for name in BENCHMARK_CASES:
        r = result[name]
        print(f"{name:<28} {r['mode'] or '-':<11} {r['candidates']:>7} candidates  "
              f"mean {r['mean_ms']:>8.2f}ms  p95 {r['p95_ms']:>8.2f}ms  max {r['max_ms']:>8.2f}ms")
    print(f"total {result['meta']['total_elapsed_sec']}s")


if __name__ == "__main__":
    main()
