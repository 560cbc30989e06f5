#!/usr/bin/env python3
"""
Record one annealing run iteration by iteration, write the trace to CSV
and plot current + best energy against iteration.

Usage:
    python goodness_benchmark.py --words words --size 4096 --kmax 2000 --seed 7
"""

import argparse
import csv
from pathlib import Path

import matplotlib.pyplot as plt

from goodness_anneal import anneal, make_rng
from goodness_config import CONFIG
from goodness_energy import energy
from goodness_hash import ShiftState, hash_words
from goodness_words import get_words

CSV_FIELDS = [
    "k",
    "temperature",
    "a",
    "b",
    "c",
    "d",
    "energy",
    "accepted",
    "is_new_best",
    "current_energy",
    "best_energy",
]


class TraceRecorder:
    """Trace callback that keeps every snapshot of a run."""

    def __init__(self):
        self.snapshots = []

    def __call__(self, snapshot):
        self.snapshots.append(snapshot)

    def rows(self):
        for s in self.snapshots:
            a, b, c, d = s.proposed.as_tuple()
            yield {
                "k": s.k,
                "temperature": s.temperature,
                "a": a,
                "b": b,
                "c": c,
                "d": d,
                "energy": s.energy,
                "accepted": int(s.accepted),
                "is_new_best": int(s.is_new_best),
                "current_energy": s.current_energy,
                "best_energy": s.best_energy,
            }


def write_trace_csv(recorder: TraceRecorder, csv_path: Path) -> None:
    with Path(csv_path).open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in recorder.rows():
            writer.writerow(row)
    print(f"[bench] wrote CSV to {csv_path}")


def plot_trace(recorder: TraceRecorder, fig_path: Path, reference_energy=None, title=None) -> None:
    ks = [s.k for s in recorder.snapshots]
    current = [s.current_energy for s in recorder.snapshots]
    best = [s.best_energy for s in recorder.snapshots]

    plt.figure()
    plt.plot(ks, current, linestyle="-", linewidth=0.8, label="current energy")
    plt.plot(ks, best, linestyle="--", linewidth=1.5, label="best energy")
    if reference_energy is not None:
        plt.axhline(reference_energy, color="tab:red", linestyle=":", label="reference {20,12,7,4}")
    plt.xlabel("Iteration (k)")
    plt.ylabel("Energy (collisions, lower is better)")
    plt.title(title or "Simulated annealing over hash spreading shifts")
    plt.legend()
    plt.grid(True, which="both", linestyle="--", linewidth=0.5)
    plt.tight_layout()
    plt.savefig(fig_path, dpi=200)
    plt.close()
    print(f"[bench] wrote plot to {fig_path}")


def run_benchmark(
    words,
    size: int,
    kmax: int,
    csv_path: Path,
    fig_path: Path,
    seed=None,
    variant: str = CONFIG["hash_variant"],
    average: bool = CONFIG["average_energy"],
):
    base = hash_words(words, variant)
    s0 = ShiftState.from_tuple(CONFIG["initial_state"])
    reference = ShiftState.from_tuple(CONFIG["reference_state"])
    ref_e = energy(base, reference, size, average=average)

    recorder = TraceRecorder()
    result = anneal(
        base,
        size,
        s0=s0,
        kmax=kmax,
        emax=CONFIG["emax"],
        rng=make_rng(seed),
        average=average,
        trace=recorder,
    )
    print(
        f"[bench] size={size} kmax={kmax}: best {result.best_state} "
        f"energy={result.best_energy:.3f} (reference {ref_e:.3f})"
    )

    write_trace_csv(recorder, csv_path)
    plot_trace(
        recorder,
        fig_path,
        reference_energy=ref_e,
        title=f"Annealing shifts ({variant} hash, size {size})",
    )
    return result, recorder


def main():
    parser = argparse.ArgumentParser(
        description="Record and plot one simulated annealing run."
    )
    parser.add_argument("--words", type=str, default=CONFIG["words_file"], help="Word list file.")
    parser.add_argument("--url", type=str, default=CONFIG["words_url"], help="Download the word list instead.")
    parser.add_argument("--size", type=int, default=CONFIG["table_sizes"][0], help="Table size (power of two).")
    parser.add_argument("--kmax", type=int, default=CONFIG["kmax"], help="Iterations.")
    parser.add_argument("--seed", type=int, default=CONFIG["random_seed"], help="Random seed.")
    parser.add_argument("--hash", type=str, default=CONFIG["hash_variant"], choices=["good", "bad"])
    parser.add_argument("--average", action="store_true", default=CONFIG["average_energy"])
    parser.add_argument("--csv", type=str, default=CONFIG["bench_csv"], help="Output CSV filename.")
    parser.add_argument("--out", type=str, default=CONFIG["bench_png"], help="Output PNG filename.")
    args = parser.parse_args()

    words = get_words(args.words, args.url)
    run_benchmark(
        words,
        args.size,
        args.kmax,
        Path(args.csv),
        Path(args.out),
        seed=args.seed,
        variant=args.hash,
        average=args.average,
    )


if __name__ == "__main__":
    main()
