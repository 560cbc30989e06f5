#!/usr/bin/env python3
# Experiment setup for the shift-parameter annealing runs
CONFIG = {
    # None -> seed from wall-clock time
    "random_seed": None,

    # Annealing budget
    "kmax": 1000,
    "emax": 0.0,
    "max_step": 6,             # neighbour moves a field by 1..max_step

    # Table sizes to search (must be powers of two)
    "table_sizes": [1024, 4096, 16384, 65536, 1048576],

    # Hashing
    "hash_variant": "good",    # "good" (31*h + c) or "bad" (h + c)
    "average_energy": False,   # True -> divide collisions by occupied buckets

    # Shift states as (a, b, c, d)
    "initial_state": (20, 12, 7, 4),
    "reference_state": (20, 12, 7, 4),

    # Word source
    "words_file": "words",
    "words_url": None,         # e.g. a raw text word list; overrides words_file
    "hashed_file": "hashed",

    # Logging
    "verbose": False,          # print every iteration ("accepted"/"not accepted")

    # Benchmark outputs
    "bench_csv": "anneal_trace.csv",
    "bench_png": "anneal_trace.png",
}
