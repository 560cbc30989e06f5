#!/usr/bin/env python3
from collections import Counter

from goodness_errors import InputUnavailable
from goodness_hash import MASK32, bucket_index, hash_words, spread

# =========================
# Energy (collision count)
# =========================

# Returned by energy_from_file when the hashed file cannot be read
ENERGY_UNAVAILABLE = -1.0


def collision_table(base_hashes, state, size):
    """Bucket index -> number of codes that landed there."""
    return Counter(bucket_index(spread(h, state), size) for h in base_hashes)


def energy(base_hashes, state, size, average=False) -> float:
    """
    Collisions for one shift state: every occupant of a bucket after the
    first counts as one collision. With average=True the total is divided
    by the number of occupied buckets.
    """
    table = collision_table(base_hashes, state, size)
    collisions = sum(count - 1 for count in table.values())
    if not average:
        return float(collisions)
    if not table:
        return 0.0
    return collisions / len(table)


def read_hashed_file(path):
    """Whitespace-separated unsigned 32-bit hash codes from a hashed scratch file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            codes = tuple(int(tok) for tok in f.read().split())
    except (OSError, ValueError) as e:
        raise InputUnavailable(f"cannot read hashed file {path}: {e}") from e
    for code in codes:
        if not 0 <= code <= MASK32:
            raise InputUnavailable(f"hashed file {path} holds {code}, not an unsigned 32-bit code")
    return codes


def write_hashed_file(words, path, variant="good"):
    """Write one base hash per line. Returns the codes written."""
    codes = hash_words(words, variant)
    try:
        with open(path, "w", encoding="utf-8") as f:
            for code in codes:
                f.write(f"{code}\n")
    except OSError as e:
        raise InputUnavailable(f"cannot write hashed file {path}: {e}") from e
    return codes


def energy_from_file(path, state, size, average=False) -> float:
    """
    Energy of the codes stored in a hashed file, or ENERGY_UNAVAILABLE
    (-1.0) when the file cannot be read. Negative means "failed", never
    "no collisions".
    """
    try:
        codes = read_hashed_file(path)
    except InputUnavailable:
        return ENERGY_UNAVAILABLE
    return energy(codes, state, size, average=average)
