"""Pytest configuration - headless plotting and shared word-list fixtures."""
from __future__ import annotations

import os

import pytest

os.environ.setdefault("MPLBACKEND", "Agg")


SAMPLE_WORDS = [
    "the", "quick", "brown", "fox", "jumps", "over", "lazy", "dog",
    "listen", "silent", "enlist", "tinsel", "stone", "tones", "notes", "onset",
    "alpha", "beta", "gamma", "delta", "epsilon", "zeta", "eta", "theta",
    "iota", "kappa", "lambda", "mu", "nu", "xi", "omicron", "pi",
    "rho", "sigma", "tau", "upsilon", "phi", "chi", "psi", "omega",
    "apple", "banana", "cherry", "damson", "elder", "fig", "grape", "hazel",
]


@pytest.fixture
def sample_words():
    return list(SAMPLE_WORDS)


@pytest.fixture
def words_file(tmp_path):
    """A word list on disk with mixed whitespace between words."""
    path = tmp_path / "words"
    lines = []
    for i in range(0, len(SAMPLE_WORDS), 4):
        lines.append("  ".join(SAMPLE_WORDS[i:i + 4]))
    path.write_text("\n".join(lines) + "\n\t\n", encoding="utf-8")
    return path
