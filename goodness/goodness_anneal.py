#!/usr/bin/env python3
"""
Simulated annealing over the four spreading shifts.

    s <- s0; e <- E(s)
    sbest <- s; ebest <- e
    k <- 0
    while k < kmax and e > emax:
        T <- temperature(k, kmax)
        snew <- neighbour(s)
        enew <- E(snew)
        if P(e, enew, T) > random(): s, e <- snew, enew
        if enew < ebest: sbest, ebest <- snew, enew
        k <- k + 1
    return sbest

Early iterations run hot and take almost any move; later ones mostly
keep moves that lower the collision count.
"""
import math
import random
import time
from dataclasses import dataclass
from typing import Callable, Optional

from goodness_config import CONFIG
from goodness_energy import energy
from goodness_errors import InputUnavailable, InvalidConfiguration
from goodness_hash import FIELDS, MAX_SHIFT, MIN_SHIFT, ShiftState, is_power_of_two

# =========================
# Schedule + acceptance
# =========================

BASE_TEMPERATURE = 100.0


def make_rng(seed=None) -> random.Random:
    """Random source for one run; seeded from the clock when seed is None."""
    if seed is None:
        seed = time.time_ns()
    return random.Random(seed)


def temperature(k: int, kmax: int) -> float:
    """T = 100 / (k / kmax). Infinite on the first iteration."""
    if k <= 0:
        return math.inf
    return BASE_TEMPERATURE * kmax / k


def accept_probability(e: float, enew: float, t: float) -> float:
    if enew < e:
        return 1.0
    if t == math.inf:
        return 1.0
    if t <= 0:
        return 0.0
    return math.exp(-(enew - e) / t)


def clamp_shift(value: int) -> int:
    return max(MIN_SHIFT, min(MAX_SHIFT, value))


def neighbour(state: ShiftState, rng: random.Random, max_step: int = CONFIG["max_step"]) -> ShiftState:
    """Nudge one random field up or down by 1..max_step, saturating at the bounds."""
    name = rng.choice(FIELDS)
    direction = rng.choice((-1, 1))
    magnitude = rng.randint(1, max_step)
    value = clamp_shift(getattr(state, name) + direction * magnitude)
    return state.with_field(name, value)


# =========================
# Run state
# =========================


@dataclass(frozen=True)
class IterationSnapshot:
    k: int
    temperature: float
    proposed: ShiftState
    energy: float
    accepted: bool
    is_new_best: bool
    current_energy: float
    best_energy: float


@dataclass(frozen=True)
class AnnealResult:
    best_state: ShiftState
    best_energy: float
    final_state: ShiftState
    final_energy: float
    iterations: int
    accepted: int
    size: int


class AnnealingRun:
    """
    One annealing invocation over a fixed set of base hashes.
    All configuration is checked here, before any iteration runs.
    """

    def __init__(
        self,
        base_hashes,
        size: int,
        s0=None,
        kmax: int = CONFIG["kmax"],
        emax: float = CONFIG["emax"],
        rng: Optional[random.Random] = None,
        average: bool = CONFIG["average_energy"],
        max_step: int = CONFIG["max_step"],
        trace: Optional[Callable[[IterationSnapshot], None]] = None,
    ):
        if base_hashes is None:
            raise InputUnavailable("no base hashes to anneal over")
        if not is_power_of_two(size):
            raise InvalidConfiguration(f"table size must be a power of two, got {size!r}")
        if isinstance(kmax, bool) or not isinstance(kmax, int) or kmax < 0:
            raise InvalidConfiguration(f"kmax must be a non-negative int, got {kmax!r}")
        if isinstance(max_step, bool) or not isinstance(max_step, int) or max_step < 1:
            raise InvalidConfiguration(f"max_step must be a positive int, got {max_step!r}")
        if isinstance(emax, bool) or not isinstance(emax, (int, float)) or math.isnan(emax):
            raise InvalidConfiguration(f"emax must be a number, got {emax!r}")
        if s0 is None:
            s0 = ShiftState.from_tuple(CONFIG["initial_state"])
        elif not isinstance(s0, ShiftState):
            try:
                values = tuple(s0)
            except TypeError:
                raise InvalidConfiguration(f"initial state must be four shifts, got {s0!r}") from None
            s0 = ShiftState.from_tuple(values)

        self.base_hashes = tuple(base_hashes)
        self.size = size
        self.kmax = kmax
        self.emax = emax
        self.rng = rng if rng is not None else make_rng(CONFIG["random_seed"])
        self.average = average
        self.max_step = max_step
        self.trace = trace

        self.k = 0
        self.s = s0
        self.e = self.energy(s0)
        self.sbest = s0
        self.ebest = self.e
        self.accepted = 0

    def energy(self, state: ShiftState) -> float:
        return energy(self.base_hashes, state, self.size, average=self.average)

    @property
    def finished(self) -> bool:
        return self.k >= self.kmax or self.e <= self.emax

    def step(self) -> IterationSnapshot:
        t = temperature(self.k, self.kmax)
        snew = neighbour(self.s, self.rng, self.max_step)
        enew = self.energy(snew)

        accepted = accept_probability(self.e, enew, t) > self.rng.random()
        if accepted:
            self.s, self.e = snew, enew
            self.accepted += 1

        # compared against the proposal, whether or not it was taken
        is_new_best = enew < self.ebest
        if is_new_best:
            self.sbest, self.ebest = snew, enew

        snapshot = IterationSnapshot(
            k=self.k,
            temperature=t,
            proposed=snew,
            energy=enew,
            accepted=accepted,
            is_new_best=is_new_best,
            current_energy=self.e,
            best_energy=self.ebest,
        )
        self.k += 1
        return snapshot

    def run(self) -> AnnealResult:
        while not self.finished:
            snapshot = self.step()
            if self.trace is not None:
                self.trace(snapshot)
        return self.result()

    def result(self) -> AnnealResult:
        return AnnealResult(
            best_state=self.sbest,
            best_energy=self.ebest,
            final_state=self.s,
            final_energy=self.e,
            iterations=self.k,
            accepted=self.accepted,
            size=self.size,
        )


def anneal(base_hashes, size, s0=None, **kwargs) -> AnnealResult:
    """Build an AnnealingRun and run it to completion."""
    return AnnealingRun(base_hashes, size, s0=s0, **kwargs).run()
