#!/usr/bin/env python3
from dataclasses import dataclass, astuple, replace

from goodness_errors import InvalidConfiguration

# =========================
# Hash codes + spreading
# =========================

MASK32 = 0xFFFFFFFF
MIN_SHIFT = 0
MAX_SHIFT = 31
FIELDS = ("a", "b", "c", "d")


@dataclass(frozen=True)
class ShiftState:
    """Shift amounts (a, b, c, d) for the spreading transform."""
    a: int
    b: int
    c: int
    d: int

    def __post_init__(self):
        for name in FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfiguration(f"shift {name} must be an int, got {value!r}")
            if not MIN_SHIFT <= value <= MAX_SHIFT:
                raise InvalidConfiguration(
                    f"shift {name}={value} outside [{MIN_SHIFT}, {MAX_SHIFT}]"
                )

    @classmethod
    def from_tuple(cls, values):
        if len(values) != len(FIELDS):
            raise InvalidConfiguration(f"expected 4 shift amounts, got {len(values)}")
        return cls(*values)

    def as_tuple(self):
        return astuple(self)

    def with_field(self, name, value):
        """Copy with one field changed (validated like any new state)."""
        return replace(self, **{name: value})

    def __str__(self):
        return "{" + ",".join(str(v) for v in self.as_tuple()) + "}"


# The shifts used by the original spreading scheme
REFERENCE_STATE = ShiftState(20, 12, 7, 4)


def base_hash(word: str) -> int:
    """
    Polynomial string hash, the same as Java's String.hashCode():
        s[0]*31^(n-1) + s[1]*31^(n-2) + ... + s[n-1]
    kept as an unsigned 32-bit value. The empty string hashes to 0.
    """
    h = 0
    for ch in word:
        h = (31 * h + ord(ch)) & MASK32
    return h


def bad_hash(word: str) -> int:
    """Sum of character codes. Anagrams always collide."""
    h = 0
    for ch in word:
        h = (h + ord(ch)) & MASK32
    return h


HASHERS = {
    "good": base_hash,
    "bad": bad_hash,
}


def get_hasher(variant: str):
    try:
        return HASHERS[variant]
    except KeyError:
        raise InvalidConfiguration(
            f"unknown hash variant {variant!r} (choose from {', '.join(HASHERS)})"
        ) from None


def hash_words(words, variant: str = "good"):
    """Base hash codes for a word list, computed once and shared read-only."""
    hasher = get_hasher(variant)
    return tuple(hasher(w) for w in words)


def spread(h: int, state: ShiftState) -> int:
    """
    Mix high bits down into the low bits so that codes differing only
    in their upper bits still land in different buckets.
    """
    h = h ^ (h >> state.a) ^ (h >> state.b)
    return h ^ (h >> state.c) ^ (h >> state.d)


def bucket_index(h: int, size: int) -> int:
    # size must be a power of two
    return h & (size - 1)


def is_power_of_two(n) -> bool:
    return isinstance(n, int) and not isinstance(n, bool) and n > 0 and (n & (n - 1)) == 0


def to_unsigned_string(h: int) -> str:
    """32-character bit string of h, handy when eyeballing spread results."""
    return format(h & MASK32, "032b")
