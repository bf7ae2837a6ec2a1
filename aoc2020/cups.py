"""
cups.py - Day 23 cup game on a successor array

The ring is one flat buffer indexed by cup value (label - 1): slot v holds the
value clockwise of v. Picking up three cups and splicing them back in touches
four slots, so each round is O(1) however many cups there are.
"""
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .errors import CupSeedError

PICK_UP = 3
MIN_CUPS = PICK_UP + 1


def parse_seed(seed: str) -> List[int]:
    """Seed digits as 0-based values; labels must be exactly 1..len(seed)."""
    seed = seed.strip()
    if not seed:
        raise CupSeedError("Empty cup seed")

    values = []
    for position, char in enumerate(seed):
        if not ("0" <= char <= "9"):
            raise CupSeedError(f"position {position}: {char!r} is not a digit")
        if char == "0":
            raise CupSeedError(f"position {position}: cup label 0 outside 1..9")
        values.append(int(char) - 1)

    if sorted(values) != list(range(len(values))):
        raise CupSeedError(
            f"Seed {seed!r} must use each label 1..{len(values)} exactly once"
        )
    return values


class CupRing:
    def __init__(self, seed: str, length: Optional[int] = None):
        values = parse_seed(seed)
        digits = len(values)
        length = digits if length is None else length
        if length < digits:
            raise CupSeedError(f"Ring of {length} cups is shorter than the seed ({digits})")
        if length < MIN_CUPS:
            raise CupSeedError(f"Ring needs at least {MIN_CUPS} cups, got {length}")

        order = np.concatenate([
            np.asarray(values, dtype=np.int64),
            np.arange(digits, length, dtype=np.int64),
        ])
        successors = np.empty(length, dtype=np.int64)
        successors[order] = np.roll(order, -1)

        # The round loop indexes a plain list
        self._next: List[int] = successors.tolist()
        self.length = length
        self.current = int(order[0])
        self.rounds_played = 0

    def __len__(self):
        return self.length

    def __repr__(self):
        return (f"CupRing(length={self.length}, current={self.current_label}, "
                f"rounds_played={self.rounds_played})")

    @property
    def current_label(self) -> int:
        return self.current + 1

    @property
    def successors(self) -> np.ndarray:
        """Copy of the successor buffer (0-based values)."""
        return np.array(self._next, dtype=np.int64)

    def play_round(self):
        nxt = self._next
        current = self.current
        a = nxt[current]
        b = nxt[a]
        c = nxt[b]
        tail = nxt[c]

        destination = (current - 1) % self.length
        while destination in (a, b, c):
            destination = (destination - 1) % self.length

        nxt[current] = tail
        nxt[c] = nxt[destination]
        nxt[destination] = a
        self.current = nxt[current]
        self.rounds_played += 1

    def play(self, rounds: int):
        """Run ``rounds`` rounds; same transition as play_round with locals hoisted."""
        nxt = self._next
        last = self.length - 1
        current = self.current
        for _ in range(rounds):
            a = nxt[current]
            b = nxt[a]
            c = nxt[b]
            destination = current - 1 if current else last
            while destination == a or destination == b or destination == c:
                destination = destination - 1 if destination else last
            nxt[current] = nxt[c]
            nxt[c] = nxt[destination]
            nxt[destination] = a
            current = nxt[current]
        self.current = current
        self.rounds_played += rounds

    def labels_from(self, label: int, count: int) -> List[int]:
        """``count`` labels clockwise starting with ``label`` itself."""
        if not 1 <= label <= self.length:
            raise ValueError(f"Label {label} outside 1..{self.length}")
        labels = []
        value = label - 1
        for _ in range(count):
            labels.append(value + 1)
            value = self._next[value]
        return labels

    def labels_after_one(self) -> str:
        """Labels clockwise after cup 1, concatenated, stopping before cup 1."""
        return "".join(str(label) for label in self.labels_from(1, self.length)[1:])

    def product_after_one(self) -> int:
        first = self._next[0]
        second = self._next[first]
        return (first + 1) * (second + 1)


@dataclass
class CupGameConfig:
    cups: Optional[int] = None     # None: as many cups as seed digits
    rounds: int = 100
    progress_every: int = 1_000_000

    @classmethod
    def small_game(cls):
        """Part one: seed cups only, 100 rounds."""
        return cls(cups=None, rounds=100)

    @classmethod
    def large_game(cls):
        """Part two: one million cups, ten million rounds."""
        return cls(cups=1_000_000, rounds=10_000_000)


def play_cup_game(
    seed: str,
    config: Optional[CupGameConfig] = None,
    verbose: bool = False
) -> CupRing:
    """Build a ring from ``seed`` and play it out."""
    config = config or CupGameConfig.small_game()
    ring = CupRing(seed, config.cups)

    if not verbose:
        ring.play(config.rounds)
        return ring

    print(f"Playing {config.rounds} rounds on {ring.length} cups...")
    remaining = config.rounds
    while remaining > 0:
        chunk = min(config.progress_every, remaining)
        ring.play(chunk)
        remaining -= chunk
        print(f"  round {ring.rounds_played}/{config.rounds}")
    return ring
