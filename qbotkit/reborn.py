"""Reincarnation simulator: weighted picks of birthplace and sex."""

from __future__ import annotations

import bisect
import json
from itertools import accumulate
from pathlib import Path
from typing import Any, Iterable, Protocol


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


class WeightedChooser:
    """Pick items with probability proportional to integer weights."""

    def __init__(self, choices: Iterable[tuple[Any, int]]):
        ordered = sorted(choices, key=lambda choice: choice[1])
        if any(weight < 0 for _, weight in ordered):
            raise ValueError("weights must not be negative")
        self.items = [item for item, _ in ordered]
        self.totals = list(accumulate(int(weight) for _, weight in ordered))
        if not self.totals or self.totals[-1] <= 0:
            raise ValueError("no valid choices")

    def pick(self, rng: RandomSource) -> Any:
        roll = rng.randrange(self.totals[-1]) + 1
        return self.items[bisect.bisect_left(self.totals, roll)]


GENDERS = WeightedChooser(
    [("男孩子", 50707), ("女孩子", 48292), ("雌雄同体", 1001)]
)

_SURVIVAL_THRESHOLD = 1 << 27


def load_rates(path) -> list[tuple[str, float]]:
    """Read ``[{"name": ..., "weight": ...}, ...]`` from a JSON file."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return [(entry["name"], float(entry["weight"])) for entry in data]


def area_chooser(rates: Iterable[tuple[str, float]]) -> WeightedChooser:
    """Build a chooser over areas from fractional birth rates."""
    return WeightedChooser((name, int(weight * 1e9)) for name, weight in rates)


def reborn(areas: WeightedChooser, rng: RandomSource) -> str:
    """Roll a new life and describe it."""
    if rng.randrange(1 << 31) > _SURVIVAL_THRESHOLD:
        return f"投胎成功！\n您出生在 {areas.pick(rng)}, 是 {GENDERS.pick(rng)}。"
    return "投胎失败！\n您没能活到出生，祝您下次好运！"