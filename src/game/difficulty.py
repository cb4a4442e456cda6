# src/game/difficulty.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Mapping, Tuple
from .config import (
    HEIGHT, PIPE_EDGE_MARGIN, DIFFICULTY_ORDER, DIFFICULTY_TABLE, DIFFICULTY_THRESHOLDS
)

Range = Tuple[int, int]

@dataclass(frozen=True)
class DifficultyLevel:
    name: str
    rank: int
    pipe_distance_range: Range
    pipe_opening_range: Range


def _check_range(name: str, label: str, rng: Range):
    lo, hi = rng
    if lo > hi or lo <= 0:
        raise ValueError(f"{name}: invalid {label} {rng}")


def build_levels(table: Mapping[str, Tuple[Range, Range]] = DIFFICULTY_TABLE,
                 order: Tuple[str, ...] = DIFFICULTY_ORDER,
                 play_height: int = HEIGHT,
                 margin: int = PIPE_EDGE_MARGIN) -> Dict[str, DifficultyLevel]:
    """
    Build the level table, rejecting opening ranges whose widest gap
    would leave no room for the vertical margins.
    """
    levels: Dict[str, DifficultyLevel] = {}
    for rank, name in enumerate(order):
        if name not in table:
            raise ValueError(f"difficulty {name!r} missing from table")
        distance, opening = table[name]
        _check_range(name, "pipe distance range", distance)
        _check_range(name, "pipe opening range", opening)
        if play_height - margin - opening[1] < margin:
            raise ValueError(
                f"{name}: opening {opening[1]} leaves no vertical room in a {play_height}px field"
            )
        levels[name] = DifficultyLevel(name, rank, tuple(distance), tuple(opening))
    return levels


LEVELS: Dict[str, DifficultyLevel] = build_levels()
EASY = LEVELS["easy"]


def get_level(name: str) -> DifficultyLevel:
    try:
        return LEVELS[name]
    except KeyError:
        raise ValueError(f"unknown difficulty {name!r}") from None


def next_difficulty(current: DifficultyLevel, score: int) -> DifficultyLevel:
    """Level after reaching `score`: thresholds only ever raise the level."""
    target_name = DIFFICULTY_THRESHOLDS.get(score)
    if target_name is None:
        return current
    target = get_level(target_name)
    return target if target.rank > current.rank else current
