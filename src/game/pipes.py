# src/game/pipes.py
from __future__ import annotations
import logging
import random
from typing import Callable, List, Optional, Tuple
import pygame
from .config import (
    HEIGHT, PIPES_TO_RENDER, PIPE_W, PIPE_H, PIPE_VELOCITY_X, PIPE_EDGE_MARGIN
)
from .difficulty import DifficultyLevel
from .physics import Body, BodyGroup

logger = logging.getLogger(__name__)


def place_pair(upper: Body, lower: Body, difficulty: DifficultyLevel, rightmost_x: float,
               rng: random.Random, play_height: int = HEIGHT,
               margin: int = PIPE_EDGE_MARGIN) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """
    Move a pair ahead of the rightmost pipe.
    upper is anchored on its bottom edge, lower on its top edge, so the
    opening spans [y, y + gap]. Bounds are inclusive integers.
    """
    gap = rng.randint(*difficulty.pipe_opening_range)
    gap_top = rng.randint(margin, play_height - margin - gap)
    spacing = rng.randint(*difficulty.pipe_distance_range)

    upper.x = rightmost_x + spacing
    upper.y = gap_top
    lower.x = upper.x
    lower.y = gap_top + gap
    return (upper.x, upper.y), (lower.x, lower.y)


class PipePool:
    """
    Fixed pool of pipe pairs scrolling left. Pipes are created once
    (upper, lower, upper, lower, ...) and only ever repositioned.
    """
    def __init__(self, rng: random.Random, difficulty: DifficultyLevel,
                 pairs: int = PIPES_TO_RENDER, velocity_x: float = PIPE_VELOCITY_X):
        self.rng = rng
        self.group = BodyGroup()
        for _ in range(pairs):
            upper = self.group.create(0, 0, PIPE_W, PIPE_H, origin_y=1.0, immovable=True)
            lower = self.group.create(0, 0, PIPE_W, PIPE_H, origin_y=0.0, immovable=True)
            self.place(upper, lower, difficulty)
        self.group.set_velocity_x(velocity_x)

    @property
    def pipes(self) -> List[Body]:
        return self.group.children

    def pairs(self) -> List[Tuple[Body, Body]]:
        p = self.group.children
        return [(p[i], p[i + 1]) for i in range(0, len(p), 2)]

    def rightmost_x(self) -> float:
        return max((p.x for p in self.group), default=0.0)

    def place(self, upper: Body, lower: Body, difficulty: DifficultyLevel):
        return place_pair(upper, lower, difficulty, max(0.0, self.rightmost_x()), self.rng)

    def recycle(self, difficulty: DifficultyLevel,
                on_recycled: Optional[Callable[[Body, Body], None]] = None) -> int:
        """
        One sweep: the first two pipes found fully past the left edge are
        re-placed, then on_recycled runs. Returns the number of recycles (0 or 1).
        """
        ready: List[Body] = []
        for pipe in self.group:
            if pipe.right <= 0:
                ready.append(pipe)
                if len(ready) == 2:
                    self.place(ready[0], ready[1], difficulty)
                    logger.debug("recycled pair -> x=%.0f gap=[%.0f, %.0f]",
                                 ready[0].x, ready[0].y, ready[1].y)
                    if on_recycled is not None:
                        on_recycled(ready[0], ready[1])
                    return 1
        return 0

    def next_pair_ahead(self, x: float) -> Optional[Tuple[Body, Body]]:
        """Closest pair whose right edge is still at or past x."""
        ahead = [pair for pair in self.pairs() if pair[0].right >= x]
        if not ahead:
            return None
        return min(ahead, key=lambda pair: pair[0].x)

    def draw(self, surf: pygame.Surface, color: Tuple[int, int, int],
             edge: Tuple[int, int, int]):
        for pipe in self.group:
            r = pipe.rect
            pygame.draw.rect(surf, color, r)
            pygame.draw.rect(surf, edge, r, width=2)
