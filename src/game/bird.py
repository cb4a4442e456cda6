# src/game/bird.py
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Tuple
from .config import (
    BIRD_START_X, BIRD_START_Y, BIRD_W, BIRD_H, GRAVITY_Y, FLAP_VELOCITY, COLOR_HIT
)
from .physics import Body

@dataclass
class Bird:
    """
    The actor: a gravity body clamped to the world bounds.
    - body.y is the top edge (origin 0,0)
    - alive goes False once on game over and the body is tinted
    """
    body: Body
    flap_velocity: float = FLAP_VELOCITY
    alive: bool = True

    @classmethod
    def spawn(cls, x: float = BIRD_START_X, y: float = BIRD_START_Y) -> "Bird":
        body = Body(x=x, y=y, width=BIRD_W, height=BIRD_H,
                    gravity_y=GRAVITY_Y, collide_world_bounds=True)
        return cls(body=body)

    def flap(self):
        self.body.vy = -self.flap_velocity

    def mark_hit(self):
        self.alive = False
        self.body.tint = COLOR_HIT

    def draw(self, surf: pygame.Surface, color: Tuple[int, int, int]):
        r = self.body.rect
        pygame.draw.ellipse(surf, self.body.tint or color, r)
        # eye
        pygame.draw.circle(surf, (0, 0, 0), (r.right - 8, r.top + 8), 3)
