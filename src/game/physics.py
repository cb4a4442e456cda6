# src/game/physics.py
from __future__ import annotations
import pygame
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple
from .config import WIDTH, HEIGHT

@dataclass
class Body:
    """
    Arcade body with an anchor point:
    - (x, y) is the anchor position in world space
    - origin_x/origin_y place the anchor inside the box (0 = left/top, 1 = right/bottom)
    Gravity only applies to non-immovable bodies; every body integrates its velocity.
    """
    x: float
    y: float
    width: int
    height: int
    origin_x: float = 0.0
    origin_y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    gravity_y: float = 0.0
    immovable: bool = False
    collide_world_bounds: bool = False
    tint: Optional[Tuple[int, int, int]] = None

    @property
    def left(self) -> float:
        return self.x - self.origin_x * self.width

    @property
    def top(self) -> float:
        return self.y - self.origin_y * self.height

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.left), int(self.top), self.width, self.height)

    def overlaps(self, other: "Body") -> bool:
        return (self.left < other.right and self.right > other.left
                and self.top < other.bottom and self.bottom > other.top)

    def integrate(self, dt: float):
        if not self.immovable:
            self.vy += self.gravity_y * dt
        self.x += self.vx * dt
        self.y += self.vy * dt

    def clamp_to(self, width: float, height: float):
        """Keep the box inside [0,width]x[0,height], zeroing velocity on the clamped axis."""
        if self.top < 0:
            self.y -= self.top
            self.vy = 0.0
        elif self.bottom > height:
            self.y -= self.bottom - height
            self.vy = 0.0
        if self.left < 0:
            self.x -= self.left
            self.vx = 0.0
        elif self.right > width:
            self.x -= self.right - width
            self.vx = 0.0


class BodyGroup:
    """Bodies kept in creation order."""
    def __init__(self):
        self.children: List[Body] = []

    def create(self, x: float, y: float, width: int, height: int, **kwargs) -> Body:
        body = Body(x=x, y=y, width=width, height=height, **kwargs)
        self.children.append(body)
        return body

    def set_velocity_x(self, vx: float):
        for body in self.children:
            body.vx = vx

    def __iter__(self):
        return iter(self.children)

    def __len__(self):
        return len(self.children)


ColliderCallback = Callable[[Body, Body], None]

@dataclass
class Collider:
    body: Body
    group: BodyGroup
    callback: ColliderCallback


@dataclass
class PhysicsWorld:
    width: float = WIDTH
    height: float = HEIGHT
    paused: bool = False
    bodies: List[Body] = field(default_factory=list)
    colliders: List[Collider] = field(default_factory=list)

    def add(self, body: Body) -> Body:
        self.bodies.append(body)
        return body

    def add_group(self, group: BodyGroup) -> BodyGroup:
        self.bodies.extend(group.children)
        return group

    def add_collider(self, body: Body, group: BodyGroup, callback: ColliderCallback) -> Collider:
        collider = Collider(body=body, group=group, callback=callback)
        self.colliders.append(collider)
        return collider

    def pause(self):
        self.paused = True

    def resume(self):
        self.paused = False

    def step(self, dt: float):
        """Integrate every body, clamp to world bounds, then report the first overlap per collider."""
        if self.paused:
            return

        for body in self.bodies:
            body.integrate(dt)
            if body.collide_world_bounds:
                body.clamp_to(self.width, self.height)

        for collider in self.colliders:
            for other in collider.group:
                if collider.body.overlaps(other):
                    collider.callback(collider.body, other)
                    break
            # a callback may have paused the world (game over)
            if self.paused:
                break

    def clear(self):
        self.bodies.clear()
        self.colliders.clear()
        self.paused = False
