# src/game/scenes.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import pygame
from .events import EventEmitter
from .physics import PhysicsWorld
from .timers import Scheduler

logger = logging.getLogger(__name__)

RUNNING = "running"
PAUSED = "paused"
STOPPED = "stopped"


@dataclass
class SceneSystems:
    """Per-scene services: lifecycle events, clock, physics world, input actions."""
    events: EventEmitter = field(default_factory=EventEmitter)
    time: Scheduler = field(default_factory=Scheduler)
    physics: PhysicsWorld = field(default_factory=PhysicsWorld)
    input: EventEmitter = field(default_factory=EventEmitter)

    def teardown(self):
        self.time.clear()
        self.physics.clear()
        self.input.clear()


def step_scene(scene, dt: float):
    """One frame: timers, then scene logic, then physics."""
    scene.sys.time.advance(dt * 1000.0)
    scene.update(dt)
    scene.sys.physics.step(dt)


def translate_event(event) -> Optional[Tuple[str, Optional[Tuple[int, int]]]]:
    """Map a pygame event to an input action name (+ pointer position)."""
    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        return "primary", tuple(event.pos)
    if event.type == pygame.MOUSEMOTION:
        return "hover", tuple(event.pos)
    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_SPACE:
            return "primary", None
        if event.key == pygame.K_UP:
            return "up", None
        if event.key == pygame.K_DOWN:
            return "down", None
        if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            return "confirm", None
        if event.key == pygame.K_ESCAPE:
            return "back", None
        if event.key == pygame.K_p:
            return "pause", None
    return None


class SceneManager:
    """
    Owns the scenes by key. Scenes are plain objects exposing
    `sys`, create(), update(dt), draw(surface) and shutdown().
    """
    def __init__(self):
        self.scenes: Dict[str, object] = {}
        self.status: Dict[str, str] = {}
        self.order: List[str] = []          # draw/update order, overlays last
        self.quit_requested = False

    def add(self, key: str, scene) -> None:
        scene.key = key
        scene.manager = self
        self.scenes[key] = scene
        self.status[key] = STOPPED

    def get(self, key: str):
        try:
            return self.scenes[key]
        except KeyError:
            raise KeyError(f"unknown scene {key!r}") from None

    def is_running(self, key: str) -> bool:
        return self.status.get(key) == RUNNING

    def is_paused(self, key: str) -> bool:
        return self.status.get(key) == PAUSED

    def _boot(self, key: str):
        scene = self.get(key)
        if key in self.order:
            self.order.remove(key)
        self.order.append(key)
        self.status[key] = RUNNING
        scene.create()
        logger.debug("scene %s started", key)

    def start(self, key: str):
        """Stop every other active scene, then start `key`."""
        for other in list(self.order):
            if other != key:
                self.stop(other)
        if self.status.get(key) != STOPPED:
            self.stop(key)
        self._boot(key)

    def launch(self, key: str):
        """Start `key` on top of the scenes already active."""
        if self.status.get(key) != STOPPED:
            self.stop(key)
        self._boot(key)

    def stop(self, key: str):
        scene = self.get(key)
        if self.status[key] == STOPPED:
            return
        scene.shutdown()
        self.status[key] = STOPPED
        if key in self.order:
            self.order.remove(key)
        logger.debug("scene %s stopped", key)

    def pause(self, key: str):
        if self.status.get(key) == RUNNING:
            self.status[key] = PAUSED
            self.get(key).sys.events.emit("pause")

    def resume(self, key: str):
        if self.status.get(key) == PAUSED:
            self.status[key] = RUNNING
            self.get(key).sys.events.emit("resume")

    def restart(self, key: str):
        scene = self.get(key)
        if self.status[key] != STOPPED:
            scene.shutdown()
        self.status[key] = RUNNING
        if key not in self.order:
            self.order.append(key)
        scene.create()
        logger.debug("scene %s restarted", key)

    def quit(self):
        self.quit_requested = True

    def step(self, dt: float):
        for key in list(self.order):
            if self.status.get(key) == RUNNING:
                step_scene(self.scenes[key], dt)

    def draw(self, surface: pygame.Surface):
        for key in self.order:
            self.scenes[key].draw(surface)

    def handle_event(self, event) -> bool:
        """Deliver the action to the topmost running scene. Returns True if delivered."""
        action = translate_event(event)
        if action is None:
            return False
        name, pos = action
        for key in reversed(self.order):
            if self.status.get(key) == RUNNING:
                self.scenes[key].sys.input.emit(name, pos)
                return True
        return False
