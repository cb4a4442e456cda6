# src/game/screens.py
"""
Menu, score and pause screens. Each one is composed with a ScreenKit
(background, title, text, menu list, fade-in) instead of sharing a base class.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple
import pygame
from .config import (
    WIDTH, HEIGHT, FONT_NAME, FADE_IN_MS, BEST_SCORE_KEY,
    COLOR_BG, COLOR_FG, COLOR_TITLE, COLOR_MENU, COLOR_MENU_HOVER, COLOR_OVERLAY
)
from .scenes import SceneSystems
from .storage import KeyValueStore, parse_int

MENU_ITEM_W = 200
MENU_ITEM_H = 36
MENU_SPACING = 12


@dataclass
class MenuItem:
    label: str
    action: Callable[[], None]
    rect: pygame.Rect = field(default_factory=lambda: pygame.Rect(0, 0, 0, 0))


class MenuList:
    """Vertical list of items, navigable by keys or pointer."""
    def __init__(self, items: List[MenuItem], center_x: int = WIDTH // 2, top: int = HEIGHT // 2 - 60):
        self.items = items
        self.selected = 0
        for i, item in enumerate(items):
            item.rect = pygame.Rect(center_x - MENU_ITEM_W // 2,
                                    top + i * (MENU_ITEM_H + MENU_SPACING),
                                    MENU_ITEM_W, MENU_ITEM_H)

    def move(self, delta: int):
        if self.items:
            self.selected = (self.selected + delta) % len(self.items)

    def hit(self, pos) -> Optional[int]:
        for i, item in enumerate(self.items):
            if item.rect.collidepoint(pos):
                return i
        return None

    def hover(self, pos):
        idx = self.hit(pos)
        if idx is not None:
            self.selected = idx

    def activate(self, index: Optional[int] = None):
        idx = self.selected if index is None else index
        if 0 <= idx < len(self.items):
            self.items[idx].action()

    def click(self, pos) -> bool:
        idx = self.hit(pos)
        if idx is None:
            return False
        self.selected = idx
        self.activate(idx)
        return True

    def bind(self, inputs) -> list:
        """Subscribe the list to a scene's input emitter."""
        return [
            inputs.on("up", lambda _pos=None: self.move(-1)),
            inputs.on("down", lambda _pos=None: self.move(+1)),
            inputs.on("confirm", lambda _pos=None: self.activate()),
            inputs.on("hover", lambda pos=None: pos is not None and self.hover(pos)),
            inputs.on("primary", lambda pos=None: self.activate() if pos is None else self.click(pos)),
        ]


class ScreenKit:
    """Drawing helpers shared by every screen."""
    def __init__(self, width: int = WIDTH, height: int = HEIGHT, font_name: str = FONT_NAME):
        self.width = width
        self.height = height
        self.font_name = font_name
        self._fonts: Dict[int, pygame.font.Font] = {}

    @property
    def center(self) -> Tuple[int, int]:
        return self.width // 2, self.height // 2

    def font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.SysFont(self.font_name, size)
        return self._fonts[size]

    def background(self, surf: pygame.Surface):
        surf.fill(COLOR_BG)

    def text(self, surf: pygame.Surface, msg: str, pos, size: int = 18,
             color=COLOR_FG, center: bool = False):
        if not msg:
            return
        img = self.font(size).render(msg, True, color)
        if center:
            pos = (pos[0] - img.get_width() // 2, pos[1] - img.get_height() // 2)
        surf.blit(img, pos)

    def title(self, surf: pygame.Surface, msg: str):
        self.text(surf, msg, (self.width // 2, self.height // 5), size=40,
                  color=COLOR_TITLE, center=True)

    def menu(self, surf: pygame.Surface, menu: MenuList):
        for i, item in enumerate(menu.items):
            color = COLOR_MENU_HOVER if i == menu.selected else COLOR_MENU
            self.text(surf, item.label, item.rect.center, size=28, color=color, center=True)

    def overlay(self, surf: pygame.Surface, rgba=COLOR_OVERLAY):
        panel = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        panel.fill(rgba)
        surf.blit(panel, (0, 0))

    @staticmethod
    def fade_alpha(elapsed_ms: float, duration_ms: float = FADE_IN_MS) -> int:
        """Black veil alpha for a fade-in: 255 at start, 0 once duration has elapsed."""
        if duration_ms <= 0 or elapsed_ms >= duration_ms:
            return 0
        return int(255 * (1.0 - max(0.0, elapsed_ms) / duration_ms))

    def fade(self, surf: pygame.Surface, elapsed_ms: float):
        alpha = self.fade_alpha(elapsed_ms)
        if alpha > 0:
            self.overlay(surf, (0, 0, 0, alpha))


class MenuScene:
    def __init__(self, kit: ScreenKit):
        self.kit = kit
        self.sys = SceneSystems()
        self.manager = None
        self.key = "menu"
        self.menu: Optional[MenuList] = None
        self.elapsed_ms = 0.0
        self._subs = []

    def create(self):
        self.elapsed_ms = 0.0
        self.menu = MenuList([
            MenuItem("Play", lambda: self.manager.start("play")),
            MenuItem("Score", lambda: self.manager.start("score")),
            MenuItem("Exit", lambda: self.manager.quit()),
        ])
        self._subs = self.menu.bind(self.sys.input)

    def update(self, dt: float):
        self.elapsed_ms += dt * 1000.0

    def draw(self, surf: pygame.Surface):
        self.kit.background(surf)
        self.kit.title(surf, "Flappy Pipes")
        self.kit.menu(surf, self.menu)
        self.kit.fade(surf, self.elapsed_ms)

    def shutdown(self):
        for sub in self._subs:
            sub.cancel()
        self._subs = []
        self.sys.teardown()


class ScoreScene:
    def __init__(self, kit: ScreenKit, store: KeyValueStore, key: str = BEST_SCORE_KEY):
        self.kit = kit
        self.store = store
        self.store_key = key
        self.sys = SceneSystems()
        self.manager = None
        self.key = "score"
        self.best_text = ""
        self.elapsed_ms = 0.0
        self._subs = []

    def create(self):
        self.elapsed_ms = 0.0
        self.best_text = f"Best Score: {parse_int(self.store.get(self.store_key))}"
        back = lambda _pos=None: self.manager.start("menu")
        self._subs = [self.sys.input.on("back", back), self.sys.input.on("primary", back)]

    def update(self, dt: float):
        self.elapsed_ms += dt * 1000.0

    def draw(self, surf: pygame.Surface):
        self.kit.background(surf)
        self.kit.title(surf, "Score")
        self.kit.text(surf, self.best_text, self.kit.center, size=28, center=True)
        self.kit.text(surf, "ESC / click: back", (self.kit.width // 2, self.kit.height - 40),
                      size=14, center=True)
        self.kit.fade(surf, self.elapsed_ms)

    def shutdown(self):
        for sub in self._subs:
            sub.cancel()
        self._subs = []
        self.sys.teardown()


class PauseScene:
    """Overlay launched above a paused play scene."""
    def __init__(self, kit: ScreenKit, target: str = "play"):
        self.kit = kit
        self.target = target
        self.sys = SceneSystems()
        self.manager = None
        self.key = "pause"
        self.menu: Optional[MenuList] = None
        self._subs = []

    def resume_target(self):
        self.manager.stop(self.key)
        self.manager.resume(self.target)

    def exit_to_menu(self):
        self.manager.stop(self.key)
        self.manager.start("menu")

    def create(self):
        self.menu = MenuList([
            MenuItem("Continue", self.resume_target),
            MenuItem("Exit", self.exit_to_menu),
        ])
        self._subs = self.menu.bind(self.sys.input)
        self._subs.append(self.sys.input.on("back", lambda _pos=None: self.resume_target()))

    def update(self, dt: float):
        pass

    def draw(self, surf: pygame.Surface):
        self.kit.overlay(surf)
        self.kit.menu(surf, self.menu)

    def shutdown(self):
        for sub in self._subs:
            sub.cancel()
        self._subs = []
        self.sys.teardown()
