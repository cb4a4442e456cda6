# src/game/play.py
"""
Play scene: the bird, the pipe pool, scoring and the two state machines
that run on top of the frame tick.

  status : playing -> game_over -> (RESTART_DELAY_MS) playing
  pause  : active -> paused -> counting down (COUNTDOWN_START..0, 1/s) -> active
"""
from __future__ import annotations
import logging
import random
from typing import Optional
import pygame
from .config import (
    WIDTH, HEIGHT, RESTART_DELAY_MS, COUNTDOWN_START, COUNTDOWN_INTERVAL_MS,
    PAUSE_BUTTON_SIZE, PAUSE_BUTTON_MARGIN, SCORE_POS, BEST_SCORE_POS,
    COLOR_BIRD, COLOR_PIPE, COLOR_PIPE_EDGE, COLOR_FG, COLOR_TITLE
)
from .bird import Bird
from .difficulty import EASY, DifficultyLevel, next_difficulty
from .pipes import PipePool
from .scenes import SceneSystems, step_scene
from .scoring import Scoreboard
from .storage import KeyValueStore
from .timers import TimerEvent

logger = logging.getLogger(__name__)

PLAYING = "playing"
GAME_OVER = "game_over"


class PlayScene:
    def __init__(self, store: KeyValueStore, kit=None, seed: Optional[int] = None,
                 width: int = WIDTH, height: int = HEIGHT):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.store = store
        self.kit = kit
        self.width = width
        self.height = height
        self.sys = SceneSystems()
        self.manager = None
        self.key = "play"

        self.bird: Optional[Bird] = None
        self.pool: Optional[PipePool] = None
        self.scoreboard = Scoreboard(store)
        self.difficulty: DifficultyLevel = EASY
        self.status = PLAYING
        self.death_cause: Optional[str] = None   # "pipe" | "bounds" | None
        self.sessions = 0

        self.paused = False
        self.countdown: Optional[int] = None
        self.countdown_text = ""
        self.countdown_event: Optional[TimerEvent] = None
        self.restart_event: Optional[TimerEvent] = None

        self.pause_button = pygame.Rect(
            width - PAUSE_BUTTON_MARGIN - PAUSE_BUTTON_SIZE,
            height - PAUSE_BUTTON_MARGIN - PAUSE_BUTTON_SIZE,
            PAUSE_BUTTON_SIZE, PAUSE_BUTTON_SIZE)
        self._subs = []

    # -------------------- Lifecycle --------------------

    def create(self):
        self.sessions += 1
        self.difficulty = EASY
        self.status = PLAYING
        self.death_cause = None
        self.paused = False
        self.countdown = None
        self.countdown_text = ""
        self.countdown_event = None
        self.restart_event = None

        physics = self.sys.physics
        physics.width, physics.height = self.width, self.height
        self.bird = Bird.spawn()
        physics.add(self.bird.body)
        self.pool = PipePool(self.rng, self.difficulty)
        physics.add_group(self.pool.group)
        physics.add_collider(self.bird.body, self.pool.group, self._on_pipe_hit)

        self.scoreboard.reset()

        self._subs = [
            self.sys.events.on("resume", self._on_resume),
            self.sys.input.on("primary", self._on_primary),
            self.sys.input.on("up", lambda _pos=None: self.flap()),
            self.sys.input.on("pause", lambda _pos=None: self.pause()),
            self.sys.input.on("back", lambda _pos=None: self.pause()),
        ]
        logger.debug("session %d created (seed=%s)", self.sessions, self.seed)

    def shutdown(self):
        for sub in self._subs:
            sub.cancel()
        self._subs = []
        self.sys.teardown()

    def restart(self):
        if self.manager is not None:
            self.manager.restart(self.key)
        else:
            self.shutdown()
            self.create()

    def tick(self, dt: float):
        """Run one frame outside a scene manager (headless use)."""
        step_scene(self, dt)

    def update(self, dt: float):
        self.check_game_status()
        if self.status == PLAYING:
            self.recycle_pipes()

    # -------------------- Collision & termination --------------------

    def check_game_status(self):
        body = self.bird.body
        if body.bottom >= self.height or body.y <= 0:
            self.game_over("bounds")

    def _on_pipe_hit(self, _bird_body, _pipe):
        self.game_over("pipe")

    def game_over(self, cause: str):
        if self.status != PLAYING:
            return
        self.status = GAME_OVER
        self.death_cause = cause
        self.sys.physics.pause()
        self.bird.mark_hit()
        self.scoreboard.set_best_score()
        self.restart_event = self.sys.time.schedule_once(RESTART_DELAY_MS, self._restart_session)
        logger.info("game over (%s) score=%d best=%d",
                    cause, self.scoreboard.score, self.scoreboard.best_score())

    def _restart_session(self):
        logger.info("restarting session")
        self.restart()

    # -------------------- Pipes, score, difficulty --------------------

    def recycle_pipes(self) -> int:
        return self.pool.recycle(self.difficulty, self._on_pair_recycled)

    def _on_pair_recycled(self, _upper, _lower):
        self.scoreboard.on_pair_passed()
        self.scoreboard.set_best_score()
        self.increase_difficulty()

    def increase_difficulty(self):
        level = next_difficulty(self.difficulty, self.scoreboard.score)
        if level is not self.difficulty:
            logger.debug("difficulty %s -> %s at score %d",
                         self.difficulty.name, level.name, self.scoreboard.score)
            self.difficulty = level

    @property
    def score(self) -> int:
        return self.scoreboard.score

    # -------------------- Input --------------------

    def flap(self):
        if self.paused:
            return
        self.bird.flap()

    def _on_primary(self, pos=None):
        if pos is not None and self.pause_button.collidepoint(pos):
            self.pause()
        else:
            self.flap()

    # -------------------- Pause / countdown --------------------

    def pause(self):
        if self.paused or self.status != PLAYING:
            return
        self.paused = True
        self.sys.physics.pause()
        if self.manager is not None:
            self.manager.pause(self.key)
            self.manager.launch("pause")
        logger.debug("paused")

    def resume(self):
        if self.manager is not None:
            self.manager.resume(self.key)
        else:
            self.sys.events.emit("resume")

    def _on_resume(self):
        if self.countdown_event is not None:
            self.countdown_event.remove()
        self.countdown = COUNTDOWN_START
        self.countdown_text = f"Fly in: {self.countdown}"
        self.countdown_event = self.sys.time.schedule_repeating(COUNTDOWN_INTERVAL_MS, self._count_down)

    def _count_down(self):
        self.countdown -= 1
        self.countdown_text = f"Fly in: {self.countdown}"
        logger.debug("countdown %d", self.countdown)
        if self.countdown <= 0:
            self.countdown_text = ""
            self.sys.physics.resume()
            self.countdown_event.remove()
            self.countdown_event = None
            self.countdown = None
            self.paused = False

    # -------------------- Rendering --------------------

    def draw(self, surf: pygame.Surface):
        kit = self.kit
        kit.background(surf)
        self.pool.draw(surf, COLOR_PIPE, COLOR_PIPE_EDGE)
        self.bird.draw(surf, COLOR_BIRD)

        kit.text(surf, self.scoreboard.score_text, SCORE_POS, size=32, color=COLOR_FG)
        kit.text(surf, self.scoreboard.best_text, BEST_SCORE_POS, size=18, color=COLOR_FG)

        # pause button: two bars
        b = self.pause_button
        bar_w = b.width // 4
        pygame.draw.rect(surf, COLOR_TITLE, (b.left + bar_w // 2, b.top, bar_w, b.height))
        pygame.draw.rect(surf, COLOR_TITLE, (b.right - bar_w - bar_w // 2, b.top, bar_w, b.height))

        kit.text(surf, self.countdown_text, kit.center, size=32, color=COLOR_TITLE, center=True)
