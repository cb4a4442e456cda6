# src/env/flappy_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.game.config import (
    WIDTH, HEIGHT, SIM_FPS, FRAME_SKIP_DEFAULT, TIME_LIMIT_S,
    COLOR_BG, COLOR_BIRD, COLOR_PIPE, COLOR_PIPE_EDGE
)
from src.game.play import PlayScene, PLAYING
from src.game.storage import MemoryStore
from src.env.observations import build_observation, OBS_SIZE


class FlappyEnv(gym.Env):
    """
    Flappy Pipes Gymnasium environment (vector observations).
    - Simulation at SIM_FPS (internal), driven through the play scene's frame step.
    - Agent acts every `frame_skip` frames.
    - Observation: shape (6,), float32 (see build_observation).
    The episode terminates on game over; the scene's own restart timer is never reached.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": SIM_FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = FRAME_SKIP_DEFAULT,
                 time_limit_seconds: Optional[float] = TIME_LIMIT_S,
                 store=None):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.dt = 1.0 / SIM_FPS
        self.store = store if store is not None else MemoryStore()

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(SIM_FPS * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)

        low = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0], dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        self.scene: Optional[PlayScene] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Pipe layout seed drawn from the env RNG so reset(seed=s) is reproducible
        level_seed = int(self.np_random.integers(0, 2**31 - 1))
        if self.scene is not None:
            self.scene.shutdown()
        self.scene = PlayScene(self.store, seed=level_seed)
        self.scene.create()

        self.timestep = 0
        self.current_seed = level_seed

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), self._info()

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.scene is not None, "call reset() first"
        scene = self.scene

        if int(action) == 1:
            scene.flap()

        score_before = scene.score
        for _ in range(self.frame_skip):
            scene.tick(self.dt)
            if scene.status != PLAYING:
                break

        self.timestep += 1
        terminated = scene.status != PLAYING
        truncated = bool(
            not terminated
            and self.time_limit_decisions is not None
            and self.timestep >= self.time_limit_decisions
        )

        if terminated:
            reward = -1.0
        else:
            reward = 1.0 + float(scene.score - score_before)

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._info()

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        scene = self.scene
        return build_observation(scene.bird, scene.pool, scene.difficulty)

    def _info(self) -> Dict[str, Any]:
        scene = self.scene
        return {
            "score": scene.score,
            "best_score": scene.scoreboard.best_score(),
            "difficulty": scene.difficulty.name,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "death_cause": scene.death_cause,
        }

    # -------------------- Rendering --------------------

    def _draw(self, surf: pygame.Surface):
        surf.fill(COLOR_BG)
        if self.scene is not None:
            self.scene.pool.draw(surf, COLOR_PIPE, COLOR_PIPE_EDGE)
            self.scene.bird.draw(surf, COLOR_BIRD)

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            surf = pygame.Surface((WIDTH, HEIGHT))
            self._draw(surf)
            arr = pygame.surfarray.array3d(surf)  # (W, H, 3)
            return np.transpose(arr, (1, 0, 2))

        if self.screen is None:
            pygame.init()
            self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
            pygame.display.set_caption("Flappy Pipes — Gym Env")
            self.clock = pygame.time.Clock()

        # Pump minimal event queue so the OS doesn't think we're hung
        pygame.event.pump()
        self._draw(self.screen)
        pygame.display.flip()
        if self.clock is not None:
            self.clock.tick(self.metadata.get("render_fps", SIM_FPS))
        return None

    def close(self):
        if self.screen is not None:
            pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
