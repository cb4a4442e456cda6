# src/env/observations.py
from __future__ import annotations
import numpy as np

from src.game.config import WIDTH, HEIGHT, BIRD_H, FLAP_VELOCITY, DIFFICULTY_ORDER

OBS_SIZE = 6
VY_SCALE = 2.0 * FLAP_VELOCITY

def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)

def _norm_top_y(y_top: float) -> float:
    """Normalize a top coordinate into [0,1] using [0, HEIGHT-BIRD_H]."""
    denom = max(1, HEIGHT - BIRD_H)
    return _clamp01(y_top / denom)

def _norm_vy(vy: float, vy_max: float = VY_SCALE) -> float:
    """Clip vy to [-vy_max, vy_max] and scale to [-1,1]."""
    vy_max = float(max(1.0, vy_max))
    vv = max(-vy_max, min(vy, vy_max))
    return vv / vy_max

def build_observation(bird, pool, difficulty) -> np.ndarray:
    """
    Returns a fixed (6,) float32 vector:
      [ y_top_norm, vy_norm, next_dx, gap_top, gap_bottom, difficulty ]
    - y_top_norm in [0,1], vy_norm in [-1,1]
    - next_dx: distance from the bird's left edge to the next pair's left edge over WIDTH,
      clamped to [0,1]; sentinel 1.0 if no pair is ahead
    - gap_top / gap_bottom: opening edges over HEIGHT; sentinels 0.0 / 1.0 if no pair
    - difficulty: rank / (levels - 1)
    """
    body = bird.body
    y_top_norm = _norm_top_y(float(body.y))
    vy_norm = _norm_vy(float(body.vy))

    pair = pool.next_pair_ahead(body.left)
    if pair is None:
        next_dx, gap_top, gap_bot = 1.0, 0.0, 1.0
    else:
        upper, lower = pair
        next_dx = _clamp01((upper.left - body.left) / float(WIDTH))
        gap_top = _clamp01(upper.bottom / float(HEIGHT))
        gap_bot = _clamp01(lower.top / float(HEIGHT))

    diff = difficulty.rank / float(max(1, len(DIFFICULTY_ORDER) - 1))
    return np.asarray([y_top_norm, vy_norm, next_dx, gap_top, gap_bot, diff], dtype=np.float32)
