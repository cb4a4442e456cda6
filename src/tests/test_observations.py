# src/tests/test_observations.py
import numpy as np

from src.env.observations import build_observation, OBS_SIZE
from src.game.difficulty import LEVELS
from src.game.play import PlayScene
from src.game.storage import MemoryStore
from src.game.config import HEIGHT, WIDTH


def test_shape_and_ranges():
    scene = PlayScene(MemoryStore(), seed=11)
    scene.create()
    obs = build_observation(scene.bird, scene.pool, scene.difficulty)
    assert isinstance(obs, np.ndarray) and obs.dtype == np.float32 and obs.shape == (OBS_SIZE,)
    assert 0.0 <= obs[0] <= 1.0
    assert -1.0 <= obs[1] <= 1.0
    assert 0.0 <= obs[2] <= 1.0
    assert obs[3] < obs[4]
    assert obs[5] == 0.0


def test_gap_edges_match_next_pair():
    scene = PlayScene(MemoryStore(), seed=12)
    scene.create()
    upper, lower = scene.pool.pairs()[0]
    obs = build_observation(scene.bird, scene.pool, LEVELS["hard"])
    assert np.isclose(obs[3], upper.y / HEIGHT)
    assert np.isclose(obs[4], lower.y / HEIGHT)
    assert np.isclose(obs[2], min(1.0, (upper.x - scene.bird.body.x) / WIDTH))
    assert obs[5] == 1.0


def test_velocity_is_clipped():
    scene = PlayScene(MemoryStore(), seed=13)
    scene.create()
    scene.bird.body.vy = 10_000.0
    obs = build_observation(scene.bird, scene.pool, scene.difficulty)
    assert obs[1] == 1.0
