# src/tests/test_play_scene.py
"""Headless tests of the play scene (no scene manager, no display)."""
import pytest

from src.game.config import (
    BIRD_START_X, BIRD_START_Y, PIPE_W, HEIGHT, BIRD_H, COLOR_HIT
)
from src.game.play import PlayScene, PLAYING, GAME_OVER
from src.game.storage import MemoryStore

DT = 1.0 / 60.0


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def scene(store):
    s = PlayScene(store, seed=42)
    s.create()
    return s


def force_recycle(scene):
    """Push the leftmost pair past the left edge and run one update."""
    upper, lower = min(scene.pool.pairs(), key=lambda pair: pair[0].x)
    upper.x = lower.x = -PIPE_W
    scene.update(0.0)


def test_fresh_session(scene):
    assert scene.status == PLAYING
    assert scene.score == 0
    assert scene.difficulty.name == "easy"
    assert (scene.bird.body.x, scene.bird.body.y) == (BIRD_START_X, BIRD_START_Y)
    assert scene.bird.alive
    assert len(scene.pool.pipes) == 8


def test_top_boundary_ends_game_next_tick(scene):
    scene.bird.body.y = 0
    scene.tick(DT)
    assert scene.status == GAME_OVER
    assert scene.death_cause == "bounds"
    assert scene.sys.physics.paused
    assert not scene.bird.alive
    assert scene.bird.body.tint == COLOR_HIT


def test_bottom_boundary_ends_game(scene):
    scene.bird.body.y = HEIGHT - BIRD_H
    scene.tick(DT)
    assert scene.status == GAME_OVER


def test_pipe_overlap_ends_game(scene):
    upper, lower = scene.pool.pairs()[0]
    upper.x = lower.x = scene.bird.body.x
    upper.y = scene.bird.body.y + 10      # upper pipe reaches below the bird's top edge
    lower.y = upper.y + 200
    scene.tick(DT)
    assert scene.status == GAME_OVER
    assert scene.death_cause == "pipe"


def test_game_over_schedules_a_single_restart(scene):
    scene.bird.body.y = 0
    for _ in range(10):
        scene.tick(DT)
    assert scene.status == GAME_OVER
    assert scene.sys.time.pending == 1


def test_restart_after_delay_resets_session(scene, store):
    for _ in range(4):
        force_recycle(scene)
    assert scene.score == 4
    scene.bird.body.y = 0
    scene.tick(DT)
    assert scene.status == GAME_OVER

    scene.tick(0.6)
    assert scene.status == GAME_OVER
    scene.tick(0.6)
    assert scene.status == PLAYING
    assert scene.sessions == 2
    assert scene.score == 0
    assert scene.difficulty.name == "easy"
    assert scene.bird.alive
    assert not scene.sys.physics.paused
    assert scene.scoreboard.best_text == "Best score: 4"
    assert store.get("bestScore") == "4"


def test_one_recycle_scores_once_and_persists(scene, store):
    before = list(scene.pool.pipes)
    force_recycle(scene)
    assert scene.score == 1
    assert scene.scoreboard.score_text == "Score: 1"
    assert store.get("bestScore") == "1"
    assert scene.pool.pipes == before   # same bodies, repositioned


def test_difficulty_follows_score(scene):
    placed_with = []
    place = scene.pool.place

    def spy(upper, lower, difficulty):
        placed_with.append(difficulty.name)
        return place(upper, lower, difficulty)

    scene.pool.place = spy
    for _ in range(7):
        force_recycle(scene)
    assert placed_with == ["easy", "easy", "easy", "normal", "normal", "normal", "hard"]
    assert scene.difficulty.name == "hard"


def test_no_recycling_after_game_over(scene):
    scene.game_over("pipe")
    force_recycle(scene)
    assert scene.score == 0


def test_best_score_is_max_over_games(store):
    scene = PlayScene(store, seed=3)
    scene.create()
    for games, passes in enumerate([2, 1, 5, 0], start=1):
        for _ in range(passes):
            force_recycle(scene)
        scene.game_over("bounds")
        scene.restart()
        assert scene.sessions == games + 1
    assert store.get("bestScore") == "5"


def test_flap_sets_upward_velocity(scene):
    scene.flap()
    assert scene.bird.body.vy == -300.0


def test_flap_ignored_while_paused(scene):
    scene.pause()
    assert scene.paused and scene.sys.physics.paused
    scene.flap()
    assert scene.bird.body.vy == 0.0


def test_pause_ignored_after_game_over(scene):
    scene.game_over("bounds")
    scene.pause()
    assert not scene.paused


def test_countdown_runs_three_ticks_then_cancels(scene):
    scene.pause()
    scene.resume()
    assert scene.countdown == 3
    assert scene.countdown_text == "Fly in: 3"
    assert scene.sys.time.pending == 1

    scene.sys.time.advance(1000)
    assert scene.countdown_text == "Fly in: 2"
    scene.flap()
    assert scene.bird.body.vy == 0.0      # still gated during the countdown
    scene.sys.time.advance(1000)
    assert scene.countdown_text == "Fly in: 1"
    assert scene.paused
    scene.sys.time.advance(1000)

    assert scene.countdown_text == ""
    assert scene.paused is False
    assert not scene.sys.physics.paused
    assert scene.countdown_event is None
    assert scene.sys.time.pending == 0

    scene.sys.time.advance(10_000)
    assert scene.paused is False
    scene.flap()
    assert scene.bird.body.vy == -300.0


def test_resume_subscription_not_duplicated_by_restarts(scene):
    for _ in range(3):
        scene.restart()
    assert scene.sys.events.listener_count("resume") == 1


def test_primary_on_pause_button_pauses(scene):
    scene.sys.input.emit("primary", scene.pause_button.center)
    assert scene.paused
    scene.sys.input.emit("primary", (100, 100))
    assert scene.bird.body.vy == 0.0


def test_primary_elsewhere_flaps(scene):
    scene.sys.input.emit("primary", (100, 100))
    assert scene.bird.body.vy == -300.0


def test_same_seed_same_layout(store):
    a = PlayScene(store, seed=99)
    b = PlayScene(store, seed=99)
    a.create()
    b.create()
    assert [(p.x, p.y) for p in a.pool.pipes] == [(p.x, p.y) for p in b.pool.pipes]
