# src/tests/test_scenes.py
"""Scene manager wiring: menu -> play -> pause overlay -> countdown -> play."""
import pygame
import pytest

from src.game.game import build_manager, resolve_seed, parse_args
from src.game.config import SEED_DEFAULT
from src.game.screens import ScreenKit
from src.game.storage import MemoryStore


@pytest.fixture
def manager():
    m = build_manager(MemoryStore({"bestScore": "8"}), seed=5, kit=ScreenKit())
    m.start("menu")
    return m


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def test_menu_navigation_to_score_and_back(manager):
    assert manager.is_running("menu")
    manager.handle_event(key(pygame.K_DOWN))
    manager.handle_event(key(pygame.K_RETURN))
    assert manager.is_running("score")
    assert not manager.is_running("menu")
    assert manager.get("score").best_text == "Best Score: 8"
    manager.handle_event(key(pygame.K_ESCAPE))
    assert manager.is_running("menu")


def test_menu_exit_requests_quit(manager):
    manager.get("menu").menu.activate(2)
    assert manager.quit_requested


def test_menu_click_play(manager):
    play_item = manager.get("menu").menu.items[0]
    manager.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=play_item.rect.center))
    assert manager.is_running("play")
    assert manager.order == ["play"]


def test_space_flaps_play_scene(manager):
    manager.start("play")
    manager.handle_event(key(pygame.K_SPACE))
    assert manager.get("play").bird.body.vy == -300.0


def test_up_arrow_flaps_play_scene(manager):
    manager.start("play")
    manager.handle_event(key(pygame.K_UP))
    assert manager.get("play").bird.body.vy == -300.0


def test_pause_overlay_and_countdown(manager):
    manager.start("play")
    play = manager.get("play")
    manager.handle_event(key(pygame.K_p))

    assert play.paused
    assert manager.is_paused("play")
    assert manager.is_running("pause")
    assert manager.order == ["play", "pause"]

    # a paused scene's clock and physics do not move
    clock_before = play.sys.time.now_ms
    y_before = play.bird.body.y
    manager.step(1.0)
    assert play.sys.time.now_ms == clock_before
    assert play.bird.body.y == y_before

    # input goes to the overlay, not the paused scene
    manager.handle_event(key(pygame.K_SPACE))   # activates "Continue"
    assert not manager.is_running("pause")
    assert manager.is_running("play")
    assert play.countdown_text == "Fly in: 3"

    for expected in ("Fly in: 2", "Fly in: 1"):
        manager.step(1.0)
        assert play.countdown_text == expected
        assert play.paused
    manager.step(1.0)
    assert play.countdown_text == ""
    assert play.paused is False
    assert play.sys.time.pending == 0


def test_pause_exit_returns_to_menu(manager):
    manager.start("play")
    manager.get("play").pause()
    manager.get("pause").exit_to_menu()
    assert manager.is_running("menu")
    assert manager.status["play"] == "stopped"
    assert manager.order == ["menu"]


def test_restart_through_manager_after_game_over(manager):
    manager.start("play")
    play = manager.get("play")
    play.bird.body.y = 0
    manager.step(1.0 / 60.0)
    assert play.status == "game_over"
    manager.step(0.6)
    manager.step(0.6)
    assert play.status == "playing"
    assert play.sessions == 2
    assert manager.order == ["play"]


def test_unknown_scene():
    m = build_manager(MemoryStore(), seed=1, kit=ScreenKit())
    with pytest.raises(KeyError):
        m.start("credits")


def test_seed_resolution():
    assert resolve_seed(None) == SEED_DEFAULT
    assert resolve_seed(-1) is None
    assert resolve_seed(7) == 7
    args = parse_args(["--seed", "3", "--memory-store"])
    assert args.seed == 3 and args.memory_store
