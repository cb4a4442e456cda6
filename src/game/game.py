# src/game/game.py
import sys, argparse, logging
import pygame
from .config import (
    WIDTH, HEIGHT, FPS, CAPTION, MAX_FRAME_DT, SEED_DEFAULT, STORAGE_PATH_DEFAULT
)
from .play import PlayScene
from .scenes import SceneManager
from .screens import ScreenKit, MenuScene, ScoreScene, PauseScene
from .storage import JsonFileStore, MemoryStore

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Flappy Pipes")
    p.add_argument("--seed", type=int, default=None,
                   help="Pipe layout seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--storage", type=str, default=STORAGE_PATH_DEFAULT,
                   help="JSON file holding the best score.")
    p.add_argument("--memory-store", action="store_true",
                   help="Keep the best score in memory only (nothing written to disk).")
    p.add_argument("--log-level", type=str, default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def resolve_seed(seed_arg):
    # None -> SEED_DEFAULT; -1 -> random
    if seed_arg is None:
        return SEED_DEFAULT
    if seed_arg == -1:
        return None
    return seed_arg


def build_manager(store, seed, kit: ScreenKit) -> SceneManager:
    manager = SceneManager()
    manager.add("menu", MenuScene(kit))
    manager.add("score", ScoreScene(kit, store))
    manager.add("play", PlayScene(store, kit=kit, seed=seed))
    manager.add("pause", PauseScene(kit, target="play"))
    return manager


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    store = MemoryStore() if args.memory_store else JsonFileStore(args.storage)
    seed = resolve_seed(args.seed)

    pygame.init()
    pygame.display.set_caption(CAPTION)
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()

    kit = ScreenKit(WIDTH, HEIGHT)
    manager = build_manager(store, seed, kit)
    manager.start("menu")
    logger.info("started (seed=%s, storage=%s)", seed, "memory" if args.memory_store else args.storage)

    while not manager.quit_requested:
        dt = clock.tick(FPS) / 1000.0
        if dt > MAX_FRAME_DT:
            dt = MAX_FRAME_DT

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                manager.quit()
            else:
                manager.handle_event(event)

        manager.step(dt)
        manager.draw(screen)
        pygame.display.flip()

    pygame.quit()
    sys.exit()

if __name__ == "__main__":
    run()
