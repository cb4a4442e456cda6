# src/game/scoring.py
from __future__ import annotations
import logging
from .config import BEST_SCORE_KEY
from .storage import KeyValueStore, parse_int

logger = logging.getLogger(__name__)


class Scoreboard:
    """Session score plus the persisted best score."""
    def __init__(self, store: KeyValueStore, key: str = BEST_SCORE_KEY):
        self.store = store
        self.key = key
        self.score = 0
        self.score_text = ""
        self.best_text = ""
        self.reset()

    def reset(self):
        self.score = 0
        self.score_text = f"Score: {self.score}"
        self.best_text = f"Best score: {self.best_score()}"

    def best_score(self) -> int:
        return parse_int(self.store.get(self.key))

    def on_pair_passed(self):
        self.score += 1
        self.score_text = f"Score: {self.score}"

    def set_best_score(self) -> bool:
        """Persist the score if it beats the stored best. Returns True on write."""
        best = self.best_score()
        if self.score > best:
            self.store.set(self.key, self.score)
            logger.info("new best score %d (was %d)", self.score, best)
            return True
        return False
