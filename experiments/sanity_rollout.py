# /experiments/sanity_rollout.py
"""
Random and heuristic rollouts over FlappyEnv. One CSV row per episode,
plus the action sequence of each episode when --save-traces is given.

  python -m experiments.sanity_rollout --policies both --save-traces
"""

from __future__ import annotations
import argparse
import csv
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np

from src.env.flappy_env import FlappyEnv
from src.game.config import HEIGHT, BIRD_H

logger = logging.getLogger("sanity_rollout")

Policy = Callable[[np.ndarray], int]


def random_policy(seed: int, flap_prob: float = 0.15) -> Policy:
    rng = np.random.default_rng(10_000 + seed)
    return lambda _obs: int(rng.random() < flap_prob)


def heuristic_policy(seed: int, margin_px: float = 12.0) -> Policy:
    """Flap once the bird sinks to the next opening's lower edge, unless already rising fast."""
    def act(obs: np.ndarray) -> int:
        bird_bottom = float(obs[0]) * (HEIGHT - BIRD_H) + BIRD_H
        gap_bottom = float(obs[4]) * HEIGHT
        if gap_bottom >= HEIGHT:        # nothing ahead
            gap_bottom = HEIGHT * 0.6
        return int(bird_bottom >= gap_bottom - margin_px and float(obs[1]) > -0.3)
    return act


POLICIES: Dict[str, Callable[[int], Policy]] = {
    "random": random_policy,
    "heuristic": heuristic_policy,
}


@dataclass
class EpisodeResult:
    policy: str
    seed: int
    length: int
    ret: float
    score: int
    terminated: bool
    truncated: bool
    death_cause: Optional[str]
    difficulty: str


def rollout(policy_name: str, seed: int, frame_skip: int = 4, max_steps: int = 10_000):
    """Play one episode; returns (EpisodeResult, actions)."""
    policy = POLICIES[policy_name](seed)
    env = FlappyEnv(frame_skip=frame_skip)
    actions: List[int] = []
    ret = 0.0
    term = trunc = False
    try:
        obs, info = env.reset(seed=seed)
        while len(actions) < max_steps and not (term or trunc):
            a = policy(obs)
            actions.append(a)
            obs, r, term, trunc, info = env.step(a)
            ret += float(r)
    finally:
        env.close()

    result = EpisodeResult(policy_name, seed, len(actions), ret, int(info["score"]),
                           bool(term), bool(trunc), info["death_cause"], info["difficulty"])
    return result, np.asarray(actions, dtype=np.int8)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Sanity rollouts for FlappyEnv")
    ap.add_argument("--policies", default="both", choices=["random", "heuristic", "both"])
    ap.add_argument("--seeds", type=int, nargs="*", default=list(range(101, 121)))
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--steps", type=int, default=10_000, help="cap on decision steps")
    ap.add_argument("--out-dir", type=Path, default=Path("experiments/runs"))
    ap.add_argument("--save-traces", action="store_true", help="save each episode's actions as .npy")
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    args.out_dir.mkdir(parents=True, exist_ok=True)
    names = list(POLICIES) if args.policies == "both" else [args.policies]

    results: List[EpisodeResult] = []
    for name in names:
        for seed in args.seeds:
            res, actions = rollout(name, seed, args.frame_skip, args.steps)
            results.append(res)
            logger.info("%s seed=%d len=%d score=%d ret=%.1f cause=%s diff=%s",
                        name, seed, res.length, res.score, res.ret, res.death_cause, res.difficulty)
            if args.save_traces:
                trace_dir = args.out_dir / "traces" / name
                trace_dir.mkdir(parents=True, exist_ok=True)
                np.save(trace_dir / f"{seed}_actions.npy", actions)

    csv_path = args.out_dir / "episodes.csv"
    with csv_path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=[fld.name for fld in fields(EpisodeResult)])
        writer.writeheader()
        for res in results:
            writer.writerow(asdict(res))
    logger.info("Wrote %d episodes to %s", len(results), csv_path)


if __name__ == "__main__":
    main()
