# /experiments/sanity_rollout.py
"""
Sanity rollouts for RunnerEnv:
- Runs RANDOM and/or TINY-HEURISTIC policies over fixed seeds
- Writes an episodes CSV for notebook analysis
- Optionally saves per-episode action sequences for exact replay

Usage examples (from repo root):
  # Both policies over 20 default seeds in marathon mode:
  python -m experiments.sanity_rollout --policies both --mode marathon

  # Only heuristic, custom seeds, save actions:
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222,333 --save-traces
"""

from __future__ import annotations
import argparse
import csv
import logging
from pathlib import Path
from typing import List, Tuple, Optional

import numpy as np

from jumprunner.env.runner_env import RunnerEnv
from jumprunner.game.difficulty import GameMode

logger = logging.getLogger("sanity_rollout")


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int, jump_prob: float = 0.1):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.random_sample() < jump_prob)
    return act

def tiny_heuristic_policy_init(trigger_dx: float = 0.08):
    """
    Very small rule: jump from the ground when the nearest obstacle is within
    `trigger_dx` (fraction of the screen width) and its bottom reaches the
    ground band; double jump at the apex if that obstacle is still close.
    """
    def act(obs: np.ndarray) -> int:
        vy, grounded, can_double = obs[1], obs[2], obs[3]
        dx, bottom = obs[5], obs[7]
        near = dx <= trigger_dx and bottom > 0.8
        if grounded == 1.0:
            return 1 if near else 0
        if can_double == 1.0 and vy >= 0.0 and dx <= trigger_dx / 2:
            return 1
        return 0
    return act


# ------------------------ IO helpers ------------------------

def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def write_episode_row(csv_path: Path, header: List[str], row: List) -> None:
    new_file = not csv_path.exists()
    with csv_path.open("a", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        if new_file:
            w.writerow(header)
        w.writerow(row)


# ------------------------ Rollout ------------------------

def run_one_episode(policy_name: str, seed: int, mode: str, frame_skip: int, steps_limit: int,
                    save_traces: bool, out_dir: Path) -> Tuple[int, float, float, bool, bool, Optional[str]]:
    """
    Returns: (ep_len, ret_sum, score, terminated, truncated, hit_kind)
    """
    env = RunnerEnv(frame_skip=frame_skip, mode=mode)

    if policy_name == "random":
        action_seed = 10_000 + seed
        policy = random_policy_init(action_seed)
    elif policy_name == "heuristic":
        action_seed = -1
        policy = tiny_heuristic_policy_init()
    else:
        raise ValueError(f"Unknown policy {policy_name!r}")

    actions: List[int] = []
    ret_sum = 0.0
    ep_len = 0
    term = trunc = False
    info = {}

    try:
        obs, info = env.reset(seed=seed)
        for _ in range(steps_limit):
            a = policy(obs)
            actions.append(int(a))
            obs, r, term, trunc, info = env.step(a)
            ret_sum += float(r)
            ep_len += 1
            if term or trunc:
                break
    finally:
        env.close()

    if save_traces:
        trace_dir = out_dir / "traces" / mode / policy_name
        ensure_dir(trace_dir)
        np.save(trace_dir / f"{seed}_actions.npy", np.asarray(actions, dtype=np.int8))
        meta_lines = [
            f"seed={seed}",
            f"mode={mode}",
            f"frame_skip={frame_skip}",
            f"policy={policy_name}",
            f"action_rng_seed={action_seed}",
        ]
        (trace_dir / f"{seed}_meta.txt").write_text("\n".join(meta_lines), encoding="utf-8")

    return ep_len, ret_sum, float(info.get("score", 0.0)), bool(term), bool(trunc), info.get("hit_kind")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "heuristic", "both"])
    ap.add_argument("--mode", type=str, default="classic", choices=[m.value for m in GameMode])
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 20 defaults: 101..120")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--steps", type=int, default=10_000,
                    help="Hard cap on decision steps (env may truncate earlier)")
    ap.add_argument("--out-dir", type=str, default="experiments/runs")
    ap.add_argument("--save-traces", action="store_true")
    ap.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING"])
    args = ap.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    out_dir = Path(args.out_dir)
    ensure_dir(out_dir)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 121))

    episodes_csv = out_dir / "episodes.csv"
    header = [
        "env_name", "mode", "policy_name", "seed", "frame_skip",
        "episode_len_decisions", "return_sum", "score",
        "terminated", "truncated", "hit_kind",
    ]
    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]

    logger.info("Running policies=%s mode=%s on %d seeds (frame_skip=%d)",
                to_run, args.mode, len(seeds), args.frame_skip)

    for policy_name in to_run:
        for seed in seeds:
            ep_len, ret_sum, score, terminated, truncated, hit_kind = run_one_episode(
                policy_name=policy_name, seed=seed, mode=args.mode,
                frame_skip=args.frame_skip, steps_limit=args.steps,
                save_traces=args.save_traces, out_dir=out_dir,
            )
            write_episode_row(episodes_csv, header, [
                "RunnerEnv", args.mode, policy_name, seed, args.frame_skip,
                ep_len, f"{ret_sum:.1f}", f"{score:.2f}",
                int(terminated), int(truncated), hit_kind or "",
            ])
            logger.info("[%s] seed=%d len=%d score=%.2f ret=%.1f term=%s trunc=%s hit=%s",
                        policy_name, seed, ep_len, score, ret_sum, terminated, truncated, hit_kind)

    logger.info("Sanity rollouts complete; summaries in %s", episodes_csv)


if __name__ == "__main__":
    main()
