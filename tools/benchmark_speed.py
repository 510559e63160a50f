"""
Performance Benchmark
=====================

Measures simulation tick throughput for performance tuning.

Usage:
    python -m tools.benchmark_speed [--steps S] [--image-obs]
"""

from __future__ import annotations

import argparse
import sys
import time
import numpy as np

from banana_dodge.dodge_core.config_loader import load_config
from banana_dodge.dodge_core.game import CoreGame
from banana_dodge.dodge_core.env_gym import DodgeEnv


def benchmark_env(
    num_steps: int = 1000,
    seed: int = 42,
    image_obs: bool = False
) -> dict:
    """
    Benchmark single environment performance.

    Args:
        num_steps: Number of steps to run.
        seed: Random seed.
        image_obs: Include the solid-rendered image in observations.

    Returns:
        Dict with timing results.
    """
    env = DodgeEnv(image_obs=image_obs)
    rng = np.random.default_rng(seed)

    # Warmup
    env.reset(seed=seed)
    for _ in range(10):
        _, _, terminated, truncated, _ = env.step(int(rng.integers(0, 3)))
        if terminated or truncated:
            env.reset()

    # Benchmark
    env.reset(seed=seed)
    episodes = 0
    start = time.perf_counter()

    for _ in range(num_steps):
        _, _, terminated, truncated, _ = env.step(int(rng.integers(0, 3)))
        if terminated or truncated:
            episodes += 1
            env.reset()

    elapsed = time.perf_counter() - start
    env.close()

    return {
        "mode": "env_image" if image_obs else "env",
        "num_steps": num_steps,
        "episodes": episodes,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def benchmark_core_game(
    num_steps: int = 1000,
    seed: int = 42
) -> dict:
    """
    Benchmark raw CoreGame without Gym overhead.

    Runs continue through the explosion so that particle updates are
    included in the measurement.
    """
    config = load_config()
    game = CoreGame(config=config, seed=seed)
    rng = np.random.default_rng(seed)

    game.start(seed=seed)
    episodes = 0
    start = time.perf_counter()

    for _ in range(num_steps):
        if not game.needs_tick:
            episodes += 1
            game.reset()
        game.step(int(rng.integers(-1, 2)))

    elapsed = time.perf_counter() - start

    return {
        "mode": "core_game",
        "num_steps": num_steps,
        "episodes": episodes,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def run_all_benchmarks(steps: int = 5000, image_obs: bool = False) -> list:
    """Run every benchmark and print a summary table."""
    results = []

    print("=" * 60)
    print("BANANA DODGE PERFORMANCE BENCHMARK")
    print("=" * 60)
    print()

    print("Benchmarking CoreGame (raw)...")
    results.append(benchmark_core_game(num_steps=steps))

    print("Benchmarking DodgeEnv...")
    results.append(benchmark_env(num_steps=steps))

    if image_obs:
        print("Benchmarking DodgeEnv (image observations)...")
        results.append(benchmark_env(num_steps=steps, image_obs=True))

    print()
    print(f"{'Mode':<20} {'Episodes':>9} {'Steps/s':>12} {'ms/step':>10}")
    print("-" * 53)

    for r in results:
        print(f"{r['mode']:<20} {r['episodes']:>9} "
              f"{r['steps_per_second']:>12.1f} {r['ms_per_step']:>10.3f}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark Banana Dodge simulation speed")
    parser.add_argument("--steps", type=int, default=5000, help="Steps per benchmark")
    parser.add_argument("--image-obs", action="store_true", help="Also benchmark image observations")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer steps)")

    args = parser.parse_args()

    steps = 500 if args.quick else args.steps
    run_all_benchmarks(steps=steps, image_obs=args.image_obs)

    return 0


if __name__ == "__main__":
    sys.exit(main())
