"""
Demo of the stepmeans clustering engine.

This example shows how to:
1. Generate random sample points and cluster colors
2. Subscribe to the engine's 'iteration' and 'end' events
3. Animate convergence with matplotlib, or run headless inside asyncio
"""

import argparse
import asyncio

import torch
import matplotlib.pyplot as plt

# Add parent directory to path for imports
import sys
sys.path.append('..')

from stepmeans import ClusteringEngine, generate_sample_data, generate_cluster_colors, random_int
from stepmeans.visualization import animate


def build_engine(seed=None):
    """Random dataset with 21-60 points and 4-6 clusters, like the canvas demo."""
    generator = torch.Generator()
    if seed is not None:
        generator.manual_seed(seed)
    else:
        generator.seed()

    data = generate_sample_data(points=random_int(20, 60, generator), generator=generator)
    k = random_int(3, 6, generator)
    colors = generate_cluster_colors(k, generator=generator)

    engine = ClusteringEngine(data=data, k=k, random_state=generator, verbose=1)
    engine.on('end', lambda state: print(f"Converged with {state.k} clusters "
                                         f"on {state.n_points} points"))
    return engine, colors


def run_animated(seed=None, interval=20):
    engine, colors = build_engine(seed)
    anim = animate(engine, colors=colors, interval=interval)
    plt.show()
    return anim


async def run_headless(seed=None, delay=0.02):
    engine, _ = build_engine(seed)
    done = asyncio.get_running_loop().create_future()

    def report(state):
        print(f"  pass {state.iterations}: means = {state.means.tolist()}")

    engine.on('iteration', report)
    engine.one('end', lambda state: done.set_result(state))
    engine.run(delay=delay)
    state = await done
    return state


def main():
    parser = argparse.ArgumentParser(description="Animated k-means demo")
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--delay', type=float, default=0.02,
                        help="Seconds between passes")
    parser.add_argument('--headless', action='store_true',
                        help="Print passes instead of plotting")
    args = parser.parse_args()

    if args.headless:
        asyncio.run(run_headless(args.seed, args.delay))
    else:
        run_animated(args.seed, interval=int(args.delay * 1000))


if __name__ == "__main__":
    main()
