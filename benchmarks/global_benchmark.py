"""Time cursor and vectorized traversals for every benchmark configuration."""

import sys
import timeit

import numpy as np
import pandas as pd
from tqdm import tqdm

from configurations import configurations
from neighborhoods import EllipseNeighborhood


def build(neighborhood_class, config, rng):
    """Create a neighborhood over random data for one configuration."""
    data = rng.random(config["shape"])
    factory = config["out_of_bounds"]()
    if neighborhood_class is EllipseNeighborhood:
        nbh = neighborhood_class(data, (0, 0), config["span"], factory)
    else:
        nbh = neighborhood_class(data, factory)
        nbh.set_span(config["span"])
    centers = rng.integers(
        -5, np.asarray(config["shape"]) + 5, size=(config["positions"], len(config["shape"]))
    )
    return nbh, centers


def run_cursor(nbh, centers):
    """Sum every window with a reused cursor."""
    cursor = nbh.cursor()
    total = 0.0
    for center in centers:
        nbh.set_position(center)
        cursor.reset()
        while cursor.has_next():
            total += cursor.next()
    return total


def run_vectorized(nbh, centers):
    """Sum every window through values()."""
    total = 0.0
    for center in centers:
        nbh.set_position(center)
        total += nbh.values().sum()
    return total


def run_experiments(neighborhood_class, config):
    """Time both traversal modes over all seeds and replications."""
    results = []
    for seed in range(1, config["seeds"] + 1):
        rng = np.random.default_rng(seed)
        nbh, centers = build(neighborhood_class, config, rng)
        for mode, func in (("cursor", run_cursor), ("vectorized", run_vectorized)):
            timings = timeit.repeat(
                lambda f=func: f(nbh, centers), number=1, repeat=config["replications"]
            )
            results.append(
                {"seed": seed, "mode": mode, "size": nbh.size(), "time": min(timings)}
            )
    return results


if __name__ == "__main__":
    frames = []
    todo = [(klass, size) for klass, sizes in configurations.items() for size in sizes]
    for neighborhood_class, size in tqdm(todo, file=sys.stdout):
        frame = pd.DataFrame(run_experiments(neighborhood_class, configurations[neighborhood_class][size]))
        frame["neighborhood"] = neighborhood_class.__name__
        frame["config"] = size
        frames.append(frame)

    results = pd.concat(frames, ignore_index=True)
    summary = results.groupby(["neighborhood", "config", "mode"])["time"].agg(["mean", "std"])
    print(summary)
    results.to_pickle("timings.pickle")
