import time

import pytest

from mazegen.generator import GridContext, generate

# Simple performance guardrail. Not a strict micro-benchmark; aims to catch large regressions.
# Adjust thresholds if CI hardware differs significantly.


@pytest.mark.performance
def test_generation_typical_sizes():
    grid = GridContext(125, 100)
    seeds = [10101, 20202, 30303]
    max_seconds_per = 0.5  # generous threshold; tune as needed
    for s in seeds:
        start = time.perf_counter()
        result = generate(grid, 25, seed=s)
        elapsed = time.perf_counter() - start
        assert result.rooms
        assert elapsed < max_seconds_per, f"Seed {s} took {elapsed:.3f}s (> {max_seconds_per}s)"


@pytest.mark.performance
def test_generation_many_rooms_stays_bounded():
    start = time.perf_counter()
    result = generate(GridContext(300, 300), 120, seed=7)
    elapsed = time.perf_counter() - start
    assert len(result.rooms) > 60
    assert elapsed < 10.0, f"120 rooms took {elapsed:.3f}s"
