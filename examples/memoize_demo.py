#!/usr/bin/env python3

import logging
import time
from typing import Optional

import click

from fast_cache import Cache
from fast_cache.monitoring import metrics


def _now() -> str:
    return time.strftime("%H:%M:%S")


def slow_square(n: int, delay: float) -> int:
    time.sleep(delay)
    return n * n


def run(keys: int, rounds: int, max_size: int, ttl: float, max_mem: Optional[int], delay: float) -> None:
    evicted: list[int] = []
    cache = Cache(
        max_size=max_size,
        ttl_seconds=ttl,
        max_mem_bytes=max_mem,
        on_evict=evicted.append,
        name="demo",
        metrics_enabled=True,
    )
    started = time.perf_counter()
    for r in range(rounds):
        for n in range(keys):
            cache.fetch(n, lambda n=n: slow_square(n, delay))
        print(f"[{_now()}] round={r + 1} {cache!r} mem_used={cache.mem_used}")
    elapsed = time.perf_counter() - started

    hits = metrics.fast_cache_requests_total.get(cache="demo", result="hit")
    misses = metrics.fast_cache_requests_total.get(cache="demo", result="miss")
    print(f"elapsed={elapsed:.3f}s hits={int(hits)} misses={int(misses)} on_evict_calls={len(evicted)}")
    for reason in metrics.RemovalReason:
        removed = metrics.fast_cache_removals_total.get(cache="demo", reason=reason.value)
        if removed:
            print(f"  removed[{reason.value}]={int(removed)}")
    snapshot = cache.iterate()
    print("most recently used:", [key for key, _ in snapshot[-5:]])


@click.command()
@click.option("--keys", default=20, type=int, help="Distinct keys requested per round")
@click.option("--rounds", default=3, type=int, help="Number of passes over the key space")
@click.option("--max-size", default=15, type=int, help="Maximum number of cached entries")
@click.option("--ttl", default=60.0, type=float, help="Entry time-to-live in seconds")
@click.option("--max-mem", default=None, type=int, help="Optional memory ceiling in bytes")
@click.option("--delay", default=0.01, type=float, help="Simulated cost of a cache miss in seconds")
@click.option("--verbose", is_flag=True, help="Show cache debug logging")
def main(keys: int, rounds: int, max_size: int, ttl: float, max_mem: Optional[int], delay: float, verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    run(keys, rounds, max_size, ttl, max_mem, delay)


if __name__ == "__main__":
    main()
