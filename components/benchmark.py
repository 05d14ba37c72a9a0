"""
Timing harness for the trie operations.

Each repeat builds a fresh trie from the workload keys and times every
operation in OPERATIONS over a random sample of those keys. Results come back
as one pandas row per (operation, repeat) so the dashboard can chart them.
"""

import time
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from tries import Trie, TrieConfig

logger = logging.getLogger(__name__)

OPERATIONS = (
    "put",
    "put_many",
    "get",
    "contains",
    "keys_with_prefix",
    "longest_prefix",
    "longest_key",
    "keys_with_fuzzy_match",
    "delete",
)

COLUMNS = ["operation", "repeat", "seconds", "ops", "ops_per_sec"]


@dataclass
class BenchConfig:
    """
    Configuration for run_benchmark
        repeats: int, number of independent rounds
        sample_size: int, keys sampled (with replacement) per round for read/delete ops
        prefix_len: int, length of the prefixes queried by keys_with_prefix
        wildcard_rate: float, probability that a pattern position becomes the wildcard
        seed: int, seed for sampling
    """
    repeats: int = 3
    sample_size: int = 1000
    prefix_len: int = 2
    wildcard_rate: float = 0.34
    seed: Optional[int] = None

    def __post_init__(self):
        if self.repeats < 1:
            raise ValueError("repeats must be at least 1")
        if self.sample_size < 1:
            raise ValueError("sample_size must be at least 1")
        if self.prefix_len < 0:
            raise ValueError("prefix_len must be non-negative")
        if not 0 <= self.wildcard_rate <= 1:
            raise ValueError("wildcard_rate must be between 0 and 1")


def build_trie(keys: Sequence[str], config: Optional[TrieConfig] = None) -> Trie:
    """Trie mapping every key to its (last) index in `keys`."""
    trie = Trie(config)
    trie.put_many((k, i) for i, k in enumerate(keys))
    return trie


def fuzz_pattern(key, rng, wildcard=".", rate=0.34):
    """Replace each character of `key` with the wildcard with probability `rate`."""
    mask = rng.random(len(key)) < rate
    return "".join(wildcard if hit else ch for ch, hit in zip(key, mask))


def _timed(fn, args):
    start = time.perf_counter()
    for arg in args:
        fn(arg)
    return time.perf_counter() - start


def run_benchmark(keys: Sequence[str],
                  bench: Optional[BenchConfig] = None,
                  trie_config: Optional[TrieConfig] = None) -> pd.DataFrame:
    """Time every operation in OPERATIONS over `keys`.

    Returns a frame with columns COLUMNS; `ops_per_sec` is NaN when a timing
    rounds to zero.
    """
    if len(keys) == 0:
        raise ValueError("keys must not be empty")
    bench = bench or BenchConfig()
    trie_config = trie_config or TrieConfig()
    rng = np.random.default_rng(bench.seed)
    keys = list(keys)

    rows = []
    for repeat in range(bench.repeats):
        sample = [keys[i] for i in rng.integers(0, len(keys), size=bench.sample_size)]
        prefixes = [k[:bench.prefix_len] for k in sample]
        patterns = [fuzz_pattern(k, rng, trie_config.wildcard, bench.wildcard_rate) for k in sample]

        trie = Trie(trie_config)
        timings = {"put": (_timed(lambda k: trie.put(k, True), keys), len(keys))}

        bulk = Trie(trie_config)
        start = time.perf_counter()
        bulk.put_many((k, True) for k in keys)
        timings["put_many"] = (time.perf_counter() - start, len(keys))

        timings["get"] = (_timed(trie.get, sample), len(sample))
        timings["contains"] = (_timed(trie.contains, sample), len(sample))
        timings["keys_with_prefix"] = (_timed(trie.keys_with_prefix, prefixes), len(prefixes))
        timings["longest_prefix"] = (_timed(trie.longest_prefix, sample), len(sample))
        timings["longest_key"] = (_timed(trie.longest_key, sample), len(sample))
        timings["keys_with_fuzzy_match"] = (_timed(trie.keys_with_fuzzy_match, patterns), len(patterns))
        timings["delete"] = (_timed(trie.delete, sample), len(sample))

        for op in OPERATIONS:
            seconds, ops = timings[op]
            rows.append({"operation": op, "repeat": repeat, "seconds": seconds, "ops": ops})
        logger.info("Benchmark round %d/%d done over %d keys", repeat + 1, bench.repeats, len(keys))

    frame = pd.DataFrame(rows, columns=COLUMNS[:-1])
    frame["ops_per_sec"] = frame["ops"] / frame["seconds"].replace(0, np.nan)
    return frame


def summarize(frame: pd.DataFrame) -> pd.DataFrame:
    """Per-operation mean, median and p95 of ops_per_sec, in OPERATIONS order."""
    grouped = frame.groupby("operation", sort=False)["ops_per_sec"]
    summary = pd.DataFrame({
        "mean": grouped.mean(),
        "median": grouped.median(),
        "p95": grouped.agg(lambda s: float(np.nanpercentile(s, 95)) if s.notna().any() else np.nan),
    })
    return summary.reset_index()


def trie_stats(trie: Trie) -> dict:
    return {
        "size": trie.size(),
        "depth": trie.depth(),
        "nodes": trie.node_count(),
        "avg_branch_factor": trie.node_count(avg_branch_factor=True),
    }


def benchmark_with_stats(keys: Sequence[str],
                         bench: Optional[BenchConfig] = None,
                         trie_config: Optional[TrieConfig] = None):
    """run_benchmark plus trie_stats of a trie built from `keys` with the same config."""
    frame = run_benchmark(keys, bench, trie_config)
    return frame, trie_stats(build_trie(keys, trie_config))
