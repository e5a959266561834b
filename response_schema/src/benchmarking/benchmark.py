#!/usr/bin/env python3
"""
Benchmarking suite for response schema inference.

Measures how inference time and memory scale with the number of sibling
samples and the nesting depth of the response.
"""

import os
import sys
import time
from pathlib import Path
from typing import Any, Dict, List

import psutil

sys.path.insert(0, str(Path(__file__).parent.parent / "lib"))

from generate_samples import SampleGenerator
from infer_schema import infer_schema


def build_seed_schema(depth: int) -> Dict[str, Any]:
    """A representative response item schema with `depth` levels of nested arrays."""
    item = {
        "type": "object",
        "properties": {
            "id": {"type": "string", "format": "uuid"},
            "name": {"type": "string"},
            "createdAt": {"type": "string", "format": "date-time"},
            "email": {"type": ["string", "null"], "format": "email"},
            "score": {"type": "number"},
            "active": {"type": "boolean"},
        },
        "required": ["id", "name", "createdAt", "score", "active"],
    }

    for level in range(depth):
        item = {
            "type": "object",
            "properties": {
                "key": {"type": "string"},
                "website": {"type": "string", "format": "uri"},
                f"children{level}": {"type": "array", "items": item},
            },
            "required": ["key"],
        }

    return {"type": "array", "items": item}


class BenchmarkSuite:
    """Benchmarking for schema inference."""

    def __init__(self, seed: int = 42):
        """Initialize benchmark suite."""
        self.results = {}
        self.generator = SampleGenerator(seed=seed)

    def _samples(self, count: int, depth: int) -> List[Any]:
        schema = build_seed_schema(depth)
        return self.generator.generate_samples(schema["items"], count=count)

    def benchmark_by_sample_count(self):
        """Benchmark how performance scales with number of sibling samples."""
        print("=== Benchmarking by Sample Count ===\n")

        for count in [1, 10, 100, 1000, 5000]:
            samples = self._samples(count, depth=1)

            start = time.perf_counter()
            _ = infer_schema(samples)
            elapsed = time.perf_counter() - start

            print(f"  {count:5d} samples: {elapsed*1000:8.2f}ms")
            self.results[f"count_{count}"] = elapsed * 1000

    def benchmark_by_depth(self):
        """Benchmark how performance scales with nesting depth."""
        print("\n=== Benchmarking by Nesting Depth ===\n")

        for depth in [0, 1, 2, 3, 4]:
            samples = self._samples(200, depth=depth)

            start = time.perf_counter()
            _ = infer_schema(samples)
            elapsed = time.perf_counter() - start

            print(f"  depth {depth}: {elapsed*1000:8.2f}ms")
            self.results[f"depth_{depth}"] = elapsed * 1000

    def benchmark_memory_usage(self):
        """Benchmark memory usage during inference."""
        print("\n=== Memory Usage ===\n")

        process = psutil.Process(os.getpid())

        for count in [100, 1000, 5000]:
            samples = self._samples(count, depth=2)

            mem_start = process.memory_info().rss / (1024 * 1024)  # MB
            _ = infer_schema(samples)
            mem_end = process.memory_info().rss / (1024 * 1024)  # MB

            print(f"  {count:5d} samples: {mem_end - mem_start:8.2f} MB")
            self.results[f"memory_{count}"] = mem_end - mem_start

    def run_all_benchmarks(self):
        """Run all benchmarks."""
        print("Starting Benchmarking Suite\n")
        print("=" * 70)

        self.benchmark_by_sample_count()
        self.benchmark_by_depth()
        self.benchmark_memory_usage()

        print("\n" + "=" * 70)
        print("Benchmarking Complete")

        return self.results


def main():
    """Run benchmarks."""
    suite = BenchmarkSuite()
    suite.run_all_benchmarks()


if __name__ == "__main__":
    main()
