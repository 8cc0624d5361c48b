"""Benchmark module for batch engine runs."""

from .benchmark import Benchmark, BenchmarkResult

__all__ = ["Benchmark", "BenchmarkResult"]
