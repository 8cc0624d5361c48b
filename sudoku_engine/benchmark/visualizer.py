"""Charts for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Chart generator for engine benchmark results.

    Shows how much work each strategy did and how much guessing the
    puzzles needed.
    """

    # Color palette for strategies
    COLORS = {
        "Obvious": "#2ecc71",   # Green
        "BoxLine": "#3498db",   # Blue
        "Guess": "#e74c3c",     # Red
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_moves_by_strategy(),
            self.plot_steps_by_label(),
            self.plot_guesses_vs_backtracks(),
        ]

    def _strategies(self) -> List[str]:
        names = set()
        for r in self.results:
            names.update(r.moves_by_strategy)
        ordered = [name for name in self.COLORS if name in names]
        return ordered + sorted(names - set(ordered))

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def plot_moves_by_strategy(self) -> str:
        """Stacked bar chart of moves per strategy for each puzzle."""
        fig, ax = plt.subplots(figsize=(12, 6))

        x = np.arange(len(self.results))
        bottom = np.zeros(len(self.results))

        for name in self._strategies():
            counts = np.array([r.moves_by_strategy.get(name, 0) for r in self.results])
            ax.bar(x, counts, bottom=bottom, label=name,
                   color=self.COLORS.get(name, "#95a5a6"),
                   edgecolor='black', linewidth=0.5)
            bottom += counts

        ax.set_xlabel('Puzzle', fontsize=12)
        ax.set_ylabel('Moves', fontsize=12)
        ax.set_title('Moves by Strategy', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels([f"{r.label}/{r.puzzle_id}" for r in self.results],
                           rotation=45, ha='right', fontsize=8)
        ax.legend(title='Strategy')
        ax.set_ylim(bottom=0)

        return self._save("moves_by_strategy.png")

    def plot_steps_by_label(self) -> str:
        """Box plot of steps taken per puzzle, grouped by label."""
        fig, ax = plt.subplots(figsize=(10, 6))

        labels = sorted(set(r.label for r in self.results))
        data = [[r.steps for r in self.results if r.label == label] for label in labels]

        sns.boxplot(data=data, ax=ax)
        ax.set_xticks(range(len(labels)))
        ax.set_xticklabels(labels)
        ax.set_xlabel('Label', fontsize=12)
        ax.set_ylabel('Steps', fontsize=12)
        ax.set_title('Steps to Finish by Label', fontsize=14, fontweight='bold')

        return self._save("steps_by_label.png")

    def plot_guesses_vs_backtracks(self) -> str:
        """Scatter plot of guesses against backtracks, one point per puzzle."""
        fig, ax = plt.subplots(figsize=(8, 6))

        sns.scatterplot(
            x=[r.guesses for r in self.results],
            y=[r.backtracks for r in self.results],
            hue=[r.status for r in self.results],
            ax=ax,
        )
        ax.set_xlabel('Guesses', fontsize=12)
        ax.set_ylabel('Backtracks', fontsize=12)
        ax.set_title('Guessing Effort per Puzzle', fontsize=14, fontweight='bold')

        return self._save("guesses_vs_backtracks.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        labels = sorted(set(r.label for r in self.results))

        lines = [
            "# Benchmark Summary\n",
            "| Label | Solved | Avg Time | Avg Steps | Avg Guesses | Avg Backtracks |",
            "|-------|--------|----------|-----------|-------------|----------------|"
        ]

        for label in labels:
            label_results = [r for r in self.results if r.label == label]

            solved = sum(1 for r in label_results if r.solved)
            accuracy = (solved / len(label_results)) * 100

            avg_time = np.mean([r.time_seconds for r in label_results])
            avg_steps = np.mean([r.steps for r in label_results])
            avg_guesses = np.mean([r.guesses for r in label_results])
            avg_backtracks = np.mean([r.backtracks for r in label_results])

            lines.append(
                f"| {label} | {accuracy:.1f}% | {avg_time:.4f}s | {avg_steps:.1f} "
                f"| {avg_guesses:.1f} | {avg_backtracks:.1f} |"
            )

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write("\n".join(lines))

        return path
