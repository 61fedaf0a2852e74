#!/usr/bin/env python3
"""
Performance evaluation script for the Nussinov folding algorithm.

Benchmarks runtime and peak memory of the $O(N^{3})$ fill plus traceback
over a range of sequence lengths, fits the empirical time exponent and
plots the results.
"""

import time
import tracemalloc
import random
import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path
from typing import Optional

from nussinov_fold.predict import fold_sequence


def generate_random_sequence(length: int, seed: Optional[int] = None) -> str:
    """
    Generate a random RNA sequence of a given length.

    Parameters
    ----------
    length : int
        The desired length of the RNA sequence ($N$).
    seed : int, optional
        Seed for a private random generator, for reproducibility.

    Returns
    -------
    str
        A random sequence over 'A', 'C', 'G', 'U'.
    """
    rng = random.Random(seed)
    return ''.join(rng.choices(['A', 'C', 'G', 'U'], k=length))


def benchmark_runtime(sequence_lengths: list[int], num_trials: int = 3) -> dict:
    """
    Benchmark the mean runtime across different sequence lengths ($N$).

    Returns
    -------
    dict
        'lengths', 'mean_times', 'std_times' and 'scores' (pair count of the
        last trial for each length).
    """
    results = {
        'lengths': sequence_lengths,
        'mean_times': [],
        'std_times': [],
        'scores': []
    }

    for n in sequence_lengths:
        print(f"\nBenchmarking N={n}...")
        trial_times = []

        for trial in range(num_trials):
            seq = generate_random_sequence(n, seed=42 + trial)

            start = time.perf_counter()
            result = fold_sequence(seq)
            elapsed = time.perf_counter() - start

            trial_times.append(elapsed)
            print(f"  Trial {trial + 1}/{num_trials}: {elapsed:.3f}s")

        results['mean_times'].append(float(np.mean(trial_times)))
        results['std_times'].append(float(np.std(trial_times)))
        results['scores'].append(result.score)

        print(f"  Mean: {results['mean_times'][-1]:.3f}s ± {results['std_times'][-1]:.3f}s")
        print(f"  Base pairs: {results['scores'][-1]}")

    return results


def benchmark_memory(sequence_lengths: list[int]) -> dict:
    """
    Benchmark peak memory (via `tracemalloc`) across sequence lengths.

    Returns
    -------
    dict
        'lengths' and 'peak_memory_mb'.
    """
    results = {
        'lengths': sequence_lengths,
        'peak_memory_mb': []
    }

    for n in sequence_lengths:
        print(f"\nMeasuring memory for N={n}...")
        seq = generate_random_sequence(n, seed=42)

        tracemalloc.start()
        fold_sequence(seq)
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

        peak_mb = peak / 1024 ** 2
        results['peak_memory_mb'].append(peak_mb)
        print(f"  Peak memory: {peak_mb:.2f} MB")

    return results


def analyze_complexity(lengths: list[int], times: list[float]) -> tuple[float, np.ndarray]:
    """
    Fit $T \\propto N^{k}$ by linear regression in log-log space.

    Returns
    -------
    tuple of (float, numpy.ndarray)
        The exponent $k$ and the fitted times.
    """
    log_n = np.log(lengths)
    log_time = np.log(times)

    k, c = np.polyfit(log_n, log_time, 1)
    fitted_times = np.exp(c) * np.array(lengths) ** k

    print(f"\n{'=' * 60}")
    print("COMPLEXITY ANALYSIS")
    print(f"{'=' * 60}")
    print(f"Empirical complexity: O(N^{k:.2f})")
    print("Theoretical:          O(N^3) fill + O(N^2) traceback")
    print(f"{'=' * 60}\n")

    return float(k), fitted_times


def plot_results(runtime_results: dict, memory_results: dict, fitted_times: np.ndarray, complexity_k: float,
                 output_dir: Path = Path('performance_results')) -> Path:
    """
    Save runtime and memory plots side by side; returns the image path.
    """
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 5))

    lengths = runtime_results['lengths']
    ax1.errorbar(lengths, runtime_results['mean_times'], yerr=runtime_results['std_times'],
                 fmt='o-', capsize=5, label='Measured', linewidth=2, markersize=8)
    ax1.plot(lengths, fitted_times, '--', label=f'Fitted $O(N^{{{complexity_k:.2f}}})$', linewidth=2, alpha=0.7)
    ax1.set_xlabel('Sequence Length ($N$)', fontsize=12)
    ax1.set_ylabel('Runtime (seconds)', fontsize=12)
    ax1.set_title('Runtime Performance (Log-Log)', fontsize=14, fontweight='bold')
    ax1.legend(fontsize=10)
    ax1.grid(True, alpha=0.3)
    ax1.set_yscale('log')
    ax1.set_xscale('log')

    ax2.plot(lengths, memory_results['peak_memory_mb'], 's-', linewidth=2, markersize=8, color='orange')
    ax2.set_xlabel('Sequence Length ($N$)', fontsize=12)
    ax2.set_ylabel('Peak Memory (MB)', fontsize=12)
    ax2.set_title('Memory Usage (Log-Log)', fontsize=14, fontweight='bold')
    ax2.grid(True, alpha=0.3)
    ax2.set_yscale('log')
    ax2.set_xscale('log')

    plt.tight_layout()

    output_dir.mkdir(exist_ok=True)
    image_path = output_dir / 'performance_analysis.png'
    fig.savefig(image_path, dpi=300, bbox_inches='tight')
    plt.close(fig)
    print(f"\nPlot saved to: {image_path}")

    return image_path


def generate_markdown_table(runtime_results: dict, memory_results: dict) -> str:
    """
    Build the results as a Markdown table.
    """
    rows = [
        "| Sequence Length (N) | Runtime (s) | Peak Memory (MB) | Base Pairs |",
        "|---------------------|-------------|------------------|------------|",
    ]
    for i, n in enumerate(runtime_results['lengths']):
        rows.append(
            f"| {n:19d} | {runtime_results['mean_times'][i]:6.3f} ± {runtime_results['std_times'][i]:.3f} "
            f"| {memory_results['peak_memory_mb'][i]:16.2f} | {runtime_results['scores'][i]:10d} |"
        )
    return "\n".join(rows)


def main():
    """
    Runs the runtime and memory benchmarks, fits the exponent, plots, and
    prints the Markdown table.
    """
    print("=" * 60)
    print("NUSSINOV FOLDING - PERFORMANCE EVALUATION")
    print("=" * 60)

    sequence_lengths = [50, 100, 150, 200, 250, 300]
    num_trials = 3

    print(f"\nSequence lengths to test: {sequence_lengths}")
    print(f"Trials per length: {num_trials}")

    runtime_results = benchmark_runtime(sequence_lengths, num_trials)
    memory_results = benchmark_memory(sequence_lengths)

    complexity_k, fitted_times = analyze_complexity(runtime_results['lengths'], runtime_results['mean_times'])

    plot_results(runtime_results, memory_results, fitted_times, complexity_k)

    print("\n" + generate_markdown_table(runtime_results, memory_results) + "\n")


if __name__ == "__main__":
    main()
