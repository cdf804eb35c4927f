"""Run the solver over many targets and report guess statistics."""

import json
import random
import time
from collections import Counter
from typing import Dict, List, Optional, Sequence

from .engine import Engine
from .errors import InvariantViolation

MAX_GUESSES = 6


def sample_targets(words: Sequence[str], sample: Optional[int] = None,
                   seed: Optional[int] = None) -> List[str]:
    """
    All words, or ``sample`` of them drawn without replacement.

    Uses its own Random instance so sampling never disturbs (or depends on)
    the global random state.
    """
    if sample is None:
        return list(words)
    if sample <= 0:
        raise ValueError(f"Sample size must be positive, got {sample}")
    rng = random.Random(seed)
    return rng.sample(list(words), min(sample, len(words)))


def summarize(counts: Sequence[int]) -> Dict:
    """Min, median, max and mean of a non-empty list of guess counts."""
    if not counts:
        raise InvariantViolation("summarize called with no games")
    ordered = sorted(counts)
    n = len(ordered)
    return {
        'min': ordered[0],
        'median': ordered[n // 2],
        'max': ordered[-1],
        'average': sum(ordered) / n,
    }


def benchmark(engine: Engine, targets: Optional[Sequence[str]] = None,
              verbose: bool = False, progress_every: int = 500) -> Dict:
    """
    Benchmark the engine on a list of targets.

    Args:
        engine: Engine instance
        targets: words to solve (default: the whole dictionary)
        verbose: print every guess of every game
        progress_every: print a progress line every N games (0 disables)

    Returns:
        Dict with results
    """
    if targets is None:
        targets = engine.words
    if not targets:
        raise InvariantViolation("benchmark called with no targets")

    # computed up front so it doesn't count against the first game
    first_guess = engine.first_guess

    results = []
    dist = Counter()
    failures = []

    start = time.time()
    for i, word in enumerate(targets):
        if progress_every and not verbose and i % progress_every == 0:
            elapsed = time.time() - start
            rate = (i + 1) / elapsed if elapsed > 0 else 0
            avg = sum(results) / len(results) if results else 0
            print(f"[{i}/{len(targets)}] {rate:.1f} w/s, avg={avg:.4f}")

        if verbose:
            print(f"Wordle {i + 1}: {word.upper()}")
        n, _ = engine.solve(word, verbose=verbose)
        if verbose:
            print()

        results.append(n)
        dist[n] += 1
        if n > MAX_GUESSES:
            failures.append(word.upper())

    elapsed = time.time() - start

    summary = summarize(results)
    summary.update({
        'total': len(targets),
        'first_guess': first_guess,
        'total_guesses': sum(results),
        'distribution': dict(sorted(dist.items())),
        'failures': len(failures),
        'failed_words': failures[:20],
        'time': elapsed,
        'rate': len(targets) / elapsed if elapsed > 0 else 0.0,
    })
    return summary


def print_results(results: Dict):
    """Pretty print benchmark results."""
    print("\n" + "=" * 50)
    print("BENCHMARK RESULTS")
    print("=" * 50)
    print(f"Words tested: {results['total']}")
    print(f"First guess: {results['first_guess']}")
    print(f"Minimum # of guesses: {results['min']}")
    print(f"Median # of guesses: {results['median']}")
    print(f"Maximum # of guesses: {results['max']}")
    print(f"Average # of guesses: {results['average']:.4f}")
    print(f"Over {MAX_GUESSES} guesses: {results['failures']} "
          f"({100 * results['failures'] / results['total']:.2f}%)")
    print(f"Time: {results['time']:.1f}s ({results['rate']:.1f} words/sec)")
    print("\nDistribution:")
    for n, count in results['distribution'].items():
        pct = 100 * count / results['total']
        bar = "█" * int(pct / 2)
        print(f"  {n}: {count:5d} ({pct:5.2f}%) {bar}")
    if results['failed_words']:
        print(f"\nOver {MAX_GUESSES} guesses: {results['failed_words']}")
    print("=" * 50)


def results_to_json(results: Dict) -> str:
    return json.dumps(results, indent=2, sort_keys=True)
