import sys
import os
import time
from typing import List, Dict, Any
import numpy as np

# Add root to path to import the package without installing it
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dnasearch.fm_index import FMIndex
from dnasearch.suffix_array import SuffixArray
from dnasearch.utils import find_all_naive


def run_implementation(cls, text: str, patterns: List[str]) -> Dict[str, Any]:
    """Build one index over `text` and search every pattern."""
    start_time = time.perf_counter()
    index = cls(text)
    build_time = time.perf_counter() - start_time

    results = [index.search(p) for p in patterns]

    return {
        "build": build_time,
        "search_ms": sum(r.time_ms for r in results),
        "iters": sum(r.iters for r in results),
        "char_comp": sum(r.char_comp for r in results),
        "positions": [r.positions for r in results],
    }


def compare_results(sa_res, fm_res, oracle, name):
    print(f"\n--- Comparison for {name} ---")
    print(f"{'Metric':<20} | {'Suffix Array':<15} | {'FM-Index':<15} | {'Diff':<10}")
    print("-" * 70)

    b_sa = sa_res['build']
    b_fm = fm_res['build']
    b_diff = (b_fm - b_sa) / b_sa * 100 if b_sa > 0 else 0
    print(f"{'Build (s)':<20} | {b_sa:<15.4f} | {b_fm:<15.4f} | {b_diff:+.1f}%")

    t_sa = sa_res['search_ms']
    t_fm = fm_res['search_ms']
    t_diff = (t_fm - t_sa) / t_sa * 100 if t_sa > 0 else 0
    print(f"{'Search (ms)':<20} | {t_sa:<15.3f} | {t_fm:<15.3f} | {t_diff:+.1f}%")

    print(f"{'Iterations':<20} | {sa_res['iters']:<15} | {fm_res['iters']:<15} | {fm_res['iters'] - sa_res['iters']:+}")
    print(f"{'Char Comparisons':<20} | {sa_res['char_comp']:<15} | {fm_res['char_comp']:<15} | "
          f"{fm_res['char_comp'] - sa_res['char_comp']:+}")

    agree = sum(1 for a, b in zip(sa_res['positions'], fm_res['positions']) if a == b)
    correct = sum(1 for a, o in zip(fm_res['positions'], oracle) if a == o)
    total = len(oracle)
    print(f"{'Agreement':<20} | {agree}/{total}")
    print(f"{'Matches Oracle':<20} | {correct}/{total}")


def main():
    rng = np.random.default_rng(42)
    sizes = [("1kb", 1000), ("5kb", 5000), ("20kb", 20000)]
    if len(sys.argv) > 1:
        sizes = [(f"{int(a)}bp", int(a)) for a in sys.argv[1:]]

    for name, n in sizes:
        print(f"\nGenerating random sequence ({name})...")
        text = "".join(rng.choice(list("ACGT"), n))
        # patterns drawn from the text plus random ones that mostly miss
        patterns = []
        for length in (4, 8, 16, 32):
            start = int(rng.integers(0, n - length))
            patterns.append(text[start:start + length])
            patterns.append("".join(rng.choice(list("ACGT"), length)))

        sa_res = run_implementation(SuffixArray, text, patterns)
        fm_res = run_implementation(FMIndex, text, patterns)
        oracle = [find_all_naive(text, p) for p in patterns]

        compare_results(sa_res, fm_res, oracle, name)


if __name__ == "__main__":
    main()
