import time
import numpy as np
from typing import List, Optional, Tuple, TYPE_CHECKING

from .models import SearchResult

if TYPE_CHECKING:
    from .monitor import ResourceMonitor


class SuffixArray:
    """Exact substring lookup over a sorted list of suffix start offsets.

    Construction sorts suffixes by direct string comparison, which is
    O(n^2 log n) in the worst case and meant for small texts.
    """

    name = "suffix"

    def __init__(self, text: str):
        self.text: str = text
        self.n = len(text)
        self.suffix_array = self._build_suffix_array()

    def _build_suffix_array(self) -> np.ndarray:
        """Sort every offset by the suffix starting there.

        All suffixes are distinct, so the order has no ties.
        """
        text = self.text
        order = sorted(range(self.n), key=lambda i: text[i:])
        sa = np.array(order, dtype=np.int64)
        sa.flags.writeable = False
        return sa

    def _lower_bound(self, pattern: str, lo: int, strict: bool) -> Tuple[int, int, int]:
        """Binary search for the first suffix whose m-prefix is >= pattern
        (or > pattern when `strict`).

        Returns (index, probes, chars compared).
        """
        m = len(pattern)
        text = self.text
        sa = self.suffix_array
        hi = self.n
        iters = 0
        char_comp = 0
        while lo < hi:
            iters += 1
            mid = (lo + hi) // 2
            start = int(sa[mid])
            char_comp += min(m, self.n - start)
            prefix = text[start:start + m]
            if prefix > pattern or (not strict and prefix == pattern):
                hi = mid
            else:
                lo = mid + 1
        return lo, iters, char_comp

    def search(self, pattern: str, monitor: Optional['ResourceMonitor'] = None) -> SearchResult:
        """Locate every start offset of `pattern`.

        An empty position list is the not-found outcome.
        """
        m = len(pattern)
        t0 = time.perf_counter()

        left, iters, char_comp = self._lower_bound(pattern, 0, strict=False)

        if left == self.n:
            return SearchResult.finish([], t0, iters, char_comp, monitor)
        start = int(self.suffix_array[left])
        if self.text[start:start + m] != pattern:
            return SearchResult.finish([], t0, iters, char_comp, monitor)

        right, more_iters, more_comp = self._lower_bound(pattern, left, strict=True)
        iters += more_iters
        char_comp += more_comp

        # slice is ordered by suffix, not by offset
        positions: List[int] = sorted(self.suffix_array[left:right].tolist())
        return SearchResult.finish(positions, t0, iters, char_comp, monitor)

    def count(self, pattern: str) -> int:
        """Count pattern occurrences in text."""
        return self.search(pattern).match_count

    def __len__(self) -> int:
        return self.n

    def __repr__(self) -> str:
        return f"SuffixArray(n={self.n})"
