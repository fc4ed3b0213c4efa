import time
import numpy as np
from typing import Dict, List, Optional, Tuple, TYPE_CHECKING

from .models import SearchResult

if TYPE_CHECKING:
    from .monitor import ResourceMonitor


class FMIndex:
    """BWT construction and FM-index backward search.

    The indexed string is the text plus a single '$' sentinel, which sorts
    before every DNA symbol. All tables are built once and never modified.
    """

    SENTINEL = "$"

    name = "fm"

    def __init__(self, text: str):
        """
        Build the BWT, C-table and occurrence table for `text`.

        Args:
            text: Input text over the DNA alphabet, without a sentinel
        """
        self.text: str = text + self.SENTINEL
        self.n = len(self.text)

        self.text_arr = np.frombuffer(self.text.encode("ascii"), dtype=np.uint8)

        self.suffix_array = self._build_suffix_array()
        self.bwt_arr = self._build_bwt_array()
        self.bwt: str = self.bwt_arr.tobytes().decode("ascii")
        self.alphabet: List[str] = sorted(set(self.bwt))
        self.c_table, self.char_totals = self._build_char_counts()
        self.occ_table = self._build_occurrence_table()

    def _build_suffix_array(self) -> np.ndarray:
        """Rotation order of text+sentinel by prefix doubling.

        With a unique smallest sentinel, sorting rotations and sorting
        suffixes give the same permutation. Ranks of 2k-prefixes are built
        from rank pairs with NumPy lexsort, so neither rotations nor suffix
        strings are materialised.
        """
        n = self.n
        # Initial rank from character codes, compressed to 0..sigma-1
        codes = self.text_arr.astype(np.int64, copy=False)
        _, inv = np.unique(codes, return_inverse=True)
        rank = inv.astype(np.int64, copy=False).reshape(-1)
        sa = np.arange(n, dtype=np.int64)

        k = 1
        tmp_rank = np.empty(n, dtype=np.int64)
        idx = np.arange(n, dtype=np.int64)
        while k < n:
            # secondary key is rank[i+k] else -1
            ipk = idx + k
            ipk_safe = np.clip(ipk, 0, n - 1)
            key2 = np.where(ipk < n, rank[ipk_safe], -1)
            # Sort by (rank[i], key2[i]) using lexsort with primary last
            sa = np.lexsort((key2, rank)).astype(np.int64, copy=False)
            r_sa = rank[sa]
            k2_sa = key2[sa]
            change = np.empty(n, dtype=np.int64)
            change[0] = 0
            change[1:] = (r_sa[1:] != r_sa[:-1]) | (k2_sa[1:] != k2_sa[:-1])
            tmp_rank[sa] = np.cumsum(change, dtype=np.int64)
            rank, tmp_rank = tmp_rank, rank
            if rank[sa[-1]] == n - 1:
                break
            k <<= 1
        sa.flags.writeable = False
        return sa

    def _build_bwt_array(self) -> np.ndarray:
        """Build BWT from suffix array as uint8 NumPy array (ASCII codes)."""
        # previous index (sa-1) % n
        prev_idx = (self.suffix_array - 1) % self.n
        bwt = self.text_arr[prev_idx]
        bwt.flags.writeable = False
        return bwt

    def _build_char_counts(self) -> Tuple[Dict[str, int], Dict[str, int]]:
        """Count character frequencies and compute cumulative counts C[char]."""
        codes, totals_arr = np.unique(self.bwt_arr, return_counts=True)
        totals = {chr(int(code)): int(total) for code, total in zip(codes, totals_arr)}
        counts: Dict[str, int] = {}
        cumulative = 0
        for char in self.alphabet:
            counts[char] = cumulative
            cumulative += totals[char]
        return counts, totals

    def _build_occurrence_table(self) -> Dict[str, np.ndarray]:
        """Full occurrence table: occ[c][i] = count of c in bwt[0:i], occ[c][0] = 0."""
        occ: Dict[str, np.ndarray] = {}
        for char in self.alphabet:
            table = np.zeros(self.n + 1, dtype=np.int64)
            table[1:] = np.cumsum(self.bwt_arr == ord(char), dtype=np.int64)
            table.flags.writeable = False
            occ[char] = table
        return occ

    def rank(self, char: str, pos: int) -> int:
        """Count occurrences of `char` in bwt[0:pos]."""
        table = self.occ_table.get(char)
        if table is None:
            return 0
        return int(table[pos])

    def backward_search(self, pattern: str) -> Tuple[int, int, int, int]:
        """
        Narrow the rank interval one pattern character at a time, right to left.

        Returns:
            (first, last, iters, char_comp); first > last when there is no match
        """
        first = 0
        last = self.n - 1
        iters = 0
        char_comp = 0

        for char in reversed(pattern):
            iters += 1
            if char not in self.c_table:
                return 1, 0, iters, char_comp

            c = self.c_table[char]
            occ = self.occ_table[char]
            first = c + int(occ[first])
            last = c + int(occ[last + 1]) - 1
            char_comp += 1

            if first > last:
                return first, last, iters, char_comp

        return first, last, iters, char_comp

    def search(self, pattern: str, monitor: Optional['ResourceMonitor'] = None) -> SearchResult:
        """Locate all start offsets of `pattern` in the original text.

        Misses, including symbols outside the alphabet, give an empty result.
        """
        t0 = time.perf_counter()
        first, last, iters, char_comp = self.backward_search(pattern)
        if first > last:
            return SearchResult.finish([], t0, iters, char_comp, monitor)

        positions = sorted(self.suffix_array[first:last + 1].tolist())
        return SearchResult.finish(positions, t0, iters, char_comp, monitor)

    def count(self, pattern: str) -> int:
        """Count pattern occurrences in text without locating them."""
        first, last, _, _ = self.backward_search(pattern)
        if first > last:
            return 0
        return last - first + 1

    def inverse_bwt(self) -> str:
        """Rebuild text+sentinel from the BWT alone using LF mapping.

        Row 0 is the rotation starting with the sentinel, so its BWT symbol is
        the last text character; each LF step moves one character left.
        """
        chars: List[str] = []
        row = 0
        for _ in range(self.n - 1):
            char = self.bwt[row]
            chars.append(char)
            row = self.c_table[char] + int(self.occ_table[char][row])
        chars.reverse()
        return "".join(chars) + self.SENTINEL

    def __len__(self) -> int:
        return self.n - 1

    def __repr__(self) -> str:
        return f"FMIndex(n={self.n - 1}, alphabet={''.join(self.alphabet)!r})"
