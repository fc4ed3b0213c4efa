import time
from typing import Optional, TYPE_CHECKING

from .fm_index import FMIndex
from .models import SearchRecord
from .suffix_array import SuffixArray

if TYPE_CHECKING:
    from .monitor import ResourceMonitor


class AlgorithmComparison:
    """Runs patterns through a suffix array and an FM-index built over the same sequence."""

    def __init__(self, sequence: str, name: str = "sequence", show_progress: bool = False):
        self.sequence = sequence
        self.name = name
        self.show_progress = show_progress

        if show_progress:
            print(f"  [{name}] Building suffix array ({len(sequence)} bp)...", flush=True)
        t0 = time.time()
        self.suffix_array = SuffixArray(sequence)
        if show_progress:
            print(f"  [{name}] Suffix array built in {time.time() - t0:.2f}s", flush=True)
            print(f"  [{name}] Building BWT and FM-index...", flush=True)
        t0 = time.time()
        self.fm_index = FMIndex(sequence)
        if show_progress:
            print(f"  [{name}] FM-index built in {time.time() - t0:.2f}s", flush=True)

    def run(self, pattern: str, monitor: Optional['ResourceMonitor'] = None) -> SearchRecord:
        """Search `pattern` with both indexes and pair the results."""
        suffix_result = self.suffix_array.search(pattern, monitor=monitor)
        fm_result = self.fm_index.search(pattern, monitor=monitor)
        record = SearchRecord(
            sequence=self.sequence,
            pattern=pattern,
            suffix_result=suffix_result,
            fm_result=fm_result,
            sequence_name=self.name,
        )
        if self.show_progress:
            print(f"  [{self.name}] {pattern}: suffix array {suffix_result.match_count} hits "
                  f"in {suffix_result.time_ms:.3f}ms, FM-index {fm_result.match_count} hits "
                  f"in {fm_result.time_ms:.3f}ms", flush=True)
            if not record.positions_agree:
                print(f"  [{self.name}] WARNING: algorithms disagree on '{pattern}'", flush=True)
        return record
