import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Dict, Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .monitor import ResourceMonitor


@dataclass(frozen=True)
class ResourceSample:
    """One reading taken by the resource monitor."""
    timestamp: float
    memory_usage: float  # resident set size in MiB
    cpu_usage: float  # process CPU percent
    algorithm: str


@dataclass
class SearchResult:
    """Outcome of a single pattern search against an index."""
    positions: List[int]
    time_ms: float
    iters: int
    char_comp: int
    memory_usage: float = 0.0
    cpu_usage: float = 0.0

    @property
    def match_count(self) -> int:
        return len(self.positions)

    @classmethod
    def finish(cls, positions: List[int], t0: float, iters: int, char_comp: int,
               monitor: Optional['ResourceMonitor'] = None) -> 'SearchResult':
        """Close a search started at perf_counter() value `t0`.

        Only the most recent monitor sample is read; the monitor itself is
        left running.
        """
        dt = (time.perf_counter() - t0) * 1000.0
        sample = monitor.latest() if monitor is not None else None
        return cls(
            positions=positions,
            time_ms=round(dt, 3),
            iters=iters,
            char_comp=char_comp,
            memory_usage=sample.memory_usage if sample else 0.0,
            cpu_usage=sample.cpu_usage if sample else 0.0,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "positions": list(self.positions),
            "time_ms": self.time_ms,
            "iters": self.iters,
            "char_comp": self.char_comp,
            "memory_usage": self.memory_usage,
            "cpu_usage": self.cpu_usage,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchResult':
        return cls(
            positions=[int(p) for p in data.get("positions", [])],
            time_ms=float(data.get("time_ms", 0.0)),
            iters=int(data.get("iters", 0)),
            char_comp=int(data.get("char_comp", 0)),
            memory_usage=float(data.get("memory_usage") or 0.0),
            cpu_usage=float(data.get("cpu_usage") or 0.0),
        )


CSV_HEADERS = [
    "Timestamp",
    "Sequence Name",
    "Pattern",
    "Sequence Length",
    "Suffix Array Time (ms)",
    "Suffix Array Iterations",
    "Suffix Array Char Comparisons",
    "Suffix Array Matches",
    "FM-Index Time (ms)",
    "FM-Index Iterations",
    "FM-Index Char Comparisons",
    "FM-Index Matches",
]


@dataclass
class SearchRecord:
    """A pattern run through both algorithms over one sequence."""
    sequence: str
    pattern: str
    suffix_result: SearchResult
    fm_result: SearchResult
    sequence_name: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def positions_agree(self) -> bool:
        return self.suffix_result.positions == self.fm_result.positions

    def to_csv_row(self) -> List[Any]:
        """Row matching CSV_HEADERS column order."""
        return [
            self.timestamp.isoformat(),
            self.sequence_name or "Unnamed",
            self.pattern,
            len(self.sequence),
            self.suffix_result.time_ms,
            self.suffix_result.iters,
            self.suffix_result.char_comp,
            self.suffix_result.match_count,
            self.fm_result.time_ms,
            self.fm_result.iters,
            self.fm_result.char_comp,
            self.fm_result.match_count,
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "sequence_name": self.sequence_name,
            "sequence": self.sequence,
            "pattern": self.pattern,
            "suffix_result": self.suffix_result.to_dict(),
            "fm_result": self.fm_result.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchRecord':
        return cls(
            sequence=data["sequence"],
            pattern=data["pattern"],
            suffix_result=SearchResult.from_dict(data["suffix_result"]),
            fm_result=SearchResult.from_dict(data["fm_result"]),
            sequence_name=data.get("sequence_name"),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )
