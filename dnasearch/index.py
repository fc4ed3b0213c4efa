from typing import Dict, Optional, Type, Union, TYPE_CHECKING

from .fm_index import FMIndex
from .models import SearchResult
from .suffix_array import SuffixArray

if TYPE_CHECKING:
    from .monitor import ResourceMonitor

Index = Union[SuffixArray, FMIndex]

ALGORITHMS: Dict[str, Type] = {
    SuffixArray.name: SuffixArray,
    FMIndex.name: FMIndex,
}


def build(text: str, algorithm: str = "fm") -> Index:
    """Build an index of the requested kind.

    The text is assumed already validated; nothing is checked here.
    """
    try:
        cls = ALGORITHMS[algorithm]
    except KeyError:
        valid = ", ".join(sorted(ALGORITHMS))
        raise ValueError(f"Unknown algorithm {algorithm!r} (expected one of: {valid})") from None
    return cls(text)


def search(index: Index, pattern: str, monitor: Optional['ResourceMonitor'] = None) -> SearchResult:
    return index.search(pattern, monitor=monitor)
