"""
dnasearch: exact DNA substring search with a suffix array and an FM-index.

>>> from dnasearch import FMIndex, SuffixArray
>>> FMIndex("AAAA").search("AA").positions
[0, 1, 2]
>>> SuffixArray("AAAA").search("AA").positions
[0, 1, 2]
"""

from dnasearch.fm_index import FMIndex  # noqa: F401
from dnasearch.index import ALGORITHMS, build, search  # noqa: F401
from dnasearch.models import ResourceSample, SearchRecord, SearchResult  # noqa: F401
from dnasearch.monitor import ResourceMonitor  # noqa: F401
from dnasearch.suffix_array import SuffixArray  # noqa: F401

__version__ = '0.1.0'
__all__ = [
    'FMIndex',
    'SuffixArray',
    'SearchResult',
    'SearchRecord',
    'ResourceSample',
    'ResourceMonitor',
    'ALGORITHMS',
    'build',
    'search',
]
