import re
from typing import List, Tuple

DNA_ALPHABET = "ACGT"

_DNA_RE = re.compile(r'^[ACGT]+$')

# (name, sequence, description)
SAMPLE_SEQUENCES: List[Tuple[str, str, str]] = [
    ("Short DNA Sample",
     "ACGTACGTTAGCTAGCGATCGATCGACGTACGTACGT",
     "Quick test sequence with repeating patterns"),
    ("Gene Fragment",
     "ATGCGATCGTAGCTAGCGATCGATCGTAGCTAGCGATCGATCGTAGCTAGCGATCGATCGTAGCTAGCGATCGATCGTAGC",
     "Longer sequence simulating a gene fragment"),
    ("Complex Pattern",
     "AAATTTCCCGGGAAATTTCCCGGGTATATATGCGCGCAAATTTCCCGGGTATATATGCGCGC",
     "Complex repeating patterns for advanced testing"),
]


def clean_sequence(value: str) -> str:
    """Strip surrounding whitespace and upper-case."""
    if value is None:
        return ""
    return value.strip().upper()


def validate_inputs(sequence: str, pattern: str) -> Tuple[str, str]:
    """Check a sequence/pattern pair before building an index.

    Returns the cleaned pair; raises ValueError with a user-facing message.
    """
    sequence = clean_sequence(sequence)
    pattern = clean_sequence(pattern)
    if not sequence:
        raise ValueError("Please enter a DNA sequence")
    if not pattern:
        raise ValueError("Please enter a search pattern")
    if not _DNA_RE.match(sequence):
        raise ValueError("DNA sequence must contain only A, C, G, T characters")
    if not _DNA_RE.match(pattern):
        raise ValueError("Search pattern must contain only A, C, G, T characters")
    if len(pattern) > len(sequence):
        raise ValueError("Pattern cannot be longer than the sequence")
    return sequence, pattern


def find_all_naive(text: str, pattern: str) -> List[int]:
    """Brute-force scan: every i with text[i:i+m] == pattern."""
    m = len(pattern)
    if m == 0:
        return []
    return [i for i in range(len(text) - m + 1) if text[i:i + m] == pattern]
