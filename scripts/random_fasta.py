#!/usr/bin/env python3
import sys
import random
from pathlib import Path

BASES = ['A', 'C', 'G', 'T']


def random_sequence(length, rng=None):
    rng = rng or random
    return ''.join(rng.choice(BASES) for _ in range(length))


def write_random_fasta(path, length=1000, records=1, seed=None, line_width=60):
    p = Path(path)
    if length < 1 or records < 1:
        raise SystemExit('length and records must be positive')
    rng = random.Random(seed)

    with p.open('w', encoding='utf-8') as fh:
        for r in range(records):
            seq = random_sequence(length, rng)
            fh.write(f'>random_{r + 1} length={length}\n')
            # Wrap sequence lines like standard FASTA
            for i in range(0, len(seq), line_width):
                fh.write(seq[i:i + line_width] + '\n')

    print(f'Written to: {p}')
    print(f'Records: {records} x {length} bp')
    return p


if __name__ == '__main__':
    if len(sys.argv) < 2:
        print('Usage: random_fasta.py <fasta-file> [length] [records] [seed]')
        raise SystemExit(1)
    path = sys.argv[1]
    length = int(sys.argv[2]) if len(sys.argv) >= 3 else 1000
    records = int(sys.argv[3]) if len(sys.argv) >= 4 else 1
    seed = int(sys.argv[4]) if len(sys.argv) >= 5 else None
    write_random_fasta(path, length=length, records=records, seed=seed)
