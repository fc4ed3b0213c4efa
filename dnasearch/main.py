import argparse
import sys
import os
from typing import List, Iterator, Tuple
from .comparison import AlgorithmComparison
from .export import EXPORT_EXTENSIONS, render, write_export
from .history import SearchHistory
from .models import SearchRecord, SearchResult
from .monitor import ResourceMonitor
from .utils import SAMPLE_SEQUENCES, validate_inputs


def parse_fasta(file_path: str) -> Iterator[Tuple[str, str]]:
    """Simple FASTA parser to avoid Biopython dependency."""
    name = None
    seq_parts = []
    with open(file_path, 'r') as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            if line.startswith('>'):
                if name:
                    yield name, "".join(seq_parts)
                name = line[1:].split()[0]  # Take first word as ID
                seq_parts = []
            else:
                seq_parts.append(line)
        if name:
            yield name, "".join(seq_parts)


def _format_result(label: str, result: SearchResult) -> str:
    shown = result.positions[:20]
    more = f" ... (+{result.match_count - len(shown)})" if result.match_count > len(shown) else ""
    return (f"{label:<14} matches={result.match_count:<6} time={result.time_ms:.3f}ms "
            f"iters={result.iters:<5} char_comp={result.char_comp:<6} "
            f"mem={result.memory_usage:.1f}MiB cpu={result.cpu_usage:.1f}%\n"
            f"{'':<14} positions={shown}{more}")


def format_text(records: List[SearchRecord], algorithm: str) -> str:
    blocks = []
    for r in records:
        lines = [f"[{r.sequence_name}] pattern={r.pattern} length={len(r.sequence)}"]
        if algorithm in ("suffix", "both"):
            lines.append(_format_result("Suffix Array", r.suffix_result))
        if algorithm in ("fm", "both"):
            lines.append(_format_result("FM-Index", r.fm_result))
        if algorithm == "both" and not r.positions_agree:
            lines.append("WARNING: suffix array and FM-index positions differ")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def _load_sequences(args) -> List[Tuple[str, str]]:
    if args.fasta is not None:
        if not os.path.exists(args.fasta):
            raise ValueError(f"File {args.fasta} not found")
        return list(parse_fasta(args.fasta))
    if args.sequence is not None:
        return [("sequence", args.sequence)]
    if not 1 <= args.sample <= len(SAMPLE_SEQUENCES):
        raise ValueError(f"--sample must be between 1 and {len(SAMPLE_SEQUENCES)}")
    name, seq, _ = SAMPLE_SEQUENCES[args.sample - 1]
    return [(name, seq)]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Exact DNA pattern search with a suffix array and an FM-index")
    parser.add_argument("pattern", help="Pattern to search for (A/C/G/T)")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--sequence", "-s", help="DNA sequence to index")
    source.add_argument("--fasta", "-f", help="FASTA file; every record is searched")
    source.add_argument("--sample", type=int, default=1,
                        help=f"Built-in sample sequence 1-{len(SAMPLE_SEQUENCES)} (default: 1)")
    parser.add_argument("--algorithm", choices=["suffix", "fm", "both"], default="both",
                        help="Which results to print (default: both; both always run for history/export)")
    parser.add_argument("--format", choices=["text", "csv", "json", "report"], default="text", help="Output format")
    parser.add_argument("--output", "-o", help="Output file prefix (default: print to stdout)")
    parser.add_argument("--history", help="JSON search history file to append to")
    parser.add_argument("--monitor-interval", type=float, default=0.05,
                        help="Resource sampling interval in seconds (default: 0.05)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show progress")
    parser.add_argument("--profile", action="store_true", help="Profile execution with cProfile and print top hotspots")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        sequences = _load_sequences(args)
        if not sequences:
            raise ValueError("No sequences to search")
        history = SearchHistory(args.history) if args.history else None
        if history is not None:
            try:
                history.load()
            except ValueError as e:
                print(f"Warning: {e}; starting with an empty history", flush=True)

        profiler = None
        if args.profile:
            import cProfile
            profiler = cProfile.Profile()
            profiler.enable()

        records: List[SearchRecord] = []
        with ResourceMonitor("search", interval=args.monitor_interval) as monitor:
            # at least one reading before the first search completes
            monitor.sample()
            for name, raw_seq in sequences:
                seq, pattern = validate_inputs(raw_seq, args.pattern)
                if args.verbose:
                    print(f"Processing sequence: {name} ({len(seq)} bp)", flush=True)
                comparison = AlgorithmComparison(seq, name=name, show_progress=args.verbose)
                records.append(comparison.run(pattern, monitor=monitor))

        if profiler is not None:
            profiler.disable()
            import pstats
            print("Top 20 cumulative time hotspots:")
            stats = pstats.Stats(profiler)
            stats.strip_dirs().sort_stats("cumulative").print_stats(20)

        if history is not None:
            for record in records:
                history.add(record)
            history.save()
            if args.verbose:
                print(f"History ({len(history)} searches) saved to {args.history}", flush=True)

        if args.format == "text":
            content = format_text(records, args.algorithm)
            if args.output:
                out_file = f"{args.output}.txt"
                with open(out_file, "w") as f:
                    f.write(content + "\n")
                print(f"Results written to {out_file}")
            else:
                print(content)
        elif args.output:
            out_file = write_export(records, args.format, f"{args.output}.{EXPORT_EXTENSIONS[args.format]}")
            print(f"Results written to {out_file}")
        else:
            print(render(records, args.format))
    except (ValueError, OSError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
