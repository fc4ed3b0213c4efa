import unittest
import contextlib
import io
import json
import os
import sys
import tempfile

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from dnasearch.main import main, parse_fasta
from dnasearch.utils import validate_inputs


def _run(argv):
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        main(argv)
    return out.getvalue()


class ValidationTests(unittest.TestCase):
    def test_cleans_input(self):
        self.assertEqual(validate_inputs("  acgt \n", "cg"), ("ACGT", "CG"))

    def test_messages(self):
        cases = [
            ("", "A", "Please enter a DNA sequence"),
            ("ACGT", "  ", "Please enter a search pattern"),
            ("ACGN", "A", "DNA sequence must contain only A, C, G, T characters"),
            ("ACGT", "AU", "Search pattern must contain only A, C, G, T characters"),
            ("ACG", "ACGT", "Pattern cannot be longer than the sequence"),
        ]
        for sequence, pattern, message in cases:
            with self.subTest(message=message):
                with self.assertRaises(ValueError) as ctx:
                    validate_inputs(sequence, pattern)
                self.assertEqual(str(ctx.exception), message)


class CommandLineTests(unittest.TestCase):
    def test_text_output(self):
        output = _run(["AA", "--sequence", "AAAA"])
        self.assertIn("Suffix Array", output)
        self.assertIn("FM-Index", output)
        self.assertIn("positions=[0, 1, 2]", output)

    def test_single_algorithm(self):
        output = _run(["AA", "--sequence", "AAAA", "--algorithm", "fm"])
        self.assertNotIn("Suffix Array", output)
        self.assertIn("FM-Index", output)

    def test_json_output_from_sample(self):
        data = json.loads(_run(["ACGT", "--sample", "1", "--format", "json"]))
        self.assertEqual(data[0]["sequence_name"], "Short DNA Sample")
        self.assertEqual(data[0]["suffix_result"]["positions"], data[0]["fm_result"]["positions"])

    def test_fasta_input_and_history(self):
        with tempfile.TemporaryDirectory() as tmp:
            fasta = os.path.join(tmp, "seqs.fa")
            with open(fasta, "w") as f:
                f.write(">chr1 first\nACGTAC\nGTAC\n>chr2\nttttacgt\n")
            self.assertEqual(list(parse_fasta(fasta)), [("chr1", "ACGTACGTAC"), ("chr2", "ttttacgt")])

            history = os.path.join(tmp, "history.json")
            _run(["ACGT", "--fasta", fasta, "--history", history, "--format", "csv"])
            _run(["TTT", "--fasta", fasta, "--history", history, "--format", "csv"])
            with open(history) as f:
                stored = json.load(f)
            self.assertEqual(len(stored), 4)
            self.assertEqual([r["sequence_name"] for r in stored[:2]], ["chr1", "chr2"])
            self.assertEqual(stored[1]["fm_result"]["positions"], [4])

    def test_report_written_to_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            prefix = os.path.join(tmp, "run")
            output = _run(["GAT", "--sample", "2", "--format", "report", "--output", prefix])
            self.assertIn("Results written to", output)
            with open(prefix + ".md") as f:
                self.assertIn("# Genome Pattern Recognition Analysis Report", f.read())

    def test_invalid_pattern_exits(self):
        with self.assertRaises(SystemExit) as ctx:
            _run(["ACXT", "--sequence", "ACGT"])
        self.assertEqual(ctx.exception.code, 1)

    def test_empty_sequence_is_rejected(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            with self.assertRaises(SystemExit) as ctx:
                main(["ACGT", "--sequence", ""])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("Error: Please enter a DNA sequence", out.getvalue())
        self.assertNotIn("Short DNA Sample", out.getvalue())

    def test_corrupt_history_starts_empty(self):
        with tempfile.TemporaryDirectory() as tmp:
            history = os.path.join(tmp, "history.json")
            with open(history, "w") as f:
                f.write("{not json")
            output = _run(["AA", "--sequence", "AAAA", "--history", history])
            self.assertIn("Warning: Failed to load search history", output)
            self.assertIn("positions=[0, 1, 2]", output)
            with open(history) as f:
                stored = json.load(f)
            self.assertEqual(len(stored), 1)
            self.assertEqual(stored[0]["pattern"], "AA")

    def test_missing_fasta_exits(self):
        with self.assertRaises(SystemExit) as ctx:
            _run(["ACGT", "--fasta", "/nonexistent/file.fa"])
        self.assertEqual(ctx.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
