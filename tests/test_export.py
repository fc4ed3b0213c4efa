import unittest
import csv
import io
import json
import os
import sys
import tempfile
from datetime import datetime

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from dnasearch.comparison import AlgorithmComparison
from dnasearch.export import generate_report, render, to_csv, to_json, write_export
from dnasearch.history import SearchHistory
from dnasearch.models import CSV_HEADERS, SearchRecord, SearchResult


def _record(pattern="ACGT", suffix_ms=2.0, fm_ms=1.0):
    return SearchRecord(
        sequence="ACGTACGT",
        pattern=pattern,
        suffix_result=SearchResult([0, 4], suffix_ms, 6, 20),
        fm_result=SearchResult([0, 4], fm_ms, 4, 4),
        sequence_name="demo",
        timestamp=datetime(2024, 5, 1, 12, 30, 0),
    )


class ComparisonTests(unittest.TestCase):
    def test_run_pairs_results(self):
        record = AlgorithmComparison("AAAA", name="poly-A").run("AA")
        self.assertEqual(record.suffix_result.positions, [0, 1, 2])
        self.assertEqual(record.fm_result.positions, [0, 1, 2])
        self.assertTrue(record.positions_agree)
        self.assertEqual(record.sequence_name, "poly-A")


class ExportTests(unittest.TestCase):
    def test_csv_columns(self):
        rows = list(csv.reader(io.StringIO(to_csv([_record()]))))
        self.assertEqual(rows[0], CSV_HEADERS)
        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[1][1:4], ["demo", "ACGT", "8"])
        self.assertEqual(rows[1][7], "2")
        self.assertEqual(rows[1][11], "2")

    def test_json_round_trip_fields(self):
        data = json.loads(to_json([_record()]))
        self.assertEqual(data[0]["pattern"], "ACGT")
        self.assertEqual(data[0]["fm_result"]["positions"], [0, 4])
        restored = SearchRecord.from_dict(data[0])
        self.assertEqual(restored.timestamp, datetime(2024, 5, 1, 12, 30, 0))
        self.assertEqual(restored.suffix_result.char_comp, 20)

    def test_report_summary(self):
        report = generate_report([_record(), _record(pattern="CGT", suffix_ms=4.0, fm_ms=1.0)])
        self.assertIn("- Total Searches: 2", report)
        self.assertIn("- Average Suffix Array Time: 3.000ms", report)
        self.assertIn("- Average FM-Index Time: 1.000ms", report)
        self.assertIn("- Performance Improvement: 66.7%", report)
        self.assertIn("### Search 2", report)

    def test_report_handles_zero_times(self):
        report = generate_report([_record(suffix_ms=0.0, fm_ms=0.0)])
        self.assertIn("- Performance Improvement: 0.0%", report)

    def test_report_empty(self):
        self.assertIn("No searches recorded.", generate_report([]))

    def test_unknown_format(self):
        with self.assertRaises(ValueError):
            render([_record()], "xml")

    def test_write_export(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "out.csv")
            write_export([_record()], "csv", path)
            with open(path) as f:
                self.assertTrue(f.read().startswith("Timestamp,"))


class SearchHistoryTests(unittest.TestCase):
    def test_default_names(self):
        history = SearchHistory()
        record = _record()
        record.sequence_name = None
        history.add(record)
        self.assertEqual(history.records[0].sequence_name, "Search 1")

    def test_save_and_load(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "history.json")
            history = SearchHistory(path)
            history.add(_record())
            history.add(_record(pattern="GT"))
            history.save()

            reloaded = SearchHistory(path)
            records = reloaded.load()
            self.assertEqual([r.pattern for r in records], ["ACGT", "GT"])
            self.assertEqual(len(reloaded), 2)

            reloaded.clear()
            self.assertEqual(len(reloaded), 0)
            self.assertFalse(os.path.exists(path))

    def test_missing_file_is_empty(self):
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(SearchHistory(os.path.join(tmp, "none.json")).load(), [])

    def test_corrupt_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "history.json")
            with open(path, "w") as f:
                f.write("{not json")
            with self.assertRaises(ValueError):
                SearchHistory(path).load()


if __name__ == "__main__":
    unittest.main()
