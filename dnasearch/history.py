import json
from pathlib import Path
from typing import Iterator, List, Optional, Union

from .models import SearchRecord


class SearchHistory:
    """Ordered list of search records, optionally persisted as JSON."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        self._records: List[SearchRecord] = []

    @property
    def records(self) -> List[SearchRecord]:
        return list(self._records)

    def add(self, record: SearchRecord) -> SearchRecord:
        if not record.sequence_name:
            record.sequence_name = f"Search {len(self._records) + 1}"
        self._records.append(record)
        return record

    def clear(self):
        self._records = []
        if self.path is not None and self.path.exists():
            self.path.unlink()

    def load(self) -> List[SearchRecord]:
        """Replace in-memory records with the ones stored at `path`.

        A missing file leaves the history empty.
        """
        if self.path is None or not self.path.exists():
            self._records = []
            return []
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                raw = json.load(fh)
            self._records = [SearchRecord.from_dict(item) for item in raw]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Failed to load search history from {self.path}: {e}") from e
        return self.records

    def save(self):
        if self.path is None:
            raise ValueError("SearchHistory has no path to save to")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as fh:
            json.dump([r.to_dict() for r in self._records], fh, indent=2)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SearchRecord]:
        return iter(list(self._records))
