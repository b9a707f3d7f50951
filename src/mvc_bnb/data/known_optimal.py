"""
YAML store of previously recorded optimal vertex cover values.

The file is a list of entries::

    - id: test.clq
      format: clq
      order: 5
      size: 6
      val: 3
      updated: '2024-01-31 12:00:00'
      runs:
        - date: '2024-01-31 12:00:00'
          mvc_val: 3
          time: 0.0012
          is_time_limit: false
          algorithm: BnB
          comment: ''

The values are an annotation source only; the search never reads them.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from ..errors import GraphNotFoundError, StoreFormatError, StoreNotFoundError

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class KnownValue:
    """A recorded optimum for one graph."""
    graph_id: str
    value: int
    recorded_at: Optional[str]


def _now() -> str:
    return datetime.now().strftime(DATE_FORMAT)


class KnownOptimalStore:
    """
    Read/write access to the YAML store at ``path``.

    Args:
        path: YAML file
        create: Start from an empty store if the file does not exist
    """

    def __init__(self, path, create: bool = False):
        self.path = Path(path)
        self._entries: Optional[List[Dict]] = None
        self._create = create

    def load(self) -> List[Dict]:
        if self._entries is not None:
            return self._entries
        if not self.path.exists():
            if self._create:
                self._entries = []
                return self._entries
            raise StoreNotFoundError(f"Known-optimal store not found: {self.path}")
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise StoreNotFoundError(f"Unable to open {self.path}: {e}") from e
        except yaml.YAMLError as e:
            raise StoreFormatError(f"Error parsing YAML file {self.path}: {e}") from e

        if data is None:
            data = []
        if not isinstance(data, list):
            raise StoreFormatError(f"{self.path} must contain a list of graph entries")
        for entry in data:
            if not isinstance(entry, dict) or "id" not in entry:
                raise StoreFormatError(f"{self.path} has an entry without an 'id': {entry!r}")
            val = entry.get("val")
            if val is not None and (not isinstance(val, int) or isinstance(val, bool) or val < 0):
                raise StoreFormatError(f"Entry {entry['id']!r} has an invalid value: {val!r}")
            entry.setdefault("runs", [])
        self._entries = data
        return self._entries

    def save(self):
        entries = self.load()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(entries, f, sort_keys=False)
        logger.debug(f"Saved {len(entries)} entries to {self.path}")

    def _find(self, graph_id: str) -> Optional[Dict]:
        for entry in self.load():
            if entry["id"] == graph_id:
                return entry
        return None

    def _require(self, graph_id: str) -> Dict:
        entry = self._find(graph_id)
        if entry is None:
            raise GraphNotFoundError(f"Graph {graph_id!r} not found in {self.path}")
        return entry

    def graph_ids(self) -> List[str]:
        return [entry["id"] for entry in self.load()]

    def get(self, graph_id: str) -> Optional[KnownValue]:
        """Recorded optimum for ``graph_id``, or None if unknown or not yet set."""
        entry = self._find(graph_id)
        if entry is None or entry.get("val") is None:
            return None
        return KnownValue(graph_id, entry["val"], entry.get("updated"))

    def get_optimal_value(self, graph_id: str) -> Optional[int]:
        known = self.get(graph_id)
        return known.value if known is not None else None

    def is_optimal_value(self, graph_id: str, value: int) -> Optional[bool]:
        known = self.get(graph_id)
        if known is None:
            return None
        return known.value == value

    def add_graph(self, graph_id: str, fmt: str, graph) -> bool:
        """
        Add an entry for ``graph`` with no recorded value.

        Returns:
            False if the id was already present
        """
        if self._find(graph_id) is not None:
            return False
        self.load().append({
            "id": graph_id,
            "format": fmt,
            "order": graph.order,
            "size": graph.size,
            "val": None,
            "updated": None,
            "runs": [],
        })
        logger.info(f"Added {graph_id} ({graph.order} vertices, {graph.size} edges) to the store")
        return True

    def update_value(self, graph_id: str, value: int):
        if value < 0:
            raise ValueError(f"Cover size must be non-negative, got {value}")
        entry = self._require(graph_id)
        previous = entry.get("val")
        if previous is not None and previous != value:
            logger.warning(f"Recorded value for {graph_id} changes from {previous} to {value}")
        entry["val"] = value
        entry["updated"] = _now()

    def add_run(self, graph_id: str, mvc_val: int, elapsed: float, is_time_limit: bool,
                algorithm: str, comment: str = ""):
        entry = self._require(graph_id)
        entry["runs"].append({
            "date": _now(),
            "mvc_val": mvc_val,
            "time": round(float(elapsed), 6),
            "is_time_limit": bool(is_time_limit),
            "algorithm": algorithm,
            "comment": comment,
        })

    def get_runs(self, graph_id: str) -> List[Dict]:
        return list(self._require(graph_id)["runs"])
