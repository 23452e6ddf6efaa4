"""
JSONL-backed entity store and upload storage.

Each entity type lives in its own file (data/Feedback.jsonl, data/Report.jsonl),
one JSON object per line. Records get an id and created_date on create and
are never rewritten afterwards.
"""

import json
import shutil
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from settings import DEFAULT_DATA_DIR, DEFAULT_UPLOADS_DIR
from src.errors import PersistenceError


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse an ISO timestamp, returning None if it is missing or malformed."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def _sort_key(record: dict) -> float:
    parsed = parse_timestamp(record.get("created_date"))
    if parsed is None:
        return float("-inf")
    # Naive timestamps are treated as local time
    return parsed.timestamp()


class EntityStore:
    def __init__(self, data_dir: str = DEFAULT_DATA_DIR):
        self.data_dir = Path(data_dir)

    def _path(self, entity_type: str) -> Path:
        return self.data_dir / f"{entity_type}.jsonl"

    def _stamp(self, record: dict) -> dict:
        return {
            **record,
            "id": uuid.uuid4().hex,
            "created_date": record.get("created_date") or datetime.now().astimezone().isoformat(),
        }

    def _append(self, entity_type: str, records: list[dict]) -> None:
        path = self._path(entity_type)
        payload = "".join(json.dumps(record, ensure_ascii=False) + "\n" for record in records)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            # One write per call, so a batch lands whole or not at all
            with open(path, "a", encoding="utf-8") as f:
                f.write(payload)
        except (IOError, OSError) as e:
            raise PersistenceError(f"Could not write to {path}: {e}") from e

    def create(self, entity_type: str, record: dict) -> dict:
        """Persist one record and return it with id and created_date set."""
        saved = self._stamp(record)
        self._append(entity_type, [saved])
        return saved

    def bulk_create(self, entity_type: str, records: list[dict]) -> list[dict]:
        """Persist several records in a single write."""
        saved = [self._stamp(record) for record in records]
        if saved:
            self._append(entity_type, saved)
        return saved

    def list(self, entity_type: str, order: Optional[str] = "-created_date", limit: Optional[int] = None) -> list[dict]:
        """
        Read records of one entity type.

        Args:
            entity_type: "Feedback" or "Report"
            order: "-created_date" (newest first), "created_date" (oldest first) or None (file order)
            limit: Maximum number of records to return

        Returns:
            List of record dicts
        """
        path = self._path(entity_type)
        records = []
        try:
            with open(path, encoding="utf-8") as f:
                for line_number, line in enumerate(f, 1):
                    if not line.strip():
                        continue
                    try:
                        records.append(json.loads(line))
                    except json.JSONDecodeError as e:
                        raise PersistenceError(f"Corrupt record at {path}:{line_number}: {e}") from e
        except FileNotFoundError:
            return []
        except (IOError, OSError) as e:
            raise PersistenceError(f"Could not read {path}: {e}") from e

        if order == "-created_date":
            records.sort(key=_sort_key, reverse=True)
        elif order == "created_date":
            records.sort(key=_sort_key)
        elif order is not None:
            raise ValueError(f"Unsupported order: {order}")

        if limit is not None:
            records = records[:limit]
        return records

    def get(self, entity_type: str, record_id: str) -> Optional[dict]:
        for record in self.list(entity_type, order=None):
            if record.get("id") == record_id:
                return record
        return None


def upload_file(file_path: str, uploads_dir: str = DEFAULT_UPLOADS_DIR) -> dict:
    """
    Copy an uploaded file into the uploads directory under a unique name.

    Returns:
        dict: {"file_url": path of the stored copy}
    """
    source = Path(file_path)
    target_dir = Path(uploads_dir)
    target = target_dir / f"{uuid.uuid4().hex[:12]}_{source.name}"
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
    except (IOError, OSError) as e:
        raise PersistenceError(f"Could not store upload {file_path}: {e}") from e
    return {"file_url": str(target)}
