import json
import logging
import os
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from healthapproved.core.config import settings
from healthapproved.services.catalog_store import read_json_list

logger = logging.getLogger(__name__)

_write_lock = threading.Lock()


def _ensure_dir(path: str) -> None:
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        logger.warning(f"Could not create directory {path}: {e}")


def _as_record(payload: Any) -> Dict[str, Any]:
    if payload is None:
        return {}
    if isinstance(payload, dict):
        return dict(payload)
    return {"payload": payload}


class SubmissionStore:
    """Append-only JSON file of user-submitted product corrections"""

    def __init__(self, path: Optional[str] = None):
        self.path = path or settings.SUBMISSIONS_PATH

    def append(self, payload: Any) -> int:
        """
        Store a submission and return its sequential id.

        A JSON object is stored as-is; any other JSON value is kept under
        `payload`, and a missing body becomes an empty record.

        The id is `len(existing) + 1`; the record also gets an ISO-8601 UTC
        `submitted_at`. A failed write is logged and the id is still returned.
        """
        with _write_lock:
            submissions = read_json_list(self.path).value
            record = _as_record(payload)
            record["id"] = len(submissions) + 1
            record["submitted_at"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
            submissions.append(record)
            self._write(submissions)
        logger.info(f"Stored product submission {record['id']}")
        return record["id"]

    def _write(self, submissions: list) -> None:
        _ensure_dir(os.path.dirname(os.path.abspath(self.path)))
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(submissions, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write submissions to {self.path}: {e}")
