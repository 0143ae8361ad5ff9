import json
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional
from pathlib import Path
from roster.config import settings


class ActivityLogger:
    """Logger for saving roster operation outcomes to a JSONL file."""

    def __init__(self, log_dir: Optional[str] = None):
        self.log_dir = Path(log_dir or settings.log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = self.log_dir / "activity.jsonl"

    def log_operation(
        self,
        operation: str,
        outcome: str,
        student_id: Optional[str] = None,
        error: Optional[BaseException] = None,
        metadata: Optional[Dict[str, Any]] = None
    ):
        """Append one operation outcome to the JSONL file."""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "operation": operation,
            "outcome": outcome,
            "student_id": student_id,
            "error_type": type(error).__name__ if error else None,
            "error_detail": str(error) if error else None,
            "metadata": metadata or {}
        }

        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(log_entry, ensure_ascii=False) + "\n")

    def get_activity(
        self,
        operation: Optional[str] = None,
        outcome: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """Retrieve logged operations, newest first, optionally filtered."""
        if not self.log_file.exists():
            return []

        entries = []
        with open(self.log_file, "r", encoding="utf-8") as f:
            for line in f:
                if not line.strip():
                    continue
                try:
                    entry = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if operation and entry.get("operation") != operation:
                    continue
                if outcome and entry.get("outcome") != outcome:
                    continue
                entries.append(entry)

        # Reverse first so equal timestamps stay newest first
        entries.reverse()
        entries.sort(key=lambda x: x.get("timestamp", ""), reverse=True)

        if limit:
            entries = entries[:limit]

        return entries
