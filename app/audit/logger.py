"""
Webhook Logger — Structured JSON-lines log of webhook deliveries.

Records every delivery with: timestamp, event type, delivery id, outcome,
error message and the created release id.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

from app.config import settings
from app.models.api_models import WebhookLogEntry

logger = logging.getLogger("release_confidence.audit")


class WebhookLogger:
    """Writes webhook delivery entries to a JSON-lines file."""

    def __init__(self, log_path: str | None = None) -> None:
        self.log_path = Path(log_path or settings.webhook_log_path)

    def log(self, entry: WebhookLogEntry) -> None:
        """Append a delivery entry to the log file."""
        record = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            **entry.model_dump(mode="json"),
        }

        try:
            with open(self.log_path, "a") as f:
                f.write(json.dumps(record) + "\n")
        except OSError as e:
            logger.error(f"Failed to write webhook log: {e}")

    def read_recent(self, count: int = 50) -> list[dict]:
        """Read the most recent N delivery entries."""
        if not self.log_path.exists():
            return []

        entries: list[dict] = []
        try:
            with open(self.log_path) as f:
                for line in f:
                    line = line.strip()
                    if line:
                        try:
                            entries.append(json.loads(line))
                        except json.JSONDecodeError:
                            continue
        except OSError:
            return []

        return entries[-count:]
