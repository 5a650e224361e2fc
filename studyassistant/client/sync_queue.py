"""
Offline replay queue for mutating API calls.

Requests that could not be sent are appended to a JSON file and replayed,
in the order they were queued, the next time the client comes back
online. Each pass keeps only the requests that failed again.

Known gaps: no backoff, no per-item retry limit, and no check that the
server-side record still looks the way it did when the request was queued.
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)


class SyncQueue:
    def __init__(self, path: str | Path, client: httpx.Client, online: bool = True):
        self.path = Path(path)
        self.client = client
        self.is_online = online
        self.queue: list[dict] = self._load()

    def _load(self) -> list[dict]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable sync queue {self.path}: {e}")
            return []
        return data if isinstance(data, list) else []

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self.queue, ensure_ascii=False), encoding="utf-8")

    def add(self, method: str, url: str, body: dict | None = None, headers: dict | None = None) -> dict:
        item = {
            "id": uuid.uuid4().hex,
            "method": method.upper(),
            "url": url,
            "headers": headers or {},
            "body": body,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self.queue.append(item)
        self._save()
        return item

    def _execute(self, item: dict) -> None:
        r = self.client.request(
            item["method"],
            item["url"],
            headers=item.get("headers") or None,
            json=item.get("body"),
        )
        r.raise_for_status()

    def process(self) -> dict | None:
        if not self.is_online or not self.queue:
            return None

        failed = []
        processed = 0
        for item in self.queue:
            try:
                self._execute(item)
                processed += 1
            except httpx.HTTPError as e:
                logger.error(f"Failed to sync {item['method']} {item['url']}: {e}")
                failed.append(item)

        self.queue = failed
        self._save()
        return {"processed": processed, "failed": len(failed)}

    def set_online(self, online: bool) -> dict | None:
        was_online, self.is_online = self.is_online, online
        if online and not was_online:
            logger.info("Back online - processing sync queue")
            return self.process()
        if not online:
            logger.info("Gone offline - queueing requests")
        return None

    def status(self) -> dict:
        return {"pending": len(self.queue), "is_online": self.is_online}

    def clear(self) -> None:
        self.queue = []
        self._save()
