import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from itertools import count

from fastapi import Request

from studyassistant.config import Settings
from studyassistant.errors import GenerationUnavailableError
from studyassistant.llm.client import GenerationClient, build_generation_client
from studyassistant.uploads.storage import build_storage

logger = logging.getLogger(__name__)


class JobTracker:
    """In-flight generation jobs, reported by the admin stats endpoint."""

    def __init__(self):
        self._ids = count(1)
        self._active: dict[int, dict] = {}
        self._lock = threading.Lock()

    def start(self, job_type: str) -> int:
        with self._lock:
            job_id = next(self._ids)
            self._active[job_id] = {
                "id": job_id,
                "type": job_type,
                "started_at": datetime.now(timezone.utc).isoformat(),
            }
        logger.debug(f"Job {job_id} started ({job_type})")
        return job_id

    def end(self, job_id: int) -> None:
        with self._lock:
            self._active.pop(job_id, None)

    @contextmanager
    def track(self, job_type: str):
        job_id = self.start(job_type)
        try:
            yield job_id
        finally:
            self.end(job_id)

    def stats(self) -> dict:
        with self._lock:
            jobs = list(self._active.values())
        by_type: dict[str, int] = {}
        for j in jobs:
            by_type[j["type"]] = by_type.get(j["type"], 0) + 1
        return {
            "active_count": len(jobs),
            "active_by_type": by_type,
            "queue_length": 0,
            "active_jobs": jobs,
        }


@dataclass
class Services:
    storage: object
    generator: GenerationClient | None = None
    generator_error: str | None = None
    jobs: JobTracker = field(default_factory=JobTracker)

    def require_generator(self) -> GenerationClient:
        if self.generator is None:
            raise GenerationUnavailableError(self.generator_error or "Text generation is not configured")
        return self.generator


def build_services(settings: Settings) -> Services:
    storage = build_storage(settings)
    try:
        generator, error = build_generation_client(settings), None
    except GenerationUnavailableError as e:
        logger.error(f"Text generation disabled: {e.message}")
        generator, error = None, e.message
    return Services(storage=storage, generator=generator, generator_error=error)


def get_services(request: Request) -> Services:
    return request.app.state.services
