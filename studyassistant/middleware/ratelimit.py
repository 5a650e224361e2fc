import time
import asyncio
from collections import deque
from dataclasses import dataclass
from typing import Callable, Iterable
from fastapi import Request
from fastapi.responses import JSONResponse
from jose import jwt, JWTError

from studyassistant.utils.security import ALGORITHM


@dataclass(frozen=True)
class RateLimitRule:
    name: str
    path_prefixes: tuple[str, ...]
    window_seconds: int
    max_calls: int
    exclude_prefixes: tuple[str, ...] = ()

    def matches(self, path: str) -> bool:
        if any(path.startswith(p) for p in self.exclude_prefixes):
            return False
        return any(path.startswith(p) for p in self.path_prefixes)


class RateLimitMiddleware:
    """Sliding-window limiter; every matching rule keeps its own bucket per caller."""

    def __init__(
        self,
        app,
        *,
        rules: Iterable[RateLimitRule],
        key_func: Callable[[Request], str],
    ):
        self.app = app
        self.rules = tuple(rules)
        self.key_func = key_func

        self._buckets: dict[tuple[str, str], deque[float]] = {}
        self._lock = asyncio.Lock()

    def _retry_after(self, rules: list[RateLimitRule], key: str, now: float) -> int | None:
        """Drops expired hits; returns seconds to wait if any rule is exhausted."""
        for rule in rules:
            q = self._buckets.setdefault((rule.name, key), deque())
            cutoff = now - rule.window_seconds
            while q and q[0] < cutoff:
                q.popleft()
            if len(q) >= rule.max_calls:
                return max(1, int(q[0] + rule.window_seconds - now))
        return None

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        path = scope.get("path", "")
        rules = [r for r in self.rules if r.matches(path)]
        if not rules:
            return await self.app(scope, receive, send)

        key = self.key_func(Request(scope, receive=receive))
        now = time.time()
        async with self._lock:
            retry_after = self._retry_after(rules, key, now)
            if retry_after is None:
                for rule in rules:
                    self._buckets[(rule.name, key)].append(now)

        if retry_after is not None:
            resp = JSONResponse(
                status_code=429,
                content={
                    "error": "RATE_LIMITED",
                    "message": "Too many requests from this IP, please try again later.",
                    "try_again_in": retry_after,
                },
            )
            resp.headers["Retry-After"] = str(retry_after)
            return await resp(scope, receive, send)

        return await self.app(scope, receive, send)


def make_key_func(secret_key: str | None) -> Callable[[Request], str]:
    """Signed-in callers are limited per user, everyone else per client address."""
    def _key(req: Request) -> str:
        auth = req.headers.get("authorization", "")
        if secret_key and auth.lower().startswith("bearer "):
            try:
                sub = jwt.decode(auth.split(" ", 1)[1].strip(), secret_key, algorithms=[ALGORITHM]).get("sub")
            except JWTError:
                sub = None
            if sub:
                return f"user:{sub}"
        return f"ip:{req.client.host if req.client else 'unknown'}"
    return _key
