from dataclasses import dataclass

from media_cache.entities import RequestState


@dataclass
class CacheMetrics:
    """Track request outcomes and fetch timings for a MediaCache."""

    total_requests: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    failures: int = 0
    fetches: int = 0
    total_fetch_time_ms: float = 0.0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        if self.total_requests == 0:
            return 0.0
        return self.cache_hits / self.total_requests

    @property
    def avg_fetch_time_ms(self) -> float:
        """Calculate average fetch time."""
        if self.fetches == 0:
            return 0.0
        return self.total_fetch_time_ms / self.fetches

    def record_fetch(self, duration_ms: float) -> None:
        """Record a fetch from the source."""
        self.fetches += 1
        self.total_fetch_time_ms += duration_ms

    def record_result(self, state: RequestState) -> None:
        """Record the terminal state of a request."""
        self.total_requests += 1
        if state == RequestState.CACHE_HIT:
            self.cache_hits += 1
        elif state == RequestState.SUCCEEDED:
            self.cache_misses += 1
        elif state == RequestState.FAILED:
            self.failures += 1

    def reset(self) -> None:
        """Reset all counters."""
        self.total_requests = 0
        self.cache_hits = 0
        self.cache_misses = 0
        self.failures = 0
        self.fetches = 0
        self.total_fetch_time_ms = 0.0

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "total_requests": self.total_requests,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "failures": self.failures,
            "hit_rate": self.hit_rate,
            "fetches": self.fetches,
            "avg_fetch_time_ms": self.avg_fetch_time_ms,
        }
