"""Edit metrics — one sample per resolved submission.

Samples are bucketed by component type (page edits under ``"page"``).
Each bucket tracks latency, ok/failed counts and, for failures, the error
code taken from the ``"{CODE}: detail"`` message, so a snapshot shows
which components fail and why.
"""

from __future__ import annotations

import math
import threading
from collections import Counter
from dataclasses import dataclass, field

PAGE_BUCKET = "page"


def _percentile(values: list[float], p: float) -> float:
    if not values:
        return 0.0
    if len(values) == 1:
        return values[0]
    ordered = sorted(values)
    pos = (len(ordered) - 1) * p
    lo = math.floor(pos)
    hi = math.ceil(pos)
    if lo == hi:
        return ordered[lo]
    frac = pos - lo
    return ordered[lo] * (1 - frac) + ordered[hi] * frac


def error_code_of(error: str | None) -> str | None:
    """``"PARSE_ERROR: ..."`` → ``"PARSE_ERROR"``; ``None`` when uncoded."""
    if not error or ":" not in error:
        return None
    code = error.split(":", 1)[0].strip()
    return code if code.isupper() and " " not in code else None


@dataclass
class _EditBucket:
    latencies: list[float] = field(default_factory=list)
    statuses: Counter = field(default_factory=Counter)
    failure_codes: Counter = field(default_factory=Counter)

    @property
    def count(self) -> int:
        return sum(self.statuses.values())

    def summary(self) -> dict:
        count = self.count
        return {
            "count": count,
            "success_rate": (self.statuses["ok"] / count) if count else 0.0,
            "latency_p50_ms": round(_percentile(self.latencies, 0.5), 2),
            "latency_p95_ms": round(_percentile(self.latencies, 0.95), 2),
            "status_breakdown": dict(self.statuses),
            "failure_codes": dict(self.failure_codes),
        }


class EditMetricsCollector:
    """Thread-safe in-memory edit metrics."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._buckets: dict[str, _EditBucket] = {}

    def record_edit(
        self,
        *,
        status: str,
        latency_ms: float,
        component_type: str | None = None,
        error: str | None = None,
    ) -> None:
        """Record one resolved submission.

        ``status`` is ``"ok"`` for applied patches, otherwise ``"failed"``.
        ``error`` is the failure message; its code is counted, and uncoded
        messages count as ``"UNKNOWN"``.
        """
        bucket_name = component_type or PAGE_BUCKET
        with self._lock:
            bucket = self._buckets.setdefault(bucket_name, _EditBucket())
            bucket.latencies.append(float(latency_ms))
            bucket.statuses[status] += 1
            if status != "ok":
                bucket.failure_codes[error_code_of(error) or "UNKNOWN"] += 1

    def snapshot(self) -> dict:
        with self._lock:
            edits = {name: bucket.summary() for name, bucket in self._buckets.items()}
            latencies = [ms for bucket in self._buckets.values() for ms in bucket.latencies]
            total = sum(bucket.count for bucket in self._buckets.values())
            ok_total = sum(bucket.statuses["ok"] for bucket in self._buckets.values())
            failure_codes: Counter = Counter()
            for bucket in self._buckets.values():
                failure_codes.update(bucket.failure_codes)

        return {
            "edits": edits,
            "total": total,
            "success_rate": (ok_total / total) if total else 0.0,
            "latency_p50_ms": round(_percentile(latencies, 0.5), 2),
            "latency_p95_ms": round(_percentile(latencies, 0.95), 2),
            "failure_codes": dict(failure_codes),
        }

    def reset(self) -> None:
        with self._lock:
            self._buckets.clear()


_metrics_collector = EditMetricsCollector()


def get_metrics_collector() -> EditMetricsCollector:
    return _metrics_collector
