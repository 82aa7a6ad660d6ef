"""Call tracking for executed REST requests."""

from __future__ import annotations

from collections import Counter

from schemas.observability import CallRecord


class MetricsCollector:
    """Collects call records across one or more executors."""

    def __init__(self) -> None:
        self.records: list[CallRecord] = []

    def record(self, rec: CallRecord) -> None:
        self.records.append(rec)

    @property
    def total_calls(self) -> int:
        return len(self.records)

    @property
    def failure_count(self) -> int:
        return sum(1 for r in self.records if r.failed)

    @property
    def failure_rate(self) -> float:
        if not self.records:
            return 0.0
        return round(self.failure_count / len(self.records), 4)

    @property
    def xml_fallback_rate(self) -> float:
        if not self.records:
            return 0.0
        fallbacks = sum(1 for r in self.records if r.outcome == "xml_fallback")
        return round(fallbacks / len(self.records), 4)

    @property
    def avg_latency_ms(self) -> float:
        if not self.records:
            return 0.0
        return round(sum(r.latency_ms for r in self.records) / len(self.records), 2)

    @property
    def status_counts(self) -> dict[int, int]:
        return dict(Counter(r.status_code for r in self.records))

    def summary(self) -> dict:
        return {
            "total_calls": self.total_calls,
            "failure_count": self.failure_count,
            "failure_rate": self.failure_rate,
            "xml_fallback_rate": self.xml_fallback_rate,
            "avg_latency_ms": self.avg_latency_ms,
            "status_counts": self.status_counts,
        }
