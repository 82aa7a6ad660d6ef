"""Tests for call metrics collection."""

from __future__ import annotations

from observability.metrics import MetricsCollector
from schemas.observability import CallRecord


def test_empty_collector():
    metrics = MetricsCollector()

    assert metrics.total_calls == 0
    assert metrics.failure_rate == 0.0
    assert metrics.avg_latency_ms == 0.0
    assert metrics.xml_fallback_rate == 0.0


def test_summary_aggregates_records():
    metrics = MetricsCollector()
    metrics.record(CallRecord(method="GET", status_code=200, latency_ms=10.0, outcome="decoded"))
    metrics.record(CallRecord(method="GET", status_code=200, latency_ms=20.0, outcome="xml_fallback"))
    metrics.record(CallRecord(method="POST", status_code=401, latency_ms=30.0, outcome="auth_error"))
    metrics.record(CallRecord(method="GET", status_code=200, latency_ms=40.0, outcome="decode_failed"))

    summary = metrics.summary()

    assert summary["total_calls"] == 4
    assert summary["failure_count"] == 2
    assert summary["failure_rate"] == 0.5
    assert summary["xml_fallback_rate"] == 0.25
    assert summary["avg_latency_ms"] == 25.0
    assert summary["status_counts"] == {200: 3, 401: 1}


def test_empty_ack_is_not_a_failure():
    assert not CallRecord(status_code=201, outcome="empty_ack").failed
