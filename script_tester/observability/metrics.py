"""
Prometheus metrics collection for script-tester

A run is a short-lived process, so metrics are not served over HTTP; when
METRICS_FILE is set the registry is written in textfile-collector format at
the end of the run.
"""
import os
from pathlib import Path

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    write_to_textfile,
)


# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# PIPELINE METRICS
# =======================

records_loaded_total = Counter(
    name="script_tester_records_loaded_total",
    documentation="Total number of records submitted to the transform",
    labelnames=["source"],  # source: stdin, directory
    registry=REGISTRY,
)

records_routed_total = Counter(
    name="script_tester_records_routed_total",
    documentation="Total number of records routed to each outcome",
    labelnames=["outcome"],
    registry=REGISTRY,
)

run_duration_seconds = Histogram(
    name="script_tester_run_duration_seconds",
    documentation="Time spent executing the transform over the whole batch",
    labelnames=["dialect"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0],
    registry=REGISTRY,
)

runs_total = Counter(
    name="script_tester_runs_total",
    documentation="Total number of pipeline runs",
    labelnames=["status"],  # status: success, failure
    registry=REGISTRY,
)

# =======================
# PERSISTENCE METRICS
# =======================

records_persisted_total = Counter(
    name="script_tester_records_persisted_total",
    documentation="Total number of record files written to output directories",
    labelnames=["outcome"],
    registry=REGISTRY,
)

persist_errors_total = Counter(
    name="script_tester_persist_errors_total",
    documentation="Total number of records that could not be written",
    labelnames=["outcome"],
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def write_metrics_file(path: str | Path | None = None) -> Path | None:
    """
    Write the registry to a textfile-collector file

    Args:
        path: Destination (defaults to env var METRICS_FILE)

    Returns:
        The path written, or None when no destination is configured
    """
    target = path or os.getenv("METRICS_FILE")
    if not target:
        return None
    write_to_textfile(str(target), REGISTRY)
    return Path(target)


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    counter.labels(**labels).inc(value)


class track_duration:
    """
    Context manager for tracking operation duration

    Usage:
        with track_duration(run_duration_seconds, dialect="python"):
            # do work
            pass
    """

    def __init__(self, histogram: Histogram, **labels):
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        """Start timer"""
        self.timer = self.histogram.labels(**self.labels).time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Stop timer"""
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False


# =======================
# RUN-SPECIFIC HELPERS
# =======================

def record_routing(counts: dict[str, int]) -> None:
    """
    Record how many records reached each outcome.

    Args:
        counts: Mapping of outcome name to record count
    """
    for outcome, count in counts.items():
        if count > 0:
            increment_counter(records_routed_total, count, outcome=outcome)


def record_persistence(outcome: str, written: int, errors: int) -> None:
    """
    Record the result of writing one outcome group.

    Args:
        outcome: Outcome name
        written: Files written successfully
        errors: Records that failed to write
    """
    if written:
        increment_counter(records_persisted_total, written, outcome=outcome)
    if errors:
        increment_counter(persist_errors_total, errors, outcome=outcome)
