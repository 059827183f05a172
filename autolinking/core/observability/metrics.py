from __future__ import annotations

from collections import Counter
from typing import Dict

from prometheus_client import Counter as PromCounter

_PODS = Counter()

_PROM_PODS = PromCounter(
    "autolinking_pods_total",
    "Pods considered by autolinking, by outcome",
    ["outcome"],
)


def reset_metrics() -> None:
    """
    Test helper: clears in-process counters to avoid cross-test leakage.
    The prometheus counter is cumulative and is left alone.
    """
    _PODS.clear()


def inc_pod(outcome: str) -> None:
    """
    outcome: "added", "extra" or a skip reason ("already_added", ...)
    """
    o = outcome or "unknown"
    _PODS["pods_total"] += 1
    _PODS[f"outcome_{o}"] += 1
    _PROM_PODS.labels(outcome=o).inc()


def snapshot() -> Dict[str, int]:
    return dict(_PODS)
