from dataclasses import dataclass, field
import json
import logging
from typing import Any, Callable, Mapping

# ==================================================
# Observability Types
# ==================================================

FinalizeObserveHook = Callable[["FinalizeObservation"], None]
LabelMap = Mapping[str, str]


@dataclass(frozen=True)
class ObservabilitySettings:
    """
    Finalizer observability settings.
    """

    finalize_observer: FinalizeObserveHook | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FinalizeObservation:
    """
    Structured payload emitted once per finalize call.
    """

    dialect: str
    placeholder: str
    sql: str
    param_count: int
    duration_ms: float
    succeeded: bool
    metadata: Mapping[str, Any] = field(default_factory=dict)
    error_type: str | None = None
    error_message: str | None = None


def finalize_observation_to_dict(observation: FinalizeObservation) -> dict[str, Any]:
    """
    Converts a FinalizeObservation dataclass into a JSON-safe dictionary.
    """

    return {
        "dialect": observation.dialect,
        "placeholder": observation.placeholder,
        "sql": observation.sql,
        "param_count": observation.param_count,
        "duration_ms": observation.duration_ms,
        "succeeded": observation.succeeded,
        "metadata": dict(observation.metadata),
        "error_type": observation.error_type,
        "error_message": observation.error_message,
    }


def make_json_finalize_logger(
    *,
    logger: logging.Logger,
    level: int = logging.INFO,
    failure_level: int = logging.WARNING,
) -> FinalizeObserveHook:
    """
    Builds a FinalizeObserveHook that emits one JSON log line per FinalizeObservation.
    """

    def _log_observation(observation: FinalizeObservation) -> None:
        payload = finalize_observation_to_dict(observation)
        log_level = level if observation.succeeded else failure_level
        logger.log(log_level, json.dumps(payload, separators=(",", ":"), sort_keys=True, default=str))

    return _log_observation


def compose_finalize_observers(*observers: FinalizeObserveHook) -> FinalizeObserveHook:
    """
    Composes multiple finalize observers into a single observer.
    """

    def _composed(observation: FinalizeObservation) -> None:
        for observer in observers:
            observer(observation)

    return _composed


def _normalize_label(value: str | None, *, fallback: str) -> str:
    if value is None:
        return fallback
    stripped = value.strip()
    return stripped if stripped else fallback


def _observation_labels(observation: FinalizeObservation) -> dict[str, str]:
    return {
        "dialect": _normalize_label(observation.dialect, fallback="unknown"),
        "error_type": _normalize_label(observation.error_type, fallback="none"),
    }


def _labels_key(labels: LabelMap) -> tuple[tuple[str, str], ...]:
    return tuple(sorted((str(key), str(value)) for key, value in labels.items()))


@dataclass(frozen=True)
class MetricPoint:
    """
    Single metric point lookup result.
    """

    name: str
    labels: Mapping[str, str]
    value: int | float


class InMemoryMetricsAdapter:
    """
    In-memory metrics adapter for FinalizeObservation streams.
    """

    def __init__(self) -> None:
        self._counters: dict[tuple[str, tuple[tuple[str, str], ...]], int] = {}
        self._histograms: dict[tuple[str, tuple[tuple[str, str], ...]], list[float]] = {}

    def __call__(self, observation: FinalizeObservation) -> None:
        labels = _observation_labels(observation)
        self._inc("sqlcompose_finalize_total", labels, 1)
        if not observation.succeeded:
            self._inc("sqlcompose_finalize_failures_total", labels, 1)
        self._observe("sqlcompose_finalize_duration_ms", labels, observation.duration_ms)

    def _inc(self, metric: str, labels: LabelMap, delta: int) -> None:
        key = (metric, _labels_key(labels))
        self._counters[key] = self._counters.get(key, 0) + delta

    def _observe(self, metric: str, labels: LabelMap, value: float) -> None:
        key = (metric, _labels_key(labels))
        bucket = self._histograms.setdefault(key, [])
        bucket.append(value)

    def counter_value(self, metric: str, labels: LabelMap) -> int:
        return self._counters.get((metric, _labels_key(labels)), 0)

    def histogram_values(self, metric: str, labels: LabelMap) -> list[float]:
        values = self._histograms.get((metric, _labels_key(labels)), [])
        return list(values)

    def counters(self) -> list[MetricPoint]:
        points: list[MetricPoint] = []
        for (name, label_key), value in self._counters.items():
            points.append(MetricPoint(name=name, labels=dict(label_key), value=value))
        return points

    def histograms(self) -> list[MetricPoint]:
        points: list[MetricPoint] = []
        for (name, label_key), values in self._histograms.items():
            for value in values:
                points.append(MetricPoint(name=name, labels=dict(label_key), value=value))
        return points
