import json
import logging

import pytest

from sqlcompose.compiler.finalizer import Finalizer, finalize
from sqlcompose.compiler.observability import (
    FinalizeObservation,
    InMemoryMetricsAdapter,
    ObservabilitySettings,
    compose_finalize_observers,
    finalize_observation_to_dict,
    make_json_finalize_logger,
)
from sqlcompose.errors import ArgumentCountMismatchError, NilExpressionError
from sqlcompose.expressions.models import CompileNode, RawNode, TupleNode


def test_observer_receives_success_observation() -> None:
    observations: list[FinalizeObservation] = []
    finalizer = Finalizer(
        "$%d",
        observability_settings=ObservabilitySettings(
            finalize_observer=observations.append,
            metadata={"service": "unit-test"},
        ),
    )

    compiled = finalizer.finalize("postgres", TupleNode(values=[1, 2]))

    assert compiled.sql == "($1, $2)"
    assert len(observations) == 1
    observation = observations[0]
    assert observation.dialect == "postgres"
    assert observation.placeholder == "$%d"
    assert observation.sql == "($1, $2)"
    assert observation.param_count == 2
    assert observation.succeeded is True
    assert observation.duration_ms >= 0
    assert observation.metadata["service"] == "unit-test"
    assert observation.error_type is None
    assert observation.error_message is None


def test_observer_receives_failure_observation() -> None:
    observations: list[FinalizeObservation] = []
    settings = ObservabilitySettings(finalize_observer=observations.append)

    with pytest.raises(ArgumentCountMismatchError):
        finalize("?", "sqlite", RawNode(sql="a = ? AND b = ?", params=[1]), observability_settings=settings)

    assert len(observations) == 1
    failed = observations[0]
    assert failed.succeeded is False
    assert failed.sql == "a = ? AND b = ?"
    assert failed.param_count == 1
    assert failed.error_type == "ArgumentCountMismatchError"
    assert failed.error_message is not None and "[Finalizer]" in failed.error_message


def test_observer_reports_no_params_for_template_mismatch() -> None:
    observations: list[FinalizeObservation] = []
    node = CompileNode(template="SELECT ? FROM ?", expressions=[RawNode(sql="a"), RawNode(sql="b"), RawNode(sql="c")])

    with pytest.raises(ArgumentCountMismatchError):
        finalize("?", "sqlite", node, observability_settings=ObservabilitySettings(finalize_observer=observations.append))

    failed = observations[0]
    assert failed.succeeded is False
    assert failed.sql == "SELECT a FROM b"
    assert failed.param_count == 0
    assert failed.error_message is not None and "[CompileNode]" in failed.error_message


def test_observer_receives_nil_expression_failure() -> None:
    observations: list[FinalizeObservation] = []

    with pytest.raises(NilExpressionError):
        finalize("?", "sqlite", None, observability_settings=ObservabilitySettings(finalize_observer=observations.append))

    assert observations[0].sql == ""
    assert observations[0].param_count == 0
    assert observations[0].error_type == "NilExpressionError"


def test_settings_without_observer_are_ignored() -> None:
    compiled = finalize("?", "sqlite", RawNode(sql="SELECT 1"), observability_settings=ObservabilitySettings())
    assert compiled.sql == "SELECT 1"


def test_json_finalize_logger(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("sqlcompose.tests.finalize")
    caplog.set_level(logging.INFO, logger=logger.name)
    settings = ObservabilitySettings(
        finalize_observer=make_json_finalize_logger(logger=logger),
        metadata={"request_id": "abc"},
    )

    finalize("@p%d", "sqlserver", RawNode(sql="id = ?", params=[5]), observability_settings=settings)
    with pytest.raises(ArgumentCountMismatchError):
        finalize("@p%d", "sqlserver", RawNode(sql="id = ?"), observability_settings=settings)

    assert [record.levelno for record in caplog.records] == [logging.INFO, logging.WARNING]
    payload = json.loads(caplog.records[0].getMessage())
    assert payload["dialect"] == "sqlserver"
    assert payload["sql"] == "id = @p1"
    assert payload["param_count"] == 1
    assert payload["succeeded"] is True
    assert payload["metadata"] == {"request_id": "abc"}
    failed = json.loads(caplog.records[1].getMessage())
    assert failed["succeeded"] is False
    assert failed["error_type"] == "ArgumentCountMismatchError"


def test_metrics_adapter_counts_finalize_calls() -> None:
    metrics = InMemoryMetricsAdapter()
    settings = ObservabilitySettings(finalize_observer=metrics)

    finalize("?", "sqlite", RawNode(sql="SELECT 1"), observability_settings=settings)
    finalize("?", "sqlite", RawNode(sql="SELECT ?", params=[1]), observability_settings=settings)
    with pytest.raises(ArgumentCountMismatchError):
        finalize("?", "sqlite", RawNode(sql="SELECT ?"), observability_settings=settings)

    ok_labels = {"dialect": "sqlite", "error_type": "none"}
    failed_labels = {"dialect": "sqlite", "error_type": "ArgumentCountMismatchError"}
    assert metrics.counter_value("sqlcompose_finalize_total", ok_labels) == 2
    assert metrics.counter_value("sqlcompose_finalize_total", failed_labels) == 1
    assert metrics.counter_value("sqlcompose_finalize_failures_total", failed_labels) == 1
    assert metrics.counter_value("sqlcompose_finalize_failures_total", ok_labels) == 0
    assert len(metrics.histogram_values("sqlcompose_finalize_duration_ms", ok_labels)) == 2
    assert {point.name for point in metrics.counters()} == {
        "sqlcompose_finalize_total",
        "sqlcompose_finalize_failures_total",
    }
    assert len(metrics.histograms()) == 3


def test_compose_finalize_observers() -> None:
    first: list[FinalizeObservation] = []
    second: list[FinalizeObservation] = []
    settings = ObservabilitySettings(finalize_observer=compose_finalize_observers(first.append, second.append))

    finalize("?", "sqlite", RawNode(sql="SELECT 1"), observability_settings=settings)

    assert len(first) == 1
    assert first == second


def test_finalize_observation_to_dict() -> None:
    observation = FinalizeObservation(
        dialect="postgres",
        placeholder="$%d",
        sql="SELECT $1",
        param_count=1,
        duration_ms=0.5,
        succeeded=True,
        metadata={"service": "api"},
    )
    payload = finalize_observation_to_dict(observation)
    assert payload["metadata"] == {"service": "api"}
    assert payload["error_type"] is None
    assert json.loads(json.dumps(payload)) == payload
