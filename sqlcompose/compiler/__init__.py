from sqlcompose.compiler.compiled_query import CompiledQuery, RenderedFragment
from sqlcompose.compiler.finalizer import Finalizer, finalize
from sqlcompose.compiler.placeholders import PlaceholderScheme
from sqlcompose.compiler.renderer import ExpressionRenderer, to_sql
from sqlcompose.compiler.observability import (
    FinalizeObservation,
    InMemoryMetricsAdapter,
    MetricPoint,
    ObservabilitySettings,
    compose_finalize_observers,
    finalize_observation_to_dict,
    make_json_finalize_logger,
)

__all__ = [
    "CompiledQuery",
    "RenderedFragment",
    "Finalizer",
    "finalize",
    "PlaceholderScheme",
    "ExpressionRenderer",
    "to_sql",
    "FinalizeObservation",
    "InMemoryMetricsAdapter",
    "MetricPoint",
    "ObservabilitySettings",
    "compose_finalize_observers",
    "finalize_observation_to_dict",
    "make_json_finalize_logger",
]
