from sqlcompose.expressions.models import (
    CompileNode,
    ConditionalNode,
    CustomNode,
    Dialect,
    ExpressionNode,
    JoinNode,
    RawNode,
    SwitchNode,
    TupleNode,
)
from sqlcompose.expressions.builders import (
    compile_template,
    custom,
    join,
    map_nodes,
    raw,
    switch,
    values,
    when,
)
from sqlcompose.compiler import (
    CompiledQuery,
    ExpressionRenderer,
    Finalizer,
    InMemoryMetricsAdapter,
    ObservabilitySettings,
    PlaceholderScheme,
    finalize,
    make_json_finalize_logger,
    to_sql,
)
from sqlcompose.errors import (
    ArgumentCountMismatchError,
    ExpressionError,
    NilExpressionError,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CompileNode",
    "ConditionalNode",
    "CustomNode",
    "Dialect",
    "ExpressionNode",
    "JoinNode",
    "RawNode",
    "SwitchNode",
    "TupleNode",
    "compile_template",
    "custom",
    "join",
    "map_nodes",
    "raw",
    "switch",
    "values",
    "when",
    "CompiledQuery",
    "ExpressionRenderer",
    "Finalizer",
    "InMemoryMetricsAdapter",
    "ObservabilitySettings",
    "PlaceholderScheme",
    "finalize",
    "make_json_finalize_logger",
    "to_sql",
    "ArgumentCountMismatchError",
    "ExpressionError",
    "NilExpressionError",
]
