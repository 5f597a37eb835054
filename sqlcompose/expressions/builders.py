from typing import Any, Callable, Iterable, Mapping, TypeVar

from sqlcompose.expressions.models import (
    CompileNode,
    ConditionalNode,
    CustomNode,
    Dialect,
    ExpressionNode,
    JoinNode,
    RawNode,
    RenderFunction,
    SwitchNode,
    TupleNode,
)

T = TypeVar("T")

# ==================================================
# Shorthand Constructors
# ==================================================

def raw(sql: str, *params: Any) -> RawNode:
    return RawNode(sql=sql, params=list(params))

def values(*items: Any) -> TupleNode:
    return TupleNode(values=list(items))

def compile_template(template: str, *expressions: ExpressionNode | None) -> CompileNode:
    """
    compile_template("WHERE ?", condition) substitutes `condition` for the marker.
    """
    return CompileNode(template=template, expressions=list(expressions))

def join(separator: str, *expressions: ExpressionNode | None) -> JoinNode:
    return JoinNode(separator=separator, expressions=list(expressions))

def when(
    condition: bool,
    then: ExpressionNode | None,
    otherwise: ExpressionNode | None = None,
) -> ConditionalNode:
    return ConditionalNode(condition=condition, then=then, otherwise=otherwise)

def switch(cases: Mapping[Dialect, ExpressionNode | None] | None) -> SwitchNode:
    return SwitchNode(cases=cases)

def custom(render: RenderFunction) -> CustomNode:
    return CustomNode(render=render)

def map_nodes(items: Iterable[T], fn: Callable[[T], ExpressionNode | None]) -> list[ExpressionNode | None]:
    """
    Maps items to expressions, e.g. rows to TupleNodes for a multi-row VALUES list.
    """
    return [fn(item) for item in items]
