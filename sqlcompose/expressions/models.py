from abc import ABC
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

# Dialects are open identifiers chosen by the caller, e.g. "postgres" or "sqlite".
Dialect = str

# The generic placeholder marker. A doubled marker is an escaped literal.
MARKER = "?"

RenderFunction = Callable[[Dialect], tuple[str, Sequence[Any]]]

# ==================================================
# Base classes
# ==================================================

@dataclass
class ExpressionNode(ABC):
    """
    A composable SQL fragment. All expression node types inherit from this base class.
    Nodes only hold data; rendering is done by the ExpressionRenderer.
    """
    pass

# ==================================================
# Leaf nodes
# ==================================================

@dataclass
class RawNode(ExpressionNode):
    """
    Literal SQL text with zero or more pre-bound parameters.
    The text may contain markers, one per parameter.
    """
    sql: str
    params: list[Any] = field(default_factory=list)

@dataclass
class TupleNode(ExpressionNode):
    """
    A fixed list of values rendered as a parenthesized group of markers, e.g. (?, ?).
    """
    values: list[Any] = field(default_factory=list)

@dataclass
class CustomNode(ExpressionNode):
    """
    Extension point for caller-defined leaves. The function receives the active
    dialect and returns the rendered text and its parameters.
    """
    render: RenderFunction

# ==================================================
# Operator nodes
# ==================================================

@dataclass
class CompileNode(ExpressionNode):
    """
    A template whose unescaped markers are substituted, in order, by the rendered expressions.
    """
    template: str
    expressions: list[ExpressionNode | None] = field(default_factory=list)

@dataclass
class JoinNode(ExpressionNode):
    """
    Joins expressions with a separator. Absent expressions and expressions
    rendering to empty text are skipped.
    """
    separator: str
    expressions: list[ExpressionNode | None] = field(default_factory=list)

@dataclass
class ConditionalNode(ExpressionNode):
    """
    Renders `then` if the condition holds, otherwise `otherwise`. An absent branch renders to nothing.
    """
    condition: bool
    then: ExpressionNode | None = None
    otherwise: ExpressionNode | None = None

@dataclass
class SwitchNode(ExpressionNode):
    """
    Selects the expression registered for the active dialect.
    A dialect without an entry renders to nothing.
    """
    cases: Mapping[Dialect, ExpressionNode | None] | None = None
