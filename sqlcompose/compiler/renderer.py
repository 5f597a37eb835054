from typing import Any

from sqlcompose.compiler.compiled_query import RenderedFragment
from sqlcompose.errors import ArgumentCountMismatchError, NilExpressionError
from sqlcompose.expressions.models import (
    MARKER,
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
from sqlcompose.traversal.visitor_pattern import Visitor

ESCAPED_MARKER = MARKER * 2

# ==================================================
# Expression Renderer
# ==================================================

class ExpressionRenderer(Visitor):
    """
    A visitor that lowers an expression tree into generic SQL text and a flat parameter list.

    The renderer holds no state besides the dialect.
    Every visit method returns a new RenderedFragment.
    """

    def __init__(self, dialect: Dialect) -> None:
        self.dialect = dialect

    def render(self, node: ExpressionNode) -> RenderedFragment:
        """
        The main entry point for rendering an expression node.
        """
        return self.visit(node)

    # --------------------------------------------------
    # Leaf Nodes
    # --------------------------------------------------

    def visit_RawNode(self, node: RawNode) -> RenderedFragment:
        return RenderedFragment(sql=node.sql, params=list(node.params))

    def visit_TupleNode(self, node: TupleNode) -> RenderedFragment:
        """
        Renders N values as (?, ?, ..., ?). An empty tuple renders as ().
        """
        markers = ", ".join(MARKER for _ in node.values)
        return RenderedFragment(sql=f"({markers})", params=list(node.values))

    def visit_CustomNode(self, node: CustomNode) -> RenderedFragment:
        sql, params = node.render(self.dialect)
        return RenderedFragment(sql=sql, params=list(params))

    # --------------------------------------------------
    # Operator Nodes
    # --------------------------------------------------

    def visit_CompileNode(self, node: CompileNode) -> RenderedFragment:
        """
        Substitutes each unescaped marker in the template with the next rendered expression.
        Escaped markers (??) are copied as-is and do not consume an expression.
        """
        template = node.template
        expressions = node.expressions
        parts: list[str] = []
        params: list[Any] = []
        consumed = 0
        position = 0

        while True:
            index = template.find(MARKER, position)
            if index < 0:
                parts.append(template[position:])
                break

            if template.startswith(ESCAPED_MARKER, index):
                parts.append(template[position:index + 2])
                position = index + 2
                continue

            parts.append(template[position:index])
            position = index + 1

            if consumed >= len(expressions):
                raise ArgumentCountMismatchError(
                    sql="".join(parts),
                    marker_count=consumed + 1,
                    argument_count=len(expressions),
                    site="CompileNode",
                )

            expression = expressions[consumed]
            consumed += 1
            if expression is None:
                raise NilExpressionError(site="CompileNode")

            fragment = self.render(expression)
            parts.append(fragment.sql)
            params.extend(fragment.params)

        sql = "".join(parts)
        if consumed != len(expressions):
            raise ArgumentCountMismatchError(
                sql=sql,
                marker_count=consumed,
                argument_count=len(expressions),
                site="CompileNode",
            )

        return RenderedFragment(sql=sql, params=params)

    def visit_JoinNode(self, node: JoinNode) -> RenderedFragment:
        """
        Joins the non-empty renderings with the separator.
        """
        parts: list[str] = []
        params: list[Any] = []

        for expression in node.expressions:
            if expression is None:
                continue

            fragment = self.render(expression)
            if not fragment.sql:
                continue

            if parts:
                parts.append(node.separator)
            parts.append(fragment.sql)
            params.extend(fragment.params)

        return RenderedFragment(sql="".join(parts), params=params)

    def visit_ConditionalNode(self, node: ConditionalNode) -> RenderedFragment:
        branch = node.then if node.condition else node.otherwise
        if branch is None:
            return RenderedFragment()
        return self.render(branch)

    def visit_SwitchNode(self, node: SwitchNode) -> RenderedFragment:
        # Unmatched dialects render to nothing so the fragment drops out of an enclosing join.
        if not node.cases:
            return RenderedFragment()

        expression = node.cases.get(self.dialect)
        if expression is None:
            return RenderedFragment()
        return self.render(expression)


def to_sql(dialect: Dialect, node: ExpressionNode | None) -> RenderedFragment:
    """
    Renders an expression tree without rewriting the generic markers.
    """
    if node is None:
        raise NilExpressionError(site="to_sql")
    return ExpressionRenderer(dialect).render(node)
