from typing import Any
from sqlcompose.expressions.models import ExpressionNode

class Visitor:
    """
    A base class for traversing an expression tree.
    """
    def visit(self, node: ExpressionNode) -> Any:
        """
        The entry point for visiting a node. Dispatches to the correct visit method.
        """
        method_name = f'visit_{node.__class__.__name__}'
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ExpressionNode) -> Any:
        """
        Called if no explicit visit method exists for a node type.
        """
        raise NotImplementedError(f"No visit_{node.__class__.__name__} method defined in {self.__class__.__name__}")
