from dataclasses import dataclass, field
from typing import Any

# ==================================================
# Compiled Output
# ==================================================

@dataclass
class RenderedFragment:
    """
    The generic SQL text and parameters produced by rendering a single expression.
    """
    sql: str = ""
    params: list[Any] = field(default_factory=list)

@dataclass
class CompiledQuery:
    """
    Represents the result of the finalization process: dialect-specific SQL and its parameters.
    """
    sql: str
    params: list[Any] = field(default_factory=list)
