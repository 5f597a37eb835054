import time

from sqlcompose.compiler.compiled_query import CompiledQuery
from sqlcompose.compiler.observability import FinalizeObservation, ObservabilitySettings
from sqlcompose.compiler.placeholders import PlaceholderScheme
from sqlcompose.compiler.renderer import ESCAPED_MARKER, ExpressionRenderer
from sqlcompose.errors import ArgumentCountMismatchError, NilExpressionError
from sqlcompose.expressions.models import MARKER, Dialect, ExpressionNode

# ==================================================
# Finalizer
# ==================================================

class Finalizer:
    """
    Turns an expression tree into dialect-specific SQL and its parameters.

    Finalizing happens in two passes. The tree is first rendered into generic SQL where
    every parameter is a "?" marker. The markers are then rewritten into the driver's
    placeholder tokens and their count is checked against the parameters.
    """

    def __init__(
        self,
        placeholder: str,
        observability_settings: ObservabilitySettings | None = None,
    ) -> None:
        self.placeholder = placeholder
        self.scheme = PlaceholderScheme.parse(placeholder)
        self.observability_settings = observability_settings

    def finalize(self, dialect: Dialect, node: ExpressionNode | None) -> CompiledQuery:
        """
        The main entry point for finalizing an expression tree under a dialect.
        """
        settings = self.observability_settings
        if settings is None or settings.finalize_observer is None:
            return self._finalize(dialect, node)

        started = time.perf_counter()
        error: Exception | None = None
        compiled: CompiledQuery | None = None
        try:
            compiled = self._finalize(dialect, node)
            return compiled
        except Exception as exc:
            error = exc
            raise
        finally:
            duration_ms = (time.perf_counter() - started) * 1000
            if compiled is not None:
                sql, param_count = compiled.sql, len(compiled.params)
            elif isinstance(error, ArgumentCountMismatchError):
                # A CompileNode mismatch counts expressions, not parameters.
                param_count = error.argument_count if error.site == "Finalizer" else 0
                sql = error.sql
            else:
                sql, param_count = "", 0

            settings.finalize_observer(
                FinalizeObservation(
                    dialect=dialect,
                    placeholder=self.placeholder,
                    sql=sql,
                    param_count=param_count,
                    duration_ms=duration_ms,
                    succeeded=error is None,
                    metadata=dict(settings.metadata),
                    error_type=type(error).__name__ if error is not None else None,
                    error_message=str(error) if error is not None else None,
                )
            )

    def _finalize(self, dialect: Dialect, node: ExpressionNode | None) -> CompiledQuery:
        if node is None:
            raise NilExpressionError(site="Finalizer")

        fragment = ExpressionRenderer(dialect).render(node)
        sql, marker_count = self.rewrite_placeholders(fragment.sql)

        if marker_count != len(fragment.params):
            raise ArgumentCountMismatchError(
                sql=sql,
                marker_count=marker_count,
                argument_count=len(fragment.params),
                site="Finalizer",
            )

        return CompiledQuery(sql=sql, params=fragment.params)

    def rewrite_placeholders(self, sql: str) -> tuple[str, int]:
        """
        Rewrites generic markers into placeholder tokens.
        Returns the rewritten SQL and the number of parameter markers found.
        """
        parts: list[str] = []
        position = 0
        count = 0

        while True:
            index = sql.find(MARKER, position)
            if index < 0:
                parts.append(sql[position:])
                break

            parts.append(sql[position:index])
            if sql.startswith(ESCAPED_MARKER, index):
                parts.append(self.scheme.escaped_marker)
                position = index + 2
                continue

            count += 1
            parts.append(self.scheme.token_for(count))
            position = index + 1

        return "".join(parts), count


def finalize(
    placeholder: str,
    dialect: Dialect,
    node: ExpressionNode | None,
    *,
    observability_settings: ObservabilitySettings | None = None,
) -> CompiledQuery:
    """
    Finalizes an expression tree with a placeholder token such as "?", "$%d" or "@p%d".
    """
    return Finalizer(placeholder, observability_settings=observability_settings).finalize(dialect, node)

