from __future__ import annotations

from dataclasses import dataclass


# ==================================================
# Expression Errors
# ==================================================


@dataclass(slots=True)
class ExpressionErrorDetails:
    """
    Structured metadata describing where and why rendering failed.
    """

    site: str
    sql: str | None = None
    marker_count: int | None = None
    argument_count: int | None = None


class ExpressionError(Exception):
    """
    Base error type for rendering and finalizing expression trees.
    """

    def __init__(self, details: ExpressionErrorDetails, message: str) -> None:
        self.details = details
        super().__init__(f"[{details.site}] {self.__class__.__name__}: {message}")

    @property
    def site(self) -> str:
        return self.details.site


class NilExpressionError(ExpressionError):
    """
    A required expression is missing.
    """

    def __init__(self, site: str) -> None:
        super().__init__(ExpressionErrorDetails(site=site), "expression is None")


class ArgumentCountMismatchError(ExpressionError):
    """
    The number of unescaped markers does not match the number of expressions or parameters.
    """

    def __init__(self, *, sql: str, marker_count: int, argument_count: int, site: str) -> None:
        super().__init__(
            ExpressionErrorDetails(
                site=site,
                sql=sql,
                marker_count=marker_count,
                argument_count=argument_count,
            ),
            f"{marker_count} placeholder(s) but {argument_count} argument(s) in {sql!r}",
        )

    @property
    def sql(self) -> str:
        return self.details.sql or ""

    @property
    def marker_count(self) -> int:
        return self.details.marker_count or 0

    @property
    def argument_count(self) -> int:
        return self.details.argument_count or 0
