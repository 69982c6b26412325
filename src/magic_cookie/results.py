"""Result models for cookie queries."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .errors import QueryError


class QueryResult(BaseModel):
    """Outcome of a single query with its diagnostic already copied out.

    Attributes:
        description: Text returned by libmagic, or None when it returned nothing.
        error: Diagnostic pending on the cookie right after a failed query.
        errno: Error number libmagic recorded alongside ``error``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    description: Optional[str] = None
    error: Optional[str] = None
    errno: int = 0

    @property
    def matched(self) -> bool:
        """Return True when libmagic produced a description."""
        return self.description is not None

    @property
    def failed(self) -> bool:
        """Return True when no description was produced and a diagnostic is set."""
        return self.description is None and self.error is not None

    def raise_for_error(self) -> str | None:
        """Return the description, raising :class:`QueryError` for failures."""
        if self.failed:
            raise QueryError(self.error or "", errno=self.errno)
        return self.description


__all__ = ["QueryResult"]
