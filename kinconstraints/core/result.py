"""Parse results for single constraint elements.

A parse never logs by itself. It returns a ConstraintParseResult holding
either the finished record or the structured error, together with the
non-fatal notices collected along the way. The caller decides how to surface
the notices (see `log_notices`) and whether a failure skips the element or
aborts the document.
"""

import logging
from typing import Literal

from pydantic import Field

from kinconstraints.core.errors import ConstraintParseError
from kinconstraints.data.arbitrary_types_model import ArbitraryTypesModel
from kinconstraints.data.constraint_models import Constraint

NoticeLevel = Literal["debug", "info"]

_LOG_LEVELS: dict[NoticeLevel, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
}


class ParseNotice(ArbitraryTypesModel):
    """Non-fatal diagnostic raised while parsing (a default was applied).

    Attributes:
        level: Severity to log at
        message: Human-readable description
        field: Record field the notice concerns
    """

    level: NoticeLevel
    message: str
    field: str | None = None


class ConstraintParseResult(ArbitraryTypesModel):
    """Outcome of parsing one constraint element.

    Exactly one of `constraint` / `error` is set. A failed parse carries no
    record at all, so no partially parsed transform or axis can leak out.
    """

    constraint: Constraint | None = None
    error: ConstraintParseError | None = None
    notices: list[ParseNotice] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None and self.constraint is not None

    def unwrap(self) -> Constraint:
        """Return the record or raise the parse error.

        Raises:
            ConstraintParseError: If the parse failed
        """
        if self.error is not None:
            raise self.error
        if self.constraint is None:
            raise RuntimeError("Parse result holds neither a constraint nor an error")
        return self.constraint

    def log_notices(self, *, logger: logging.Logger) -> None:
        """Emit every notice on `logger` at its own level."""
        for notice in self.notices:
            logger.log(_LOG_LEVELS[notice.level], notice.message)
