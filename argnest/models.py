"""Pydantic models for argnest."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict


class Outcome(BaseModel):
    """Represents the result of one dispatch through the command tree."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: Literal['completed', 'fallback', 'no_match']
    path: tuple[str, ...] = ()
    value: Any = None
    message: str | None = None
    unmatched: tuple[str, ...] = ()

    @property
    def matched(self) -> bool:
        """Whether a runner or fallback handled the invocation."""
        return self.status != 'no_match'
