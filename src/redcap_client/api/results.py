"""Result type returned by every implemented client operation."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RedcapResponse(BaseModel):
    """Raw REDCap response body, or the fault that prevented getting one.

    ``text`` is the body exactly as the instance returned it. A fault leaves
    ``text`` empty (``None`` for an import with no data) and sets ``error``,
    so an empty body is never confused with a failed call.
    """

    content: str = Field(..., description="The 'content' parameter of the request")
    text: str | None = Field(default="", description="Response body, verbatim")
    error: str | None = Field(default=None, description="Fault message when the call did not complete")

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        return self.text or ""

    @classmethod
    def fault(cls, content: str, error: str, text: str | None = "") -> "RedcapResponse":
        return cls(content=content, text=text, error=error)
