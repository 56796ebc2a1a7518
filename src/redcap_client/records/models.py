"""Pydantic models for REDCap records and arms."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RedcapRecord(BaseModel):
    """Base for importable records. Subclass it and declare the project's fields.

    Field names become REDCap variable names after lower-casing, so
    ``firstName`` is sent as ``firstname``.
    """

    record_id: str = Field(..., description="Value of the project's record ID field")


class LongitudinalRecord(RedcapRecord):
    """Record in a longitudinal project, addressed to one event."""

    redcap_event_name: str | None = Field(default=None, description="Unique event name, e.g. 'baseline_arm_1'")


class Arm(BaseModel):
    """An arm of a longitudinal project."""

    arm_num: int = Field(..., ge=1, description="Arm number")
    name: str = Field(..., description="Arm label shown in REDCap")
