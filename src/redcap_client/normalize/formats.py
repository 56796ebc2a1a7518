"""Closed option vocabularies and their total resolution to wire tokens.

Every resolver here is total: an enum member or its string value resolves to
the canonical token, anything else (None, typos, other types) silently
resolves to the vocabulary's default.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, TypeVar


class InputFormat(str, Enum):
    json = "json"
    csv = "csv"
    xml = "xml"
    odm = "odm"


class ReturnFormat(str, Enum):
    json = "json"
    csv = "csv"
    xml = "xml"


class RedcapDataType(str, Enum):
    flat = "flat"
    eav = "eav"
    longitudinal = "longitudinal"
    nonlongitudinal = "nonlongitudinal"


class OverwriteBehavior(str, Enum):
    normal = "normal"
    overwrite = "overwrite"


class ReturnContent(str, Enum):
    ids = "ids"
    count = "count"


class Override(str, Enum):
    """Arm import mode: ``1`` deletes all arms before importing."""

    keep = "0"
    replace = "1"


class DateFormat(str, Enum):
    MDY = "MDY"
    DMY = "DMY"
    YMD = "YMD"


DEFAULTS: dict[type[Enum], Enum] = {
    InputFormat:       InputFormat.json,
    ReturnFormat:      ReturnFormat.json,
    RedcapDataType:    RedcapDataType.flat,
    OverwriteBehavior: OverwriteBehavior.normal,
    ReturnContent:     ReturnContent.count,
    Override:          Override.keep,
    DateFormat:        DateFormat.MDY,
}

E = TypeVar("E", bound=Enum)


class FormatTriple(NamedTuple):
    input_format: str
    return_format: str
    data_type: str


def resolve_member(enum_cls: type[E], value: object) -> E:
    """Return the member of ``enum_cls`` named by ``value``, or its default."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, bool):
        # Override accepts True/False as 1/0
        value = "1" if value else "0"
    elif isinstance(value, int):
        value = str(value)
    if isinstance(value, str):
        wanted = value.strip().lower()
        for member in enum_cls:
            if member.value.lower() == wanted:
                return member
    return DEFAULTS[enum_cls]  # type: ignore[return-value]


def resolve_option(enum_cls: type[Enum], value: object) -> str:
    """Resolve any single option to its canonical wire token."""
    return resolve_member(enum_cls, value).value


def resolve_formats(
    input_format: InputFormat | str | None = None,
    return_format: ReturnFormat | str | None = None,
    data_type: RedcapDataType | str | None = None,
) -> FormatTriple:
    """Resolve the format triple sent as ``format``, ``returnFormat`` and ``type``."""
    return FormatTriple(
        input_format=resolve_option(InputFormat, input_format),
        return_format=resolve_option(ReturnFormat, return_format),
        data_type=resolve_option(RedcapDataType, data_type),
    )
