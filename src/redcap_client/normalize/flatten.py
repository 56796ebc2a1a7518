"""Flatten record objects into REDCap field maps.

REDCap variable names are lower case and every value travels as text, so a
record object is reduced to ``{lower_cased_field: text_or_None}``. The field
list comes from a descriptor table:

  - pydantic models and dataclasses get a table derived once from their
    declared annotations (see ``field_table``)
  - callers may pass their own ``FieldDescriptor`` tuple
  - plain mappings are flattened key by key, coercing on runtime type
  - any other object falls back to its public instance attributes and
    properties, also coercing on runtime type

A ``None`` value is kept as ``None`` so the field is sent blank instead of
being left untouched.
"""

from __future__ import annotations

import dataclasses
import logging
import types
import typing
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from functools import lru_cache
from operator import attrgetter, itemgetter
from typing import Any, Union

from pydantic import BaseModel

from .formats import DateFormat, resolve_member

logger = logging.getLogger(__name__)


_DATE_PATTERNS: dict[DateFormat, str] = {
    DateFormat.MDY: "%m/%d/%Y",
    DateFormat.DMY: "%d/%m/%Y",
    DateFormat.YMD: "%Y-%m-%d",
}
_TIME_PATTERN = " %H:%M"


class Coercion(Enum):
    TEXT = "text"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"


@dataclass(frozen=True)
class FieldDescriptor:
    """One flattenable field: output name, how to read it, how to render it."""

    name: str
    accessor: Callable[[Any], Any]
    coercion: Coercion = Coercion.TEXT

    @classmethod
    def attribute(cls, name: str, coercion: Coercion = Coercion.TEXT) -> "FieldDescriptor":
        return cls(name=name, accessor=attrgetter(name), coercion=coercion)


def coercion_for(annotation: Any) -> Coercion:
    """Pick the coercion rule for a declared annotation, unwrapping ``Optional``."""
    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) != 1:
            return Coercion.TEXT
        annotation = args[0]
    if annotation is bool:
        return Coercion.BOOLEAN
    if annotation is datetime:
        return Coercion.DATETIME
    if annotation is date:
        return Coercion.DATE
    return Coercion.TEXT


def _runtime_coercion(value: Any) -> Coercion:
    if isinstance(value, bool):
        return Coercion.BOOLEAN
    if isinstance(value, datetime):
        return Coercion.DATETIME
    if isinstance(value, date):
        return Coercion.DATE
    return Coercion.TEXT


@lru_cache(maxsize=None)
def field_table(model_cls: type) -> tuple[FieldDescriptor, ...]:
    """Build the descriptor table for a pydantic model or dataclass type."""
    if isinstance(model_cls, type) and issubclass(model_cls, BaseModel):
        return tuple(
            FieldDescriptor.attribute(name, coercion_for(info.annotation))
            for name, info in model_cls.model_fields.items()
        )
    if dataclasses.is_dataclass(model_cls):
        hints = typing.get_type_hints(model_cls)
        return tuple(
            FieldDescriptor.attribute(f.name, coercion_for(hints.get(f.name, str)))
            for f in dataclasses.fields(model_cls)
        )
    raise TypeError(f"No field table for {model_cls!r}; pass descriptors explicitly")


def instance_descriptors(obj: Any) -> tuple[FieldDescriptor, ...]:
    """Descriptors for the public attributes and properties of an ordinary object.

    Raises:
        TypeError: if ``obj`` exposes neither.
    """
    names = [name for name in getattr(obj, "__dict__", {}) if not name.startswith("_")]
    for cls in reversed(type(obj).__mro__):
        for name, attr in vars(cls).items():
            if isinstance(attr, property) and not name.startswith("_") and name not in names:
                names.append(name)
    if not names:
        raise TypeError(f"No public attributes on {type(obj).__name__}; pass descriptors explicitly")
    return tuple(
        FieldDescriptor.attribute(name, _runtime_coercion(getattr(obj, name))) for name in names
    )


def render_value(
    value: Any,
    coercion: Coercion,
    date_format: DateFormat | str | None = DateFormat.MDY,
) -> str | None:
    """Render one value as REDCap text. ``None`` stays ``None``."""
    if value is None:
        return None
    if coercion is Coercion.BOOLEAN:
        return "1" if value else "0"
    if coercion in (Coercion.DATE, Coercion.DATETIME):
        if isinstance(value, str):
            value = datetime.fromisoformat(value)
        pattern = _DATE_PATTERNS[resolve_member(DateFormat, date_format)]
        if coercion is Coercion.DATETIME and isinstance(value, datetime):
            pattern += _TIME_PATTERN
        return value.strftime(pattern)
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _mapping_descriptors(obj: Mapping[str, Any]) -> tuple[FieldDescriptor, ...]:
    return tuple(
        FieldDescriptor(name=str(key), accessor=itemgetter(key), coercion=_runtime_coercion(value))
        for key, value in obj.items()
    )


def flatten(
    obj: Any,
    descriptors: tuple[FieldDescriptor, ...] | None = None,
    date_format: DateFormat | str | None = DateFormat.MDY,
) -> dict[str, str | None]:
    """Flatten ``obj`` into ``{lower_cased_name: text_or_None}``.

    Args:
        obj: A pydantic model, dataclass instance, mapping or any object with
            public attributes. ``None`` gives ``{}``.
        descriptors: Explicit field table; derived from ``obj``'s type when omitted.
        date_format: Pattern used for date and datetime fields.

    Returns:
        The flattened map. A fault on one field is logged and the fields
        flattened before it are returned.
    """
    if obj is None:
        return {}

    flat: dict[str, str | None] = {}
    try:
        if descriptors is None:
            if isinstance(obj, Mapping):
                descriptors = _mapping_descriptors(obj)
            else:
                try:
                    descriptors = field_table(type(obj))
                except TypeError:
                    descriptors = instance_descriptors(obj)
        for descriptor in descriptors:
            value = descriptor.accessor(obj)
            flat[descriptor.name.lower()] = render_value(value, descriptor.coercion, date_format)
    except Exception as exc:
        logger.error("Could not flatten %s: %s", type(obj).__name__, exc)
    return flat
