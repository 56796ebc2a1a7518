"""Build the flat ``dict[str, str]`` payload for each REDCap API operation.

Every builder follows the same steps:

  1. resolve ``format`` / ``returnFormat`` / ``type`` through ``resolve_formats``
  2. split string filters (records, fields, forms, events) into tokens
  3. flatten and serialize record data for imports
  4. emit the required keys (``token`` and ``content`` always)
  5. attach each optional filter only when it has at least one token

Builders raise ``MissingRequiredArgumentError`` when a required argument is
empty; they never touch the network.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from pydantic_core import to_json

from ..errors import MissingRequiredArgumentError
from ..normalize.flatten import FieldDescriptor, flatten
from ..normalize.formats import (
    DateFormat,
    InputFormat,
    Override,
    OverwriteBehavior,
    RedcapDataType,
    ReturnContent,
    ReturnFormat,
    resolve_formats,
    resolve_option,
)
from ..normalize.tokens import extract_tokens, join_tokens

logger = logging.getLogger(__name__)

Serializer = Callable[[Any], str]
Filter = str | Sequence[str | int] | None


def default_serializer(value: Any) -> str:
    """Encode import data as JSON text."""
    return to_json(value).decode("utf-8")


def to_tokens(value: Filter, delimiters: Iterable[str] | None = None) -> list[str]:
    """Token list for a filter given either as a delimited string or a sequence."""
    if value is None:
        return []
    if isinstance(value, str):
        return extract_tokens(value, delimiters)
    return [str(item) for item in value if str(item)]


def _base(token: str, content: str, input_format: str, return_format: str) -> dict[str, str]:
    return {
        "token": token,
        "content": content,
        "format": input_format,
        "returnFormat": return_format,
    }


def _attach(payload: dict[str, str], **filters: list[str]) -> dict[str, str]:
    for key, tokens in filters.items():
        if tokens:
            payload[key] = join_tokens(tokens)
    return payload


def _record_rows(
    data: Any,
    date_format: str,
    descriptors: tuple[FieldDescriptor, ...] | None = None,
) -> list[Any]:
    rows = data if isinstance(data, (list, tuple)) else [data]
    flat_rows: list[Any] = []
    for index, row in enumerate(rows):
        if row is None:
            continue
        if isinstance(row, str):
            flat_rows.append(row)
            continue
        flat = flatten(row, descriptors, date_format=date_format)
        if not flat:
            raise ValueError(
                f"Record {index} ({type(row).__name__}) has no fields to import"
            )
        flat_rows.append(flat)
    return flat_rows


class PayloadBuilder:
    """Stateless payload assembly, one static method per API operation."""

    @staticmethod
    def export_metadata(
        token: str,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
        fields: Filter = None,
        forms: Filter = None,
        delimiters: Iterable[str] | None = None,
    ) -> dict[str, str]:
        formats = resolve_formats(input_format, return_format)
        payload = _base(token, "metadata", formats.input_format, formats.return_format)
        return _attach(
            payload,
            fields=to_tokens(fields, delimiters),
            forms=to_tokens(forms, delimiters),
        )

    @staticmethod
    def export_records(
        token: str,
        records: Filter = None,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
        data_type: RedcapDataType | str | None = None,
        fields: Filter = None,
        forms: Filter = None,
        events: Filter = None,
        delimiters: Iterable[str] | None = None,
    ) -> dict[str, str]:
        """Export all records, or the subset named by ``records``."""
        formats = resolve_formats(input_format, return_format, data_type)
        payload = _base(token, "record", formats.input_format, formats.return_format)
        payload["type"] = formats.data_type
        return _attach(
            payload,
            records=to_tokens(records, delimiters),
            fields=to_tokens(fields, delimiters),
            forms=to_tokens(forms, delimiters),
            events=to_tokens(events, delimiters),
        )

    @staticmethod
    def export_record(
        token: str,
        records: Filter,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
        data_type: RedcapDataType | str | None = None,
        fields: Filter = None,
        forms: Filter = None,
        events: Filter = None,
        delimiters: Iterable[str] | None = None,
    ) -> dict[str, str]:
        """Export specific records; at least one record ID is required."""
        if not to_tokens(records, delimiters):
            raise MissingRequiredArgumentError("Missing required information: records")
        return PayloadBuilder.export_records(
            token,
            records=records,
            input_format=input_format,
            return_format=return_format,
            data_type=data_type,
            fields=fields,
            forms=forms,
            events=events,
            delimiters=delimiters,
        )

    @staticmethod
    def import_records(
        token: str,
        data: Any,
        return_content: ReturnContent | str | None = None,
        overwrite_behavior: OverwriteBehavior | str | None = None,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
        data_type: RedcapDataType | str | None = None,
        date_format: DateFormat | str | None = DateFormat.MDY,
        serializer: Serializer = default_serializer,
        descriptors: tuple[FieldDescriptor, ...] | None = None,
    ) -> dict[str, str]:
        """Import records.

        Args:
            token: Project API token.
            data: A record object, a list of record objects/mappings, or an
                already encoded body (CSV, XML or JSON text) sent verbatim.
            return_content: ``count`` (default) or ``ids``.
            overwrite_behavior: ``normal`` (default) keeps existing values for
                blank fields, ``overwrite`` blanks them.
            date_format: How dates in ``data`` are written, ``MDY`` by default.
            serializer: Encodes the flattened rows into the ``data`` field.
            descriptors: Field table applied to every record object; derived
                from each object when omitted.

        Raises:
            MissingRequiredArgumentError: if ``data`` holds no record.
            ValueError: if a record object yields no fields.
        """
        formats = resolve_formats(input_format, return_format, data_type)
        resolved_date_format = resolve_option(DateFormat, date_format)

        if isinstance(data, str):
            if not data.strip():
                raise MissingRequiredArgumentError("Missing required information: data")
            encoded = data
        else:
            rows = _record_rows(data, resolved_date_format, descriptors)
            if not rows:
                raise MissingRequiredArgumentError("Missing required information: data")
            if formats.input_format != InputFormat.json.value:
                logger.warning(
                    "Record objects are encoded as JSON but format=%s was requested",
                    formats.input_format,
                )
            encoded = serializer(rows)

        payload = _base(token, "record", formats.input_format, formats.return_format)
        payload["type"] = formats.data_type
        payload["overwriteBehavior"] = resolve_option(OverwriteBehavior, overwrite_behavior)
        payload["returnContent"] = resolve_option(ReturnContent, return_content)
        payload["dateFormat"] = resolved_date_format
        payload["data"] = encoded
        return payload

    @staticmethod
    def export_events(
        token: str,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
        arms: Filter = None,
        delimiters: Iterable[str] | None = None,
    ) -> dict[str, str]:
        formats = resolve_formats(input_format, return_format)
        payload = _base(token, "event", formats.input_format, formats.return_format)
        return _attach(payload, arms=to_tokens(arms, delimiters))

    @staticmethod
    def export_arms(
        token: str,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
        arms: Filter = None,
        delimiters: Iterable[str] | None = None,
    ) -> dict[str, str]:
        formats = resolve_formats(input_format, return_format)
        payload = _base(token, "arm", formats.input_format, formats.return_format)
        payload["type"] = formats.data_type
        return _attach(payload, arms=to_tokens(arms, delimiters))

    @staticmethod
    def import_arms(
        token: str,
        data: Sequence[Any] | None,
        override: Override | str | int | None = None,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
        serializer: Serializer = default_serializer,
    ) -> dict[str, str]:
        """Import (or rename) arms. ``override=1`` deletes all arms first."""
        if not data:
            raise MissingRequiredArgumentError("Missing required information: arms data")
        formats = resolve_formats(input_format, return_format)
        payload = _base(token, "arm", formats.input_format, formats.return_format)
        payload["action"] = "import"
        payload["type"] = formats.data_type
        payload["override"] = resolve_option(Override, override)
        payload["data"] = serializer(list(data))
        return payload

    @staticmethod
    def delete_arms(
        token: str,
        arms: Filter,
        delimiters: Iterable[str] | None = None,
    ) -> dict[str, str]:
        """Delete arms by number. Deleting an arm deletes its events and data."""
        arm_tokens = to_tokens(arms, delimiters)
        if not arm_tokens:
            raise MissingRequiredArgumentError("Missing required information: arms")
        return {
            "token": token,
            "content": "arm",
            "action": "delete",
            "arms": join_tokens(arm_tokens),
        }

    @staticmethod
    def export_users(
        token: str,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> dict[str, str]:
        formats = resolve_formats(input_format, return_format)
        return _base(token, "user", formats.input_format, formats.return_format)

    @staticmethod
    def export_version(
        token: str,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> dict[str, str]:
        formats = resolve_formats(input_format, return_format)
        return _base(token, "version", formats.input_format, formats.return_format)

