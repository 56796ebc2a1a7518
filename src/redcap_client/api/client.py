"""REDCap API client.

Each implemented operation builds its payload, sends it through the transport
and wraps the raw body in a ``RedcapResponse``. Faults (missing arguments,
serialization or network errors) are logged and returned as a faulted
response rather than raised. Operations this client does not implement raise
``OperationNotSupportedError`` immediately.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

import requests

from ..config import RedcapConfig
from ..errors import MissingRequiredArgumentError, OperationNotSupportedError
from ..normalize.flatten import FieldDescriptor
from ..normalize.formats import (
    DateFormat,
    InputFormat,
    Override,
    OverwriteBehavior,
    RedcapDataType,
    ReturnContent,
    ReturnFormat,
)
from .payloads import Filter, PayloadBuilder, Serializer, default_serializer
from .results import RedcapResponse
from .transport import RedcapTransport

logger = logging.getLogger(__name__)


def _not_supported(operation: str) -> Callable[..., RedcapResponse]:
    def method(self: "RedcapClient", *args: object, **kwargs: object) -> RedcapResponse:
        raise OperationNotSupportedError(operation)

    method.__name__ = operation
    method.__qualname__ = f"RedcapClient.{operation}"
    method.__doc__ = "Not supported by this client; always raises OperationNotSupportedError."
    return method


class RedcapClient:
    """Client for one REDCap project, identified by the token in ``config``.

    Args:
        config: API URL, token and connection options.
        transport: Sends the payloads; built from ``config`` when omitted.
        serializer: Encodes import data; JSON via pydantic-core by default.
        session: ``requests.Session`` for the default transport to reuse.
            Only valid without ``transport``; a custom transport owns its
            own connection handling.

    Raises:
        ValueError: if both ``transport`` and ``session`` are given.
    """

    def __init__(
        self,
        config: RedcapConfig,
        transport: RedcapTransport | None = None,
        serializer: Serializer | None = None,
        session: requests.Session | None = None,
    ) -> None:
        if transport is not None and session is not None:
            raise ValueError("Pass either transport or session, not both")
        self.config = config
        self._transport = transport or RedcapTransport(config, session=session)
        self._serializer = serializer or default_serializer

    def _execute(
        self,
        content: str,
        build: Callable[[], dict[str, str]],
        missing_text: str | None = "",
    ) -> RedcapResponse:
        try:
            payload = build()
        except MissingRequiredArgumentError as exc:
            logger.error("%s (content=%s)", exc, content)
            return RedcapResponse.fault(content, str(exc), text=missing_text)
        except Exception as exc:
            logger.error("Could not build %s request: %s", content, exc)
            return RedcapResponse.fault(content, str(exc))

        logger.debug(
            "POST content=%s keys=%s",
            content,
            sorted(key for key in payload if key != "token"),
        )
        try:
            text = self._transport.post(payload)
        except Exception as exc:
            logger.error("REDCap request for content=%s failed: %s", content, exc)
            return RedcapResponse.fault(content, str(exc))
        return RedcapResponse(content=content, text=text)

    # -- metadata ---------------------------------------------------------

    def export_metadata(
        self,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
        fields: Filter = None,
        forms: Filter = None,
        delimiters: Iterable[str] | None = None,
    ) -> RedcapResponse:
        """Export the data dictionary, optionally limited to some fields or forms.

        Args:
            fields: e.g. ``"firstname, lastname, age"``.
            forms: e.g. ``"demographics, labs"``.
            delimiters: Characters separating tokens in ``fields``/``forms``;
                comma and space when omitted.
        """
        return self._execute(
            "metadata",
            lambda: PayloadBuilder.export_metadata(
                self.config.api_token,
                input_format=input_format,
                return_format=return_format,
                fields=fields,
                forms=forms,
                delimiters=delimiters,
            ),
        )

    # -- records ----------------------------------------------------------

    def export_records(
        self,
        records: Filter = None,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
        data_type: RedcapDataType | str | None = None,
        fields: Filter = None,
        forms: Filter = None,
        events: Filter = None,
        delimiters: Iterable[str] | None = None,
    ) -> RedcapResponse:
        """Export every record, or only those named in ``records`` (e.g. ``"1,2,3"``)."""
        return self._execute(
            "record",
            lambda: PayloadBuilder.export_records(
                self.config.api_token,
                records=records,
                input_format=input_format,
                return_format=return_format,
                data_type=data_type,
                fields=fields,
                forms=forms,
                events=events,
                delimiters=delimiters,
            ),
        )

    def export_record(
        self,
        records: Filter,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
        data_type: RedcapDataType | str | None = None,
        fields: Filter = None,
        forms: Filter = None,
        events: Filter = None,
        delimiters: Iterable[str] | None = None,
    ) -> RedcapResponse:
        """Export specific records. An empty ``records`` is a fault; nothing is sent."""
        return self._execute(
            "record",
            lambda: PayloadBuilder.export_record(
                self.config.api_token,
                records,
                input_format=input_format,
                return_format=return_format,
                data_type=data_type,
                fields=fields,
                forms=forms,
                events=events,
                delimiters=delimiters,
            ),
        )

    def import_records(
        self,
        data: Any,
        return_content: ReturnContent | str | None = None,
        overwrite_behavior: OverwriteBehavior | str | None = None,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
        data_type: RedcapDataType | str | None = None,
        date_format: DateFormat | str | None = DateFormat.MDY,
        descriptors: tuple[FieldDescriptor, ...] | None = None,
    ) -> RedcapResponse:
        """Import one record, a list of records, or an encoded CSV/XML/JSON body.

        With no data the response is faulted and its ``text`` is ``None``.
        A record object that yields no fields faults the whole import; pass
        ``descriptors`` to say which attributes to send.
        """
        return self._execute(
            "record",
            lambda: PayloadBuilder.import_records(
                self.config.api_token,
                data,
                return_content=return_content,
                overwrite_behavior=overwrite_behavior,
                input_format=input_format,
                return_format=return_format,
                data_type=data_type,
                date_format=date_format,
                serializer=self._serializer,
                descriptors=descriptors,
            ),
            missing_text=None,
        )

    # -- events and arms --------------------------------------------------

    def export_events(
        self,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
        arms: Filter = None,
        delimiters: Iterable[str] | None = None,
    ) -> RedcapResponse:
        """Export events, for all arms or only the given arm numbers."""
        return self._execute(
            "event",
            lambda: PayloadBuilder.export_events(
                self.config.api_token,
                input_format=input_format,
                return_format=return_format,
                arms=arms,
                delimiters=delimiters,
            ),
        )

    def export_arms(
        self,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
        arms: Filter = None,
        delimiters: Iterable[str] | None = None,
    ) -> RedcapResponse:
        """Export arms. Only longitudinal projects have arms."""
        return self._execute(
            "arm",
            lambda: PayloadBuilder.export_arms(
                self.config.api_token,
                input_format=input_format,
                return_format=return_format,
                arms=arms,
                delimiters=delimiters,
            ),
        )

    def import_arms(
        self,
        data: Sequence[Any] | None,
        override: Override | str | int | None = None,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> RedcapResponse:
        """Import arms. ``override=1`` erases all existing arms first (development projects only)."""
        return self._execute(
            "arm",
            lambda: PayloadBuilder.import_arms(
                self.config.api_token,
                data,
                override=override,
                input_format=input_format,
                return_format=return_format,
                serializer=self._serializer,
            ),
        )

    def delete_arms(self, arms: Filter, delimiters: Iterable[str] | None = None) -> RedcapResponse:
        """Delete arms by number, together with their events and collected data."""
        return self._execute(
            "arm",
            lambda: PayloadBuilder.delete_arms(self.config.api_token, arms, delimiters=delimiters),
        )

    # -- project ----------------------------------------------------------

    def export_users(
        self,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> RedcapResponse:
        return self._execute(
            "user",
            lambda: PayloadBuilder.export_users(
                self.config.api_token,
                input_format=input_format,
                return_format=return_format,
            ),
        )

    def export_version(
        self,
        input_format: InputFormat | str | None = None,
        return_format: ReturnFormat | str | None = None,
    ) -> RedcapResponse:
        """Return the instance's REDCap version as plain text, e.g. ``13.1.27``."""
        return self._execute(
            "version",
            lambda: PayloadBuilder.export_version(
                self.config.api_token,
                input_format=input_format,
                return_format=return_format,
            ),
        )


UNSUPPORTED_OPERATIONS: tuple[str, ...] = (
    "rename_arms",
    "import_events",
    "delete_events",
    "export_fields",
    "export_file",
    "import_file",
    "delete_file",
    "export_instruments",
    "export_pdf_instrument",
    "import_pdf_instrument",
    "create_project",
    "import_project_info",
    "export_project_info",
    "export_project_xml",
    "generate_next_record_name",
    "delete_records",
    "export_survey_link",
    "export_survey_participants",
    "export_survey_queue_link",
    "export_survey_return_code",
    "import_users",
)

# Operations of the REDCap API this client does not implement.
for _operation in UNSUPPORTED_OPERATIONS:
    setattr(RedcapClient, _operation, _not_supported(_operation))
del _operation
