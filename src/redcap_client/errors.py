"""Exceptions raised by the REDCap client."""

from __future__ import annotations


class RedcapError(Exception):
    """Base class for every error raised by redcap_client."""


class MissingRequiredArgumentError(RedcapError, ValueError):
    """Raised when a payload cannot be built because a required argument is empty."""


class OperationNotSupportedError(RedcapError, NotImplementedError):
    """Raised by API operations this client declares but does not implement."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Operation not supported: {operation}")
        self.operation = operation
