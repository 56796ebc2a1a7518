"""Client for the REDCap API: typed calls in, flat form-encoded requests out."""

from .api import PayloadBuilder, RedcapClient, RedcapResponse, RedcapTransport
from .config import RedcapConfig
from .errors import MissingRequiredArgumentError, OperationNotSupportedError, RedcapError
from .normalize import (
    DateFormat,
    InputFormat,
    Override,
    OverwriteBehavior,
    RedcapDataType,
    ReturnContent,
    ReturnFormat,
)
from .records import Arm, LongitudinalRecord, RedcapRecord

__all__ = [
    "PayloadBuilder",
    "RedcapClient",
    "RedcapResponse",
    "RedcapTransport",
    "RedcapConfig",
    "MissingRequiredArgumentError",
    "OperationNotSupportedError",
    "RedcapError",
    "DateFormat",
    "InputFormat",
    "Override",
    "OverwriteBehavior",
    "RedcapDataType",
    "ReturnContent",
    "ReturnFormat",
    "Arm",
    "LongitudinalRecord",
    "RedcapRecord",
]
