from .client import UNSUPPORTED_OPERATIONS, RedcapClient
from .payloads import PayloadBuilder, default_serializer
from .results import RedcapResponse
from .transport import RedcapTransport

__all__ = [
    "UNSUPPORTED_OPERATIONS",
    "RedcapClient",
    "PayloadBuilder",
    "default_serializer",
    "RedcapResponse",
    "RedcapTransport",
]
