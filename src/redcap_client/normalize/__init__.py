from .formats import (
    DateFormat,
    FormatTriple,
    InputFormat,
    Override,
    OverwriteBehavior,
    RedcapDataType,
    ReturnContent,
    ReturnFormat,
    resolve_formats,
    resolve_option,
)
from .tokens import DEFAULT_DELIMITERS, extract_tokens, join_tokens
from .flatten import Coercion, FieldDescriptor, field_table, flatten, instance_descriptors

__all__ = [
    "DateFormat",
    "FormatTriple",
    "InputFormat",
    "Override",
    "OverwriteBehavior",
    "RedcapDataType",
    "ReturnContent",
    "ReturnFormat",
    "resolve_formats",
    "resolve_option",
    "DEFAULT_DELIMITERS",
    "extract_tokens",
    "join_tokens",
    "Coercion",
    "FieldDescriptor",
    "field_table",
    "flatten",
    "instance_descriptors",
]
