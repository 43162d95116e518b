from .errors import (
    ConfigurationError,
    IOFailureError,
    MalformedIndexError,
    MalformedTimestampError,
    SrtStretchError,
)
from .models import Block
from .parser import BlockReader, strip_bom
from .serializer import format_block, write_block
from .timestamp import format_timestamp, parse_timing_line, rescale

__all__ = [
    "Block",
    "BlockReader",
    "ConfigurationError",
    "IOFailureError",
    "MalformedIndexError",
    "MalformedTimestampError",
    "SrtStretchError",
    "format_block",
    "format_timestamp",
    "parse_timing_line",
    "rescale",
    "strip_bom",
    "write_block",
]
