"""
HTTP Range header parsing.

Only single byte ranges are supported:
    bytes=500-999   explicit range
    bytes=500-      from 500 to the end of the object
    bytes=-500      the last 500 bytes
"""

from .exceptions import InvalidRangeError
from .models import ByteRange

_UNIT = "bytes="


def _is_digits(value: str) -> bool:
    return value.isascii() and value.isdigit()


def parse_range_header(header: str, file_size: int) -> ByteRange:
    """
    Resolve a Range header against an object size.

    An end beyond the object is clamped to the last byte.

    Raises:
        InvalidRangeError: For other units, multiple ranges, non-numeric
            bounds, start > end, or a start at or past the end of the object
    """
    value = (header or "").strip()
    if not value.lower().startswith(_UNIT):
        raise InvalidRangeError(header, "unit must be bytes")

    range_set = value[len(_UNIT):].strip()
    if "," in range_set:
        raise InvalidRangeError(header, "multiple ranges are not supported")

    first, sep, last = range_set.partition("-")
    if not sep:
        raise InvalidRangeError(header, "expected start-end")
    first, last = first.strip(), last.strip()

    if file_size <= 0:
        raise InvalidRangeError(header, "object is empty")

    if not first:
        # Suffix range: the last N bytes
        if not _is_digits(last) or int(last) == 0:
            raise InvalidRangeError(header, "invalid suffix length")
        length = min(int(last), file_size)
        return ByteRange(start=file_size - length, end=file_size - 1)

    if not _is_digits(first) or (last and not _is_digits(last)):
        raise InvalidRangeError(header, "bounds must be non-negative integers")

    start = int(first)
    end = int(last) if last else file_size - 1

    if start >= file_size:
        raise InvalidRangeError(header, "start is beyond the end of the object")
    if start > end:
        raise InvalidRangeError(header, "start is after end")

    return ByteRange(start=start, end=min(end, file_size - 1))
