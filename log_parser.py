"""
Call log parser.

A call log is plain text, one call per line:

    <digits>,<dd>-<mm>-<yyyy> <HH>:<MM>:<SS>,<dd>-<mm>-<yyyy> <HH>:<MM>:<SS>

Blank lines are skipped. Any other malformed line stops parsing with a
``ParseError`` naming the offending line; no partial results are returned.
"""
import logging
import re
from datetime import datetime
from typing import List, Optional

from .datatypes import PhoneCall

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = '%d-%m-%Y %H:%M:%S'

_LINE_BREAK = re.compile(r'\r?\n')
_NUMBER = re.compile(r'[0-9]+')
_TIMESTAMP = re.compile(r'[0-9]{2}-[0-9]{2}-[0-9]{4} [0-9]{2}:[0-9]{2}:[0-9]{2}')


class ParseError(ValueError):
    """Raised when a call log line cannot be turned into a PhoneCall."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class MalformedLineError(ParseError):
    pass


class MalformedTimestampError(ParseError):
    pass


class MalformedNumberError(ParseError):
    pass


class InvalidCallIntervalError(ParseError):
    """The call ends before it starts."""


def parse_log(phone_log: Optional[str]) -> List[PhoneCall]:
    """Parse a whole call log; ``None`` or blank text gives an empty list."""
    if phone_log is None or not phone_log.strip():
        return []

    calls = []
    for line_number, line in enumerate(_LINE_BREAK.split(phone_log), start=1):
        if not line.strip():
            logger.debug(f"Skipping blank line {line_number}")
            continue
        calls.append(parse_line(line, line_number))

    logger.debug(f"Parsed {len(calls)} calls")
    return calls


def parse_line(line: str, line_number: Optional[int] = None) -> PhoneCall:
    parts = line.split(',')
    if len(parts) != 3:
        raise MalformedLineError(
            f"expected 3 comma-separated fields, got {len(parts)}", line_number, line)

    number, start_str, end_str = (p.strip() for p in parts)

    if not _NUMBER.fullmatch(number):
        raise MalformedNumberError(
            f"phone number {number!r} is not a string of digits", line_number, line)

    start = _parse_timestamp(start_str, 'start', line_number, line)
    end = _parse_timestamp(end_str, 'end', line_number, line)

    if end < start:
        raise InvalidCallIntervalError(
            f"call ends ({end_str}) before it starts ({start_str})", line_number, line)

    return PhoneCall(number=number, start=start, end=end)


def _parse_timestamp(value: str, field: str, line_number, line) -> datetime:
    # strptime alone would accept single-digit fields like "1-1-2020 8:00:00"
    if not _TIMESTAMP.fullmatch(value):
        raise MalformedTimestampError(
            f"{field} time {value!r} does not match dd-mm-yyyy HH:MM:SS", line_number, line)
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise MalformedTimestampError(
            f"{field} time {value!r} is not a valid date: {e}", line_number, line) from e
