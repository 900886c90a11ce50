"""CSV access-log decoding.

Expected layout (the first line must be exactly this header):

    "remotehost","rfc931","authuser","date","request","status","bytes"
    "10.0.0.2","-","apache",1549573860,"GET /api/user HTTP/1.0",200,1234

rfc931 and authuser are accepted for compatibility and ignored.
"""

import csv
from typing import Iterator, TextIO

from http_monitor.errors import InputError
from http_monitor.models import RequestRecord

CSV_HEADERS = ("remotehost", "rfc931", "authuser", "date", "request", "status", "bytes")


def read_records(source: TextIO) -> Iterator[RequestRecord]:
    """Validate the header now, then lazily decode rows from *source*.

    The header is checked before returning so a file with the wrong
    columns (or no header at all) fails before any record is processed,
    even when it has no rows.
    """
    reader = csv.reader(source)
    header = _next_row(reader)
    if header is None:
        raise InputError(f"missing header, expected {list(CSV_HEADERS)}")
    if tuple(header) != CSV_HEADERS:
        raise InputError(f"expected headers {list(CSV_HEADERS)}, but got {header}")
    return _decode_rows(reader)


def _next_row(reader) -> list[str] | None:
    try:
        return next(reader)
    except StopIteration:
        return None
    except (csv.Error, UnicodeDecodeError) as e:
        raise InputError(f"line {reader.line_num}: {e}") from e


def _decode_rows(reader) -> Iterator[RequestRecord]:
    while (row := _next_row(reader)) is not None:
        if not row:
            continue
        line = reader.line_num
        if len(row) != len(CSV_HEADERS):
            raise InputError(
                f"line {line}: expected {len(CSV_HEADERS)} columns, got {len(row)}"
            )
        remote_host, _rfc931, _auth_user, date, request, status, size = row
        yield RequestRecord(
            remote_host=remote_host,
            date=_unsigned(date, "date", line),
            request=request,
            status=_unsigned(status, "status", line),
            bytes=_unsigned(size, "bytes", line),
        )


def _unsigned(value: str, column: str, line: int) -> int:
    try:
        number = int(value)
    except ValueError:
        raise InputError(f"line {line}: {column} is not an integer: {value!r}") from None
    if number < 0:
        raise InputError(f"line {line}: {column} must not be negative: {number}")
    return number
