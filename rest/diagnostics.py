"""Human-facing diagnostics for bodies that fail to decode."""

from __future__ import annotations

import re

from observability.logger import get_logger

log = get_logger(__name__)

_LINE_COLUMN = re.compile(r"line (\d+) column (\d+)")
_COLUMN = re.compile(r"column (\d+)")

DEFAULT_CONTEXT_CHARS = 50


def _line_start(body: str, line: int) -> int:
    """Absolute offset of the first character of a 1-based line."""
    return sum(len(part) + 1 for part in body.split("\n")[: max(line - 1, 0)])


def error_offset(
    message: str,
    context_chars: int = DEFAULT_CONTEXT_CHARS,
    *,
    body: str | None = None,
) -> int | None:
    """Offset into the body worth showing, or None when the message carries no location.

    Uses the last ``line N column M`` in the message. With the body at hand the
    pair becomes an absolute offset, so pretty-printed bodies point at the right
    place; without it only the column counts. The result is backed up by
    ``context_chars`` and clamped at zero.
    """
    if "line" not in message or "column" not in message:
        return None

    located = _LINE_COLUMN.findall(message)
    if located:
        line, column = (int(n) for n in located[-1])
        index = column + (_line_start(body, line) if body else 0)
    else:
        columns = _COLUMN.findall(message)
        index = int(columns[-1]) if columns else 0
    return max(0, index - context_chars)


def log_decode_failure(
    body: str,
    error: Exception,
    *,
    context_chars: int = DEFAULT_CONTEXT_CHARS,
    url: str | None = None,
) -> None:
    """Log a decode failure at three levels of detail. Never raises."""
    message = str(error)
    offset = error_offset(message, context_chars, body=body)
    body = body or ""

    if offset is not None:
        log.error("executor.decode.failed", url=url, error=message, offset=offset)
        log.debug("executor.decode.context", url=url, snippet=body[offset:])
        log.debug("executor.decode.body", url=url, body=body)
    else:
        log.debug("executor.decode.body", url=url, body=body)
        log.error("executor.decode.failed", url=url, error=message)
