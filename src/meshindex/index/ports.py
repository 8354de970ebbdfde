"""
Port set parsing for mesh annotations.

Port annotations such as ``config.linkerd.io/opaque-ports`` hold a
comma-separated list of ports and inclusive port ranges::

    "4,1-2"      -> {1, 2, 4}
    "8080, 9000-9002"

Parsing is strict and pure: the first invalid token aborts the whole
parse with a typed error, and no partial result is ever returned.
Callers that need log-and-continue behavior handle that at the
annotation boundary (see ``meshindex.index.pod``).
"""

from __future__ import annotations

import re

MIN_PORT = 1
MAX_PORT = 65535

_NUMERAL_RE = re.compile(r"\+?([0-9]+)")
_MAX_PORT_DIGITS = len(str(MAX_PORT))


class PortSetParseError(ValueError):
    """Base error for malformed port specifications."""

    def __init__(self, token: str, reason: str):
        self.token = token
        self.reason = reason
        super().__init__(f"{reason} (in {token!r})")


class PortNumberError(PortSetParseError):
    """A token is not a decimal integer in the 16-bit port domain."""


class ZeroPortError(PortSetParseError):
    """A port or range bound is 0."""


class PortRangeOrderError(PortSetParseError):
    """A range's lower bound is greater than its upper bound."""


def _parse_port(text: str, token: str) -> int:
    """Parse a single port numeral, rejecting anything outside u16."""
    text = text.strip()
    if not text:
        raise PortNumberError(token, "parsing port: cannot parse integer from empty string")
    match = _NUMERAL_RE.fullmatch(text)
    if not match:
        raise PortNumberError(token, f"parsing port: invalid digit in {text!r}")
    digits = match.group(1).lstrip("0") or "0"
    if len(digits) > _MAX_PORT_DIGITS:
        raise PortNumberError(token, "parsing port: number too large for a port")
    value = int(digits)
    if value > MAX_PORT:
        raise PortNumberError(token, f"parsing port: {text} is too large for a port")
    return value


def parse_portset(spec: str) -> frozenset[int]:
    """
    Parse a comma-separated list of ports and port ranges.

    Empty tokens (an empty string, stray or trailing commas) are skipped.

    Args:
        spec: Port specification, e.g. ``"25,443,8000-8100"``

    Returns:
        Deduplicated set of ports in ``[1, 65535]``

    Raises:
        PortNumberError: A token or range bound is not a valid port number
        ZeroPortError: A port or range floor is 0
        PortRangeOrderError: A range is decreasing
    """
    ports: set[int] = set()

    for token in spec.split(","):
        floor_text, sep, ceil_text = token.partition("-")
        if not sep:
            if not token.strip():
                continue
            port = _parse_port(token, token)
            if port == 0:
                raise ZeroPortError(token, "port must not be 0")
            ports.add(port)
            continue

        floor = _parse_port(floor_text, token)
        ceil = _parse_port(ceil_text, token)
        if floor == 0:
            raise ZeroPortError(token, "port must not be 0")
        if floor > ceil:
            raise PortRangeOrderError(token, "port range must be increasing")
        ports.update(range(floor, ceil + 1))

    return frozenset(ports)


def format_portset(ports: frozenset[int] | set[int]) -> str:
    """
    Render a port set in its compact annotation form.

    Consecutive ports are collapsed into ranges, so the output parses
    back to the same set: ``{1, 2, 3, 8080}`` -> ``"1-3,8080"``.
    """
    parts: list[str] = []
    run_start: int | None = None
    previous: int | None = None

    for port in sorted(ports):
        if run_start is None:
            run_start = previous = port
            continue
        if port == previous + 1:
            previous = port
            continue
        parts.append(_format_run(run_start, previous))
        run_start = previous = port

    if run_start is not None:
        parts.append(_format_run(run_start, previous))
    return ",".join(parts)


def _format_run(start: int, end: int) -> str:
    return str(start) if start == end else f"{start}-{end}"
