"""ICMP error descriptions and the program's error kinds and messages."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional


class ErrorKind(IntEnum):
    """Kinds of failure the program reports."""

    GENERIC = 0
    USAGE = 1
    DNS = 2
    FUNCTION_FAILED = 3
    BROADCAST = 4


_DESTINATION_UNREACHABLE = {
    0: "Destination network unreachable ",
    1: "Destination host unreachable ",
    2: "Destination protocol unreachable ",
    3: "Destination port unreachable ",
    4: "Fragmentation required ",
    5: "Source route failed ",
    6: "Destination network unknown ",
    7: "Source host isolated ",
    8: "Timestamp reply ",
    9: "Network administratively prohibited ",
    10: "Host administratively prohibited ",
    11: "Network unreachable for ToS ",
    12: "Host unreachable for ToS ",
    13: "Communication administratively prohibited ",
    14: "Host Precedence Violation ",
    15: "Precedence cutoff in effect ",
}

_REDIRECT = {
    0: "Redirect Datagram for the Network ",
    1: "Redirect Datagram for the Host ",
    2: "Redirect Datagram for the ToS & network ",
    3: "Redirect Datagram for the ToS & host ",
}

_TIME_EXCEEDED = {
    0: "Time To Live exceeded ",
    1: "Fragment reassembly time exceeded ",
}

_PARAMETER_PROBLEM = {
    0: "Pointer indicates the error ",
    1: "Missing a required option ",
    2: "Bad length ",
}

_FIXED_TYPES = {
    8: "Echo request ",
    9: "Router advertisement ",
    10: "Router solicitation ",
    13: "Timestamp ",
    14: "Timestamp reply ",
}

_USAGE = (
    "Usage\n"
    "  ping [options] <destination>\n"
    "\n"
    "Options:\n"
    "  <destination>  dns name or ipv4 address\n"
    "  -v  verbose output\n"
    "  -?  help\n"
)

_BROADCAST = (
    "ping: Permission denied. If you are trying to ping broadcast, "
    "this program is not enable to do it. Sorry."
)


def destination_unreachable_text(code: int) -> str:
    """Description of a destination-unreachable (type 3) code, or ``""``."""
    return _DESTINATION_UNREACHABLE.get(code, "")


def redirect_text(code: int) -> str:
    """Description of a redirect (type 5) code, or ``""``."""
    return _REDIRECT.get(code, "")


def time_exceeded_text(code: int) -> str:
    """Description of a time-exceeded (type 11) code, or ``""``."""
    return _TIME_EXCEEDED.get(code, "")


def parameter_problem_text(code: int) -> str:
    """Description of a parameter-problem (type 12) code, or ``""``."""
    return _PARAMETER_PROBLEM.get(code, "")


def icmp_error_text(icmp_type: int, code: int) -> str:
    """Description of an ICMP message type and code, or ``""`` if unknown."""
    by_code = {
        3: destination_unreachable_text,
        5: redirect_text,
        11: time_exceeded_text,
        12: parameter_problem_text,
    }
    if icmp_type in by_code:
        return by_code[icmp_type](code)
    return _FIXED_TYPES.get(icmp_type, "")


def usage_text() -> str:
    """The help text shown for bad arguments or ``-?``."""
    return _USAGE


def error_message(kind: int, detail: Optional[str] = None) -> str:
    """The text printed for an error of ``kind``."""
    kind = ErrorKind(kind)
    if kind is ErrorKind.USAGE:
        return _USAGE
    if kind is ErrorKind.DNS:
        return "Unknown DNS name\n"
    if kind is ErrorKind.FUNCTION_FAILED:
        return f"Function {detail or ''} failed."
    text = f"{detail or ''}\n"
    if kind is ErrorKind.BROADCAST:
        return _BROADCAST + text
    return text


class PingError(Exception):
    """An error the program reports to the user before stopping."""

    kind: ErrorKind = ErrorKind.GENERIC
    exit_code: int = 255

    def __init__(self, detail: Optional[str] = None, kind: Optional[int] = None) -> None:
        if kind is not None:
            self.kind = ErrorKind(kind)
        self.detail = detail
        self.message = error_message(self.kind, detail)
        super().__init__(self.message.rstrip("\n"))


class UsageError(PingError):
    """The command line could not be understood."""

    kind = ErrorKind.USAGE
    exit_code = 1


class ResolutionError(PingError):
    """The destination name could not be resolved."""

    kind = ErrorKind.DNS
    exit_code = 2


class BroadcastError(PingError):
    """Sending was refused, as happens for broadcast addresses."""

    kind = ErrorKind.BROADCAST