"""Building ICMP echo requests and reading what comes back on a raw socket."""

from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass
from typing import Optional, Tuple, Union

IP_HEADER_LEN = 20
ICMP_HEADER_LEN = 8
PAYLOAD_LEN = 56
ECHO_REPLY = 0
ECHO_REQUEST = 8
RECEIVE_BUFFER_SIZE = (IP_HEADER_LEN + ICMP_HEADER_LEN) * 2 + 57

_ICMP = struct.Struct("!BBHHH")
_TIMEVAL = struct.Struct("!qq")

Timeval = Tuple[int, int]


@dataclass(frozen=True)
class EchoReply:
    """An echo reply to one of our requests."""

    size: int
    source: str
    ttl: int
    sequence: int
    ident: int
    sent_at: Timeval


@dataclass(frozen=True)
class ErrorReply:
    """An ICMP error message about one of our requests."""

    source: str
    icmp_type: int
    code: int
    sequence: int
    ident: int


def checksum(data: bytes) -> int:
    """The Internet checksum of ``data``, as a 16-bit value in network order."""
    data = bytes(data)
    if len(data) % 2:
        data += b"\0"
    total = sum(struct.unpack(f"!{len(data) // 2}H", data))
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)
    return ~total & 0xFFFF


def build_echo_request(ident: int, sequence: int, sent_at: Timeval) -> bytes:
    """An echo request carrying ``sent_at`` (seconds, microseconds) in its payload."""
    seconds, microseconds = sent_at
    packet = bytearray(ICMP_HEADER_LEN + PAYLOAD_LEN)
    _ICMP.pack_into(packet, 0, ECHO_REQUEST, 0, 0, ident & 0xFFFF, sequence & 0xFFFF)
    _TIMEVAL.pack_into(packet, ICMP_HEADER_LEN, seconds, microseconds)
    struct.pack_into("!H", packet, 2, checksum(packet))
    return bytes(packet)


def parse_packet(data: bytes, ident: int) -> Optional[Union[EchoReply, ErrorReply]]:
    """Read an IP datagram received on the socket.

    Returns ``None`` for packets that are not about our requests, as
    recognised by ``ident``, or that are too short to read.
    """
    data = bytes(data[:RECEIVE_BUFFER_SIZE])
    ident &= 0xFFFF
    if len(data) < IP_HEADER_LEN + ICMP_HEADER_LEN:
        return None
    ttl = data[8]
    source = str(ipaddress.IPv4Address(data[12:16]))
    icmp_type, code, _, reply_ident, reply_sequence = _ICMP.unpack_from(data, IP_HEADER_LEN)

    if icmp_type == ECHO_REPLY:
        if reply_ident != ident:
            return None
        stamp_at = IP_HEADER_LEN + ICMP_HEADER_LEN
        if len(data) < stamp_at + _TIMEVAL.size:
            return None
        sent_at = _TIMEVAL.unpack_from(data, stamp_at)
        return EchoReply(
            size=len(data) - IP_HEADER_LEN,
            source=source,
            ttl=ttl,
            sequence=reply_sequence,
            ident=reply_ident,
            sent_at=(sent_at[0], sent_at[1]),
        )

    inner_at = IP_HEADER_LEN * 2 + ICMP_HEADER_LEN
    if len(data) < inner_at + ICMP_HEADER_LEN:
        return None
    _, _, _, original_ident, original_sequence = _ICMP.unpack_from(data, inner_at)
    if original_ident != ident:
        return None
    return ErrorReply(
        source=source,
        icmp_type=icmp_type,
        code=code,
        sequence=original_sequence,
        ident=original_ident,
    )