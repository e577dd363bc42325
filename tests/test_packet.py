import struct

import pytest

from icmpping.packet import (
    ECHO_REQUEST,
    ICMP_HEADER_LEN,
    PAYLOAD_LEN,
    EchoReply,
    ErrorReply,
    build_echo_request,
    checksum,
    parse_packet,
)

SOURCE = "192.0.2.7"


def _ip_header(ttl=64, source=SOURCE):
    header = bytearray(20)
    header[0] = 0x45
    header[8] = ttl
    header[12:16] = bytes(int(part) for part in source.split("."))
    return bytes(header)


def _as_reply(request):
    return b"\x00" + request[1:]


def test_checksum_rfc1071_example():
    assert checksum(bytes([0x00, 0x01, 0xF2, 0x03, 0xF4, 0xF5, 0xF6, 0xF7])) == 0x220D


def test_checksum_odd_length_pads_with_zero():
    assert checksum(b"\x12\x34\x56") == checksum(b"\x12\x34\x56\x00")


def test_request_layout():
    packet = build_echo_request(0x1234, 7, (100, 200))
    assert len(packet) == ICMP_HEADER_LEN + PAYLOAD_LEN
    assert packet[0] == ECHO_REQUEST
    assert packet[1] == 0
    assert struct.unpack("!HH", packet[4:8]) == (0x1234, 7)
    assert packet[24:] == bytes(len(packet) - 24)


def test_request_checksum_verifies():
    packet = build_echo_request(4321, 9, (1_700_000_000, 123_456))
    assert checksum(packet) == 0


def test_ident_and_sequence_are_sixteen_bits():
    packet = build_echo_request(0x1_0005, 0x1_0002, (0, 0))
    assert struct.unpack("!HH", packet[4:8]) == (0x0005, 0x0002)


def test_parse_echo_reply_round_trip():
    request = build_echo_request(555, 3, (1_700_000_000, 654_321))
    data = _ip_header(ttl=57) + _as_reply(request)
    reply = parse_packet(data, 555)
    assert reply == EchoReply(
        size=len(request),
        source=SOURCE,
        ttl=57,
        sequence=3,
        ident=555,
        sent_at=(1_700_000_000, 654_321),
    )


def test_parse_ignores_other_ident():
    request = build_echo_request(555, 3, (1, 2))
    assert parse_packet(_ip_header() + _as_reply(request), 556) is None


def test_parse_error_reply():
    request = build_echo_request(777, 12, (5, 6))
    outer = bytes([3, 1, 0, 0, 0, 0, 0, 0])
    data = _ip_header() + outer + _ip_header(source="198.51.100.1") + request[:8]
    reply = parse_packet(data, 777)
    assert reply == ErrorReply(source=SOURCE, icmp_type=3, code=1, sequence=12, ident=777)


def test_parse_error_reply_for_someone_else():
    request = build_echo_request(777, 12, (5, 6))
    outer = bytes([11, 0, 0, 0, 0, 0, 0, 0])
    data = _ip_header() + outer + _ip_header() + request[:8]
    assert parse_packet(data, 778) is None


@pytest.mark.parametrize("length", [0, 10, 27, 40])
def test_parse_too_short_is_ignored(length):
    request = build_echo_request(1, 1, (1, 1))
    data = (_ip_header() + _as_reply(request))[:length]
    assert parse_packet(data, 1) is None