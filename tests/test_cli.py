import errno
import socket
import struct
from unittest import mock

import pytest

from icmpping.cli import Options, Pinger, main, parse_args, resolve
from icmpping.codes import (
    BroadcastError,
    PingError,
    ResolutionError,
    UsageError,
    destination_unreachable_text,
    usage_text,
)
from icmpping.packet import build_echo_request, checksum


class FakeSocket:
    def __init__(self, incoming=(), send_error=None, recv_error=None):
        self.sent = []
        self.incoming = list(incoming)
        self.send_error = send_error
        self.recv_error = recv_error

    def sendto(self, data, address):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append((data, address))
        return len(data)

    def recvfrom(self, size, flags=0):
        if self.recv_error is not None:
            raise self.recv_error
        if not self.incoming:
            raise BlockingIOError(errno.EAGAIN, "again")
        return self.incoming.pop(0)[:size], ("10.0.0.1", 0)

    def fileno(self):
        return 3

    def close(self):
        pass


def ip_header(source, ttl=64):
    return bytes(8) + bytes([ttl]) + bytes(3) + socket.inet_aton(source) + bytes(4)


def echo_reply(ident, sequence, sent_at, source="10.0.0.1", ttl=64):
    icmp = bytearray(build_echo_request(ident, sequence, sent_at))
    icmp[0] = 0
    return ip_header(source, ttl) + bytes(icmp)


def error_reply(ident, sequence, icmp_type, code, source="10.0.0.1"):
    outer = struct.pack("!BBHHH", icmp_type, code, 0, 0, 0)
    inner = build_echo_request(ident, sequence, (0, 0))[:8]
    return ip_header(source) + outer + ip_header("10.0.0.2") + inner


def make_pinger(sock=None, verbose=False):
    return Pinger("host", "10.0.0.1", verbose, sock or FakeSocket())


def test_parse_single_host():
    assert parse_args(["host"]) == Options("host", False)


def test_parse_verbose_first():
    assert parse_args(["-v", "host"]) == Options("host", True)


def test_parse_verbose_last():
    assert parse_args(["host", "-v"]) == Options("host", True)


@pytest.mark.parametrize(
    "argv", [[], ["a", "b", "c"], ["-?"], ["host", "-?"], ["a", "b"]]
)
def test_parse_rejects(argv):
    with pytest.raises(UsageError):
        parse_args(argv)


def test_resolve_returns_address():
    result = [(socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP, "", ("127.0.0.1", 0))]
    with mock.patch("socket.getaddrinfo", return_value=result):
        assert resolve("localhost") == "127.0.0.1"


def test_resolve_unknown_name():
    with mock.patch("socket.getaddrinfo", side_effect=socket.gaierror("nope")):
        with pytest.raises(ResolutionError):
            resolve("nowhere.invalid")


def test_send_builds_valid_request():
    sock = FakeSocket()
    pinger = make_pinger(sock)
    packet = pinger.send()
    assert sock.sent == [(packet, ("10.0.0.1", 0))]
    assert checksum(packet) == 0
    assert packet[0] == 8
    assert struct.unpack("!HH", packet[4:8]) == (pinger.ident, 1)
    assert pinger.stats.transmitted == 1
    assert pinger.ready is False


def test_send_permission_denied_is_broadcast_error():
    pinger = make_pinger(FakeSocket(send_error=PermissionError(errno.EACCES, "denied")))
    with pytest.raises(BroadcastError):
        pinger.send()
    assert pinger.stats.transmitted == 0


def test_send_other_error_still_counts(capsys):
    pinger = make_pinger(FakeSocket(send_error=OSError(errno.ENETUNREACH, "x")))
    pinger.send()
    assert pinger.stats.transmitted == 1
    assert capsys.readouterr().out.strip() != ""


def test_handle_echo_reply():
    pinger = make_pinger()
    data = echo_reply(pinger.ident, 1, (100, 0))
    text = pinger.handle_packet(data, (100, 500))
    assert text.startswith(f"{len(data) - 20} bytes from host (10.0.0.1): ")
    assert "icmp_seq=1 " in text and "ttl=64 " in text
    assert pinger.stats.received == 1


def test_handle_reply_for_other_process_is_ignored():
    pinger = make_pinger()
    data = echo_reply((pinger.ident + 1) & 0xFFFF, 1, (100, 0))
    assert pinger.handle_packet(data, (100, 500)) == ""
    assert pinger.stats.received == 0


def test_handle_error_reply():
    pinger = make_pinger()
    text = pinger.handle_packet(error_reply(pinger.ident, 4, 3, 1), (0, 0))
    assert destination_unreachable_text(1) in text
    assert "icmp_seq=4 " in text
    assert pinger.stats.errors == 1


def test_receive_nothing_waiting():
    assert make_pinger().receive() is None


def test_receive_reads_packet():
    pinger = make_pinger()
    pinger.sock.incoming.append(echo_reply(pinger.ident, 2, (0, 0)))
    text = pinger.receive()
    assert "icmp_seq=2 " in text
    assert pinger.stats.received == 1


def test_receive_failure_raises():
    pinger = make_pinger(FakeSocket(recv_error=OSError(errno.EIO, "io")))
    with pytest.raises(PingError):
        pinger.receive()


def test_run_stops_on_receive_error_and_reports(capsys):
    pinger = make_pinger(FakeSocket(recv_error=OSError(errno.EIO, "io")))
    report = pinger.run()
    out = capsys.readouterr().out
    assert out.startswith("PING host (10.0.0.1)")
    assert "--- host ping statistics ---" in report
    assert pinger.stats.transmitted == 1


def test_main_requires_root(capsys):
    with mock.patch("os.geteuid", return_value=1000):
        assert main(["host"]) == 255
    assert capsys.readouterr().out == "Please run program with sudo privileges\n\n"


def test_main_usage(capsys):
    with mock.patch("os.geteuid", return_value=0):
        assert main([]) == 1
    assert capsys.readouterr().out == usage_text()


def test_main_socket_failure(capsys):
    with mock.patch("os.geteuid", return_value=0), mock.patch(
        "socket.socket", side_effect=PermissionError(errno.EPERM, "no")
    ):
        assert main(["host"]) == 255
    assert capsys.readouterr().out == "Function socket() failed."


def test_main_unknown_host(capsys):
    with mock.patch("os.geteuid", return_value=0), mock.patch(
        "socket.socket", return_value=FakeSocket()
    ), mock.patch("socket.getaddrinfo", side_effect=socket.gaierror("nope")):
        assert main(["nowhere.invalid"]) == 2
    assert capsys.readouterr().out == "Unknown DNS name\n"