"""Command line entry point and the ping loop."""

from __future__ import annotations

import errno
import os
import signal
import socket
import sys
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, TextIO, Tuple

from icmpping.codes import BroadcastError, PingError, ResolutionError, UsageError
from icmpping.output import bad_response, reply_header, reply_source, socket_info, start_line
from icmpping.packet import (
    RECEIVE_BUFFER_SIZE,
    EchoReply,
    ErrorReply,
    build_echo_request,
    parse_packet,
)
from icmpping.stats import PingStats

Timeval = Tuple[int, int]

_HELP = "-?"
_VERBOSE = "-v"


def _now() -> Timeval:
    seconds, micros = divmod(time.time_ns() // 1000, 1_000_000)
    return seconds, micros


@dataclass(frozen=True)
class Options:
    """What the command line asked for."""

    hostname: str
    verbose: bool = False


def parse_args(argv: Sequence[str]) -> Options:
    """Read the arguments (without the program name); raise ``UsageError`` if invalid."""
    args: List[str] = list(argv)
    if not 1 <= len(args) <= 2:
        raise UsageError()
    if _HELP in args:
        raise UsageError()
    if len(args) == 2:
        if args[0] == _VERBOSE:
            return Options(args[1], True)
        if args[1] == _VERBOSE:
            return Options(args[0], True)
        raise UsageError()
    return Options(args[0], False)


def resolve(hostname: str) -> str:
    """The IPv4 address of ``hostname``; raise ``ResolutionError`` if unknown."""
    try:
        infos = socket.getaddrinfo(
            hostname, None, socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP
        )
    except (socket.gaierror, UnicodeError):
        raise ResolutionError() from None
    if not infos:
        raise ResolutionError()
    return infos[0][4][0]


class Pinger:
    """Sends one echo request a second and reports the replies."""

    def __init__(self, hostname: str, ipv4: str, verbose: bool, sock) -> None:
        self.hostname = hostname
        self.ipv4 = ipv4
        self.verbose = verbose
        self.sock = sock
        self.ident = os.getpid() & 0xFFFF
        self.sequence = 0
        self.stats = PingStats()
        self.started = time.time()
        self.running = True
        self.ready = True
        self.report_requested = False
        self.out: TextIO = sys.stdout

    def _write(self, text: str) -> None:
        if text:
            self.out.write(text)
            self.out.flush()

    def send(self) -> bytes:
        """Send the next echo request and return it."""
        self.sequence += 1
        packet = build_echo_request(self.ident, self.sequence, _now())
        try:
            self.sock.sendto(packet, (self.ipv4, 0))
        except PermissionError:
            raise BroadcastError() from None
        except OSError as exc:
            self._write(f"{os.strerror(exc.errno) if exc.errno else exc}\n")
        self.stats.transmitted += 1
        self.ready = False
        return packet

    def receive(self) -> Optional[str]:
        """Read one waiting packet, if any, and return what was printed for it."""
        try:
            data, _ = self.sock.recvfrom(RECEIVE_BUFFER_SIZE, socket.MSG_DONTWAIT)
        except (BlockingIOError, InterruptedError):
            return None
        except OSError as exc:
            if exc.errno in (errno.EAGAIN, errno.EWOULDBLOCK):
                return None
            raise PingError(os.strerror(exc.errno) if exc.errno else str(exc)) from None
        return self.handle_packet(data, _now())

    def handle_packet(self, data: bytes, received_at: Timeval) -> str:
        """Account for and print one received datagram; return the printed text."""
        reply = parse_packet(data, self.ident)
        if isinstance(reply, EchoReply):
            rtt_ms = self.stats.record(reply.sent_at, received_at)
            text = reply_source(reply.size, self.hostname, reply.source) + reply_header(
                reply.sequence, reply.ident, reply.ttl, rtt_ms, self.verbose
            )
        elif isinstance(reply, ErrorReply):
            self.stats.errors += 1
            text = bad_response(
                reply.source, reply.sequence, reply.icmp_type, reply.code, self.verbose
            )
        else:
            text = ""
        self._write(text)
        return text

    def _on_signal(self, signum: int, _frame) -> None:
        if signum == signal.SIGINT:
            self.running = False
        elif signum == signal.SIGQUIT:
            self.report_requested = True
        elif signum == signal.SIGALRM:
            self.ready = True

    def run(self) -> str:
        """Ping until interrupted or a fatal error; return the final statistics."""
        watched = (signal.SIGINT, signal.SIGQUIT, signal.SIGALRM)
        previous = {signum: signal.signal(signum, self._on_signal) for signum in watched}
        try:
            self._write(start_line(self.hostname, self.ipv4))
            while self.running:
                if self.ready:
                    self.send()
                    signal.alarm(1)
                if self.report_requested:
                    self._write(self.stats.interim_report())
                    self.report_requested = False
                if self.receive() is None:
                    time.sleep(0.001)
        except PingError as exc:
            self._write(exc.message)
        finally:
            signal.alarm(0)
            for signum, handler in previous.items():
                signal.signal(signum, handler)
        elapsed_ms = (time.time() - self.started) * 1000.0
        report = self.stats.final_report(self.hostname, elapsed_ms)
        self._write(report)
        return report


def _say(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the program; return its exit status."""
    if argv is None:
        argv = sys.argv[1:]
    if os.geteuid() != 0:
        _say("Please run program with sudo privileges\n\n")
        return 255
    try:
        options = parse_args(argv)
    except UsageError as exc:
        _say(exc.message)
        return exc.exit_code
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP)
    except OSError:
        _say("Function socket() failed.")
        return 255
    try:
        try:
            ipv4 = resolve(options.hostname)
        except ResolutionError as exc:
            _say(exc.message)
            return exc.exit_code
        pinger = Pinger(options.hostname, ipv4, options.verbose, sock)
        if options.verbose:
            _say(socket_info(sock.fileno(), options.hostname))
        pinger.run()
    finally:
        sock.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())