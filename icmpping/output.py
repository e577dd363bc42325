"""The lines printed while pinging, returned as text."""

from __future__ import annotations

from icmpping.codes import icmp_error_text
from icmpping.packet import ICMP_HEADER_LEN, IP_HEADER_LEN, PAYLOAD_LEN


def socket_info(fd: int, hostname: str) -> str:
    """Details of the socket and the resolved name, shown in verbose mode."""
    return (
        f"ping: sock4.fd: {fd}, (socktype: SOCK_RAW), hints.ai_family: AF_INET\n\n"
        f"ai->ai_family: AF_INET, ai->ai_canonname: '{hostname}'\n"
    )


def start_line(hostname: str, ipv4: str) -> str:
    """The line announcing the start of a session."""
    total = IP_HEADER_LEN + ICMP_HEADER_LEN + PAYLOAD_LEN
    return f"PING {hostname} ({ipv4}) {PAYLOAD_LEN}({total}) bytes of data\n"


def reply_source(length: int, hostname: str, source: str) -> str:
    """Start of a reply line; ``length`` is the size of the ICMP message."""
    return f"{length} bytes from {hostname} ({source}): "


def reply_header(sequence: int, ident: int, ttl: int, rtt_ms: float, verbose: bool) -> str:
    """End of a reply line: sequence, identifier in verbose mode, TTL and time."""
    text = f"icmp_seq={sequence} "
    if verbose:
        text += f"ident={ident} "
    text += f"ttl={ttl} "
    if rtt_ms < 10:
        text += f"temps={rtt_ms:.2f} ms\n"
    else:
        text += f"temps={rtt_ms:.1f} ms\n"
    return text


def bad_response(source: str, sequence: int, icmp_type: int, code: int, verbose: bool) -> str:
    """The line printed for an ICMP error about one of our requests."""
    text = f"From {source} ({source}): icmp_seq={sequence} "
    text += icmp_error_text(icmp_type, code)
    if verbose:
        text += f"type={icmp_type} code={code}"
    return text + "\n"