# icmpping

A small ping utility for IPv4. It resolves a destination, sends one ICMP
echo request per second over a raw socket, and prints each reply with its
sequence number, TTL and round-trip time. When you stop it, it prints a
summary of packets sent and received, packet loss and round-trip times.

## Installation

```
pip install .
```

## Usage

Raw sockets need root privileges; without them the command prints
"Please run program with sudo privileges" and exits with status 255.

```
sudo icmpping [options] <destination>
```

- `<destination>`: a DNS name or an IPv4 address
- `-v`: verbose output (socket details, the echo identifier on each reply,
  and the ICMP type and code of error replies)
- `-?`: show help

The option may come before or after the destination. Any other argument
layout prints the help text and exits with status 1. A name that cannot be
resolved prints "Unknown DNS name" and exits with status 2.

While it runs:

- `Ctrl+C` (SIGINT) stops pinging and prints the final statistics.
- `Ctrl+\` (SIGQUIT) prints interim statistics without stopping.

Example:

```
$ sudo icmpping host.example.com
PING host.example.com (192.0.2.10) 56(84) bytes of data
64 bytes from host.example.com (192.0.2.10): icmp_seq=1 ttl=56 temps=11.4 ms
64 bytes from host.example.com (192.0.2.10): icmp_seq=2 ttl=56 temps=11.2 ms
^C
--- host.example.com ping statistics ---
2 packets transmitted, 2 received, 0% packet loss, time 1203ms
rtt min/avg/max/mdev = ...
```

ICMP error messages about our requests, such as "Destination host
unreachable" or "Time To Live exceeded", are printed on their own lines
and counted as errors in the summary.

## What it does not do

There are no options beyond `-v` and `-?`: the count, interval, packet
size, TTL and timeout are fixed, and pinging goes on until interrupted.
Only IPv4 is supported, and broadcast addresses are refused.

## Library use

The pieces can be used on their own:

- `icmpping.packet`: `checksum`, `build_echo_request`, `parse_packet`,
  returning `EchoReply` or `ErrorReply`
- `icmpping.stats`: `PingStats` for recording round trips and producing
  the final and interim reports; `to_milliseconds`
- `icmpping.codes`: readable text for ICMP types and codes
  (`icmp_error_text` and friends), `usage_text`, `error_message`, and the
  exceptions `PingError`, `UsageError`, `ResolutionError`, `BroadcastError`
- `icmpping.output`: the text of each printed line
- `icmpping.cli`: `parse_args`, `resolve`, `Pinger` and `main`

`icmpping.util` holds small general helpers:

- `chars`: ASCII classification and case conversion
- `numconv`: `atoi`, `itoa`, `itoa_base`
- `strings`: C-style string functions such as `strcmp`, `strlcpy`,
  `strnstr`, `split`
- `memory`: byte-buffer functions such as `memset`, `memcpy`, `memmove`,
  `memcmp`
- `linkedlist`: `LinkedList` and `Node`
- `printf`: `format_string` and `printf` for the `c s p d i u x X %`
  conversions with `-`, `0`, width, precision and `*`

## Running the tests

```
pip install ".[test]"
pytest
```