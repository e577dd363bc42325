"""Send ICMP echo requests and report round-trip statistics."""

__version__ = "0.1.0"